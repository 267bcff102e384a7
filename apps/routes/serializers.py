from rest_framework import serializers
from .models import BusRoute


class BusRouteSerializer(serializers.ModelSerializer):
    conductor_name = serializers.CharField(read_only=True)

    class Meta:
        model = BusRoute
        fields = [
            'id',
            'conductor',
            'conductor_name',
            'bus_number',
            'origin',
            'destination',
            'active',
            'started_at',
            'ended_at',
        ]
        read_only_fields = ['id', 'conductor', 'conductor_name', 'started_at', 'ended_at']


class StartRouteSerializer(serializers.Serializer):
    bus_number = serializers.CharField(max_length=20)
    origin = serializers.CharField(max_length=255)
    destination = serializers.CharField(max_length=255)

    def validate(self, attrs):
        if attrs['origin'].strip().lower() == attrs['destination'].strip().lower():
            raise serializers.ValidationError({'destination': 'Destination must differ from origin'})
        return attrs


class UpdateRouteSerializer(serializers.Serializer):
    bus_number = serializers.CharField(max_length=20, required=False)
    origin = serializers.CharField(max_length=255, required=False)
    destination = serializers.CharField(max_length=255, required=False)
    active = serializers.BooleanField(required=False)


class BusSearchSerializer(serializers.Serializer):
    bus_number = serializers.CharField(max_length=20)
