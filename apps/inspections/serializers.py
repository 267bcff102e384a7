from rest_framework import serializers
from apps.routes.models import BusRoute
from apps.trips.models import Trip
from .models import InspectionRecord, InspectionStatus


class BusSerializer(serializers.ModelSerializer):
    """Route as seen by an inspector."""

    conductor_name = serializers.CharField(read_only=True)

    class Meta:
        model = BusRoute
        fields = [
            'id',
            'bus_number',
            'conductor',
            'conductor_name',
            'origin',
            'destination',
            'active',
            'started_at',
        ]
        read_only_fields = fields


class BusSearchSerializer(serializers.Serializer):
    bus_number = serializers.CharField(min_length=1, max_length=20)


class BusPassengerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Trip
        fields = [
            'id',
            'transaction_number',
            'passenger_name',
            'passenger_type',
            'origin',
            'destination',
            'fare',
            'payment_method',
            'created_at',
        ]
        read_only_fields = fields


class ClearBusSerializer(serializers.Serializer):
    origin = serializers.CharField(max_length=255, required=False)
    destination = serializers.CharField(max_length=255, required=False)
    status = serializers.ChoiceField(choices=InspectionStatus.choices, default=InspectionStatus.CLEARED)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class InspectionRecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = InspectionRecord
        fields = [
            'id',
            'route',
            'bus_number',
            'conductor',
            'conductor_name',
            'origin',
            'destination',
            'passenger_count',
            'status',
            'notes',
            'inspected_at',
        ]
        read_only_fields = fields


class InspectorStatsSerializer(serializers.Serializer):
    total_inspections = serializers.IntegerField()
    total_cleared = serializers.IntegerField()
    total_flagged = serializers.IntegerField()
    last_active = serializers.DateTimeField(allow_null=True)
