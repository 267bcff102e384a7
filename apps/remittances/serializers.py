from rest_framework import serializers
from apps.accounts.serializers import UserPublicSerializer
from .models import CashRemittance


class CashRemittanceSerializer(serializers.ModelSerializer):
    conductor = UserPublicSerializer(read_only=True)
    verified_by = UserPublicSerializer(read_only=True)

    class Meta:
        model = CashRemittance
        fields = [
            'id',
            'route',
            'bus_number',
            'conductor',
            'status',
            'amount',
            'notes',
            'submitted_at',
            'verified_at',
            'verified_by',
        ]
        read_only_fields = fields


class SubmitRemittanceSerializer(serializers.Serializer):
    """
    Submit collected cash for a route.

    Fields:
        route_id (uuid): One of the conductor's routes
        amount (decimal): Cash handed over in PHP
        notes (str): Optional remarks
    """

    route_id = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class BusSummarySerializer(serializers.Serializer):
    route_id = serializers.UUIDField()
    bus_number = serializers.CharField()
    origin = serializers.CharField()
    destination = serializers.CharField()
    active = serializers.BooleanField()
    trip_count = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    cash_trip_count = serializers.IntegerField()
    cash_revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    qr_trip_count = serializers.IntegerField()
    qr_revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    unremitted_cash = serializers.DecimalField(max_digits=12, decimal_places=2)
    remittance_status = serializers.CharField()
    can_remit = serializers.BooleanField()


class TotalRemittedSerializer(serializers.Serializer):
    total_remitted = serializers.DecimalField(max_digits=12, decimal_places=2)
