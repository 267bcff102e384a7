from rest_framework import serializers
from decimal import Decimal
from apps.accounts.serializers import UserPublicSerializer
from apps.fares.models import PassengerType
from .models import PaymentRequest, PaymentRequestStatus, Trip


class PaymentRequestSerializer(serializers.ModelSerializer):
    conductor = UserPublicSerializer(read_only=True)
    passenger = UserPublicSerializer(read_only=True)
    bus_number = serializers.CharField(source='route.bus_number', read_only=True, default=None)
    transaction_id = serializers.CharField(source='transaction.transaction_id', read_only=True, default=None)

    class Meta:
        model = PaymentRequest
        fields = [
            'id',
            'conductor',
            'passenger',
            'bus_number',
            'fare',
            'origin',
            'destination',
            'passenger_type',
            'kilometer',
            'status',
            'transaction_id',
            'created_at',
            'updated_at',
            'expires_at',
        ]
        read_only_fields = fields


class CreatePaymentRequestSerializer(serializers.Serializer):
    """
    Charge a scanned wallet.

    Fields:
        qr_data (str): Raw content of the scanned wallet QR
        passenger_id (uuid): Used when qr_data is not sent
        origin (str): Boarding point
        destination (str): Drop-off point
        kilometer (decimal): Distance travelled
        passenger_type (str): Discount category
    """

    qr_data = serializers.CharField(required=False, allow_blank=False)
    passenger_id = serializers.UUIDField(required=False)
    origin = serializers.CharField(max_length=255)
    destination = serializers.CharField(max_length=255)
    kilometer = serializers.DecimalField(max_digits=7, decimal_places=2, min_value=Decimal('0.1'))
    passenger_type = serializers.ChoiceField(
        choices=PassengerType.choices,
        default=PassengerType.REGULAR
    )

    def validate(self, attrs):
        if not attrs.get('qr_data') and not attrs.get('passenger_id'):
            raise serializers.ValidationError('Provide qr_data or passenger_id')
        return attrs


class PaymentRequestFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=PaymentRequestStatus.choices, required=False)
    updated_since = serializers.DateTimeField(required=False)


class ApprovePaymentSerializer(serializers.Serializer):
    pin_token = serializers.CharField(help_text="Token returned by PIN verification")


class TripSerializer(serializers.ModelSerializer):
    conductor_name = serializers.CharField(source='conductor.get_full_name', read_only=True)
    bus_number = serializers.CharField(source='route.bus_number', read_only=True, default=None)
    transaction_id = serializers.CharField(source='transaction.transaction_id', read_only=True, default=None)

    class Meta:
        model = Trip
        fields = [
            'id',
            'transaction_number',
            'passenger_name',
            'passenger_type',
            'passenger_photo',
            'conductor_name',
            'bus_number',
            'origin',
            'destination',
            'kilometer',
            'fare',
            'payment_method',
            'transaction_id',
            'created_at',
        ]
        read_only_fields = fields


class CashTripSerializer(serializers.Serializer):
    passenger_name = serializers.CharField(max_length=150)
    origin = serializers.CharField(max_length=255)
    destination = serializers.CharField(max_length=255)
    kilometer = serializers.DecimalField(max_digits=7, decimal_places=2, min_value=Decimal('0.1'))
    passenger_type = serializers.ChoiceField(
        choices=PassengerType.choices,
        default=PassengerType.REGULAR
    )
    photo = serializers.ImageField(required=False)


class TripFilterSerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        start, end = attrs.get('start_date'), attrs.get('end_date')
        if start and end and start > end:
            raise serializers.ValidationError({'end_date': 'End date must not be before start date'})
        return attrs


class ConductorStatsSerializer(serializers.Serializer):
    total_trips = serializers.IntegerField()
    total_passengers = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    cash_revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    qr_revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    last_active = serializers.DateTimeField(allow_null=True)


class ParseQRSerializer(serializers.Serializer):
    qr_data = serializers.CharField()


class ParsedQRSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    name = serializers.CharField()
