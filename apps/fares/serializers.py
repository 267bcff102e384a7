from rest_framework import serializers
from decimal import Decimal
from .models import Discount, PassengerType


class DiscountSerializer(serializers.ModelSerializer):
    class Meta:
        model = Discount
        fields = [
            'id',
            'passenger_type',
            'discount_percentage',
            'description',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        extra_kwargs = {
            # Uniqueness is checked by the discount service
            'passenger_type': {'validators': []},
        }


class FareQuoteInputSerializer(serializers.Serializer):
    """
    Either kilometer or both origin and destination must be given.

    Fields:
        kilometer (decimal): Distance travelled
        origin (str): Pickup location, used to look up distance
        destination (str): Drop-off location
        passenger_type (str): Discount category
    """

    kilometer = serializers.DecimalField(
        max_digits=7,
        decimal_places=2,
        min_value=Decimal('0.1'),
        required=False
    )
    origin = serializers.CharField(max_length=255, required=False)
    destination = serializers.CharField(max_length=255, required=False)
    passenger_type = serializers.ChoiceField(
        choices=PassengerType.choices,
        default=PassengerType.REGULAR
    )

    def validate(self, attrs):
        if 'kilometer' not in attrs and not (attrs.get('origin') and attrs.get('destination')):
            raise serializers.ValidationError(
                'Provide kilometer, or both origin and destination'
            )
        return attrs


class FareQuoteSerializer(serializers.Serializer):
    kilometer = serializers.DecimalField(max_digits=7, decimal_places=1)
    passenger_type = serializers.CharField()
    base_fare = serializers.DecimalField(max_digits=10, decimal_places=2)
    discount_percentage = serializers.DecimalField(max_digits=5, decimal_places=2)
    discount_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    fare = serializers.DecimalField(max_digits=10, decimal_places=2)


class DistanceQuerySerializer(serializers.Serializer):
    origin = serializers.CharField(max_length=255)
    destination = serializers.CharField(max_length=255)


class DistanceSerializer(serializers.Serializer):
    distance_km = serializers.FloatField()
    duration_seconds = serializers.IntegerField()
    status = serializers.CharField()


class PlaceQuerySerializer(serializers.Serializer):
    q = serializers.CharField(min_length=2, max_length=255)


class PlaceSerializer(serializers.Serializer):
    description = serializers.CharField()
    place_id = serializers.CharField()
