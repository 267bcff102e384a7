"""
Fare calculation.

fare = (FARE_BASE_RATE + FARE_PER_KM_RATE * km) less the passenger type's
active discount, with km rounded to one decimal and the result to centavos.
"""

from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings

from .discount_management import get_discount_percentage
from .exceptions import InvalidDistanceError

KM_PRECISION = Decimal('0.1')
CENTAVO = Decimal('0.01')


def round_kilometer(kilometer) -> Decimal:
    return Decimal(str(kilometer)).quantize(KM_PRECISION, rounding=ROUND_HALF_UP)


def calculate_fare(*, kilometer, passenger_type: str = "Regular") -> dict:
    """
    Compute the fare for a trip.

    Args:
        kilometer: Distance travelled (number or numeric string)
        passenger_type: One of PassengerType values

    Returns:
        dict with kilometer, base_fare, discount_percentage,
        discount_amount and fare (all Decimal)

    Raises:
        InvalidDistanceError: If the distance is not positive
    """
    km = round_kilometer(kilometer)
    if km <= 0:
        raise InvalidDistanceError("Distance must be greater than zero")

    base_rate = Decimal(str(settings.FARE_BASE_RATE))
    per_km_rate = Decimal(str(settings.FARE_PER_KM_RATE))
    base_fare = (base_rate + per_km_rate * km).quantize(CENTAVO, rounding=ROUND_HALF_UP)

    percentage = get_discount_percentage(passenger_type=passenger_type)
    discount_amount = (base_fare * percentage / Decimal('100')).quantize(CENTAVO, rounding=ROUND_HALF_UP)

    return {
        'kilometer': km,
        'passenger_type': passenger_type,
        'base_fare': base_fare,
        'discount_percentage': percentage,
        'discount_amount': discount_amount,
        'fare': base_fare - discount_amount,
    }
