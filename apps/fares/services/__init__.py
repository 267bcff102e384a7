"""Services for fares business logic."""

from .exceptions import (
    FaresServiceError,
    DiscountNotFoundError,
    DuplicateDiscountError,
    InvalidDistanceError,
    GoogleMapsError,
)
from .discount_management import (
    list_discounts,
    create_discount,
    update_discount,
    delete_discount,
    get_discount_percentage,
)
from .fare_calculation import calculate_fare, round_kilometer
from .google_maps import calculate_distance, autocomplete_places

__all__ = [
    # Exceptions
    'FaresServiceError',
    'DiscountNotFoundError',
    'DuplicateDiscountError',
    'InvalidDistanceError',
    'GoogleMapsError',
    # Services
    'list_discounts',
    'create_discount',
    'update_discount',
    'delete_discount',
    'get_discount_percentage',
    'calculate_fare',
    'round_kilometer',
    'calculate_distance',
    'autocomplete_places',
]
