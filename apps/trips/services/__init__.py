"""Services for trips business logic."""

from .exceptions import (
    TripsServiceError,
    InvalidQRCodeError,
    PassengerNotFoundError,
    InvalidPassengerError,
    PaymentRequestNotFoundError,
    PaymentRequestExpiredError,
    InvalidPaymentRequestStateError,
    InvalidPinTokenError,
    TripNotFoundError,
    NoFareDueError,
)
from .qr_codes import parse_qr_data
from .payment_requests import (
    create_payment_request,
    list_payment_requests,
    get_payment_request,
    approve_payment_request,
    decline_payment_request,
    cancel_payment_request,
    expire_payment_requests,
)
from .trip_records import (
    record_cash_trip,
    list_trips,
    get_trip,
    get_conductor_stats,
)

__all__ = [
    # Exceptions
    'TripsServiceError',
    'InvalidQRCodeError',
    'PassengerNotFoundError',
    'InvalidPassengerError',
    'PaymentRequestNotFoundError',
    'PaymentRequestExpiredError',
    'InvalidPaymentRequestStateError',
    'InvalidPinTokenError',
    'TripNotFoundError',
    'NoFareDueError',
    # Payment requests
    'parse_qr_data',
    'create_payment_request',
    'list_payment_requests',
    'get_payment_request',
    'approve_payment_request',
    'decline_payment_request',
    'cancel_payment_request',
    'expire_payment_requests',
    # Trips
    'record_cash_trip',
    'list_trips',
    'get_trip',
    'get_conductor_stats',
]
