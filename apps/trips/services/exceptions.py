"""Domain-specific exceptions for trips services."""


class TripsServiceError(Exception):
    """Base exception for trips services."""
    pass


class InvalidQRCodeError(TripsServiceError):
    """Raised when scanned QR data does not identify a wallet."""
    pass


class PassengerNotFoundError(TripsServiceError):
    """Raised when the scanned wallet belongs to no active user."""
    pass


class InvalidPassengerError(TripsServiceError):
    """Raised when the scanned wallet cannot be charged (own or non-passenger)."""
    pass


class PaymentRequestNotFoundError(TripsServiceError):
    """Raised when a payment request does not exist for the user."""
    pass


class PaymentRequestExpiredError(TripsServiceError):
    """Raised when acting on a payment request past its expiry."""
    pass


class InvalidPaymentRequestStateError(TripsServiceError):
    """Raised when a payment request is no longer pending."""
    pass


class InvalidPinTokenError(TripsServiceError):
    """Raised when a payment is approved without a valid PIN token."""
    pass


class TripNotFoundError(TripsServiceError):
    """Raised when a trip does not exist for the user."""
    pass


class NoFareDueError(TripsServiceError):
    """Raised when a wallet charge would be for a zero fare."""
    pass
