"""Domain-specific exceptions for fares services."""


class FaresServiceError(Exception):
    """Base exception for fares services."""
    pass


class DiscountNotFoundError(FaresServiceError):
    """Raised when a discount configuration does not exist."""
    pass


class DuplicateDiscountError(FaresServiceError):
    """Raised when a passenger type already has a discount configuration."""
    pass


class InvalidDistanceError(FaresServiceError):
    """Raised when a fare is requested for a non-positive distance."""
    pass


class GoogleMapsError(FaresServiceError):
    """Raised when the Google Maps API cannot be reached or rejects a request."""
    pass
