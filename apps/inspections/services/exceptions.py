"""Domain-specific exceptions for inspections services."""


class InspectionsServiceError(Exception):
    """Base exception for inspections services."""
    pass


class BusNotFoundError(InspectionsServiceError):
    """Raised when an inspected route does not exist."""
    pass
