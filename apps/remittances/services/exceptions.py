"""Domain-specific exceptions for remittances services."""


class RemittancesServiceError(Exception):
    """Base exception for remittances services."""
    pass


class InvalidRemittanceAmountError(RemittancesServiceError):
    """Raised when a remittance amount is not positive."""
    pass


class RemittanceAlreadyPendingError(RemittancesServiceError):
    """Raised when a route already has a remittance awaiting verification."""
    pass


class RemittanceNotAllowedError(RemittancesServiceError):
    """Raised when a conductor remits for a route that is not theirs."""
    pass


class RemittanceNotFoundError(RemittancesServiceError):
    pass


class RemittanceAlreadyVerifiedError(RemittancesServiceError):
    """Raised when verifying a remittance that is no longer pending."""
    pass


class NothingToRemitError(RemittancesServiceError):
    """Raised when a route has no unremitted cash fares."""
    pass
