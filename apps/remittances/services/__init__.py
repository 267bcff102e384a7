"""Services for remittances business logic."""

from .exceptions import (
    RemittancesServiceError,
    InvalidRemittanceAmountError,
    RemittanceAlreadyPendingError,
    RemittanceNotAllowedError,
    RemittanceNotFoundError,
    RemittanceAlreadyVerifiedError,
    NothingToRemitError,
)
from .remittance import (
    get_unremitted_cash_revenue,
    get_remittance_status,
    get_bus_summaries,
    submit_remittance,
    get_remittance,
    verify_remittance,
    get_remittance_history,
    get_total_remitted,
    list_pending_remittances,
)

__all__ = [
    # Exceptions
    'RemittancesServiceError',
    'InvalidRemittanceAmountError',
    'RemittanceAlreadyPendingError',
    'RemittanceNotAllowedError',
    'RemittanceNotFoundError',
    'RemittanceAlreadyVerifiedError',
    'NothingToRemitError',
    # Services
    'get_unremitted_cash_revenue',
    'get_remittance_status',
    'get_bus_summaries',
    'submit_remittance',
    'get_remittance',
    'verify_remittance',
    'get_remittance_history',
    'get_total_remitted',
    'list_pending_remittances',
]
