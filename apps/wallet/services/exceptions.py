"""Domain-specific exceptions for wallet services."""


class WalletServiceError(Exception):
    """Base exception for wallet services."""
    pass


class InvalidAmountError(WalletServiceError):
    """Raised when an amount is not positive or below a gateway minimum."""
    pass


class InsufficientBalanceError(WalletServiceError):
    """Raised when a debit would take the balance below zero."""

    def __init__(self, balance, message=None):
        self.balance = balance
        super().__init__(message or f"Insufficient balance. Current balance is ₱{balance:.2f}")


class RecipientNotFoundError(WalletServiceError):
    """Raised when no user matches a send-money recipient."""
    pass


class SelfTransferError(WalletServiceError):
    """Raised when sending money to one's own wallet."""
    pass


class TransactionNotFoundError(WalletServiceError):
    """Raised when a transaction does not exist for the user."""
    pass


class InvalidTransactionStateError(WalletServiceError):
    """Raised when changing the status of a finished transaction."""
    pass


class NotificationNotFoundError(WalletServiceError):
    """Raised when a notification does not exist for the user."""
    pass


class PayMongoError(WalletServiceError):
    """Raised when the PayMongo API rejects a request or cannot be reached."""
    pass
