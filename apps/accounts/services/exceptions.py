"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class UserRegistrationError(AccountsServiceError):
    """Raised when user registration fails."""
    pass


class UserAlreadyExistsError(UserRegistrationError):
    """Raised when email, username or phone number is already taken."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    pass


class InvalidTokenError(AccountsServiceError):
    """Raised when a reset token is invalid."""
    pass


class UserNotFoundError(AccountsServiceError):
    """Raised when user does not exist."""
    pass


class PasswordConfirmationError(AccountsServiceError):
    """Raised when password confirmation fails."""
    pass


class InvalidPinFormatError(AccountsServiceError):
    """Raised when a PIN is not exactly four digits."""
    pass


class PinNotSetError(AccountsServiceError):
    """Raised when verifying a PIN for a user who never registered one."""
    pass


class InvalidPinError(AccountsServiceError):
    """Raised when the entered PIN does not match."""
    pass
