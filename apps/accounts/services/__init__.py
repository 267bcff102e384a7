"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    UserAlreadyExistsError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidTokenError,
    UserNotFoundError,
    PasswordConfirmationError,
    InvalidPinFormatError,
    PinNotSetError,
    InvalidPinError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user
from .password_reset import request_password_reset, confirm_password_reset, change_password
from .pin_management import register_pin, has_pin, verify_pin, check_pin_token, reset_pin
from .profile_management import update_profile
from .roles import get_role_redirect, check_route_permission

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'UserAlreadyExistsError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'InvalidTokenError',
    'UserNotFoundError',
    'PasswordConfirmationError',
    'InvalidPinFormatError',
    'PinNotSetError',
    'InvalidPinError',
    # Services
    'register_user',
    'authenticate_user',
    'request_password_reset',
    'confirm_password_reset',
    'change_password',
    'register_pin',
    'has_pin',
    'verify_pin',
    'check_pin_token',
    'reset_pin',
    'update_profile',
    'get_role_redirect',
    'check_route_permission',
]
