"""Password reset and change service."""

from django.db import transaction
from django.contrib.auth import get_user_model
import secrets

from .exceptions import UserNotFoundError, InvalidTokenError, PasswordConfirmationError

User = get_user_model()


@transaction.atomic
def request_password_reset(*, email: str) -> str:
    """
    Generate password reset token for user.

    Args:
        email: User's email address

    Returns:
        Reset token

    Raises:
        UserNotFoundError: If user does not exist
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(email__iexact=email, is_active=True)
        )
    except User.DoesNotExist:
        raise UserNotFoundError(f"No active user with email: {email}")

    reset_token = secrets.token_urlsafe(32)
    user.reset_token = reset_token
    user.save(update_fields=['reset_token'])

    return reset_token


@transaction.atomic
def confirm_password_reset(*, token: str, new_password: str) -> User:
    """
    Reset user password with token.

    Raises:
        InvalidTokenError: If token is invalid or already used
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(reset_token=token, is_active=True)
        )
    except User.DoesNotExist:
        raise InvalidTokenError("Invalid or expired reset token")

    user.set_password(new_password)
    user.reset_token = None
    user.save(update_fields=['password', 'reset_token'])

    return user


@transaction.atomic
def change_password(*, user: User, old_password: str, new_password: str) -> User:
    """
    Change password after confirming the current one.

    Raises:
        PasswordConfirmationError: If old_password is wrong
    """
    user = User.objects.select_for_update().get(pk=user.pk)

    if not user.check_password(old_password):
        raise PasswordConfirmationError("Current password is incorrect")

    user.set_password(new_password)
    user.save(update_fields=['password'])
    return user
