"""User authentication service."""

from django.db import transaction
from django.contrib.auth import get_user_model
from django.db.models import Q
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()


@transaction.atomic
def authenticate_user(*, username: str, password: str) -> User:
    """
    Authenticate a passenger, conductor or inspector.

    Args:
        username: Username, or the email address of the account
        password: Account password

    Returns:
        Authenticated User with last_login refreshed

    Raises:
        InvalidCredentialsError: Unknown login or wrong password
        InactiveAccountError: If account is deactivated
    """
    login = username.strip()
    user = (
        User.objects
        .select_for_update()
        .filter(Q(username__iexact=login) | Q(email__iexact=login))
        .first()
    )
    if user is None or not user.check_password(password):
        raise InvalidCredentialsError("Invalid username or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    return user
