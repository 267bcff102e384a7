"""User registration service."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model
from django.db.models import Q

from .exceptions import UserAlreadyExistsError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    username: str,
    first_name: str = "",
    last_name: str = "",
    phone_number: str = ""
) -> User:
    """
    Register a new passenger account.

    Args:
        email: User's email address
        password: User's password (will be hashed)
        username: Unique login name
        first_name: Given name
        last_name: Family name
        phone_number: Mobile number, also usable as a send-money recipient

    Returns:
        Created User instance

    Raises:
        UserAlreadyExistsError: If email, username or phone number is taken
    """
    email = User.objects.normalize_email(email)

    duplicate = Q(email__iexact=email) | Q(username__iexact=username)
    if phone_number:
        duplicate |= Q(phone_number=phone_number)
    if User.objects.filter(duplicate).exists():
        raise UserAlreadyExistsError(
            "An account with this email, username or phone number already exists"
        )

    try:
        user = User.objects.create_user(
            email=email,
            password=password,
            username=username,
            first_name=first_name,
            last_name=last_name,
            phone_number=phone_number or None,
        )
    except IntegrityError:
        raise UserAlreadyExistsError(
            "An account with this email, username or phone number already exists"
        )

    logger.info("Registered user %s", user.id)
    return user
