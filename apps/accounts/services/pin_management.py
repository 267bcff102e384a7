"""
Wallet PIN service.

The PIN guards payment approval. A successful verification returns a
short-lived signed token that payment endpoints accept in place of the PIN.
"""

import logging
import re

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core import signing
from django.db import transaction

from .exceptions import (
    InvalidPinFormatError,
    InvalidPinError,
    PinNotSetError,
    PasswordConfirmationError,
)

User = get_user_model()

logger = logging.getLogger(__name__)

PIN_PATTERN = re.compile(r'[0-9]{4}')
PIN_TOKEN_SALT = 'accounts.pin-verification'


def _validate_pin_format(pin: str) -> None:
    if not isinstance(pin, str) or not PIN_PATTERN.fullmatch(pin):
        raise InvalidPinFormatError("PIN must be exactly 4 digits")


@transaction.atomic
def register_pin(*, user: User, pin: str) -> User:
    """
    Store a hashed PIN for the user, replacing any existing one.

    Raises:
        InvalidPinFormatError: If pin is not four digits
    """
    _validate_pin_format(pin)

    user = User.objects.select_for_update().get(pk=user.pk)
    user.set_pin(pin)
    user.save(update_fields=['pin_hash'])

    logger.info("PIN registered for user %s", user.id)
    return user


def has_pin(*, user: User) -> bool:
    return user.has_pin


def verify_pin(*, user: User, pin: str) -> str:
    """
    Check the PIN and issue a verification token.

    Returns:
        Signed token, valid for PIN_TOKEN_MAX_AGE seconds

    Raises:
        PinNotSetError: If the user has no PIN yet
        InvalidPinError: If the PIN does not match
    """
    if not user.has_pin:
        raise PinNotSetError("No PIN registered for this account")

    if not user.check_pin(pin):
        logger.warning("Failed PIN attempt for user %s", user.id)
        raise InvalidPinError("Incorrect PIN")

    return signing.TimestampSigner(salt=PIN_TOKEN_SALT).sign(str(user.id))


def check_pin_token(*, user: User, token: str) -> bool:
    """Return True if token was issued to user and has not expired."""
    if not token:
        return False

    signer = signing.TimestampSigner(salt=PIN_TOKEN_SALT)
    try:
        value = signer.unsign(token, max_age=settings.PIN_TOKEN_MAX_AGE)
    except signing.BadSignature:
        return False

    return value == str(user.id)


@transaction.atomic
def reset_pin(*, user: User, password: str, new_pin: str) -> User:
    """
    Forgot-PIN flow: confirm the account password, then set a new PIN.

    Raises:
        PasswordConfirmationError: If password is wrong
        InvalidPinFormatError: If new_pin is not four digits
    """
    if not user.check_password(password):
        raise PasswordConfirmationError("Invalid password")

    return register_pin(user=user, pin=new_pin)
