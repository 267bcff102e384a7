"""Profile management service."""

import logging
from typing import Optional

from django.db import transaction
from django.contrib.auth import get_user_model

from .exceptions import UserAlreadyExistsError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def update_profile(
    *,
    user: User,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    username: Optional[str] = None,
    email: Optional[str] = None,
    phone_number: Optional[str] = None,
    avatar=None
) -> User:
    """
    Update the given profile fields.

    A new avatar replaces the stored one and the previous file is deleted
    from storage once the transaction commits.

    Raises:
        UserAlreadyExistsError: If the new username, email or phone is taken
    """
    user = User.objects.select_for_update().get(pk=user.pk)
    others = User.objects.exclude(pk=user.pk)
    update_fields = []

    if username is not None and username != user.username:
        if others.filter(username__iexact=username).exists():
            raise UserAlreadyExistsError("Username is already taken")
        user.username = username
        update_fields.append('username')

    if email is not None and email != user.email:
        email = User.objects.normalize_email(email)
        if others.filter(email__iexact=email).exists():
            raise UserAlreadyExistsError("Email is already registered")
        user.email = email
        update_fields.append('email')

    if phone_number is not None and phone_number != user.phone_number:
        if phone_number and others.filter(phone_number=phone_number).exists():
            raise UserAlreadyExistsError("Phone number is already registered")
        user.phone_number = phone_number or None
        update_fields.append('phone_number')

    if first_name is not None:
        user.first_name = first_name
        update_fields.append('first_name')

    if last_name is not None:
        user.last_name = last_name
        update_fields.append('last_name')

    if avatar is not None:
        old_avatar = user.avatar.name if user.avatar else None
        user.avatar = avatar
        update_fields.append('avatar')
        if old_avatar:
            storage = user.avatar.storage
            transaction.on_commit(lambda: storage.delete(old_avatar))

    if update_fields:
        update_fields.append('updated_at')
        user.save(update_fields=update_fields)
        logger.info("Updated profile for user %s", user.id)

    return user
