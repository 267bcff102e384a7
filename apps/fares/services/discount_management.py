"""Discount configuration service."""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.fares.models import Discount, PassengerType

from .exceptions import DiscountNotFoundError, DuplicateDiscountError

logger = logging.getLogger(__name__)


def list_discounts(*, active_only: bool = False) -> QuerySet:
    queryset = Discount.objects.all()
    if active_only:
        queryset = queryset.filter(is_active=True)
    return queryset


@transaction.atomic
def create_discount(
    *,
    passenger_type: str,
    discount_percentage: Decimal,
    description: str = "",
    is_active: bool = True
) -> Discount:
    """
    Create a discount for a passenger type.

    Raises:
        DuplicateDiscountError: If the passenger type already has one
    """
    if Discount.objects.filter(passenger_type=passenger_type).exists():
        raise DuplicateDiscountError(f"A discount for {passenger_type} already exists")

    try:
        discount = Discount.objects.create(
            passenger_type=passenger_type,
            discount_percentage=discount_percentage,
            description=description,
            is_active=is_active,
        )
    except IntegrityError:
        raise DuplicateDiscountError(f"A discount for {passenger_type} already exists")

    logger.info("Created %s discount of %s%%", passenger_type, discount_percentage)
    return discount


@transaction.atomic
def update_discount(*, discount_id: UUID, **changes) -> Discount:
    """
    Update fields of a discount configuration.

    Raises:
        DiscountNotFoundError: If discount doesn't exist
        DuplicateDiscountError: If passenger_type moves onto an existing one
    """
    try:
        discount = Discount.objects.select_for_update().get(id=discount_id)
    except Discount.DoesNotExist:
        raise DiscountNotFoundError(f"Discount {discount_id} not found")

    new_type = changes.get('passenger_type')
    if new_type and new_type != discount.passenger_type:
        if Discount.objects.filter(passenger_type=new_type).exists():
            raise DuplicateDiscountError(f"A discount for {new_type} already exists")

    for field in ('passenger_type', 'discount_percentage', 'description', 'is_active'):
        if field in changes:
            setattr(discount, field, changes[field])
    discount.save()

    logger.info("Updated discount %s", discount.id)
    return discount


@transaction.atomic
def delete_discount(*, discount_id: UUID) -> None:
    deleted, _ = Discount.objects.filter(id=discount_id).delete()
    if not deleted:
        raise DiscountNotFoundError(f"Discount {discount_id} not found")


def get_discount_percentage(*, passenger_type: Optional[str]) -> Decimal:
    """Active discount for the passenger type, 0 when there is none."""
    if not passenger_type or passenger_type == PassengerType.REGULAR:
        return Decimal('0')

    discount = (
        Discount.objects
        .filter(passenger_type=passenger_type, is_active=True)
        .only('discount_percentage')
        .first()
    )
    return discount.discount_percentage if discount else Decimal('0')
