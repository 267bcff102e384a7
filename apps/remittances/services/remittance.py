"""
Cash remittance service.

Conductors collect cash fares on a route and periodically hand them over.
Fares recorded after the latest verified remittance count as unremitted.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import Count, Q, QuerySet, Sum
from django.utils import timezone

from apps.accounts.models import User
from apps.remittances.models import CashRemittance, RemittanceStatus
from apps.routes.models import BusRoute
from apps.trips.models import PaymentMethod, Trip
from apps.wallet.models import NotificationType
from apps.wallet.services import notify

from .exceptions import (
    InvalidRemittanceAmountError,
    RemittanceAlreadyPendingError,
    RemittanceNotAllowedError,
    RemittanceNotFoundError,
    RemittanceAlreadyVerifiedError,
    NothingToRemitError,
)

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')
STATUS_NONE = 'none'


def _cash_trips_since_last_verified(route: BusRoute) -> QuerySet:
    cutoff = (
        CashRemittance.objects
        .filter(route=route, status=RemittanceStatus.REMITTED, verified_at__isnull=False)
        .order_by('-verified_at')
        .values_list('verified_at', flat=True)
        .first()
    )
    trips = Trip.objects.filter(route=route, payment_method=PaymentMethod.CASH)
    if cutoff is not None:
        trips = trips.filter(created_at__gt=cutoff)
    return trips


def get_unremitted_cash_revenue(*, route: BusRoute) -> Decimal:
    """Cash fares on the route collected after the latest verified remittance."""
    total = _cash_trips_since_last_verified(route).aggregate(total=Sum('fare'))['total']
    return total or ZERO


def get_remittance_status(*, route: BusRoute) -> Optional[CashRemittance]:
    """Most recent remittance submitted for the route, if any."""
    return CashRemittance.objects.filter(route=route).order_by('-submitted_at').first()


def get_bus_summaries(*, conductor: User) -> list:
    """
    Revenue and remittance state for every route the conductor has run.

    Returns:
        List of dicts, newest route first
    """
    routes = BusRoute.objects.filter(conductor=conductor).order_by('-started_at')
    summaries = []

    for route in routes:
        totals = Trip.objects.filter(route=route).aggregate(
            trip_count=Count('id'),
            total_revenue=Sum('fare'),
            cash_trip_count=Count('id', filter=Q(payment_method=PaymentMethod.CASH)),
            cash_revenue=Sum('fare', filter=Q(payment_method=PaymentMethod.CASH)),
            qr_trip_count=Count('id', filter=Q(payment_method=PaymentMethod.QR)),
            qr_revenue=Sum('fare', filter=Q(payment_method=PaymentMethod.QR)),
        )
        latest = get_remittance_status(route=route)
        latest_status = latest.status if latest else STATUS_NONE
        unremitted = get_unremitted_cash_revenue(route=route)

        summaries.append({
            'route_id': route.id,
            'bus_number': route.bus_number,
            'origin': route.origin,
            'destination': route.destination,
            'active': route.active,
            'trip_count': totals['trip_count'],
            'total_revenue': totals['total_revenue'] or ZERO,
            'cash_trip_count': totals['cash_trip_count'],
            'cash_revenue': totals['cash_revenue'] or ZERO,
            'qr_trip_count': totals['qr_trip_count'],
            'qr_revenue': totals['qr_revenue'] or ZERO,
            'unremitted_cash': unremitted,
            'remittance_status': latest_status,
            'can_remit': latest_status != RemittanceStatus.PENDING and unremitted > ZERO,
        })

    return summaries


def _positive_amount(amount) -> Decimal:
    try:
        value = Decimal(str(amount)).quantize(Decimal('0.01'))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidRemittanceAmountError(f"Invalid amount: {amount!r}")
    if value <= ZERO:
        raise InvalidRemittanceAmountError("Remittance amount must be greater than zero")
    return value


@transaction.atomic
def submit_remittance(
    *,
    conductor: User,
    route: BusRoute,
    amount,
    notes: str = ""
) -> CashRemittance:
    """
    Declare cash handed over for a route.

    Args:
        conductor: Conductor remitting
        route: Route the cash was collected on
        amount: Cash handed over
        notes: Optional remarks for the operator

    Returns:
        Pending CashRemittance

    Raises:
        RemittanceNotAllowedError: If the route belongs to another conductor
        InvalidRemittanceAmountError: If amount is not positive
        RemittanceAlreadyPendingError: If the route awaits verification already
        NothingToRemitError: If no cash fares were collected since the last
            verified remittance
    """
    if route.conductor_id != conductor.id:
        raise RemittanceNotAllowedError("You can only remit for your own routes")

    value = _positive_amount(amount)

    # Serializes submissions for the same route
    BusRoute.objects.select_for_update().filter(id=route.id).first()

    if CashRemittance.objects.filter(route=route, status=RemittanceStatus.PENDING).exists():
        raise RemittanceAlreadyPendingError(
            f"Bus {route.bus_number} already has a remittance awaiting verification"
        )

    if get_unremitted_cash_revenue(route=route) <= ZERO:
        raise NothingToRemitError(f"Bus {route.bus_number} has no unremitted cash fares")

    try:
        with transaction.atomic():
            remittance = CashRemittance.objects.create(
                route=route,
                bus_number=route.bus_number,
                conductor=conductor,
                amount=value,
                notes=notes.strip(),
            )
    except IntegrityError:
        raise RemittanceAlreadyPendingError(
            f"Bus {route.bus_number} already has a remittance awaiting verification"
        )

    logger.info("Remittance %s of %s submitted for bus %s", remittance.id, value, route.bus_number)
    return remittance


def get_remittance(*, remittance_id: UUID) -> CashRemittance:
    try:
        return CashRemittance.objects.select_related('conductor', 'verified_by').get(id=remittance_id)
    except (CashRemittance.DoesNotExist, ValidationError):
        raise RemittanceNotFoundError(f"Remittance {remittance_id} not found")


@transaction.atomic
def verify_remittance(*, remittance_id: UUID, staff_user: User) -> CashRemittance:
    """
    Confirm that a pending remittance was received.

    Raises:
        RemittanceNotFoundError: If the remittance does not exist
        RemittanceAlreadyVerifiedError: If it was verified before
    """
    try:
        remittance = CashRemittance.objects.select_for_update().get(id=remittance_id)
    except (CashRemittance.DoesNotExist, ValidationError):
        raise RemittanceNotFoundError(f"Remittance {remittance_id} not found")

    if not remittance.is_pending:
        raise RemittanceAlreadyVerifiedError("Remittance has already been verified")

    remittance.status = RemittanceStatus.REMITTED
    remittance.verified_at = timezone.now()
    remittance.verified_by = staff_user
    remittance.save(update_fields=['status', 'verified_at', 'verified_by'])

    notify(
        user=remittance.conductor,
        title='Remittance Verified',
        message=f"Your ₱{remittance.amount:.2f} remittance for bus {remittance.bus_number} was verified.",
        type=NotificationType.REMITTANCE,
    )
    logger.info("Remittance %s verified by %s", remittance.id, staff_user.id)
    return remittance


def get_remittance_history(*, conductor: User) -> QuerySet:
    return (
        CashRemittance.objects
        .filter(conductor=conductor)
        .select_related('verified_by')
        .order_by('-submitted_at')
    )


def get_total_remitted(*, conductor: User) -> Decimal:
    """Sum of the conductor's verified remittances."""
    total = (
        CashRemittance.objects
        .filter(conductor=conductor, status=RemittanceStatus.REMITTED)
        .aggregate(total=Sum('amount'))['total']
    )
    return total or ZERO


def list_pending_remittances() -> QuerySet:
    """Remittances awaiting staff verification, oldest first."""
    return (
        CashRemittance.objects
        .filter(status=RemittanceStatus.PENDING)
        .select_related('conductor', 'route')
        .order_by('submitted_at')
    )
