"""
Payment request service.

Lifecycle: a conductor creates a PENDING request for a scanned passenger.
The passenger approves it (COMPLETED, wallet debited, trip recorded) or
declines it (DECLINED). The conductor may cancel it while pending, which
also leaves it DECLINED. Pending requests past ``expires_at`` become
EXPIRED.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Q, QuerySet
from django.utils import timezone

from apps.accounts.models import User, UserRole
from apps.accounts.services import check_pin_token
from apps.fares.services import calculate_fare
from apps.routes.services import get_active_route, NoActiveRouteError
from apps.trips.models import PaymentMethod, PaymentRequest, PaymentRequestStatus, Trip
from apps.wallet.models import NotificationType, TransactionType
from apps.wallet.services import (
    notify,
    notify_transaction,
    record_transaction,
    InsufficientBalanceError,
    InvalidAmountError,
)

from .exceptions import (
    InvalidPassengerError,
    InvalidPaymentRequestStateError,
    InvalidPinTokenError,
    NoFareDueError,
    PassengerNotFoundError,
    PaymentRequestExpiredError,
    PaymentRequestNotFoundError,
)
from .qr_codes import parse_qr_data

logger = logging.getLogger(__name__)


def _resolve_passenger(qr_data: Optional[str], passenger_id: Optional[UUID]) -> User:
    if qr_data:
        passenger_id = parse_qr_data(qr_data)['user_id']

    try:
        return User.objects.get(id=passenger_id, is_active=True)
    except (User.DoesNotExist, ValidationError, ValueError):
        raise PassengerNotFoundError("Passenger wallet not found")


@transaction.atomic
def create_payment_request(
    *,
    conductor: User,
    origin: str,
    destination: str,
    kilometer,
    passenger_type: str = "Regular",
    qr_data: Optional[str] = None,
    passenger_id: Optional[UUID] = None
) -> PaymentRequest:
    """
    Charge a passenger's wallet for a trip on the conductor's active route.

    Args:
        conductor: Conductor issuing the charge
        origin: Boarding point
        destination: Drop-off point
        kilometer: Distance travelled
        passenger_type: Discount category
        qr_data: Raw scanned wallet QR (takes precedence)
        passenger_id: Passenger's user id when no QR data is sent

    Returns:
        PENDING PaymentRequest with the computed fare

    Raises:
        InvalidQRCodeError: If qr_data cannot be parsed
        PassengerNotFoundError: If the wallet owner doesn't exist
        InvalidPassengerError: If the wallet is the conductor's own or not a passenger's
        NoActiveRouteError: If the conductor has not started a route
        InvalidDistanceError: If kilometer is not positive
        NoFareDueError: If the discounted fare is zero
    """
    passenger = _resolve_passenger(qr_data, passenger_id)
    if passenger.pk == conductor.pk:
        raise InvalidPassengerError("You cannot charge your own wallet")
    if passenger.role != UserRole.PASSENGER:
        raise InvalidPassengerError("Only passenger wallets can be charged")

    route = get_active_route(conductor=conductor)
    if route is None:
        raise NoActiveRouteError("Start a route before collecting fares")

    quote = calculate_fare(kilometer=kilometer, passenger_type=passenger_type)
    if quote['fare'] <= 0:
        raise NoFareDueError("Fare must be greater than zero to charge a wallet")

    payment_request = PaymentRequest.objects.create(
        conductor=conductor,
        passenger=passenger,
        route=route,
        fare=quote['fare'],
        origin=origin.strip(),
        destination=destination.strip(),
        passenger_type=passenger_type,
        kilometer=quote['kilometer'],
        expires_at=timezone.now() + timedelta(minutes=settings.PAYMENT_REQUEST_TTL_MINUTES),
    )

    notify(
        user=passenger,
        title='Payment Request',
        message=(
            f"{conductor.get_full_name()} requests ₱{payment_request.fare:.2f} "
            f"for {payment_request.origin} to {payment_request.destination}."
        ),
        type=NotificationType.PAYMENT_REQUEST,
    )
    logger.info(
        "Payment request %s: conductor %s -> passenger %s for %s",
        payment_request.id, conductor.id, passenger.id, payment_request.fare
    )
    return payment_request


def expire_payment_requests(*, now: Optional[datetime] = None, dry_run: bool = False) -> int:
    """
    Mark pending requests past their expiry as EXPIRED.

    Returns:
        Number of requests expired (or that would be, with dry_run)
    """
    now = now or timezone.now()
    queryset = PaymentRequest.objects.filter(
        status=PaymentRequestStatus.PENDING,
        expires_at__lte=now,
    )
    if dry_run:
        return queryset.count()

    expired = queryset.update(status=PaymentRequestStatus.EXPIRED, updated_at=now)
    if expired:
        logger.info("Expired %d payment request(s)", expired)
    return expired


def list_payment_requests(
    *,
    user: User,
    status: Optional[str] = None,
    updated_since: Optional[datetime] = None
) -> QuerySet:
    """
    Payment requests the user issued (conductor) or received (anyone else).

    Clients poll with ``updated_since`` set to the newest ``updated_at``
    they have seen to pick up status changes.
    """
    expire_payment_requests()

    if user.role == UserRole.CONDUCTOR:
        queryset = PaymentRequest.objects.filter(conductor=user)
    else:
        queryset = PaymentRequest.objects.filter(passenger=user)

    if status:
        queryset = queryset.filter(status=status)
    if updated_since:
        queryset = queryset.filter(updated_at__gt=updated_since)

    return queryset.select_related('conductor', 'passenger', 'route', 'transaction').order_by('-created_at')


def get_payment_request(*, user: User, request_id: UUID) -> PaymentRequest:
    """Request visible to its conductor or passenger."""
    try:
        return (
            PaymentRequest.objects
            .select_related('conductor', 'passenger', 'route', 'transaction')
            .get(Q(conductor=user) | Q(passenger=user), id=request_id)
        )
    except (PaymentRequest.DoesNotExist, ValidationError):
        raise PaymentRequestNotFoundError(f"Payment request {request_id} not found")


def _lock_pending(request_id: UUID, **owner) -> PaymentRequest:
    """Lock a request owned by the given party and check it can still change."""
    try:
        payment_request = PaymentRequest.objects.select_for_update().get(id=request_id, **owner)
    except (PaymentRequest.DoesNotExist, ValidationError):
        raise PaymentRequestNotFoundError(f"Payment request {request_id} not found")

    if payment_request.status != PaymentRequestStatus.PENDING:
        raise InvalidPaymentRequestStateError(
            f"Payment request is already {payment_request.status}"
        )
    return payment_request


def _expire_if_due(payment_request: PaymentRequest) -> bool:
    if payment_request.expires_at > timezone.now():
        return False
    payment_request.status = PaymentRequestStatus.EXPIRED
    payment_request.save(update_fields=['status', 'updated_at'])
    return True


def _set_status(request_id: UUID, status: str) -> None:
    PaymentRequest.objects.filter(
        id=request_id,
        status=PaymentRequestStatus.PENDING
    ).update(status=status, updated_at=timezone.now())


@transaction.atomic
def _complete_payment(*, passenger: User, request_id: UUID) -> PaymentRequest:
    payment_request = _lock_pending(request_id, passenger=passenger)
    conductor = payment_request.conductor

    txn = record_transaction(
        user=passenger,
        type=TransactionType.CASH_OUT,
        amount=payment_request.fare,
        description='Fare payment',
        reference=str(payment_request.id),
        metadata={
            'origin': payment_request.origin,
            'destination': payment_request.destination,
            'conductor': conductor.username,
        },
    )

    trip = Trip.objects.create(
        conductor=conductor,
        passenger=passenger,
        passenger_name=passenger.get_full_name(),
        passenger_type=payment_request.passenger_type,
        route=payment_request.route,
        origin=payment_request.origin,
        destination=payment_request.destination,
        kilometer=payment_request.kilometer,
        fare=payment_request.fare,
        payment_method=PaymentMethod.QR,
        payment_request=payment_request,
        transaction=txn,
    )

    payment_request.status = PaymentRequestStatus.COMPLETED
    payment_request.transaction = txn
    payment_request.save(update_fields=['status', 'transaction', 'updated_at'])

    notify_transaction(txn=txn)
    notify(
        user=conductor,
        title='Fare Received',
        message=f"{passenger.get_full_name()} paid ₱{payment_request.fare:.2f}. Trip #{trip.transaction_number}.",
        type=NotificationType.TRIP,
        transaction=txn,
    )
    logger.info("Payment request %s completed with %s", payment_request.id, txn.transaction_id)
    return payment_request


def approve_payment_request(*, passenger: User, request_id: UUID, pin_token: str) -> PaymentRequest:
    """
    Pay a pending request from the passenger's wallet.

    Args:
        passenger: Wallet owner approving the charge
        request_id: PaymentRequest id
        pin_token: Token from PIN verification

    Returns:
        COMPLETED PaymentRequest with its trip and transaction

    Raises:
        InvalidPinTokenError: If the PIN token is missing, expired or foreign
        PaymentRequestNotFoundError: If the request isn't the passenger's
        InvalidPaymentRequestStateError: If it is no longer pending
        PaymentRequestExpiredError: If it expired before approval
        InsufficientBalanceError: If the wallet cannot cover the fare; the
            request is declined
        InvalidAmountError: If the stored fare is not positive; the request
            is declined
    """
    if not check_pin_token(user=passenger, token=pin_token):
        raise InvalidPinTokenError("PIN verification required")

    with transaction.atomic():
        expired = _expire_if_due(_lock_pending(request_id, passenger=passenger))
    if expired:
        raise PaymentRequestExpiredError("Payment request has expired")

    try:
        return _complete_payment(passenger=passenger, request_id=request_id)
    except (InsufficientBalanceError, InvalidAmountError) as e:
        _set_status(request_id, PaymentRequestStatus.DECLINED)
        logger.info("Payment request %s declined: %s", request_id, e)
        raise


@transaction.atomic
def decline_payment_request(*, passenger: User, request_id: UUID) -> PaymentRequest:
    payment_request = _lock_pending(request_id, passenger=passenger)
    payment_request.status = PaymentRequestStatus.DECLINED
    payment_request.save(update_fields=['status', 'updated_at'])

    notify(
        user=payment_request.conductor,
        title='Payment Declined',
        message=f"{passenger.get_full_name()} declined the ₱{payment_request.fare:.2f} fare.",
        type=NotificationType.PAYMENT_REQUEST,
    )
    return payment_request


@transaction.atomic
def cancel_payment_request(*, conductor: User, request_id: UUID) -> PaymentRequest:
    """Conductor withdraws a pending request; it is recorded as declined."""
    payment_request = _lock_pending(request_id, conductor=conductor)
    payment_request.status = PaymentRequestStatus.DECLINED
    payment_request.save(update_fields=['status', 'updated_at'])
    return payment_request
