"""Notification service."""

from uuid import UUID

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.wallet.models import Notification, NotificationType, Transaction, TransactionType

from .exceptions import NotificationNotFoundError

TRANSACTION_TITLES = {
    TransactionType.CASH_IN: 'Cash In Successful',
    TransactionType.CASH_OUT: 'Payment Sent',
    TransactionType.SEND: 'Money Sent',
    TransactionType.RECEIVE: 'Money Received',
}


def notify(
    *,
    user: User,
    title: str,
    message: str,
    type: str = NotificationType.TRANSACTION,
    transaction: Transaction = None
) -> Notification:
    return Notification.objects.create(
        user=user,
        title=title,
        message=message,
        type=type,
        transaction=transaction,
    )


def notify_transaction(*, txn: Transaction) -> Notification:
    """Standard notification for a completed ledger entry."""
    amount = f"₱{txn.amount:.2f}"
    if txn.type == TransactionType.SEND and txn.counterparty:
        message = f"You sent {amount} to {txn.counterparty.get_full_name()}."
    elif txn.type == TransactionType.RECEIVE and txn.counterparty:
        message = f"You received {amount} from {txn.counterparty.get_full_name()}."
    elif txn.type == TransactionType.CASH_IN:
        message = f"{amount} was added to your wallet."
    else:
        message = f"{amount} was deducted from your wallet. {txn.description}".strip()

    return notify(
        user=txn.user,
        title=TRANSACTION_TITLES.get(txn.type, 'Wallet Update'),
        message=message,
        type=NotificationType.TRANSACTION,
        transaction=txn,
    )


def list_notifications(*, user: User, unread_only: bool = False) -> QuerySet:
    queryset = Notification.objects.filter(user=user)
    if unread_only:
        queryset = queryset.filter(is_read=False)
    return queryset.order_by('-created_at')


def get_unread_count(*, user: User) -> int:
    return Notification.objects.filter(user=user, is_read=False).count()


@transaction.atomic
def mark_notification_read(*, user: User, notification_id: UUID) -> Notification:
    try:
        notification = Notification.objects.select_for_update().get(id=notification_id, user=user)
    except (Notification.DoesNotExist, ValidationError):
        raise NotificationNotFoundError(f"Notification {notification_id} not found")

    if not notification.is_read:
        notification.is_read = True
        notification.save(update_fields=['is_read'])
    return notification


def mark_all_notifications_read(*, user: User) -> int:
    return Notification.objects.filter(user=user, is_read=False).update(is_read=True)
