"""
Wallet ledger.

Balances are never stored on the user. Each completed transaction records
``balance_after`` and the newest completed entry is the current balance.
Every write that completes a transaction first locks the owner's user row,
so concurrent debits against one wallet are applied one at a time.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.wallet.models import Transaction, TransactionStatus, TransactionType

from .exceptions import (
    InvalidAmountError,
    InsufficientBalanceError,
    TransactionNotFoundError,
    InvalidTransactionStateError,
)

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')
CENTAVO = Decimal('0.01')


def normalize_amount(amount) -> Decimal:
    """Coerce to a positive two-decimal Decimal."""
    try:
        value = Decimal(str(amount)).quantize(CENTAVO)
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidAmountError(f"Invalid amount: {amount!r}")

    if value <= ZERO:
        raise InvalidAmountError("Amount must be greater than zero")
    return value


def get_balance(*, user: User) -> Decimal:
    """Balance after the user's most recently completed transaction."""
    balance = (
        Transaction.objects
        .filter(user=user, status=TransactionStatus.COMPLETED)
        .order_by('-completed_at', '-created_at')
        .values_list('balance_after', flat=True)
        .first()
    )
    return balance if balance is not None else ZERO


def lock_wallets(*users: User) -> None:
    """Lock user rows in primary key order. Must run inside an atomic block."""
    ids = sorted({str(u.pk) for u in users})
    list(User.objects.select_for_update().filter(pk__in=ids).order_by('pk'))


def _apply_to_balance(txn: Transaction) -> None:
    balance = get_balance(user=txn.user)
    new_balance = balance + txn.signed_amount
    if new_balance < ZERO:
        raise InsufficientBalanceError(balance)

    txn.status = TransactionStatus.COMPLETED
    txn.balance_after = new_balance
    txn.completed_at = timezone.now()


@transaction.atomic
def record_transaction(
    *,
    user: User,
    type: str,
    amount,
    description: str = "",
    status: str = TransactionStatus.COMPLETED,
    payment_id: str = "",
    reference: str = "",
    counterparty: Optional[User] = None,
    metadata: Optional[dict] = None
) -> Transaction:
    """
    Write a ledger entry.

    Args:
        user: Wallet owner
        type: TransactionType value
        amount: Positive amount, sign comes from type
        description: Shown in transaction history
        status: COMPLETED applies the entry to the balance immediately,
            PENDING records it for later completion
        payment_id: Gateway link id (cash-in)
        reference: Shared reference (transfer legs, gateway reference)
        counterparty: Other party of a transfer
        metadata: Free-form details (cash-out destination, trip info)

    Returns:
        Saved Transaction

    Raises:
        InvalidAmountError: If amount is not positive
        InsufficientBalanceError: If a completed debit exceeds the balance
    """
    txn = Transaction(
        user=user,
        type=type,
        amount=normalize_amount(amount),
        description=description,
        status=TransactionStatus.PENDING,
        payment_id=payment_id,
        reference=reference,
        counterparty=counterparty,
        metadata=metadata or {},
    )

    if status == TransactionStatus.COMPLETED:
        lock_wallets(user)
        _apply_to_balance(txn)
    elif status == TransactionStatus.FAILED:
        txn.status = TransactionStatus.FAILED

    txn.save()
    logger.info(
        "Recorded %s %s of %s for user %s (%s)",
        txn.type, txn.transaction_id, txn.amount, user.id, txn.status
    )
    return txn


@transaction.atomic
def update_transaction_status(*, transaction_id: str, status: str) -> Transaction:
    """
    Move a PENDING transaction to COMPLETED or FAILED.

    Setting the status a transaction already has is a no-op.

    Raises:
        TransactionNotFoundError: If transaction doesn't exist
        InvalidTransactionStateError: If it already finished differently
        InsufficientBalanceError: If completing a debit exceeds the balance
    """
    try:
        txn = (
            Transaction.objects
            .select_for_update()
            .select_related('user')
            .get(transaction_id=transaction_id)
        )
    except Transaction.DoesNotExist:
        raise TransactionNotFoundError(f"Transaction {transaction_id} not found")

    if txn.status == status:
        return txn

    if txn.status != TransactionStatus.PENDING:
        raise InvalidTransactionStateError(
            f"Transaction {transaction_id} is already {txn.status.lower()}"
        )

    if status == TransactionStatus.COMPLETED:
        lock_wallets(txn.user)
        _apply_to_balance(txn)
    elif status == TransactionStatus.FAILED:
        txn.status = TransactionStatus.FAILED
    else:
        raise InvalidTransactionStateError(f"Cannot move transaction back to {status}")

    txn.save(update_fields=['status', 'balance_after', 'completed_at', 'updated_at'])
    logger.info("Transaction %s is now %s", txn.transaction_id, txn.status)
    return txn


def get_transaction(*, user: User, transaction_id: str) -> Transaction:
    try:
        return Transaction.objects.select_related('counterparty').get(
            user=user,
            transaction_id=transaction_id
        )
    except Transaction.DoesNotExist:
        raise TransactionNotFoundError(f"Transaction {transaction_id} not found")


def list_transactions(
    *,
    user: User,
    type: Optional[str] = None,
    status: Optional[str] = None
) -> QuerySet:
    queryset = Transaction.objects.filter(user=user).select_related('counterparty')
    if type:
        queryset = queryset.filter(type=type)
    if status:
        queryset = queryset.filter(status=status)
    return queryset.order_by('-created_at')


def get_wallet_summary(*, user: User) -> dict:
    """Balance plus pending cash-in total for the wallet header."""
    pending = Transaction.objects.filter(
        user=user,
        type=TransactionType.CASH_IN,
        status=TransactionStatus.PENDING,
    ).values_list('amount', flat=True)

    return {
        'balance': get_balance(user=user),
        'pending_cash_in': sum(pending, ZERO),
        'currency': 'PHP',
    }
