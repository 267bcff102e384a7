"""
Cash-in through PayMongo payment links.

A cash-in starts as a PENDING transaction tied to a link. The balance is
credited only when verification finds the link paid.
"""

import logging

from django.db import transaction

from apps.accounts.models import User
from apps.wallet.models import Transaction, TransactionStatus, TransactionType

from . import paymongo
from .exceptions import InvalidAmountError, TransactionNotFoundError
from .ledger import normalize_amount, record_transaction, update_transaction_status
from .notifications import notify_transaction

logger = logging.getLogger(__name__)

FAILED_LINK_STATUSES = frozenset({'expired', 'failed', 'cancelled', 'archived'})


def create_cash_in(*, user: User, amount) -> dict:
    """
    Start a cash-in.

    Returns:
        dict with the pending ``transaction`` and the ``checkout_url``

    Raises:
        InvalidAmountError: If amount is below the PayMongo minimum
        PayMongoError: If the link cannot be created
    """
    amount = normalize_amount(amount)
    if amount < paymongo.PAYMONGO_MIN_AMOUNT:
        raise InvalidAmountError(
            f"The minimum cash-in amount is PHP {paymongo.PAYMONGO_MIN_AMOUNT:.2f}"
        )

    link = paymongo.create_payment_link(
        amount=amount,
        description=f"Wallet cash-in for {user.username}",
        remarks=f"user:{user.id}",
    )
    attributes = link.get('attributes', {})

    txn = record_transaction(
        user=user,
        type=TransactionType.CASH_IN,
        amount=amount,
        description='Cash in via PayMongo',
        status=TransactionStatus.PENDING,
        payment_id=link['id'],
        reference=attributes.get('reference_number', ''),
        metadata={'checkout_url': attributes.get('checkout_url', '')},
    )
    logger.info("Cash-in %s created with link %s", txn.transaction_id, link['id'])

    return {
        'transaction': txn,
        'checkout_url': attributes.get('checkout_url', ''),
    }


def verify_cash_in(*, user: User, transaction_id: str) -> Transaction:
    """
    Check the PayMongo link behind a pending cash-in.

    Paid links complete the transaction and credit the wallet, expired or
    failed links mark it FAILED, unpaid links leave it pending.

    Raises:
        TransactionNotFoundError: If user has no such cash-in
        PayMongoError: If the link cannot be fetched
    """
    try:
        txn = Transaction.objects.get(
            user=user,
            transaction_id=transaction_id,
            type=TransactionType.CASH_IN,
        )
    except Transaction.DoesNotExist:
        raise TransactionNotFoundError(f"Cash-in {transaction_id} not found")

    if txn.status != TransactionStatus.PENDING:
        return txn

    link = paymongo.get_payment_link(link_id=txn.payment_id)
    link_status = link.get('attributes', {}).get('status')

    if link_status == paymongo.LINK_STATUS_PAID:
        with transaction.atomic():
            # Another verification may have finished while the gateway was called
            current = Transaction.objects.select_for_update().get(pk=txn.pk)
            if current.status != TransactionStatus.PENDING:
                return current
            txn = update_transaction_status(
                transaction_id=txn.transaction_id,
                status=TransactionStatus.COMPLETED,
            )
            notify_transaction(txn=txn)
        logger.info("Cash-in %s paid", txn.transaction_id)
    elif link_status in FAILED_LINK_STATUSES:
        txn = update_transaction_status(
            transaction_id=txn.transaction_id,
            status=TransactionStatus.FAILED,
        )
        logger.info("Cash-in %s failed with link status %s", txn.transaction_id, link_status)

    return txn
