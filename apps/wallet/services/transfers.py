"""
Peer-to-peer transfers and cash-out.

A transfer writes two completed entries, a SEND debit on the sender and a
RECEIVE credit on the recipient, sharing one reference. Both wallets are
locked before either balance is read.
"""

import logging
import secrets

from django.db import transaction
from django.db.models import Q

from apps.accounts.models import User
from apps.wallet.models import Transaction, TransactionType

from .exceptions import RecipientNotFoundError, SelfTransferError
from .ledger import lock_wallets, normalize_amount, record_transaction
from .notifications import notify_transaction

logger = logging.getLogger(__name__)


def find_recipient(*, identifier: str) -> User:
    """
    Resolve a recipient by username or phone number.

    Raises:
        RecipientNotFoundError: If no active user matches
    """
    identifier = (identifier or "").strip()
    if not identifier:
        raise RecipientNotFoundError("Recipient not found")

    recipient = (
        User.objects
        .filter(Q(username__iexact=identifier) | Q(phone_number=identifier), is_active=True)
        .first()
    )
    if recipient is None:
        raise RecipientNotFoundError("Recipient not found")
    return recipient


@transaction.atomic
def send_money(
    *,
    sender: User,
    recipient_identifier: str,
    amount,
    description: str = ""
) -> dict:
    """
    Move money from one wallet to another.

    Args:
        sender: Paying user
        recipient_identifier: Username or phone number of the recipient
        amount: Positive amount
        description: Optional note shown to both parties

    Returns:
        dict with ``sent`` and ``received`` transactions

    Raises:
        InvalidAmountError: If amount is not positive
        RecipientNotFoundError: If recipient doesn't exist
        SelfTransferError: If sender and recipient are the same
        InsufficientBalanceError: If sender cannot cover the amount
    """
    amount = normalize_amount(amount)
    recipient = find_recipient(identifier=recipient_identifier)

    if recipient.pk == sender.pk:
        raise SelfTransferError("You cannot send money to yourself")

    lock_wallets(sender, recipient)
    reference = f"xfer_{secrets.token_hex(8)}"

    sent = record_transaction(
        user=sender,
        type=TransactionType.SEND,
        amount=amount,
        description=description or f"Sent to {recipient.username}",
        reference=reference,
        counterparty=recipient,
    )
    received = record_transaction(
        user=recipient,
        type=TransactionType.RECEIVE,
        amount=amount,
        description=description or f"Received from {sender.username}",
        reference=reference,
        counterparty=sender,
    )

    notify_transaction(txn=sent)
    notify_transaction(txn=received)

    logger.info("Transfer %s: %s -> %s (%s)", reference, sender.id, recipient.id, amount)
    return {'sent': sent, 'received': received}


def cash_out(
    *,
    user: User,
    amount,
    method: str,
    account_number: str,
    description: str = ""
) -> Transaction:
    """
    Withdraw from the wallet to an outside account.

    The payout itself is handled outside the system; the wallet side is a
    completed debit carrying the destination in its metadata.

    Raises:
        InvalidAmountError: If amount is not positive
        InsufficientBalanceError: If the wallet cannot cover the amount
    """
    with transaction.atomic():
        txn = record_transaction(
            user=user,
            type=TransactionType.CASH_OUT,
            amount=amount,
            description=description or f"Cash out to {method}",
            metadata={
                'method': method,
                'account_number': account_number,
            },
        )
        notify_transaction(txn=txn)
    return txn
