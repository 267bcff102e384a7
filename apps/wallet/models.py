from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal
import secrets
import string
import uuid


TRANSACTION_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_transaction_id():
    """Public transaction reference, e.g. ``txn_k3j9...``."""
    return 'txn_' + ''.join(secrets.choice(TRANSACTION_ID_ALPHABET) for _ in range(20))


class TransactionType(models.TextChoices):
    CASH_IN = 'CASH_IN', 'Cash in'
    CASH_OUT = 'CASH_OUT', 'Cash out'
    SEND = 'SEND', 'Send'
    RECEIVE = 'RECEIVE', 'Receive'


class TransactionStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    COMPLETED = 'COMPLETED', 'Completed'
    FAILED = 'FAILED', 'Failed'


CREDIT_TYPES = frozenset({TransactionType.CASH_IN, TransactionType.RECEIVE})


class Transaction(models.Model):
    """
    Wallet ledger entry.

    Completed entries carry the running balance in ``balance_after``; the
    newest completed entry per user is that user's balance.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    transaction_id = models.CharField(
        max_length=32,
        unique=True,
        default=generate_transaction_id,
        editable=False
    )
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='transactions'
    )

    type = models.CharField(max_length=10, choices=TransactionType.choices)
    status = models.CharField(
        max_length=10,
        choices=TransactionStatus.choices,
        default=TransactionStatus.PENDING
    )

    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    balance_after = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True
    )
    description = models.CharField(max_length=255, blank=True)

    # Gateway link id for cash-ins
    payment_id = models.CharField(max_length=64, blank=True, db_index=True)
    # Shared between the two legs of a transfer, gateway reference for cash-ins
    reference = models.CharField(max_length=64, blank=True, db_index=True)

    counterparty = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='counterparty_transactions'
    )
    metadata = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'transactions'
        indexes = [
            models.Index(fields=['user', 'status', 'completed_at']),
            models.Index(fields=['user', 'created_at']),
            models.Index(fields=['type', 'status']),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.transaction_id} {self.type} {self.amount} ({self.status})"

    @property
    def is_credit(self):
        return self.type in CREDIT_TYPES

    @property
    def signed_amount(self):
        return self.amount if self.is_credit else -self.amount


class NotificationType(models.TextChoices):
    TRANSACTION = 'transaction', 'Transaction'
    PAYMENT_REQUEST = 'payment_request', 'Payment request'
    TRIP = 'trip', 'Trip'
    REMITTANCE = 'remittance', 'Remittance'


class Notification(models.Model):
    """In-app notification for a wallet holder."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='notifications'
    )
    title = models.CharField(max_length=120)
    message = models.TextField()
    type = models.CharField(
        max_length=20,
        choices=NotificationType.choices,
        default=NotificationType.TRANSACTION
    )
    transaction = models.ForeignKey(
        Transaction,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='notifications'
    )
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'notifications'
        indexes = [
            models.Index(fields=['user', 'is_read']),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.title} -> {self.user}"
