from rest_framework import serializers
from decimal import Decimal
from apps.accounts.serializers import UserPublicSerializer
from .models import Transaction, TransactionType, TransactionStatus, Notification


class TransactionSerializer(serializers.ModelSerializer):
    """Ledger entry as shown in wallet history."""

    counterparty = UserPublicSerializer(read_only=True)
    signed_amount = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = Transaction
        fields = [
            'id',
            'transaction_id',
            'type',
            'status',
            'amount',
            'signed_amount',
            'balance_after',
            'description',
            'reference',
            'counterparty',
            'metadata',
            'created_at',
            'completed_at',
        ]
        read_only_fields = fields


class TransactionFilterSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=TransactionType.choices, required=False)
    status = serializers.ChoiceField(choices=TransactionStatus.choices, required=False)


class WalletSummarySerializer(serializers.Serializer):
    balance = serializers.DecimalField(max_digits=12, decimal_places=2)
    pending_cash_in = serializers.DecimalField(max_digits=12, decimal_places=2)
    currency = serializers.CharField()


class SendMoneySerializer(serializers.Serializer):
    """
    Send money to another wallet.

    Fields:
        recipient (str): Username or phone number
        amount (decimal): Amount in PHP
        description (str): Optional note
    """

    recipient = serializers.CharField(max_length=50)
    amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0.01')
    )
    description = serializers.CharField(max_length=255, required=False, allow_blank=True)


class CashInSerializer(serializers.Serializer):
    amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0.01')
    )


class CashInResponseSerializer(serializers.Serializer):
    transaction = TransactionSerializer()
    checkout_url = serializers.URLField()


class CashOutSerializer(serializers.Serializer):
    METHOD_CHOICES = [
        ('gcash', 'GCash'),
        ('maya', 'Maya'),
        ('bank', 'Bank transfer'),
    ]

    amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0.01')
    )
    method = serializers.ChoiceField(choices=METHOD_CHOICES)
    account_number = serializers.CharField(max_length=50)


class TransferResponseSerializer(serializers.Serializer):
    transaction = TransactionSerializer()
    balance = serializers.DecimalField(max_digits=12, decimal_places=2)


class NotificationSerializer(serializers.ModelSerializer):
    transaction_id = serializers.CharField(
        source='transaction.transaction_id',
        read_only=True,
        default=None
    )

    class Meta:
        model = Notification
        fields = [
            'id',
            'title',
            'message',
            'type',
            'transaction_id',
            'is_read',
            'created_at',
        ]
        read_only_fields = fields
