from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal
import secrets
import uuid

from apps.fares.models import PassengerType


def generate_transaction_number():
    """10-digit numeric trip number printed on receipts."""
    return str(secrets.randbelow(9_000_000_000) + 1_000_000_000)


class PaymentRequestStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    DECLINED = 'declined', 'Declined'
    COMPLETED = 'completed', 'Completed'
    EXPIRED = 'expired', 'Expired'


class PaymentRequest(models.Model):
    """
    Fare charge sent by a conductor to a passenger's wallet.

    Created when the conductor scans the passenger's wallet QR code. The
    passenger approves it with a PIN token, which debits the wallet and
    records the trip.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    conductor = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='issued_payment_requests'
    )
    passenger = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='payment_requests'
    )
    route = models.ForeignKey(
        'routes.BusRoute',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='payment_requests'
    )

    fare = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    origin = models.CharField(max_length=255)
    destination = models.CharField(max_length=255)
    passenger_type = models.CharField(
        max_length=50,
        choices=PassengerType.choices,
        default=PassengerType.REGULAR
    )
    kilometer = models.DecimalField(max_digits=7, decimal_places=1)

    status = models.CharField(
        max_length=10,
        choices=PaymentRequestStatus.choices,
        default=PaymentRequestStatus.PENDING
    )
    transaction = models.ForeignKey(
        'wallet.Transaction',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='payment_requests'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    expires_at = models.DateTimeField()

    class Meta:
        db_table = 'payment_requests'
        indexes = [
            models.Index(fields=['passenger', 'status']),
            models.Index(fields=['conductor', 'status']),
            models.Index(fields=['status', 'expires_at']),
            models.Index(fields=['updated_at']),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"₱{self.fare} {self.origin} -> {self.destination} ({self.status})"

    @property
    def is_pending(self):
        return self.status == PaymentRequestStatus.PENDING


class PaymentMethod(models.TextChoices):
    QR = 'QR', 'QR'
    CASH = 'Cash', 'Cash'


class Trip(models.Model):
    """A single passenger fare collected on a route."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    transaction_number = models.CharField(
        max_length=10,
        unique=True,
        default=generate_transaction_number,
        editable=False
    )

    conductor = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='conducted_trips'
    )
    passenger = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='trips'
    )
    passenger_name = models.CharField(max_length=150)
    passenger_type = models.CharField(
        max_length=50,
        choices=PassengerType.choices,
        default=PassengerType.REGULAR
    )
    passenger_photo = models.ImageField(upload_to='passenger_photos/', blank=True)

    route = models.ForeignKey(
        'routes.BusRoute',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='trips'
    )
    origin = models.CharField(max_length=255)
    destination = models.CharField(max_length=255)
    kilometer = models.DecimalField(max_digits=7, decimal_places=1)

    fare = models.DecimalField(max_digits=10, decimal_places=2)
    payment_method = models.CharField(max_length=10, choices=PaymentMethod.choices)
    payment_request = models.OneToOneField(
        PaymentRequest,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='trip'
    )
    transaction = models.ForeignKey(
        'wallet.Transaction',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='trips'
    )

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'trips'
        indexes = [
            models.Index(fields=['conductor', 'created_at']),
            models.Index(fields=['passenger', 'created_at']),
            models.Index(fields=['route', 'payment_method', 'created_at']),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"#{self.transaction_number} {self.passenger_name} ₱{self.fare}"
