from django.db import models
from django.db.models import Q
import uuid


class RemittanceStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    REMITTED = 'remitted', 'Remitted'


class CashRemittance(models.Model):
    """
    Cash fares a conductor hands over to the operator for one route.

    Each submission is its own record. Staff verification stamps
    ``verified_at``, which becomes the cutoff for counting unremitted fares.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    route = models.ForeignKey(
        'routes.BusRoute',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='remittances'
    )
    bus_number = models.CharField(max_length=20)
    conductor = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='remittances'
    )

    status = models.CharField(
        max_length=10,
        choices=RemittanceStatus.choices,
        default=RemittanceStatus.PENDING
    )
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    notes = models.TextField(blank=True)
    submitted_at = models.DateTimeField(auto_now_add=True)

    verified_at = models.DateTimeField(null=True, blank=True)
    verified_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='verified_remittances'
    )

    class Meta:
        db_table = 'cash_remittances'
        indexes = [
            models.Index(fields=['route', 'status']),
            models.Index(fields=['conductor', 'submitted_at']),
            models.Index(fields=['status']),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['route'],
                condition=Q(status='pending'),
                name='one_pending_remittance_per_route'
            ),
        ]
        ordering = ['-submitted_at']

    def __str__(self):
        return f"₱{self.amount} from bus {self.bus_number} ({self.status})"

    @property
    def is_pending(self):
        return self.status == RemittanceStatus.PENDING
