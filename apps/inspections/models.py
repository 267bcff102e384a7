from django.db import models
import uuid


class InspectionStatus(models.TextChoices):
    CLEARED = 'cleared', 'Cleared'
    FLAGGED = 'flagged', 'Flagged'


class InspectionRecord(models.Model):
    """
    An inspector's check of a bus.

    Bus number, conductor and passenger count are copied at inspection time
    so history stays accurate after the route is edited.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    inspector = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='inspections'
    )
    route = models.ForeignKey(
        'routes.BusRoute',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='inspections'
    )
    bus_number = models.CharField(max_length=20)
    conductor = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='inspected_routes'
    )
    conductor_name = models.CharField(max_length=150)

    # Stretch of the route the inspector rode
    origin = models.CharField(max_length=255)
    destination = models.CharField(max_length=255)
    passenger_count = models.PositiveIntegerField(default=0)

    status = models.CharField(
        max_length=10,
        choices=InspectionStatus.choices,
        default=InspectionStatus.CLEARED
    )
    notes = models.TextField(blank=True)
    inspected_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'inspections'
        indexes = [
            models.Index(fields=['inspector', 'inspected_at']),
        ]
        ordering = ['-inspected_at']

    def __str__(self):
        return f"Bus {self.bus_number} {self.status} by {self.inspector}"
