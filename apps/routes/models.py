from django.db import models
import uuid


class BusRoute(models.Model):
    """A conductor's run on a bus between two terminals."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    conductor = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='bus_routes'
    )
    bus_number = models.CharField(max_length=20, db_index=True)
    origin = models.CharField(max_length=255)
    destination = models.CharField(max_length=255)

    active = models.BooleanField(default=True)
    started_at = models.DateTimeField(auto_now_add=True)
    ended_at = models.DateTimeField(null=True, blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'routes'
        indexes = [
            models.Index(fields=['conductor', 'active']),
            models.Index(fields=['bus_number', 'started_at']),
        ]
        ordering = ['-started_at']

    def __str__(self):
        return f"Bus {self.bus_number}: {self.origin} -> {self.destination}"

    @property
    def conductor_name(self):
        """Conductor's display name, tolerant of missing profile data."""
        if not self.conductor_id or self.conductor is None:
            return 'Unknown Conductor'
        return self.conductor.get_full_name() or 'Unknown Conductor'
