from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from decimal import Decimal
import uuid


class PassengerType(models.TextChoices):
    REGULAR = 'Regular', 'Regular'
    STUDENT = 'Student', 'Student'
    SENIOR_CITIZEN = 'Senior citizen', 'Senior citizen'
    PWD = "Person's with Disabilities", "Person's with Disabilities"


class Discount(models.Model):
    """Fare discount configured per passenger type."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    passenger_type = models.CharField(
        max_length=50,
        choices=PassengerType.choices,
        unique=True
    )
    discount_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))]
    )
    description = models.CharField(max_length=255, blank=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'discounts'
        ordering = ['passenger_type']

    def __str__(self):
        state = '' if self.is_active else ' (inactive)'
        return f"{self.passenger_type}: {self.discount_percentage}%{state}"
