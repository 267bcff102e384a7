"""Seed the statutory 20% discounts for students, seniors and PWDs."""

from decimal import Decimal

from django.db import migrations


DEFAULT_DISCOUNTS = [
    ('Student', 'Student discount'),
    ('Senior citizen', 'Senior citizen discount'),
    ("Person's with Disabilities", 'PWD discount'),
]


def seed_discounts(apps, schema_editor):
    Discount = apps.get_model('fares', 'Discount')
    for passenger_type, description in DEFAULT_DISCOUNTS:
        Discount.objects.get_or_create(
            passenger_type=passenger_type,
            defaults={
                'discount_percentage': Decimal('20'),
                'description': description,
                'is_active': True,
            },
        )


def remove_discounts(apps, schema_editor):
    Discount = apps.get_model('fares', 'Discount')
    Discount.objects.filter(passenger_type__in=[t for t, _ in DEFAULT_DISCOUNTS]).delete()


class Migration(migrations.Migration):

    dependencies = [
        ('fares', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(seed_discounts, remove_discounts),
    ]
