import decimal
import uuid

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

import apps.trips.models

PASSENGER_TYPE_CHOICES = [
    ('Regular', 'Regular'),
    ('Student', 'Student'),
    ('Senior citizen', 'Senior citizen'),
    ("Person's with Disabilities", "Person's with Disabilities"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('routes', '0001_initial'),
        ('wallet', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='PaymentRequest',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('fare', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.01'))])),
                ('origin', models.CharField(max_length=255)),
                ('destination', models.CharField(max_length=255)),
                ('passenger_type', models.CharField(choices=PASSENGER_TYPE_CHOICES, default='Regular', max_length=50)),
                ('kilometer', models.DecimalField(decimal_places=1, max_digits=7)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('approved', 'Approved'), ('declined', 'Declined'), ('completed', 'Completed'), ('expired', 'Expired')], default='pending', max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('expires_at', models.DateTimeField()),
                ('conductor', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='issued_payment_requests', to=settings.AUTH_USER_MODEL)),
                ('passenger', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='payment_requests', to=settings.AUTH_USER_MODEL)),
                ('route', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='payment_requests', to='routes.busroute')),
                ('transaction', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='payment_requests', to='wallet.transaction')),
            ],
            options={
                'db_table': 'payment_requests',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['passenger', 'status'], name='payment_req_passeng_859c16_idx'),
                    models.Index(fields=['conductor', 'status'], name='payment_req_conduct_24c421_idx'),
                    models.Index(fields=['status', 'expires_at'], name='payment_req_status_6f21c2_idx'),
                    models.Index(fields=['updated_at'], name='payment_req_updated_ff2380_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Trip',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('transaction_number', models.CharField(default=apps.trips.models.generate_transaction_number, editable=False, max_length=10, unique=True)),
                ('passenger_name', models.CharField(max_length=150)),
                ('passenger_type', models.CharField(choices=PASSENGER_TYPE_CHOICES, default='Regular', max_length=50)),
                ('passenger_photo', models.ImageField(blank=True, upload_to='passenger_photos/')),
                ('origin', models.CharField(max_length=255)),
                ('destination', models.CharField(max_length=255)),
                ('kilometer', models.DecimalField(decimal_places=1, max_digits=7)),
                ('fare', models.DecimalField(decimal_places=2, max_digits=10)),
                ('payment_method', models.CharField(choices=[('QR', 'QR'), ('Cash', 'Cash')], max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('conductor', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='conducted_trips', to=settings.AUTH_USER_MODEL)),
                ('passenger', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='trips', to=settings.AUTH_USER_MODEL)),
                ('payment_request', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='trip', to='trips.paymentrequest')),
                ('route', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='trips', to='routes.busroute')),
                ('transaction', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='trips', to='wallet.transaction')),
            ],
            options={
                'db_table': 'trips',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['conductor', 'created_at'], name='trips_conduct_fe2165_idx'),
                    models.Index(fields=['passenger', 'created_at'], name='trips_passeng_42ef86_idx'),
                    models.Index(fields=['route', 'payment_method', 'created_at'], name='trips_route_i_432c67_idx'),
                ],
            },
        ),
    ]
