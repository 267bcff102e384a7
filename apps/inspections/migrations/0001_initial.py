import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('routes', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='InspectionRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('bus_number', models.CharField(max_length=20)),
                ('conductor_name', models.CharField(max_length=150)),
                ('origin', models.CharField(max_length=255)),
                ('destination', models.CharField(max_length=255)),
                ('passenger_count', models.PositiveIntegerField(default=0)),
                ('status', models.CharField(choices=[('cleared', 'Cleared'), ('flagged', 'Flagged')], default='cleared', max_length=10)),
                ('notes', models.TextField(blank=True)),
                ('inspected_at', models.DateTimeField(auto_now_add=True)),
                ('conductor', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='inspected_routes', to=settings.AUTH_USER_MODEL)),
                ('inspector', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='inspections', to=settings.AUTH_USER_MODEL)),
                ('route', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='inspections', to='routes.busroute')),
            ],
            options={
                'db_table': 'inspections',
                'ordering': ['-inspected_at'],
                'indexes': [
                    models.Index(fields=['inspector', 'inspected_at'], name='inspections_inspect_e4108b_idx'),
                ],
            },
        ),
    ]
