import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.routes.models import BusRoute
from apps.trips.models import PaymentMethod, Trip
from apps.trips.services import record_cash_trip


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def conductor(db):
    return User.objects.create_user(
        email='conductor@example.com',
        password='TestPass123!',
        username='conductor',
        first_name='Pedro',
        last_name='Santos',
        role=UserRole.CONDUCTOR,
    )


@pytest.fixture
def other_conductor(db):
    return User.objects.create_user(
        email='conductor2@example.com',
        password='TestPass123!',
        username='conductor2',
        role=UserRole.CONDUCTOR,
    )


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(
        email='operator@example.com',
        password='TestPass123!',
        username='operator',
        is_staff=True,
    )


@pytest.fixture
def route(conductor):
    return BusRoute.objects.create(
        conductor=conductor,
        bus_number='ABC123',
        origin='Cubao',
        destination='Baclaran',
    )


@pytest.fixture
def route_with_fares(route, conductor):
    """Two cash fares (₱20 + ₱30) and one ₱20 QR fare, recorded an hour ago."""
    record_cash_trip(conductor=conductor, passenger_name='Ana', origin='Cubao', destination='Ortigas', kilometer=5)
    record_cash_trip(conductor=conductor, passenger_name='Ben', origin='Cubao', destination='Pasay', kilometer=10)
    Trip.objects.create(
        conductor=conductor,
        passenger_name='Carla',
        route=route,
        origin='Cubao',
        destination='Ortigas',
        kilometer=Decimal('5.0'),
        fare=Decimal('20.00'),
        payment_method=PaymentMethod.QR,
    )
    Trip.objects.filter(route=route).update(created_at=timezone.now() - timedelta(hours=1))
    return route


@pytest.fixture
def conductor_client(conductor):
    return _client_for(conductor)


@pytest.fixture
def staff_client(staff_user):
    return _client_for(staff_user)
