import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.routes.models import BusRoute
from apps.trips.services import record_cash_trip


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def inspector(db):
    return User.objects.create_user(
        email='inspector@example.com',
        password='TestPass123!',
        username='inspector',
        first_name='Ines',
        last_name='Ramos',
        role=UserRole.INSPECTOR,
    )


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
def bus(conductor):
    return BusRoute.objects.create(
        conductor=conductor,
        bus_number='XYZ789',
        origin='Cubao',
        destination='Baclaran',
    )


@pytest.fixture
def bus_with_passengers(bus, conductor):
    for name in ('Ana', 'Ben'):
        record_cash_trip(
            conductor=conductor,
            passenger_name=name,
            origin='Cubao',
            destination='Baclaran',
            kilometer=8,
        )
    return bus


@pytest.fixture
def inspector_client(inspector):
    return _client_for(inspector)


@pytest.fixture
def conductor_client(conductor):
    return _client_for(conductor)
