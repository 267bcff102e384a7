import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.routes.models import BusRoute


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
def inspector(db):
    return User.objects.create_user(
        email='inspector@example.com',
        password='TestPass123!',
        username='inspector',
        role=UserRole.INSPECTOR,
    )


@pytest.fixture
def passenger(db):
    return User.objects.create_user(
        email='passenger@example.com',
        password='TestPass123!',
        username='passenger',
    )


@pytest.fixture
def conductor_client(conductor):
    return _client_for(conductor)


@pytest.fixture
def inspector_client(inspector):
    return _client_for(inspector)


@pytest.fixture
def passenger_client(passenger):
    return _client_for(passenger)


@pytest.fixture
def active_route(conductor):
    return BusRoute.objects.create(
        conductor=conductor,
        bus_number='ABC123',
        origin='Cubao',
        destination='Baclaran',
    )
