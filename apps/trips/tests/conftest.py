import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.routes.models import BusRoute
from apps.wallet.models import TransactionType
from apps.wallet.services import record_transaction
from apps.trips.services import create_payment_request


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
def passenger(db):
    """Passenger with PIN 1234 and ₱100.00 in the wallet."""
    user = User.objects.create_user(
        email='maria@example.com',
        password='TestPass123!',
        username='maria',
        first_name='Maria',
        last_name='Clara',
    )
    user.set_pin('1234')
    user.save(update_fields=['pin_hash'])
    record_transaction(user=user, type=TransactionType.CASH_IN, amount=Decimal('100.00'))
    return user


@pytest.fixture
def other_passenger(db):
    return User.objects.create_user(
        email='jose@example.com',
        password='TestPass123!',
        username='jose',
    )


@pytest.fixture
def active_route(conductor):
    return BusRoute.objects.create(
        conductor=conductor,
        bus_number='ABC123',
        origin='Cubao',
        destination='Baclaran',
    )


@pytest.fixture
def pending_request(conductor, passenger, active_route):
    """₱20.00 Regular fare for 5 km."""
    return create_payment_request(
        conductor=conductor,
        passenger_id=passenger.id,
        origin='Cubao',
        destination='Ortigas',
        kilometer=5,
    )


@pytest.fixture
def conductor_client(conductor):
    return _client_for(conductor)


@pytest.fixture
def passenger_client(passenger):
    return _client_for(passenger)
