import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.wallet.models import TransactionType
from apps.wallet.services import record_transaction


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def alice(db):
    return User.objects.create_user(
        email='alice@example.com',
        password='TestPass123!',
        username='alice',
        first_name='Alice',
        last_name='Reyes',
        phone_number='09170000011',
    )


@pytest.fixture
def bob(db):
    return User.objects.create_user(
        email='bob@example.com',
        password='TestPass123!',
        username='bob',
        first_name='Bob',
        last_name='Garcia',
        phone_number='09170000022',
    )


@pytest.fixture
def funded_alice(alice):
    """Alice with ₱500.00 in her wallet."""
    record_transaction(
        user=alice,
        type=TransactionType.CASH_IN,
        amount=Decimal('500.00'),
        description='Initial cash in',
    )
    return alice


@pytest.fixture
def alice_client(alice):
    return _client_for(alice)


@pytest.fixture
def bob_client(bob):
    return _client_for(bob)
