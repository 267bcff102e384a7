import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.fares.models import Discount


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def passenger(db):
    return User.objects.create_user(
        email='passenger@example.com',
        password='TestPass123!',
        username='passenger',
    )


@pytest.fixture
def conductor(db):
    return User.objects.create_user(
        email='conductor@example.com',
        password='TestPass123!',
        username='conductor',
        role=UserRole.CONDUCTOR,
    )


@pytest.fixture
def passenger_client(passenger):
    return _client_for(passenger)


@pytest.fixture
def conductor_client(conductor):
    return _client_for(conductor)


@pytest.fixture
def student_discount(db):
    return Discount.objects.create(
        passenger_type='Student',
        discount_percentage=Decimal('20'),
        description='Student discount',
    )


@pytest.fixture
def inactive_senior_discount(db):
    return Discount.objects.create(
        passenger_type='Senior citizen',
        discount_percentage=Decimal('20'),
        is_active=False,
    )


@pytest.fixture
def maps_response():
    """Build a fake requests.Response for the Google Maps client."""
    from unittest.mock import MagicMock

    def _build(payload):
        response = MagicMock()
        response.json.return_value = payload
        response.raise_for_status.return_value = None
        return response

    return _build
