import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a passenger."""
    return User.objects.create_user(
        email='juan@example.com',
        password='TestPass123!',
        username='juan',
        first_name='Juan',
        last_name='Dela Cruz',
        phone_number='09171234567',
    )


@pytest.fixture
def user_with_pin(user):
    """Passenger with PIN 1234."""
    user.set_pin('1234')
    user.save(update_fields=['pin_hash'])
    return user


@pytest.fixture
def user_inactive(db):
    """Create and return an inactive user."""
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        username='inactive',
        is_active=False,
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
def inspector(db):
    return User.objects.create_user(
        email='inspector@example.com',
        password='TestPass123!',
        username='inspector',
        first_name='Maria',
        last_name='Reyes',
        role=UserRole.INSPECTOR,
    )


@pytest.fixture
def other_user(db):
    """Create and return another test user."""
    return User.objects.create_user(
        email='otheruser@example.com',
        password='OtherPass123!',
        username='other',
        phone_number='09179876543',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def user_with_reset_token(db):
    """Create a user with a password reset token."""
    user = User.objects.create_user(
        email='resetuser@example.com',
        password='OldPass123!',
        username='resetuser',
    )
    user.reset_token = 'valid-reset-token-12345'
    user.save()
    return user
