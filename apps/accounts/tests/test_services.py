"""
Service layer unit tests for accounts app.

Tests cover:
- Registration uniqueness rules
- PIN hashing, verification tokens and expiry
- Role routing helpers
"""

import pytest
from unittest.mock import patch

from apps.accounts.models import User, UserRole
from apps.accounts.services import (
    register_user,
    authenticate_user,
    register_pin,
    verify_pin,
    check_pin_token,
    reset_pin,
    get_role_redirect,
    check_route_permission,
)
from apps.accounts.services.exceptions import (
    UserAlreadyExistsError,
    InvalidCredentialsError,
    InvalidPinFormatError,
    PinNotSetError,
    InvalidPinError,
    PasswordConfirmationError,
)


@pytest.mark.django_db
class TestRegistrationService:

    def test_register_creates_passenger(self):
        user = register_user(
            email='Rosa@Example.com',
            password='SecurePass123!',
            username='rosa',
            first_name='Rosa',
            last_name='Cruz',
            phone_number='09171112222',
        )

        assert user.role == UserRole.PASSENGER
        assert user.check_password('SecurePass123!')
        assert user.has_pin is False

    def test_register_without_phone_stores_null(self):
        first = register_user(email='a@example.com', password='SecurePass123!', username='a')
        second = register_user(email='b@example.com', password='SecurePass123!', username='b')

        assert first.phone_number is None
        assert second.phone_number is None

    def test_register_duplicate_email_case_insensitive(self, user):
        with pytest.raises(UserAlreadyExistsError):
            register_user(email='JUAN@example.com', password='SecurePass123!', username='juan2')


@pytest.mark.django_db
class TestAuthenticationService:

    def test_authenticate_by_email(self, user):
        assert authenticate_user(username='juan@example.com', password='TestPass123!') == user

    def test_authenticate_sets_last_login(self, user):
        authenticated = authenticate_user(username='juan', password='TestPass123!')

        assert authenticated.last_login is not None

    def test_authenticate_wrong_password(self, user):
        with pytest.raises(InvalidCredentialsError):
            authenticate_user(username='juan', password='bad')


@pytest.mark.django_db
class TestPinService:

    def test_register_pin_requires_four_digits(self, user):
        for bad_pin in ['123', '12345', '12a4', '']:
            with pytest.raises(InvalidPinFormatError):
                register_pin(user=user, pin=bad_pin)

    def test_register_pin_rejects_newline_and_non_ascii_digits(self, user):
        for bad_pin in ['1234\n', '١٢٣٤', '１２３４']:
            with pytest.raises(InvalidPinFormatError):
                register_pin(user=user, pin=bad_pin)

        user.refresh_from_db()
        assert user.has_pin is False

    def test_verify_without_pin(self, user):
        with pytest.raises(PinNotSetError):
            verify_pin(user=user, pin='1234')

    def test_verify_wrong_pin(self, user_with_pin):
        with pytest.raises(InvalidPinError):
            verify_pin(user=user_with_pin, pin='9999')

    def test_token_belongs_to_user(self, user_with_pin, other_user):
        token = verify_pin(user=user_with_pin, pin='1234')

        assert check_pin_token(user=user_with_pin, token=token) is True
        assert check_pin_token(user=other_user, token=token) is False

    def test_tampered_token_rejected(self, user_with_pin):
        token = verify_pin(user=user_with_pin, pin='1234')

        assert check_pin_token(user=user_with_pin, token=token + 'x') is False
        assert check_pin_token(user=user_with_pin, token='') is False

    def test_expired_token_rejected(self, user_with_pin, settings):
        settings.PIN_TOKEN_MAX_AGE = 60
        with patch('django.core.signing.time.time', return_value=1_000_000):
            token = verify_pin(user=user_with_pin, pin='1234')

        with patch('django.core.signing.time.time', return_value=1_000_000 + 61):
            assert check_pin_token(user=user_with_pin, token=token) is False

    def test_reset_pin_requires_password(self, user_with_pin):
        with pytest.raises(PasswordConfirmationError):
            reset_pin(user=user_with_pin, password='wrong', new_pin='0000')

        reset_pin(user=user_with_pin, password='TestPass123!', new_pin='0000')
        user_with_pin.refresh_from_db()
        assert user_with_pin.check_pin('0000')


@pytest.mark.django_db
class TestRoles:

    def test_redirects(self, user, conductor, inspector):
        assert get_role_redirect(user=user)['redirect_to'] == '/'
        assert get_role_redirect(user=conductor)['redirect_to'] == '/conductor'
        assert get_role_redirect(user=inspector)['redirect_to'] == '/inspector'

    def test_route_permission_single_role(self, conductor):
        assert check_route_permission(user=conductor, allowed_roles='conductor') is True
        assert check_route_permission(user=conductor, allowed_roles='inspector') is False

    def test_route_permission_role_list(self, inspector):
        assert check_route_permission(user=inspector, allowed_roles=['conductor', 'inspector']) is True
        assert check_route_permission(user=inspector, allowed_roles=['passenger']) is False

    def test_avatar_initials_fallback(self, db):
        user = User.objects.create_user(email='x@example.com', password='pw', username='xavier')

        assert user.avatar_initials == 'X'
