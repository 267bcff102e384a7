"""Role routing helpers."""

from typing import Iterable, Union

from apps.accounts.models import User, UserRole

ROLE_REDIRECTS = {
    UserRole.PASSENGER: '/',
    UserRole.CONDUCTOR: '/conductor',
    UserRole.INSPECTOR: '/inspector',
}


def get_role_redirect(*, user: User) -> dict:
    """Return the user's role and the app section it lands on."""
    role = user.role or UserRole.PASSENGER
    return {
        'role': role,
        'redirect_to': ROLE_REDIRECTS.get(role, '/'),
    }


def check_route_permission(*, user: User, allowed_roles: Union[str, Iterable[str]]) -> bool:
    """True if the user's role matches a single role or any role in a list."""
    if not user or not user.is_authenticated:
        return False

    role = user.role or UserRole.PASSENGER
    if isinstance(allowed_roles, str):
        return role == allowed_roles
    return role in allowed_roles
