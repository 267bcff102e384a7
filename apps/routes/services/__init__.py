"""Services for routes business logic."""

from .exceptions import (
    RoutesServiceError,
    RouteNotFoundError,
    NoActiveRouteError,
    RouteInUseError,
)
from .route_management import (
    start_route,
    get_active_route,
    get_route_for_conductor,
    end_route,
    list_routes,
    update_route,
    delete_route,
    search_buses,
)

__all__ = [
    # Exceptions
    'RoutesServiceError',
    'RouteNotFoundError',
    'NoActiveRouteError',
    'RouteInUseError',
    # Services
    'start_route',
    'get_active_route',
    'get_route_for_conductor',
    'end_route',
    'list_routes',
    'update_route',
    'delete_route',
    'search_buses',
]
