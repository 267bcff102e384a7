"""Services for inspections business logic."""

from .exceptions import InspectionsServiceError, BusNotFoundError
from .inspection import (
    search_buses,
    get_bus,
    get_bus_passengers,
    mark_bus_cleared,
    get_inspection_history,
    get_inspector_stats,
)

__all__ = [
    # Exceptions
    'InspectionsServiceError',
    'BusNotFoundError',
    # Services
    'search_buses',
    'get_bus',
    'get_bus_passengers',
    'mark_bus_cleared',
    'get_inspection_history',
    'get_inspector_stats',
]
