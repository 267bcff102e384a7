"""
Route management service.

A conductor has at most one active route. Starting or re-activating a route
ends whichever route was active before.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.routes.models import BusRoute

from .exceptions import RouteNotFoundError, NoActiveRouteError, RouteInUseError

logger = logging.getLogger(__name__)


def _end_active_routes(conductor: User, exclude_id: Optional[UUID] = None) -> int:
    queryset = BusRoute.objects.filter(conductor=conductor, active=True)
    if exclude_id:
        queryset = queryset.exclude(id=exclude_id)
    return queryset.update(active=False, ended_at=timezone.now(), updated_at=timezone.now())


@transaction.atomic
def start_route(
    *,
    conductor: User,
    bus_number: str,
    origin: str,
    destination: str
) -> BusRoute:
    """
    Start a new active route for the conductor.

    Args:
        conductor: Conductor running the bus
        bus_number: Plate or fleet number of the bus
        origin: Starting terminal
        destination: Final terminal

    Returns:
        The new active BusRoute
    """
    # Serialize route changes per conductor
    User.objects.select_for_update().get(pk=conductor.pk)

    ended = _end_active_routes(conductor)
    if ended:
        logger.info("Ended %d active route(s) for conductor %s", ended, conductor.id)

    route = BusRoute.objects.create(
        conductor=conductor,
        bus_number=bus_number.strip().upper(),
        origin=origin.strip(),
        destination=destination.strip(),
        active=True,
    )
    logger.info("Conductor %s started route %s", conductor.id, route.id)
    return route


def get_active_route(*, conductor: User) -> Optional[BusRoute]:
    return (
        BusRoute.objects
        .filter(conductor=conductor, active=True)
        .order_by('-started_at')
        .first()
    )


def get_route_for_conductor(*, conductor: User, route_id: UUID) -> BusRoute:
    try:
        return BusRoute.objects.get(id=route_id, conductor=conductor)
    except BusRoute.DoesNotExist:
        raise RouteNotFoundError(f"Route {route_id} not found")


@transaction.atomic
def end_route(*, conductor: User) -> BusRoute:
    """
    End the conductor's active route.

    Raises:
        NoActiveRouteError: If nothing is in progress
    """
    route = (
        BusRoute.objects
        .select_for_update()
        .filter(conductor=conductor, active=True)
        .order_by('-started_at')
        .first()
    )
    if route is None:
        raise NoActiveRouteError("No active route to end")

    route.active = False
    route.ended_at = timezone.now()
    route.save(update_fields=['active', 'ended_at', 'updated_at'])
    logger.info("Conductor %s ended route %s", conductor.id, route.id)
    return route


def list_routes(*, conductor: User) -> QuerySet:
    return BusRoute.objects.filter(conductor=conductor).order_by('-started_at')


@transaction.atomic
def update_route(
    *,
    route: BusRoute,
    bus_number: Optional[str] = None,
    origin: Optional[str] = None,
    destination: Optional[str] = None,
    active: Optional[bool] = None
) -> BusRoute:
    """Edit route details or toggle it active."""
    route = BusRoute.objects.select_for_update().get(pk=route.pk)

    if bus_number is not None:
        route.bus_number = bus_number.strip().upper()
    if origin is not None:
        route.origin = origin.strip()
    if destination is not None:
        route.destination = destination.strip()

    if active is not None and active != route.active:
        if active:
            _end_active_routes(route.conductor, exclude_id=route.id)
            route.ended_at = None
        else:
            route.ended_at = timezone.now()
        route.active = active

    route.save()
    return route


@transaction.atomic
def delete_route(*, route: BusRoute) -> None:
    """
    Delete a route.

    Raises:
        RouteInUseError: If trips were already recorded on it
    """
    if route.trips.exists():
        raise RouteInUseError("Routes with recorded trips cannot be deleted")
    route.delete()


def search_buses(*, bus_number: str) -> QuerySet:
    """Routes whose bus number contains the query, newest first."""
    return (
        BusRoute.objects
        .select_related('conductor')
        .filter(bus_number__icontains=bus_number.strip())
        .order_by('-started_at')
    )
