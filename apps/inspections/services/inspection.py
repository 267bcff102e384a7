"""
Bus inspection service.

Inspectors look up a bus, compare the passengers on board with the fares
recorded for the route, and clear or flag it.
"""

import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db.models import Count, Max, Q, QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.inspections.models import InspectionRecord, InspectionStatus
from apps.routes.models import BusRoute
from apps.routes.services import search_buses as search_routes
from apps.trips.models import Trip

from .exceptions import BusNotFoundError

logger = logging.getLogger(__name__)


def search_buses(*, bus_number: str) -> QuerySet:
    """Routes matching a bus number, newest first."""
    return search_routes(bus_number=bus_number)


def get_bus(*, route_id: UUID) -> BusRoute:
    try:
        return BusRoute.objects.select_related('conductor').get(id=route_id)
    except (BusRoute.DoesNotExist, ValidationError):
        raise BusNotFoundError(f"Bus {route_id} not found")


def get_bus_passengers(*, route: BusRoute) -> QuerySet:
    """Trips recorded on the route within the passenger window."""
    since = timezone.now() - timedelta(hours=settings.TRIP_PASSENGER_WINDOW_HOURS)
    return (
        Trip.objects
        .filter(route=route, created_at__gte=since)
        .order_by('-created_at')
    )


def mark_bus_cleared(
    *,
    inspector: User,
    route: BusRoute,
    origin: Optional[str] = None,
    destination: Optional[str] = None,
    status: str = InspectionStatus.CLEARED,
    notes: str = ""
) -> InspectionRecord:
    """
    Record an inspection of a bus.

    Args:
        inspector: Inspector on board
        route: Route being inspected
        origin: Where the inspector boarded, defaults to the route origin
        destination: Where the inspector left, defaults to the route destination
        status: cleared or flagged
        notes: Free-form remarks

    Returns:
        Saved InspectionRecord with the passenger count at this moment
    """
    record = InspectionRecord.objects.create(
        inspector=inspector,
        route=route,
        bus_number=route.bus_number,
        conductor=route.conductor,
        conductor_name=route.conductor_name,
        origin=origin or route.origin,
        destination=destination or route.destination,
        passenger_count=get_bus_passengers(route=route).count(),
        status=status,
        notes=notes,
    )
    logger.info(
        "Inspector %s marked bus %s %s (%d passengers)",
        inspector.id, record.bus_number, record.status, record.passenger_count
    )
    return record


def get_inspection_history(*, inspector: User) -> QuerySet:
    return InspectionRecord.objects.filter(inspector=inspector).order_by('-inspected_at')


def get_inspector_stats(*, inspector: User) -> dict:
    return InspectionRecord.objects.filter(inspector=inspector).aggregate(
        total_inspections=Count('id'),
        total_cleared=Count('id', filter=Q(status=InspectionStatus.CLEARED)),
        total_flagged=Count('id', filter=Q(status=InspectionStatus.FLAGGED)),
        last_active=Max('inspected_at'),
    )
