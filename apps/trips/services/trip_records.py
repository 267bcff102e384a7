"""Trip recording, history and conductor statistics."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from django.db import transaction
from django.db.models import Count, Max, Q, QuerySet, Sum

from apps.accounts.models import User, UserRole
from apps.fares.services import calculate_fare
from apps.routes.services import get_active_route, NoActiveRouteError
from apps.trips.models import PaymentMethod, Trip

from .exceptions import TripNotFoundError

logger = logging.getLogger(__name__)


@transaction.atomic
def record_cash_trip(
    *,
    conductor: User,
    passenger_name: str,
    origin: str,
    destination: str,
    kilometer,
    passenger_type: str = "Regular",
    photo=None
) -> Trip:
    """
    Record a fare paid in cash on the conductor's active route.

    Args:
        conductor: Conductor collecting the fare
        passenger_name: Name given by the passenger
        origin: Boarding point
        destination: Drop-off point
        kilometer: Distance travelled
        passenger_type: Discount category
        photo: Optional passenger photo (uploaded file)

    Returns:
        Saved Trip

    Raises:
        NoActiveRouteError: If the conductor has not started a route
        InvalidDistanceError: If kilometer is not positive
    """
    route = get_active_route(conductor=conductor)
    if route is None:
        raise NoActiveRouteError("Start a route before collecting fares")

    quote = calculate_fare(kilometer=kilometer, passenger_type=passenger_type)

    trip = Trip(
        conductor=conductor,
        passenger_name=passenger_name.strip() or 'Unknown Passenger',
        passenger_type=passenger_type,
        route=route,
        origin=origin.strip(),
        destination=destination.strip(),
        kilometer=quote['kilometer'],
        fare=quote['fare'],
        payment_method=PaymentMethod.CASH,
    )
    if photo:
        trip.passenger_photo = photo
    trip.save()

    logger.info("Cash trip #%s recorded by %s for %s", trip.transaction_number, conductor.id, trip.fare)
    return trip


def list_trips(
    *,
    user: User,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> QuerySet:
    """
    Trip history, newest first.

    Conductors see trips they recorded, everyone else their own rides.
    Both ends of the date range are inclusive whole days.
    """
    if user.role == UserRole.CONDUCTOR:
        queryset = Trip.objects.filter(conductor=user)
    else:
        queryset = Trip.objects.filter(passenger=user)

    if start_date:
        queryset = queryset.filter(created_at__date__gte=start_date)
    if end_date:
        queryset = queryset.filter(created_at__date__lte=end_date)

    return queryset.select_related('conductor', 'route', 'transaction').order_by('-created_at')


def get_trip(*, user: User, transaction_number: str) -> Trip:
    try:
        return (
            Trip.objects
            .select_related('conductor', 'route', 'transaction')
            .get(Q(conductor=user) | Q(passenger=user), transaction_number=transaction_number)
        )
    except Trip.DoesNotExist:
        raise TripNotFoundError(f"Trip #{transaction_number} not found")


def get_conductor_stats(*, conductor: User) -> dict:
    """
    Totals for the conductor profile screen.

    ``total_trips`` counts distinct origin/destination pairs,
    ``total_passengers`` counts individual fares.
    """
    trips = Trip.objects.filter(conductor=conductor)

    totals = trips.aggregate(
        total_passengers=Count('id'),
        total_revenue=Sum('fare'),
        cash_revenue=Sum('fare', filter=Q(payment_method=PaymentMethod.CASH)),
        qr_revenue=Sum('fare', filter=Q(payment_method=PaymentMethod.QR)),
        last_active=Max('created_at'),
    )
    distinct_routes = trips.order_by().values('origin', 'destination').distinct().count()

    zero = Decimal('0.00')
    return {
        'total_trips': distinct_routes,
        'total_passengers': totals['total_passengers'],
        'total_revenue': totals['total_revenue'] or zero,
        'cash_revenue': totals['cash_revenue'] or zero,
        'qr_revenue': totals['qr_revenue'] or zero,
        'last_active': totals['last_active'],
    }
