"""
Service layer unit tests for inspections app.

Tests cover:
- Passenger window on a bus
- Inspection snapshots and inspector stats
"""

import uuid

import pytest
from datetime import timedelta
from django.utils import timezone

from apps.inspections.models import InspectionStatus
from apps.inspections.services import (
    search_buses,
    get_bus,
    get_bus_passengers,
    mark_bus_cleared,
    get_inspection_history,
    get_inspector_stats,
)
from apps.inspections.services.exceptions import BusNotFoundError
from apps.routes.models import BusRoute
from apps.trips.models import Trip


@pytest.mark.django_db
class TestBusLookup:

    def test_search_is_partial_and_case_insensitive(self, bus):
        assert list(search_buses(bus_number='xyz')) == [bus]
        assert list(search_buses(bus_number='nope')) == []

    def test_unknown_bus(self, db):
        with pytest.raises(BusNotFoundError):
            get_bus(route_id=uuid.uuid4())

    def test_missing_conductor_name_falls_back(self, bus, conductor):
        conductor.first_name = ''
        conductor.last_name = ''
        conductor.save()

        assert get_bus(route_id=bus.id).conductor_name == 'conductor'

    def test_passengers_within_window(self, bus_with_passengers, settings):
        settings.TRIP_PASSENGER_WINDOW_HOURS = 24
        old = Trip.objects.filter(passenger_name='Ana')
        old.update(created_at=timezone.now() - timedelta(hours=25))

        passengers = get_bus_passengers(route=bus_with_passengers)

        assert [t.passenger_name for t in passengers] == ['Ben']


@pytest.mark.django_db
class TestInspections:

    def test_clear_snapshots_bus(self, inspector, bus_with_passengers):
        record = mark_bus_cleared(inspector=inspector, route=bus_with_passengers, notes='All paid')

        assert record.status == InspectionStatus.CLEARED
        assert record.passenger_count == 2
        assert record.bus_number == 'XYZ789'
        assert record.conductor_name == 'Pedro Santos'
        assert record.origin == 'Cubao'

    def test_snapshot_survives_route_changes(self, inspector, bus):
        record = mark_bus_cleared(inspector=inspector, route=bus, origin='EDSA', destination='Pasay')
        BusRoute.objects.filter(id=bus.id).update(bus_number='NEW001')

        record.refresh_from_db()
        assert record.bus_number == 'XYZ789'
        assert (record.origin, record.destination) == ('EDSA', 'Pasay')

    def test_history_and_stats(self, inspector, bus):
        first = mark_bus_cleared(inspector=inspector, route=bus)
        second = mark_bus_cleared(inspector=inspector, route=bus, status=InspectionStatus.FLAGGED)

        assert list(get_inspection_history(inspector=inspector)) == [second, first]

        stats = get_inspector_stats(inspector=inspector)
        assert stats['total_inspections'] == 2
        assert stats['total_cleared'] == 1
        assert stats['total_flagged'] == 1
        assert stats['last_active'] == second.inspected_at

    def test_stats_empty(self, inspector):
        stats = get_inspector_stats(inspector=inspector)

        assert stats['total_inspections'] == 0
        assert stats['last_active'] is None
