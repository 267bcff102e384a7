import uuid

import pytest
from django.urls import reverse
from rest_framework import status

from apps.inspections.models import InspectionRecord


@pytest.mark.django_db
class TestInspectionApi:

    def test_search_buses(self, inspector_client, bus):
        response = inspector_client.get(reverse('inspections:bus-search'), {'bus_number': 'xyz'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['bus_number'] == 'XYZ789'
        assert response.data[0]['conductor_name'] == 'Pedro Santos'

    def test_search_requires_bus_number(self, inspector_client):
        response = inspector_client.get(reverse('inspections:bus-search'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_conductor_forbidden(self, conductor_client, bus):
        response = conductor_client.get(reverse('inspections:bus-search'), {'bus_number': 'xyz'})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_bus_passengers(self, inspector_client, bus_with_passengers):
        response = inspector_client.get(reverse('inspections:bus-passengers', args=[bus_with_passengers.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['bus']['bus_number'] == 'XYZ789'
        assert len(response.data['passengers']) == 2

    def test_bus_passengers_unknown_bus(self, inspector_client):
        response = inspector_client.get(reverse('inspections:bus-passengers', args=[uuid.uuid4()]))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_clear_bus(self, inspector_client, bus_with_passengers):
        response = inspector_client.post(
            reverse('inspections:bus-clear', args=[bus_with_passengers.id]),
            {'notes': 'OK'},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['passenger_count'] == 2
        assert response.data['status'] == 'cleared'
        assert InspectionRecord.objects.count() == 1

    def test_flag_bus(self, inspector_client, bus):
        response = inspector_client.post(
            reverse('inspections:bus-clear', args=[bus.id]),
            {'status': 'flagged', 'notes': 'Passenger without ticket'},
        )

        assert response.data['status'] == 'flagged'

    def test_history_and_stats(self, inspector_client, bus):
        inspector_client.post(reverse('inspections:bus-clear', args=[bus.id]))

        history = inspector_client.get(reverse('inspections:history'))
        stats = inspector_client.get(reverse('inspections:stats'))

        assert len(history.data) == 1
        assert stats.data['total_cleared'] == 1
