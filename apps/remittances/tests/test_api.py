import uuid

import pytest
from django.urls import reverse
from rest_framework import status

from apps.remittances.models import CashRemittance, RemittanceStatus


@pytest.mark.django_db
class TestConductorRemittances:

    def test_submit(self, conductor_client, route_with_fares):
        response = conductor_client.post(reverse('remittances:remittance-list'), {
            'route_id': str(route_with_fares.id),
            'amount': '50.00',
            'notes': 'Morning run',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == 'pending'
        assert response.data['bus_number'] == 'ABC123'

    def test_submit_duplicate_pending(self, conductor_client, route_with_fares):
        url = reverse('remittances:remittance-list')
        conductor_client.post(url, {'route_id': str(route_with_fares.id), 'amount': '50.00'})
        response = conductor_client.post(url, {'route_id': str(route_with_fares.id), 'amount': '10.00'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_submit_for_unknown_route(self, conductor_client):
        response = conductor_client.post(reverse('remittances:remittance-list'), {
            'route_id': str(uuid.uuid4()),
            'amount': '50.00',
        })

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_submit_zero_amount(self, conductor_client, route):
        response = conductor_client.post(reverse('remittances:remittance-list'), {
            'route_id': str(route.id),
            'amount': '0.00',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_submit_without_cash_fares(self, conductor_client, route):
        response = conductor_client.post(reverse('remittances:remittance-list'), {
            'route_id': str(route.id),
            'amount': '20.00',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Bus ABC123 has no unremitted cash fares'
        assert not CashRemittance.objects.exists()

    def test_history_paginated(self, conductor_client, route_with_fares):
        conductor_client.post(reverse('remittances:remittance-list'), {
            'route_id': str(route_with_fares.id),
            'amount': '50.00',
        })

        response = conductor_client.get(reverse('remittances:remittance-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1

    def test_bus_summaries(self, conductor_client, route_with_fares):
        response = conductor_client.get(reverse('remittances:bus-summaries'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['unremitted_cash'] == '50.00'
        assert response.data[0]['can_remit'] is True

    def test_total(self, conductor_client, conductor):
        response = conductor_client.get(reverse('remittances:total'))

        assert response.data == {'total_remitted': '0.00'}

    def test_conductor_cannot_verify(self, conductor_client, route_with_fares, conductor):
        remittance = CashRemittance.objects.create(
            route=route_with_fares, bus_number='ABC123', conductor=conductor, amount='50.00'
        )

        response = conductor_client.post(reverse('remittances:verify', args=[remittance.id]))

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestStaffRemittances:

    def test_pending_list(self, staff_client, route_with_fares, conductor):
        CashRemittance.objects.create(
            route=route_with_fares, bus_number='ABC123', conductor=conductor, amount='50.00'
        )

        response = staff_client.get(reverse('remittances:pending'))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1

    def test_verify(self, staff_client, route_with_fares, conductor):
        remittance = CashRemittance.objects.create(
            route=route_with_fares, bus_number='ABC123', conductor=conductor, amount='50.00'
        )

        response = staff_client.post(reverse('remittances:verify', args=[remittance.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['verified_by']['username'] == 'operator'
        remittance.refresh_from_db()
        assert remittance.status == RemittanceStatus.REMITTED

    def test_verify_unknown(self, staff_client):
        response = staff_client.post(reverse('remittances:verify', args=[uuid.uuid4()]))

        assert response.status_code == status.HTTP_404_NOT_FOUND
