import pytest
from decimal import Decimal
from unittest.mock import patch
from django.urls import reverse
from rest_framework import status
from apps.fares.models import Discount


@pytest.mark.django_db
class TestDiscountAPI:
    """Tests for /api/fares/discounts/"""

    def test_passenger_can_list(self, passenger_client, student_discount):
        response = passenger_client.get(reverse('fares:discount-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['passenger_type'] == 'Student'

    def test_passenger_cannot_create(self, passenger_client):
        response = passenger_client.post(reverse('fares:discount-list'), {
            'passenger_type': 'Student',
            'discount_percentage': '20',
        })

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_conductor_creates_discount(self, conductor_client):
        response = conductor_client.post(reverse('fares:discount-list'), {
            'passenger_type': 'Senior citizen',
            'discount_percentage': '20',
            'description': 'Senior discount',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert Discount.objects.filter(passenger_type='Senior citizen').exists()

    def test_duplicate_rejected(self, conductor_client, student_discount):
        response = conductor_client.post(reverse('fares:discount-list'), {
            'passenger_type': 'Student',
            'discount_percentage': '10',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_percentage_over_100_rejected(self, conductor_client):
        response = conductor_client.post(reverse('fares:discount-list'), {
            'passenger_type': 'Student',
            'discount_percentage': '150',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_conductor_toggles_discount(self, conductor_client, student_discount):
        url = reverse('fares:discount-detail', args=[student_discount.id])
        response = conductor_client.patch(url, {'is_active': False}, format='json')

        assert response.status_code == status.HTTP_200_OK
        student_discount.refresh_from_db()
        assert student_discount.is_active is False

    def test_conductor_deletes_discount(self, conductor_client, student_discount):
        url = reverse('fares:discount-detail', args=[student_discount.id])
        response = conductor_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Discount.objects.exists()


@pytest.mark.django_db
class TestFareQuoteAPI:
    """Tests for POST /api/fares/quote/"""

    def test_quote_by_kilometer(self, passenger_client, student_discount):
        response = passenger_client.post(reverse('fares:quote'), {
            'kilometer': '10',
            'passenger_type': 'Student',
        })

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(response.data['fare']) == Decimal('24.00')

    def test_quote_by_locations(self, passenger_client):
        distance = {'distance_km': 4.0, 'duration_seconds': 600, 'status': 'OK'}
        with patch('apps.fares.views.calculate_distance', return_value=distance):
            response = passenger_client.post(reverse('fares:quote'), {
                'origin': 'Cubao',
                'destination': 'Quiapo',
            })

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(response.data['fare']) == Decimal('18.00')

    def test_quote_distance_unavailable(self, passenger_client):
        distance = {'distance_km': 0.0, 'duration_seconds': 0, 'status': 'ERROR'}
        with patch('apps.fares.views.calculate_distance', return_value=distance):
            response = passenger_client.post(reverse('fares:quote'), {
                'origin': 'Nowhere',
                'destination': 'Elsewhere',
            })

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_quote_requires_distance_input(self, passenger_client):
        response = passenger_client.post(reverse('fares:quote'), {'passenger_type': 'Regular'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_quote_requires_auth(self, api_client):
        response = api_client.post(reverse('fares:quote'), {'kilometer': '5'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestPlacesAPI:

    def test_places_gateway_error(self, passenger_client):
        from apps.fares.services import GoogleMapsError
        with patch('apps.fares.views.autocomplete_places', side_effect=GoogleMapsError('down')):
            response = passenger_client.get(reverse('fares:places'), {'q': 'Cubao'})

        assert response.status_code == status.HTTP_502_BAD_GATEWAY

    def test_places_results(self, passenger_client):
        results = [{'description': 'Cubao', 'place_id': 'p1'}]
        with patch('apps.fares.views.autocomplete_places', return_value=results):
            response = passenger_client.get(reverse('fares:places'), {'q': 'Cub'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['place_id'] == 'p1'
