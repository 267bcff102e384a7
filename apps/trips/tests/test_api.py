import json

import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status

from apps.accounts.services import verify_pin
from apps.fares.models import Discount
from apps.trips.models import PaymentRequest, PaymentRequestStatus, Trip
from apps.trips.services import record_cash_trip

from .helpers import make_photo


@pytest.mark.django_db
class TestPaymentRequestApi:

    def test_conductor_creates_from_qr(self, conductor_client, passenger, active_route):
        response = conductor_client.post(reverse('trips:payment-request-list'), {
            'qr_data': json.dumps({'userId': str(passenger.id), 'name': 'Maria Clara'}),
            'origin': 'Cubao',
            'destination': 'Ortigas',
            'kilometer': '5',
            'passenger_type': 'Regular',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['fare'] == '20.00'
        assert response.data['bus_number'] == 'ABC123'
        assert response.data['passenger']['username'] == 'maria'

    def test_passenger_cannot_create(self, passenger_client, passenger):
        response = passenger_client.post(reverse('trips:payment-request-list'), {
            'passenger_id': str(passenger.id),
            'origin': 'A',
            'destination': 'B',
            'kilometer': '2',
        })

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_invalid_qr(self, conductor_client, active_route):
        response = conductor_client.post(reverse('trips:payment-request-list'), {
            'qr_data': 'not a wallet',
            'origin': 'A',
            'destination': 'B',
            'kilometer': '2',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_no_active_route(self, conductor_client, passenger):
        response = conductor_client.post(reverse('trips:payment-request-list'), {
            'passenger_id': str(passenger.id),
            'origin': 'A',
            'destination': 'B',
            'kilometer': '2',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_conductor_wallet_cannot_be_charged(self, conductor_client, other_conductor, active_route):
        response = conductor_client.post(reverse('trips:payment-request-list'), {
            'passenger_id': str(other_conductor.id),
            'origin': 'A',
            'destination': 'B',
            'kilometer': '2',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Only passenger wallets can be charged'

    def test_free_ride_is_not_charged(self, conductor_client, passenger, active_route):
        Discount.objects.create(passenger_type='Student', discount_percentage=Decimal('100'))

        response = conductor_client.post(reverse('trips:payment-request-list'), {
            'passenger_id': str(passenger.id),
            'origin': 'Cubao',
            'destination': 'Ortigas',
            'kilometer': '5',
            'passenger_type': 'Student',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not PaymentRequest.objects.exists()

    def test_passenger_lists_pending(self, passenger_client, pending_request):
        response = passenger_client.get(reverse('trips:payment-request-list'), {'status': 'pending'})

        assert response.status_code == status.HTTP_200_OK
        assert [r['id'] for r in response.data] == [str(pending_request.id)]

    def test_approve(self, passenger_client, passenger, pending_request):
        token = verify_pin(user=passenger, pin='1234')

        response = passenger_client.post(
            reverse('trips:payment-request-approve', args=[pending_request.id]),
            {'pin_token': token},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == PaymentRequestStatus.COMPLETED
        assert response.data['transaction_id'].startswith('txn_')

    def test_approve_without_pin(self, passenger_client, pending_request):
        response = passenger_client.post(
            reverse('trips:payment-request-approve', args=[pending_request.id]),
            {'pin_token': 'forged'},
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_approve_insufficient_balance(self, passenger_client, passenger, conductor_client, active_route):
        created = conductor_client.post(reverse('trips:payment-request-list'), {
            'passenger_id': str(passenger.id),
            'origin': 'Cubao',
            'destination': 'Tagaytay',
            'kilometer': '60',
        })
        token = verify_pin(user=passenger, pin='1234')

        response = passenger_client.post(
            reverse('trips:payment-request-approve', args=[created.data['id']]),
            {'pin_token': token},
        )

        assert response.status_code == status.HTTP_402_PAYMENT_REQUIRED
        assert response.data['balance'] == Decimal('100.00')

    def test_approve_zero_fare(self, passenger_client, passenger, pending_request):
        PaymentRequest.objects.filter(id=pending_request.id).update(fare=Decimal('0.00'))
        token = verify_pin(user=passenger, pin='1234')

        response = passenger_client.post(
            reverse('trips:payment-request-approve', args=[pending_request.id]),
            {'pin_token': token},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        pending_request.refresh_from_db()
        assert pending_request.status == PaymentRequestStatus.DECLINED

    def test_decline_and_retrieve(self, passenger_client, pending_request):
        response = passenger_client.post(reverse('trips:payment-request-decline', args=[pending_request.id]))
        assert response.status_code == status.HTTP_200_OK

        response = passenger_client.get(reverse('trips:payment-request-detail', args=[pending_request.id]))
        assert response.data['status'] == PaymentRequestStatus.DECLINED

    def test_cancel(self, conductor_client, pending_request):
        response = conductor_client.post(reverse('trips:payment-request-cancel', args=[pending_request.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == PaymentRequestStatus.DECLINED

    def test_unknown_request(self, passenger_client):
        response = passenger_client.get(reverse('trips:payment-request-detail', args=['missing']))

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestTripApi:

    def test_record_cash_trip_with_photo(self, conductor_client, active_route, settings, tmp_path):
        settings.MEDIA_ROOT = str(tmp_path)
        response = conductor_client.post(reverse('trips:trip-cash'), {
            'passenger_name': 'Walk-in',
            'origin': 'Cubao',
            'destination': 'Ortigas',
            'kilometer': '5',
            'passenger_type': 'Regular',
            'photo': make_photo(),
        }, format='multipart')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['payment_method'] == 'Cash'
        assert response.data['fare'] == '20.00'
        assert 'passenger_photos/' in response.data['passenger_photo']

    def test_passenger_cannot_record_cash_trip(self, passenger_client):
        response = passenger_client.post(reverse('trips:trip-cash'), {
            'passenger_name': 'x',
            'origin': 'A',
            'destination': 'B',
            'kilometer': '1',
        })

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_history_and_detail(self, conductor_client, conductor, active_route):
        trip = record_cash_trip(
            conductor=conductor,
            passenger_name='Walk-in',
            origin='A',
            destination='B',
            kilometer=3,
        )

        response = conductor_client.get(reverse('trips:trip-list'))
        assert response.data['count'] == 1

        response = conductor_client.get(reverse('trips:trip-detail', args=[trip.transaction_number]))
        assert response.status_code == status.HTTP_200_OK
        assert response.data['bus_number'] == 'ABC123'

    def test_invalid_date_range(self, conductor_client):
        response = conductor_client.get(reverse('trips:trip-list'), {
            'start_date': '2025-02-01',
            'end_date': '2025-01-01',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_passenger_history_shows_own_rides(self, passenger_client, passenger, pending_request):
        token = verify_pin(user=passenger, pin='1234')
        passenger_client.post(
            reverse('trips:payment-request-approve', args=[pending_request.id]),
            {'pin_token': token},
        )

        response = passenger_client.get(reverse('trips:trip-list'))

        assert response.data['count'] == 1
        assert response.data['results'][0]['payment_method'] == 'QR'
        assert Trip.objects.count() == 1

    def test_stats(self, conductor_client, conductor, active_route):
        record_cash_trip(conductor=conductor, passenger_name='A', origin='A', destination='B', kilometer=5)

        response = conductor_client.get(reverse('trips:trip-stats'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_passengers'] == 1
        assert response.data['cash_revenue'] == '20.00'

    def test_parse_qr(self, passenger_client, passenger):
        response = passenger_client.post(reverse('trips:parse-qr'), {'qr_data': f'user_{passenger.id}'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user_id'] == str(passenger.id)

    def test_parse_qr_invalid(self, passenger_client):
        response = passenger_client.post(reverse('trips:parse-qr'), {'qr_data': 'nonsense'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
