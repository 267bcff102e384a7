import pytest
from decimal import Decimal
from unittest.mock import patch
from django.urls import reverse
from rest_framework import status

from apps.wallet.models import Transaction, TransactionType
from apps.wallet.services import send_money
from apps.wallet.services.exceptions import PayMongoError

from .helpers import paymongo_response, payment_link


@pytest.mark.django_db
class TestBalance:

    def test_requires_auth(self, api_client):
        response = api_client.get(reverse('wallet:balance'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_balance(self, alice_client, funded_alice):
        response = alice_client.get(reverse('wallet:balance'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['balance'] == '500.00'
        assert response.data['currency'] == 'PHP'


@pytest.mark.django_db
class TestTransactions:

    def test_list_own_transactions(self, alice_client, funded_alice, bob):
        send_money(sender=funded_alice, recipient_identifier='bob', amount=20)

        response = alice_client.get(reverse('wallet:transaction-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2
        assert response.data['results'][0]['type'] == TransactionType.SEND
        assert response.data['results'][0]['counterparty']['username'] == 'bob'

    def test_filter_by_type(self, alice_client, funded_alice, bob):
        send_money(sender=funded_alice, recipient_identifier='bob', amount=20)

        response = alice_client.get(reverse('wallet:transaction-list'), {'type': 'CASH_IN'})

        assert response.data['count'] == 1

    def test_detail_by_transaction_id(self, alice_client, funded_alice):
        txn = Transaction.objects.get(user=funded_alice)

        response = alice_client.get(reverse('wallet:transaction-detail', args=[txn.transaction_id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['balance_after'] == '500.00'

    def test_cannot_view_others_transaction(self, bob_client, funded_alice):
        txn = Transaction.objects.get(user=funded_alice)

        response = bob_client.get(reverse('wallet:transaction-detail', args=[txn.transaction_id]))

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestSendMoney:

    def test_send(self, alice_client, funded_alice, bob):
        response = alice_client.post(reverse('wallet:send'), {'recipient': 'bob', 'amount': '75.25'})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['balance'] == Decimal('424.75')

    def test_insufficient_balance(self, bob_client, alice):
        response = bob_client.post(reverse('wallet:send'), {'recipient': 'alice', 'amount': '1'})

        assert response.status_code == status.HTTP_402_PAYMENT_REQUIRED
        assert response.data['balance'] == Decimal('0.00')

    def test_unknown_recipient(self, alice_client, funded_alice):
        response = alice_client.post(reverse('wallet:send'), {'recipient': 'ghost', 'amount': '1'})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_self_transfer(self, alice_client, funded_alice):
        response = alice_client.post(reverse('wallet:send'), {'recipient': 'alice', 'amount': '1'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestCashInOut:

    def test_cash_in_returns_checkout_url(self, alice_client, alice):
        with patch('apps.wallet.services.paymongo.requests.request',
                   return_value=paymongo_response(payment_link())):
            response = alice_client.post(reverse('wallet:cash-in'), {'amount': '200'})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['checkout_url'].startswith('https://pm.link/')
        assert response.data['transaction']['status'] == 'PENDING'

    def test_cash_in_below_minimum(self, alice_client, alice):
        response = alice_client.post(reverse('wallet:cash-in'), {'amount': '50'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_cash_in_gateway_down(self, alice_client, alice):
        with patch('apps.wallet.views.create_cash_in', side_effect=PayMongoError('Payment service is unavailable')):
            response = alice_client.post(reverse('wallet:cash-in'), {'amount': '200'})

        assert response.status_code == status.HTTP_502_BAD_GATEWAY

    def test_verify_unknown_cash_in(self, alice_client, alice):
        response = alice_client.post(reverse('wallet:cash-in-verify', args=['txn_missing']))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_cash_out(self, alice_client, funded_alice):
        response = alice_client.post(reverse('wallet:cash-out'), {
            'amount': '100',
            'method': 'gcash',
            'account_number': '09171234567',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['balance'] == Decimal('400.00')

    def test_cash_out_over_balance(self, alice_client, funded_alice):
        response = alice_client.post(reverse('wallet:cash-out'), {
            'amount': '900',
            'method': 'bank',
            'account_number': '001234',
        })

        assert response.status_code == status.HTTP_402_PAYMENT_REQUIRED


@pytest.mark.django_db
class TestQrAndNotifications:

    def test_wallet_qr_png(self, alice_client, alice):
        response = alice_client.get(reverse('wallet:qr'))

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'] == 'image/png'
        assert response.content.startswith(b'\x89PNG')

    def test_notifications_flow(self, bob_client, funded_alice, bob):
        send_money(sender=funded_alice, recipient_identifier='bob', amount=20)

        response = bob_client.get(reverse('wallet:notification-unread-count'))
        assert response.data == {'unread': 1}

        response = bob_client.get(reverse('wallet:notification-list'))
        notification_id = response.data['results'][0]['id']
        assert response.data['results'][0]['title'] == 'Money Received'

        response = bob_client.post(reverse('wallet:notification-read', args=[notification_id]))
        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_read'] is True

    def test_read_unknown_notification(self, bob_client, bob):
        response = bob_client.post(reverse('wallet:notification-read', args=['not-a-uuid']))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_read_all(self, bob_client, funded_alice, bob):
        send_money(sender=funded_alice, recipient_identifier='bob', amount=20)

        response = bob_client.post(reverse('wallet:notification-read-all'))

        assert response.data == {'unread': 0}
