"""
PayMongo REST client.

Only payment links are used: a link is created for each cash-in and polled
until PayMongo reports it paid.

See Also:
    https://developers.paymongo.com/reference/links-resource
"""

import base64
import logging
from decimal import Decimal, ROUND_HALF_UP

import requests
from django.conf import settings

from .exceptions import PayMongoError

logger = logging.getLogger(__name__)

# Minimum amount PayMongo accepts for a payment link, in PHP
PAYMONGO_MIN_AMOUNT = Decimal('100')

LINK_STATUS_PAID = 'paid'
LINK_STATUS_UNPAID = 'unpaid'


def _authorization_header() -> str:
    secret_key = settings.PAYMONGO_SECRET_KEY
    if not secret_key:
        logger.error("PayMongo secret key is missing")
        raise PayMongoError("Payment configuration error")

    token = base64.b64encode(f"{secret_key}:".encode()).decode()
    return f"Basic {token}"


def to_centavos(amount) -> int:
    return int((Decimal(str(amount)) * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def _request(method: str, path: str, **kwargs) -> dict:
    headers = {
        'accept': 'application/json',
        'authorization': _authorization_header(),
    }
    try:
        response = requests.request(
            method,
            f"{settings.PAYMONGO_API_URL}{path}",
            headers=headers,
            timeout=settings.EXTERNAL_REQUEST_TIMEOUT,
            **kwargs
        )
        data = response.json()
    except requests.RequestException as e:
        logger.error("PayMongo %s %s failed: %s", method, path, e)
        raise PayMongoError("Payment service is unavailable")
    except ValueError:
        raise PayMongoError(f"Unexpected response from payment service ({response.status_code})")

    if data.get('errors'):
        detail = data['errors'][0].get('detail') or 'Payment request failed'
        logger.warning("PayMongo %s %s rejected: %s", method, path, detail)
        raise PayMongoError(detail)

    if not response.ok:
        raise PayMongoError(f"Payment service returned HTTP {response.status_code}")

    return data


def create_payment_link(*, amount, description: str, remarks: str = "") -> dict:
    """
    Create a PayMongo payment link.

    Args:
        amount: Amount in PHP, at least PAYMONGO_MIN_AMOUNT
        description: Shown on the checkout page
        remarks: Internal note stored with the link

    Returns:
        The link resource (``data`` object of the response), including
        ``id`` and ``attributes.checkout_url``

    Raises:
        PayMongoError: On validation or gateway failure
    """
    if Decimal(str(amount)) < PAYMONGO_MIN_AMOUNT:
        raise PayMongoError(
            f"The minimum amount for PayMongo Links is PHP {PAYMONGO_MIN_AMOUNT:.2f}"
        )

    payload = {
        'data': {
            'attributes': {
                'amount': to_centavos(amount),
                'description': description,
                'remarks': remarks or 'Payment from mobile app',
            }
        }
    }
    return _request('POST', '/links', json=payload)['data']


def get_payment_link(*, link_id: str) -> dict:
    """
    Fetch a payment link to check whether it was paid.

    Returns:
        The link resource; ``attributes.status`` is ``paid`` or ``unpaid``
    """
    return _request('GET', f'/links/{link_id}')['data']
