from unittest.mock import MagicMock


def paymongo_response(payload, ok=True, status_code=200):
    """Fake requests.Response for the PayMongo client."""
    response = MagicMock()
    response.ok = ok
    response.status_code = status_code
    response.json.return_value = payload
    return response


def payment_link(status='unpaid', link_id='link_abc123'):
    return {
        'data': {
            'id': link_id,
            'type': 'link',
            'attributes': {
                'amount': 15000,
                'checkout_url': f'https://pm.link/test/{link_id}',
                'reference_number': 'REF9X2',
                'status': status,
            },
        }
    }
