"""
Wallet QR code parsing.

Accepted payloads:
- JSON ``{"userId": "...", "name": "..."}`` (what the wallet QR encodes)
- URL with ``userId`` and ``name`` query parameters
- ``user_<uuid>`` or ``auth_<uuid>``
- a bare user UUID
"""

import json
import uuid
from urllib.parse import urlparse, parse_qs

from .exceptions import InvalidQRCodeError

UNKNOWN_NAME = 'Unknown User'
ID_PREFIXES = ('user_', 'auth_')


def _to_uuid(value) -> uuid.UUID:
    try:
        return uuid.UUID(str(value).strip())
    except (ValueError, AttributeError):
        raise InvalidQRCodeError("QR code does not contain a valid wallet id")


def _from_json(raw: str):
    try:
        data = json.loads(raw)
    except ValueError:
        return None
    if isinstance(data, dict) and data.get('userId'):
        return data['userId'], data.get('name')
    return None


def _from_url(raw: str):
    if '?' not in raw:
        return None
    params = parse_qs(urlparse(raw).query)
    user_id = params.get('userId', [None])[0]
    if user_id:
        return user_id, params.get('name', [None])[0]
    return None


def parse_qr_data(raw: str) -> dict:
    """
    Extract the wallet owner from scanned QR data.

    Returns:
        dict with ``user_id`` (UUID) and ``name``

    Raises:
        InvalidQRCodeError: If the payload matches no known format
    """
    raw = (raw or '').strip()
    if not raw:
        raise InvalidQRCodeError("QR code is empty")

    parsed = _from_json(raw) or _from_url(raw)
    if parsed is None:
        value = raw
        for prefix in ID_PREFIXES:
            if raw.startswith(prefix):
                value = raw[len(prefix):]
                break
        parsed = (value, None)

    user_id, name = parsed
    return {
        'user_id': _to_uuid(user_id),
        'name': name or UNKNOWN_NAME,
    }
