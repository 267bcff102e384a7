"""
Google Maps client for trip distances and place lookup.

Distance lookups never raise: callers get a zero result with status ERROR
so the conductor can fall back to entering kilometers by hand.
"""

import logging

import requests
from django.conf import settings

from .exceptions import GoogleMapsError

logger = logging.getLogger(__name__)

STATUS_OK = 'OK'
STATUS_ZERO_RESULTS = 'ZERO_RESULTS'
STATUS_ERROR = 'ERROR'


def _distance_result(status, distance_km=0.0, duration_seconds=0):
    return {
        'distance_km': distance_km,
        'duration_seconds': duration_seconds,
        'status': status,
    }


def calculate_distance(*, origin: str, destination: str) -> dict:
    """
    Driving distance between two places via the Distance Matrix API.

    Args:
        origin: Free-text origin (place name or address)
        destination: Free-text destination

    Returns:
        dict with distance_km (float), duration_seconds (int) and status
        (OK, ZERO_RESULTS or ERROR)
    """
    if not settings.GOOGLE_MAPS_API_KEY:
        logger.error("Google Maps API key is missing")
        return _distance_result(STATUS_ERROR)

    try:
        response = requests.get(
            f"{settings.GOOGLE_MAPS_API_URL}/distancematrix/json",
            params={
                'origins': origin,
                'destinations': destination,
                'key': settings.GOOGLE_MAPS_API_KEY,
            },
            timeout=settings.EXTERNAL_REQUEST_TIMEOUT,
        )
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.error("Distance lookup %r -> %r failed: %s", origin, destination, e)
        return _distance_result(STATUS_ERROR)

    rows = data.get('rows') or []
    element = (rows[0].get('elements') or [{}])[0] if rows else {}

    if data.get('status') == STATUS_OK and element.get('status') == STATUS_OK:
        return _distance_result(
            STATUS_OK,
            distance_km=element['distance']['value'] / 1000,
            duration_seconds=element['duration']['value'],
        )

    if STATUS_ZERO_RESULTS in (data.get('status'), element.get('status')):
        return _distance_result(STATUS_ZERO_RESULTS)

    logger.error("Unexpected Distance Matrix response: %s", data)
    return _distance_result(STATUS_ERROR)


def autocomplete_places(*, text: str, country: str = 'ph') -> list:
    """
    Place suggestions for a partially typed location.

    Returns:
        list of {'description', 'place_id'}

    Raises:
        GoogleMapsError: If the API key is missing or the request fails
    """
    if not settings.GOOGLE_MAPS_API_KEY:
        raise GoogleMapsError("Google Maps API key is missing")

    try:
        response = requests.get(
            f"{settings.GOOGLE_MAPS_API_URL}/place/autocomplete/json",
            params={
                'input': text,
                'components': f'country:{country}',
                'key': settings.GOOGLE_MAPS_API_KEY,
            },
            timeout=settings.EXTERNAL_REQUEST_TIMEOUT,
        )
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        raise GoogleMapsError(f"Place autocomplete failed: {e}")

    status = data.get('status')
    if status == STATUS_ZERO_RESULTS:
        return []
    if status != STATUS_OK:
        raise GoogleMapsError(data.get('error_message') or f"Place autocomplete returned {status}")

    return [
        {'description': p['description'], 'place_id': p['place_id']}
        for p in data.get('predictions', [])
    ]
