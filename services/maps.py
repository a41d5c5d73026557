# services/maps.py

from urllib.parse import urlencode

_SEARCH_URL = "https://www.google.com/maps/search/"


def map_link(place: str, region: str = "Jharkhand") -> str:
    """
    Google Maps search deep link for an activity name.
    The region is appended so that generic names ("Rock Garden") resolve locally.
    """
    query = ", ".join(p for p in (place.strip(), region) if p)
    return f"{_SEARCH_URL}?{urlencode({'api': 1, 'query': query})}"
