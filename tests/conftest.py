# tests/conftest.py
import json
import os
import random
import tempfile

# keep log files and the database out of the working tree
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="midpoint-logs-"))
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import httpx
import pytest

from app.core.config import Settings
from app.services.venue_search import VenueSearchService

# postcode (no whitespace, upper case) -> (lat, lon)
POSTCODES = {
    "SW1A1AA": (51.501009, -0.141588),
    "E16AN": (51.517720, -0.071425),
    "N19GU": (51.530827, -0.120861),
}


def overpass_payload(elements):
    return httpx.Response(200, json={"version": 0.6, "elements": elements})


def sample_elements():
    return [
        {
            "type": "node",
            "id": 101,
            "lat": 51.5100,
            "lon": -0.1000,
            "tags": {
                "amenity": "pub",
                "name": "The Far Pub",
                "addr:housenumber": "12",
                "addr:street": "Fleet Street",
                "addr:city": "London",
                "phone": "+44 20 0000 0000",
            },
        },
        {
            "type": "way",
            "id": 202,
            "center": {"lat": 51.5094, "lon": -0.1065},
            "tags": {"amenity": "pub", "name": "The Near Pub", "website": "https://near.example"},
        },
        # no name -> dropped
        {"type": "node", "id": 303, "lat": 51.509, "lon": -0.106, "tags": {"amenity": "pub"}},
        # no coordinates -> dropped
        {"type": "way", "id": 404, "tags": {"amenity": "pub", "name": "Ghost Pub"}},
        # skeleton node without tags -> dropped
        {"type": "node", "id": 505, "lat": 51.5, "lon": -0.1},
    ]


class FakeUpstream:
    """Routes postcodes.io and Overpass calls to canned responses."""

    def __init__(self, overpass=None, postcodes=None):
        self.postcodes = dict(POSTCODES if postcodes is None else postcodes)
        self.overpass = overpass or (lambda request: overpass_payload(sample_elements()))
        self.geocode_calls = []
        self.overpass_queries = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.host == "api.postcodes.io":
            code = request.url.path.rsplit("/", 1)[-1].upper()
            self.geocode_calls.append(code)
            if code not in self.postcodes:
                return httpx.Response(404, json={"status": 404, "error": "Invalid postcode"})
            lat, lon = self.postcodes[code]
            return httpx.Response(
                200, json={"status": 200, "result": {"postcode": code, "latitude": lat, "longitude": lon}}
            )
        self.overpass_queries.append(request.content.decode("utf-8"))
        return self.overpass(request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def test_settings():
    return Settings(
        POSTCODES_API_URL="https://api.postcodes.io",
        OVERPASS_API_URL="https://overpass-api.de/api/interpreter",
        _env_file=None,
    )


@pytest.fixture
def make_service(test_settings):
    def _make(upstream: FakeUpstream, **kwargs) -> VenueSearchService:
        return VenueSearchService(
            settings=test_settings,
            transport=upstream.transport(),
            rng=random.Random(42),
            **kwargs,
        )

    return _make


def failing_overpass(status=504):
    def _handler(request):
        return httpx.Response(status, text="Gateway Timeout")

    return _handler


def timeout_overpass(request):
    raise httpx.ReadTimeout("timed out", request=request)


def malformed_overpass(request):
    return httpx.Response(200, content=b"<html>rate limited</html>")


def no_elements_overpass(request):
    return httpx.Response(200, content=json.dumps({"remark": "runtime error"}).encode())
