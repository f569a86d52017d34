# tests/test_overpass.py
import random

import httpx
import pytest

from app.core.exceptions import UpstreamUnavailable
from app.services.catalog import VenueCatalog, placeholder_rating
from app.services.overpass import (
    build_venue_query,
    fetch_elements,
    format_address,
    normalize_elements,
)

from conftest import sample_elements


def test_shopping_query_uses_shopping_mall_tag():
    q = build_venue_query(VenueCatalog(), "shopping", 10000, 51.5, -0.1)
    assert '["amenity"="shopping_mall"]' in q
    assert '"shopping"]' not in q


def test_park_query_is_a_union_of_park_like_tags():
    q = build_venue_query(VenueCatalog(), "park", 10000, 51.5, -0.1)
    for tag in (
        '["amenity"="park"]',
        '["leisure"="park"]',
        '["leisure"="garden"]',
        '["leisure"="recreation_ground"]',
        '["landuse"="recreation_ground"]',
    ):
        for geom in ("node", "way", "relation"):
            assert f"{geom}{tag}(around:10000,51.5,-0.1);" in q


def test_single_tag_query_covers_every_geometry():
    q = build_venue_query(VenueCatalog(), "pub", 10000, 51.5, -0.1)
    assert q.startswith("[out:json][timeout:25];")
    assert q.count('["amenity"="pub"]') == 3
    assert "leisure" not in q
    assert q.rstrip().endswith("out center;")


def test_unknown_category_passes_through_literally():
    q = build_venue_query(VenueCatalog(), "bowling_alley", 5000, 51.5, -0.1)
    assert '["amenity"="bowling_alley"](around:5000,51.5,-0.1)' in q


def test_format_address():
    tags = {"addr:housenumber": "1", "addr:street": "High St", "addr:postcode": "E1 6AN"}
    assert format_address(tags) == "1, High St, E1 6AN"
    assert format_address({}) == "Address not available"


def test_normalize_drops_unnamed_and_unlocated_elements():
    venues = normalize_elements(sample_elements(), "pub", VenueCatalog(), random.Random(1))

    assert [v.name for v in venues] == ["The Far Pub", "The Near Pub"]
    far, near = venues
    assert far.address == "12, Fleet Street, London"
    assert far.phone == "+44 20 0000 0000"
    assert near.latitude == pytest.approx(51.5094)
    assert near.longitude == pytest.approx(-0.1065)
    assert near.website == "https://near.example"
    assert all(3.0 <= v.rating <= 5.0 for v in venues)
    assert all(v.category == "pub" for v in venues)


def test_normalize_caps_result_count():
    elements = [
        {"type": "node", "id": i, "lat": 51.5, "lon": -0.1, "tags": {"name": f"Cafe {i}"}}
        for i in range(50)
    ]
    venues = normalize_elements(elements, "cafe", VenueCatalog(), random.Random(1), limit=20)
    assert len(venues) == 20
    assert venues[0].name == "Cafe 0"


def test_normalize_uses_the_catalog_rating_function():
    catalog = VenueCatalog(rating=lambda rng: 4.2)
    venues = normalize_elements(sample_elements(), "pub", catalog, random.Random(1))
    assert {v.rating for v in venues} == {4.2}


def test_placeholder_rating_stays_in_range():
    rng = random.Random(7)
    ratings = [placeholder_rating(rng) for _ in range(500)]
    assert min(ratings) >= 3.0
    assert max(ratings) < 5.0
    assert all(r == round(r, 1) for r in ratings)


@pytest.mark.asyncio
async def test_fetch_elements_posts_plain_text_query():
    seen = {}

    def handler(request):
        seen["content_type"] = request.headers["content-type"]
        seen["body"] = request.content.decode()
        return httpx.Response(200, json={"elements": sample_elements()})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        elements = await fetch_elements(client, "[out:json];", "https://overpass.test/api/interpreter")

    assert len(elements) == 5
    assert seen == {"content_type": "text/plain", "body": "[out:json];"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(429, text="Too Many Requests"),
        httpx.Response(200, content=b"<html/>"),
        httpx.Response(200, json={"remark": "runtime error: timeout"}),
    ],
)
async def test_fetch_elements_failures_raise_upstream_unavailable(response):
    async with httpx.AsyncClient(transport=httpx.MockTransport(lambda r: response)) as client:
        with pytest.raises(UpstreamUnavailable):
            await fetch_elements(client, "[out:json];", "https://overpass.test/api/interpreter")


@pytest.mark.parametrize(
    "element",
    [
        {"type": "node", "id": 1, "lat": 51.5, "lon": -0.1, "tags": ["name"]},
        {"type": "node", "id": 2, "lat": 51.5, "lon": -0.1, "tags": {"name": 42}},
        {"type": "way", "id": 3, "center": [51.5, -0.1], "tags": {"name": "Odd Way"}},
        {"type": "node", "id": 4, "lat": 51.5, "lon": -0.1, "tags": {"name": "Pub", "website": ["x"]}},
        ["not", "an", "element"],
    ],
)
def test_normalize_rejects_malformed_elements(element):
    with pytest.raises(UpstreamUnavailable):
        normalize_elements([element], "pub", VenueCatalog(), random.Random(1))


def test_format_address_tolerates_numeric_parts():
    assert format_address({"addr:housenumber": 10, "addr:street": "Mare Street"}) == "10, Mare Street"
