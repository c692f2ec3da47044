import asyncio

import pytest

from foodlocator.schemas.geo import Coordinates
from foodlocator.schemas.venue import VenueCandidate, VenueDetail
from foodlocator.services.places_client import PlacesClient
from foodlocator.services.venue_enricher import VenueEnricher


def _candidate(venue_id: str, name: str) -> VenueCandidate:
    return VenueCandidate(
        id=venue_id,
        name=name,
        coordinates=Coordinates(latitude=-6.92, longitude=107.61),
    )


def _enricher(test_settings, transport) -> VenueEnricher:
    return VenueEnricher(PlacesClient(test_settings.foursquare, transport=transport))


@pytest.mark.asyncio
async def test_enrich_merges_detail(test_settings, transport):
    venue = await _enricher(test_settings, transport).enrich(_candidate("v1", "Green Bowl"))

    assert venue.id == "v1"
    assert venue.name == "Green Bowl"
    assert venue.rating == 8.4
    assert venue.enriched is True
    assert venue.thumbnail_url(80, 80) == "https://fastly.4sqi.net/img/general/80x80/v1_a.jpg"


@pytest.mark.asyncio
async def test_enrich_failure_uses_defaults(test_settings, transport, upstream):
    upstream.detail_status["v1"] = 500

    venue = await _enricher(test_settings, transport).enrich(_candidate("v1", "Green Bowl"))

    assert venue.name == "Green Bowl"
    assert venue.photos == []
    assert venue.rating is None
    assert venue.enriched is False


@pytest.mark.asyncio
async def test_enrich_all_isolates_single_failure(test_settings, transport, upstream):
    upstream.detail_status["v2"] = 503
    candidates = [_candidate("v1", "A"), _candidate("v2", "B"), _candidate("v3", "C")]

    venues = await _enricher(test_settings, transport).enrich_all(candidates)

    assert [v.id for v in venues] == ["v1", "v2", "v3"]
    assert venues[0].enriched and venues[0].rating == 8.4
    assert not venues[1].enriched and venues[1].photos == [] and venues[1].rating is None
    assert venues[2].enriched and venues[2].rating is None and len(venues[2].photos) == 1


@pytest.mark.asyncio
async def test_enrich_all_preserves_order_when_completion_is_reversed(test_settings, transport, upstream):
    gate = asyncio.Event()
    upstream.detail_gates["v1"] = gate
    candidates = [_candidate("v1", "A"), _candidate("v2", "B"), _candidate("v3", "C")]

    task = asyncio.create_task(_enricher(test_settings, transport).enrich_all(candidates))
    await upstream.arrival("detail:v1").wait()
    # Give v2 and v3 time to finish before releasing v1.
    for _ in range(20):
        await asyncio.sleep(0)
    gate.set()
    venues = await task

    assert [v.id for v in venues] == ["v1", "v2", "v3"]
    assert all(v.enriched for v in venues)


@pytest.mark.asyncio
async def test_enrich_all_requests_run_concurrently(test_settings, transport, upstream):
    gates = {vid: asyncio.Event() for vid in ("v1", "v2", "v3")}
    upstream.detail_gates.update(gates)
    candidates = [_candidate("v1", "A"), _candidate("v2", "B"), _candidate("v3", "C")]

    task = asyncio.create_task(_enricher(test_settings, transport).enrich_all(candidates))
    # Every request is in flight before any of them is answered.
    await asyncio.wait_for(
        asyncio.gather(*(upstream.arrival(f"detail:{vid}").wait() for vid in gates)),
        timeout=2,
    )
    for gate in gates.values():
        gate.set()

    assert len(await task) == 3


@pytest.mark.asyncio
async def test_enrich_all_empty_input_makes_no_requests(test_settings, transport, upstream):
    assert await _enricher(test_settings, transport).enrich_all([]) == []
    assert upstream.requests == []


@pytest.mark.asyncio
async def test_enrich_all_absorbs_unexpected_errors():
    class BrokenPlaces:
        async def get_details(self, venue_id):
            if venue_id == "boom":
                raise RuntimeError("unexpected")
            return VenueDetail(rating=5.0)

    enricher = VenueEnricher(BrokenPlaces())
    venues = await enricher.enrich_all([_candidate("ok", "A"), _candidate("boom", "B")])

    assert [v.id for v in venues] == ["ok", "boom"]
    assert venues[0].rating == 5.0
    assert venues[1].enriched is False
