import httpx
import pytest

from foodlocator.core.exceptions import ServiceUnavailableError
from foodlocator.schemas.geo import Coordinates
from foodlocator.services.places_client import PlacesClient, parse_detail

BANDUNG = Coordinates(latitude=-6.9215529, longitude=107.6110212)


def _client(test_settings, transport):
    return PlacesClient(test_settings.foursquare, transport=transport)


@pytest.mark.asyncio
async def test_search_returns_candidates_in_response_order(test_settings, transport, upstream):
    candidates = await _client(test_settings, transport).search(BANDUNG, "healthy food", 10, 2000)

    assert [c.id for c in candidates] == ["v1", "v2", "v3"]
    first = candidates[0]
    assert first.name == "Green Bowl"
    assert first.categories == ["Vegan and Vegetarian Restaurant"]
    assert first.location.formatted_address == "Jl. Braga 1, Bandung"
    assert first.coordinates.latitude == pytest.approx(-6.92)


@pytest.mark.asyncio
async def test_search_sends_query_limit_radius_and_credential(test_settings, transport, upstream):
    await _client(test_settings, transport).search(BANDUNG, "healthy food", 6, 2000)

    request = upstream.calls_to("fsq.test")[0]
    assert request.url.path == "/v3/places/search"
    assert request.url.params["ll"] == "-6.9215529,107.6110212"
    assert request.url.params["query"] == "healthy food"
    assert request.url.params["limit"] == "6"
    assert request.url.params["radius"] == "2000"
    assert request.headers["Authorization"] == "test-key"


@pytest.mark.asyncio
async def test_search_without_radius_omits_parameter(test_settings, transport, upstream):
    await _client(test_settings, transport).search(BANDUNG, "healthy", 6)

    request = upstream.calls_to("fsq.test")[0]
    assert "radius" not in request.url.params


@pytest.mark.asyncio
async def test_search_failure_returns_empty_list(test_settings, transport, upstream):
    upstream.search_status = 401

    candidates = await _client(test_settings, transport).search(BANDUNG, "healthy food", 10)

    assert candidates == []


@pytest.mark.asyncio
async def test_search_strict_raises_on_failure(test_settings, transport, upstream):
    upstream.search_status = 500

    with pytest.raises(ServiceUnavailableError) as exc_info:
        await _client(test_settings, transport).search_strict(BANDUNG, "healthy food", 10)

    assert exc_info.value.service_name == "places_search"


@pytest.mark.asyncio
async def test_search_skips_malformed_and_duplicate_results(test_settings, transport, upstream):
    broken = upstream.venue("v9", "No Geocodes")
    del broken["geocodes"]
    upstream.search_results = [
        upstream.venue("v1", "Green Bowl"),
        broken,
        upstream.venue("v1", "Green Bowl Again"),
        upstream.venue("v2", "Salad Stop"),
    ]

    candidates = await _client(test_settings, transport).search(BANDUNG, "healthy food", 10)

    assert [(c.id, c.name) for c in candidates] == [("v1", "Green Bowl"), ("v2", "Salad Stop")]


@pytest.mark.asyncio
async def test_get_details_parses_photos_and_rating(test_settings, transport, upstream):
    detail = await _client(test_settings, transport).get_details("v1")

    assert detail.rating == 8.4
    assert len(detail.photos) == 1
    assert detail.photos[0].prefix == "https://fastly.4sqi.net/img/general/"
    assert detail.photos[0].suffix == "/v1_a.jpg"

    request = upstream.calls_to("fsq.test")[0]
    assert request.url.path == "/v3/places/v1"
    assert request.url.params["fields"] == "photos,rating"


@pytest.mark.asyncio
async def test_get_details_failure_raises(test_settings, transport, upstream):
    upstream.detail_status["v2"] = 429

    with pytest.raises(ServiceUnavailableError) as exc_info:
        await _client(test_settings, transport).get_details("v2")

    assert exc_info.value.service_name == "place_detail"


@pytest.mark.asyncio
async def test_timeout_is_service_unavailable(test_settings):
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    client = _client(test_settings, httpx.MockTransport(handler))
    with pytest.raises(ServiceUnavailableError):
        await client.get_details("v1")
    assert await client.search(BANDUNG, "healthy food", 10) == []


def test_parse_detail_discards_out_of_range_rating():
    detail = parse_detail({"photos": [], "rating": 42})
    assert detail.rating is None
    assert detail.photos == []


def test_parse_detail_skips_photos_without_prefix():
    detail = parse_detail({
        "photos": [
            {"prefix": "https://img/", "suffix": "/a.jpg"},
            {"suffix": "/b.jpg"},
        ],
        "rating": "9.1",
    })
    assert [p.suffix for p in detail.photos] == ["/a.jpg"]
    assert detail.rating == 9.1


def test_parse_detail_missing_fields_defaults():
    detail = parse_detail({"fsq_id": "v1"})
    assert detail.photos == []
    assert detail.rating is None
