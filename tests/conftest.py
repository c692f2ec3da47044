"""
Shared fixtures: a fake Nominatim + Foursquare upstream served through httpx.MockTransport.
"""

import asyncio
from typing import Dict, List, Optional

import httpx
import pytest

from foodlocator.config.settings import (
    FoursquareSettings,
    GeocoderSettings,
    SearchSettings,
    Settings,
)

NOMINATIM_HOST = "nominatim.test"
FOURSQUARE_HOST = "fsq.test"

PLACES = {
    "jakarta": {"lat": "-6.1754049", "lon": "106.827168"},
    "bandung": {"lat": "-6.9215529", "lon": "107.6110212"},
    "sukabumi, indonesia": {"lat": "-6.9174639", "lon": "106.9270973"},
}


def make_venue(fsq_id: str, name: str, lat: float = -6.92, lon: float = 107.61) -> dict:
    return {
        "fsq_id": fsq_id,
        "name": name,
        "geocodes": {"main": {"latitude": lat, "longitude": lon}},
        "categories": [{"id": 13377, "name": "Vegan and Vegetarian Restaurant"}],
        "location": {
            "address": "Jl. Braga 1",
            "locality": "Bandung",
            "formatted_address": "Jl. Braga 1, Bandung",
        },
    }


def make_detail(fsq_id: str, rating: Optional[float] = 8.4) -> dict:
    detail = {
        "fsq_id": fsq_id,
        "photos": [
            {
                "id": f"{fsq_id}-p1",
                "prefix": "https://fastly.4sqi.net/img/general/",
                "suffix": f"/{fsq_id}_a.jpg",
                "width": 1440,
                "height": 1920,
            }
        ],
    }
    if rating is not None:
        detail["rating"] = rating
    return detail


class FakeUpstream:
    """
    Routes requests to canned geocoder and places responses.

    ``geocode_gates`` / ``detail_gates`` hold events a request waits on
    before answering, which lets tests control completion order.
    """

    def __init__(self):
        self.places: Dict[str, dict] = dict(PLACES)
        self.search_results: List[dict] = [
            make_venue("v1", "Green Bowl"),
            make_venue("v2", "Salad Stop"),
            make_venue("v3", "Juice Lab"),
        ]
        self.details: Dict[str, dict] = {
            "v1": make_detail("v1", 8.4),
            "v2": make_detail("v2", 7.1),
            "v3": make_detail("v3", None),
        }
        self.detail_status: Dict[str, int] = {}
        self.geocode_status = 200
        self.search_status = 200
        self.geocode_gates: Dict[str, asyncio.Event] = {}
        self.detail_gates: Dict[str, asyncio.Event] = {}
        self.arrived: Dict[str, asyncio.Event] = {}
        self.requests: List[httpx.Request] = []

    venue = staticmethod(make_venue)
    detail = staticmethod(make_detail)

    def arrival(self, key: str) -> asyncio.Event:
        return self.arrived.setdefault(key, asyncio.Event())

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == NOMINATIM_HOST:
            return await self._geocode(request)
        if request.url.host == FOURSQUARE_HOST:
            return await self._places(request)
        return httpx.Response(404)

    async def _geocode(self, request: httpx.Request) -> httpx.Response:
        query = request.url.params.get("q", "")
        key = query.lower()
        self.arrival(f"geocode:{key}").set()
        gate = self.geocode_gates.get(key)
        if gate is not None:
            await gate.wait()
        if self.geocode_status != 200:
            return httpx.Response(self.geocode_status)
        match = self.places.get(key)
        return httpx.Response(200, json=[match] if match else [])

    async def _places(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/v3/places/search":
            if self.search_status != 200:
                return httpx.Response(self.search_status, json={"message": "error"})
            limit = int(request.url.params.get("limit", "10"))
            return httpx.Response(200, json={"results": self.search_results[:limit]})

        venue_id = path.rsplit("/", 1)[-1]
        self.arrival(f"detail:{venue_id}").set()
        gate = self.detail_gates.get(venue_id)
        if gate is not None:
            await gate.wait()
        status = self.detail_status.get(venue_id, 200)
        if status != 200:
            return httpx.Response(status, json={"message": "error"})
        detail = self.details.get(venue_id)
        if detail is None:
            return httpx.Response(404, json={"message": "not found"})
        return httpx.Response(200, json=detail)

    def calls_to(self, host: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def transport(upstream) -> httpx.MockTransport:
    return httpx.MockTransport(upstream)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        log_json=False,
        geocoder=GeocoderSettings(
            base_url=f"https://{NOMINATIM_HOST}",
            user_agent="HealthyFoodLocatorTests/1.0 (tests@example.com)",
            timeout_seconds=5,
        ),
        foursquare=FoursquareSettings(
            api_key="test-key",
            api_url=f"https://{FOURSQUARE_HOST}/v3",
            result_limit=10,
            radius_m=2000,
        ),
        search=SearchSettings(
            default_place_name="Sukabumi, Indonesia",
            search_on_startup=False,
        ),
    )
