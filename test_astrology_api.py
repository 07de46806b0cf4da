# tests for the AstrologyAPI client and BirthData payload mapping

import base64
import json

import httpx
import pytest

from config import Settings
from jyotish_chat.models.birth_data import BirthData, KundaliRequest
from jyotish_chat.models.kundali import Facet
from jyotish_chat.services.astrology_api import AstrologyAPIClient, ProviderError


def make_birth_data(**overrides):
    defaults = dict(
        day=15, month=8, year=1990, hour=14, minute=30,
        latitude=28.6139, longitude=77.2090, timezone_offset=5.5,
    )
    defaults.update(overrides)
    return BirthData(**defaults)


def make_client(handler):
    settings = Settings(
        ASTROLOGY_API_KEY="secret", ASTROLOGY_USER_ID="12345",
        ASTROLOGY_API_BASE_URL="https://astro.test/v1",
    )
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return AstrologyAPIClient(settings, http_client=http)


def test_payload_renames_minute_only():
    payload = make_birth_data().to_payload()
    assert payload == {
        "day": 15, "month": 8, "year": 1990, "hour": 14, "min": 30,
        "lat": 28.6139, "lon": 77.2090, "tzone": 5.5,
    }
    assert "minute" not in payload


def test_payload_round_trip():
    bd = make_birth_data(timezone_offset=-4.0)
    assert BirthData.from_payload(bd.to_payload()) == bd


def test_birth_data_is_immutable():
    bd = make_birth_data()
    with pytest.raises(Exception):
        bd.day = 1


def test_kundali_request_defaults_timezone_and_coerces_strings():
    req = KundaliRequest(**{
        "day": "15", "month": "8", "year": "1990", "hour": "14", "minute": "5",
        "lat": "28.6139", "lon": "77.2090",
    })
    bd = req.to_birth_data()
    assert bd.timezone_offset == 5.5
    assert bd.minute == 5 and isinstance(bd.latitude, float)
    assert req.display_tob() == "14:05"
    assert req.display_dob() == "15/8/1990"


def test_kundali_request_accepts_long_names():
    req = KundaliRequest(**{
        "day": 1, "month": 1, "year": 2000, "hour": 0, "minute": 0,
        "latitude": 10.5, "longitude": 20.5, "timezoneOffset": 1.0,
    })
    bd = req.to_birth_data()
    assert (bd.latitude, bd.longitude, bd.timezone_offset) == (10.5, 20.5, 1.0)


@pytest.mark.asyncio
async def test_fetch_facet_sends_auth_and_json_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["ctype"] = request.headers["Content-Type"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=[{"name": "Sun"}])

    client = make_client(handler)
    result = await client.fetch_facet(Facet.CURRENT_DASHA, make_birth_data())

    assert result == [{"name": "Sun"}]
    assert seen["url"] == "https://astro.test/v1/dashas/current_mahadasha_full"
    assert seen["auth"] == "Basic " + base64.b64encode(b"12345:secret").decode()
    assert seen["ctype"] == "application/json"
    assert seen["body"]["min"] == 30
    await client.aclose()


@pytest.mark.asyncio
async def test_named_helpers_hit_their_paths():
    paths = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return httpx.Response(200, json={})

    client = make_client(handler)
    bd = make_birth_data()
    await client.get_planets(bd)
    await client.get_birth_chart(bd)
    await client.get_house_cusps(bd)
    await client.get_mahadasha(bd)
    await client.get_current_dasha(bd)
    await client.get_yogas(bd)
    await client.get_ascendant(bd)

    assert paths == [
        "/v1/planets", "/v1/horo_chart/D1", "/v1/house_cusps", "/v1/dashas/mahadasha",
        "/v1/dashas/current_mahadasha_full", "/v1/yoga_list", "/v1/ascendant_report",
    ]


@pytest.mark.asyncio
async def test_non_success_raises_provider_error():
    client = make_client(lambda request: httpx.Response(401, text="bad credentials"))

    with pytest.raises(ProviderError) as exc:
        await client.get_planets(make_birth_data())

    assert exc.value.status == 401
    assert exc.value.body == "bad credentials"
    assert exc.value.facet == "planets"


@pytest.mark.asyncio
async def test_transport_failure_raises_provider_error():
    def handler(request):
        raise httpx.ConnectError("connection refused")

    client = make_client(handler)
    with pytest.raises(ProviderError) as exc:
        await client.get_yogas(make_birth_data())
    assert exc.value.status is None
