import httpx
import pytest
import respx

from weatherensemble.models import ProviderError
from weatherensemble.providers.open_meteo import (
    fetch_open_meteo,
    map_wmo_code,
    normalize_open_meteo,
)


def _payload(days: int) -> dict:
    return {
        "daily": {
            "time": [f"2024-01-{15 + i:02d}" for i in range(days)],
            "temperature_2m_max": [32.0 + i for i in range(days)],
            "temperature_2m_min": [24.0 + i for i in range(days)],
            "relative_humidity_2m_mean": [70 + i for i in range(days)],
            "weather_code": [0, 61, 95, 3, 45, 71, 80, 99, 2][:days],
        }
    }


def test_wmo_code_mapping():
    assert map_wmo_code(0) == ("Clear sky", "sunny")
    assert map_wmo_code(61) == ("Rain", "rainy")
    assert map_wmo_code(95) == ("Thunderstorm", "stormy")


@pytest.mark.parametrize(
    "code, expected",
    [
        (2, ("Mostly clear", "sunny")),
        (3, ("Overcast", "cloudy")),
        (48, ("Foggy", "fog")),
        (55, ("Light drizzle", "rainy")),
        (77, ("Snow grains", "snowy")),
        (81, ("Rain showers", "rainy")),
        (86, ("Snow showers", "snowy")),
        (4, ("Unknown", "cloudy")),
        (-1, ("Unknown", "cloudy")),
    ],
)
def test_wmo_code_other_values(code, expected):
    assert map_wmo_code(code) == expected


def test_normalize_first_day_values():
    days = normalize_open_meteo(_payload(3))
    first = days[0]
    assert first.date == "2024-01-15"
    assert first.temp_max == 32.0
    assert first.temp_min == 24.0
    assert first.temp_avg == 28.0
    assert first.condition == "Clear sky"
    assert first.icon == "sunny"
    assert first.humidity == 70
    assert first.wind_speed == 0.0
    assert [d.condition for d in days] == ["Clear sky", "Rain", "Thunderstorm"]


def test_normalize_truncates_to_seven_days():
    days = normalize_open_meteo(_payload(9))
    assert len(days) == 7
    assert days[-1].date == "2024-01-21"


def test_normalize_short_series_raises():
    payload = _payload(3)
    payload["daily"]["weather_code"] = [0]
    with pytest.raises(ProviderError):
        normalize_open_meteo(payload)


def test_normalize_missing_daily_raises():
    with pytest.raises(ProviderError):
        normalize_open_meteo({"error": True})


@pytest.mark.asyncio
async def test_fetch_with_given_client():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        seen["host"] = request.url.host
        return httpx.Response(200, json=_payload(7))

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        days = await fetch_open_meteo(-6.2088, 106.8456, client)

    assert len(days) == 7
    assert seen["host"] == "api.open-meteo.com"
    assert seen["params"]["latitude"] == "-6.2088"
    assert seen["params"]["longitude"] == "106.8456"
    assert seen["params"]["timezone"] == "Asia/Jakarta"


@pytest.mark.asyncio
async def test_fetch_network_error_raises_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(ProviderError):
            await fetch_open_meteo(1.0, 2.0, client)


@pytest.mark.asyncio
async def test_fetch_invalid_json_raises_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="not json")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(ProviderError):
            await fetch_open_meteo(1.0, 2.0, client)


@pytest.mark.asyncio
async def test_fetch_without_client_uses_default():
    with respx.mock:
        route = respx.get(host="api.open-meteo.com", path="/v1/forecast").mock(
            return_value=httpx.Response(200, json=_payload(2))
        )
        days = await fetch_open_meteo(-6.2088, 106.8456)
    assert route.called
    assert [d.date for d in days] == ["2024-01-15", "2024-01-16"]