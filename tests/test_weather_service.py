import httpx
import pytest
import respx

from weatherensemble.models import ProviderError
from weatherensemble.weather_service import WeatherService


def open_meteo_payload():
    return {
        "daily": {
            "time": [f"2024-01-{i + 1:02d}" for i in range(7)],
            "temperature_2m_max": [30.0] * 7,
            "temperature_2m_min": [22.0] * 7,
            "relative_humidity_2m_mean": [70] * 7,
            "weather_code": [61] * 7,
        }
    }


def openweather_payload():
    return {
        "list": [
            {
                "dt": 1704067200,
                "main": {"temp_max": 31.0, "temp_min": 23.0, "humidity": 80},
                "weather": [{"main": "Clear", "description": "clear sky"}],
            }
        ]
    }


def weatherapi_payload():
    return {
        "forecast": {
            "forecastday": [
                {
                    "date": "2024-01-01",
                    "day": {
                        "maxtemp_c": 32.0,
                        "mintemp_c": 24.0,
                        "avgtemp_c": 28.0,
                        "avghumidity": 75,
                        "condition": {
                            "text": "Sunny",
                            "icon": "//cdn.weatherapi.com/weather/64x64/day/113.png",
                        },
                    },
                }
            ]
        }
    }


@pytest.fixture
def router():
    with respx.mock(assert_all_called=False) as mock_router:
        yield mock_router


def test_weather_service_creation():
    service = WeatherService("placeholder", "placeholder")
    assert service.openweather_key == "placeholder"
    assert service.weatherapi_key == "placeholder"


@pytest.mark.asyncio
async def test_open_meteo_first(router):
    router.get(host="api.open-meteo.com").mock(
        return_value=httpx.Response(200, json=open_meteo_payload())
    )
    ow_route = router.get(host="api.openweathermap.org")
    service = WeatherService("placeholder", "placeholder")
    forecast = await service.get_forecast("Jakarta", -6.2088, 106.8456)
    assert forecast.city == "Jakarta"
    assert forecast.province == ""
    assert forecast.country == "Indonesia"
    assert forecast.latitude == -6.2088
    assert forecast.longitude == 106.8456
    assert len(forecast.forecast) == 7
    assert forecast.forecast[0].condition == "Rain"
    assert "T" in forecast.last_updated
    assert ow_route.called is False


@pytest.mark.asyncio
async def test_falls_back_to_openweather(router):
    router.get(host="api.open-meteo.com").mock(side_effect=httpx.ConnectError("down"))
    router.get(host="api.openweathermap.org").mock(
        return_value=httpx.Response(200, json=openweather_payload())
    )
    service = WeatherService("placeholder", "")
    forecast = await service.get_forecast("Jakarta", -6.2088, 106.8456)
    assert forecast.forecast[0].condition == "Clear"
    assert forecast.forecast[0].date == "2024-01-01"
    assert len(forecast.forecast) == 7


@pytest.mark.asyncio
async def test_falls_back_to_weatherapi(router):
    router.get(host="api.open-meteo.com").mock(return_value=httpx.Response(500, text="oops"))
    router.get(host="api.openweathermap.org").mock(side_effect=httpx.ConnectError("down"))
    wa_route = router.get(host="api.weatherapi.com").mock(
        return_value=httpx.Response(200, json=weatherapi_payload())
    )
    service = WeatherService("placeholder", "placeholder")
    forecast = await service.get_forecast("Jakarta", -6.2088, 106.8456)
    assert wa_route.called is True
    assert forecast.forecast[0].condition == "Clear"
    assert forecast.forecast[0].icon == "sunny"


@pytest.mark.asyncio
async def test_unset_marker_is_skipped(router):
    router.get(host="api.open-meteo.com").mock(side_effect=httpx.ConnectError("down"))
    ow_route = router.get(host="api.openweathermap.org").mock(
        return_value=httpx.Response(200, json=openweather_payload())
    )
    service = WeatherService("your-key-here", "")
    with pytest.raises(ProviderError):
        await service.get_forecast("Jakarta", -6.2088, 106.8456)
    assert ow_route.called is False


@pytest.mark.asyncio
async def test_all_providers_fail(router):
    router.get(host="api.open-meteo.com").mock(side_effect=httpx.ConnectError("down"))
    service = WeatherService("", "")
    with pytest.raises(ProviderError, match="all available providers"):
        await service.get_forecast("Jakarta", -6.2088, 106.8456)