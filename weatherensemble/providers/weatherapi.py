"""WeatherAPI.com daily forecast provider."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from ..models import DailyForecast, ProviderError

logger = logging.getLogger(__name__)

BASE_URL = "https://api.weatherapi.com/v1/forecast.json"
REQUEST_TIMEOUT = 5.0

_CONDITION_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("Clear", "Sunny"), "Clear"),
    (("Cloud",), "Cloudy"),
    (("Rain",), "Rainy"),
    (("Snow",), "Snowy"),
    (("Sleet",), "Sleet"),
    (("Fog",), "Foggy"),
    (("Thunder",), "Thunderstorm"),
    (("Mist",), "Misty"),
)

_SUNNY_CODES = ("113", "122")
_CLOUDY_CODES = ("116", "119", "122")
_FOG_CODES = ("143", "248", "260")
_PRECIPITATION_CODES = (
    "176", "179", "182", "185", "200", "227", "230", "233", "266", "281", "284",
    "293", "296", "299", "302", "305", "308", "311", "314", "317", "320", "323",
    "326", "329", "332", "335", "338", "350", "353", "356", "359", "362", "365",
    "368", "371", "374", "377", "380", "386", "389", "392", "395",
)
_SNOW_MARKERS = (
    "snow", "sleet", "179", "182", "185", "227", "230", "233", "320", "323",
    "326", "329", "332", "335", "368", "371", "374", "377",
)
_STORM_CODES = ("386", "389", "392", "395")


def _contains_any(text: str, needles: tuple[str, ...]) -> bool:
    return any(needle in text for needle in needles)


def normalize_weatherapi_condition(condition: str) -> str:
    """Collapse a WeatherAPI condition text into a common label."""
    for needles, label in _CONDITION_RULES:
        if _contains_any(condition, needles):
            return label
    return condition


def map_weatherapi_icon(icon_url: str) -> str:
    """Icon name for a WeatherAPI icon URL such as .../day/113.png."""
    if not _contains_any(icon_url, ("day", "night")):
        return "cloudy"
    if _contains_any(icon_url, _SUNNY_CODES):
        return "sunny"
    if _contains_any(icon_url, _CLOUDY_CODES):
        return "cloudy"
    if _contains_any(icon_url, _FOG_CODES):
        return "fog"
    if _contains_any(icon_url, _PRECIPITATION_CODES):
        return "snowy" if _contains_any(icon_url, _SNOW_MARKERS) else "rainy"
    if _contains_any(icon_url, _STORM_CODES):
        return "stormy"
    return "cloudy"


async def _get_json(url: str, client: httpx.AsyncClient | None) -> Any:
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT) as own_client:
                response = await own_client.get(url)
        else:
            response = await client.get(url)
        return response.json()
    except httpx.HTTPError as exc:
        raise ProviderError(f"WeatherAPI request failed: {exc}") from exc
    except ValueError as exc:
        raise ProviderError(f"WeatherAPI returned invalid JSON: {exc}") from exc


async def fetch_weatherapi(
    city: str, api_key: str, client: httpx.AsyncClient | None = None
) -> list[DailyForecast]:
    """Fetch and normalise a seven-day forecast for a city from WeatherAPI."""
    logger.info("Fetching weather from WeatherAPI provider for city=%s", city)
    url = f"{BASE_URL}?key={api_key}&q={city}&days=7&aqi=no"
    data = await _get_json(url, client)
    logger.info("Successfully fetched WeatherAPI data")
    return normalize_weatherapi(data)


def normalize_weatherapi(data: Mapping[str, Any]) -> list[DailyForecast]:
    """Turn a WeatherAPI response into forecast days, one per forecast day given."""
    try:
        forecasts = []
        for forecast_day in data["forecast"]["forecastday"]:
            day = forecast_day["day"]
            condition = day["condition"]
            forecasts.append(
                DailyForecast(
                    date=str(forecast_day["date"]),
                    temp_max=float(day["maxtemp_c"]),
                    temp_min=float(day["mintemp_c"]),
                    temp_avg=float(day["avgtemp_c"]),
                    condition=normalize_weatherapi_condition(str(condition["text"])),
                    humidity=int(day["avghumidity"]),
                    wind_speed=0.0,
                    icon=map_weatherapi_icon(str(condition["icon"])),
                )
            )
        return forecasts
    except (KeyError, TypeError, ValueError) as exc:
        raise ProviderError(f"Malformed WeatherAPI response: {exc}") from exc