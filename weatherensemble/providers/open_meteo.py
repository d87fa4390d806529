"""Open-Meteo daily forecast provider."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from ..models import DailyForecast, ProviderError

logger = logging.getLogger(__name__)

BASE_URL = "https://api.open-meteo.com/v1/forecast"
REQUEST_TIMEOUT = 5.0
MAX_DAYS = 7

_WMO_CODES: dict[int, tuple[str, str]] = {
    0: ("Clear sky", "sunny"),
    1: ("Mostly clear", "sunny"),
    2: ("Mostly clear", "sunny"),
    3: ("Overcast", "cloudy"),
    45: ("Foggy", "fog"),
    48: ("Foggy", "fog"),
    51: ("Light drizzle", "rainy"),
    53: ("Light drizzle", "rainy"),
    55: ("Light drizzle", "rainy"),
    61: ("Rain", "rainy"),
    63: ("Rain", "rainy"),
    65: ("Rain", "rainy"),
    71: ("Snow", "snowy"),
    73: ("Snow", "snowy"),
    75: ("Snow", "snowy"),
    77: ("Snow grains", "snowy"),
    80: ("Rain showers", "rainy"),
    81: ("Rain showers", "rainy"),
    82: ("Rain showers", "rainy"),
    85: ("Snow showers", "snowy"),
    86: ("Snow showers", "snowy"),
    95: ("Thunderstorm", "stormy"),
    96: ("Thunderstorm", "stormy"),
    99: ("Thunderstorm", "stormy"),
}


def map_wmo_code(code: int) -> tuple[str, str]:
    """Readable condition and icon name for a WMO weather code."""
    return _WMO_CODES.get(code, ("Unknown", "cloudy"))


async def _get_json(url: str, client: httpx.AsyncClient | None) -> Any:
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT) as own_client:
                response = await own_client.get(url)
        else:
            response = await client.get(url)
        return response.json()
    except httpx.HTTPError as exc:
        raise ProviderError(f"Open-Meteo request failed: {exc}") from exc
    except ValueError as exc:
        raise ProviderError(f"Open-Meteo returned invalid JSON: {exc}") from exc


async def fetch_open_meteo(
    lat: float, lon: float, client: httpx.AsyncClient | None = None
) -> list[DailyForecast]:
    """Fetch and normalise up to seven days of forecast from Open-Meteo."""
    logger.info("Fetching weather from Open-Meteo provider for lat=%s, lon=%s", lat, lon)
    url = (
        f"{BASE_URL}?latitude={lat}&longitude={lon}"
        "&daily=temperature_2m_max,temperature_2m_min,relative_humidity_2m_mean,weather_code"
        "&timezone=Asia/Jakarta"
    )
    data = await _get_json(url, client)
    logger.info("Successfully fetched Open-Meteo data")
    return normalize_open_meteo(data)


def normalize_open_meteo(data: Mapping[str, Any]) -> list[DailyForecast]:
    """Turn an Open-Meteo response into at most seven forecast days."""
    try:
        daily = data["daily"]
        times = daily["time"]
        maxes = daily["temperature_2m_max"]
        mins = daily["temperature_2m_min"]
        humidities = daily["relative_humidity_2m_mean"]
        codes = daily["weather_code"]

        days_count = min(MAX_DAYS, len(times))
        if any(len(series) < days_count for series in (maxes, mins, humidities, codes)):
            raise ProviderError("Open-Meteo daily series are shorter than the time series")

        forecasts = []
        for day, t_max, t_min, humidity, code in zip(
            times[:days_count], maxes, mins, humidities, codes
        ):
            temp_max = float(t_max)
            temp_min = float(t_min)
            condition, icon = map_wmo_code(int(code))
            forecasts.append(
                DailyForecast(
                    date=str(day),
                    temp_max=temp_max,
                    temp_min=temp_min,
                    temp_avg=(temp_max + temp_min) / 2.0,
                    condition=condition,
                    humidity=int(humidity),
                    wind_speed=0.0,
                    icon=icon,
                )
            )
        return forecasts
    except (KeyError, TypeError, ValueError) as exc:
        raise ProviderError(f"Malformed Open-Meteo response: {exc}") from exc