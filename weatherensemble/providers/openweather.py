"""OpenWeatherMap three-hourly forecast provider, grouped into days."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone
from itertools import groupby
from operator import itemgetter
from typing import Any, Mapping

import httpx

from ..models import DailyForecast, ProviderError

logger = logging.getLogger(__name__)

BASE_URL = "https://api.openweathermap.org/data/2.5/forecast"
REQUEST_TIMEOUT = 5.0
MAX_DAYS = 7

_FOGGY = frozenset(
    {"mist", "smoke", "haze", "dust", "fog", "sand", "ash", "squall", "tornado"}
)
_CONDITIONS: dict[str, tuple[str, str]] = {
    "clear": ("Clear", "sunny"),
    "clouds": ("Cloudy", "cloudy"),
    "rain": ("Rainy", "rainy"),
    "snow": ("Snow", "snowy"),
    "drizzle": ("Drizzle", "rainy"),
    "thunderstorm": ("Thunderstorm", "stormy"),
}


def map_openweather_condition(condition: str) -> tuple[str, str]:
    """Readable condition and icon name for an OpenWeatherMap main condition."""
    key = condition.lower()
    if key in _FOGGY:
        return ("Foggy", "fog")
    return _CONDITIONS.get(key, ("Unknown", "cloudy"))


async def _get_json(url: str, client: httpx.AsyncClient | None) -> Any:
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT) as own_client:
                response = await own_client.get(url)
        else:
            response = await client.get(url)
        return response.json()
    except httpx.HTTPError as exc:
        raise ProviderError(f"OpenWeatherMap request failed: {exc}") from exc
    except ValueError as exc:
        raise ProviderError(f"OpenWeatherMap returned invalid JSON: {exc}") from exc


async def fetch_openweather(
    lat: float, lon: float, api_key: str, client: httpx.AsyncClient | None = None
) -> list[DailyForecast]:
    """Fetch the OpenWeatherMap forecast and normalise it to seven days."""
    logger.info("Fetching weather from OpenWeatherMap provider for lat=%s, lon=%s", lat, lon)
    url = f"{BASE_URL}?lat={lat}&lon={lon}&appid={api_key}&units=metric"
    data = await _get_json(url, client)
    logger.info("Successfully fetched OpenWeatherMap data")
    return normalize_openweather(data)


def _utc_date(timestamp: Any) -> str:
    try:
        return datetime.fromtimestamp(int(timestamp), tz=timezone.utc).strftime("%Y-%m-%d")
    except (OverflowError, OSError, ValueError) as exc:
        raise ProviderError("Invalid timestamp") from exc


def _pad_to_week(forecasts: list[DailyForecast]) -> list[DailyForecast]:
    # Repeats the last day; the date offset grows with the list length.
    while len(forecasts) < MAX_DAYS:
        last = forecasts[-1]
        offset = len(forecasts) - 4
        try:
            base = date.fromisoformat(last.date)
        except ValueError:
            base = date.today()
        try:
            new_date = base + timedelta(days=offset)
        except OverflowError:
            break
        forecasts.append(replace(last, date=new_date.strftime("%Y-%m-%d")))
    return forecasts[:MAX_DAYS]


def normalize_openweather(data: Mapping[str, Any]) -> list[DailyForecast]:
    """Group three-hourly entries by UTC date and pad the result to seven days."""
    try:
        items = data["list"]
        if not items:
            raise ProviderError("No weather data available")

        entries = [(_utc_date(item["dt"]), item) for item in items]
        forecasts: list[DailyForecast] = []
        condition, icon = "", ""

        for day, group in groupby(entries, key=itemgetter(0)):
            day_items = [item for _, item in group]
            temp_max = max(float(item["main"]["temp_max"]) for item in day_items)
            temp_min = min(float(item["main"]["temp_min"]) for item in day_items)
            for item in day_items:
                weather = item["weather"]
                if weather:
                    condition, icon = map_openweather_condition(str(weather[0]["main"]))
            last = day_items[-1]
            wind = last.get("wind")
            forecasts.append(
                DailyForecast(
                    date=day,
                    temp_max=temp_max,
                    temp_min=temp_min,
                    temp_avg=(temp_max + temp_min) / 2.0,
                    condition=condition,
                    humidity=int(last["main"]["humidity"]),
                    wind_speed=float(wind["speed"]) if wind is not None else 0.0,
                    icon=icon,
                )
            )
    except (KeyError, TypeError, ValueError) as exc:
        raise ProviderError(f"Malformed OpenWeatherMap response: {exc}") from exc

    return _pad_to_week(forecasts)