"""Collect one day's forecast from every provider and combine the results."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from dataclasses import replace
from typing import Any, Awaitable

import httpx

from .models import City, DailyForecast, PerSourceData, ProviderError, ProviderForecast
from .providers.open_meteo import fetch_open_meteo
from .providers.openweather import fetch_openweather
from .providers.weatherapi import fetch_weatherapi

logger = logging.getLogger(__name__)

WEEK_DAYS = 7
MAX_FAILED_DAYS = 4
_UNSET_MARKER = "your-key-here"

_LABELS = {
    "open_meteo": "Open-Meteo",
    "open_weather": "OpenWeatherMap",
    "weather_api": "WeatherAPI",
}


class EnsembleError(Exception):
    """The ensemble could not be built from the providers' data."""


def _is_configured(credential: str) -> bool:
    return bool(credential) and credential != _UNSET_MARKER


async def _attempt(job: Awaitable[list[DailyForecast]]) -> list[DailyForecast] | ProviderError:
    try:
        return await job
    except ProviderError as exc:
        return exc


def _select_day(
    result: list[DailyForecast] | ProviderError, day: int, label: str
) -> ProviderForecast | None:
    if isinstance(result, ProviderError):
        logger.warning("[Ensemble] %s failed: %s", label, result)
        return None
    if len(result) <= day:
        logger.warning("[Ensemble] %s returned insufficient data for day %d", label, day)
        return None
    daily = result[day]
    logger.info("[Ensemble] %s data available for day %d", label, day)
    return ProviderForecast(
        date=daily.date,
        temp_max=daily.temp_max,
        temp_min=daily.temp_min,
        condition=daily.condition,
    )


async def fetch_ensemble_day(
    day: int,
    city: City,
    openweather_key: str,
    weatherapi_key: str,
    client: httpx.AsyncClient | None = None,
) -> PerSourceData:
    """Fetch one forecast day from every configured provider concurrently.

    Raises EnsembleError if no provider delivered data for that day.
    """
    logger.info("[Ensemble] Fetching day %d for %s from all providers", day, city.name)

    jobs: dict[str, Awaitable[Any]] = {
        "open_meteo": fetch_open_meteo(city.latitude, city.longitude, client),
    }
    if _is_configured(openweather_key):
        jobs["open_weather"] = fetch_openweather(
            city.latitude, city.longitude, openweather_key, client
        )
    else:
        logger.warning("[Ensemble] OpenWeatherMap API key not configured")
    if _is_configured(weatherapi_key):
        jobs["weather_api"] = fetch_weatherapi(city.name, weatherapi_key, client)
    else:
        logger.warning("[Ensemble] WeatherAPI key not configured")

    results = await asyncio.gather(*(_attempt(job) for job in jobs.values()))

    per_source = PerSourceData()
    for name, result in zip(jobs, results):
        forecast = _select_day(result, day, _LABELS[name])
        if forecast is not None:
            per_source = replace(per_source, **{name: forecast})

    count = per_source.provider_count()
    if count == 0:
        raise EnsembleError(f"All providers failed for day {day}")

    logger.info("[Ensemble] Day %d: %d provider(s) available", day, count)
    return per_source


def calculate_final_forecast(
    per_source: PerSourceData, date: str | None = None
) -> tuple[float, float, str]:
    """Average the temperatures and pick the most common condition.

    On a tie the condition reported first wins.
    """
    max_temps, min_temps = per_source.extract_temperatures()
    conditions = per_source.get_conditions()

    if not max_temps or not min_temps:
        raise EnsembleError("No temperature data available")

    final_max = sum(max_temps) / len(max_temps)
    final_min = sum(min_temps) / len(min_temps)

    if conditions:
        final_condition = Counter(conditions).most_common(1)[0][0]
    else:
        final_condition = "Unknown"

    return final_max, final_min, final_condition


async def fetch_ensemble_week(
    city: City,
    openweather_key: str,
    weatherapi_key: str,
    client: httpx.AsyncClient | None = None,
) -> list[PerSourceData]:
    """Fetch all seven days concurrently; failed days come back empty.

    Raises EnsembleError when more than four days fail.
    """
    logger.info("[Ensemble] Fetching 7-day ensemble for %s", city.name)

    results = await asyncio.gather(
        *(
            fetch_ensemble_day(day, city, openweather_key, weatherapi_key, client)
            for day in range(WEEK_DAYS)
        ),
        return_exceptions=True,
    )

    days: list[PerSourceData] = []
    failed = 0
    for day, result in enumerate(results):
        if isinstance(result, EnsembleError):
            logger.warning("[Ensemble] Day %d failed: %s", day, result)
            failed += 1
            days.append(PerSourceData())
        elif isinstance(result, BaseException):
            raise result
        else:
            days.append(result)

    if failed > MAX_FAILED_DAYS:
        raise EnsembleError(f"Too many failed days: {failed}/{WEEK_DAYS}")

    logger.info(
        "[Ensemble] Successfully fetched ensemble data: %d/%d days",
        WEEK_DAYS - failed,
        WEEK_DAYS,
    )
    return days