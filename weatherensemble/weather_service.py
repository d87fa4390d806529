"""Forecast lookup that falls back from one provider to the next."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable

import httpx

from .models import DailyForecast, ProviderError, WeatherForecast
from .providers.open_meteo import fetch_open_meteo
from .providers.openweather import fetch_openweather
from .providers.weatherapi import fetch_weatherapi

logger = logging.getLogger(__name__)

_UNSET_MARKER = "your-key-here"

ALL_FAILED_MESSAGE = (
    "Failed to fetch weather forecast from all available providers. "
    "Please try again later or check your API configuration."
)


def _is_configured(credential: str) -> bool:
    return bool(credential) and credential != _UNSET_MARKER


@dataclass
class WeatherService:
    """Fetches forecasts from Open-Meteo, then OpenWeatherMap, then WeatherAPI."""

    openweather_key: str
    weatherapi_key: str

    async def get_forecast(
        self,
        city: str,
        lat: float,
        lon: float,
        client: httpx.AsyncClient | None = None,
    ) -> WeatherForecast:
        """Return the first forecast a provider delivers; raise ProviderError if none does."""
        logger.info("Getting weather forecast for city=%s, lat=%s, lon=%s", city, lat, lon)

        attempts: list[tuple[str, Callable[[], Awaitable[list[DailyForecast]]]]] = [
            ("Open-Meteo", lambda: fetch_open_meteo(lat, lon, client)),
        ]
        if _is_configured(self.openweather_key):
            attempts.append(
                ("OpenWeatherMap", lambda: fetch_openweather(lat, lon, self.openweather_key, client))
            )
        else:
            logger.warning("OpenWeatherMap API key not configured, skipping provider")
        if _is_configured(self.weatherapi_key):
            attempts.append(
                ("WeatherAPI", lambda: fetch_weatherapi(city, self.weatherapi_key, client))
            )
        else:
            logger.warning("WeatherAPI key not configured, skipping provider")

        for label, fetch in attempts:
            logger.info("Attempting to fetch from %s provider", label)
            try:
                days = await fetch()
            except ProviderError as exc:
                logger.warning("%s provider failed: %s", label, exc)
                continue
            logger.info("Successfully retrieved forecast from %s", label)
            return WeatherForecast(
                city=city,
                province="",
                country="Indonesia",
                latitude=lat,
                longitude=lon,
                last_updated=datetime.now(timezone.utc).isoformat(),
                forecast=days,
            )

        logger.error("All weather providers failed for city=%s", city)
        raise ProviderError(ALL_FAILED_MESSAGE)