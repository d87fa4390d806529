"""Data types shared by the forecast providers, the ensemble and the services."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Mapping


class ProviderError(Exception):
    """A weather provider could not deliver a usable forecast."""


@dataclass(frozen=True)
class City:
    """A known city and its coordinates."""

    id: int
    name: str
    province: str
    latitude: float
    longitude: float


def _require(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field: {key}") from None


@dataclass
class DailyForecast:
    """One day of a provider's forecast, normalised to common units."""

    date: str
    temp_max: float
    temp_min: float
    temp_avg: float
    condition: str
    humidity: int
    wind_speed: float
    icon: str

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DailyForecast":
        """Build a forecast day from a decoded JSON object."""
        return cls(
            date=str(_require(data, "date")),
            temp_max=float(_require(data, "temp_max")),
            temp_min=float(_require(data, "temp_min")),
            temp_avg=float(_require(data, "temp_avg")),
            condition=str(_require(data, "condition")),
            humidity=int(_require(data, "humidity")),
            wind_speed=float(_require(data, "wind_speed")),
            icon=str(_require(data, "icon")),
        )


@dataclass
class WeatherForecast:
    """A multi-day forecast for one place."""

    city: str
    province: str
    country: str
    latitude: float
    longitude: float
    last_updated: str
    forecast: list[DailyForecast] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dictionary."""
        return {
            "city": self.city,
            "province": self.province,
            "country": self.country,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "last_updated": self.last_updated,
            "forecast": [day.to_dict() for day in self.forecast],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WeatherForecast":
        """Build a forecast from a decoded JSON object."""
        days = _require(data, "forecast")
        if not isinstance(days, list):
            raise ValueError("field 'forecast' must be a list")
        return cls(
            city=str(_require(data, "city")),
            province=str(_require(data, "province")),
            country=str(_require(data, "country")),
            latitude=float(_require(data, "latitude")),
            longitude=float(_require(data, "longitude")),
            last_updated=str(_require(data, "last_updated")),
            forecast=[DailyForecast.from_dict(day) for day in days],
        )


@dataclass(frozen=True)
class ProviderForecast:
    """One provider's view of a single day."""

    date: str
    temp_max: float
    temp_min: float
    condition: str


@dataclass(frozen=True)
class PerSourceData:
    """The forecasts that each provider gave for one day."""

    open_meteo: ProviderForecast | None = None
    open_weather: ProviderForecast | None = None
    weather_api: ProviderForecast | None = None

    def with_open_meteo(self, forecast: ProviderForecast) -> "PerSourceData":
        return replace(self, open_meteo=forecast)

    def with_open_weather(self, forecast: ProviderForecast) -> "PerSourceData":
        return replace(self, open_weather=forecast)

    def with_weather_api(self, forecast: ProviderForecast) -> "PerSourceData":
        return replace(self, weather_api=forecast)

    def _present(self) -> list[ProviderForecast]:
        return [
            forecast
            for forecast in (self.open_meteo, self.open_weather, self.weather_api)
            if forecast is not None
        ]

    def provider_count(self) -> int:
        """Number of providers that delivered data."""
        return len(self._present())

    def extract_temperatures(self) -> tuple[list[float], list[float]]:
        """Maximum and minimum temperatures, in provider order."""
        present = self._present()
        return [f.temp_max for f in present], [f.temp_min for f in present]

    def get_conditions(self) -> list[str]:
        """Conditions reported by the providers, in provider order."""
        return [f.condition for f in self._present()]