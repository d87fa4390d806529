# weatherensemble

Daily weather forecasts from three providers: Open-Meteo, OpenWeatherMap and
WeatherAPI. Each provider's reply is turned into the same `DailyForecast` shape. The
package can then either fall back from one provider to the next, or ask all of them at
once and combine their answers for each day.

All network calls are `async` and use `httpx`. Every fetch function takes an optional
`httpx.AsyncClient`. Without one, it opens its own client for the call.

## Installation

```
pip install weatherensemble
```

The tests use pytest, pytest-asyncio and respx. They come with the `test` extra
(`weatherensemble[test]`).

## Data types

`weatherensemble.models` holds:

- `City`: `id`, `name`, `province`, `latitude`, `longitude` (frozen).
- `DailyForecast`: `date`, `temp_max`, `temp_min`, `temp_avg`, `condition`,
  `humidity`, `wind_speed`, `icon`. It has `to_dict()` and `from_dict(data)`.
  `from_dict` raises `ValueError` when a field is missing.
- `WeatherForecast`: `city`, `province`, `country`, `latitude`, `longitude`,
  `last_updated`, `forecast` (a list of `DailyForecast`). It also has `to_dict()` and
  `from_dict(data)`.
- `ProviderForecast`: one provider's `date`, `temp_max`, `temp_min` and `condition`.
- `PerSourceData`: the optional `open_meteo`, `open_weather` and `weather_api` entries
  for one day. `with_open_meteo`, `with_open_weather` and `with_weather_api` each return
  a new copy with that entry set. `provider_count()` counts the entries that are set.
  `extract_temperatures()` returns `(max_temps, min_temps)`. `get_conditions()` returns
  the conditions. These follow provider order.
- `ProviderError`: raised when a provider cannot give a usable forecast.

## Providers

Each provider module has an async fetch function and a pure normaliser. The normaliser
takes a decoded JSON payload. When the request fails, the JSON is invalid or the payload
is malformed, it raises `ProviderError`.

- `weatherensemble.providers.open_meteo`
  - `fetch_open_meteo(lat, lon, client=None)`
  - `normalize_open_meteo(data)` keeps at most seven days.
  - `map_wmo_code(code)` maps a WMO code to `(condition, icon)`. Unknown codes give
    `("Unknown", "cloudy")`.
- `weatherensemble.providers.openweather`
  - `fetch_openweather(lat, lon, api_key, client=None)`
  - `normalize_openweather(data)` groups the three-hourly entries by UTC date and takes
    the daily maximum and minimum. The last entry of each day supplies the humidity and
    wind. It pads the result to seven days by repeating the last day.
  - `map_openweather_condition(condition)`
- `weatherensemble.providers.weatherapi`
  - `fetch_weatherapi(city, api_key, client=None)`
  - `normalize_weatherapi(data)` gives one day for each entry in the payload.
  - `normalize_weatherapi_condition(condition)`
  - `map_weatherapi_icon(icon_url)`

```python
from weatherensemble.providers.open_meteo import map_wmo_code

map_wmo_code(61)   # ("Rain", "rainy")
```

Open-Meteo needs no key. OpenWeatherMap and WeatherAPI each need their own API key. The
services below treat a key as not configured when it is empty or still
`"your-key-here"`, and they skip that provider.

## Fallback forecast

`weatherensemble.weather_service.WeatherService(openweather_key, weatherapi_key)` has
`get_forecast(city, lat, lon, client=None)`. It tries Open-Meteo, then OpenWeatherMap,
then WeatherAPI, and returns a `WeatherForecast` from the first provider that succeeds.
That forecast has country `"Indonesia"`, an empty province and a UTC timestamp. If every
provider fails, it raises `ProviderError`.

```python
import asyncio
from weatherensemble.weather_service import WeatherService

service = WeatherService(openweather_key="placeholder", weatherapi_key="placeholder")
forecast = asyncio.run(service.get_forecast("Jakarta", -6.2088, 106.8456))
print(forecast.to_dict())
```

## Ensemble forecast

`weatherensemble.ensemble_fetcher` provides:

- `fetch_ensemble_day(day, city, openweather_key, weatherapi_key, client=None)` queries
  the configured providers concurrently. It returns a `PerSourceData` holding each
  provider's entry for day index `day`. If no provider has data for that day, it raises
  `EnsembleError`.
- `fetch_ensemble_week(city, openweather_key, weatherapi_key, client=None)` fetches all
  seven days concurrently and returns seven `PerSourceData` values. A day that failed
  comes back as an empty `PerSourceData`. If more than four days fail, it raises
  `EnsembleError`.
- `calculate_final_forecast(per_source, date=None)` returns the mean maximum
  temperature, the mean minimum temperature and the most common condition. On a tie, the
  condition reported first wins. With no data it raises `EnsembleError`.

```python
from weatherensemble.models import PerSourceData, ProviderForecast
from weatherensemble.ensemble_fetcher import calculate_final_forecast

per_source = (
    PerSourceData()
    .with_open_meteo(ProviderForecast("2024-01-01", 30.0, 22.0, "Sunny"))
    .with_open_weather(ProviderForecast("2024-01-01", 31.0, 23.0, "Clear"))
)
calculate_final_forecast(per_source, "2024-01-01")  # (30.5, 22.5, "Sunny")
```

## Dates

`weatherensemble.date_utils` works with `YYYY-MM-DD` strings. Weekdays are numbered
0 = Monday through 6 = Sunday.

- `ForecastPeriod.current_week()` and `ForecastPeriod.next_week(base_day)`.
- `get_forecast_dates(period, today=None)`.
- `get_current_week_dates(today=None)` returns today and the six days after it.
- `get_next_week_date(base_day, today=None)` returns a one-element list with the next
  occurrence of that weekday, plus seven days.
- `get_weekday_name(day_number)`.
- `get_day_of_week_from_date(date_str)`.
- `is_today_weekday(base_day, today=None)`.
- `days_to_weekday(base_day, today=None)`.
- `get_dates_between(start_date, end_date)` is inclusive, and empty when the end comes
  before the start.

An invalid day number or an unparsable date raises `ValueError`. The `today` argument
defaults to the current local date.

## Other pieces

- `weatherensemble.metrics.TaskMetrics` counts successful, failed and timed-out tasks
  and records start and end times. `finish_total()` stamps the end. `total_duration()`
  gives the time in seconds. `log_summary()` writes a summary through `logging`.
- `weatherensemble.api_service.ApiService(base_url, client=None)` has `get(endpoint)`
  and `post(endpoint, body)`. Both return the decoded JSON reply. When it creates its own
  client, the timeout is 30 seconds.

## What it does not do

The package is a library only. It has no HTTP server or API endpoints, no command-line
tool, no catalogue of cities or city-name lookup, no forecast cache, and no confidence
rating or weighted averaging of the ensemble.