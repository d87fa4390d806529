"""Open-Meteo, OpenWeatherMap and WeatherAPI clients that normalise replies to daily forecasts."""