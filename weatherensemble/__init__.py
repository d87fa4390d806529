"""Daily forecasts from several weather providers, normalised and combined into an ensemble."""

__version__ = "0.1.0"