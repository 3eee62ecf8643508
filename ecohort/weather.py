"""Fetching and parsing the daily forecast from the weather service."""

from __future__ import annotations

import json
import logging
import os
import urllib.error
import urllib.request
from dataclasses import dataclass
from datetime import datetime
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class WeatherError(Exception):
    """Raised when the forecast cannot be fetched or understood."""


@dataclass(frozen=True)
class DailyForecast:
    """Today's figures taken from the forecast."""

    prob_precipitacio: int
    temperatura_max: int
    temperatura_min: int
    humitat_relativa: int
    time: datetime


def fetch_json(url: str, timeout: float = DEFAULT_TIMEOUT) -> Any:
    """GET ``url`` without caching and decode the body as JSON."""
    request = urllib.request.Request(url, headers={"cache-control": "no-cache"})
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            body = response.read()
    except (urllib.error.URLError, OSError, ValueError) as exc:
        logger.error("Error connecting to AEMET: %s", exc)
        raise WeatherError(f"cannot fetch {url!r}: {exc}") from exc
    try:
        return json.loads(body)
    except ValueError as exc:
        logger.error("Error decoding JSON: %s", exc)
        raise WeatherError(f"invalid JSON from {url!r}: {exc}") from exc


def first_data_url(url: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Return the temporary data URL found under ``datos``."""
    payload = fetch_json(url, timeout)
    if payload is None:
        return ""
    if not isinstance(payload, dict):
        raise WeatherError("expected a JSON object with a 'datos' field")
    datos = payload.get("datos")
    if datos is None:
        return ""
    if not isinstance(datos, str):
        raise WeatherError("'datos' is not a string")
    return datos


def _as_int(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise WeatherError(f"expected an integer, got {value!r}")
    return value


def _section(container: dict, key: str, kind: type) -> Any:
    value = container.get(key)
    if value is None:
        return kind()
    if not isinstance(value, kind):
        raise WeatherError(f"field {key!r} has the wrong type")
    return value


def parse_forecast(payload: Any, now: datetime | None = None) -> DailyForecast:
    """Pick today's precipitation, temperatures and humidity from a forecast."""
    try:
        prediccion = _section(payload[0], "prediccion", dict)
        day = _section(prediccion, "dia", list)[0]
        precipitacion = _as_int(_section(day, "probPrecipitacion", list)[0].get("value"))
        temperatura = _section(day, "temperatura", dict)
        humedad = _section(day, "humedadRelativa", dict)
        result = DailyForecast(
            prob_precipitacio=precipitacion,
            temperatura_max=_as_int(temperatura.get("maxima")),
            temperatura_min=_as_int(temperatura.get("minima")),
            humitat_relativa=_as_int(humedad.get("maxima")),
            time=now if now is not None else datetime.now(),
        )
    except (KeyError, IndexError, TypeError, AttributeError) as exc:
        raise WeatherError(f"unexpected forecast layout: {exc!r}") from exc
    return result


def read_forecast(url: str, timeout: float = DEFAULT_TIMEOUT) -> DailyForecast:
    """Fetch the forecast document at ``url`` and parse it."""
    return parse_forecast(fetch_json(url, timeout))


def get_predictions(
    url: str | None = None, timeout: float = DEFAULT_TIMEOUT
) -> DailyForecast:
    """Follow the service URL (default: ``AEMET_URL``) to today's forecast."""
    if url is None:
        url = os.environ.get("AEMET_URL", "")
    return read_forecast(first_data_url(url, timeout), timeout)