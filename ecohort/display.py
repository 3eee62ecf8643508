"""Presentation of forecast figures and stored records, and the new-record form."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable

from ecohort.repository import Registro
from ecohort.weather import DailyForecast

DATE_FORMAT = "%Y-%m-%d"

REGISTRY_HEADER = (
    "ID",
    "Data",
    "Precipitacio",
    "Temp. Máxima",
    "Temp. Mínima",
    "Humedad",
)

FORM_LABELS = {
    "data": "Fecha de registro",
    "precipitacio": "Probabilidad de Precipitación",
    "temp_maxima": "Temperatura Máxima",
    "temp_minima": "Temperatura Mínima",
    "humitat": "Humedad",
}

_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class Alignment(enum.Enum):
    """Horizontal placement of a text item."""

    LEADING = "leading"
    CENTER = "center"
    TRAILING = "trailing"


@dataclass(frozen=True)
class Color:
    """An RGBA colour."""

    r: int
    g: int
    b: int
    a: int = 255


GREY = Color(155, 155, 155)
GREEN = Color(0, 180, 0)
RED = Color(180, 0, 0)


@dataclass(frozen=True)
class TextItem:
    """A line of text with its colour (None for the default) and alignment."""

    text: str
    color: Color | None
    alignment: Alignment


def climate_texts(
    forecast: DailyForecast | None,
) -> tuple[TextItem, TextItem, TextItem, TextItem]:
    """Build the four forecast texts; ``None`` means the forecast is unavailable."""
    if forecast is None:
        texts = (
            ("Precipitación: Undefined", GREY),
            ("Temp Max: Undefined", GREY),
            ("Temp Min: Undefined", GREY),
            ("Humedad: Undefined", GREY),
        )
    else:
        rain_color = RED if forecast.prob_precipitacio < 50 else GREEN
        texts = (
            (f"Precipitación: {forecast.prob_precipitacio}%", rain_color),
            (f"Temp. Máxima: {forecast.temperatura_max}", None),
            (f"Temp. Mínima: {forecast.temperatura_min}", None),
            (f"Humedad Relativa: {forecast.humitat_relativa}%", None),
        )
    alignments = (
        Alignment.LEADING,
        Alignment.CENTER,
        Alignment.CENTER,
        Alignment.TRAILING,
    )
    precipitacio, temp_max, temp_min, humitat = (
        TextItem(text, color, alignment)
        for (text, color), alignment in zip(texts, alignments)
    )
    return precipitacio, temp_max, temp_min, humitat


def registry_rows(records: Iterable[Registro]) -> list[tuple[str, ...]]:
    """Turn records into table rows of text, headed by the column names."""
    rows: list[tuple[str, ...]] = [REGISTRY_HEADER]
    rows.extend(
        (
            str(record.id),
            record.data.strftime(DATE_FORMAT),
            f"{record.precipitacio}%",
            str(record.temp_maxima),
            str(record.temp_minima),
            f"{record.humitat}%",
        )
        for record in records
    )
    return rows


def validate_date(text: str) -> datetime:
    """Parse a YYYY-MM-DD date as midnight UTC; raise ValueError otherwise."""
    if not _DATE_RE.fullmatch(text):
        raise ValueError(f"cannot parse {text!r} as YYYY-MM-DD")
    return datetime.strptime(text, DATE_FORMAT).replace(tzinfo=timezone.utc)


def validate_int(text: str) -> int:
    """Parse a signed decimal 64-bit integer; raise ValueError otherwise."""
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid integer {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"integer {text!r} out of range")
    return value


@dataclass
class RecordForm:
    """The text typed into the new-record form."""

    data: str = ""
    precipitacio: str = ""
    temp_maxima: str = ""
    temp_minima: str = ""
    humitat: str = ""

    def validate(self) -> bool:
        """Tell whether every field holds an acceptable value."""
        try:
            self.to_registro()
        except ValueError:
            return False
        return True

    def to_registro(self) -> Registro:
        """Build a record from the form; raise ValueError if a field is invalid."""
        return Registro(
            data=validate_date(self.data),
            precipitacio=validate_int(self.precipitacio),
            temp_maxima=validate_int(self.temp_maxima),
            temp_minima=validate_int(self.temp_minima),
            humitat=validate_int(self.humitat),
        )