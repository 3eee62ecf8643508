"""SQLite storage for daily weather records."""

from __future__ import annotations

import math
import sqlite3
from dataclasses import dataclass, replace
from datetime import datetime

_SELECT = (
    "select id, data_registre, precipitacio, temp_maxima, temp_minima, humitat "
    "from registres"
)

_SCHEMA = """create table if not exists registres(
    id integer primary key autoincrement,
    data_registre integer not null,
    precipitacio integer not null,
    temp_maxima integer not null,
    temp_minima integer not null,
    humitat integer not null)"""


class RepositoryError(Exception):
    """Base class for storage errors."""


class InvalidIdError(RepositoryError, ValueError):
    """Raised when a record id of zero is given."""

    def __init__(self, message: str = "El ID recibido es incorrecto") -> None:
        super().__init__(message)


class UpdateError(RepositoryError):
    """Raised when an update touched no rows."""

    def __init__(self, message: str = "error actualizando datos") -> None:
        super().__init__(message)


class DeleteError(RepositoryError):
    """Raised when a delete touched no rows."""

    def __init__(self, message: str = "error borrando datos") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class Registro:
    """One day's weather record."""

    data: datetime
    precipitacio: int
    temp_maxima: int
    temp_minima: int
    humitat: int
    id: int = 0

    @classmethod
    def _from_row(cls, row: tuple) -> Registro:
        record_id, stamp, precipitacio, temp_maxima, temp_minima, humitat = row
        return cls(
            data=datetime.fromtimestamp(stamp),
            precipitacio=precipitacio,
            temp_maxima=temp_maxima,
            temp_minima=temp_minima,
            humitat=humitat,
            id=record_id,
        )

    def _values(self) -> tuple[int, int, int, int, int]:
        return (
            math.floor(self.data.timestamp()),
            self.precipitacio,
            self.temp_maxima,
            self.temp_minima,
            self.humitat,
        )


class SQLiteRepository:
    """Reads and writes records in the ``registres`` table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def migrate(self) -> None:
        """Create the table if it does not exist yet."""
        with self.conn:
            self.conn.execute(_SCHEMA)

    def insert(self, registro: Registro) -> Registro:
        """Store a record and return it with its new id."""
        with self.conn:
            cursor = self.conn.execute(
                "insert into registres "
                "(data_registre, precipitacio, temp_maxima, temp_minima, humitat) "
                "values (?, ?, ?, ?, ?)",
                registro._values(),
            )
        return replace(registro, id=cursor.lastrowid)

    def read_all(self) -> list[Registro]:
        """Return every record, newest id first."""
        rows = self.conn.execute(f"{_SELECT} order by id desc").fetchall()
        return [Registro._from_row(row) for row in rows]

    def read(self, record_id: int) -> Registro:
        """Return the record with the given id."""
        row = self.conn.execute(
            f"{_SELECT} where id = ? order by id desc limit 1", (record_id,)
        ).fetchone()
        if row is None:
            raise RepositoryError(f"no record with id {record_id}")
        return Registro._from_row(row)

    def update(self, record_id: int, registro: Registro) -> None:
        """Overwrite the fields of an existing record."""
        if record_id == 0:
            raise InvalidIdError()
        with self.conn:
            cursor = self.conn.execute(
                "update registres set data_registre = ?, precipitacio = ?, "
                "temp_maxima = ?, temp_minima = ?, humitat = ? where id = ?",
                (*registro._values(), record_id),
            )
        if cursor.rowcount == 0:
            raise UpdateError()

    def delete(self, record_id: int) -> None:
        """Remove the record with the given id."""
        if record_id == 0:
            raise InvalidIdError()
        with self.conn:
            cursor = self.conn.execute(
                "delete from registres where id = ?", (record_id,)
            )
        if cursor.rowcount == 0:
            raise DeleteError()