"""The weather diary application: storage, forecast refresh and a console front end."""

from __future__ import annotations

import argparse
import logging
import os
import sqlite3
import sys
import time
from typing import Sequence

from ecohort.display import (
    RecordForm,
    TextItem,
    climate_texts,
    registry_rows,
)
from ecohort.repository import Registro, RepositoryError, SQLiteRepository
from ecohort.weather import WeatherError, get_predictions

logger = logging.getLogger(__name__)

REFRESH_SECONDS = 30


def _default_storage_root() -> str:
    return os.path.join(os.path.expanduser("~"), ".ecohort")


def database_path(storage_root: str) -> str:
    """Return the database file: ``DBpath`` if set, else ``sql.db`` under the root."""
    path = os.environ.get("DBpath", "")
    if path:
        return path
    path = storage_root + "/sql.db"
    logger.info("La base de datos está en: %s", path)
    return path


class EcoHortApp:
    """Holds the database, the current forecast texts and the record table."""

    def __init__(self, db_path: str | None = None, weather_url: str | None = None) -> None:
        self.db_path = db_path
        self.weather_url = weather_url
        self.conn: sqlite3.Connection | None = None
        self.repository: SQLiteRepository | None = None
        self.climate: tuple[TextItem, ...] = climate_texts(None)
        self.rows: list[tuple[str, ...]] = registry_rows([])

    def __enter__(self) -> EcoHortApp:
        self.setup_db(self.connect())
        self.refresh_records()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def connect(self) -> sqlite3.Connection:
        """Open the SQLite database."""
        path = self.db_path
        if path is None:
            root = _default_storage_root()
            os.makedirs(root, exist_ok=True)
            path = database_path(root)
            self.db_path = path
        return sqlite3.connect(path)

    def setup_db(self, conn: sqlite3.Connection) -> None:
        """Attach the repository to ``conn`` and create the table."""
        self.conn = conn
        self.repository = SQLiteRepository(conn)
        try:
            self.repository.migrate()
        except sqlite3.Error as exc:
            logger.error("%s", exc)
            raise RepositoryError(f"cannot prepare database: {exc}") from exc

    def close(self) -> None:
        """Close the database connection, if open."""
        if self.conn is not None:
            self.conn.close()
        self.conn = None
        self.repository = None

    def _repo(self) -> SQLiteRepository:
        if self.repository is None:
            raise RuntimeError("database is not set up")
        return self.repository

    def refresh_climate(self) -> tuple[TextItem, ...]:
        """Fetch today's forecast and rebuild the forecast texts."""
        logger.info("refrescando valores meteo")
        try:
            forecast = get_predictions(self.weather_url)
        except (WeatherError, ValueError) as exc:
            logger.error("%s", exc)
            forecast = None
        self.climate = climate_texts(forecast)
        return self.climate

    def refresh_records(self) -> list[tuple[str, ...]]:
        """Reload the record table from the database."""
        repo = self._repo()
        try:
            records = repo.read_all()
        except (RepositoryError, sqlite3.Error) as exc:
            logger.error("%s", exc)
            records = []
        self.rows = registry_rows(records)
        return self.rows

    def add_record(self, form: RecordForm) -> Registro | None:
        """Store the record typed into ``form``; ValueError if the form is invalid."""
        registro = form.to_registro()
        repo = self._repo()
        try:
            stored: Registro | None = repo.insert(registro)
        except (RepositoryError, sqlite3.Error) as exc:
            logger.error("%s", exc)
            stored = None
        self.refresh_records()
        return stored

    def delete_record(self, row: int) -> bool:
        """Delete the record shown in table row ``row``; tell whether it went."""
        try:
            record_id = int(self.rows[row][0])
        except ValueError:
            record_id = 0
        repo = self._repo()
        try:
            repo.delete(record_id)
            deleted = True
        except (RepositoryError, sqlite3.Error) as exc:
            logger.error("%s", exc)
            deleted = False
        self.refresh_records()
        return deleted


def _render_climate(items: Sequence[TextItem]) -> str:
    return "  |  ".join(item.text for item in items)


def _render_rows(rows: Sequence[Sequence[str]]) -> str:
    widths = [max(map(len, column)) for column in zip(*rows)]
    return "\n".join(
        "  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip()
        for row in rows
    )


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ecohort", description="Eco Hort App")
    parser.add_argument("--db", dest="db_path", help="database file")
    parser.add_argument("--url", dest="weather_url", help="forecast service URL")
    commands = parser.add_subparsers(dest="command")
    commands.add_parser("show", help="show the forecast and the records")
    add = commands.add_parser("add", help="add a record")
    add.add_argument("date", help="YYYY-MM-DD")
    add.add_argument("precipitation")
    add.add_argument("temp_max")
    add.add_argument("temp_min")
    add.add_argument("humidity")
    delete = commands.add_parser("delete", help="delete a record by id")
    delete.add_argument("id")
    watch = commands.add_parser("watch", help="refresh the forecast periodically")
    watch.add_argument("--interval", type=float, default=REFRESH_SECONDS)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the console front end."""
    args = _parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO,
        stream=sys.stdout,
        format="%(levelname)s\t%(asctime)s %(message)s",
    )
    command = args.command or "show"
    with EcoHortApp(args.db_path, args.weather_url) as app:
        if command == "add":
            form = RecordForm(
                args.date, args.precipitation, args.temp_max, args.temp_min, args.humidity
            )
            try:
                stored = app.add_record(form)
            except ValueError as exc:
                print(f"invalid record: {exc}", file=sys.stderr)
                return 1
            if stored is None:
                return 1
            print(f"added record {stored.id}")
        elif command == "delete":
            row = next(
                (index for index, cells in enumerate(app.rows) if index and cells[0] == args.id),
                None,
            )
            if row is None or not app.delete_record(row):
                print(f"no record with id {args.id}", file=sys.stderr)
                return 1
            print(f"deleted record {args.id}")
        elif command == "watch":
            try:
                while True:
                    print(_render_climate(app.refresh_climate()), flush=True)
                    time.sleep(args.interval)
            except KeyboardInterrupt:
                return 0
        else:
            print(_render_climate(app.refresh_climate()))
            print(_render_rows(app.rows))
    return 0


if __name__ == "__main__":
    sys.exit(main())