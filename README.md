# ecohort

A small console tool for keeping a weather log for an urban vegetable garden.

It does two jobs:

- It fetches today's forecast from a two-step forecast service. The first URL
  answers with a JSON object whose `datos` field holds the URL of the real
  forecast document. From that document it takes the chance of rain, the
  maximum and minimum temperature and the maximum relative humidity of the
  first day.
- It keeps your own daily records (date, chance of rain, maximum and minimum
  temperature, humidity) in a local SQLite database. You can add, list and
  delete them.

The package uses only the Python standard library and needs Python 3.10 or
later.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running

```
ecohort [--db FILE] [--url URL] [show | add | delete | watch]
```

- `ecohort` or `ecohort show` prints the four forecast values on one line and
  then the table of records, newest first.
- `ecohort add DATE PRECIPITATION TEMP_MAX TEMP_MIN HUMIDITY` stores a record.
  `DATE` is `YYYY-MM-DD`; the other four are whole numbers. It prints
  `added record N` and exits with status 1 if a field is invalid.
- `ecohort delete ID` removes the record with that id, or exits with status 1
  if there is none.
- `ecohort watch [--interval SECONDS]` fetches the forecast again and prints
  it every 30 seconds (or the given interval) until you press Ctrl-C.

`--db` chooses the database file and `--url` the forecast service URL. Without
them, two environment variables are used:

- `DBpath`: the path of the SQLite database file. When it is not set, the
  database is `sql.db` inside `~/.ecohort`, which is created if needed.
- `AEMET_URL`: the full URL of the forecast service, including any key it
  needs.

If the forecast cannot be fetched or understood, the four values are shown as
`Undefined`. The local records still work.

Log lines (`INFO` and `ERROR`) are written to standard output.

## Using it as a library

### Records

`ecohort.repository.SQLiteRepository` works with any `sqlite3` connection:

```python
import sqlite3

from ecohort.repository import SQLiteRepository

repo = SQLiteRepository(sqlite3.connect("garden.db"))
repo.migrate()                     # creates the "registres" table if missing
for registro in repo.read_all():   # newest id first
    print(registro)
```

A `Registro` is a frozen dataclass with `data` (a `datetime`, stored as whole
Unix seconds), `precipitacio`, `temp_maxima`, `temp_minima`, `humitat` and
`id`. `insert` returns the record with its new id; `read`, `update` and
`delete` take an id.

`update` and `delete` raise `InvalidIdError` when given an id of 0, and
`UpdateError` or `DeleteError` when no row was affected. `read` raises
`RepositoryError` when there is no such record. All of these are subclasses
of `RepositoryError`.

### Forecast

```python
from ecohort.display import climate_texts
from ecohort.weather import WeatherError, get_predictions

try:
    forecast = get_predictions("https://forecast.example.com/daily", 10)
except WeatherError:
    forecast = None

for item in climate_texts(forecast):
    print(item.text, item.color, item.alignment)
```

`get_predictions` reads `AEMET_URL` when no URL is given. `parse_forecast`
works on an already decoded forecast document and raises `WeatherError` when
its layout is not as expected.

`climate_texts` returns four `TextItem`s. The chance of rain is green when it
is 50 % or more and red below that; the other values use the default colour.
When the forecast is `None` all four read `Undefined` in grey.

### Table and form

`registry_rows` turns records into rows of text headed by the column names.
`RecordForm` holds the text of the five form fields; `validate()` tells
whether they are acceptable and `to_registro()` builds a `Registro` (dates
are read as midnight UTC) or raises `ValueError`.

`ecohort.app.EcoHortApp` ties these together:

```python
from ecohort.app import EcoHortApp
from ecohort.display import RecordForm

with EcoHortApp(db_path="garden.db") as app:
    app.add_record(RecordForm("2024-05-01", "30", "24", "12", "65"))
    print(app.rows)            # header row first, then the records
    app.delete_record(1)       # deletes the record shown in table row 1
```

## What it does not do

There is no graphical window and no forecast chart: the forecast and the
records are shown as plain text on the console. Records cannot be edited from
the command line; `SQLiteRepository.update` is available from Python only.