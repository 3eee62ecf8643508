import json
from datetime import datetime

import pytest

from ecohort.weather import (
    DailyForecast,
    WeatherError,
    fetch_json,
    first_data_url,
    get_predictions,
    parse_forecast,
    read_forecast,
)

NOW = datetime(2024, 6, 1, 12, 0, 0)


def _payload(precip=30, tmax=28, tmin=17, hum=85):
    return [
        {
            "nombre": "Barcelona",
            "prediccion": {
                "dia": [
                    {
                        "probPrecipitacion": [{"value": precip, "periodo": "00-24"}],
                        "temperatura": {"maxima": tmax, "minima": tmin, "dato": []},
                        "humedadRelativa": {"maxima": hum, "minima": 40, "dato": []},
                        "fecha": "2024-06-01T00:00:00",
                    },
                    {
                        "probPrecipitacion": [{"value": 99}],
                        "temperatura": {"maxima": 1, "minima": 0},
                        "humedadRelativa": {"maxima": 2},
                    },
                ]
            },
            "id": 8019,
        }
    ]


def _write(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path.as_uri()


def test_parse_forecast_takes_first_day():
    result = parse_forecast(_payload(), NOW)
    assert result == DailyForecast(30, 28, 17, 85, NOW)


def test_parse_forecast_missing_temperature_defaults_to_zero():
    payload = _payload()
    del payload[0]["prediccion"]["dia"][0]["temperatura"]
    result = parse_forecast(payload, NOW)
    assert (result.temperatura_max, result.temperatura_min) == (0, 0)
    assert result.prob_precipitacio == 30


def test_parse_forecast_default_time_is_now():
    before = datetime.now()
    result = parse_forecast(_payload())
    assert before <= result.time <= datetime.now()


@pytest.mark.parametrize(
    "payload",
    [
        [],
        None,
        {"prediccion": {}},
        [{"prediccion": {"dia": []}}],
        [{"prediccion": {"dia": [{"probPrecipitacion": []}]}}],
        [{}],
    ],
)
def test_parse_forecast_bad_layout(payload):
    with pytest.raises(WeatherError):
        parse_forecast(payload, NOW)


def test_parse_forecast_rejects_non_integer():
    payload = _payload()
    payload[0]["prediccion"]["dia"][0]["temperatura"]["maxima"] = "hot"
    with pytest.raises(WeatherError):
        parse_forecast(payload, NOW)


def test_fetch_json_reads_file_url(tmp_path):
    url = _write(tmp_path, "doc.json", {"a": [1, 2]})
    assert fetch_json(url, 5) == {"a": [1, 2]}


def test_fetch_json_invalid_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(WeatherError):
        fetch_json(path.as_uri(), 5)


def test_fetch_json_unreachable(tmp_path):
    with pytest.raises(WeatherError):
        fetch_json((tmp_path / "missing.json").as_uri(), 5)


def test_first_data_url_returns_datos(tmp_path):
    target = _write(tmp_path, "data.json", _payload())
    index = _write(tmp_path, "index.json", {"estado": 200, "datos": target})
    assert first_data_url(index, 5) == target


def test_first_data_url_missing_field_is_empty(tmp_path):
    index = _write(tmp_path, "index.json", {"estado": 200})
    assert first_data_url(index, 5) == ""


def test_first_data_url_rejects_array(tmp_path):
    index = _write(tmp_path, "index.json", [1, 2, 3])
    with pytest.raises(WeatherError):
        first_data_url(index, 5)


def test_read_forecast_from_file(tmp_path):
    url = _write(tmp_path, "data.json", _payload(precip=60, hum=50))
    result = read_forecast(url, 5)
    assert (result.prob_precipitacio, result.humitat_relativa) == (60, 50)


def test_get_predictions_follows_link(tmp_path):
    target = _write(tmp_path, "data.json", _payload(tmax=31, tmin=20))
    index = _write(tmp_path, "index.json", {"datos": target})
    result = get_predictions(index, 5)
    assert (result.temperatura_max, result.temperatura_min) == (31, 20)


def test_get_predictions_uses_environment(tmp_path, monkeypatch):
    target = _write(tmp_path, "data.json", _payload(precip=5))
    index = _write(tmp_path, "index.json", {"datos": target})
    monkeypatch.setenv("AEMET_URL", index)
    assert get_predictions().prob_precipitacio == 5