from __future__ import annotations

import pytest

from httpx_objectmapper.client import ObjectMapperClient
from httpx_objectmapper.core.errors import ErrorKind
from httpx_objectmapper.core.result import Failure, Success
from tests.shared.models import (
    EmptyableWeather,
    Forecast,
    ImmutableForecast,
    ImmutableWeatherResponse,
    WeatherResponse,
)
from tests.shared.payloads import as_body, make_weather_payload, wrap_payload
from tests.shared.transport import Collector, build_config, build_sync_client, json_handler


def _fetch(body: bytes, attach, *, method: str = "GET", status_code: int = 200):
    collector = Collector()
    client = ObjectMapperClient(
        config=build_config(),
        client=build_sync_client(json_handler(body, status_code=status_code)),
    )
    with client:
        attach(client.request(method, "/weather"), collector).resume()
    return collector.only.result


def _assert_weather(weather) -> None:
    assert weather.location == "NYC"
    assert len(weather.three_day_forecast) == 1
    forecast = weather.three_day_forecast[0]
    assert (forecast.day, forecast.temperature, forecast.conditions) == ("Mon", 50, "Rain")


@pytest.mark.parametrize("cls", [WeatherResponse, ImmutableWeatherResponse])
def test_whole_document_maps_to_weather(cls):
    result = _fetch(
        as_body(make_weather_payload()),
        lambda request, callback: request.response_object(cls, callback),
    )
    assert isinstance(result, Success)
    _assert_weather(result.value)


@pytest.mark.parametrize("key_path", ["data", "response.data"])
def test_key_path_document_maps_identically(key_path):
    result = _fetch(
        as_body(wrap_payload(make_weather_payload(), key_path)),
        lambda request, callback: request.response_object(
            WeatherResponse, callback, key_path=key_path
        ),
    )
    _assert_weather(result.unwrap())


@pytest.mark.parametrize("cls", [Forecast, ImmutableForecast])
@pytest.mark.parametrize(
    ("payload", "key_path"),
    [
        (make_weather_payload(forecasts=3)["three_day_forecast"], None),
        (make_weather_payload(forecasts=3), "three_day_forecast"),
        (wrap_payload(make_weather_payload(forecasts=3), "response.data"), "response.data.three_day_forecast"),
    ],
    ids=["root-array", "key-path", "nested-key-path"],
)
def test_array_responses(cls, payload, key_path):
    result = _fetch(
        as_body(payload),
        lambda request, callback: request.response_array(cls, callback, key_path=key_path),
    )
    forecasts = result.unwrap()
    assert len(forecasts) == 3
    assert all(isinstance(f, cls) for f in forecasts)


def test_empty_204_get_returns_sentinel():
    result = _fetch(
        b"",
        lambda request, callback: request.response_object(EmptyableWeather, callback),
        status_code=204,
    )
    assert isinstance(result, Success)
    assert isinstance(result.value, EmptyableWeather)


def test_empty_head_returns_sentinel():
    result = _fetch(
        b"",
        lambda request, callback: request.response_object(EmptyableWeather, callback),
        method="HEAD",
    )
    assert isinstance(result, Success)


def test_empty_200_is_empty_body_failure():
    result = _fetch(
        b"",
        lambda request, callback: request.response_object(EmptyableWeather, callback),
    )
    assert isinstance(result, Failure)
    assert result.error.kind is ErrorKind.EMPTY_BODY


def test_object_body_for_array_entry_point_fails():
    result = _fetch(
        b'{"day":"Mon"}',
        lambda request, callback: request.response_array(Forecast, callback),
    )
    assert isinstance(result, Failure)
    assert result.error.kind is ErrorKind.DATA_SERIALIZATION_FAILED


def test_error_status_with_json_body_still_maps():
    result = _fetch(
        b'{"location": "nowhere"}',
        lambda request, callback: request.response_object(WeatherResponse, callback),
        status_code=404,
    )
    assert result.unwrap().location == "nowhere"
