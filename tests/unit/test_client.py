from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import httpx
import pytest

from httpx_objectmapper.client import ObjectMapperClient
from httpx_objectmapper.config import ObjectMapperClientConfig, TransportConfig
from httpx_objectmapper.core.errors import ClientClosedError, ConfigError, ErrorKind
from httpx_objectmapper.core.request_shared import DataResponse
from httpx_objectmapper.core.result import Failure, Success
from httpx_objectmapper.core.serializer import ObjectResponseSerializer, strategy_for
from tests.shared.models import Forecast, WeatherResponse
from tests.shared.payloads import as_body, make_weather_payload
from tests.shared.transport import (
    Collector,
    build_config,
    build_sync_client,
    failing_handler,
    json_handler,
)


def _client(body: bytes = b"", *, status_code: int = 200, calls=None) -> ObjectMapperClient:
    handler = json_handler(body, status_code=status_code, calls=calls)
    return ObjectMapperClient(config=build_config(), client=build_sync_client(handler))


def test_client_context_manager_closes_owned_client():
    with ObjectMapperClient(config=build_config()) as client:
        inner = client._client
    assert inner.is_closed is True


def test_client_does_not_close_injected_client():
    injected = build_sync_client(json_handler(b"{}"))
    with ObjectMapperClient(client=injected):
        pass
    assert injected.is_closed is False
    injected.close()


def test_client_raises_when_used_after_close():
    client = _client()
    client.close()
    with pytest.raises(ClientClosedError):
        client.request("GET", "/weather")


def test_resume_raises_when_client_closed_before_sending():
    client = _client(b"{}")
    request = client.request("GET", "/weather")
    client.close()
    with pytest.raises(ClientClosedError):
        request.resume()


def test_invalid_config_raises_config_error():
    config = ObjectMapperClientConfig(transport=TransportConfig(timeout_read_seconds=0.0))
    with pytest.raises(ConfigError, match="timeout_read_seconds"):
        ObjectMapperClient(config=config)


def test_response_object_returns_request_for_chaining_and_fires_each_handler_once():
    calls: list[httpx.Request] = []
    weather = Collector()
    forecasts = Collector()

    with _client(as_body(make_weather_payload(forecasts=2)), calls=calls) as client:
        request = client.request("GET", "/weather")
        chained = request.response_object(WeatherResponse, weather).response_array(
            Forecast, forecasts, key_path="three_day_forecast"
        )
        assert chained is request
        assert weather.responses == []

        request.resume()
        request.resume()

    assert len(calls) == 1
    assert isinstance(weather.only, DataResponse)
    assert weather.only.value.location == "NYC"
    assert [f.day for f in forecasts.only.value] == ["Mon", "Tue"]
    assert weather.only.response.status_code == 200
    assert weather.only.request is request.request


def test_handler_attached_after_completion_fires_immediately():
    with _client(as_body(make_weather_payload())) as client:
        request = client.request("GET", "/weather").resume()
        assert request.is_finished
        late = Collector()
        request.response_object(WeatherResponse, late)
    assert late.only.value.location == "NYC"


def test_transport_error_is_delivered_verbatim():
    error = httpx.ConnectError("refused")
    collector = Collector()
    client = ObjectMapperClient(client=build_sync_client(failing_handler(error)))

    client.request("GET", "https://api.example.test/weather").response_object(
        WeatherResponse, collector
    ).resume()

    assert isinstance(collector.only.result, Failure)
    assert collector.only.error is error
    assert collector.only.response is None
    client.close()


def test_empty_204_uses_array_sentinel():
    collector = Collector()
    with _client(b"", status_code=204) as client:
        client.request("DELETE", "/weather").response_array(Forecast, collector).resume()
    assert collector.only.result == Success([])


def test_empty_200_is_empty_body_failure():
    collector = Collector()
    with _client(b"") as client:
        client.request("GET", "/weather").response_object(WeatherResponse, collector).resume()
    assert collector.only.error.kind is ErrorKind.EMPTY_BODY


def test_map_to_object_populates_caller_instance():
    existing = WeatherResponse()
    existing.date = "kept"
    collector = Collector()
    with _client(as_body(make_weather_payload())) as client:
        client.request("GET", "/weather").response_object(
            WeatherResponse, collector, map_to_object=existing
        ).resume()
    assert collector.only.value is existing
    assert existing.location == "NYC"
    assert existing.date == "kept"


def test_generic_response_accepts_any_serializer():
    collector = Collector()
    serializer = ObjectResponseSerializer(strategy_for(WeatherResponse), key_path="response")
    with _client(as_body({"response": {"location": "Kyoto"}})) as client:
        client.request("GET", "/weather").response(serializer, collector).resume()
    assert collector.only.value.location == "Kyoto"


def test_callback_runs_on_requested_execution_context():
    collector = Collector()
    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="mapped") as pool:
        with _client(as_body(make_weather_payload())) as client:
            client.request("GET", "/weather").response_object(
                WeatherResponse,
                collector,
                execution_context=pool,
            ).resume()
    assert collector.only.value.location == "NYC"


def test_client_sends_default_headers():
    config = build_config()
    with ObjectMapperClient(config=config) as client:
        request = client.request("GET", "/weather")
    assert request.request.headers["User-Agent"] == config.user_agent
    assert request.request.headers["Accept"] == "application/json"
    assert str(request.request.url) == "https://api.example.test/weather"


def test_failing_callback_does_not_drop_later_handlers(caplog):
    after = Collector()

    def _explode(response) -> None:
        raise RuntimeError("callback failed")

    with _client(as_body(make_weather_payload())) as client:
        request = client.request("GET", "/weather")
        request.response_object(WeatherResponse, _explode).response_object(WeatherResponse, after)

        with pytest.raises(RuntimeError, match="callback failed"):
            request.resume()
        request.resume()

    assert after.only.value.location == "NYC"
    assert any("response handler failed" in record.getMessage() for record in caplog.records)


def test_failing_late_callback_is_raised_and_logged(caplog):
    with _client(as_body(make_weather_payload())) as client:
        request = client.request("GET", "/weather").resume()

        with pytest.raises(ZeroDivisionError):
            request.response_object(WeatherResponse, lambda response: 1 / 0)

    assert any("response handler failed" in record.getMessage() for record in caplog.records)


def test_response_class_stub_renders_first_array_element():
    collector = Collector()
    body = as_body(make_weather_payload(forecasts=2))
    with _client(body) as client:
        client.request("GET", "/weather").response_class_stub(
            "Forecast", collector, key_path="three_day_forecast"
        ).resume()

    source = collector.only.value
    assert "class Forecast(Mappable):" in source
    assert 'self.day        = map.get("day", self.day, str)' in source
