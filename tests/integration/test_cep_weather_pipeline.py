"""
CEP Weather Pipeline - Integration Tests

Gateway → temperature service → ViaCEP/WeatherAPI, all in-process:

    test ──ASGITransport──▶ gateway app ──ASGITransport──▶ temperature app ──MockTransport──▶ upstream APIs

Both services share one in-memory tracer so the whole trace can be checked.
"""
from typing import Dict, Optional
from urllib.parse import unquote

import httpx
import pytest
import pytest_asyncio

from core.config import TracingConfig
from core.request_context import DEADLINE_HEADER
from microservices.gateway_service.factory import create_gateway_service
from microservices.gateway_service.main import create_app as create_gateway_app
from microservices.temperature_service.factory import create_temperature_service
from microservices.temperature_service.main import create_app as create_temperature_app
from tests.contracts.cep_weather.data_contract import CepWeatherTestDataFactory
from tests.fixtures import RecordingTransport, is_error, is_ok, json_response, span_named, trace_id_hex

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


class UpstreamApis:
    """ViaCEP and WeatherAPI stand-ins, routed by host"""

    def __init__(self):
        self.cities: Dict[str, str] = {}
        self.temperatures: Dict[str, float] = {}
        self.weather_status = 200
        self.weather_body: Optional[bytes] = None
        self.transport = RecordingTransport(self.handle)

    @property
    def requests(self):
        return self.transport.requests

    def handle(self, request: httpx.Request) -> httpx.Response:
        if request.url.host == "viacep.test":
            cep = unquote(request.url.path).split("/")[2]
            if cep not in self.cities:
                return json_response(200, CepWeatherTestDataFactory.make_viacep_not_found_payload())
            return json_response(200, CepWeatherTestDataFactory.make_viacep_payload(cep, self.cities[cep]))

        city = request.url.params["q"]
        if self.weather_body is not None:
            return httpx.Response(200, content=self.weather_body, headers={"content-type": "application/json"})
        if self.weather_status != 200:
            return json_response(self.weather_status, {"error": {"code": 9999, "message": "Internal application error."}})
        if city not in self.temperatures:
            return json_response(400, CepWeatherTestDataFactory.make_weatherapi_error_payload())
        return json_response(200, CepWeatherTestDataFactory.make_weatherapi_payload(city, self.temperatures[city]))


@pytest.fixture
def upstream_apis():
    return UpstreamApis()


@pytest_asyncio.fixture
async def gateway(gateway_config, temperature_config, upstream_apis, tracer):
    """HTTP client pointed at the gateway app"""
    temperature_app = create_temperature_app(
        temperature_config,
        TracingConfig.disabled(),
        service=create_temperature_service(temperature_config, tracer=tracer, transport=upstream_apis.transport),
    )
    gateway_app = create_gateway_app(
        gateway_config,
        TracingConfig.disabled(),
        service=create_gateway_service(
            gateway_config, tracer=tracer, transport=httpx.ASGITransport(app=temperature_app)
        ),
    )

    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=gateway_app), base_url="http://gateway") as client:
        yield client

    await gateway_app.state.microservice.service.close()
    await temperature_app.state.microservice.service.close()


# =============================================================================
# Scenarios
# =============================================================================

class TestPipeline:

    async def test_known_cep(self, gateway, upstream_apis):
        upstream_apis.cities["01001000"] = "São Paulo"
        upstream_apis.temperatures["São Paulo"] = 25.5

        response = await gateway.post("/cep", json={"cep": "01001000"})

        assert response.status_code == 200
        assert response.json() == {"city": "São Paulo", "temp_C": 25.5, "temp_F": 77.9, "temp_K": 298.65}

    async def test_unknown_cep(self, gateway, upstream_apis):
        response = await gateway.post("/cep", json={"cep": "99999999"})

        assert response.status_code == 404
        assert response.json()["message"] == "can not find zipcode"
        assert response.json()["code"] == 404
        assert [request.url.host for request in upstream_apis.requests] == ["viacep.test"]

    async def test_weather_failure(self, gateway, upstream_apis, span_exporter):
        cep = CepWeatherTestDataFactory.make_cep()
        upstream_apis.cities[cep] = "Porto Alegre"
        upstream_apis.weather_status = 500

        response = await gateway.post("/cep", json={"cep": cep})

        assert response.status_code == 500
        assert response.json()["message"] == "error fetching temperature"
        for name in ("handle-cep-request", "resolve-temperature", "lookup-temperature"):
            assert is_error(span_named(span_exporter, name))
        assert is_ok(span_named(span_exporter, "lookup-city"))

    async def test_non_finite_reading_is_weather_failure(self, gateway, upstream_apis):
        cep = CepWeatherTestDataFactory.make_cep()
        upstream_apis.cities[cep] = "Natal"
        upstream_apis.weather_body = b'{"current": {"temp_c": NaN}}'

        response = await gateway.post("/cep", json={"cep": cep})

        assert response.status_code == 500
        assert response.json()["message"] == "error fetching temperature"
        assert response.json()["code"] == 500

    async def test_repeated_request_is_identical(self, gateway, upstream_apis):
        cep = CepWeatherTestDataFactory.make_cep()
        city = CepWeatherTestDataFactory.make_city()
        upstream_apis.cities[cep] = city
        upstream_apis.temperatures[city] = CepWeatherTestDataFactory.make_temperature()

        first = await gateway.post("/cep", json={"cep": cep})
        second = await gateway.post("/cep", json={"cep": cep})

        assert first.status_code == second.status_code == 200
        assert first.content == second.content
        hosts = [request.url.host for request in upstream_apis.requests]
        assert hosts.count("viacep.test") == 2
        assert hosts.count("weatherapi.test") == 2

    async def test_malformed_body_reaches_nothing(self, gateway, upstream_apis):
        response = await gateway.post("/cep", content=b"{not json", headers={"content-type": "application/json"})

        assert response.status_code == 400
        assert response.json()["message"] == "invalid request format"
        assert upstream_apis.requests == []

    async def test_invalid_cep_reaches_nothing(self, gateway, upstream_apis):
        response = await gateway.post("/cep", json={"cep": "0100100"})

        assert response.status_code == 422
        assert response.json()["message"] == "invalid zipcode"
        assert upstream_apis.requests == []


# =============================================================================
# Tracing across services
# =============================================================================

class TestDistributedTrace:

    async def test_single_trace_with_parent_chain(self, gateway, upstream_apis, span_exporter):
        cep = CepWeatherTestDataFactory.make_cep()
        city = CepWeatherTestDataFactory.make_city()
        upstream_apis.cities[cep] = city
        upstream_apis.temperatures[city] = CepWeatherTestDataFactory.make_temperature()

        response = await gateway.post("/cep", json={"cep": cep})
        assert response.status_code == 200

        handle = span_named(span_exporter, "handle-cep-request")
        resolve = span_named(span_exporter, "resolve-temperature")
        lookup_city = span_named(span_exporter, "lookup-city")
        lookup_temperature = span_named(span_exporter, "lookup-temperature")

        trace_ids = {trace_id_hex(span) for span in (handle, resolve, lookup_city, lookup_temperature)}
        assert len(trace_ids) == 1

        assert resolve.parent.span_id == handle.context.span_id
        assert lookup_city.parent.span_id == resolve.context.span_id
        assert lookup_temperature.parent.span_id == resolve.context.span_id
        assert lookup_city.end_time <= lookup_temperature.start_time

    async def test_inbound_traceparent_spans_whole_pipeline(self, gateway, upstream_apis, span_exporter):
        cep = CepWeatherTestDataFactory.make_cep()
        upstream_apis.cities[cep] = "Fortaleza"
        upstream_apis.temperatures["Fortaleza"] = 30.0

        await gateway.post(
            "/cep",
            json={"cep": cep},
            headers={"traceparent": "00-4bf92f3577b34da6a3ce929d0e0e4736-00f067aa0ba902b7-01"},
        )

        assert {trace_id_hex(span) for span in span_exporter.get_finished_spans()} == {
            "4bf92f3577b34da6a3ce929d0e0e4736"
        }

    async def test_error_envelope_trace_id_matches_trace(self, gateway, span_exporter):
        response = await gateway.post("/cep", json={"cep": "99999999"})

        assert response.json()["trace_id"] == trace_id_hex(span_named(span_exporter, "handle-cep-request"))

    async def test_budget_stops_at_temperature_service(self, gateway, upstream_apis):
        cep = CepWeatherTestDataFactory.make_cep()
        upstream_apis.cities[cep] = "Recife"
        upstream_apis.temperatures["Recife"] = 28.0

        await gateway.post("/cep", json={"cep": cep}, headers={DEADLINE_HEADER: "3000"})

        assert len(upstream_apis.requests) == 2
        for request in upstream_apis.requests:
            assert DEADLINE_HEADER not in request.headers
            assert "traceparent" in request.headers
