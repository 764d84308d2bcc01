import base64
import json

import httpx
import pytest

from fake_api import BASE_URL, CURRENT_LOCATION, fake_api
from httpservice.auth import LocationNavigator
from httpservice.config import ClientConfig
from httpservice.errors import HttpStatusError
from httpservice.httpService import HttpService
from httpservice.structures import EndpointCall, QueryParameter


async def test_fetch_json_with_raw_data(service):
    result = await service.fetch(EndpointCall("/items/:id", raw_data={"id": "7"}))
    assert result == {"id": "7"}


async def test_fetch_query_params_reach_server(service):
    call = EndpointCall("/list", query_params=[QueryParameter("page", 2), QueryParameter("size", 5)])
    result = await service.fetch(call)
    assert result["query"] == "page=2&size=5"
    assert result["params"] == {"page": "2", "size": "5"}


async def test_fetch_text(service):
    assert await service.fetch(EndpointCall("/text", response_type="text")) == "hello"


async def test_fetch_boolean_ignores_body(service):
    assert await service.fetch(EndpointCall("/items/1", response_type="boolean")) is True


async def test_fetch_status_on_empty_response(service):
    call = EndpointCall("/items/1", method="delete", response_type="status")
    assert await service.fetch(call) is True


async def test_post_sends_json_body_and_headers(service):
    call = EndpointCall("/echo", method="post", body={"a": 1}, headers={"X-Trace": "t-1"})
    result = await service.fetch(call)
    assert result["method"] == "POST"
    assert json.loads(result["body"]) == {"a": 1}
    assert result["content_type"] == "application/json"
    assert result["x_trace"] == "t-1"


async def test_get_sends_no_body(service):
    result = await service.fetch(EndpointCall("/echo", body={"a": 1}))
    assert result["method"] == "GET"
    assert result["body"] == ""


async def test_error_raises_status_line_regardless_of_body(service):
    with pytest.raises(HttpStatusError) as excinfo:
        await service.fetch(EndpointCall("/missing"))
    err = excinfo.value
    assert str(err) == "404 - Not Found"
    assert err.status_code == 404
    assert err.status_text == "Not Found"
    assert err.url == f"{BASE_URL}/missing"


async def test_error_with_non_json_body(service):
    with pytest.raises(HttpStatusError, match="500 - Internal Server Error"):
        await service.fetch(EndpointCall("/broken"))


async def test_prefer_error_message_takes_last_match(navigator, transport):
    service = HttpService(
        BASE_URL,
        error_message_data_path=["error.message", "detail"],
        prefer_error_message=True,
        navigator=navigator,
        transport=transport,
    )
    with pytest.raises(HttpStatusError, match="no such item"):
        await service.fetch(EndpointCall("/missing"))


async def test_unauthorized_redirects_instead_of_raising(service, navigator):
    result = await service.fetch(EndpointCall("/private"))
    assert result is None
    assert navigator.history == [
        "/login?https%3A%2F%2Fapp.example.com%2Fdashboard%3Ftab%3D1"
    ]


async def test_unauthorized_without_redirect_raises(transport):
    navigator = LocationNavigator(CURRENT_LOCATION)
    service = HttpService(BASE_URL, navigator=navigator, transport=transport)
    with pytest.raises(HttpStatusError, match="401 - Unauthorized"):
        await service.fetch(EndpointCall("/private"))
    assert navigator.history == []


async def test_authorized_call_passes(service):
    token = base64.b64encode(b"admin:secret").decode()
    headers = {"Authorization": f"Basic {token}"}
    assert await service.fetch(EndpointCall("/private", headers=headers)) == {"user": "admin"}


async def test_from_config(navigator):
    config = ClientConfig(base_url=BASE_URL, error_message_data_path="error.message")
    service = HttpService.from_config(
        config, navigator=navigator, transport=httpx.ASGITransport(app=fake_api)
    )
    assert service.config == config
    assert await service.fetch(EndpointCall("/items/:id", raw_data={"id": "a"})) == {"id": "a"}


async def test_transport_errors_propagate():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    service = HttpService(BASE_URL, transport=httpx.MockTransport(handler))
    with pytest.raises(httpx.ConnectError):
        await service.fetch(EndpointCall("/items/1"))


async def test_fetch_json_shape_on_non_json_success_body(service):
    with pytest.raises(json.JSONDecodeError):
        await service.fetch(EndpointCall("/not-json"))
    assert await service.fetch(EndpointCall("/not-json", response_type="text")) == "nope"
