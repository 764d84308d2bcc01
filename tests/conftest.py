import httpx
import pytest

from fake_api import BASE_URL, CURRENT_LOCATION, fake_api
from httpservice.auth import LocationNavigator
from httpservice.httpService import HttpService


@pytest.fixture
def navigator() -> LocationNavigator:
    return LocationNavigator(CURRENT_LOCATION)


@pytest.fixture
def transport() -> httpx.ASGITransport:
    return httpx.ASGITransport(app=fake_api)


@pytest.fixture
def service(navigator, transport) -> HttpService:
    return HttpService(
        BASE_URL,
        "/login?:returnUrl",
        ["error.message", "detail"],
        navigator=navigator,
        transport=transport,
    )
