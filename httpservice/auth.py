import logging
import urllib.parse
from typing import Optional, Protocol

import httpx

logger = logging.getLogger(__name__)

RETURN_URL_TOKEN = ":returnUrl"
# characters left alone by a browser's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


class Navigator(Protocol):
    def current_location(self) -> str: ...

    def navigate_to(self, url: str) -> None: ...


class LocationNavigator:
    """In-process navigation state: remembers where it was last sent."""

    def __init__(self, location: str = "") -> None:
        self.location = location
        self.history: list[str] = []

    def current_location(self) -> str:
        return self.location

    def navigate_to(self, url: str) -> None:
        self.history.append(url)
        self.location = url


def build_redirect_url(template: str, return_url: str) -> str:
    encoded = urllib.parse.quote(return_url, safe=_URI_COMPONENT_SAFE)
    return template.replace(RETURN_URL_TOKEN, encoded, 1)


def handle_unauthorized(
    resp: httpx.Response, redirect_template: str, navigator: Optional[Navigator]
) -> bool:
    """Send the navigator to the login page on a 401.

    Returns True when a redirect happened and the call should be dropped.
    """
    if resp.status_code != 401 or not redirect_template or navigator is None:
        return False

    redirect_url = build_redirect_url(redirect_template, navigator.current_location())
    logger.info("Unauthorized response, redirecting to %s", redirect_url)
    navigator.navigate_to(redirect_url)
    return True
