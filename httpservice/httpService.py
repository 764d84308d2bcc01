from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from httpservice.auth import LocationNavigator, Navigator, handle_unauthorized
from httpservice.config import ClientConfig, ErrorPaths
from httpservice.errors import HttpStatusError
from httpservice.requestHelpers import build_request
from httpservice.responseHelpers import decode_response, get_error_message
from httpservice.structures import BuiltRequest, EndpointCall

logger = logging.getLogger(__name__)


class HttpService:
    def __init__(
        self,
        base_url: str = "",
        unauthorized_redirect_url: str = "",
        error_message_data_path: ErrorPaths | None = None,
        *,
        prefer_error_message: bool = False,
        navigator: Optional[Navigator] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = ClientConfig(
            base_url=base_url,
            unauthorized_redirect_url=unauthorized_redirect_url,
            error_message_data_path=error_message_data_path or (),
            prefer_error_message=prefer_error_message,
        )
        self.navigator: Navigator = navigator if navigator is not None else LocationNavigator()
        self.transport = transport

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        *,
        navigator: Optional[Navigator] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "HttpService":
        return cls(
            config.base_url,
            config.unauthorized_redirect_url,
            config.error_message_data_path,
            prefer_error_message=config.prefer_error_message,
            navigator=navigator,
            transport=transport,
        )

    def build_request(self, call: EndpointCall) -> BuiltRequest:
        return build_request(call, self.config)

    async def _send(self, request: BuiltRequest) -> httpx.Response:
        # fresh client per call, nothing is pooled or shared between calls
        async with httpx.AsyncClient(follow_redirects=True, transport=self.transport) as client:
            resp = await client.request(
                request.method.upper(),
                request.url,
                headers=request.headers,
                content=request.body,
            )
            await resp.aread()
            return resp

    async def _handle_error(self, resp: httpx.Response, url: str) -> None:
        if handle_unauthorized(resp, self.config.unauthorized_redirect_url, self.navigator):
            return

        message = await get_error_message(resp, self.config)
        logger.warning("Request to %s failed: %s", url, message)
        raise HttpStatusError(
            message,
            status_code=resp.status_code,
            status_text=resp.reason_phrase or "",
            url=url,
        )

    async def fetch(self, call: EndpointCall) -> Any:
        """Build, send and decode one call.

        Resolves to the decoded body (or True for "boolean"/"status"),
        raises HttpStatusError for non-2xx responses, and resolves to None
        when a 401 sent the navigator to the login page.
        """
        request = self.build_request(call)
        resp = await self._send(request)

        if resp.is_success:
            return await decode_response(resp, call.response_type)

        await self._handle_error(resp, request.url)
        return None
