import json
import logging
import math
from collections.abc import Mapping
from typing import Any, Optional, Sequence

import httpx

from httpservice.config import ClientConfig
from httpservice.structures import BuiltRequest, EndpointCall, QueryParameter

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {"content-type": "application/json"}
BODY_METHODS = ("post", "put")


def render_value(value: Any) -> str:
    """Render a url value the way a browser template string would."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def replace_params_in_url(url: str, raw_data: Any = None) -> str:
    """Replace the first ":key" token for every key of raw_data. Values are not encoded."""
    if not raw_data or not isinstance(raw_data, Mapping):
        return url

    output_url = url
    for key, value in raw_data.items():
        if value is None:
            continue
        output_url = output_url.replace(f":{key}", render_value(value), 1)
    return output_url


def build_url(
    url: str,
    query_params: Optional[Sequence[QueryParameter]] = None,
    raw_data: Any = None,
) -> str:
    # raw_data is only used when there are no query params at all
    if not query_params:
        return replace_params_in_url(url, raw_data)

    output_url = url
    params: list[str] = []

    for param in query_params:
        if not param.name or param.value is None:
            continue

        if param.url_replace_only:
            output_url = output_url.replace(f":{param.name}", render_value(param.value), 1)
        else:
            params.append(f"{param.name}={render_value(param.value) if param.value else ''}")

    if params:
        first_separator = "&" if "?" in url else "?"
        return output_url + first_separator + "&".join(params)

    return output_url


def build_headers(overrides: Optional[Mapping[str, str]] = None) -> httpx.Headers:
    headers = httpx.Headers(DEFAULT_HEADERS)
    if overrides:
        headers.update(overrides)
    return headers


def build_request(call: EndpointCall, config: ClientConfig) -> BuiltRequest:
    method = (call.method or "get").lower()
    body = None
    if method in BODY_METHODS and call.body is not None:
        body = json.dumps(call.body)

    request = BuiltRequest(
        url=build_url(config.base_url + call.orig_url, call.query_params, call.raw_data),
        method=method,
        headers=build_headers(call.headers),
        body=body,
    )
    logger.debug("Built request %s %s", request.method.upper(), request.url)
    return request
