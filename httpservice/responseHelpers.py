import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any, Optional

import httpx

from httpservice.config import ClientConfig

logger = logging.getLogger(__name__)

_MISSING = object()


def _dig(data: Any, prop: str) -> Any:
    if isinstance(data, Mapping):
        return data.get(prop, _MISSING)
    if isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
        try:
            return data[int(prop)]
        except (ValueError, IndexError):
            return _MISSING
    return _MISSING


def extract_data_from_response(data: Any, data_path: str, attr: Optional[str] = None) -> Any:
    """Walk a dotted path ("error.details.0.message") through a decoded body.

    Returns None as soon as a segment is missing. With an empty path the
    whole body is returned. ``attr`` is looked up on whatever the walk found.
    """
    if not data or not data_path:
        if attr:
            return _attr_or_none(data, attr)
        return data

    extracted = data
    for prop in data_path.split("."):
        extracted = _dig(extracted, prop)
        if extracted is _MISSING:
            return None

    if extracted is not None and attr:
        return _attr_or_none(extracted, attr)

    return extracted


def _attr_or_none(data: Any, attr: str) -> Any:
    value = _dig(data, attr)
    return None if value is _MISSING else value


def status_line(resp: httpx.Response) -> str:
    return f"{resp.status_code} - {resp.reason_phrase or ''}"


async def get_error_message(resp: httpx.Response, config: ClientConfig) -> str:
    candidate: Any = None

    try:
        await resp.aread()
        body = resp.json()
    except ValueError:
        body = None
        logger.debug("Error body for status %s is not JSON", resp.status_code)
    else:
        # last matching path wins
        for path in config.error_message_data_path:
            data_at_path = extract_data_from_response(body, path)
            if data_at_path:
                candidate = data_at_path

    if config.prefer_error_message and candidate:
        return candidate if isinstance(candidate, str) else json.dumps(candidate)

    # status line always replaces whatever the body said
    return status_line(resp)


async def decode_response(resp: httpx.Response, response_type: Optional[str] = "json") -> Any:
    if response_type == "json":
        await resp.aread()
        return resp.json()
    if response_type == "text":
        await resp.aread()
        return resp.text
    # "boolean", "status" and anything unknown only report success
    return True
