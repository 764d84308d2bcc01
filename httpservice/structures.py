from dataclasses import dataclass
from typing import Any, Literal, Mapping, Optional, Sequence

import httpx

ResponseShape = Literal["json", "text", "boolean", "status"]


@dataclass(frozen=True)
class QueryParameter:
    name: str
    value: Any = None
    # fills a ":name" token in the url instead of going to the query string
    url_replace_only: bool = False


@dataclass(frozen=True)
class EndpointCall:
    orig_url: str
    method: str = "get"
    headers: Optional[Mapping[str, str]] = None
    query_params: Optional[Sequence[QueryParameter]] = None
    raw_data: Optional[Mapping[str, Any]] = None
    body: Any = None
    response_type: ResponseShape = "json"


@dataclass
class BuiltRequest:
    url: str
    method: str
    headers: httpx.Headers
    body: Optional[str] = None
