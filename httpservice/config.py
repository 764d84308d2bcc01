from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Sequence, Union

ErrorPaths = Union[str, Sequence[str]]


def _to_bool(v: str | None, default: bool = False) -> bool:
    if v is None:
        return default
    s = str(v).strip().lower()
    if s in ("1", "true", "yes", "y", "on"):
        return True
    if s in ("0", "false", "no", "n", "off"):
        return False
    return default


def _csv(v: str | None) -> tuple[str, ...]:
    if not v:
        return ()
    return tuple(x.strip() for x in str(v).split(",") if x.strip())


def normalize_error_paths(paths: ErrorPaths | None) -> tuple[str, ...]:
    """Return the error paths as a tuple.

    A bare string is one dotted path, not a sequence of one-character paths.
    """

    if not paths:
        return ()
    if isinstance(paths, str):
        return (paths,)
    return tuple(paths)


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = ""
    # must contain a ":returnUrl" token to carry the current location
    unauthorized_redirect_url: str = ""
    error_message_data_path: tuple[str, ...] = field(default_factory=tuple)
    # use the extracted error body message instead of the status line
    prefer_error_message: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url or "")
        object.__setattr__(
            self, "unauthorized_redirect_url", self.unauthorized_redirect_url or ""
        )
        object.__setattr__(
            self,
            "error_message_data_path",
            normalize_error_paths(self.error_message_data_path),
        )

    @classmethod
    def from_env(cls) -> "ClientConfig":
        return cls(
            base_url=os.getenv("HTTP_SERVICE_BASE_URL", ""),
            unauthorized_redirect_url=os.getenv(
                "HTTP_SERVICE_UNAUTHORIZED_REDIRECT_URL", ""
            ),
            error_message_data_path=_csv(
                os.getenv("HTTP_SERVICE_ERROR_MESSAGE_PATHS", "")
            ),
            prefer_error_message=_to_bool(
                os.getenv("HTTP_SERVICE_PREFER_ERROR_MESSAGE"), False
            ),
        )


@lru_cache(maxsize=1)
def get_config() -> ClientConfig:
    """Return a cached ClientConfig resolved from environment variables."""

    return ClientConfig.from_env()
