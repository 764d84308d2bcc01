from __future__ import annotations


class HttpServiceError(Exception):
    """Base error for failed HttpService calls."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class HttpStatusError(HttpServiceError):
    """The server answered with a non-success status code."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        status_text: str = "",
        url: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.status_text = status_text
        self.url = url
