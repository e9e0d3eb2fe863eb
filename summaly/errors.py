"""Exceptions raised while fetching and summarizing a page."""

from __future__ import annotations


class SummalyError(Exception):
    """Base class for every failure summaly reports to its caller."""


class StatusError(SummalyError):
    """A failure that maps onto an HTTP status."""

    def __init__(self, message: str, status: int, status_text: str) -> None:
        super().__init__(message)
        self.status = status
        self.status_text = status_text


class Forbidden(StatusError):
    """The target's robots.txt disallows the request."""

    def __init__(self, message: str = "Forbidden by robots.txt") -> None:
        super().__init__(message, 403, "Forbidden")


class RequestTimeout(StatusError):
    """The operation deadline or a per-phase timeout expired."""

    def __init__(self, message: str = "Operation timed out") -> None:
        super().__init__(message, 408, "Request Timeout")


class HttpStatusError(StatusError):
    """The server answered with a status outside 2xx that was not tolerated."""

    def __init__(self, status: int, status_text: str) -> None:
        super().__init__(f"{status} {status_text}".strip(), status, status_text)


class FetchError(SummalyError):
    """Transport level failure (connection, invalid URL, redirect loop)."""


class TypeRejected(SummalyError):
    """The response content-type did not match the request's type filter."""


class SizeExceeded(SummalyError):
    """The declared or received body is larger than the configured limit."""


class LengthRequired(SummalyError):
    """The response has no Content-Length but the request demands one."""


class SummarizeFailed(SummalyError):
    """Neither a plugin nor the general extractor produced a summary."""

    def __init__(self, message: str = "failed summarize") -> None:
        super().__init__(message)
