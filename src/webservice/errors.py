from __future__ import annotations


class ApiError(Exception):
    """Base class for every failure surfaced by :class:`Webservice`."""


class InvalidURLError(ApiError):
    def __init__(self, url: str, reason: str | None = None) -> None:
        self.url = url
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"invalid URL {url!r}{detail}")


class HttpError(ApiError):
    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"HTTP {status_code}")


class DecodeError(ApiError):
    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"could not decode response body: {cause}")


class UnknownError(ApiError):
    def __init__(self, message: str = "request failed", *, cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(message)


__all__ = ["ApiError", "DecodeError", "HttpError", "InvalidURLError", "UnknownError"]
