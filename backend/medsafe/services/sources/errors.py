"""
Error taxonomy for external data sources.

Every failure raised by a source client is a SourceError carrying a message
that is safe to show to a patient. The HTTP layer maps each class to a status
code; the analysis pipeline only needs to know that the call failed.
"""

from typing import Optional

import httpx


class SourceError(Exception):
    """Base class for failures talking to an external data source."""

    user_message = "We couldn't reach the medication database. Please try again later."
    http_status = 502

    def __init__(self, message: str, source: str = "openFDA", url: Optional[str] = None):
        super().__init__(message)
        self.source = source
        self.url = url


class SourceNetworkError(SourceError):
    user_message = "Network problem while contacting the medication database. Check your connection and try again."


class SourceTimeoutError(SourceError):
    user_message = "The medication database took too long to respond. Please try again."
    http_status = 504


class SourceHTTPError(SourceError):
    """Non-2xx response that has no more specific class."""

    def __init__(self, message: str, status_code: int, source: str = "openFDA", url: Optional[str] = None):
        super().__init__(message, source=source, url=url)
        self.status_code = status_code


class SourceAccessDeniedError(SourceHTTPError):
    user_message = "Access to the medication database was denied. The API key may be missing or invalid."


class SourceRateLimitedError(SourceHTTPError):
    user_message = "Too many requests to the medication database. Please wait a moment and try again."
    http_status = 429


class SourceUnavailableError(SourceHTTPError):
    user_message = "The medication database is temporarily unavailable. Please try again later."
    http_status = 503


def classify_http_error(exc: Exception, source: str = "openFDA") -> SourceError:
    """Translate an httpx exception into the SourceError hierarchy."""
    if isinstance(exc, SourceError):
        return exc
    if isinstance(exc, httpx.TimeoutException):
        return SourceTimeoutError(f"{source} request timed out: {exc}", source=source)
    if isinstance(exc, httpx.HTTPStatusError):
        status_code = exc.response.status_code
        url = str(exc.request.url)
        message = f"{source} responded with HTTP {status_code}"
        if status_code == 403:
            return SourceAccessDeniedError(message, status_code, source=source, url=url)
        if status_code == 429:
            return SourceRateLimitedError(message, status_code, source=source, url=url)
        if status_code >= 500:
            return SourceUnavailableError(message, status_code, source=source, url=url)
        return SourceHTTPError(message, status_code, source=source, url=url)
    if isinstance(exc, httpx.RequestError):
        return SourceNetworkError(f"{source} network error: {exc}", source=source)
    return SourceError(f"{source} request failed: {exc}", source=source)


def user_safe_message(exc: Exception) -> str:
    """Message suitable for patients; never leaks URLs or stack details."""
    if isinstance(exc, SourceError):
        return exc.user_message
    return SourceError.user_message
