"""
Shared HTTP plumbing for the external source clients.
"""

import logging
from typing import Any, Dict, Optional

import backoff
import httpx

from medsafe.core.config import get_config
from .errors import SourceError, classify_http_error

logger = logging.getLogger(__name__)

# Shared HTTP client for connection reuse
_shared_client = httpx.AsyncClient(timeout=get_config().http.request_timeout)


def get_shared_client() -> httpx.AsyncClient:
    return _shared_client


def _max_tries() -> int:
    return get_config().http.max_tries


def _is_client_error(e: Exception) -> bool:
    return isinstance(e, httpx.HTTPStatusError) and e.response.status_code < 500


@backoff.on_exception(
    backoff.expo,
    (httpx.RequestError, httpx.HTTPStatusError),
    max_tries=_max_tries,
    giveup=_is_client_error
)
async def _send(
    client: httpx.AsyncClient,
    url: str,
    params: Optional[Dict[str, Any]],
    headers: Optional[Dict[str, str]],
    timeout: float,
) -> httpx.Response:
    response = await client.get(url, params=params, headers=headers, timeout=timeout)
    if response.status_code == 404:
        # openFDA and Socrata answer "no matches" with 404
        return response
    response.raise_for_status()
    return response


async def fetch_json(
    url: str,
    params: Optional[Dict[str, Any]] = None,
    source: str = "openFDA",
    client: Optional[httpx.AsyncClient] = None,
    not_found: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> Any:
    """
    GET a JSON document.

    Returns ``not_found`` on HTTP 404. Every other failure is raised as a
    SourceError subclass.
    """
    client = client or _shared_client
    timeout = get_config().http.request_timeout
    try:
        response = await _send(client, url, params, headers, timeout)
        if response.status_code == 404:
            logger.info("No results", extra={"source": source, "url": url})
            return not_found
        return response.json()
    except httpx.HTTPError as e:
        error = classify_http_error(e, source=source)
        logger.warning(f"{source} request failed: {error}", extra={"url": url, "error_type": type(error).__name__})
        raise error from e
    except ValueError as e:
        logger.warning(f"{source} returned invalid JSON", extra={"url": url})
        raise SourceError(f"{source} returned invalid JSON", source=source, url=url) from e
