"""Fetch an introspection result from a live GraphQL endpoint."""

import logging
from typing import Any

import httpx
from graphql import get_introspection_query

from .errors import FetchError

logger = logging.getLogger(__name__)


def fetch_introspection(
    url: str,
    headers: dict[str, str] | None = None,
    timeout: float = 30.0,
    transport: httpx.BaseTransport | None = None,
) -> dict[str, Any]:
    """POST the standard introspection query and return the response document.

    Args:
        url: GraphQL endpoint URL
        headers: Extra request headers (e.g. Authorization)
        timeout: Request timeout in seconds
        transport: Optional httpx transport, used by tests

    Returns:
        The full response, ``{"data": {"__schema": ...}}``

    Raises:
        FetchError: on HTTP failure, a non-JSON body or GraphQL errors
    """
    request_headers = {"Content-Type": "application/json"}
    request_headers.update(headers or {})
    payload = {"query": get_introspection_query(descriptions=True)}

    logger.info("Fetching introspection from %s", url)
    with httpx.Client(timeout=timeout, headers=request_headers, transport=transport) as client:
        try:
            response = client.post(url, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(
                f"HTTP {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            raise FetchError(f"Request to {url} failed: {e}") from e

    try:
        result = response.json()
    except ValueError as e:
        raise FetchError(f"Response from {url} is not JSON") from e

    if result.get("errors"):
        messages = [err.get("message", str(err)) for err in result["errors"]]
        raise FetchError(f"GraphQL errors: {'; '.join(messages)}", result["errors"])

    if "data" not in result:
        raise FetchError(f"Response from {url} has no data")

    return result
