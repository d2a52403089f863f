"""HTTP helpers shared by the PostgREST and GoTrue adapters."""

import logging
from typing import Any, Callable, TypeVar

import httpx

from core.exceptions import RemoteServiceError

logger = logging.getLogger(__name__)

UNREACHABLE_MESSAGE = "Could not reach the remote service"
MALFORMED_MESSAGE = "Unexpected response from the remote service"

T = TypeVar("T")


def error_message(response: httpx.Response) -> str:
    """Reduce a Supabase error body to one human-readable message.

    GoTrue answers with ``msg`` (or ``error_description`` on older
    versions), PostgREST with ``message``.
    """
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("msg", "message", "error_description", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return f"Remote service returned HTTP {response.status_code}"


async def send(
    http: httpx.AsyncClient,
    method: str,
    path: str,
    *,
    headers: dict[str, str],
    params: dict[str, str] | None = None,
    json: Any | None = None,
) -> httpx.Response:
    """Send a request and turn every failure into ``RemoteServiceError``."""
    try:
        response = await http.request(method, path, headers=headers, params=params, json=json)
    except httpx.HTTPError as exc:
        logger.warning("%s %s failed: %s", method, path, exc)
        raise RemoteServiceError(UNREACHABLE_MESSAGE) from exc

    if response.is_error:
        message = error_message(response)
        logger.warning("%s %s returned %d: %s", method, path, response.status_code, message)
        raise RemoteServiceError(message, remote_status=response.status_code)
    return response


def read_rows(response: httpx.Response, parse: Callable[[dict[str, Any]], T]) -> list[T]:
    """Map a PostgREST row list; an unreadable body is a remote failure."""
    try:
        body = response.json()
        if not isinstance(body, list):
            raise TypeError(f"expected a row list, got {type(body).__name__}")
        return [parse(row) for row in body]
    except (KeyError, TypeError, ValueError) as exc:
        logger.warning("Malformed rows from %s: %s", response.request.url.path, exc)
        raise RemoteServiceError(MALFORMED_MESSAGE, remote_status=response.status_code) from exc
