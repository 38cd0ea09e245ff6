"""Shared aiohttp helpers for outbound calls."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import aiohttp

from pawrecognition.core.constants import DEFAULT_TIMEOUT_SECONDS

# aiohttp raises asyncio.TimeoutError on total-timeout expiry
TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)


def client_timeout(seconds: float | None = None) -> aiohttp.ClientTimeout:
    return aiohttp.ClientTimeout(total=seconds or DEFAULT_TIMEOUT_SECONDS)


@asynccontextmanager
async def http_session(
    session: aiohttp.ClientSession | None = None,
) -> AsyncIterator[aiohttp.ClientSession]:
    """Yield the given session, or a short-lived one closed on exit."""
    if session is not None:
        yield session
        return

    async with aiohttp.ClientSession() as owned:
        yield owned


async def read_json(response: aiohttp.ClientResponse) -> Any:
    """Return the decoded JSON body, or None when it is empty or not JSON."""
    try:
        return await response.json(content_type=None)
    except ValueError:
        return None


def is_success(status: int) -> bool:
    return 200 <= status < 300


def error_message(body: Any) -> str | None:
    """Extract the ``error`` field from a JSON error body."""
    if isinstance(body, dict):
        error = body.get("error")
        if error:
            return str(error)
    return None
