"""
Shared HTTP client factory.

One httpx.AsyncClient is created per process and injected into every fetch;
it is never reconfigured after construction.
"""

from typing import Optional

import httpx

from utils.config import settings

DEFAULT_HEADERS = {
    "Accept": "application/xml,text/xml,application/atom+xml,*/*",
}


def create_http_client(
    timeout: Optional[float] = None,
    user_agent: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Build the process-wide HTTP client.

    Args:
        timeout: Per-request timeout in seconds, defaults to settings.HTTP_TIMEOUT
        user_agent: User-Agent header, defaults to settings.HTTP_USER_AGENT
        transport: Optional transport override (tests use httpx.MockTransport)

    Returns:
        Configured AsyncClient; the caller owns it and must close it
    """
    headers = {
        **DEFAULT_HEADERS,
        "User-Agent": user_agent or settings.HTTP_USER_AGENT,
    }
    return httpx.AsyncClient(
        timeout=timeout if timeout is not None else settings.HTTP_TIMEOUT,
        headers=headers,
        follow_redirects=True,
        transport=transport,
    )
