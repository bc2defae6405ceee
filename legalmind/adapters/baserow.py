"""Baserow connection probe (optional workspace integration)."""

from typing import Any

import httpx
from pydantic import BaseModel


class BaserowProbe(BaseModel):
    """Result of a Baserow connectivity check."""

    success: bool
    data: Any = None
    error: str | None = None


async def probe_connection(
    url: str,
    token: str,
    timeout_seconds: float = 5.0,
    client: httpx.AsyncClient | None = None,
) -> BaserowProbe:
    """Check that a Baserow instance accepts the given API token.

    Never raises: network and HTTP errors are reported in the probe.

    Args:
        url: Baserow base URL (e.g. https://api.baserow.io)
        token: Database token
        timeout_seconds: Hard bound on the request
        client: Optional httpx client (for testing with mocks)

    Returns:
        BaserowProbe with the applications listing on success
    """
    close_client = False
    if client is None:
        client = httpx.AsyncClient(timeout=timeout_seconds)
        close_client = True

    try:
        response = await client.get(
            f"{url.rstrip('/')}/api/applications/",
            headers={"Authorization": f"Token {token}"},
            timeout=timeout_seconds,
        )
        response.raise_for_status()
        return BaserowProbe(success=True, data=response.json())
    except (httpx.HTTPError, ValueError) as e:
        return BaserowProbe(success=False, error=str(e) or "Connection failed")
    finally:
        if close_client:
            await client.aclose()
