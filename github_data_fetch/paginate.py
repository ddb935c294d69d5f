"""Drain a paginated listing endpoint, one page at a time."""

import asyncio
import re
import time
from collections.abc import AsyncIterator
from functools import partial

from .client import GitHubClient
from .models import ListingRequest
from .retry import RetryPolicy, call_with_retry

_NEXT_LINK = re.compile(r'<([^>]*)>\s*;\s*rel="next"')


def next_link(link: str | None) -> str | None:
    """Extract the rel="next" URL from a Link header."""
    if not link:
        return None
    match = _NEXT_LINK.search(link)
    return match.group(1) if match else None


async def iter_records(
    client: GitHubClient,
    request: ListingRequest,
    policy: RetryPolicy | None = None,
    *,
    sleep=asyncio.sleep,
    clock=time.time,
) -> AsyncIterator[dict]:
    """Yield every record of the listing in server order.

    The next page is only requested once the current one has been fully
    consumed. Pages are rate-limit retried with ``policy``; any other error
    ends the iteration by propagating.
    """
    endpoint: str | None = request.endpoint
    params: dict | None = request.params()
    page = 0

    while endpoint is not None:
        page += 1
        resp = await call_with_retry(
            partial(client.get, endpoint, params),
            policy,
            sleep=sleep,
            clock=clock,
            label=f"{request.endpoint} page {page}",
        )
        if not isinstance(resp.body, list):
            raise ValueError(f"Expected a list from {request.endpoint} page {page}, got {type(resp.body).__name__}")
        if not resp.body:
            break

        for record in resp.body:
            yield record

        # The next link already carries the query string
        endpoint = next_link(resp.link)
        params = None


async def collect_records(
    client: GitHubClient,
    request: ListingRequest,
    policy: RetryPolicy | None = None,
    **kwargs,
) -> list[dict]:
    return [record async for record in iter_records(client, request, policy, **kwargs)]
