"""Async GitHub REST API client using httpx."""

import time
from importlib.metadata import PackageNotFoundError, version

import httpx

from .models import API_BASE, ApiResponse

DEFAULT_RATE_LIMIT_WAIT = 60  # GitHub asks for a minute when it sends no reset hint

try:
    USER_AGENT = f"github-data-fetch/{version('github-data-fetch')}"
except PackageNotFoundError:
    USER_AGENT = "github-data-fetch"


class RateLimitError(Exception):
    """GitHub rejected the request for rate limiting.

    ``reset_at`` is the absolute epoch time after which the same request may
    be issued again.
    """

    def __init__(self, reset_at: float):
        super().__init__(f"Rate limited until {reset_at:.0f}")
        self.reset_at = reset_at


class GitHubClient:
    """Thin async client for the GitHub REST endpoints used by a snapshot run.

    Every call makes exactly one HTTP request. Retrying and throttling are
    layered on top by the caller.
    """

    def __init__(
        self,
        token: str,
        base_url: str = API_BASE,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Authorization": f"bearer {token}",
                "Accept": "application/vnd.github+json",
                "User-Agent": USER_AGENT,
            },
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def get(self, endpoint: str, params: dict | None = None) -> ApiResponse:
        """Make one GET request.

        Args:
            endpoint: API path (e.g. "repos/owner/repo/issues") or an absolute
                URL taken from a Link header.
            params: Query parameters dict

        Raises:
            RateLimitError: the request was rejected for rate limiting.
            httpx.HTTPStatusError: any other non-2xx response.
        """
        url = endpoint if endpoint.startswith(("http://", "https://")) else f"/{endpoint.lstrip('/')}"
        resp = await self._client.get(url, params=params)

        if _is_rate_limited(resp):
            raise RateLimitError(_reset_at(resp))

        if 200 <= resp.status_code < 300:
            return ApiResponse(
                status=resp.status_code,
                body=resp.json() if resp.content else {},
                link=resp.headers.get("link"),
            )

        raise httpx.HTTPStatusError(
            f"GitHub API error {resp.status_code}",
            request=resp.request,
            response=resp,
        )

    async def get_pull(self, owner: str, repo: str, number: int) -> dict:
        """Fetch a single pull request."""
        resp = await self.get(f"repos/{owner}/{repo}/pulls/{number}")
        return resp.body


def _is_rate_limited(resp: httpx.Response) -> bool:
    if resp.status_code == 429:
        return True
    if resp.status_code != 403:
        return False
    return resp.headers.get("x-ratelimit-remaining") == "0" or "rate limit" in resp.text.lower()


def _reset_at(resp: httpx.Response, now: float | None = None) -> float:
    """Absolute time at which a rate-limited request may be retried."""
    now = time.time() if now is None else now

    # Secondary limits send retry-after alongside the primary quota's reset
    retry_after = _parse_float(resp.headers.get("retry-after"))
    if retry_after is not None:
        return now + retry_after

    reset = _parse_float(resp.headers.get("x-ratelimit-reset"))
    if reset is not None:
        return reset

    return now + DEFAULT_RATE_LIMIT_WAIT


def _parse_float(val: str | None) -> float | None:
    if val is None:
        return None
    try:
        return float(val)
    except ValueError:
        return None
