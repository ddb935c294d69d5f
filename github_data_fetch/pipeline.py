"""Snapshot a repository's issues and pull requests."""

from .client import GitHubClient
from .fetcher import fetch_all
from .models import (
    API_BASE,
    DEFAULT_MAX_IN_FLIGHT,
    DEFAULT_RATE_LIMIT,
    DEFAULT_RATE_WINDOW,
    ISSUES_FILENAME,
    PULLS_FILENAME,
    Config,
    ListingRequest,
)
from .paginate import collect_records
from .partition import partition_records
from .retry import RetryPolicy
from .snapshot import write_snapshot
from .throttle import AdmissionThrottle


async def run(
    config: Config,
    *,
    client: GitHubClient | None = None,
    throttle: AdmissionThrottle | None = None,
    policy: RetryPolicy | None = None,
    max_in_flight: int = DEFAULT_MAX_IN_FLIGHT,
    base_url: str = API_BASE,
) -> dict:
    """List all issues, write the plain ones, then fetch and write the pull requests.

    Each step only starts once the previous one succeeded, and nothing is
    recovered: if the pull request batch fails, issues.msgpack is left on
    disk and pulls.msgpack is not written.

    Returns dict with counts: listed, issues, pulls.
    """
    throttle = throttle or AdmissionThrottle(DEFAULT_RATE_LIMIT, DEFAULT_RATE_WINDOW)
    policy = policy or RetryPolicy()

    owns_client = client is None
    if owns_client:
        client = GitHubClient(config.token, base_url=base_url)

    try:
        out_dir = config.snapshot_dir
        out_dir.mkdir(parents=True, exist_ok=True)

        request = ListingRequest(config.owner, config.repo)
        records = await collect_records(client, request, policy)
        print(f"Listed: {len(records)}", flush=True)

        issues, pull_numbers = partition_records(records)
        print(f"Issues: {len(issues)}", flush=True)
        write_snapshot(issues, out_dir / ISSUES_FILENAME)

        print(f"Pulls: {len(pull_numbers)}", flush=True)

        async def fetch_pull(number):
            return await client.get_pull(config.owner, config.repo, number)

        pulls = await fetch_all(
            pull_numbers,
            fetch_pull,
            throttle=throttle,
            policy=policy,
            max_in_flight=max_in_flight,
            on_dispatch=lambda n: print(f"Pull: {n}", flush=True),
        )
        # Completion order is arbitrary; keep the snapshot deterministic
        pulls.sort(key=lambda p: p["number"])
        write_snapshot(pulls, out_dir / PULLS_FILENAME)
    finally:
        if owns_client:
            await client.close()

    return {"listed": len(records), "issues": len(issues), "pulls": len(pulls)}
