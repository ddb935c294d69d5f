"""Command line entry point."""

import argparse
import asyncio
import sys
from pathlib import Path

from .settings import get_settings


def build_parser(settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="github-data-fetch",
        description="Snapshot a GitHub repository's issues and pull requests to MessagePack files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-O",
        "--owner",
        required=True,
        help="Repository owner to fetch data for",
    )
    parser.add_argument(
        "-r",
        "--repository",
        required=True,
        help="Repository name to fetch data for",
    )
    parser.add_argument(
        "-t",
        "--token",
        default=settings.github_token,
        help="GitHub API token to use (default: GITHUB_TOKEN)",
    )
    parser.add_argument(
        "-o",
        "--output-directory",
        type=Path,
        required=True,
        help="Directory to output the data to",
    )
    parser.add_argument(
        "--api-url",
        default=settings.github_api_url,
        help="GitHub API base URL",
    )
    parser.add_argument(
        "--rate-limit",
        type=int,
        default=settings.fetch_rate_limit,
        help=f"Pull request lookups admitted per window (default: {settings.fetch_rate_limit})",
    )
    parser.add_argument(
        "--rate-window",
        type=float,
        default=settings.fetch_rate_window,
        help=f"Admission window in seconds (default: {settings.fetch_rate_window})",
    )
    parser.add_argument(
        "--max-in-flight",
        type=int,
        default=settings.fetch_max_in_flight,
        help=f"Concurrent pull request lookups (default: {settings.fetch_max_in_flight})",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=settings.fetch_max_attempts,
        help="Give up on a request after this many rate-limited attempts (default: retry forever)",
    )
    return parser


def main(argv=None):
    settings = get_settings()
    parser = build_parser(settings)
    args = parser.parse_args(argv)

    if not args.token:
        parser.error("a token is required (--token or GITHUB_TOKEN)")
    for flag, value in (
        ("--rate-limit", args.rate_limit),
        ("--rate-window", args.rate_window),
        ("--max-in-flight", args.max_in_flight),
        ("--max-attempts", args.max_attempts),
    ):
        if value is not None and value <= 0:
            parser.error(f"{flag} must be positive, got {value}")

    from .models import Config
    from .retry import RetryPolicy
    from .pipeline import run
    from .throttle import AdmissionThrottle

    config = Config(
        owner=args.owner,
        repo=args.repository,
        token=args.token,
        output_directory=args.output_directory,
    )

    try:
        stats = asyncio.run(
            run(
                config,
                throttle=AdmissionThrottle(args.rate_limit, args.rate_window),
                policy=RetryPolicy(max_attempts=args.max_attempts),
                max_in_flight=args.max_in_flight,
                base_url=args.api_url,
            )
        )
    except Exception as e:
        sys.stderr.write(f"error: {e!r}\n")
        if e.__cause__ is not None:
            sys.stderr.write(f"  caused by: {e.__cause__!r}\n")
        sys.exit(1)

    print(f"\nDone: {stats['issues']} issues, {stats['pulls']} pulls written to {config.snapshot_dir}")


if __name__ == "__main__":
    main()
