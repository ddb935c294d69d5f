"""Snapshot a GitHub repository's issues and pull requests.

Issues are listed page by page; pull requests are then fetched one by one
under a shared admission throttle, waiting out rate limits, and both
collections are written as MessagePack files.
"""

from .cli import main
from .client import GitHubClient, RateLimitError
from .models import ApiResponse, Config, ListingRequest
from .pipeline import run

__all__ = ["main", "run", "GitHubClient", "RateLimitError", "ApiResponse", "Config", "ListingRequest"]
