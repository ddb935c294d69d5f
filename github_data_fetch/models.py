"""Data models and constants for issue snapshots."""

from dataclasses import dataclass
from pathlib import Path

API_BASE = "https://api.github.com"
PER_PAGE = 100  # GitHub REST maximum page size

ISSUES_FILENAME = "issues.msgpack"
PULLS_FILENAME = "pulls.msgpack"

# GitHub starts rejecting bursts well below the hourly quota
DEFAULT_RATE_LIMIT = 20  # admissions per window
DEFAULT_RATE_WINDOW = 1.0  # seconds
DEFAULT_MAX_IN_FLIGHT = 20


@dataclass
class ApiResponse:
    """Response from the GitHub REST API client."""

    status: int
    body: dict | list
    link: str | None = None


@dataclass(frozen=True)
class Config:
    """Resolved run configuration."""

    owner: str
    repo: str
    token: str
    output_directory: Path

    @property
    def snapshot_dir(self) -> Path:
        return self.output_directory / self.owner / self.repo


@dataclass(frozen=True)
class ListingRequest:
    """Issue listing endpoint plus its filter and sort options."""

    owner: str
    repo: str
    state: str = "all"
    sort: str = "created"
    direction: str = "asc"
    per_page: int = PER_PAGE

    @property
    def endpoint(self) -> str:
        return f"repos/{self.owner}/{self.repo}/issues"

    def params(self) -> dict:
        return {
            "state": self.state,
            "sort": self.sort,
            "direction": self.direction,
            "per_page": self.per_page,
        }
