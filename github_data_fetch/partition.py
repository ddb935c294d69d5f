"""Split the issue listing into plain issues and pull request numbers."""

from collections.abc import Iterable


class DuplicateKeyError(ValueError):
    """The listing returned the same issue number twice."""

    def __init__(self, number):
        super().__init__(f"Issue #{number} appears more than once in the listing")
        self.number = number


def is_pull_request(record: dict) -> bool:
    # GitHub lists pull requests as issues carrying a pull_request link
    return record.get("pull_request") is not None


def partition_records(records: Iterable[dict]) -> tuple[list[dict], list[int]]:
    """Return (plain issues, pull request numbers), both in listing order."""
    plain: list[dict] = []
    pull_numbers: list[int] = []
    seen: set[int] = set()

    for record in records:
        number = record["number"]
        if number in seen:
            raise DuplicateKeyError(number)
        seen.add(number)

        if is_pull_request(record):
            pull_numbers.append(number)
        else:
            plain.append(record)

    return plain, pull_numbers
