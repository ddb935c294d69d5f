"""Unit tests for splitting the listing."""

import pytest

from .partition import DuplicateKeyError, is_pull_request, partition_records


def _issue(number, **extra):
    return {"number": number, "title": f"Issue {number}", **extra}


def _pull(number):
    return _issue(number, pull_request={"url": f"https://api.github.com/repos/o/r/pulls/{number}"})


def describe_is_pull_request():
    def it_detects_the_pull_request_link():
        assert is_pull_request(_pull(1))

    def it_treats_missing_link_as_plain_issue():
        assert not is_pull_request(_issue(1))

    def it_treats_null_link_as_plain_issue():
        assert not is_pull_request(_issue(1, pull_request=None))


def describe_partition_records():
    def it_handles_empty_input():
        assert partition_records([]) == ([], [])

    def it_splits_issues_from_pull_requests():
        records = [_issue(1), _pull(2), _issue(3), _pull(4), _issue(5)]

        plain, pull_numbers = partition_records(records)

        assert [r["number"] for r in plain] == [1, 3, 5]
        assert pull_numbers == [2, 4]

    def it_accounts_for_every_record_exactly_once():
        records = [_pull(n) if n % 3 == 0 else _issue(n) for n in range(1, 31)]

        plain, pull_numbers = partition_records(records)

        plain_numbers = [r["number"] for r in plain]
        assert sorted(plain_numbers + pull_numbers) == list(range(1, 31))
        assert not set(plain_numbers) & set(pull_numbers)

    def it_keeps_listing_order():
        records = [_pull(9), _issue(7), _pull(3), _issue(1)]

        plain, pull_numbers = partition_records(records)

        assert [r["number"] for r in plain] == [7, 1]
        assert pull_numbers == [9, 3]

    def it_passes_plain_records_through_untouched():
        record = _issue(1, labels=[{"name": "bug"}], body=None)

        plain, _ = partition_records([record])

        assert plain[0] is record

    def it_accepts_a_generator():
        plain, pull_numbers = partition_records(_issue(n) for n in range(3))

        assert len(plain) == 3
        assert pull_numbers == []

    def it_rejects_duplicate_numbers():
        with pytest.raises(DuplicateKeyError) as exc_info:
            partition_records([_issue(1), _pull(2), _pull(2)])

        assert exc_info.value.number == 2
