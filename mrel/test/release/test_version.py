from __future__ import annotations

import pytest

from mrel.core.result import Err, Ok
from mrel.release.errors import VersionInvalid
from mrel.release.version import ReleaseVersion, parse_release_version


def test_accepts_pinned_line() -> None:
    assert parse_release_version("4.0.428", major=4, minor=0) == Ok(ReleaseVersion(4, 0, 428))
    assert parse_release_version("4.0.0", major=4, minor=0) == Ok(ReleaseVersion(4, 0, 0))


@pytest.mark.parametrize(
    "text",
    ["4.1.0", "5.0.1", "4.0", "4.0.x", "v4.0.1", "4.0.1-beta.1", "4.0.012", " 4.0.1", ""],
)
def test_rejects_everything_else(text: str) -> None:
    result = parse_release_version(text, major=4, minor=0)

    assert isinstance(result, Err)
    assert result.error == VersionInvalid(value=text, expected="4.0.XXX")


def test_other_pinned_line() -> None:
    assert parse_release_version("5.2.7", major=5, minor=2) == Ok(ReleaseVersion(5, 2, 7))
    assert isinstance(parse_release_version("4.0.7", major=5, minor=2), Err)


def test_str_and_ordering() -> None:
    assert str(ReleaseVersion(4, 0, 500)) == "4.0.500"
    assert ReleaseVersion(4, 0, 9) < ReleaseVersion(4, 0, 10)


def test_error_message() -> None:
    error = VersionInvalid(value="4.1.0", expected="4.0.XXX")
    assert error.message == "Invalid version format: 4.1.0"
    assert error.hint == "Expected format: 4.0.XXX"


def test_rejects_trailing_newline() -> None:
    assert isinstance(parse_release_version("4.0.1\n", major=4, minor=0), Err)


@pytest.mark.parametrize("text", ["4.0.1٢", "4.0.١٢", "4.0.１"])
def test_rejects_non_ascii_digits(text: str) -> None:
    result = parse_release_version(text, major=4, minor=0)

    assert isinstance(result, Err)
    assert result.error.value == text
