from __future__ import annotations

import re
from dataclasses import dataclass

from mrel.core.result import Err, Ok, Result
from mrel.release.errors import VersionInvalid

# ASCII digits only, no leading zeros: the registry would refuse "4.0.012" anyway.
_NUMBER = r"(0|[1-9][0-9]*)"


@dataclass(frozen=True, slots=True, order=True)
class ReleaseVersion:
    """Accepted release version.

    Only built through ``parse_release_version``, so a ReleaseVersion in hand
    always matches the pinned ``major.minor`` line.
    """

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_release_version(
    text: str, *, major: int, minor: int
) -> Result[ReleaseVersion, VersionInvalid]:
    """Accept ``<major>.<minor>.<patch>`` with major and minor pinned."""
    pattern = rf"{major}\.{minor}\.{_NUMBER}"
    m = re.fullmatch(pattern, text)
    if m is None:
        return Err(VersionInvalid(value=text, expected=f"{major}.{minor}.XXX"))
    return Ok(ReleaseVersion(major, minor, int(m.group(1))))
