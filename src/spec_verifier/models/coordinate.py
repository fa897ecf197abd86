"""
Version Coordinate — group/artifact/version identity of a spec artifact.

Wraps the Maven-style coordinate carried by a built archive and provides
the permissive version parse used for ordering and offset comparisons.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import total_ordering

SNAPSHOT_SUFFIX = "-SNAPSHOT"
MILESTONE_MARKER = "-M"
RELEASE_CANDIDATE_MARKER = "-RC"

_BUILD_NUMBER_SEPARATORS = ("m", "b")
_VERSION_RE = re.compile(r"^(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:-(.+))?$")


def strip_approved_qualifier(version: str | None) -> str | None:
    """
    Strip a snapshot, milestone or release-candidate qualifier.

    Matching is by substring and only the first applicable rule runs:
    ``-SNAPSHOT`` suffix, then ``-M``, then ``-RC``.
    """
    if version is None:
        return None
    if version.endswith(SNAPSHOT_SUFFIX):
        return version[: -len(SNAPSHOT_SUFFIX)]
    if MILESTONE_MARKER in version:
        return version[: version.index(MILESTONE_MARKER)]
    if RELEASE_CANDIDATE_MARKER in version:
        return version[: version.index(RELEASE_CANDIDATE_MARKER)]
    return version


def strip_snapshot_qualifier(version: str | None) -> str | None:
    """Remove a trailing ``-SNAPSHOT`` only."""
    if version is not None and version.endswith(SNAPSHOT_SUFFIX):
        return version[: -len(SNAPSHOT_SUFFIX)]
    return version


@total_ordering
@dataclass(frozen=True)
class ArtifactVersion:
    """
    Structured form of a version string.

    ``<major>[.<minor>[.<incremental>]][-<rest>]`` where an all-digit rest is
    a build number and anything else is the qualifier. A string that does
    not fit becomes the qualifier with all numeric parts at 0.
    """

    raw: str
    major: int = 0
    minor: int = 0
    incremental: int = 0
    build_number: int | None = None
    qualifier: str | None = None

    @classmethod
    def parse(cls, raw: str) -> "ArtifactVersion":
        match = _VERSION_RE.match(raw)
        if not match:
            return cls(raw=raw, qualifier=raw)

        major, minor, incremental, rest = match.groups()
        build_number = None
        qualifier = None
        if rest is not None:
            if rest.isdigit():
                build_number = int(rest)
            else:
                qualifier = rest
        return cls(
            raw=raw,
            major=int(major),
            minor=int(minor or 0),
            incremental=int(incremental or 0),
            build_number=build_number,
            qualifier=qualifier,
        )

    def _sort_key(self) -> tuple:
        return (
            self.major,
            self.minor,
            self.incremental,
            self.qualifier is None,
            self.build_number or 0,
            self.qualifier or "",
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArtifactVersion):
            return NotImplemented
        return self._sort_key() == other._sort_key()

    def __lt__(self, other: "ArtifactVersion") -> bool:
        if not isinstance(other, ArtifactVersion):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __hash__(self) -> int:
        return hash(self._sort_key())

    def __str__(self) -> str:
        return self.raw


@dataclass(frozen=True)
class VersionCoordinate:
    """Group/artifact/version identity of a built or declared artifact."""

    group_id: str | None
    artifact_id: str | None
    version: str | None
    parsed: ArtifactVersion | None = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        parsed = ArtifactVersion.parse(self.version) if self.version is not None else None
        object.__setattr__(self, "parsed", parsed)

    @property
    def absolute_version(self) -> str | None:
        """The version with an approved qualifier stripped."""
        return strip_approved_qualifier(self.version)

    @property
    def build_number(self) -> str | None:
        """Build number encoded after the last ``m`` or ``b`` of the qualifier."""
        if self.parsed is None:
            return None
        qualifier = strip_snapshot_qualifier(self.parsed.qualifier)
        if qualifier is None:
            return None
        for separator in _BUILD_NUMBER_SEPARATORS:
            if separator in qualifier:
                return qualifier[qualifier.rindex(separator) + 1 :]
        return None

    @classmethod
    def from_properties(cls, props: dict[str, str]) -> "VersionCoordinate":
        """Build from a ``pom.properties`` mapping."""
        return cls(
            group_id=props.get("groupId"),
            artifact_id=props.get("artifactId"),
            version=props.get("version"),
        )

    def to_dict(self) -> dict:
        return {
            "group_id": self.group_id,
            "artifact_id": self.artifact_id,
            "version": self.version,
        }

    def __str__(self) -> str:
        return f"[ {self.group_id}:{self.artifact_id}:{self.version} ]"
