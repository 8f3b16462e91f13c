"""Maven-style coordinates derived from repository paths."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

SNAPSHOT_SUFFIX = "-SNAPSHOT"

# yyyyMMdd.HHmmss-<buildNumber>, following "<base>-"
_SNAPSHOT_TIMESTAMP = re.compile(r"(?P<timestamp>\d{8}\.\d{6})-(?P<build>\d+)")


class VersionKind(str, Enum):
    RELEASE = "RELEASE"
    SNAPSHOT = "SNAPSHOT"
    TIMESTAMPED_SNAPSHOT = "TIMESTAMPED_SNAPSHOT"


@dataclass(frozen=True)
class Coordinate:
    """Group/artifact/version identity of a file in a Maven layout."""

    group_id: str
    artifact_id: str
    version: str
    extension: str
    classifier: Optional[str] = None
    version_kind: VersionKind = VersionKind.RELEASE
    literal_snapshot_version: Optional[str] = None

    @property
    def module_id(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    @classmethod
    def from_path(cls, path: str) -> Optional["Coordinate"]:
        """Parse ``.../group/artifact/version/artifact-version[-classifier].ext``.

        Returns ``None`` for anything that does not follow the layout; callers
        treat that as "not a module artifact" rather than an error.
        """
        segments = [segment for segment in path.replace("\\", "/").split("/") if segment]
        if len(segments) < 4:
            return None
        filename = segments[-1]
        version = segments[-2]
        artifact_id = segments[-3]
        group_id = ".".join(segments[:-3])
        stem, dot, extension = filename.rpartition(".")
        if not dot or not stem or not extension:
            return None
        prefix = f"{artifact_id}-"
        if not stem.startswith(prefix):
            return None
        remainder = stem[len(prefix):]

        if remainder.startswith(version) and _is_suffix(remainder[len(version):]):
            kind = VersionKind.SNAPSHOT if version.endswith(SNAPSHOT_SUFFIX) else VersionKind.RELEASE
            classifier = _classifier(remainder[len(version):])
            return cls(group_id, artifact_id, version, extension, classifier, kind)

        if not version.endswith(SNAPSHOT_SUFFIX):
            return None
        base = version[: -len(SNAPSHOT_SUFFIX)]
        literal = _timestamped_version(remainder, base)
        if literal is None:
            return None
        return cls(
            group_id,
            artifact_id,
            version,
            extension,
            _classifier(remainder[len(literal):]),
            VersionKind.TIMESTAMPED_SNAPSHOT,
            literal,
        )


def _timestamped_version(remainder: str, base: str) -> Optional[str]:
    if not remainder.startswith(f"{base}-"):
        return None
    match = _SNAPSHOT_TIMESTAMP.match(remainder, len(base) + 1)
    if not match:
        return None
    # Anything after the build number is "", "-classifier..." or ".inner".
    if not _is_suffix(remainder[match.end():]):
        return None
    return remainder[: match.end()]


def _is_suffix(value: str) -> bool:
    # "" | "-classifier" | ".inner" | "-classifier.inner" (e.g. foo-1.0.jar.asc)
    if not value:
        return True
    if value[0] == "-":
        return len(value) > 1
    return value[0] == "." and value[1:2].isalpha()


def _classifier(suffix: str) -> Optional[str]:
    if not suffix.startswith("-"):
        return None
    classifier = suffix[1:].split(".", 1)[0]
    return classifier or None
