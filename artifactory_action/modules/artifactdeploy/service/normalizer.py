"""Collapse timestamped snapshot paths and drop duplicates."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple

from artifactory_action.modules.artifactdeploy.domain import Coordinate, VersionKind

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizedFile:
    file: Path
    original_path: str
    canonical_path: str


def canonical_path(path: str) -> str:
    """Rewrite a timestamped snapshot path to its ``-SNAPSHOT`` form."""
    coordinate = Coordinate.from_path(path)
    if coordinate is None or coordinate.version_kind is not VersionKind.TIMESTAMPED_SNAPSHOT:
        return path
    stripped = path.replace(coordinate.literal_snapshot_version, coordinate.version)
    log.debug("Stripped timestamp version %s to %s", path, stripped)
    return stripped


class PathNormalizer:
    """Keeps the first file seen for each canonical path.

    Not thread safe; populated before any upload starts.
    """

    def __init__(self) -> None:
        self._seen: Set[str] = set()

    def accept(self, path: str) -> Optional[str]:
        """Return the canonical path, or ``None`` if it was already taken."""
        canonical = canonical_path(path)
        if canonical in self._seen:
            log.debug("Skipping %s, %s is already included", path, canonical)
            return None
        self._seen.add(canonical)
        return canonical

    def normalize(self, files: Iterable[Tuple[Path, str]]) -> List[NormalizedFile]:
        retained: List[NormalizedFile] = []
        for file, path in files:
            canonical = self.accept(path)
            if canonical is not None:
                retained.append(NormalizedFile(file=file, original_path=path, canonical_path=canonical))
        return retained
