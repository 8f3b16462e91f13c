"""Find the files under a deploy folder that should be uploaded."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, List

from artifactory_action.modules.artifactdeploy.domain.constants import (
    CHECKSUM_FILE_EXTENSIONS,
    METADATA_FILES,
)

log = logging.getLogger(__name__)

FileFilter = Callable[[Path], bool]


def is_checksum_file(file: Path) -> bool:
    return file.name.lower().endswith(CHECKSUM_FILE_EXTENSIONS)


def is_metadata_file(file: Path) -> bool:
    return file.name.lower() in METADATA_FILES


class DirectoryScanner:
    """Recursively list regular files, sorted by their path under ``root``."""

    def __init__(self, filters: Iterable[FileFilter] = ()) -> None:
        self.filters: List[FileFilter] = list(filters)

    @classmethod
    def for_deploy(cls) -> "DirectoryScanner":
        """Scanner that skips checksum sidecars and generated Maven metadata."""
        return cls(
            [
                lambda file: not is_checksum_file(file),
                lambda file: not is_metadata_file(file),
            ]
        )

    def scan(self, root: Path) -> List[Path]:
        root = Path(root)
        log.debug("Scanning %s", root)
        files = sorted(
            (path for path in root.rglob("*") if path.is_file()),
            key=lambda path: path.relative_to(root).as_posix(),
        )
        return [file for file in files if all(accept(file) for accept in self.filters)]
