"""Deployable artifacts and their checksums."""

from __future__ import annotations

import hashlib
import io
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Dict, Mapping, Optional, Protocol

CHUNK_SIZE = 65536


@dataclass(frozen=True)
class Checksums:
    sha1: str
    md5: str

    def __post_init__(self) -> None:
        if len(self.sha1) != 40:
            raise ValueError(f"SHA1 must be 40 hex characters, got {self.sha1!r}")
        if len(self.md5) != 32:
            raise ValueError(f"MD5 must be 32 hex characters, got {self.md5!r}")

    @classmethod
    def calculate(cls, opener: Callable[[], BinaryIO]) -> "Checksums":
        """Stream the content once, feeding both digests."""
        sha1 = hashlib.sha1()
        md5 = hashlib.md5()
        with opener() as stream:
            for chunk in iter(lambda: stream.read(CHUNK_SIZE), b""):
                sha1.update(chunk)
                md5.update(chunk)
        return cls(sha1=sha1.hexdigest(), md5=md5.hexdigest())

    @classmethod
    def of_bytes(cls, content: bytes) -> "Checksums":
        return cls.calculate(lambda: io.BytesIO(content))

    def __str__(self) -> str:
        return f"sha1={self.sha1}, md5={self.md5}"


class DeployableArtifact(Protocol):
    """Anything that can be uploaded to a repository path."""

    @property
    def path(self) -> str:  # pragma: no cover - interface
        ...

    @property
    def size(self) -> int:  # pragma: no cover - interface
        ...

    @property
    def properties(self) -> Mapping[str, str]:  # pragma: no cover - interface
        ...

    @property
    def checksums(self) -> Checksums:  # pragma: no cover - interface
        ...

    def open(self) -> BinaryIO:  # pragma: no cover - interface
        ...


class DeployableFileArtifact:
    """A file on disk deployed under a repository-relative path."""

    def __init__(
        self,
        path: str,
        file: Path,
        properties: Optional[Mapping[str, str]] = None,
        checksums: Optional[Checksums] = None,
    ) -> None:
        file = Path(file)
        if not file.exists():
            raise ValueError(f"File '{file}' does not exist")
        if not file.is_file():
            raise ValueError(f"File '{file}' does not refer to a file")
        self._path = path
        self.file = file
        self._properties: Dict[str, str] = dict(properties or {})
        self._checksums = checksums

    @property
    def path(self) -> str:
        return self._path

    @property
    def size(self) -> int:
        return self.file.stat().st_size

    @property
    def properties(self) -> Mapping[str, str]:
        return dict(self._properties)

    @property
    def checksums(self) -> Checksums:
        if self._checksums is None:
            self._checksums = Checksums.calculate(self.open)
        return self._checksums

    def open(self) -> BinaryIO:
        return open(self.file, "rb")

    def __repr__(self) -> str:
        return f"DeployableFileArtifact(path={self._path!r}, file={str(self.file)!r})"


def calculate_path(root: Path, file: Path) -> str:
    """Return ``file`` relative to ``root`` as a ``/``-prefixed POSIX path."""
    root_path = Path(root).absolute()
    file_path = Path(file).absolute()
    try:
        relative = file_path.relative_to(root_path)
    except ValueError:
        raise ValueError(f"File '{root}' is not a parent of '{file}'") from None
    return "/" + relative.as_posix()
