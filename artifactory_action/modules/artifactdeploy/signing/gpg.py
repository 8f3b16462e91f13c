"""Detached ASCII-armored signatures produced with the ``gpg`` binary."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import BinaryIO, List, Optional, Protocol

from artifactory_action.modules.artifactdeploy.exceptions import SigningError


class ArtifactSigner(Protocol):
    def sign(self, content: BinaryIO) -> bytes:  # pragma: no cover - interface
        ...


class GpgSigner:
    """Signs content with a private key imported into a throwaway GnuPG home."""

    def __init__(
        self,
        key: str,
        passphrase: Optional[str] = None,
        *,
        gpg_binary: str = "gpg",
        timeout: int = 120,
    ) -> None:
        self.gpg_binary = gpg_binary
        self.timeout = timeout
        self.log = logging.getLogger(self.__class__.__name__)
        self.home = Path(tempfile.mkdtemp(prefix="artifactory-action-gpg-"))
        os.chmod(self.home, 0o700)
        self._passphrase_file: Optional[Path] = None
        if passphrase:
            self._passphrase_file = self.home / "passphrase"
            self._passphrase_file.write_text(passphrase, encoding="utf-8")
            os.chmod(self._passphrase_file, 0o600)
        try:
            self._run(["--import"], key.encode("utf-8"))
        except SigningError:
            self.close()
            raise

    def sign(self, content: BinaryIO) -> bytes:
        args = ["--armor", "--detach-sign", "--output", "-"]
        if self._passphrase_file is not None:
            args = ["--pinentry-mode", "loopback", "--passphrase-file", str(self._passphrase_file), *args]
        return self._run(args, content.read())

    def close(self) -> None:
        shutil.rmtree(self.home, ignore_errors=True)

    def __enter__(self) -> "GpgSigner":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _run(self, args: List[str], data: bytes) -> bytes:
        cmd = [self.gpg_binary, "--batch", "--yes", "--homedir", str(self.home), *args]
        self.log.debug("Running %s", " ".join(args))
        try:
            result = subprocess.run(
                cmd,
                input=data,
                capture_output=True,
                timeout=self.timeout,
                check=True,
            )
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or b"").decode(errors="ignore").strip()
            raise SigningError(f"Unable to sign artifacts: gpg {args[0]} failed: {stderr}") from exc
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise SigningError(f"Unable to sign artifacts: unable to run {self.gpg_binary}") from exc
        return result.stdout
