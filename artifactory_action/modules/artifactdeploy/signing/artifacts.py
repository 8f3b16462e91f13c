"""Add detached signatures for a batch of deployable artifacts."""

from __future__ import annotations

import io
import logging
from typing import BinaryIO, Dict, Mapping

from artifactory_action.modules.artifactdeploy.domain import (
    ArtifactBatches,
    Category,
    Checksums,
    DeployableArtifact,
)
from artifactory_action.modules.artifactdeploy.domain.constants import SIGNATURE_FILE_EXTENSION
from artifactory_action.modules.artifactdeploy.exceptions import DeployPreconditionError, SigningError
from .gpg import ArtifactSigner

log = logging.getLogger(__name__)


def is_signature_file(name: str) -> bool:
    return name.lower().endswith(SIGNATURE_FILE_EXTENSION)


class SignatureArtifact:
    """In-memory signature of another artifact, deployed next to it."""

    def __init__(self, source: DeployableArtifact, signature: bytes, properties: Mapping[str, str]) -> None:
        self._path = source.path + SIGNATURE_FILE_EXTENSION
        self._signature = signature
        self._properties: Dict[str, str] = dict(properties)
        self._checksums = Checksums.of_bytes(signature)

    @property
    def path(self) -> str:
        return self._path

    @property
    def size(self) -> int:
        return len(self._signature)

    @property
    def properties(self) -> Mapping[str, str]:
        return dict(self._properties)

    @property
    def checksums(self) -> Checksums:
        return self._checksums

    def open(self) -> BinaryIO:
        return io.BytesIO(self._signature)

    def __repr__(self) -> str:
        return f"SignatureArtifact(path={self._path!r})"


class DeployableArtifactsSigner:
    def __init__(self, signer: ArtifactSigner, build_properties: Mapping[str, str]) -> None:
        self.signer = signer
        self.build_properties = dict(build_properties)

    def add_signatures(self, batches: ArtifactBatches) -> ArtifactBatches:
        """Return a copy of ``batches`` with a SIGNATURE batch for every artifact."""
        if batches.get(Category.SIGNATURE):
            raise DeployPreconditionError("Files must not already be signed")
        signatures = [self._sign(artifact) for artifact in batches.flatten()]
        return batches.with_batch(Category.SIGNATURE, signatures)

    def _sign(self, artifact: DeployableArtifact) -> SignatureArtifact:
        log.debug("Signing %s", artifact.path)
        try:
            with artifact.open() as content:
                signature = self.signer.sign(content)
        except OSError as exc:
            raise SigningError(f"Unable to sign artifacts: {artifact.path}") from exc
        return SignatureArtifact(artifact, signature, self.build_properties)
