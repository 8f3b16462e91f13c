"""Fatal error types raised by the deployment."""

from __future__ import annotations


class DeployError(RuntimeError):
    """Base class for conditions that abort the whole deployment."""


class DeployPreconditionError(DeployError):
    """Raised before any network call when there is nothing valid to deploy."""


class ArtifactDeployError(DeployError):
    """Raised when a single artifact could not be uploaded."""

    def __init__(self, path: str, checksums: object) -> None:
        super().__init__(f"Error deploying artifact {path} with checksums {checksums}")
        self.path = path
        self.checksums = checksums


class SigningError(DeployError):
    """Raised when signatures could not be produced."""
