"""Explicit wiring of the deploy collaborators from settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from artifactory_action.modules.artifactdeploy.filescan import DirectoryScanner
from artifactory_action.modules.artifactdeploy.integration import HttpArtifactory
from artifactory_action.modules.artifactdeploy.service import Deployer
from artifactory_action.modules.artifactdeploy.signing import GpgSigner
from .settings import Settings

log = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Owns the concrete collaborators for one deployment."""

    settings: Settings
    artifactory: HttpArtifactory = field(init=False)
    signer: Optional[GpgSigner] = field(init=False, default=None)
    deployer: Deployer = field(init=False)

    def __post_init__(self) -> None:
        self.artifactory = HttpArtifactory(
            self.settings.server_uri,
            self.settings.server_username,
            self.settings.server_password,
        )
        try:
            if self.settings.signing_enabled:
                log.debug("Signing key configured, artifacts will be signed")
                self.signer = GpgSigner(self.settings.signing_key, self.settings.signing_passphrase)
            self.deployer = Deployer(
                self.settings,
                self.artifactory,
                DirectoryScanner.for_deploy(),
                signer=self.signer,
            )
        except Exception:
            self.close()
            raise

    def close(self) -> None:
        if self.signer is not None:
            self.signer.close()
        self.artifactory.close()
