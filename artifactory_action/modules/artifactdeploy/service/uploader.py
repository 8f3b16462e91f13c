"""Per-artifact upload decisions: checksum deploy, fallback and retries."""

from __future__ import annotations

import logging
import time
from typing import Callable, Protocol

import httpx

from artifactory_action.modules.artifactdeploy.domain import DeployableArtifact
from artifactory_action.modules.artifactdeploy.domain.constants import (
    CHECKSUM_DEPLOY_THRESHOLD,
    DEFAULT_RETRY_DELAY_SECONDS,
    MAX_CONTENT_DEPLOY_ATTEMPTS,
)
from artifactory_action.modules.artifactdeploy.exceptions import ArtifactDeployError
from .outcome import (
    DeployOutcome,
    FatalFailure,
    RetriableFailure,
    Success,
    classify_content_failure,
    is_checksum_fallback,
)


class ArtifactRepository(Protocol):
    """Remote calls the uploader relies on; each call is a single attempt."""

    def deploy_by_checksum(self, repository: str, artifact: DeployableArtifact) -> None:  # pragma: no cover
        ...

    def deploy_content(self, repository: str, artifact: DeployableArtifact) -> None:  # pragma: no cover
        ...


class ArtifactUploader:
    """Uploads one artifact at a time to a named repository."""

    def __init__(
        self,
        artifactory: ArtifactRepository,
        repository: str,
        *,
        retry_delay: float = DEFAULT_RETRY_DELAY_SECONDS,
        max_attempts: int = MAX_CONTENT_DEPLOY_ATTEMPTS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.artifactory = artifactory
        self.repository = repository
        self.retry_delay = retry_delay
        self.max_attempts = max_attempts
        self.sleep = sleep
        self.log = logging.getLogger(self.__class__.__name__)

    def upload(self, artifact: DeployableArtifact) -> None:
        try:
            if artifact.size <= CHECKSUM_DEPLOY_THRESHOLD:
                self.deploy_using_content(artifact)
                return
            try:
                self.artifactory.deploy_by_checksum(self.repository, artifact)
            except Exception as exc:
                if not is_checksum_fallback(exc):
                    raise
                self.log.debug("Checksum deploy of %s rejected (%s), uploading content", artifact.path, exc)
                self.deploy_using_content(artifact)
        except Exception as exc:
            raise ArtifactDeployError(artifact.path, artifact.checksums) from exc

    def deploy_using_content(self, artifact: DeployableArtifact) -> None:
        attempt = 0
        while True:
            attempt += 1
            outcome = self.attempt_content_deploy(artifact)
            if isinstance(outcome, Success):
                return
            if not self.should_retry(outcome, attempt):
                raise outcome.error
            self.log.info(
                "Deploy failed with %s. Retrying in %dms.",
                outcome.reason,
                int(self.retry_delay * 1000),
            )
            self.sleep(self.retry_delay)

    def attempt_content_deploy(self, artifact: DeployableArtifact) -> DeployOutcome:
        try:
            self.artifactory.deploy_content(self.repository, artifact)
        except (httpx.HTTPError, OSError) as exc:
            return classify_content_failure(exc)
        return Success()

    def should_retry(self, outcome: DeployOutcome, attempt: int) -> bool:
        if isinstance(outcome, FatalFailure):
            return False
        return isinstance(outcome, RetriableFailure) and attempt < self.max_attempts
