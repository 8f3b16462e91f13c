"""Deploy a folder of build outputs and register the build run."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional, Protocol, Sequence

import httpx

from artifactory_action.modules.artifactdeploy.domain import (
    ArtifactBatches,
    ArtifactPropertiesRule,
    BuildModule,
    BuildRun,
    Category,
    DeployableArtifact,
    DeployableFileArtifact,
    calculate_path,
)
from artifactory_action.modules.artifactdeploy.domain.constants import (
    BUILD_NAME_PROPERTY,
    BUILD_NUMBER_PROPERTY,
    BUILD_TIMESTAMP_PROPERTY,
)
from artifactory_action.modules.artifactdeploy.exceptions import DeployError, DeployPreconditionError
from artifactory_action.modules.artifactdeploy.filescan import DirectoryScanner
from artifactory_action.modules.artifactdeploy.signing import ArtifactSigner, DeployableArtifactsSigner
from .categorizer import batch_by_category
from .manifest import BuildModulesGenerator
from .normalizer import PathNormalizer
from .uploader import ArtifactRepository, ArtifactUploader

if TYPE_CHECKING:
    from artifactory_action.settings import Settings


class Artifactory(ArtifactRepository, Protocol):
    def add_build_run(self, project: Optional[str], build_name: str, build_run: BuildRun) -> None:  # pragma: no cover
        ...


class Deployer:
    """Uploads every artifact under the deploy folder, category by category."""

    def __init__(
        self,
        settings: Settings,
        artifactory: Artifactory,
        directory_scanner: Optional[DirectoryScanner] = None,
        *,
        signer: Optional[ArtifactSigner] = None,
        uploader: Optional[ArtifactUploader] = None,
    ) -> None:
        self.settings = settings
        self.artifactory = artifactory
        self.directory_scanner = directory_scanner or DirectoryScanner.for_deploy()
        self.signer = signer
        self.uploader = uploader or ArtifactUploader(
            artifactory,
            settings.deploy_repository,
            retry_delay=settings.retry_delay,
        )
        self.artifact_properties: List[ArtifactPropertiesRule] = settings.artifact_properties()
        self.log = logging.getLogger(self.__class__.__name__)

    def deploy(self) -> BuildRun:
        started = datetime.now(timezone.utc)
        build_properties = self.build_properties(started)
        batches = self.get_batched_artifacts(build_properties)
        if self.signer is not None:
            self.log.info("Signing artifacts")
            batches = DeployableArtifactsSigner(self.signer, build_properties).add_signatures(batches)
        size = len(batches)
        if size == 0:
            raise DeployPreconditionError("No artifacts found to deploy")
        self.log.info(
            "Deploying %d artifacts to %s in %s as build %s of %s using %d thread(s)",
            size,
            self.settings.deploy_repository,
            self.settings.server_uri,
            self.settings.deploy_build_number,
            self.settings.deploy_build_name,
            self.settings.deploy_threads,
        )
        self.deploy_artifacts(batches)
        build_run = self.add_build_run(started, batches)
        self.log.debug("Done")
        return build_run

    def build_properties(self, started: datetime) -> Dict[str, str]:
        return {
            BUILD_NAME_PROPERTY: self.settings.deploy_build_name,
            BUILD_NUMBER_PROPERTY: str(self.settings.deploy_build_number),
            BUILD_TIMESTAMP_PROPERTY: str(int(started.timestamp() * 1000)),
        }

    def get_batched_artifacts(self, build_properties: Dict[str, str]) -> ArtifactBatches:
        root = Path(self.settings.deploy_folder).absolute()
        if not root.is_dir() or not any(root.iterdir()):
            raise DeployPreconditionError(f"No artifacts found in empty directory '{root}'")
        self.log.debug("Getting deployable artifacts from %s", root)
        files = [(file, calculate_path(root, file)) for file in self.directory_scanner.scan(root)]
        artifacts: List[DeployableArtifact] = []
        for normalized in PathNormalizer().normalize(files):
            self.log.debug("Including file %s with path %s", normalized.file, normalized.canonical_path)
            properties = dict(build_properties)
            properties.update(self.get_artifact_properties(normalized.original_path))
            artifacts.append(DeployableFileArtifact(normalized.canonical_path, normalized.file, properties))
        return batch_by_category(artifacts)

    def get_artifact_properties(self, path: str) -> Dict[str, str]:
        properties: Dict[str, str] = {}
        for rule in self.artifact_properties:
            if rule.matches(path):
                self.log.debug("Artifact properties matched, adding properties %s", rule.properties)
                properties.update(rule.properties)
        return properties

    def deploy_artifacts(self, batches: ArtifactBatches) -> None:
        with ThreadPoolExecutor(max_workers=self.settings.deploy_threads) as executor:
            for category, artifacts in batches.items():
                self.deploy_batch(executor, category, artifacts)

    def deploy_batch(
        self,
        executor: ThreadPoolExecutor,
        category: Category,
        artifacts: Sequence[DeployableArtifact],
    ) -> None:
        """Upload one category and wait for all of it before returning."""
        self.log.debug("Deploying %s artifacts", category.name)
        futures = [executor.submit(self.deploy_artifact, artifact) for artifact in artifacts]
        first_error: Optional[BaseException] = None
        for future in as_completed(futures):
            error = future.exception()
            if error is not None and first_error is None:
                first_error = error
        if first_error is not None:
            raise first_error

    def deploy_artifact(self, artifact: DeployableArtifact) -> None:
        checksums = artifact.checksums
        self.log.info("Deploying %s %s (%s/%s)", artifact.path, dict(artifact.properties), checksums.sha1, checksums.md5)
        self.uploader.upload(artifact)

    def add_build_run(self, started: datetime, batches: ArtifactBatches) -> BuildRun:
        number = self.settings.deploy_build_number
        self.log.debug("Adding build run %s", number)
        modules: List[BuildModule] = BuildModulesGenerator().get_build_modules(batches.flatten())
        build_run = BuildRun(
            number=number,
            started=started,
            uri=self.settings.deploy_build_uri,
            modules=tuple(modules),
        )
        try:
            self.artifactory.add_build_run(self.settings.deploy_project, self.settings.deploy_build_name, build_run)
        except httpx.HTTPError as exc:
            raise DeployError(f"Error adding build run {number}") from exc
        return build_run
