"""Build the module list of a build run from the deployed artifacts."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from artifactory_action.modules.artifactdeploy.domain import (
    BuildArtifact,
    BuildModule,
    Coordinate,
    DeployableArtifact,
)

log = logging.getLogger(__name__)

# Sidecar checksum files never become build artifacts.
IGNORED_EXTENSIONS = frozenset({"md5", "sha", "sha1", "sha256", "sha512"})


def artifact_type(coordinate: Coordinate) -> Optional[str]:
    extension = coordinate.extension
    if extension in IGNORED_EXTENSIONS:
        return None
    if extension == "jar" and coordinate.classifier == "sources":
        return "java-source-jar"
    return extension


class BuildModulesGenerator:
    """Group artifacts into modules keyed by ``group:artifact:version``."""

    def get_build_modules(self, artifacts: Iterable[DeployableArtifact]) -> List[BuildModule]:
        grouped: Dict[str, List[BuildArtifact]] = {}
        for artifact in artifacts:
            coordinate = Coordinate.from_path(artifact.path)
            if coordinate is None:
                log.debug("Skipping %s, not in a Maven layout", artifact.path)
                continue
            build_artifact = self._build_artifact(coordinate, artifact)
            if build_artifact is None:
                continue
            grouped.setdefault(coordinate.module_id, []).append(build_artifact)
        return [BuildModule(id=module_id, artifacts=tuple(items)) for module_id, items in grouped.items()]

    def _build_artifact(self, coordinate: Coordinate, artifact: DeployableArtifact) -> Optional[BuildArtifact]:
        type_ = artifact_type(coordinate)
        if type_ is None:
            return None
        checksums = artifact.checksums
        name = artifact.path.rsplit("/", 1)[-1]
        return BuildArtifact(type=type_, sha1=checksums.sha1, md5=checksums.md5, name=name)
