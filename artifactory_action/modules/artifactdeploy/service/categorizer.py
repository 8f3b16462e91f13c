"""Assign deployable artifacts to ordered deployment categories."""

from __future__ import annotations

from typing import Iterable

from artifactory_action.modules.artifactdeploy.domain import (
    ArtifactBatches,
    Category,
    Coordinate,
    DeployableArtifact,
)
from artifactory_action.modules.artifactdeploy.domain.constants import SIGNATURE_FILE_EXTENSION


def category_of(path: str) -> Category:
    if path.lower().endswith(SIGNATURE_FILE_EXTENSION):
        return Category.SIGNATURE
    coordinate = Coordinate.from_path(path)
    if coordinate is None:
        return Category.CLASSIFIED
    if coordinate.extension == "pom":
        return Category.POM
    if coordinate.classifier:
        return Category.CLASSIFIED
    return Category.PRIMARY


def batch_by_category(artifacts: Iterable[DeployableArtifact]) -> ArtifactBatches:
    """Group artifacts by category, preserving encounter order within each."""
    return ArtifactBatches.of((category_of(artifact.path), artifact) for artifact in artifacts)
