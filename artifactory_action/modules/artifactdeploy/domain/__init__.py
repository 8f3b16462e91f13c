from .artifact import Checksums, DeployableArtifact, DeployableFileArtifact, calculate_path
from .build import BuildAgent, BuildArtifact, BuildInfo, BuildModule, BuildRun, CiAgent
from .category import ArtifactBatches, Category
from .coordinates import Coordinate, VersionKind
from .properties import ArtifactPropertiesRule, parse_artifact_properties

__all__ = [
    "ArtifactBatches",
    "ArtifactPropertiesRule",
    "BuildAgent",
    "BuildArtifact",
    "BuildInfo",
    "BuildModule",
    "BuildRun",
    "Category",
    "Checksums",
    "CiAgent",
    "Coordinate",
    "DeployableArtifact",
    "DeployableFileArtifact",
    "VersionKind",
    "calculate_path",
    "parse_artifact_properties",
]
