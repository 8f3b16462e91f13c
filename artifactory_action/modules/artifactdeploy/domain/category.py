"""Deployment categories and the category-ordered batch table."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

from .artifact import DeployableArtifact


class Category(Enum):
    """Categories in deployment order."""

    PRIMARY = "primary"
    POM = "pom"
    CLASSIFIED = "classified"
    SIGNATURE = "signature"


class ArtifactBatches:
    """Artifacts grouped by category, always iterated in ``Category`` order."""

    def __init__(self) -> None:
        self._batches: Dict[Category, List[DeployableArtifact]] = {category: [] for category in Category}

    @classmethod
    def of(cls, items: Iterable[Tuple[Category, DeployableArtifact]]) -> "ArtifactBatches":
        batches = cls()
        for category, artifact in items:
            batches.add(category, artifact)
        return batches

    def add(self, category: Category, artifact: DeployableArtifact) -> None:
        self._batches[category].append(artifact)

    def get(self, category: Category) -> Sequence[DeployableArtifact]:
        return tuple(self._batches[category])

    def with_batch(self, category: Category, artifacts: Iterable[DeployableArtifact]) -> "ArtifactBatches":
        """Return a copy with ``category`` replaced by ``artifacts``."""
        copy = ArtifactBatches()
        for existing, batch in self._batches.items():
            copy._batches[existing] = list(batch)
        copy._batches[category] = list(artifacts)
        return copy

    def items(self) -> Iterator[Tuple[Category, Sequence[DeployableArtifact]]]:
        """Yield non-empty batches in deployment order."""
        for category in Category:
            batch = self._batches[category]
            if batch:
                yield category, tuple(batch)

    def flatten(self) -> List[DeployableArtifact]:
        return [artifact for _, batch in self.items() for artifact in batch]

    def __len__(self) -> int:
        return sum(len(batch) for batch in self._batches.values())

    def __repr__(self) -> str:
        counts = ", ".join(f"{category.name}={len(batch)}" for category, batch in self._batches.items())
        return f"ArtifactBatches({counts})"
