"""Per-path artifact property rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from typing import Dict, List

RULE_FORMAT_MESSAGE = "Artifact properties must be configured in the form <includes>:<excludes>:<properties>"


@dataclass(frozen=True)
class ArtifactPropertiesRule:
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    properties: Dict[str, str] = field(default_factory=dict)

    def matches(self, path: str) -> bool:
        if self.include and not any(fnmatchcase(path, pattern) for pattern in self.include):
            return False
        return not any(fnmatchcase(path, pattern) for pattern in self.exclude)


def parse_artifact_properties(source: str) -> List[ArtifactPropertiesRule]:
    """Parse ``<includes>:<excludes>:<k=v,...>`` lines into rules."""
    rules: List[ArtifactPropertiesRule] = []
    for line in (source or "").splitlines():
        if not line:
            continue
        components = line.split(":")
        if len(components) != 3:
            raise ValueError(RULE_FORMAT_MESSAGE)
        include, exclude, properties = components
        rules.append(
            ArtifactPropertiesRule(
                include=_comma_separated(include),
                exclude=_comma_separated(exclude),
                properties=_key_values(properties),
            )
        )
    return rules


def _comma_separated(value: str) -> List[str]:
    if not value.strip():
        return []
    return value.split(",")


def _key_values(value: str) -> Dict[str, str]:
    properties: Dict[str, str] = {}
    for pair in value.split(","):
        if not pair:
            continue
        key, _, val = pair.partition("=")
        properties[key] = val
    return properties
