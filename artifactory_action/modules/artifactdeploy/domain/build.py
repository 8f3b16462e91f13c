"""Build-run records registered with the repository after deployment."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

from artifactory_action import __version__


def _require_text(value: Optional[str], message: str) -> None:
    if not value or not str(value).strip():
        raise ValueError(message)


@dataclass(frozen=True)
class BuildArtifact:
    type: str
    sha1: str
    md5: str
    name: str

    def __post_init__(self) -> None:
        _require_text(self.type, "Type must not be empty")
        _require_text(self.sha1, "SHA1 must not be empty")
        _require_text(self.md5, "MD5 must not be empty")
        _require_text(self.name, "Name must not be empty")

    def to_payload(self) -> Dict[str, str]:
        return {"type": self.type, "sha1": self.sha1, "md5": self.md5, "name": self.name}


@dataclass(frozen=True)
class BuildModule:
    id: str
    artifacts: Tuple[BuildArtifact, ...] = ()

    def __post_init__(self) -> None:
        _require_text(self.id, "ID must not be empty")
        object.__setattr__(self, "artifacts", tuple(self.artifacts or ()))

    def to_payload(self) -> Dict[str, Any]:
        return {"id": self.id, "artifacts": [artifact.to_payload() for artifact in self.artifacts]}


@dataclass(frozen=True)
class BuildRun:
    """A single invocation's build run, immutable once created."""

    number: int
    started: datetime
    uri: Optional[str] = None
    modules: Tuple[BuildModule, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "modules", tuple(self.modules or ()))


@dataclass(frozen=True)
class CiAgent:
    name: str = "GitHub Actions"
    version: Optional[str] = None


@dataclass(frozen=True)
class BuildAgent:
    name: str = "Artifactory Action"
    version: Optional[str] = __version__


def format_started(started: datetime) -> str:
    """Render as ``yyyy-MM-dd'T'HH:mm:ss.SSSX`` in UTC."""
    if started.tzinfo is None:
        started = started.replace(tzinfo=timezone.utc)
    started = started.astimezone(timezone.utc)
    return started.strftime("%Y-%m-%dT%H:%M:%S.") + f"{started.microsecond // 1000:03d}Z"


@dataclass
class BuildInfo:
    """JSON body of ``PUT api/build``."""

    name: str
    number: str
    started: Optional[datetime] = None
    url: Optional[str] = None
    modules: Sequence[BuildModule] = field(default_factory=list)
    agent: CiAgent = field(default_factory=CiAgent)
    build_agent: BuildAgent = field(default_factory=BuildAgent)

    def __post_init__(self) -> None:
        _require_text(self.name, "Name must not be empty")
        _require_text(self.number, "Number must not be empty")
        if self.started is None:
            self.started = datetime.now(timezone.utc)
        self.modules = list(self.modules or [])

    @classmethod
    def from_build_run(cls, build_name: str, build_run: BuildRun) -> "BuildInfo":
        return cls(
            name=build_name,
            number=str(build_run.number),
            started=build_run.started,
            url=build_run.uri,
            modules=build_run.modules,
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "number": self.number,
            "agent": {"name": self.agent.name, "version": self.agent.version},
            "buildAgent": {"name": self.build_agent.name, "version": self.build_agent.version},
            "started": format_started(self.started),
            "url": self.url,
            "modules": [module.to_payload() for module in self.modules],
        }
