"""Runtime configuration for the Artifactory deploy action."""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from artifactory_action.modules.artifactdeploy.domain import (
    ArtifactPropertiesRule,
    parse_artifact_properties,
)


class Settings(BaseSettings):
    """Configuration values mapped from ``ARTIFACTORY_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ARTIFACTORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Server
    server_uri: str
    server_username: Optional[str] = None
    server_password: Optional[str] = None

    # Signing
    signing_key: Optional[str] = None
    signing_passphrase: Optional[str] = None

    # Deploy
    deploy_project: Optional[str] = None
    deploy_folder: str
    deploy_repository: str
    deploy_threads: int = Field(1, ge=1)
    deploy_build_name: str
    deploy_build_number: int
    deploy_build_uri: Optional[str] = None
    deploy_artifact_properties: str = ""

    retry_delay: float = Field(5.0, ge=0)
    debug: bool = Field(
        False,
        validation_alias=AliasChoices("ACTIONS_STEP_DEBUG", "ARTIFACTORY_DEBUG"),
    )

    @field_validator("server_uri", "deploy_folder", "deploy_repository", "deploy_build_name")
    @classmethod
    def _require_text(cls, value: str, info) -> str:
        if not value or not value.strip():
            raise ValueError(f"ARTIFACTORY_{info.field_name.upper()} is required")
        return value

    @field_validator("deploy_artifact_properties")
    @classmethod
    def _check_rules(cls, value: str) -> str:
        parse_artifact_properties(value)
        return value

    @property
    def signing_enabled(self) -> bool:
        return bool(self.signing_key and self.signing_key.strip())

    def artifact_properties(self) -> List[ArtifactPropertiesRule]:
        """Parse the configured per-path property rules."""
        return parse_artifact_properties(self.deploy_artifact_properties)


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
