import pytest
from pydantic import ValidationError

from artifactory_action.settings import Settings

REQUIRED = {
    "server_uri": "https://repo.example.com",
    "deploy_folder": "build/repo",
    "deploy_repository": "libs-example-local",
    "deploy_build_name": "my-build",
    "deploy_build_number": 12,
}


def test_defaults():
    settings = Settings(_env_file=None, **REQUIRED)

    assert settings.deploy_threads == 1
    assert settings.retry_delay == 5.0
    assert settings.deploy_project is None
    assert not settings.signing_enabled
    assert settings.artifact_properties() == []


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("ARTIFACTORY_SERVER_URI", "https://repo.example.com")
    monkeypatch.setenv("ARTIFACTORY_DEPLOY_FOLDER", "out")
    monkeypatch.setenv("ARTIFACTORY_DEPLOY_REPOSITORY", "libs-snapshot-local")
    monkeypatch.setenv("ARTIFACTORY_DEPLOY_BUILD_NAME", "my-build")
    monkeypatch.setenv("ARTIFACTORY_DEPLOY_BUILD_NUMBER", "42")
    monkeypatch.setenv("ARTIFACTORY_DEPLOY_THREADS", "4")
    monkeypatch.setenv("ARTIFACTORY_DEPLOY_ARTIFACT_PROPERTIES", "/**/*.zip::zip.type=docs")
    monkeypatch.setenv("ARTIFACTORY_SIGNING_KEY", "key")
    monkeypatch.setenv("ACTIONS_STEP_DEBUG", "true")

    settings = Settings(_env_file=None)

    assert settings.deploy_build_number == 42
    assert settings.deploy_threads == 4
    assert settings.signing_enabled
    assert settings.debug is True
    assert settings.artifact_properties()[0].properties == {"zip.type": "docs"}


def test_blank_required_value_is_rejected():
    values = dict(REQUIRED, deploy_folder="  ")

    with pytest.raises(ValidationError, match="ARTIFACTORY_DEPLOY_FOLDER is required"):
        Settings(_env_file=None, **values)


def test_threads_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, deploy_threads=0, **REQUIRED)


def test_blank_signing_key_disables_signing():
    settings = Settings(_env_file=None, signing_key="  ", **REQUIRED)

    assert not settings.signing_enabled


def test_malformed_property_rule_is_rejected():
    with pytest.raises(ValidationError, match="<includes>:<excludes>:<properties>"):
        Settings(_env_file=None, deploy_artifact_properties="bad-rule", **REQUIRED)
