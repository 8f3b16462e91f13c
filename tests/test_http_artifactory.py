import json
import os
from datetime import datetime, timezone

import httpx
import pytest

from artifactory_action.modules.artifactdeploy.domain import (
    BuildArtifact,
    BuildModule,
    BuildRun,
    DeployableFileArtifact,
)
from artifactory_action.modules.artifactdeploy.exceptions import ArtifactDeployError
from artifactory_action.modules.artifactdeploy.integration import HttpArtifactory
from artifactory_action.modules.artifactdeploy.service import ArtifactUploader

BYTES = os.urandom(11 * 1024)
URL = "https://repo.example.com/libs-snapshot-local/foo/bar.jar"


def artifact(tmp_path, content: bytes = BYTES, properties=None) -> DeployableFileArtifact:
    file = tmp_path / "foo" / "bar.jar"
    file.parent.mkdir(parents=True, exist_ok=True)
    file.write_bytes(content)
    return DeployableFileArtifact("/foo/bar.jar", file, properties)


def build(responses):
    """Client replaying ``responses`` (status codes or exceptions) and recording requests."""
    requests = []
    pending = list(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        response = pending.pop(0)
        if isinstance(response, Exception):
            raise response
        return httpx.Response(response)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    artifactory = HttpArtifactory("https://repo.example.com", "alice", "secret", client=client)
    return artifactory, requests


def upload(artifactory, item):
    ArtifactUploader(artifactory, "libs-snapshot-local", retry_delay=0).upload(item)


def test_checksum_rejected_then_content_uploaded(tmp_path):
    item = artifact(tmp_path)
    artifactory, requests = build([404, 200])

    upload(artifactory, item)

    checksum, content = requests
    assert str(checksum.url) == URL
    assert checksum.method == "PUT"
    assert checksum.headers["X-Checksum-Deploy"] == "true"
    assert checksum.headers["X-Checksum-Sha1"] == item.checksums.sha1
    assert checksum.headers["X-Checksum-Md5"] == item.checksums.md5
    assert checksum.content == b""
    assert "X-Checksum-Deploy" not in content.headers
    assert content.headers["Content-Length"] == str(len(BYTES))
    assert content.headers["Content-Type"] == "application/octet-stream"
    assert content.headers["Authorization"].startswith("Basic ")
    assert content.content == BYTES


def test_matrix_parameters(tmp_path):
    item = artifact(tmp_path, b"small", {"buildNumber": "1", "revision": "123"})
    artifactory, requests = build([200])

    upload(artifactory, item)

    assert str(requests[0].url) == URL + ";buildNumber=1;revision=123"


def test_matrix_parameter_values_are_encoded(tmp_path):
    item = artifact(tmp_path, b"small", {"build.name": "my build"})
    artifactory, requests = build([200])

    upload(artifactory, item)

    assert str(requests[0].url) == URL + ";build.name=my%20build"


def test_checksum_match_does_not_upload(tmp_path):
    artifactory, requests = build([200])

    upload(artifactory, artifact(tmp_path))

    assert len(requests) == 1
    assert requests[0].headers["X-Checksum-Deploy"] == "true"


def test_small_file_does_not_use_checksum(tmp_path):
    artifactory, requests = build([200])

    upload(artifactory, artifact(tmp_path, b"small"))

    assert len(requests) == 1
    assert "X-Checksum-Deploy" not in requests[0].headers
    assert requests[0].content == b"small"


@pytest.mark.parametrize("flaky", [400, 404, httpx.ConnectError("refused")])
def test_flaky_then_success_deploys(tmp_path, flaky):
    artifactory, requests = build([404, flaky, flaky, 200])

    upload(artifactory, artifact(tmp_path))

    assert len(requests) == 4


@pytest.mark.parametrize("flaky", [400, 404, httpx.ConnectError("refused")])
def test_flaky_exhaustion_fails(tmp_path, flaky):
    artifactory, requests = build([404, flaky, flaky, flaky])

    with pytest.raises(ArtifactDeployError, match="^Error deploying artifact"):
        upload(artifactory, artifact(tmp_path))

    assert len(requests) == 4


def test_add_build_run(tmp_path):
    artifactory, requests = build([200])
    modules = (
        BuildModule(
            "com.example.module:my-module:1.0.0-SNAPSHOT",
            (BuildArtifact("jar", "a9993e364706816aba3e25717850c26c9cd0d89d", "900150983cd24fb0d6963f7d28e17f72", "foo.jar"),),
        ),
    )
    started = datetime(2014, 9, 30, 12, 0, 19, 893000, tzinfo=timezone.utc)

    artifactory.add_build_run(None, "my-build", BuildRun(5678, started, "https://ci.example.com", modules))

    request = requests[0]
    assert request.method == "PUT"
    assert str(request.url) == "https://repo.example.com/api/build"
    assert request.headers["Content-Type"] == "application/json"
    body = json.loads(request.content)
    assert body["name"] == "my-build"
    assert body["number"] == "5678"
    assert body["started"] == "2014-09-30T12:00:19.893Z"
    assert body["url"] == "https://ci.example.com"
    assert body["modules"][0]["artifacts"][0]["name"] == "foo.jar"


def test_add_build_run_with_project(tmp_path):
    artifactory, requests = build([200])

    artifactory.add_build_run("my-project", "my-build", BuildRun(1, datetime.now(timezone.utc)))

    assert str(requests[0].url) == "https://repo.example.com/api/build?project=my-project"


def test_add_build_run_failure_raises(tmp_path):
    artifactory, _ = build([500])

    with pytest.raises(httpx.HTTPStatusError):
        artifactory.add_build_run(None, "my-build", BuildRun(1, datetime.now(timezone.utc)))


def test_no_auth_without_username(tmp_path):
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    artifactory = HttpArtifactory("https://repo.example.com/", None, None, client=client)

    ArtifactUploader(artifactory, "libs-snapshot-local", retry_delay=0).upload(artifact(tmp_path, b"small"))

    assert str(requests[0].url) == URL
    assert "Authorization" not in requests[0].headers
