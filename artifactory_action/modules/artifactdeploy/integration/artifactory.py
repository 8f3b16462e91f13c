"""HTTP client for the Artifactory deploy and build APIs."""

from __future__ import annotations

import logging
from typing import BinaryIO, Iterator, Mapping, Optional
from urllib.parse import quote

import httpx

from artifactory_action.modules.artifactdeploy.domain import BuildInfo, BuildRun, DeployableArtifact

CHUNK_SIZE = 65536


class HttpArtifactory:
    """Talks to a single Artifactory server.

    Every method performs exactly one request and raises ``httpx`` errors
    unchanged; retry and fallback decisions are made by the caller.
    """

    def __init__(
        self,
        uri: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        *,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = uri if uri.endswith("/") else uri + "/"
        self.log = logging.getLogger(self.__class__.__name__)
        auth = None
        if username and username.strip():
            auth = (username, password or "")
        self._auth = auth
        self._client = client or httpx.Client(timeout=httpx.Timeout(300.0, connect=60.0))

    def deploy_by_checksum(self, repository: str, artifact: DeployableArtifact) -> None:
        """Claim already-stored content by its checksums, without a body."""
        headers = self._deploy_headers(artifact)
        headers["X-Checksum-Deploy"] = "true"
        response = self._client.put(self._deploy_url(repository, artifact), headers=headers, auth=self._auth)
        response.raise_for_status()

    def deploy_content(self, repository: str, artifact: DeployableArtifact) -> None:
        headers = self._deploy_headers(artifact)
        headers["Content-Length"] = str(artifact.size)
        response = self._client.put(
            self._deploy_url(repository, artifact),
            headers=headers,
            content=_read_chunks(artifact),
            auth=self._auth,
        )
        response.raise_for_status()

    def add_build_run(self, project: Optional[str], build_name: str, build_run: BuildRun) -> None:
        self.log.debug("Adding %s build %s", build_name, build_run.number)
        params = {}
        if project and project.strip():
            self.log.debug("Publishing to project %s", project)
            params["project"] = project
        url = self.base_url + "api/build"
        self.log.debug("Publishing build info to %s", url)
        build_info = BuildInfo.from_build_run(build_name, build_run)
        response = self._client.put(url, params=params or None, json=build_info.to_payload(), auth=self._auth)
        response.raise_for_status()

    def close(self) -> None:
        self._client.close()

    def _deploy_url(self, repository: str, artifact: DeployableArtifact) -> str:
        path = quote(artifact.path.lstrip("/"), safe="/")
        return f"{self.base_url}{quote(repository, safe='')}/{path}{matrix_params(artifact.properties)}"

    def _deploy_headers(self, artifact: DeployableArtifact) -> dict:
        checksums = artifact.checksums
        return {
            "Content-Type": "application/octet-stream",
            "X-Checksum-Sha1": checksums.sha1,
            "X-Checksum-Md5": checksums.md5,
        }


def matrix_params(properties: Optional[Mapping[str, str]]) -> str:
    """Encode properties as ``;key=value`` path parameters."""
    if not properties:
        return ""
    return "".join(f";{quote(str(key), safe='')}={quote(str(value), safe='')}" for key, value in properties.items())


def _read_chunks(artifact: DeployableArtifact) -> Iterator[bytes]:
    stream: BinaryIO
    with artifact.open() as stream:
        while True:
            chunk = stream.read(CHUNK_SIZE)
            if not chunk:
                return
            yield chunk
