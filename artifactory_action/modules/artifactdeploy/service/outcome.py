"""Outcome types and failure classification for artifact uploads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Union

import httpx

from artifactory_action.modules.artifactdeploy.domain.constants import FLAKY_STATUS_CODES

SOCKET_ERRORS = (httpx.NetworkError, ConnectionError)


@dataclass(frozen=True)
class Success:
    pass


@dataclass(frozen=True)
class RetriableFailure:
    reason: str
    error: BaseException


@dataclass(frozen=True)
class FatalFailure:
    reason: str
    error: BaseException


DeployOutcome = Union[Success, RetriableFailure, FatalFailure]


def _cause_chain(error: Optional[BaseException]) -> Iterator[BaseException]:
    seen = set()
    while error is not None and id(error) not in seen:
        seen.add(id(error))
        yield error
        error = error.__cause__ or error.__context__


def is_caused_by_socket_error(error: BaseException) -> bool:
    return any(isinstance(item, SOCKET_ERRORS) for item in _cause_chain(error))


def status_code_of(error: BaseException) -> Optional[int]:
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    return None


def classify_content_failure(error: BaseException) -> DeployOutcome:
    """Flaky statuses and socket failures may be retried, anything else is fatal."""
    status = status_code_of(error)
    if status in FLAKY_STATUS_CODES:
        return RetriableFailure(f"{status} response", error)
    if is_caused_by_socket_error(error):
        return RetriableFailure(f"{type(error).__name__}", error)
    if status is not None:
        return FatalFailure(f"{status} response", error)
    return FatalFailure(f"{type(error).__name__}: {error}", error)


def is_checksum_fallback(error: BaseException) -> bool:
    """Whether a rejected checksum deploy should fall back to a content upload."""
    status = status_code_of(error)
    if status is not None and 400 <= status < 500:
        return True
    return is_caused_by_socket_error(error)
