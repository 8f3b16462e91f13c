import httpx

from artifactory_action.modules.artifactdeploy.service.outcome import (
    FatalFailure,
    RetriableFailure,
    classify_content_failure,
    is_caused_by_socket_error,
    is_checksum_fallback,
)


def status_error(code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("PUT", "https://repo.example.com/libs/foo.jar")
    response = httpx.Response(code, request=request)
    return httpx.HTTPStatusError(f"{code} response", request=request, response=response)


def wrapped(cause: BaseException) -> RuntimeError:
    try:
        try:
            raise cause
        except BaseException as exc:
            raise RuntimeError("upload failed") from exc
    except RuntimeError as outer:
        return outer


def test_flaky_statuses_are_retriable():
    assert isinstance(classify_content_failure(status_error(400)), RetriableFailure)
    assert isinstance(classify_content_failure(status_error(404)), RetriableFailure)


def test_other_statuses_are_fatal():
    for code in (401, 403, 409, 500, 503):
        outcome = classify_content_failure(status_error(code))
        assert isinstance(outcome, FatalFailure)
        assert outcome.reason == f"{code} response"


def test_socket_failures_are_retriable_anywhere_in_chain():
    assert isinstance(classify_content_failure(httpx.ConnectError("refused")), RetriableFailure)
    assert isinstance(classify_content_failure(ConnectionResetError()), RetriableFailure)
    assert isinstance(classify_content_failure(wrapped(ConnectionResetError())), RetriableFailure)


def test_local_io_errors_are_fatal():
    assert isinstance(classify_content_failure(FileNotFoundError("gone")), FatalFailure)
    assert isinstance(classify_content_failure(httpx.ReadTimeout("slow")), FatalFailure)


def test_socket_detection():
    assert is_caused_by_socket_error(wrapped(httpx.ReadError("reset")))
    assert not is_caused_by_socket_error(wrapped(ValueError("bad")))


def test_checksum_fallback_on_client_errors_and_sockets():
    assert is_checksum_fallback(status_error(404))
    assert is_checksum_fallback(status_error(416))
    assert is_checksum_fallback(httpx.ConnectError("refused"))
    assert not is_checksum_fallback(status_error(500))
    assert not is_checksum_fallback(ValueError("bad"))
