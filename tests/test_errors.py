"""Tests for the packer error taxonomy."""

from __future__ import annotations

import pytest

from cardpack.errors import (
    AlreadyExistsError,
    CardPackError,
    ErrorKind,
    InvalidFormatError,
    NotFoundError,
    OperationFailedError,
    PathSecurityViolation,
    ReadError,
    ResourceTooLargeError,
    WriteError,
)


@pytest.mark.parametrize(
    ("error_cls", "code"),
    [
        (NotFoundError, "NOT_FOUND"),
        (AlreadyExistsError, "ALREADY_EXISTS"),
        (InvalidFormatError, "INVALID_FORMAT"),
        (ReadError, "READ_ERROR"),
        (WriteError, "WRITE_ERROR"),
        (PathSecurityViolation, "PATH_SECURITY_VIOLATION"),
        (ResourceTooLargeError, "RESOURCE_TOO_LARGE"),
        (OperationFailedError, "OPERATION_FAILED"),
    ],
)
def test_error_codes(error_cls: type[CardPackError], code: str) -> None:
    error = error_cls("boom")
    assert error.code == code
    assert error.kind is ErrorKind(code)
    assert isinstance(error, CardPackError)


def test_to_dict_includes_path_and_cause() -> None:
    try:
        try:
            raise OSError("disk full")
        except OSError as exc:
            raise WriteError("Failed to write", path="/tmp/x.card", details={"n": 1}) from exc
    except WriteError as error:
        payload = error.to_dict()

    assert payload["code"] == "WRITE_ERROR"
    assert payload["message"] == "Failed to write"
    assert payload["details"]["n"] == 1
    assert payload["details"]["path"] == "/tmp/x.card"
    assert payload["details"]["cause"] == "OSError: disk full"


def test_cause_is_none_without_chaining() -> None:
    error = NotFoundError("missing")
    assert error.cause is None
    assert error.to_dict()["details"] == {}


def test_str_includes_code_and_path() -> None:
    assert str(NotFoundError("missing", path="a/b")) == "[NOT_FOUND] missing: a/b"
    assert str(ReadError("bad read")) == "[READ_ERROR] bad read"
