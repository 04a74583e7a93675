"""Error taxonomy for card packing, unpacking, and validation."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any


class ErrorKind(str, Enum):
    """Closed set of failure kinds surfaced by the packer."""

    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    INVALID_FORMAT = "INVALID_FORMAT"
    READ_ERROR = "READ_ERROR"
    WRITE_ERROR = "WRITE_ERROR"
    PATH_SECURITY_VIOLATION = "PATH_SECURITY_VIOLATION"
    RESOURCE_TOO_LARGE = "RESOURCE_TOO_LARGE"
    OPERATION_FAILED = "OPERATION_FAILED"


class CardPackError(Exception):
    """Base class for all packer errors.

    Subclasses pin ``kind``; the underlying cause is attached with
    ``raise ... from exc`` and exposed via ``cause``.
    """

    kind: ErrorKind = ErrorKind.OPERATION_FAILED

    def __init__(
        self,
        message: str,
        *,
        path: str | Path | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = str(path) if path is not None else None
        self.details = dict(details or {})

    @property
    def code(self) -> str:
        return self.kind.value

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the ``{code, message, details}`` shape used in results."""
        details = dict(self.details)
        if self.path is not None:
            details.setdefault("path", self.path)
        if self.__cause__ is not None:
            details.setdefault("cause", f"{type(self.__cause__).__name__}: {self.__cause__}")
        return {"code": self.code, "message": self.message, "details": details}

    def __str__(self) -> str:
        if self.path:
            return f"[{self.code}] {self.message}: {self.path}"
        return f"[{self.code}] {self.message}"


class NotFoundError(CardPackError):
    kind = ErrorKind.NOT_FOUND


class AlreadyExistsError(CardPackError):
    kind = ErrorKind.ALREADY_EXISTS


class InvalidFormatError(CardPackError):
    kind = ErrorKind.INVALID_FORMAT


class ReadError(CardPackError):
    kind = ErrorKind.READ_ERROR


class WriteError(CardPackError):
    kind = ErrorKind.WRITE_ERROR


class PathSecurityViolation(CardPackError):
    """Raised when an archive entry would escape the extraction root."""

    kind = ErrorKind.PATH_SECURITY_VIOLATION


class ResourceTooLargeError(CardPackError):
    kind = ErrorKind.RESOURCE_TOO_LARGE


class OperationFailedError(CardPackError):
    """Wraps an unexpected failure (e.g. a raising progress callback)."""

    kind = ErrorKind.OPERATION_FAILED


__all__ = [
    "AlreadyExistsError",
    "CardPackError",
    "ErrorKind",
    "InvalidFormatError",
    "NotFoundError",
    "OperationFailedError",
    "PathSecurityViolation",
    "ReadError",
    "ResourceTooLargeError",
    "WriteError",
]
