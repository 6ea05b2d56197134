"""Error taxonomy for the bill workflow.

Every failure a controller reports is a ``BillError`` carrying an
``ErrorKind``. Store implementations raise ``NetworkError`` or
``ServerError``; anything else they let escape goes through
``classify_error`` before it reaches the caller.
"""

from __future__ import annotations

import asyncio
import re
from enum import Enum

import httpx

_STATUS_IN_MESSAGE = re.compile(r"\bErreur ([45]\d\d)\b")


class ErrorKind(str, Enum):
    INVALID_FILE_TYPE = "invalid_file_type"
    NETWORK_ERROR = "network_error"
    SERVER_ERROR = "server_error"
    TIMEOUT = "timeout"
    VALIDATION_ERROR = "validation_error"
    UPLOAD_IN_PROGRESS = "upload_in_progress"


class BillError(Exception):
    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidFileTypeError(BillError):
    kind = ErrorKind.INVALID_FILE_TYPE

    def __init__(self, mime_type: str) -> None:
        super().__init__(f"Unsupported file type: {mime_type or 'unknown'}")
        self.mime_type = mime_type


class NetworkError(BillError):
    kind = ErrorKind.NETWORK_ERROR


class ServerError(BillError):
    kind = ErrorKind.SERVER_ERROR

    def __init__(self, code: int, message: str = "") -> None:
        super().__init__(message or f"Erreur {code}")
        self.code = code


class RequestTimeoutError(BillError):
    kind = ErrorKind.TIMEOUT


class ValidationError(BillError):
    kind = ErrorKind.VALIDATION_ERROR

    def __init__(self, field: str, message: str = "") -> None:
        super().__init__(message or f"Invalid or missing field: {field}")
        self.field = field


class UploadInProgressError(BillError):
    kind = ErrorKind.UPLOAD_IN_PROGRESS

    def __init__(self) -> None:
        super().__init__("A file upload is already in progress")


class InvalidTransitionError(RuntimeError):
    """Raised when a draft is asked to move to a state it cannot reach."""


def classify_error(exc: BaseException) -> BaseException:
    """Map a store failure onto the error taxonomy.

    Exceptions that cannot be classified are returned unchanged so the
    caller re-raises them as they are.
    """
    if isinstance(exc, BillError):
        return exc
    if isinstance(exc, (asyncio.TimeoutError, httpx.TimeoutException)):
        return RequestTimeoutError("The request timed out")
    if isinstance(exc, httpx.HTTPStatusError):
        return ServerError(exc.response.status_code)
    if isinstance(exc, (httpx.TransportError, ConnectionError, OSError)):
        return NetworkError(str(exc) or exc.__class__.__name__)
    match = _STATUS_IN_MESSAGE.search(str(exc))
    if match:
        return ServerError(int(match.group(1)), str(exc))
    return exc
