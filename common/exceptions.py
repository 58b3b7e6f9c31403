"""Custom exception classes shared by every tag store backend."""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """
    Generic kind of a tag store error.

    Backends raise their own exception types; generic callers only need to
    know which of these kinds an error belongs to.
    """
    FILE_NOT_FOUND = "file_not_found"
    STATE = "state"
    SOURCE = "source"
    OTHER = "other"


class TagStoreError(Exception):
    """
    Base exception class for all tag store errors.
    """
    kind: ErrorKind = ErrorKind.OTHER


class FileIdNotFoundError(TagStoreError):
    """
    Raised when an operation references a file ID that is not live.
    """
    kind = ErrorKind.FILE_NOT_FOUND

    def __init__(self, file_id):
        self.file_id = file_id
        super().__init__(f"File not found: {file_id}")


class StateError(TagStoreError):
    """
    Raised when the backend's internal bookkeeping is inconsistent, e.g. the
    ID counter could not be persisted during an earlier allocation.
    """
    kind = ErrorKind.STATE


class StorageIOError(TagStoreError):
    """
    Raised when the underlying storage medium fails.

    The underlying OSError, when there is one, is kept in ``source``.
    """
    kind = ErrorKind.SOURCE

    def __init__(self, message: str, source: Optional[OSError] = None):
        self.source = source
        super().__init__(message)


class TagDecodeError(TagStoreError):
    """
    Raised when a stored tag stream is truncated or malformed.
    """
    pass


class TagEncodeError(TagStoreError):
    """
    Raised when a tag cannot be represented in the on-disk encoding.
    """
    pass


class ReservedFileIdError(TagStoreError, ValueError):
    """
    Raised by checked FileId conversions that hit the reserved range.
    """
    pass


def error_kind(exc: BaseException) -> ErrorKind:
    """
    Classify any exception into exactly one generic error kind.

    Args:
        exc: Exception raised by a store operation

    Returns:
        The ErrorKind of a TagStoreError, SOURCE for a bare OSError,
        OTHER for anything else
    """
    if isinstance(exc, TagStoreError):
        return exc.kind
    if isinstance(exc, OSError):
        return ErrorKind.SOURCE
    return ErrorKind.OTHER
