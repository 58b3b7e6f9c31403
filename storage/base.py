"""Abstract contract implemented by every tag store backend."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from common.pattern import TagPattern
from common.types import FileId, FileInfo, Tag


class TagStore(ABC):
    """
    A tag-based file store.

    Files are addressed by FileId and found by matching tag patterns.
    Search is a full scan of the stored tag records on every call.

    Errors are subclasses of ``common.exceptions.TagStoreError``; use
    ``common.exceptions.error_kind`` to classify them generically.
    """

    #: True if removing a file that is not live succeeds silently,
    #: False if it raises FileIdNotFoundError.
    idempotent_remove: bool = False

    @abstractmethod
    def add_file(self, data: bytes, tags: Iterable[Tag]) -> FileId:
        """Store a new file and return its freshly allocated ID. IDs are never reused."""

    @abstractmethod
    def edit_file(
        self,
        file_id: FileId,
        data: Optional[bytes] = None,
        tags: Optional[Iterable[Tag]] = None,
    ) -> None:
        """Replace the payload and/or the tags of a live file; None leaves that part untouched."""

    @abstractmethod
    def remove_file(self, file_id: FileId) -> None:
        """Delete a file's payload and tags."""

    @abstractmethod
    def search_tags(self, pattern: TagPattern) -> List[FileId]:
        """Return the IDs of every live file matching pattern, in ascending order."""

    @abstractmethod
    def get_info(self, file_id: FileId) -> FileInfo:
        """Return an independent snapshot of a live file."""
