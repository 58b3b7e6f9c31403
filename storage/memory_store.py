"""In-memory tag store, mostly useful for tests and mocking."""

import threading
from typing import Dict, FrozenSet, Iterable, List, Optional

from common.constants import FIRST_FILE_ID
from common.exceptions import FileIdNotFoundError
from common.logging_config import get_logger
from common.pattern import TagPattern, match_tags, validate_pattern
from common.types import FileId, FileInfo, Tag, dedup_tags
from storage.base import TagStore

logger = get_logger(__name__)


class InMemoryStore(TagStore):
    """
    Tag store kept entirely in process memory.

    IDs start at 256 and grow by one per insertion. Removing a file empties
    its payload slot and drops its tags; the slot is never reused. Any
    operation on a file that is not live raises FileIdNotFoundError,
    including a second removal.
    """

    idempotent_remove = False

    def __init__(self):
        self._lock = threading.Lock()
        self._files: List[bytes] = []
        self._tags: Dict[FileId, FrozenSet[Tag]] = {}

    def _slot(self, file_id: FileId) -> int:
        return file_id.raw - FIRST_FILE_ID

    def _assert_file_exists(self, file_id: FileId) -> None:
        if file_id not in self._tags:
            raise FileIdNotFoundError(file_id)

    def add_file(self, data: bytes, tags: Iterable[Tag]) -> FileId:
        payload = bytes(data)
        tag_set = dedup_tags(tags)
        with self._lock:
            self._files.append(payload)
            file_id = FileId.from_raw(FIRST_FILE_ID + len(self._files) - 1)
            self._tags[file_id] = tag_set
        logger.debug(f"Added file {file_id} ({len(payload)} bytes)")
        return file_id

    def edit_file(
        self,
        file_id: FileId,
        data: Optional[bytes] = None,
        tags: Optional[Iterable[Tag]] = None,
    ) -> None:
        payload = bytes(data) if data is not None else None
        tag_set = dedup_tags(tags) if tags is not None else None
        with self._lock:
            self._assert_file_exists(file_id)
            if payload is not None:
                self._files[self._slot(file_id)] = payload
            if tag_set is not None:
                self._tags[file_id] = tag_set

    def remove_file(self, file_id: FileId) -> None:
        with self._lock:
            self._assert_file_exists(file_id)
            self._files[self._slot(file_id)] = b""
            del self._tags[file_id]
        logger.debug(f"Removed file {file_id}")

    def search_tags(self, pattern: TagPattern) -> List[FileId]:
        validate_pattern(pattern)
        with self._lock:
            snapshot = sorted(self._tags.items(), key=lambda item: item[0])
        return [file_id for file_id, tags in snapshot if match_tags(pattern, tags)]

    def get_info(self, file_id: FileId) -> FileInfo:
        with self._lock:
            self._assert_file_exists(file_id)
            return FileInfo(
                file_id=file_id,
                data=self._files[self._slot(file_id)],
                tags=self._tags[file_id],
            )
