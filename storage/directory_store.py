"""Directory-backed tag store: one data and one tag artifact per file."""

import re
import threading
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from common.constants import DATA_EXTENSION, FIRST_FILE_ID, MAX_FILE_ID, STATE_FILE_NAME, TAG_EXTENSION
from common.exceptions import FileIdNotFoundError, StateError, StorageIOError
from common.logging_config import get_logger
from common.pattern import TagPattern, match_tags, validate_pattern
from common.types import FileId, FileInfo, Tag
from storage.base import TagStore
from storage.saved_state import SavedState
from storage.tag_codec import encode_tags, iter_tags

logger = get_logger(__name__)

ARTIFACT_NAME_RE = re.compile(r"^([0-9A-F]{16})\.([a-z]+)$")


def parse_artifact_name(name: str) -> Optional[Tuple[FileId, str]]:
    """
    Split an artifact file name into its FileId and extension.

    Args:
        name: File name inside the store directory (e.g. ``0000000000000100.tag``)

    Returns:
        (FileId, extension), or None if the name does not follow the layout
    """
    match = ARTIFACT_NAME_RE.match(name)
    if match is None:
        return None
    return FileId.from_raw(int(match.group(1), 16)), match.group(2)


class DirectoryBackedStore(TagStore):
    """
    Tag store persisted in a directory on a conventional filesystem.

    Each file is a pair of sibling artifacts named by the file's ID in
    16-digit uppercase hex: ``<ID>.dat`` holds the raw bytes and ``<ID>.tag``
    the encoded tags. ``tbf.dat`` holds the next ID to allocate.

    Thread-safe: allocation is serialised by one lock covering the artifact
    writes and the counter persist; reads take no lock. Concurrent edits of
    the same file are last-writer-wins. Removing a missing file is a no-op.
    """

    idempotent_remove = True

    def __init__(self, directory: Union[str, Path]):
        """
        Create or load a store in directory.

        Args:
            directory: Backing directory, created with its parents if absent

        Raises:
            StorageIOError: If the path exists and is not a directory, or the
                state file cannot be read
        """
        self.directory = Path(directory)
        self._lock = threading.Lock()
        self._poisoned = False

        self._ensure_directory()
        self._state = SavedState.load(self.directory / STATE_FILE_NAME)
        self._recover_counter()

        logger.info(f"Opened directory store [path={self.directory}, next_id={self._state.next_id}]")

    def __repr__(self) -> str:
        return f"DirectoryBackedStore({str(self.directory)!r})"

    @property
    def next_id(self) -> FileId:
        """ID the next add_file call will allocate."""
        with self._lock:
            return FileId.from_raw(self._state.next_id)

    def _ensure_directory(self) -> None:
        try:
            if not self.directory.exists():
                self.directory.mkdir(parents=True, exist_ok=True)
                logger.info(f"Created store directory {self.directory}")
            elif not self.directory.is_dir():
                raise StorageIOError(
                    f"Provided path exists and is not a directory: {self.directory}",
                    source=NotADirectoryError(str(self.directory)),
                )
        except OSError as e:
            raise StorageIOError(f"Failed to create store directory {self.directory}: {e}", source=e) from e

    def _recover_counter(self) -> None:
        """Move the counter past every ID already present on disk."""
        recovered = self._state.next_id
        if recovered < FIRST_FILE_ID:
            logger.warning(f"State counter {recovered} is in the reserved range, resetting to {FIRST_FILE_ID}")
            recovered = FIRST_FILE_ID

        highest = None
        for file_id, _ in self._scan_artifacts():
            if highest is None or file_id.raw > highest:
                highest = file_id.raw

        if highest is not None and highest >= recovered:
            recovered = min(highest + 1, MAX_FILE_ID)
            logger.warning(
                f"State counter {self._state.next_id} is behind stored file {highest:016X}, "
                f"advancing to {recovered}"
            )

        if recovered != self._state.next_id:
            self._state.next_id = recovered
            self._state.save()

    def _assert_ready(self) -> None:
        if self._poisoned:
            raise StateError("Store state is poisoned: the ID counter could not be persisted")
        if not self.directory.is_dir():
            raise StorageIOError(
                f"Provided path exists and is not a directory: {self.directory}",
                source=NotADirectoryError(str(self.directory)),
            )

    def _artifact_path(self, file_id: FileId, extension: str) -> Path:
        return self.directory / f"{file_id.to_hex()}.{extension}"

    def _scan_artifacts(self) -> List[Tuple[FileId, str]]:
        try:
            names = [entry.name for entry in self.directory.iterdir()]
        except OSError as e:
            raise StorageIOError(f"Failed to list store directory {self.directory}: {e}", source=e) from e

        artifacts = []
        for name in names:
            parsed = parse_artifact_name(name)
            if parsed is not None:
                artifacts.append(parsed)
        return artifacts

    def _write_artifact(self, path: Path, payload: bytes) -> None:
        try:
            path.write_bytes(payload)
        except OSError as e:
            raise StorageIOError(f"Failed to write {path}: {e}", source=e) from e

    def _read_tags(self, file_id: FileId) -> List[Tag]:
        path = self._artifact_path(file_id, TAG_EXTENSION)
        try:
            with open(path, 'rb') as f:
                return list(iter_tags(f))
        except FileNotFoundError:
            raise FileIdNotFoundError(file_id) from None
        except OSError as e:
            raise StorageIOError(f"Failed to read {path}: {e}", source=e) from e

    def add_file(self, data: bytes, tags: Iterable[Tag]) -> FileId:
        payload = bytes(data)
        encoded = encode_tags(tags)

        with self._lock:
            self._assert_ready()
            # the counter must stay representable in tbf.dat after the bump
            if self._state.next_id >= MAX_FILE_ID:
                raise StateError(f"File ID space exhausted: counter is at {self._state.next_id}")
            file_id = FileId.from_raw(self._state.next_id)

            self._write_artifact(self._artifact_path(file_id, DATA_EXTENSION), payload)
            self._write_artifact(self._artifact_path(file_id, TAG_EXTENSION), encoded)

            self._state.next_id = file_id.raw + 1
            try:
                self._state.save()
            except StorageIOError:
                self._poisoned = True
                logger.error(f"Failed to persist ID counter after allocating {file_id}, store poisoned")
                raise

        logger.debug(f"Added file {file_id} ({len(payload)} bytes)")
        return file_id

    def edit_file(
        self,
        file_id: FileId,
        data: Optional[bytes] = None,
        tags: Optional[Iterable[Tag]] = None,
    ) -> None:
        self._assert_ready()
        if not self._artifact_path(file_id, TAG_EXTENSION).is_file():
            raise FileIdNotFoundError(file_id)

        encoded = encode_tags(tags) if tags is not None else None

        if data is not None:
            self._write_artifact(self._artifact_path(file_id, DATA_EXTENSION), bytes(data))
        if encoded is not None:
            self._write_artifact(self._artifact_path(file_id, TAG_EXTENSION), encoded)

        logger.debug(f"Edited file {file_id} [data={data is not None}, tags={tags is not None}]")

    def remove_file(self, file_id: FileId) -> None:
        self._assert_ready()
        for extension in (DATA_EXTENSION, TAG_EXTENSION):
            path = self._artifact_path(file_id, extension)
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                raise StorageIOError(f"Failed to remove {path}: {e}", source=e) from e

        logger.debug(f"Removed file {file_id}")

    def search_tags(self, pattern: TagPattern) -> List[FileId]:
        self._assert_ready()
        validate_pattern(pattern)

        tag_ids = sorted(
            file_id for file_id, extension in self._scan_artifacts()
            if extension == TAG_EXTENSION
        )

        matches = []
        for file_id in tag_ids:
            path = self._artifact_path(file_id, TAG_EXTENSION)
            try:
                with open(path, 'rb') as f:
                    if match_tags(pattern, iter_tags(f)):
                        matches.append(file_id)
            except FileNotFoundError:
                logger.debug(f"File {file_id} disappeared during search, skipping")
            except OSError as e:
                raise StorageIOError(f"Failed to read {path}: {e}", source=e) from e

        logger.debug(f"Search matched {len(matches)} of {len(tag_ids)} files")
        return matches

    def get_info(self, file_id: FileId) -> FileInfo:
        self._assert_ready()
        path = self._artifact_path(file_id, DATA_EXTENSION)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            raise FileIdNotFoundError(file_id) from None
        except OSError as e:
            raise StorageIOError(f"Failed to read {path}: {e}", source=e) from e

        return FileInfo(file_id=file_id, data=data, tags=frozenset(self._read_tags(file_id)))
