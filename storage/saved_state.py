"""Persisted next-ID counter of a directory-backed store (``tbf.dat``)."""

import struct
from pathlib import Path

from common.constants import FIRST_FILE_ID
from common.exceptions import StorageIOError
from common.logging_config import get_logger

logger = get_logger(__name__)

_U64 = struct.Struct("<Q")


class SavedState:
    """
    Next file ID to allocate, stored as 8 little-endian bytes.

    Not thread-safe on its own; the owning store serialises access.
    """

    def __init__(self, path: Path, next_id: int = FIRST_FILE_ID):
        self.path = path
        self.next_id = next_id

    @classmethod
    def load(cls, path: Path) -> "SavedState":
        """
        Load the counter, defaulting to the first ordinary ID if the file is absent.

        Raises:
            StorageIOError: If the file cannot be read or is shorter than 8 bytes
        """
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            logger.debug(f"No state file at {path}, starting at {FIRST_FILE_ID}")
            return cls(path)
        except OSError as e:
            raise StorageIOError(f"Failed to read state file {path}: {e}", source=e) from e

        if len(raw) < _U64.size:
            raise StorageIOError(
                f"Truncated state file {path}: expected {_U64.size} bytes, got {len(raw)}"
            )

        (next_id,) = _U64.unpack(raw[:_U64.size])
        return cls(path, next_id)

    def save(self) -> None:
        """
        Overwrite the state file with the current counter.

        Raises:
            StorageIOError: If the write fails
        """
        try:
            self.path.write_bytes(_U64.pack(self.next_id))
        except OSError as e:
            raise StorageIOError(f"Failed to write state file {self.path}: {e}", source=e) from e
