"""Shared data type definitions (FileId, Group, Tag, FileInfo)."""

from dataclasses import dataclass, field
from functools import total_ordering
from typing import FrozenSet, Iterable, List, Optional

from common.constants import FILE_ID_HEX_WIDTH, MAX_FILE_ID, RESERVED_ID_LIMIT
from common.exceptions import ReservedFileIdError


@dataclass(frozen=True, order=True)
class FileId:
    """
    Identifier of a stored file.

    Wraps an unsigned 64-bit integer. Values 0-255 are reserved for special
    usage; ordinary files always have a value of 256 or more.
    """
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"FileId value must be an int, got {type(self.value).__name__}")
        if not 0 <= self.value <= MAX_FILE_ID:
            raise ValueError(f"FileId value out of u64 range: {self.value}")

    @classmethod
    def from_raw(cls, value: int) -> "FileId":
        """Create a FileId without checking the reserved range."""
        return cls(value)

    @classmethod
    def checked(cls, value: int) -> "FileId":
        """
        Create a FileId for an ordinary file.

        Raises:
            ReservedFileIdError: If value falls in the reserved range
        """
        if value < RESERVED_ID_LIMIT:
            raise ReservedFileIdError(f"FileId {value} is in the reserved range")
        return cls(value)

    @classmethod
    def from_hex(cls, text: str) -> "FileId":
        """
        Parse a FileId from its hexadecimal rendering (``0x`` prefix optional).

        Raises:
            ValueError: If text is not a hexadecimal number
        """
        cleaned = text.strip()
        if cleaned.lower().startswith("0x"):
            cleaned = cleaned[2:]
        if not cleaned or any(c not in "0123456789abcdefABCDEF" for c in cleaned):
            raise ValueError(f"Invalid file ID: {text!r}")
        return cls(int(cleaned, 16))

    @property
    def raw(self) -> int:
        """The underlying integer, without checking the reserved range."""
        return self.value

    def checked_raw(self) -> int:
        """
        Return the underlying integer of an ordinary file ID.

        Raises:
            ReservedFileIdError: If this ID is special
        """
        if self.is_special():
            raise ReservedFileIdError(f"FileId {self.value} is reserved")
        return self.value

    def is_special(self) -> bool:
        return self.value < RESERVED_ID_LIMIT

    def is_file(self) -> bool:
        return self.value >= RESERVED_ID_LIMIT

    def to_hex(self) -> str:
        return f"{self.value:0{FILE_ID_HEX_WIDTH}X}"

    def __str__(self) -> str:
        return self.to_hex()


@total_ordering
@dataclass(frozen=True)
class Group:
    """
    Namespace of a tag name.

    ``name is None`` is the default group; any string (including the empty
    string, when built through ``Group.custom``) is a custom group. Default
    sorts before every custom group.
    """
    name: Optional[str] = None

    @classmethod
    def custom(cls, name: str) -> "Group":
        if not isinstance(name, str):
            raise TypeError(f"Group name must be a str, got {type(name).__name__}")
        return cls(name)

    @classmethod
    def of(cls, text: Optional[str]) -> "Group":
        """Generic conversion: empty or missing text means the default group."""
        if not text:
            return cls.DEFAULT
        return cls.custom(text)

    def matches(self, text: Optional[str]) -> bool:
        """Compare against a group written as text; empty text is the default group."""
        return self == Group.of(text)

    @property
    def is_default(self) -> bool:
        return self.name is None

    @property
    def is_custom(self) -> bool:
        return self.name is not None

    def _sort_key(self):
        return (0, "") if self.name is None else (1, self.name)

    def __lt__(self, other):
        if not isinstance(other, Group):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        return self.name or ""


Group.DEFAULT = Group()


@dataclass(frozen=True, order=True)
class Tag:
    """
    A file tag: a name inside a group.
    """
    group: Group
    name: str

    def __post_init__(self):
        if not isinstance(self.group, Group):
            raise TypeError(f"Tag group must be a Group, got {type(self.group).__name__}")
        if not isinstance(self.name, str):
            raise TypeError(f"Tag name must be a str, got {type(self.name).__name__}")

    @classmethod
    def named(cls, name: str) -> "Tag":
        """Create a tag in the default group."""
        return cls(Group.DEFAULT, name)

    @classmethod
    def of(cls, group: Optional[str], name: str) -> "Tag":
        """Create a tag using the generic group conversion."""
        return cls(Group.of(group), name)

    def __str__(self) -> str:
        if self.group.is_default:
            return self.name
        return f"{self.group.name}:{self.name}"


@dataclass(frozen=True)
class FileInfo:
    """
    Snapshot of a stored file: ID, payload and tag set.

    Owns its data; nothing in it refers back to backend internals.
    """
    file_id: FileId
    data: bytes
    tags: FrozenSet[Tag] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "data", bytes(self.data))
        object.__setattr__(self, "tags", frozenset(self.tags))

    @property
    def size(self) -> int:
        return len(self.data)

    def sorted_tags(self) -> List[Tag]:
        return sorted(self.tags)


def dedup_tags(tags: Iterable[Tag]) -> FrozenSet[Tag]:
    """Collapse duplicate tags into a set."""
    return frozenset(tags)
