"""Binary encoding of a file's tag list (the ``.tag`` artifact).

Layout, little-endian, no count prefix::

    version:u8
    repeated until end of stream:
        has_group:u8              1 for a custom group, 0 for the default group
        custom  -> 1:u8, len:u32, group bytes (UTF-8)
        default -> 0:u8
        len:u32, name bytes (UTF-8)
"""

import io
import struct
from typing import BinaryIO, Iterable, Iterator, List

from common.constants import MAX_FIELD_LENGTH, TAG_FORMAT_VERSION
from common.exceptions import TagDecodeError, TagEncodeError
from common.types import Group, Tag

_U32 = struct.Struct("<I")


def _encode_string(value: str, what: str) -> bytes:
    raw = value.encode("utf-8")
    if len(raw) > MAX_FIELD_LENGTH:
        raise TagEncodeError(f"Tag {what} too long to encode: {len(raw)} bytes")
    return _U32.pack(len(raw)) + raw


def encode_tags(tags: Iterable[Tag]) -> bytes:
    """
    Encode tags in the order supplied.

    Args:
        tags: Tags to encode; duplicates are written as given

    Returns:
        Complete artifact contents, version byte included

    Raises:
        TagEncodeError: If a group or name does not fit a u32 length
    """
    parts = [bytes([TAG_FORMAT_VERSION])]
    for tag in tags:
        if tag.group.is_custom:
            parts.append(b"\x01\x01")
            parts.append(_encode_string(tag.group.name, "group"))
        else:
            parts.append(b"\x00\x00")
        parts.append(_encode_string(tag.name, "name"))
    return b"".join(parts)


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise TagDecodeError(f"Truncated tag stream: wanted {size} bytes, got {len(data)}")
    return data


def _read_string(stream: BinaryIO, what: str) -> str:
    (length,) = _U32.unpack(_read_exact(stream, _U32.size))
    raw = _read_exact(stream, length)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise TagDecodeError(f"Tag {what} is not valid UTF-8: {e}") from e


def iter_tags(stream: BinaryIO) -> Iterator[Tag]:
    """
    Lazily decode tags from a binary stream.

    A corrupted record is reported when iteration reaches it, so callers that
    stop early may never see the error.

    Raises:
        TagDecodeError: On a missing or unknown version byte, truncation,
            a flag/marker mismatch or invalid UTF-8
    """
    version = stream.read(1)
    if not version:
        raise TagDecodeError("Empty tag stream: missing format version")
    if version[0] != TAG_FORMAT_VERSION:
        raise TagDecodeError(f"Unsupported tag format version: {version[0]}")

    while True:
        flag = stream.read(1)
        if not flag:
            return
        marker = _read_exact(stream, 1)
        if flag[0] not in (0, 1) or marker[0] != flag[0]:
            raise TagDecodeError(
                f"Corrupted tag record: group flag {flag[0]} with marker {marker[0]}"
            )

        group = Group.custom(_read_string(stream, "group")) if flag[0] == 1 else Group.DEFAULT
        name = _read_string(stream, "name")
        yield Tag(group, name)


def decode_tags(data: bytes) -> List[Tag]:
    """Decode a complete tag artifact held in memory."""
    return list(iter_tags(io.BytesIO(data)))
