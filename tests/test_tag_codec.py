"""Tests for the binary tag artifact encoding."""

import io

import pytest

from common.exceptions import ErrorKind, TagDecodeError
from common.types import Group, Tag
from storage.tag_codec import decode_tags, encode_tags, iter_tags


class TestEncode:
    """Test the exact byte layout."""

    def test_empty_list_is_version_byte_only(self):
        assert encode_tags([]) == b"\x01"

    def test_default_group_tag(self):
        assert encode_tags([Tag.named("a")]) == b"\x01" + b"\x00\x00" + b"\x01\x00\x00\x00a"

    def test_custom_group_tag(self):
        expected = (
            b"\x01"
            + b"\x01\x01" + b"\x01\x00\x00\x00g"
            + b"\x01\x00\x00\x00b"
        )
        assert encode_tags([Tag.of("g", "b")]) == expected

    def test_order_preserved(self):
        encoded = encode_tags([Tag.of("g", "b"), Tag.named("a")])
        assert decode_tags(encoded) == [Tag.of("g", "b"), Tag.named("a")]

    def test_utf8_lengths_are_in_bytes(self):
        encoded = encode_tags([Tag.named("é")])
        assert encoded[3:7] == b"\x02\x00\x00\x00"

    def test_empty_custom_group_survives(self):
        tags = [Tag(Group.custom(""), "x")]
        assert decode_tags(encode_tags(tags)) == tags


class TestDecode:
    """Test decoding and corruption handling."""

    def test_round_trip(self):
        tags = [Tag.named("a"), Tag.of("g", "b"), Tag.named("")]
        assert decode_tags(encode_tags(tags)) == tags

    def test_empty_stream(self):
        with pytest.raises(TagDecodeError):
            decode_tags(b"")

    def test_unknown_version(self):
        with pytest.raises(TagDecodeError, match="version"):
            decode_tags(b"\x02")

    def test_truncated_length(self):
        with pytest.raises(TagDecodeError, match="Truncated"):
            decode_tags(b"\x01\x00\x00\x01\x00")

    def test_truncated_payload(self):
        with pytest.raises(TagDecodeError, match="Truncated"):
            decode_tags(b"\x01\x00\x00\x05\x00\x00\x00ab")

    def test_missing_marker(self):
        with pytest.raises(TagDecodeError):
            decode_tags(b"\x01\x00")

    def test_marker_mismatch(self):
        with pytest.raises(TagDecodeError, match="Corrupted"):
            decode_tags(b"\x01\x01\x00\x01\x00\x00\x00a")

    def test_invalid_flag(self):
        with pytest.raises(TagDecodeError):
            decode_tags(b"\x01\x02\x02")

    def test_invalid_utf8(self):
        with pytest.raises(TagDecodeError, match="UTF-8"):
            decode_tags(b"\x01\x00\x00\x01\x00\x00\x00\xff")

    def test_decode_error_kind(self):
        with pytest.raises(TagDecodeError) as exc_info:
            decode_tags(b"")
        assert exc_info.value.kind is ErrorKind.OTHER

    def test_iter_tags_is_lazy(self):
        good = encode_tags([Tag.named("a")])
        stream = io.BytesIO(good + b"\x00\x00\xff")
        tags = iter_tags(stream)

        assert next(tags) == Tag.named("a")
        with pytest.raises(TagDecodeError):
            next(tags)
