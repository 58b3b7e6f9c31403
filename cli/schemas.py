"""Pydantic models for JSON output of the shell."""

from typing import List, Optional

from pydantic import BaseModel

from common.types import FileInfo, Tag


class TagView(BaseModel):
    """A tag; group is null for the default group."""
    group: Optional[str] = None
    name: str

    @classmethod
    def from_tag(cls, tag: Tag) -> "TagView":
        return cls(group=tag.group.name, name=tag.name)


class FileInfoView(BaseModel):
    """Metadata of one stored file."""
    file_id: str
    size: int
    tags: List[TagView]

    @classmethod
    def from_info(cls, info: FileInfo) -> "FileInfoView":
        return cls(
            file_id=info.file_id.to_hex(),
            size=info.size,
            tags=[TagView.from_tag(tag) for tag in info.sorted_tags()],
        )


class ListFilesView(BaseModel):
    """Result of a tag query."""
    files: List[FileInfoView]
