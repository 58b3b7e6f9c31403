"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal

from common.pattern import TagPredicate
from common.types import FileId, Tag


@dataclass(frozen=True)
class AddCommand:
    """Add files with tags."""

    file_list: tuple[str, ...]
    tag_list: tuple[Tag, ...]
    command: Literal["add"] = "add"


@dataclass(frozen=True)
class ListCommand:
    """List files matching tag query."""

    query: TagPredicate
    as_json: bool = False
    command: Literal["list"] = "list"


@dataclass(frozen=True)
class InfoCommand:
    """Show one file's size and tags."""

    file_id: FileId
    as_json: bool = False
    command: Literal["info"] = "info"


@dataclass(frozen=True)
class RetagCommand:
    """Replace the tags of a file."""

    file_id: FileId
    tag_list: tuple[Tag, ...]
    command: Literal["retag"] = "retag"


@dataclass(frozen=True)
class UpdateCommand:
    """Replace the contents of a file."""

    file_id: FileId
    file_path: str
    command: Literal["update"] = "update"


@dataclass(frozen=True)
class RemoveCommand:
    """Remove files by ID."""

    file_ids: tuple[FileId, ...]
    command: Literal["remove"] = "remove"


@dataclass(frozen=True)
class ExportCommand:
    """Write a file's contents to a local path."""

    file_id: FileId
    output_path: str
    command: Literal["export"] = "export"


CommandRequest = (
    AddCommand
    | ListCommand
    | InfoCommand
    | RetagCommand
    | UpdateCommand
    | RemoveCommand
    | ExportCommand
)
