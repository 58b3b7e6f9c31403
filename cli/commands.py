"""Command handler functions for CLI operations."""

from pathlib import Path
from typing import Optional

from common.exceptions import FileIdNotFoundError, TagStoreError
from common.logging_config import get_logger
from cli.config import Config
from cli.constants import CONFIG_FILE_NAME, DEFAULT_CONFIG_DIR, GREEN, RESET
from cli.models import (
    AddCommand,
    ExportCommand,
    InfoCommand,
    ListCommand,
    RemoveCommand,
    RetagCommand,
    UpdateCommand,
)
from cli.schemas import FileInfoView, ListFilesView
from cli.utils import format_file_size, format_tags
from storage.base import TagStore
from storage.factory import create_store

logger = get_logger(__name__)


_store: Optional[TagStore] = None


def get_store() -> TagStore:
    """
    Get or create the global TagStore instance.

    Returns:
        TagStore built from ~/.tbf/config.json
    """
    global _store
    if _store is None:
        logger.debug("Creating new TagStore instance")
        config = Config(Path.home() / DEFAULT_CONFIG_DIR / CONFIG_FILE_NAME)
        _store = create_store(config.get_backend(), config.get_store_path())
    return _store


def set_store(store: Optional[TagStore]) -> None:
    """Replace the global TagStore (used by --store and --memory)."""
    global _store
    _store = store


def handle_add(cmd: AddCommand, store: Optional[TagStore] = None) -> str:
    """
    Handle 'add' command.

    Args:
        cmd: AddCommand with file_list and tag_list
        store: Optional TagStore for dependency injection (testing)

    Returns:
        One result line per file
    """
    logger.info(f"Executing add command: {len(cmd.file_list)} files, tags={format_tags(cmd.tag_list)}")
    if store is None:
        store = get_store()

    lines = []
    for file_path in cmd.file_list:
        path = Path(file_path)
        try:
            data = path.read_bytes()
        except OSError as e:
            lines.append(f"Error: cannot read {file_path}: {e.strerror or e}")
            continue
        try:
            file_id = store.add_file(data, cmd.tag_list)
        except TagStoreError as e:
            logger.error(f"Failed to add {file_path}: {e}")
            lines.append(f"Error: failed to add {file_path}: {e}")
            continue
        lines.append(
            f"{GREEN}Added{RESET}: {path.name} (ID: {file_id}, Size: {format_file_size(len(data))}, "
            f"Tags: {format_tags(cmd.tag_list)})"
        )
    return "\n".join(lines)


def handle_list(cmd: ListCommand, store: Optional[TagStore] = None) -> str:
    """
    Handle 'list' command.

    Args:
        cmd: ListCommand with parsed query
        store: Optional TagStore for dependency injection (testing)

    Returns:
        Formatted list of files, or JSON when requested
    """
    logger.info(f"Executing list command: query={cmd.query}")
    if store is None:
        store = get_store()

    infos = []
    try:
        for file_id in store.search_tags(cmd.query):
            try:
                infos.append(store.get_info(file_id))
            except FileIdNotFoundError:
                logger.debug(f"File {file_id} removed during listing, skipping")
    except TagStoreError as e:
        logger.error(f"List failed: {e}")
        return f"Error: {e}"

    if cmd.as_json:
        return ListFilesView(files=[FileInfoView.from_info(info) for info in infos]).model_dump_json(indent=2)

    if not infos:
        return "No files found"

    lines = [f"Found {len(infos)} file(s)"]
    for info in infos:
        lines.append(f"  {info.file_id}  {format_file_size(info.size):>10}  {format_tags(info.tags)}")
    return "\n".join(lines)


def handle_info(cmd: InfoCommand, store: Optional[TagStore] = None) -> str:
    """
    Handle 'info' command.

    Args:
        cmd: InfoCommand with file_id
        store: Optional TagStore for dependency injection (testing)

    Returns:
        File details, or JSON when requested
    """
    if store is None:
        store = get_store()

    try:
        info = store.get_info(cmd.file_id)
    except TagStoreError as e:
        return f"Error: {e}"

    if cmd.as_json:
        return FileInfoView.from_info(info).model_dump_json(indent=2)

    return "\n".join([
        f"ID:   {info.file_id}",
        f"Size: {format_file_size(info.size)}",
        f"Tags: {format_tags(info.tags)}",
    ])


def handle_retag(cmd: RetagCommand, store: Optional[TagStore] = None) -> str:
    """
    Handle 'retag' command.

    Args:
        cmd: RetagCommand with file_id and tag_list
        store: Optional TagStore for dependency injection (testing)

    Returns:
        Success or error message
    """
    if store is None:
        store = get_store()

    try:
        store.edit_file(cmd.file_id, tags=cmd.tag_list)
    except TagStoreError as e:
        return f"Error: {e}"
    return f"Updated tags of {cmd.file_id}: {format_tags(cmd.tag_list)}"


def handle_update(cmd: UpdateCommand, store: Optional[TagStore] = None) -> str:
    """
    Handle 'update' command.

    Args:
        cmd: UpdateCommand with file_id and file_path
        store: Optional TagStore for dependency injection (testing)

    Returns:
        Success or error message
    """
    if store is None:
        store = get_store()

    try:
        data = Path(cmd.file_path).read_bytes()
    except OSError as e:
        return f"Error: cannot read {cmd.file_path}: {e.strerror or e}"

    try:
        store.edit_file(cmd.file_id, data=data)
    except TagStoreError as e:
        return f"Error: {e}"
    return f"Updated contents of {cmd.file_id} ({format_file_size(len(data))})"


def handle_remove(cmd: RemoveCommand, store: Optional[TagStore] = None) -> str:
    """
    Handle 'remove' command.

    Args:
        cmd: RemoveCommand with file_ids
        store: Optional TagStore for dependency injection (testing)

    Returns:
        One result line per file
    """
    logger.info(f"Executing remove command: {len(cmd.file_ids)} files")
    if store is None:
        store = get_store()

    lines = []
    for file_id in cmd.file_ids:
        try:
            store.remove_file(file_id)
        except TagStoreError as e:
            lines.append(f"Error: {e}")
            continue
        lines.append(f"Removed {file_id}")
    return "\n".join(lines)


def handle_export(cmd: ExportCommand, store: Optional[TagStore] = None) -> str:
    """
    Handle 'export' command.

    Args:
        cmd: ExportCommand with file_id and output_path
        store: Optional TagStore for dependency injection (testing)

    Returns:
        Success or error message
    """
    logger.info(f"Executing export command: file_id={cmd.file_id} output_path={cmd.output_path}")
    if store is None:
        store = get_store()

    try:
        info = store.get_info(cmd.file_id)
    except TagStoreError as e:
        return f"Error: {e}"

    output = Path(cmd.output_path)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(info.data)
    except OSError as e:
        return f"Error: cannot write {cmd.output_path}: {e.strerror or e}"
    return f"Exported {cmd.file_id} to {output} ({format_file_size(info.size)})"
