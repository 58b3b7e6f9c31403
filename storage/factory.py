"""Backend factory: builds a TagStore from a backend name and path."""

from pathlib import Path
from typing import Optional, Union

from common.logging_config import get_logger
from storage import config
from storage.base import TagStore

logger = get_logger(__name__)


def create_store(
    backend: Optional[str] = None,
    path: Optional[Union[str, Path]] = None,
) -> TagStore:
    """
    Create a tag store.

    Args:
        backend: ``directory`` or ``memory``. Defaults to TBF_BACKEND
        path: Backing directory for the directory backend. Defaults to TBF_STORE_PATH

    Returns:
        A ready TagStore

    Raises:
        ValueError: If backend is unknown
    """
    backend = backend or config.STORE_BACKEND

    if backend == "directory":
        from storage.directory_store import DirectoryBackedStore

        return DirectoryBackedStore(Path(path) if path is not None else config.STORE_PATH)

    if backend == "memory":
        from storage.memory_store import InMemoryStore

        if path is not None:
            logger.warning(f"Ignoring path {path} for the in-memory backend")
        return InMemoryStore()

    raise ValueError(
        f"Unknown backend: {backend!r}. Available: {list(config.BACKEND_NAMES)}"
    )
