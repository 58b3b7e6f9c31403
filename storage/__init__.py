"""Tag store backends."""

from storage.base import TagStore
from storage.directory_store import DirectoryBackedStore
from storage.memory_store import InMemoryStore
from storage.factory import create_store

__all__ = [
    "TagStore",
    "DirectoryBackedStore",
    "InMemoryStore",
    "create_store",
]
