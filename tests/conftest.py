"""Shared pytest fixtures for all tests."""

import pytest

from common.types import Group, Tag
from storage.directory_store import DirectoryBackedStore
from storage.memory_store import InMemoryStore


@pytest.fixture
def store_dir(tmp_path):
    """
    Create a path for a directory store (not created yet).

    Args:
        tmp_path: pytest tmp_path fixture

    Returns:
        Path to the future store directory
    """
    return tmp_path / 'store'


@pytest.fixture
def directory_store(store_dir):
    """
    Create a directory store in a temporary directory.

    Args:
        store_dir: Store directory fixture

    Returns:
        DirectoryBackedStore instance
    """
    return DirectoryBackedStore(store_dir)


@pytest.fixture
def memory_store():
    """Create an empty in-memory store."""
    return InMemoryStore()


@pytest.fixture(params=["directory", "memory"])
def store(request, tmp_path):
    """
    Store fixture parametrised over both backends.

    Returns:
        An empty TagStore
    """
    if request.param == "directory":
        return DirectoryBackedStore(tmp_path / 'store')
    return InMemoryStore()


@pytest.fixture
def sample_tags():
    """Two tags: 'a' in the default group and 'b' in group 'g'."""
    return [Tag.named("a"), Tag(Group.custom("g"), "b")]


@pytest.fixture
def sample_file(tmp_path):
    """
    Create a sample file for testing the add command.

    Returns:
        Path to sample text file
    """
    file_path = tmp_path / 'test.txt'
    file_path.write_text('Sample content for testing')
    return file_path
