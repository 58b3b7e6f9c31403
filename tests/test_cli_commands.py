"""Tests for CLI command handlers."""

import json

import pytest
from unittest.mock import Mock

import cli.commands
from cli.commands import (
    get_store,
    handle_add,
    handle_export,
    handle_info,
    handle_list,
    handle_remove,
    handle_retag,
    handle_update,
    set_store,
)
from cli.models import (
    AddCommand,
    ExportCommand,
    InfoCommand,
    ListCommand,
    RemoveCommand,
    RetagCommand,
    UpdateCommand,
)
from cli.repl import dispatch_command
from common.exceptions import FileIdNotFoundError
from common.pattern import And, HasTag
from common.types import FileId, Tag
from storage.memory_store import InMemoryStore


@pytest.fixture
def populated_store(memory_store):
    """Store holding one file tagged 'a' and 'g:b'."""
    memory_store.add_file(b"hello", [Tag.named('a'), Tag.of('g', 'b')])
    return memory_store


def test_handle_add(memory_store, sample_file):
    """Test add command handler stores file contents and tags."""
    cmd = AddCommand(file_list=(str(sample_file),), tag_list=(Tag.named('a'),))
    result = handle_add(cmd, store=memory_store)

    assert 'Added' in result
    assert 'test.txt' in result
    assert '0000000000000100' in result
    info = memory_store.get_info(FileId(256))
    assert info.data == b'Sample content for testing'
    assert info.tags == frozenset({Tag.named('a')})


def test_handle_add_missing_file(memory_store, tmp_path):
    cmd = AddCommand(file_list=(str(tmp_path / 'nope.txt'),), tag_list=())
    result = handle_add(cmd, store=memory_store)

    assert result.startswith('Error: cannot read')
    assert memory_store.search_tags(And(())) == []


def test_handle_add_continues_after_error(memory_store, sample_file, tmp_path):
    cmd = AddCommand(file_list=(str(tmp_path / 'nope.txt'), str(sample_file)), tag_list=())
    lines = handle_add(cmd, store=memory_store).splitlines()

    assert lines[0].startswith('Error')
    assert 'Added' in lines[1]


def test_handle_list(populated_store):
    result = handle_list(ListCommand(query=And(())), store=populated_store)

    assert 'Found 1 file(s)' in result
    assert '0000000000000100' in result
    assert 'a, g:b' in result


def test_handle_list_skips_files_removed_after_search(populated_store):
    populated_store.add_file(b"second", [Tag.named('a')])
    store = Mock(wraps=populated_store)
    store.get_info.side_effect = [
        FileIdNotFoundError(FileId(256)),
        populated_store.get_info(FileId(257)),
    ]

    result = handle_list(ListCommand(query=And(())), store=store)

    assert 'Found 1 file(s)' in result
    assert '0000000000000101' in result
    assert '0000000000000100' not in result


def test_handle_list_no_match(populated_store):
    cmd = ListCommand(query=And((HasTag(Tag.named('zzz')),)))
    assert handle_list(cmd, store=populated_store) == 'No files found'


def test_handle_list_json(populated_store):
    result = handle_list(ListCommand(query=And(()), as_json=True), store=populated_store)
    data = json.loads(result)

    assert data['files'][0]['file_id'] == '0000000000000100'
    assert data['files'][0]['size'] == 5
    assert data['files'][0]['tags'] == [
        {'group': None, 'name': 'a'},
        {'group': 'g', 'name': 'b'},
    ]


def test_handle_info(populated_store):
    result = handle_info(InfoCommand(file_id=FileId(256)), store=populated_store)

    assert 'ID:   0000000000000100' in result
    assert 'Size: 5 B' in result
    assert 'Tags: a, g:b' in result


def test_handle_info_missing(memory_store):
    result = handle_info(InfoCommand(file_id=FileId(300)), store=memory_store)
    assert result.startswith('Error: File not found')


def test_handle_retag(populated_store):
    cmd = RetagCommand(file_id=FileId(256), tag_list=(Tag.named('c'),))
    result = handle_retag(cmd, store=populated_store)

    assert 'Updated tags' in result
    assert populated_store.get_info(FileId(256)).tags == frozenset({Tag.named('c')})


def test_handle_update(populated_store, sample_file):
    cmd = UpdateCommand(file_id=FileId(256), file_path=str(sample_file))
    result = handle_update(cmd, store=populated_store)

    assert 'Updated contents' in result
    info = populated_store.get_info(FileId(256))
    assert info.data == b'Sample content for testing'
    assert Tag.named('a') in info.tags


def test_handle_update_unknown_id(memory_store, sample_file):
    cmd = UpdateCommand(file_id=FileId(999), file_path=str(sample_file))
    assert handle_update(cmd, store=memory_store).startswith('Error')


def test_handle_remove(populated_store):
    result = handle_remove(RemoveCommand(file_ids=(FileId(256), FileId(256))), store=populated_store)
    lines = result.splitlines()

    assert lines[0] == 'Removed 0000000000000100'
    assert lines[1].startswith('Error: File not found')


def test_handle_remove_directory_store_is_idempotent(directory_store):
    file_id = directory_store.add_file(b"x", [])
    result = handle_remove(RemoveCommand(file_ids=(file_id, file_id)), store=directory_store)
    assert result.splitlines() == ['Removed 0000000000000100'] * 2


def test_handle_export(populated_store, tmp_path):
    output = tmp_path / 'out' / 'hello.bin'
    result = handle_export(ExportCommand(file_id=FileId(256), output_path=str(output)), store=populated_store)

    assert 'Exported' in result
    assert output.read_bytes() == b'hello'


def test_handle_export_missing(memory_store, tmp_path):
    cmd = ExportCommand(file_id=FileId(256), output_path=str(tmp_path / 'x'))
    assert handle_export(cmd, store=memory_store).startswith('Error')
    assert not (tmp_path / 'x').exists()


def test_dispatch_command(populated_store):
    result = dispatch_command(InfoCommand(file_id=FileId(256)), populated_store)
    assert 'ID:' in result


def test_dispatch_unknown():
    assert dispatch_command(object()).startswith('Unknown command type')


def test_global_store_uses_injected_store(monkeypatch):
    monkeypatch.setattr(cli.commands, '_store', None)
    store = InMemoryStore()
    set_store(store)

    assert get_store() is store
    set_store(None)
