"""Command parser for CLI input."""

import shlex

from common.pattern import And, HasGroup, HasName, HasTag, Not, Or, TagPredicate
from common.types import FileId, Group, Tag
from cli.models import (
    AddCommand,
    CommandRequest,
    ExportCommand,
    InfoCommand,
    ListCommand,
    RemoveCommand,
    RetagCommand,
    UpdateCommand,
)

OR_KEYWORD = "or"
JSON_FLAG = "--json"


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a CommandRequest object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        CommandRequest object (one of Add/List/Info/Retag/Update/Remove/Export)

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    if not tokens:
        raise ParseError("Empty command")

    command_name = tokens[0]

    if command_name == "add":
        return _parse_add(tokens[1:])
    elif command_name == "list":
        return _parse_list(tokens[1:])
    elif command_name == "info":
        return _parse_info(tokens[1:])
    elif command_name == "retag":
        return _parse_retag(tokens[1:])
    elif command_name == "update":
        return _parse_update(tokens[1:])
    elif command_name == "remove":
        return _parse_remove(tokens[1:])
    elif command_name == "export":
        return _parse_export(tokens[1:])
    else:
        raise ParseError(f"Unknown command: {command_name}")


def parse_tag(token: str) -> Tag:
    """Parse 'name' (default group) or 'group:name'."""
    if not token:
        raise ParseError("Empty tag")
    if ":" not in token:
        return Tag.named(token)

    group, name = token.split(":", 1)
    if not name:
        raise ParseError(f"Tag '{token}' has no name")
    return Tag.of(group, name)


def parse_file_id(token: str) -> FileId:
    """Parse a file ID written in hex, as shown by 'list'."""
    try:
        return FileId.from_hex(token)
    except ValueError:
        raise ParseError(f"Invalid file ID: {token}")


def parse_query_term(token: str) -> TagPredicate:
    """
    Parse one query term.

    'name' and 'group:name' match a tag exactly, 'group:' matches any tag of
    the group (':' alone is the default group), '*:name' matches the name in
    any group. A leading '!' negates the term.
    """
    if token.startswith("!"):
        inner = token[1:]
        if not inner:
            raise ParseError("'!' must be followed by a term")
        return Not(parse_query_term(inner))

    if token.startswith("*:"):
        name = token[2:]
        if not name:
            raise ParseError("'*:' must be followed by a tag name")
        return HasName(name)

    if token.endswith(":"):
        return HasGroup(Group.of(token[:-1]))

    return HasTag(parse_tag(token))


def parse_tag_query(tokens: list[str]) -> TagPredicate:
    """
    Parse a tag query.

    Terms are ANDed; the 'or' keyword separates alternatives. An empty query
    matches every file.
    """
    alternatives: list[list[TagPredicate]] = [[]]
    for token in tokens:
        if token.lower() == OR_KEYWORD:
            alternatives.append([])
        else:
            alternatives[-1].append(parse_query_term(token))

    if len(alternatives) == 1:
        return And(tuple(alternatives[0]))

    if any(not terms for terms in alternatives):
        raise ParseError("'or' needs a term on both sides")
    return Or(tuple(And(tuple(terms)) for terms in alternatives))


def _pop_flag(args: list[str], flag: str) -> tuple[list[str], bool]:
    """Remove flag from args, reporting whether it was present."""
    remaining = [arg for arg in args if arg != flag]
    return remaining, len(remaining) != len(args)


def _find_separator(args: list[str]) -> int:
    """Find separator '--' in args, return index or -1."""
    try:
        return args.index("--")
    except ValueError:
        return -1


def _parse_add(args: list[str]) -> AddCommand:
    """Parse 'add file-list -- tag-list' (or 'add file tag-list')."""
    if not args:
        raise ParseError("add requires at least one file")

    separator_index = _find_separator(args)

    if separator_index == -1:
        file_list = tuple(args[:1])
        tag_tokens = args[1:]
    else:
        file_list = tuple(args[:separator_index])
        tag_tokens = args[separator_index + 1 :]

    if not file_list:
        raise ParseError("add requires at least one file")

    return AddCommand(file_list=file_list, tag_list=tuple(parse_tag(t) for t in tag_tokens))


def _parse_list(args: list[str]) -> ListCommand:
    """Parse 'list [--json] tag-query' command."""
    args, as_json = _pop_flag(args, JSON_FLAG)
    return ListCommand(query=parse_tag_query(args), as_json=as_json)


def _parse_info(args: list[str]) -> InfoCommand:
    """Parse 'info <id> [--json]' command."""
    args, as_json = _pop_flag(args, JSON_FLAG)
    if len(args) != 1:
        raise ParseError("info requires exactly 1 argument: <id>")

    return InfoCommand(file_id=parse_file_id(args[0]), as_json=as_json)


def _parse_retag(args: list[str]) -> RetagCommand:
    """Parse 'retag <id> tag-list' command."""
    if not args:
        raise ParseError("retag requires <id> and a tag list")

    return RetagCommand(
        file_id=parse_file_id(args[0]),
        tag_list=tuple(parse_tag(t) for t in args[1:]),
    )


def _parse_update(args: list[str]) -> UpdateCommand:
    """Parse 'update <id> <path>' command."""
    if len(args) != 2:
        raise ParseError("update requires exactly 2 arguments: <id> <path>")

    return UpdateCommand(file_id=parse_file_id(args[0]), file_path=args[1])


def _parse_remove(args: list[str]) -> RemoveCommand:
    """Parse 'remove <id>...' command."""
    if not args:
        raise ParseError("remove requires at least one <id>")

    return RemoveCommand(file_ids=tuple(parse_file_id(a) for a in args))


def _parse_export(args: list[str]) -> ExportCommand:
    """Parse 'export <id> <output_path>' command."""
    if len(args) != 2:
        raise ParseError("export requires exactly 2 arguments: <id> <output_path>")

    return ExportCommand(file_id=parse_file_id(args[0]), output_path=args[1])
