"""Custom completer for the tbf shell with local file path completion."""

from pathlib import Path
from typing import Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from cli.constants import COMMANDS, PATH_COMMANDS


class TbfCompleter(Completer):
    """
    Custom completer that provides:
    - Command name completion for the first token
    - Local file path completion for 'add' and for the path argument of 'update'
    """

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        """
        Generate completions based on cursor position and context.

        For the first token, completes command names.
        For 'add' arguments before '--' and the second 'update' argument,
        completes paths relative to the working directory.
        """
        text = document.text_before_cursor
        tokens = text.split()

        is_typing_new_token = text.endswith(" ") or not tokens

        if not tokens or (len(tokens) == 1 and not is_typing_new_token):
            yield from self._complete_commands(tokens[0] if tokens else "")
            return

        command = tokens[0].lower()
        if command not in PATH_COMMANDS:
            return

        args = tokens[1:]
        position = len(args) if is_typing_new_token else len(args) - 1

        if command == "add" and "--" in args[:position]:
            return
        if command == "update" and position != 1:
            return

        current_word = "" if is_typing_new_token else tokens[-1]
        already_typed = set(args[:position]) if command == "add" else set()

        yield from self._complete_paths(current_word, already_typed)

    def _complete_commands(self, partial: str) -> Iterable[Completion]:
        """Complete command names matching the partial input."""
        partial_lower = partial.lower()
        for cmd in COMMANDS:
            if cmd.startswith(partial_lower):
                yield Completion(cmd, start_position=-len(partial))

    def _complete_paths(
        self, partial: str, exclude_paths: set
    ) -> Iterable[Completion]:
        """
        Complete file paths relative to the working directory.

        Directories are offered with a trailing '/' so the user can descend.
        Shows a message if nothing matches.
        """
        if "/" in partial:
            dir_part, _, name_part = partial.rpartition("/")
            prefix = f"{dir_part}/"
            directory = Path.cwd() / dir_part
        else:
            prefix, name_part = "", partial
            directory = Path.cwd()

        if not directory.is_dir():
            return

        candidates = []
        for item in directory.iterdir():
            if item.name.startswith(".") and not name_part.startswith("."):
                continue
            rel_path = f"{prefix}{item.name}"
            if item.is_dir():
                rel_path += "/"
            elif rel_path in exclude_paths:
                continue
            if item.name.lower().startswith(name_part.lower()):
                candidates.append(rel_path)

        if not candidates:
            yield Completion(
                "",
                start_position=0,
                display="(no files found)",
            )
            return

        for rel_path in sorted(candidates):
            yield Completion(rel_path, start_position=-len(partial))
