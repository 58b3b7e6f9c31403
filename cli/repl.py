"""REPL with prompt_toolkit for user interaction."""

import os
import sys
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from cli.commands import (
    handle_add,
    handle_export,
    handle_info,
    handle_list,
    handle_remove,
    handle_retag,
    handle_update,
)
from cli.completer import TbfCompleter
from cli.constants import (
    HELP_TEXT,
    LOGO,
    PROMPT_TEXT,
    STYLE,
    WELCOME_HELP,
    WELCOME_TITLE,
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
from cli.parser import ParseError, parse_command
from storage.base import TagStore


def clear_screen() -> None:
    """Clear the terminal screen (cross-platform)."""
    if sys.platform == "win32":
        os.system("cls")
    else:
        os.system("clear")


def show_logo() -> None:
    """Display the tbf logo with ANSI colors."""
    print(LOGO)


def dispatch_command(cmd_obj, store: Optional[TagStore] = None) -> str:
    """Dispatch parsed command to appropriate handler."""
    if isinstance(cmd_obj, AddCommand):
        return handle_add(cmd_obj, store)
    elif isinstance(cmd_obj, ListCommand):
        return handle_list(cmd_obj, store)
    elif isinstance(cmd_obj, InfoCommand):
        return handle_info(cmd_obj, store)
    elif isinstance(cmd_obj, RetagCommand):
        return handle_retag(cmd_obj, store)
    elif isinstance(cmd_obj, UpdateCommand):
        return handle_update(cmd_obj, store)
    elif isinstance(cmd_obj, RemoveCommand):
        return handle_remove(cmd_obj, store)
    elif isinstance(cmd_obj, ExportCommand):
        return handle_export(cmd_obj, store)
    else:
        return f"Unknown command type: {type(cmd_obj)}"


def repl_loop(store: Optional[TagStore] = None) -> None:
    """Start interactive REPL with prompt_toolkit."""
    history = InMemoryHistory()
    session: PromptSession = PromptSession(
        completer=TbfCompleter(), history=history, style=STYLE
    )

    clear_screen()
    show_logo()
    print(WELCOME_TITLE)
    print(WELCOME_HELP)

    while True:
        try:
            user_input = session.prompt([("class:prompt", PROMPT_TEXT)])

            if not user_input.strip():
                continue

            if user_input.strip() == "exit":
                print("Goodbye!")
                break

            if user_input.strip() == "help":
                print(HELP_TEXT)
                continue

            if user_input.strip() == "clear":
                clear_screen()
                show_logo()
                print(WELCOME_TITLE)
                print(WELCOME_HELP)
                continue

            cmd_obj = parse_command(user_input)
            result = dispatch_command(cmd_obj, store)
            print(result)

        except ParseError as e:
            print(f"Error: {e}")
        except KeyboardInterrupt:
            continue
        except EOFError:
            print("\nGoodbye!")
            break
