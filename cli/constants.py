"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = ["add", "list", "info", "retag", "update", "remove", "export", "clear", "exit", "help"]

PATH_COMMANDS = ("add", "update")

STYLE = Style.from_dict(
    {
        "prompt": "#2E9E6B bold",
        "command": "#0088ff bold",
    }
)

TEAL = "\033[38;2;46;158;107m"
GREEN = "\033[32m"
RESET = "\033[0m"

LOGO = f"""{TEAL}
 ████████╗██████╗ ███████╗
 ╚══██╔══╝██╔══██╗██╔════╝
    ██║   ██████╔╝█████╗
    ██║   ██╔══██╗██╔══╝
    ██║   ██████╔╝██║
    ╚═╝   ╚═════╝ ╚═╝
{RESET}"""

WELCOME_TITLE = "tbf shell - Tag-based File Store"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "tbf> "

HELP_TEXT = """Available commands:
  add file-list -- tag-list           Add files with tags ('add file tag-list' for one file)
  list [--json] tag-query             List files matching tag query (empty = all)
  info <id> [--json]                  Show size and tags of a file
  retag <id> tag-list                 Replace the tags of a file
  update <id> <path>                  Replace the contents of a file
  remove <id>...                      Remove files
  export <id> <output_path>           Write a file's contents to a local path
  clear                               Clear screen and redisplay welcome message
  help                                Show this help
  exit                                Exit REPL

Tags are 'name' (default group) or 'group:name'.
Tag queries use AND logic: 'list a b' finds files with BOTH tags.
  'or' separates alternatives   list a or b
  '!' negates a term            list a !b
  'group:' matches a group      list project:
  '*:name' ignores the group    list *:draft
Examples:
  add report.pdf notes.txt -- work year:2024
  list work !year:2023
  info 0000000000000100
  retag 0000000000000100 work archived
  export 0000000000000100 out/report.pdf
  remove 0000000000000100"""

DEFAULT_CONFIG_DIR = ".tbf"
CONFIG_FILE_NAME = "config.json"
