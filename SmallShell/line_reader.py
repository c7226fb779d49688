import readline
import sys

from SmallShell.config import COMMENT_CHAR, PROMPT_CHAR


def init_readline():
    """Configure readline key bindings when attached to a real terminal"""
    if not sys.stdin.isatty():
        return

    # Emacs key bindings (like bash)
    readline.parse_and_bind("set editing-mode emacs")


def is_ignored(line):
    """Blank lines and lines starting with '#' are never commands"""
    return not line.strip() or line.startswith(COMMENT_CHAR)


def read_command_line(prompt=PROMPT_CHAR):
    """
    Prompt until a usable line is entered.
    Returns: the line without its terminator
    Raises EOFError at end of input.
    """
    while True:
        sys.stdout.flush()
        line = input(prompt)
        if not is_ignored(line):
            return line
