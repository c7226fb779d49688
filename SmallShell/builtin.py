import os
import sys

from SmallShell.config import CD_CMD, EXIT_CMD, STATUS_CMD
from SmallShell.status import NO_STATUS


def builtin_cd(args):
    """Change directory"""
    path = args[0] if args else os.environ.get("HOME")
    if path is None:
        print("cd: HOME not set", file=sys.stderr, flush=True)
        return 1
    try:
        os.chdir(path)
        return 0
    except OSError as e:
        print(f"cd: {path}: {e.strerror}", file=sys.stderr, flush=True)
        return 1


def builtin_status(state):
    """Report how the last foreground command finished"""
    print(state.last_status or NO_STATUS, flush=True)
    return 0


def builtin_exit(state):
    """Kill every tracked background child"""
    state.children.kill_all()
    return 0


def execute_builtin(command, state):
    """
    Execute command if it is a built-in.
    Redirection and "&" on a built-in line are ignored.
    Returns (executed: bool, exit_requested: bool)
    """
    if command.name == EXIT_CMD:
        builtin_exit(state)
        return True, True
    elif command.name == CD_CMD:
        builtin_cd(command.args)
        return True, False
    elif command.name == STATUS_CMD:
        builtin_status(state)
        return True, False

    return False, False
