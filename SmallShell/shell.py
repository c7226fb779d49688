import sys

from SmallShell.builtin import execute_builtin
from SmallShell.config import USAGE_MSG
from SmallShell.executor import run_external
from SmallShell.job_control import ShellState, init_signal_handlers, restore_signal_handlers
from SmallShell.line_reader import init_readline, read_command_line
from SmallShell.parser import parse_command


def run_line(line, state):
    """
    Parse and dispatch one command line.
    Returns True when the shell should stop.
    """
    command = parse_command(line, state.pid)

    executed, exit_requested = execute_builtin(command, state)
    if executed:
        return exit_requested

    run_external(command, state)
    return False


def main_loop(state=None):
    """Main shell loop"""
    state = state or ShellState()

    previous = init_signal_handlers(state)
    init_readline()

    try:
        while True:
            try:
                line = read_command_line()
            except EOFError:
                print()
                break

            if run_line(line, state):
                break
    finally:
        state.children.kill_all()
        restore_signal_handlers(previous)

    return 0


def main(argv=None):
    argv = sys.argv if argv is None else argv
    if len(argv) > 1:
        print(USAGE_MSG)
        return 1
    return main_loop()
