import os
import signal
from contextlib import contextmanager

import psutil

from SmallShell.config import ENTER_FG_ONLY_MSG, EXIT_FG_ONLY_MSG, PROMPT_CHAR
from SmallShell.status import ExitStatus

STDOUT_FILENO = 1
_MISSING = object()


@contextmanager
def sigchld_blocked():
    """
    Block SIGCHLD for the duration of the block.
    Yields the signal mask that was in effect before.
    """
    old_mask = signal.pthread_sigmask(signal.SIG_BLOCK, {signal.SIGCHLD})
    try:
        yield old_mask
    finally:
        signal.pthread_sigmask(signal.SIG_SETMASK, old_mask)


def write_banner(text):
    """Write text to stdout with raw writes, bypassing Python's buffers."""
    data = text.encode()
    while data:
        n = os.write(STDOUT_FILENO, data)
        data = data[n:]


class ChildRegistry:
    """Background children still running: pid -> psutil.Process."""

    def __init__(self):
        self._children = {}

    def __contains__(self, pid):
        return pid in self._children

    def __len__(self):
        return len(self._children)

    def pids(self):
        return list(self._children)

    def add(self, pid):
        try:
            proc = psutil.Process(pid)
        except psutil.NoSuchProcess:
            proc = None
        with sigchld_blocked():
            self._children[pid] = proc

    def discard(self, pid):
        """Forget pid. Returns True if it was tracked."""
        return self._children.pop(pid, _MISSING) is not _MISSING

    def kill_all(self):
        """SIGKILL every tracked child and forget them all, without waiting."""
        with sigchld_blocked():
            children = list(self._children.items())
            self._children.clear()

        for pid, proc in children:
            try:
                if proc is not None:
                    proc.kill()
                else:
                    os.kill(pid, signal.SIGKILL)
            except (psutil.NoSuchProcess, ProcessLookupError):
                pass


class ShellState:
    """
    Process-wide shell state, owned by the shell loop.
    Signal handlers reach it through the closures built below.
    """

    def __init__(self, pid=None):
        self.foreground_only = False
        self.last_status = None
        self.children = ChildRegistry()
        self.pid = os.getpid() if pid is None else pid

    def runs_in_background(self, command):
        """Background requested and foreground-only mode is off."""
        return command.background and not self.foreground_only


def make_sigchld_handler(state):
    def handle_sigchld(signum, frame):
        """Reap finished background children and announce them"""
        for pid in state.children.pids():
            try:
                reaped, status = os.waitpid(pid, os.WNOHANG)
            except ChildProcessError:
                # reaped by someone else; nothing to report
                state.children.discard(pid)
                continue
            if reaped == 0:
                continue
            if state.children.discard(pid):
                outcome = ExitStatus.from_wait_status(status)
                write_banner(f"\nbackground pid {pid} is done: {outcome}\n{PROMPT_CHAR}")

    return handle_sigchld


def make_sigtstp_handler(state):
    def handle_sigtstp(signum, frame):
        """Toggle foreground-only mode"""
        state.foreground_only = not state.foreground_only
        msg = ENTER_FG_ONLY_MSG if state.foreground_only else EXIT_FG_ONLY_MSG
        write_banner(f"\n{msg}{PROMPT_CHAR}")

    return handle_sigtstp


def init_signal_handlers(state):
    """
    Install the shell's signal dispositions.
    Returns the previous handlers, for restore_signal_handlers().
    """
    previous = {}
    previous[signal.SIGINT] = signal.signal(signal.SIGINT, signal.SIG_IGN)
    previous[signal.SIGTSTP] = signal.signal(signal.SIGTSTP, make_sigtstp_handler(state))
    previous[signal.SIGCHLD] = signal.signal(signal.SIGCHLD, make_sigchld_handler(state))
    return previous


def restore_signal_handlers(previous):
    for signum, handler in previous.items():
        # None: installed outside Python, cannot be reinstated
        if handler is not None:
            signal.signal(signum, handler)
