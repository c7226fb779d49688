import os
import signal
import time
from pathlib import Path

import pytest

from SmallShell.job_control import ShellState, init_signal_handlers, restore_signal_handlers


def wait_until(predicate, timeout=5.0):
    """Poll predicate; signal handlers get a chance to run while sleeping."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.02)
    return predicate()


@pytest.fixture
def state():
    state = ShellState()
    yield state
    pids = state.children.pids()
    state.children.kill_all()
    for pid in pids:
        try:
            os.waitpid(pid, 0)
        except ChildProcessError:
            pass


@pytest.fixture
def shell_signals(state):
    """Install the shell's signal handlers for state, restore them afterwards."""
    previous = init_signal_handlers(state)
    assert signal.getsignal(signal.SIGTSTP) not in (signal.SIG_DFL, signal.SIG_IGN)
    yield state
    restore_signal_handlers(previous)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return Path(os.getcwd())


@pytest.fixture
def wait_for():
    return wait_until
