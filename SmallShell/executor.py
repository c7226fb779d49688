import os
import signal
import sys

from SmallShell.config import DEV_NULL, OUTPUT_FLAGS, OUTPUT_MODE
from SmallShell.job_control import sigchld_blocked
from SmallShell.status import ExitStatus


def _child_error(subject, err):
    """perror()-style report from a forked child, straight to fd 2."""
    os.write(2, f"{subject}: {err.strerror}\n".encode())


def _redirect(path, flags, target_fd, mode=0o777):
    fd = os.open(path, flags, mode)
    if fd != target_fd:
        os.dup2(fd, target_fd)
        os.close(fd)


def _exec_child(command, background, parent_mask):
    """
    Runs in the forked child: signal dispositions, redirection, exec.
    Never returns.
    """
    try:
        signal.signal(signal.SIGCHLD, signal.SIG_DFL)
        signal.signal(signal.SIGTSTP, signal.SIG_IGN)
        if not background:
            signal.signal(signal.SIGINT, signal.SIG_DFL)
        signal.pthread_sigmask(signal.SIG_SETMASK, parent_mask)

        stdin_path = command.input_target or (DEV_NULL if background else None)
        if stdin_path is not None:
            try:
                _redirect(stdin_path, os.O_RDONLY, 0)
            except OSError as e:
                _child_error(stdin_path, e)
                os._exit(1)

        stdout_path = command.output_target or (DEV_NULL if background else None)
        if stdout_path is not None:
            try:
                _redirect(stdout_path, OUTPUT_FLAGS, 1, OUTPUT_MODE)
            except OSError as e:
                _child_error(stdout_path, e)
                os._exit(1)

        try:
            os.execvp(command.name, command.argv)
        except OSError as e:
            _child_error(command.name, e)
    finally:
        os._exit(1)


def wait_foreground(pid):
    """
    Block until pid terminates.
    Returns: ExitStatus
    """
    # waitpid is restarted by Python after a signal handler runs
    _, status = os.waitpid(pid, 0)
    return ExitStatus.from_wait_status(status)


def run_external(command, state):
    """
    Fork and exec a non built-in command.
    Background children are registered in state.children; foreground
    children are waited on and their outcome stored in state.last_status.
    Returns: the child's pid
    """
    background = state.runs_in_background(command)

    sys.stdout.flush()
    sys.stderr.flush()

    # SIGCHLD stays blocked until a background pid is tracked, so a child
    # that exits immediately is still reported.
    with sigchld_blocked() as parent_mask:
        try:
            pid = os.fork()
        except OSError as e:
            print(f"smallsh: fork failed: {e}", file=sys.stderr)
            sys.exit(1)

        if pid == 0:
            _exec_child(command, background, parent_mask)

        if background:
            print(f"background pid is {pid}", flush=True)
            state.children.add(pid)
            return pid

    outcome = wait_foreground(pid)
    state.last_status = outcome
    if outcome.signaled:
        print(outcome, flush=True)
    return pid
