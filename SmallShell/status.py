import os
from typing import NamedTuple


class ExitStatus(NamedTuple):
    """Outcome of a finished child: an exit code or a terminating signal."""
    signaled: bool
    code: int

    @classmethod
    def from_wait_status(cls, status):
        if os.WIFSIGNALED(status):
            return cls(True, os.WTERMSIG(status))
        return cls(False, os.WEXITSTATUS(status))

    def __str__(self):
        if self.signaled:
            return f"terminated by signal {self.code}"
        return f"exit value {self.code}"


# Reported by `status` before any foreground command has finished
NO_STATUS = ExitStatus(False, 0)
