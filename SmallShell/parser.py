import os
from dataclasses import dataclass
from typing import Optional, Tuple

from SmallShell.config import (
    BACKGROUND_MARKER,
    INPUT_MARKER,
    OUTPUT_MARKER,
    PID_MARKER,
    TOKEN_SEPARATOR,
)


@dataclass(frozen=True)
class Command:
    name: str
    args: Tuple[str, ...] = ()
    input_target: Optional[str] = None
    output_target: Optional[str] = None
    background: bool = False

    @property
    def argv(self):
        return [self.name, *self.args]

    def __str__(self):
        parts = self.argv
        if self.input_target is not None:
            parts += [INPUT_MARKER, self.input_target]
        if self.output_target is not None:
            parts += [OUTPUT_MARKER, self.output_target]
        if self.background:
            parts.append(BACKGROUND_MARKER)
        return TOKEN_SEPARATOR.join(parts)


def expand(text, marker, replacement):
    """
    Replace every occurrence of marker in text, scanning left to right.
    Matches never overlap and never include replaced text.
    """
    if not marker:
        raise ValueError("marker must not be empty")

    out = []
    i = 0
    while True:
        j = text.find(marker, i)
        if j < 0:
            out.append(text[i:])
            return "".join(out)
        out.append(text[i:j])
        out.append(replacement)
        i = j + len(marker)


def tokenize(line):
    """Split on spaces only; runs of spaces never produce empty tokens."""
    return [tok for tok in line.split(TOKEN_SEPARATOR) if tok]


def parse_command(line, pid=None):
    """
    Parse one command line into a Command.
    `$$` in the name, arguments and redirection targets becomes `pid`
    (the current process id by default).
    """
    tokens = tokenize(line)
    if not tokens:
        raise ValueError("empty command line")

    pid_text = str(os.getpid() if pid is None else pid)

    def exp(tok):
        return expand(tok, PID_MARKER, pid_text)

    name = exp(tokens[0])
    rest = tokens[1:]

    args = []
    i = 0
    while i < len(rest) and rest[i] not in (INPUT_MARKER, OUTPUT_MARKER, BACKGROUND_MARKER):
        args.append(exp(rest[i]))
        i += 1

    input_target = output_target = None
    background = False
    while i < len(rest):
        tok = rest[i]
        if tok == INPUT_MARKER and input_target is None:
            if i + 1 < len(rest):
                input_target = exp(rest[i + 1])
            i += 2
        elif tok == OUTPUT_MARKER and output_target is None:
            if i + 1 < len(rest):
                output_target = exp(rest[i + 1])
            i += 2
        elif tok == BACKGROUND_MARKER and i == len(rest) - 1:
            background = True
            i += 1
        else:
            # repeated redirection, inner "&" or stray word
            i += 1

    return Command(
        name=name,
        args=tuple(args),
        input_target=input_target,
        output_target=output_target,
        background=background,
    )
