from __future__ import annotations

import re
from typing import Iterable, List, Sequence, Tuple

from luxlab.parser.errors import ParseError


_NUMBER_RE = re.compile(r"[-+]?\d*\.?\d+(?:[eE][-+]?\d+)?")


def tokenize_numbers(lines: Iterable[str]) -> List[float]:
    """
    Pull every number out of `lines`, left to right, line by line.

    LM-63 lets numeric blocks wrap across lines or pack several values per
    line, so positional parsing works on this flat stream instead of on lines.
    Anything that does not look like a number is ignored.
    """
    tokens: List[float] = []
    for line in lines:
        tokens.extend(float(m) for m in _NUMBER_RE.findall(line))
    return tokens


class NumberCursor:
    """Forward-only reader over an immutable token buffer."""

    def __init__(self, tokens: Sequence[float], start: int = 0) -> None:
        self._tokens: Tuple[float, ...] = tuple(tokens)
        self._idx = int(start)

    @property
    def position(self) -> int:
        return self._idx

    def remaining(self) -> int:
        return len(self._tokens) - self._idx

    def next_numbers(self, count: int, label: str) -> List[float]:
        n = int(count)
        if n < 0:
            raise ParseError(f"Invalid count for {label}: {n}")
        if self._idx + n > len(self._tokens):
            raise ParseError(f"Expected {n} values for {label} but found {self.remaining()}")
        values = list(self._tokens[self._idx : self._idx + n])
        self._idx += n
        return values

    def next_int(self, label: str) -> int:
        return int(round(self.next_numbers(1, label)[0]))

    def skip(self, count: int) -> None:
        self.next_numbers(count, "skip")
