# stateparser/cursor.py
"""Cursor contract used by every grammar.

A cursor hands out one character at a time and can snapshot/restore its
position. The core never looks inside a checkpoint; it only passes it back to
`restore` on the cursor that produced it.

`StringCursor` is a small reference implementation over an in-memory string.
Hosts with other input sources subclass `Cursor` directly.
"""

from __future__ import annotations
from typing import Tuple

from .errors import ParseError


class Cursor:
    """Minimal interface the combinators expect."""

    def read_char(self) -> str:
        """Return the next character and advance.

        Raise a recoverable `ParseError` at end of input or when the next
        character cannot be decoded.
        """
        raise NotImplementedError

    def checkpoint(self) -> object:
        """Opaque state that `restore` can return to exactly."""
        raise NotImplementedError

    def restore(self, state: object) -> None:
        """Go back to a state from an earlier `checkpoint()` on this cursor."""
        raise NotImplementedError


class StringCursor(Cursor):
    """Cursor over a `str` with 1-based line/column tracking.

    `furthest` is the largest offset a read was attempted at. It is not reset
    by `restore`, so after a failed parse it points at the character where the
    input stopped making sense.
    """

    def __init__(self, text: str, pos: int = 0):
        if not 0 <= pos <= len(text):
            raise ValueError(f"start position {pos} outside of input (len={len(text)})")
        self.text = text
        self.pos = pos
        self.line = text.count("\n", 0, pos) + 1
        self.col = pos - text.rfind("\n", 0, pos)
        self.furthest = pos

    def read_char(self) -> str:
        if self.pos > self.furthest:
            self.furthest = self.pos
        if self.pos >= len(self.text):
            raise ParseError("unexpected end of input")
        ch = self.text[self.pos]
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    def checkpoint(self) -> Tuple[int, int, int]:
        return (self.pos, self.line, self.col)

    def restore(self, state: object) -> None:
        if (
            not isinstance(state, tuple)
            or len(state) != 3
            or not 0 <= state[0] <= len(self.text)
        ):
            raise ValueError(f"not a checkpoint of this cursor: {state!r}")
        self.pos, self.line, self.col = state

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def remaining(self) -> str:
        return self.text[self.pos:]

    def location(self, pos: int) -> Tuple[int, int]:
        """(line, col) of an absolute offset, both 1-based."""
        line = self.text.count("\n", 0, pos) + 1
        col = pos - self.text.rfind("\n", 0, pos)
        return line, col

    def __repr__(self) -> str:
        return f"StringCursor(pos={self.pos}, line={self.line}, col={self.col})"
