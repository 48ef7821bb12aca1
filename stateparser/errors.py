# stateparser/errors.py
"""Error model.

Two kinds of parse failure travel through the combinators:

- RECOVERABLE: this alternative did not match here. The failing combinator has
  already restored the cursor, so a caller may try something else.
- FATAL: the parse is committed to this path (see `Require`). Alternation and
  repetition must not swallow it.

Both are a single `ParseError` type carrying an explicit `ErrorKind`, so
handlers branch on `err.kind` instead of on the exception class.
"""

from __future__ import annotations
import enum
from typing import List, Optional, Tuple


class ErrorKind(enum.Enum):
    RECOVERABLE = "recoverable"
    FATAL = "fatal"


class GrammarError(ValueError):
    """A grammar was built (or wired) incorrectly. Raised at construction time."""


class ParseError(SyntaxError):
    """Parse failure raised by grammars and cursors."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.RECOVERABLE,
        causes: Optional[List["ParseError"]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.causes: List[ParseError] = list(causes or [])
        # "line:col" plus caret snippet, filled in by runtime.parse()
        self.location: Optional[str] = None

    @property
    def fatal(self) -> bool:
        return self.kind is ErrorKind.FATAL

    @property
    def recoverable(self) -> bool:
        return self.kind is ErrorKind.RECOVERABLE

    @classmethod
    def commit(cls, err: "ParseError") -> "ParseError":
        """Return the fatal form of `err`, chained to it. Already fatal errors pass through."""
        if err.fatal:
            return err
        fatal = cls(f"Fatal match error: {err.message}", ErrorKind.FATAL, [err])
        fatal.__cause__ = err
        return fatal

    def __str__(self) -> str:
        if self.location:
            return f"{self.message}\n{self.location}"
        return self.message

    def __repr__(self) -> str:
        return f"ParseError({self.message!r}, {self.kind.name})"


# ---------- caret snippets ----------

def line_bounds(src: str, pos: int) -> Tuple[int, int]:
    """[start, end) of the line containing pos."""
    start = src.rfind("\n", 0, pos)
    start = 0 if start < 0 else start + 1
    end = src.find("\n", pos)
    end = len(src) if end < 0 else end
    return start, end


def caret_snippet(src: str, pos: int) -> str:
    """The line holding `pos` with a caret (^) under that column."""
    start, end = line_bounds(src, pos)
    line = src[start:end]
    col = (pos - start) + 1
    caret = " " * (col - 1) + "^"
    return f"{line}\n{caret}"
