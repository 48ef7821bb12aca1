# stateparser/runtime.py
from __future__ import annotations
from typing import Any, Optional, Tuple

from .combinators import eprint
from .cursor import Cursor, StringCursor
from .errors import ParseError, caret_snippet


def apply(grammar: Any, cursor: Cursor) -> Tuple[Any, Optional[ParseError]]:
    """Run `grammar` on `cursor` and return `(match, None)` or `(None, error)`."""
    try:
        return grammar(cursor), None
    except ParseError as err:
        return None, err


def parse(grammar: Any, text: str, *, partial: bool = False, debug: bool = False) -> Any:
    """Parse `text` with `grammar` and return the match.

    Parameters
    ----------
    grammar :
        Top-level grammar.
    text : str
        Input.
    partial : bool
        Accept a match that stops before the end of `text`.
    debug : bool
        Print a one-line summary of the run to stderr.

    Raises
    ------
    ParseError
        With `location` pointing at the furthest character the parse read.
    """
    cursor = StringCursor(text)
    match, err = apply(grammar, cursor)
    if err is None and not partial and not cursor.at_end():
        rest = cursor.remaining()
        err = ParseError(f"unexpected trailing input {rest[:20]!r}")
        cursor.furthest = cursor.pos
    if err is not None:
        pos = min(cursor.furthest, len(text))
        line, col = cursor.location(pos)
        err.location = f"at {line}:{col}\n" + caret_snippet(text, pos)
        if debug:
            eprint(f"[DEBUG] parse failed | {err.kind.value} at {line}:{col}")
        raise err
    if debug:
        eprint(f"[DEBUG] parse ok | consumed={cursor.pos}")
    return match
