# stateparser/__init__.py
"""Backtracking parser combinators over a checkpointable character cursor.

This package provides:
- a Cursor contract (read_char / checkpoint / restore) and a StringCursor
- combinators: Literal, CharClass, Seq, Choice, Repeat, Opt, Ignore,
  Require, Tag, Node, Ref/Resolve, Trace
- a match tree (Scalar, Sequence, Tagged) with tag queries and flatten
- a two-kind error model: recoverable vs fatal ParseError

Grammars are plain callables: `grammar(cursor)` returns a match or raises
ParseError. `apply` and `parse` are the entry points.
"""

from .errors import ErrorKind, ParseError, GrammarError
from .cursor import Cursor, StringCursor
from .match import Scalar, Sequence, Tagged, Match, tag_match
from .combinators import (
    UNBOUNDED, ESCAPER, escape, Grammar,
    Literal, CharClass, Seq, Choice, Repeat, Opt, Ignore, Require,
    Tag, Node, Ref, Resolve, Trace,
)
from .query import find_tag, find_all_tags, flatten
from .runtime import apply, parse
