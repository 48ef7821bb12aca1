# stateparser/combinators.py
"""Grammar combinators.

A grammar is any callable `grammar(cursor) -> value`. It either returns its
match value (see `stateparser.match`) or raises `ParseError`. Every
combinator below keeps the same promise: when it fails it has put the cursor
back where it was on entry.

The combinators are frozen dataclasses so a composed grammar prints as a
readable tree. They hold no per-parse state; one instance can be reused
against any number of cursors.
"""

from __future__ import annotations
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple

import regex

from .cursor import Cursor
from .errors import GrammarError, ParseError
from .match import Scalar, Sequence, Tagged

# Repeat upper bound meaning "as many as match"
UNBOUNDED = 0

# control characters rendered on one line in class specs and messages
ESCAPER = str.maketrans({"\n": "\\n", "\t": "\\t"})


def escape(text: str) -> str:
    return text.translate(ESCAPER)


def eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


class Grammar:
    """Base class for the built-in combinators. Plain functions work too."""

    def __call__(self, cursor: Cursor) -> Any:
        raise NotImplementedError


def _grammars(owner: str, gs: Tuple[Any, ...]) -> Tuple[Any, ...]:
    for g in gs:
        if not callable(g):
            raise GrammarError(f"{owner}: {g!r} is not a grammar")
    return tuple(gs)


def _check_single_class(spec: str) -> None:
    """Reject a set whose `]` would close the bracket early.

    `a]b` compiles as `[a]` followed by `b]` and then matches no single
    character. A `]` first in the set (after an optional `^`) is a member.
    """
    i = 1 if spec.startswith("^") else 0
    first = i
    while i < len(spec):
        ch = spec[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "]" and i != first:
            raise GrammarError(f"CharClass: unescaped ']' at {i} in [{spec}]")
        i += 1


# ---- Leaves ----

@dataclass(frozen=True)
class Literal(Grammar):
    text: str

    def __post_init__(self) -> None:
        if not self.text:
            raise GrammarError("Literal: empty text never consumes input")

    def __call__(self, cursor: Cursor) -> Scalar:
        state = cursor.checkpoint()
        for want in self.text:
            try:
                got = cursor.read_char()
            except ParseError as err:
                cursor.restore(state)
                raise ParseError(f"Expected {want!r} ({err.message})", causes=[err]) from err
            if got != want:
                cursor.restore(state)
                raise ParseError(f"Expected {want!r}, got {got!r}")
        return Scalar(self.text)


@dataclass(frozen=True)
class CharClass(Grammar):
    """One character out of a regex bracket set, e.g. `a-z_` or `^"\\\\`.

    Compiled with `regex`, so Unicode properties (`\\p{L}`) are allowed.
    """
    spec: str
    pattern: Any = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.spec:
            raise GrammarError("CharClass: empty character set")
        escaped = escape(self.spec)
        _check_single_class(escaped)
        try:
            pattern = regex.compile(f"[{escaped}]")
        except regex.error as err:
            raise GrammarError(f"CharClass: bad character set [{escaped}]: {err}") from err
        object.__setattr__(self, "spec", escaped)
        object.__setattr__(self, "pattern", pattern)

    def __call__(self, cursor: Cursor) -> Scalar:
        state = cursor.checkpoint()
        try:
            ch = cursor.read_char()
        except ParseError as err:
            cursor.restore(state)
            raise ParseError(f"Expected [{self.spec}] ({err.message})", causes=[err]) from err
        if self.pattern.fullmatch(ch) is None:
            cursor.restore(state)
            raise ParseError(f"Expected [{self.spec}], got {ch!r}")
        return Scalar(ch)


# ---- Sequencing / alternation ----

@dataclass(frozen=True, init=False)
class Seq(Grammar):
    items: Tuple[Any, ...]

    def __init__(self, *items: Any):
        object.__setattr__(self, "items", _grammars("Seq", items))

    def __call__(self, cursor: Cursor) -> Sequence:
        state = cursor.checkpoint()
        out: List[Any] = []
        for g in self.items:
            try:
                m = g(cursor)
            except ParseError:
                cursor.restore(state)
                raise
            if m is not None:
                out.append(m)
        return Sequence(tuple(out))


@dataclass(frozen=True, init=False)
class Choice(Grammar):
    alts: Tuple[Any, ...]

    def __init__(self, *alts: Any):
        if not alts:
            raise GrammarError("Choice: at least one alternative required")
        object.__setattr__(self, "alts", _grammars("Choice", alts))

    def __call__(self, cursor: Cursor) -> Any:
        state = cursor.checkpoint()
        errs: List[ParseError] = []
        for g in self.alts:
            try:
                return g(cursor)
            except ParseError as err:
                cursor.restore(state)
                if err.fatal:
                    raise
                errs.append(err)
        msgs = " | ".join(e.message for e in errs)
        raise ParseError(f"Expected one of: ({msgs})", causes=errs)


# ---- Repetition ----

@dataclass(frozen=True)
class Repeat(Grammar):
    lo: int
    hi: Optional[int]  # None or UNBOUNDED: no upper limit
    grammar: Any

    def __post_init__(self) -> None:
        if self.hi == UNBOUNDED:
            object.__setattr__(self, "hi", None)
        if self.lo < 0 or (self.hi is not None and self.hi < 0):
            raise GrammarError(f"Repeat: negative bound ({self.lo}, {self.hi})")
        if self.hi is not None and self.hi < self.lo:
            raise GrammarError(f"Repeat: max {self.hi} is below min {self.lo}")
        _grammars("Repeat", (self.grammar,))

    def __call__(self, cursor: Cursor) -> Sequence:
        state = cursor.checkpoint()
        out: List[Any] = []
        count = 0
        while self.hi is None or count < self.hi:
            try:
                m = self.grammar(cursor)
            except ParseError as err:
                if err.fatal or count < self.lo:
                    cursor.restore(state)
                    raise
                break
            if m is not None:
                out.append(m)
            count += 1
        return Sequence(tuple(out))


def Opt(grammar: Any) -> Repeat:
    """Zero or one `grammar`. The result is a Sequence of length 0 or 1."""
    return Repeat(0, 1, grammar)


# ---- Value shaping ----

@dataclass(frozen=True)
class Ignore(Grammar):
    grammar: Any

    def __call__(self, cursor: Cursor) -> None:
        self.grammar(cursor)
        return None


@dataclass(frozen=True, init=False)
class Require(Grammar):
    """Seq whose failures are all fatal: past this point there is no going back."""
    seq: Seq

    def __init__(self, *items: Any):
        object.__setattr__(self, "seq", Seq(*items))

    def __call__(self, cursor: Cursor) -> Sequence:
        try:
            return self.seq(cursor)
        except ParseError as err:
            raise ParseError.commit(err)


@dataclass(frozen=True)
class Tag(Grammar):
    tag: str
    grammar: Any

    def __call__(self, cursor: Cursor) -> Tagged:
        return Tagged(self.tag, self.grammar(cursor))


@dataclass(frozen=True)
class Node(Grammar):
    """Turn the match of `grammar` into a domain value via `transform`.

    Any exception from `transform` rewinds the cursor to where this node
    started. A `ParseError` propagates as is; anything else (e.g. `ValueError`
    from `int()`) becomes a recoverable `ParseError`, so an enclosing `Choice`
    moves on to its next alternative.
    """
    grammar: Any
    transform: Callable[[Any], Any]

    def __call__(self, cursor: Cursor) -> Any:
        state = cursor.checkpoint()
        m = self.grammar(cursor)
        try:
            return self.transform(m)
        except ParseError:
            cursor.restore(state)
            raise
        except Exception as err:
            cursor.restore(state)
            raise ParseError(f"Node transform failed: {type(err).__name__}: {err}") from err


# ---- Forward references ----

class Ref:
    """Slot for a grammar that is defined later (recursive grammars).

        expr = Ref("expr")
        atom = Choice(number, Seq(lparen, Resolve(expr), rparen))
        expr.bind(Seq(atom, Repeat(0, UNBOUNDED, Seq(plus, atom))))
    """

    def __init__(self, name: str = ""):
        self.name = name
        self.target: Optional[Any] = None

    def bind(self, grammar: Any) -> Any:
        if self.target is not None:
            raise GrammarError(f"Ref {self.name!r} is already bound")
        _grammars("Ref", (grammar,))
        self.target = grammar
        return grammar

    def resolve(self) -> Any:
        if self.target is None:
            raise GrammarError(f"Ref {self.name!r} used before bind()")
        return self.target

    def __repr__(self) -> str:
        state = "bound" if self.target is not None else "unbound"
        return f"Ref({self.name!r}, {state})"


@dataclass(frozen=True)
class Resolve(Grammar):
    ref: Ref

    def __call__(self, cursor: Cursor) -> Any:
        return self.ref.resolve()(cursor)


# ---- Debugging ----

@dataclass(frozen=True)
class Trace(Grammar):
    """Behaves like `grammar` and reports each call on stderr."""
    label: str
    grammar: Any

    def __call__(self, cursor: Cursor) -> Any:
        eprint(f"[DEBUG] {self.label}: enter")
        try:
            m = self.grammar(cursor)
        except ParseError as err:
            eprint(f"[DEBUG] {self.label}: {err.kind.value} failure | {err.message}")
            raise
        eprint(f"[DEBUG] {self.label}: ok | {m!r}")
        return m
