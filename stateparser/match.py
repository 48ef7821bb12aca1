# stateparser/match.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterator, Tuple, Union

# ---- Match tree variants ----
# A grammar returns one of these, None (nothing worth keeping, see Ignore),
# or whatever object a Node transform built.

@dataclass(frozen=True)
class Scalar:
    value: str  # matched character(s)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Sequence:
    items: Tuple[Any, ...] = ()  # never holds None

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Any:
        return self.items[index]


@dataclass(frozen=True)
class Tagged:
    tag: str
    match: Any


Match = Union[Scalar, Sequence, Tagged]


def tag_match(tag: str, match: Any) -> Tagged:
    """Wrap an existing match in a tag, e.g. from inside a Node transform."""
    return Tagged(tag, match)
