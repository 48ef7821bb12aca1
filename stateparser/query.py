# stateparser/query.py
"""Helpers for pulling results back out of a match tree."""

from __future__ import annotations
from typing import Any, List, Optional

from .match import Scalar, Sequence, Tagged


def find_tag(match: Any, tag: str) -> Optional[Any]:
    """Child of the first `Tagged` labelled `tag`, depth-first, left to right.

    Tagged nodes with other labels are searched through. A matching tag whose
    child is None (e.g. `Tag("x", Ignore(...))`) counts as absent, so the search
    goes on to a later `tag`. Returns None if no such tag exists.
    """
    if isinstance(match, Sequence):
        for item in match.items:
            found = find_tag(item, tag)
            if found is not None:
                return found
        return None
    if isinstance(match, Tagged):
        if match.tag == tag:
            return match.match
        return find_tag(match.match, tag)
    return None


def find_all_tags(match: Any, tag: str) -> List[Any]:
    """Children of every `Tagged` labelled `tag`.

    Tags nested inside a matching tag are listed before the enclosing one.
    """
    if isinstance(match, Sequence):
        found: List[Any] = []
        for item in match.items:
            found.extend(find_all_tags(item, tag))
        return found
    if isinstance(match, Tagged):
        inner = find_all_tags(match.match, tag)
        if match.tag == tag:
            inner.append(match.match)
        return inner
    return []


def flatten(match: Any) -> str:
    """Concatenate every Scalar under `match`: the raw text it matched."""
    if isinstance(match, Scalar):
        return match.value
    if isinstance(match, Sequence):
        return "".join(flatten(item) for item in match.items)
    if isinstance(match, Tagged):
        return flatten(match.match)
    return ""
