"""Expression tree built over a grouped expression.

Siblings -> Chain -> Leaf | GroupRef. A GroupRef keeps the placeholder key it
was parsed from and the parsed body of that group, so groups are resolved by
recursion over this tree rather than by splicing text back into the string.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Union

from emmet_elements.core.errors import InvalidExpression
from emmet_elements.core.expand.descendants import split_descendants
from emmet_elements.core.expand.grouping import GroupedExpression
from emmet_elements.core.expand.siblings import split_siblings


@dataclass(frozen=True)
class Leaf:
    source: str


@dataclass(frozen=True)
class GroupRef:
    key: str
    body: "Siblings"


Segment = Union[Leaf, GroupRef]


@dataclass(frozen=True)
class Chain:
    levels: list[Segment]
    source: str  # restored source text, for error reporting


@dataclass(frozen=True)
class Siblings:
    chains: list[Chain]


def parse_grouped(
    grouped: GroupedExpression,
    text: Optional[str] = None,
    *,
    expression: Optional[str] = None,
) -> Siblings:
    """Parse ``text`` (default: the whole flattened expression) into a tree."""
    if text is None:
        text = grouped.text
    try:
        pieces = split_siblings(text, expression=expression)
    except InvalidExpression as e:
        raise _restored(e, grouped) from e
    return Siblings(chains=[_parse_chain(grouped, p, expression=expression) for p in pieces])


def _parse_chain(grouped: GroupedExpression, piece: str, *, expression: Optional[str]) -> Chain:
    try:
        level_texts = split_descendants(piece, expression=expression)
    except InvalidExpression as e:
        raise _restored(e, grouped) from e

    levels: list[Segment] = []
    for level in level_texts:
        if grouped.is_placeholder(level):
            body = parse_grouped(grouped, grouped.groups[level], expression=expression)
            levels.append(GroupRef(key=level, body=body))
        else:
            # Tokens embedded in a leaf (e.g. text "p{a (b)}") go back to their source text.
            levels.append(Leaf(source=grouped.restore(level)))
    return Chain(levels=levels, source=grouped.restore(piece))


def _restored(e: InvalidExpression, grouped: GroupedExpression) -> InvalidExpression:
    # Error segments are reported in source form, never with placeholder tokens.
    return replace(e, segment=grouped.restore(e.segment or ""))
