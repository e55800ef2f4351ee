from __future__ import annotations

from typing import Optional

from emmet_elements.core.errors import InvalidExpression
from emmet_elements.core.model import NodeDescriptor


def split_descendants(text: str, *, expression: Optional[str] = None) -> list[str]:
    """Split one sibling piece on ``>`` and trim each level."""
    levels = [p.strip() for p in text.split(">")]
    if not levels[0]:
        raise InvalidExpression(
            code="E_INVALID_EXPRESSION",
            message="descendant chain has an empty root",
            expression=expression,
            segment=text,
        )
    for level in levels[1:]:
        if not level:
            raise InvalidExpression(
                code="E_INVALID_EXPRESSION",
                message="descendant chain has an empty level",
                expression=expression,
                segment=text,
            )
    return levels


def compose_chain(
    levels: list[list[NodeDescriptor]],
    *,
    expression: Optional[str] = None,
    segment: Optional[str] = None,
) -> NodeDescriptor:
    """Nest resolved levels into one root.

    Every element of a level becomes a child of the *first* element of the
    previous level; later elements of a level never receive children.
    """
    root_level = levels[0]
    if len(root_level) != 1:
        raise InvalidExpression(
            code="E_INVALID_EXPRESSION",
            message=f"descendant chain root must be a single element, got {len(root_level)}",
            expression=expression,
            segment=segment,
        )

    root = root_level[0]
    parent = root
    for level in levels[1:]:
        parent.children.extend(level)
        parent = level[0]
    return root
