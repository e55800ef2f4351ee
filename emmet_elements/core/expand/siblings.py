from __future__ import annotations

from typing import Optional

from emmet_elements.core.errors import InvalidExpression


def split_siblings(text: str, *, expression: Optional[str] = None) -> list[str]:
    """Split on every ``+`` and trim each piece.

    Groups have already been replaced by atomic tokens, so every ``+`` left is top-level.
    An empty piece (empty input, ``div+``, ``a++b``) is an error.
    """
    pieces = [p.strip() for p in text.split("+")]
    for p in pieces:
        if not p:
            raise InvalidExpression(
                code="E_INVALID_EXPRESSION",
                message="empty sibling segment",
                expression=expression,
                segment=text,
            )
    return pieces
