from __future__ import annotations

import random

from emmet_elements.core.errors import ExpressionLintError
from emmet_elements.core.expand.expand_emmet import normalize_whitespace
from emmet_elements.core.expand.grouping import PlaceholderTokens, extract_groups
from emmet_elements.core.expand.leaf import split_leaf


# Expression lint rules. Each one flags input that expands without error but
# probably not the way the author meant:
# - L_UNBALANCED_GROUPING: a '(' or ')' with no partner; it stays in a leaf as literal text
# - L_OPERATOR_IN_BLOCK: '+', '>', '(' or ')' inside {text} or [attributes]; operators split first
# - L_MULTIPLE_TEXT_BLOCKS: more than one {...} in a leaf; only the last one is text
# - L_MULTIPLE_ATTRIBUTE_BLOCKS: more than one [...] in a leaf; only the last one is parsed
# - L_MULTIPLE_ID: a second '#' in a selector; it is ignored
# - L_EMPTY_CLASS: consecutive or trailing dots; an empty class name is kept

_BLOCKS = {"{": "}", "[": "]"}


def lint_expression(emmet_string: str) -> list[ExpressionLintError]:
    """Lint a shorthand expression.

    Lint runs *in addition to* expansion and works on input that may not
    expand at all (best effort). It never raises.
    """
    text = normalize_whitespace(emmet_string)
    errors: list[ExpressionLintError] = []

    errors.extend(_lint_balance(text))
    errors.extend(_lint_blocks(text))

    # Fixed seed: lint output must not depend on placeholder names.
    tokens = PlaceholderTokens.for_text(text, rng=random.Random(0))
    grouped = extract_groups(text, tokens)
    pieces = [grouped.text] + list(grouped.groups.values())
    seen: set[str] = set()
    for piece in pieces:
        for sibling in piece.split("+"):
            for level in sibling.split(">"):
                level = level.strip()
                if not level or grouped.is_placeholder(level):
                    continue
                leaf = grouped.restore(level)
                if leaf in seen:
                    continue
                seen.add(leaf)
                errors.extend(_lint_leaf(text, leaf))

    return sorted(errors, key=lambda e: (e.code, e.segment or ""))


def _lint_balance(text: str) -> list[ExpressionLintError]:
    depth = 0
    stray_close = 0
    for ch in text:
        if ch == "(":
            depth += 1
        elif ch == ")":
            if depth == 0:
                stray_close += 1
            else:
                depth -= 1
    if depth == 0 and stray_close == 0:
        return []
    return [
        ExpressionLintError(
            code="L_UNBALANCED_GROUPING",
            message=f"{depth} unclosed '(' and {stray_close} unopened ')' are kept as literal text",
            expression=text,
        )
    ]


def _lint_blocks(text: str) -> list[ExpressionLintError]:
    errors: list[ExpressionLintError] = []
    closing: str | None = None
    start = 0
    flagged = False
    for i, ch in enumerate(text):
        if closing is None:
            if ch in _BLOCKS:
                closing, start, flagged = _BLOCKS[ch], i, False
            continue
        if ch == closing:
            closing = None
        elif ch in "+>()" and not flagged:
            flagged = True
            errors.append(
                ExpressionLintError(
                    code="L_OPERATOR_IN_BLOCK",
                    message=f"{ch!r} inside a block is treated as an operator, not literal text",
                    expression=text,
                    segment=text[start:],
                )
            )
    return errors


def _lint_leaf(text: str, leaf: str) -> list[ExpressionLintError]:
    errors: list[ExpressionLintError] = []

    if leaf.count("{") > 1:
        errors.append(
            ExpressionLintError(
                code="L_MULTIPLE_TEXT_BLOCKS",
                message="only the last {...} block is used as text",
                expression=text,
                segment=leaf,
            )
        )

    parts = split_leaf(leaf)
    if "[" in parts.selector:
        errors.append(
            ExpressionLintError(
                code="L_MULTIPLE_ATTRIBUTE_BLOCKS",
                message="only the last [...] block is parsed as attributes",
                expression=text,
                segment=leaf,
            )
        )

    before_classes, *classes = parts.selector.split(".")
    if before_classes.count("#") > 1:
        errors.append(
            ExpressionLintError(
                code="L_MULTIPLE_ID",
                message="only the first #id is used",
                expression=text,
                segment=leaf,
            )
        )
    if any(not c.strip() for c in classes):
        errors.append(
            ExpressionLintError(
                code="L_EMPTY_CLASS",
                message="empty class name (consecutive or trailing '.')",
                expression=text,
                segment=leaf,
            )
        )
    return errors
