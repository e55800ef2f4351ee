"""Grouping preprocessor.

Parenthesized groups are cut out of an expression innermost-first and replaced
by placeholder tokens, so that the sibling and descendant splitters only ever
see top-level ``+`` and ``>`` characters. A recorded group text may itself
contain tokens when the original groups were nested.
"""
from __future__ import annotations

import logging
import random
import re
import warnings
from dataclasses import dataclass
from typing import Optional

from emmet_elements.core.errors import UnbalancedGroupingError, UnbalancedGroupingWarning
from emmet_elements.core.model import PlaceholderMap

logger = logging.getLogger(__name__)

_GROUP_RE = re.compile(r"\(([^()]*)\)")

DEFAULT_PREFIX = "segment_"


def is_safe_prefix(prefix: str) -> bool:
    """Whether tokens built on ``prefix`` can only match where they were inserted.

    A safe prefix is letters, digits and '_', starts with a letter, and does not
    overlap itself: no proper suffix of it is also a prefix of it (``a1_a`` is
    unsafe, since ``a1_`` + ``a1_a0_`` reads ``a1_a1_a0_``).
    """
    if not prefix or not prefix[0].isalpha():
        return False
    if not all(ch.isalnum() or ch == "_" for ch in prefix):
        return False
    return not any(prefix.startswith(prefix[k:]) for k in range(1, len(prefix)))


class PlaceholderTokens:
    """Per-call token source: ``<prefix><n>_`` with n counting up from 0."""

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix
        self.pattern = re.compile(re.escape(prefix) + r"\d+_")
        self._count = 0

    def __call__(self) -> str:
        token = f"{self.prefix}{self._count}_"
        self._count += 1
        return token

    @classmethod
    def for_text(
        cls,
        text: str,
        *,
        prefix: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ) -> "PlaceholderTokens":
        """Pick a prefix that does not occur anywhere in ``text``."""
        if prefix is not None and not is_safe_prefix(prefix):
            raise ValueError(f"unsafe placeholder prefix: {prefix!r}")
        if prefix is None:
            rng = rng or random.Random()
            prefix = f"{DEFAULT_PREFIX}{rng.randrange(1000)}_"
        while prefix in text:
            prefix += "_"
        return cls(prefix)


@dataclass(frozen=True)
class GroupedExpression:
    text: str
    groups: PlaceholderMap
    tokens: PlaceholderTokens

    def is_placeholder(self, piece: str) -> bool:
        return piece in self.groups

    def restore(self, text: str) -> str:
        """Put the original parenthesized source back in place of every token."""

        def _sub(m: re.Match[str]) -> str:
            group = self.groups.get(m.group(0))
            if group is None:
                return m.group(0)
            return f"({self.restore(group)})"

        return self.tokens.pattern.sub(_sub, text)


def extract_groups(text: str, tokens: PlaceholderTokens) -> GroupedExpression:
    groups: PlaceholderMap = {}
    while True:
        m = _GROUP_RE.search(text)
        if m is None:
            break
        token = tokens()
        groups[token] = m.group(1)
        logger.debug("group %s -> %r", token, m.group(1))
        text = text[: m.start()] + token + text[m.end():]
    return GroupedExpression(text=text, groups=groups, tokens=tokens)


def check_balance(grouped: GroupedExpression, *, expression: str, strict: bool = False) -> None:
    """Report parentheses that no group extraction could consume.

    They stay in the expression as literal leaf text. In strict mode this is an error.
    """
    if "(" not in grouped.text and ")" not in grouped.text:
        return
    if strict:
        raise UnbalancedGroupingError(
            code="E_UNBALANCED_GROUPING",
            message="unbalanced parentheses",
            expression=expression,
            segment=grouped.restore(grouped.text),
        )
    logger.debug("unbalanced parentheses left as literal text in %r", expression)
    warnings.warn(
        f"unbalanced parentheses left as literal text in {expression!r}",
        UnbalancedGroupingWarning,
        stacklevel=3,
    )
