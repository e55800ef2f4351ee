from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EmmetError(Exception):
    """Base error envelope. Raised at the point of detection and never recovered locally."""

    code: str
    message: str
    expression: Optional[str] = None
    segment: Optional[str] = None

    def __str__(self) -> str:
        parts: list[str] = []
        if self.expression is not None:
            parts.append(repr(self.expression))
        if self.segment is not None:
            parts.append(repr(self.segment))
        loc = ":".join(parts) if parts else "<expression>"
        return f"{loc}: {self.code}: {self.message}"


class InvalidExpression(EmmetError):
    pass


class AttributeSyntaxError(EmmetError):
    pass


class UnbalancedGroupingError(EmmetError):
    pass


class ExpressionLoadError(EmmetError):
    pass


class ExpressionLintError(EmmetError):
    pass


class UnbalancedGroupingWarning(UserWarning):
    """Unmatched parentheses were left in the expression as literal text."""
