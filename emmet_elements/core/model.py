from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


DEFAULT_TAG = "div"


@dataclass(frozen=True)
class NodeDescriptor:
    tag_name: str = DEFAULT_TAG
    id: Optional[str] = None
    classes: list[str] = field(default_factory=list)
    attributes: list[tuple[str, str]] = field(default_factory=list)  # (name, value), duplicates kept
    text: Optional[str] = None
    children: list["NodeDescriptor"] = field(default_factory=list)


PlaceholderMap = dict[str, str]
