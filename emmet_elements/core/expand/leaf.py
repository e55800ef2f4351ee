from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from emmet_elements.core.errors import AttributeSyntaxError
from emmet_elements.core.model import DEFAULT_TAG, NodeDescriptor


@dataclass(frozen=True)
class LeafParts:
    selector: str  # tag#id.class.class
    attributes_source: Optional[str]  # inside of [...]
    text: Optional[str]  # inside of {...}


def split_leaf(token: str) -> LeafParts:
    """Cut a leaf token into its text block, attribute block and selector.

    The text block is taken first (from the last ``{`` to the end), then the
    attribute block (the last ``[`` up to the first ``]`` after it) from what
    is left. A block with no closing bracket runs to the end of the token.
    """
    rest = token
    text: Optional[str] = None
    start = rest.rfind("{")
    if start != -1:
        end = rest.find("}", start + 1)
        text = rest[start + 1 : end] if end != -1 else rest[start + 1 :]
        rest = rest[:start]

    attributes_source: Optional[str] = None
    start = rest.rfind("[")
    if start != -1:
        end = rest.find("]", start + 1)
        if end != -1:
            attributes_source = rest[start + 1 : end]
            rest = rest[:start] + rest[end + 1 :]
        else:
            attributes_source = rest[start + 1 :]
            rest = rest[:start]

    return LeafParts(selector=rest, attributes_source=attributes_source, text=text)


def parse_attributes(source: str, *, expression: Optional[str] = None) -> list[tuple[str, str]]:
    """Whitespace-separated ``name=value`` items; a quoted value keeps what is between its outer quotes."""
    attributes: list[tuple[str, str]] = []
    for item in source.split():
        if "=" not in item:
            raise AttributeSyntaxError(
                code="E_ATTRIBUTE_SYNTAX",
                message=f"attribute {item!r} is missing '='",
                expression=expression,
                segment=source,
            )
        name, value = item.split("=", 1)
        if '"' in value:
            value = value[value.find('"') + 1 : value.rfind('"')]
        attributes.append((name, value))
    return attributes


def split_selector(selector: str, *, default_tag: str = DEFAULT_TAG) -> tuple[str, Optional[str], list[str]]:
    before_classes, *classes = selector.split(".")
    # Empty class names from consecutive dots are kept as "".
    classes = [c.strip() for c in classes]
    # Only the first '#' piece is the id; anything after a second '#' is ignored.
    tag_part, *id_parts = before_classes.split("#")
    tag_name = tag_part.strip() or default_tag
    node_id = id_parts[0].strip() if id_parts else None
    return tag_name, (node_id or None), classes


def expand_leaf(
    token: str,
    *,
    default_tag: str = DEFAULT_TAG,
    expression: Optional[str] = None,
) -> NodeDescriptor:
    """Expand one leaf token (no ``+``, ``>`` or groups) into a descriptor.

    Operator characters are not special here and end up in whichever part
    they were written in. Unknown tag names pass through verbatim.
    """
    parts = split_leaf(token)
    attributes = parse_attributes(parts.attributes_source, expression=expression) if parts.attributes_source else []
    tag_name, node_id, classes = split_selector(parts.selector, default_tag=default_tag)
    return NodeDescriptor(
        tag_name=tag_name,
        id=node_id,
        classes=classes,
        attributes=attributes,
        text=parts.text or None,
    )
