from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

import yaml

from emmet_elements.core.model import NodeDescriptor


def descriptor_to_dict(node: NodeDescriptor) -> dict[str, Any]:
    """Plain-data form of a descriptor. Empty optional fields are omitted; key order is stable."""
    out: dict[str, Any] = {"tag": node.tag_name}
    if node.id is not None:
        out["id"] = node.id
    if node.classes:
        out["classes"] = list(node.classes)
    if node.attributes:
        out["attributes"] = [[name, value] for name, value in node.attributes]
    if node.text is not None:
        out["text"] = node.text
    if node.children:
        out["children"] = [descriptor_to_dict(c) for c in node.children]
    return out


def descriptors_to_dicts(nodes: Iterable[NodeDescriptor]) -> list[dict[str, Any]]:
    return [descriptor_to_dict(n) for n in nodes]


def to_json(nodes: Iterable[NodeDescriptor]) -> str:
    return json.dumps(descriptors_to_dicts(nodes), indent=2, ensure_ascii=False)


def to_yaml(nodes: Iterable[NodeDescriptor]) -> str:
    return yaml_text(descriptors_to_dicts(nodes))


def yaml_text(data: Any) -> str:
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=False, allow_unicode=True)


def write_text(text: str, path: str) -> None:
    """Write rendered output to ``path``, creating parent directories as needed."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")


def node_label(node: NodeDescriptor) -> str:
    """One-line shorthand for a single node, children excluded."""
    label = node.tag_name
    if node.id is not None:
        label += f"#{node.id}"
    for c in node.classes:
        label += f".{c}"
    if node.attributes:
        label += "[" + " ".join(f'{name}="{value}"' for name, value in node.attributes) + "]"
    if node.text is not None:
        label += "{" + node.text + "}"
    return label


def to_outline(nodes: Iterable[NodeDescriptor], indent: str = "  ") -> str:
    lines: list[str] = []

    def _walk(node: NodeDescriptor, depth: int) -> None:
        lines.append(indent * depth + node_label(node))
        for child in node.children:
            _walk(child, depth + 1)

    for n in nodes:
        _walk(n, 0)
    return "\n".join(lines)
