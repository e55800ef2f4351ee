"""Element factories: the step from descriptors to real elements.

Expansion never builds elements itself. A factory takes a finished descriptor
and produces one element for a rendering target, children included.
"""
from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Generic, Iterable, Optional, Protocol, TypeVar

from emmet_elements.core.model import NodeDescriptor

E = TypeVar("E", covariant=True)


class ElementFactory(Protocol, Generic[E]):
    def create_element(self, descriptor: NodeDescriptor) -> E:
        ...


class EtreeElementFactory:
    """Build ``xml.etree.ElementTree`` elements.

    id, then class, then attributes in order (so a later duplicate, or an
    explicit ``id``/``class`` attribute, wins), then text, then children.
    """

    def create_element(self, descriptor: NodeDescriptor) -> ET.Element:
        el = ET.Element(descriptor.tag_name)
        if descriptor.id:
            el.set("id", descriptor.id)
        if descriptor.classes:
            el.set("class", " ".join(descriptor.classes))
        for name, value in descriptor.attributes:
            el.set(name, value)
        if descriptor.text:
            el.text = descriptor.text
        for child in descriptor.children:
            el.append(self.create_element(child))
        return el


def create_elements(descriptors: Iterable[NodeDescriptor], factory: ElementFactory[E]) -> list[E]:
    return [factory.create_element(d) for d in descriptors]


def to_html(descriptors: Iterable[NodeDescriptor], factory: Optional[EtreeElementFactory] = None) -> str:
    factory = factory or EtreeElementFactory()
    return "".join(
        ET.tostring(el, encoding="unicode", method="html") for el in create_elements(descriptors, factory)
    )
