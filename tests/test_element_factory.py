import xml.etree.ElementTree as ET

from emmet_elements.core.expand.expand_emmet import expand, expand_single
from emmet_elements.core.model import NodeDescriptor
from emmet_elements.core.render.element_factory import EtreeElementFactory, create_elements, to_html


def test_element_fields():
    el = EtreeElementFactory().create_element(expand_single('a#home.nav.active[href="/" rel=me]{Home}'))
    assert el.tag == "a"
    assert el.get("id") == "home"
    assert el.get("class") == "nav active"
    assert el.get("href") == "/"
    assert el.get("rel") == "me"
    assert el.text == "Home"


def test_children_in_order():
    (el,) = create_elements(expand("ul>(li{1}+li{2}+li{3})"), EtreeElementFactory())
    assert [c.text for c in el] == ["1", "2", "3"]


def test_last_duplicate_attribute_wins():
    el = EtreeElementFactory().create_element(expand_single("p#a[id=b x=1 x=2]"))
    assert el.get("id") == "b"
    assert el.get("x") == "2"


def test_factory_is_idempotent():
    nodes = expand("div#app>(header>h1{T}+nav.main>a[href=/])+footer{bye}")
    factory = EtreeElementFactory()
    first = [ET.tostring(e, encoding="unicode") for e in create_elements(nodes, factory)]
    second = [ET.tostring(e, encoding="unicode") for e in create_elements(nodes, factory)]
    assert first == second


def test_to_html():
    assert to_html(expand("div.card>p{Hi}+br")) == '<div class="card"><p>Hi</p></div><br>'


def test_empty_descriptor():
    assert to_html([NodeDescriptor()]) == "<div></div>"
