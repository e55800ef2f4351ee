from __future__ import annotations

from emmet_elements.core.errors import (
    AttributeSyntaxError,
    EmmetError,
    InvalidExpression,
    UnbalancedGroupingError,
    UnbalancedGroupingWarning,
)
from emmet_elements.core.expand.expand_config import ExpandConfig
from emmet_elements.core.expand.expand_emmet import (
    emmet_to_elements,
    expand,
    expand_single,
    simplified_emmet_to_element,
)
from emmet_elements.core.model import NodeDescriptor

__all__ = [
    "AttributeSyntaxError",
    "EmmetError",
    "ExpandConfig",
    "InvalidExpression",
    "NodeDescriptor",
    "UnbalancedGroupingError",
    "UnbalancedGroupingWarning",
    "emmet_to_elements",
    "expand",
    "expand_single",
    "simplified_emmet_to_element",
]
