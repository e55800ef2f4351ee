from __future__ import annotations

import logging
import random
import re
from typing import Optional

from emmet_elements.core.errors import InvalidExpression
from emmet_elements.core.expand.descendants import compose_chain
from emmet_elements.core.expand.expand_config import DEFAULT_CONFIG, ExpandConfig
from emmet_elements.core.expand.grouping import PlaceholderTokens, check_balance, extract_groups
from emmet_elements.core.expand.leaf import expand_leaf
from emmet_elements.core.expand.tree import Chain, GroupRef, Leaf, Segment, Siblings, parse_grouped
from emmet_elements.core.model import NodeDescriptor

logger = logging.getLogger(__name__)

_CONTROL_RE = re.compile(r"[\t\n\r]")
_SPACE_RE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """Drop tabs/newlines/carriage returns, then collapse whitespace runs to one space.

    Applied once to the whole input, so text and attribute blocks are collapsed too.
    """
    return _SPACE_RE.sub(" ", _CONTROL_RE.sub("", text))


def expand(
    emmet_string: str,
    *,
    config: ExpandConfig = DEFAULT_CONFIG,
    rng: Optional[random.Random] = None,
) -> list[NodeDescriptor]:
    """Expand a shorthand expression into its root descriptors, one per top-level sibling.

    ``rng`` only influences placeholder names, which never reach the output;
    pass a seeded one to make intermediate state reproducible.
    """
    text = normalize_whitespace(emmet_string)
    tokens = PlaceholderTokens.for_text(text, prefix=config.placeholder_prefix, rng=rng)
    grouped = extract_groups(text, tokens)
    check_balance(grouped, expression=text, strict=config.strict_grouping)
    logger.debug("flattened %r -> %r (%d groups)", text, grouped.text, len(grouped.groups))

    tree = parse_grouped(grouped, expression=text)
    return _Evaluator(config, expression=text).siblings(tree)


def expand_single(emmet_string: str, *, config: ExpandConfig = DEFAULT_CONFIG) -> NodeDescriptor:
    """Expand a leaf-only expression into exactly one descriptor.

    ``+``, ``>`` and parentheses are not supported here; they are taken as
    ordinary tag/class/attribute/text characters.
    """
    text = normalize_whitespace(emmet_string)
    return expand_leaf(text, default_tag=config.default_tag, expression=text)


emmet_to_elements = expand
simplified_emmet_to_element = expand_single


class _Evaluator:
    def __init__(self, config: ExpandConfig, *, expression: str) -> None:
        self.config = config
        self.expression = expression

    def siblings(self, node: Siblings) -> list[NodeDescriptor]:
        out: list[NodeDescriptor] = []
        for chain in node.chains:
            out.extend(self.chain(chain))
        return out

    def chain(self, node: Chain) -> list[NodeDescriptor]:
        levels = [self.segment(s) for s in node.levels]
        if not levels[0]:
            raise InvalidExpression(
                code="E_INVALID_EXPRESSION",
                message="descendant chain root resolves to no element",
                expression=self.expression,
                segment=node.source,
            )
        return [compose_chain(levels, expression=self.expression, segment=node.source)]

    def segment(self, node: Segment) -> list[NodeDescriptor]:
        if isinstance(node, GroupRef):
            logger.debug("resolving group %s", node.key)
            return self.siblings(node.body)
        assert isinstance(node, Leaf)
        return [expand_leaf(node.source, default_tag=self.config.default_tag, expression=self.expression)]
