import random
import warnings

import pytest

from emmet_elements.core.errors import UnbalancedGroupingError, UnbalancedGroupingWarning
from emmet_elements.core.expand.grouping import PlaceholderTokens, check_balance, extract_groups, is_safe_prefix


def test_tokens_count_up():
    tokens = PlaceholderTokens("t")
    assert [tokens(), tokens(), tokens()] == ["t0_", "t1_", "t2_"]


def test_prefix_avoids_input_text():
    tokens = PlaceholderTokens.for_text("t_x", prefix="t_")
    assert tokens.prefix == "t__"
    assert tokens.prefix not in "t_x"


def test_random_prefix_is_reproducible_with_seeded_rng():
    a = PlaceholderTokens.for_text("div", rng=random.Random(7))
    b = PlaceholderTokens.for_text("div", rng=random.Random(7))
    assert a.prefix == b.prefix
    assert a.prefix.startswith("segment_")


def test_extract_innermost_first():
    grouped = extract_groups("a>(b>(c+d))+e", PlaceholderTokens("g"))
    assert grouped.groups == {"g0_": "c+d", "g1_": "b>g0_"}
    assert grouped.text == "a>g1_+e"


def test_extract_replaces_match_span_not_first_occurrence():
    grouped = extract_groups("x(a)+(a)", PlaceholderTokens("g"))
    assert grouped.text == "xg0_+g1_"
    assert grouped.groups == {"g0_": "a", "g1_": "a"}


def test_restore_puts_source_back():
    grouped = extract_groups("p{a (b (c))}", PlaceholderTokens("g"))
    assert "(" not in grouped.text
    assert grouped.restore(grouped.text) == "p{a (b (c))}"


def test_no_groups():
    grouped = extract_groups("div+span", PlaceholderTokens("g"))
    assert grouped.text == "div+span"
    assert grouped.groups == {}


def test_unbalanced_warns():
    grouped = extract_groups("div+(span", PlaceholderTokens("g"))
    assert grouped.text == "div+(span"
    with pytest.warns(UnbalancedGroupingWarning):
        check_balance(grouped, expression="div+(span")


def test_unbalanced_strict_raises():
    grouped = extract_groups("a)+(b)", PlaceholderTokens("g"))
    with pytest.raises(UnbalancedGroupingError) as ei:
        check_balance(grouped, expression="a)+(b)", strict=True)
    assert ei.value.code == "E_UNBALANCED_GROUPING"
    assert ei.value.segment == "a)+(b)"


def test_balanced_is_silent():
    grouped = extract_groups("(a)+(b)", PlaceholderTokens("g"))
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        check_balance(grouped, expression="(a)+(b)")


@pytest.mark.parametrize("prefix", ["g", "grp_", "segment_1_", "t_"])
def test_safe_prefixes(prefix):
    assert is_safe_prefix(prefix)


@pytest.mark.parametrize("prefix", ["", "a1_a", "abab", "_g", "1g", "a-b"])
def test_unsafe_prefixes(prefix):
    assert not is_safe_prefix(prefix)


def test_unsafe_configured_prefix_is_refused():
    with pytest.raises(ValueError):
        PlaceholderTokens.for_text("a1_(x)", prefix="a1_a")


def test_restore_with_prefix_next_to_lookalike_text():
    tokens = PlaceholderTokens.for_text("a1_(x)", prefix="a1_b")
    grouped = extract_groups("a1_(x)", tokens)
    assert grouped.text == "a1_a1_b0_"
    assert grouped.restore(grouped.text) == "a1_(x)"
