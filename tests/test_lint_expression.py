from emmet_elements.core.lint.lint_expression import lint_expression


def _codes(text: str) -> list[str]:
    return [e.code for e in lint_expression(text)]


def test_clean_expression():
    assert lint_expression("div#app>(header>h1{Title}+p.lead[data-x=1]{Hi})") == []


def test_unbalanced():
    assert _codes("div>(span") == ["L_UNBALANCED_GROUPING"]
    assert _codes("div)") == ["L_UNBALANCED_GROUPING"]


def test_operator_in_text_block():
    assert "L_OPERATOR_IN_BLOCK" in _codes("p{a+b}")
    assert "L_OPERATOR_IN_BLOCK" in _codes("a[data-x=a>b]")


def test_parentheses_in_text_block():
    assert _codes("p{(c) 2023}") == ["L_OPERATOR_IN_BLOCK"]


def test_empty_class():
    assert _codes("p.a..b") == ["L_EMPTY_CLASS"]


def test_multiple_id():
    assert _codes("p#a#b") == ["L_MULTIPLE_ID"]


def test_multiple_blocks():
    assert _codes("p{a}{b}") == ["L_MULTIPLE_TEXT_BLOCKS"]
    assert _codes("p[a=1][b=2]") == ["L_MULTIPLE_ATTRIBUTE_BLOCKS"]


def test_lint_looks_inside_groups():
    assert _codes("ul>(li.x..y+li)") == ["L_EMPTY_CLASS"]


def test_lint_never_raises_on_invalid_input():
    assert lint_expression("") == []
    assert lint_expression("div+") == []
    assert lint_expression("div[foo]") == []
