from pathlib import Path

import pytest

from emmet_elements.core.expand.expand_config import (
    DEFAULT_CONFIG,
    ConfigError,
    load_and_merge,
    load_config_file,
    merged_config,
)

EXAMPLES = Path(__file__).resolve().parent.parent / "examples"


def test_defaults():
    cfg = load_and_merge(None)
    assert cfg == DEFAULT_CONFIG
    assert cfg.default_tag == "div"
    assert cfg.strict_grouping is False
    assert cfg.placeholder_prefix is None


def test_load_config_file():
    cfg = load_and_merge(str(EXAMPLES / "config.yaml"))
    assert cfg.default_tag == "span"
    assert cfg.strict_grouping is True
    assert cfg.placeholder_prefix == "grp_"


def test_unknown_key_rejected():
    with pytest.raises(ConfigError):
        load_config_file(EXAMPLES / "config-invalid.yaml")


def test_empty_file_means_defaults(tmp_path: Path):
    p = tmp_path / "empty.yaml"
    p.write_text("", encoding="utf-8")
    assert load_config_file(p) == {}
    assert load_and_merge(str(p)) == DEFAULT_CONFIG


@pytest.mark.parametrize(
    "body",
    [
        "- a\n- b\n",
        "strict_grouping: 'yes'\n",
        "default_tag: '  '\n",
        "placeholder_prefix: 'a+b'\n",
        "placeholder_prefix: a1_a\n",
        "placeholder_prefix: _tok\n",
        "placeholder_prefix: 9tok\n",
    ],
)
def test_invalid_values(tmp_path: Path, body: str):
    p = tmp_path / "cfg.yaml"
    p.write_text(body, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config_file(p)


def test_missing_file():
    with pytest.raises(FileNotFoundError):
        load_and_merge("examples/does-not-exist.yaml")


def test_merged_overrides():
    cfg = merged_config({"default_tag": "p"})
    assert cfg.default_tag == "p"
    assert cfg.strict_grouping is False


def test_malformed_yaml_is_config_error(tmp_path: Path):
    p = tmp_path / "cfg.yaml"
    p.write_text("default_tag: [span\n", encoding="utf-8")
    with pytest.raises(ConfigError) as ei:
        load_config_file(p)
    assert "invalid YAML" in str(ei.value)
