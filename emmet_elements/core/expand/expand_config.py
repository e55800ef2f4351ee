from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

import yaml

from emmet_elements.core.expand.grouping import is_safe_prefix
from emmet_elements.core.model import DEFAULT_TAG


@dataclass(frozen=True)
class ExpandConfig:
    # Tag used when a leaf names only an id and/or classes.
    default_tag: str = DEFAULT_TAG
    # Raise UnbalancedGroupingError instead of warning on stray parentheses.
    strict_grouping: bool = False
    # Fixed placeholder prefix; None picks a random one per call.
    placeholder_prefix: Optional[str] = None


DEFAULT_CONFIG = ExpandConfig()

_FIELD_TYPES: dict[str, tuple[type, ...]] = {
    "default_tag": (str,),
    "strict_grouping": (bool,),
    "placeholder_prefix": (str, type(None)),
}


class ConfigError(ValueError):
    pass


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Load expansion settings from a YAML file.

    Format:
      default_tag: span
      strict_grouping: true
      placeholder_prefix: grp_

    Returns the validated mapping of overrides (unknown keys are rejected).
    """
    p = Path(path)
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"{p}: invalid YAML: {e}") from e
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("config file must be a mapping of setting -> value")

    known = {f.name for f in fields(ExpandConfig)}
    out: dict[str, Any] = {}
    for k, v in raw.items():
        if not isinstance(k, str) or k not in known:
            raise ConfigError(f"unknown setting: {k!r} (choose from: {', '.join(sorted(known))})")
        if not isinstance(v, _FIELD_TYPES[k]):
            raise ConfigError(f"setting '{k}' has invalid type {type(v).__name__}")
        if k == "default_tag":
            if not v.strip():
                raise ConfigError("default_tag must be a non-empty string")
            v = v.strip()
        if k == "placeholder_prefix" and v is not None and not is_safe_prefix(v):
            raise ConfigError(
                "placeholder_prefix must start with a letter, use only letters, digits or '_',"
                " and must not overlap itself (e.g. 'a1_a')"
            )
        out[k] = v
    return out


def merged_config(overrides: dict[str, Any] | None = None) -> ExpandConfig:
    """Return DEFAULT_CONFIG with optional overrides applied."""
    if not overrides:
        return DEFAULT_CONFIG
    return replace(DEFAULT_CONFIG, **overrides)


def load_and_merge(config_file: str | None) -> ExpandConfig:
    if not config_file:
        return merged_config()
    return merged_config(load_config_file(config_file))
