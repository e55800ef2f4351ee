from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from emmet_elements.core.errors import ExpressionLoadError


def load_expressions(path: str) -> dict[str, str]:
    """Load a batch of shorthand expressions.

    Supported files:
      .txt        one expression per line; blank lines and '#' comment lines are skipped
      .yaml/.yml  a list of strings, or a mapping of name -> expression
      .json       same shapes as YAML

    Returns an ordered mapping of name -> expression. List entries and text
    lines are named by their 1-based position ("1", "2", ...).
    Expressions are not expanded or checked here.
    """

    p = Path(path)
    if not p.exists():
        raise ExpressionLoadError(
            code="E_FILE_NOT_FOUND",
            message=f"file does not exist: {p}",
        )

    suffix = p.suffix.lower()
    try:
        raw_text = p.read_text(encoding="utf-8")
    except Exception as e:  # pragma: no cover
        raise ExpressionLoadError(code="E_FILE_READ", message=f"{p}: {e}") from e

    if suffix == ".txt":
        lines = [ln.strip() for ln in raw_text.splitlines()]
        exprs = [ln for ln in lines if ln and not ln.startswith("#")]
        return {str(i): e for i, e in enumerate(exprs, start=1)}

    try:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(raw_text)
        elif suffix == ".json":
            data = json.loads(raw_text)
        else:
            raise ExpressionLoadError(
                code="E_UNSUPPORTED_FORMAT",
                message=f"{p}: supported formats are .txt, .yaml/.yml and .json",
            )
    except ExpressionLoadError:
        raise
    except Exception as e:
        code = "E_YAML_PARSE" if suffix in {".yaml", ".yml"} else "E_JSON_PARSE"
        raise ExpressionLoadError(code=code, message=f"{p}: {e}") from e

    return _normalize(data, p)


def _normalize(data: Any, p: Path) -> dict[str, str]:
    if data is None:
        return {}

    if isinstance(data, list):
        out: dict[str, str] = {}
        for i, item in enumerate(data, start=1):
            if not isinstance(item, str):
                raise ExpressionLoadError(
                    code="E_INVALID_ENTRY",
                    message=f"{p}: entry {i} must be a string",
                    segment=str(i),
                )
            out[str(i)] = item
        return out

    if isinstance(data, dict):
        out = {}
        for k, v in data.items():
            if not isinstance(k, str) or not k.strip():
                raise ExpressionLoadError(
                    code="E_INVALID_ENTRY",
                    message=f"{p}: expression names must be non-empty strings",
                )
            if not isinstance(v, str):
                raise ExpressionLoadError(
                    code="E_INVALID_ENTRY",
                    message=f"{p}: expression '{k}' must be a string",
                    segment=k,
                )
            out[k.strip()] = v
        return out

    raise ExpressionLoadError(
        code="E_INVALID_TOP_LEVEL",
        message=f"{p}: top-level document must be a list or a mapping",
    )
