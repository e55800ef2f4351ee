from __future__ import annotations

import json
import logging
import warnings
from typing import Any

import typer
from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from emmet_elements.core.errors import EmmetError, ExpressionLoadError, UnbalancedGroupingWarning
from emmet_elements.core.expand.expand_config import ConfigError, ExpandConfig, load_and_merge
from emmet_elements.core.expand.expand_emmet import expand, expand_single
from emmet_elements.core.io.load_expressions import load_expressions
from emmet_elements.core.lint.lint_expression import lint_expression
from emmet_elements.core.model import NodeDescriptor
from emmet_elements.core.render.element_factory import to_html
from emmet_elements.core.render.serialize import (
    descriptors_to_dicts,
    node_label,
    to_json,
    to_outline,
    to_yaml,
    write_text,
    yaml_text,
)

app = typer.Typer(add_completion=False, no_args_is_help=True)

EXPAND_FORMATS = ("text", "json", "yaml", "html", "tree")
BATCH_FORMATS = ("json", "yaml", "html")


@app.callback()
def _callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log expansion steps to stderr"),
) -> None:
    """Emmet-like shorthand to element trees."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command("expand")
def expand_cmd(
    expression: str = typer.Argument(..., help="Shorthand expression, e.g. 'ul>li.item{One}+li.item{Two}'"),
    single: bool = typer.Option(False, "--single", help="Leaf-only grammar: no '+', '>' or groups"),
    format: str = typer.Option("text", "--format", help="Output format: text|json|yaml|html|tree"),
    config_file: str | None = typer.Option(None, "--config", help="Optional YAML file with expansion settings"),
) -> None:
    """Expand one expression and print the resulting element tree."""
    if format not in EXPAND_FORMATS:
        _fail_unknown_format(format, EXPAND_FORMATS)

    config = _load_config(config_file)
    try:
        nodes = [expand_single(expression, config=config)] if single else expand(expression, config=config)
    except EmmetError as e:
        _print_errors([e])
        raise typer.Exit(code=2)

    if format == "tree":
        Console().print(_rich_tree(nodes))
        return
    typer.echo(_render(nodes, format))


@app.command("lint")
def lint_cmd(
    expression: str = typer.Argument(..., help="Shorthand expression to check"),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Lint an expression (rules beyond what expansion rejects)."""
    if format not in ("text", "json"):
        _fail_unknown_format(format, ("text", "json"))

    errors: list[EmmetError] = list(lint_expression(expression))
    try:
        with warnings.catch_warnings():
            # Already reported as L_UNBALANCED_GROUPING.
            warnings.simplefilter("ignore", UnbalancedGroupingWarning)
            expand(expression)
    except EmmetError as e:
        errors.append(e)

    if format == "json":
        payload = {
            "tool": "emmet",
            "command": "lint",
            "ok": not errors,
            "error_count": len(errors),
            "errors": [_to_item(e) for e in errors],
        }
        typer.echo(json.dumps(payload, indent=2, sort_keys=True))
        raise typer.Exit(code=2 if errors else 0)

    if errors:
        _print_errors(errors)
        raise typer.Exit(code=2)
    typer.echo("OK: lint passed")


@app.command("batch")
def batch_cmd(
    path: str = typer.Argument(..., help="Expressions file (.txt/.yaml/.yml/.json)"),
    format: str = typer.Option("yaml", "--format", help="Output format: json|yaml|html"),
    config_file: str | None = typer.Option(None, "--config", help="Optional YAML file with expansion settings"),
    out: str | None = typer.Option(None, "--out", help="Write the result, in the chosen format, to this path instead of stdout"),
) -> None:
    """Expand every expression in a file."""
    if format not in BATCH_FORMATS:
        _fail_unknown_format(format, BATCH_FORMATS)

    try:
        expressions = load_expressions(path)
    except ExpressionLoadError as e:
        _print_errors([e])
        raise typer.Exit(code=1)

    config = _load_config(config_file)
    results: dict[str, list[NodeDescriptor]] = {}
    errors: list[EmmetError] = []
    for name, expression in expressions.items():
        try:
            results[name] = expand(expression, config=config)
        except EmmetError as e:
            errors.append(e)

    if errors:
        _print_errors(errors)
        raise typer.Exit(code=2)

    text = _render_batch(results, format)
    if out:
        write_text(text, out)
        typer.echo(f"OK: wrote {len(results)} expansions to {out}")
        return
    typer.echo(text, nl=False)


def _render_batch(results: dict[str, list[NodeDescriptor]], format: str) -> str:
    if format == "html":
        return "".join(f"{name}: {to_html(nodes)}\n" for name, nodes in results.items())
    data: dict[str, Any] = {name: descriptors_to_dicts(nodes) for name, nodes in results.items()}
    if format == "json":
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    return yaml_text(data)


def _render(nodes: list[NodeDescriptor], format: str) -> str:
    if format == "json":
        return to_json(nodes)
    if format == "yaml":
        return to_yaml(nodes).rstrip("\n")
    if format == "html":
        return to_html(nodes)
    return to_outline(nodes)


def _rich_tree(nodes: list[NodeDescriptor]) -> Tree:
    root = Tree(Text(f"{len(nodes)} root(s)"), guide_style="dim")

    def _add(parent: Tree, node: NodeDescriptor) -> None:
        branch = parent.add(Text(node_label(node)))
        for child in node.children:
            _add(branch, child)

    for n in nodes:
        _add(root, n)
    return root


def _load_config(config_file: str | None) -> ExpandConfig:
    try:
        return load_and_merge(config_file)
    except FileNotFoundError:
        _print_errors(
            [
                ExpressionLoadError(
                    code="E_CONFIG_FILE_NOT_FOUND",
                    message=f"config file not found: {config_file}",
                )
            ]
        )
        raise typer.Exit(code=1)
    except ConfigError as e:
        _print_errors([EmmetError(code="E_CONFIG_FILE_INVALID", message=str(e))])
        raise typer.Exit(code=2)


def _fail_unknown_format(format: str, allowed: tuple[str, ...]) -> None:
    _print_errors(
        [
            EmmetError(
                code="E_UNKNOWN_FORMAT",
                message=f"unknown format: {format} (choose one of: {', '.join(allowed)})",
            )
        ]
    )
    raise typer.Exit(code=2)


def _to_item(e: EmmetError) -> dict[str, Any]:
    return {
        "code": e.code,
        "message": e.message,
        "expression": e.expression,
        "segment": e.segment,
        "severity": "error",
        "source": "lint" if e.code.startswith("L_") else "expand",
    }


def _print_errors(errors: list[EmmetError]) -> None:
    errors_sorted = sorted(errors, key=lambda e: (e.expression or "", e.segment or "", e.code))
    for e in errors_sorted:
        typer.echo(str(e), err=True)


def main() -> None:
    app(prog_name="emmet")


cli = typer.main.get_command(app)

if __name__ == "__main__":
    main()
