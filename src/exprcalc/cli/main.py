"""
exprcalc CLI - Entry point.

Without a sub-command the interactive loop runs on stdin. The ``eval``,
``tokens`` and ``tree`` commands work on a single expression given on the
command line.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.tree import Tree

from exprcalc.cli.utils import configure_logging, version_callback
from exprcalc.core.calculator import calculate
from exprcalc.core.config import CalcConfig, load_config
from exprcalc.core.errors import CalcError, ConfigError
from exprcalc.core.expression_lang.parser import parse
from exprcalc.core.expression_lang.tokenizer import tokenize
from exprcalc.core.ir.expressions import BinaryExpr, Expr, Literal
from exprcalc.repl import run_repl

app = typer.Typer(
    help="""exprcalc – unsigned integer calculator

Type one expression per line, e.g. 1+123*(12/234) or (1+2)*3.
Type exit to quit.
""",
    add_completion=False,
)

console = Console()

# Each level indents rich guide lines by four columns; deeper trees overflow 80 columns
MAX_TREE_DISPLAY_DEPTH = 16


def _config(ctx: typer.Context) -> CalcConfig:
    config = ctx.obj
    if isinstance(config, CalcConfig):
        return config
    return CalcConfig()


def _fail(error: CalcError) -> NoReturn:
    typer.echo(str(error), err=True)
    raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline stages to stderr"),
    config_file: Path | None = typer.Option(
        None, "--config", "-c", help="TOML file with a [repl] table"
    ),
) -> None:
    """exprcalc CLI main callback for global options."""
    configure_logging(verbose)

    config = CalcConfig()
    if config_file is not None:
        try:
            config = load_config(config_file)
        except ConfigError as e:
            _fail(e)
    ctx.obj = config

    if ctx.invoked_subcommand is None:
        raise typer.Exit(code=run_repl(config, sys.stdin, sys.stdout, sys.stderr))


@app.command()
def repl(
    ctx: typer.Context,
    prompt: str | None = typer.Option(None, "--prompt", "-p", help="Prompt shown before each line"),
    show_tokens: bool = typer.Option(False, "--show-tokens", help="Echo the tokens of each line"),
    show_tree: bool = typer.Option(False, "--show-tree", help="Echo the tree of each line"),
    max_depth: int | None = typer.Option(
        None, "--max-depth", min=1, help="Maximum parenthesis nesting"
    ),
) -> None:
    """Evaluate expressions read from stdin, one per line."""
    config = _config(ctx).with_overrides(
        prompt=prompt,
        show_tokens=show_tokens or None,
        show_tree=show_tree or None,
        max_depth=max_depth,
    )
    raise typer.Exit(code=run_repl(config, sys.stdin, sys.stdout, sys.stderr))


@app.command("eval")
def eval_command(
    ctx: typer.Context,
    expression: str = typer.Argument(..., help="Expression to evaluate"),
) -> None:
    """Evaluate a single expression and print the result."""
    config = _config(ctx)
    try:
        value = calculate(expression, max_depth=config.max_depth)
    except CalcError as e:
        _fail(e)
    typer.echo(str(value))


@app.command()
def tokens(
    expression: str = typer.Argument(..., help="Expression to tokenize"),
) -> None:
    """Print the tokens of an expression, one per line."""
    try:
        scanned = tokenize(expression)
    except CalcError as e:
        _fail(e)
    for index, token in enumerate(scanned, start=1):
        typer.echo(f"{index:4d}  {token.kind.value:<8} {token}")


@app.command()
def tree(
    ctx: typer.Context,
    expression: str = typer.Argument(..., help="Expression to parse"),
) -> None:
    """Show the parsed expression tree."""
    config = _config(ctx)
    try:
        expr = parse(tokenize(expression), max_depth=config.max_depth)
    except CalcError as e:
        _fail(e)
    if expr.depth > MAX_TREE_DISPLAY_DEPTH:
        typer.echo(f"Tree is {expr.depth} levels deep, showing it flattened:")
        typer.echo(str(expr))
        return
    console.print(_build_tree(expr))


def _build_tree(expr: Expr) -> Tree:
    """Mirror an expression tree as a rich Tree."""
    root = Tree(_label(expr))
    pending: list[tuple[Expr, Tree]] = []
    if isinstance(expr, BinaryExpr):
        pending.extend([(expr.right, root), (expr.left, root)])
    while pending:
        node, parent = pending.pop()
        branch = parent.add(_label(node))
        if isinstance(node, BinaryExpr):
            pending.extend([(node.right, branch), (node.left, branch)])
    return root


def _label(expr: Expr) -> str:
    if isinstance(expr, Literal):
        return f"[cyan]{expr.value}[/cyan]"
    return f"[bold]{expr.op.value}[/bold]"


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)
