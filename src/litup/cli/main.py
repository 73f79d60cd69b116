"""Main CLI entry point."""

import importlib
import json
import logging
import os
import sys
from typing import Any

import rich_click as click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from litup import __version__
from litup.compiler.codegen.generator import CompiledTemplate, TemplateCompiler
from litup.compiler.exceptions import TemplateCompileError
from litup.compiler.parser import is_element_vector
from litup.runtime.cache import TemplateCache

console = Console()

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.STYLE_HELPTEXT_FIRST = True
click.rich_click.STYLE_COMMANDS_TABLE_SHOW_LINES = False
click.rich_click.STYLE_COMMANDS_TABLE_PAD_EDGE = False
click.rich_click.STYLE_COMMANDS_TABLE_BOX = None
click.rich_click.STYLE_OPTIONS_TABLE_BOX = None
click.rich_click.STYLE_COMMANDS_TABLE_HEADER = "bold magenta"
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = "Try running 'litup --help' for more information."

# Cyan theme
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_OPTION = "cyan"
click.rich_click.STYLE_SWITCH = "cyan"
click.rich_click.STYLE_METAVAR = "dim white"
click.rich_click.STYLE_USAGE_COMMAND = "cyan"
click.rich_click.STYLE_USAGE = "dim"


def import_target(target: str) -> Any:
    """Import a template object from string (e.g. 'views:card')."""
    if ":" not in target:
        raise click.BadParameter(
            "Target must be in format 'module:attribute'", param_hint="TARGET"
        )

    module_name, attr_name = target.split(":", 1)

    # Local modules resolve from the current directory
    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(
            f"Could not import module '{module_name}': {e}", param_hint="TARGET"
        )

    try:
        obj = getattr(module, attr_name)
    except AttributeError:
        raise click.BadParameter(
            f"Attribute '{attr_name}' not found in module '{module_name}'",
            param_hint="TARGET",
        )

    return obj


def compile_target(obj: Any, token: str) -> CompiledTemplate:
    """Compile an element vector or a sequence of them, unless already compiled."""
    if isinstance(obj, CompiledTemplate):
        return obj

    # Private cache so inspection never pollutes the process-wide one
    compiler = TemplateCompiler(cache=TemplateCache())
    if is_element_vector(obj):
        return compiler.compile(obj, token=token)
    if isinstance(obj, (list, tuple)):
        return compiler.compile(*obj, token=token)
    raise click.BadParameter(
        f"{type(obj).__name__} is neither a template nor an element", param_hint="TARGET"
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=True)],
    )


@click.group(
    help=f"""
[bold white on cyan] litup [/] [bold cyan]v{__version__}[/] Compile hiccup-style trees into incremental-rendering templates.

Run [bold cyan]litup compile MODULE:ATTR[/] to inspect the fragments and slots of a template.
"""
)
@click.version_option(__version__)
def cli() -> None:
    pass


@cli.command(name="compile")
@click.argument("target")
@click.option("--json", "as_json", is_flag=True, help="Print the compiled template as JSON")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def compile_command(target: str, as_json: bool, verbose: bool) -> None:
    """Compile a template and show its strings and slots."""
    _configure_logging(verbose)

    obj = import_target(target)
    try:
        compiled = compile_target(obj, token=f"cli:{target}")
    except TemplateCompileError as e:
        console.print(f"[bold red]{type(e).__name__}[/]:", Text(str(e)))
        sys.exit(1)

    sources = compiled.slot_sources()
    if as_json:
        console.print_json(
            json.dumps(
                {
                    "token": compiled.token,
                    "strings": list(compiled.strings),
                    "slots": sources,
                    "nested": {k: list(v) for k, v in compiled.nested.items()},
                }
            )
        )
        return

    table = Table(title=f"[cyan]{escape(compiled.token)}[/]", box=None, header_style="bold magenta")
    table.add_column("#", justify="right", style="dim")
    table.add_column("kind")
    table.add_column("content", overflow="fold")

    table.add_row("0", "string", Text(repr(compiled.strings[0])))
    for i, (source, string) in enumerate(zip(sources, compiled.strings[1:]), start=1):
        table.add_row("", "[yellow]slot[/]", Text(source))
        table.add_row(str(i), "string", Text(repr(string)))
    console.print(table)

    for nested_token, strings in compiled.nested.items():
        console.print(Text(f"{nested_token} {list(strings)!r}", style="dim"))

    console.print(
        f"✅ {len(compiled.strings)} strings, {len(sources)} slots, "
        f"{len(compiled.nested)} nested templates"
    )


if __name__ == "__main__":
    cli()
