"""
CLI entry point for cbac.

This module provides the Typer-based command-line interface for cbac. It
loads an engine configuration (registered accesses plus a static grant
table) from YAML and resolves decisions against it.

Commands:
    accesses    List the accesses a configuration registers
    resolve     Resolve the decision matrix for one subject
    check       Resolve a single access (exit code 0 = allowed, 1 = denied)

Architecture Note:
    The CLI is intentionally thin - it parses arguments and delegates to
    the engine. Everything it does is available programmatically.

Exit codes:
    0   Success (or access allowed for `check`)
    1   Access denied (`check` only)
    2   Configuration or resolution error
"""

import json
import logging
import traceback
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from cbac import __version__
from cbac.config import EngineConfig, build_engine, load_config
from cbac.errors import CBACError
from cbac.report import generate_console_report, generate_json_report

# Initialize Typer app with metadata
app = typer.Typer(
    name="cbac",
    help="Resolve content-based access decisions.",
    add_completion=False,
    no_args_is_help=True,
)

# Rich consoles for formatted output (logs go to stderr)
console = Console()
err_console = Console(stderr=True)

EXIT_DENIED = 1
EXIT_ERROR = 2

ConfigArgument = Annotated[
    Path,
    typer.Argument(
        help="Path to the engine configuration YAML file.",
        exists=True,
        readable=True,
        resolve_path=True,
    ),
]
JsonOption = Annotated[
    bool,
    typer.Option(
        "--json",
        help="Output results in JSON format.",
    ),
]
DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Enable debug mode with full error tracebacks.",
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold]cbac[/bold] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    cbac - content-based access control.

    Resolve which accesses a subject has on a set of content items.
    """
    pass


@app.command()
def accesses(
    config_path: ConfigArgument,
    json_output: JsonOption = False,
    debug: DebugOption = False,
) -> None:
    """
    List the accesses a configuration registers.

    Example:
        $ cbac accesses documents.yaml
    """
    _setup_logging()
    config = _load(config_path, json_output, debug)
    engine = build_engine(config)

    if json_output:
        print(json.dumps({"name": config.name, "accesses": list(engine.registry)}, indent=2))
        return

    table = Table(show_header=True, header_style="bold", title=config.name)
    table.add_column("#", style="dim", width=3)
    table.add_column("Access", style="cyan")
    for index, access in enumerate(engine.registry, start=1):
        table.add_row(str(index), escape(access))
    console.print(table)


@app.command()
def resolve(
    config_path: ConfigArgument,
    subject: Annotated[
        str,
        typer.Option(
            "--subject",
            "-s",
            help="Subject to resolve decisions for.",
        ),
    ],
    contents: Annotated[
        list[str],
        typer.Option(
            "--content",
            "-c",
            help="Content identifier (repeatable).",
        ),
    ],
    requested: Annotated[
        Optional[list[str]],
        typer.Option(
            "--access",
            "-a",
            help="Access to resolve (repeatable). Defaults to every registered access.",
        ),
    ] = None,
    json_output: JsonOption = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            help="Enable verbose output for debugging.",
        ),
    ] = False,
    debug: DebugOption = False,
) -> None:
    """
    Resolve the decision matrix for one subject.

    Example:
        $ cbac resolve documents.yaml -s alice -c doc-1 -c doc-2 -a view
    """
    _setup_logging(verbose)
    config = _load(config_path, json_output, debug)
    engine = build_engine(config)

    try:
        matrix = engine.resolve(contents, subject, requested or [])
    except CBACError as e:
        _fail(e, json_output, debug)

    if json_output:
        print(generate_json_report(matrix, subject=subject))
    else:
        generate_console_report(matrix, subject=subject, console=console, title=config.name)


@app.command()
def check(
    config_path: ConfigArgument,
    subject: Annotated[
        str,
        typer.Option(
            "--subject",
            "-s",
            help="Subject to check.",
        ),
    ],
    content: Annotated[
        str,
        typer.Option(
            "--content",
            "-c",
            help="Content identifier.",
        ),
    ],
    access: Annotated[
        str,
        typer.Option(
            "--access",
            "-a",
            help="Access to check.",
        ),
    ],
    json_output: JsonOption = False,
    debug: DebugOption = False,
) -> None:
    """
    Check a single access. Exits 0 when allowed and 1 when denied.

    Example:
        $ cbac check documents.yaml -s alice -c doc-1 -a edit
    """
    _setup_logging()
    config = _load(config_path, json_output, debug)
    engine = build_engine(config)

    try:
        allowed = engine.resolve_access(content, subject, access)
    except CBACError as e:
        _fail(e, json_output, debug)

    if json_output:
        print(json.dumps({
            "subject": subject,
            "content": content,
            "access": access,
            "allowed": allowed,
        }, indent=2))
    elif allowed:
        console.print(f"[green]✓[/green] {escape(subject)} may [bold]{escape(access)}[/bold] {escape(content)}")
    else:
        console.print(f"[red]✗[/red] {escape(subject)} may not [bold]{escape(access)}[/bold] {escape(content)}")

    raise typer.Exit(code=0 if allowed else EXIT_DENIED)


# =============================================================================
# Helpers
# =============================================================================


def _setup_logging(verbose: bool = False) -> None:
    """Route cbac logging through Rich. The root logger is left alone."""
    logger = logging.getLogger("cbac")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    logger.addHandler(RichHandler(console=err_console, show_path=False))
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def _load(config_path: Path, json_output: bool, debug: bool) -> EngineConfig:
    """Load the configuration or exit with an error."""
    try:
        return load_config(config_path)
    except Exception as e:
        if json_output:
            _output_json_error("config_load_error", str(e), debug)
        else:
            console.print(f"[red]Error loading config: {escape(str(e))}[/red]")
            if debug:
                console.print(f"[dim]{escape(traceback.format_exc())}[/dim]")
        raise typer.Exit(code=EXIT_ERROR)


def _fail(error: CBACError, json_output: bool, debug: bool) -> None:
    """Report a resolution error and exit."""
    if json_output:
        output = {"error": True, **error.to_dict()}
        if debug:
            output["traceback"] = traceback.format_exc()
        print(json.dumps(output, indent=2))
    else:
        console.print(f"[red]{escape(str(error))}[/red]")
        if debug:
            console.print(f"[dim]{escape(traceback.format_exc())}[/dim]")
    raise typer.Exit(code=EXIT_ERROR)


def _output_json_error(error_type: str, message: str, include_traceback: bool = False) -> None:
    """Output an error in JSON format."""
    output = {
        "error": True,
        "error_type": error_type,
        "message": message,
    }
    if include_traceback:
        output["traceback"] = traceback.format_exc()
    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    app()
