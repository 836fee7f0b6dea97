"""
totx CLI - Entry point.

Commands:

- run: evaluate a script file of ``;``-separated expressions
- eval: evaluate (or print) a single expression
- tokens: show the token sequence of a file
- repl: interactive read-eval-print loop
"""

import logging
import platform
import sys
from pathlib import Path
from typing import NoReturn

import typer
from rich import box
from rich.table import Table
from rich.text import Text

from totx._version import get_version
from totx.cli_ui import console, print_error, print_info, print_muted, print_value
from totx.core.config import (
    OUTPUT_FORMATS,
    TotxConfig,
    find_config,
    is_log_level,
    load_config,
)
from totx.core.errors import (
    ConfigError,
    EvaluationError,
    LexError,
    ParseError,
    ParseErrors,
    TotxError,
)
from totx.core.expression_lang import parse, run_script, run_source, scan, to_parenthesized, to_rpn
from totx.core.ir import Literal, LiteralKind

logger = logging.getLogger(__name__)

# sysexits.h codes
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70
EX_CONFIG = 78

DEFAULT_SCRIPT = Path("input.isi")


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"totx version {get_version()}")
        typer.echo(f"  Python:   {platform.python_implementation()} {platform.python_version()}")
        typer.echo(f"  Platform: {platform.system()} {platform.release()}")
        raise typer.Exit()


app = typer.Typer(
    help="""totx - a small expression language

  • run FILE      evaluate a script of ';'-separated expressions
  • eval SOURCE   evaluate one expression (or print its tree)
  • tokens FILE   show the scanner output
  • repl          interactive prompt
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    config: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help="Path to totx.toml (default: nearest one from the current directory up)",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Logging level (DEBUG, INFO, WARNING, ...); overrides totx.toml",
    ),
) -> None:
    """Load configuration and set up logging for every command."""
    try:
        cfg = load_config(config if config is not None else find_config(Path.cwd()))
    except (ConfigError, OSError) as e:
        print_error(f"Configuration error: {e}")
        raise typer.Exit(code=EX_CONFIG)

    if log_level is not None and not is_log_level(log_level):
        print_error(f"Invalid log level {log_level!r}")
        raise typer.Exit(code=2)

    level = logging.getLevelName((log_level or cfg.logging.level).upper())
    logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    logging.getLogger("totx").setLevel(level)
    if cfg.path is not None:
        logger.debug("Loaded configuration from %s", cfg.path)

    ctx.obj = cfg


def format_value(value: Literal) -> str:
    """Console rendering of a result; null is spelled out."""
    if value.kind == LiteralKind.NONE:
        return "null"
    return str(value)


def _read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print_error(f"Cannot read {path}: {e}")
        raise typer.Exit(code=EX_NOINPUT)


def _fail(error: TotxError) -> NoReturn:
    """Print ``error`` and exit with the code for its stage."""
    if isinstance(error, ParseErrors):
        for e in error.errors:
            print_error(str(e))
    else:
        print_error(str(error))
    code = EX_SOFTWARE if isinstance(error, EvaluationError) else EX_DATAERR
    raise typer.Exit(code=code)


@app.command()
def run(
    ctx: typer.Context,
    file: Path = typer.Argument(  # noqa: B008
        DEFAULT_SCRIPT,
        help="Script file of ';'-separated expressions",
    ),
) -> None:
    """
    Evaluate every expression in FILE and print each result.

    All syntax errors in the file are reported before anything is evaluated.
    """
    cfg: TotxConfig = ctx.obj
    source = _read_source(file)

    try:
        values = run_script(source, cfg.interpreter)
    except TotxError as e:
        _fail(e)

    for value in values:
        print_value(format_value(value))


@app.command("eval")
def eval_command(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="Expression source text"),
    format: str | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Output: 'value' (evaluate), 'paren' or 'rpn' (print the tree)",
    ),
) -> None:
    """Evaluate a single expression."""
    cfg: TotxConfig = ctx.obj
    output = format or cfg.output.format
    if output not in OUTPUT_FORMATS:
        print_error(f"Unknown format {output!r}; expected one of {', '.join(OUTPUT_FORMATS)}")
        raise typer.Exit(code=2)

    try:
        if output == "value":
            print_value(format_value(run_source(source, cfg.interpreter)))
            return

        expr = parse(
            scan(source),
            comma_operator=cfg.interpreter.comma_operator,
            max_depth=cfg.interpreter.max_depth,
        )
    except TotxError as e:
        _fail(e)

    print_value(to_parenthesized(expr) if output == "paren" else to_rpn(expr))


@app.command()
def tokens(
    file: Path = typer.Argument(..., help="Source file to scan"),  # noqa: B008
) -> None:
    """Show the token sequence the scanner produces for FILE."""
    source = _read_source(file)
    try:
        scanned = scan(source)
    except LexError as e:
        _fail(e)

    table = Table(title=f"Tokens: {file.name}", box=box.SIMPLE)
    table.add_column("Line", justify="right")
    table.add_column("Kind")
    table.add_column("Lexeme")
    table.add_column("Literal")
    for tok in scanned:
        table.add_row(str(tok.line), tok.kind.name, Text(tok.lexeme), Text(repr(tok.literal)))
    console.print(table)
    print_muted(f"{len(scanned)} tokens")


@app.command()
def repl(ctx: typer.Context) -> None:
    """
    Interactive prompt: one expression per line.

    Errors are reported and the prompt continues. Exit with Ctrl-D or 'exit'.
    """
    cfg: TotxConfig = ctx.obj
    print_info(f"totx {get_version()} - Ctrl-D or 'exit' to quit")

    while True:
        try:
            line = input("> ")
        except EOFError:
            typer.echo("")
            break
        line = line.strip()
        if line in ("exit", "quit"):
            break
        if not line:
            continue
        try:
            print_value(format_value(run_source(line, cfg.interpreter)))
        except (LexError, ParseError, EvaluationError) as e:
            print_error(str(e))


def main(argv: list[str] | None = None) -> None:
    app(args=argv)


if __name__ == "__main__":
    main(sys.argv[1:])
