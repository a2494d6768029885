from __future__ import annotations

import sys
import pathlib
from typing import NoReturn, Optional
from enum import Enum

import typer
import structlog
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from .checksums import ALGORITHMS
from .config import load_config, StructIdConfig
from .engine import format_id, generate_id, normalize_id_for_charset, validate_id
from .errors import StructIdError
from .rng import seeded_rng

err_console = Console(stderr=True)
log = structlog.get_logger()
app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="structid — generate and validate short structured identifiers",
)


class CharsetChoice(str, Enum):
    numeric = "numeric"
    alphanumeric = "alphanumeric"


class AlgorithmChoice(str, Enum):
    none = "none"
    luhn = "luhn"
    mod36 = "mod36"


def _value(choice: Optional[Enum]) -> Optional[str]:
    return choice.value if choice is not None else None


def _config(ctx: typer.Context) -> StructIdConfig:
    return ctx.obj["config"]


def _fail(err: Exception) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {escape(str(err))}")
    raise typer.Exit(code=2)


def version_callback(value: bool):
    if value:
        from . import __version__
        typer.echo(f"structid {__version__}")
        raise typer.Exit()


@app.callback()
def common(
    ctx: typer.Context,
    config: Optional[pathlib.Path] = typer.Option(None, "--config", help="Path to .structid.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logs"),
    version: Optional[bool] = typer.Option(None, "--version", callback=version_callback, is_eager=True),
):
    """Global options (config, verbosity)."""
    structlog.configure(
        processors=[structlog.processors.JSONRenderer()],
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
    try:
        cfg = load_config(config) if config else StructIdConfig()
    except (OSError, ValidationError) as e:
        _fail(e)
    ctx.obj = {"config": cfg, "verbose": verbose}
    if verbose:
        log.info("verbose_enabled", config=str(config) if config else None)


@app.command()
def generate(
    ctx: typer.Context,
    count: int = typer.Option(1, "--count", "-n", min=1, help="How many identifiers to print"),
    length: Optional[int] = typer.Option(None, "--length", help="Total length (instead of groups x group size)"),
    groups: Optional[int] = typer.Option(None, "--groups", help="Number of groups (default 4)"),
    group_size: Optional[int] = typer.Option(None, "--group-size", help="Characters per group (default 4)"),
    separator: Optional[str] = typer.Option(None, "--separator", help="Group separator, e.g. '-'"),
    charset: Optional[CharsetChoice] = typer.Option(None, "--charset", case_sensitive=False),
    algorithm: Optional[AlgorithmChoice] = typer.Option(None, "--algorithm", case_sensitive=False),
    pattern: Optional[str] = typer.Option(None, "--pattern", help="Template using '#' for generated characters"),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="Named profile from the config file"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed a reproducible (non-secure) random source"),
    crypto: bool = typer.Option(False, "--crypto", help="Use the OS cryptographic random source"),
):
    """Generate random identifiers."""
    try:
        opts = _config(ctx).generate_options(
            profile,
            total_length=length,
            groups=groups,
            group_size=group_size,
            separator=separator,
            charset=_value(charset),
            algorithm=_value(algorithm),
            pattern=pattern,
            use_crypto=crypto or None,
            rng=seeded_rng(seed) if seed is not None else None,
        )
        ids = [generate_id(opts) for _ in range(count)]
    except (StructIdError, ValidationError) as e:
        _fail(e)

    for ident in ids:
        typer.echo(ident)
    if ctx.obj["verbose"]:
        log.info(
            "generated",
            count=count,
            mode="pattern" if opts.pattern_text else "fixed",
            charset=opts.charset,
            algorithm=opts.algorithm,
        )


@app.command()
def validate(
    ctx: typer.Context,
    identifier: str = typer.Argument(..., metavar="ID", help="Identifier to check"),
    length: Optional[int] = typer.Option(None, "--length"),
    groups: Optional[int] = typer.Option(None, "--groups"),
    group_size: Optional[int] = typer.Option(None, "--group-size"),
    charset: Optional[CharsetChoice] = typer.Option(None, "--charset", case_sensitive=False),
    algorithm: Optional[AlgorithmChoice] = typer.Option(None, "--algorithm", case_sensitive=False),
    pattern: Optional[str] = typer.Option(None, "--pattern"),
    profile: Optional[str] = typer.Option(None, "--profile", "-p"),
):
    """Check an identifier; exits with code 1 when it is invalid."""
    try:
        opts = _config(ctx).validate_options(
            profile,
            total_length=length,
            groups=groups,
            group_size=group_size,
            charset=_value(charset),
            algorithm=_value(algorithm),
            pattern=pattern,
        )
    except (StructIdError, ValidationError) as e:
        _fail(e)

    ok = validate_id(identifier, opts)
    typer.echo("valid" if ok else "invalid")
    if not ok:
        raise typer.Exit(code=1)


@app.command("format")
def format_cmd(
    ctx: typer.Context,
    identifier: str = typer.Argument(..., metavar="ID"),
    groups: Optional[int] = typer.Option(None, "--groups"),
    group_size: Optional[int] = typer.Option(None, "--group-size"),
    separator: Optional[str] = typer.Option(None, "--separator", help="Defaults to a space"),
    charset: Optional[CharsetChoice] = typer.Option(None, "--charset", case_sensitive=False),
    profile: Optional[str] = typer.Option(None, "--profile", "-p"),
):
    """Re-group an identifier for display."""
    try:
        opts = _config(ctx).format_options(
            profile,
            groups=groups,
            group_size=group_size,
            separator=separator,
            charset=_value(charset),
        )
        typer.echo(format_id(identifier, opts))
    except (StructIdError, ValidationError) as e:
        _fail(e)


@app.command("normalize")
def normalize_cmd(
    identifier: str = typer.Argument(..., metavar="ID"),
    charset: CharsetChoice = typer.Option(CharsetChoice.numeric, "--charset", case_sensitive=False),
):
    """Strip separators and other non-members of the charset."""
    typer.echo(normalize_id_for_charset(identifier, charset.value))


@app.command()
def checksum(
    body: str = typer.Argument(..., help="Body without its check character"),
    algorithm: AlgorithmChoice = typer.Option(AlgorithmChoice.luhn, "--algorithm", case_sensitive=False),
    append: bool = typer.Option(False, "--append", help="Print body followed by the check character"),
):
    """Compute the check character for BODY."""
    if algorithm == AlgorithmChoice.none:
        raise typer.BadParameter("algorithm must be 'luhn' or 'mod36'")
    try:
        check = ALGORITHMS[algorithm.value].check_char(body)
    except StructIdError as e:
        _fail(e)
    typer.echo(body + check if append else check)
