"""Typer application: `airdrop-checker ...`.

The CLI is a thin shell over `core.services.engine`: it reads addresses,
renders the report and maps request-level errors to exit codes.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn
from rich.table import Table

from adapters.json_exporter import export_report_json
from cli import doctor
from cli.ui_components import (
    build_programs_table,
    build_report_table,
    build_summary_panel,
    print_banner,
)
from core.config import AppSettings
from core.domain.addresses import normalize_address, validate_address
from core.domain.chain import ChainFamily
from core.domain.errors import BatchTooLarge, EmptyBatch, UnknownProgram
from core.domain.models import EligibilityReport
from core.logging_config import configure_logging
from core.resources_loader import load_program_registry
from core.services.batch_resolver import ResolveHooks, split_address_lines
from core.services.engine import EligibilityEngine, build_engine

app = typer.Typer(no_args_is_help=True, help="Check airdrop eligibility for lists of addresses.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)


def _load_engine() -> EligibilityEngine:
    try:
        return build_engine(AppSettings())
    except (FileNotFoundError, ValidationError, ValueError) as exc:
        _console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=2) from exc


def _read_addresses(source: Path | None, inline: list[str]) -> list[str]:
    addresses = list(inline)
    if source is not None:
        if str(source) == "-":
            addresses.extend(split_address_lines(sys.stdin.read()))
        else:
            if not source.exists():
                raise typer.BadParameter(f"File not found: {source}", param_hint="SOURCE")
            addresses.extend(split_address_lines(source.read_text(encoding="utf-8")))
    elif not inline:
        addresses.extend(split_address_lines(sys.stdin.read()))
    return addresses


async def _check_with_progress(engine: EligibilityEngine, program: str, addresses: list[str]) -> EligibilityReport:
    with Progress(
        TextColumn("[cyan]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=_console,
        transient=True,
    ) as progress:
        task = progress.add_task(f"Checking {program}", total=None)
        hooks = ResolveHooks(
            submitted=lambda n: progress.update(task, total=n),
            settled=lambda _address: progress.advance(task),
        )
        return await engine.check(program, addresses, hooks=hooks)


@app.command()
def programs() -> None:
    """List the configured eligibility programs."""

    try:
        registry = load_program_registry(AppSettings())
    except (FileNotFoundError, ValidationError, ValueError) as exc:
        _console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=2) from exc
    _console.print(build_programs_table(registry))


@app.command()
def check(
    program: str = typer.Argument(..., help="Program name (see `programs`)."),
    source: Path | None = typer.Argument(None, help="File with one address per line ('-' for stdin)."),
    address: list[str] = typer.Option([], "--address", "-a", help="Address to check (repeatable)."),
    json_path: Path | None = typer.Option(None, "--json", help="Also export the report as JSON."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Do not print the banner."),
) -> None:
    """Check every address against PROGRAM and print the categorized report."""

    engine = _load_engine()
    addresses = _read_addresses(source, address)

    if not no_banner:
        print_banner(_console)

    try:
        report = asyncio.run(_check_with_progress(engine, program, addresses))
    except UnknownProgram as exc:
        raise typer.BadParameter(str(exc), param_hint="PROGRAM") from exc
    except (EmptyBatch, BatchTooLarge) as exc:
        _console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    _console.print(build_report_table(report))
    _console.print(build_summary_panel(report))

    if json_path is not None:
        out = export_report_json(report=report, output_path=json_path)
        _console.print(f"[green]Report saved to:[/green] {out}")


@app.command()
def validate(
    family: str = typer.Argument(..., help="Chain family: EVM, SOL or FUEL."),
    addresses: list[str] = typer.Argument(..., help="Addresses to validate."),
) -> None:
    """Validate address formats without any network lookup."""

    try:
        chain = ChainFamily.parse(family)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="FAMILY") from exc

    table = Table(title=chain.display_name)
    table.add_column("Address", style="white", no_wrap=True)
    table.add_column("Valid")

    all_valid = True
    for raw in addresses:
        normalized = normalize_address(raw, chain)
        ok = validate_address(normalized, chain)
        all_valid = all_valid and ok
        table.add_row(normalized, "[green]yes[/green]" if ok else "[red]no[/red]")
    _console.print(table)

    if not all_valid:
        raise typer.Exit(code=1)


def run() -> None:
    app()
