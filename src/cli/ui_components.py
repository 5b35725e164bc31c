"""CLI UI components (Rich).

Kept apart from the commands so that tables and panels can be reused by
`check`, `programs` and `doctor`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.chain import get_display_name
from core.domain.models import EligibilityReport
from core.domain.programs import ProgramRegistry


def print_banner(console: Console) -> None:
    """Print the welcome banner (skipped in JSON / non-interactive modes)."""

    title = Text("AIRDROP CHECKER", style="bold cyan")
    subtitle = Text("Eligibility lookups • Fuel • Solana • EVM", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_programs_table(programs: ProgramRegistry) -> Table:
    table = Table(title="Programs")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Chain", style="white")
    table.add_column("Parser", style="magenta")
    table.add_column("Endpoint", style="dim")
    for program in programs:
        table.add_row(
            program.name,
            get_display_name(program.chain_family),
            program.parser.value,
            program.url_template,
        )
    return table


def build_report_table(report: EligibilityReport) -> Table:
    """One row per address, grouped by bucket in report order."""

    table = Table(title=f"Results for {report.program}")
    table.add_column("Address", style="white", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Amount", style="green", justify="right")
    table.add_column("Error", style="red")

    for entry in report.eligible:
        table.add_row(entry.address, "[green]eligible[/green]", entry.amount, "")
    for entry in report.not_eligible:
        table.add_row(entry.address, "[yellow]not eligible[/yellow]", entry.amount, "")
    for failure in report.errored:
        table.add_row(failure.address, "[red]error[/red]", "", failure.error)
    for address in report.invalid:
        table.add_row(address, "[magenta]invalid[/magenta]", "", "address format")
    return table


def build_summary_panel(report: EligibilityReport) -> Panel:
    body = Text()
    body.append(f"Eligible: {len(report.eligible)}\n", style="green")
    body.append(f"Not eligible: {len(report.not_eligible)}\n", style="yellow")
    body.append(f"Errors: {len(report.errored)}\n", style="red")
    body.append(f"Invalid: {len(report.invalid)}", style="magenta")
    return Panel(body, title=Text(report.program, style="bold"), border_style="cyan")
