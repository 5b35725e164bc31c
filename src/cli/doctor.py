"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
from pathlib import Path
from urllib.parse import urlsplit

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.proxy_selector import ProxySelector, mask_proxy
from core.config import AppSettings, write_user_env_vars
from core.resources_loader import load_program_registry, load_proxy_strings, read_proxy_lines

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, *, settings: AppSettings, proxy: str | None = None) -> tuple[bool, str]:
    try:
        async with build_async_client(settings, proxy=proxy) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc) or exc.__class__.__name__


def _origin(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}/"


@app.command()
def run(
    offline: bool = typer.Option(False, "--offline", help="Skip connectivity checks."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="Airdrop Checker Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("Max addresses", "OK", str(settings.max_addresses))

    registry = None
    try:
        registry = load_program_registry(settings)
        table.add_row("Programs", "OK", ", ".join(registry.names()) or "none")
    except Exception as exc:
        table.add_row("Programs", "FAIL", str(exc))

    selector = None
    if settings.use_proxy:
        try:
            selector = ProxySelector(load_proxy_strings(settings))
            if selector:
                table.add_row("Proxies", "OK", f"{len(selector)} configured")
            else:
                table.add_row("Proxies", "WARN", "Proxy use enabled but the list is empty -> direct connections")
        except (OSError, ValueError) as exc:
            table.add_row("Proxies", "FAIL", str(exc))
    else:
        table.add_row("Proxies", "OFF", "Direct connections")

    if not offline and registry is not None:
        for program in registry:
            origin = _origin(program.url_template)
            ok, detail = asyncio.run(_check_http(origin, settings=settings))
            table.add_row(f"Reach {program.name}", "OK" if ok else "FAIL", f"{origin} {detail}")

        if selector:
            proxy = selector.next()
            first = next(iter(registry), None)
            if first is not None:
                ok, detail = asyncio.run(_check_http(_origin(first.url_template), settings=settings, proxy=proxy))
                table.add_row("Proxy connectivity", "OK" if ok else "FAIL", f"{mask_proxy(proxy)} {detail}")

    _console.print(table)


@app.command(name="setup-proxy")
def setup_proxy() -> None:
    """Interactive proxy setup (stored in the user config .env)."""

    path_text = typer.prompt("Proxy list file (one proxy per line)").strip()
    path = Path(path_text).expanduser()
    if not path.exists():
        raise typer.BadParameter(f"File not found: {path}")

    try:
        selector = ProxySelector(read_proxy_lines(path))
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid proxy list: {exc}") from exc

    enable = typer.confirm(f"Enable proxy use with {len(selector)} proxies?", default=True)

    env_path = write_user_env_vars(
        {
            "AIRDROP_CHECKER_PROXIES_PATH": str(path.resolve()),
            "AIRDROP_CHECKER_USE_PROXY": "true" if enable else "false",
        }
    )

    _console.print(f"[green]Saved proxy config to:[/green] {env_path}")
