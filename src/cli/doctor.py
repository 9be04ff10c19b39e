"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import typer
from rich.console import Console
from rich.table import Table

from adapters.cookie_stores import build_cookie_stores
from adapters.http_client import build_async_client
from core.config import AppSettings, write_user_env_vars
from core.dates import current_regional_offset, format_date, regional_today
from core.services.credentials import find_valid_cookie

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


def _check_cookie_stores(settings: AppSettings) -> list[tuple[str, str, str]]:
    """Una fila por navegador: (store, status, details)."""

    rows: list[tuple[str, str, str]] = []
    now = datetime.now(timezone.utc)
    for store in build_cookie_stores(settings):
        try:
            records = store.list_cookies()
        except Exception as exc:
            rows.append((store.name, "UNAVAILABLE", str(exc)))
            continue
        credential = find_valid_cookie(records, marker=settings.cookie_name, now=now, source=store.name)
        if credential is None:
            rows.append((store.name, "NO COOKIE", f"{len(records)} cookies, no valid {settings.cookie_name}"))
            continue
        remaining = credential.remaining(now)
        detail = f"expires in {remaining}" if remaining is not None else "session cookie"
        rows.append((store.name, "OK", detail))
    return rows


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="xword-pdf Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Service", "OK", settings.base_url)
    table.add_row("Request delay", "OK", f"{settings.request_delay_seconds:g}s")
    offset_hours = int(current_regional_offset().total_seconds() // 3600)
    table.add_row("Today (New York)", "OK", f"{format_date(regional_today())} (UTC{offset_hours:+d})")
    if settings.token:
        table.add_row("Configured token", "OK", "XWORD_PDF_TOKEN is set")
    else:
        table.add_row("Configured token", "OPTIONAL", "Not set -> browser cookie lookup")

    # Cookie stores
    found = False
    for name, status, detail in _check_cookie_stores(settings):
        found = found or status == "OK"
        table.add_row(f"Cookies: {name}", status, detail)

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(settings.base_url, settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not found and not settings.token:
        _console.print(
            f"\n[yellow]Note:[/yellow] no {settings.cookie_name} cookie found. Log in to nytimes.com in a "
            "supported browser, pass --token, or run `xword-pdf doctor setup-token`."
        )


@app.command(name="setup-token")
def setup_token() -> None:
    """Store an NYT-S token in the user config .env."""

    token = typer.prompt("NYT-S token", hide_input=True, confirmation_prompt=False).strip()
    if not token:
        raise typer.BadParameter("token is required")

    env_path = write_user_env_vars({"XWORD_PDF_TOKEN": token})

    _console.print(f"[green]Saved token to:[/green] {env_path}")
