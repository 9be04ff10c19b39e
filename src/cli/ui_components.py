"""Componentes de UI para CLI (Rich)."""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.dates import format_date
from core.domain.models import FetchResult, FetchStatus

_STATUS_STYLES = {
    FetchStatus.SAVED: "green",
    FetchStatus.SKIPPED: "yellow",
    FetchStatus.FATAL: "red",
}


def print_banner(console: Console) -> None:
    title = Text("xword-pdf", style="bold cyan")
    subtitle = Text("NYT crossword PDFs • one request per second", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_results_table(results: Iterable[FetchResult]) -> Table:
    """Tabla con el resultado de cada fecha procesada."""

    table = Table(title="Puzzles")
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Path / Reason", style="magenta")

    for result in results:
        style = _STATUS_STYLES.get(result.status, "white")
        if result.path is not None:
            detail = str(result.path)
        elif result.reason is not None:
            detail = result.reason.value
        else:
            detail = ""
        table.add_row(
            format_date(result.day),
            Text(result.status.value, style=style),
            detail,
        )
    return table
