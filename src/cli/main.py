"""CLI principal (Typer).

`xword-pdf fetch [START] [END]` descarga los PDFs del rango (ambos extremos
inclusivos). Los errores fatales del dominio se muestran en rojo y terminan
con exit code 1.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from cli import doctor
from cli.ui_components import build_results_table, print_banner
from core.config import AppSettings
from core.dates import parse_date
from core.domain.errors import XwordError
from core.domain.models import FetchResult
from core.logging_config import setup_logging
from core.services.fetch_pipeline import FetchRequest, PipelineHooks, run as run_pipeline

app = typer.Typer(no_args_is_help=True, help="Bulk downloader for NYT crossword puzzle PDFs.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _date_argument(value: Optional[str], name: str) -> Optional[date]:
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint=name) from exc


@app.command()
def fetch(
    start: Optional[str] = typer.Argument(
        None,
        help="First date to download, YYYY-MM-DD (default: today in New York). Must be >= 2011-04-01.",
        show_default=False,
    ),
    end: Optional[str] = typer.Argument(
        None,
        help="Last date to download, YYYY-MM-DD, inclusive (default: today). Must be >= START.",
        show_default=False,
    ),
    token: Optional[str] = typer.Option(
        None,
        "--token",
        "-t",
        help="NYT-S token for your subscription. If omitted it is looked up in browser cookie stores.",
    ),
    dest: Optional[Path] = typer.Option(
        None,
        "--dest",
        "-d",
        help="Destination directory (default: current directory).",
    ),
    skip_sunday: bool = typer.Option(
        False,
        "--skip-sunday",
        "-s",
        help="Skip Sunday puzzles.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Hide banner and summary table."),
) -> None:
    """Download puzzle PDFs into DEST/YYYY/MM/DD.pdf."""

    setup_logging(verbose)
    request = FetchRequest(
        dest=dest or Path.cwd(),
        start=_date_argument(start, "START"),
        end=_date_argument(end, "END"),
        token=token,
        skip_sunday=skip_sunday,
    )

    if not quiet:
        print_banner(_console)

    seen: list[FetchResult] = []
    try:
        run_pipeline(request, AppSettings(), hooks=PipelineHooks(result=seen.append))
    except (XwordError, OSError) as exc:
        if seen and not quiet:
            _console.print(build_results_table(seen))
        _console.print(str(exc), style="red", markup=False)
        raise typer.Exit(code=1) from exc

    if not quiet:
        _console.print(build_results_table(seen))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
