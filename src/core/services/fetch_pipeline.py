"""Pipeline de descarga de crucigramas en PDF.

Recorre un rango de fechas de forma secuencial: una petición en vuelo como
máximo y una pausa fija entre fechas. Los errores fatales (rango inválido,
sin credencial, fecha futura, fallo de transporte) detienen la ejecución; un
cuerpo que no es PDF solo salta esa fecha.

La CLI delega aquí toda la lógica; los efectos visuales (tablas, colores)
quedan fuera y se conectan mediante `PipelineHooks`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path
from typing import Awaitable, Callable

import httpx

from adapters.cookie_stores import build_cookie_stores
from adapters.http_client import build_async_client, extract_html_title
from core.config import AppSettings
from core.dates import SUNDAY, DateRange, format_date, month_abbreviation, regional_today
from core.domain.errors import (
    FuturePuzzleRequested,
    InvalidRange,
    NoCredentialFound,
    PuzzleTransportError,
)
from core.domain.models import Credential, FetchReason, FetchResult, FetchStatus, FetchTarget
from core.services.credentials import CredentialResolver

logger = logging.getLogger(__name__)

PDF_SIGNATURE = b"%PDF-"
PUZZLE_PATH = "/svc/crosswords/v2/puzzle/print/{month}{day:02d}{year:02d}.pdf"

Sleep = Callable[[float], Awaitable[object]]


@dataclass
class FetchRequest:
    """Parámetros de una ejecución. `end` es inclusivo."""

    dest: Path
    start: date | None = None
    end: date | None = None
    token: str | None = None
    skip_sunday: bool = False


@dataclass
class PipelineHooks:
    """Callbacks opcionales para capas de UI."""

    result: Callable[[FetchResult], None] | None = None


def build_target(day: date, dest: Path, base_url: str) -> FetchTarget:
    """URL remota y ruta local (`{dest}/{YYYY}/{MM}/{DD}.pdf`) para `day`."""

    path = PUZZLE_PATH.format(
        month=month_abbreviation(day.month),
        day=day.day,
        year=day.year % 100,
    )
    return FetchTarget(
        day=day,
        url=base_url.rstrip("/") + path,
        path=dest / f"{day.year:04d}" / f"{day.month:02d}" / f"{day.day:02d}.pdf",
    )


def is_pdf(payload: bytes) -> bool:
    return payload[: len(PDF_SIGNATURE)] == PDF_SIGNATURE


def payload_preview(payload: bytes, limit: int = 255) -> str:
    return payload[:limit].decode("utf-8", errors="replace")


async def fetch_puzzle(
    client: httpx.AsyncClient,
    target: FetchTarget,
    credential: Credential,
    settings: AppSettings,
) -> FetchResult:
    """Descarga una fecha y la guarda si el cuerpo es un PDF."""

    target.path.parent.mkdir(parents=True, exist_ok=True)

    try:
        response = await client.get(
            target.url,
            headers={"cookie": f"{settings.cookie_name}={credential.value}"},
        )
    except httpx.HTTPError as exc:
        raise PuzzleTransportError(target.url, exc) from exc

    payload = response.content
    if not is_pdf(payload):
        preview = payload_preview(payload, settings.preview_bytes)
        logger.warning(
            "Unexpected payload from request for %s (HTTP %s)",
            format_date(target.day),
            response.status_code,
        )
        logger.warning("%s", preview)
        if "html" in response.headers.get("content-type", ""):
            title = extract_html_title(response.text)
            if title:
                logger.warning("page title: %s", title)
        return FetchResult(
            day=target.day,
            status=FetchStatus.SKIPPED,
            reason=FetchReason.INVALID_PAYLOAD,
            preview=preview,
        )

    logger.info("saving puzzle to %s", target.path)
    target.path.write_bytes(payload)
    return FetchResult(day=target.day, status=FetchStatus.SAVED, path=target.path)


async def execute(
    request: FetchRequest,
    settings: AppSettings | None = None,
    *,
    resolver: CredentialResolver | None = None,
    client: httpx.AsyncClient | None = None,
    hooks: PipelineHooks | None = None,
    sleep: Sleep = asyncio.sleep,
    today: date | None = None,
) -> list[FetchResult]:
    """Ejecuta el pipeline completo para `request`.

    Lanza `InvalidRange`, `NoCredentialFound`, `FuturePuzzleRequested` o
    `PuzzleTransportError` ante condiciones fatales; los archivos ya escritos
    permanecen en disco.
    """

    settings = settings or AppSettings()
    hooks = hooks or PipelineHooks()
    today = today or regional_today()

    def emit(result: FetchResult) -> None:
        if hooks.result is not None:
            hooks.result(result)

    def fatal(day: date, reason: FetchReason) -> None:
        emit(FetchResult(day=day, status=FetchStatus.FATAL, reason=reason))

    start = request.start or today
    end = (request.end or today) + timedelta(days=1)

    request.dest.mkdir(parents=True, exist_ok=True)

    if end < start:
        fatal(start, FetchReason.END_BEFORE_START)
        raise InvalidRange(start, end - timedelta(days=1))

    token = request.token or settings.token
    if resolver is None:
        # Con token explícito no se consulta ningún cookie store.
        stores = [] if token else build_cookie_stores(settings)
        resolver = CredentialResolver(stores, marker=settings.cookie_name)
    try:
        credential = resolver.resolve(token)
    except NoCredentialFound:
        fatal(start, FetchReason.NO_CREDENTIAL)
        raise

    dates = DateRange(start, end)
    if request.skip_sunday:
        dates.skip_weekday(SUNDAY)

    results: list[FetchResult] = []

    async def run_dates(http: httpx.AsyncClient) -> None:
        for day in dates:
            if day > today:
                fatal(day, FetchReason.FUTURE_DATE)
                raise FuturePuzzleRequested(day, today)

            logger.info("requesting puzzle for %s", format_date(day))
            target = build_target(day, request.dest, settings.base_url)
            try:
                result = await fetch_puzzle(http, target, credential, settings)
            except PuzzleTransportError:
                fatal(day, FetchReason.TRANSPORT_ERROR)
                raise
            results.append(result)
            emit(result)
            await sleep(settings.request_delay_seconds)

    if client is not None:
        await run_dates(client)
    else:
        async with build_async_client(settings) as http:
            await run_dates(http)

    return results


def run(request: FetchRequest, settings: AppSettings | None = None, **kwargs) -> list[FetchResult]:
    """Wrapper síncrono de `execute` para la CLI."""

    return asyncio.run(execute(request, settings, **kwargs))
