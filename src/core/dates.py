"""Utilidades de calendario y zona horaria.

- Parseo/formato estricto `YYYY-MM-DD` con la fecha mínima que soporta el
  servicio (2011-04-01).
- Offset UTC de US/Eastern calculado con aritmética de calendario pura
  (segundo domingo de marzo / primer domingo de noviembre), sin base de
  datos de zonas horarias.
- `DateRange`: iterador perezoso sobre un intervalo semiabierto de fechas.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone

from core.domain.errors import DateTooEarly, InvalidDateFormat

MIN_DATE = date(2011, 4, 1)
DATE_FORMAT = "%Y-%m-%d"

MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)

STANDARD_OFFSET = timedelta(hours=-5)
DST_OFFSET = timedelta(hours=-4)
# Hora local (reloj de pared) a la que ocurren ambas transiciones.
TRANSITION_HOUR = 2

_DATE_RE = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})$")

_MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def parse_date(text: str) -> date:
    """Parsea `YYYY-MM-DD` y exige una fecha >= `MIN_DATE`."""

    match = _DATE_RE.match(text.strip())
    if match is None:
        raise InvalidDateFormat(text)
    year, month, day = (int(part) for part in match.groups())
    try:
        value = date(year, month, day)
    except ValueError as exc:
        raise InvalidDateFormat(text) from exc
    if value < MIN_DATE:
        raise DateTooEarly(value, MIN_DATE)
    return value


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def month_abbreviation(month: int) -> str:
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    return _MONTH_ABBREVIATIONS[month - 1]


def nth_weekday_of_month(year: int, month: int, weekday: int, n: int) -> date:
    """Fecha del n-ésimo `weekday` (0=lunes) del mes. `n` empieza en 1."""

    if n < 1:
        raise ValueError("n must be >= 1")
    first = date(year, month, 1)
    delta = (weekday - first.weekday()) % 7
    value = first + timedelta(days=delta + 7 * (n - 1))
    if value.month != month:
        raise ValueError(f"month {year}-{month:02d} has no occurrence #{n} of weekday {weekday}")
    return value


def dst_window_utc(year: int) -> tuple[datetime, datetime]:
    """Instantes UTC [inicio, fin) del horario de verano en US/Eastern.

    Inicio: 02:00 EST del segundo domingo de marzo.
    Fin: 02:00 EDT del primer domingo de noviembre.
    """

    start_day = nth_weekday_of_month(year, 3, SUNDAY, 2)
    end_day = nth_weekday_of_month(year, 11, SUNDAY, 1)
    start_local = datetime(start_day.year, start_day.month, start_day.day, TRANSITION_HOUR)
    end_local = datetime(end_day.year, end_day.month, end_day.day, TRANSITION_HOUR)
    start = (start_local - STANDARD_OFFSET).replace(tzinfo=timezone.utc)
    end = (end_local - DST_OFFSET).replace(tzinfo=timezone.utc)
    return start, end


def _to_utc(now_utc: datetime | None) -> datetime:
    if now_utc is None:
        return datetime.now(timezone.utc)
    if now_utc.tzinfo is None:
        return now_utc.replace(tzinfo=timezone.utc)
    return now_utc.astimezone(timezone.utc)


def current_regional_offset(now_utc: datetime | None = None) -> timedelta:
    """Offset UTC observado en US/Eastern en el instante dado (-4h o -5h)."""

    now = _to_utc(now_utc)
    start, end = dst_window_utc(now.year)
    if start <= now < end:
        return DST_OFFSET
    return STANDARD_OFFSET


def regional_today(now_utc: datetime | None = None) -> date:
    """Fecha de "hoy" en US/Eastern.

    Se usa tanto para los defaults del rango como para rechazar fechas futuras.
    """

    now = _to_utc(now_utc)
    return (now + current_regional_offset(now)).date()


class DateRange:
    """Iterador sobre el intervalo semiabierto [start, end).

    Un solo recorrido: para volver a escanear un rango hay que construir otro
    `DateRange`. Si `start >= end` la secuencia es vacía.
    """

    def __init__(self, start: date, end: date) -> None:
        self._next: date | None = start
        self.end = end
        self.skipped_weekday: int | None = None

    def skip_weekday(self, weekday: int = SUNDAY) -> "DateRange":
        if self._next is not None and self._next.weekday() == weekday:
            self._next = _successor(self._next)
        self.skipped_weekday = weekday
        return self

    def __iter__(self) -> "DateRange":
        return self

    def __next__(self) -> date:
        current = self._next
        if current is None or current >= self.end:
            raise StopIteration

        following = _successor(current)
        if (
            following is not None
            and self.skipped_weekday is not None
            and following.weekday() == self.skipped_weekday
        ):
            following = _successor(following)
        self._next = following
        return current


def _successor(value: date) -> date | None:
    try:
        return value + timedelta(days=1)
    except OverflowError:
        return None
