# field_reports/services.py
from __future__ import annotations

import datetime as dt
import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import pytz
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from .models import FieldImage, FieldNote, GeneratedReport

logger = logging.getLogger(__name__)

_EPOCH = dt.datetime.min.replace(tzinfo=dt.timezone.utc)


def _get(record: Any, name: str) -> Any:
    """Read a field from a model instance or a plain mapping."""
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _to_aware_utc(x: Any) -> Optional[dt.datetime]:
    """
    Parse an ISO string or datetime into a tz-aware datetime in UTC.
    Anything that cannot be read as a datetime yields None instead of raising.
    """
    if isinstance(x, str):
        try:
            d = parse_datetime(x.strip())
        except ValueError:
            # well-formed but out of range, e.g. month 13
            return None
        if d is None:
            return None
    elif isinstance(x, dt.datetime):
        d = x
    else:
        return None
    try:
        if timezone.is_naive(d):
            d = timezone.make_aware(d, dt.timezone.utc)
        return d.astimezone(dt.timezone.utc)
    except (OverflowError, ValueError):
        # offset pushes the instant outside datetime.min..datetime.max
        return None


def effective_timestamp(
    record: Any, *, primary: str = "sent_at", fallback: str = "created_at"
) -> Optional[dt.datetime]:
    """Primary timestamp if present and parseable, else fallback, else None."""
    ts = _to_aware_utc(_get(record, primary))
    if ts is None:
        ts = _to_aware_utc(_get(record, fallback))
    return ts


def reconcile(
    timestamped: Iterable[Any],
    untimestamped: Iterable[Any],
    *,
    primary: str = "sent_at",
    fallback: str = "created_at",
    key: str = "id",
) -> List[Any]:
    """
    Merge the rows of one collection that were fetched by two queries
    (rows carrying the primary timestamp, rows without it) into a single
    de-duplicated list ordered by effective timestamp, ascending.

    Rules:
      1) Rows are keyed by `key`; timestamped rows are inserted first and
         untimestamped rows second, so on a collision the untimestamped copy wins.
      2) Ties on effective timestamp are broken by str(id).
      3) Rows with no usable timestamp (missing or unparseable) go after every
         row that has one, ordered among themselves by str(id).
    The inputs are assumed to be already scoped to one owner and one window.
    """
    unique: Dict[Any, Any] = {}
    for rec in timestamped:
        unique[_get(rec, key)] = rec
    for rec in untimestamped:
        rid = _get(rec, key)
        if rid in unique:
            logger.debug("reconcile: duplicate id %s; keeping the untimestamped copy", rid)
        unique[rid] = rec

    def sort_key(rec: Any) -> Tuple[int, dt.datetime, str]:
        ts = effective_timestamp(rec, primary=primary, fallback=fallback)
        if ts is None:
            return (1, _EPOCH, str(_get(rec, key)))
        return (0, ts, str(_get(rec, key)))

    ordered = sorted(unique.values(), key=sort_key)
    missing = sum(1 for rec in ordered if sort_key(rec)[0] == 1)
    if missing:
        logger.debug("reconcile: %d record(s) without a usable timestamp placed last", missing)
    return ordered


def month_window(year: int, month: int) -> Tuple[dt.datetime, dt.datetime]:
    """Half-open UTC window [first of month, first of next month)."""
    if not 1 <= int(month) <= 12:
        raise ValueError("month must be 1..12")
    start = dt.datetime(int(year), int(month), 1, tzinfo=dt.timezone.utc)
    year_next = start.year + (1 if start.month == 12 else 0)
    month_next = 1 if start.month == 12 else start.month + 1
    return start, start.replace(year=year_next, month=month_next)


def fetch_period_records(
    model, owner_id, window_start: dt.datetime, window_end: dt.datetime
) -> List[Any]:
    """
    Load one learning centre's rows of `model` (FieldNote or FieldImage) for
    [window_start, window_end) and reconcile them.

    Rows with sent_at are windowed on sent_at; rows without it are windowed
    on created_at. Both querysets are fully evaluated before merging, so a
    database error in either one propagates and nothing partial is returned.
    """
    scoped = model.objects.filter(learning_centre_id=owner_id)
    primary_rows = list(
        scoped.filter(sent_at__isnull=False, sent_at__gte=window_start, sent_at__lt=window_end)
    )
    fallback_rows = list(
        scoped.filter(sent_at__isnull=True, created_at__gte=window_start, created_at__lt=window_end)
    )
    logger.debug(
        "%s for centre %s in [%s, %s): %d with sent_at, %d without",
        model.__name__, owner_id, window_start.isoformat(), window_end.isoformat(),
        len(primary_rows), len(fallback_rows),
    )
    return reconcile(primary_rows, fallback_rows)


def report_period_feed(report: GeneratedReport) -> Dict[str, List[Any]]:
    """Images and notes of a report's learning centre for the report month."""
    start, end = month_window(report.year, report.month)
    return {
        "images": fetch_period_records(FieldImage, report.learning_centre_id, start, end),
        "notes": fetch_period_records(FieldNote, report.learning_centre_id, start, end),
    }


def newest_first(
    records: Sequence[Any], *, primary: str, fallback: str = "created_at"
) -> List[Any]:
    """Order notes newest first; notes without a usable timestamp go last."""
    def sort_key(rec):
        ts = effective_timestamp(rec, primary=primary, fallback=fallback)
        if ts is None:
            return (1, 0.0)
        return (0, -ts.timestamp())

    return sorted(records, key=sort_key)


def _ordinal_suffix(day: int) -> str:
    if day % 10 == 1 and day != 11:
        return "st"
    if day % 10 == 2 and day != 12:
        return "nd"
    if day % 10 == 3 and day != 13:
        return "rd"
    return "th"


def format_display_date(value: Any, tz: str) -> str:
    """Render a timestamp as e.g. "March 5th 2024" in the given timezone."""
    d = _to_aware_utc(value)
    if d is None:
        return "Date unavailable"
    try:
        ld = d.astimezone(pytz.timezone(tz))
    except (OverflowError, ValueError):
        return "Date unavailable"
    return f"{ld.strftime('%B')} {ld.day}{_ordinal_suffix(ld.day)} {ld.year}"


def highlight_aliases(text: str, aliases: Iterable[str]) -> List[Dict[str, Any]]:
    """
    Split `text` into segments, marking every case-insensitive occurrence of
    one of `aliases`.

    Longer aliases are tried first so "Anu" never splits "Anushka".
    Returns [{"text": str, "highlight": bool}, ...] without empty segments.
    """
    usable = sorted(
        {a.strip() for a in aliases if isinstance(a, str) and a.strip()},
        key=lambda a: (-len(a), a),
    )
    if not text:
        return []
    if not usable:
        return [{"text": text, "highlight": False}]

    lowered = {a.lower() for a in usable}
    pattern = re.compile("(" + "|".join(re.escape(a) for a in usable) + ")", re.IGNORECASE)
    out = []
    for segment in pattern.split(text):
        if not segment:
            continue
        out.append({"text": segment, "highlight": segment.lower() in lowered})
    return out
