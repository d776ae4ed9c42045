from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Any, Dict, Optional, Sequence
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import PersistenceError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json_list, fetchall, fetchone, load_json_list
from .model import SERIES, TEXT_FIELDS, Report
from .repository import ReportRepository

logger = logging.getLogger(__name__)

_TEXT_COLUMNS = [attr for attr, _ in TEXT_FIELDS]
_SERIES_COLUMNS = [s.attr for s in SERIES]
_DATA_COLUMNS = _TEXT_COLUMNS + _SERIES_COLUMNS + ["average_attendance", "names", "created_at", "updated_at"]
_SELECT = "SELECT report_id, " + ", ".join(_DATA_COLUMNS) + " FROM reports"


def _naive(value):
    # DATETIME columns carry no zone; store the local wall-clock time.
    return value.replace(tzinfo=None) if value is not None else None


def _aware(value: Optional[datetime], tz: tzinfo) -> Optional[datetime]:
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=tz)


def _row_params(report: Report) -> list[Any]:
    params: list[Any] = [getattr(report, c) for c in _TEXT_COLUMNS]
    params += [dump_json_list(report.values_of(s)) for s in SERIES]
    params += [
        float(report.average_attendance),
        dump_json_list(report.names),
        _naive(report.created_at),
        _naive(report.updated_at),
    ]
    return params


def _to_report(r: Dict[str, Any], tz: tzinfo) -> Report:
    kwargs: Dict[str, Any] = {c: r.get(c) or "" for c in _TEXT_COLUMNS}
    for s in SERIES:
        kwargs[s.attr] = [int(v) for v in load_json_list(r.get(s.attr))]
    return Report(
        report_id=int(r["report_id"]),
        average_attendance=float(r.get("average_attendance") or 0),
        names=[str(v) for v in load_json_list(r.get("names"))],
        created_at=_aware(r.get("created_at"), tz),
        updated_at=_aware(r.get("updated_at"), tz),
        **kwargs,
    )


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, timezone: str = DEFAULT_TIMEZONE):
        self._conn_factory = conn_factory
        self._tz = ZoneInfo(timezone)

    def _decode(self, r: Dict[str, Any]) -> Report:
        try:
            return _to_report(r, self._tz)
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("Corrupt report row %s: %s", r.get("report_id"), exc)
            raise PersistenceError(f"corrupt report row {r.get('report_id')}: {exc}") from exc
    def save(self, report: Report) -> int:
        placeholders = ",".join(["%s"] * len(_DATA_COLUMNS))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO reports({', '.join(_DATA_COLUMNS)}) VALUES({placeholders})",
                tuple(_row_params(report)),
            )
            return int(cur.lastrowid)

    def get_by_id(self, report_id: int) -> Optional[Report]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE report_id=%s", (int(report_id),))
            r = fetchone(cur)
            if not r:
                return None
            return self._decode(r)

    def list_all(self) -> Sequence[Report]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY report_id")
            return [self._decode(r) for r in fetchall(cur)]

    def update(self, report: Report) -> bool:
        # created_at is immutable after insert
        columns = [c for c in _DATA_COLUMNS if c != "created_at"]
        params = [p for c, p in zip(_DATA_COLUMNS, _row_params(report)) if c != "created_at"]
        assignments = ", ".join(f"{c}=%s" for c in columns)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE reports SET {assignments} WHERE report_id=%s",
                tuple(params + [int(report.report_id)]),
            )
            return cur.rowcount > 0

    def delete(self, report_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM reports WHERE report_id=%s", (int(report_id),))
            return cur.rowcount > 0

    def find_taken(self, month_of: str, worker_name: str) -> Sequence[Report]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE month_of=%s AND worker_name=%s ORDER BY report_id",
                (month_of, worker_name),
            )
            return [self._decode(r) for r in fetchall(cur)]
