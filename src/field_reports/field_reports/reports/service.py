from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Optional

from ..common.datetime_utils import now_local, to_iso
from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import ConflictError, NotFoundError
from .model import SERIES, TEXT_FIELDS, Report, calculate_average
from .payload import ReportRequest
from .repository import ReportRepository

logger = logging.getLogger(__name__)


def report_to_view(report: Report) -> dict[str, Any]:
    """Map a report entity to its JSON view, adding one average per series."""

    view: dict[str, Any] = {"id": report.report_id}
    for attr, key in TEXT_FIELDS:
        view[key] = getattr(report, attr)
    for s in SERIES:
        values = list(report.values_of(s))
        view[s.key] = values
        view[s.avg_key] = calculate_average(values)
    view["averageAttendance"] = report.average_attendance
    view["names"] = list(report.names)
    view["createdAt"] = to_iso(report.created_at)
    view["updatedAt"] = to_iso(report.updated_at)
    return view


class ReportService:
    def __init__(
        self,
        reports: ReportRepository,
        *,
        timezone: str = DEFAULT_TIMEZONE,
        enforce_unique: bool = False,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._reports = reports
        self._enforce_unique = enforce_unique
        self._clock = clock or (lambda: now_local(timezone))

    def _get_existing(self, report_id: int) -> Report:
        report = self._reports.get_by_id(int(report_id))
        if not report:
            raise NotFoundError(f"report {report_id} not found")
        return report

    def _ensure_not_taken(self, req: ReportRequest, *, report_id: Optional[int] = None) -> None:
        if not self._enforce_unique:
            return
        taken = self._reports.find_taken(req.month_of, req.worker_name)
        if any(r.report_id != report_id for r in taken):
            raise ConflictError("report already taken")

    def create(self, req: ReportRequest) -> int:
        self._ensure_not_taken(req)

        now = self._clock()
        report = Report(report_id=0, created_at=now, updated_at=now, **req.report_fields())
        report_id = self._reports.save(report)
        logger.info("Created report %s for %s (%s)", report_id, req.worker_name, req.month_of)
        return report_id

    def find_by_id(self, report_id: int) -> dict[str, Any]:
        return report_to_view(self._get_existing(report_id))

    def find_all(self) -> list[dict[str, Any]]:
        return [report_to_view(r) for r in self._reports.list_all()]

    def update(self, report_id: int, req: ReportRequest) -> None:
        existing = self._get_existing(report_id)
        self._ensure_not_taken(req, report_id=existing.report_id)

        updated = replace(existing, updated_at=self._clock(), **req.report_fields())
        if not self._reports.update(updated):
            logger.warning("Update of report %s changed no rows", report_id)
        logger.info("Updated report %s", report_id)

    def delete(self, report_id: int) -> None:
        existing = self._get_existing(report_id)
        if not self._reports.delete(existing.report_id):
            logger.warning("Delete of report %s removed no rows", report_id)
        logger.info("Deleted report %s", report_id)
