from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

import pytest

from src.field_reports.field_reports.core.exceptions import PersistenceError
from src.field_reports.field_reports.reports.model import Report
from src.field_reports.field_reports.reports.service import ReportService


class InMemoryReports:
    def __init__(self):
        self._reports: dict[int, Report] = {}
        self._next_id = 1
        self.fail_with: Optional[str] = None
        self.calls: list[str] = []

    def _check(self, op: str) -> None:
        self.calls.append(op)
        if self.fail_with:
            raise PersistenceError(self.fail_with)

    def save(self, report: Report) -> int:
        self._check("save")
        rid = self._next_id
        self._next_id += 1
        self._reports[rid] = replace(report, report_id=rid)
        return rid

    def get_by_id(self, report_id: int) -> Optional[Report]:
        self._check("get_by_id")
        return self._reports.get(int(report_id))

    def list_all(self):
        self._check("list_all")
        return list(self._reports.values())

    def update(self, report: Report) -> bool:
        self._check("update")
        if report.report_id not in self._reports:
            return False
        self._reports[report.report_id] = report
        return True

    def delete(self, report_id: int) -> bool:
        self._check("delete")
        return self._reports.pop(int(report_id), None) is not None

    def find_taken(self, month_of: str, worker_name: str):
        self._check("find_taken")
        return [r for r in self._reports.values() if r.month_of == month_of and r.worker_name == worker_name]


class SteppingClock:
    """Returns a new Manila-local instant one hour later on every call."""

    def __init__(self, start: datetime):
        self._current = start

    def __call__(self) -> datetime:
        value = self._current
        self._current = self._current + timedelta(hours=1)
        return value


MANILA = ZoneInfo("Asia/Manila")


@pytest.fixture
def repo() -> InMemoryReports:
    return InMemoryReports()


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock(datetime(2024, 1, 31, 9, 0, tzinfo=MANILA))


@pytest.fixture
def service(repo, clock) -> ReportService:
    return ReportService(repo, clock=clock)


@pytest.fixture
def payload() -> dict:
    return {
        "monthOf": "January 2024",
        "workerName": "J. Dela Cruz",
        "areaOfAssignment": "Region IV-A",
        "nameOfChurch": "Grace Fellowship",
        "worshipService": [20, 22, 21, 19, 23],
        "sundaySchool": [10, 12, 14, 9, 11],
        "prayerMeetings": [5, 6],
        "averageAttendance": 21.5,
        "names": ["Ana", "Ben"],
        "narrativeReport": "Two new families joined.",
        "challengesAndProblemEncountered": "Heavy rains in week 3.",
        "prayerRequest": "New venue for youth nights.",
    }
