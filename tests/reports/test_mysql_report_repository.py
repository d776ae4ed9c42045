from __future__ import annotations

import re
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from src.field_reports.field_reports.core.exceptions import PersistenceError
from src.field_reports.field_reports.reports.model import SERIES, Report
from src.field_reports.field_reports.reports.mysql_report_repository import MySQLReportRepository

MANILA = ZoneInfo("Asia/Manila")


class RecordingCursor:
    def __init__(self, rows=None, *, lastrowid=0, rowcount=1):
        self._rows = list(rows or [])
        self.lastrowid = lastrowid
        self.rowcount = rowcount
        self.executed: list[tuple[str, tuple]] = []

    def execute(self, sql, params=()):
        self.executed.append((" ".join(sql.split()), tuple(params)))

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)

    def close(self):
        pass


class FakeConn:
    def __init__(self, cursor: RecordingCursor):
        self._cursor = cursor

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        pass

    def rollback(self):
        pass

    def close(self):
        pass


class FakeFactory:
    def __init__(self, cursor: RecordingCursor):
        self.cursor = cursor

    def connect(self):
        return FakeConn(self.cursor)


def _report(**overrides) -> Report:
    data = dict(
        report_id=7,
        month_of="January 2024",
        worker_name="J. Dela Cruz",
        area_of_assignment="Region IV-A",
        name_of_church="Grace Fellowship",
        worship_service=[20, 22, 21, 19, 23],
        person_led_to_christ=[1],
        average_attendance=21.5,
        names=["Ana", "Ben"],
        narrative_report="Two new families joined.",
        challenges_and_problem_encountered="Rain.",
        prayer_request="Venue.",
        created_at=datetime(2024, 1, 31, 9, 0, tzinfo=MANILA),
        updated_at=datetime(2024, 2, 1, 10, 30, tzinfo=MANILA),
    )
    data.update(overrides)
    return Report(**data)


def _row(**overrides) -> dict:
    row = {
        "report_id": 7,
        "month_of": "January 2024",
        "worker_name": "J. Dela Cruz",
        "area_of_assignment": "Region IV-A",
        "name_of_church": None,
        "narrative_report": "Two new families joined.",
        "challenges_and_problem_encountered": "",
        "prayer_request": "Venue.",
        "average_attendance": 21.5,
        "names": '["Ana", "Ben"]',
        "created_at": datetime(2024, 1, 31, 9, 0),
        "updated_at": datetime(2024, 2, 1, 10, 30),
    }
    for s in SERIES:
        row[s.attr] = None
    row["worship_service"] = "[20, 22, 21, 19, 23]"
    row["sunday_school"] = b"[10, 12]"
    row.update(overrides)
    return row


def _insert_columns(sql: str) -> list[str]:
    m = re.search(r"INSERT INTO reports\((.*?)\) VALUES", sql)
    return [c.strip() for c in m.group(1).split(",")]


def _update_columns(sql: str) -> list[str]:
    m = re.search(r"SET (.*) WHERE report_id=%s", sql)
    return [a.split("=")[0].strip() for a in m.group(1).split(",")]


def test_save_pairs_params_with_columns():
    cur = RecordingCursor(lastrowid=12)
    repo = MySQLReportRepository(FakeFactory(cur))

    assert repo.save(_report(report_id=0)) == 12

    sql, params = cur.executed[0]
    columns = _insert_columns(sql)
    assert len(columns) == len(params)
    values = dict(zip(columns, params))
    assert "report_id" not in values
    assert values["month_of"] == "January 2024"
    assert values["prayer_request"] == "Venue."
    assert values["worship_service"] == "[20, 22, 21, 19, 23]"
    assert values["sunday_school"] == "[]"
    assert values["person_led_to_christ"] == "[1]"
    assert values["names"] == '["Ana", "Ben"]'
    assert values["average_attendance"] == 21.5
    # DATETIME columns receive naive wall-clock times
    assert values["created_at"] == datetime(2024, 1, 31, 9, 0)
    assert values["updated_at"] == datetime(2024, 2, 1, 10, 30)


def test_update_never_writes_created_at():
    cur = RecordingCursor(rowcount=1)
    repo = MySQLReportRepository(FakeFactory(cur))

    assert repo.update(_report(narrative_report="edited")) is True

    sql, params = cur.executed[0]
    assert "created_at" not in sql
    columns = _update_columns(sql)
    assert len(columns) + 1 == len(params)
    values = dict(zip(columns, params))
    assert values["narrative_report"] == "edited"
    assert values["updated_at"] == datetime(2024, 2, 1, 10, 30)
    assert params[-1] == 7


def test_get_by_id_decodes_row():
    cur = RecordingCursor(rows=[_row()])
    repo = MySQLReportRepository(FakeFactory(cur))

    report = repo.get_by_id(7)

    assert cur.executed[0][1] == (7,)
    assert report.report_id == 7
    assert report.name_of_church == ""
    assert report.worship_service == [20, 22, 21, 19, 23]
    assert report.sunday_school == [10, 12]
    assert report.outreach == []
    assert report.names == ["Ana", "Ben"]
    assert report.average_attendance == 21.5


def test_get_by_id_reattaches_report_timezone():
    repo = MySQLReportRepository(FakeFactory(RecordingCursor(rows=[_row()])))

    report = repo.get_by_id(7)

    assert report.created_at == datetime(2024, 1, 31, 9, 0, tzinfo=MANILA)
    assert report.created_at.isoformat() == "2024-01-31T09:00:00+08:00"
    assert report.updated_at.isoformat() == "2024-02-01T10:30:00+08:00"


def test_get_by_id_missing_returns_none():
    repo = MySQLReportRepository(FakeFactory(RecordingCursor(rows=[])))

    assert repo.get_by_id(99) is None


def test_corrupt_row_is_persistence_error():
    repo = MySQLReportRepository(FakeFactory(RecordingCursor(rows=[_row(outreach='{"a": 1}')])))

    with pytest.raises(PersistenceError):
        repo.get_by_id(7)


def test_list_all_and_find_taken():
    cur = RecordingCursor(rows=[_row(), _row(report_id=8)])
    repo = MySQLReportRepository(FakeFactory(cur))

    assert [r.report_id for r in repo.list_all()] == [7, 8]
    assert [r.report_id for r in repo.find_taken("January 2024", "J. Dela Cruz")] == [7, 8]
    assert cur.executed[0][0].endswith("ORDER BY report_id")
    assert cur.executed[1][1] == ("January 2024", "J. Dela Cruz")


def test_delete_reports_row_count():
    cur = RecordingCursor(rowcount=0)
    repo = MySQLReportRepository(FakeFactory(cur))

    assert repo.delete(3) is False
    assert cur.executed[0] == ("DELETE FROM reports WHERE report_id=%s", (3,))
