from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .reports.export import ReportExcelExporter
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.repository import ReportRepository
from .reports.service import ReportService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    reports_repo: ReportRepository

    report_service: ReportService
    report_exporter: ReportExcelExporter


def build_container(
    *,
    db_config: dict,
    timezone: str = DEFAULT_TIMEZONE,
    enforce_unique: bool = False,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    reports_repo = MySQLReportRepository(conn, timezone=timezone)
    report_service = ReportService(reports_repo, timezone=timezone, enforce_unique=enforce_unique)

    return Container(
        conn=conn,
        reports_repo=reports_repo,
        report_service=report_service,
        report_exporter=ReportExcelExporter(),
    )
