from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Report


class ReportRepository(Protocol):
    def save(self, report: Report) -> int:
        """Persist a new report and return the assigned identifier."""

        raise NotImplementedError

    def get_by_id(self, report_id: int) -> Optional[Report]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Report]:
        raise NotImplementedError

    def update(self, report: Report) -> bool:
        raise NotImplementedError

    def delete(self, report_id: int) -> bool:
        raise NotImplementedError

    def find_taken(self, month_of: str, worker_name: str) -> Sequence[Report]:
        """Reports already filed for the same month and worker."""

        raise NotImplementedError
