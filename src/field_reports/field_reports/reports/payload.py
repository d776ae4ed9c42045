from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from ..common.validators import (
    optional_number,
    optional_str,
    require_int_list,
    require_non_empty,
    require_str_list,
)
from ..core.constants import WEEKS_PER_MONTH
from ..core.exceptions import ValidationError
from .model import SERIES


@dataclass(frozen=True)
class ReportRequest:
    """Validated create/update body. Holds every mutable report field."""

    month_of: str
    worker_name: str
    area_of_assignment: str = ""
    name_of_church: str = ""
    series: dict[str, list[int]] = field(default_factory=dict)
    average_attendance: float = 0.0
    names: list[str] = field(default_factory=list)
    narrative_report: str = ""
    challenges_and_problem_encountered: str = ""
    prayer_request: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "ReportRequest":
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")

        series = {
            s.attr: require_int_list(payload.get(s.key), s.key, max_len=WEEKS_PER_MONTH)
            for s in SERIES
        }
        return cls(
            month_of=require_non_empty(payload.get("monthOf"), "monthOf"),
            worker_name=require_non_empty(payload.get("workerName"), "workerName"),
            area_of_assignment=optional_str(payload.get("areaOfAssignment"), "areaOfAssignment"),
            name_of_church=optional_str(payload.get("nameOfChurch"), "nameOfChurch"),
            series=series,
            average_attendance=optional_number(payload.get("averageAttendance"), "averageAttendance"),
            names=require_str_list(payload.get("names"), "names"),
            narrative_report=optional_str(payload.get("narrativeReport"), "narrativeReport"),
            challenges_and_problem_encountered=optional_str(
                payload.get("challengesAndProblemEncountered"), "challengesAndProblemEncountered"
            ),
            prayer_request=optional_str(payload.get("prayerRequest"), "prayerRequest"),
        )

    def report_fields(self) -> dict[str, Any]:
        """Keyword arguments for ``Report``/``dataclasses.replace``."""
        data = asdict(self)
        series = data.pop("series")
        for s in SERIES:
            data[s.attr] = list(series.get(s.attr, []))
        return data
