from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence


@dataclass(frozen=True)
class ActivitySeries:
    """One weekly activity count tracked on a monthly report."""

    attr: str
    key: str
    label: str

    @property
    def avg_key(self) -> str:
        return f"{self.key}Avg"


# Fixed order: drives views, persistence columns and export rows.
SERIES: tuple[ActivitySeries, ...] = (
    ActivitySeries("worship_service", "worshipService", "Worship Service:"),
    ActivitySeries("sunday_school", "sundaySchool", "Sunday School:"),
    ActivitySeries("prayer_meetings", "prayerMeetings", "Prayer Meetings:"),
    ActivitySeries("bible_studies", "bibleStudies", "Bible Studies:"),
    ActivitySeries("mens_fellowships", "mensFellowships", "Mens Fellowships:"),
    ActivitySeries("womens_fellowships", "womensFellowships", "Womens Fellowships:"),
    ActivitySeries("youth_fellowships", "youthFellowships", "Youth Fellowships:"),
    ActivitySeries("child_fellowships", "childFellowships", "Child Fellowships:"),
    ActivitySeries("outreach", "outreach", "Outreach:"),
    ActivitySeries("training_or_seminars", "trainingOrSeminars", "Training Or Seminars:"),
    ActivitySeries("leadership_conferences", "leadershipConferences", "Leadership Conferences:"),
    ActivitySeries("leadership_training", "leadershipTraining", "Leadership Training:"),
    ActivitySeries("others", "others", "Others:"),
    ActivitySeries("family_days", "familyDays", "Family Days:"),
    ActivitySeries("tithes_and_offerings", "tithesAndOfferings", "Tithes And Offerings:"),
    ActivitySeries("home_visited", "homeVisited", "Home Visited:"),
    ActivitySeries("bible_study_or_group_led", "bibleStudyOrGroupLed", "Bible Study Or Group Led:"),
    ActivitySeries("sermon_or_message_preached", "sermonOrMessagePreached", "Sermon Or Message Preached:"),
    ActivitySeries("person_newly_contacted", "personNewlyContacted", "Person Newly Contacted:"),
    ActivitySeries("person_followed_up", "personFollowedUp", "Person Followed-Up:"),
    ActivitySeries("person_led_to_christ", "personLedToChrist", "Person Led To Christ:"),
)

# (attribute, JSON key) for the scalar text fields, in request order.
TEXT_FIELDS: tuple[tuple[str, str], ...] = (
    ("month_of", "monthOf"),
    ("worker_name", "workerName"),
    ("area_of_assignment", "areaOfAssignment"),
    ("name_of_church", "nameOfChurch"),
    ("narrative_report", "narrativeReport"),
    ("challenges_and_problem_encountered", "challengesAndProblemEncountered"),
    ("prayer_request", "prayerRequest"),
)


@dataclass(frozen=True)
class Report:
    """Domain entity: one worker's monthly activity submission."""

    report_id: int
    month_of: str
    worker_name: str
    area_of_assignment: str = ""
    name_of_church: str = ""

    worship_service: list[int] = field(default_factory=list)
    sunday_school: list[int] = field(default_factory=list)
    prayer_meetings: list[int] = field(default_factory=list)
    bible_studies: list[int] = field(default_factory=list)
    mens_fellowships: list[int] = field(default_factory=list)
    womens_fellowships: list[int] = field(default_factory=list)
    youth_fellowships: list[int] = field(default_factory=list)
    child_fellowships: list[int] = field(default_factory=list)
    outreach: list[int] = field(default_factory=list)
    training_or_seminars: list[int] = field(default_factory=list)
    leadership_conferences: list[int] = field(default_factory=list)
    leadership_training: list[int] = field(default_factory=list)
    others: list[int] = field(default_factory=list)
    family_days: list[int] = field(default_factory=list)
    tithes_and_offerings: list[int] = field(default_factory=list)
    home_visited: list[int] = field(default_factory=list)
    bible_study_or_group_led: list[int] = field(default_factory=list)
    sermon_or_message_preached: list[int] = field(default_factory=list)
    person_newly_contacted: list[int] = field(default_factory=list)
    person_followed_up: list[int] = field(default_factory=list)
    person_led_to_christ: list[int] = field(default_factory=list)

    average_attendance: float = 0.0
    names: list[str] = field(default_factory=list)
    narrative_report: str = ""
    challenges_and_problem_encountered: str = ""
    prayer_request: str = ""

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def values_of(self, series: ActivitySeries) -> list[int]:
        return getattr(self, series.attr)


def calculate_average(values: Sequence[int]) -> float:
    """Arithmetic mean of a weekly series; an empty series averages to 0."""
    if not values:
        return 0.0
    return sum(values) / len(values)
