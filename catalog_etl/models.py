from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from catalog_etl.errors import ScheduleError


@dataclass
class Course:
    root_number: int
    serial_number: int
    title: str
    id: Optional[int] = None


@dataclass
class Lecturer:
    name: str
    id: Optional[int] = None


@dataclass(frozen=True)
class MeetingTimeRecord:
    """One scheduled session of a course, lecture or assessment."""

    course_id: int
    start: datetime
    end: datetime
    is_assessment: bool


@dataclass
class ExtractionResult:
    """
    Outcome of extracting one course's schedule.

    Exactly one of `records` / `error` is meaningful: when `error` is set,
    `records` is empty.
    """

    course_id: int
    records: list[MeetingTimeRecord] = field(default_factory=list)
    error: Optional[ScheduleError] = None

    @property
    def ok(self) -> bool:
        return self.error is None
