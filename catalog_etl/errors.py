from __future__ import annotations

from typing import Optional


class ScheduleError(Exception):
    """Base class for failures while extracting a course's time schedule."""

    def __init__(self, message: str, course_id: Optional[int] = None):
        super().__init__(message)
        self.course_id = course_id


class DocumentParseError(ScheduleError):
    """The raw fragment could not be parsed as markup."""


class TableNotFoundError(ScheduleError):
    """No table in the fragment has a border and a 9-column colgroup."""


class DateTimeParseError(ScheduleError):
    """A composed date/time string did not match D/M/YYYY HH:MM."""


class MalformedRowError(ScheduleError):
    """A data row has fewer cells than the column map needs."""
