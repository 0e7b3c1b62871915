"""
Time-schedule extraction from a course's raw detail page.

The detail page carries several tables; the schedule grid is the one
declared with a border and a 9-column colgroup. Its data rows hold, by
position: weekday, date, begin time, end time, assessment flag.
"""
from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Iterable, Optional

from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag

from catalog_etl.errors import (
    DateTimeParseError,
    DocumentParseError,
    MalformedRowError,
    ScheduleError,
    TableNotFoundError,
)
from catalog_etl.models import ExtractionResult, MeetingTimeRecord

logger = logging.getLogger(__name__)

SCHEDULE_COLUMN_COUNT = 9

# 0-based positions within a row's <td> cells. "weekday" is reserved:
# it duplicates the date and is not carried into the record.
SCHEDULE_COLUMNS = {
    "weekday": 1,
    "date": 2,
    "begin": 3,
    "end": 4,
    "assessment": 5,
}

# D/M/YYYY HH:MM, day, month and hour may be unpadded, minutes may not.
TIMESTAMP_RE = re.compile(r"\d{1,2}/\d{1,2}/\d{4} +\d{1,2}:\d{2}")
TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M"

NOT_ASSESSMENT = "No"


def _parse_document(raw_fragment: str, course_id: int) -> BeautifulSoup:
    if not isinstance(raw_fragment, (str, bytes)):
        raise DocumentParseError(
            f"course {course_id}: expected markup text, got {type(raw_fragment).__name__}",
            course_id,
        )
    try:
        return BeautifulSoup(raw_fragment, "html.parser")
    except ParserRejectedMarkup as exc:
        raise DocumentParseError(f"course {course_id}: {exc}", course_id) from exc


def _column_count(table: Tag) -> Optional[int]:
    first = table.find(["colgroup", "col"])
    if first is None:
        return None
    if first.name == "colgroup":
        return len(first.find_all("col"))

    # bare <col> siblings form an implicit colgroup
    count = 1
    for sibling in first.find_next_siblings():
        if sibling.name != "col":
            break
        count += 1
    return count


def _is_schedule_table(table: Tag) -> bool:
    if not table.has_attr("border"):
        return False
    return _column_count(table) == SCHEDULE_COLUMN_COUNT


def select_schedule_table(soup: BeautifulSoup) -> Optional[Tag]:
    """Return the first bordered 9-column table in document order, or None."""
    for table in soup.find_all("table"):
        if _is_schedule_table(table):
            return table
    return None


def _parse_timestamp(date_text: str, time_text: str, course_id: int) -> datetime:
    value = f"{date_text} {time_text}"
    try:
        if not TIMESTAMP_RE.fullmatch(value):
            raise ValueError(f"{value!r} does not match D/M/YYYY HH:MM")
        return datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError as exc:
        raise DateTimeParseError(
            f"course {course_id}: cannot parse {value!r} as D/M/YYYY HH:MM",
            course_id,
        ) from exc


def parse_row(cells: list[Tag], course_id: int) -> MeetingTimeRecord:
    """Map one data row's <td> cells to a MeetingTimeRecord."""
    needed = max(SCHEDULE_COLUMNS.values()) + 1
    if len(cells) < needed:
        raise MalformedRowError(
            f"course {course_id}: row has {len(cells)} cells, expected at least {needed}",
            course_id,
        )

    def _text(column: str) -> str:
        return cells[SCHEDULE_COLUMNS[column]].get_text()

    date_text = _text("date")
    start = _parse_timestamp(date_text, _text("begin"), course_id)
    # meetings start and end on the same calendar day
    end = _parse_timestamp(date_text, _text("end"), course_id)

    return MeetingTimeRecord(
        course_id=course_id,
        start=start,
        end=end,
        is_assessment=_text("assessment") != NOT_ASSESSMENT,
    )


def extract(course_id: int, raw_fragment: str) -> list[MeetingTimeRecord]:
    """
    Extract all meeting times for one course.

    Rows without <td> cells (group headers, spacers) are skipped. Any other
    row that cannot be parsed raises a ScheduleError subclass and nothing
    is returned for the course.
    """
    soup = _parse_document(raw_fragment, course_id)

    table = select_schedule_table(soup)
    if table is None:
        raise TableNotFoundError(
            f"course {course_id}: no bordered table with {SCHEDULE_COLUMN_COUNT} columns",
            course_id,
        )

    records: list[MeetingTimeRecord] = []
    for row_idx, tr in enumerate(table.find_all("tr")):
        cells = tr.find_all("td")
        if not cells:
            logger.debug("course %s: skipping row %d without data cells", course_id, row_idx)
            continue
        records.append(parse_row(cells, course_id))

    return records


def try_extract(course_id: int, raw_fragment: str) -> ExtractionResult:
    """Like extract(), but returns the error instead of raising it."""
    try:
        return ExtractionResult(course_id=course_id, records=extract(course_id, raw_fragment))
    except ScheduleError as exc:
        return ExtractionResult(course_id=course_id, error=exc)


def extract_all(fragments: Iterable[tuple[int, str]]) -> list[MeetingTimeRecord]:
    """Extract (course_id, fragment) pairs in order and concatenate the records."""
    records: list[MeetingTimeRecord] = []
    for course_id, raw_fragment in fragments:
        records.extend(extract(course_id, raw_fragment))
    return records
