from __future__ import annotations

import logging
from contextlib import closing
from dataclasses import dataclass, field

from catalog_etl.config import ON_ERROR, ON_ERROR_CHOICES, SINK_DB, SOURCE_DB
from catalog_etl.extract import iter_raw_details, read_courses, read_lecturer_names
from catalog_etl.load import import_courses, import_time_schedule, init_db, save_lecturers
from catalog_etl.models import MeetingTimeRecord
from catalog_etl.schedule import try_extract
from catalog_etl.transform import normalize_lecturers

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    lecturers: int = 0
    courses: int = 0
    records: int = 0
    skipped: list[int] = field(default_factory=list)


def run(
    source_db: str = SOURCE_DB,
    sink_db: str = SINK_DB,
    on_error: str = ON_ERROR,
) -> RunSummary:
    """
    Migrate lecturers, courses and their meeting times from source to sink.

    With on_error="abort" the first schedule error is re-raised and no
    meeting times are written. With "skip" the failing course is logged
    and left without meeting times.
    """
    if on_error not in ON_ERROR_CHOICES:
        raise ValueError(f"on_error must be one of {ON_ERROR_CHOICES}, got {on_error!r}")

    summary = RunSummary()

    logger.info("Normalizing lecturers from %s", source_db)
    lecturers = normalize_lecturers(read_lecturer_names(source_db))

    logger.info("Recreating sink schema in %s", sink_db)
    init_db(sink_db)
    summary.lecturers = len(save_lecturers(lecturers, sink_db))

    courses = import_courses(read_courses(source_db), sink_db)
    summary.courses = len(courses)

    logger.info("Extracting time schedules...")
    records: list[MeetingTimeRecord] = []
    with closing(iter_raw_details(courses, source_db)) as details:
        for course, raw_detail in details:
            result = try_extract(course.id, raw_detail)
            if result.ok:
                records.extend(result.records)
                continue
            if on_error == "abort":
                raise result.error
            logger.warning(
                "Skipping course %s/%s (%s): %s",
                course.root_number,
                course.serial_number,
                type(result.error).__name__,
                result.error,
            )
            summary.skipped.append(course.id)

    summary.records = import_time_schedule(records, sink_db)
    logger.info(
        "Loaded %d course dates for %d courses (%d skipped)",
        summary.records,
        summary.courses,
        len(summary.skipped),
    )
    return summary
