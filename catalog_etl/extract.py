from __future__ import annotations

import logging
import sqlite3
from typing import Iterable, Iterator

from catalog_etl.config import SOURCE_DB
from catalog_etl.models import Course

logger = logging.getLogger(__name__)


def read_lecturer_names(db: str = SOURCE_DB) -> list[str]:
    """Raw lecturer column values; one value may list several names."""
    con = sqlite3.connect(db)
    try:
        cur = con.execute("SELECT lecturer FROM courses WHERE lecturer != ''")
        return [row[0] for row in cur.fetchall()]
    finally:
        con.close()


def read_courses(db: str = SOURCE_DB) -> list[Course]:
    con = sqlite3.connect(db)
    try:
        cur = con.execute("SELECT rootNumber, sn, title FROM courses")
        courses = [
            Course(root_number=root_number, serial_number=sn, title=title)
            for root_number, sn, title in cur.fetchall()
        ]
    finally:
        con.close()

    logger.info("Read %d courses from %s", len(courses), db)
    return courses


def iter_raw_details(
    courses: Iterable[Course],
    db: str = SOURCE_DB,
) -> Iterator[tuple[Course, str]]:
    """
    Yield (course, raw detail fragment) in the order the courses are given.

    Raises LookupError when the source has no row for a course.
    """
    con = sqlite3.connect(db)
    try:
        for course in courses:
            row = con.execute(
                "SELECT rawDetail FROM courses WHERE rootNumber = ? AND sn = ?",
                (course.root_number, course.serial_number),
            ).fetchone()
            if row is None:
                raise LookupError(
                    f"no source row for course {course.root_number}/{course.serial_number}"
                )
            yield course, row[0]
    finally:
        con.close()
