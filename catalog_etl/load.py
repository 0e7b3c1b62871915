from __future__ import annotations

import logging
import sqlite3
from typing import Iterable

from catalog_etl.config import SINK_DB
from catalog_etl.models import Course, Lecturer, MeetingTimeRecord

logger = logging.getLogger(__name__)


def init_db(db: str = SINK_DB) -> None:
    """Drop and recreate the sink schema; every run is a full refresh."""
    con = sqlite3.connect(db)
    try:
        con.executescript("""
        DROP TABLE IF EXISTS lecturers;
        DROP TABLE IF EXISTS coursedate;
        DROP TABLE IF EXISTS courses;

        CREATE TABLE lecturers (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE
        );

        CREATE TABLE courses (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            rootNumber INTEGER NOT NULL,
            sn INTEGER NOT NULL,
            title TEXT NOT NULL
        );

        CREATE TABLE coursedate (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            courseId INTEGER NOT NULL REFERENCES courses(id),
            start TIMESTAMP NOT NULL,
            "end" TIMESTAMP NOT NULL,
            assessment BOOLEAN NOT NULL
        );
        """)
        con.commit()
    finally:
        con.close()


def save_lecturers(lecturers: Iterable[Lecturer], db: str = SINK_DB) -> list[Lecturer]:
    con = sqlite3.connect(db)
    try:
        cur = con.cursor()
        saved = []
        for lecturer in lecturers:
            cur.execute("INSERT INTO lecturers (name) VALUES (?)", (lecturer.name,))
            saved.append(Lecturer(name=lecturer.name, id=cur.lastrowid))
        con.commit()
    finally:
        con.close()

    logger.info("Saved %d lecturers", len(saved))
    return saved


def import_courses(courses: Iterable[Course], db: str = SINK_DB) -> list[Course]:
    """Insert courses and return copies carrying their new ids, in input order."""
    con = sqlite3.connect(db)
    try:
        cur = con.cursor()
        imported = []
        for c in courses:
            cur.execute(
                "INSERT INTO courses (rootNumber, sn, title) VALUES (?,?,?)",
                (c.root_number, c.serial_number, c.title),
            )
            imported.append(
                Course(
                    root_number=c.root_number,
                    serial_number=c.serial_number,
                    title=c.title,
                    id=cur.lastrowid,
                )
            )
        con.commit()
    finally:
        con.close()

    logger.info("Imported %d courses", len(imported))
    return imported


def import_time_schedule(records: Iterable[MeetingTimeRecord], db: str = SINK_DB) -> int:
    con = sqlite3.connect(db)
    try:
        cur = con.cursor()
        count = 0
        for r in records:
            cur.execute(
                'INSERT INTO coursedate (courseId, start, "end", assessment) VALUES (?,?,?,?)',
                (
                    r.course_id,
                    r.start.isoformat(sep=" "),
                    r.end.isoformat(sep=" "),
                    r.is_assessment,
                ),
            )
            count += 1
        con.commit()
    finally:
        con.close()

    logger.info("Imported %d course dates", count)
    return count
