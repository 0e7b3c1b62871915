import sqlite3

import pytest

import catalog_etl.run as run_module
from catalog_etl.errors import TableNotFoundError
from catalog_etl.run import run


def _course_dates(db):
    con = sqlite3.connect(db)
    try:
        return con.execute(
            'SELECT c.title, d.start, d.assessment FROM coursedate d '
            'JOIN courses c ON c.id = d.courseId ORDER BY d.id'
        ).fetchall()
    finally:
        con.close()


def _break_course(db, root_number):
    con = sqlite3.connect(db)
    con.execute(
        "UPDATE courses SET rawDetail = ? WHERE rootNumber = ?",
        ("<table><tr><td>nothing here</td></tr></table>", root_number),
    )
    con.commit()
    con.close()


def test_full_run(source_db, sink_db):
    summary = run(source_db, sink_db)

    assert summary.lecturers == 3
    assert summary.courses == 3
    assert summary.records == 5
    assert summary.skipped == []
    assert _course_dates(sink_db) == [
        ("Algorithms", "2024-03-04 09:00:00", 0),
        ("Algorithms", "2024-03-06 09:00:00", 0),
        ("Databases", "2024-03-22 14:00:00", 1),
        ("Compilers", "2024-03-05 08:15:00", 0),
        ("Compilers", "2024-03-07 08:15:00", 1),
    ]


def test_abort_on_missing_table(source_db, sink_db):
    _break_course(source_db, 200)

    with pytest.raises(TableNotFoundError):
        run(source_db, sink_db, on_error="abort")

    assert _course_dates(sink_db) == []


def test_skip_on_missing_table(source_db, sink_db, caplog):
    _break_course(source_db, 200)

    with caplog.at_level("WARNING"):
        summary = run(source_db, sink_db, on_error="skip")

    assert len(summary.skipped) == 1
    assert summary.records == 4
    assert [title for title, _, _ in _course_dates(sink_db)] == [
        "Algorithms", "Algorithms", "Compilers", "Compilers",
    ]
    assert "TableNotFoundError" in caplog.text


def test_unknown_policy(source_db, sink_db):
    with pytest.raises(ValueError):
        run(source_db, sink_db, on_error="retry")


def test_abort_closes_source_reader(source_db, sink_db, monkeypatch):
    _break_course(source_db, 200)
    closed = []
    real_iter = run_module.iter_raw_details

    def tracking_iter(courses, db):
        try:
            yield from real_iter(courses, db)
        finally:
            closed.append(True)

    monkeypatch.setattr(run_module, "iter_raw_details", tracking_iter)

    with pytest.raises(TableNotFoundError):
        run(source_db, sink_db, on_error="abort")

    assert closed == [True]
