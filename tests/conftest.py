import sqlite3

import pytest


def schedule_page(*rows):
    """A detail page with a layout table and the bordered 9-column schedule grid."""
    body = "".join(
        "<tr><td>1</td>"
        f"<td>{weekday}</td><td>{date}</td><td>{begin}</td><td>{end}</td>"
        f"<td>{assessment}</td><td></td><td></td><td></td></tr>"
        for weekday, date, begin, end, assessment in rows
    )
    return (
        "<html><body>"
        "<table><tr><td>Course details</td></tr></table>"
        '<table border="1"><colgroup>' + "<col>" * 9 + "</colgroup>"
        "<tr><th>#</th><th>Day</th><th>Date</th><th>From</th><th>To</th><th>Exam</th></tr>"
        + body
        + "</table></body></html>"
    )


@pytest.fixture
def source_db(tmp_path):
    path = tmp_path / "source.db"
    con = sqlite3.connect(path)
    con.execute(
        "CREATE TABLE courses (rootNumber INTEGER, sn INTEGER, title TEXT, lecturer TEXT, rawDetail TEXT)"
    )
    con.executemany(
        "INSERT INTO courses VALUES (?,?,?,?,?)",
        [
            (
                100, 1, "Algorithms", "Ada Lovelace, Alan Turing",
                schedule_page(
                    ("Mon", "4/3/2024", "09:00", "10:30", "No"),
                    ("Wed", "6/3/2024", "09:00", "10:30", "No"),
                ),
            ),
            (
                200, 2, "Databases", "",
                schedule_page(("Fri", "22/3/2024", "14:00", "16:00", "Yes")),
            ),
            (
                300, 1, "Compilers", "Alan Turing,Grace Hopper",
                schedule_page(
                    ("Tue", "5/3/2024", "08:15", "09:45", "No"),
                    ("Thu", "7/3/2024", "08:15", "09:45", ""),
                ),
            ),
        ],
    )
    con.commit()
    con.close()
    return str(path)


@pytest.fixture
def sink_db(tmp_path):
    return str(tmp_path / "sink.db")
