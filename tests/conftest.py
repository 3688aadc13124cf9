"""Shared test fixtures for codemeta tests."""

from datetime import datetime, timedelta, timezone

import pytest

from codemeta.commits import process_commits
from codemeta.config import ChartConfig, Config
from codemeta.models import Row

URL_BASE = "https://example.com/commit/"
PST = timezone(timedelta(hours=-8))


def make_row(
    commit: str,
    file: str,
    line: int,
    when: datetime,
    type_: str | None = None,
    depth: int = 0,
    length: int = 20,
    author: str = "tanisha",
) -> Row:
    return Row(
        commit=commit,
        file=file,
        type=type_ or file.rsplit(".", 1)[-1],
        line=line,
        depth=depth,
        length=length,
        author=author,
        date=when.replace(hour=0, minute=0, second=0, microsecond=0),
        time=when.strftime("%H:%M:%S"),
        timezone="-08:00",
        datetime=when,
    )


A1_TIME = datetime(2024, 2, 1, 10, 30, tzinfo=PST)
B2_TIME = datetime(2024, 2, 3, 22, 15, tzinfo=PST)
C3_TIME = datetime(2024, 2, 10, 14, 0, tzinfo=PST)


@pytest.fixture()
def sample_rows() -> list[Row]:
    """a1: 3 rows (2 js, 1 css); b2: 2 rows (js); c3: 4 rows (html, js)."""
    return [
        make_row("a1", "x.js", 1, A1_TIME),
        make_row("a1", "x.js", 2, A1_TIME, depth=1, length=30),
        make_row("a1", "y.css", 1, A1_TIME, length=10),
        make_row("b2", "x.js", 3, B2_TIME, depth=2),
        make_row("b2", "x.js", 4, B2_TIME),
        make_row("c3", "index.html", 1, C3_TIME, length=40),
        make_row("c3", "index.html", 2, C3_TIME, depth=3),
        make_row("c3", "x.js", 5, C3_TIME),
        make_row("c3", "index.html", 3, C3_TIME),
    ]


@pytest.fixture()
def sample_commits(sample_rows):
    return process_commits(sample_rows, URL_BASE)


@pytest.fixture()
def chart() -> ChartConfig:
    return ChartConfig()


LOC_CSV = """commit,file,author,date,time,timezone,datetime,line,depth,length,type
a1,x.js,tanisha,2024-02-01,10:30:00,-08:00,2024-02-01T10:30:00-08:00,1,0,20,js
a1,x.js,tanisha,2024-02-01,10:30:00,-08:00,2024-02-01T10:30:00-08:00,2,1,30,js
a1,y.css,tanisha,2024-02-01,10:30:00,-08:00,2024-02-01T10:30:00-08:00,1,0,10,css
b2,x.js,tanisha,2024-02-03,22:15:00,-08:00,2024-02-03T22:15:00-08:00,3,2,20,js
b2,x.js,tanisha,2024-02-03,22:15:00,-08:00,2024-02-03T22:15:00-08:00,4,0,20,js
"""


@pytest.fixture()
def loc_csv(tmp_path):
    path = tmp_path / "loc.csv"
    path.write_text(LOC_CSV)
    return path


@pytest.fixture()
def config(tmp_path, loc_csv) -> Config:
    projects = tmp_path / "projects.json"
    projects.write_text(
        '[{"title": "Lab 1", "year": "2024", "description": "HTML basics"},'
        ' {"title": "Lab 2", "year": "2024", "description": "CSS grid"},'
        ' {"title": "Resume", "year": "2023", "description": "Personal site"}]'
    )
    return Config(
        data_path=str(loc_csv),
        projects_path=str(projects),
        output_dir=str(tmp_path / "out"),
        commit_url_base=URL_BASE,
    )
