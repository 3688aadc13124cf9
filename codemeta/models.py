"""Pydantic models for codemeta."""

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, computed_field

# [[x0, y0], [x1, y1]] in screen coordinates, as produced by a brush.
Region = tuple[tuple[float, float], tuple[float, float]]

ROW_COLUMNS = [
    "commit", "file", "author", "date", "time", "timezone",
    "datetime", "line", "depth", "length", "type",
]


# --- Loaded records ---


class Row(BaseModel):
    """One line of source code, attributed to the commit that last touched it."""
    model_config = ConfigDict(frozen=True)

    commit: str
    file: str
    type: str
    line: int = Field(ge=1)
    depth: int = Field(ge=0)
    length: int = Field(ge=0)
    author: str
    date: dt.datetime  # midnight of the commit day in the commit's timezone
    time: str
    timezone: str
    datetime: dt.datetime


class Commit(BaseModel):
    """All rows sharing one commit id.

    The rows are held in a private attribute so they stay out of
    model_dump(), iteration and equality; read them through ``lines``.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    url: str
    author: str
    date: dt.datetime
    time: str
    timezone: str
    datetime: dt.datetime
    total_lines: int

    _lines: tuple[Row, ...] = PrivateAttr(default=())

    @classmethod
    def from_rows(cls, commit_id: str, rows: list[Row], url_base: str) -> "Commit":
        first = rows[0]
        commit = cls(
            id=commit_id,
            url=url_base + commit_id,
            author=first.author,
            date=first.date,
            time=first.time,
            timezone=first.timezone,
            datetime=first.datetime,
            total_lines=len(rows),
        )
        commit._lines = tuple(rows)
        return commit

    @property
    def lines(self) -> tuple[Row, ...]:
        return self._lines

    @computed_field  # type: ignore[prop-decorator]
    @property
    def hour_frac(self) -> float:
        """Wall-clock hour in the commit's own timezone, as a fraction."""
        return self.datetime.hour + self.datetime.minute / 60

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Commit):
            return NotImplemented
        return self.__dict__ == other.__dict__

    def __hash__(self) -> int:
        return hash(self.id)


class Project(BaseModel):
    """A portfolio project record. Unknown keys are kept and searchable."""
    model_config = ConfigDict(extra="allow")

    title: str
    year: str | int | None = None
    description: str | None = None
    image: str | None = None

    def search_text(self) -> str:
        """All field values joined by newlines, lowercased."""
        values: dict[str, Any] = self.model_dump()
        return "\n".join("" if v is None else str(v) for v in values.values()).lower()


# --- Derived summaries ---


class CommitStats(BaseModel):
    total_loc: int = 0
    total_commits: int = 0
    files: int = 0
    longest_file: int | None = None  # highest line number seen
    average_line_length: float | None = None
    max_depth: int | None = None


class LanguageStat(BaseModel):
    type: str
    lines: int
    proportion: float
    formatted: str


class SelectionSummary(BaseModel):
    """Brush result. ``count`` covers the selected commits only; ``breakdown``
    falls back to every commit when nothing is selected."""
    count: int
    label: str
    selected_ids: list[str]
    breakdown: list[LanguageStat]
