"""Interaction controller: owns the commit list and the current chart state.

Every handler recomputes its view from the immutable commits plus the
new input, synchronously, and returns plain data for a renderer to draw.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from codemeta.commits import commit_stats, find_commit, process_commits
from codemeta.composition import FileGroup, TypeColors, file_groups
from codemeta.config import ChartConfig, Config
from codemeta.joins import Join, keyed_join
from codemeta.loader import load_rows
from codemeta.models import Commit, CommitStats, Region, Row, SelectionSummary
from codemeta.narrative import filter_by_index, filter_until, format_full_date, progress_to_time
from codemeta.scales import Scales, build_scales, draw_order
from codemeta.selection import is_commit_selected, normalize_region, summarize_selection

logger = logging.getLogger(__name__)


@dataclass
class ChartContext:
    """Mutable chart state shared by the handlers."""
    scales: Scales
    region: Region | None = None
    cutoff: datetime | None = None  # None shows every commit
    dot_keys: list[str] = field(default_factory=list)
    file_keys: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DotMark:
    id: str
    cx: float
    cy: float
    r: float
    selected: bool


@dataclass(frozen=True)
class Tooltip:
    id: str
    url: str
    date: str
    time: str
    author: str
    lines: int


@dataclass
class NarrativeView:
    cutoff: datetime | None
    commits: list[Commit]
    dots: list[DotMark]
    dot_join: Join[DotMark]
    files: list[FileGroup]
    file_join: Join[FileGroup]
    selection: SelectionSummary


class MetaController:
    def __init__(self, rows: list[Row], commits: list[Commit], chart: ChartConfig) -> None:
        self.rows = rows
        self.commits = commits
        self.chart = chart
        self.colors = TypeColors()
        self.context = ChartContext(scales=build_scales(commits, commits, chart))

    @classmethod
    def from_rows(cls, rows: list[Row], config: Config) -> "MetaController":
        commits = process_commits(rows, config.commit_url_base)
        return cls(rows, commits, config.chart)

    @classmethod
    def load(cls, config: Config) -> "MetaController":
        """Load loc.csv. A ParseError aborts before any view exists."""
        rows = load_rows(config.resolved_data_path)
        return cls.from_rows(rows, config)

    # --- Derived state ---

    @property
    def displayed(self) -> list[Commit]:
        if self.context.cutoff is None:
            return self.commits
        return filter_until(self.commits, self.context.cutoff)

    def stats(self) -> CommitStats:
        return commit_stats(self.rows, self.commits)

    def _is_selected(self, commit: Commit) -> bool:
        return is_commit_selected(self.context.region, commit, self.context.scales.point)

    def dots(self) -> list[DotMark]:
        scales = self.context.scales
        marks: list[DotMark] = []
        for commit in draw_order(self.displayed):
            cx, cy = scales.point(commit)
            marks.append(DotMark(
                id=commit.id,
                cx=cx,
                cy=cy,
                r=scales.radius(commit),
                selected=self._is_selected(commit),
            ))
        return marks

    def selection(self) -> SelectionSummary:
        return summarize_selection(self.context.region, self.displayed, self.context.scales.point)

    def files(self) -> list[FileGroup]:
        return file_groups(self.displayed, self.colors)

    # --- Handlers ---

    def brushed(self, region: Region | None) -> SelectionSummary:
        """Brush start/move/end."""
        self.context.region = normalize_region(region)
        return self.selection()

    def set_time(self, cutoff: datetime | None) -> NarrativeView:
        """Reveal commits up to ``cutoff`` and rebind the scales to them."""
        self.context.cutoff = cutoff
        displayed = self.displayed
        self.context.scales = build_scales(displayed, self.commits, self.chart)

        dots = self.dots()
        files = self.files()
        dot_join = keyed_join(self.context.dot_keys, dots, lambda d: d.id)
        file_join = keyed_join(self.context.file_keys, files, lambda g: g.name)
        self.context.dot_keys = dot_join.keys
        self.context.file_keys = file_join.keys

        logger.debug("Cursor at %s: %d of %d commits", cutoff, len(displayed), len(self.commits))
        return NarrativeView(
            cutoff=cutoff,
            commits=displayed,
            dots=dots,
            dot_join=dot_join,
            files=files,
            file_join=file_join,
            selection=self.selection(),
        )

    def set_cursor(self, index: int) -> NarrativeView:
        """Scroll step entered: reveal up to the commit at ``index``."""
        if not self.commits:
            return self.set_time(None)
        revealed = filter_by_index(self.commits, index)
        return self.set_time(max(c.datetime for c in revealed))

    def set_progress(self, progress: float) -> NarrativeView:
        """Slider moved (0-100)."""
        if not self.commits:
            return self.set_time(None)
        return self.set_time(progress_to_time(self.commits, progress))

    # --- Tooltip ---

    def tooltip(self, commit: Commit | None) -> Tooltip | None:
        if commit is None:
            return None
        return Tooltip(
            id=commit.id,
            url=commit.url,
            date=format_full_date(commit.datetime),
            time=commit.time,
            author=commit.author,
            lines=commit.total_lines,
        )

    def hover(self, commit_id: str) -> Tooltip | None:
        return self.tooltip(find_commit(self.commits, commit_id))

    def tooltip_position(self, client_x: float, client_y: float) -> tuple[float, float]:
        return client_x + self.chart.tooltip_offset_x, client_y + self.chart.tooltip_offset_y
