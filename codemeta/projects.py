"""Project list filtering: free-text search combined with a year pie chart."""

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path

from codemeta.models import Project

logger = logging.getLogger(__name__)


def load_projects(path: Path) -> list[Project]:
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError(f"Expected a list of projects in {path}")
    projects = [Project(**p) for p in raw]
    logger.info("Loaded %d projects from %s", len(projects), path)
    return projects


def matches_query(project: Project, query: str) -> bool:
    return query.lower() in project.search_text()


def matches_year(project: Project, year: str | None) -> bool:
    if year is None:
        return True
    return project.year is not None and str(project.year) == str(year)


def filter_projects(projects: list[Project], query: str = "", year: str | None = None) -> list[Project]:
    """Projects matching the search text AND the selected year, if any."""
    return [p for p in projects if matches_query(p, query) and matches_year(p, year)]


@dataclass(frozen=True)
class PieSlice:
    label: str
    value: int
    start_angle: float  # radians, clockwise from 12 o'clock
    end_angle: float


def pie_slices(projects: list[Project]) -> list[PieSlice]:
    """Project count per year, in first-seen order. Undated projects get no slice.

    Angles are laid out largest slice first (ties by order) but the
    slices are returned in first-seen order, so legend and colour
    indices line up with the data.
    """
    counts: dict[str, int] = {}
    for p in projects:
        if p.year is None:
            continue
        label = str(p.year)
        counts[label] = counts.get(label, 0) + 1

    data = list(counts.items())
    total = sum(counts.values())
    if not total:
        return []

    layout = sorted(range(len(data)), key=lambda i: -data[i][1])
    angles: dict[int, tuple[float, float]] = {}
    angle = 0.0
    for i in layout:
        end = angle + data[i][1] / total * 2 * math.pi
        angles[i] = (angle, end)
        angle = end

    return [
        PieSlice(label=label, value=value, start_angle=angles[i][0], end_angle=angles[i][1])
        for i, (label, value) in enumerate(data)
    ]


class ProjectFilter:
    """Search box and pie selection state for the projects page."""

    def __init__(self, projects: list[Project]) -> None:
        self.projects = projects
        self.query = ""
        self.selected_year: str | None = None

    def search(self, query: str) -> list[Project]:
        self.query = query
        return self.visible()

    def toggle_year(self, label: str | None) -> list[Project]:
        """Select a slice; clicking the active slice again clears it."""
        label = None if label is None else str(label)
        self.selected_year = None if label == self.selected_year else label
        logger.debug("Year filter: %s", self.selected_year)
        return self.visible()

    def visible(self) -> list[Project]:
        return filter_projects(self.projects, self.query, self.selected_year)

    def slices(self) -> list[PieSlice]:
        """Slices for every year matching the search, so any year stays clickable."""
        return pie_slices(filter_projects(self.projects, self.query))
