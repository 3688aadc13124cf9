"""File composition view: one dot per line, grouped by file, biggest file first."""

import logging
from dataclasses import dataclass, field

from codemeta.commits import group_rows
from codemeta.models import Commit, Row

logger = logging.getLogger(__name__)

TABLEAU10 = [
    "#4e79a7", "#f28e2b", "#e15759", "#76b7b2", "#59a14f",
    "#edc948", "#b07aa1", "#ff9da7", "#9c755f", "#bab0ac",
]


class TypeColors:
    """Ordinal colour scale: each new type takes the next palette colour."""

    def __init__(self, palette: list[str] | None = None) -> None:
        self.palette = palette or TABLEAU10
        self._assigned: dict[str, str] = {}

    def __call__(self, type_: str) -> str:
        if type_ not in self._assigned:
            self._assigned[type_] = self.palette[len(self._assigned) % len(self.palette)]
        return self._assigned[type_]

    @property
    def assigned(self) -> dict[str, str]:
        return dict(self._assigned)


@dataclass(frozen=True)
class FileUnit:
    line: int
    type: str
    color: str


@dataclass
class FileGroup:
    name: str
    lines: list[Row] = field(default_factory=list)
    units: list[FileUnit] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.lines)


def file_groups(commits: list[Commit], colors: TypeColors | None = None) -> list[FileGroup]:
    """Group the commits' lines by file, largest first.

    Ties keep first-seen file order and lines keep load order, so unit
    positions track physical line order.
    """
    colors = colors or TypeColors()
    rows = [row for commit in commits for row in commit.lines]
    groups = [
        FileGroup(
            name=name,
            lines=lines,
            units=[FileUnit(line=r.line, type=r.type, color=colors(r.type)) for r in lines],
        )
        for name, lines in group_rows(rows, "file").items()
    ]
    groups.sort(key=lambda g: -g.size)
    logger.debug("Composed %d files from %d lines", len(groups), len(rows))
    return groups
