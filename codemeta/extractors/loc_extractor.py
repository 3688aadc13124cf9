"""Build loc.csv rows from a git repository using PyDriller's git wrapper.

Every line of every tracked source file at HEAD becomes one row,
attributed through git blame to the commit that last touched it.
"""

import logging
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from typing import Any

from pydriller import Git

from codemeta.config import ExtractionConfig
from codemeta.models import Row

logger = logging.getLogger(__name__)


def file_type(path: str) -> str:
    """Language label from the file extension ('src/app.js' -> 'js')."""
    name = path.rsplit("/", 1)[-1]
    if "." not in name.lstrip("."):
        return ""
    return name.rsplit(".", 1)[-1].lower()


def line_depth(text: str, indent_width: int = 2) -> int:
    """Nesting level from leading whitespace. Tabs count one level each."""
    tabs = 0
    spaces = 0
    for ch in text:
        if ch == "\t":
            tabs += 1
        elif ch == " ":
            spaces += 1
        else:
            break
    return tabs + spaces // max(indent_width, 1)


def _offset(ts: datetime) -> str:
    """'-0800' -> '-08:00'"""
    z = ts.strftime("%z") or "+0000"
    return f"{z[:3]}:{z[3:5]}"


def blame_rows(
    path: str,
    blame: Iterable[tuple[Any, list[str | bytes]]],
    indent_width: int = 2,
) -> list[Row]:
    """Turn git blame output for one file into rows, in line order."""
    rows: list[Row] = []
    ftype = file_type(path)
    line_no = 0
    for commit, lines in blame:
        ts = commit.authored_datetime
        tz = _offset(ts)
        for raw in lines:
            text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
            line_no += 1
            rows.append(Row(
                commit=commit.hexsha,
                file=path,
                type=ftype,
                line=line_no,
                depth=line_depth(text, indent_width),
                length=len(text),
                author=commit.author.name,
                date=ts.replace(hour=0, minute=0, second=0, microsecond=0),
                time=ts.strftime("%H:%M:%S"),
                timezone=tz,
                datetime=ts,
            ))
    return rows


class LocExtractor:
    """Extract per-line ownership rows from a git checkout."""

    def __init__(self, project_path: Path, config: ExtractionConfig | None = None) -> None:
        self.project_path = project_path
        self.config = config or ExtractionConfig()

    @property
    def project_name(self) -> str:
        return self.project_path.name

    def wanted(self, path: str) -> bool:
        if any(pattern in path for pattern in self.config.exclude_patterns):
            return False
        if file_type(path) not in self.config.include_extensions:
            return False
        full = self.project_path / path
        return full.is_file() and full.stat().st_size <= self.config.max_file_size

    def extract(self) -> list[Row]:
        if not (self.project_path / ".git").exists():
            logger.warning("No .git directory found at %s", self.project_path)
            return []

        git = Git(str(self.project_path))
        rows: list[Row] = []
        try:
            tracked = git.repo.git.ls_files().splitlines()
            for path in tracked:
                if not self.wanted(path):
                    continue
                try:
                    blame = git.repo.blame("HEAD", path)
                    rows.extend(blame_rows(path, blame, self.config.indent_width))
                except Exception:
                    logger.debug("Skipping blame for %s (file-level error)", path, exc_info=True)
        finally:
            git.clear()

        logger.info(
            "Extracted %d lines from %d tracked files in %s",
            len(rows), len(tracked), self.project_name,
        )
        return rows
