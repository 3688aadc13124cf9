"""Progressive reveal of commits as the reader scrolls through the story."""

import logging
from dataclasses import dataclass
from datetime import datetime

from codemeta.models import Commit

logger = logging.getLogger(__name__)


def format_full_date(t: datetime) -> str:
    """'Thursday, February 1, 2024'"""
    return f"{t:%A}, {t:%B} {t.day}, {t.year}"


def format_short_time(t: datetime) -> str:
    """'2:05 PM'"""
    hour = t.hour % 12 or 12
    return f"{hour}:{t:%M} {t:%p}"


def filter_until(commits: list[Commit], cutoff: datetime) -> list[Commit]:
    """Commits at or before the cutoff, in their original order."""
    return [c for c in commits if c.datetime <= cutoff]


def filter_by_index(commits: list[Commit], index: int) -> list[Commit]:
    """Everything revealed once the narrative reaches ``commits[index]``."""
    if not 0 <= index < len(commits):
        raise IndexError(f"Narrative step {index} out of range (0..{len(commits) - 1})")
    return filter_until(commits, commits[index].datetime)


def progress_to_time(commits: list[Commit], progress: float) -> datetime:
    """Map a 0-100 slider position onto the commit time range."""
    if not commits:
        raise ValueError("No commits to map progress onto")
    times = [c.datetime for c in commits]
    start, end = min(times), max(times)
    progress = min(max(progress, 0.0), 100.0)
    return start + (end - start) * (progress / 100)


@dataclass
class NarrativeStep:
    index: int
    commit_id: str
    url: str
    when: str
    lines: int
    files: int
    link_text: str  # the part of ``text`` that links to the commit
    text: str


def narrative_steps(commits: list[Commit]) -> list[NarrativeStep]:
    """One paragraph of story per commit, in narrative order."""
    steps: list[NarrativeStep] = []
    for i, commit in enumerate(commits):
        files = len({row.file for row in commit.lines})
        when = f"{format_full_date(commit.datetime)} at {format_short_time(commit.datetime)}"
        what = "another glorious commit" if i > 0 else "my first commit, and it was glorious"
        text = (
            f"On {when}, I made {what}. "
            f"I edited {commit.total_lines} lines across {files} files. "
            "Then I looked over all I had made, and I saw that it was very good."
        )
        steps.append(NarrativeStep(
            index=i,
            commit_id=commit.id,
            url=commit.url,
            when=when,
            lines=commit.total_lines,
            files=files,
            link_text=what,
            text=text,
        ))
    return steps
