"""Brush selection over the scatter plot and the per-language breakdown."""

import logging
from collections.abc import Callable

from codemeta.models import Commit, LanguageStat, Region, SelectionSummary

logger = logging.getLogger(__name__)

ToScreen = Callable[[Commit], tuple[float, float]]


def normalize_region(region: Region | None) -> Region | None:
    """Sort the corners so a reversed drag covers the same rectangle."""
    if region is None:
        return None
    (ax, ay), (bx, by) = region
    return (min(ax, bx), min(ay, by)), (max(ax, bx), max(ay, by))


def is_commit_selected(region: Region | None, commit: Commit, to_screen: ToScreen) -> bool:
    """Whether the commit's dot falls inside the region, edges included.

    ``to_screen`` must reflect the scales currently on screen.
    """
    region = normalize_region(region)
    if region is None:
        return False
    (x0, y0), (x1, y1) = region
    x, y = to_screen(commit)
    return x0 <= x <= x1 and y0 <= y <= y1


def select_commits(region: Region | None, commits: list[Commit], to_screen: ToScreen) -> list[Commit]:
    if region is None:
        return []
    return [c for c in commits if is_commit_selected(region, c, to_screen)]


def selection_count_label(selected: list[Commit]) -> str:
    return f"{len(selected) or 'No'} commits selected"


def format_percent(proportion: float) -> str:
    """0.3333 -> '33.3%', 0.5 -> '50%'."""
    text = f"{proportion * 100:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return f"{text}%"


def language_breakdown(selected: list[Commit], commits: list[Commit]) -> list[LanguageStat]:
    """Line counts per type for the selection, or for every commit if none is selected."""
    backing = selected or commits
    lines = [row for commit in backing for row in commit.lines]
    if not lines:
        return []

    counts: dict[str, int] = {}
    for row in lines:
        counts[row.type] = counts.get(row.type, 0) + 1

    total = len(lines)
    return [
        LanguageStat(
            type=language,
            lines=count,
            proportion=count / total,
            formatted=format_percent(count / total),
        )
        for language, count in counts.items()
    ]


def summarize_selection(
    region: Region | None,
    commits: list[Commit],
    to_screen: ToScreen,
) -> SelectionSummary:
    """Count over the selection; breakdown over the selection or everything."""
    selected = select_commits(region, commits, to_screen)
    logger.debug("Selection %s matched %d of %d commits", region, len(selected), len(commits))
    return SelectionSummary(
        count=len(selected),
        label=selection_count_label(selected),
        selected_ids=[c.id for c in selected],
        breakdown=language_breakdown(selected, commits),
    )
