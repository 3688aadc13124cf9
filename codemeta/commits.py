"""Group line rows into commits and summarize the codebase."""

import logging

from codemeta.models import Commit, CommitStats, Row

logger = logging.getLogger(__name__)


def group_rows(rows: list[Row], key: str) -> dict[str, list[Row]]:
    """Group rows by an attribute, keeping first-seen key order and row order."""
    groups: dict[str, list[Row]] = {}
    for row in rows:
        groups.setdefault(getattr(row, key), []).append(row)
    return groups


def process_commits(rows: list[Row], url_base: str) -> list[Commit]:
    """Build one Commit per distinct commit id, in first-encountered order.

    Author and timestamps come from the group's first row; rows of one
    commit are expected to agree on them.
    """
    commits = [
        Commit.from_rows(commit_id, lines, url_base)
        for commit_id, lines in group_rows(rows, "commit").items()
    ]
    logger.debug("Aggregated %d rows into %d commits", len(rows), len(commits))
    return commits


def find_commit(commits: list[Commit], commit_id: str) -> Commit:
    for commit in commits:
        if commit.id == commit_id:
            return commit
    raise ValueError(f"Commit not found: {commit_id}")


def commit_stats(rows: list[Row], commits: list[Commit]) -> CommitStats:
    """Headline numbers for the stats panel."""
    if not rows:
        return CommitStats(total_commits=len(commits))

    return CommitStats(
        total_loc=len(rows),
        total_commits=len(commits),
        files=len(group_rows(rows, "file")),
        longest_file=max(r.line for r in rows),
        average_line_length=round(sum(r.length for r in rows) / len(rows), 2),
        max_depth=max(r.depth for r in rows),
    )
