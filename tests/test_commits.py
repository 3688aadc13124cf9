"""Tests for commit aggregation and codebase stats."""

from collections import Counter

import pytest
from pydantic import ValidationError

from codemeta.commits import commit_stats, find_commit, process_commits
from conftest import A1_TIME, URL_BASE, make_row


class TestProcessCommits:
    def test_one_commit_per_id_in_first_seen_order(self, sample_commits):
        assert [c.id for c in sample_commits] == ["a1", "b2", "c3"]

    def test_total_lines(self, sample_commits):
        assert [c.total_lines for c in sample_commits] == [3, 2, 4]
        for commit in sample_commits:
            assert commit.total_lines == len(commit.lines)

    def test_rows_partitioned_exactly_once(self, sample_rows, sample_commits):
        owned = [row for c in sample_commits for row in c.lines]
        assert Counter(r.model_dump_json() for r in owned) == Counter(
            r.model_dump_json() for r in sample_rows
        )

    def test_first_row_fields(self, sample_commits):
        a1 = sample_commits[0]
        assert a1.url == URL_BASE + "a1"
        assert a1.author == "tanisha"
        assert a1.datetime == A1_TIME
        assert a1.time == "10:30:00"
        assert a1.timezone == "-08:00"

    def test_hour_frac(self, sample_commits):
        assert sample_commits[0].hour_frac == pytest.approx(10.5)
        assert sample_commits[1].hour_frac == pytest.approx(22.25)

    def test_interleaved_rows_keep_group_order(self):
        rows = [
            make_row("b", "f.js", 1, A1_TIME),
            make_row("a", "f.js", 2, A1_TIME),
            make_row("b", "f.js", 3, A1_TIME),
        ]
        commits = process_commits(rows, URL_BASE)
        assert [c.id for c in commits] == ["b", "a"]
        assert [r.line for r in commits[0].lines] == [1, 3]

    def test_empty_rows(self):
        assert process_commits([], URL_BASE) == []


class TestCommitLinesHidden:
    def test_lines_not_in_dump(self, sample_commits):
        dumped = sample_commits[0].model_dump()
        assert "lines" not in dumped
        assert "_lines" not in dumped
        assert dumped["hour_frac"] == pytest.approx(10.5)

    def test_lines_not_in_field_iteration(self, sample_commits):
        names = [name for name, _ in sample_commits[0]]
        assert "lines" not in names
        assert "_lines" not in names

    def test_lines_read_only(self, sample_commits):
        assert isinstance(sample_commits[0].lines, tuple)
        with pytest.raises(ValidationError):
            sample_commits[0].total_lines = 99

    def test_equality_ignores_lines(self, sample_commits):
        a1 = sample_commits[0]
        twin = a1.model_copy()
        assert twin == a1
        assert hash(twin) == hash(a1)


class TestFindCommit:
    def test_found(self, sample_commits):
        assert find_commit(sample_commits, "b2").total_lines == 2

    def test_unknown_raises(self, sample_commits):
        with pytest.raises(ValueError, match="Commit not found"):
            find_commit(sample_commits, "zzz")


class TestCommitStats:
    def test_summary(self, sample_rows, sample_commits):
        stats = commit_stats(sample_rows, sample_commits)
        assert stats.total_loc == 9
        assert stats.total_commits == 3
        assert stats.files == 3
        assert stats.longest_file == 5
        assert stats.max_depth == 3
        assert stats.average_line_length == round((20 * 6 + 30 + 10 + 40) / 9, 2)

    def test_empty(self):
        stats = commit_stats([], [])
        assert stats.total_loc == 0
        assert stats.total_commits == 0
        assert stats.longest_file is None
        assert stats.average_line_length is None
