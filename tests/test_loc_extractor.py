"""Tests for the git blame based loc extractor."""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from codemeta.config import ExtractionConfig
from codemeta.extractors.loc_extractor import LocExtractor, blame_rows, file_type, line_depth

IST = timezone(timedelta(hours=5, minutes=30))


def fake_commit(sha: str, when: datetime, author: str = "tanisha"):
    return SimpleNamespace(
        hexsha=sha,
        authored_datetime=when,
        author=SimpleNamespace(name=author),
    )


class TestFileType:
    def test_extension(self):
        assert file_type("src/app.js") == "js"
        assert file_type("Styles/Main.CSS") == "css"

    def test_no_extension(self):
        assert file_type("Makefile") == ""
        assert file_type(".gitignore") == ""


class TestLineDepth:
    def test_spaces(self):
        assert line_depth("    return x;", indent_width=2) == 2
        assert line_depth("    return x;", indent_width=4) == 1

    def test_tabs(self):
        assert line_depth("\t\tfoo") == 2

    def test_flat(self):
        assert line_depth("foo") == 0
        assert line_depth("") == 0


class TestBlameRows:
    def test_rows_numbered_across_blame_chunks(self):
        old = fake_commit("aaa", datetime(2024, 1, 5, 9, 0, tzinfo=IST))
        new = fake_commit("bbb", datetime(2024, 2, 1, 23, 45, 10, tzinfo=IST))
        blame = [
            (old, ["<html>", "  <body>"]),
            (new, [b"    <p>hi</p>"]),
            (old, ["</html>"]),
        ]
        rows = blame_rows("index.html", blame, indent_width=2)

        assert [r.line for r in rows] == [1, 2, 3, 4]
        assert [r.commit for r in rows] == ["aaa", "aaa", "bbb", "aaa"]
        assert [r.depth for r in rows] == [0, 1, 2, 0]
        assert rows[2].length == len("    <p>hi</p>")
        assert rows[2].type == "html"

    def test_timestamp_fields(self):
        when = datetime(2024, 2, 1, 23, 45, 10, tzinfo=IST)
        rows = blame_rows("a.js", [(fake_commit("bbb", when), ["x"])])
        row = rows[0]
        assert row.timezone == "+05:30"
        assert row.time == "23:45:10"
        assert row.datetime == when
        assert row.date == datetime(2024, 2, 1, tzinfo=IST)
        assert row.author == "tanisha"

    def test_empty_blame(self):
        assert blame_rows("a.js", []) == []


class TestLocExtractor:
    def test_no_git_dir(self, tmp_path):
        assert LocExtractor(tmp_path).extract() == []

    def test_wanted_filters(self, tmp_path):
        (tmp_path / "node_modules").mkdir()
        for name in ("app.js", "node_modules/lib.js", "logo.png", "big.js"):
            (tmp_path / name).write_text("x")
        (tmp_path / "big.js").write_text("x" * 50)
        extractor = LocExtractor(tmp_path, ExtractionConfig(max_file_size=10))
        assert extractor.wanted("app.js")
        assert not extractor.wanted("node_modules/lib.js")
        assert not extractor.wanted("logo.png")
        assert not extractor.wanted("big.js")
        assert not extractor.wanted("missing.js")

    # mock-ok: a real repository with controlled history is heavy to build in tests
    @patch("codemeta.extractors.loc_extractor.Git")
    def test_extract_skips_failing_files(self, mock_git_cls, tmp_path):
        (tmp_path / ".git").mkdir()
        (tmp_path / "a.js").write_text("x\n")
        (tmp_path / "b.js").write_text("y\n")

        commit = fake_commit("abc", datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc))

        def blame(rev, path):
            if path == "b.js":
                raise RuntimeError("boom")
            return [(commit, ["x"])]

        git = MagicMock()
        git.repo.git.ls_files.return_value = "a.js\nb.js\nREADME"
        git.repo.blame.side_effect = blame
        mock_git_cls.return_value = git

        rows = LocExtractor(tmp_path).extract()
        assert [(r.file, r.commit) for r in rows] == [("a.js", "abc")]
        git.clear.assert_called_once()
