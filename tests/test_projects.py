"""Tests for the project search and year pie filter."""

import math

import pytest

from codemeta.models import Project
from codemeta.projects import ProjectFilter, filter_projects, load_projects, pie_slices


@pytest.fixture()
def projects() -> list[Project]:
    return [
        Project(title="Lab 1", year="2024", description="HTML basics"),
        Project(title="Lab 2", year="2024", description="CSS grid layout"),
        Project(title="Resume", year="2023", description="Personal site"),
        Project(title="Pie charts", year=2022, description="D3 practice", image="pie.png"),
    ]


class TestFilterProjects:
    def test_no_filters(self, projects):
        assert filter_projects(projects) == projects

    def test_query_case_insensitive(self, projects):
        assert [p.title for p in filter_projects(projects, "css")] == ["Lab 2"]
        assert [p.title for p in filter_projects(projects, "LAB")] == ["Lab 1", "Lab 2"]

    def test_query_matches_any_field(self, projects):
        assert [p.title for p in filter_projects(projects, "pie.png")] == ["Pie charts"]
        assert [p.title for p in filter_projects(projects, "2023")] == ["Resume"]

    def test_year_filter(self, projects):
        assert [p.title for p in filter_projects(projects, year="2024")] == ["Lab 1", "Lab 2"]

    def test_year_compared_as_string(self, projects):
        assert [p.title for p in filter_projects(projects, year="2022")] == ["Pie charts"]

    def test_filters_combine(self, projects):
        assert [p.title for p in filter_projects(projects, "basics", "2024")] == ["Lab 1"]
        assert filter_projects(projects, "basics", "2023") == []

    def test_extra_fields_searchable(self):
        p = Project(title="X", year="2024", url="https://demo.example")
        assert filter_projects([p], "demo.example") == [p]

    def test_undated_project_never_matches_a_year(self):
        undated = Project(title="Draft")
        assert filter_projects([undated], year="None") == []
        assert filter_projects([undated]) == [undated]


class TestPieSlices:
    def test_counts_in_first_seen_order(self, projects):
        slices = pie_slices(projects)
        assert [(s.label, s.value) for s in slices] == [("2024", 2), ("2023", 1), ("2022", 1)]

    def test_angles_cover_circle(self, projects):
        slices = pie_slices(projects)
        total = sum(s.end_angle - s.start_angle for s in slices)
        assert total == pytest.approx(2 * math.pi)

    def test_largest_laid_out_first(self, projects):
        slices = pie_slices(projects)
        assert slices[0].start_angle == 0
        assert slices[0].end_angle == pytest.approx(math.pi)

    def test_empty(self):
        assert pie_slices([]) == []

    def test_undated_projects_skipped(self, projects):
        slices = pie_slices(projects + [Project(title="Draft")])
        assert [s.label for s in slices] == ["2024", "2023", "2022"]
        assert sum(s.end_angle - s.start_angle for s in slices) == pytest.approx(2 * math.pi)

    def test_only_undated(self):
        assert pie_slices([Project(title="Draft")]) == []


class TestProjectFilter:
    def test_toggle_year(self, projects):
        f = ProjectFilter(projects)
        assert [p.title for p in f.toggle_year("2023")] == ["Resume"]
        assert f.selected_year == "2023"
        assert f.toggle_year("2023") == projects
        assert f.selected_year is None

    def test_switch_year(self, projects):
        f = ProjectFilter(projects)
        f.toggle_year("2023")
        assert [p.title for p in f.toggle_year(2024)] == ["Lab 1", "Lab 2"]

    def test_search_keeps_year(self, projects):
        f = ProjectFilter(projects)
        f.toggle_year("2024")
        assert [p.title for p in f.search("grid")] == ["Lab 2"]
        assert [p.title for p in f.search("resume")] == []

    def test_slices_ignore_year_selection(self, projects):
        f = ProjectFilter(projects)
        f.toggle_year("2024")
        assert [s.label for s in f.slices()] == ["2024", "2023", "2022"]
        f.search("lab")
        assert [s.label for s in f.slices()] == ["2024"]


class TestLoadProjects:
    def test_load(self, config):
        loaded = load_projects(config.resolved_projects_path)
        assert [p.title for p in loaded] == ["Lab 1", "Lab 2", "Resume"]

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "p.json"
        path.write_text('{"title": "x"}')
        with pytest.raises(ValueError):
            load_projects(path)
