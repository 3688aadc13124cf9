"""CLI entry point for codemeta."""

import argparse
import logging
from pathlib import Path

from codemeta.config import load_config
from codemeta.controller import MetaController
from codemeta.extractors.loc_extractor import LocExtractor
from codemeta.loader import write_rows
from codemeta.narrative import narrative_steps
from codemeta.output.page import generate_page
from codemeta.output.pie import render_pie
from codemeta.projects import ProjectFilter, load_projects


def main() -> None:
    parser = argparse.ArgumentParser(description="Commit history explorer")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    sub = parser.add_subparsers(dest="command")

    # extract command
    extract_parser = sub.add_parser("extract", help="Build loc.csv from a git repository")
    extract_parser.add_argument("repo_path", help="Path to the git checkout")
    extract_parser.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Where to write loc.csv (defaults to data_path from config)",
    )

    # stats command
    sub.add_parser("stats", help="Show codebase summary")

    # render command
    render_parser = sub.add_parser("render", help="Write scatter.png and index.html")
    render_parser.add_argument(
        "--cursor", type=int, default=None,
        help="Narrative step to reveal up to (commit index)",
    )
    render_parser.add_argument(
        "--progress", type=float, default=None,
        help="Reveal commits up to this point of the time range (0-100)",
    )
    render_parser.add_argument(
        "--select", type=float, nargs=4, metavar=("X0", "Y0", "X1", "Y1"), default=None,
        help="Brush region in chart pixels",
    )

    # select command
    select_parser = sub.add_parser("select", help="Count and break down commits in a region")
    select_parser.add_argument("region", type=float, nargs=4, metavar=("X0", "Y0", "X1", "Y1"))
    select_parser.add_argument("--cursor", type=int, default=None, help="Narrative step")

    # narrative command
    sub.add_parser("narrative", help="Print the commit story")

    # projects command
    projects_parser = sub.add_parser("projects", help="Filter portfolio projects")
    projects_parser.add_argument("-q", "--query", default="", help="Search text")
    projects_parser.add_argument("--year", default=None, help="Year slice to filter by")
    projects_parser.add_argument(
        "--pie", type=Path, default=None,
        help="Also render the year pie chart to this PNG",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "extract":
        extractor = LocExtractor(Path(args.repo_path).resolve(), config.extraction)
        rows = extractor.extract()
        output = args.output or config.resolved_data_path
        write_rows(rows, output)
        print(f"{len(rows)} lines written to {output}")

    elif args.command == "stats":
        controller = MetaController.load(config)
        stats = controller.stats()
        print(f"  Total LOC:           {stats.total_loc}")
        print(f"  Total commits:       {stats.total_commits}")
        print(f"  Number of files:     {stats.files}")
        print(f"  Longest file:        {stats.longest_file}")
        print(f"  Average line length: {stats.average_line_length}")
        print(f"  Max depth:           {stats.max_depth}")

    elif args.command == "render":
        controller = MetaController.load(config)
        if args.cursor is not None:
            controller.set_cursor(args.cursor)
        elif args.progress is not None:
            controller.set_progress(args.progress)
        if args.select:
            x0, y0, x1, y1 = args.select
            controller.brushed(((x0, y0), (x1, y1)))
        path = generate_page(controller, config.resolved_output_dir)
        print(f"Output: {path}")

    elif args.command == "select":
        controller = MetaController.load(config)
        if args.cursor is not None:
            controller.set_cursor(args.cursor)
        x0, y0, x1, y1 = args.region
        summary = controller.brushed(((x0, y0), (x1, y1)))
        print(summary.label)
        for s in summary.breakdown:
            print(f"  {s.type}: {s.lines} lines ({s.formatted})")

    elif args.command == "narrative":
        controller = MetaController.load(config)
        for step in narrative_steps(controller.commits):
            print(f"[{step.index}] {step.text}")

    elif args.command == "projects":
        project_filter = ProjectFilter(load_projects(config.resolved_projects_path))
        project_filter.search(args.query)
        if args.year is not None:
            project_filter.toggle_year(args.year)
        visible = project_filter.visible()
        for p in visible:
            print(f"  {p.year}  {p.title}")
        print(f"\n{len(visible)} of {len(project_filter.projects)} projects")
        if args.pie:
            render_pie(project_filter.slices(), project_filter.selected_year, args.pie)
            print(f"Pie: {args.pie}")

    else:
        parser.print_help()


if __name__ == "__main__":
    main()
