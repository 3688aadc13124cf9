#!/usr/bin/env python3
"""codemeta MCP server: query commit history views."""

import json
import logging
import sys
from dataclasses import asdict
from typing import Optional

from mcp.server.fastmcp import FastMCP

from codemeta.config import Config, load_config
from codemeta.controller import MetaController
from codemeta.projects import ProjectFilter, load_projects

mcp = FastMCP("codemeta")
logger = logging.getLogger(__name__)

# Redirect all logging to stderr so stdout stays clean for MCP stdio transport
logging.basicConfig(
    stream=sys.stderr,
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

_controller: MetaController | None = None
_config: Config | None = None


def _get_config() -> Config:
    global _config
    if _config is None:
        _config = load_config()
    return _config


def _get_controller() -> MetaController:
    global _controller
    if _controller is None:
        _controller = MetaController.load(_get_config())
    return _controller


def _reveal(index: int | None) -> MetaController:
    """Shared controller with its cursor at ``index``, or cleared when None."""
    controller = _get_controller()
    if index is None:
        controller.set_time(None)
    else:
        controller.set_cursor(index)
    return controller


@mcp.tool()
def commit_stats() -> str:
    """Summary numbers for the codebase: LOC, commits, files, longest file, line length, depth."""
    try:
        return json.dumps(_get_controller().stats().model_dump())
    except (ValueError, FileNotFoundError) as e:
        return json.dumps({"error": str(e)})


@mcp.tool()
def select_commits(
    x0: float, y0: float, x1: float, y1: float, index: Optional[int] = None,
) -> str:
    """Brush a rectangle (chart pixels) and get the selection count and language breakdown.

    Only commits revealed at narrative step ``index`` are brushable (all commits if omitted).
    """
    try:
        controller = _reveal(index)
        summary = controller.brushed(((x0, y0), (x1, y1)))
        return json.dumps(summary.model_dump())
    except (ValueError, FileNotFoundError, IndexError) as e:
        return json.dumps({"error": str(e)})


@mcp.tool()
def narrative_step(index: int) -> str:
    """Reveal commits up to narrative step ``index`` and return the visible dots."""
    try:
        view = _get_controller().set_cursor(index)
        return json.dumps({
            "cutoff": view.cutoff,
            "commits": [c.id for c in view.commits],
            "dots": [asdict(d) for d in view.dots],
            "entering": [d.id for d in view.dot_join.enter],
            "exiting": view.dot_join.exit,
        }, default=str)
    except (ValueError, FileNotFoundError, IndexError) as e:
        return json.dumps({"error": str(e)})


@mcp.tool()
def file_composition(index: Optional[int] = None) -> str:
    """Files by size for the commits revealed at narrative step ``index`` (all commits if omitted)."""
    try:
        controller = _reveal(index)
        return json.dumps([
            {"name": g.name, "lines": g.size, "types": [u.type for u in g.units]}
            for g in controller.files()
        ])
    except (ValueError, FileNotFoundError, IndexError) as e:
        return json.dumps({"error": str(e)})


@mcp.tool()
def filter_projects(query: str = "", year: Optional[str] = None) -> str:
    """Search portfolio projects by text and optionally by year."""
    try:
        project_filter = ProjectFilter(load_projects(_get_config().resolved_projects_path))
        project_filter.search(query)
        if year is not None:
            project_filter.toggle_year(year)
        return json.dumps({
            "projects": [p.model_dump() for p in project_filter.visible()],
            "slices": [asdict(s) for s in project_filter.slices()],
        }, default=str)
    except (ValueError, FileNotFoundError) as e:
        return json.dumps({"error": str(e)})


if __name__ == "__main__":
    mcp.run()
