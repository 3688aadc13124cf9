"""Generate a self-contained HTML page for the commit history."""

import json
import logging
from datetime import datetime
from html import escape
from pathlib import Path

from codemeta.composition import FileGroup
from codemeta.controller import MetaController
from codemeta.models import CommitStats, SelectionSummary
from codemeta.narrative import NarrativeStep, narrative_steps
from codemeta.output.scatter import generate_scatter

logger = logging.getLogger(__name__)

SCATTER_FILENAME = "scatter.png"
INDEX_FILENAME = "index.html"


def generate_page(controller: MetaController, output_dir: Path) -> Path:
    """Write scatter.png and index.html for the controller's current view."""
    output_dir.mkdir(parents=True, exist_ok=True)
    generate_scatter(controller, output_dir / SCATTER_FILENAME)

    html = _render_html(
        stats=controller.stats(),
        selection=controller.selection(),
        steps=narrative_steps(controller.commits),
        files=controller.files(),
        commits_json=json.dumps(
            [c.model_dump(mode="json") for c in controller.commits],
        ),
        generated_at=datetime.now().strftime("%Y-%m-%d %H:%M"),
    )
    index_path = output_dir / INDEX_FILENAME
    index_path.write_text(html, encoding="utf-8")
    logger.info("Page written to %s", index_path)
    return index_path


def _stat(label: str, value: object) -> str:
    shown = "&ndash;" if value is None else escape(str(value))
    return f"<dt>{label}</dt><dd>{shown}</dd>"


def _step_html(step: NarrativeStep) -> str:
    link = f'<a href="{escape(step.url)}" target="_blank">{escape(step.link_text)}</a>'
    prose = escape(step.text).replace(escape(step.link_text), link, 1)
    return f"""<div class="step" data-commit="{escape(step.commit_id)}">
      <p>{prose}</p>
    </div>"""


def _file_html(group: FileGroup) -> str:
    units = "".join(
        '<div class="loc" style="--color:%s"></div>' % unit.color for unit in group.units
    )
    return f"""<div class="file" data-file="{escape(group.name)}">
      <dt><code>{escape(group.name)}</code><small>{group.size} lines</small></dt>
      <dd>{units}</dd>
    </div>"""


def _render_html(
    *,
    stats: CommitStats,
    selection: SelectionSummary,
    steps: list[NarrativeStep],
    files: list[FileGroup],
    commits_json: str,
    generated_at: str,
) -> str:
    stats_html = "".join([
        _stat('Total <abbr title="Lines of code">LOC</abbr>', stats.total_loc),
        _stat("Total commits", stats.total_commits),
        _stat("Number of files", stats.files),
        _stat("Longest file", stats.longest_file),
        _stat("Average line length", stats.average_line_length),
        _stat("Max depth", stats.max_depth),
    ])

    breakdown_html = "".join(
        f"<dt>{escape(s.type)}</dt><dd>{s.lines} lines ({s.formatted})</dd>"
        for s in selection.breakdown
    )

    steps_html = "".join(_step_html(s) for s in steps)
    files_html = "".join(_file_html(g) for g in files)
    # Keep "</script>" inside the JSON from closing the tag
    commits_json = commits_json.replace("</", "<\\/")

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Meta</title>
<style>
  * {{ margin: 0; padding: 0; box-sizing: border-box; }}
  body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, monospace;
         background: #0d1117; color: #c9d1d9; padding: 20px; max-width: 1100px; margin: auto; }}
  h1 {{ color: #58a6ff; margin-bottom: 4px; }}
  h2 {{ font-size: 16px; margin: 24px 0 12px; border-bottom: 1px solid #21262d; padding-bottom: 8px; }}
  .subtitle {{ color: #8b949e; margin-bottom: 24px; font-size: 14px; }}
  dl.stats {{ display: grid; grid-template-columns: repeat(6, 1fr); gap: 4px 16px; }}
  dl.stats dt {{ grid-row: 1; font-size: 12px; color: #8b949e; text-transform: uppercase; }}
  dl.stats dd {{ grid-row: 2; font-size: 24px; color: #58a6ff; font-weight: 700; }}
  img.chart {{ width: 100%; border: 1px solid #30363d; border-radius: 6px; }}
  dl.breakdown {{ display: grid; grid-template-columns: repeat(auto-fill, minmax(120px, 1fr)); gap: 4px; }}
  .step {{ padding: 12px 0; border-bottom: 1px solid #21262d; }}
  .step a {{ color: #58a6ff; }}
  .files .file {{ display: grid; grid-template-columns: 1fr 4fr; gap: 8px; margin-bottom: 6px; }}
  .files small {{ display: block; color: #8b949e; font-size: 11px; }}
  .files dd {{ display: flex; flex-wrap: wrap; align-content: start; gap: 0.15em; }}
  .loc {{ width: 0.5em; aspect-ratio: 1; background: var(--color); border-radius: 50%; }}
</style>
</head>
<body>

<h1>Meta</h1>
<p class="subtitle">Generated {generated_at}</p>

<h2>Summary</h2>
<dl class="stats">{stats_html}</dl>

<h2>Commits by time of day</h2>
<img class="chart" src="{SCATTER_FILENAME}" alt="Commits by time of day">
<p id="selection-count">{escape(selection.label)}</p>
<dl class="breakdown" id="language-breakdown">{breakdown_html}</dl>

<h2>Story</h2>
<div class="scrolly">{steps_html}</div>

<h2>Files</h2>
<dl class="files">{files_html}</dl>

<script type="application/json" id="commits-data">{commits_json}</script>

</body>
</html>"""
