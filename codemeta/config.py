"""Configuration loading for codemeta."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class ChartConfig(BaseModel):
    width: int = 1000
    height: int = 600
    margin_top: int = 10
    margin_right: int = 10
    margin_bottom: int = 30
    margin_left: int = 20
    radius_min: float = 2
    radius_max: float = 30
    dot_opacity: float = 0.7
    tooltip_offset_x: int = 12
    tooltip_offset_y: int = 8


class ExtractionConfig(BaseModel):
    include_extensions: list[str] = Field(default_factory=lambda: [
        "html", "css", "js", "ts", "svelte", "json", "md", "py",
    ])
    exclude_patterns: list[str] = Field(default_factory=lambda: [
        "node_modules/", "package-lock.json", ".min.", "dist/",
    ])
    indent_width: int = 2  # spaces per nesting level; a tab is always one level
    max_file_size: int = 500_000


class Config(BaseModel):
    data_path: str = "data/loc.csv"
    projects_path: str = "data/projects.json"
    output_dir: str = "data/output"
    commit_url_base: str = "https://github.com/tanishaiyer1/portfolio/commit/"
    chart: ChartConfig = Field(default_factory=ChartConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)

    @property
    def resolved_data_path(self) -> Path:
        """Resolve data_path relative to project root."""
        return _resolve(self.data_path)

    @property
    def resolved_projects_path(self) -> Path:
        return _resolve(self.projects_path)

    @property
    def resolved_output_dir(self) -> Path:
        return _resolve(self.output_dir)


PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config.yaml"


def _resolve(path: str) -> Path:
    p = Path(path).expanduser()
    return p if p.is_absolute() else PROJECT_ROOT / p


def load_config(config_path: Path | None = None) -> Config:
    """Read config.yaml (or ``config_path``); a missing file means all defaults.

    Raises ValueError when the file holds something other than a mapping.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    if not path.is_file():
        logger.debug("No config at %s, using defaults", path)
        return Config()

    with path.open(encoding="utf-8") as f:
        raw: Any = yaml.safe_load(f)
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"Expected a mapping at the top of {path}")

    logger.debug("Config loaded from %s", path)
    return Config.model_validate(raw)
