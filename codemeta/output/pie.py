"""Projects-per-year pie chart with a legend."""

import logging
import math
from pathlib import Path

from PIL import Image, ImageDraw

from codemeta.composition import TABLEAU10
from codemeta.output.scatter import BG, TEXT_DIM, _font
from codemeta.projects import PieSlice

logger = logging.getLogger(__name__)

SELECTED = (255, 107, 107)
RADIUS = 100
PADDING = 20
LEGEND_WIDTH = 220
LEGEND_ROW = 22


def _hex(color: str) -> tuple[int, int, int]:
    color = color.lstrip("#")
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


def _degrees(radians: float) -> float:
    # Pillow measures from 3 o'clock; slices are laid out from 12 o'clock
    return math.degrees(radians) - 90


def render_pie(slices: list[PieSlice], selected: str | None, output_path: Path) -> Path:
    size = 2 * RADIUS
    width = PADDING * 3 + size + LEGEND_WIDTH
    height = max(PADDING * 2 + size, PADDING * 2 + LEGEND_ROW * len(slices))

    img = Image.new("RGB", (width, height), BG)
    draw = ImageDraw.Draw(img)
    box = [PADDING, PADDING, PADDING + size, PADDING + size]

    for i, s in enumerate(slices):
        color = SELECTED if s.label == selected else _hex(TABLEAU10[i % len(TABLEAU10)])
        if s.end_angle - s.start_angle >= 2 * math.pi - 1e-9:
            draw.ellipse(box, fill=color)
        else:
            draw.pieslice(box, _degrees(s.start_angle), _degrees(s.end_angle), fill=color)

    legend_font = _font(12)
    lx = PADDING * 2 + size
    for i, s in enumerate(slices):
        ly = PADDING + i * LEGEND_ROW
        color = SELECTED if s.label == selected else _hex(TABLEAU10[i % len(TABLEAU10)])
        draw.rounded_rectangle([lx, ly + 2, lx + 12, ly + 14], radius=2, fill=color)
        draw.text((lx + 20, ly), f"{s.label} ({s.value})", font=legend_font, fill=TEXT_DIM)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    img.save(str(output_path), "PNG")
    logger.info("Pie chart saved to %s (%d slices)", output_path, len(slices))
    return output_path
