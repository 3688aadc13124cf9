"""Commit scatter plot: date on x, time of day on y, dot area by lines.

Static PNG rendering of the same dots the interactive page draws.
"""

import logging
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from codemeta.controller import DotMark, MetaController
from codemeta.scales import Scales, hour_label, time_tick_format

logger = logging.getLogger(__name__)

# --- Fonts ---

_FONT_REGULAR = "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"
_FONT_MONO = "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf"


def _font(size: int, mono: bool = False) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    try:
        return ImageFont.truetype(_FONT_MONO if mono else _FONT_REGULAR, size)
    except OSError:
        return ImageFont.load_default(size)


# --- Colors ---

BG = (13, 17, 23)
TEXT_DIM = (110, 118, 129)
GRID = (33, 38, 45)
AXIS = (72, 79, 88)
DOT = (70, 130, 180)  # steelblue
DOT_SELECTED = (255, 107, 107)


def _alpha(color: tuple[int, int, int], opacity: float) -> tuple[int, int, int, int]:
    return (*color, int(round(opacity * 255)))


def render_scatter(
    dots: list[DotMark],
    scales: Scales,
    width: int,
    height: int,
    output_path: Path,
    opacity: float = 0.7,
) -> Path:
    """Render dots (already in draw order) with gridlines and axes."""
    img = Image.new("RGBA", (width, height), (*BG, 255))
    draw = ImageDraw.Draw(img, "RGBA")
    area = scales.area
    label_font = _font(10, mono=True)

    # Gridlines + hour axis
    for hour in scales.y.ticks():
        y = scales.y(hour)
        draw.line([(area.left, y), (area.right, y)], fill=GRID, width=1)
        label = hour_label(hour)
        w = draw.textlength(label, font=label_font)
        draw.text((area.left - w - 4, y - 6), label, font=label_font, fill=TEXT_DIM)

    # Time axis
    draw.line([(area.left, area.bottom), (area.right, area.bottom)], fill=AXIS, width=1)
    for tick in scales.x.ticks():
        x = scales.x(tick)
        draw.line([(x, area.bottom), (x, area.bottom + 5)], fill=AXIS, width=1)
        label = time_tick_format(tick)
        w = draw.textlength(label, font=label_font)
        draw.text((x - w / 2, area.bottom + 8), label, font=label_font, fill=TEXT_DIM)

    for dot in dots:
        color = DOT_SELECTED if dot.selected else DOT
        draw.ellipse(
            [dot.cx - dot.r, dot.cy - dot.r, dot.cx + dot.r, dot.cy + dot.r],
            fill=_alpha(color, opacity),
        )

    output_path.parent.mkdir(parents=True, exist_ok=True)
    img.convert("RGB").save(str(output_path), "PNG")
    logger.info("Scatter plot saved to %s (%d dots)", output_path, len(dots))
    return output_path


def generate_scatter(controller: MetaController, output_path: Path) -> Path:
    """Render the controller's current view as a PNG."""
    chart = controller.chart
    return render_scatter(
        controller.dots(),
        controller.context.scales,
        chart.width,
        chart.height,
        output_path,
        opacity=chart.dot_opacity,
    )
