"""Value-to-pixel scales for the commit scatter plot.

Modelled on the usual charting conventions: continuous scales map a
domain linearly onto a pixel range, a degenerate domain maps to the middle
of the range, and time scales can be "niced" outward to round calendar
boundaries.
"""

import bisect
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from codemeta.config import ChartConfig
from codemeta.models import Commit

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def tick_step(start: float, stop: float, count: int) -> float:
    """Step size giving roughly ``count`` ticks on 1/2/5 x 10^n boundaries."""
    step0 = abs(stop - start) / count if count > 0 else 0.0
    if step0 == 0 or not math.isfinite(step0):
        return 0.0
    step1 = 10 ** math.floor(math.log10(step0))
    error = step0 / step1
    if error >= _E10:
        step1 *= 10
    elif error >= _E5:
        step1 *= 5
    elif error >= _E2:
        step1 *= 2
    return step1 if stop >= start else -step1


class LinearScale:
    def __init__(self, domain: tuple[float, float], range_: tuple[float, float]) -> None:
        self.domain = domain
        self.range = range_

    def _transform(self, value: float) -> float:
        return value

    def __call__(self, value: float) -> float:
        d0, d1 = (self._transform(d) for d in self.domain)
        r0, r1 = self.range
        span = d1 - d0
        t = (self._transform(value) - d0) / span if span else 0.5
        return r0 + t * (r1 - r0)

    def ticks(self, count: int = 10) -> list[float]:
        d0, d1 = sorted(self.domain)
        step = tick_step(d0, d1, count)
        if step <= 0:
            return [d0]
        first = math.ceil(d0 / step)
        last = math.floor(d1 / step)
        return [round(i * step, 10) for i in range(first, last + 1)]


class SqrtScale(LinearScale):
    """Area-proportional radius scale."""

    def _transform(self, value: float) -> float:
        return math.copysign(math.sqrt(abs(value)), value)


# --- Time intervals ---

_SECOND = 1.0
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_WEEK = 7 * _DAY
_MONTH = 30 * _DAY
_YEAR = 365 * _DAY

# (unit, step, approximate duration in seconds), shortest first
TICK_INTERVALS: list[tuple[str, int, float]] = [
    ("second", 1, _SECOND),
    ("second", 5, 5 * _SECOND),
    ("second", 15, 15 * _SECOND),
    ("second", 30, 30 * _SECOND),
    ("minute", 1, _MINUTE),
    ("minute", 5, 5 * _MINUTE),
    ("minute", 15, 15 * _MINUTE),
    ("minute", 30, 30 * _MINUTE),
    ("hour", 1, _HOUR),
    ("hour", 3, 3 * _HOUR),
    ("hour", 6, 6 * _HOUR),
    ("hour", 12, 12 * _HOUR),
    ("day", 1, _DAY),
    ("day", 2, 2 * _DAY),
    ("week", 1, _WEEK),
    ("month", 1, _MONTH),
    ("month", 3, 3 * _MONTH),
    ("year", 1, _YEAR),
]
_DURATIONS = [d for _, _, d in TICK_INTERVALS]


def pick_interval(start: datetime, stop: datetime, count: int = 10) -> tuple[str, int] | None:
    """Choose the calendar interval whose spacing best yields ``count`` ticks.

    Returns None for spans too short to round to whole seconds.
    """
    target = abs((stop - start).total_seconds()) / count
    i = bisect.bisect_right(_DURATIONS, target)
    if i == len(TICK_INTERVALS):
        years = tick_step(start.year, stop.year, count)
        return ("year", max(1, int(years)))
    if i == 0:
        return None
    lo, hi = TICK_INTERVALS[i - 1], TICK_INTERVALS[i]
    unit, step, _ = lo if target / lo[2] < hi[2] / target else hi
    return (unit, step)


def floor_time(t: datetime, unit: str, step: int) -> datetime:
    """Round down to the nearest ``step``-aligned boundary of ``unit``."""
    if unit == "second":
        return t.replace(second=t.second - t.second % step, microsecond=0)
    if unit == "minute":
        return t.replace(minute=t.minute - t.minute % step, second=0, microsecond=0)
    if unit == "hour":
        return t.replace(hour=t.hour - t.hour % step, minute=0, second=0, microsecond=0)

    midnight = t.replace(hour=0, minute=0, second=0, microsecond=0)
    if unit == "day":
        return midnight.replace(day=t.day - (t.day - 1) % step)
    if unit == "week":
        # Weeks start on Sunday
        return midnight - timedelta(days=(t.weekday() + 1) % 7)
    if unit == "month":
        return midnight.replace(day=1, month=t.month - (t.month - 1) % step)
    return midnight.replace(day=1, month=1, year=t.year - t.year % step)


def offset_time(t: datetime, unit: str, step: int) -> datetime:
    if unit in ("second", "minute", "hour"):
        return t + timedelta(**{f"{unit}s": step})
    if unit == "day":
        return t + timedelta(days=step)
    if unit == "week":
        return t + timedelta(weeks=step)
    if unit == "month":
        months = t.month - 1 + step
        return t.replace(year=t.year + months // 12, month=months % 12 + 1)
    return t.replace(year=t.year + step)


def ceil_time(t: datetime, unit: str, step: int) -> datetime:
    floored = floor_time(t, unit, step)
    if floored == t:
        return t
    return floor_time(offset_time(floored, unit, step), unit, step)


def time_tick_format(t: datetime) -> str:
    """Label a tick by its coarsest non-zero calendar field."""
    if t.microsecond:
        return f".{t.microsecond // 1000:03d}"
    if t.second:
        return t.strftime(":%S")
    if t.minute:
        return t.strftime("%I:%M")
    if t.hour:
        return t.strftime("%I %p")
    if t.day != 1:
        return t.strftime("%a %d") if t.weekday() != 6 else t.strftime("%b %d")
    if t.month != 1:
        return t.strftime("%B")
    return t.strftime("%Y")


class TimeScale:
    def __init__(self, domain: tuple[datetime, datetime], range_: tuple[float, float]) -> None:
        self.domain = domain
        self.range = range_

    def __call__(self, value: datetime) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        span = (d1 - d0).total_seconds()
        t = (value - d0).total_seconds() / span if span else 0.5
        return r0 + t * (r1 - r0)

    def invert(self, pixel: float) -> datetime:
        d0, d1 = self.domain
        r0, r1 = self.range
        t = (pixel - r0) / (r1 - r0) if r1 != r0 else 0.5
        return d0 + (d1 - d0) * t

    def nice(self, count: int = 10) -> "TimeScale":
        """Extend the domain outward to round calendar bounds."""
        d0, d1 = self.domain
        interval = pick_interval(d0, d1, count)
        if interval is None:
            return self
        self.domain = (floor_time(d0, *interval), ceil_time(d1, *interval))
        return self

    def ticks(self, count: int = 10) -> list[datetime]:
        d0, d1 = self.domain
        interval = pick_interval(d0, d1, count)
        if interval is None:
            return [d0]
        unit, step = interval
        ticks: list[datetime] = []
        t = ceil_time(d0, unit, step)
        while t <= d1:
            ticks.append(t)
            t = floor_time(offset_time(t, unit, step), unit, step)
        return ticks


# --- Chart geometry ---


@dataclass(frozen=True)
class UsableArea:
    top: float
    right: float
    bottom: float
    left: float
    width: float
    height: float

    @classmethod
    def from_chart(cls, chart: ChartConfig) -> "UsableArea":
        return cls(
            top=chart.margin_top,
            right=chart.width - chart.margin_right,
            bottom=chart.height - chart.margin_bottom,
            left=chart.margin_left,
            width=chart.width - chart.margin_left - chart.margin_right,
            height=chart.height - chart.margin_top - chart.margin_bottom,
        )


@dataclass
class Scales:
    x: TimeScale
    y: LinearScale
    r: SqrtScale
    area: UsableArea

    def point(self, commit: Commit) -> tuple[float, float]:
        """Screen position of a commit under the current scales."""
        return self.x(commit.datetime), self.y(commit.hour_frac)

    def radius(self, commit: Commit) -> float:
        return self.r(commit.total_lines)


def hour_label(hour: float) -> str:
    return f"{int(hour) % 24:02d}:00"


def build_scales(
    displayed: list[Commit],
    all_commits: list[Commit],
    chart: ChartConfig,
) -> Scales:
    """Scales for the currently displayed commits.

    The x domain follows the displayed subset; the radius domain always
    spans every commit so dot sizes stay comparable while filtering.
    """
    area = UsableArea.from_chart(chart)

    source = displayed or all_commits
    if source:
        times = [c.datetime for c in source]
        x_domain = (min(times), max(times))
    else:
        x_domain = (_EPOCH, _EPOCH)
    x = TimeScale(x_domain, (area.left, area.right)).nice()

    y = LinearScale((0, 24), (area.bottom, area.top))

    if all_commits:
        sizes = [c.total_lines for c in all_commits]
        r_domain = (min(sizes), max(sizes))
    else:
        r_domain = (0, 0)
    r = SqrtScale(r_domain, (chart.radius_min, chart.radius_max))

    logger.debug("Scales rebuilt: x=%s..%s r=%s", x.domain[0], x.domain[1], r_domain)
    return Scales(x=x, y=y, r=r, area=area)


def draw_order(commits: list[Commit]) -> list[Commit]:
    """Largest commits first so small dots are painted on top."""
    return sorted(commits, key=lambda c: -c.total_lines)
