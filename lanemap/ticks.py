"""
Tick planning for the scale ruler

Chooses "nice" major/minor tick intervals that fit the chart width and
formats abbreviated tick labels (1.5k, 2.5m).

Two label formatters exist on purpose:
    format_tick_label    - what is rendered under a major tick
    estimate_tick_label  - slightly pessimistic variant used only to size
                           labels while choosing the major interval
"""

from __future__ import annotations
from dataclasses import dataclass
from math import ceil, floor
from typing import Callable, List, Optional
import logging

from .config import ScaleConfig, TickConfig
from .measure import Font, MonospaceMeasurer, TextMeasurer
from .scale import ScaleModel
from .types import TickKind

logger = logging.getLogger(__name__)

MILLION = 1_000_000
THOUSAND = 1_000


def _round_half_up(value: float) -> int:
    return int(floor(value + 0.5))


def _format_number(value: float) -> str:
    """Shortest text for a number: integers without '.0', floats as repr"""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_tick_label(value: float, abbreviate: bool = True) -> str:
    """
    Display label for a tick value

    Values >= 1e6 become millions rounded to 5 decimals with an 'm' suffix,
    values >= 1e3 thousands rounded to 2 decimals with a 'k' suffix,
    anything smaller is printed as is.

    Example:
        >>> format_tick_label(1500)
        '1.5k'
        >>> format_tick_label(2500000)
        '2.5m'
    """
    if not abbreviate:
        return _format_number(value)
    if value >= MILLION:
        base = 10 ** 5
        return _format_number(_round_half_up(value / MILLION * base) / base) + 'm'
    if value >= THOUSAND:
        base = 10 ** 2
        return _format_number(_round_half_up(value / THOUSAND * base) / base) + 'k'
    return _format_number(value)


def estimate_tick_label(value: float, abbreviate: bool = True) -> str:
    """
    Label used only to estimate label width during tick planning

    Same thresholds as format_tick_label, but the scaled value is rounded to
    an integer count of 1e-5 m / 1e-2 k before the suffix is appended.
    """
    if not abbreviate:
        return _format_number(value)
    if value >= MILLION:
        return f"{_round_half_up(value / (MILLION / 10 ** 5))}m"
    if value >= THOUSAND:
        return f"{_round_half_up(value / (THOUSAND / 10 ** 2))}k"
    return _format_number(value)


def _digit_count(value: float) -> int:
    return len(str(int(value)))


def determine_major_tick(
    domain_width: float,
    pixel_width: float,
    label_width_estimator: Callable[[str], float],
    label_buffer: float = 10,
    label_value: Optional[float] = None
) -> int:
    """
    Pick the major tick interval

    1. Estimate how many labels fit across the chart.
    2. Divide the domain by that count.
    3. Round up at the magnitude of the leading digit (2120 -> 3000).
    4. Snap to a half decade or a full decade: only ...500, 1000, 5000,
       10000... are produced, never 2000 or 3000.

    Args:
        domain_width: Width of the coordinate domain (> 0)
        pixel_width: Chart width (px)
        label_width_estimator: Returns the pixel width of a label string
        label_buffer: Space required between two labels (px)
        label_value: Value whose label is measured (defaults to domain_width)

    Returns:
        Major tick interval in coordinate units
    """
    label = estimate_tick_label(domain_width if label_value is None else label_value)
    approx_count = pixel_width / (label_width_estimator(label) + label_buffer)
    raw_interval = domain_width / approx_count

    base = 10 ** (_digit_count(raw_interval) - 1)
    candidate = ceil(raw_interval / base) * base

    places = 10 ** _digit_count(candidate)
    lead = candidate / places
    if 0.1 < lead <= 0.5:
        lead = 0.5
    elif lead > 0.5:
        lead = 1.0

    major = _round_half_up(lead * places)
    logger.debug(f"Major tick: ~{approx_count:.1f} labels of '{label}', raw interval "
                 f"{raw_interval:.2f} -> candidate {candidate} -> {major}")
    return major


def minor_tick_size(major_size: float) -> int:
    """One tenth of the major interval, rounded half up, at least 1"""
    return max(1, _round_half_up(major_size / 10))


@dataclass(frozen=True)
class TickPlan:
    """Spacing between gridlines in coordinate units"""
    major_size: float
    minor_size: float


@dataclass(frozen=True)
class TickMark:
    """
    One gridline in absolute chart pixels

    Attributes:
        value: Coordinate of the tick
        kind: 'major', 'half' or 'minor'
        x: Absolute x (px), left offset included
        y_top: Top end of the tick line (px)
        y_bottom: Bottom end of the tick line (px)
        label: Display label (major ticks only, else '')
    """
    value: float
    kind: TickKind
    x: float
    y_top: float
    y_bottom: float
    label: str = ''


class TickPlanner:
    """
    Chooses tick intervals for a scale and lays out the gridlines
    """

    def __init__(
        self,
        scale_config: Optional[ScaleConfig] = None,
        tick_config: Optional[TickConfig] = None,
        measure: Optional[TextMeasurer] = None
    ) -> None:
        self.scale_config: ScaleConfig = scale_config or ScaleConfig()
        self.tick_config: TickConfig = tick_config or TickConfig()
        self.measure: TextMeasurer = measure or MonospaceMeasurer()

    @property
    def font(self) -> Font:
        return Font(self.scale_config.font_size, self.scale_config.font_family)

    def label(self, value: float) -> str:
        """Display label of a tick value"""
        return format_tick_label(value, abbreviate=self.tick_config.auto)

    def plan(self, scale: ScaleModel) -> TickPlan:
        """
        Tick intervals for a validated, non-degenerate scale

        With automatic ticks off, the configured sizes are returned as is.
        """
        if not self.tick_config.auto:
            return TickPlan(self.tick_config.major_size, self.tick_config.minor_size)

        font = self.font
        major = determine_major_tick(
            scale.span,
            scale.pixel_width,
            lambda text: self.measure(text, font),
            self.scale_config.label_buffer,
            label_value=scale.max,
        )
        plan = TickPlan(major_size=major, minor_size=minor_tick_size(major))
        logger.debug(f"Tick plan for {scale}: major={plan.major_size}, minor={plan.minor_size}")
        return plan

    def marks(self, scale: ScaleModel, plan: TickPlan, offset: float = 0.0) -> List[TickMark]:
        """
        Every gridline from the first minor multiple at or above scale.min
        up to scale.max

        Args:
            scale: Final (possibly prettified) scale
            plan: Tick intervals
            offset: Left offset of the chart (px)

        Returns:
            Tick marks in increasing coordinate order
        """
        minor = plan.minor_size
        major = plan.major_size
        cfg = self.scale_config

        tick_start = cfg.font_size + cfg.size
        major_end = cfg.font_size + 2
        minor_end = cfg.font_size + cfg.size * 0.66
        half_end = cfg.font_size + cfg.size * 0.33

        if scale.min % minor == 0:
            first = scale.min
        else:
            first = scale.min - (scale.min % minor) + minor

        marks: List[TickMark] = []
        step = 0
        value = first
        while value <= scale.max:
            x = scale.to_pixels(value) + offset
            if value % major == 0:
                marks.append(TickMark(value, 'major', x, major_end, tick_start, self.label(value)))
            elif value % (major / 2) == 0:
                marks.append(TickMark(value, 'half', x, half_end, tick_start))
            else:
                marks.append(TickMark(value, 'minor', x, minor_end, tick_start))
            step += 1
            value = first + step * minor

        logger.debug(f"Laid out {len(marks)} tick marks "
                     f"({sum(1 for m in marks if m.kind == 'major')} major)")
        return marks
