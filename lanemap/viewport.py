"""
Scroll and zoom window

Pure arithmetic for showing a large chart through a narrower scrolling
container: how wide the canvas must be so the visible window fills the
container, where to scroll to, and how a zoom level maps back to a
coordinate window. Widget and event wiring stay with the caller; each
change is followed by a full layout pass.
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional, Tuple, TYPE_CHECKING
import logging

from .errors import DomainDegenerate
from .scale import ScaleModel

if TYPE_CHECKING:
    from .layout import Layout

logger = logging.getLogger(__name__)

DEFAULT_VIEW_FRACTION = 0.35
"""Without scroll values the initial window trims this fraction of the domain from each side"""


@dataclass(frozen=True)
class ScrollWindow:
    """
    Visible coordinate window of a scrollable chart

    Attributes:
        domain_min: Start of the full domain
        domain_max: End of the full domain
        container_width: Width of the scrolling container (px)
        view_min: First visible coordinate
        view_max: Last visible coordinate
        margin: Canvas width not used by the chart itself (px)
    """
    domain_min: float
    domain_max: float
    container_width: float
    view_min: float
    view_max: float
    margin: float = 30.0

    def __post_init__(self) -> None:
        if self.domain_max <= self.domain_min:
            raise DomainDegenerate(self.domain_min, self.domain_max)
        if self.view_max <= self.view_min:
            raise DomainDegenerate(self.view_min, self.view_max)
        if self.container_width <= 0:
            raise ValueError(f"Container width must be positive, got {self.container_width}")

    @classmethod
    def from_scale(
        cls,
        scale: ScaleModel,
        container_width: float,
        scroll_values: Tuple[Optional[float], Optional[float]] = (None, None),
        margin: float = 30.0
    ) -> 'ScrollWindow':
        """
        Initial window for a scale

        Args:
            scale: Scale of the full chart
            container_width: Width of the scrolling container (px)
            scroll_values: (min, max) coordinates to show; missing values
                default to trimming 35% of the domain from that side
            margin: Canvas width not used by the chart (px)
        """
        total = scale.span
        view_min, view_max = scroll_values
        if view_min is None:
            view_min = scale.min + total * DEFAULT_VIEW_FRACTION
        if view_max is None:
            view_max = scale.max - total * DEFAULT_VIEW_FRACTION
        return cls(scale.min, scale.max, container_width, view_min, view_max, margin)

    @property
    def total_units(self) -> float:
        return self.domain_max - self.domain_min

    @property
    def view_units(self) -> float:
        return self.view_max - self.view_min

    @property
    def units_per_pixel(self) -> float:
        return self.view_units / self.container_width

    @property
    def canvas_width(self) -> float:
        """Canvas width so that the visible window fills the container (px)"""
        return self.total_units / self.units_per_pixel

    @property
    def chart_width(self) -> float:
        """Width available to the chart on that canvas (px)"""
        return self.canvas_width - self.margin

    @property
    def zoom_percent(self) -> float:
        """Visible share of the domain, 100 = everything visible"""
        return self.view_units / self.total_units * 100

    @property
    def scroll_left(self) -> float:
        """Horizontal scroll position that brings view_min to the left edge (px)"""
        return (self.view_min - self.domain_min) / self.total_units * self.canvas_width

    def zoom(self, percent: float, scroll_left: Optional[float] = None) -> 'ScrollWindow':
        """
        Window after moving the zoom control, keeping the container center fixed

        Args:
            percent: Visible share of the domain (1-100)
            scroll_left: Current scroll position (px); defaults to this window's

        Returns:
            New ScrollWindow
        """
        if not 1 <= percent <= 100:
            raise ValueError(f"Zoom percent must be within 1-100, got {percent}")
        if scroll_left is None:
            scroll_left = self.scroll_left
        center = scroll_left + self.container_width / 2
        width_pixels = percent / 100 * self.canvas_width
        min_pixel = center - width_pixels / 2
        max_pixel = center + width_pixels / 2
        new_min = self.domain_min + min_pixel / self.canvas_width * self.total_units
        new_max = self.domain_min + max_pixel / self.canvas_width * self.total_units
        logger.debug(f"Zoom {percent:.0f}%: view [{self.view_min:.0f}, {self.view_max:.0f}] -> "
                     f"[{new_min:.0f}, {new_max:.0f}]")
        return replace(self, view_min=new_min, view_max=new_max)

    def apply(self, layout: 'Layout') -> None:
        """Resize a layout's chart to this window's canvas"""
        layout.resize(max(1, int(round(self.chart_width))))
