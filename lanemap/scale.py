"""
Scale model

Linear mapping between the genomic coordinate domain and the pixel range of
the chart.
"""

from __future__ import annotations
from math import floor
import logging

from .errors import DomainDegenerate

logger = logging.getLogger(__name__)


class ScaleModel:
    """
    Linear coordinate <-> pixel transform

    Pixel 0 corresponds to `min` and pixel `pixel_width` to `max`. Any left
    offset reserved for labels is added by the layout, not here.
    """

    def __init__(self, min_value: float, max_value: float, pixel_width: float) -> None:
        """
        Initialize the scale

        Args:
            min_value: Lowest coordinate shown
            max_value: Highest coordinate shown (must exceed min_value)
            pixel_width: Width of the drawable area (px)

        Raises:
            DomainDegenerate: if max_value <= min_value
        """
        if pixel_width <= 0:
            raise ValueError(f"Pixel width must be positive, got {pixel_width}")
        self.pixel_width: float = pixel_width
        self.min: float = 0
        self.max: float = 0
        self.set_domain(min_value, max_value)

    def set_domain(self, min_value: float, max_value: float) -> None:
        """Replace the coordinate domain, rejecting degenerate ranges"""
        if max_value <= min_value:
            raise DomainDegenerate(min_value, max_value)
        self.min = min_value
        self.max = max_value

    @property
    def span(self) -> float:
        """Width of the domain in coordinate units"""
        return self.max - self.min

    @property
    def pixels_per_unit(self) -> float:
        return self.pixel_width / self.span

    @property
    def units_per_pixel(self) -> float:
        return self.span / self.pixel_width

    def to_pixels(self, coord: float) -> float:
        """Pixel position (relative to the chart start) of a coordinate"""
        return (coord - self.min) * self.pixel_width / (self.max - self.min)

    def to_units(self, pixel: float) -> float:
        """Coordinate at a pixel position; inverse of to_pixels"""
        return pixel * (self.max - self.min) / self.pixel_width + self.min

    def length_to_pixels(self, length: float) -> float:
        """Pixel length of a span of coordinate units"""
        return length * self.pixels_per_unit

    def pixels_to_length(self, pixels: float) -> float:
        """Coordinate span covered by a number of pixels"""
        return pixels * self.units_per_pixel

    def prettify_domain(self, major_tick_size: float) -> None:
        """
        Widen the domain so it starts and ends on major ticks

        min moves down to the nearest multiple at or below it; max moves up to
        the nearest multiple strictly above it.
        """
        if major_tick_size <= 0:
            raise ValueError(f"Major tick size must be positive, got {major_tick_size}")
        new_min = floor(self.min / major_tick_size) * major_tick_size
        new_max = (floor(self.max / major_tick_size) + 1) * major_tick_size
        logger.debug(f"Prettified domain [{self.min}, {self.max}] -> [{new_min}, {new_max}] "
                     f"(major tick {major_tick_size})")
        self.set_domain(new_min, new_max)

    def copy(self) -> 'ScaleModel':
        return ScaleModel(self.min, self.max, self.pixel_width)

    def __repr__(self) -> str:
        return f"ScaleModel(min={self.min}, max={self.max}, pixel_width={self.pixel_width})"
