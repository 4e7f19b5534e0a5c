"""
Layout result types

Plain data handed to the (external) drawing stage: every feature, run, tick
and coverage point already carries final absolute pixel coordinates.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..config import GlyphStyle
from ..features import Feature
from ..labels import FittedLabel
from ..scale import ScaleModel
from ..ticks import TickMark, TickPlan
from ..types import DrawStyle
from .collapse import MergedRun
from .coverage import CoverageCurve


@dataclass(frozen=True)
class Placement:
    """
    Final geometry of one glyph

    Attributes:
        feature: Feature drawn (first feature of the run in collapse style)
        x: Absolute left edge (px)
        y: Absolute top edge (px)
        pixel_length: Width (px)
        pixel_height: Height (px)
        track_index: Index of the track in the layout
        lane_index: Row within the track (0 for collapse style)
        style: Resolved style
        label: Fitted label
        merged: Every feature covered by this glyph
        children: Placements of sub-features (exons of a spliced feature)
    """
    feature: Feature
    x: float
    y: float
    pixel_length: float
    pixel_height: float
    track_index: int
    lane_index: int
    style: GlyphStyle
    label: FittedLabel
    merged: Tuple[Feature, ...] = ()
    children: Tuple['Placement', ...] = ()

    @property
    def right(self) -> float:
        return self.x + self.pixel_length

    @property
    def bottom(self) -> float:
        return self.y + self.pixel_height

    def contains_point(self, x: float, y: float) -> bool:
        return self.x <= x <= self.right and self.y <= y <= self.bottom

    def is_within(self, x0: float, y0: float, x1: float, y1: float) -> bool:
        """Whether the glyph lies entirely inside the box (x0, y0)-(x1, y1)"""
        return self.x >= x0 and self.right <= x1 and self.y >= y0 and self.bottom <= y1


@dataclass
class TrackLayout:
    """
    Geometry of one track

    Attributes:
        uid: Track id
        index: Position in the layout
        draw_style: Effective draw style
        y: Absolute top (px)
        height: Height (px)
        lanes: Placements per lane (expand), or a single row (collapse)
        runs: Merged runs (collapse style only)
        coverage: Coverage curve (line style only)
    """
    uid: str
    index: int
    draw_style: DrawStyle
    y: float
    height: float
    lanes: List[List[Placement]] = field(default_factory=list)
    runs: List[MergedRun] = field(default_factory=list)
    coverage: Optional[CoverageCurve] = None

    @property
    def placements(self) -> List[Placement]:
        return [p for lane in self.lanes for p in lane]


@dataclass
class LayoutResult:
    """
    Complete layout of a chart

    This is the output of LayoutEngine and the input of a rendering backend.

    Attributes:
        scale: Final scale (None for an empty layout)
        tick_plan: Tick intervals (None for an empty layout)
        ticks: Gridlines
        tracks: Per-track geometry
        offset: Left offset reserved for the first tick label (px)
        width: Total canvas width, offset included (px)
        height: Total height (px)
        lane_size: Lane height used (px)
        lane_buffer: Gap between lanes (px)
        layout_stats: Counters about the pass
    """
    scale: Optional[ScaleModel]
    tick_plan: Optional[TickPlan]
    ticks: List[TickMark]
    tracks: List[TrackLayout]
    offset: float
    width: float
    height: float
    lane_size: float
    lane_buffer: float
    layout_stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self.scale is None

    @property
    def placements(self) -> List[Placement]:
        """Every placement, track by track"""
        return [p for track in self.tracks for p in track.placements]

    def find(self, uid: str) -> Optional[Placement]:
        """Placement whose glyph covers the feature with this uid"""
        for placement in self.placements:
            if any(f.uid == uid for f in placement.merged):
                return placement
        return None

    def lane_at(self, y: float) -> Optional[Tuple[int, int]]:
        """(track index, lane index) of the row under a y position"""
        for track in self.tracks:
            if track.draw_style == 'expand':
                rows = len(track.lanes)
            else:
                rows = 1 if track.height > 0 else 0
            for lane_index in range(rows):
                top = track.y + lane_index * (self.lane_size + self.lane_buffer)
                if top <= y <= top + self.lane_size:
                    return track.index, lane_index
        return None

    def placements_at(self, x: float, y: float) -> List[Placement]:
        """Glyphs under a point (hit testing)"""
        return [p for p in self.placements if p.contains_point(x, y)]

    def placements_within(self, x0: float, y0: float, x1: float, y1: float) -> List[Placement]:
        """Glyphs entirely inside a selection box"""
        return [p for p in self.placements if p.is_within(x0, y0, x1, y1)]
