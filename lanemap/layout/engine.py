"""
Layout engine

One synchronous pass turns a Layout session into a LayoutResult: scale,
tick plan, repacked lanes and the final absolute geometry of every glyph.
Nothing is reused from a previous pass.

Pass order:
1. Domain from the session (explicit, else feature extent)
2. Tick plan, then widen the domain to major ticks (pretty + auto)
3. Left offset so the first tick label is not cut off
4. Repack every track with the final scale
5. Placements per draw style: expand, collapse (merged runs), line (coverage)
6. Tick marks
"""
from __future__ import annotations
from typing import List, Optional, TYPE_CHECKING
import logging

from ..features import Feature, resolve_style
from ..labels import fit_label
from ..measure import Font, MonospaceMeasurer, TextMeasurer
from ..scale import ScaleModel
from ..ticks import TickPlan, TickPlanner
from .allocator import LaneAllocator
from .collapse import CollapseMerger
from .coverage import compute_coverage
from .result import LayoutResult, Placement, TrackLayout
from .types import Track

if TYPE_CHECKING:
    from .session import Layout

logger = logging.getLogger(__name__)


class LayoutEngine:
    """
    Computes complete layouts

    The engine holds no layout state; the rendering surface's text measurer
    is its only collaborator.
    """

    def __init__(self, measure: Optional[TextMeasurer] = None) -> None:
        """
        Args:
            measure: Text width capability (monospace estimate if None)
        """
        self.measure: TextMeasurer = measure or MonospaceMeasurer()
        self.merger = CollapseMerger()

    def calculate_layout(self, layout: 'Layout') -> LayoutResult:
        """
        Run a full layout pass

        Passes on the same session are serialized: a second caller waits for
        the pass in flight to finish.

        Args:
            layout: Session to lay out (lanes are rebuilt in place)

        Returns:
            LayoutResult with absolute coordinates
        """
        with layout.pass_lock:
            return self._calculate(layout)

    def _calculate(self, layout: 'Layout') -> LayoutResult:
        config = layout.config
        domain = layout.domain
        if domain is None:
            logger.warning("Layout has no features and no domain; returning empty layout")
            return self._create_empty_layout(layout)

        # Steps 1-2: scale and ticks
        scale = ScaleModel(domain[0], domain[1], layout.width)
        planner = TickPlanner(config.scale, config.tick, self.measure)
        if config.scale.pretty:
            plan = planner.plan(scale)
            if config.scale.auto:
                scale.prettify_domain(plan.major_size)
        else:
            plan = TickPlan(config.tick.major_size, config.tick.minor_size)

        # Step 3: left offset
        scale_font = Font(config.scale.font_size, config.scale.font_family)
        offset = self.measure('0', scale_font) / 2 + config.scale.offset_padding

        # Step 4: repack
        allocator = LaneAllocator(scale, config.lanes.gap_pixels)
        for track in layout.tracks:
            allocator.repack(track)

        # Step 5: placements
        lanes_cfg = config.lanes
        y = (0 if config.scale.off else config.scale.height) + lanes_cfg.lane_buffer
        track_layouts: List[TrackLayout] = []
        for index, track in enumerate(layout.tracks):
            track_layout = self._layout_track(layout, track, index, scale, offset, y)
            track_layouts.append(track_layout)
            y += track_layout.height + lanes_cfg.track_buffer
        height = y - lanes_cfg.track_buffer if track_layouts else y

        # Step 6: ticks
        ticks = [] if config.scale.off else planner.marks(scale, plan, offset)

        n_placements = sum(len(t.placements) for t in track_layouts)
        logger.info(f"Layout pass: domain [{scale.min}, {scale.max}], major tick {plan.major_size}, "
                    f"{len(track_layouts)} tracks, {n_placements} glyphs, height {height:.0f}px")

        return LayoutResult(
            scale=scale,
            tick_plan=plan,
            ticks=ticks,
            tracks=track_layouts,
            offset=offset,
            width=offset + layout.width,
            height=height,
            lane_size=lanes_cfg.lane_size,
            lane_buffer=lanes_cfg.lane_buffer,
            layout_stats={
                'n_tracks': len(track_layouts),
                'n_lanes': sum(len(t.lanes) for t in layout.tracks),
                'n_features': sum(len(t) for t in layout.tracks),
                'n_placements': n_placements,
                'n_ticks': len(ticks),
            }
        )

    def _layout_track(
        self,
        layout: 'Layout',
        track: Track,
        index: int,
        scale: ScaleModel,
        offset: float,
        top: float
    ) -> TrackLayout:
        """Geometry of one track according to its draw style"""
        lanes_cfg = layout.config.lanes
        lane_size = lanes_cfg.lane_size
        style = track.effective_draw_style(layout.draw_style)
        track_layout = TrackLayout(uid=track.uid, index=index, draw_style=style, y=top, height=0.0)
        if not track.lanes:
            return track_layout

        if style == 'expand':
            for lane_index, lane in enumerate(track.lanes):
                lane_y = top + lane_index * (lane_size + lanes_cfg.lane_buffer)
                track_layout.lanes.append([
                    self._place(layout, f, scale, offset, lane_y, index, lane_index)
                    for f in lane
                ])
            n = len(track.lanes)
            track_layout.height = n * lane_size + (n - 1) * lanes_cfg.lane_buffer

        elif style == 'collapse':
            runs = self.merger.merge(track.features)
            row = []
            for run in runs:
                placement = self._place(
                    layout, run.features[0], scale, offset, top, index, 0,
                    start=run.start, length=run.length, label=run.label, merged=run.features,
                )
                row.append(placement)
            track_layout.lanes = [row]
            track_layout.runs = runs
            track_layout.height = lane_size
            logger.debug(f"{track.uid}: {len(track)} features collapsed into {len(runs)} runs")

        else:
            spans = [
                (scale.to_pixels(f.position) + offset, scale.length_to_pixels(f.length))
                for f in track.features
            ]
            track_layout.coverage = compute_coverage(spans, offset, scale.pixel_width, lane_size, top)
            track_layout.height = lane_size
            logger.debug(f"{track.uid}: coverage max depth {track_layout.coverage.max_depth}")

        return track_layout

    def _place(
        self,
        layout: 'Layout',
        feature: Feature,
        scale: ScaleModel,
        offset: float,
        y: float,
        track_index: int,
        lane_index: int,
        start: Optional[int] = None,
        length: Optional[int] = None,
        label: Optional[str] = None,
        merged: tuple = (),
    ) -> Placement:
        """Absolute geometry, resolved style and fitted label of one glyph"""
        config = layout.config
        start = feature.absolute_position if start is None else start
        length = feature.length if length is None else length
        pixel_length = scale.length_to_pixels(length) or 1
        style = resolve_style(feature, layout.type_styles, config.glyph)
        fitted = fit_label(
            feature.name if label is None else label,
            pixel_length,
            Font(style.text_size, style.text_font),
            style.text_align,
            feature.strand,
            self.measure,
            config.labels,
        )
        children = tuple(
            self._place(layout, child, scale, offset, y, track_index, lane_index)
            for child in feature.children
        )
        return Placement(
            feature=feature,
            x=scale.to_pixels(start) + offset,
            y=y,
            pixel_length=pixel_length,
            pixel_height=config.lanes.lane_size,
            track_index=track_index,
            lane_index=lane_index,
            style=style,
            label=fitted,
            merged=merged or (feature,),
            children=children,
        )

    def _create_empty_layout(self, layout: 'Layout') -> LayoutResult:
        """Result for a layout with nothing to scale"""
        config = layout.config
        return LayoutResult(
            scale=None,
            tick_plan=None,
            ticks=[],
            tracks=[
                TrackLayout(uid=t.uid, index=i, draw_style=t.effective_draw_style(layout.draw_style),
                            y=0.0, height=0.0)
                for i, t in enumerate(layout.tracks)
            ],
            offset=0.0,
            width=layout.width,
            height=0.0,
            lane_size=config.lanes.lane_size,
            lane_buffer=config.lanes.lane_buffer,
            layout_stats={'n_tracks': len(layout.tracks), 'n_placements': 0},
        )
