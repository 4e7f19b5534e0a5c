"""
Region slicing

Derives a new layout holding only the features of a coordinate region.

Modes:
    inclusive  any feature overlapping [from, to]
    exclusive  only features fully inside the region, [from, to)
    strict     features fully inside unchanged, partially overlapping ones
               cloned and clipped to the region, the rest dropped
"""
from __future__ import annotations
from math import ceil, floor
from typing import List, Optional, TYPE_CHECKING
import logging

from ..errors import InvalidRange
from ..features import Feature, IdAllocator
from ..types import SliceMode, SLICE_MODES
from .allocator import LaneAllocator

if TYPE_CHECKING:
    from .session import Layout

logger = logging.getLogger(__name__)


def select_feature(
    feature: Feature,
    from_pos: float,
    to_pos: float,
    mode: SliceMode,
    ids: IdAllocator
) -> Optional[Feature]:
    """
    Apply a slice policy to one feature

    Args:
        feature: Candidate feature
        from_pos: Region start
        to_pos: Region end
        mode: 'inclusive', 'exclusive' or 'strict'
        ids: Allocator used for clipped clones

    Returns:
        The feature itself, a clipped clone (strict), or None when excluded
    """
    start = feature.position
    end = feature.position + feature.length

    if mode == 'inclusive':
        return feature if start <= to_pos and end > from_pos else None

    if mode == 'exclusive':
        # closed at the left bound, open at the right
        return feature if start >= from_pos and end < to_pos else None

    if mode == 'strict':
        if start >= from_pos and end <= to_pos:
            return feature
        # clip inward to whole coordinates so the clone stays inside the region
        clip_start = max(start, ceil(from_pos))
        clip_end = min(end, floor(to_pos))
        if clip_end <= clip_start:
            return None
        return feature.clone(ids, position=clip_start, length=clip_end - clip_start)

    raise ValueError(f"Unknown slice mode '{mode}' (expected one of {', '.join(SLICE_MODES)})")


class RegionSlicer:
    """
    Builds a layout restricted to a region

    The new layout shares configuration, width, type styles and the id
    allocator with the source, and has its domain fixed to the region.
    Every track is mirrored with its draw style; the surviving features of
    each original lane are packed again under the new scale and the lanes
    appended in original lane order. Original lanes left without features
    produce no lanes.
    """

    def __init__(self, gap_pixels: Optional[float] = None) -> None:
        """
        Args:
            gap_pixels: Lane gap override (px); defaults to the layout's config
        """
        self.gap_pixels = gap_pixels

    def slice(
        self,
        layout: 'Layout',
        from_pos: float,
        to_pos: float,
        mode: SliceMode = 'inclusive'
    ) -> 'Layout':
        """
        Slice a layout

        Args:
            layout: Source layout (left untouched)
            from_pos: Region start
            to_pos: Region end
            mode: Inclusion policy

        Returns:
            New Layout; empty (tracks without lanes) when from_pos == to_pos

        Raises:
            InvalidRange: if from_pos > to_pos
            ValueError: for an unknown mode
        """
        if mode not in SLICE_MODES:
            raise ValueError(f"Unknown slice mode '{mode}' (expected one of {', '.join(SLICE_MODES)})")
        if from_pos > to_pos:
            raise InvalidRange(from_pos, to_pos)

        sliced = layout.derive()
        if from_pos == to_pos:
            for track in layout.tracks:
                sliced.add_track(track.draw_style)
            logger.info(f"Empty slice at {from_pos}: {len(layout.tracks)} empty tracks")
            return sliced

        sliced.set_domain(from_pos, to_pos)
        gap_pixels = self.gap_pixels if self.gap_pixels is not None else layout.config.lanes.gap_pixels
        allocator = LaneAllocator(sliced.current_scale(), gap_pixels)

        kept = clipped = 0
        for track in layout.tracks:
            new_track = sliced.add_track(track.draw_style)
            for lane in track.lanes:
                selected: List[Feature] = []
                for feature in lane:
                    result = select_feature(feature, from_pos, to_pos, mode, layout.ids)
                    if result is None:
                        continue
                    if result is not feature:
                        clipped += 1
                    selected.append(result)
                if selected:
                    sliced.attach_group(new_track, selected, allocator.pack(selected))
                    kept += len(selected)

        logger.info(f"Sliced [{from_pos}, {to_pos}] ({mode}): kept {kept} features "
                    f"({clipped} clipped) of {len(layout.features)}")
        return sliced
