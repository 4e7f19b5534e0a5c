"""
Lane allocation

Greedy first-fit interval packing of features into lanes.

The result depends on insertion order: the same features added in a
different order can end up in a different (not necessarily minimal) number
of lanes. Every order still yields lanes that respect the gap invariant.
"""
from __future__ import annotations
from typing import Iterable, List
import logging

from ..features import Feature
from ..scale import ScaleModel
from .types import Lane, Track

logger = logging.getLogger(__name__)


class LaneAllocator:
    """
    Assigns features to the first lane that can take them

    A lane accepts a feature when the feature starts more than `gap` units
    after the end of the lane's last feature, where gap is `gap_pixels`
    converted to coordinate units with the scale in effect.
    """

    def __init__(self, scale: ScaleModel, gap_pixels: float = 3.0) -> None:
        """
        Args:
            scale: Scale used to convert the pixel gap into coordinate units
            gap_pixels: Minimum spacing between features of one lane (px)
        """
        self.scale = scale
        self.gap_pixels = gap_pixels

    @property
    def gap(self) -> float:
        """Gap threshold in coordinate units"""
        return self.scale.pixels_to_length(self.gap_pixels)

    def _place(self, lanes: List[Lane], feature: Feature, gap: float) -> int:
        for index, lane in enumerate(lanes):
            if lane.accepts(feature, gap):
                lane.append(feature)
                return index
        lanes.append(Lane([feature]))
        return len(lanes) - 1

    def add_feature(self, track: Track, feature: Feature) -> Feature:
        """
        Place a feature in a track, creating a lane when none accepts it

        Never fails.

        Returns:
            The feature, unchanged
        """
        index = self._place(track.lanes, feature, self.gap)
        track.record(feature, index)
        logger.debug(f"{feature.uid} [{feature.position}, {feature.end}) -> lane {index} of {track.uid}")
        return feature

    def pack(self, features: Iterable[Feature]) -> List[Lane]:
        """Pack features, in the given order, into fresh lanes"""
        lanes: List[Lane] = []
        gap = self.gap
        for feature in features:
            self._place(lanes, feature, gap)
        return lanes

    def repack(self, track: Track) -> Track:
        """
        Rebuild a track's lanes from its packing groups under this scale

        Each group is packed on its own and the resulting lanes are
        concatenated in group order.
        """
        lanes: List[Lane] = []
        owners: List[int] = []
        for group_index, group in enumerate(track.groups):
            packed = self.pack(group)
            lanes.extend(packed)
            owners.extend([group_index] * len(packed))
        if len(lanes) != len(track.lanes):
            logger.debug(f"Repacked {track.uid}: {len(track.lanes)} -> {len(lanes)} lanes "
                         f"(gap {self.gap:.2f} units)")
        track.set_lanes(lanes, owners)
        return track
