"""
Layout structure types

Lanes hold mutually non-overlapping features; tracks hold lanes and a draw
style. Both are plain mutable containers owned by a Layout session.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence

from ..features import Feature
from ..types import DrawStyle, DRAW_STYLES


def validate_draw_style(style: Optional[str]) -> Optional[str]:
    """Return the style unchanged, or raise ValueError for unknown styles"""
    if style is not None and style not in DRAW_STYLES:
        raise ValueError(f"Unknown draw style '{style}' (expected one of {', '.join(DRAW_STYLES)})")
    return style


@dataclass
class Lane:
    """
    One row of a track

    Features are kept in insertion order. For any feature f placed before g:
    g.position - gap > f.position + f.length.
    """
    features: List[Feature] = field(default_factory=list)

    @property
    def last(self) -> Optional[Feature]:
        """Most recently inserted feature"""
        return self.features[-1] if self.features else None

    def accepts(self, feature: Feature, gap: float) -> bool:
        """Whether the lane is empty or the feature clears its last feature by more than `gap` units"""
        prev = self.last
        return prev is None or feature.position - gap > prev.position + prev.length

    def append(self, feature: Feature) -> None:
        self.features.append(feature)

    def is_well_spaced(self, gap: float) -> bool:
        """Check the lane invariant for every ordered pair"""
        for i, f in enumerate(self.features):
            for g in self.features[i + 1:]:
                if not g.position - gap > f.position + f.length:
                    return False
        return True

    def __len__(self) -> int:
        return len(self.features)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self.features)


class Track:
    """
    Vertical grouping of lanes with a single draw style

    Besides its lanes, a track remembers the features it was given as
    packing groups: a regular track has one group in insertion order, a
    sliced track one group per original lane. Each lane belongs to one
    group and a feature added later joins the group of the lane it was
    placed in. Rebuilding the lanes repacks each group on its own, so
    sliced tracks keep their original grouping.
    """

    def __init__(self, uid: str, draw_style: Optional[DrawStyle] = None) -> None:
        """
        Args:
            uid: Track id from the session allocator
            draw_style: 'expand', 'collapse', 'line', or None to use the layout default
        """
        self.uid: str = uid
        self.draw_style: Optional[DrawStyle] = validate_draw_style(draw_style)
        self.lanes: List[Lane] = []
        self._groups: List[List[Feature]] = []
        self._owners: List[int] = []    # packing group of each lane

    def set_draw_style(self, style: Optional[DrawStyle]) -> None:
        self.draw_style = validate_draw_style(style)

    def effective_draw_style(self, default: DrawStyle) -> DrawStyle:
        return self.draw_style or default

    def record(self, feature: Feature, lane_index: int) -> None:
        """
        Remember a feature already placed in lane `lane_index`

        A feature that opened a new lane joins the last group, which
        none of the existing lanes accepted either.
        """
        if not self._groups:
            self._groups.append([])
        if lane_index < len(self._owners):
            group = self._owners[lane_index]
        else:
            group = len(self._groups) - 1
            self._owners.append(group)
        self._groups[group].append(feature)

    def attach_group(self, features: Sequence[Feature], lanes: Sequence[Lane]) -> None:
        """Append an already packed group of features"""
        self._groups.append(list(features))
        self._owners.extend([len(self._groups) - 1] * len(lanes))
        self.lanes.extend(lanes)

    def set_lanes(self, lanes: Sequence[Lane], owners: Sequence[int]) -> None:
        """Replace the lanes, `owners` giving the packing group of each"""
        if len(lanes) != len(owners):
            raise ValueError(f"{len(lanes)} lanes but {len(owners)} group owners")
        self.lanes = list(lanes)
        self._owners = list(owners)

    @property
    def groups(self) -> List[List[Feature]]:
        return [list(g) for g in self._groups]

    @property
    def features(self) -> List[Feature]:
        """All features in lane order"""
        return [f for lane in self.lanes for f in lane]

    def __len__(self) -> int:
        return sum(len(lane) for lane in self.lanes)

    def __repr__(self) -> str:
        return f"Track(uid={self.uid!r}, lanes={len(self.lanes)}, features={len(self)}, draw_style={self.draw_style!r})"
