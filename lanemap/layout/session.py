"""
Layout session

A Layout owns everything one linear map needs between layout passes: the
configuration, chart width, coordinate domain, tracks, per-type style layers
and the id allocator that gives features and tracks their identity.
"""
from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, TYPE_CHECKING
import logging
import threading

from ..config import LayoutConfig
from ..features import (
    Feature, FeatureKind, IdAllocator, Payload, StyleLayer,
)
from ..scale import ScaleModel
from ..types import DrawStyle, SliceMode, Strand
from .allocator import LaneAllocator
from .engine import LayoutEngine
from .slicer import RegionSlicer
from .types import Lane, Track, validate_draw_style

if TYPE_CHECKING:
    from ..measure import TextMeasurer
    from .result import LayoutResult

logger = logging.getLogger(__name__)


class Layout:
    """
    Tracks of lanes of features on one linear coordinate axis

    The coordinate domain is either set explicitly (zoom/scroll) or follows
    the extent of the features added so far.

    Example:
        >>> layout = Layout(width=760)
        >>> gene = layout.add_gene(3500, 2000, '+', name='geneA')
        >>> result = layout.compute()
    """

    def __init__(
        self,
        width: Optional[int] = None,
        config: Optional[LayoutConfig] = None,
        ids: Optional[IdAllocator] = None
    ) -> None:
        """
        Args:
            width: Chart width (px); defaults to config.width
            config: Layout configuration (defaults if None)
            ids: Id allocator to share with another session (new one if None)
        """
        self.config: LayoutConfig = config or LayoutConfig()
        self.width: int = width if width is not None else self.config.width
        if self.width <= 0:
            raise ValueError(f"Chart width must be positive, got {self.width}")
        self.ids: IdAllocator = ids or IdAllocator()
        self.draw_style: DrawStyle = validate_draw_style(self.config.draw_style)
        self.tracks: List[Track] = []
        self.type_styles: Dict[str, StyleLayer] = {}

        self._domain: Optional[Tuple[float, float]] = None
        self._extent: Optional[Tuple[int, int]] = None
        self.pass_lock = threading.Lock()

    # ============================================================
    # DOMAIN AND SIZE
    # ============================================================

    def set_domain(self, min_value: float, max_value: float) -> None:
        """
        Fix the coordinate domain (zoom / scroll)

        Raises:
            DomainDegenerate: if max_value <= min_value
        """
        ScaleModel(min_value, max_value, self.width)
        self._domain = (min_value, max_value)
        logger.debug(f"Domain set to [{min_value}, {max_value}]")

    def clear_domain(self) -> None:
        """Go back to following the feature extent"""
        self._domain = None

    def resize(self, width: int) -> None:
        if width <= 0:
            raise ValueError(f"Chart width must be positive, got {width}")
        self.width = width

    @property
    def domain(self) -> Optional[Tuple[float, float]]:
        """Explicit domain if set, else the feature extent, else None"""
        if self._domain is not None:
            return self._domain
        return self._extent

    def current_scale(self) -> Optional[ScaleModel]:
        """Scale for the current domain and width, None while nothing is placed"""
        domain = self.domain
        if domain is None:
            return None
        return ScaleModel(domain[0], domain[1], self.width)

    def _extend(self, features: Iterable[Feature]) -> None:
        for feature in features:
            if self._extent is None:
                self._extent = (feature.position, feature.end)
            else:
                self._extent = (min(self._extent[0], feature.position), max(self._extent[1], feature.end))

    # ============================================================
    # TRACKS AND FEATURES
    # ============================================================

    def add_track(self, draw_style: Optional[DrawStyle] = None) -> Track:
        """Create a new track below the existing ones"""
        track = Track(self.ids.next_id('track'), draw_style)
        self.tracks.append(track)
        return track

    def set_draw_style(self, track: Track, style: DrawStyle) -> None:
        """Set how a track is drawn: 'expand', 'collapse' or 'line'"""
        track.set_draw_style(style)
        logger.debug(f"{track.uid} draw style -> {style}")

    def set_type_style(self, feature_type: str, layer: StyleLayer) -> None:
        """Register style overrides for every feature of a type"""
        self.type_styles[feature_type] = layer

    def create_feature(
        self,
        kind: FeatureKind,
        feature_type: str,
        position: int,
        length: int,
        strand: Strand = '+',
        name: str = '',
        payload: Payload = None,
        style: Optional[StyleLayer] = None,
        children: Optional[Sequence[Feature]] = None
    ) -> Feature:
        """
        Build a feature with an id from this session

        Raises:
            FeatureInvalid: if position < 0 or length <= 0
        """
        return Feature(
            uid=self.ids.next_id('feature'),
            kind=kind,
            type=feature_type,
            position=position,
            length=length,
            strand=strand,
            name=name,
            payload=payload,
            style=style or StyleLayer(),
            children=list(children or []),
        )

    def add_feature(self, feature: Feature, track: Optional[Track] = None) -> Feature:
        """
        Add a feature and let the lane allocator place it

        The domain is widened to the feature (unless fixed) before the gap
        threshold is derived, so placement always uses the current scale.

        Args:
            feature: Feature to add
            track: Target track (first track, created on demand, if None)

        Returns:
            The feature
        """
        if track is None:
            track = self.tracks[0] if self.tracks else self.add_track()
        self._extend([feature])
        allocator = LaneAllocator(self.current_scale(), self.config.lanes.gap_pixels)
        return allocator.add_feature(track, feature)

    def load_features(self, features: Iterable[Feature], track: Optional[Track] = None) -> List[Feature]:
        """Add several features in order"""
        return [self.add_feature(f, track) for f in features]

    def attach_group(self, track: Track, features: Sequence[Feature], lanes: Sequence[Lane]) -> None:
        """Append an already packed group of features to a track"""
        self._extend(features)
        track.attach_group(features, lanes)

    def add_gene(self, position: int, length: int, strand: Strand = '+', **opts) -> Feature:
        """Add a block-arrow feature of type 'gene'"""
        return self._add_typed('gene', position, length, strand, opts)

    def add_protein(self, position: int, length: int, strand: Strand = '+', **opts) -> Feature:
        """Add a block-arrow feature of type 'protein'"""
        return self._add_typed('protein', position, length, strand, opts)

    def _add_typed(self, feature_type: str, position: int, length: int, strand: Strand, opts: dict) -> Feature:
        track = opts.pop('track', None)
        feature = self.create_feature(FeatureKind.BLOCK_ARROW, feature_type, position, length, strand, **opts)
        return self.add_feature(feature, track)

    @property
    def features(self) -> List[Feature]:
        """Every top-level feature, track by track, lane by lane"""
        return [f for track in self.tracks for f in track.features]

    # ============================================================
    # DERIVED LAYOUTS AND PASSES
    # ============================================================

    def derive(self) -> 'Layout':
        """Empty layout sharing config, width, ids, default draw style and type styles"""
        derived = Layout(self.width, self.config, self.ids)
        derived.draw_style = self.draw_style
        derived.type_styles = dict(self.type_styles)
        return derived

    def slice(self, from_pos: float, to_pos: float, mode: SliceMode = 'inclusive') -> 'Layout':
        """Extract the region [from_pos, to_pos] into a new layout (see RegionSlicer)"""
        return RegionSlicer().slice(self, from_pos, to_pos, mode)

    def compute(self, measure: Optional['TextMeasurer'] = None) -> 'LayoutResult':
        """Run a full layout pass (see LayoutEngine)"""
        return LayoutEngine(measure).calculate_layout(self)

    def __repr__(self) -> str:
        return (f"Layout(width={self.width}, domain={self.domain}, tracks={len(self.tracks)}, "
                f"features={len(self.features)})")
