"""
Feature model

Features are the glyphs placed on a linear map. The set of kinds is closed:
every feature shares the same geometry fields and carries a kind-specific
payload. Identity (uid) comes from an IdAllocator owned by the layout
session; geometry is only ever changed by cloning.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from itertools import count
from typing import Dict, Iterator, List, Optional, Tuple, Union
import logging

from .config import GlyphStyle
from .errors import FeatureInvalid
from .types import Strand, STRANDS

logger = logging.getLogger(__name__)


class FeatureKind(str, Enum):
    """Glyph kinds understood by the layout and shape emission"""
    RECT = 'rect'
    ARROW = 'arrow'
    BLOCK_ARROW = 'block_arrow'
    LINE = 'line'
    SPLICED = 'spliced'


# ============================================================
# KIND PAYLOADS
# ============================================================

@dataclass(frozen=True)
class BlockArrowPayload:
    """Arrow head slope; head length is slope * half the glyph height"""
    slope: float = 1.0


@dataclass(frozen=True)
class LinePayload:
    """Stroke thickness of a line glyph (px)"""
    thickness: float = 2.0


@dataclass(frozen=True)
class SplicedPayload:
    """Thickness of the connector line drawn under the exons (px)"""
    connector_thickness: float = 2.0


Payload = Union[BlockArrowPayload, LinePayload, SplicedPayload, None]

_DEFAULT_PAYLOADS: Dict[FeatureKind, Payload] = {
    FeatureKind.RECT: None,
    FeatureKind.ARROW: None,
    FeatureKind.BLOCK_ARROW: BlockArrowPayload(),
    FeatureKind.LINE: LinePayload(),
    FeatureKind.SPLICED: SplicedPayload(),
}


def default_payload(kind: FeatureKind) -> Payload:
    """Default payload for a feature kind"""
    return _DEFAULT_PAYLOADS[FeatureKind(kind)]


# ============================================================
# IDENTITY
# ============================================================

class IdAllocator:
    """
    Hands out unique ids for one layout session

    Ids are '<prefix><n>' with a single counter shared by all prefixes, so
    'feature0' and 'track1' never collide.
    """

    def __init__(self, start: int = 0) -> None:
        self._counter: Iterator[int] = count(start)

    def next_id(self, prefix: str = '') -> str:
        return f"{prefix}{next(self._counter)}"


# ============================================================
# STYLE LAYERS
# ============================================================

@dataclass(frozen=True)
class StyleLayer:
    """
    One optional layer of style overrides

    A None field means "not set at this layer".
    """
    color: Optional[Union[str, Tuple[str, ...]]] = None
    border_color: Optional[str] = None
    border_width: Optional[float] = None
    roundness: Optional[float] = None
    text_color: Optional[str] = None
    text_size: Optional[int] = None
    text_font: Optional[str] = None
    text_align: Optional[str] = None

    @classmethod
    def from_dict(cls, overrides: Optional[Dict[str, object]]) -> 'StyleLayer':
        """Build a layer from a plain mapping, accepting camelCase keys"""
        if not overrides:
            return cls()
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in overrides.items():
            name = _snake_case(key)
            if name not in known:
                logger.warning(f"Ignoring unknown style override '{key}'")
                continue
            if name == 'color' and isinstance(value, list):
                value = tuple(value)
            values[name] = value
        return cls(**values)


def _snake_case(key: str) -> str:
    out = []
    for ch in key:
        if ch.isupper():
            out.append('_')
            out.append(ch.lower())
        else:
            out.append(ch)
    return ''.join(out).replace('-', '_')


def resolve_style(
    feature: 'Feature',
    type_styles: Optional[Dict[str, StyleLayer]],
    chart_default: GlyphStyle
) -> GlyphStyle:
    """
    Resolve the effective style of a feature

    Layers are consulted in a fixed order: the feature itself, its parent,
    the layer registered for its type, then the chart default. The first
    layer with a non-None value wins, field by field.

    Args:
        feature: Feature to resolve
        type_styles: Style layers keyed by feature type
        chart_default: Fully populated chart-level defaults

    Returns:
        GlyphStyle with every field set
    """
    layers: List[StyleLayer] = [feature.style]
    if feature.parent is not None:
        layers.append(feature.parent.style)
    if type_styles and feature.type in type_styles:
        layers.append(type_styles[feature.type])

    resolved = {}
    for f in fields(GlyphStyle):
        for layer in layers:
            value = getattr(layer, f.name)
            if value is not None:
                resolved[f.name] = value
                break
    return replace(chart_default, **resolved)


# ============================================================
# FEATURE
# ============================================================

@dataclass(eq=False)
class Feature:
    """
    A glyph on the map

    Attributes:
        uid: Unique identity within a layout session
        kind: Glyph kind (closed set)
        type: Free tag such as 'gene' or 'protein'; selects a type style layer
        position: Start coordinate; relative to the parent for sub-features
        length: Length in coordinate units (> 0)
        strand: '+' or '-'
        name: Label text
        payload: Kind-specific data
        style: Feature-level style overrides
        children: Sub-features (e.g. exons of a spliced gene)
        parent: Back-reference set on sub-features
    """
    uid: str
    kind: FeatureKind
    type: str
    position: int
    length: int
    strand: Strand = '+'
    name: str = ''
    payload: Payload = None
    style: StyleLayer = field(default_factory=StyleLayer)
    children: List['Feature'] = field(default_factory=list)
    parent: Optional['Feature'] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.kind = FeatureKind(self.kind)
        if self.position < 0 or self.length <= 0:
            raise FeatureInvalid(self.position, self.length)
        if self.strand not in STRANDS:
            raise ValueError(f"Invalid strand '{self.strand}' (expected '+' or '-')")
        if self.payload is None:
            self.payload = default_payload(self.kind)
        expected = _DEFAULT_PAYLOADS[self.kind]
        if expected is None and self.payload is not None:
            raise ValueError(f"{self.kind.value} features take no payload")
        if expected is not None and type(self.payload) is not type(expected):
            raise ValueError(f"{self.kind.value} features need a {type(expected).__name__} payload, "
                             f"got {type(self.payload).__name__}")
        for child in self.children:
            child.parent = self

    @property
    def end(self) -> int:
        """Coordinate just past the last unit covered"""
        return self.position + self.length

    @property
    def absolute_position(self) -> int:
        """Start coordinate on the map, resolving parent offsets"""
        if self.parent is not None:
            return self.position + self.parent.absolute_position
        return self.position

    @property
    def is_sub_feature(self) -> bool:
        return self.parent is not None

    def add_child(self, child: 'Feature') -> 'Feature':
        """Attach a sub-feature whose position is relative to this feature"""
        child.parent = self
        self.children.append(child)
        return child

    def clone(
        self,
        ids: IdAllocator,
        position: Optional[int] = None,
        length: Optional[int] = None
    ) -> 'Feature':
        """
        Copy this feature into a new instance with a fresh uid

        Children are cloned as well and re-anchored so their absolute
        positions do not move when the clone starts elsewhere. When the
        geometry changes, children are clipped to the new extent and
        children left without overlap are dropped.

        Args:
            ids: Allocator of the owning session
            position: New start (defaults to the current one)
            length: New length (defaults to the current one)

        Returns:
            New Feature; the clone has no parent
        """
        new_position = self.position if position is None else position
        new_length = self.length if length is None else length
        shift = self.position - new_position
        copy = Feature(
            uid=ids.next_id('feature'),
            kind=self.kind,
            type=self.type,
            position=new_position,
            length=new_length,
            strand=self.strand,
            name=self.name,
            payload=self.payload,
            style=self.style,
        )
        reshaped = position is not None or length is not None
        for child in self.children:
            if not reshaped:
                copy.add_child(child.clone(ids))
                continue
            start = max(child.position + shift, 0)
            end = min(child.position + shift + child.length, new_length)
            if end <= start:
                continue
            copy.add_child(child.clone(ids, position=start, length=end - start))
        return copy

    def __hash__(self) -> int:
        return hash(self.uid)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Feature) and other.uid == self.uid
