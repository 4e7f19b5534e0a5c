"""
Shape emission

Turns a placement into outline geometry for the drawing stage. Each feature
kind has one emitter; `emit_shapes` is the single dispatch point. All points
are absolute pixels; features on the '-' strand are mirrored horizontally
inside their own box (sub-features follow their parent and are not mirrored).
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, List
import logging

import numpy as np

from .features import BlockArrowPayload, FeatureKind, LinePayload, SplicedPayload
from .layout.result import Placement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Shape:
    """
    One outline to fill and/or stroke

    Attributes:
        uid: Feature the outline belongs to
        role: 'body', 'connector' or 'part'
        points: (N, 2) absolute (x, y) vertices
        closed: Whether the outline is a closed polygon
    """
    uid: str
    role: str
    points: np.ndarray
    closed: bool = True


def _box(x: float, y: float, length: float, height: float) -> np.ndarray:
    return np.array([
        [x, y],
        [x + length, y],
        [x + length, y + height],
        [x, y + height],
    ], dtype=float)


def _mirror(points: np.ndarray, x: float, length: float) -> np.ndarray:
    mirrored = points.copy()
    mirrored[:, 0] = 2 * x + length - mirrored[:, 0]
    return mirrored


def _emit_rect(p: Placement, role: str) -> List[Shape]:
    return [Shape(p.feature.uid, role, _box(p.x, p.y, p.pixel_length, p.pixel_height))]


def _emit_arrow(p: Placement, role: str) -> List[Shape]:
    points = np.array([
        [p.x, p.y],
        [p.x + p.pixel_length, p.y + p.pixel_height / 2],
        [p.x, p.y + p.pixel_height],
    ], dtype=float)
    return [Shape(p.feature.uid, role, points)]


def _emit_block_arrow(p: Placement, role: str) -> List[Shape]:
    payload = p.feature.payload
    slope = payload.slope if isinstance(payload, BlockArrowPayload) else 1.0
    head = min(p.pixel_height / 2 * slope, p.pixel_length)
    neck = p.x + p.pixel_length - head
    points = np.array([
        [p.x, p.y],
        [neck, p.y],
        [p.x + p.pixel_length, p.y + p.pixel_height / 2],
        [neck, p.y + p.pixel_height],
        [p.x, p.y + p.pixel_height],
    ], dtype=float)
    return [Shape(p.feature.uid, role, points)]


def _line_box(p: Placement, thickness: float) -> np.ndarray:
    mid = p.y + p.pixel_height / 2
    return _box(p.x, mid - thickness / 2, p.pixel_length, thickness)


def _emit_line(p: Placement, role: str) -> List[Shape]:
    payload = p.feature.payload
    thickness = payload.thickness if isinstance(payload, LinePayload) else 2.0
    return [Shape(p.feature.uid, role, _line_box(p, thickness))]


def _emit_spliced(p: Placement, role: str) -> List[Shape]:
    payload = p.feature.payload
    thickness = payload.connector_thickness if isinstance(payload, SplicedPayload) else 2.0
    shapes = [Shape(p.feature.uid, 'connector', _line_box(p, thickness))]
    for child in p.children:
        shapes.extend(_EMITTERS[child.feature.kind](child, 'part'))
    return shapes


_EMITTERS: Dict[FeatureKind, Callable[[Placement, str], List[Shape]]] = {
    FeatureKind.RECT: _emit_rect,
    FeatureKind.ARROW: _emit_arrow,
    FeatureKind.BLOCK_ARROW: _emit_block_arrow,
    FeatureKind.LINE: _emit_line,
    FeatureKind.SPLICED: _emit_spliced,
}


def emit_shapes(placement: Placement) -> List[Shape]:
    """
    Outline geometry of a placed feature

    Args:
        placement: Placement from a LayoutResult

    Returns:
        Shapes in drawing order (connector before exons for spliced features)
    """
    feature = placement.feature
    shapes = _EMITTERS[feature.kind](placement, 'body')
    if feature.strand == '-' and not feature.is_sub_feature:
        shapes = [
            Shape(s.uid, s.role, _mirror(s.points, placement.x, placement.pixel_length), s.closed)
            for s in shapes
        ]
    return shapes
