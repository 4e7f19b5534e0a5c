"""
Coverage curve for the 'line' draw style

Counts, per pixel column, how many features of a track cover it and
normalizes the counts into a curve that fits one lane.

The depth buffer is bounded to the chart columns [0, offset + pixel_width];
features scrolled or zoomed out of view are clipped, so its size does not
grow with the genomic range.
"""
from __future__ import annotations
from dataclasses import dataclass
from math import ceil, floor
from typing import Sequence, Tuple
import logging

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CoverageCurve:
    """
    Attributes:
        depth: Feature count per pixel column, index = absolute column
        max_depth: Highest count (0 for an empty track)
        points: (N, 2) absolute (x, y) points of the curve, closed on the baseline
    """
    depth: np.ndarray
    max_depth: int
    points: np.ndarray


def compute_coverage(
    spans: Sequence[Tuple[float, float]],
    offset: float,
    pixel_width: float,
    lane_size: float,
    top: float = 0.0
) -> CoverageCurve:
    """
    Build the coverage curve of a track

    Args:
        spans: (absolute x, pixel length) of every feature
        offset: Left offset of the chart (px)
        pixel_width: Chart width (px)
        lane_size: Height available for the curve (px)
        top: Absolute y of the track top (px)

    Returns:
        CoverageCurve
    """
    n_columns = int(ceil(offset + pixel_width)) + 1
    diff = np.zeros(n_columns + 1, dtype=np.int64)

    if spans:
        xs = np.asarray([s[0] for s in spans], dtype=float)
        lengths = np.asarray([s[1] for s in spans], dtype=float)
        starts = np.floor(xs + 0.5).astype(np.int64)
        ends = np.floor(starts + lengths + 0.5).astype(np.int64)

        visible = (ends >= 0) & (starts < n_columns)
        clipped = int((~visible).sum())
        if clipped:
            logger.debug(f"{clipped} features outside the visible columns skipped")
        starts = np.clip(starts[visible], 0, n_columns - 1)
        ends = np.clip(ends[visible], 0, n_columns - 1)
        np.add.at(diff, starts, 1)
        np.add.at(diff, ends + 1, -1)

    depth = np.cumsum(diff[:n_columns])
    max_depth = int(depth.max()) if depth.size else 0

    columns = np.arange(int(ceil(offset)), int(floor(offset + pixel_width)) + 1)
    columns = columns[columns < n_columns]
    if max_depth > 0:
        heights = depth[columns] / max_depth * lane_size
    else:
        heights = np.zeros(len(columns))
    ys = top + lane_size - heights

    points = np.column_stack([columns.astype(float), ys])
    baseline = np.array([[offset + pixel_width, top + lane_size]])
    points = np.vstack([points, baseline])
    return CoverageCurve(depth=depth, max_depth=max_depth, points=points)
