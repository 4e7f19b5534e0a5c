"""
Layout Module for lanemap
Lane packing, region slicing and full layout passes for linear feature maps

Public API:
    - Layout: Session holding tracks, lanes, features and the domain
    - LayoutEngine: Full layout pass producing a LayoutResult
    - LaneAllocator: Greedy first-fit lane packing
    - RegionSlicer: Region extraction (inclusive / exclusive / strict)
    - CollapseMerger: Merged runs for the collapse draw style
"""

from .types import Lane, Track
from .allocator import LaneAllocator
from .collapse import CollapseMerger, MergedRun
from .coverage import CoverageCurve, compute_coverage
from .result import LayoutResult, Placement, TrackLayout
from .engine import LayoutEngine
from .slicer import RegionSlicer, select_feature
from .session import Layout

__all__ = [
    'Lane',
    'Track',
    'LaneAllocator',
    'CollapseMerger',
    'MergedRun',
    'CoverageCurve',
    'compute_coverage',
    'LayoutResult',
    'Placement',
    'TrackLayout',
    'LayoutEngine',
    'RegionSlicer',
    'select_feature',
    'Layout',
]
