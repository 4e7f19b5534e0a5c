"""lanemap: Lane packing, scale ticks and region slicing for linear genomic maps"""

from .config import LayoutConfig, ScaleConfig, TickConfig, LaneConfig, GlyphStyle, LabelConfig
from .errors import LaneMapError, DomainDegenerate, FeatureInvalid, InvalidRange
from .features import Feature, FeatureKind, IdAllocator, StyleLayer, resolve_style
from .scale import ScaleModel
from .ticks import TickPlanner, determine_major_tick, format_tick_label
from .measure import Font, MonospaceMeasurer, MatplotlibMeasurer
from .layout import Layout, LayoutEngine, LayoutResult, RegionSlicer
from .shapes import emit_shapes
from .viewport import ScrollWindow

__version__ = "0.1.0"
__all__ = [
    "LayoutConfig", "ScaleConfig", "TickConfig", "LaneConfig", "GlyphStyle", "LabelConfig",
    "LaneMapError", "DomainDegenerate", "FeatureInvalid", "InvalidRange",
    "Feature", "FeatureKind", "IdAllocator", "StyleLayer", "resolve_style",
    "ScaleModel", "TickPlanner", "determine_major_tick", "format_tick_label",
    "Font", "MonospaceMeasurer", "MatplotlibMeasurer",
    "Layout", "LayoutEngine", "LayoutResult", "RegionSlicer",
    "emit_shapes", "ScrollWindow"]
