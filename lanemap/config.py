"""
lanemap Configuration

Chart, scale, tick and lane defaults for linear feature maps.
"""
from dataclasses import dataclass, field
from typing import Tuple, Union

from .types import DrawStyle


@dataclass
class ScaleConfig:
    """
    Ruler (scale) settings

    Heights are in pixels. The scale occupies font_size + size pixels at the
    top of the chart unless it is turned off.
    """

    pretty: bool = True
    """Start and end the scale on major ticks and choose tick distances automatically"""

    auto: bool = True
    """Allow the domain to be widened to major tick boundaries"""

    off: bool = False
    """Hide the scale entirely (no vertical space reserved)"""

    size: int = 15
    """Height of the tick area (px)"""

    font_size: int = 15
    """Tick label font size (px)"""

    font_family: str = 'arial'
    """Tick label font family"""

    label_buffer: int = 10
    """Horizontal buffer between two tick labels (px), e.g. between 1k and 2k"""

    offset_padding: int = 10
    """Left padding added to half the width of '0' so the first label is not cut off (px)"""

    @property
    def height(self) -> int:
        """Total height of the scale (px)"""
        return self.font_size + self.size


@dataclass
class TickConfig:
    """Tick interval settings"""

    auto: bool = True
    """Determine tick intervals from chart width and label width; also abbreviates labels (k/m)"""

    major_size: int = 10
    """Distance between major ticks in coordinate units (used when auto is off)"""

    minor_size: int = 1
    """Distance between minor ticks in coordinate units (used when auto is off)"""


@dataclass
class LaneConfig:
    """Lane and track stacking"""

    lane_size: int = 50
    """Height of one lane (px)"""

    lane_buffer: int = 5
    """Vertical gap between lanes (px)"""

    track_buffer: int = 25
    """Vertical gap between tracks (px)"""

    gap_pixels: float = 3.0
    """Minimum horizontal spacing between features sharing a lane (px)"""


@dataclass
class GlyphStyle:
    """
    Chart-level default style

    Last layer of style resolution: every field is always set here, so a
    lookup that falls through feature, parent and type layers ends here.
    """

    color: Union[str, Tuple[str, ...]] = ('#99CCFF', 'rgb(63, 128, 205)')
    """Fill color, or a tuple of colors for a vertical gradient"""

    border_color: str = 'none'
    border_width: float = 1.0
    roundness: float = 6.0
    """Corner roundness as a percentage of glyph height"""

    text_color: str = 'black'
    text_size: int = 13
    text_font: str = 'arial'
    text_align: str = 'center'


@dataclass
class LabelConfig:
    """Feature label fitting"""

    padding: int = 5
    """Distance between label anchor and glyph edge for left/right alignment (px)"""

    min_font_size: int = 8
    """Labels are blanked when the font would shrink to this size or below (px)"""

    min_clearance: int = 4
    """Minimum free space between label width and glyph length (px)"""


@dataclass
class LayoutConfig:
    """
    Complete chart configuration
    """

    # ============================================================
    # SUB-CONFIGURATIONS
    # ============================================================
    scale: ScaleConfig = field(default_factory=ScaleConfig)
    tick: TickConfig = field(default_factory=TickConfig)
    lanes: LaneConfig = field(default_factory=LaneConfig)
    glyph: GlyphStyle = field(default_factory=GlyphStyle)
    labels: LabelConfig = field(default_factory=LabelConfig)

    # ============================================================
    # CHART
    # ============================================================
    width: int = 760
    """Chart width available for features (px), excluding the left offset"""

    draw_style: DrawStyle = 'expand'
    """Default draw style for tracks that do not set their own"""

    # ============================================================
    # PRESET CONFIGURATIONS
    # ============================================================

    @classmethod
    def compact(cls) -> 'LayoutConfig':
        """
        Dense settings for many features

        - Thin lanes with small buffers
        - Smaller tick labels

        Example:
            >>> config = LayoutConfig.compact()
            >>> layout = Layout(config=config)
        """
        config = cls()
        config.lanes.lane_size = 20
        config.lanes.lane_buffer = 2
        config.lanes.track_buffer = 10
        config.scale.font_size = 11
        config.scale.size = 10
        config.glyph.text_size = 10
        return config

    @classmethod
    def presentation(cls) -> 'LayoutConfig':
        """
        Settings for screen presentations

        - Wider chart
        - Larger lanes, fonts and gaps
        """
        config = cls()
        config.width = 1200
        config.lanes.lane_size = 60
        config.lanes.lane_buffer = 8
        config.lanes.gap_pixels = 5.0
        config.scale.font_size = 18
        config.glyph.text_size = 16
        return config
