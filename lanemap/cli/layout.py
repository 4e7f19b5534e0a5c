"""Layout subcommand - feature table to placements table"""

from __future__ import annotations
from typing import Dict, Optional
from pathlib import Path
import logging
from argparse import ArgumentParser, Namespace, _SubParsersAction
import pandas as pd

from ..config import LayoutConfig
from ..io import features_from_frame, write_placements
from ..io.writers import ticks_to_frame
from ..layout import Layout, Track
from ..measure import MatplotlibMeasurer, MonospaceMeasurer, TextMeasurer
from ..types import DRAW_STYLES, SLICE_MODES

logger = logging.getLogger(__name__)

PRESETS = {
    'default': LayoutConfig,
    'compact': LayoutConfig.compact,
    'presentation': LayoutConfig.presentation,
}


def add_parser(subparsers: _SubParsersAction) -> ArgumentParser:
    """
    Add layout subcommand parser

    Args:
        subparsers: Subparser action from main argument parser

    Returns:
        Configured ArgumentParser for layout subcommand
    """
    parser = subparsers.add_parser(
        'layout',
        help='Compute lane placements for a feature table'
    )

    parser.add_argument('--input', required=True,
                        help='TSV with columns position, length, strand, type (optional: name, kind, track)')
    parser.add_argument('--output', required=True,
                        help='Output TSV with one row per placed glyph')
    parser.add_argument('--ticks-output',
                        help='Optional TSV with the scale gridlines')

    # Chart
    parser.add_argument('--width', type=int,
                        help='Chart width in pixels (default: preset width, 760)')
    parser.add_argument('--preset', choices=sorted(PRESETS), default='default',
                        help='Configuration preset (default: default)')
    parser.add_argument('--draw-style', choices=DRAW_STYLES, default='expand',
                        help='Draw style for all tracks (default: expand)')
    parser.add_argument('--measure', choices=['monospace', 'matplotlib'], default='monospace',
                        help='Text width backend used for labels (default: monospace)')

    # Region
    parser.add_argument('--slice', nargs=2, type=float, metavar=('FROM', 'TO'),
                        help='Only lay out the region FROM-TO')
    parser.add_argument('--mode', choices=SLICE_MODES, default='inclusive',
                        help='Slice inclusion policy (default: inclusive)')

    parser.add_argument('--debug', action='store_true', help='Enable debug logging for troubleshooting')

    return parser  # type: ignore[no-any-return]


def build_layout(frame: pd.DataFrame, config: LayoutConfig, width: Optional[int] = None) -> Layout:
    """
    Build a layout from a feature table

    Rows are added in table order. With a 'track' column, each distinct
    value gets its own track, in order of first appearance.
    """
    layout = Layout(width=width, config=config)
    features = features_from_frame(frame, layout.ids)

    if 'track' not in frame.columns:
        layout.load_features(features)
        return layout

    tracks: Dict[str, Track] = {}
    for track_key, feature in zip(frame['track'].astype(str), features):
        if track_key not in tracks:
            tracks[track_key] = layout.add_track()
        layout.add_feature(feature, tracks[track_key])
    logger.info(f"Built {len(tracks)} tracks from column 'track'")
    return layout


def run(args: Namespace) -> None:
    """
    Execute layout subcommand

    Args:
        args: Parsed command-line arguments from argparse
    """
    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "debug", False) else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        force=True
    )

    # Silence very noisy third-party loggers (matplotlib font discovery etc.)
    for noisy in ("matplotlib", "matplotlib.font_manager", "PIL", "fontTools"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    input_file = Path(args.input)
    if not input_file.exists():
        raise FileNotFoundError(f"Input file not found: {input_file}")

    logger.info(f"Input: {input_file}")
    logger.info(f"Output: {args.output}")

    config = PRESETS[args.preset]()
    config.draw_style = args.draw_style

    frame = pd.read_csv(input_file, sep='\t')
    logger.info(f"Loaded {len(frame)} features")
    layout = build_layout(frame, config, args.width)

    if args.slice:
        from_pos, to_pos = args.slice
        layout = layout.slice(from_pos, to_pos, args.mode)

    measure: TextMeasurer = MatplotlibMeasurer() if args.measure == 'matplotlib' else MonospaceMeasurer()
    result = layout.compute(measure)

    write_placements(result, args.output)
    if args.ticks_output:
        Path(args.ticks_output).parent.mkdir(parents=True, exist_ok=True)
        ticks_to_frame(result).to_csv(args.ticks_output, sep='\t', index=False)
        logger.info(f"Wrote {len(result.ticks)} ticks to {args.ticks_output}")

    logger.info(f"✓ Layout saved: {args.output}")
