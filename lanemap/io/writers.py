"""
Layout export

Flattens a LayoutResult into tables for inspection or for a drawing stage
running elsewhere.
"""

import pandas as pd
from pathlib import Path
import logging

logger = logging.getLogger(__name__)

PLACEMENT_COLUMNS = [
    'uid', 'type', 'name', 'strand', 'position', 'length', 'track', 'lane',
    'x', 'y', 'pixel_length', 'pixel_height', 'label', 'merged',
]

TICK_COLUMNS = ['value', 'kind', 'x', 'y_top', 'y_bottom', 'label']


def placements_to_frame(result):
    """
    One row per placed glyph

    For collapsed tracks a row describes a merged run: position/length are
    the run's, 'merged' counts the underlying features.

    Args:
        result: LayoutResult

    Returns:
        DataFrame with PLACEMENT_COLUMNS
    """
    rows = []
    for p in result.placements:
        if len(p.merged) > 1:
            position = min(f.position for f in p.merged)
            length = max(f.end for f in p.merged) - position
        else:
            position = p.feature.absolute_position
            length = p.feature.length
        rows.append({
            'uid': p.feature.uid,
            'type': p.feature.type,
            'name': p.feature.name,
            'strand': p.feature.strand,
            'position': position,
            'length': length,
            'track': p.track_index,
            'lane': p.lane_index,
            'x': round(p.x, 3),
            'y': round(p.y, 3),
            'pixel_length': round(p.pixel_length, 3),
            'pixel_height': p.pixel_height,
            'label': p.label.text,
            'merged': len(p.merged),
        })
    return pd.DataFrame(rows, columns=PLACEMENT_COLUMNS)


def ticks_to_frame(result):
    """One row per gridline"""
    rows = [
        {'value': t.value, 'kind': t.kind, 'x': round(t.x, 3),
         'y_top': t.y_top, 'y_bottom': t.y_bottom, 'label': t.label}
        for t in result.ticks
    ]
    return pd.DataFrame(rows, columns=TICK_COLUMNS)


def write_placements(result, output_file):
    """
    Write placements as TSV

    Args:
        result: LayoutResult
        output_file: Path to output TSV file
    """
    frame = placements_to_frame(result)
    if frame.empty:
        logger.warning("No placements to save")

    Path(output_file).parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(output_file, sep='\t', index=False)
    logger.info(f"Wrote {len(frame)} placements to {output_file}")
