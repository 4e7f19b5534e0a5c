"""I/O utilities for lanemap"""

from .readers import (
    feature_from_descriptor, features_from_records, features_from_frame, features_from_seqrecord,
)
from .writers import placements_to_frame, ticks_to_frame, write_placements

__all__ = [
    'feature_from_descriptor', 'features_from_records',
    'features_from_frame', 'features_from_seqrecord',
    'placements_to_frame', 'ticks_to_frame', 'write_placements']
