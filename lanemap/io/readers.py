"""
Feature conversion

Builds lanemap features from data that has already been parsed by the
caller: plain descriptors, pandas DataFrames and Biopython SeqRecords.
Reading and parsing files stays with the caller.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Sequence
import logging

import pandas as pd
from Bio.SeqRecord import SeqRecord

from ..features import Feature, FeatureKind, IdAllocator, StyleLayer
from ..types import FeatureDescriptor

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ('position', 'length', 'strand', 'type')

NAME_QUALIFIERS = ('gene', 'locus_tag', 'product', 'label', 'note')
"""SeqFeature qualifiers tried, in order, for the feature name"""


def feature_from_descriptor(descriptor: FeatureDescriptor, ids: IdAllocator) -> Feature:
    """
    Build one feature (and its children) from a descriptor

    Args:
        descriptor: Mapping with position, length, strand, type and optional
                    kind, name, children and styleOverrides
        ids: Session id allocator

    Returns:
        Feature

    Raises:
        FeatureInvalid: for negative positions or non-positive lengths
        KeyError: if a required key is missing
    """
    children = [feature_from_descriptor(c, ids) for c in descriptor.get('children') or []]
    return Feature(
        uid=ids.next_id('feature'),
        kind=FeatureKind(descriptor.get('kind') or FeatureKind.BLOCK_ARROW),
        type=descriptor['type'],
        position=int(descriptor['position']),
        length=int(descriptor['length']),
        strand=descriptor.get('strand', '+'),
        name=descriptor.get('name') or '',
        style=StyleLayer.from_dict(descriptor.get('styleOverrides')),
        children=children,
    )


def features_from_records(records: Iterable[FeatureDescriptor], ids: IdAllocator) -> List[Feature]:
    """Build features from a sequence of descriptors, keeping their order"""
    return [feature_from_descriptor(r, ids) for r in records]


def features_from_frame(frame: pd.DataFrame, ids: IdAllocator) -> List[Feature]:
    """
    Build features from a table with one row per feature

    Required columns: position, length, strand, type.
    Optional columns: name, kind.

    Args:
        frame: Feature table
        ids: Session id allocator

    Returns:
        Features in row order
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
    if missing:
        raise ValueError(f"Feature table is missing required columns: {', '.join(missing)}")

    features: List[Feature] = []
    for _, row in frame.iterrows():
        descriptor: FeatureDescriptor = {
            'position': int(row['position']),
            'length': int(row['length']),
            'strand': str(row['strand']),
            'type': str(row['type']),
        }
        if 'name' in frame.columns and not pd.isna(row['name']):
            descriptor['name'] = str(row['name'])
        if 'kind' in frame.columns and not pd.isna(row['kind']):
            descriptor['kind'] = str(row['kind'])
        features.append(feature_from_descriptor(descriptor, ids))

    logger.debug(f"Built {len(features)} features from a {len(frame)}-row table")
    return features


def _qualifier_name(qualifiers: dict) -> str:
    for key in NAME_QUALIFIERS:
        values = qualifiers.get(key)
        if values:
            return str(values[0])
    return ''


def features_from_seqrecord(
    record: SeqRecord,
    ids: IdAllocator,
    feature_types: Optional[Sequence[str]] = None
) -> List[Feature]:
    """
    Build features from an annotated Biopython SeqRecord

    Simple locations become block arrows; compound (joined) locations become
    spliced features whose parts are rect children.

    Args:
        record: Record already parsed by the caller (e.g. SeqIO.read(..., 'genbank'))
        ids: Session id allocator
        feature_types: Only keep these SeqFeature types (all if None)

    Returns:
        Features in record order
    """
    features: List[Feature] = []
    for seq_feature in record.features:
        if feature_types is not None and seq_feature.type not in feature_types:
            continue
        location = seq_feature.location
        start, end = int(location.start), int(location.end)
        if end <= start:
            logger.warning(f"Skipping {seq_feature.type} with empty location {location}")
            continue

        strand = '-' if location.strand == -1 else '+'
        name = _qualifier_name(seq_feature.qualifiers)
        parts = list(location.parts)

        if len(parts) > 1:
            if any(int(p.start) < start for p in parts):
                logger.warning(f"Skipping {seq_feature.type} '{name}': parts wrap around the origin")
                continue
            exons = [
                Feature(
                    uid=ids.next_id('feature'),
                    kind=FeatureKind.RECT,
                    type=seq_feature.type,
                    position=int(p.start) - start,
                    length=int(p.end) - int(p.start),
                    strand=strand,
                )
                for p in parts if int(p.end) > int(p.start)
            ]
            kind = FeatureKind.SPLICED
        else:
            exons = []
            kind = FeatureKind.BLOCK_ARROW

        features.append(Feature(
            uid=ids.next_id('feature'),
            kind=kind,
            type=seq_feature.type,
            position=start,
            length=end - start,
            strand=strand,
            name=name,
            children=exons,
        ))

    logger.info(f"Built {len(features)} features from record {record.id}")
    return features
