"""
Collapse merging

Turns the features of a collapsed track into merged visual runs drawn on a
single row. Features themselves are never modified; only the run geometry
is merged.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from ..features import Feature


@dataclass(frozen=True)
class MergedRun:
    """
    A run of overlapping (or touching) features drawn as one glyph

    Attributes:
        start: First coordinate of the run
        end: Coordinate just past the run
        features: Underlying features, sorted by position
        label: Name of the first feature, blanked when several are merged
    """
    start: int
    end: int
    features: Tuple[Feature, ...]
    label: str

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_merged(self) -> bool:
        return len(self.features) > 1


class CollapseMerger:
    """Sweeps features by position and merges overlapping ones into runs"""

    def merge(self, features: Iterable[Feature]) -> List[MergedRun]:
        """
        Merge features into runs

        A feature starting at or before the current run end extends the run;
        a feature starting after it closes the run and opens a new one.

        Args:
            features: Features of one track, in any order

        Returns:
            Runs in increasing position order
        """
        ordered = sorted(features, key=lambda f: f.position)
        runs: List[MergedRun] = []
        if not ordered:
            return runs

        members: List[Feature] = [ordered[0]]
        run_start, run_end = ordered[0].position, ordered[0].end
        for feature in ordered[1:]:
            if feature.position <= run_end:
                members.append(feature)
                run_end = max(run_end, feature.end)
            else:
                runs.append(self._close(run_start, run_end, members))
                members = [feature]
                run_start, run_end = feature.position, feature.end
        runs.append(self._close(run_start, run_end, members))
        return runs

    @staticmethod
    def _close(start: int, end: int, members: List[Feature]) -> MergedRun:
        label = members[0].name if len(members) == 1 else ''
        return MergedRun(start, end, tuple(members), label)
