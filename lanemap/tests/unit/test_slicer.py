"""
Unit tests for region slicing

Tests the three inclusion policies, clipping in strict mode and the shape
of the derived layout.
"""
import pytest

from lanemap.errors import InvalidRange
from lanemap.features import Feature, FeatureKind
from lanemap.layout import Layout, select_feature


def make(ids, position, length, name=''):
    return Feature(ids.next_id('feature'), FeatureKind.BLOCK_ARROW, 'gene', position, length, name=name)


class TestSelectFeature:
    """Tests for select_feature on a single feature [100, 200)"""

    @pytest.fixture
    def feature(self, ids):
        return make(ids, 100, 100, name='geneA')

    @pytest.mark.parametrize('region, kept', [
        ((150, 180), True),    # region inside the feature
        ((50, 120), True),     # overlaps the start
        ((180, 300), True),    # overlaps the end
        ((50, 300), True),     # feature inside the region
        ((200, 300), False),   # starts at the feature end
        ((0, 100), True),      # touches the feature start
        ((300, 400), False),
    ])
    def test_inclusive(self, feature, ids, region, kept):
        result = select_feature(feature, region[0], region[1], 'inclusive', ids)
        assert (result is feature) if kept else (result is None)

    @pytest.mark.parametrize('region, kept', [
        ((100, 201), True),    # starts at the region start
        ((100, 200), False),   # end must stay below the region end
        ((101, 300), False),
        ((150, 180), False),
    ])
    def test_exclusive(self, feature, ids, region, kept):
        result = select_feature(feature, region[0], region[1], 'exclusive', ids)
        assert (result is feature) if kept else (result is None)

    def test_strict_inside_unchanged(self, feature, ids):
        """Fully contained features keep their identity"""
        assert select_feature(feature, 100, 200, 'strict', ids) is feature

    def test_strict_clips_partial_overlap(self, feature, ids):
        """Partially overlapping features are cloned to the intersection"""
        clipped = select_feature(feature, 150, 400, 'strict', ids)
        assert clipped is not feature
        assert clipped.uid != feature.uid
        assert (clipped.position, clipped.length) == (150, 50)
        assert (clipped.type, clipped.strand, clipped.name) == ('gene', '+', 'geneA')
        assert (feature.position, feature.length) == (100, 100)

    def test_strict_drops_disjoint(self, feature, ids):
        assert select_feature(feature, 300, 400, 'strict', ids) is None
        assert select_feature(feature, 200, 400, 'strict', ids) is None

    def test_strict_fractional_bounds_clip_inward(self, ids):
        """Fractional region bounds round toward the inside of the region"""
        clipped = select_feature(make(ids, 50, 200), 100.5, 150.5, 'strict', ids)
        assert (clipped.position, clipped.length) == (101, 49)
        assert isinstance(clipped.position, int)

    def test_unknown_mode(self, feature, ids):
        with pytest.raises(ValueError):
            select_feature(feature, 0, 10, 'sideways', ids)


class TestRegionSlicer:
    """Tests for Layout.slice"""

    def test_inclusive_example(self, layout):
        """[0,10) [5,15) [20,25) sliced to [8, 22] keeps all three"""
        a = layout.add_gene(0, 10)
        b = layout.add_gene(5, 10)
        c = layout.add_gene(20, 5)
        sliced = layout.slice(8, 22, 'inclusive')
        assert {f.uid for f in sliced.features} == {a.uid, b.uid, c.uid}

    def test_strict_example(self, layout):
        """Strict slice of [0, 100) to [40, 60] gives one clone [40, 60)"""
        original = layout.add_gene(0, 100, name='big')
        sliced = layout.slice(40, 60, 'strict')
        [clone] = sliced.features
        assert clone.uid != original.uid
        assert (clone.position, clone.length) == (40, 20)
        assert clone.name == 'big'

    def test_strict_region_without_whole_coordinate(self, layout):
        """A region narrower than one unit clips every feature away"""
        layout.add_gene(50, 200)
        sliced = layout.slice(100.3, 100.9, 'strict')
        assert sliced.features == []

    def test_mirrors_tracks_and_lane_grouping(self, layout):
        """Surviving features of each original lane are packed on their own"""
        genes = layout.add_track()
        proteins = layout.add_track('collapse')
        a = layout.add_gene(0, 100, track=genes)
        b = layout.add_gene(50, 100, track=genes)
        c = layout.add_gene(500, 100, track=genes)
        p = layout.add_protein(10, 20, track=proteins)

        sliced = layout.slice(0, 1000)
        assert len(sliced.tracks) == 2
        assert sliced.tracks[1].draw_style == 'collapse'
        assert [lane.features for lane in sliced.tracks[0].lanes] == [[a, c], [b]]
        assert sliced.tracks[1].features == [p]

    def test_empty_original_lanes_produce_no_lanes(self, layout):
        layout.add_gene(0, 100)
        layout.add_gene(50, 100)     # lane 1
        layout.add_gene(5000, 100)   # lane 0
        sliced = layout.slice(4000, 6000, 'exclusive')
        assert len(sliced.tracks[0].lanes) == 1

    def test_domain_fixed_to_region(self, gene_layout):
        sliced = gene_layout.slice(1500, 2500)
        assert sliced.domain == (1500, 2500)

    def test_source_untouched(self, gene_layout):
        before = [f.uid for f in gene_layout.features]
        gene_layout.slice(1500, 2500, 'strict')
        assert [f.uid for f in gene_layout.features] == before
        assert gene_layout.domain == (1000, 6000)

    def test_shares_ids_and_config(self, gene_layout):
        sliced = gene_layout.slice(1500, 2500, 'strict')
        assert sliced.ids is gene_layout.ids
        assert sliced.config is gene_layout.config
        assert sliced.width == gene_layout.width

    def test_clipped_clone_has_fresh_uid(self, gene_layout):
        sliced = gene_layout.slice(1500, 2500, 'strict')
        source_uids = {f.uid for f in gene_layout.features}
        assert all(f.uid not in source_uids for f in sliced.features)

    def test_from_equals_to_is_empty(self, gene_layout):
        sliced = gene_layout.slice(2000, 2000)
        assert sliced.features == []
        assert len(sliced.tracks) == len(gene_layout.tracks)
        assert sliced.compute().is_empty

    def test_from_after_to_raises(self, gene_layout):
        with pytest.raises(InvalidRange):
            gene_layout.slice(3000, 2000)

    def test_unknown_mode_raises(self, gene_layout):
        with pytest.raises(ValueError):
            gene_layout.slice(0, 100, 'sideways')

    def test_sliced_layout_computes(self, gene_layout):
        result = gene_layout.slice(1500, 2500, 'strict').compute()
        assert result.layout_stats['n_features'] == 2
        assert all(p.pixel_length > 0 for p in result.placements)
