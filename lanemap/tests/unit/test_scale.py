"""
Unit tests for ScaleModel

Covers the coordinate <-> pixel transform, domain validation and
prettifying the domain to major tick boundaries.
"""
import pytest

from lanemap.errors import DomainDegenerate
from lanemap.scale import ScaleModel


@pytest.mark.coordinates
class TestTransform:
    """Tests for to_pixels / to_units"""

    def test_domain_bounds_map_to_chart_edges(self):
        """min maps to pixel 0, max to pixel_width"""
        scale = ScaleModel(1000, 2000, 500)
        assert scale.to_pixels(1000) == 0
        assert scale.to_pixels(2000) == 500

    def test_midpoint(self):
        """Linear mapping of the domain midpoint"""
        scale = ScaleModel(0, 10000, 760)
        assert scale.to_pixels(5000) == pytest.approx(380)

    def test_round_trip(self):
        """to_units is the inverse of to_pixels"""
        scale = ScaleModel(123, 98765, 731)
        for coord in (123, 500, 4567.5, 98765, 50000):
            assert scale.to_units(scale.to_pixels(coord)) == pytest.approx(coord)

    def test_outside_domain_extrapolates(self):
        """Coordinates left of min give negative pixels"""
        scale = ScaleModel(100, 200, 100)
        assert scale.to_pixels(50) == pytest.approx(-50)

    def test_lengths(self):
        """Length conversions use the same ratio in both directions"""
        scale = ScaleModel(0, 2000, 500)
        assert scale.length_to_pixels(400) == pytest.approx(100)
        assert scale.pixels_to_length(3) == pytest.approx(12)


class TestDomain:
    """Tests for domain validation"""

    def test_degenerate_domain_rejected(self):
        """max == min raises DomainDegenerate"""
        with pytest.raises(DomainDegenerate):
            ScaleModel(100, 100, 500)

    def test_inverted_domain_rejected(self):
        """max < min raises DomainDegenerate"""
        scale = ScaleModel(0, 100, 500)
        with pytest.raises(DomainDegenerate):
            scale.set_domain(200, 100)
        assert (scale.min, scale.max) == (0, 100)

    def test_degenerate_is_value_error(self):
        """DomainDegenerate can be caught as ValueError"""
        with pytest.raises(ValueError):
            ScaleModel(5, 1, 500)

    def test_non_positive_width_rejected(self):
        """Pixel width must be positive"""
        with pytest.raises(ValueError):
            ScaleModel(0, 100, 0)


class TestPrettifyDomain:
    """Tests for prettify_domain"""

    def test_min_rounds_down_max_rounds_up(self):
        """Domain is widened outwards to major multiples"""
        scale = ScaleModel(3500, 5500, 760)
        scale.prettify_domain(1000)
        assert scale.min == 3000
        assert scale.max == 6000

    def test_min_on_multiple_is_kept(self):
        """min already on a major tick does not move"""
        scale = ScaleModel(3000, 5500, 760)
        scale.prettify_domain(1000)
        assert scale.min == 3000

    def test_max_on_multiple_moves_strictly_above(self):
        """max on a major tick still moves up one interval"""
        scale = ScaleModel(0, 10000, 760)
        scale.prettify_domain(1000)
        assert scale.max == 11000

    def test_copy_is_independent(self):
        """Prettifying a copy leaves the original untouched"""
        scale = ScaleModel(3500, 5500, 760)
        copy = scale.copy()
        copy.prettify_domain(1000)
        assert (scale.min, scale.max) == (3500, 5500)
