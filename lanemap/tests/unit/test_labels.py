"""
Unit tests for label fitting
"""
import pytest

from lanemap.config import LabelConfig
from lanemap.labels import fit_label, resolve_alignment
from lanemap.measure import Font, MonospaceMeasurer


@pytest.fixture
def font():
    return Font(13, 'arial')


class TestResolveAlignment:

    @pytest.mark.parametrize('align, strand, expected', [
        ('start', '+', 'left'),
        ('start', '-', 'right'),
        ('end', '+', 'right'),
        ('end', '-', 'left'),
        ('center', '-', 'center'),
    ])
    def test_strand_relative(self, align, strand, expected):
        assert resolve_alignment(align, strand) == expected


class TestFitLabel:
    """Tests for fit_label"""

    def test_fits_unchanged(self, font, measure):
        """'geneA' at 13px is 39px wide, plenty of room in 200px"""
        label = fit_label('geneA', 200, font, 'center', '+', measure)
        assert label.text == 'geneA'
        assert label.font.size == 13
        assert label.anchor_x == 100

    def test_shrinks_until_clearance(self, font, measure):
        """Font shrinks one pixel at a time until 4px are left"""
        # 5 chars * 0.6 * size; 45px glyph needs width <= 41 -> size 13 (39px) fits
        assert fit_label('geneA', 45, font, 'center', '+', measure).font.size == 13
        # 40px glyph: 13 -> 39px (1px left), 12 -> 36px (4px left)
        assert fit_label('geneA', 40, font, 'center', '+', measure).font.size == 12

    def test_blanked_at_min_size(self, font, measure):
        label = fit_label('a very long gene name', 20, font, 'center', '+', measure)
        assert label.is_blank
        assert label.text == ''

    def test_alignment_anchors(self, font, measure):
        config = LabelConfig(padding=5)
        left = fit_label('g', 100, font, 'start', '+', measure, config)
        right = fit_label('g', 100, font, 'start', '-', measure, config)
        assert (left.align, left.anchor_x) == ('left', 5)
        assert (right.align, right.anchor_x) == ('right', 95)

    def test_empty_text(self, font):
        label = fit_label('', 100, font, 'center', '+', MonospaceMeasurer())
        assert label.is_blank
        assert label.font == font


class TestMeasurers:
    """Tests for text measurement backends"""

    def test_monospace(self):
        assert MonospaceMeasurer()('abcd', Font(10, 'arial')) == pytest.approx(24)

    def test_font_string(self):
        assert str(Font(15, 'arial')) == '15px arial'
        assert Font.parse('15px arial') == Font(15.0, 'arial')
        with pytest.raises(ValueError):
            Font.parse('arial')

    def test_matplotlib_widths(self):
        from lanemap.measure import MatplotlibMeasurer
        measure = MatplotlibMeasurer()
        font = Font(15, 'arial')
        assert measure('', font) == 0
        assert measure('1000k', font) > measure('1k', font) > 0
