"""
Unit tests for the scroll / zoom window
"""
import pytest

from lanemap.errors import DomainDegenerate
from lanemap.scale import ScaleModel
from lanemap.viewport import ScrollWindow


@pytest.fixture
def window():
    """Domain [0, 10000] shown 1000 units at a time in a 500px container"""
    return ScrollWindow(0, 10000, 500, 2000, 3000)


class TestScrollWindow:
    """Tests for ScrollWindow"""

    def test_canvas_fills_container(self, window):
        assert window.units_per_pixel == pytest.approx(2)
        assert window.canvas_width == pytest.approx(5000)
        assert window.chart_width == pytest.approx(4970)

    def test_scroll_left(self, window):
        assert window.scroll_left == pytest.approx(1000)

    def test_zoom_percent(self, window):
        assert window.zoom_percent == pytest.approx(10)

    def test_default_window_trims_both_sides(self):
        window = ScrollWindow.from_scale(ScaleModel(0, 10000, 760), 500)
        assert (window.view_min, window.view_max) == pytest.approx((3500, 6500))

    def test_explicit_scroll_values(self):
        window = ScrollWindow.from_scale(ScaleModel(0, 10000, 760), 500, (1000, None))
        assert (window.view_min, window.view_max) == pytest.approx((1000, 6500))

    def test_zoom_keeps_center(self, window):
        zoomed = window.zoom(20)
        assert (zoomed.view_min + zoomed.view_max) / 2 == pytest.approx(2500)
        assert zoomed.view_max - zoomed.view_min == pytest.approx(2000)

    def test_zoom_range(self, window):
        with pytest.raises(ValueError):
            window.zoom(0)
        with pytest.raises(ValueError):
            window.zoom(101)

    def test_degenerate(self):
        with pytest.raises(DomainDegenerate):
            ScrollWindow(0, 10000, 500, 3000, 3000)

    def test_apply_resizes_layout(self, window, layout):
        window.apply(layout)
        assert layout.width == 4970
