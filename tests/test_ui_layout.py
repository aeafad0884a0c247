"""Tests for bar layout computation."""

from barping.ui.layout import LayoutManager, calculate_bar_width


class TestCalculateBarWidth:
    """Test bar width derivation."""

    def test_label_only(self):
        """Test the 6-column label prefix is subtracted."""
        assert calculate_bar_width(80, timestamp_enabled=False) == 74

    def test_with_timestamp(self):
        """Test the 11-column timestamp bracket is also subtracted."""
        assert calculate_bar_width(80, timestamp_enabled=True) == 63

    def test_degenerate_width_clamps_to_zero(self):
        """Test narrow terminals don't produce negative widths."""
        assert calculate_bar_width(3, timestamp_enabled=False) == 0
        assert calculate_bar_width(10, timestamp_enabled=True) == 0


class TestLayoutManager:
    """Test tick positions and layout state."""

    def test_tick_positions(self, thresholds):
        """Test ticks scale with the worst threshold and stay addressable."""
        layout = LayoutManager(thresholds).recompute(80, False)
        assert layout.bar_width == 74
        # 80/320*74 = 18.5, 160/320*74 = 37, the worst tick clamps to 73
        assert layout.tick_positions == (18, 37, 73)

    def test_tick_positions_with_timestamp(self, thresholds):
        """Test ticks with a timestamp prefix."""
        layout = LayoutManager(thresholds).recompute(80, True)
        assert layout.bar_width == 63
        assert layout.tick_positions == (15, 31, 62)
        assert layout.prefix_width == 17

    def test_ticks_within_bar(self, thresholds):
        """Test every tick lies in [0, bar_width) for a range of widths."""
        manager = LayoutManager(thresholds)
        for width in range(8, 300):
            layout = manager.recompute(width, False)
            assert all(0 <= t < layout.bar_width for t in layout.tick_positions)
            assert list(layout.tick_positions) == sorted(layout.tick_positions)

    def test_recompute_is_idempotent(self, thresholds):
        """Test identical input yields identical layout."""
        manager = LayoutManager(thresholds)
        assert manager.recompute(120, True) == manager.recompute(120, True)

    def test_current_tracks_last_recompute(self, thresholds):
        """Test the manager remembers the latest layout."""
        manager = LayoutManager(thresholds)
        assert manager.current is None
        manager.recompute(100, False)
        layout = manager.recompute(50, False)
        assert manager.current == layout
        assert layout.width == 50

    def test_degenerate_layout(self, thresholds):
        """Test a zero-width bar does not raise."""
        layout = LayoutManager(thresholds).recompute(2, False)
        assert layout.bar_width == 0
        assert layout.tick_positions == (0, 0, 0)
