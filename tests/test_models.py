"""Tests for samples, thresholds and sample history."""

import pytest

from barping.models import (
    Sample,
    SampleHistory,
    SampleKind,
    ThresholdModel,
    history_capacity,
)


class TestSample:
    """Test Sample construction and validation."""

    def test_latency_rounds_half_up(self):
        """Test that latencies are rounded to whole milliseconds."""
        assert Sample.latency(12.5).value == 13
        assert Sample.latency(12.49).value == 12
        assert Sample.latency(0.5).value == 1

    def test_negative_latency_clamps_to_zero(self):
        """Test clock skew protection."""
        assert Sample.latency(-3.0).value == 0

    def test_timestamp_format(self):
        """Test that samples capture an HH:MM:SS timestamp."""
        sample = Sample.latency(10.0)
        assert len(sample.timestamp) == 8
        assert sample.timestamp[2] == ":" and sample.timestamp[5] == ":"

    def test_explicit_timestamp(self):
        """Test that a given timestamp is kept."""
        assert Sample.timeout("12:34:56").timestamp == "12:34:56"

    def test_failures_carry_no_value(self):
        """Test sentinel kinds have no numeric value."""
        assert Sample.timeout().value is None
        assert Sample.probe_error().kind == SampleKind.PROBE_ERROR

    def test_failure_with_value_rejected(self):
        """Test that a failure sample cannot carry a latency."""
        with pytest.raises(ValueError, match="cannot carry a value"):
            Sample(SampleKind.TIMEOUT, 5)

    def test_latency_without_value_rejected(self):
        """Test that a latency sample needs a value."""
        with pytest.raises(ValueError, match="non-negative value"):
            Sample(SampleKind.LATENCY)

    def test_spacer(self):
        """Test that exact-zero latencies are spacer rows."""
        assert Sample.spacer().is_spacer
        assert Sample.latency(0.4).is_spacer
        assert not Sample.latency(1.0).is_spacer
        assert not Sample.timeout().is_spacer


class TestThresholdModel:
    """Test threshold validation and bucket lookup."""

    def test_bucket_boundaries(self, thresholds):
        """Test that thresholds start a new bucket at their exact value."""
        assert thresholds.bucket(0) == 0
        assert thresholds.bucket(79) == 0
        assert thresholds.bucket(80) == 1
        assert thresholds.bucket(159.9) == 1
        assert thresholds.bucket(160) == 2
        assert thresholds.bucket(319) == 2

    def test_last_bucket_is_open_ended(self, thresholds):
        """Test values at or beyond the worst threshold stay in bucket 2."""
        assert thresholds.bucket(320) == 2
        assert thresholds.bucket(100000) == 2

    def test_bucket_is_monotonic(self, thresholds):
        """Test bucket never decreases as latency grows."""
        buckets = [thresholds.bucket(v) for v in range(0, 1000)]
        assert buckets == sorted(buckets)

    def test_color_for(self, thresholds):
        """Test color lookup follows the bucket."""
        assert thresholds.color_for(10) == "green"
        assert thresholds.color_for(100) == "yellow"
        assert thresholds.color_for(500) == "red"

    def test_worst(self, thresholds):
        assert thresholds.worst == 320

    @pytest.mark.parametrize(
        "values",
        [[80, 160], [80, 160, 320, 640], [160, 80, 320], [80, 80, 320], [0, 80, 160]],
    )
    def test_invalid_thresholds(self, values):
        """Test that malformed threshold lists are rejected."""
        with pytest.raises(ValueError):
            ThresholdModel(values)

    def test_invalid_colors(self):
        """Test that exactly 3 colors are required."""
        with pytest.raises(ValueError, match="exactly 3 colors"):
            ThresholdModel([1, 2, 3], ["green", "red"])

    @pytest.mark.parametrize("colors", [["grean", "yellow", "red"], ["green", 3, "red"]])
    def test_unknown_color(self, colors):
        """Test that every color must be a name or code Rich understands."""
        with pytest.raises(ValueError, match="Unknown color"):
            ThresholdModel([1, 2, 3], colors)

    def test_hex_and_numbered_colors(self):
        """Test non-named Rich colors are accepted."""
        model = ThresholdModel([1, 2, 3], ["#00ff00", "color(214)", "bright_red"])
        assert model.color_for(5) == "bright_red"


class TestSampleHistory:
    """Test the rolling sample buffer."""

    def test_empty_history(self):
        """Test an empty history."""
        history = SampleHistory()
        assert len(history) == 0
        assert history.latest() is None
        assert history.all() == []

    def test_insertion_order(self):
        """Test samples come back oldest first."""
        history = SampleHistory()
        samples = [Sample.latency(v) for v in (10, 20, 30)]
        for sample in samples:
            history.append(sample)

        assert history.all() == samples
        assert history.latest() == samples[-1]

    def test_eviction_drops_oldest(self):
        """Test eviction removes from the front."""
        history = SampleHistory()
        for v in range(1, 11):
            history.append(Sample.latency(v))

        assert history.evict_if_over_capacity(4) == 6
        assert [s.value for s in history.all()] == [7, 8, 9, 10]

    def test_eviction_within_capacity_is_noop(self):
        """Test nothing is evicted under capacity."""
        history = SampleHistory()
        history.append(Sample.timeout())
        assert history.evict_if_over_capacity(5) == 0
        assert len(history) == 1

    def test_size_invariant_after_appends(self):
        """Test length never exceeds the latest capacity after eviction."""
        history = SampleHistory()
        capacities = [10, 10, 4, 4, 30, 2]
        for i, capacity in enumerate(capacities * 5):
            history.append(Sample.latency(i + 1))
            history.evict_if_over_capacity(capacity)
            assert len(history) <= capacity

    def test_history_capacity(self):
        """Test capacity is twice the terminal rows."""
        assert history_capacity(24) == 48
        assert history_capacity(0) == 1
