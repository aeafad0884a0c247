"""Bar geometry derived from the terminal width."""

import logging
import math
from dataclasses import dataclass

from barping.models import ThresholdModel
from barping.ui.constants import LABEL_WIDTH, TIMESTAMP_WIDTH

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutState:
    """Resize-dependent geometry of one bar line."""

    width: int
    bar_width: int
    tick_positions: tuple[int, ...]
    timestamp_enabled: bool = False

    @property
    def prefix_width(self) -> int:
        """Columns taken by the optional timestamp and the latency label."""
        return LABEL_WIDTH + (TIMESTAMP_WIDTH if self.timestamp_enabled else 0)


def calculate_bar_width(terminal_width: int, timestamp_enabled: bool) -> int:
    """Columns left for the bar proper after the fixed-width prefix.

    Degenerate terminals clamp to zero instead of raising.
    """
    prefix_width = LABEL_WIDTH + (TIMESTAMP_WIDTH if timestamp_enabled else 0)
    return max(terminal_width - prefix_width, 0)


class LayoutManager:
    """Computes bar width and threshold tick columns."""

    def __init__(self, thresholds: ThresholdModel):
        self.thresholds = thresholds
        self.current: LayoutState | None = None

    def recompute(self, terminal_width: int, timestamp_enabled: bool) -> LayoutState:
        """Derive the layout for a terminal width.

        Ticks scale linearly with the worst threshold defining 100% of the
        bar. The worst threshold itself would land one past the end, so every
        tick is clamped into [0, bar_width).

        Args:
            terminal_width: Current terminal width in columns
            timestamp_enabled: Whether lines carry a "[HH:MM:SS] " prefix

        Returns:
            The new layout, also kept as ``current``
        """
        bar_width = calculate_bar_width(terminal_width, timestamp_enabled)
        last_column = max(bar_width - 1, 0)
        tick_positions = tuple(
            min(math.floor(threshold / self.thresholds.worst * bar_width), last_column)
            for threshold in self.thresholds.thresholds
        )

        self.current = LayoutState(
            width=terminal_width,
            bar_width=bar_width,
            tick_positions=tick_positions,
            timestamp_enabled=timestamp_enabled,
        )
        logger.debug(
            "Layout for %d columns: bar_width=%d ticks=%s",
            terminal_width,
            bar_width,
            tick_positions,
        )
        return self.current
