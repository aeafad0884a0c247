"""Bar line rendering for the scrolling latency chart."""

import math
from dataclasses import dataclass
from itertools import groupby

from rich.text import Text

from barping.models import Sample, SampleKind, ThresholdModel
from barping.ui.constants import (
    BROKEN_GLYPH,
    FILL_GLYPH,
    MAX_DISPLAY_MS,
    PROBE_ERROR_LABEL,
    SEPARATOR_GLYPH,
    TIMEOUT_LABEL,
)
from barping.ui.layout import LayoutState

SENTINEL_LABELS = {
    SampleKind.TIMEOUT: TIMEOUT_LABEL,
    SampleKind.PROBE_ERROR: PROBE_ERROR_LABEL,
}


@dataclass(frozen=True)
class Cell:
    """One column of the bar: a glyph and its Rich style."""

    glyph: str
    style: str = ""


BLANK = Cell(" ")
BROKEN = Cell(BROKEN_GLYPH)


class BarRenderer:
    """Renders a single sample as one fixed-width, color-coded line."""

    def __init__(self, thresholds: ThresholdModel):
        """Initialize renderer with the threshold model used for coloring."""
        self.thresholds = thresholds

    def filled_width(self, value: int, bar_width: int) -> int:
        """Number of filled columns for a latency value.

        The bar never exceeds the drawable width, even far above the worst
        threshold.
        """
        value = min(value, MAX_DISPLAY_MS)
        return max(0, min(bar_width, math.floor(value / self.thresholds.worst * bar_width)))

    def cells(self, sample: Sample, layout: LayoutState) -> list[Cell]:
        """Build the per-column buffer for the bar part of a line.

        Failure samples are a run of broken glyphs with no ticks. Latency
        samples are a filled run painted with the bucket color followed by
        blanks, with one separator per threshold. A separator in the
        unfilled tail is drawn on the default background; one the bar has
        already reached is drawn over the bar, so every latency line shows
        all three ticks.

        Args:
            sample: Sample to draw
            layout: Layout current at render time

        Returns:
            Exactly ``layout.bar_width`` cells
        """
        bar_width = layout.bar_width
        if sample.kind != SampleKind.LATENCY:
            return [BROKEN] * bar_width

        value = min(sample.value, MAX_DISPLAY_MS)
        filled = self.filled_width(value, bar_width)
        bar_style = "" if sample.is_spacer else f"on {self.thresholds.color_for(value)}"

        cells = [Cell(FILL_GLYPH, bar_style)] * filled + [BLANK] * (bar_width - filled)

        for i, position in enumerate(layout.tick_positions):
            if position >= bar_width:
                continue
            color = self.thresholds.colors[i]
            if position >= filled and filled < bar_width:
                cells[position] = Cell(SEPARATOR_GLYPH, color)
            else:
                cells[position] = Cell(SEPARATOR_GLYPH, f"{color} {bar_style}".strip())

        return cells

    def prefix(self, sample: Sample, layout: LayoutState) -> str:
        """Timestamp bracket (if enabled) and the fixed-width label."""
        if sample.is_spacer:
            return " " * layout.prefix_width

        stamp = f"[{sample.timestamp}] " if layout.timestamp_enabled else ""
        if sample.kind in SENTINEL_LABELS:
            return stamp + SENTINEL_LABELS[sample.kind]

        value = min(sample.value, MAX_DISPLAY_MS)
        return stamp + f"{value:>3}ms "

    def render(self, sample: Sample, layout: LayoutState) -> Text:
        """Render one sample as a styled line.

        Args:
            sample: Sample to draw
            layout: Layout current at render time

        Returns:
            Text with one span per run of equally styled columns
        """
        line = Text(self.prefix(sample, layout))
        for style, run in groupby(self.cells(sample, layout), key=lambda cell: cell.style):
            line.append("".join(cell.glyph for cell in run), style=style)
        return line
