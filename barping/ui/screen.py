"""Scrolling chart screen: full redraw on resize, single-line append otherwise."""

import logging
from enum import Enum

from rich.console import Console
from rich.control import Control
from rich.text import Text

from barping.models import Sample, SampleHistory
from barping.ui.bar import BarRenderer
from barping.ui.constants import STATUS_STYLE
from barping.ui.layout import LayoutManager, LayoutState

logger = logging.getLogger(__name__)

SPACER = Sample.spacer()


class ScreenState(str, Enum):
    """Lifecycle of the screen. Transitions are one-way."""

    RUNNING = "running"
    EXITING = "exiting"


def format_status_line(text: str, width: int) -> str:
    """Center text in width columns, or clip it with an ellipsis.

    Args:
        text: Status text
        width: Terminal width in columns

    Returns:
        The padded or clipped line
    """
    if len(text) >= width:
        return text[: max(width - 3, 0)] + "..."
    gap = (width - len(text)) // 2
    return " " * gap + text + " " * (width - len(text) - gap)


def build_status_text(target: str, interval_seconds: float) -> str:
    return f"doing a ping on {target} every {interval_seconds:g}s ('q' to quit)"


class Screen:
    """Owns the terminal output of a running session.

    Bars scroll up naturally; the status line is pinned to the bottom by
    drawing it without a newline and moving the cursor back to column 0, so
    the next bar overwrites it before it is drawn again.
    """

    def __init__(
        self,
        console: Console,
        renderer: BarRenderer,
        layout_manager: LayoutManager,
        history: SampleHistory,
        status_text: str,
        timestamp_enabled: bool = False,
        gap: bool = True,
    ):
        """Initialize screen.

        Args:
            console: Rich console to draw on
            renderer: Bar renderer
            layout_manager: Layout manager recomputed on every resize
            history: Shared sample history, redrawn on resize
            status_text: Text of the pinned status line
            timestamp_enabled: Whether bars carry a timestamp prefix
            gap: Whether a blank spacer row follows every bar
        """
        self.console = console
        self.renderer = renderer
        self.layout_manager = layout_manager
        self.history = history
        self.status_text = status_text
        self.timestamp_enabled = timestamp_enabled
        self.gap = gap

        self.state = ScreenState.RUNNING
        width, self.rows = console.size
        self.layout: LayoutState = layout_manager.recompute(width, timestamp_enabled)
        self.status_line = format_status_line(status_text, width)

    @property
    def running(self) -> bool:
        return self.state == ScreenState.RUNNING

    def on_resize(self, width: int, height: int) -> None:
        """Recompute the layout and redraw the whole retained history."""
        if not self.running:
            return

        self.layout = self.layout_manager.recompute(width, self.timestamp_enabled)
        self.rows = height
        self.status_line = format_status_line(self.status_text, width)
        logger.debug("Redrawing %d samples at %dx%d", len(self.history), width, height)

        self.console.clear()
        samples = self.history.all()
        for sample in samples[:-1]:
            self._emit_sample(sample)
        self._emit_tail(samples[-1] if samples else None)

    def on_new_sample(self, sample: Sample) -> None:
        """Draw just the newest sample below the previous ones."""
        if not self.running:
            return
        self._emit_tail(sample)

    def close(self) -> None:
        """Leave the running state, moving the cursor past the status line."""
        if not self.running:
            return
        self.state = ScreenState.EXITING
        self.console.line()

    def _emit_tail(self, sample: Sample | None) -> None:
        if sample is not None:
            self._emit_sample(sample)
        self._emit_status()

    def _emit_sample(self, sample: Sample) -> None:
        self.console.print(self.renderer.render(sample, self.layout), soft_wrap=True)
        if self.gap:
            self.console.print(self.renderer.render(SPACER, self.layout), soft_wrap=True)

    def _emit_status(self) -> None:
        self.console.print(Text(self.status_line, style=STATUS_STYLE), end="", soft_wrap=True)
        self.console.control(Control.move_to_column(0))
