"""Live scrolling bar chart dashboard for BarPing."""

import asyncio
import logging
import signal

from rich.console import Console

from barping.checkers.base import BaseProbe
from barping.checkers.icmp import ICMPProbe
from barping.config import Config
from barping.models import Sample, SampleHistory, ThresholdModel, history_capacity
from barping.orchestrator import SamplingScheduler
from barping.ui.bar import BarRenderer
from barping.ui.input import InputController
from barping.ui.layout import LayoutManager
from barping.ui.screen import Screen, build_status_text

logger = logging.getLogger(__name__)


class Dashboard:
    """Runs one session: sampling ticks, resize events and quit keys.

    All three event sources are handled on a single asyncio loop, so no
    handler ever runs concurrently with another. A resize may land while a
    probe is in flight; the sample is then drawn with the new layout.
    """

    def __init__(
        self,
        config: Config,
        probe: BaseProbe | None = None,
        console: Console | None = None,
    ):
        """Initialize dashboard from configuration.

        Args:
            config: Application configuration
            probe: Optional probe (creates an ICMP probe if not provided)
            console: Optional Rich console (creates new one if not provided)
        """
        self.config = config
        self.console = console if console is not None else Console(highlight=False)
        self.probe = (
            probe
            if probe is not None
            else ICMPProbe(
                timeout=config.probe.timeout_seconds,
                privileged=config.probe.privileged,
            )
        )

        self.thresholds = ThresholdModel(config.ui.thresholds, config.ui.colors)
        self.history = SampleHistory()
        self.screen = Screen(
            console=self.console,
            renderer=BarRenderer(self.thresholds),
            layout_manager=LayoutManager(self.thresholds),
            history=self.history,
            status_text=build_status_text(config.target.host, config.probe.interval_seconds),
            timestamp_enabled=config.ui.timestamp,
            gap=config.ui.gap,
        )
        self.scheduler = SamplingScheduler(
            probe=self.probe,
            target=config.target.host,
            interval_seconds=config.probe.interval_seconds,
            on_sample=self.handle_sample,
        )
        self.input = InputController(on_quit=self.quit)
        self._done: asyncio.Event | None = None

    def handle_sample(self, sample: Sample) -> None:
        """Append a resolved sample to history and draw it."""
        if not self.screen.running:
            return
        self.history.append(sample)
        evicted = self.history.evict_if_over_capacity(history_capacity(self.screen.rows))
        if evicted:
            logger.debug("Evicted %d samples from history", evicted)
        self.screen.on_new_sample(sample)

    def handle_resize(self) -> None:
        """Redraw everything for the current terminal size."""
        width, height = self.console.size
        logger.debug("Terminal resized to %dx%d", width, height)
        self.screen.on_resize(width, height)

    def quit(self) -> None:
        """Leave the running state and wake up run()."""
        if not self.screen.running:
            return
        self.screen.close()
        if self._done is not None:
            self._done.set()

    async def run(self):
        """Run the dashboard until a quit key arrives."""
        loop = asyncio.get_running_loop()
        self._done = asyncio.Event()

        self.handle_resize()
        loop.add_signal_handler(signal.SIGWINCH, self.handle_resize)
        loop.add_signal_handler(signal.SIGINT, self.quit)
        self.input.attach(loop)
        await self.scheduler.start()
        logger.info(
            "Sampling %s every %gs",
            self.config.target.host,
            self.config.probe.interval_seconds,
        )

        try:
            await self._done.wait()
        finally:
            await self.scheduler.stop()
            self.input.detach()
            loop.remove_signal_handler(signal.SIGWINCH)
            loop.remove_signal_handler(signal.SIGINT)
            self.screen.close()
