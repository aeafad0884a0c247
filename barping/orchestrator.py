"""Periodic sampling of the probed target."""

import asyncio
import logging
import time
from collections.abc import Callable

from barping.checkers.base import BaseProbe
from barping.models import Sample

logger = logging.getLogger(__name__)


class SamplingScheduler:
    """Fires one probe per interval and hands every result to a callback."""

    def __init__(
        self,
        probe: BaseProbe,
        target: str,
        interval_seconds: float,
        on_sample: Callable[[Sample], None],
    ):
        """Initialize scheduler.

        Args:
            probe: Probe used for every tick
            target: Host name or IP address to probe
            interval_seconds: Time between ticks
            on_sample: Called with each sample as soon as its probe resolves
        """
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")

        self.probe = probe
        self.target = target
        self.interval_seconds = interval_seconds
        self.on_sample = on_sample

        # Control flags
        self._running = False
        self._task: asyncio.Task | None = None
        self._in_flight: set[asyncio.Task] = set()

    @property
    def in_flight(self) -> int:
        """Number of probes that have not resolved yet."""
        return len(self._in_flight)

    async def start(self):
        """Start the sampling loop."""
        if self._running:
            return

        self._running = True
        self._task = asyncio.create_task(self._run_loop())

    async def stop(self):
        """Stop scheduling new ticks.

        Probes already in flight are not cancelled; their results are still
        delivered if the loop keeps running.
        """
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

    async def sample_once(self) -> Sample:
        """Probe the target once and deliver the sample."""
        sample = await self.probe.sample(self.target)
        self.on_sample(sample)
        return sample

    async def _run_loop(self):
        """Main loop firing ticks aligned to the interval."""
        start_time = time.monotonic()
        iteration = 0

        while self._running:
            # Calculate when this tick should fire (aligned to interval)
            target_time = start_time + (iteration * self.interval_seconds)
            now = time.monotonic()

            # If we're behind schedule, fire immediately
            if now < target_time:
                await asyncio.sleep(target_time - now)

            # Ticks do not wait for each other; a slow probe may overlap
            # the next one and results arrive in resolution order
            task = asyncio.create_task(self.sample_once())
            self._in_flight.add(task)
            task.add_done_callback(self._in_flight.discard)

            iteration += 1
