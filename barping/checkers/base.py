"""Base probe class: reachability probes and their mapping to samples."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from barping.models import Sample

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProbeReply:
    """Answer of a probe that completed without a transport error."""

    alive: bool
    time_ms: float | None = None

    def __post_init__(self):
        """Validate the reply.

        Uses assertions to catch bugs during development without crashing
        in production. Probes are trusted internal code.
        """
        assert not (self.alive and self.time_ms is None), "Alive reply must have a time"


class BaseProbe(ABC):
    """Abstract base class for reachability probes."""

    def __init__(self, timeout: float = 2.0):
        """Initialize probe with timeout in seconds."""
        self.timeout = timeout

    @abstractmethod
    async def probe(self, target: str) -> ProbeReply:
        """Probe the target once.

        Args:
            target: Host name or IP address

        Returns:
            ProbeReply telling whether the target answered and how fast

        Raises:
            Exception: Any transport error
        """

    async def sample(self, target: str) -> Sample:
        """Probe the target and map the outcome to a sample.

        Never raises: a transport error becomes a PROBE_ERROR sample and a
        missing answer a TIMEOUT sample. The next scheduled tick is the only
        retry.
        """
        try:
            reply = await self.probe(target)
        except Exception as e:
            logger.warning("Probe of %s failed: %s", target, e)
            return Sample.probe_error()

        if reply.alive:
            logger.debug("Probe of %s answered in %.2fms", target, reply.time_ms)
            return Sample.latency(reply.time_ms)

        logger.debug("Probe of %s timed out", target)
        return Sample.timeout()
