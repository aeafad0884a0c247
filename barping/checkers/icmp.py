"""ICMP ping probe."""

import icmplib

from barping.checkers.base import BaseProbe, ProbeReply


class ICMPProbe(BaseProbe):
    """Probe using a single ICMP echo request."""

    def __init__(self, timeout: float = 2.0, privileged: bool = False):
        """Initialize ICMP probe.

        Args:
            timeout: Seconds to wait for the echo reply
            privileged: Use raw sockets (needs root/CAP_NET_RAW). The default
                uses SOCK_DGRAM, which works unprivileged on most systems.
        """
        super().__init__(timeout)
        self.privileged = privileged

    async def probe(self, target: str) -> ProbeReply:
        """Send one echo request.

        Name lookup and socket errors from icmplib propagate as transport
        errors.
        """
        host = await icmplib.async_ping(
            target, count=1, timeout=self.timeout, privileged=self.privileged
        )
        if host.is_alive:
            return ProbeReply(alive=True, time_ms=host.avg_rtt)
        return ProbeReply(alive=False)
