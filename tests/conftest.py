"""Shared fixtures and test doubles."""

import asyncio
import io

import pytest
from rich.console import Console

from barping.checkers.base import BaseProbe, ProbeReply
from barping.models import ThresholdModel


class ScriptedProbe(BaseProbe):
    """Probe that replays canned replies, optionally after a delay.

    The last reply (and delay) repeats once the script runs out. An
    exception instance in the script is raised as a transport error.
    """

    def __init__(self, replies, delays=None):
        super().__init__(timeout=1.0)
        self.replies = list(replies)
        self.delays = list(delays or [0.0])
        self.calls = 0

    async def probe(self, target: str) -> ProbeReply:
        i = self.calls
        self.calls += 1
        await asyncio.sleep(self.delays[min(i, len(self.delays) - 1)])
        reply = self.replies[min(i, len(self.replies) - 1)]
        if isinstance(reply, Exception):
            raise reply
        return reply


def make_console(width: int = 80, height: int = 24) -> Console:
    """Terminal-like console writing plain text into a buffer."""
    return Console(
        file=io.StringIO(),
        force_terminal=True,
        color_system=None,
        width=width,
        height=height,
        highlight=False,
    )


@pytest.fixture
def thresholds():
    return ThresholdModel([80, 160, 320])


@pytest.fixture
def console():
    return make_console()


@pytest.fixture
def console_factory():
    return make_console


@pytest.fixture
def scripted_probe():
    return ScriptedProbe
