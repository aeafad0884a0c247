"""Core data models for BarPing."""

import math
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from rich.color import Color, ColorParseError

from barping.ui.constants import DEFAULT_COLORS


class SampleKind(str, Enum):
    """Outcome of a single probe."""

    LATENCY = "latency"
    TIMEOUT = "timeout"
    PROBE_ERROR = "probe_error"


def _now_label() -> str:
    return datetime.now().strftime("%H:%M:%S")


@dataclass(frozen=True)
class Sample:
    """One latency measurement or failure outcome with its capture time."""

    kind: SampleKind
    value: int | None = None
    timestamp: str = field(default_factory=_now_label)

    def __post_init__(self):
        """Validate the sample.

        Latency samples always carry a value, failures never do.
        """
        if self.kind == SampleKind.LATENCY:
            if self.value is None or self.value < 0:
                raise ValueError(f"Latency sample needs a non-negative value, got {self.value!r}")
        elif self.value is not None:
            raise ValueError(f"{self.kind.value} sample cannot carry a value")

    @classmethod
    def latency(cls, latency_ms: float, timestamp: str | None = None) -> "Sample":
        """Create a latency sample, rounding half-up to whole milliseconds."""
        # Protect against clock issues
        value = max(0, math.floor(latency_ms + 0.5))
        return cls(SampleKind.LATENCY, value, timestamp or _now_label())

    @classmethod
    def timeout(cls, timestamp: str | None = None) -> "Sample":
        return cls(SampleKind.TIMEOUT, timestamp=timestamp or _now_label())

    @classmethod
    def probe_error(cls, timestamp: str | None = None) -> "Sample":
        return cls(SampleKind.PROBE_ERROR, timestamp=timestamp or _now_label())

    @classmethod
    def spacer(cls) -> "Sample":
        """Blank padding row drawn between bars."""
        return cls(SampleKind.LATENCY, 0, "")

    @property
    def is_spacer(self) -> bool:
        """An exact-zero latency renders as a blank padding row."""
        return self.kind == SampleKind.LATENCY and self.value == 0


class ThresholdModel:
    """Three ascending latency thresholds and their severity colors."""

    def __init__(
        self,
        thresholds: "list[float] | tuple[float, ...]",
        colors: "list[str] | tuple[str, ...]" = DEFAULT_COLORS,
    ):
        """Validate and store thresholds.

        Args:
            thresholds: Exactly 3 strictly increasing positive numbers (ms)
            colors: Exactly 3 Rich color names, best to worst

        Raises:
            ValueError: If either list has the wrong shape
        """
        thresholds = tuple(thresholds)
        colors = tuple(colors)
        if len(thresholds) != 3:
            raise ValueError(f"Expected exactly 3 thresholds, got {len(thresholds)}")
        if not (0 < thresholds[0] < thresholds[1] < thresholds[2]):
            raise ValueError(
                "Thresholds must be positive and strictly increasing: "
                f"0 < {thresholds[0]} < {thresholds[1]} < {thresholds[2]}"
            )
        if len(colors) != 3:
            raise ValueError(f"Expected exactly 3 colors, got {len(colors)}")
        for color in colors:
            try:
                if not isinstance(color, str):
                    raise ColorParseError(color)
                Color.parse(color)
            except ColorParseError:
                raise ValueError(f"Unknown color: {color!r}") from None

        self.thresholds = thresholds
        self.colors = colors

    @property
    def worst(self) -> float:
        """The last threshold; it defines 100% of the bar."""
        return self.thresholds[-1]

    def bucket(self, value: float) -> int:
        """Return the index of the first threshold strictly above value.

        Values at or beyond the worst threshold stay in the last bucket.
        """
        for i, threshold in enumerate(self.thresholds):
            if value < threshold:
                return i
        return len(self.thresholds) - 1

    def color_for(self, value: float) -> str:
        return self.colors[self.bucket(value)]


def history_capacity(rows: int) -> int:
    """Number of samples to keep for a terminal with the given row count.

    Twice the visible rows, so a terminal that grows again can be refilled
    from history.
    """
    return max(rows * 2, 1)


class SampleHistory:
    """Rolling, insertion-ordered sample buffer.

    The buffer itself is unbounded; callers trim it with
    evict_if_over_capacity() after each append, using a capacity derived
    from the current terminal height.
    """

    def __init__(self):
        self._samples: deque[Sample] = deque()

    def __len__(self) -> int:
        return len(self._samples)

    def append(self, sample: Sample) -> None:
        self._samples.append(sample)

    def evict_if_over_capacity(self, capacity: int) -> int:
        """Drop the oldest samples until at most capacity remain.

        Returns:
            Number of evicted samples
        """
        evicted = 0
        while len(self._samples) > capacity:
            self._samples.popleft()
            evicted += 1
        return evicted

    def all(self) -> list[Sample]:
        """All retained samples, oldest first."""
        return list(self._samples)

    def latest(self) -> Sample | None:
        if not self._samples:
            return None
        return self._samples[-1]
