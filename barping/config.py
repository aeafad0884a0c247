"""Configuration management for BarPing."""

import logging
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from barping.models import ThresholdModel
from barping.ui.constants import DEFAULT_COLORS, DEFAULT_THRESHOLDS

DEFAULT_TARGET = "8.8.8.8"


@dataclass
class TargetConfig:
    """Probed target configuration."""

    host: str = DEFAULT_TARGET


@dataclass
class ProbeConfig:
    """Probe timing configuration."""

    interval_seconds: float = 1.0
    timeout_seconds: float = 2.0
    privileged: bool = False  # Raw ICMP sockets need root/CAP_NET_RAW


@dataclass
class UIConfig:
    """Chart display configuration."""

    timestamp: bool = False
    gap: bool = True  # Blank spacer row after every bar
    thresholds: list[float] = field(default_factory=lambda: list(DEFAULT_THRESHOLDS))
    colors: list[str] = field(default_factory=lambda: list(DEFAULT_COLORS))


@dataclass
class LoggingConfig:
    """Log file configuration. The terminal is taken by the chart."""

    file: str = ""  # Empty means no logging
    level: str = "WARNING"


@dataclass
class Config:
    """Main configuration for BarPing."""

    target: TargetConfig = field(default_factory=TargetConfig)
    probe: ProbeConfig = field(default_factory=ProbeConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> None:
        """Check cross-field constraints.

        Raises:
            ValueError: On thresholds, colors, interval or log level problems
        """
        ThresholdModel(self.ui.thresholds, self.ui.colors)

        if self.probe.interval_seconds <= 0:
            raise ValueError(
                f"interval_seconds must be positive, got {self.probe.interval_seconds}"
            )
        if self.probe.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {self.probe.timeout_seconds}")

        if not isinstance(logging.getLevelName(self.logging.level.upper()), int):
            raise ValueError(f"Unknown log level: {self.logging.level}")

    @staticmethod
    def load(config_path: Path | None = None, validate: bool = True) -> "Config":
        """Load configuration from TOML file.

        A missing file at the default location yields the built-in defaults;
        an explicitly given path must exist.

        Args:
            config_path: TOML file to read (defaults to the user config)
            validate: Run validate() on the result. Callers that apply
                overrides first can validate afterwards instead.
        """
        if config_path is None:
            config_path = get_default_config_path()
            if not config_path.exists():
                return Config()

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with config_path.open("rb") as f:
            data = tomllib.load(f)

        target_data = data.get("target", {})
        target = TargetConfig(host=target_data.get("host", DEFAULT_TARGET))

        probe_data = data.get("probe", {})
        probe = ProbeConfig(
            interval_seconds=float(probe_data.get("interval_seconds", 1.0)),
            timeout_seconds=float(probe_data.get("timeout_seconds", 2.0)),
            privileged=_get_bool(probe_data, "probe", "privileged", False),
        )

        ui_data = data.get("ui", {})
        thresholds = ui_data.get("thresholds", list(DEFAULT_THRESHOLDS))
        if isinstance(thresholds, str):
            thresholds = parse_thresholds(thresholds)
        ui = UIConfig(
            timestamp=_get_bool(ui_data, "ui", "timestamp", False),
            gap=_get_bool(ui_data, "ui", "gap", True),
            thresholds=[float(t) for t in thresholds],
            colors=list(ui_data.get("colors", DEFAULT_COLORS)),
        )

        logging_data = data.get("logging", {})
        log = LoggingConfig(
            file=logging_data.get("file", ""),
            level=logging_data.get("level", "WARNING"),
        )

        config = Config(target=target, probe=probe, ui=ui, logging=log)
        if validate:
            config.validate()
        return config


def _get_bool(data: dict, section: str, key: str, default: bool) -> bool:
    """Read a TOML boolean, rejecting strings like "false"."""
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"[{section}] {key} must be true or false, got {value!r}")
    return value


def parse_thresholds(value: str) -> list[float]:
    """Parse three strictly increasing thresholds.

    Accepts "80 160 320", "[80 160 320]" and "80,160,320".

    Raises:
        ValueError: If the list is not 3 strictly increasing positive numbers
    """
    parts = [p for p in re.split(r"[\s,]+", value.strip().strip("[]")) if p]
    try:
        numbers = [float(p) for p in parts]
    except ValueError:
        raise ValueError(
            f"--thresholds must be 3 numbers, each larger than the previous, got {value!r}"
        ) from None

    if len(numbers) != 3 or not (0 < numbers[0] < numbers[1] < numbers[2]):
        raise ValueError(
            f"--thresholds must be 3 numbers, each larger than the previous, got {value!r}"
        )
    return numbers


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "barping" / "settings.toml"


def create_default_config(config_path: Path | None = None) -> Path:
    """Create a default configuration file."""
    if config_path is None:
        config_path = get_default_config_path()

    # Create directory if it doesn't exist
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # Default configuration content
    default_config = """# BarPing Configuration
# Command-line options override these values.

[target]
# Host name or IP address to ping
host = "8.8.8.8"

[probe]
# How often to ping (in seconds)
interval_seconds = 1.0

# How long to wait for an answer before drawing a timeout bar (in seconds)
timeout_seconds = 2.0

# Use raw ICMP sockets (requires root/CAP_NET_RAW)
privileged = false

[ui]
# Prefix every bar with [HH:MM:SS]
timestamp = false

# Blank spacer row between bars
gap = true

# Three strictly increasing latency thresholds (ms); the last one is a full bar
thresholds = [80, 160, 320]

# Bar and tick colors for each threshold bucket, best to worst
colors = ["green", "yellow", "red"]

[logging]
# Log file path; empty disables logging
file = ""
level = "WARNING"
"""

    config_path.write_text(default_config)
    return config_path
