"""UI constants for bar chart rendering."""

# Severity colors (Rich color names), best to worst
DEFAULT_COLORS = ("green", "yellow", "red")

# Default latency thresholds in milliseconds
DEFAULT_THRESHOLDS = (80.0, 160.0, 320.0)

# Latency labels are clamped so "NNNms " stays 6 columns wide
MAX_DISPLAY_MS = 999

LABEL_WIDTH = 6  # "NNNms "
TIMESTAMP_WIDTH = 11  # "[HH:MM:SS] "

TIMEOUT_LABEL = " TOUT "
PROBE_ERROR_LABEL = " ERR  "

FILL_GLYPH = " "  # Painted with the bucket background color
BROKEN_GLYPH = "/"
SEPARATOR_GLYPH = "|"

STATUS_STYLE = "reverse"

# Keys that end the session: "q" and Ctrl-C delivered as a raw character
EXIT_KEYS = ("q", "\x03")

if not (len(TIMEOUT_LABEL) == len(PROBE_ERROR_LABEL) == LABEL_WIDTH):
    raise ValueError("Sentinel labels must match the latency label width")
