"""BarPing: scrolling ping latency bar chart for the terminal."""

import logging

# The terminal belongs to the chart; records only go out via configured handlers
logging.getLogger(__name__).addHandler(logging.NullHandler())
