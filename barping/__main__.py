"""Allow running as ``python -m barping``."""

from barping.cli import app

app(prog_name="barping")
