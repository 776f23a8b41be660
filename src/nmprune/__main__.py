"""Allow running nmprune with ``python -m nmprune``."""

from nmprune.cli import app

app(prog_name="nmprune")
