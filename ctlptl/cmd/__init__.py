"""Command workflows behind the ``ctlptl`` CLI."""
