"""stemforge CLI — Typer-based command-line interface.

Provides the ``stemforge`` command with subcommands for building a
stemcell, listing variants and checking the external tools.

All output uses Rich for formatted terminal display.
"""
