"""jsonera command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``jsonera`` script).
"""

from jsonera.cli.main import cli

__all__ = ["cli"]
