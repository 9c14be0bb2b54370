"""Entry point for `python -m jsonera`.

Usage:
    python -m jsonera update --json doc.json --era doc.era.json
"""

from __future__ import annotations

from jsonera.cli.main import cli

cli()
