"""``postmark-transport`` console script.

The CLI adapters never import the composition root; this module is where
production services are chosen for a real run.
"""

from __future__ import annotations

import sys

from .adapters.cli.main import main as run_cli
from .composition import build_production


def main() -> int:
    """Run the CLI on ``sys.argv`` with production services."""
    return run_cli(sys.argv[1:], services_factory=build_production)


__all__ = ["main"]
