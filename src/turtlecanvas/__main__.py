"""Console entrypoint for the turtlecanvas application.

Delegates to :mod:`turtlecanvas.cli` so that ``python -m turtlecanvas`` and
the installed ``turtlecanvas`` console script run the same code.
"""

from __future__ import annotations

from turtlecanvas.cli import main as cli_main


def main() -> None:
    """Application entrypoint (delegates to :func:`turtlecanvas.cli.main`)."""
    cli_main()


if __name__ == "__main__":
    main()
