"""Command-line interface for turtlecanvas.

Argument parsing lives next to the application in :mod:`turtlecanvas.app.demo`
so the console script and ``python -m turtlecanvas`` share the same flags.
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from turtlecanvas import __version__
from turtlecanvas.app import demo


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return demo.parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def main(argv: list[str] | None = None) -> None:
    """Synchronous entrypoint for the turtlecanvas CLI."""
    args = parse_args(argv)
    if args.version:
        print(f"turtlecanvas {__version__}")
        return

    _configure_logging(args.verbose)
    try:
        asyncio.run(run_async(argv))
    except KeyboardInterrupt:
        # Ctrl+C ends the playback quietly
        pass


async def run_async(argv: list[str] | None = None) -> None:
    """Async entrypoint for programmatic usage/testing.

    Lets callers ``await run_async(...)`` without starting a nested loop.
    """
    args = parse_args(argv)
    if args.version:
        print(f"turtlecanvas {__version__}")
        return
    await demo.main_async(args)


if __name__ == "__main__":
    main()
