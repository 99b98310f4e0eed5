"""Application package for turtlecanvas.

Holds the demo programs and the async entrypoint used by the CLI.
"""

from . import demo

__all__ = ["demo"]
