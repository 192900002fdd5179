"""Top-level package for watchlater.

This package persists saved text snippets grouped into named lists. The main
entry point is `WatchLaterCore`, which repairs stored state on every read and
keeps list/item mutations consistent.
"""

from .core import WatchLaterCore

__all__ = ["WatchLaterCore", "__version__"]

__version__ = "0.1.0"
