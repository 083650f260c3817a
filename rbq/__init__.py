"""Top-level package for roller-blind-quote (rbq).

Version identifier is defined in :mod:`rbq.version` to keep a single source
of truth that can be imported without pulling the Qt-based submodules.
"""

from .version import __version__  # re-export

__all__ = ["__version__"]
