"""Detail-configuration core: per-column edit modes over the order line table.

Import the orchestrator from :mod:`rbq.detail.controllers`; this package
init stays import-light so the state types can be used without Qt.
"""

__all__ = []
