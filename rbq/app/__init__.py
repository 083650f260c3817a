"""Application wiring around the detail-configuration core."""

from .app_controller import AppController
from .autosave_controller import AutosaveController
from .session import HeadlessSession, ScriptError

__all__ = ["AppController", "AutosaveController", "HeadlessSession", "ScriptError"]
