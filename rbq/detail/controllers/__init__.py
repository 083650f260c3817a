"""Detail-configuration controllers.

Each controller owns one column family; the orchestrator routes commands
to them and publishes the resulting state.
"""

from .base import ControllerContext, ModeController, ModeKind
from .location_controller import LocationController
from .fabric_color_controller import FabricColorController
from .batch_cycle_controller import BatchCycleController
from .accessory_controller import AccessoryController
from .mode_orchestrator import LF_OVERWRITE_MESSAGE, ModeOrchestrator

__all__ = [
    "ControllerContext",
    "ModeController",
    "ModeKind",
    "LocationController",
    "FabricColorController",
    "BatchCycleController",
    "AccessoryController",
    "ModeOrchestrator",
    "LF_OVERWRITE_MESSAGE",
]
