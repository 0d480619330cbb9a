"""User interface: preview window and diagnostics HUD."""

from jump_trigger.ui.display import DisplayWindow, KeyAction
from jump_trigger.ui.hud import HUDRenderer

__all__ = ["DisplayWindow", "KeyAction", "HUDRenderer"]
