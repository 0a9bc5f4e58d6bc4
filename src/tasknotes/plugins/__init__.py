"""Extension layer: plugin system via pluggy.

Discovery: entry_points (pip-installed) plus single-file local plugins.
INVARIANT: Plugin failures are warnings, never errors.
"""

from tasknotes.plugins.event_bus import EventBus
from tasknotes.plugins.manager import PluginManager

__all__ = ["EventBus", "PluginManager"]
