"""Extension layer — build-plan extensions via pluggy.

Discovery: built-ins plus entry_points (pip-installed) in the
``planext.extensions`` group.
INVARIANT: Extension errors abort the whole run; no partial plan escapes.
"""

from planext.plugins.manager import PluginManager

__all__ = ["PluginManager"]
