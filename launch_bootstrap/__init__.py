"""Launch-time bootstrap for the application host process.

Resolves the mapping-service key from the bundled manifest, activates the
mapping client, registers extension plugins with the host and forwards the
launch event to the base lifecycle handler.
"""

from __future__ import annotations

from launch_bootstrap.runtime.bootstrap import LaunchSequence, on_launch
from launch_bootstrap.runtime.lifecycle import main, run

__all__ = [
    "LaunchSequence",
    "__version__",
    "main",
    "on_launch",
    "run",
]

__version__ = "0.1.0"
