"""device-harness: a uniform device capability contract for GUI automation agents.

Backends (the fixture-backed mock device today) expose screenshots, screen
size and an action space through one contract, so agents can drive any of
them with the same observe/act loop.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    "agent",
    "cli",
    "config",
    "device",
    "diagnostics",
    "messaging",
]
