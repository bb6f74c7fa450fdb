"""Device capability contract.

Every backend an agent can drive (mock fixtures, a live browser, a desktop)
satisfies :class:`DeviceInterface` structurally. Backends are interchangeable;
nothing subclasses a concrete backend to get a new one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Protocol, runtime_checkable

from device_harness.device.actions import DeviceAction


class DeviceError(RuntimeError):
    """Base class for device backend failures."""


class NoFixturesAvailableError(DeviceError):
    """Raised when an observation is requested and no fixture can serve it."""


class MockManifestError(DeviceError):
    """Raised by the mock manifest loader; the mock device recovers from it."""


class UnknownActionError(DeviceError):
    """Raised when an action name is not in the backend's action space."""


@dataclass(frozen=True)
class Size:
    width: int
    height: int

    def to_dict(self) -> Dict[str, int]:
        return {"width": self.width, "height": self.height}


@runtime_checkable
class DeviceInterface(Protocol):
    interface_type: str

    async def screenshot_base64(self) -> str: ...

    async def size(self) -> Size: ...

    async def action_space(self) -> List[DeviceAction]: ...

    async def before_invoke_action(self, action_name: str, param: Any) -> None: ...

    async def after_invoke_action(self, action_name: str, param: Any) -> None: ...

    async def destroy(self) -> None: ...

    def describe(self) -> str: ...
