from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, TypeVar

from device_harness.device.actions import DeviceAction
from device_harness.device.interface import DeviceInterface, Size, UnknownActionError
from device_harness.diagnostics import debug_extra, resolve_logger

DeviceT = TypeVar("DeviceT", bound=DeviceInterface)


@dataclass
class AgentOpt:
    logger: Optional[logging.Logger] = None


class Agent(Generic[DeviceT]):
    """Drives one backend through the capability contract.

    The action space is queried once and cached; every dispatch is wrapped in
    the backend's before/after hooks. Deciding *what* to invoke is left to the
    caller.
    """

    def __init__(self, interface: DeviceT, opt: AgentOpt | None = None) -> None:
        if not isinstance(interface, DeviceInterface):
            raise TypeError(
                f"{type(interface).__name__} does not implement the DeviceInterface protocol"
            )
        self._interface = interface
        self._opt = opt or AgentOpt()
        self._log = resolve_logger(self._opt.logger, "agent")
        self._action_space: Optional[List[DeviceAction]] = None
        self._destroyed = False

    @property
    def interface(self) -> DeviceT:
        return self._interface

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    async def action_space(self) -> List[DeviceAction]:
        if self._action_space is None:
            self._action_space = list(await self._interface.action_space())
        return list(self._action_space)

    async def _actions_by_name(self) -> Dict[str, DeviceAction]:
        return {action.name: action for action in await self.action_space()}

    async def invoke_action(self, name: str, param: Any = None) -> None:
        actions = await self._actions_by_name()
        action = actions.get(name)
        if action is None:
            raise UnknownActionError(
                f"unknown action {name!r} for {self._interface.interface_type}; "
                f"available: {sorted(actions)}"
            )

        extra = debug_extra(self._interface.interface_type, action=name, param=param)
        self._log.debug("Invoking action: %s %r", name, param, extra=extra)
        await self._interface.before_invoke_action(name, param)
        await action.invoke(param)
        await self._interface.after_invoke_action(name, param)

    async def screenshot_base64(self) -> str:
        return await self._interface.screenshot_base64()

    async def size(self) -> Size:
        return await self._interface.size()

    def describe(self) -> str:
        return self._interface.describe()

    async def destroy(self) -> None:
        if self._destroyed:
            return
        self._destroyed = True
        self._log.debug(
            "Destroying agent for %s",
            self._interface.interface_type,
            extra=debug_extra(self._interface.interface_type),
        )
        await self._interface.destroy()
