from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from device_harness.agent.agent import Agent, AgentOpt
from device_harness.device.interface import Size
from device_harness.device.mock import MockDevice, MockDeviceOptions
from device_harness.diagnostics import debug_extra, resolve_logger


@dataclass
class MockAgentOpt(AgentOpt):
    mock_options: Optional[MockDeviceOptions] = None


class MockAgent:
    """Agent bound to a :class:`MockDevice`, plus fixture switching helpers."""

    def __init__(self, device: MockDevice, opt: MockAgentOpt | None = None) -> None:
        self._opt = opt or MockAgentOpt()
        self._agent: Agent[MockDevice] = Agent(device, self._opt)
        self._log = resolve_logger(self._opt.logger, "mock-agent")
        self._log.debug("Mock agent created", extra=debug_extra(device.interface_type))

    @property
    def agent(self) -> Agent[MockDevice]:
        return self._agent

    @property
    def device(self) -> MockDevice:
        return self._agent.interface

    async def switch_mock_screenshot(self, image_key: str) -> None:
        self.device.set_current_screenshot(image_key)
        self._log.debug(
            "Switched to mock screenshot: %s",
            image_key,
            extra=debug_extra(self.device.interface_type),
        )

    async def get_available_screenshots(self) -> List[str]:
        return self.device.get_available_screenshots()

    async def invoke_action(self, name: str, param: Any = None) -> None:
        await self._agent.invoke_action(name, param)

    async def screenshot_base64(self) -> str:
        return await self._agent.screenshot_base64()

    async def size(self) -> Size:
        return await self._agent.size()

    def describe(self) -> str:
        return self._agent.describe()

    async def destroy(self) -> None:
        await self._agent.destroy()


async def create_mock_agent(opt: MockAgentOpt | None = None) -> MockAgent:
    opt = opt or MockAgentOpt()
    device = MockDevice(opt.mock_options, logger=opt.logger)
    return MockAgent(device, opt)
