"""Agents bound to a device backend."""

from __future__ import annotations

from device_harness.agent.agent import Agent, AgentOpt
from device_harness.agent.mock_agent import MockAgent, MockAgentOpt, create_mock_agent

__all__ = [
    "Agent",
    "AgentOpt",
    "MockAgent",
    "MockAgentOpt",
    "create_mock_agent",
]
