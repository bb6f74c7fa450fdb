"""Device backends and the capability contract agents drive them through."""

from __future__ import annotations

from device_harness.device.actions import (
    ACTION_FACTORIES,
    ActionKind,
    DeviceAction,
    define_action_double_click,
    define_action_drag_and_drop,
    define_action_hover,
    define_action_input,
    define_action_keyboard_press,
    define_action_right_click,
    define_action_scroll,
    define_action_tap,
)
from device_harness.device.interface import (
    DeviceError,
    DeviceInterface,
    MockManifestError,
    NoFixturesAvailableError,
    Size,
    UnknownActionError,
)
from device_harness.device.manifest import MockImage, load_mock_manifest
from device_harness.device.mock import (
    DEFAULT_SCREENSHOT_KEY,
    MockDevice,
    MockDeviceOptions,
    default_mock_screenshot_dir,
)

__all__ = [
    "ACTION_FACTORIES",
    "ActionKind",
    "DEFAULT_SCREENSHOT_KEY",
    "DeviceAction",
    "DeviceError",
    "DeviceInterface",
    "MockDevice",
    "MockDeviceOptions",
    "MockImage",
    "MockManifestError",
    "NoFixturesAvailableError",
    "Size",
    "UnknownActionError",
    "default_mock_screenshot_dir",
    "define_action_double_click",
    "define_action_drag_and_drop",
    "define_action_hover",
    "define_action_input",
    "define_action_keyboard_press",
    "define_action_right_click",
    "define_action_scroll",
    "define_action_tap",
    "load_mock_manifest",
]
