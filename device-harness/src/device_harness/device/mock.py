"""Fixture-backed mock device.

The mock device serves pre-rendered screenshots from a ``mock-images.json``
manifest and simulates action latency. It lets the agent's observe/act loop
run deterministically without a live browser or desktop.

Notes
-----
* Every ``screenshot_base64()`` call returns the image at the rotation index
  and then advances the index. ``size()`` reads the index without advancing
  it, so after an observation it reports the *next* image's dimensions.
  Callers that need the size of the frame they just received should query
  ``size()`` first.
* A missing or malformed manifest is never an error for the caller: the
  device installs a single built-in ``desktop-1`` fixture instead.
"""

from __future__ import annotations

import asyncio
import logging
import random
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional

from device_harness.device.actions import ACTION_FACTORIES, ActionKind, DeviceAction
from device_harness.device.interface import NoFixturesAvailableError, Size
from device_harness.device.manifest import MockImage, load_mock_manifest
from device_harness.diagnostics import debug_extra, resolve_logger

DEFAULT_SCREENSHOT_KEY = "desktop-1"

_BUNDLED_MOCK_DIR = Path(__file__).resolve().parents[1] / "mock"

_DATA_URI_PREFIX = re.compile(r"^data:image/[a-z]+;base64,")

_DEFAULT_PNG_DATA_URI = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
)

# (min_ms, max_ms) for simulated action latency.
ACTION_DELAY_MS = (100.0, 300.0)


def default_mock_screenshot_dir() -> Path:
    return _BUNDLED_MOCK_DIR / "screenshots"


def default_mock_image() -> MockImage:
    return MockImage(
        name="Default Desktop",
        description="Built-in placeholder desktop (1x1)",
        base64=_DEFAULT_PNG_DATA_URI,
        width=1,
        height=1,
    )


def strip_data_uri(payload: str) -> str:
    return _DATA_URI_PREFIX.sub("", payload, count=1)


@dataclass
class MockDeviceOptions:
    mock_screenshot_dir: Optional[Path] = None
    default_screenshot: Optional[str] = None


class MockDevice:
    interface_type = "mock"

    def __init__(
        self,
        options: MockDeviceOptions | None = None,
        *,
        logger: logging.Logger | None = None,
        rng: random.Random | None = None,
        sleep: Callable[[float], Awaitable[Any]] | None = None,
    ) -> None:
        options = options or MockDeviceOptions()
        self._log = resolve_logger(logger, "mock-device")
        self._rng = rng or random.Random()
        self._sleep = sleep or asyncio.sleep
        self._mock_screenshot_dir = (
            Path(options.mock_screenshot_dir)
            if options.mock_screenshot_dir
            else default_mock_screenshot_dir()
        )
        self._default_screenshot = options.default_screenshot or DEFAULT_SCREENSHOT_KEY
        self._current_screenshot_index = 0
        self._mock_images: Dict[str, MockImage] = {}
        self._load_mock_images()

    @property
    def mock_screenshot_dir(self) -> Path:
        return self._mock_screenshot_dir

    @property
    def default_screenshot(self) -> str:
        return self._default_screenshot

    @property
    def current_screenshot_index(self) -> int:
        return self._current_screenshot_index

    def _debug(self, msg: str, *args: Any, action: str | None = None, param: Any = None) -> None:
        self._log.debug(
            msg, *args, extra=debug_extra(self.interface_type, action=action, param=param)
        )

    def _load_mock_images(self) -> None:
        try:
            self._mock_images = load_mock_manifest(self._mock_screenshot_dir)
            self._debug("Loaded mock images: %s", list(self._mock_images))
        except Exception as e:
            self._debug("Failed to load mock images from %s: %s", self._mock_screenshot_dir, e)
            self._mock_images = {DEFAULT_SCREENSHOT_KEY: default_mock_image()}

    async def screenshot_base64(self) -> str:
        self._debug("Taking mock screenshot")
        image_keys = list(self._mock_images)
        if not image_keys:
            raise NoFixturesAvailableError("No mock images available")

        image_key = image_keys[self._current_screenshot_index % len(image_keys)]
        mock_image = self._mock_images[image_key]
        self._current_screenshot_index += 1

        self._debug("Using mock image: %s (%s)", image_key, mock_image.name)
        return strip_data_uri(mock_image.base64)

    async def size(self) -> Size:
        image_keys = list(self._mock_images)
        mock_image: Optional[MockImage] = None
        if image_keys:
            image_key = image_keys[self._current_screenshot_index % len(image_keys)]
            mock_image = self._mock_images[image_key]
        else:
            mock_image = self._mock_images.get(self._default_screenshot)
        if mock_image is None:
            self._debug("No mock images available; reporting built-in default size")
            mock_image = default_mock_image()
        return Size(width=mock_image.width, height=mock_image.height)

    async def _simulate_delay(self) -> None:
        lo, hi = ACTION_DELAY_MS
        delay_ms = lo + self._rng.random() * (hi - lo)
        await self._sleep(delay_ms / 1000.0)

    def _mock_handler(self, kind: ActionKind) -> Callable[[Any], Awaitable[None]]:
        async def _handler(param: Any) -> None:
            self._debug("Mock %s action: %r", kind.value, param, action=kind.value, param=param)
            await self._simulate_delay()

        return _handler

    async def action_space(self) -> List[DeviceAction]:
        return [factory(self._mock_handler(kind)) for kind, factory in ACTION_FACTORIES.items()]

    def describe(self) -> str:
        return f"Mock Device ({len(self._mock_images)} mock images available)"

    async def before_invoke_action(self, action_name: str, param: Any) -> None:
        self._debug("Before action: %s %r", action_name, param, action=action_name, param=param)

    async def after_invoke_action(self, action_name: str, param: Any) -> None:
        self._debug("After action: %s %r", action_name, param, action=action_name, param=param)

    async def destroy(self) -> None:
        self._debug("Destroying mock device")
        self._mock_images = {}

    def set_current_screenshot(self, image_key: str) -> None:
        if image_key in self._mock_images:
            self._current_screenshot_index = list(self._mock_images).index(image_key)
            self._debug("Switched to mock image: %s", image_key)
        else:
            self._debug("Mock image not found: %s", image_key)

    def get_available_screenshots(self) -> List[str]:
        return list(self._mock_images)

    def add_mock_image(self, key: str, image: MockImage) -> None:
        self._mock_images[key] = image
        self._debug("Added mock image: %s", key)
