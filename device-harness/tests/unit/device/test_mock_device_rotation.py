from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from device_harness.device.interface import NoFixturesAvailableError, Size
from device_harness.device.manifest import MockImage
from device_harness.device.mock import MockDevice, MockDeviceOptions
from device_harness.diagnostics import null_logger


def _image(name: str, width: int, height: int) -> MockImage:
    return MockImage(
        name=name,
        description=f"{name} screen",
        base64=f"data:image/png;base64,{name.upper()}PAYLOAD",
        width=width,
        height=height,
    )


def _write_manifest(tmp_path: Path, entries: dict) -> Path:
    obj = {key: img.to_dict() for key, img in entries.items()}
    (tmp_path / "mock-images.json").write_text(json.dumps(obj), encoding="utf-8")
    return tmp_path


def _device(screenshot_dir: Path) -> MockDevice:
    return MockDevice(
        MockDeviceOptions(mock_screenshot_dir=screenshot_dir),
        logger=null_logger(),
    )


def test_rotation_visits_every_key_once_per_cycle(tmp_path: Path) -> None:
    entries = {
        "login": _image("login", 800, 600),
        "home": _image("home", 1024, 768),
        "settings": _image("settings", 1280, 720),
    }
    dev = _device(_write_manifest(tmp_path, entries))

    async def _observe(n: int) -> list[str]:
        return [await dev.screenshot_base64() for _ in range(n)]

    frames = asyncio.run(_observe(4))
    assert frames == ["LOGINPAYLOAD", "HOMEPAYLOAD", "SETTINGSPAYLOAD", "LOGINPAYLOAD"]
    assert dev.get_available_screenshots() == ["login", "home", "settings"]


def test_three_observations_over_two_fixtures_wrap_around(tmp_path: Path) -> None:
    dev = _device(tmp_path)

    async def _run() -> list[str]:
        # Drop the built-in fallback so only a and b remain.
        await dev.destroy()
        dev.add_mock_image("a", _image("a", 100, 50))
        dev.add_mock_image("b", _image("b", 200, 80))
        return [await dev.screenshot_base64() for _ in range(3)]

    assert asyncio.run(_run()) == ["APAYLOAD", "BPAYLOAD", "APAYLOAD"]


def test_size_after_observation_reports_next_fixture(tmp_path: Path) -> None:
    entries = {"A": _image("a", 100, 50), "B": _image("b", 200, 80)}
    dev = _device(_write_manifest(tmp_path, entries))

    async def _run() -> tuple[Size, str, Size]:
        before = await dev.size()
        frame = await dev.screenshot_base64()
        after = await dev.size()
        return before, frame, after

    before, frame, after = asyncio.run(_run())
    assert before == Size(width=100, height=50)
    assert frame == "APAYLOAD"
    assert dev.current_screenshot_index == 1
    assert after == Size(width=200, height=80)


def test_size_does_not_advance_rotation(tmp_path: Path) -> None:
    entries = {"A": _image("a", 100, 50), "B": _image("b", 200, 80)}
    dev = _device(_write_manifest(tmp_path, entries))

    async def _run() -> str:
        await dev.size()
        await dev.size()
        return await dev.screenshot_base64()

    assert asyncio.run(_run()) == "APAYLOAD"
    assert dev.current_screenshot_index == 1


def test_set_current_screenshot_selects_next_frame(tmp_path: Path) -> None:
    entries = {
        "A": _image("a", 100, 50),
        "B": _image("b", 200, 80),
        "C": _image("c", 300, 90),
    }
    dev = _device(_write_manifest(tmp_path, entries))

    dev.set_current_screenshot("C")
    assert dev.current_screenshot_index == 2
    assert asyncio.run(dev.screenshot_base64()) == "CPAYLOAD"


def test_set_current_screenshot_unknown_key_is_noop(tmp_path: Path) -> None:
    entries = {"A": _image("a", 100, 50), "B": _image("b", 200, 80)}
    dev = _device(_write_manifest(tmp_path, entries))
    asyncio.run(dev.screenshot_base64())
    assert dev.current_screenshot_index == 1

    dev.set_current_screenshot("missing")
    assert dev.current_screenshot_index == 1
    assert asyncio.run(dev.screenshot_base64()) == "BPAYLOAD"


def test_add_mock_image_overwrites_in_place(tmp_path: Path) -> None:
    entries = {"A": _image("a", 100, 50), "B": _image("b", 200, 80)}
    dev = _device(_write_manifest(tmp_path, entries))

    dev.add_mock_image("A", _image("replaced", 640, 480))
    assert dev.get_available_screenshots() == ["A", "B"]
    assert asyncio.run(dev.screenshot_base64()) == "REPLACEDPAYLOAD"
    assert dev.describe() == "Mock Device (2 mock images available)"


def test_destroy_clears_fixtures_and_observation_fails(tmp_path: Path) -> None:
    entries = {"A": _image("a", 100, 50), "B": _image("b", 200, 80)}
    dev = _device(_write_manifest(tmp_path, entries))
    asyncio.run(dev.screenshot_base64())

    asyncio.run(dev.destroy())
    asyncio.run(dev.destroy())
    assert dev.get_available_screenshots() == []
    with pytest.raises(NoFixturesAvailableError):
        asyncio.run(dev.screenshot_base64())

    dev.add_mock_image("B", _image("b", 200, 80))
    assert asyncio.run(dev.screenshot_base64()) == "BPAYLOAD"


def test_size_with_no_fixtures_falls_back_to_builtin_default(tmp_path: Path) -> None:
    entries = {"A": _image("a", 100, 50)}
    dev = _device(_write_manifest(tmp_path, entries))
    asyncio.run(dev.destroy())

    assert asyncio.run(dev.size()) == Size(width=1, height=1)


def test_payload_without_data_uri_prefix_is_returned_as_is(tmp_path: Path) -> None:
    dev = _device(tmp_path)
    asyncio.run(dev.destroy())
    dev.add_mock_image(
        "raw",
        MockImage(name="raw", description="", base64="iVBORw0KGgo=", width=2, height=2),
    )
    dev.add_mock_image(
        "jpeg",
        MockImage(
            name="jpeg",
            description="",
            base64="data:image/jpeg;base64,/9j/4AAQ",
            width=2,
            height=2,
        ),
    )

    async def _run() -> list[str]:
        return [await dev.screenshot_base64(), await dev.screenshot_base64()]

    assert asyncio.run(_run()) == ["iVBORw0KGgo=", "/9j/4AAQ"]
