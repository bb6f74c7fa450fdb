from __future__ import annotations

import argparse
import asyncio
import base64
import binascii
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

from device_harness.agent.mock_agent import MockAgentOpt, create_mock_agent
from device_harness.config import ConfigError, load_mock_agent_opt
from device_harness.device.interface import DeviceError
from device_harness.device.mock import MockDeviceOptions


def _parse_action(spec: str) -> Tuple[str, Any]:
    """Parse ``NAME`` or ``NAME=<json>`` into (name, param)."""

    name, sep, raw = str(spec).partition("=")
    name = name.strip()
    if not name:
        raise ValueError(f"empty action name: {spec!r}")
    if not sep:
        return name, None
    try:
        return name, json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"invalid JSON param for action {name!r}: {e}") from e


def _build_opt(args: argparse.Namespace) -> MockAgentOpt:
    opt = load_mock_agent_opt(args.config) if args.config else MockAgentOpt()
    options = opt.mock_options or MockDeviceOptions()
    if args.screenshot_dir is not None:
        options.mock_screenshot_dir = args.screenshot_dir
    if args.default_screenshot:
        options.default_screenshot = args.default_screenshot
    opt.mock_options = options
    return opt


async def _run(
    opt: MockAgentOpt,
    *,
    frames: int,
    switch: Optional[str],
    actions: List[Tuple[str, Any]],
    out_dir: Optional[Path],
) -> Dict[str, Any]:
    agent = await create_mock_agent(opt)
    report: Dict[str, Any] = {
        "describe": agent.describe(),
        "screenshots": await agent.get_available_screenshots(),
        "frames": [],
        "actions": [],
    }
    try:
        if switch:
            await agent.switch_mock_screenshot(switch)

        for name, param in actions:
            await agent.invoke_action(name, param)
            report["actions"].append({"name": name, "param": param})

        if out_dir is not None:
            out_dir.mkdir(parents=True, exist_ok=True)
        for i in range(max(0, int(frames))):
            size = await agent.size()
            payload = await agent.screenshot_base64()
            try:
                raw = base64.b64decode(payload, validate=True)
            except (binascii.Error, ValueError):
                raw = b""
            if out_dir is not None:
                (out_dir / f"frame_{i}.png").write_bytes(raw)
            report["frames"].append({"index": i, "size": size.to_dict(), "bytes": len(raw)})
    finally:
        await agent.destroy()
    return report


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Inspect and drive a fixture-backed mock device."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional YAML/JSON file with mock_screenshot_dir/default_screenshot.",
    )
    parser.add_argument(
        "--screenshot_dir",
        type=Path,
        default=None,
        help="Directory containing mock-images.json (overrides --config).",
    )
    parser.add_argument(
        "--default_screenshot",
        type=str,
        default=None,
        help="Default fixture key (overrides --config).",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=1,
        help="Number of screenshots to observe.",
    )
    parser.add_argument(
        "--switch",
        type=str,
        default=None,
        help="Fixture key to switch to before observing.",
    )
    parser.add_argument(
        "--action",
        action="append",
        default=[],
        help="Action to invoke before observing, as NAME or NAME=<json param>. Repeatable.",
    )
    parser.add_argument(
        "--out_dir",
        type=Path,
        default=None,
        help="Write decoded frames as frame_<i>.png into this directory.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="[%(levelname)s] %(name)s: %(message)s")

    try:
        actions = [_parse_action(a) for a in args.action]
    except ValueError as e:
        parser.error(str(e))

    try:
        opt = _build_opt(args)
    except (ConfigError, FileNotFoundError, ValueError) as e:
        print(f"ERROR: invalid config: {e}")
        return 2

    try:
        report = asyncio.run(
            _run(
                opt,
                frames=args.frames,
                switch=args.switch,
                actions=actions,
                out_dir=args.out_dir,
            )
        )
    except DeviceError as e:
        print(f"ERROR: {e}")
        return 1
    print(yaml.safe_dump(report, sort_keys=False, allow_unicode=True).rstrip())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
