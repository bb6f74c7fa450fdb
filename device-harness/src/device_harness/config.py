from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from device_harness.agent.mock_agent import MockAgentOpt
from device_harness.device.mock import MockDeviceOptions


class ConfigError(RuntimeError):
    pass


def load_yaml_or_json(path: Path) -> Dict[str, Any]:
    """Load a YAML/JSON file into a dict.

    This is intentionally strict: the top-level must be an object.
    """
    if not path.exists():
        raise FileNotFoundError(path)

    if path.suffix.lower() in {".yaml", ".yml"}:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    elif path.suffix.lower() == ".json":
        data = json.loads(path.read_text(encoding="utf-8"))
    else:
        raise ValueError(f"Unsupported config file extension: {path}")

    if not isinstance(data, dict):
        raise ConfigError(f"Top-level config must be an object: {path}")
    return data


def _optional_str(obj: Mapping[str, Any], key: str, *, where: str) -> Optional[str]:
    value = obj.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"{where}.{key} must be a string")
    value = value.strip()
    return value or None


def mock_device_options_from_dict(
    obj: Mapping[str, Any],
    *,
    base_dir: Path | None = None,
    where: str = "config",
) -> MockDeviceOptions:
    section: Mapping[str, Any] = obj
    nested = obj.get("mock_options")
    if nested is not None:
        if not isinstance(nested, dict):
            raise ConfigError(f"{where}.mock_options must be an object")
        section = nested
        where = f"{where}.mock_options"

    screenshot_dir = _optional_str(section, "mock_screenshot_dir", where=where)
    default_screenshot = _optional_str(section, "default_screenshot", where=where)

    resolved_dir: Optional[Path] = None
    if screenshot_dir is not None:
        resolved_dir = Path(screenshot_dir).expanduser()
        if not resolved_dir.is_absolute() and base_dir is not None:
            resolved_dir = base_dir / resolved_dir
    return MockDeviceOptions(mock_screenshot_dir=resolved_dir, default_screenshot=default_screenshot)


def load_mock_agent_opt(path: Path) -> MockAgentOpt:
    path = Path(path)
    data = load_yaml_or_json(path)
    options = mock_device_options_from_dict(
        data,
        base_dir=path.resolve().parent,
        where=path.name,
    )
    return MockAgentOpt(mock_options=options)
