from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping

import jsonschema

from device_harness.device.interface import MockManifestError

MANIFEST_FILENAME = "mock-images.json"


@dataclass
class MockImage:
    name: str
    description: str
    base64: str
    width: int
    height: int

    @classmethod
    def from_dict(cls, obj: Mapping[str, Any]) -> "MockImage":
        return cls(
            name=str(obj["name"]),
            description=str(obj["description"]),
            base64=str(obj["base64"]),
            width=int(obj["width"]),
            height=int(obj["height"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "base64": self.base64,
            "width": self.width,
            "height": self.height,
        }


def _schema_path() -> Path:
    # device_harness/device/* → device_harness/schemas/mock_images.schema.json
    return Path(__file__).resolve().parents[1] / "schemas" / "mock_images.schema.json"


@lru_cache(maxsize=1)
def _load_schema() -> dict[str, Any]:
    schema_path = _schema_path()
    data = json.loads(schema_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise MockManifestError(f"schema must be an object: {schema_path}")
    jsonschema.Draft202012Validator.check_schema(data)
    return data


def validate_mock_manifest(manifest: Mapping[str, Any], *, manifest_path: Path) -> None:
    """Check a parsed manifest against the bundled fixture schema.

    Raises :class:`MockManifestError` listing up to 20 violations, each as
    ``<manifest_path>:<fixture key>/<field>: <reason>``.
    """

    schema = _load_schema()
    validator = jsonschema.Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(manifest), key=lambda err: list(err.path))
    if not errors:
        return

    msgs: list[str] = []
    for err in errors[:20]:
        loc = "/".join(str(p) for p in err.path)
        suffix = f":{loc}" if loc else ""
        msgs.append(f"- {manifest_path}{suffix}: {err.message}")
    if len(errors) > 20:
        msgs.append(f"... ({len(errors)-20} more)")

    raise MockManifestError(f"{MANIFEST_FILENAME} schema validation failed:\n" + "\n".join(msgs))


def load_mock_manifest(screenshot_dir: Path) -> Dict[str, MockImage]:
    """Load ``mock-images.json`` from ``screenshot_dir``.

    Keys keep the manifest's order. Raises ``FileNotFoundError`` when the
    manifest is missing and :class:`MockManifestError` for anything malformed.
    """

    manifest_path = Path(screenshot_dir) / MANIFEST_FILENAME
    if not manifest_path.exists():
        raise FileNotFoundError(manifest_path)
    try:
        obj = json.loads(manifest_path.read_text(encoding="utf-8"))
    except Exception as e:
        raise MockManifestError(f"invalid {MANIFEST_FILENAME}: {manifest_path} ({e})") from e
    if not isinstance(obj, dict):
        raise MockManifestError(f"{MANIFEST_FILENAME} must be an object: {manifest_path}")
    validate_mock_manifest(obj, manifest_path=manifest_path)
    return {str(key): MockImage.from_dict(entry) for key, entry in obj.items()}
