"""Subject loading for the CLI — JSON, YAML or TOML files to plain data."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Optional

import yaml

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


class SubjectError(Exception):
    """Raised when a subject file cannot be read or parsed."""


def load_subject(path: Optional[Path]) -> Any:
    """Return the data in *path*, or ``None`` when no path is given."""
    if path is None:
        return None
    if not path.is_file():
        raise SubjectError(f"Subject file not found: {path}")

    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            return json.loads(path.read_text(encoding="utf-8"))
        if suffix in (".yaml", ".yml"):
            return yaml.safe_load(path.read_text(encoding="utf-8"))
        if suffix == ".toml":
            with open(path, "rb") as f:
                return tomllib.load(f)
    except OSError as exc:
        raise SubjectError(f"Failed to read {path}: {exc}") from exc
    except (
        UnicodeDecodeError,
        json.JSONDecodeError,
        yaml.YAMLError,
        tomllib.TOMLDecodeError,
    ) as exc:
        raise SubjectError(f"Failed to parse {path}: {exc}") from exc

    raise SubjectError(f"Unsupported subject format: {path.suffix or path.name}")
