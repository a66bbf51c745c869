"""Load InkwellConfig from inkwell.yaml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from inkwell.config import InkwellConfig

CONFIG_FILENAMES = ("inkwell.yaml", "inkwell.yml", "inkwell.toml")

_KNOWN_KEYS = frozenset({
    "content_dir", "extension", "index_name", "output",
    "base_url", "required_fields", "debounce_ms",
})


def load_config(root: Path, **overrides: object) -> InkwellConfig:
    """Load InkwellConfig from root, optionally merging inkwell.yaml.

    Looks for inkwell.yaml, inkwell.yml, or inkwell.toml in root. If found,
    loads and merges with overrides. Overrides take precedence.
    """
    file_config = _read_inkwell_config(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    # Normalize output to Path
    if "output" in merged and not isinstance(merged["output"], Path):
        merged["output"] = Path(str(merged["output"]))
    if "required_fields" in merged and isinstance(merged["required_fields"], list):
        merged["required_fields"] = tuple(str(f) for f in merged["required_fields"])
    return InkwellConfig(root=root, **merged)


def _read_inkwell_config(root: Path) -> dict[str, object]:
    """Read inkwell config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("inkwell.yaml", "inkwell.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "inkwell.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    """Parse YAML config. Returns empty dict on error."""
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(data, dict):
        return {}
    return _flatten_inkwell_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    """Parse TOML config. Returns empty dict on error."""
    try:
        data = tomllib.loads(path.read_text())
    except (OSError, tomllib.TOMLDecodeError):
        return {}
    return _flatten_inkwell_section(data)


def _flatten_inkwell_section(data: dict[str, object]) -> dict[str, object]:
    """Extract inkwell.* keys into top-level config, dropping unknown keys."""
    result: dict[str, object] = {}
    for k, v in data.items():
        if k in _KNOWN_KEYS:
            result[k] = v
    section = data.get("inkwell")
    if isinstance(section, dict):
        for k, v in section.items():
            if k in _KNOWN_KEYS:
                result[k] = v
    return result
