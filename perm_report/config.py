"""
Report settings.

Values come from three layers, highest precedence first: explicit command-line
options, an optional JSON or YAML config file, and the defaults below. Config
files may use camelCase keys (``trueIcon``, ``useLabels``,
``objectMetaPath``) or snake_case.

Sample ``perm-report.yaml``::

    path: ./force-app/main/default/permissionsets
    glob: "**/*-meta.xml"
    output: ./sfdocs/permissions.xlsx
    trueIcon: "Y"
    falseIcon: "-"
    useLabels: true
    objectMetaPath: ./force-app/main/default/objects
    type: permissionsets
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

PERMISSION_SET_TYPE = "permissionsets"
PROFILE_TYPE = "profiles"
VALID_TYPES = (PERMISSION_SET_TYPE, PROFILE_TYPE)

TYPE_FILE_SUFFIX = {
    PERMISSION_SET_TYPE: ".permissionset-meta.xml",
    PROFILE_TYPE: ".profile-meta.xml",
}


class ConfigError(ValueError):
    """Raised when the configuration file or resolved settings are invalid."""


@dataclass
class ReportSettings:
    path: Path = Path("./permissionsets")
    glob: str = "**/*-meta.xml"
    output: Path = Path("./sfdocs/permissions.xlsx")
    true_icon: str = "✔"
    false_icon: str = "✖"
    use_labels: bool = False
    object_meta_path: Path = Path("./objects")
    type: str = PERMISSION_SET_TYPE

    @property
    def file_suffix(self) -> str:
        return TYPE_FILE_SUFFIX[self.type]

    @property
    def item_label(self) -> str:
        """Singular noun for log lines, e.g. ``permissionset``."""

        return self.type[:-1]


_PATH_FIELDS = {"path", "output", "object_meta_path"}
_SETTING_NAMES = {f.name for f in fields(ReportSettings)}


def _snake_case(key: str) -> str:
    key = key.replace("-", "_")
    return re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", key).lower()


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def normalize_config_keys(raw: Mapping[str, Any], source: Path | str = "<config>") -> Dict[str, Any]:
    """Map camelCase/snake_case keys onto ``ReportSettings`` field names."""

    normalized: Dict[str, Any] = {}
    unknown = []
    for key, value in raw.items():
        name = _snake_case(str(key))
        if name not in _SETTING_NAMES:
            unknown.append(str(key))
            continue
        normalized[name] = value
    if unknown:
        raise ConfigError(f"Unknown option(s) in {source}: {', '.join(sorted(unknown))}")
    return normalized


def load_config_file(path: Path) -> Dict[str, Any]:
    """Read a JSON or YAML config file into normalized setting names."""

    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as handle:
            if path.suffix.lower() in {".yaml", ".yml"}:
                raw = yaml.safe_load(handle) or {}
            else:
                raw = json.load(handle)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Error reading configuration file {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"Configuration file {path} must contain a mapping at the top level")
    return normalize_config_keys(raw, path)


def resolve_settings(
    overrides: Optional[Mapping[str, Any]] = None,
    config: Optional[Mapping[str, Any]] = None,
) -> ReportSettings:
    """Merge config-file values and explicit overrides over the defaults.

    ``None`` values in ``overrides`` mean "not given" and fall through.
    """

    merged: Dict[str, Any] = dict(config or {})
    for key, value in (overrides or {}).items():
        if value is not None:
            merged[key] = value

    values: Dict[str, Any] = {}
    for name, value in merged.items():
        if name not in _SETTING_NAMES:
            raise ConfigError(f"Unknown option: {name}")
        if value is None:
            continue
        if name in _PATH_FIELDS:
            value = Path(str(value))
        elif name == "use_labels":
            value = _parse_bool(value)
        elif name == "type":
            value = str(value).lower()
        else:
            value = str(value)
        values[name] = value

    return ReportSettings(**values)


def validate_settings(settings: ReportSettings) -> ReportSettings:
    if settings.type not in VALID_TYPES:
        raise ConfigError(
            f"Invalid type specified: {settings.type}. Valid options are 'permissionsets' or 'profiles'."
        )
    if not settings.path.exists():
        raise ConfigError(f"Specified permission files path does not exist: {settings.path}")
    if settings.use_labels and not settings.object_meta_path.exists():
        raise ConfigError(f"Specified object metadata path does not exist: {settings.object_meta_path}")
    return settings
