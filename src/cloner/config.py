"""Settings for a clone run, merged from a YAML file and command-line values."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

DEFAULT_EXTRA_NAMESPACES = ("kube-system",)


class ConfigError(ValueError):
    """Raised when a settings file cannot be used."""


@dataclass
class CloneSettings:
    source: str = ""
    sink: str = ""
    namespace: str = ""
    continue_on_error: bool = False
    rollback: bool = False
    # Cloned after the general listing in all-namespaces mode, even if already listed.
    extra_namespaces: List[str] = field(default_factory=lambda: list(DEFAULT_EXTRA_NAMESPACES))
    token_env: Optional[str] = None
    verify_tls: bool = True
    timeout_seconds: float = 30.0
    retries: int = 0

    def merged(self, overrides: Mapping[str, Any]) -> "CloneSettings":
        """Return a copy with every non-None override applied."""

        values = {f.name: getattr(self, f.name) for f in fields(self)}
        for key, value in overrides.items():
            if key not in values:
                raise ConfigError(f"Unknown setting: {key}")
            if value is not None:
                values[key] = value
        return CloneSettings(**values)


def load_settings(path: Optional[Path]) -> CloneSettings:
    if path is None:
        return CloneSettings()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Settings file not readable: {path}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Settings file {path} is not valid YAML: {exc}") from exc
    if data is None:
        return CloneSettings()
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping")
    return CloneSettings().merged(_coerce(data, path))


def _coerce(data: Dict[str, Any], path: Path) -> Dict[str, Any]:
    values = dict(data)
    extra = values.get("extra_namespaces")
    if extra is not None:
        if isinstance(extra, str):
            extra = [extra]
        if not isinstance(extra, list) or not all(isinstance(item, str) for item in extra):
            raise ConfigError(f"extra_namespaces in {path} must be a list of names")
        values["extra_namespaces"] = extra
    for key in ("continue_on_error", "rollback", "verify_tls"):
        if key in values and values[key] is not None and not isinstance(values[key], bool):
            raise ConfigError(f"{key} in {path} must be true or false")
    for key in ("source", "sink", "namespace", "token_env"):
        if values.get(key) is not None and not isinstance(values[key], str):
            raise ConfigError(f"{key} in {path} must be a string")
    retries = values.get("retries")
    if retries is not None and (isinstance(retries, bool) or not isinstance(retries, int) or retries < 0):
        raise ConfigError(f"retries in {path} must be a non-negative integer")
    timeout = values.get("timeout_seconds")
    if timeout is not None:
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigError(f"timeout_seconds in {path} must be a positive number")
        values["timeout_seconds"] = float(timeout)
    return values


__all__ = ["CloneSettings", "ConfigError", "DEFAULT_EXTRA_NAMESPACES", "load_settings"]
