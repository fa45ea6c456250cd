"""Dashboard configuration.

Settings are layered, lowest precedence first:

    defaults < ``$PI_CONFIG_DIR/dash.json`` < ``PI_DASH_*`` env vars < CLI

``None`` never overrides a lower layer.  Unknown keys are ignored.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Mapping

from pi.dash.canvas import MapResolution, Marker

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "dash.json"
ENV_PREFIX = "PI_DASH_"

LOG_LEVELS = ("debug", "info", "warning", "error")


@dataclass
class DashConfig:
    title: str = "tuidemo"
    margin: int = 5
    marker: str = "braille"
    map_resolution: str = "high"
    data_file: str | None = None
    log_file: str | None = None
    log_level: str = "warning"

    @property
    def marker_kind(self) -> Marker:
        return Marker(self.marker)

    @property
    def resolution(self) -> MapResolution:
        return MapResolution(self.map_resolution)


def deep_merge_settings(base: dict[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Recursively merge overrides into base settings.

    For nested dicts, merge recursively. For primitives and arrays,
    override value wins completely.
    """
    result = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge_settings(result[key], value)
        else:
            result[key] = value
    return result


def default_config_path() -> Path:
    config_dir = Path(os.environ.get("PI_CONFIG_DIR", Path.home() / ".pi"))
    return config_dir / CONFIG_FILE_NAME


def load_settings_file(path: str | Path) -> dict[str, Any]:
    """Read a JSON settings file; missing or malformed files give ``{}``."""
    path = Path(path)
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring settings file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: not a JSON object", path)
        return {}
    return data


def settings_from_env(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Collect ``PI_DASH_<FIELD>`` variables, e.g. ``PI_DASH_MARGIN=2``."""
    environ = os.environ if environ is None else environ
    settings: dict[str, Any] = {}
    for f in fields(DashConfig):
        value = environ.get(ENV_PREFIX + f.name.upper())
        if value:
            settings[f.name] = value
    return settings


def _coerce(settings: Mapping[str, Any]) -> dict[str, Any]:
    """Keep known keys and convert values to the field types."""
    known = {f.name for f in fields(DashConfig)}
    result: dict[str, Any] = {}
    for key, value in settings.items():
        if key not in known:
            logger.debug("Unknown setting %r ignored", key)
            continue
        if key == "margin":
            try:
                value = max(0, int(value))
            except (TypeError, ValueError):
                logger.warning("Invalid margin %r ignored", value)
                continue
        elif key in ("marker", "map_resolution", "log_level") and value is not None:
            value = str(value).lower()
        elif value is not None:
            value = str(value)
        result[key] = value
    return result


def _validate(config: DashConfig) -> DashConfig:
    defaults = DashConfig()
    if config.marker not in {m.value for m in Marker}:
        logger.warning("Unknown marker %r, using %r", config.marker, defaults.marker)
        config.marker = defaults.marker
    if config.map_resolution not in {r.value for r in MapResolution}:
        logger.warning("Unknown map resolution %r, using %r", config.map_resolution, defaults.map_resolution)
        config.map_resolution = defaults.map_resolution
    if config.log_level not in LOG_LEVELS:
        logger.warning("Unknown log level %r, using %r", config.log_level, defaults.log_level)
        config.log_level = defaults.log_level
    return config


def load_config(
    config_path: str | Path | None = None,
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> DashConfig:
    """Build the effective configuration from every layer."""
    path = Path(config_path) if config_path is not None else default_config_path()
    settings = asdict(DashConfig())
    for layer in (load_settings_file(path), settings_from_env(environ), overrides or {}):
        settings = deep_merge_settings(settings, _coerce(layer))
    return _validate(DashConfig(**settings))
