"""Settings for kalshi tools.

``settings.yaml`` ships with the package; an optional ``settings.local.yaml``
beside it is merged on top.  String values may reference the environment as
``${VAR}`` or ``${VAR:default}``, anywhere in the string.  A ``.env`` file in
the working directory is loaded first.
"""

import os
import re
from pathlib import Path
from typing import Any, cast

import yaml
from dotenv import load_dotenv

_CONFIG_DIR = Path(__file__).parent.parent / "config"
_ENV_REF = re.compile(r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::(?P<default>[^}]*))?\}")


class ConfigError(Exception):
    """Raise when configuration loading or validation fails."""


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    data: Any = yaml.safe_load(path.read_text()) or {}
    if not isinstance(data, dict):
        msg = f"{path.name} must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)
    return cast("dict[str, Any]", data)


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` merged in, recursing into mappings."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _merge(
                cast("dict[str, Any]", current), cast("dict[str, Any]", value)
            )
        else:
            merged[key] = value
    return merged


def _expand(match: re.Match[str]) -> str:
    name, default = match.group("name"), match.group("default")
    value = os.getenv(name, default)
    if value is None:
        msg = f"Required environment variable ${{{name}}} is not set and has no default"
        raise ConfigError(msg)
    return value


def _resolve(value: Any) -> Any:
    """Expand environment references in every string of a parsed YAML tree."""
    if isinstance(value, dict):
        return {k: _resolve(v) for k, v in cast("dict[str, Any]", value).items()}
    if isinstance(value, list):
        return [_resolve(v) for v in cast("list[Any]", value)]
    if isinstance(value, str):
        return _ENV_REF.sub(_expand, value)
    return value


class ConfigLoader:
    """Resolved settings tree with dot-notation lookup.

    Args:
        config_dir: Directory holding ``settings.yaml``. Defaults to the
            packaged ``kalshi_tools/config``.

    Raises:
        ConfigError: If a settings file is not a mapping or a required
            environment variable is unset.

    """

    def __init__(self, config_dir: Path | None = None) -> None:
        """Load ``.env``, read both settings files and expand env references."""
        load_dotenv()
        self.config_dir = Path(config_dir) if config_dir is not None else _CONFIG_DIR
        raw = _merge(
            _read_yaml(self.config_dir / "settings.yaml"),
            _read_yaml(self.config_dir / "settings.local.yaml"),
        )
        self._config: dict[str, Any] = _resolve(raw)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up ``key`` in dot notation (``kalshi.base_url``).

        Returns ``default`` when any segment is missing or null.
        """
        node: Any = self._config
        for part in key.split("."):
            if not isinstance(node, dict):
                return default
            node = cast("dict[str, Any]", node).get(part)
            if node is None:
                return default
        return node

    def get_kalshi_config(self) -> dict[str, Any]:
        """Return the ``kalshi`` section.

        Raises:
            ConfigError: If the section is present but not a mapping.

        """
        section: Any = self.get("kalshi", {})
        if not isinstance(section, dict):
            msg = f"kalshi config must be a dict, got {type(section).__name__}"
            raise ConfigError(msg)
        return cast("dict[str, Any]", section)


_config: ConfigLoader | None = None


def get_config() -> ConfigLoader:
    """Return the process-wide ``ConfigLoader``, building it on first use."""
    global _config  # noqa: PLW0603
    if _config is None:
        _config = ConfigLoader()
    return _config
