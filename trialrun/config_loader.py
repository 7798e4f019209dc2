"""YAML configuration loader.

Supports hierarchical configuration:
1. Built-in defaults
2. ~/.trialrun/config.yaml (global user prefs)
3. .trialrun/config.yaml (project-level, nearest parent directory wins)
4. Environment variables / .env (highest precedence)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

CONFIG_DIR = ".trialrun"
CONFIG_FILE = "config.yaml"

# YAML path -> environment variable read by Settings
ENV_MAPPING: dict[tuple[str, ...], str] = {
    ("logging", "level"): "TRIALRUN_LOG_LEVEL",
    ("logging", "debug"): "TRIALRUN_DEBUG",
    ("output", "format"): "TRIALRUN_OUTPUT_FORMAT",
    ("output", "show_skipped"): "TRIALRUN_SHOW_SKIPPED",
}


def get_global_config_path() -> Path:
    """Get path to global config file."""
    return Path.home() / CONFIG_DIR / CONFIG_FILE


def get_project_config_path(cwd: Path | None = None) -> Path | None:
    """Get path to project config file if it exists.

    Searches from cwd up to root for .trialrun/config.yaml
    """
    current = (cwd or Path.cwd()).resolve()

    while current != current.parent:
        config_path = current / CONFIG_DIR / CONFIG_FILE
        if config_path.exists():
            return config_path
        current = current.parent

    return None


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load YAML file and return dict."""
    if not path.exists():
        return {}

    try:
        with open(path, "r") as f:
            content = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config", path=str(path), error=str(e))
        return {}
    return content if isinstance(content, dict) else {}


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries.

    Override values take precedence.
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_config(cwd: Path | None = None) -> dict[str, Any]:
    """Load and merge the global and project config files."""
    config: dict[str, Any] = {}

    global_path = get_global_config_path()
    if global_path.exists():
        config = deep_merge(config, load_yaml_file(global_path))

    project_path = get_project_config_path(cwd)
    if project_path:
        config = deep_merge(config, load_yaml_file(project_path))

    return config


class ConfigLoader:
    """Configuration loader with caching."""

    def __init__(self, cwd: Path | None = None):
        self.cwd = cwd or Path.cwd()
        self._config: dict[str, Any] | None = None

    def load(self) -> dict[str, Any]:
        """Load and return merged configuration."""
        if self._config is None:
            self._config = load_config(self.cwd)
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key (dot notation supported).

        Example: loader.get("logging.level") returns "debug"
        """
        value: Any = self.load()
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def to_env_vars(self) -> dict[str, str]:
        """Convert configuration to TRIALRUN_* environment variables."""
        env_vars: dict[str, str] = {}
        for yaml_path, env_name in ENV_MAPPING.items():
            value = self.get(".".join(yaml_path))
            if value is None:
                continue
            env_vars[env_name] = str(value).lower() if isinstance(value, bool) else str(value)
        return env_vars
