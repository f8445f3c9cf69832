"""
Configuration management
Settings are read from a YAML file and overridden by environment variables
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .components import IMAGE_REMOVAL_TIMEOUT
from .errors import ConfigError

CONFIG_ENV = "ENGINE_COMPONENTS_CONFIG"
DOCKER_HOST_ENV = "ENGINE_COMPONENTS_DOCKER_HOST"
REMOVAL_TIMEOUT_ENV = "ENGINE_COMPONENTS_REMOVAL_TIMEOUT"

DEFAULT_CONFIG_FILE = Path.home() / ".config" / "engine-components" / "config.yml"


@dataclass
class Settings:
    """Runtime settings for the CLI"""
    docker_host: Optional[str] = None
    docker_timeout: Optional[int] = None
    image_removal_timeout: float = IMAGE_REMOVAL_TIMEOUT
    debug: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Settings':
        """Create Settings from a config mapping, rejecting unknown keys"""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown configuration keys: {', '.join(unknown)}")

        settings = cls(**data)
        settings.validate()
        return settings

    def validate(self):
        if not _positive_number(self.image_removal_timeout):
            raise ConfigError("image_removal_timeout must be a positive number of seconds")
        if self.docker_timeout is not None and not _positive_number(self.docker_timeout):
            raise ConfigError("docker_timeout must be a positive number of seconds")
        if not isinstance(self.debug, bool):
            raise ConfigError("debug must be true or false")
        if self.docker_host is not None and not isinstance(self.docker_host, str):
            raise ConfigError("docker_host must be a string")


def _positive_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return value > 0


def config_path(path: Optional[Path] = None) -> Optional[Path]:
    """Resolve which config file to read, if any"""
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return Path(env_path)

    if DEFAULT_CONFIG_FILE.exists():
        return DEFAULT_CONFIG_FILE

    return None


def load_config_file(path: Path) -> Dict[str, Any]:
    """Load a YAML config file as a mapping"""
    try:
        with path.open("r") as f:
            config = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"unable to read {path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"failed to parse {path.name}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(f"{path.name} must contain a mapping")
    return config


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from the config file and environment"""
    data: Dict[str, Any] = {}

    resolved = config_path(path)
    if resolved is not None:
        data.update(load_config_file(resolved))

    if os.environ.get(DOCKER_HOST_ENV):
        data["docker_host"] = os.environ[DOCKER_HOST_ENV]

    if os.environ.get(REMOVAL_TIMEOUT_ENV):
        try:
            data["image_removal_timeout"] = float(os.environ[REMOVAL_TIMEOUT_ENV])
        except ValueError as e:
            raise ConfigError(f"{REMOVAL_TIMEOUT_ENV} must be a number") from e

    return Settings.from_dict(data)
