"""
Service configuration - resolved once at startup.

Precedence (lowest to highest):
    1. Defaults
    2. First config.yaml found in /etc/echo-api/, ~/.echo-api/, ./
    3. Environment variables (a .env file is loaded into the environment)

Environment Variables:
    LOG_LEVEL:      DEBUG | INFO | WARNING | ERROR | CRITICAL (default: INFO)
    LOG_JSON:       render log records as JSON (default: false)
    ECHO_API_HOST:  listen address (default: localhost)
    ECHO_API_PORT:  listen port (default: 8080)

config.yaml uses the keys log-level, log-json, host and port.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence

import yaml
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


CONFIG_FILENAME = 'config.yaml'

DEFAULT_SEARCH_PATHS = (
    Path('/etc/echo-api'),
    Path.home() / '.echo-api',
    Path('.'),
)

# Accepted level names, including the aliases other loggers use
LOG_LEVELS = {
    'TRACE': logging.DEBUG,
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARN': logging.WARNING,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'FATAL': logging.CRITICAL,
    'CRITICAL': logging.CRITICAL,
}

_TRUE = frozenset(['1', 't', 'true', 'y', 'yes', 'on'])
_FALSE = frozenset(['0', 'f', 'false', 'n', 'no', 'off'])

# file key -> environment variable
_ENV_KEYS = {
    'log-level': 'LOG_LEVEL',
    'log-json': 'LOG_JSON',
    'host': 'ECHO_API_HOST',
    'port': 'ECHO_API_PORT',
}


class ConfigError(Exception):
    """Raised when configuration cannot be loaded or is invalid."""


@dataclass(frozen=True)
class Config:
    log_level: str = 'INFO'
    log_json: bool = False
    host: str = 'localhost'
    port: int = 8080

    @property
    def log_level_number(self) -> int:
        return LOG_LEVELS[self.log_level]

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'log-level': self.log_level,
            'log-json': self.log_json,
            'host': self.host,
            'port': self.port,
        }


def find_config_file(search_paths: Sequence[Path] = DEFAULT_SEARCH_PATHS) -> Optional[Path]:
    """Return the first existing config.yaml in search order, if any."""
    for directory in search_paths:
        candidate = Path(directory) / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_config_file(path: Path) -> Dict[str, Any]:
    """
    Load a YAML config file.

    Raises:
        ConfigError if the file cannot be read or is not a mapping
    """
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"fatal error config file: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"fatal error config file: {path} must contain a mapping")
    logger.info(f"Loaded config from {path}")
    return data


def load_config(
    search_paths: Sequence[Path] = DEFAULT_SEARCH_PATHS,
    environ: Optional[Mapping[str, str]] = None,
) -> Config:
    """
    Resolve the service configuration.

    Args:
        search_paths: directories searched for config.yaml, in order
        environ: environment mapping (defaults to os.environ)

    Returns:
        Validated, immutable Config

    Raises:
        ConfigError on an unreadable file or an invalid value
    """
    if environ is None:
        environ = os.environ

    raw: Dict[str, Any] = {}
    path = find_config_file(search_paths)
    if path is not None:
        raw.update({k: v for k, v in read_config_file(path).items() if k in _ENV_KEYS})

    for key, env_var in _ENV_KEYS.items():
        value = environ.get(env_var)
        if value is not None and value != '':
            raw[key] = value

    defaults = Config()
    return Config(
        log_level=_parse_level(raw.get('log-level', defaults.log_level)),
        log_json=_parse_bool('log-json', raw.get('log-json', defaults.log_json)),
        host=str(raw.get('host', defaults.host)),
        port=_parse_port(raw.get('port', defaults.port)),
    )


def _parse_level(value: Any) -> str:
    level = str(value).strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"fatal error logging: not a valid log level: {value!r}")
    return level


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"invalid boolean for {key}: {value!r}")


def _parse_port(value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"invalid port: {value!r}")
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"invalid port: {value!r}")
    if not 0 <= port <= 65535:
        raise ConfigError(f"invalid port: {value!r}")
    return port
