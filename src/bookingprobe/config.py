"""Configuration loader for bookingprobe."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

from ruamel.yaml import YAML, YAMLError

DEFAULT_BASE_URL = "https://restful-booker.herokuapp.com"


class ConfigError(Exception):
    """Raised when configuration cannot be loaded or has invalid values."""

    pass


@dataclass(frozen=True)
class HarnessConfig:
    """bookingprobe configuration.

    Read once when a test session (or CLI command) starts and never
    modified afterwards.
    """

    base_url: str = DEFAULT_BASE_URL
    timeout_ms: int = 60000
    # Informational only, the client never retries on its own
    retries: int = 2
    api_key: Optional[str] = None
    verify_ssl: bool = True
    proxy: Optional[str] = None

    @property
    def timeout_seconds(self) -> float:
        """Per-call timeout in seconds, as httpx expects it."""
        return self.timeout_ms / 1000.0


CONFIG_SEARCH_PATHS = [
    "bookingprobe.yaml",
    "bookingprobe.yml",
    ".bookingprobe.yaml",
    ".bookingprobe.yml",
]

KNOWN_KEYS = {f.name for f in fields(HarnessConfig)}

INT_FIELDS = {"timeout_ms", "retries"}
BOOL_FIELDS = {"verify_ssl"}

# Environment variable -> config field
ENV_VARS = {
    "API_BASE_URL": "base_url",
    "TIMEOUT": "timeout_ms",
    "RETRIES": "retries",
    "API_KEY": "api_key",
    "VERIFY_SSL": "verify_ssl",
    "HTTP_PROXY_URL": "proxy",
}


def find_config_path() -> Path | None:
    """Find the active config file path, or None if no config file exists."""
    for name in CONFIG_SEARCH_PATHS:
        path = Path.cwd() / name
        if path.exists():
            return path
    return None


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _coerce(key: str, value: Any) -> Any:
    """Convert a raw file/env value to the type of its config field."""
    if key in INT_FIELDS:
        if isinstance(value, bool):
            raise ValueError(f"not an integer: {value!r}")
        number = int(value)
        if number < 0:
            raise ValueError(f"must not be negative: {value!r}")
        return number
    if key in BOOL_FIELDS:
        return _parse_bool(value)
    if value is None:
        return None
    text = str(value).strip()
    if key == "base_url":
        if not text:
            raise ValueError("must not be empty")
        return text.rstrip("/")
    return text or None


def _read_yaml(config_path: Path) -> dict[str, Any]:
    yaml = YAML(typ="safe")
    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.load(f)

    if data is None:
        return {}

    # If there's a bookingprobe section, use its contents
    if isinstance(data, dict) and "bookingprobe" in data:
        data = data["bookingprobe"]
        if data is None:
            return {}

    if not isinstance(data, dict):
        raise ConfigError(
            f"Config must be a YAML mapping, got {type(data).__name__}"
        )
    return data


def validate_config(config_path: Path) -> list[str]:
    """Validate a config file and return a list of error messages (empty = valid)."""
    errors: list[str] = []

    try:
        data = _read_yaml(config_path)
    except YAMLError as e:
        return [f"Invalid YAML syntax: {e}"]
    except OSError as e:
        return [f"Cannot read file: {e}"]
    except ConfigError as e:
        return [str(e)]

    for key, value in data.items():
        if key not in KNOWN_KEYS:
            errors.append(f"Unknown key: '{key}'")
            continue
        try:
            _coerce(key, value)
        except (ValueError, TypeError) as e:
            errors.append(f"Invalid value for '{key}': {e}")

    return errors


def validate_environment(environ: Mapping[str, str] | None = None) -> list[str]:
    """Check harness environment variables; return error messages (empty = valid)."""
    if environ is None:
        environ = os.environ

    errors: list[str] = []
    for var, key in ENV_VARS.items():
        value = environ.get(var, "")
        if value == "":
            continue
        try:
            _coerce(key, value)
        except (ValueError, TypeError) as e:
            errors.append(f"Invalid value for {var}: {e}")
    return errors


def config_sources(
    config_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Name where each effective setting comes from.

    Values are ``"default"``, ``"file"`` or the environment variable that
    set it. Assumes ``load_config`` with the same arguments succeeded.
    """
    sources = {name: "default" for name in KNOWN_KEYS}

    path = Path(config_path) if config_path is not None else find_config_path()
    if path is not None and path.exists():
        for key in _read_yaml(path):
            sources[key] = "file"

    if environ is None:
        environ = os.environ
    for var, key in ENV_VARS.items():
        if environ.get(var, "") != "":
            sources[key] = var
    return sources


def _apply(config: HarnessConfig, values: Mapping[str, Any], source: str) -> HarnessConfig:
    updates: dict[str, Any] = {}
    for key, value in values.items():
        try:
            updates[key] = _coerce(key, value)
        except (ValueError, TypeError) as e:
            raise ConfigError(f"Invalid value for '{key}' in {source}: {e}") from e
    return replace(config, **updates)


def load_config(
    config_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> HarnessConfig:
    """Load configuration: defaults, then config file, then environment.

    Raises:
        ConfigError: On an explicit path that does not exist, unreadable or
            malformed YAML, unknown keys, or values of the wrong type.
    """
    config = HarnessConfig()
    explicit = config_path is not None

    if config_path is None:
        config_path = find_config_path()

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            if explicit:
                raise ConfigError(f"Config file not found: {config_path}")
        else:
            try:
                data = _read_yaml(config_path)
            except YAMLError as e:
                raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
            except OSError as e:
                raise ConfigError(f"Cannot read config file {config_path}: {e}") from e

            unknown = sorted(set(data) - KNOWN_KEYS)
            if unknown:
                raise ConfigError(
                    f"Unknown key(s) in {config_path}: {', '.join(unknown)}"
                )
            config = _apply(config, data, str(config_path))

    if environ is None:
        environ = os.environ

    env_values = {
        field_name: environ[var]
        for var, field_name in ENV_VARS.items()
        if environ.get(var, "") != ""
    }
    return _apply(config, env_values, "environment")


def get_default_config_yaml() -> str:
    """Return default YAML config template."""
    return f'''# bookingprobe configuration
# Place this file as bookingprobe.yaml in your working directory.
# Environment variables (API_BASE_URL, TIMEOUT, RETRIES, API_KEY,
# VERIFY_SSL, HTTP_PROXY_URL) take precedence over this file.

bookingprobe:
  # Base URL of the booking service under test
  base_url: {DEFAULT_BASE_URL}

  # Per-request timeout in milliseconds
  timeout_ms: 60000

  # Retry count passed to the test runner (the client never retries)
  retries: 2

  # Optional API key, sent as X-Api-Key on every request
  # api_key: your-key

  # Verify TLS certificates
  verify_ssl: true

  # Optional HTTP proxy (e.g. http://127.0.0.1:8080)
  # proxy: http://127.0.0.1:8080
'''
