from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .errors import ConfigError

# re-export for contract/tests
__all__ = [
    "AppConfig",
    "ConfigError",
    "LOG_LEVELS",
    "LoggingConfig",
    "MediaConfig",
    "load_config",
]


_ENV_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")
LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _expand_env_in_str(value: str, *, path: str) -> str:
    def repl(match: re.Match[str]) -> str:
        key = match.group(1)
        if key not in os.environ:
            raise ConfigError(f"environment variable {key!r} is missing", path=path)
        if os.environ[key] == "":
            raise ConfigError(f"environment variable {key!r} is empty", path=path)
        return os.environ[key]

    return _ENV_PATTERN.sub(repl, value)


def _expand_env(obj: Any, *, path: str) -> Any:
    if isinstance(obj, str):
        return _expand_env_in_str(obj, path=path)
    if isinstance(obj, list):
        return [_expand_env(v, path=f"{path}[{i}]") for i, v in enumerate(obj)]
    if isinstance(obj, dict):
        return {k: _expand_env(v, path=f"{path}.{k}" if path else str(k)) for k, v in obj.items()}
    return obj


def _as_bool(value: Any, *, path: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "yes", "on", "1"}:
        return True
    if isinstance(value, str) and value.strip().lower() in {"false", "no", "off", "0"}:
        return False
    raise ConfigError("must be a boolean", path=path)


@dataclass(frozen=True)
class MediaConfig:
    service: str = "Media"
    evict_on_release: bool = True
    log_ignored: bool = True


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"


@dataclass(frozen=True)
class AppConfig:
    media: MediaConfig = field(default_factory=MediaConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def default(cls) -> AppConfig:
        return cls()


def load_config(path: str | Path) -> AppConfig:
    """Load YAML config and expand ${ENV_VAR}.

    Raises:
        ConfigError: missing file, invalid YAML, unresolved env vars or bad values.
    """

    # Local dev: allow injecting values from .env (do not commit it).
    load_dotenv(override=False)

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError("config file does not exist", path=str(config_path))

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML: {e}", path=str(config_path)) from e

    if not isinstance(raw, dict):
        raise ConfigError("top level must be a YAML mapping", path=str(config_path))

    expanded = _expand_env(raw, path="")

    media = MediaConfig()
    media_raw = expanded.get("media")
    if media_raw is not None:
        if not isinstance(media_raw, dict):
            raise ConfigError("must be a mapping", path="media")

        service = media_raw.get("service", MediaConfig.service)
        if not isinstance(service, str) or not service.strip():
            raise ConfigError("must be a non-empty string", path="media.service")

        media = MediaConfig(
            service=service,
            evict_on_release=_as_bool(
                media_raw.get("evict_on_release", MediaConfig.evict_on_release), path="media.evict_on_release"
            ),
            log_ignored=_as_bool(media_raw.get("log_ignored", MediaConfig.log_ignored), path="media.log_ignored"),
        )

    log_cfg = LoggingConfig()
    logging_raw = expanded.get("logging")
    if logging_raw is not None:
        if not isinstance(logging_raw, dict):
            raise ConfigError("must be a mapping", path="logging")
        level = str(logging_raw.get("level", LoggingConfig.level)).upper()
        if level not in LOG_LEVELS:
            raise ConfigError(f"unknown level {level!r}", path="logging.level")
        log_cfg = LoggingConfig(level=level)

    return AppConfig(media=media, logging=log_cfg)
