import os
import logging
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

ENV_PREFIX = "DEVOPS_SETUP_"

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_COMMAND_TIMEOUT = 900
DEFAULT_PROBE_TIMEOUT = 10

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    log_level: str = DEFAULT_LOG_LEVEL
    command_timeout: int = DEFAULT_COMMAND_TIMEOUT
    probe_timeout: int = DEFAULT_PROBE_TIMEOUT
    use_sudo: bool = True
    package_manager: Optional[str] = None


def _env(name: str) -> Optional[str]:
    value = os.getenv(ENV_PREFIX + name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _int_env(name: str, default: int) -> int:
    raw = _env(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s%s=%r: not an integer, using %d", ENV_PREFIX, name, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring %s%s=%r: must be positive, using %d", ENV_PREFIX, name, raw, default)
        return default
    return value


def _bool_env(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    lowered = raw.lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    logger.warning("Ignoring %s%s=%r: expected a boolean", ENV_PREFIX, name, raw)
    return default


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """
    Build run settings from the environment.

    A .env file (the current directory's, or ``dotenv_path``) is loaded first;
    variables already set in the environment take precedence over it.
    """
    load_dotenv(dotenv_path=dotenv_path or find_dotenv(usecwd=True))

    level = (_env("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Ignoring %sLOG_LEVEL=%r: unknown level", ENV_PREFIX, level)
        level = DEFAULT_LOG_LEVEL

    manager = _env("PACKAGE_MANAGER")

    return Settings(
        log_level=level,
        command_timeout=_int_env("COMMAND_TIMEOUT", DEFAULT_COMMAND_TIMEOUT),
        probe_timeout=_int_env("PROBE_TIMEOUT", DEFAULT_PROBE_TIMEOUT),
        use_sudo=_bool_env("USE_SUDO", True),
        package_manager=manager.lower() if manager else None,
    )
