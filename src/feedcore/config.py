#!/usr/bin/env python3
"""
Configuration for feedcore.

Configuration is an immutable value built once at process start (see
``load_config``) and passed explicitly to every component. Values come from
defaults, an optional ``.env`` file and ``FEEDCORE_*`` environment variables,
in increasing order of precedence.
"""

import os
import logging
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Dict, List, Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = 'FEEDCORE_'


@dataclass(frozen=True)
class SchedulerConfig:
    """Poll scheduling tunables."""
    update_min: timedelta = timedelta(minutes=30)
    update_max: timedelta = timedelta(hours=24)
    update_default: timedelta = timedelta(hours=3)
    update_jitter: timedelta = timedelta(minutes=5)
    # check somewhat more often than the observed cadence
    update_fraction: float = 0.5
    update_long_factor: float = 10.0
    new_interval_weight: float = 0.1
    not_viewed_after: timedelta = timedelta(days=21)


@dataclass(frozen=True)
class NormalizerConfig:
    """Story normalization limits."""
    max_key_length: int = 500
    snippet_length: int = 100


@dataclass(frozen=True)
class DateConfig:
    """Date resolution settings."""
    failure_buckets: int = 500


@dataclass(frozen=True)
class FetchConfig:
    """Settings for the default icon fetcher."""
    timeout: int = 10
    user_agent: str = "Mozilla/5.0 (compatible; feedcore/1.0)"


@dataclass(frozen=True)
class Config:
    """Master configuration container."""
    scheduler: SchedulerConfig = field(default_factory=SchedulerConfig)
    normalizer: NormalizerConfig = field(default_factory=NormalizerConfig)
    dates: DateConfig = field(default_factory=DateConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    log_level: str = "INFO"
    verbose_logging: bool = False


def load_env_file(env_path: Path, environ: Optional[Dict[str, str]] = None) -> int:
    """
    Merge ``FEEDCORE_*`` settings from a .env file into ``environ``.

    Keys already set win over the file. Other keys are ignored.

    Args:
        env_path: File of KEY=VALUE lines
        environ: Mapping to fill (defaults to ``os.environ``)

    Returns:
        Number of settings taken from the file
    """
    if environ is None:
        environ = os.environ
    if not env_path.is_file():
        logger.debug(f"No .env file found at {env_path}")
        return 0

    loaded = 0
    for line_num, line in enumerate(env_path.read_text(encoding='utf-8').splitlines(), 1):
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        key, sep, value = line.partition('=')
        if not sep:
            logger.warning(f"Ignoring line {line_num} of {env_path}: no '='")
            continue

        key = key.strip()
        value = value.strip().strip('"\'')
        if key.startswith(ENV_PREFIX) and key not in environ:
            environ[key] = value
            loaded += 1

    logger.debug(f"Took {loaded} settings from {env_path}")
    return loaded


def _env(key: str, default: str, environ: Dict[str, str]) -> str:
    return environ.get(ENV_PREFIX + key, default)


def _seconds(key: str, default: timedelta, environ: Dict[str, str]) -> timedelta:
    raw = _env(key, '', environ)
    if not raw:
        return default
    try:
        return timedelta(seconds=float(raw))
    except ValueError:
        raise ConfigurationError(ENV_PREFIX + key, f"expected seconds, got {raw!r}")


def _number(key: str, default, environ: Dict[str, str], kind=float):
    raw = _env(key, '', environ)
    if not raw:
        return default
    try:
        return kind(raw)
    except ValueError:
        raise ConfigurationError(ENV_PREFIX + key, f"expected {kind.__name__}, got {raw!r}")


def build_config(environ: Optional[Dict[str, str]] = None) -> Config:
    """
    Build and validate configuration from environment variables.

    Args:
        environ: Mapping to read from (defaults to ``os.environ``)

    Returns:
        Validated, immutable configuration

    Raises:
        ConfigurationError: If any value is malformed or out of range
    """
    if environ is None:
        environ = dict(os.environ)

    defaults = SchedulerConfig()
    scheduler = SchedulerConfig(
        update_min=_seconds('UPDATE_MIN', defaults.update_min, environ),
        update_max=_seconds('UPDATE_MAX', defaults.update_max, environ),
        update_default=_seconds('UPDATE_DEFAULT', defaults.update_default, environ),
        update_jitter=_seconds('UPDATE_JITTER', defaults.update_jitter, environ),
        update_fraction=_number('UPDATE_FRACTION', defaults.update_fraction, environ),
        update_long_factor=_number('UPDATE_LONG_FACTOR', defaults.update_long_factor, environ),
        new_interval_weight=_number('NEW_INTERVAL_WEIGHT', defaults.new_interval_weight, environ),
        not_viewed_after=_seconds('NOT_VIEWED_AFTER', defaults.not_viewed_after, environ),
    )
    normalizer = NormalizerConfig(
        max_key_length=_number('MAX_KEY_LENGTH', NormalizerConfig.max_key_length, environ, int),
        snippet_length=_number('SNIPPET_LENGTH', NormalizerConfig.snippet_length, environ, int),
    )
    dates = DateConfig(
        failure_buckets=_number('DATE_FAILURE_BUCKETS', DateConfig.failure_buckets, environ, int),
    )
    fetch = FetchConfig(
        timeout=_number('FETCH_TIMEOUT', FetchConfig.timeout, environ, int),
        user_agent=_env('USER_AGENT', FetchConfig.user_agent, environ),
    )

    config = Config(
        scheduler=scheduler,
        normalizer=normalizer,
        dates=dates,
        fetch=fetch,
        log_level=_env('LOG_LEVEL', 'INFO', environ).upper(),
        verbose_logging=_env('VERBOSE_LOGGING', 'false', environ).lower() == 'true',
    )

    validate_config(config)
    return config


def validate_config(config: Config) -> None:
    """Validate configuration values, reporting every problem at once."""
    errors: List[str] = []
    s = config.scheduler

    if s.update_min <= timedelta(0):
        errors.append("UPDATE_MIN must be positive")
    if s.update_max < s.update_min:
        errors.append("UPDATE_MAX must not be less than UPDATE_MIN")
    if s.update_default <= timedelta(0):
        errors.append("UPDATE_DEFAULT must be positive")
    if s.update_jitter < timedelta(0):
        errors.append("UPDATE_JITTER must not be negative")
    elif s.update_jitter >= s.update_min:
        errors.append("UPDATE_JITTER must be less than UPDATE_MIN")
    if not 0 < s.update_fraction <= 1:
        errors.append("UPDATE_FRACTION must be in (0, 1]")
    if s.update_long_factor <= 0:
        errors.append("UPDATE_LONG_FACTOR must be positive")
    if not 0 < s.new_interval_weight < 1:
        errors.append("NEW_INTERVAL_WEIGHT must be in (0, 1)")

    if config.normalizer.max_key_length < 1:
        errors.append("MAX_KEY_LENGTH must be at least 1")
    if config.normalizer.snippet_length < 1:
        errors.append("SNIPPET_LENGTH must be at least 1")
    if config.dates.failure_buckets < 1:
        errors.append("DATE_FAILURE_BUCKETS must be at least 1")
    if config.fetch.timeout < 1:
        errors.append("FETCH_TIMEOUT must be at least 1 second")

    valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
    if config.log_level not in valid_log_levels:
        errors.append(f"LOG_LEVEL must be one of: {', '.join(valid_log_levels)}")

    if errors:
        raise ConfigurationError('FEEDCORE', '; '.join(errors))

    logger.debug("Configuration validation passed")


def load_config(env_file: Optional[str] = ".env") -> Config:
    """
    Load configuration once at process start.

    Args:
        env_file: Optional .env file path, relative to the working directory

    Returns:
        Immutable configuration
    """
    environ = dict(os.environ)
    if env_file:
        load_env_file(Path(env_file), environ)
    return build_config(environ)


def setup_logging(level: str = "INFO", verbose: bool = False) -> None:
    """Configure root logging for command-line use."""
    if verbose:
        format_str = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
    else:
        format_str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=format_str,
        datefmt='%Y-%m-%d %H:%M:%S'
    )
