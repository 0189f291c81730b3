"""Logging setup for the moving map components.

Handlers are configured once per process from a YAML file (or built-in
defaults): a console handler and a combined log file in the platform log
directory. Individual components can get their own level under the
``components`` section of the logging config.

Platform-specific log locations:
    - macOS: ~/Library/Logs/MovingMap/movingmap.log
    - Linux: ~/.movingmap/logs/movingmap.log
    - Windows: %AppData%/MovingMap/Logs/movingmap.log

Typical usage example:
    from movingmap.core.logging_system import get_logger, initialize_logging

    initialize_logging("config/logging.yaml")
    log = get_logger("movingmap.navigation.cache")
    log.info("Cache built for %d legs", leg_count)
"""

import logging
import os
import platform
import time
from pathlib import Path
from typing import Any

import yaml

_logging_config: dict[str, Any] = {}
_loggers_cache: dict[str, logging.Logger] = {}
_initialized = False


class LoggingError(Exception):
    """Raised when logging system operations fail."""


def get_platform_log_dir() -> Path:
    """Get platform-specific log directory.

    Returns:
        Path to the platform-appropriate log directory.
    """
    system = platform.system()

    if system == "Darwin":
        return Path.home() / "Library" / "Logs" / "MovingMap"
    if system == "Windows":
        appdata = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return appdata / "MovingMap" / "Logs"
    return Path.home() / ".movingmap" / "logs"


def initialize_logging(config_path: str | Path | None = None, use_platform_dir: bool = True) -> None:
    """Initialize the logging system from YAML configuration.

    Args:
        config_path: Path to logging configuration YAML file.
            If None, uses default configuration.
        use_platform_dir: If True, write the log file to the platform log
            directory instead of the ``log_dir`` from the config.

    Raises:
        LoggingError: If the config file is missing or cannot be parsed.
    """
    global _logging_config, _initialized

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise LoggingError(f"Logging config file not found: {config_path}")
        try:
            with config_path.open("r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise LoggingError(f"Failed to load logging config: {e}") from e
        _logging_config = _get_default_config()
        _logging_config.update(loaded)
    else:
        _logging_config = _get_default_config()

    if use_platform_dir:
        _logging_config["log_dir"] = str(get_platform_log_dir())

    _configure_root_logger()
    _loggers_cache.clear()
    _initialized = True

    # Modules log through logging.getLogger(__name__); apply their overrides now.
    for name in _logging_config.get("components") or {}:
        get_logger(name)


def _get_default_config() -> dict[str, Any]:
    return {
        "level": "INFO",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "date_format": "%Y-%m-%d %H:%M:%S",
        "log_dir": "logs",
        "combined_log": {
            "enabled": True,
            "filename": "movingmap.log",
        },
        "console": {
            "enabled": True,
            "level": "INFO",
        },
        "components": {},
    }


def _configure_root_logger() -> None:
    """Configure the root logger with console and file handlers."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # filtered per handler
    root_logger.handlers.clear()

    console_config = _logging_config.get("console", {})
    if console_config.get("enabled", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(_level(console_config.get("level", "INFO")))
        console_handler.setFormatter(_get_formatter())
        root_logger.addHandler(console_handler)

    combined_config = _logging_config.get("combined_log", {})
    if combined_config.get("enabled", True):
        file_level = _level(_logging_config.get("level", "INFO"))
        log_dir = Path(_logging_config.get("log_dir", "logs"))
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(
            log_dir / combined_config.get("filename", "movingmap.log"),
            mode="w",
            encoding="utf-8",
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(_get_formatter())
        root_logger.addHandler(file_handler)


def _level(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    if not isinstance(level, int):
        raise LoggingError(f"Unknown log level: {name}")
    return level


class MillisecondFormatter(logging.Formatter):
    """Formatter that appends milliseconds with a dot separator."""

    def formatTime(self, record, datefmt=None):
        ct = self.converter(record.created)
        s = time.strftime(datefmt or "%Y-%m-%d %H:%M:%S", ct)
        return f"{s}.{int(record.msecs):03d}"


def _get_formatter() -> logging.Formatter:
    fmt = _logging_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    datefmt = _logging_config.get("date_format", "%Y-%m-%d %H:%M:%S")
    return MillisecondFormatter(fmt, datefmt)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a component.

    Loggers are cached. A component listed under ``components`` in the
    logging config can set its own ``level`` or be disabled with
    ``enabled: false``.

    Args:
        name: Logger name (typically the module ``__name__``).

    Returns:
        Configured logger instance.
    """
    if name in _loggers_cache:
        return _loggers_cache[name]

    logger = logging.getLogger(name)

    component_config = (_logging_config.get("components") or {}).get(name) or {}
    if component_config.get("enabled", True):
        if "level" in component_config:
            logger.setLevel(_level(component_config["level"]))
    else:
        logger.disabled = True

    _loggers_cache[name] = logger
    return logger


def is_initialized() -> bool:
    """Return True once initialize_logging has run."""
    return _initialized


def shutdown_logging() -> None:
    """Flush and close all handlers. Call at application shutdown."""
    global _initialized

    logging.shutdown()
    _loggers_cache.clear()
    _initialized = False
