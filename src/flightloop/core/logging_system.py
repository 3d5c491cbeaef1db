"""Logging setup for FlightLoop.

All modules obtain their logger through ``get_logger(__name__)`` so that a
single call to ``initialize_logging`` configures the whole application.
Configuration is a standard ``logging.config.dictConfig`` document stored
as YAML.

Typical usage example:
    from flightloop.core.logging_system import get_logger, initialize_logging

    initialize_logging("config/logging.yaml")
    logger = get_logger(__name__)
    logger.info("Simulation started")
"""

import logging
import logging.config
from pathlib import Path

import yaml

ROOT_LOGGER_NAME = "flightloop"
DEFAULT_LOG_DIR = Path.home() / ".flightloop" / "logs"
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_initialized = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module.

    Args:
        name: Logger name, usually ``__name__``.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)


def initialize_logging(
    config_path: str | None = None,
    use_platform_dir: bool = False,
    level: int = logging.INFO,
) -> None:
    """Configure logging from a YAML file or with defaults.

    Args:
        config_path: Path to a YAML dictConfig file. Defaults are used when
            None or when the file cannot be read.
        use_platform_dir: Whether file handlers write into the per-user
            log directory (``~/.flightloop/logs``) instead of the working
            directory.
        level: Root level for the default configuration.
    """
    global _initialized

    log_dir = DEFAULT_LOG_DIR if use_platform_dir else Path("logs")

    if config_path and Path(config_path).exists():
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
        _redirect_file_handlers(config, log_dir)
        logging.config.dictConfig(config)
    else:
        _configure_defaults(log_dir, level)

    _initialized = True
    get_logger(ROOT_LOGGER_NAME).debug("Logging initialized (config=%s)", config_path)


def is_initialized() -> bool:
    """Whether ``initialize_logging`` has been called."""
    return _initialized


def _redirect_file_handlers(config: dict, log_dir: Path) -> None:
    """Place relative file handler paths inside the log directory."""
    for handler in config.get("handlers", {}).values():
        filename = handler.get("filename")
        if filename and not Path(filename).is_absolute():
            log_dir.mkdir(parents=True, exist_ok=True)
            handler["filename"] = str(log_dir / filename)


def _configure_defaults(log_dir: Path, level: int) -> None:
    """Console logging plus a file handler when the directory is writable."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / "flightloop.log", encoding="utf-8"))
    except OSError:
        pass  # Console only

    logging.basicConfig(level=level, format=DEFAULT_FORMAT, handlers=handlers, force=True)
