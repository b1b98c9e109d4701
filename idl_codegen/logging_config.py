"""Logging setup shared by the package.

Modules obtain their logger through :func:`get_logger`; the CLI calls
:func:`setup_logging` once to attach a rich console handler.
"""

import logging

from rich.logging import RichHandler

PACKAGE_LOGGER = "idl_codegen"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the package logger.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Logger instance.
    """
    if not name.startswith(PACKAGE_LOGGER):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def setup_logging(level: str | int = "WARNING", log_file: str | None = None) -> None:
    """Configure package logging.

    Args:
        level: Log level name or number.
        log_file: Optional file that receives a plain-text copy of the log.
    """
    global _configured

    if isinstance(level, str):
        numeric_level = logging.getLevelName(level.upper())
        if not isinstance(numeric_level, int):
            raise ValueError(f"Unknown log level: {level}")
        level = numeric_level

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    if not _configured:
        console_handler = RichHandler(
            show_time=False, show_path=False, rich_tracebacks=True
        )
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            )
            logger.addHandler(file_handler)

        logger.propagate = False
        _configured = True

    logger.debug("Logging configured at level %s", logging.getLevelName(level))
