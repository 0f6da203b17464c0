import logging
import os
import sys

DEFAULT_LOG_LEVEL = logging.WARNING
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVEL_ENV_VAR = "DAM_LICENSE_LOG_LEVEL"


def _resolve_level(name: str, source: str) -> int:
    level_name = name.upper()
    if level_name and isinstance(getattr(logging, level_name, None), int):
        return getattr(logging, level_name)
    if level_name:
        # Printed rather than logged: logging is not configured yet.
        print(  # noqa: T201
            f"Warning: Invalid {source} '{name}'. Defaulting to {logging.getLevelName(DEFAULT_LOG_LEVEL)}.",
            file=sys.stderr,
        )
    return DEFAULT_LOG_LEVEL


def setup_logging(level: int | str | None = None) -> None:
    """
    Set up logging for the dam_license package.

    Args:
        level: The logging level to set. Can be an integer (e.g., logging.INFO),
               a string (e.g., "INFO"), or None. If None, it tries to get
               the level from the DAM_LICENSE_LOG_LEVEL environment variable,
               defaulting to DEFAULT_LOG_LEVEL.

    """
    if level is None:
        log_level = _resolve_level(os.environ.get(LOG_LEVEL_ENV_VAR, ""), LOG_LEVEL_ENV_VAR)
    elif isinstance(level, str):
        log_level = _resolve_level(level, "log level string")
    else:
        log_level = level

    app_logger = logging.getLogger("dam_license")
    app_logger.setLevel(log_level)

    # Handlers are rebuilt each time so they pick up the current sys.stderr,
    # which CliRunner swaps out during tests.
    for handler_to_remove in list(app_logger.handlers):
        app_logger.removeHandler(handler_to_remove)
        handler_to_remove.close()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    app_logger.addHandler(handler)
