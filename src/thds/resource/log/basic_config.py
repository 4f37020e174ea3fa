"""Default console logging for this library. By importing thds.resource.log, you import
and 'use' this configuration, unless the application has already configured logging.
"""

import logging
import logging.config
import os
import typing as ty

from .. import config
from .kw_formatter import ThdsCompactFormatter
from .kw_logger import LOGLEVEL, getLogger, make_formatters_safe

_LOGLEVELS_FILEPATH = config.item(
    "thds.resource.log.levels_file", "", parse=lambda s: str(s).strip()
)
# see _parse_loglevels_file for the format of this file.

_BASE_LOG_CONFIG: ty.Dict[str, ty.Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {"default": {"()": ThdsCompactFormatter}},
    "handlers": {"console": {"class": "logging.StreamHandler", "formatter": "default"}},
    "root": {"handlers": ["console"]},
}


def set_logger_to_console_level(config: dict, logger_name: str, level: int) -> dict:
    if logger_name == "*":
        if level != LOGLEVEL():
            getLogger(__name__).warning(f"Setting root logger to {logging.getLevelName(level)}")
        return dict(config, root=dict(config["root"], level=level))
    loggers = config.get("loggers") or dict()
    # propagate=False keeps records from being emitted twice by the root handler.
    loggers = {**loggers, logger_name: {"level": level, "handlers": ["console"], "propagate": False}}
    return dict(config, loggers=loggers)


def _parse_loglevels_file(filepath: str) -> ty.Iterator[ty.Tuple[str, int]]:
    """Example levels file:

    ```
    [debug]
    thds.resource.url

    [warning]
    *
    # the * sets the root logger.
    ```

    The last value encountered for any given logger wins.
    """
    current_level = LOGLEVEL()
    if not filepath or not os.path.exists(filepath):
        return
    with open(filepath) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("[") and line.endswith("]"):
                # AttributeError means invalid level
                current_level = getattr(logging, line[1:-1].upper())
                continue
            yield line, current_level


def configure() -> None:
    if logging.getLogger().hasHandlers():
        return
    live_config = _BASE_LOG_CONFIG
    for logger_name, level in _parse_loglevels_file(_LOGLEVELS_FILEPATH()):
        live_config = set_logger_to_console_level(live_config, logger_name, level)
    logging.config.dictConfig(live_config)
    make_formatters_safe(logging.getLogger())


configure()
