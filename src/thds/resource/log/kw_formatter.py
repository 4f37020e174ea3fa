"""The compact keyword-aware formatter, installed by default via basic_config."""

import logging
import typing as ty

from .. import ansi_esc, config
from .kw_logger import keyvals_from_record

MAX_MODULE_NAME_LEN = config.item("thds.resource.log.max_module_name_len", 40, parse=int)


def log_level_color(levelno: int, base_levelname: str) -> str:
    if levelno < logging.INFO:
        return ansi_esc.colored(base_levelname.lower(), ansi_esc.fg.BLUE)
    if levelno < logging.WARNING:
        return ansi_esc.colored(base_levelname.lower(), ansi_esc.fg.GREEN)
    if levelno < logging.ERROR:
        return ansi_esc.colored(base_levelname, ansi_esc.fg.YELLOW, bright=True)
    return ansi_esc.colored(base_levelname, ansi_esc.bg.ERROR_RED, bright=True)


class ThdsCompactFormatter(logging.Formatter):
    """One line per record: time, colored level, compressed module name, keyword context, message."""

    @staticmethod
    def format_module_name(name: str) -> str:
        max_len = MAX_MODULE_NAME_LEN()
        if len(name) <= max_len:
            compressed = name
        else:
            compressed = name[: max_len // 2 - 2] + "..." + name[-max_len // 2 + 1 :]
        assert len(compressed) <= max_len
        return compressed.ljust(max_len)

    def _format_exception_and_trace(self, record: logging.LogRecord) -> str:
        formatted = ""
        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            formatted += "\n" + record.exc_text
        if record.stack_info:
            formatted += "\n" + self.formatStack(record.stack_info)
        return formatted

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        levelname = log_level_color(record.levelno, f"{record.levelname:7}")
        kw_ctx: ty.Any = keyvals_from_record(record) or "()"
        short_name = self.format_module_name(record.name)
        formatted = f"{self.formatTime(record)} {levelname}  {short_name} {kw_ctx} {record.message}"
        return formatted + self._format_exception_and_trace(record)
