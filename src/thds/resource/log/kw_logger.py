"""A logger which allows passing arbitrary keyword arguments at the end of a logger call,
so that the context gets embedded directly into the formatted output.
"""

import contextlib
import logging
from copy import copy
from typing import Any, Dict, Iterator, MutableMapping, Optional

from .. import config
from ..stack_context import StackContext

LOGLEVEL = config.item("thds.resource.log.level", logging.INFO, parse=logging.getLevelName)
_LOGGING_KWARGS = ("exc_info", "stack_info", "stacklevel", "extra")
# the officially accepted keyword arguments for a logging call; passed through untouched.

KW_REC_CTXT = "kw_context"
# names a nested dict on LogRecords; usable as a field specifier in log format strings.


class _KwContext(Dict[str, Any]):
    def __str__(self):
        return "(" + ",".join(f"{k}={v!r}" for k, v in self.items()) + ")"


_LOG_CONTEXT: StackContext[_KwContext] = StackContext("RESOURCE_LOG_CONTEXT", _KwContext())


@contextlib.contextmanager
def logger_context(**kwargs) -> Iterator[None]:
    """Put some key-value pairs into the keyword-based logger context."""
    with _LOG_CONTEXT.set(_KwContext(_LOG_CONTEXT(), **kwargs)):
        yield


def _embed_context(kwargs: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """Overlays logger keyword arguments onto the stack context and moves them all into
    the 'extra' dictionary, where formatters can find them.
    """
    kw_context = _LOG_CONTEXT()
    extra_keys = [k for k in kwargs if k not in _LOGGING_KWARGS]
    if extra_keys:
        kw_context = copy(kw_context)
        kw_context.update((k, kwargs.pop(k)) for k in extra_keys)
    extra = kwargs["extra"] = kwargs.get("extra", dict())
    extra[KW_REC_CTXT] = kw_context
    return kwargs


class KwLogger(logging.LoggerAdapter):
    """Logs extra keyword arguments straight through without an 'extra' dictionary."""

    def process(self, msg, kwargs):
        return msg, _embed_context(kwargs)


def keyvals_from_record(record: logging.LogRecord) -> Optional[Dict[str, Any]]:
    return getattr(record, KW_REC_CTXT, None)


def getLogger(name: Optional[str] = None) -> logging.LoggerAdapter:
    """`logger.debug("opened", uri=uri, status=200)` renders the key-value pairs
    alongside the message. If you configure logging yourself, put a `%(kw_context)s`
    format specifier somewhere in your format string.
    """
    logger = logging.getLogger(name)
    if logger.level == logging.NOTSET:
        logger.setLevel(LOGLEVEL())
    return KwLogger(logger, dict())


def make_formatters_safe(logger: logging.Logger):
    """Records from non-adapted loggers may still reach a formatter that expects
    KW_REC_CTXT to be present on every LogRecord; this patches one in.
    """
    for handler in logger.handlers:
        formatter = handler.formatter
        if formatter and hasattr(formatter, "_style") and KW_REC_CTXT in formatter._style._fmt:
            fmt_msg = formatter.formatMessage

            def wrapper_formatMessage(record: logging.LogRecord):
                if getattr(record, KW_REC_CTXT, None) is None:
                    setattr(record, KW_REC_CTXT, _LOG_CONTEXT())
                return fmt_msg(record)  # noqa: B023

            setattr(formatter, "formatMessage", wrapper_formatMessage)  # noqa: B010
