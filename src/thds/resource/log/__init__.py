"""Keyword logger for thds.resource.

Keyword arguments added to log statements get rendered alongside the message, and
`logger_context` adds context to everything logged further down the stack:

```
logger = getLogger(__name__)
with logger_context(resource="file [/tmp/a.txt]"):
    logger.debug("opening", attempt=1)
# 2024-05-02 10:01:16,826 debug    thds.resource.file (resource='file [/tmp/a.txt]',attempt=1) opening
```
"""

from .basic_config import set_logger_to_console_level  # noqa: F401
from .kw_formatter import ThdsCompactFormatter  # noqa: F401
from .kw_logger import KwLogger, getLogger, logger_context, make_formatters_safe  # noqa: F401
