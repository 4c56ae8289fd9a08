"""Package logger. Every record carries the id of the current process run."""
from __future__ import annotations
import logging
import sys
import uuid
from crewtime.config import settings

_RUN_ID = uuid.uuid4().hex[:12]


def get_run_id() -> str:
    return _RUN_ID


class _RunIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _RUN_ID
        return True


def _build_logger() -> logging.Logger:
    log = logging.getLogger("crewtime")
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.addFilter(_RunIdFilter())
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s [%(run_id)s] %(name)s: %(message)s"
        ))
        log.addHandler(handler)
    log.setLevel(settings.LOG_LEVEL.upper())
    return log


logger = _build_logger()
