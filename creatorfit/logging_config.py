"""
Structured logging configuration.

configure_logging() runs once from create_app(). LOG_FORMAT selects text or
single-line JSON; LOG_LEVEL defaults to INFO. Qualification code passes
creator_id / account_id through `extra=` so JSON lines can be filtered per creator.
"""
import json
import logging
import os
import sys
from datetime import datetime, timezone

# Attributes passed via `extra=` that are copied into JSON log lines
CONTEXT_FIELDS = ('creator_id', 'account_id', 'action')


class JSONFormatter(logging.Formatter):
    """Single-line JSON log formatter for log aggregators."""

    def format(self, record):
        entry = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value
        if record.exc_info and record.exc_info[0] is not None:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


# Third-party loggers that are chatty at INFO
NOISY_LOGGERS = [
    'urllib3',
    'requests',
    'sqlalchemy.engine',
    'alembic',
    'werkzeug',
]


def configure_logging(app=None):
    """
    Set up the root logger from LOG_LEVEL / LOG_FORMAT.

    Re-running replaces the handler instead of stacking a second one.
    """
    level_name = os.getenv('LOG_LEVEL', 'INFO').upper()
    level = getattr(logging, level_name, logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    log_format = os.getenv('LOG_FORMAT', 'text').lower()

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if log_format == 'json':
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            '[%(asctime)s] %(levelname)s %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
        ))

    root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if app is not None:
        app.logger.setLevel(level)
