"""Root logger setup shared by the service, the web server and the fetch CLI."""

from __future__ import annotations

import json
import logging
import sys

_HANDLER_NAME = "newswire"

_JSON_FIELDS = {
    "time": "%(asctime)s",
    "level": "%(levelname)s",
    "logger": "%(name)s",
    "thread": "%(threadName)s",
    "message": "%(message)s",
}
_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(threadName)s): %(message)s"


def setup_logging(log_level: str, log_format: str) -> None:
    """Install the newswire stderr handler on the root logger.

    Calling it again replaces the handler installed by the previous call, so
    the CLI and tests can set up logging repeatedly without duplicate lines.
    Page continuations run on scheduler worker threads, hence the thread name
    in both formats.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format == "json":
        formatter = logging.Formatter(json.dumps(_JSON_FIELDS))
    else:
        formatter = logging.Formatter(_TEXT_FORMAT)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    root.setLevel(level)
    root.addHandler(handler)
