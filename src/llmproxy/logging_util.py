"""Logging utilities.

Each handler stage logs as a numbered step so a failing invocation can be
located quickly in CloudWatch / the local console. Handlers are attached only
once, so the host's own logging setup wins if it got there first.
"""
from __future__ import annotations

import logging
import os

_DEFAULT_LEVEL = os.environ.get("LLMPROXY_LOG_LEVEL", "INFO").upper()

def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    logger.setLevel(_DEFAULT_LEVEL)

    h = logging.StreamHandler()
    fmt = logging.Formatter("[%(levelname)s] %(name)s:%(lineno)d - %(message)s")
    h.setFormatter(fmt)
    logger.addHandler(h)

    return logger

def log_step(logger: logging.Logger, step: str, msg: str):
    logger.info("[STEP %s] %s", step, msg)
