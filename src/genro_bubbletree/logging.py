# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Structured logging configuration using structlog."""

from __future__ import annotations

import logging
import sys

import structlog

from .config import Settings


def configure_logging(debug: bool | None = None) -> None:
    """Configure structlog for JSON output.

    The library only logs through structlog and never calls this itself;
    applications opt in.

    Args:
        debug: Enable debug-level logging when True. If None, the value
            of Settings().debug (BUBBLETREE_DEBUG) is used.
    """
    if debug is None:
        debug = Settings().debug
    level = logging.DEBUG if debug else logging.INFO

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
