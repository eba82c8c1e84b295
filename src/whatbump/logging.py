# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""Structured logging for whatbump.

Every decision whatbump makes is logged as a `structlog
<https://www.structlog.org/>`_ event on stderr, so stdout carries only
the bump or version (``whatbump detect --from 1.4.2 < log.txt``).

Events::

    ┌──────────────────────┬─────────┬───────────────────────────────────────┐
    │ Event                │ Level   │ Fields                                │
    ├──────────────────────┼─────────┼───────────────────────────────────────┤
    │ commit_classified    │ debug   │ type, scope, bump                     │
    │ commit_skipped       │ warning │ index, code, reason, header           │
    │ strict_parse_failure │ error   │ index, code                           │
    │ empty_history        │ info    │ bump                                  │
    │ bump_decided         │ info    │ bump, commits, skipped                │
    │ no_whatbump_config   │ debug   │ path                                  │
    │ config_loaded        │ debug   │ path, types, default_level, strict    │
    │ interrupted          │ info    │                                       │
    └──────────────────────┴─────────┴───────────────────────────────────────┘

``--verbose`` shows every ``commit_classified`` line, which explains why
a history bumped the way it did. ``--quiet`` keeps only skipped commits
and failures. ``--json-log`` renders one JSON object per event for CI
log collectors.

The ``WHATBUMP_LOG_LEVEL`` environment variable (``debug``, ``info``,
``warning``, ``error``) overrides the level chosen by the flags, e.g.
to debug a git hook whose command line cannot be changed.

Usage::

    from whatbump.logging import configure_logging, get_logger

    configure_logging(verbose=True)
    log = get_logger(__name__)
    log.info('bump_decided', bump='Minor', commits=3, skipped=0)
"""

from __future__ import annotations

import logging
import os
import sys

import structlog

LOG_LEVEL_ENV = 'WHATBUMP_LOG_LEVEL'

_LEVELS: dict[str, int] = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warning': logging.WARNING,
    'error': logging.ERROR,
}


def _resolve_level(*, verbose: bool, quiet: bool) -> int:
    override = os.environ.get(LOG_LEVEL_ENV, '').strip().lower()
    if override in _LEVELS:
        return _LEVELS[override]
    if quiet:
        return logging.WARNING
    if verbose:
        return logging.DEBUG
    return logging.INFO


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool = False,
) -> None:
    """Route whatbump's decision events to stderr.

    The CLI calls this once per run from its global flags. Calling it
    again reconfigures the root handler.

    Args:
        verbose: Also show ``commit_classified`` and config events.
        quiet: Only ``commit_skipped`` and failures. Wins over ``verbose``.
        json_log: Render JSON lines instead of console output.
    """
    level = _resolve_level(verbose=verbose, quiet=quiet)

    logging.basicConfig(
        format='%(message)s',
        stream=sys.stderr,
        level=level,
        force=True,
    )

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_log:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    for handler in logging.root.handlers:
        handler.setFormatter(formatter)


def get_logger(name: str = 'whatbump') -> structlog.stdlib.BoundLogger:
    """Return a bound structlog logger named ``name``."""
    return structlog.get_logger(name)


__all__ = [
    'LOG_LEVEL_ENV',
    'configure_logging',
    'get_logger',
]
