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

"""Structured logging for spdxrdf.

Configures `structlog <https://www.structlog.org/>`_ with two output modes:

- **Console** (default): colored when stderr is a TTY, human-readable.
- **JSON** (``json_log=True``): one JSON object per line.

Both modes write to stderr.  License texts and templates can run to
many kilobytes, so a processor shortens long string values before they
reach the renderer.

Usage::

    from spdxrdf.logging import configure_logging, get_logger

    configure_logging(verbose=True)
    log = get_logger(__name__)
    log.debug('license_node_reused', license_id='MIT')
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

# Longest string value emitted in a log event; longer values are cut.
_DEFAULT_VALUE_LIMIT = 200
_ELLIPSIS = '...'

# Populated by configure_logging(); used by the processor.
_value_limit: int = _DEFAULT_VALUE_LIMIT


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool = False,
    value_limit: int = _DEFAULT_VALUE_LIMIT,
) -> None:
    """Configure structlog for spdxrdf.

    Should be called once at startup, before any logging calls.

    Args:
        verbose: Enable debug-level output.
        quiet: Suppress info-level output (only warnings and errors).
        json_log: Use JSON output instead of console output.
        value_limit: Maximum length of string values in log events.
            ``0`` disables truncation.
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        format='%(message)s',
        stream=sys.stderr,
        level=level,
        force=True,
    )

    global _value_limit  # noqa: PLW0603
    _value_limit = value_limit

    shared_processors: list[structlog.types.Processor] = [  # type: ignore[assignment]
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        truncate_long_values,
    ]

    if json_log:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
        )

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


def get_logger(name: str = 'spdxrdf') -> structlog.stdlib.BoundLogger:
    """Return a bound structlog logger.

    Args:
        name: Logger name, used for filtering and identification.

    Returns:
        A :class:`structlog.stdlib.BoundLogger` instance.
    """
    return structlog.get_logger(name)


def _shorten(value: object, limit: int) -> object:
    """Cut a string value to *limit* characters, marking the cut."""
    if not isinstance(value, str) or limit <= 0 or len(value) <= limit:
        return value
    return value[: max(limit - len(_ELLIPSIS), 0)] + _ELLIPSIS


def truncate_long_values(
    logger: Any,  # noqa: ANN401
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Structlog processor: shorten long string values in an event.

    The ``event`` key itself is never shortened.
    """
    if _value_limit <= 0:
        return event_dict
    return {k: v if k == 'event' else _shorten(v, _value_limit) for k, v in event_dict.items()}


__all__ = [
    'configure_logging',
    'get_logger',
    'truncate_long_values',
]
