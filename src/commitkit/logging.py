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

"""Structured logging for commitkit.

Configures `structlog <https://www.structlog.org/>`_ on top of the stdlib
root logger. Output always goes to stderr, so stdout stays clean for
piped output (e.g. ``commitkit bump 1.2.3 --format json | jq .next_version``).

Two renderers:

- **Console** (default): short ``event key=value`` lines, colored when
  stderr is a TTY. No timestamps; these lines usually end up in a
  ``commit-msg`` hook transcript.
- **JSON** (``--json-log``): one timestamped object per line, for CI
  log scrapers.

Each CLI invocation runs inside :func:`run_context`, which tags every
event with the subcommand; :func:`bind_config_path` adds the config file
once it has been loaded::

    {"command": "bump", "config_path": "commitkit.toml",
     "event": "release_planned", "level": "info", ...}

The grammar, classification, versioning, branch and changelog modules
never log; only the config loader, the release planner and the CLI do.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import structlog


def _level(*, verbose: bool, quiet: bool) -> int:
    """Map the CLI flags to a stdlib level; ``quiet`` wins."""
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
    """Configure structlog for commitkit.

    Safe to call more than once; the last call wins.

    Args:
        verbose: Enable debug-level output.
        quiet: Only warnings and errors.
        json_log: Emit JSON lines instead of console output.
    """
    logging.basicConfig(
        format='%(message)s',
        stream=sys.stderr,
        level=_level(verbose=verbose, quiet=quiet),
        force=True,
    )

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]
    renderer: structlog.types.Processor
    if json_log:
        processors.append(structlog.processors.TimeStamper(fmt='iso'))
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )
    for handler in logging.root.handlers:
        handler.setFormatter(formatter)


@contextmanager
def run_context(command: str | None) -> Iterator[None]:
    """Tag every event logged inside the block with ``command``.

    Context left over from an earlier run is dropped first, and the
    context is cleared again on exit.
    """
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(command=command)
    try:
        yield
    finally:
        structlog.contextvars.clear_contextvars()


def bind_config_path(path: Path | None) -> None:
    """Add the loaded config file to the run context (no-op for defaults)."""
    if path is not None:
        structlog.contextvars.bind_contextvars(config_path=str(path))


def get_logger(name: str = 'commitkit') -> structlog.stdlib.BoundLogger:
    """Return a structlog logger named ``name``."""
    return structlog.get_logger(name)


__all__ = [
    'bind_config_path',
    'configure_logging',
    'get_logger',
    'run_context',
]
