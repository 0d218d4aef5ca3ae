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

"""Structured error system for commitkit.

Every error has a unique ``CK-NAMED-KEY`` code, a human-readable message,
and an optional hint with a suggested fix.

Key Concepts (ELI5)::

    ┌─────────────────────┬────────────────────────────────────────────────┐
    │ Concept             │ ELI5 Explanation                               │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ ErrorCode           │ A unique named ID like "CK-CONFIG-NOT-FOUND"  │
    │                     │ for each error. Readable at a glance.         │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ ErrorInfo           │ A bundle of code + message + hint. Like an    │
    │                     │ error card with a fix suggestion stapled on.  │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ CommitKitError      │ An exception you can raise. Carries the       │
    │                     │ error card so renderers can display it.       │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ ERRORS catalog      │ Pre-built error cards for common mistakes.    │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ explain()           │ Looks up an error code and prints details.    │
    └─────────────────────┴────────────────────────────────────────────────┘

Code categories::

    CK-CONFIG-*       Configuration errors
    CK-VERSION-*      Version parsing and bump errors
    CK-COMMIT-*       Commit message grammar failures
    CK-BRANCH-*       Branch name validation failures
    CK-INPUT-*        Unreadable commit message input

Parse and validation failures are normally returned as values (see
:class:`~commitkit.commit_parsing.ParseFailure` and
:class:`~commitkit.branch.ValidationFailure`); their ``to_error()``
method converts them to a :class:`CommitKitError` when a caller wants
to hard-fail.

Usage::

    from commitkit.errors import CommitKitError, E

    raise CommitKitError(
        code=E.VERSION_INVALID,
        message="Version '1.x' is not valid (expected X.Y.Z)",
        hint='Use a version string like "1.2.3" (MAJOR.MINOR.PATCH).',
    )
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from rich.console import Console
from rich.markup import escape as rich_escape


class ErrorCode(str, Enum):
    """Enumeration of all commitkit diagnostic codes.

    Each code maps to a unique ``CK-NAMED-KEY`` identifier. Use these
    constants instead of raw strings when raising :class:`CommitKitError`.
    """

    # Configuration
    CONFIG_NOT_FOUND = 'CK-CONFIG-NOT-FOUND'
    CONFIG_PARSE_ERROR = 'CK-CONFIG-PARSE-ERROR'
    CONFIG_INVALID_KEY = 'CK-CONFIG-INVALID-KEY'
    CONFIG_INVALID_VALUE = 'CK-CONFIG-INVALID-VALUE'

    # Versioning
    VERSION_INVALID = 'CK-VERSION-INVALID'
    VERSION_INCONSISTENT = 'CK-VERSION-INCONSISTENT'

    # Commit message grammar
    COMMIT_UNKNOWN_TYPE = 'CK-COMMIT-UNKNOWN-TYPE'
    COMMIT_MALFORMED_HEADER = 'CK-COMMIT-MALFORMED-HEADER'
    COMMIT_MALFORMED_FOOTER = 'CK-COMMIT-MALFORMED-FOOTER'

    # Branch names
    BRANCH_UNKNOWN_CATEGORY = 'CK-BRANCH-UNKNOWN-CATEGORY'
    BRANCH_INVALID_SLUG = 'CK-BRANCH-INVALID-SLUG'
    BRANCH_MISSING_SEPARATOR = 'CK-BRANCH-MISSING-SEPARATOR'

    # Input
    INPUT_UNREADABLE = 'CK-INPUT-UNREADABLE'


# Convenience alias for shorter imports.
E = ErrorCode


@dataclass(frozen=True)
class ErrorInfo:
    """Metadata for a single error code.

    Attributes:
        code: The ``CK-NAMED-KEY`` error code.
        message: Human-readable description of what went wrong.
        hint: Optional suggestion for how to fix the error.
    """

    code: ErrorCode
    message: str
    hint: str = ''


class CommitKitError(Exception):
    """Base exception for all commitkit errors.

    Carries structured diagnostic information (code, message, hint) that
    can be rendered as a rich terminal message or structured JSON.

    Args:
        code: The error code from :class:`ErrorCode`.
        message: Human-readable description of what went wrong.
        hint: Optional suggestion for how to fix the error.
    """

    def __init__(self, code: ErrorCode, message: str, hint: str = '') -> None:
        """Initialize with an error code, message, and optional hint."""
        self.info = ErrorInfo(code=code, message=message, hint=hint)
        super().__init__(f'[{code.value}] {message}')

    @property
    def code(self) -> ErrorCode:
        """The error code."""
        return self.info.code

    @property
    def hint(self) -> str:
        """Suggestion for fixing this error, or empty string."""
        return self.info.hint


ERRORS: dict[ErrorCode, ErrorInfo] = {
    E.CONFIG_NOT_FOUND: ErrorInfo(
        code=E.CONFIG_NOT_FOUND,
        message='The configuration file passed with --config does not exist.',
        hint='Check the path, or omit --config to use commitkit.toml in the current directory.',
    ),
    E.CONFIG_INVALID_KEY: ErrorInfo(
        code=E.CONFIG_INVALID_KEY,
        message='commitkit.toml contains a key commitkit does not recognize.',
        hint='Valid keys: types, type_impact, pre_one_zero_major_bumps_minor, '
        'include_breaking_in_type_group, branch_categories, skip_release_patterns, section_headings.',
    ),
    E.VERSION_INVALID: ErrorInfo(
        code=E.VERSION_INVALID,
        message='A version string is not of the form MAJOR.MINOR.PATCH.',
        hint='Use three non-negative integers, e.g. "1.2.3" (a leading "v" is accepted).',
    ),
    E.VERSION_INCONSISTENT: ErrorInfo(
        code=E.VERSION_INCONSISTENT,
        message='The version calculator received a value that is not a ChangeImpact.',
        hint='This is a bug in the caller; impacts must come from classify().',
    ),
    E.COMMIT_UNKNOWN_TYPE: ErrorInfo(
        code=E.COMMIT_UNKNOWN_TYPE,
        message='The commit type is not in the configured set of types.',
        hint='Use one of the enabled types (feat, fix, docs, ...) or enable it under [types] in commitkit.toml.',
    ),
    E.COMMIT_MALFORMED_HEADER: ErrorInfo(
        code=E.COMMIT_MALFORMED_HEADER,
        message='The first line is not of the form "type(scope)!: description".',
        hint='Write e.g. "fix(parser): handle empty input", followed by a blank line before any body.',
    ),
    E.COMMIT_MALFORMED_FOOTER: ErrorInfo(
        code=E.COMMIT_MALFORMED_FOOTER,
        message='The trailing footer paragraph contains a line that is not a footer.',
        hint='Separate the body from footers ("TOKEN: value" / "TOKEN #value") with a blank line.',
    ),
    E.BRANCH_UNKNOWN_CATEGORY: ErrorInfo(
        code=E.BRANCH_UNKNOWN_CATEGORY,
        message='The branch category before "/" is not a configured category.',
        hint='Use e.g. feature/, bugfix/, hotfix/, release/, docs/, refactor/, test/ or chore/.',
    ),
    E.BRANCH_INVALID_SLUG: ErrorInfo(
        code=E.BRANCH_INVALID_SLUG,
        message='The branch slug is not lowercase words separated by single hyphens.',
        hint='Example: feature/add-login',
    ),
    E.BRANCH_MISSING_SEPARATOR: ErrorInfo(
        code=E.BRANCH_MISSING_SEPARATOR,
        message='The branch name has no "/" between category and slug.',
        hint='Name branches "category/slug", e.g. bugfix/null-config.',
    ),
    E.INPUT_UNREADABLE: ErrorInfo(
        code=E.INPUT_UNREADABLE,
        message='A commit message file could not be read as UTF-8 text.',
        hint='Check that the path exists and is readable. git writes commit messages as UTF-8.',
    ),
}


def explain(code: str) -> str | None:
    """Return a detailed explanation for an error code.

    Args:
        code: The error code string, e.g. ``"CK-CONFIG-NOT-FOUND"``.

    Returns:
        A formatted explanation string, or ``None`` if the code is unknown.
    """
    try:
        error_code = ErrorCode(code)
    except ValueError:
        return None

    info = ERRORS.get(error_code)
    if info is None:
        return f'{code}: No detailed explanation available.'

    lines = [f'{code}: {info.message}']
    if info.hint:
        lines.append(f'  Hint: {info.hint}')
    return '\n'.join(lines)


def render_error(exc: CommitKitError, *, file: TextIO | None = None) -> None:
    """Render an error in Rust-compiler style with color.

    Output format::

        error[CK-COMMIT-UNKNOWN-TYPE]: Unknown commit type 'feature'.
          |
          = hint: Use one of the enabled types.

    Args:
        exc: The error to render.
        file: Output stream (defaults to ``sys.stderr``).
    """
    out = file or sys.stderr

    if out.isatty():
        console = Console(file=out, highlight=False)
        msg = rich_escape(exc.info.message)
        console.print(
            f'[bold red]error[/bold red][bold red]\\[{exc.code.value}][/bold red][bold]: {msg}[/bold]',
        )
        if exc.hint:
            hint = rich_escape(exc.hint)
            console.print('  [dim]|[/dim]')
            console.print(f'  [dim]=[/dim] [cyan]hint[/cyan]: {hint}')
        console.print()
    else:
        print(f'error[{exc.code.value}]: {exc.info.message}', file=out)  # noqa: T201 - CLI output
        if exc.hint:
            print('  |', file=out)  # noqa: T201 - CLI output
            print(f'  = hint: {exc.hint}', file=out)  # noqa: T201 - CLI output
        print(file=out)  # noqa: T201 - CLI output


__all__ = [
    'E',
    'ERRORS',
    'CommitKitError',
    'ErrorCode',
    'ErrorInfo',
    'explain',
    'render_error',
]
