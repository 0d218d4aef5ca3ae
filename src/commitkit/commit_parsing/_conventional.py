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

"""Conventional Commits parser.

Pure implementation: depends only on ``re`` and :mod:`._types`.
No I/O, no logging, no side effects.

Message layout::

    feat(auth)!: drop OAuth1 support          ← header
                                              ← blank separator
    OAuth1 was deprecated two releases ago.   ← body (any number of
    Callers must move to OAuth2.                paragraphs)
                                              ← blank separator
    BREAKING CHANGE: OAuth1 tokens rejected   ← footer block
    REFS #412

Only the last paragraph can hold footers. It is the footer block when
every line in it is footer-shaped, and plain body text when none is. A
last paragraph that mixes the two (prose glued above or below a footer,
a ``Signed-off-by:`` trailer, an indented continuation) is rejected, so
a ``BREAKING CHANGE`` footer is never mistaken for body text.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from commitkit.commit_parsing._types import (
    DEFAULT_COMMIT_TYPES,
    Footer,
    ParsedCommit,
    ParseFailure,
    ParseFailureKind,
)

# Header structure: type(scope)!:rest. The space after the colon and the
# description are checked separately so each gets its own reason.
HEADER_PATTERN: re.Pattern[str] = re.compile(
    r'^(?P<type>[A-Za-z][\w-]*)'  # type (e.g. feat, fix, chore)
    r'(?:\((?P<scope>[^()]*)\))?'  # optional scope in parens
    r'(?P<breaking>!)?'  # optional breaking change indicator
    r':(?P<rest>.*)$',  # colon, then " description"
)

# Footer line: "TOKEN: value" or "TOKEN #value".
FOOTER_PATTERN: re.Pattern[str] = re.compile(
    r'^(?P<token>BREAKING CHANGE|[A-Z][A-Z-]*)'
    r'(?P<separator>: | #)'
    r'(?P<value>\S.*)$',
)


def _trim_blank_lines(lines: list[str]) -> list[str]:
    """Drop blank lines from both ends of ``lines``."""
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end]


class ConventionalCommitParser:
    """Parser for `Conventional Commits <https://www.conventionalcommits.org/>`_.

    Args:
        types: The closed set of accepted commit types. Anything else
            yields a ``UNKNOWN_TYPE`` failure.
    """

    def __init__(self, types: Iterable[str] = DEFAULT_COMMIT_TYPES) -> None:
        """Freeze the accepted type set."""
        self.types: frozenset[str] = frozenset(types)

    def parse(self, raw: str, sha: str = '') -> ParsedCommit | ParseFailure:
        """Parse a full commit message.

        Args:
            raw: The commit message: header, then optional body and
                footers, each separated by a blank line.
            sha: The commit SHA (for reference).

        Returns:
            A :class:`ParsedCommit`, or a :class:`ParseFailure` with the
            kind of rule broken and a readable reason.
        """

        def fail(kind: ParseFailureKind, reason: str) -> ParseFailure:
            return ParseFailure(kind=kind, raw=raw, reason=reason, sha=sha)

        text = raw.replace('\r\n', '\n').strip()
        if not text:
            return fail(ParseFailureKind.MALFORMED_HEADER, 'Commit message is empty')

        lines = text.split('\n')
        header = lines[0].rstrip()

        match = HEADER_PATTERN.match(header)
        if not match:
            return fail(
                ParseFailureKind.MALFORMED_HEADER,
                "Header is not of the form 'type(scope): description' (missing ':' separator?)",
            )

        cc_type = match.group('type')
        scope = match.group('scope')
        rest = match.group('rest')

        if scope is not None:
            if not scope:
                return fail(ParseFailureKind.MALFORMED_HEADER, 'Scope in parentheses is empty')
            if any(ch.isspace() for ch in scope):
                return fail(ParseFailureKind.MALFORMED_HEADER, f'Scope {scope!r} contains whitespace')
        if not rest.startswith(' '):
            return fail(ParseFailureKind.MALFORMED_HEADER, "Missing space after ':' in header")
        description = rest.strip()
        if not description:
            return fail(ParseFailureKind.MALFORMED_HEADER, 'Description after ": " is empty')

        if cc_type not in self.types:
            return fail(
                ParseFailureKind.UNKNOWN_TYPE,
                f'Unknown commit type {cc_type!r} (expected one of: {", ".join(sorted(self.types))})',
            )

        remaining = lines[1:]
        if remaining and remaining[0].strip():
            return fail(ParseFailureKind.MALFORMED_HEADER, 'Header must be followed by a blank line')

        # The last paragraph starts after the last blank line.
        start = len(remaining)
        while start > 0 and remaining[start - 1].strip():
            start -= 1
        last_paragraph = remaining[start:]
        matches = [FOOTER_PATTERN.match(line.rstrip()) for line in last_paragraph]

        footer_matches: list[re.Match[str]] = []
        body_lines = remaining
        if any(matches):
            stray = next((line for line, m in zip(last_paragraph, matches) if m is None), None)
            if stray is not None:
                return fail(
                    ParseFailureKind.MALFORMED_FOOTER,
                    f'Line {stray.strip()!r} is not a footer but shares a paragraph with footers',
                )
            footer_matches = [m for m in matches if m is not None]
            body_lines = remaining[:start]

        footers = [
            Footer(token=m.group('token'), value=m.group('value'), separator=m.group('separator'))
            for m in footer_matches
        ]

        breaking = bool(match.group('breaking')) or any(f.is_breaking for f in footers)

        return ParsedCommit(
            type=cc_type,
            scope=scope or '',
            description=description,
            body='\n'.join(_trim_blank_lines(body_lines)),
            footers=tuple(footers),
            breaking=breaking,
            sha=sha,
            raw=raw,
        )


def format_commit(commit: ParsedCommit) -> str:
    """Write a :class:`ParsedCommit` back out as a commit message.

    The result re-parses to an equal commit. The ``!`` marker is emitted
    only when the commit is breaking and no footer already says so.

    Args:
        commit: The commit to render.

    Returns:
        Header, then body and footers as blank-line separated paragraphs.
    """
    header = commit.type
    if commit.scope:
        header += f'({commit.scope})'
    if commit.breaking and not any(f.is_breaking for f in commit.footers):
        header += '!'
    header += f': {commit.description}'

    paragraphs = [header]
    if commit.body:
        paragraphs.append(commit.body)
    if commit.footers:
        paragraphs.append('\n'.join(str(f) for f in commit.footers))
    return '\n\n'.join(paragraphs)
