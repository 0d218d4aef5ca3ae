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

"""Pure types for commit message parsing.

Everything here is a frozen dataclass, enum, or protocol; no I/O, no
logging, no side effects. The only non-stdlib import is the error code
enum used by :meth:`ParseFailure.to_error`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering
from typing import Protocol, runtime_checkable

from commitkit.errors import CommitKitError, E, ErrorCode

# Commit types recognized out of the box.
DEFAULT_COMMIT_TYPES: frozenset[str] = frozenset({
    'build',
    'chore',
    'ci',
    'docs',
    'feat',
    'fix',
    'perf',
    'refactor',
    'revert',
    'style',
    'test',
})

# Footer tokens that mark a breaking change. The hyphenated form is the
# git-trailer friendly synonym.
BREAKING_TOKENS: frozenset[str] = frozenset({'BREAKING CHANGE', 'BREAKING-CHANGE'})


@total_ordering
class ChangeImpact(Enum):
    """The effect of one commit on the next version number.

    Members compare by impact, so ``max()`` over a collection of impacts
    returns the strongest one::

        >>> ChangeImpact.MINOR > ChangeImpact.PATCH
        True
        >>> max([ChangeImpact.PATCH, ChangeImpact.MAJOR, ChangeImpact.NONE])
        <ChangeImpact.MAJOR: 'major'>
    """

    NONE = 'none'
    PATCH = 'patch'
    MINOR = 'minor'
    MAJOR = 'major'

    @property
    def rank(self) -> int:
        """Position in the total order (NONE is 0, MAJOR is 3)."""
        return _IMPACT_RANK[self]

    def __lt__(self, other: object) -> bool:
        """Order by impact rather than by definition order or value."""
        if not isinstance(other, ChangeImpact):
            return NotImplemented
        return self.rank < other.rank


# Impact precedence: lower index = higher precedence.
IMPACT_PRECEDENCE: list[ChangeImpact] = [
    ChangeImpact.MAJOR,
    ChangeImpact.MINOR,
    ChangeImpact.PATCH,
    ChangeImpact.NONE,
]

_IMPACT_RANK: dict[ChangeImpact, int] = {
    impact: len(IMPACT_PRECEDENCE) - 1 - idx for idx, impact in enumerate(IMPACT_PRECEDENCE)
}


def max_impact(a: ChangeImpact, b: ChangeImpact) -> ChangeImpact:
    """Return the higher-precedence impact.

    >>> max_impact(ChangeImpact.MINOR, ChangeImpact.PATCH)
    <ChangeImpact.MINOR: 'minor'>
    >>> max_impact(ChangeImpact.NONE, ChangeImpact.MAJOR)
    <ChangeImpact.MAJOR: 'major'>
    """
    a_idx = IMPACT_PRECEDENCE.index(a)
    b_idx = IMPACT_PRECEDENCE.index(b)
    return IMPACT_PRECEDENCE[min(a_idx, b_idx)]


@dataclass(frozen=True)
class Footer:
    """One trailing ``TOKEN: value`` or ``TOKEN #value`` line.

    Attributes:
        token: Upper-case token (``"REFS"``, ``"BREAKING CHANGE"``).
        value: Everything after the separator.
        separator: ``": "`` or ``" #"``, kept so the line can be
            written back exactly.
    """

    token: str
    value: str
    separator: str = ': '

    @property
    def is_breaking(self) -> bool:
        """Whether this footer announces a breaking change."""
        return self.token in BREAKING_TOKENS

    def __str__(self) -> str:
        """Render the footer as it appears in a commit message."""
        return f'{self.token}{self.separator}{self.value}'


@dataclass(frozen=True)
class ParsedCommit:
    """A commit message that conforms to the grammar.

    Only the parser builds these, and only from well-formed input. The
    ``raw`` text is kept for diagnostics and does not take part in
    equality, so two messages that differ only in incidental whitespace
    compare equal once parsed.

    Attributes:
        type: The commit type (e.g. ``"feat"``, ``"fix"``).
        description: The subject after ``": "``.
        scope: The optional scope (e.g. ``"auth"``), or ``''``.
        body: Free text between the header and the footers, or ``''``.
        footers: Trailing footers in message order.
        breaking: ``True`` for ``type!:`` headers and for messages with a
            ``BREAKING CHANGE`` footer.
        sha: Commit id supplied by the caller, or ``''``.
        raw: The original unparsed commit message.
    """

    type: str
    description: str
    scope: str = ''
    body: str = ''
    footers: tuple[Footer, ...] = ()
    breaking: bool = False
    sha: str = ''
    raw: str = field(default='', compare=False)

    @property
    def is_breaking(self) -> bool:
        """Alias for :attr:`breaking`."""
        return self.breaking

    def footer_values(self, token: str) -> list[str]:
        """Return the values of every footer with ``token``, in order."""
        return [f.value for f in self.footers if f.token == token]


class ParseFailureKind(Enum):
    """Why a commit message was rejected."""

    UNKNOWN_TYPE = 'unknown-type'
    MALFORMED_HEADER = 'malformed-header'
    MALFORMED_FOOTER = 'malformed-footer'


_FAILURE_CODES: dict[ParseFailureKind, ErrorCode] = {
    ParseFailureKind.UNKNOWN_TYPE: E.COMMIT_UNKNOWN_TYPE,
    ParseFailureKind.MALFORMED_HEADER: E.COMMIT_MALFORMED_HEADER,
    ParseFailureKind.MALFORMED_FOOTER: E.COMMIT_MALFORMED_FOOTER,
}


@dataclass(frozen=True)
class ParseFailure:
    """A commit message that does not conform to the grammar.

    Attributes:
        kind: Which rule was broken.
        raw: The message as given to the parser.
        reason: Human-readable explanation, ready to print.
        sha: Commit id supplied by the caller, or ``''``.
    """

    kind: ParseFailureKind
    raw: str
    reason: str
    sha: str = ''

    @property
    def code(self) -> ErrorCode:
        """The diagnostic code for this failure."""
        return _FAILURE_CODES[self.kind]

    @property
    def subject(self) -> str:
        """First line of the raw message, for one-line reports."""
        return self.raw.strip().split('\n', 1)[0]

    def to_error(self) -> CommitKitError:
        """Convert to an exception for callers that hard-fail."""
        where = f' (commit {self.sha[:8]})' if self.sha else ''
        return CommitKitError(
            code=self.code,
            message=f'{self.reason}{where}: {self.subject!r}',
            hint='Expected "type(scope)!: description", a blank line, an optional body, '
            'a blank line, and optional "TOKEN: value" footers.',
        )


@runtime_checkable
class CommitParser(Protocol):
    """Protocol for commit message parsers.

    A parser receives a full raw commit message and returns either a
    :class:`ParsedCommit` or a :class:`ParseFailure`. It never raises for
    malformed text.

    Built-in implementations:

    - :class:`~commitkit.commit_parsing.ConventionalCommitParser`
    """

    def parse(self, raw: str, sha: str = '') -> ParsedCommit | ParseFailure:
        """Parse a commit message.

        Args:
            raw: The full commit message (header, body, footers).
            sha: The commit SHA (for reference).

        Returns:
            A :class:`ParsedCommit`, or a :class:`ParseFailure` explaining
            why the message was rejected.
        """
        ...
