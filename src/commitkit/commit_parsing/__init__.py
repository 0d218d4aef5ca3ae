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

"""Commit message parsing.

This subpackage turns one raw commit message into either a
:class:`ParsedCommit` or a :class:`ParseFailure`. It never raises on
malformed text. The :class:`CommitParser` protocol lets callers inject
a parser with a different type set.

Usage::

    from commitkit.commit_parsing import ParsedCommit, parse_commit

    result = parse_commit('feat(auth): add OAuth2\\n\\nREFS #12')
    assert isinstance(result, ParsedCommit)
    assert result.scope == 'auth'
    assert result.footer_values('REFS') == ['12']

    # Using a parser instance (for DI):
    parser = ConventionalCommitParser(types={'feat', 'fix', 'wip'})
    result = parser.parse('wip: half done')
"""

from collections.abc import Iterable

from commitkit.commit_parsing._conventional import (
    FOOTER_PATTERN,
    HEADER_PATTERN,
    ConventionalCommitParser,
    format_commit,
)
from commitkit.commit_parsing._types import (
    BREAKING_TOKENS,
    DEFAULT_COMMIT_TYPES,
    IMPACT_PRECEDENCE,
    ChangeImpact,
    CommitParser,
    Footer,
    ParsedCommit,
    ParseFailure,
    ParseFailureKind,
    max_impact,
)

# Module-level singleton for convenience.
_DEFAULT_PARSER = ConventionalCommitParser()


def parse_commit(
    raw: str,
    *,
    types: Iterable[str] | None = None,
    sha: str = '',
) -> ParsedCommit | ParseFailure:
    """Parse a single commit message.

    Convenience wrapper around :meth:`ConventionalCommitParser.parse`.

    Args:
        raw: The full commit message.
        types: Accepted commit types. Defaults to
            :data:`DEFAULT_COMMIT_TYPES`.
        sha: The commit SHA (for reference).

    Returns:
        A :class:`ParsedCommit` or a :class:`ParseFailure`.
    """
    parser = _DEFAULT_PARSER if types is None else ConventionalCommitParser(types)
    return parser.parse(raw, sha=sha)


__all__ = [
    'BREAKING_TOKENS',
    'DEFAULT_COMMIT_TYPES',
    'FOOTER_PATTERN',
    'HEADER_PATTERN',
    'IMPACT_PRECEDENCE',
    'ChangeImpact',
    'CommitParser',
    'ConventionalCommitParser',
    'Footer',
    'ParseFailure',
    'ParseFailureKind',
    'ParsedCommit',
    'format_commit',
    'max_impact',
    'parse_commit',
]
