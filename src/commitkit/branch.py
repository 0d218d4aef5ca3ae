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

"""Branch name validation.

Provides :func:`validate_branch`, which checks a ``category/slug`` branch
name against the configured categories and returns either a
:class:`BranchDescriptor` or a :class:`ValidationFailure`. It never
raises for any string input.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from commitkit.errors import CommitKitError, E, ErrorCode

DEFAULT_BRANCH_CATEGORIES: frozenset[str] = frozenset({
    'bugfix',
    'chore',
    'docs',
    'feature',
    'hotfix',
    'refactor',
    'release',
    'test',
})

# Lowercase alphanumerics with single hyphens between words.
SLUG_PATTERN: re.Pattern[str] = re.compile(r'^[a-z0-9]+(-[a-z0-9]+)*$')


@dataclass(frozen=True)
class BranchDescriptor:
    """A validated branch name split into its parts.

    Attributes:
        category: The part before ``/`` (e.g. ``"feature"``).
        slug: The part after ``/`` (e.g. ``"add-login"``).
    """

    category: str
    slug: str

    def __str__(self) -> str:
        """Render back to ``category/slug``."""
        return f'{self.category}/{self.slug}'


class ValidationFailureKind(Enum):
    """Why a branch name was rejected."""

    UNKNOWN_CATEGORY = 'unknown-category'
    INVALID_SLUG = 'invalid-slug'
    MISSING_SEPARATOR = 'missing-separator'


_FAILURE_CODES: dict[ValidationFailureKind, ErrorCode] = {
    ValidationFailureKind.UNKNOWN_CATEGORY: E.BRANCH_UNKNOWN_CATEGORY,
    ValidationFailureKind.INVALID_SLUG: E.BRANCH_INVALID_SLUG,
    ValidationFailureKind.MISSING_SEPARATOR: E.BRANCH_MISSING_SEPARATOR,
}


@dataclass(frozen=True)
class ValidationFailure:
    """A branch name that does not follow ``category/slug``.

    Attributes:
        kind: Which rule was broken.
        name: The branch name as given.
        reason: Human-readable explanation, ready to print.
    """

    kind: ValidationFailureKind
    name: str
    reason: str

    @property
    def code(self) -> ErrorCode:
        """The diagnostic code for this failure."""
        return _FAILURE_CODES[self.kind]

    def to_error(self) -> CommitKitError:
        """Convert to an exception for callers that hard-fail."""
        return CommitKitError(
            code=self.code,
            message=f'Branch {self.name!r}: {self.reason}',
            hint="Name branches 'category/slug', e.g. 'feature/add-login'.",
        )


def validate_branch(
    name: str,
    *,
    categories: Iterable[str] = DEFAULT_BRANCH_CATEGORIES,
) -> BranchDescriptor | ValidationFailure:
    """Validate a branch name of the form ``category/slug``.

    The name is split on the first ``/``; a second ``/`` ends up in the
    slug and makes it invalid.

    Args:
        name: The branch name (e.g. ``"feature/add-login"``).
        categories: Accepted categories.

    Returns:
        A :class:`BranchDescriptor`, or a :class:`ValidationFailure`.
    """
    allowed = frozenset(categories)

    category, sep, slug = name.partition('/')
    if not sep:
        return ValidationFailure(
            kind=ValidationFailureKind.MISSING_SEPARATOR,
            name=name,
            reason="no '/' between category and slug",
        )

    if category not in allowed:
        return ValidationFailure(
            kind=ValidationFailureKind.UNKNOWN_CATEGORY,
            name=name,
            reason=f'unknown category {category!r} (expected one of: {", ".join(sorted(allowed))})',
        )

    if not SLUG_PATTERN.fullmatch(slug):
        reason = 'slug is empty' if not slug else f'slug {slug!r} must be lowercase words joined by single hyphens'
        return ValidationFailure(
            kind=ValidationFailureKind.INVALID_SLUG,
            name=name,
            reason=reason,
        )

    return BranchDescriptor(category=category, slug=slug)


__all__ = [
    'DEFAULT_BRANCH_CATEGORIES',
    'SLUG_PATTERN',
    'BranchDescriptor',
    'ValidationFailure',
    'ValidationFailureKind',
    'validate_branch',
]
