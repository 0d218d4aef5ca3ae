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

"""Semantic versions and next-version computation.

Key Concepts (ELI5)::

    ┌─────────────────────┬────────────────────────────────────────────────┐
    │ Concept             │ ELI5 Explanation                               │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ SemanticVersion     │ MAJOR.MINOR.PATCH as three integers. Never    │
    │                     │ changed in place; bumps build a new value.    │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ next_version()      │ Take the strongest impact since the last      │
    │                     │ release and apply exactly one bump.           │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ Pre-1.0 rule        │ On 0.x, a breaking change bumps MINOR, since  │
    │                     │ 0.x makes no stability promise.               │
    └─────────────────────┴────────────────────────────────────────────────┘

    Impact → bump::

        MAJOR  →  {major+1, 0, 0}     (on 0.x with the pre-1.0 rule: {0, minor+1, 0})
        MINOR  →  {major, minor+1, 0}
        PATCH  →  {major, minor, patch+1}
        NONE   →  unchanged

Usage::

    from commitkit.versioning import SemanticVersion, next_version

    current = SemanticVersion.parse('1.2.3')
    next_version(current, [ChangeImpact.PATCH, ChangeImpact.MINOR])
    # SemanticVersion(major=1, minor=3, patch=0)
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from commitkit.commit_parsing import IMPACT_PRECEDENCE, ChangeImpact
from commitkit.errors import CommitKitError, E

_VERSION_RE = re.compile(r'^v?(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)$')


@dataclass(frozen=True, order=True)
class SemanticVersion:
    """An immutable ``MAJOR.MINOR.PATCH`` version.

    Ordering is lexicographic over ``(major, minor, patch)``.

    Attributes:
        major: Incremented for breaking changes.
        minor: Incremented for new features.
        patch: Incremented for fixes.
    """

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        """Reject negative or non-integer components."""
        for name in ('major', 'minor', 'patch'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise CommitKitError(
                    code=E.VERSION_INVALID,
                    message=f'{name} must be a non-negative integer, got {value!r}',
                    hint='Each component of the version (MAJOR.MINOR.PATCH) must be a non-negative integer.',
                )

    @classmethod
    def parse(cls, version: str) -> SemanticVersion:
        """Parse ``"1.2.3"`` (or ``"v1.2.3"``).

        Args:
            version: Version string.

        Returns:
            The parsed version.

        Raises:
            CommitKitError: If the string is not ``X.Y.Z``.
        """
        m = _VERSION_RE.match(version.strip())
        if not m:
            raise CommitKitError(
                code=E.VERSION_INVALID,
                message=f'Version {version!r} is not valid (expected X.Y.Z)',
                hint='Use a version string like "1.2.3" (MAJOR.MINOR.PATCH).',
            )
        return cls(int(m.group('major')), int(m.group('minor')), int(m.group('patch')))

    def __str__(self) -> str:
        """Render as ``MAJOR.MINOR.PATCH``."""
        return f'{self.major}.{self.minor}.{self.patch}'


def strongest_impact(impacts: Iterable[ChangeImpact]) -> ChangeImpact:
    """Reduce ``impacts`` to the highest-precedence one (NONE if empty).

    Raises:
        CommitKitError: ``CK-VERSION-INCONSISTENT`` if an item is not a
            :class:`ChangeImpact`.
    """
    best = len(IMPACT_PRECEDENCE) - 1
    for impact in impacts:
        if not isinstance(impact, ChangeImpact):
            raise CommitKitError(
                code=E.VERSION_INCONSISTENT,
                message=f'Cannot fold {impact!r} into a version bump: not a ChangeImpact',
                hint='Impacts must come from classify(); this is a programming error.',
            )
        best = min(best, IMPACT_PRECEDENCE.index(impact))
    return IMPACT_PRECEDENCE[best]


def bump_version(
    current: SemanticVersion,
    impact: ChangeImpact,
    *,
    pre_one_zero_major_bumps_minor: bool = True,
) -> SemanticVersion:
    """Apply a single bump to ``current``.

    Args:
        current: The released version.
        impact: The bump to apply.
        pre_one_zero_major_bumps_minor: If ``True`` (default), a MAJOR
            impact on a ``0.x`` version bumps the minor component.

    Returns:
        A new :class:`SemanticVersion`; ``current`` is never returned.

    Raises:
        CommitKitError: ``CK-VERSION-INCONSISTENT`` for a value outside
            the :class:`ChangeImpact` enumeration.
    """
    if impact == ChangeImpact.MAJOR and current.major == 0 and pre_one_zero_major_bumps_minor:
        impact = ChangeImpact.MINOR

    if impact == ChangeImpact.MAJOR:
        return SemanticVersion(current.major + 1, 0, 0)
    if impact == ChangeImpact.MINOR:
        return SemanticVersion(current.major, current.minor + 1, 0)
    if impact == ChangeImpact.PATCH:
        return SemanticVersion(current.major, current.minor, current.patch + 1)
    if impact == ChangeImpact.NONE:
        return SemanticVersion(current.major, current.minor, current.patch)

    raise CommitKitError(
        code=E.VERSION_INCONSISTENT,
        message=f'Unrecognized change impact {impact!r}',
        hint='Impacts must come from classify(); this is a programming error.',
    )


def next_version(
    current: SemanticVersion,
    impacts: Iterable[ChangeImpact],
    *,
    pre_one_zero_major_bumps_minor: bool = True,
) -> SemanticVersion:
    """Compute the next release version from the impacts since ``current``.

    Only the strongest impact matters, so the order of ``impacts`` never
    changes the result.

    Args:
        current: The last released version.
        impacts: One impact per commit since that release.
        pre_one_zero_major_bumps_minor: See :func:`bump_version`.

    Returns:
        The next version (an equal but distinct value when every impact
        is NONE).
    """
    return bump_version(
        current,
        strongest_impact(impacts),
        pre_one_zero_major_bumps_minor=pre_one_zero_major_bumps_minor,
    )


__all__ = [
    'SemanticVersion',
    'bump_version',
    'next_version',
    'strongest_impact',
]
