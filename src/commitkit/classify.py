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

"""Commit classification: map a parsed commit to its version impact.

    Conventional Commit → ChangeImpact mapping (default policy)::

        BREAKING CHANGE (or ``!``)  →  major   (always, whatever the type)
        feat:                       →  minor
        fix:, perf:                 →  patch
        docs:, chore:, ci:, etc.    →  none

Pure: no I/O, no logging.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from commitkit.commit_parsing import ChangeImpact, ParsedCommit
from commitkit.errors import CommitKitError, E

DEFAULT_TYPE_IMPACT: Mapping[str, ChangeImpact] = MappingProxyType({
    'feat': ChangeImpact.MINOR,
    'fix': ChangeImpact.PATCH,
    'perf': ChangeImpact.PATCH,
})


@dataclass(frozen=True)
class TypeImpactPolicy:
    """Read-only mapping from commit type to :class:`ChangeImpact`.

    Types missing from the mapping have no impact. The mapping is copied
    into a read-only proxy on construction.

    Attributes:
        impacts: Commit type → impact.
    """

    impacts: Mapping[str, ChangeImpact] = field(default_factory=lambda: DEFAULT_TYPE_IMPACT)

    def __post_init__(self) -> None:
        """Validate the impacts and freeze them."""
        for commit_type, impact in self.impacts.items():
            if not isinstance(impact, ChangeImpact):
                raise CommitKitError(
                    code=E.CONFIG_INVALID_VALUE,
                    message=f'Impact for type {commit_type!r} must be a ChangeImpact, got {impact!r}',
                    hint='Use one of: none, patch, minor, major.',
                )
        object.__setattr__(self, 'impacts', MappingProxyType(dict(self.impacts)))

    def impact_for(self, commit_type: str) -> ChangeImpact:
        """Return the configured impact for ``commit_type`` (NONE if absent)."""
        return self.impacts.get(commit_type, ChangeImpact.NONE)

    def with_overrides(self, overrides: Mapping[str, ChangeImpact]) -> TypeImpactPolicy:
        """Return a new policy with ``overrides`` layered on top."""
        return TypeImpactPolicy(impacts={**self.impacts, **overrides})


DEFAULT_POLICY = TypeImpactPolicy()


def classify(commit: ParsedCommit, policy: TypeImpactPolicy = DEFAULT_POLICY) -> ChangeImpact:
    """Return the version impact of one commit.

    A breaking commit is always MAJOR. Otherwise the impact comes from
    ``policy``; types the policy does not mention have no impact.

    Args:
        commit: A successfully parsed commit.
        policy: Type → impact mapping.

    Returns:
        The commit's :class:`ChangeImpact`.
    """
    if commit.breaking:
        return ChangeImpact.MAJOR
    return policy.impact_for(commit.type)


__all__ = [
    'DEFAULT_POLICY',
    'DEFAULT_TYPE_IMPACT',
    'TypeImpactPolicy',
    'classify',
]
