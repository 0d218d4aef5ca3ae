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

"""Structured changelog model built from parsed commits.

Groups commits by display category (Breaking Changes, Features, Bug
Fixes, ...). The result is a plain data model; turning it into Markdown
or HTML is left to whatever template the caller uses.

Key Concepts (ELI5)::

    ┌─────────────────────────┬─────────────────────────────────────────────┐
    │ Concept                 │ Plain-English                               │
    ├─────────────────────────┼─────────────────────────────────────────────┤
    │ ChangelogSection        │ A group of commits under one heading, e.g.  │
    │                         │ "Features" or "Bug Fixes".                  │
    ├─────────────────────────┼─────────────────────────────────────────────┤
    │ Changelog               │ All sections for one release, in order.     │
    └─────────────────────────┴─────────────────────────────────────────────┘

Aggregation flow::

    [ParsedCommit, ...]   (caller's order, oldest-first or newest-first)
         │
         ▼
    classify(commit, policy)  ── NONE and not breaking → dropped
         │
         ▼
    breaking? → "Breaking Changes"  (and, by default, its type group too)
         │
         ▼
    Changelog(sections ordered by first appearance)

Usage::

    from commitkit.changelog import aggregate

    changelog = aggregate(commits)
    for section in changelog.sections:
        print(section.heading, [c.description for c in section.commits])
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from commitkit.classify import DEFAULT_POLICY, TypeImpactPolicy, classify
from commitkit.commit_parsing import ChangeImpact, ParsedCommit

# Key of the section that collects every breaking commit.
BREAKING_KEY = 'breaking'
BREAKING_HEADING = 'Breaking Changes'

# Maps commit type to section heading.
DEFAULT_SECTION_HEADINGS: dict[str, str] = {
    BREAKING_KEY: BREAKING_HEADING,
    'feat': 'Features',
    'fix': 'Bug Fixes',
    'perf': 'Performance',
    'refactor': 'Refactoring',
    'docs': 'Documentation',
    'test': 'Tests',
    'ci': 'CI/CD',
    'build': 'Build',
    'chore': 'Chores',
    'style': 'Style',
    'revert': 'Reverts',
}


@dataclass(frozen=True)
class ChangelogSection:
    """A group of commits under one heading.

    Attributes:
        key: Grouping key: the commit type, or ``"breaking"``.
        heading: Display heading (e.g. ``"Features"``).
        commits: Commits in this section, in input order.
    """

    key: str
    heading: str
    commits: tuple[ParsedCommit, ...] = ()


@dataclass(frozen=True)
class Changelog:
    """Changelog model for one release.

    Behaves like a read-only mapping from heading to commits::

        changelog['Features']      # tuple of ParsedCommit
        'Bug Fixes' in changelog
        list(changelog)            # headings, in section order

    Attributes:
        sections: Non-empty sections, ordered by the first commit that
            landed in each.
    """

    sections: tuple[ChangelogSection, ...] = ()

    @property
    def headings(self) -> list[str]:
        """Section headings in order."""
        return [s.heading for s in self.sections]

    def section(self, key: str) -> ChangelogSection | None:
        """Return the section with grouping ``key``, if present."""
        for s in self.sections:
            if s.key == key:
                return s
        return None

    def as_dict(self) -> dict[str, tuple[ParsedCommit, ...]]:
        """Return ``{heading: commits}`` in section order."""
        return {s.heading: s.commits for s in self.sections}

    def __getitem__(self, heading: str) -> tuple[ParsedCommit, ...]:
        """Return the commits under ``heading``."""
        for s in self.sections:
            if s.heading == heading:
                return s.commits
        raise KeyError(heading)

    def __contains__(self, heading: object) -> bool:
        """Whether a section with ``heading`` exists."""
        return any(s.heading == heading for s in self.sections)

    def __iter__(self) -> Iterator[str]:
        """Iterate over headings."""
        return iter(self.headings)

    def __len__(self) -> int:
        """Number of sections."""
        return len(self.sections)


def heading_for(key: str, headings: Mapping[str, str] | None = None) -> str:
    """Return the display heading for a grouping key.

    Custom ``headings`` win over the defaults; unknown types fall back
    to the capitalized type name.
    """
    if headings and key in headings:
        return headings[key]
    return DEFAULT_SECTION_HEADINGS.get(key, key.capitalize())


def aggregate(
    commits: Iterable[ParsedCommit],
    policy: TypeImpactPolicy = DEFAULT_POLICY,
    *,
    include_breaking_in_type_group: bool = True,
    headings: Mapping[str, str] | None = None,
) -> Changelog:
    """Group parsed commits into a :class:`Changelog`.

    Commits whose impact is NONE are dropped unless they are breaking.
    Breaking commits always land in "Breaking Changes"; they also land
    in their type group unless ``include_breaking_in_type_group`` is
    ``False``. Commits keep their input order inside each section, and
    sections appear in the order their first commit appeared.

    Args:
        commits: Parsed commits, in a consistent order.
        policy: Type → impact mapping used to drop NONE commits.
        include_breaking_in_type_group: List breaking commits under
            their type as well as under "Breaking Changes".
        headings: Overrides for section headings, keyed by type (or
            ``"breaking"``). Sections are keyed by type, so two keys
            given the same heading stay separate sections;
            :class:`~commitkit.config.CommitKitConfig` rejects such
            overrides.

    Returns:
        A new :class:`Changelog`.
    """
    buckets: dict[str, list[ParsedCommit]] = {}
    for commit in commits:
        impact = classify(commit, policy)
        if commit.breaking:
            buckets.setdefault(BREAKING_KEY, []).append(commit)
            if include_breaking_in_type_group:
                buckets.setdefault(commit.type, []).append(commit)
        elif impact != ChangeImpact.NONE:
            buckets.setdefault(commit.type, []).append(commit)

    return Changelog(
        sections=tuple(
            ChangelogSection(key=key, heading=heading_for(key, headings), commits=tuple(bucket))
            for key, bucket in buckets.items()
        ),
    )


__all__ = [
    'BREAKING_HEADING',
    'BREAKING_KEY',
    'DEFAULT_SECTION_HEADINGS',
    'Changelog',
    'ChangelogSection',
    'aggregate',
    'heading_for',
]
