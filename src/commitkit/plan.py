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

"""Release planning: commit messages in, next version and changelog out.

Ties the parser, classifier, version calculator and changelog
aggregator together in one pass over the messages since the last
release::

    messages ──► skip-release filter ──► parse ──► classify
                                           │           │
                                           ▼           ▼
                                       failures   next_version()
                                                   aggregate()
                                                       │
                                                       ▼
                                                  ReleasePlan

Messages that do not parse are collected as failures and logged; they
never abort the plan. Callers that want a hard failure call
:meth:`ReleasePlan.raise_for_failures`.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from commitkit.changelog import Changelog, aggregate
from commitkit.classify import classify
from commitkit.commit_parsing import ChangeImpact, ConventionalCommitParser, ParsedCommit, ParseFailure
from commitkit.config import CommitKitConfig
from commitkit.logging import get_logger
from commitkit.versioning import SemanticVersion, bump_version, strongest_impact

logger = get_logger(__name__)


@dataclass(frozen=True)
class ReleasePlan:
    """Everything computed for one release.

    Attributes:
        current: The last released version.
        next_version: The version this release should get.
        impact: The strongest impact among the parsed commits.
        commits: Commits that parsed, in input order.
        impacts: One impact per entry in ``commits``.
        failures: Messages that did not parse, in input order.
        skipped: Messages dropped by a skip-release marker.
        changelog: Grouped changelog for the parsed commits.
    """

    current: SemanticVersion
    next_version: SemanticVersion
    impact: ChangeImpact
    commits: tuple[ParsedCommit, ...] = ()
    impacts: tuple[ChangeImpact, ...] = ()
    failures: tuple[ParseFailure, ...] = ()
    skipped: tuple[str, ...] = ()
    changelog: Changelog = field(default_factory=Changelog)

    @property
    def has_release(self) -> bool:
        """Whether the plan moves the version at all."""
        return self.next_version != self.current

    def raise_for_failures(self) -> None:
        """Raise the first parse failure as a :class:`CommitKitError`."""
        if self.failures:
            raise self.failures[0].to_error()


def filter_skip_release(
    messages: Iterable[str],
    patterns: Sequence[str],
) -> tuple[list[str], list[str]]:
    """Split messages on skip-release markers.

    A message is skipped when any pattern appears anywhere in it,
    compared case-insensitively.

    Args:
        messages: Raw commit messages.
        patterns: Markers such as ``"[skip release]"``.

    Returns:
        ``(kept, skipped)``, each in input order.
    """
    lowered = [p.lower() for p in patterns if p]
    kept: list[str] = []
    skipped: list[str] = []
    for message in messages:
        text = message.lower()
        if any(p in text for p in lowered):
            skipped.append(message)
        else:
            kept.append(message)
    return kept, skipped


def plan_release(
    messages: Iterable[str],
    current: SemanticVersion,
    config: CommitKitConfig | None = None,
) -> ReleasePlan:
    """Compute the next version and changelog from commit messages.

    Args:
        messages: Raw commit messages since ``current``, in a consistent
            order (oldest-first or newest-first).
        current: The last released version.
        config: Settings to apply. Defaults to :class:`CommitKitConfig`.

    Returns:
        A :class:`ReleasePlan`.
    """
    if config is None:
        config = CommitKitConfig()

    kept, skipped = filter_skip_release(messages, config.skip_release_patterns)
    for message in skipped:
        logger.debug('commit_skipped', subject=message.strip().split('\n', 1)[0])

    parser = ConventionalCommitParser(config.types)
    policy = config.policy
    commits: list[ParsedCommit] = []
    failures: list[ParseFailure] = []
    for message in kept:
        result = parser.parse(message)
        if isinstance(result, ParseFailure):
            logger.warning(
                'non_conventional_commit',
                code=result.code.value,
                subject=result.subject,
                reason=result.reason,
            )
            failures.append(result)
        else:
            commits.append(result)

    impacts = tuple(classify(c, policy) for c in commits)
    impact = strongest_impact(impacts)
    target = bump_version(
        current,
        impact,
        pre_one_zero_major_bumps_minor=config.pre_one_zero_major_bumps_minor,
    )
    changelog = aggregate(
        commits,
        policy,
        include_breaking_in_type_group=config.include_breaking_in_type_group,
        headings=config.section_headings,
    )

    logger.info(
        'release_planned',
        current=str(current),
        next=str(target),
        impact=impact.value,
        commits=len(commits),
        failures=len(failures),
        skipped=len(skipped),
    )
    return ReleasePlan(
        current=current,
        next_version=target,
        impact=impact,
        commits=tuple(commits),
        impacts=impacts,
        failures=tuple(failures),
        skipped=tuple(skipped),
        changelog=changelog,
    )


__all__ = [
    'ReleasePlan',
    'filter_skip_release',
    'plan_release',
]
