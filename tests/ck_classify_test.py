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

"""Tests for commitkit.classify."""

from __future__ import annotations

import pytest
from commitkit.classify import DEFAULT_POLICY, TypeImpactPolicy, classify
from commitkit.commit_parsing import ChangeImpact, ParsedCommit, parse_commit
from commitkit.errors import CommitKitError, E


class TestDefaultPolicy:
    """Tests for the default type → impact mapping."""

    @pytest.mark.parametrize(
        ('commit_type', 'expected'),
        [
            ('feat', ChangeImpact.MINOR),
            ('fix', ChangeImpact.PATCH),
            ('perf', ChangeImpact.PATCH),
            ('docs', ChangeImpact.NONE),
            ('chore', ChangeImpact.NONE),
            ('ci', ChangeImpact.NONE),
            ('refactor', ChangeImpact.NONE),
        ],
    )
    def test_type_impacts(self, commit_type: str, expected: ChangeImpact) -> None:
        """Each default type gets its documented impact."""
        commit = ParsedCommit(type=commit_type, description='x')
        assert classify(commit) == expected

    def test_unlisted_type_is_none(self) -> None:
        """Types the policy does not mention have no impact."""
        assert DEFAULT_POLICY.impact_for('wip') == ChangeImpact.NONE


class TestBreaking:
    """Breaking commits are always MAJOR."""

    @pytest.mark.parametrize('commit_type', ['feat', 'fix', 'docs', 'chore', 'wip'])
    def test_breaking_is_major(self, commit_type: str) -> None:
        """Whatever the type, breaking means MAJOR."""
        commit = ParsedCommit(type=commit_type, description='x', breaking=True)
        assert classify(commit) == ChangeImpact.MAJOR

    def test_breaking_overrides_policy(self) -> None:
        """A custom policy cannot downgrade a breaking commit."""
        policy = TypeImpactPolicy(impacts={'feat': ChangeImpact.NONE})
        commit = ParsedCommit(type='feat', description='x', breaking=True)
        assert classify(commit, policy) == ChangeImpact.MAJOR


class TestTypeImpactPolicy:
    """Tests for TypeImpactPolicy."""

    def test_custom_policy(self) -> None:
        """A custom policy replaces the defaults."""
        policy = TypeImpactPolicy(impacts={'docs': ChangeImpact.PATCH})
        assert classify(ParsedCommit(type='docs', description='x'), policy) == ChangeImpact.PATCH
        assert classify(ParsedCommit(type='feat', description='x'), policy) == ChangeImpact.NONE

    def test_with_overrides(self) -> None:
        """with_overrides layers new impacts over the existing ones."""
        policy = DEFAULT_POLICY.with_overrides({'perf': ChangeImpact.MINOR})
        assert policy.impact_for('perf') == ChangeImpact.MINOR
        assert policy.impact_for('feat') == ChangeImpact.MINOR
        assert DEFAULT_POLICY.impact_for('perf') == ChangeImpact.PATCH

    def test_mapping_is_copied(self) -> None:
        """Mutating the source dict does not change the policy."""
        impacts = {'feat': ChangeImpact.MINOR}
        policy = TypeImpactPolicy(impacts=impacts)
        impacts['fix'] = ChangeImpact.PATCH
        assert policy.impact_for('fix') == ChangeImpact.NONE

    def test_mapping_is_read_only(self) -> None:
        """The stored mapping cannot be mutated."""
        with pytest.raises(TypeError):
            DEFAULT_POLICY.impacts['docs'] = ChangeImpact.PATCH  # type: ignore[index]

    def test_rejects_non_impact(self) -> None:
        """Values must be ChangeImpact members."""
        with pytest.raises(CommitKitError) as exc_info:
            TypeImpactPolicy(impacts={'feat': 'minor'})  # type: ignore[dict-item]
        assert exc_info.value.code == E.CONFIG_INVALID_VALUE


class TestParsedInput:
    """classify() over parser output."""

    def test_fix_is_patch(self) -> None:
        """fix: is PATCH."""
        commit = parse_commit('fix: handle null config')
        assert isinstance(commit, ParsedCommit)
        assert classify(commit) == ChangeImpact.PATCH

    def test_fix_with_breaking_footer_is_major(self) -> None:
        """fix: with a BREAKING CHANGE footer is MAJOR."""
        commit = parse_commit('fix: handle null config\n\nBREAKING CHANGE: null now raises')
        assert isinstance(commit, ParsedCommit)
        assert commit.is_breaking is True
        assert classify(commit) == ChangeImpact.MAJOR
