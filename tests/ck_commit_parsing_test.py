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

"""Tests for the commit_parsing subpackage.

All tests are pure — no I/O, no mocks.
"""

from __future__ import annotations

import pytest
from commitkit.commit_parsing import (
    DEFAULT_COMMIT_TYPES,
    IMPACT_PRECEDENCE,
    ChangeImpact,
    CommitParser,
    ConventionalCommitParser,
    Footer,
    ParsedCommit,
    ParseFailure,
    ParseFailureKind,
    format_commit,
    max_impact,
    parse_commit,
)
from commitkit.errors import CommitKitError, E


def _ok(raw: str, **kwargs: object) -> ParsedCommit:
    result = parse_commit(raw, **kwargs)  # type: ignore[arg-type]
    assert isinstance(result, ParsedCommit), result
    return result


def _fail(raw: str, **kwargs: object) -> ParseFailure:
    result = parse_commit(raw, **kwargs)  # type: ignore[arg-type]
    assert isinstance(result, ParseFailure), result
    return result


# ---------------------------------------------------------------------------
# ChangeImpact
# ---------------------------------------------------------------------------


class TestChangeImpact:
    """Tests for the ChangeImpact enum."""

    def test_values(self) -> None:
        """Test values."""
        assert ChangeImpact.MAJOR.value == 'major'
        assert ChangeImpact.MINOR.value == 'minor'
        assert ChangeImpact.PATCH.value == 'patch'
        assert ChangeImpact.NONE.value == 'none'

    def test_precedence_order(self) -> None:
        """Test precedence order."""
        assert IMPACT_PRECEDENCE == [
            ChangeImpact.MAJOR,
            ChangeImpact.MINOR,
            ChangeImpact.PATCH,
            ChangeImpact.NONE,
        ]

    def test_total_order(self) -> None:
        """NONE < PATCH < MINOR < MAJOR."""
        assert ChangeImpact.NONE < ChangeImpact.PATCH < ChangeImpact.MINOR < ChangeImpact.MAJOR
        assert ChangeImpact.MAJOR >= ChangeImpact.MAJOR

    def test_max_of_collection(self) -> None:
        """max() picks the strongest impact."""
        assert max([ChangeImpact.PATCH, ChangeImpact.MAJOR, ChangeImpact.NONE]) == ChangeImpact.MAJOR


class TestMaxImpact:
    """Tests for the max_impact pure function."""

    def test_same_impact(self) -> None:
        """Test same impact."""
        for impact in ChangeImpact:
            assert max_impact(impact, impact) == impact

    def test_major_wins_over_all(self) -> None:
        """Test major wins over all."""
        for impact in ChangeImpact:
            assert max_impact(ChangeImpact.MAJOR, impact) == ChangeImpact.MAJOR
            assert max_impact(impact, ChangeImpact.MAJOR) == ChangeImpact.MAJOR

    def test_patch_over_none(self) -> None:
        """Test patch over none."""
        assert max_impact(ChangeImpact.PATCH, ChangeImpact.NONE) == ChangeImpact.PATCH
        assert max_impact(ChangeImpact.NONE, ChangeImpact.PATCH) == ChangeImpact.PATCH


# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------


class TestHeader:
    """Tests for header parsing."""

    def test_minimal(self) -> None:
        """type: description."""
        commit = _ok('fix: handle null config')
        assert commit.type == 'fix'
        assert commit.scope == ''
        assert commit.description == 'handle null config'
        assert commit.body == ''
        assert commit.footers == ()
        assert commit.breaking is False

    def test_scope(self) -> None:
        """type(scope): description."""
        commit = _ok('feat(auth): add OAuth2')
        assert commit.type == 'feat'
        assert commit.scope == 'auth'
        assert commit.description == 'add OAuth2'

    def test_bang_marks_breaking(self) -> None:
        """type(scope)!: description is breaking."""
        commit = _ok('feat(api)!: remove v1 endpoints')
        assert commit.breaking is True
        assert commit.scope == 'api'

    def test_bang_without_scope(self) -> None:
        """type!: description is breaking."""
        assert _ok('refactor!: drop python 3.9').breaking is True

    def test_without_bang_not_breaking(self) -> None:
        """No '!' and no breaking footer means not breaking."""
        assert _ok('feat(api): add v2 endpoints').breaking is False

    def test_description_whitespace_stripped(self) -> None:
        """Trailing whitespace is not part of the description."""
        assert _ok('fix: typo   ').description == 'typo'

    def test_sha_is_kept(self) -> None:
        """The caller's sha is carried through."""
        assert _ok('fix: x', sha='abc123').sha == 'abc123'

    def test_raw_is_kept(self) -> None:
        """The original text is kept on the commit."""
        assert _ok('fix: x\n').raw == 'fix: x\n'

    def test_crlf_line_endings(self) -> None:
        """Windows line endings parse like Unix ones."""
        commit = _ok('fix: x\r\n\r\nbody line\r\n')
        assert commit.body == 'body line'


class TestMalformedHeader:
    """Tests for MALFORMED_HEADER failures."""

    @pytest.mark.parametrize(
        'raw',
        [
            '',
            '   \n  ',
            'update readme',
            'feat add login',
            'feat:add login',
            'feat: ',
            'feat:',
            'feat(): add login',
            'feat(my scope): add login',
            ': add login',
            '(auth): add login',
        ],
    )
    def test_rejected(self, raw: str) -> None:
        """Malformed headers fail with MALFORMED_HEADER."""
        failure = _fail(raw)
        assert failure.kind == ParseFailureKind.MALFORMED_HEADER
        assert failure.reason

    def test_body_without_blank_line(self) -> None:
        """The header must be followed by a blank line."""
        failure = _fail('feat: add login\nmore details')
        assert failure.kind == ParseFailureKind.MALFORMED_HEADER

    def test_failure_keeps_raw(self) -> None:
        """The failure carries the original message."""
        assert _fail('oops').raw == 'oops'


class TestUnknownType:
    """Tests for UNKNOWN_TYPE failures."""

    def test_unknown_type(self) -> None:
        """A well-formed header with an unknown type."""
        failure = _fail('feature: add login')
        assert failure.kind == ParseFailureKind.UNKNOWN_TYPE
        assert 'feature' in failure.reason

    def test_type_match_is_case_sensitive(self) -> None:
        """'Feat' is not 'feat'."""
        assert _fail('Feat: add login').kind == ParseFailureKind.UNKNOWN_TYPE

    def test_custom_types(self) -> None:
        """A custom type set replaces the defaults."""
        assert _ok('wip: half done', types={'wip'}).type == 'wip'
        assert _fail('feat: x', types={'wip'}).kind == ParseFailureKind.UNKNOWN_TYPE

    @pytest.mark.parametrize('commit_type', sorted(DEFAULT_COMMIT_TYPES))
    def test_default_types_accepted(self, commit_type: str) -> None:
        """Every default type parses."""
        assert _ok(f'{commit_type}: something').type == commit_type


# ---------------------------------------------------------------------------
# Body and footers
# ---------------------------------------------------------------------------


class TestBodyAndFooters:
    """Tests for body and footer parsing."""

    def test_body(self) -> None:
        """Everything after the blank line is body when no footers follow."""
        commit = _ok('fix: x\n\nFirst paragraph.\n\nSecond paragraph.')
        assert commit.body == 'First paragraph.\n\nSecond paragraph.'
        assert commit.footers == ()

    def test_extra_blank_lines_trimmed(self) -> None:
        """Leading and trailing blank lines around the body are dropped."""
        assert _ok('fix: x\n\n\n\nbody\n\n\n').body == 'body'

    def test_footers_only(self) -> None:
        """A message may have footers and no body."""
        commit = _ok('fix: x\n\nREVIEWED-BY: alice\nREFS #12')
        assert commit.body == ''
        assert commit.footers == (
            Footer(token='REVIEWED-BY', value='alice', separator=': '),
            Footer(token='REFS', value='12', separator=' #'),
        )

    def test_body_and_footers(self) -> None:
        """Body then footers."""
        commit = _ok('feat: x\n\nExplain the change.\n\nREFS #7')
        assert commit.body == 'Explain the change.'
        assert commit.footer_values('REFS') == ['7']

    def test_breaking_change_footer(self) -> None:
        """A BREAKING CHANGE footer makes the commit breaking."""
        commit = _ok('feat: new config\n\nBREAKING CHANGE: old keys are ignored')
        assert commit.breaking is True
        assert commit.footer_values('BREAKING CHANGE') == ['old keys are ignored']

    def test_breaking_change_hyphen_synonym(self) -> None:
        """BREAKING-CHANGE is accepted as a synonym."""
        assert _ok('fix: x\n\nBREAKING-CHANGE: y').breaking is True

    def test_lowercase_breaking_change_is_body(self) -> None:
        """Footer tokens are upper-case, so this line is ordinary text."""
        commit = _ok('fix: x\n\nbreaking change: y')
        assert commit.breaking is False
        assert commit.body == 'breaking change: y'

    def test_footer_glued_to_body(self) -> None:
        """A footer block in the same paragraph as prose is malformed."""
        failure = _fail('fix: x\n\nSome explanation.\nREFS #12')
        assert failure.kind == ParseFailureKind.MALFORMED_FOOTER

    def test_body_line_between_footers(self) -> None:
        """Prose after a footer-shaped line ends the footer block."""
        failure = _fail('fix: x\n\nREFS #1\nnot a footer\nREFS #2')
        assert failure.kind == ParseFailureKind.MALFORMED_FOOTER

    def test_breaking_footer_followed_by_trailer(self) -> None:
        """A mixed-case trailer under BREAKING CHANGE is not silently body."""
        failure = _fail('fix: x\n\nBREAKING CHANGE: drops y\nSigned-off-by: Dev <d@x>')
        assert failure.kind == ParseFailureKind.MALFORMED_FOOTER
        assert 'Signed-off-by' in failure.reason

    def test_breaking_footer_with_continuation_line(self) -> None:
        """An indented continuation under a footer is rejected."""
        failure = _fail('fix: x\n\nBREAKING CHANGE: drops y\n  and also z')
        assert failure.kind == ParseFailureKind.MALFORMED_FOOTER

    def test_prose_after_footer(self) -> None:
        """Prose glued below a footer is as malformed as prose above it."""
        failure = _fail('fix: x\n\nREFS #12\nSome explanation.')
        assert failure.kind == ParseFailureKind.MALFORMED_FOOTER

    def test_footer_shaped_paragraph_before_body(self) -> None:
        """Only the last paragraph is a footer block."""
        commit = _ok('fix: x\n\nREFS #1\n\nClosing words.')
        assert commit.footers == ()
        assert commit.body == 'REFS #1\n\nClosing words.'

    @pytest.mark.parametrize('line', ['---: x', '-: y', '- #3'])
    def test_token_must_start_with_letter(self, line: str) -> None:
        """Hyphen-only tokens are not footers."""
        commit = _ok(f'fix: x\n\n{line}')
        assert commit.footers == ()
        assert commit.body == line

    def test_hyphenated_token(self) -> None:
        """Tokens may contain hyphens after the first letter."""
        assert _ok('fix: x\n\nACKED-BY: bob').footer_values('ACKED-BY') == ['bob']

    def test_footer_values_missing_token(self) -> None:
        """footer_values is empty for an absent token."""
        assert _ok('fix: x').footer_values('REFS') == []


# ---------------------------------------------------------------------------
# Round-trip
# ---------------------------------------------------------------------------


class TestFormatCommit:
    """Tests for format_commit and re-parsing."""

    @pytest.mark.parametrize(
        'raw',
        [
            'fix: handle null config',
            'feat(auth): add OAuth2',
            'feat(api)!: remove v1 endpoints',
            'docs: explain setup\n\nLonger text.\n\nAnother paragraph.',
            'feat: x\n\nBody.\n\nBREAKING CHANGE: y\nREFS #3',
            'perf!: faster\n\nREVIEWED-BY: bob',
        ],
    )
    def test_round_trip(self, raw: str) -> None:
        """Formatting a parsed commit and re-parsing gives an equal commit."""
        commit = _ok(raw)
        assert _ok(format_commit(commit)) == commit

    def test_bang_omitted_when_footer_breaks(self) -> None:
        """A breaking footer is enough; no '!' is added."""
        commit = _ok('feat: x\n\nBREAKING CHANGE: y')
        assert format_commit(commit).split('\n', 1)[0] == 'feat: x'

    def test_equality_ignores_raw(self) -> None:
        """Two messages differing only in whitespace parse equal."""
        assert _ok('fix: x\n') == _ok('fix: x\n\n\n')


# ---------------------------------------------------------------------------
# ParseFailure
# ---------------------------------------------------------------------------


class TestParseFailure:
    """Tests for ParseFailure helpers."""

    def test_codes(self) -> None:
        """Each kind maps to its diagnostic code."""
        assert _fail('nope').code == E.COMMIT_MALFORMED_HEADER
        assert _fail('wat: x').code == E.COMMIT_UNKNOWN_TYPE
        assert _fail('fix: x\n\nprose\nREFS #1').code == E.COMMIT_MALFORMED_FOOTER

    def test_subject(self) -> None:
        """The subject is the first line of the message."""
        assert _fail('wat: x\n\nbody').subject == 'wat: x'

    def test_to_error(self) -> None:
        """to_error builds a CommitKitError with the same code."""
        failure = _fail('wat: x', sha='deadbeefcafe')
        err = failure.to_error()
        assert isinstance(err, CommitKitError)
        assert err.code == E.COMMIT_UNKNOWN_TYPE
        assert 'deadbeef' in str(err)


# ---------------------------------------------------------------------------
# Parser protocol
# ---------------------------------------------------------------------------


class TestCommitParserProtocol:
    """Tests for the CommitParser protocol."""

    def test_conventional_parser_satisfies_protocol(self) -> None:
        """ConventionalCommitParser is a CommitParser."""
        assert isinstance(ConventionalCommitParser(), CommitParser)

    def test_parser_types_frozen(self) -> None:
        """The type set is copied into a frozenset."""
        types = {'feat'}
        parser = ConventionalCommitParser(types)
        types.add('fix')
        assert isinstance(parser.parse('fix: x'), ParseFailure)

    def test_parse_never_raises(self) -> None:
        """Arbitrary junk yields a failure, not an exception."""
        for raw in ['\x00', ':::', '!!!: x', 'feat((a)): x', '\n\n\nfeat: x']:
            result = parse_commit(raw)
            assert isinstance(result, (ParsedCommit, ParseFailure))
