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

"""Tests for whatbump.commit_parsing."""

from __future__ import annotations

import pytest

from whatbump.commit_parsing import (
    BUMP_ORDER,
    BumpLevel,
    CommitParser,
    ConventionalCommitParser,
    ParsedCommit,
    ParseError,
    ParseErrorReason,
    max_bump,
    parse_commit,
)
from whatbump.errors import E

_PARSER = ConventionalCommitParser()


def _ok(message: str) -> ParsedCommit:
    result = _PARSER.parse(message)
    assert isinstance(result, ParsedCommit), result
    return result


def _err(message: str) -> ParseError:
    result = _PARSER.parse(message)
    assert isinstance(result, ParseError), result
    return result


class TestBumpLevel:
    """Tests for BumpLevel ordering and naming."""

    def test_total_order(self) -> None:
        """Levels are ordered None < Patch < Minor < Major."""
        assert BumpLevel.NONE < BumpLevel.PATCH < BumpLevel.MINOR < BumpLevel.MAJOR
        assert sorted([BumpLevel.MAJOR, BumpLevel.NONE, BumpLevel.MINOR, BumpLevel.PATCH]) == list(BUMP_ORDER)

    def test_str_is_capitalised(self) -> None:
        """str() gives the name printed by the CLI."""
        assert [str(level) for level in BUMP_ORDER] == ['None', 'Patch', 'Minor', 'Major']

    def test_parse_is_case_insensitive(self) -> None:
        """parse() accepts any capitalisation."""
        assert BumpLevel.parse('Minor') is BumpLevel.MINOR
        assert BumpLevel.parse(' MAJOR ') is BumpLevel.MAJOR

    def test_parse_unknown(self) -> None:
        """parse() rejects unknown names."""
        with pytest.raises(ValueError, match='Unknown bump level'):
            BumpLevel.parse('huge')

    def test_max_bump(self) -> None:
        """max_bump returns the stronger level, either argument order."""
        assert max_bump(BumpLevel.PATCH, BumpLevel.MINOR) is BumpLevel.MINOR
        assert max_bump(BumpLevel.MINOR, BumpLevel.PATCH) is BumpLevel.MINOR
        assert max_bump(BumpLevel.NONE, BumpLevel.NONE) is BumpLevel.NONE

    def test_compare_with_other_type(self) -> None:
        """Ordering against a non-level is not supported."""
        with pytest.raises(TypeError):
            _ = BumpLevel.MAJOR < 3  # type: ignore[operator]


class TestHeader:
    """Tests for header parsing."""

    def test_simple(self) -> None:
        """Type and description are split on the first ': '."""
        cc = _ok('feat: add widget')
        assert cc.type == 'feat'
        assert cc.description == 'add widget'
        assert cc.scope == ''
        assert not cc.breaking_marker

    def test_scope(self) -> None:
        """A parenthesised scope is extracted."""
        cc = _ok('fix(parser): handle empty input')
        assert cc.type == 'fix'
        assert cc.scope == 'parser'
        assert cc.description == 'handle empty input'

    def test_breaking_marker(self) -> None:
        """'!' before the colon marks a breaking change."""
        cc = _ok('refactor!: drop python 3.9')
        assert cc.breaking_marker
        assert cc.is_breaking

    def test_breaking_marker_with_scope(self) -> None:
        """'!' follows the scope."""
        cc = _ok('feat(api)!: remove v1 endpoints')
        assert cc.scope == 'api'
        assert cc.breaking_marker

    def test_description_keeps_later_separators(self) -> None:
        """Only the first ': ' separates type from description."""
        cc = _ok('docs: note: this is fine')
        assert cc.description == 'note: this is fine'

    def test_unknown_type_is_not_an_error(self) -> None:
        """Any well-formed type parses; classification decides its level."""
        cc = _ok('build-deps: bump httpx')
        assert cc.type == 'build-deps'

    def test_surrounding_whitespace_trimmed(self) -> None:
        """Leading and trailing whitespace on the header is ignored."""
        cc = _ok('  chore: tidy up  ')
        assert cc.type == 'chore'
        assert cc.description == 'tidy up'

    def test_header_property_round_trips(self) -> None:
        """The header property rebuilds a canonical header."""
        for header in ('feat: a', 'fix(core): b', 'feat(api)!: c', 'chore!: d'):
            assert _ok(header).header == header

    def test_raw_is_kept(self) -> None:
        """The original message is kept unchanged."""
        msg = 'fix: x\n\nbody'
        assert _ok(msg).raw == msg

    def test_crlf_line_endings(self) -> None:
        """Windows line endings are normalised."""
        cc = _ok('fix: x\r\n\r\nbody text\r\n')
        assert cc.description == 'x'
        assert cc.body == 'body text'


class TestParseErrors:
    """Tests for malformed headers."""

    @pytest.mark.parametrize(
        ('message', 'reason'),
        [
            ('update readme', ParseErrorReason.MISSING_SEPARATOR),
            ('feat:no space', ParseErrorReason.MISSING_SEPARATOR),
            ('', ParseErrorReason.MISSING_SEPARATOR),
            (': nothing before', ParseErrorReason.EMPTY_TYPE),
            ('(api): no type', ParseErrorReason.EMPTY_TYPE),
            ('!: bang only', ParseErrorReason.EMPTY_TYPE),
            ('Feat: capitalised', ParseErrorReason.INVALID_TYPE),
            ('feat fix: two words', ParseErrorReason.INVALID_TYPE),
            ('feat(api: unclosed', ParseErrorReason.UNTERMINATED_SCOPE),
            ('feat(): empty scope', ParseErrorReason.INVALID_SCOPE),
            ('feat(a b): spaced scope', ParseErrorReason.INVALID_SCOPE),
            ('feat(api)x: trailing text', ParseErrorReason.INVALID_SCOPE),
            ('feat:', ParseErrorReason.EMPTY_DESCRIPTION),
            ('feat: ', ParseErrorReason.EMPTY_DESCRIPTION),
            ('fix(core):    ', ParseErrorReason.EMPTY_DESCRIPTION),
        ],
    )
    def test_reason(self, message: str, reason: ParseErrorReason) -> None:
        """Each malformed header reports the first rule it breaks."""
        err = _err(message)
        assert err.reason is reason
        assert err.raw == message
        assert err.detail

    def test_error_code(self) -> None:
        """A parse error maps to a structured diagnostic code."""
        err = _err('oops')
        assert err.code is E.PARSE_MISSING_SEPARATOR
        assert err.index is None

    def test_header_is_first_line(self) -> None:
        """ParseError.header is the trimmed first line of the message."""
        err = _err('  not conventional  \n\nbody')
        assert err.header == 'not conventional'

    def test_every_reason_has_a_code(self) -> None:
        """Every reason maps to a distinct WB-PARSE code."""
        codes = {reason.code for reason in ParseErrorReason}
        assert len(codes) == len(ParseErrorReason)
        assert all(c.value.startswith('WB-PARSE-') for c in codes)

    @pytest.mark.parametrize(
        'message',
        ['\n\n', '\x00', ':', '(', ')', '()!: x', 'a(b)(c): d', '::: :::', 'feat(\n): x', '🎉: party'],
    )
    def test_never_raises(self, message: str) -> None:
        """Arbitrary input yields a result, never an exception."""
        result = parse_commit(message)
        assert isinstance(result, (ParsedCommit, ParseError))


class TestBodyAndFooters:
    """Tests for body and footer extraction."""

    def test_body(self) -> None:
        """Text after the blank line is the body."""
        cc = _ok('fix: crash\n\nThe widget crashed on empty input.\nNow it does not.')
        assert cc.body == 'The widget crashed on empty input.\nNow it does not.'
        assert cc.footers == ()

    def test_breaking_change_footer(self) -> None:
        """A BREAKING CHANGE footer makes the commit breaking."""
        cc = _ok('feat: new API\n\nRe-designed it.\n\nBREAKING CHANGE: removed v1')
        assert cc.body == 'Re-designed it.'
        assert cc.footers == (('BREAKING CHANGE', 'removed v1'),)
        assert cc.is_breaking
        assert not cc.breaking_marker

    def test_hyphenated_breaking_footer(self) -> None:
        """BREAKING-CHANGE is accepted as a synonym."""
        cc = _ok('fix: x\n\nBREAKING-CHANGE: config format changed')
        assert cc.is_breaking

    def test_footer_lookup_is_case_insensitive(self) -> None:
        """footer() ignores token case."""
        cc = _ok('fix: x\n\nReviewed-by: Alice\nRefs #42')
        assert cc.footer('reviewed-by') == 'Alice'
        assert cc.footer('Refs') == '42'
        assert cc.footer('Missing') is None

    def test_duplicate_footers_kept_in_order(self) -> None:
        """Repeated tokens are all kept, in message order."""
        cc = _ok('fix: x\n\nCo-authored-by: A\nCo-authored-by: B')
        assert cc.footers == (('Co-authored-by', 'A'), ('Co-authored-by', 'B'))
        assert cc.footer('co-authored-by') == 'A'

    def test_breaking_text_in_body_is_not_a_footer(self) -> None:
        """BREAKING CHANGE mid-body, followed by prose, is not a footer."""
        cc = _ok('fix: x\n\nBREAKING CHANGE: maybe\n\nActually not, see above.')
        assert cc.footers == ()
        assert not cc.is_breaking

    def test_trailing_blank_lines_ignored(self) -> None:
        """Blank lines after the footers do not hide them."""
        cc = _ok('feat: x\n\nBREAKING CHANGE: gone\n\n\n')
        assert cc.is_breaking

    def test_multi_line_breaking_footer(self) -> None:
        """A BREAKING CHANGE value that wraps onto the next line stays a footer."""
        cc = _ok('feat: new api\n\nBREAKING CHANGE: the v1 endpoints\nwere removed entirely.')
        assert cc.footers == (('BREAKING CHANGE', 'the v1 endpoints\nwere removed entirely.'),)
        assert cc.body == ''
        assert cc.is_breaking

    def test_continuation_then_next_footer(self) -> None:
        """A wrapped value ends where the next token line begins."""
        cc = _ok('fix: x\n\nBody text.\n\nBREAKING CHANGE: gone\nfor good\nRefs #42')
        assert cc.body == 'Body text.'
        assert cc.footers == (('BREAKING CHANGE', 'gone\nfor good'), ('Refs', '42'))

    def test_footers_after_prose_in_same_paragraph(self) -> None:
        """Prose lines before the first token line stay in the body."""
        cc = _ok('fix: x\n\nSome context here\nBREAKING CHANGE: y')
        assert cc.body == 'Some context here'
        assert cc.footers == (('BREAKING CHANGE', 'y'),)

    def test_footers_without_body(self) -> None:
        """A message may go straight from header to footers."""
        cc = _ok('fix: x\n\nRefs #7')
        assert cc.body == ''
        assert cc.footers == (('Refs', '7'),)


class TestProtocol:
    """Tests for the CommitParser protocol."""

    def test_conventional_parser_satisfies_protocol(self) -> None:
        """ConventionalCommitParser is a CommitParser."""
        assert isinstance(ConventionalCommitParser(), CommitParser)

    def test_parse_commit_uses_default_parser(self) -> None:
        """parse_commit matches ConventionalCommitParser().parse."""
        assert parse_commit('feat(x): y') == ConventionalCommitParser().parse('feat(x): y')
