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

"""Tests for whatbump.api."""

from __future__ import annotations

import pytest

from whatbump.api import compute_next_version, decide_bump, evaluate, parse_all
from whatbump.commit_parsing import (
    BumpLevel,
    ParsedCommit,
    ParseError,
    ParseErrorReason,
)
from whatbump.errors import E, StrictModeError, WhatBumpError
from whatbump.rules import ClassificationRules
from whatbump.versions import NO_CHANGE, SemanticVersion

_STRICT = ClassificationRules(strict=True)


class _UpperCaseParser:
    """Parser that accepts 'TYPE description' headers."""

    def parse(self, message: str) -> ParsedCommit | ParseError:
        head, _, rest = message.partition(' ')
        if not rest:
            return ParseError(raw=message, reason=ParseErrorReason.MISSING_SEPARATOR, detail='no space')
        return ParsedCommit(type=head.lower(), description=rest, raw=message)


class TestParseAll:
    """Tests for parse_all()."""

    def test_one_result_per_input_in_order(self) -> None:
        """Results line up with inputs."""
        results = parse_all(['fix: a', 'oops', 'feat: b'])
        assert [type(r) for r in results] == [ParsedCommit, ParseError, ParsedCommit]

    def test_errors_record_index(self) -> None:
        """Each ParseError knows its position in the input."""
        results = parse_all(['fix: a', 'oops', 'feat: b', 'nope'])
        errors = [r for r in results if isinstance(r, ParseError)]
        assert [e.index for e in errors] == [1, 3]

    def test_custom_parser(self) -> None:
        """A pluggable parser replaces the conventional grammar."""
        results = parse_all(['FEAT add widget'], parser=_UpperCaseParser())
        assert isinstance(results[0], ParsedCommit)
        assert results[0].type == 'feat'


class TestDecideBump:
    """Tests for decide_bump()."""

    def test_mixed_history(self) -> None:
        """fix + feat + chore is Minor."""
        parsed = parse_all(['fix: patch a crash', 'feat: add widget', 'chore: update deps'])
        assert decide_bump(parsed) is BumpLevel.MINOR

    def test_errors_skipped(self) -> None:
        """Malformed commits do not contribute in non-strict mode."""
        parsed = parse_all(['not a conventional commit', 'fix: x'])
        assert decide_bump(parsed) is BumpLevel.PATCH

    def test_strict_raises(self) -> None:
        """In strict mode the first malformed commit aborts."""
        parsed = parse_all(['fix: x', 'not a conventional commit'])
        with pytest.raises(StrictModeError) as exc_info:
            decide_bump(parsed, _STRICT)
        assert exc_info.value.parse_error.reason is ParseErrorReason.MISSING_SEPARATOR

    def test_empty(self) -> None:
        """No commits means no bump."""
        assert decide_bump([]) is BumpLevel.NONE


class TestComputeNextVersion:
    """Tests for compute_next_version()."""

    def test_from_string(self) -> None:
        """A version string is parsed first."""
        assert compute_next_version('1.4.2', BumpLevel.MINOR) == SemanticVersion(1, 5, 0)

    def test_from_version(self) -> None:
        """A SemanticVersion is used as is."""
        assert compute_next_version(SemanticVersion(1, 4, 2), BumpLevel.MAJOR) == SemanticVersion(2, 0, 0)

    def test_none_level(self) -> None:
        """None gives NoChange."""
        assert compute_next_version('1.4.2', BumpLevel.NONE) is NO_CHANGE

    def test_invalid_string(self) -> None:
        """A malformed version string is rejected."""
        with pytest.raises(WhatBumpError) as exc_info:
            compute_next_version('one.two', BumpLevel.PATCH)
        assert exc_info.value.code is E.VERSION_INVALID


class TestEvaluate:
    """End-to-end tests for evaluate()."""

    def test_per_commit_levels(self) -> None:
        """Per-commit levels and the aggregate are reported."""
        decision = evaluate(['fix: patch a crash', 'feat: add widget', 'chore: update deps'])
        assert decision.levels == [BumpLevel.PATCH, BumpLevel.MINOR, BumpLevel.NONE]
        assert decision.level is BumpLevel.MINOR

    def test_breaking_feat_is_major(self) -> None:
        """feat! is Major despite its type."""
        assert evaluate(['feat!: remove old api']).level is BumpLevel.MAJOR

    def test_malformed_skipped(self) -> None:
        """A malformed commit is skipped and excluded from aggregation."""
        decision = evaluate(['not a conventional commit', 'chore: x'])
        assert decision.level is BumpLevel.NONE
        assert decision.skipped == 1
        assert decision.errors[0].reason is ParseErrorReason.MISSING_SEPARATOR
        assert decision.errors[0].index == 0

    def test_malformed_strict(self) -> None:
        """In strict mode a malformed commit fails the decision."""
        with pytest.raises(StrictModeError) as exc_info:
            evaluate(['feat: x', 'not a conventional commit'], _STRICT)
        err = exc_info.value
        assert err.code is E.PARSE_MISSING_SEPARATOR
        assert err.parse_error.index == 1
        assert 'commit #2' in str(err)

    def test_strict_mode_is_a_whatbump_error(self) -> None:
        """StrictModeError is caught by generic WhatBumpError handlers."""
        with pytest.raises(WhatBumpError):
            evaluate(['oops'], _STRICT)

    def test_empty_history(self) -> None:
        """An empty history is distinguishable and needs no bump."""
        decision = evaluate([])
        assert decision.empty_history
        assert decision.level is BumpLevel.NONE

    def test_history_of_only_errors_is_not_empty(self) -> None:
        """A history of malformed commits is not an empty history."""
        decision = evaluate(['oops'])
        assert not decision.empty_history
        assert decision.level is BumpLevel.NONE

    def test_custom_rules(self) -> None:
        """Rules drive classification end to end."""
        rules = ClassificationRules.with_types({'perf': BumpLevel.MINOR})
        assert evaluate(['perf: faster', 'fix: x'], rules).level is BumpLevel.MINOR

    def test_accepts_generator(self) -> None:
        """raw_commits may be any iterable."""
        assert evaluate(m for m in ['fix: a']).level is BumpLevel.PATCH
