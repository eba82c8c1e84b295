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

"""Programmatic Python API for whatbump.

Callers (the CLI, a git hook, a release script) hand raw commit
messages in and take a bump level or version out. Everything here is
pure apart from logging.

Key Concepts (ELI5)::

    ┌─────────────────────────┬─────────────────────────────────────────────┐
    │ Concept                 │ Plain-English                               │
    ├─────────────────────────┼─────────────────────────────────────────────┤
    │ parse_all()             │ Turn each raw message into a parsed commit  │
    │                         │ or a parse error, keeping input order.      │
    ├─────────────────────────┼─────────────────────────────────────────────┤
    │ decide_bump()           │ Classify parsed commits and keep the        │
    │                         │ strongest level.                            │
    ├─────────────────────────┼─────────────────────────────────────────────┤
    │ compute_next_version()  │ Apply the level to the current version.     │
    ├─────────────────────────┼─────────────────────────────────────────────┤
    │ evaluate()              │ All of the above in one call, returning a   │
    │                         │ BumpDecision with skipped errors attached.  │
    └─────────────────────────┴─────────────────────────────────────────────┘

Usage::

    from whatbump.api import compute_next_version, evaluate

    decision = evaluate(['fix: patch a crash', 'feat: add widget'])
    assert str(decision.level) == 'Minor'
    assert str(compute_next_version('1.4.2', decision.level)) == '1.5.0'
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable

from whatbump.bumping import BumpDecision, ClassifiedCommit, aggregate
from whatbump.commit_parsing import (
    BumpLevel,
    CommitParser,
    ConventionalCommitParser,
    ParsedCommit,
    ParseError,
)
from whatbump.errors import StrictModeError
from whatbump.logging import get_logger
from whatbump.rules import DEFAULT_RULES, ClassificationRules, classify
from whatbump.versions import NoChange, SemanticVersion, next_version

logger = get_logger(__name__)

_DEFAULT_PARSER = ConventionalCommitParser()


def parse_all(
    raw_commits: Iterable[str],
    *,
    parser: CommitParser | None = None,
) -> list[ParsedCommit | ParseError]:
    """Parse every message, one result per input, in input order.

    Each :class:`ParseError` records its position in ``raw_commits`` so
    callers can report which commit was malformed.
    """
    parser = parser or _DEFAULT_PARSER
    results: list[ParsedCommit | ParseError] = []
    for index, raw in enumerate(raw_commits):
        result = parser.parse(raw)
        if isinstance(result, ParseError):
            result = dataclasses.replace(result, index=index)
        results.append(result)
    return results


def decide_bump(
    parsed: Iterable[ParsedCommit | ParseError],
    rules: ClassificationRules = DEFAULT_RULES,
) -> BumpLevel:
    """Classify and aggregate parsed commits.

    ``ParseError`` items are skipped, unless ``rules.strict`` is set, in
    which case the first one is raised.

    Raises:
        StrictModeError: In strict mode, for the first malformed commit.
    """
    levels: list[BumpLevel] = []
    for item in parsed:
        if isinstance(item, ParseError):
            if rules.strict:
                raise StrictModeError(item)
            continue
        levels.append(classify(item, rules))
    return aggregate(levels)


def compute_next_version(
    current: SemanticVersion | str,
    level: BumpLevel,
) -> SemanticVersion | NoChange:
    """Apply ``level`` to ``current`` (a version or a version string).

    Raises:
        WhatBumpError: If ``current`` is a string that is not a semver.
    """
    if isinstance(current, str):
        current = SemanticVersion.parse(current)
    return next_version(current, level)


def evaluate(
    raw_commits: Iterable[str],
    rules: ClassificationRules = DEFAULT_RULES,
    *,
    parser: CommitParser | None = None,
) -> BumpDecision:
    """Run the whole pipeline over a commit history.

    In non-strict mode malformed commits are logged, collected on the
    decision and left out of the aggregate. In strict mode the first one
    aborts the evaluation before any level is produced.

    Args:
        raw_commits: Commit messages since the last release.
        rules: Classification rules for this run.
        parser: Optional custom parser. Defaults to
            :class:`ConventionalCommitParser`.

    Returns:
        A :class:`BumpDecision`.

    Raises:
        StrictModeError: In strict mode, for the first malformed commit.
    """
    results = parse_all(raw_commits, parser=parser)

    if not results:
        logger.info('empty_history', bump=str(BumpLevel.NONE))
        return BumpDecision()

    errors = [r for r in results if isinstance(r, ParseError)]
    if errors and rules.strict:
        logger.error('strict_parse_failure', index=errors[0].index, code=errors[0].code.value)
        raise StrictModeError(errors[0])

    classified: list[ClassifiedCommit] = []
    for result in results:
        if isinstance(result, ParseError):
            logger.warning(
                'commit_skipped',
                index=result.index,
                code=result.code.value,
                reason=result.detail,
                header=result.header,
            )
            continue
        level = classify(result, rules)
        logger.debug('commit_classified', type=result.type, scope=result.scope, bump=str(level))
        classified.append(ClassifiedCommit(commit=result, level=level))

    decision = BumpDecision(
        level=aggregate(c.level for c in classified),
        commits=tuple(classified),
        errors=tuple(errors),
        total=len(results),
    )
    logger.info(
        'bump_decided',
        bump=str(decision.level),
        commits=decision.total,
        skipped=decision.skipped,
    )
    return decision


__all__ = [
    'compute_next_version',
    'decide_bump',
    'evaluate',
    'parse_all',
]
