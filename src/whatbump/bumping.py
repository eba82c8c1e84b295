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

"""Bump aggregation: reduce per-commit levels to one decision.

The aggregate of a history is the strongest level in it, under the
fixed order ``None < Patch < Minor < Major``. ``max`` is commutative,
associative and idempotent, so a history can be split into slices,
each slice decided on its own, and the partial results merged::

    whole = aggregate(levels)
    parts = aggregate([aggregate(levels[:n]), aggregate(levels[n:])])
    assert whole == parts

:class:`BumpDecision` carries the same guarantee for full pipeline
results via :meth:`BumpDecision.merge`.
"""

from __future__ import annotations

import dataclasses
import functools
from collections.abc import Iterable
from dataclasses import dataclass

from whatbump.commit_parsing import BumpLevel, ParsedCommit, ParseError, max_bump


def aggregate(levels: Iterable[BumpLevel]) -> BumpLevel:
    """Return the strongest level in ``levels``; ``NONE`` when empty.

    >>> aggregate([BumpLevel.PATCH, BumpLevel.MINOR, BumpLevel.NONE])
    <BumpLevel.MINOR: 'minor'>
    >>> aggregate([])
    <BumpLevel.NONE: 'none'>
    """
    return functools.reduce(max_bump, levels, BumpLevel.NONE)


@dataclass(frozen=True)
class ClassifiedCommit:
    """A parsed commit together with the level it was classified as."""

    commit: ParsedCommit
    level: BumpLevel


@dataclass(frozen=True)
class BumpDecision:
    """Outcome of evaluating a commit history.

    Attributes:
        level: The aggregated bump level.
        commits: Every well-formed commit with its level, in input order.
        errors: Malformed commits that were skipped, in input order.
        total: Number of raw commits that were evaluated.
    """

    level: BumpLevel = BumpLevel.NONE
    commits: tuple[ClassifiedCommit, ...] = ()
    errors: tuple[ParseError, ...] = ()
    total: int = 0

    @property
    def levels(self) -> list[BumpLevel]:
        """Per-commit levels of the well-formed commits."""
        return [c.level for c in self.commits]

    @property
    def empty_history(self) -> bool:
        """``True`` when no commits at all were supplied."""
        return self.total == 0

    @property
    def skipped(self) -> int:
        """Number of malformed commits excluded from aggregation."""
        return len(self.errors)

    def merge(self, other: BumpDecision) -> BumpDecision:
        """Combine decisions computed over two disjoint slices of a history.

        ``self`` is taken to precede ``other``; error indexes from
        ``other`` are shifted so they stay positions in the combined
        history.
        """
        shifted = tuple(
            e if e.index is None else dataclasses.replace(e, index=e.index + self.total) for e in other.errors
        )
        return BumpDecision(
            level=max_bump(self.level, other.level),
            commits=self.commits + other.commits,
            errors=self.errors + shifted,
            total=self.total + other.total,
        )


__all__ = [
    'BumpDecision',
    'ClassifiedCommit',
    'aggregate',
]
