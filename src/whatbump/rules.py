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

"""Commit classification: map a parsed commit to a bump level.

Conventional Commit → BumpLevel mapping with the default rules::

    "!" or BREAKING CHANGE footer  →  Major   (any type, always)
    feat:                          →  Minor
    fix:                           →  Patch
    anything else                  →  default_level (None)

Usage::

    from whatbump.rules import ClassificationRules, classify

    rules = ClassificationRules.with_types({'perf': BumpLevel.PATCH})
    level = classify(parsed_commit, rules)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from whatbump.commit_parsing import DEFAULT_BREAKING_TOKENS, BumpLevel, ParsedCommit

DEFAULT_TYPE_LEVELS: Mapping[str, BumpLevel] = MappingProxyType({
    'feat': BumpLevel.MINOR,
    'fix': BumpLevel.PATCH,
})


@dataclass(frozen=True)
class ClassificationRules:
    """Immutable classification settings for one run.

    Attributes:
        type_levels: Type token → bump level. Keys are case-sensitive.
        default_level: Level for types missing from ``type_levels``.
        strict: Whether a malformed commit aborts the whole decision
            instead of being skipped.
        breaking_tokens: Extra footer tokens that declare a breaking
            change, on top of ``BREAKING CHANGE`` and ``BREAKING-CHANGE``.
            Matched case-insensitively.
    """

    type_levels: Mapping[str, BumpLevel] = field(default_factory=lambda: DEFAULT_TYPE_LEVELS)
    default_level: BumpLevel = BumpLevel.NONE
    strict: bool = False
    breaking_tokens: frozenset[str] = DEFAULT_BREAKING_TOKENS

    def __post_init__(self) -> None:
        # Private frozen copies of the caller's containers.
        object.__setattr__(self, 'type_levels', MappingProxyType(dict(self.type_levels)))
        object.__setattr__(self, 'breaking_tokens', frozenset(self.breaking_tokens))

    @classmethod
    def with_types(
        cls,
        overrides: Mapping[str, BumpLevel],
        **kwargs: object,
    ) -> ClassificationRules:
        """Build rules whose type map is the defaults updated by ``overrides``."""
        return cls(type_levels={**DEFAULT_TYPE_LEVELS, **overrides}, **kwargs)  # type: ignore[arg-type]

    def level_for_type(self, commit_type: str) -> BumpLevel:
        """Return the mapped level for ``commit_type``, or the default."""
        return self.type_levels.get(commit_type, self.default_level)


DEFAULT_RULES = ClassificationRules()


def is_breaking(commit: ParsedCommit, rules: ClassificationRules = DEFAULT_RULES) -> bool:
    """Whether ``commit`` is a breaking change under ``rules``.

    ``rules.breaking_tokens`` add to the standard ``BREAKING CHANGE``
    footers; they never replace them.
    """
    return commit.is_breaking or commit.declares_breaking(rules.breaking_tokens)


def classify(commit: ParsedCommit, rules: ClassificationRules = DEFAULT_RULES) -> BumpLevel:
    """Map a parsed commit to its bump level.

    A breaking change is ``MAJOR`` whatever its type; otherwise the type
    is looked up in ``rules``.
    """
    if is_breaking(commit, rules):
        return BumpLevel.MAJOR
    return rules.level_for_type(commit.type)


__all__ = [
    'DEFAULT_RULES',
    'DEFAULT_TYPE_LEVELS',
    'ClassificationRules',
    'classify',
    'is_breaking',
]
