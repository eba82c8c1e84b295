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

"""Semantic versions and next-version computation.

Bump rules::

    Major  →  (major + 1, 0, 0)
    Minor  →  (major, minor + 1, 0)
    Patch  →  (major, minor, patch + 1)
    None   →  NoChange (do not publish)

Pre-release and build metadata on the current version are accepted by
:meth:`SemanticVersion.parse` but not kept, so ``1.2.3-rc.1+b7`` bumped
by ``Patch`` is ``1.2.4``.

Usage::

    from whatbump.versions import SemanticVersion, next_version

    v = SemanticVersion.parse('v1.4.2')
    assert next_version(v, BumpLevel.MINOR) == SemanticVersion(1, 5, 0)
    assert next_version(v, BumpLevel.NONE) is NO_CHANGE
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from whatbump.commit_parsing import BumpLevel
from whatbump.errors import E, WhatBumpError

_SEMVER_RE = re.compile(
    r'^[vV]?(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)'
    r'(?:-(?P<prerelease>[0-9A-Za-z.-]+))?'
    r'(?:\+(?P<build>[0-9A-Za-z.-]+))?$',
)


class NoChange(Enum):
    """Sentinel meaning "no new version should be published"."""

    NO_CHANGE = 'no-change'

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return 'NoChange'


NO_CHANGE = NoChange.NO_CHANGE


@dataclass(frozen=True, order=True)
class SemanticVersion:
    """An immutable ``MAJOR.MINOR.PATCH`` version.

    Attributes:
        major: Major component, non-negative.
        minor: Minor component, non-negative.
        patch: Patch component, non-negative.
    """

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        for name in ('major', 'minor', 'patch'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise WhatBumpError(
                    code=E.VERSION_INVALID,
                    message=f'{name} must be a non-negative integer, got {value!r}',
                )

    @classmethod
    def parse(cls, text: str) -> SemanticVersion:
        """Parse ``X.Y.Z`` with optional ``v`` prefix and semver suffixes.

        Raises:
            WhatBumpError: If ``text`` is not a semantic version.
        """
        m = _SEMVER_RE.match(text.strip())
        if m is None:
            raise WhatBumpError(
                code=E.VERSION_INVALID,
                message=f'Version {text!r} is not valid (expected MAJOR.MINOR.PATCH)',
                hint='Use a version string like "1.2.3"; a leading "v" is accepted.',
            )
        return cls(int(m.group('major')), int(m.group('minor')), int(m.group('patch')))

    def bump(self, level: BumpLevel) -> SemanticVersion:
        """Return this version bumped by ``level`` (``NONE`` returns ``self``)."""
        if level is BumpLevel.MAJOR:
            return SemanticVersion(self.major + 1, 0, 0)
        if level is BumpLevel.MINOR:
            return SemanticVersion(self.major, self.minor + 1, 0)
        if level is BumpLevel.PATCH:
            return SemanticVersion(self.major, self.minor, self.patch + 1)
        return self

    def __str__(self) -> str:
        return f'{self.major}.{self.minor}.{self.patch}'


def next_version(current: SemanticVersion, level: BumpLevel) -> SemanticVersion | NoChange:
    """Apply ``level`` to ``current``.

    Returns:
        The bumped version, or :data:`NO_CHANGE` when ``level`` is ``NONE``.
    """
    if level is BumpLevel.NONE:
        return NO_CHANGE
    return current.bump(level)


__all__ = [
    'NO_CHANGE',
    'NoChange',
    'SemanticVersion',
    'next_version',
]
