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

"""Pure types for commit message parsing.

Everything here is a frozen dataclass, enum, or protocol: no I/O, no
logging, no side effects. The only project import is the error code
enum, so a :class:`ParseError` can name its diagnostic code.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable

from whatbump.errors import ErrorCode

# Footer tokens that declare a breaking change. Compared case-insensitively.
DEFAULT_BREAKING_TOKENS: frozenset[str] = frozenset({'BREAKING CHANGE', 'BREAKING-CHANGE'})


class BumpLevel(Enum):
    """Semver bump levels, totally ordered ``NONE < PATCH < MINOR < MAJOR``.

    The order is fixed by :data:`BUMP_ORDER` and never depends on
    configuration. ``str()`` gives the capitalised name printed by the
    CLI (``Major``, ``Minor``, ``Patch``, ``None``).
    """

    NONE = 'none'
    PATCH = 'patch'
    MINOR = 'minor'
    MAJOR = 'major'

    @property
    def rank(self) -> int:
        """Position in :data:`BUMP_ORDER` (0 for ``NONE``)."""
        return BUMP_ORDER.index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, BumpLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, BumpLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, BumpLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, BumpLevel):
            return NotImplemented
        return self.rank >= other.rank

    def __str__(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, text: str) -> BumpLevel:
        """Look up a level by name, case-insensitively.

        >>> BumpLevel.parse('Minor')
        <BumpLevel.MINOR: 'minor'>

        Raises:
            ValueError: If ``text`` names no level.
        """
        try:
            return cls(text.strip().lower())
        except ValueError:
            names = ', '.join(level.value for level in BUMP_ORDER)
            raise ValueError(f'Unknown bump level {text!r} (expected one of: {names})') from None


# Fixed ascending order; index = rank.
BUMP_ORDER: tuple[BumpLevel, ...] = (
    BumpLevel.NONE,
    BumpLevel.PATCH,
    BumpLevel.MINOR,
    BumpLevel.MAJOR,
)


def max_bump(a: BumpLevel, b: BumpLevel) -> BumpLevel:
    """Return the stronger of two bump levels.

    >>> max_bump(BumpLevel.MINOR, BumpLevel.PATCH)
    <BumpLevel.MINOR: 'minor'>
    >>> max_bump(BumpLevel.NONE, BumpLevel.MAJOR)
    <BumpLevel.MAJOR: 'major'>
    """
    return a if a >= b else b


class ParseErrorReason(Enum):
    """Why a commit header failed the grammar."""

    MISSING_SEPARATOR = 'MissingSeparator'
    EMPTY_TYPE = 'EmptyType'
    INVALID_TYPE = 'InvalidType'
    UNTERMINATED_SCOPE = 'UnterminatedScope'
    INVALID_SCOPE = 'InvalidScope'
    EMPTY_DESCRIPTION = 'EmptyDescription'

    @property
    def code(self) -> ErrorCode:
        """The structured diagnostic code for this reason."""
        return _REASON_CODES[self]


_REASON_CODES: dict[ParseErrorReason, ErrorCode] = {
    ParseErrorReason.MISSING_SEPARATOR: ErrorCode.PARSE_MISSING_SEPARATOR,
    ParseErrorReason.EMPTY_TYPE: ErrorCode.PARSE_EMPTY_TYPE,
    ParseErrorReason.INVALID_TYPE: ErrorCode.PARSE_INVALID_TYPE,
    ParseErrorReason.UNTERMINATED_SCOPE: ErrorCode.PARSE_UNTERMINATED_SCOPE,
    ParseErrorReason.INVALID_SCOPE: ErrorCode.PARSE_INVALID_SCOPE,
    ParseErrorReason.EMPTY_DESCRIPTION: ErrorCode.PARSE_EMPTY_DESCRIPTION,
}


@dataclass(frozen=True)
class ParsedCommit:
    """A commit message that matched the conventional-commit grammar.

    Attributes:
        type: The commit type (e.g. ``"feat"``). Case-sensitive.
        description: The header text after ``": "``, trimmed.
        scope: The optional scope (e.g. ``"auth"``), ``''`` when absent.
        breaking_marker: Whether ``!`` appeared directly before the colon.
        body: Free-form text between the header and the footers.
        footers: Trailing ``(token, value)`` pairs in message order.
            Duplicate tokens are allowed per the git trailer convention.
        raw: The original unparsed commit message.
    """

    type: str
    description: str
    scope: str = ''
    breaking_marker: bool = False
    body: str = ''
    footers: tuple[tuple[str, str], ...] = ()
    raw: str = ''

    @property
    def is_breaking(self) -> bool:
        """``True`` for a ``!`` marker or a ``BREAKING CHANGE`` footer."""
        return self.breaking_marker or self.declares_breaking(DEFAULT_BREAKING_TOKENS)

    def declares_breaking(self, tokens: frozenset[str] | set[str]) -> bool:
        """Whether any footer token matches one of ``tokens``, ignoring case."""
        wanted = {t.casefold() for t in tokens}
        return any(token.casefold() in wanted for token, _ in self.footers)

    def footer(self, token: str) -> str | None:
        """Return the first footer value for ``token`` (case-insensitive)."""
        key = token.casefold()
        for name, value in self.footers:
            if name.casefold() == key:
                return value
        return None

    @property
    def header(self) -> str:
        """Rebuild the header line from the structured fields."""
        scope = f'({self.scope})' if self.scope else ''
        bang = '!' if self.breaking_marker else ''
        return f'{self.type}{scope}{bang}: {self.description}'


@dataclass(frozen=True)
class ParseError:
    """A commit message that did not match the header grammar.

    Attributes:
        raw: The offending commit message, unchanged.
        reason: Which grammar rule failed.
        detail: Human-readable explanation of the failure.
        index: Position of the message in the input history, when known.
    """

    raw: str
    reason: ParseErrorReason
    detail: str = ''
    index: int | None = None

    @property
    def header(self) -> str:
        """The first line of :attr:`raw`, trimmed."""
        return self.raw.split('\n', 1)[0].strip()

    @property
    def code(self) -> ErrorCode:
        """Shortcut for ``self.reason.code``."""
        return self.reason.code


@runtime_checkable
class CommitParser(Protocol):
    """Protocol for commit message parsers.

    A parser receives a full commit message and returns either a
    :class:`ParsedCommit` or a :class:`ParseError`. It must never raise
    for any string input.

    Example custom parser::

        class JiraCommitParser:
            def parse(self, message: str) -> ParsedCommit | ParseError:
                # Parse "[PROJ-123] fix: description" format
                ...
    """

    def parse(self, message: str) -> ParsedCommit | ParseError:
        """Parse a commit message.

        Args:
            message: The full commit message.

        Returns:
            A :class:`ParsedCommit` on success, else a :class:`ParseError`.
        """
        ...
