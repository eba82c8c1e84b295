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

"""Structured error system for whatbump.

Every diagnostic has a unique ``WB-NAMED-KEY`` code, a human-readable
message, and an optional hint with a suggested fix.

Code categories::

    WB-PARSE-*        Commit header grammar violations
    WB-HISTORY-*      Conditions on the commit history as a whole
    WB-VERSION-*      Current-version parsing errors
    WB-CONFIG-*       Configuration errors
    WB-INPUT-*        Reading commit messages from a file or stdin

Parse errors are normally *values* (:class:`~whatbump.commit_parsing.ParseError`)
rather than exceptions. They only become a :class:`StrictModeError`
when the caller asked for strict evaluation.

Usage::

    from whatbump.errors import E, WhatBumpError

    raise WhatBumpError(
        code=E.VERSION_INVALID,
        message="Version '1.2' is not valid (expected X.Y.Z)",
        hint='Pass the last released version, e.g. --from 1.2.0.',
    )
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, TextIO

from rich.console import Console
from rich.markup import escape as rich_escape

if TYPE_CHECKING:
    from whatbump.commit_parsing import ParseError


class ErrorCode(str, Enum):
    """Enumeration of all whatbump diagnostic codes."""

    # Commit header grammar
    PARSE_MISSING_SEPARATOR = 'WB-PARSE-MISSING-SEPARATOR'
    PARSE_EMPTY_TYPE = 'WB-PARSE-EMPTY-TYPE'
    PARSE_INVALID_TYPE = 'WB-PARSE-INVALID-TYPE'
    PARSE_UNTERMINATED_SCOPE = 'WB-PARSE-UNTERMINATED-SCOPE'
    PARSE_INVALID_SCOPE = 'WB-PARSE-INVALID-SCOPE'
    PARSE_EMPTY_DESCRIPTION = 'WB-PARSE-EMPTY-DESCRIPTION'

    # History
    HISTORY_EMPTY = 'WB-HISTORY-EMPTY'

    # Versioning
    VERSION_INVALID = 'WB-VERSION-INVALID'

    # Configuration
    CONFIG_NOT_FOUND = 'WB-CONFIG-NOT-FOUND'
    CONFIG_PARSE_ERROR = 'WB-CONFIG-PARSE-ERROR'
    CONFIG_INVALID_KEY = 'WB-CONFIG-INVALID-KEY'
    CONFIG_INVALID_VALUE = 'WB-CONFIG-INVALID-VALUE'

    # Input
    INPUT_UNREADABLE = 'WB-INPUT-UNREADABLE'


# Convenience alias for shorter imports.
E = ErrorCode


@dataclass(frozen=True)
class ErrorInfo:
    """Metadata for a single error code.

    Attributes:
        code: The ``WB-NAMED-KEY`` error code.
        message: Human-readable description of what went wrong.
        hint: Optional suggestion for how to fix the error.
    """

    code: ErrorCode
    message: str
    hint: str = ''


class WhatBumpError(Exception):
    """Base exception for all whatbump errors.

    Args:
        code: The error code from :class:`ErrorCode`.
        message: Human-readable description of what went wrong.
        hint: Optional suggestion for how to fix the error.
    """

    def __init__(self, code: ErrorCode, message: str, hint: str = '') -> None:
        """Initialize with an error code, message, and optional hint."""
        self.info = ErrorInfo(code=code, message=message, hint=hint)
        super().__init__(f'[{code.value}] {message}')

    @property
    def code(self) -> ErrorCode:
        """The error code."""
        return self.info.code

    @property
    def hint(self) -> str:
        """Suggestion for fixing this error, or empty string."""
        return self.info.hint


class StrictModeError(WhatBumpError):
    """Raised when strict evaluation meets a malformed commit message.

    The offending :class:`~whatbump.commit_parsing.ParseError` is kept on
    :attr:`parse_error` so callers can report the exact commit.
    """

    def __init__(self, parse_error: ParseError) -> None:
        """Wrap a parse error, taking its code from the failure reason."""
        self.parse_error = parse_error
        position = f' (commit #{parse_error.index + 1})' if parse_error.index is not None else ''
        super().__init__(
            code=parse_error.reason.code,
            message=f'{parse_error.detail}{position}: {parse_error.header!r}',
            hint='Fix the commit message, or drop --strict to skip malformed commits.',
        )


class WhatBumpWarning(UserWarning):
    """Base warning for whatbump; same shape as :class:`WhatBumpError`."""

    def __init__(self, code: ErrorCode, message: str, hint: str = '') -> None:
        """Initialize with an error code, message, and optional hint."""
        self.info = ErrorInfo(code=code, message=message, hint=hint)
        super().__init__(f'[{code.value}] {message}')

    @property
    def code(self) -> ErrorCode:
        """The error code."""
        return self.info.code

    @property
    def hint(self) -> str:
        """Suggestion for addressing this warning, or empty string."""
        return self.info.hint


ERRORS: dict[ErrorCode, ErrorInfo] = {
    E.PARSE_MISSING_SEPARATOR: ErrorInfo(
        code=E.PARSE_MISSING_SEPARATOR,
        message='The commit header has no ": " separating the type from the description.',
        hint='Write the header as "type: description", e.g. "fix: handle empty input".',
    ),
    E.PARSE_EMPTY_TYPE: ErrorInfo(
        code=E.PARSE_EMPTY_TYPE,
        message='The commit header has nothing before the scope or separator.',
        hint='Start the header with a type such as "feat" or "fix".',
    ),
    E.PARSE_INVALID_TYPE: ErrorInfo(
        code=E.PARSE_INVALID_TYPE,
        message='The commit type contains characters outside [a-z0-9-].',
        hint='Types are lowercase words, e.g. "feat", "fix", "build-deps".',
    ),
    E.PARSE_UNTERMINATED_SCOPE: ErrorInfo(
        code=E.PARSE_UNTERMINATED_SCOPE,
        message='The scope is opened with "(" but never closed.',
        hint='Close the scope before the separator: "feat(api): ...".',
    ),
    E.PARSE_INVALID_SCOPE: ErrorInfo(
        code=E.PARSE_INVALID_SCOPE,
        message='The scope is empty, contains whitespace, or is followed by stray text.',
        hint='Use a single token inside the parentheses, e.g. "fix(parser): ...".',
    ),
    E.PARSE_EMPTY_DESCRIPTION: ErrorInfo(
        code=E.PARSE_EMPTY_DESCRIPTION,
        message='The commit header has no description after the separator.',
        hint='Describe the change after ": ".',
    ),
    E.HISTORY_EMPTY: ErrorInfo(
        code=E.HISTORY_EMPTY,
        message='No commits were supplied; nothing to bump.',
        hint='Check the revision range passed to git log.',
    ),
    E.VERSION_INVALID: ErrorInfo(
        code=E.VERSION_INVALID,
        message='The current version is not a MAJOR.MINOR.PATCH semantic version.',
        hint='Pass a version like "1.4.2" (a leading "v" is accepted).',
    ),
    E.CONFIG_INVALID_KEY: ErrorInfo(
        code=E.CONFIG_INVALID_KEY,
        message='whatbump.toml contains an unknown key.',
        hint='Valid keys: breaking_tokens, default_level, strict, types.',
    ),
    E.CONFIG_NOT_FOUND: ErrorInfo(
        code=E.CONFIG_NOT_FOUND,
        message='The config file passed with --config does not exist or cannot be read.',
        hint='Fix the path, or drop --config to use ./whatbump.toml or the defaults.',
    ),
    E.CONFIG_PARSE_ERROR: ErrorInfo(
        code=E.CONFIG_PARSE_ERROR,
        message='whatbump.toml is not valid TOML.',
        hint='The error message gives the line and column of the syntax error.',
    ),
    E.CONFIG_INVALID_VALUE: ErrorInfo(
        code=E.CONFIG_INVALID_VALUE,
        message='A whatbump.toml value has the wrong type or an unknown bump level or commit type.',
        hint='Levels are "none", "patch", "minor" or "major"; [types] keys must match [a-z0-9-]+.',
    ),
    E.INPUT_UNREADABLE: ErrorInfo(
        code=E.INPUT_UNREADABLE,
        message='The commit message input could not be read as UTF-8 text.',
        hint='Pass a readable file with --input, or pipe messages on stdin.',
    ),
}


def explain(code: str) -> str | None:
    """Return a detailed explanation for an error code.

    Args:
        code: The error code string, e.g. ``"WB-PARSE-EMPTY-TYPE"``.

    Returns:
        A formatted explanation string, or ``None`` if the code is unknown.
    """
    try:
        error_code = ErrorCode(code)
    except ValueError:
        return None

    info = ERRORS.get(error_code)
    if info is None:
        return f'{code}: No detailed explanation available.'

    lines = [f'{code}: {info.message}']
    if info.hint:
        lines.append(f'  Hint: {info.hint}')
    return '\n'.join(lines)


def _render(kind: str, color: str, info: ErrorInfo, out: TextIO) -> None:
    if out.isatty():
        console = Console(file=out, highlight=False)
        msg = rich_escape(info.message)
        console.print(
            f'[bold {color}]{kind}[/bold {color}][bold {color}]\\[{info.code.value}][/bold {color}][bold]: {msg}[/bold]',
        )
        if info.hint:
            console.print('  [dim]|[/dim]')
            console.print(f'  [dim]=[/dim] [cyan]hint[/cyan]: {rich_escape(info.hint)}')
        console.print()
    else:
        print(f'{kind}[{info.code.value}]: {info.message}', file=out)  # noqa: T201 - CLI output
        if info.hint:
            print('  |', file=out)  # noqa: T201 - CLI output
            print(f'  = hint: {info.hint}', file=out)  # noqa: T201 - CLI output
        print(file=out)  # noqa: T201 - CLI output


def render_error(exc: WhatBumpError, *, file: TextIO | None = None) -> None:
    """Render an error in Rust-compiler style, coloured on a TTY.

    Output format::

        error[WB-PARSE-MISSING-SEPARATOR]: missing ': ' separator: 'oops'
          |
          = hint: Fix the commit message, or drop --strict ...

    Args:
        exc: The error to render.
        file: Output stream (defaults to ``sys.stderr``).
    """
    _render('error', 'red', exc.info, file or sys.stderr)


def render_warning(exc: WhatBumpWarning, *, file: TextIO | None = None) -> None:
    """Render a warning in the same style as :func:`render_error`."""
    _render('warning', 'yellow', exc.info, file or sys.stderr)


__all__ = [
    'E',
    'ERRORS',
    'ErrorCode',
    'ErrorInfo',
    'StrictModeError',
    'WhatBumpError',
    'WhatBumpWarning',
    'explain',
    'render_error',
    'render_warning',
]
