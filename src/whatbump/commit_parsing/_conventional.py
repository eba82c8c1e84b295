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

r"""Conventional Commits header, body and footer parser.

**Header** (required)::

    type(scope)!: description

- ``type`` is one or more of ``[a-z0-9-]`` and is case-sensitive.
- ``(scope)`` is optional; the scope is one or more characters that are
  neither ``)`` nor whitespace.
- ``!`` is optional and marks a breaking change.
- The separator is the first ``": "`` in the header.

**Body** (optional): free-form text after the header, separated from it
by a blank line.

**Footers** (optional): from the first ``Token: value`` or ``Token #value``
line of the last paragraph to the end of the message. Tokens are words
joined by ``-`` or spaces, so ``BREAKING CHANGE: ...`` is a footer. A
footer value may continue on the following lines.

Unlike a validating linter, the parser never raises. A header that does
not match the grammar yields a :class:`~._types.ParseError` whose
:class:`~._types.ParseErrorReason` names the first rule that failed.
Unknown types are *not* errors; mapping types to bump levels is the
classifier's job.

Pure implementation: depends only on ``re`` and :mod:`._types`.
"""

from __future__ import annotations

import re

from whatbump.commit_parsing._types import ParsedCommit, ParseError, ParseErrorReason

_TYPE_RE: re.Pattern[str] = re.compile(r'[a-z0-9-]+')
_SCOPE_RE: re.Pattern[str] = re.compile(r'[^)\s]+')

# Git trailer: "Token: value" or "Token #value".
_FOOTER_PATTERN: re.Pattern[str] = re.compile(
    r'^(?P<token>[A-Za-z0-9]+(?:[- ][A-Za-z0-9]+)*)'  # words joined by "-" or " "
    r'(?:: | #)'  # ": " or " #" separator
    r'(?P<value>\S.*)$',  # non-empty value
)

_SEPARATOR = ': '


def _split_footers(lines: list[str]) -> tuple[str, tuple[tuple[str, str], ...]]:
    """Split the post-header lines into body and footers.

    Footers live in the last blank-separated paragraph, starting at its
    first line that matches :data:`_FOOTER_PATTERN`. Later lines that do
    not match continue the value of the footer above them::

        BREAKING CHANGE: the v1 endpoints     ← footer
        were removed entirely.                ← same footer, second line
        Refs #42                              ← next footer

    Args:
        lines: Lines after the header, leading blank lines removed.

    Returns:
        ``(body, footers)``.
    """
    end = len(lines)
    while end > 0 and not lines[end - 1].strip():
        end -= 1

    paragraph_start = end
    while paragraph_start > 0 and lines[paragraph_start - 1].strip():
        paragraph_start -= 1

    footer_start = next(
        (i for i in range(paragraph_start, end) if _FOOTER_PATTERN.match(lines[i].rstrip())),
        end,
    )

    footers: list[tuple[str, str]] = []
    for line in lines[footer_start:end]:
        m = _FOOTER_PATTERN.match(line.rstrip())
        if m:
            footers.append((m.group('token'), m.group('value').strip()))
        else:
            token, value = footers[-1]
            footers[-1] = (token, f'{value}\n{line.strip()}')

    body = '\n'.join(lines[:footer_start]).strip()
    return body, tuple(footers)


class ConventionalCommitParser:
    r"""Parser for conventional commit messages.

    The ``message`` passed to :meth:`parse` may be a bare header
    (``"feat(auth): add OAuth2"``) or a full message with body and
    footers.

    Example::

        parser = ConventionalCommitParser()

        cc = parser.parse('feat(auth): add OAuth2')
        assert cc.type == 'feat'
        assert cc.scope == 'auth'

        msg = 'feat: new API\n\nRe-designed it.\n\nBREAKING CHANGE: removed v1'
        cc = parser.parse(msg)
        assert cc.is_breaking
        assert cc.footer('breaking change') == 'removed v1'

        err = parser.parse('not a conventional commit')
        assert err.reason is ParseErrorReason.MISSING_SEPARATOR
    """

    def parse(self, message: str) -> ParsedCommit | ParseError:
        """Parse a commit message.

        Args:
            message: The commit message (header only, or the full
                message with body and footers).

        Returns:
            A :class:`ParsedCommit`, or a :class:`ParseError` naming the
            first grammar rule the header breaks.
        """
        lines = message.replace('\r\n', '\n').split('\n')
        header = lines[0].strip()

        def fail(reason: ParseErrorReason, detail: str) -> ParseError:
            return ParseError(raw=message, reason=reason, detail=detail)

        sep = header.find(_SEPARATOR)
        if sep >= 0:
            description = header[sep + len(_SEPARATOR) :].strip()
        elif header.endswith(':'):
            # "feat:" is a header with nothing after the colon.
            sep = len(header) - 1
            description = ''
        else:
            return fail(ParseErrorReason.MISSING_SEPARATOR, "missing ': ' separator")

        prefix = header[:sep]
        breaking_marker = prefix.endswith('!')
        if breaking_marker:
            prefix = prefix[:-1]

        scope = ''
        open_idx = prefix.find('(')
        if open_idx >= 0:
            commit_type = prefix[:open_idx]
            close_idx = prefix.find(')', open_idx)
            if close_idx < 0:
                return fail(ParseErrorReason.UNTERMINATED_SCOPE, "scope '(' is never closed")
            scope = prefix[open_idx + 1 : close_idx]
            if close_idx != len(prefix) - 1:
                return fail(ParseErrorReason.INVALID_SCOPE, f'unexpected text after scope: {prefix[close_idx + 1 :]!r}')
            if not _SCOPE_RE.fullmatch(scope):
                return fail(ParseErrorReason.INVALID_SCOPE, f'scope must be a single non-empty token, got {scope!r}')
        else:
            commit_type = prefix

        if not commit_type:
            return fail(ParseErrorReason.EMPTY_TYPE, 'commit type is empty')
        if not _TYPE_RE.fullmatch(commit_type):
            return fail(ParseErrorReason.INVALID_TYPE, f'commit type {commit_type!r} must match [a-z0-9-]+')
        if not description:
            return fail(ParseErrorReason.EMPTY_DESCRIPTION, 'description is empty')

        rest = lines[1:]
        while rest and not rest[0].strip():
            rest = rest[1:]
        body, footers = _split_footers(rest)

        return ParsedCommit(
            type=commit_type,
            scope=scope,
            breaking_marker=breaking_marker,
            description=description,
            body=body,
            footers=footers,
            raw=message,
        )
