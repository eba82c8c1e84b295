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

"""Commit message parsing.

The :class:`CommitParser` protocol lets callers plug in another message
format while keeping the same classification and bump machinery.

Built-in parsers:

- :class:`ConventionalCommitParser`: ``type(scope)!: description``

Usage::

    from whatbump.commit_parsing import ParsedCommit, parse_commit

    cc = parse_commit('feat(auth): add OAuth2')
    assert isinstance(cc, ParsedCommit)
    assert cc.type == 'feat'
"""

from whatbump.commit_parsing._conventional import ConventionalCommitParser
from whatbump.commit_parsing._types import (
    BUMP_ORDER,
    DEFAULT_BREAKING_TOKENS,
    BumpLevel,
    CommitParser,
    ParsedCommit,
    ParseError,
    ParseErrorReason,
    max_bump,
)

# Module-level singleton for convenience.
_DEFAULT_PARSER = ConventionalCommitParser()


def parse_commit(message: str) -> ParsedCommit | ParseError:
    """Parse a single commit message with the default parser.

    Args:
        message: The commit message (header, or full message with body
            and footers).

    Returns:
        A :class:`ParsedCommit`, or a :class:`ParseError` for a
        malformed header.
    """
    return _DEFAULT_PARSER.parse(message)


__all__ = [
    'BUMP_ORDER',
    'DEFAULT_BREAKING_TOKENS',
    'BumpLevel',
    'CommitParser',
    'ConventionalCommitParser',
    'ParseError',
    'ParseErrorReason',
    'ParsedCommit',
    'max_bump',
    'parse_commit',
]
