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

"""CLI entry point for whatbump.

Reads commit messages (one per line, or NUL-separated as produced by
``git log -z``) and prints the required bump or the next version.

Subcommands::

    whatbump detect   Print the bump level, or the next version with --from
    whatbump check    Validate commit messages and report every malformed one
    whatbump explain  Explain an error code

Usage::

    # Bump level for everything since the last tag:
    git log --format=%B -z v1.4.2..HEAD | whatbump detect

    # Next version:
    git log --format=%B -z v1.4.2..HEAD | whatbump detect --from 1.4.2

    # Fail CI on malformed commit messages:
    git log --format=%s origin/main..HEAD | whatbump check

    # Explain an error:
    whatbump explain WB-PARSE-MISSING-SEPARATOR
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from rich_argparse import RichHelpFormatter

from whatbump import __version__
from whatbump.api import compute_next_version, evaluate, parse_all
from whatbump.commit_parsing import ParseError
from whatbump.config import load_config
from whatbump.errors import (
    E,
    WhatBumpError,
    WhatBumpWarning,
    explain,
    render_error,
    render_warning,
)
from whatbump.logging import configure_logging, get_logger
from whatbump.versions import NoChange, SemanticVersion

logger = get_logger(__name__)


def read_messages(text: str) -> list[str]:
    """Split raw input into commit messages.

    NUL-separated input keeps multi-line messages intact; otherwise
    each non-blank line is one commit header.
    """
    if '\0' in text:
        return [m for m in text.split('\0') if m.strip()]
    return [line for line in text.splitlines() if line.strip()]


def _read_input(args: argparse.Namespace) -> list[str]:
    path: Path | None = args.input
    if path is None:
        return read_messages(sys.stdin.read())
    try:
        return read_messages(path.read_text(encoding='utf-8'))
    except (OSError, UnicodeDecodeError) as exc:
        raise WhatBumpError(
            code=E.INPUT_UNREADABLE,
            message=f'Cannot read commit messages from {path}: {exc}',
            hint='Pass a readable UTF-8 file, or pipe messages on stdin.',
        ) from exc


def _cmd_detect(args: argparse.Namespace) -> int:
    """Handle the ``detect`` subcommand."""
    config = load_config(args.config)
    rules = config.to_rules(strict=True if args.strict else None)

    # Parse --from before reading stdin.
    current = SemanticVersion.parse(args.from_version) if args.from_version is not None else None

    messages = _read_input(args)
    decision = evaluate(messages, rules)
    if decision.empty_history and not args.quiet:
        render_warning(
            WhatBumpWarning(
                code=E.HISTORY_EMPTY,
                message='No commit messages were supplied',
                hint='Check the git log range piped into whatbump.',
            ),
        )

    next_ver = None
    if current is not None:
        next_ver = compute_next_version(current, decision.level)

    if args.format == 'json':
        data: dict[str, object] = {
            'bump': str(decision.level),
            'commits': decision.total,
            'classified': [
                {'type': c.commit.type, 'scope': c.commit.scope, 'level': str(c.level), 'header': c.commit.header}
                for c in decision.commits
            ],
            'skipped': [
                {'index': e.index, 'code': e.code.value, 'header': e.header} for e in decision.errors
            ],
        }
        if current is not None:
            data['current_version'] = str(current)
            data['next_version'] = None if isinstance(next_ver, NoChange) else str(next_ver)
        print(json.dumps(data, indent=2))  # noqa: T201 - CLI output
        return 0

    if current is None:
        print(decision.level)  # noqa: T201 - CLI output
    elif isinstance(next_ver, NoChange):
        # Nothing to publish: echo the current version unchanged.
        print(current)  # noqa: T201 - CLI output
    else:
        print(next_ver)  # noqa: T201 - CLI output
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the ``check`` subcommand."""
    messages = _read_input(args)
    errors = [r for r in parse_all(messages) if isinstance(r, ParseError)]
    for err in errors:
        render_warning(
            WhatBumpWarning(
                code=err.code,
                message=f'{err.detail} (commit #{(err.index or 0) + 1}): {err.header!r}',
            ),
        )
    if errors:
        print(f'{len(errors)} of {len(messages)} commit messages are malformed.')  # noqa: T201 - CLI output
        return 1
    print(f'All {len(messages)} commit messages are well-formed.')  # noqa: T201 - CLI output
    return 0


def _cmd_explain(args: argparse.Namespace) -> int:
    """Handle the ``explain`` subcommand."""
    result = explain(args.code)
    if result is None:
        print(f'Unknown error code: {args.code}')  # noqa: T201 - CLI output
        return 1
    print(result)  # noqa: T201 - CLI output
    return 0


def _add_input_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--input',
        '-i',
        metavar='FILE',
        type=Path,
        default=None,
        help='Read commit messages from FILE instead of stdin.',
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    Returns:
        Configured :class:`argparse.ArgumentParser`.
    """
    RichHelpFormatter.styles['argparse.groups'] = 'bold yellow'
    parser = argparse.ArgumentParser(
        prog='whatbump',
        description='Detect the semantic version bump implied by conventional commits.',
        formatter_class=RichHelpFormatter,
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}',
    )
    parser.add_argument(
        '--verbose',
        '-v',
        action='store_true',
        help='Log every classified commit.',
    )
    parser.add_argument(
        '--quiet',
        '-q',
        action='store_true',
        help='Only log warnings and errors.',
    )
    parser.add_argument(
        '--json-log',
        action='store_true',
        help='Emit logs as JSON lines on stderr.',
    )

    subparsers = parser.add_subparsers(dest='command')

    detect_parser = subparsers.add_parser(
        'detect',
        help='Print the bump level, or the next version with --from.',
    )
    _add_input_argument(detect_parser)
    detect_parser.add_argument(
        '--from',
        dest='from_version',
        metavar='VERSION',
        default=None,
        help='Current version; print the next version instead of the bump level.',
    )
    detect_parser.add_argument(
        '--config',
        '-c',
        metavar='FILE',
        type=Path,
        default=None,
        help='Path to whatbump.toml (default: ./whatbump.toml if present).',
    )
    detect_parser.add_argument(
        '--strict',
        action='store_true',
        help='Fail on the first malformed commit instead of skipping it.',
    )
    detect_parser.add_argument(
        '--format',
        choices=['text', 'json'],
        default='text',
        help='Output format (default: text).',
    )

    check_parser = subparsers.add_parser(
        'check',
        help='Report every malformed commit message.',
    )
    _add_input_argument(check_parser)

    explain_parser = subparsers.add_parser(
        'explain',
        help='Explain an error code.',
    )
    explain_parser.add_argument(
        'code',
        help='Error code to explain (e.g. WB-PARSE-EMPTY-TYPE).',
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Args:
        argv: Arguments to parse. Defaults to ``sys.argv[1:]``.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet, json_log=args.json_log)

    try:
        command = args.command
        if command == 'detect':
            return _cmd_detect(args)
        if command == 'check':
            return _cmd_check(args)
        if command == 'explain':
            return _cmd_explain(args)

        parser.print_help()  # noqa: T201 - CLI output
        print(  # noqa: T201 - CLI output
            f'\n{parser.prog}: error: please provide a command',
            file=sys.stderr,
        )
        return 2

    except WhatBumpError as exc:
        render_error(exc)
        return 1
    except KeyboardInterrupt:
        logger.info('interrupted')
        return 130


def _main() -> None:
    """Wrapper for pyproject.toml [project.scripts] entry point."""
    sys.exit(main())


__all__ = [
    'build_parser',
    'main',
    'read_messages',
]
