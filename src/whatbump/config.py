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

"""Configuration reader for whatbump.

Reads ``whatbump.toml`` and returns a validated :class:`BumpConfig`,
from which the :class:`~whatbump.rules.ClassificationRules` for a run
are built.

Validation Pipeline::

    whatbump.toml
    ┌──────────────────┐
    │ defualt_level =  │  ← typo!
    └────────┬─────────┘
             │
             ▼
    ┌──────────────────┐     ┌──────────────────────────────┐
    │ 1. Unknown key   │────→│ WB-CONFIG-INVALID-KEY:       │
    │    detection     │     │ hint: "Did you mean          │
    └────────┬─────────┘     │       'default_level'?"      │
             │               └──────────────────────────────┘
             ▼
    ┌──────────────────┐     ┌──────────────────────────────┐
    │ 2. Type check    │────→│ WB-CONFIG-INVALID-VALUE:     │
    │    each value    │     │ 'strict' must be bool        │
    └────────┬─────────┘     └──────────────────────────────┘
             │
             ▼
    ┌──────────────────┐     ┌──────────────────────────────┐
    │ 3. Value check   │────→│ WB-CONFIG-INVALID-VALUE:     │
    │    (levels,      │     │ types.feat: unknown bump     │
    │    type tokens)  │     │ level 'minr'                 │
    └────────┬─────────┘     └──────────────────────────────┘
             │
             ▼
    ┌──────────────────┐
    │ BumpConfig()     │  ← frozen dataclass, ready to use
    └──────────────────┘

Supported keys::

    default_level   = "none"                                # level for unmapped types
    strict          = false                                 # abort on malformed commits
    breaking_tokens = ["Incompatible"]                      # on top of BREAKING CHANGE

    [types]                                                 # merged over feat/fix defaults
    perf = "patch"
    docs = "none"

Usage::

    from whatbump.config import load_config

    cfg = load_config()  # ./whatbump.toml, or defaults if absent
    rules = cfg.to_rules()
"""

from __future__ import annotations

import difflib
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomlkit
import tomlkit.exceptions

from whatbump.commit_parsing import DEFAULT_BREAKING_TOKENS, BumpLevel
from whatbump.errors import E, WhatBumpError
from whatbump.logging import get_logger
from whatbump.rules import DEFAULT_TYPE_LEVELS, ClassificationRules

logger = get_logger(__name__)

CONFIG_FILENAME = 'whatbump.toml'

VALID_KEYS: frozenset[str] = frozenset({
    'breaking_tokens',
    'default_level',
    'strict',
    'types',
})

_TYPE_TOKEN_RE = re.compile(r'[a-z0-9-]+')

_TYPE_MAP: dict[str, type | tuple[type, ...]] = {
    'breaking_tokens': list,
    'default_level': str,
    'strict': bool,
    'types': dict,
}


@dataclass(frozen=True)
class BumpConfig:
    """Validated configuration for a whatbump run.

    Attributes:
        types: Type token → bump level, defaults merged with the file.
        default_level: Level for types missing from ``types``.
        strict: Abort on the first malformed commit.
        breaking_tokens: Extra footer tokens that declare a breaking change.
        config_path: The file that was loaded, or ``None`` for defaults.
    """

    types: dict[str, BumpLevel] = field(default_factory=lambda: dict(DEFAULT_TYPE_LEVELS))
    default_level: BumpLevel = BumpLevel.NONE
    strict: bool = False
    breaking_tokens: frozenset[str] = DEFAULT_BREAKING_TOKENS
    config_path: Path | None = None

    def to_rules(self, *, strict: bool | None = None) -> ClassificationRules:
        """Build classification rules, optionally overriding ``strict``."""
        return ClassificationRules(
            type_levels=self.types,
            default_level=self.default_level,
            strict=self.strict if strict is None else strict,
            breaking_tokens=self.breaking_tokens,
        )


def _invalid(message: str, hint: str = '') -> WhatBumpError:
    return WhatBumpError(code=E.CONFIG_INVALID_VALUE, message=message, hint=hint)


def _validate_value_type(key: str, value: Any) -> None:  # noqa: ANN401 - dynamic config values
    """Raise if a config value has the wrong type."""
    expected = _TYPE_MAP[key]
    if not isinstance(value, expected):
        type_name = expected.__name__ if isinstance(expected, type) else str(expected)
        raise _invalid(
            f"'{key}' must be {type_name}, got {type(value).__name__}",
            hint=f'Check the value of {key} in {CONFIG_FILENAME}.',
        )


def _parse_level(value: Any, where: str) -> BumpLevel:  # noqa: ANN401
    if not isinstance(value, str):
        raise _invalid(f'{where} must be a bump level name, got {type(value).__name__}')
    try:
        return BumpLevel.parse(value)
    except ValueError as exc:
        raise _invalid(f'{where}: {exc}', hint='Use one of "none", "patch", "minor", "major".') from exc


def _parse_types(raw: dict[str, Any]) -> dict[str, BumpLevel]:  # noqa: ANN401
    types = dict(DEFAULT_TYPE_LEVELS)
    for token, value in raw.items():
        if not _TYPE_TOKEN_RE.fullmatch(token):
            raise _invalid(
                f"types: '{token}' is not a valid commit type",
                hint='Commit types are matched case-sensitively and must match [a-z0-9-]+.',
            )
        types[token] = _parse_level(value, f'types.{token}')
    return types


def _parse_breaking_tokens(items: list[Any]) -> frozenset[str]:  # noqa: ANN401
    tokens: set[str] = set()
    for item in items:
        if not isinstance(item, str) or not item.strip():
            raise _invalid(
                f"'breaking_tokens' items must be non-empty strings, got {item!r}",
                hint='Example: breaking_tokens = ["BREAKING CHANGE", "BREAKING-CHANGE"]',
            )
        tokens.add(item.strip())
    if not tokens:
        raise _invalid(
            "'breaking_tokens' must not be empty",
            hint='Remove the key to use the defaults.',
        )
    return frozenset(tokens)


def parse_config(raw: dict[str, Any], *, config_path: Path | None = None) -> BumpConfig:  # noqa: ANN401
    """Validate a plain mapping (e.g. an unwrapped TOML document).

    Raises:
        WhatBumpError: On unknown keys or invalid values.
    """
    for key in raw:
        if key not in VALID_KEYS:
            suggestion = difflib.get_close_matches(key, VALID_KEYS, n=1, cutoff=0.6)
            hint = f"Did you mean '{suggestion[0]}'?" if suggestion else f'Valid keys: {", ".join(sorted(VALID_KEYS))}.'
            raise WhatBumpError(
                code=E.CONFIG_INVALID_KEY,
                message=f"Unknown key '{key}' in {CONFIG_FILENAME}",
                hint=hint,
            )

    for key, value in raw.items():
        _validate_value_type(key, value)

    kwargs: dict[str, Any] = {'config_path': config_path}
    if 'types' in raw:
        kwargs['types'] = _parse_types(raw['types'])
    if 'default_level' in raw:
        kwargs['default_level'] = _parse_level(raw['default_level'], 'default_level')
    if 'strict' in raw:
        kwargs['strict'] = raw['strict']
    if 'breaking_tokens' in raw:
        kwargs['breaking_tokens'] = _parse_breaking_tokens(raw['breaking_tokens'])
    return BumpConfig(**kwargs)


def load_config(path: Path | None = None, *, search_dir: Path | None = None) -> BumpConfig:
    """Load and validate ``whatbump.toml``.

    Args:
        path: Explicit config file. It must exist.
        search_dir: Directory to look for ``whatbump.toml`` in when
            ``path`` is not given. Defaults to the current directory.
            A missing file there yields the default configuration.

    Returns:
        A validated :class:`BumpConfig`.

    Raises:
        WhatBumpError: If the file is unreadable, not TOML, or invalid.
    """
    if path is None:
        path = (search_dir or Path.cwd()) / CONFIG_FILENAME
        if not path.is_file():
            logger.debug('no_whatbump_config', path=str(path))
            return BumpConfig()
    elif not path.is_file():
        raise WhatBumpError(
            code=E.CONFIG_NOT_FOUND,
            message=f'Config file {path} does not exist',
            hint='Check the --config path.',
        )

    try:
        text = path.read_text(encoding='utf-8')
    except OSError as exc:
        raise WhatBumpError(
            code=E.CONFIG_NOT_FOUND,
            message=f'Failed to read {path}: {exc}',
        ) from exc

    try:
        doc = tomlkit.parse(text)
    except tomlkit.exceptions.TOMLKitError as exc:
        raise WhatBumpError(
            code=E.CONFIG_PARSE_ERROR,
            message=f'Failed to parse {path}: {exc}',
        ) from exc

    config = parse_config(doc.unwrap(), config_path=path)
    logger.debug(
        'config_loaded',
        path=str(path),
        types=len(config.types),
        default_level=str(config.default_level),
        strict=config.strict,
    )
    return config


__all__ = [
    'CONFIG_FILENAME',
    'VALID_KEYS',
    'BumpConfig',
    'load_config',
    'parse_config',
]
