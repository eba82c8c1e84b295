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

"""Semantic version bump detection from conventional commits.

The package is split into four stages:

    - Grammar parsing of commit messages (:mod:`whatbump.commit_parsing`)
    - Classification of a parsed commit to a bump level (:mod:`whatbump.rules`)
    - Aggregation of a history to one level (:mod:`whatbump.bumping`)
    - Next-version computation (:mod:`whatbump.versions`)

:mod:`whatbump.api` wires them together.
"""

__version__ = '0.1.0'

from whatbump.api import compute_next_version, decide_bump, evaluate, parse_all  # noqa: E402
from whatbump.bumping import BumpDecision, aggregate  # noqa: E402
from whatbump.commit_parsing import BumpLevel, ParsedCommit, ParseError, parse_commit  # noqa: E402
from whatbump.errors import StrictModeError, WhatBumpError  # noqa: E402
from whatbump.rules import ClassificationRules, classify  # noqa: E402
from whatbump.versions import NO_CHANGE, NoChange, SemanticVersion, next_version  # noqa: E402

__all__ = [
    'NO_CHANGE',
    'BumpDecision',
    'BumpLevel',
    'ClassificationRules',
    'NoChange',
    'ParseError',
    'ParsedCommit',
    'SemanticVersion',
    'StrictModeError',
    'WhatBumpError',
    '__version__',
    'aggregate',
    'classify',
    'compute_next_version',
    'decide_bump',
    'evaluate',
    'next_version',
    'parse_all',
    'parse_commit',
]
