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

"""Configuration reader for commitkit.

Reads ``commitkit.toml`` from the project root and returns a validated,
frozen :class:`CommitKitConfig`. Keys are flat (no ``[tool.commitkit]``
nesting). The config is loaded once and then passed explicitly to
every call; nothing in the core reads it from ambient state.

Validation Pipeline::

    commitkit.toml
    ┌──────────────────────┐
    │ type_impacts = {...} │  ← typo!
    └──────────┬───────────┘
               │
               ▼
    ┌──────────────────┐     ┌──────────────────────────────┐
    │ 1. Unknown key   │────→│ CK-CONFIG-INVALID-KEY:       │
    │    detection     │     │ hint: "Did you mean          │
    └────────┬─────────┘     │       'type_impact'?"        │
             │               └──────────────────────────────┘
             ▼
    ┌──────────────────┐     ┌──────────────────────────────┐
    │ 2. Type check    │────→│ CK-CONFIG-INVALID-VALUE:     │
    │    each value    │     │ Expected bool, got str       │
    └────────┬─────────┘     └──────────────────────────────┘
             │
             ▼
    ┌──────────────────┐     ┌──────────────────────────────┐
    │ 3. Value check   │────→│ CK-CONFIG-INVALID-VALUE:     │
    │    (impacts,     │     │ impact must be one of        │
    │     names, ...)  │     │ none, patch, minor, major    │
    └────────┬─────────┘     └──────────────────────────────┘
             │
             ▼
    ┌──────────────────┐
    │ CommitKitConfig  │  ← frozen dataclass, ready to use
    └──────────────────┘

Supported keys in ``commitkit.toml``::

    types = { feat = true, wip = true, style = false }  # enable/disable types
    type_impact = { perf = "minor", wip = "none" }      # none|patch|minor|major
    pre_one_zero_major_bumps_minor = true
    include_breaking_in_type_group = true
    branch_categories = ["feature", "bugfix", "hotfix", "release"]
    skip_release_patterns = ["[skip release]", "[no release]"]
    section_headings = { feat = "New Features" }

Usage::

    from commitkit.config import load_config

    cfg = load_config(Path('.'))
    cfg.policy.impact_for('feat')  # ChangeImpact.MINOR
"""

from __future__ import annotations

import difflib
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import tomlkit
import tomlkit.exceptions

from commitkit.branch import DEFAULT_BRANCH_CATEGORIES
from commitkit.changelog import BREAKING_KEY, heading_for
from commitkit.classify import DEFAULT_TYPE_IMPACT, TypeImpactPolicy
from commitkit.commit_parsing import DEFAULT_COMMIT_TYPES, ChangeImpact
from commitkit.errors import CommitKitError, E
from commitkit.logging import get_logger

logger = get_logger(__name__)

# The config file name at the project root.
CONFIG_FILENAME = 'commitkit.toml'

# Commit types and branch categories: lowercase letter, then lowercase
# letters, digits, or hyphens.
_NAME_RE = re.compile(r'[a-z][a-z0-9-]*')

# All recognized top-level keys in commitkit.toml.
VALID_KEYS: frozenset[str] = frozenset({
    'branch_categories',
    'include_breaking_in_type_group',
    'pre_one_zero_major_bumps_minor',
    'section_headings',
    'skip_release_patterns',
    'type_impact',
    'types',
})

DEFAULT_SKIP_RELEASE_PATTERNS: tuple[str, ...] = (
    '[skip release]',
    '[release skip]',
    '[no release]',
)

# Accepted spellings for type_impact values.
IMPACT_NAMES: dict[str, ChangeImpact] = {impact.value: impact for impact in ChangeImpact}


@dataclass(frozen=True)
class CommitKitConfig:
    """Validated configuration for a commitkit run.

    Attributes:
        types: Accepted commit types.
        type_impact: Commit type → impact (types not listed have none).
        pre_one_zero_major_bumps_minor: On ``0.x``, a breaking change
            bumps MINOR instead of MAJOR.
        include_breaking_in_type_group: List breaking commits under
            their type heading as well as under "Breaking Changes".
        branch_categories: Accepted branch categories.
        skip_release_patterns: Markers that drop a commit from release
            computation (matched case-insensitively).
        section_headings: Changelog heading overrides keyed by type.
        config_path: Path to the commitkit.toml that was loaded.

    ``type_impact`` and ``section_headings`` are stored as read-only
    mappings, so a config cannot change in the middle of a batch.
    Every enabled type (and the breaking section) must resolve to a
    distinct heading.
    """

    types: frozenset[str] = DEFAULT_COMMIT_TYPES
    type_impact: Mapping[str, ChangeImpact] = field(default_factory=lambda: DEFAULT_TYPE_IMPACT)
    pre_one_zero_major_bumps_minor: bool = True
    include_breaking_in_type_group: bool = True
    branch_categories: frozenset[str] = DEFAULT_BRANCH_CATEGORIES
    skip_release_patterns: tuple[str, ...] = DEFAULT_SKIP_RELEASE_PATTERNS
    section_headings: Mapping[str, str] = field(default_factory=dict)
    config_path: Path | None = None

    def __post_init__(self) -> None:
        """Freeze the mappings and reject colliding section headings."""
        object.__setattr__(self, 'type_impact', MappingProxyType(dict(self.type_impact)))
        object.__setattr__(self, 'section_headings', MappingProxyType(dict(self.section_headings)))
        _check_heading_collisions(self.types, self.section_headings)

    def __hash__(self) -> int:
        """Hash by value; the read-only mappings are hashed as sorted items."""
        return hash((
            self.types,
            tuple(sorted(self.type_impact.items())),
            self.pre_one_zero_major_bumps_minor,
            self.include_breaking_in_type_group,
            self.branch_categories,
            self.skip_release_patterns,
            tuple(sorted(self.section_headings.items())),
            self.config_path,
        ))

    @property
    def policy(self) -> TypeImpactPolicy:
        """The classification policy built from ``type_impact``."""
        return TypeImpactPolicy(impacts=self.type_impact)


def _check_heading_collisions(types: frozenset[str], headings: Mapping[str, str]) -> None:
    """Raise if two changelog sections would share a heading."""
    seen: dict[str, str] = {}
    for key in [BREAKING_KEY, *sorted(types)]:
        heading = heading_for(key, headings)
        if heading in seen:
            raise CommitKitError(
                code=E.CONFIG_INVALID_VALUE,
                message=f"Changelog heading {heading!r} is used by both '{seen[heading]}' and '{key}'",
                hint='Give each commit type its own heading under section_headings.',
            )
        seen[heading] = key


def _suggest_key(unknown: str) -> str | None:
    """Return the closest valid key for a typo, or None."""
    matches = difflib.get_close_matches(unknown, VALID_KEYS, n=1, cutoff=0.6)
    return matches[0] if matches else None


_TYPE_MAP: dict[str, type | tuple[type, ...]] = {
    'types': dict,
    'type_impact': dict,
    'pre_one_zero_major_bumps_minor': bool,
    'include_breaking_in_type_group': bool,
    'branch_categories': list,
    'skip_release_patterns': list,
    'section_headings': dict,
}


def _validate_value_type(
    key: str,
    value: Any,  # noqa: ANN401 - dynamic config values
    *,
    context: str = CONFIG_FILENAME,
) -> None:
    """Raise if a config value has the wrong type."""
    expected = _TYPE_MAP.get(key)
    if expected is None:
        return
    if not isinstance(value, expected):
        type_name = expected.__name__ if isinstance(expected, type) else str(expected)
        raise CommitKitError(
            code=E.CONFIG_INVALID_VALUE,
            message=f"'{key}' must be {type_name}, got {type(value).__name__}",
            hint=f'Check the value of {key} in {context}.',
        )


def _validate_name(key: str, name: object) -> str:
    """Raise unless ``name`` is a valid type or category name."""
    if not isinstance(name, str) or not _NAME_RE.fullmatch(name):
        raise CommitKitError(
            code=E.CONFIG_INVALID_VALUE,
            message=f"'{key}' entry {name!r} is not a valid name",
            hint='Names must start with a lowercase letter and contain only lowercase letters, digits, and hyphens.',
        )
    return name


def _parse_types(raw: dict[str, Any]) -> frozenset[str]:  # noqa: ANN401
    """Layer ``types = {name = bool}`` over the default type set."""
    enabled = set(DEFAULT_COMMIT_TYPES)
    for name, flag in raw.items():
        _validate_name('types', name)
        if name == BREAKING_KEY:
            raise CommitKitError(
                code=E.CONFIG_INVALID_VALUE,
                message=f"'{BREAKING_KEY}' is reserved for the Breaking Changes section and cannot be a commit type",
            )
        if not isinstance(flag, bool):
            raise CommitKitError(
                code=E.CONFIG_INVALID_VALUE,
                message=f"types.{name} must be true or false, got {flag!r}",
                hint='Use true to enable a commit type and false to disable it.',
            )
        if flag:
            enabled.add(name)
        else:
            enabled.discard(name)
    if not enabled:
        raise CommitKitError(
            code=E.CONFIG_INVALID_VALUE,
            message='Every commit type is disabled',
            hint='Leave at least one type enabled under [types].',
        )
    return frozenset(enabled)


def _parse_type_impact(raw: dict[str, Any], types: frozenset[str]) -> dict[str, ChangeImpact]:  # noqa: ANN401
    """Layer ``type_impact = {name = "minor"}`` over the default policy."""
    result = dict(DEFAULT_TYPE_IMPACT)
    for name, value in raw.items():
        _validate_name('type_impact', name)
        impact = IMPACT_NAMES.get(value) if isinstance(value, str) else None
        if impact is None:
            raise CommitKitError(
                code=E.CONFIG_INVALID_VALUE,
                message=f'type_impact.{name} must be one of {sorted(IMPACT_NAMES)}, got {value!r}',
                hint='Breaking changes are always major; type_impact only covers non-breaking commits.',
            )
        if name not in types:
            logger.warning(
                'type_impact_for_disabled_type',
                type=name,
                hint=f"'{name}' is not an enabled commit type; its impact will never apply.",
            )
        result[name] = impact
    return result


def _parse_string_list(key: str, items: list[Any]) -> list[str]:  # noqa: ANN401
    """Raise if any item in a list is not a non-empty string."""
    for item in items:
        if not isinstance(item, str) or not item:
            raise CommitKitError(
                code=E.CONFIG_INVALID_VALUE,
                message=f"'{key}' items must be non-empty strings, got {type(item).__name__}: {item!r}",
                hint=f'Check the {key} list in {CONFIG_FILENAME}.',
            )
    return list(items)


def _parse_section_headings(raw: dict[str, Any]) -> dict[str, str]:  # noqa: ANN401
    """Validate the ``section_headings`` table."""
    result: dict[str, str] = {}
    for name, heading in raw.items():
        if not isinstance(heading, str) or not heading.strip():
            raise CommitKitError(
                code=E.CONFIG_INVALID_VALUE,
                message=f'section_headings.{name} must be a non-empty string, got {heading!r}',
            )
        result[str(name)] = heading
    return result


def parse_config(raw: dict[str, Any], *, config_path: Path | None = None) -> CommitKitConfig:  # noqa: ANN401
    """Validate a raw config mapping and build a :class:`CommitKitConfig`.

    Args:
        raw: Top-level keys as read from TOML.
        config_path: Where the mapping came from, for diagnostics.

    Returns:
        A validated :class:`CommitKitConfig`.

    Raises:
        CommitKitError: On unknown keys or invalid values.
    """
    for key in raw:
        if key not in VALID_KEYS:
            suggestion = _suggest_key(key)
            hint = f"Did you mean '{suggestion}'?" if suggestion else f'Valid keys: {", ".join(sorted(VALID_KEYS))}.'
            raise CommitKitError(
                code=E.CONFIG_INVALID_KEY,
                message=f"Unknown key '{key}' in {CONFIG_FILENAME}",
                hint=hint,
            )

    for key, value in raw.items():
        _validate_value_type(key, value)

    kwargs: dict[str, Any] = {}  # noqa: ANN401
    types = _parse_types(dict(raw.get('types', {})))
    kwargs['types'] = types
    kwargs['type_impact'] = _parse_type_impact(dict(raw.get('type_impact', {})), types)

    for flag in ('pre_one_zero_major_bumps_minor', 'include_breaking_in_type_group'):
        if flag in raw:
            kwargs[flag] = bool(raw[flag])

    if 'branch_categories' in raw:
        categories = [_validate_name('branch_categories', c) for c in raw['branch_categories']]
        if not categories:
            raise CommitKitError(
                code=E.CONFIG_INVALID_VALUE,
                message='branch_categories must not be empty',
                hint='List at least one category, e.g. ["feature", "bugfix"].',
            )
        kwargs['branch_categories'] = frozenset(categories)

    if 'skip_release_patterns' in raw:
        kwargs['skip_release_patterns'] = tuple(
            _parse_string_list('skip_release_patterns', list(raw['skip_release_patterns']))
        )

    if 'section_headings' in raw:
        kwargs['section_headings'] = _parse_section_headings(dict(raw['section_headings']))

    return CommitKitConfig(**kwargs, config_path=config_path)


def load_config_file(config_path: Path) -> CommitKitConfig:
    """Load and validate an explicit config file.

    Args:
        config_path: Path to a TOML file.

    Returns:
        A validated :class:`CommitKitConfig`.

    Raises:
        CommitKitError: If the file is missing, unreadable, not valid
            TOML, or contains invalid config.
    """
    if not config_path.is_file():
        raise CommitKitError(
            code=E.CONFIG_NOT_FOUND,
            message=f'Config file not found: {config_path}',
            hint='Check the path passed to --config.',
        )

    try:
        text = config_path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as exc:
        raise CommitKitError(
            code=E.CONFIG_PARSE_ERROR,
            message=f'Failed to read {config_path}: {exc}',
        ) from exc

    try:
        doc = tomlkit.parse(text)
    except tomlkit.exceptions.TOMLKitError as exc:
        raise CommitKitError(
            code=E.CONFIG_PARSE_ERROR,
            message=f'Failed to parse {config_path}: {exc}',
        ) from exc

    raw: dict[str, Any] = doc.unwrap()  # noqa: ANN401
    if not raw:
        logger.debug('empty_commitkit_config', path=str(config_path))
        return CommitKitConfig(config_path=config_path)

    config = parse_config(raw, config_path=config_path)
    logger.debug(
        'commitkit_config_loaded',
        path=str(config_path),
        types=sorted(config.types),
        branch_categories=sorted(config.branch_categories),
    )
    return config


def load_config(project_root: Path) -> CommitKitConfig:
    """Load ``commitkit.toml`` from ``project_root``, or defaults if absent.

    Args:
        project_root: Directory that may contain ``commitkit.toml``.

    Returns:
        A validated :class:`CommitKitConfig`.

    Raises:
        CommitKitError: If the file exists but contains invalid config.
    """
    config_path = project_root / CONFIG_FILENAME

    if not config_path.is_file():
        logger.debug('no_commitkit_config', path=str(config_path))
        return CommitKitConfig(config_path=None)

    return load_config_file(config_path)


__all__ = [
    'CONFIG_FILENAME',
    'DEFAULT_SKIP_RELEASE_PATTERNS',
    'IMPACT_NAMES',
    'VALID_KEYS',
    'CommitKitConfig',
    'load_config',
    'load_config_file',
    'parse_config',
]
