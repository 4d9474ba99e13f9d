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

"""Configuration for spdxrdf.

Settings live in a ``[spdxrdf]`` table of ``spdxrdf.toml`` or in the
``[tool.spdxrdf]`` table of ``pyproject.toml``::

    [tool.spdxrdf]
    strict_contributors = true
    reuse_license_nodes = true
    default_checksum_algorithm = "SHA1"

Priority order (highest wins):

1. Explicit keyword overrides passed to :func:`resolve_config`.
2. ``SPDXRDF_STRICT_CONTRIBUTORS`` / ``SPDXRDF_REUSE_LICENSE_NODES``
   env vars (``1``/``true``/``yes`` or ``0``/``false``/``no``).
3. The TOML table (the ``base`` config).
4. The dataclass defaults.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from spdxrdf._types import ChecksumAlgorithm
from spdxrdf.errors import ConfigError

__all__ = [
    'CONFIG_FILENAME',
    'SpdxRdfConfig',
    'load_config',
    'resolve_config',
]

CONFIG_FILENAME = 'spdxrdf.toml'
_PYPROJECT = 'pyproject.toml'

_ALLOWED_KEYS = frozenset({
    'strict_contributors',
    'reuse_license_nodes',
    'default_checksum_algorithm',
})

_TRUE_VALUES = ('1', 'true', 'yes')
_FALSE_VALUES = ('0', 'false', 'no')


@dataclass(frozen=True)
class SpdxRdfConfig:
    """Resolved spdxrdf settings.

    Attributes:
        strict_contributors: Report duplicate contributor strings
            as validation violations.
        reuse_license_nodes: Share one graph node per leaf license id
            when projecting.
        default_checksum_algorithm: Algorithm assumed when a stored
            checksum carries no algorithm edge.
    """

    strict_contributors: bool = False
    reuse_license_nodes: bool = True
    default_checksum_algorithm: ChecksumAlgorithm = ChecksumAlgorithm.SHA1


def _parse_config(raw: dict[str, Any]) -> SpdxRdfConfig:
    """Validate a raw TOML table and build a :class:`SpdxRdfConfig`."""
    unknown = sorted(set(raw) - _ALLOWED_KEYS)
    if unknown:
        raise ConfigError(f'Unknown key(s) in [spdxrdf]: {", ".join(unknown)}')

    kwargs: dict[str, Any] = {}
    for key in ('strict_contributors', 'reuse_license_nodes'):
        if key in raw:
            if not isinstance(raw[key], bool):
                raise ConfigError(f'spdxrdf.{key} must be a boolean, got {type(raw[key]).__name__}')
            kwargs[key] = raw[key]

    if 'default_checksum_algorithm' in raw:
        value = raw['default_checksum_algorithm']
        if not isinstance(value, str):
            raise ConfigError(f'spdxrdf.default_checksum_algorithm must be a string, got {type(value).__name__}')
        try:
            kwargs['default_checksum_algorithm'] = ChecksumAlgorithm[value.upper()]
        except KeyError:
            names = ', '.join(a.name for a in ChecksumAlgorithm)
            raise ConfigError(
                f'spdxrdf.default_checksum_algorithm {value!r} is not valid. Must be one of: {names}'
            ) from None

    return SpdxRdfConfig(**kwargs)


def load_config(path: Path | None = None) -> SpdxRdfConfig:
    """Load configuration from a TOML file or directory.

    Args:
        path: A ``spdxrdf.toml`` / ``pyproject.toml`` file, or a
            directory to search for one (``spdxrdf.toml`` first).
            Defaults to the current working directory.

    Returns:
        The parsed config, or the defaults if no table was found.

    Raises:
        ConfigError: If the file is not valid TOML or the table is invalid.
    """
    root = path if path is not None else Path.cwd()
    if root.is_dir():
        candidates = [root / CONFIG_FILENAME, root / _PYPROJECT]
    else:
        candidates = [root]

    for candidate in candidates:
        if not candidate.is_file():
            continue
        try:
            with candidate.open('rb') as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f'{candidate}: invalid TOML: {exc}') from exc
        if candidate.name == _PYPROJECT:
            table = data.get('tool', {}).get('spdxrdf')
        else:
            table = data.get('spdxrdf', {})
        if table is None:
            continue
        if not isinstance(table, dict):
            raise ConfigError(f'{candidate}: spdxrdf must be a table')
        return _parse_config(table)
    return SpdxRdfConfig()


def _env_flag(name: str) -> bool | None:
    """Read a boolean env var; ``None`` when unset or unrecognised."""
    value = os.environ.get(name, '').strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return None


def resolve_config(
    base: SpdxRdfConfig | None = None,
    *,
    strict_contributors: bool | None = None,
    reuse_license_nodes: bool | None = None,
) -> SpdxRdfConfig:
    """Merge env vars and explicit overrides into the final config.

    Args:
        base: Config from TOML (defaults when ``None``).
        strict_contributors: Explicit override, wins over everything.
        reuse_license_nodes: Explicit override, wins over everything.

    Returns:
        Resolved :class:`SpdxRdfConfig`.
    """
    base = base or SpdxRdfConfig()
    strict = base.strict_contributors
    reuse = base.reuse_license_nodes

    env_strict = _env_flag('SPDXRDF_STRICT_CONTRIBUTORS')
    if env_strict is not None:
        strict = env_strict
    env_reuse = _env_flag('SPDXRDF_REUSE_LICENSE_NODES')
    if env_reuse is not None:
        reuse = env_reuse

    if strict_contributors is not None:
        strict = strict_contributors
    if reuse_license_nodes is not None:
        reuse = reuse_license_nodes

    return replace(base, strict_contributors=strict, reuse_license_nodes=reuse)
