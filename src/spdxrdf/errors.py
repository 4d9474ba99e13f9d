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

"""Exception hierarchy for spdxrdf.

Three things can go wrong, and each has its own type:

- :class:`ConstructionError`: an entity was built without a required
  field (or a license set without members).  Raised synchronously by
  the constructor; nothing is ever defaulted silently.
- :class:`MalformedGraphError`: a graph node could not be read back
  into an entity because an edge is missing or has the wrong shape.
- :class:`ConfigError`: a configuration table holds an unknown key or
  a value of the wrong type.

Validation findings are **not** exceptions; see
:func:`spdxrdf.validator.verify`.
"""

from __future__ import annotations

__all__ = [
    'ConfigError',
    'ConstructionError',
    'MalformedGraphError',
    'SpdxRdfError',
]


class SpdxRdfError(Exception):
    """Base class for all spdxrdf errors."""


class ConstructionError(SpdxRdfError, ValueError):
    """Raised when an entity is constructed with missing required data."""


class MalformedGraphError(SpdxRdfError):
    """Raised when a graph node cannot be reconstructed into an entity.

    Attributes:
        node: The node that failed to load.
        prop: Name of the missing or malformed property.
        detail: Human-readable description of the problem.
    """

    def __init__(self, node: object, prop: str, detail: str = 'missing required property') -> None:
        """Initialize with the offending node, property name, and detail."""
        self.node = node
        self.prop = prop
        self.detail = detail
        super().__init__(f'{detail}: {prop} (node {node})')


class ConfigError(SpdxRdfError):
    """Raised when configuration data fails validation."""
