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

"""Shared leaf-level types used across spdxrdf.

This module must have **zero** imports from other ``spdxrdf``
modules to avoid circular-import chains.  It is safe to import
from any module in the project.
"""

from __future__ import annotations

import enum
import re

__all__ = [
    'ChecksumAlgorithm',
    'FileType',
    'FreeText',
    'Sentinel',
]


class Sentinel(enum.Enum):
    """Marker values meaning "nothing asserted" or "not applicable".

    A sentinel may stand wherever a free-text field or a license is
    expected.  It is written to the graph as a well-known URI instead
    of a literal, so the literal string ``"NONE"`` and the sentinel
    :attr:`NONE` stay distinguishable.
    """

    NONE = 'NONE'
    NOASSERTION = 'NOASSERTION'

    def __str__(self) -> str:
        """Return the canonical string form (``"NONE"`` / ``"NOASSERTION"``)."""
        return self.value

    @property
    def uri(self) -> str:
        """Well-known URI of the sentinel node."""
        return f'http://spdx.org/rdf/terms#{self.value.lower()}'

    @classmethod
    def from_uri(cls, uri: str) -> Sentinel | None:
        """Return the sentinel whose URI is *uri*, or ``None``."""
        for member in cls:
            if member.uri == uri:
                return member
        return None


# A free-text value: either asserted text or a sentinel.
FreeText = str | Sentinel


class FileType(enum.Enum):
    """Kind of file described by a file record."""

    SOURCE = 'source'
    BINARY = 'binary'
    ARCHIVE = 'archive'
    OTHER = 'other'

    @classmethod
    def parse(cls, value: str) -> FileType:
        """Look up a file type by name, case-insensitively.

        Raises:
            ValueError: If *value* names no file type.
        """
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f'unknown file type {value!r}') from None


_HEX_RE = re.compile(r'[0-9a-fA-F]+')


class ChecksumAlgorithm(enum.Enum):
    """Digest algorithms a file checksum can be expressed in.

    The value is the hex-digest length of the algorithm.
    """

    SHA1 = 40
    SHA256 = 64
    MD5 = 32

    @property
    def digest_length(self) -> int:
        """Number of hex digits in a digest of this algorithm."""
        return self.value

    def is_valid_digest(self, digest: str) -> bool:
        """``True`` if *digest* has the hex shape of this algorithm."""
        return len(digest) == self.digest_length and _HEX_RE.fullmatch(digest) is not None
