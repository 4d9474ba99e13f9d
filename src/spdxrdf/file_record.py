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

r"""File records: license and provenance metadata for one file.

A :class:`FileRecord` is built fully formed, then edited in place
through property setters before (or after) it is written to a graph.

Key Concepts::

    ┌─────────────────────┬──────────────────────────────────────────────┐
    │ Concept              │ Plain-English                                │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ Identity             │ ``(name, checksum)``.  Two records with the  │
    │                      │ same identity describe the same file.        │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ Dependency           │ A reference to another file by identity.    │
    │                      │ In memory it is a snapshot record whose own │
    │                      │ dependencies are not followed.               │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ Binding              │ Once projected into (or read from) a graph, │
    │                      │ a record remembers its node; setters then   │
    │                      │ rewrite that node's edges too.               │
    └─────────────────────┴──────────────────────────────────────────────┘

Equality compares every field.  Seen licenses, contributors, project
attributions and dependencies are compared as unordered collections;
dependencies are compared by identity plus snapshot (their own
dependencies are ignored).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from spdxrdf import validator
from spdxrdf._types import ChecksumAlgorithm, FileType, FreeText, Sentinel
from spdxrdf.errors import ConstructionError
from spdxrdf.license_expr import AnyLicense

if TYPE_CHECKING:
    from spdxrdf.config import SpdxRdfConfig

__all__ = [
    'FileIdentity',
    'FileRecord',
    'ProjectAttribution',
    'RecordBinding',
]


@dataclass(frozen=True)
class ProjectAttribution:
    """A project the file is an artifact of (a DOAP project).

    Attributes:
        name: Project name.
        home_page: Project home page URL, or ``''``.
    """

    name: str
    home_page: str = ''


@dataclass(frozen=True)
class FileIdentity:
    """The external identity of a file: its name and checksum."""

    name: str
    checksum: str


class RecordBinding(Protocol):
    """Something that mirrors record edits into a graph node."""

    def rewrite(self, record: FileRecord, field_name: str) -> None:
        """Replace the stored edges of *field_name* with the record's value."""
        ...


def _require(value: object, what: str) -> None:
    if value is None:
        raise ConstructionError(f'FileRecord requires {what}')


class FileRecord:
    """License and provenance metadata for a single file.

    Args:
        name: File name (path within the package).
        file_type: A :class:`FileType` or its name (``"SOURCE"``).
        checksum: Hex digest of the file contents.
        concluded_license: The license concluded for the file.
        seen_licenses: Licenses found in the file's own text.
        license_comments: Free-form comments on the license analysis.
        copyright: Copyright text, or a :class:`Sentinel`.
        artifact_of: Projects this file is an artifact of.
        comment: General comment.
        file_dependencies: Files this file depends on.
        contributors: Contributor names.
        notice_text: Notice text, or ``None``.
        checksum_algorithm: Algorithm *checksum* was computed with.

    Raises:
        ConstructionError: If a required field is ``None`` or the file
            type is unknown.
    """

    def __init__(
        self,
        name: str,
        file_type: FileType | str,
        checksum: str,
        concluded_license: AnyLicense,
        seen_licenses: Iterable[AnyLicense] = (),
        license_comments: str = '',
        copyright: FreeText = Sentinel.NOASSERTION,  # noqa: A002
        artifact_of: Iterable[ProjectAttribution] = (),
        comment: str = '',
        file_dependencies: Iterable[FileRecord] = (),
        contributors: Iterable[str] = (),
        notice_text: str | None = None,
        checksum_algorithm: ChecksumAlgorithm = ChecksumAlgorithm.SHA1,
    ) -> None:
        _require(name, 'a name')
        _require(file_type, 'a file type')
        _require(checksum, 'a checksum')
        _require(concluded_license, 'a concluded license')
        _require(copyright, 'a copyright (use a Sentinel for none)')
        if isinstance(file_type, str):
            try:
                file_type = FileType.parse(file_type)
            except ValueError as exc:
                raise ConstructionError(str(exc)) from exc
        elif not isinstance(file_type, FileType):
            raise ConstructionError(f'FileRecord file type must be a FileType or its name, got {file_type!r}')
        self._name = name
        self._file_type = file_type
        self._checksum = checksum
        self._checksum_algorithm = checksum_algorithm
        self._concluded_license = concluded_license
        self._seen_licenses = tuple(seen_licenses or ())
        self._license_comments = license_comments or ''
        self._copyright = copyright
        self._artifact_of = tuple(artifact_of or ())
        self._comment = comment or ''
        self._file_dependencies = tuple(file_dependencies or ())
        self._contributors = tuple(contributors or ())
        self._notice_text = notice_text
        self._binding: RecordBinding | None = None

    # ── Read-only fields ─────────────────────────────────────────────

    @property
    def name(self) -> str:
        return self._name

    @property
    def file_type(self) -> FileType:
        return self._file_type

    @property
    def checksum(self) -> str:
        return self._checksum

    @property
    def checksum_algorithm(self) -> ChecksumAlgorithm:
        return self._checksum_algorithm

    @property
    def identity(self) -> FileIdentity:
        """The ``(name, checksum)`` pair used to resolve references."""
        return FileIdentity(self._name, self._checksum)

    @property
    def concluded_license(self) -> AnyLicense:
        return self._concluded_license

    @property
    def seen_licenses(self) -> tuple[AnyLicense, ...]:
        return self._seen_licenses

    @property
    def copyright(self) -> FreeText:
        """Copyright text, or a sentinel; ``str()`` gives the canonical form."""
        return self._copyright

    @property
    def artifact_of(self) -> tuple[ProjectAttribution, ...]:
        return self._artifact_of

    # ── Mutable fields ───────────────────────────────────────────────

    @property
    def comment(self) -> str:
        return self._comment

    @comment.setter
    def comment(self, value: str | None) -> None:
        self._comment = value or ''
        self._sync('comment')

    @property
    def license_comments(self) -> str:
        return self._license_comments

    @license_comments.setter
    def license_comments(self, value: str | None) -> None:
        self._license_comments = value or ''
        self._sync('license_comments')

    @property
    def notice_text(self) -> str | None:
        return self._notice_text

    @notice_text.setter
    def notice_text(self, value: str | None) -> None:
        self._notice_text = value
        self._sync('notice_text')

    @property
    def contributors(self) -> tuple[str, ...]:
        return self._contributors

    @contributors.setter
    def contributors(self, value: Iterable[str] | None) -> None:
        self._contributors = tuple(value or ())
        self._sync('contributors')

    @property
    def file_dependencies(self) -> tuple[FileRecord, ...]:
        return self._file_dependencies

    @file_dependencies.setter
    def file_dependencies(self, value: Iterable[FileRecord] | None) -> None:
        self._file_dependencies = tuple(value or ())
        self._sync('file_dependencies')

    # ── Graph binding ────────────────────────────────────────────────

    @property
    def bound(self) -> bool:
        """``True`` once the record mirrors its edits into a graph."""
        return self._binding is not None

    def bind(self, binding: RecordBinding | None) -> None:
        """Attach (or with ``None``, detach) the graph binding."""
        self._binding = binding

    def _sync(self, field_name: str) -> None:
        if self._binding is not None:
            self._binding.rewrite(self, field_name)

    # ── Validation & equality ────────────────────────────────────────

    def verify(self, config: SpdxRdfConfig | None = None) -> list[str]:
        """Return validation violations; see :func:`spdxrdf.validator.verify`."""
        strict = config.strict_contributors if config is not None else False
        return validator.verify(self, strict_contributors=strict)

    def _snapshot_key(self) -> tuple[object, ...]:
        """Every compared field except the dependencies."""
        return (
            self._name,
            self._file_type,
            self._checksum,
            self._checksum_algorithm,
            self._concluded_license,
            frozenset(self._seen_licenses),
            self._license_comments,
            self._copyright,
            frozenset(self._artifact_of),
            self._comment,
            frozenset(self._contributors),
            self._notice_text or None,
        )

    def snapshot_equals(self, other: FileRecord) -> bool:
        """Compare every field except :attr:`file_dependencies`."""
        return self._snapshot_key() == other._snapshot_key()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FileRecord):
            return NotImplemented
        if not self.snapshot_equals(other):
            return False
        return _same_snapshots(self._file_dependencies, other._file_dependencies)

    # Mutable: not hashable.
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f'FileRecord(name={self._name!r}, file_type={self._file_type.name}, '
            f'checksum={self._checksum!r}, concluded_license={str(self._concluded_license)!r})'
        )


def _same_snapshots(left: Sequence[FileRecord], right: Sequence[FileRecord]) -> bool:
    """Order-insensitive match of two dependency lists by snapshot."""
    if len(left) != len(right):
        return False
    remaining = list(right)
    for dep in left:
        for i, candidate in enumerate(remaining):
            if dep.snapshot_equals(candidate):
                del remaining[i]
                break
        else:
            return False
    return True
