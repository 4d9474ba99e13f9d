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

"""Structural validation of file records.

:func:`verify` walks a record and its licenses and returns every
problem it finds as a human-readable message.  Checks are independent:
one failure never hides another.  Validation never raises; an empty
list means the record is valid.

Usage::

    from spdxrdf.validator import verify

    for problem in verify(record, strict_contributors=True):
        print(problem)
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from spdxrdf._types import ChecksumAlgorithm, Sentinel
from spdxrdf.license_expr import (
    AnyLicense,
    ConjunctiveSet,
    DisjunctiveSet,
    LeafLicense,
    NonStandardLicense,
    StandardLicense,
    iter_leaves,
)

if TYPE_CHECKING:
    from spdxrdf.file_record import FileRecord

__all__ = [
    'verify',
    'verify_license',
]


def verify_license(expr: AnyLicense | None, where: str = 'license') -> list[str]:
    """Return the violations of one license expression.

    Args:
        expr: The expression to check.
        where: Label used as the message prefix.
    """
    if expr is None:
        return [f'{where}: missing license']
    if isinstance(expr, Sentinel):
        return []
    if isinstance(expr, NonStandardLicense):
        issues = []
        if not expr.id:
            issues.append(f'{where}: non-standard license is missing an id')
        if not expr.text:
            issues.append(f'{where}: non-standard license {expr.id!r} is missing its text')
        return issues
    if isinstance(expr, StandardLicense):
        issues = []
        if not expr.id:
            issues.append(f'{where}: standard license is missing an id')
        if not expr.name:
            issues.append(f'{where}: standard license {expr.id!r} is missing its name')
        if not expr.text:
            issues.append(f'{where}: standard license {expr.id!r} is missing its text')
        return issues
    if isinstance(expr, (ConjunctiveSet, DisjunctiveSet)):
        issues = []
        for i, member in enumerate(expr.members):
            issues.extend(verify_license(member, f'{where}.members[{i}]'))
        return issues
    return [f'{where}: not a license expression: {type(expr).__name__}']


def _checksum_issue(checksum: str, algorithm: ChecksumAlgorithm, where: str) -> str | None:
    if not checksum:
        return f'{where}: missing checksum'
    if not algorithm.is_valid_digest(checksum):
        return f'{where}: checksum {checksum!r} is not a {algorithm.name} hex digest ({algorithm.digest_length} digits)'
    return None


_LICENSE_TYPES = (NonStandardLicense, StandardLicense, ConjunctiveSet, DisjunctiveSet, Sentinel)


def _conflicting_ids(exprs: list[AnyLicense]) -> list[str]:
    """Ids used by two leaf licenses whose other fields differ."""
    first_seen: dict[str, LeafLicense] = {}
    conflicts: list[str] = []
    for expr in exprs:
        # verify_license already reported anything that is not a license.
        if not isinstance(expr, _LICENSE_TYPES):
            continue
        for leaf in iter_leaves(expr):
            seen = first_seen.setdefault(leaf.id, leaf)
            if seen != leaf and leaf.id not in conflicts:
                conflicts.append(leaf.id)
    return conflicts


def verify(record: FileRecord, *, strict_contributors: bool = False) -> list[str]:
    """Return every validation violation of *record*.

    Args:
        record: The file record to check.
        strict_contributors: Also report duplicate contributor names.

    Returns:
        Human-readable messages; empty when the record is valid.
    """
    issues: list[str] = []
    label = f'file {record.name!r}' if record.name else 'file'

    if not record.name:
        issues.append(f'{label}: missing file name')
    if record.file_type is None:
        issues.append(f'{label}: missing file type')
    problem = _checksum_issue(record.checksum, record.checksum_algorithm, label)
    if problem:
        issues.append(problem)

    issues.extend(verify_license(record.concluded_license, f'{label} concluded license'))
    for i, seen in enumerate(record.seen_licenses):
        issues.extend(verify_license(seen, f'{label} seen license[{i}]'))
    for license_id in _conflicting_ids([record.concluded_license, *record.seen_licenses]):
        issues.append(f'{label}: license id {license_id!r} is used by licenses with different content')

    if not isinstance(record.copyright, Sentinel) and not record.copyright:
        issues.append(f'{label}: missing copyright text (use NONE or NOASSERTION)')

    for i, project in enumerate(record.artifact_of):
        if not project.name:
            issues.append(f'{label} artifactOf[{i}]: missing project name')

    for i, dependency in enumerate(record.file_dependencies):
        where = f'{label} dependency[{i}]'
        if not dependency.name:
            issues.append(f'{where}: missing file name')
        problem = _checksum_issue(dependency.checksum, dependency.checksum_algorithm, where)
        if problem:
            issues.append(problem)

    if strict_contributors:
        counts = Counter(record.contributors)
        for contributor, count in counts.items():
            if count > 1:
                issues.append(f'{label}: contributor {contributor!r} is listed {count} times')

    return issues
