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

r"""License expression model.

A license expression is a tree of leaf licenses joined by AND / OR::

    ┌─────────────────────┬──────────────────────────────────────────────┐
    │ Variant              │ Plain-English                                │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ NonStandardLicense   │ A license the document declares itself:     │
    │                      │ an id (``LicenseRef-1``) plus its full text.│
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ StandardLicense      │ An entry of the SPDX license list (``MIT``)  │
    │                      │ with its catalog metadata.                   │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ ConjunctiveSet (AND) │ Must comply with ALL members.               │
    ├─────────────────────┼──────────────────────────────────────────────┤
    │ DisjunctiveSet (OR)  │ May choose ANY member.                      │
    └─────────────────────┴──────────────────────────────────────────────┘

A :class:`~spdxrdf._types.Sentinel` may stand in place of any of them
(e.g. a concluded license of ``NOASSERTION``).

Expressions are immutable and hashable.  AND and OR are commutative, so
two sets are equal when they hold the same members in any order (a
repeated member counts once, as it does in the graph); the stored order
is kept only so output is stable.

Usage::

    from spdxrdf.license_expr import ConjunctiveSet, DisjunctiveSet, NonStandardLicense

    a = NonStandardLicense('LicenseRef-1', 'text1')
    b = NonStandardLicense('LicenseRef-2', 'text2')
    assert ConjunctiveSet([a, b]) == ConjunctiveSet([b, a])
    assert str(DisjunctiveSet([a, b])) == '(LicenseRef-1 OR LicenseRef-2)'
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from spdxrdf._types import Sentinel
from spdxrdf.errors import ConstructionError

__all__ = [
    'AnyLicense',
    'ConjunctiveSet',
    'DisjunctiveSet',
    'LeafLicense',
    'LicenseExpression',
    'NonStandardLicense',
    'StandardLicense',
    'iter_leaves',
    'license_ids',
]


@dataclass(frozen=True)
class NonStandardLicense:
    """A license declared by the document itself.

    Attributes:
        id: Document-scoped identifier (e.g. ``"LicenseRef-1"``).
        text: The full license text as extracted from the file.
    """

    id: str
    text: str

    def __post_init__(self) -> None:
        if self.id is None:
            raise ConstructionError('NonStandardLicense requires an id')
        if self.text is None:
            raise ConstructionError(f'NonStandardLicense {self.id!r} requires a text')

    def __str__(self) -> str:
        return self.id


@dataclass(frozen=True)
class StandardLicense:
    """An entry of the SPDX license list.

    Attributes:
        name: Full license name.
        id: SPDX short identifier (e.g. ``"Apache-2.0"``).
        text: Full license text.
        urls: Reference URLs, in catalog order.
        notes: Free-form notes from the catalog.
        standard_header: The standard license header, if any.
        template: The license template, if any.
        osi_approved: Whether OSI has approved this license.
    """

    name: str
    id: str
    text: str
    urls: tuple[str, ...] = ()
    notes: str = ''
    standard_header: str = ''
    template: str = ''
    osi_approved: bool = False

    def __post_init__(self) -> None:
        if self.id is None:
            raise ConstructionError('StandardLicense requires an id')
        # Any iterable of urls is stored as a tuple.
        object.__setattr__(self, 'urls', tuple(self.urls or ()))

    def __str__(self) -> str:
        return self.id


@dataclass(frozen=True, eq=False)
class _LicenseSet:
    """Shared behavior of the AND / OR sets."""

    members: tuple[AnyLicense, ...] = ()
    _operator = ''

    def __post_init__(self) -> None:
        members = tuple(self.members or ())
        if not members:
            raise ConstructionError(f'{type(self).__name__} requires at least one member')
        for member in members:
            if not isinstance(member, (NonStandardLicense, StandardLicense, _LicenseSet, Sentinel)):
                raise ConstructionError(f'{type(self).__name__} member is not a license: {member!r}')
        object.__setattr__(self, 'members', members)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return frozenset(self.members) == frozenset(other.members)  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, frozenset(self.members)))

    def __str__(self) -> str:
        return '(' + f' {self._operator} '.join(str(m) for m in self.members) + ')'


@dataclass(frozen=True, eq=False)
class ConjunctiveSet(_LicenseSet):
    """AND of its members: all of them apply.

    Attributes:
        members: One or more sub-expressions.
    """

    _operator = 'AND'


@dataclass(frozen=True, eq=False)
class DisjunctiveSet(_LicenseSet):
    """OR of its members: any one of them may be chosen.

    Attributes:
        members: One or more sub-expressions.
    """

    _operator = 'OR'


LeafLicense = NonStandardLicense | StandardLicense
LicenseExpression = NonStandardLicense | StandardLicense | ConjunctiveSet | DisjunctiveSet
# Anything that may sit in a license slot of a file record.
AnyLicense = LicenseExpression | Sentinel


def iter_leaves(expr: AnyLicense) -> Iterator[LeafLicense]:
    """Yield the leaf licenses of *expr*, depth-first, in stored order.

    Sentinels are not leaves and yield nothing.
    """
    if isinstance(expr, (NonStandardLicense, StandardLicense)):
        yield expr
    elif isinstance(expr, (ConjunctiveSet, DisjunctiveSet)):
        for member in expr.members:
            yield from iter_leaves(member)
    elif isinstance(expr, Sentinel):
        return
    else:
        raise TypeError(f'not a license expression: {expr!r}')


def license_ids(exprs: AnyLicense | Iterable[AnyLicense]) -> set[str]:
    """Collect the leaf license ids of one or more expressions.

    Examples::

        >>> license_ids(ConjunctiveSet([NonStandardLicense('LicenseRef-1', 't'), Sentinel.NONE]))
        {'LicenseRef-1'}
    """
    if isinstance(exprs, (NonStandardLicense, StandardLicense, ConjunctiveSet, DisjunctiveSet, Sentinel)):
        exprs = (exprs,)
    return {leaf.id for expr in exprs for leaf in iter_leaves(expr)}
