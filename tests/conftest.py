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

"""Shared fixtures: a graph and a family of nested license expressions."""

from __future__ import annotations

from dataclasses import dataclass

import pytest
from rdflib import Graph
from spdxrdf.license_expr import ConjunctiveSet, DisjunctiveSet, NonStandardLicense, StandardLicense

NONSTD_IDS = ('LicenseRef-1', 'LicenseRef-2', 'LicenseRef-3', 'LicenseRef-4')
NONSTD_TEXTS = ('text1', 'text2', 'text3', 'text4')
STD_IDS = ('AFL-3.0', 'CECILL-B', 'EUPL-1.0')
STD_TEXTS = ('std text1', 'std text2', 'std text3')

SHA1_PARENT = '0123456789abcdef0123456789abcdef01234567'
SHA1_DEP1 = '1123456789abcdef0123456789abcdef01234567'
SHA1_DEP2 = '2123456789abcdef0123456789abcdef01234567'


@dataclass(frozen=True)
class Licenses:
    """Leaf licenses plus sets nested several levels deep."""

    non_standard: tuple[NonStandardLicense, ...]
    standard: tuple[StandardLicense, ...]
    disjunctive: tuple[DisjunctiveSet, ...]
    conjunctive: tuple[ConjunctiveSet, ...]
    complex: ConjunctiveSet


def build_licenses() -> Licenses:
    """Build the license family used across the test suite."""
    non_std = tuple(NonStandardLicense(i, t) for i, t in zip(NONSTD_IDS, NONSTD_TEXTS))
    std = tuple(
        StandardLicense(
            name=f'Name {i}',
            id=lic_id,
            text=STD_TEXTS[i],
            urls=(f'URL {i}',),
            notes=f'Notes {i}',
            standard_header=f'LicHeader {i}',
            template=f'Template {i}',
            osi_approved=True,
        )
        for i, lic_id in enumerate(STD_IDS)
    )
    disj0 = DisjunctiveSet([non_std[0], non_std[1], std[1]])
    conj0 = ConjunctiveSet([std[0], non_std[0], std[1]])
    conj1 = ConjunctiveSet([disj0, non_std[2]])
    disj1 = DisjunctiveSet([conj1, non_std[0], std[0]])
    disj2 = DisjunctiveSet([disj1, conj0, std[2]])
    complex_license = ConjunctiveSet([disj2, non_std[2], conj1])
    return Licenses(
        non_standard=non_std,
        standard=std,
        disjunctive=(disj0, disj1, disj2),
        conjunctive=(conj0, conj1),
        complex=complex_license,
    )


@pytest.fixture()
def licenses() -> Licenses:
    """The shared license family."""
    return build_licenses()


@pytest.fixture()
def graph() -> Graph:
    """An empty in-memory graph."""
    return Graph()
