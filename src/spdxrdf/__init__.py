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

r"""License and provenance metadata for files, stored as an RDF graph.

Build license expressions and file records in memory, project them into
an :class:`rdflib.Graph`, and read them back losslessly.

Usage::

    from rdflib import Graph
    from spdxrdf import (
        ConjunctiveSet,
        FileRecord,
        GraphProjector,
        NonStandardLicense,
        Sentinel,
    )

    lic = ConjunctiveSet([NonStandardLicense('LicenseRef-1', 'text')])
    record = FileRecord('src/main.c', 'SOURCE', '0123...', lic, copyright=Sentinel.NONE)
    assert record.verify() == []

    projector = GraphProjector(Graph())
    node = projector.project_file(record)
    assert projector.reconstruct_file(node) == record
"""

from spdxrdf._types import ChecksumAlgorithm, FileType, FreeText, Sentinel
from spdxrdf.config import SpdxRdfConfig, load_config, resolve_config
from spdxrdf.errors import ConfigError, ConstructionError, MalformedGraphError, SpdxRdfError
from spdxrdf.expression_parser import ParseError, parse_license_expression
from spdxrdf.file_record import FileIdentity, FileRecord, ProjectAttribution
from spdxrdf.license_expr import (
    AnyLicense,
    ConjunctiveSet,
    DisjunctiveSet,
    LicenseExpression,
    NonStandardLicense,
    StandardLicense,
    iter_leaves,
    license_ids,
)
from spdxrdf.projector import GraphProjector, project, project_all, reconstruct_file, reconstruct_license
from spdxrdf.resolver import find_existing, find_license_node
from spdxrdf.validator import verify, verify_license

__all__ = [
    'AnyLicense',
    'ChecksumAlgorithm',
    'ConfigError',
    'ConjunctiveSet',
    'ConstructionError',
    'DisjunctiveSet',
    'FileIdentity',
    'FileRecord',
    'FileType',
    'FreeText',
    'GraphProjector',
    'LicenseExpression',
    'MalformedGraphError',
    'NonStandardLicense',
    'ParseError',
    'ProjectAttribution',
    'Sentinel',
    'SpdxRdfConfig',
    'SpdxRdfError',
    'StandardLicense',
    'find_existing',
    'find_license_node',
    'iter_leaves',
    'license_ids',
    'load_config',
    'parse_license_expression',
    'project',
    'project_all',
    'reconstruct_file',
    'reconstruct_license',
    'resolve_config',
    'verify',
    'verify_license',
]
