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

"""Find the graph nodes that already represent a file or a license.

Dependency edges point at the node that already describes a file, so a
file is never embedded twice.  Matching is exact: names and checksums
are compared as strings, case-sensitively, with no normalization; a
literal's datatype or language tag is ignored.

The resolver does not enforce uniqueness; when several nodes share an
identity the first one found is returned.  "Not found" is ``None``,
never an exception.
"""

from __future__ import annotations

from rdflib import Graph, Literal
from rdflib.term import Node

from spdxrdf.file_record import FileIdentity
from spdxrdf.logging import get_logger
from spdxrdf.vocab import (
    CLASS_FILE,
    CLASS_NON_STANDARD_LICENSE,
    CLASS_STANDARD_LICENSE,
    PROP_CHECKSUM,
    PROP_CHECKSUM_VALUE,
    PROP_FILE_NAME,
    PROP_LICENSE_ID,
    RDF,
)

__all__ = [
    'checksum_values',
    'find_existing',
    'find_license_node',
]

log = get_logger('spdxrdf.resolver')


def checksum_values(graph: Graph, file_node: Node) -> list[str]:
    """Return the checksum strings stored on a file node.

    A checksum is normally a ``spdx:Checksum`` node carrying a
    ``spdx:checksumValue``; a bare literal is accepted as well.
    """
    values: list[str] = []
    for target in graph.objects(file_node, PROP_CHECKSUM):
        if isinstance(target, Literal):
            values.append(str(target))
            continue
        values.extend(str(v) for v in graph.objects(target, PROP_CHECKSUM_VALUE))
    return values


def find_existing(graph: Graph, identity: FileIdentity) -> Node | None:
    """Locate the file node whose name and checksum match *identity*.

    Args:
        graph: Graph to search.
        identity: The ``(name, checksum)`` to look for.

    Returns:
        The first matching node, or ``None`` if no file matches.
    """
    for node in graph.subjects(RDF.type, CLASS_FILE):
        if identity.name not in (str(n) for n in graph.objects(node, PROP_FILE_NAME)):
            continue
        if identity.checksum in checksum_values(graph, node):
            log.debug('file_resolved', name=identity.name, node=str(node))
            return node
    log.debug('file_not_found', name=identity.name, checksum=identity.checksum)
    return None


def find_license_node(graph: Graph, license_id: str) -> Node | None:
    """Locate the leaf license node carrying *license_id*.

    Both standard and non-standard licenses are searched.

    Returns:
        The first matching node, or ``None``.
    """
    for node, value in graph.subject_objects(PROP_LICENSE_ID):
        if str(value) != license_id:
            continue
        types = set(graph.objects(node, RDF.type))
        if CLASS_STANDARD_LICENSE in types or CLASS_NON_STANDARD_LICENSE in types:
            return node
    return None
