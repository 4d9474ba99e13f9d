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

r"""Graph projection and reconstruction of licenses and file records.

Writes in-memory entities into an :class:`rdflib.Graph` and reads them
back.  The mapping is deterministic::

    ┌──────────────────────┬─────────────────────────────────────────────┐
    │ Entity                │ Graph shape                                 │
    ├──────────────────────┼─────────────────────────────────────────────┤
    │ Sentinel              │ The well-known URI (``spdx:none``,         │
    │                       │ ``spdx:noassertion``), never a literal.    │
    ├──────────────────────┼─────────────────────────────────────────────┤
    │ NonStandardLicense    │ Blank node, ``spdx:ExtractedLicensingInfo``│
    │                       │ with ``licenseId`` and ``extractedText``.  │
    ├──────────────────────┼─────────────────────────────────────────────┤
    │ StandardLicense       │ ``http://spdx.org/licenses/<id>``, typed   │
    │                       │ ``spdx:License``; ``rdfs:seeAlso`` points   │
    │                       │ at an ``rdf:List`` of the urls, in order.   │
    ├──────────────────────┼─────────────────────────────────────────────┤
    │ Conjunctive/Disjunct. │ Fresh blank node with one ``spdx:member``  │
    │                       │ edge per member.                            │
    ├──────────────────────┼─────────────────────────────────────────────┤
    │ FileRecord            │ Blank node typed ``spdx:File``; a          │
    │                       │ ``spdx:fileDependency`` edge points at the  │
    │                       │ node already describing the dependency.     │
    └──────────────────────┴─────────────────────────────────────────────┘

Leaf licenses are shared: projecting a license whose id is already in
the graph reuses the stored node.  Dependencies are read back one level
deep (identity plus snapshot), so cyclic dependency edges between files
still terminate.

Usage::

    from rdflib import Graph
    from spdxrdf.projector import GraphProjector

    projector = GraphProjector(Graph())
    node = projector.project_file(record)
    copy = projector.reconstruct_file(node)
    assert copy == record
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from rdflib import BNode, Graph, Literal, URIRef
from rdflib.collection import Collection
from rdflib.term import Node

from spdxrdf._types import ChecksumAlgorithm, FileType, FreeText, Sentinel
from spdxrdf.config import SpdxRdfConfig
from spdxrdf.errors import MalformedGraphError
from spdxrdf.file_record import FileRecord, ProjectAttribution
from spdxrdf.license_expr import (
    AnyLicense,
    ConjunctiveSet,
    DisjunctiveSet,
    NonStandardLicense,
    StandardLicense,
)
from spdxrdf.logging import get_logger
from spdxrdf.resolver import find_existing, find_license_node
from spdxrdf.vocab import (
    CHECKSUM_ALGORITHM_NODES,
    CLASS_CHECKSUM,
    CLASS_CONJUNCTIVE_SET,
    CLASS_DISJUNCTIVE_SET,
    CLASS_FILE,
    CLASS_NON_STANDARD_LICENSE,
    CLASS_PROJECT,
    CLASS_STANDARD_LICENSE,
    FILE_TYPE_NODES,
    PROP_ARTIFACT_OF,
    PROP_CHECKSUM,
    PROP_CHECKSUM_ALGORITHM,
    PROP_CHECKSUM_VALUE,
    PROP_COMMENT,
    PROP_CONTRIBUTOR,
    PROP_COPYRIGHT,
    PROP_DEPENDENCY,
    PROP_EXTRACTED_TEXT,
    PROP_FILE_NAME,
    PROP_FILE_TYPE,
    PROP_LICENSE_COMMENTS,
    PROP_LICENSE_CONCLUDED,
    PROP_LICENSE_ID,
    PROP_LICENSE_INFO_IN_FILE,
    PROP_LICENSE_NAME,
    PROP_LICENSE_NOTES,
    PROP_LICENSE_TEXT,
    PROP_LICENSE_URL,
    PROP_MEMBER,
    PROP_NOTICE,
    PROP_OSI_APPROVED,
    PROP_PROJECT_HOMEPAGE,
    PROP_PROJECT_NAME,
    PROP_STANDARD_HEADER,
    PROP_TEMPLATE,
    RDF,
    SENTINEL_NODES,
    sentinel_for,
    standard_license_uri,
)

__all__ = [
    'GraphProjector',
    'project',
    'project_all',
    'reconstruct_file',
    'reconstruct_license',
]

log = get_logger('spdxrdf.projector')

_FILE_TYPES_BY_NODE = {node: file_type for file_type, node in FILE_TYPE_NODES.items()}
_ALGORITHMS_BY_NODE = {node: algorithm for algorithm, node in CHECKSUM_ALGORITHM_NODES.items()}
_TRUE_LITERALS = frozenset({'true', '1'})


@dataclass(frozen=True)
class _NodeBinding:
    """Mirrors setter calls on a record into the record's graph node."""

    projector: GraphProjector
    node: Node

    def rewrite(self, record: FileRecord, field_name: str) -> None:
        self.projector.rewrite_field(self.node, record, field_name)


class GraphProjector:
    """Writes entities into a graph and reads them back.

    The projector holds no state besides the graph and the config;
    several records may be projected into the same graph in turn.
    It does no locking.

    Args:
        graph: The graph to write to and read from.
        config: Settings; defaults to :class:`SpdxRdfConfig`.
    """

    def __init__(self, graph: Graph, config: SpdxRdfConfig | None = None) -> None:
        self.graph = graph
        self.config = config or SpdxRdfConfig()
        self._field_writers: dict[str, Callable[[Node, FileRecord], None]] = {
            'comment': self._write_comment,
            'license_comments': self._write_license_comments,
            'notice_text': self._write_notice,
            'contributors': self._write_contributors,
            'file_dependencies': self._write_dependencies,
        }

    # ── Write path ───────────────────────────────────────────────────

    def project(self, entity: FileRecord | AnyLicense) -> Node:
        """Project a file record or a license expression."""
        if isinstance(entity, FileRecord):
            return self.project_file(entity)
        return self.project_license(entity)

    def project_license(self, expr: AnyLicense) -> Node:
        """Write a license expression and return its node.

        Sets are written depth-first, pre-order: the set node and its
        type edge come before the members.
        """
        if isinstance(expr, Sentinel):
            return SENTINEL_NODES[expr]
        if isinstance(expr, NonStandardLicense):
            return self._project_non_standard(expr)
        if isinstance(expr, StandardLicense):
            return self._project_standard(expr)
        if isinstance(expr, ConjunctiveSet):
            return self._project_set(expr, CLASS_CONJUNCTIVE_SET)
        if isinstance(expr, DisjunctiveSet):
            return self._project_set(expr, CLASS_DISJUNCTIVE_SET)
        raise TypeError(f'not a license expression: {expr!r}')

    def _project_set(self, expr: ConjunctiveSet | DisjunctiveSet, rdf_class: URIRef) -> Node:
        node = BNode()
        self.graph.add((node, RDF.type, rdf_class))
        for member in expr.members:
            self.graph.add((node, PROP_MEMBER, self.project_license(member)))
        return node

    def _project_non_standard(self, lic: NonStandardLicense) -> Node:
        if self.config.reuse_license_nodes:
            existing = find_license_node(self.graph, lic.id)
            if existing is not None and (existing, RDF.type, CLASS_NON_STANDARD_LICENSE) in self.graph:
                self._check_reused(existing, lic)
                return existing
        node = BNode()
        self.graph.add((node, RDF.type, CLASS_NON_STANDARD_LICENSE))
        self.graph.add((node, PROP_LICENSE_ID, Literal(lic.id)))
        self.graph.add((node, PROP_EXTRACTED_TEXT, Literal(lic.text)))
        return node

    def _project_standard(self, lic: StandardLicense) -> Node:
        if self.config.reuse_license_nodes:
            node: Node = standard_license_uri(lic.id)
            if (node, RDF.type, CLASS_STANDARD_LICENSE) in self.graph:
                self._check_reused(node, lic)
                return node
        else:
            node = BNode()
        self.graph.add((node, RDF.type, CLASS_STANDARD_LICENSE))
        self.graph.add((node, PROP_LICENSE_ID, Literal(lic.id)))
        self.graph.add((node, PROP_LICENSE_NAME, Literal(lic.name)))
        self.graph.add((node, PROP_LICENSE_TEXT, Literal(lic.text)))
        if lic.urls:
            # One rdf:List keeps url order and repeats.
            urls = BNode()
            Collection(self.graph, urls, [Literal(url) for url in lic.urls])
            self.graph.add((node, PROP_LICENSE_URL, urls))
        self._add_text(node, PROP_LICENSE_NOTES, lic.notes)
        self._add_text(node, PROP_STANDARD_HEADER, lic.standard_header)
        self._add_text(node, PROP_TEMPLATE, lic.template)
        self.graph.add((node, PROP_OSI_APPROVED, Literal(lic.osi_approved)))
        return node

    def _check_reused(self, node: Node, lic: NonStandardLicense | StandardLicense) -> None:
        stored = self.reconstruct_license(node)
        if stored != lic:
            log.warning('license_id_conflict', license_id=lic.id, node=str(node))
        else:
            log.debug('license_node_reused', license_id=lic.id, node=str(node))

    def project_file(self, record: FileRecord) -> Node:
        """Write a file record and return its node.

        The identity edges (type, name, checksum) are written before the
        dependencies, so a dependency cycle finds this node instead of
        writing it again.  Afterwards *record* is bound to the node.
        """
        node = BNode()
        graph = self.graph
        graph.add((node, RDF.type, CLASS_FILE))
        graph.add((node, PROP_FILE_NAME, Literal(record.name)))
        self._write_checksum(node, record.checksum, record.checksum_algorithm)
        graph.add((node, PROP_FILE_TYPE, FILE_TYPE_NODES[record.file_type]))

        graph.add((node, PROP_LICENSE_CONCLUDED, self.project_license(record.concluded_license)))
        for seen in record.seen_licenses:
            graph.add((node, PROP_LICENSE_INFO_IN_FILE, self.project_license(seen)))
        graph.add((node, PROP_COPYRIGHT, self._text_node(record.copyright)))
        for project in record.artifact_of:
            graph.add((node, PROP_ARTIFACT_OF, self._project_attribution(project)))

        for writer in self._field_writers.values():
            writer(node, record)

        record.bind(_NodeBinding(self, node))
        log.debug('file_projected', name=record.name, node=str(node))
        return node

    def _write_checksum(self, node: Node, value: str, algorithm: ChecksumAlgorithm) -> None:
        checksum = BNode()
        self.graph.add((node, PROP_CHECKSUM, checksum))
        self.graph.add((checksum, RDF.type, CLASS_CHECKSUM))
        self.graph.add((checksum, PROP_CHECKSUM_ALGORITHM, CHECKSUM_ALGORITHM_NODES[algorithm]))
        self.graph.add((checksum, PROP_CHECKSUM_VALUE, Literal(value)))

    def _project_attribution(self, project: ProjectAttribution) -> Node:
        node = BNode()
        self.graph.add((node, RDF.type, CLASS_PROJECT))
        self.graph.add((node, PROP_PROJECT_NAME, Literal(project.name)))
        self._add_text(node, PROP_PROJECT_HOMEPAGE, project.home_page)
        return node

    def _dependency_node(self, dependency: FileRecord) -> Node:
        existing = find_existing(self.graph, dependency.identity)
        if existing is not None:
            return existing
        log.debug('dependency_projected', name=dependency.name)
        return self.project_file(dependency)

    # Field writers: each one owns every edge of its property.

    def _write_comment(self, node: Node, record: FileRecord) -> None:
        self._replace_text(node, PROP_COMMENT, record.comment)

    def _write_license_comments(self, node: Node, record: FileRecord) -> None:
        self._replace_text(node, PROP_LICENSE_COMMENTS, record.license_comments)

    def _write_notice(self, node: Node, record: FileRecord) -> None:
        self._replace_text(node, PROP_NOTICE, record.notice_text)

    def _write_contributors(self, node: Node, record: FileRecord) -> None:
        self.graph.remove((node, PROP_CONTRIBUTOR, None))
        for contributor in record.contributors:
            self.graph.add((node, PROP_CONTRIBUTOR, Literal(contributor)))

    def _write_dependencies(self, node: Node, record: FileRecord) -> None:
        self.graph.remove((node, PROP_DEPENDENCY, None))
        for dependency in record.file_dependencies:
            self.graph.add((node, PROP_DEPENDENCY, self._dependency_node(dependency)))

    def rewrite_field(self, node: Node, record: FileRecord, field_name: str) -> None:
        """Replace the edges of one mutable field on an existing file node.

        Raises:
            KeyError: If *field_name* is not a mutable field.
        """
        self._field_writers[field_name](node, record)
        log.debug('file_field_rewritten', name=record.name, field=field_name)

    def _text_node(self, value: FreeText) -> Node:
        if isinstance(value, Sentinel):
            return SENTINEL_NODES[value]
        return Literal(value)

    def _add_text(self, node: Node, prop: URIRef, value: FreeText | None) -> None:
        if value:
            self.graph.add((node, prop, self._text_node(value)))

    def _replace_text(self, node: Node, prop: URIRef, value: FreeText | None) -> None:
        self.graph.remove((node, prop, None))
        self._add_text(node, prop, value)

    # ── Read path ────────────────────────────────────────────────────

    def reconstruct_license(self, node: Node) -> AnyLicense:
        """Rebuild a license expression from its node.

        Raises:
            MalformedGraphError: If the node has no type, an unknown
                type, or lacks a required property.
        """
        sentinel = sentinel_for(node)
        if sentinel is not None:
            return sentinel
        types = set(self.graph.objects(node, RDF.type))
        if not types:
            raise MalformedGraphError(node, 'rdf:type')
        if CLASS_CONJUNCTIVE_SET in types:
            return ConjunctiveSet(self._members(node))
        if CLASS_DISJUNCTIVE_SET in types:
            return DisjunctiveSet(self._members(node))
        if CLASS_NON_STANDARD_LICENSE in types:
            return NonStandardLicense(
                id=self._required_text(node, PROP_LICENSE_ID, 'spdx:licenseId'),
                text=self._required_text(node, PROP_EXTRACTED_TEXT, 'spdx:extractedText'),
            )
        if CLASS_STANDARD_LICENSE in types:
            osi = self._first(node, PROP_OSI_APPROVED)
            return StandardLicense(
                name=self._optional_text(node, PROP_LICENSE_NAME),
                id=self._required_text(node, PROP_LICENSE_ID, 'spdx:licenseId'),
                text=self._optional_text(node, PROP_LICENSE_TEXT),
                urls=self._read_urls(node),
                notes=self._optional_text(node, PROP_LICENSE_NOTES),
                standard_header=self._optional_text(node, PROP_STANDARD_HEADER),
                template=self._optional_text(node, PROP_TEMPLATE),
                osi_approved=osi is not None and str(osi).lower() in _TRUE_LITERALS,
            )
        raise MalformedGraphError(node, 'rdf:type', 'unknown license type')

    def _read_urls(self, node: Node) -> tuple[str, ...]:
        urls: list[str] = []
        for target in self.graph.objects(node, PROP_LICENSE_URL):
            if isinstance(target, Literal):
                urls.append(str(target))
            else:
                urls.extend(str(url) for url in Collection(self.graph, target))
        return tuple(urls)

    def _members(self, node: Node) -> list[AnyLicense]:
        members = [self.reconstruct_license(member) for member in self.graph.objects(node, PROP_MEMBER)]
        if not members:
            raise MalformedGraphError(node, 'spdx:member')
        return members

    def reconstruct_file(self, node: Node, *, expand_dependencies: bool = True) -> FileRecord:
        """Rebuild a file record from its node.

        Dependencies are rebuilt as snapshots: their own dependency
        edges are not followed.  The returned record is bound to *node*.

        Args:
            node: A node typed ``spdx:File``.
            expand_dependencies: Read the dependency edges at all.

        Raises:
            MalformedGraphError: If a required property (type, name,
                checksum, file type, concluded license) is missing or
                has an unexpected value.
        """
        if (node, RDF.type, CLASS_FILE) not in self.graph:
            raise MalformedGraphError(node, 'rdf:type', 'not a file node')
        checksum, algorithm = self._read_checksum(node)
        concluded = self._first(node, PROP_LICENSE_CONCLUDED)
        if concluded is None:
            raise MalformedGraphError(node, 'spdx:licenseConcluded')

        dependencies: list[FileRecord] = []
        if expand_dependencies:
            dependencies = [
                self.reconstruct_file(target, expand_dependencies=False)
                for target in self.graph.objects(node, PROP_DEPENDENCY)
            ]

        record = FileRecord(
            name=self._required_text(node, PROP_FILE_NAME, 'spdx:fileName'),
            file_type=self._read_file_type(node),
            checksum=checksum,
            checksum_algorithm=algorithm,
            concluded_license=self.reconstruct_license(concluded),
            seen_licenses=[self.reconstruct_license(n) for n in self.graph.objects(node, PROP_LICENSE_INFO_IN_FILE)],
            license_comments=self._optional_text(node, PROP_LICENSE_COMMENTS),
            copyright=self._free_text(node, PROP_COPYRIGHT, default=Sentinel.NOASSERTION),
            artifact_of=[self._read_attribution(n) for n in self.graph.objects(node, PROP_ARTIFACT_OF)],
            comment=self._optional_text(node, PROP_COMMENT),
            file_dependencies=dependencies,
            contributors=[str(c) for c in self.graph.objects(node, PROP_CONTRIBUTOR)],
            notice_text=self._free_text(node, PROP_NOTICE, default=None),
        )
        record.bind(_NodeBinding(self, node))
        return record

    def _read_checksum(self, node: Node) -> tuple[str, ChecksumAlgorithm]:
        target = self._first(node, PROP_CHECKSUM)
        if target is None:
            raise MalformedGraphError(node, 'spdx:checksum')
        if isinstance(target, Literal):
            return str(target), self.config.default_checksum_algorithm
        value = self._required_text(target, PROP_CHECKSUM_VALUE, 'spdx:checksumValue')
        algorithm_node = self._first(target, PROP_CHECKSUM_ALGORITHM)
        if algorithm_node is None:
            return value, self.config.default_checksum_algorithm
        algorithm = _ALGORITHMS_BY_NODE.get(algorithm_node)
        if algorithm is None:
            raise MalformedGraphError(target, 'spdx:algorithm', f'unknown value {algorithm_node}')
        return value, algorithm

    def _read_file_type(self, node: Node) -> FileType:
        value = self._first(node, PROP_FILE_TYPE)
        if value is None:
            raise MalformedGraphError(node, 'spdx:fileType')
        file_type = _FILE_TYPES_BY_NODE.get(value)
        if file_type is not None:
            return file_type
        if isinstance(value, Literal):
            try:
                return FileType.parse(str(value))
            except ValueError:
                pass
        raise MalformedGraphError(node, 'spdx:fileType', f'unknown value {value}')

    def _read_attribution(self, node: Node) -> ProjectAttribution:
        return ProjectAttribution(
            name=self._optional_text(node, PROP_PROJECT_NAME),
            home_page=self._optional_text(node, PROP_PROJECT_HOMEPAGE),
        )

    def _first(self, node: Node, prop: URIRef) -> Node | None:
        return next(iter(self.graph.objects(node, prop)), None)

    def _free_text(self, node: Node, prop: URIRef, default: FreeText | None) -> FreeText | None:
        value = self._first(node, prop)
        if value is None:
            return default
        sentinel = sentinel_for(value)
        if sentinel is not None:
            return sentinel
        return str(value)

    def _optional_text(self, node: Node, prop: URIRef) -> str:
        value = self._first(node, prop)
        return '' if value is None else str(value)

    def _required_text(self, node: Node, prop: URIRef, prop_name: str) -> str:
        value = self._first(node, prop)
        if value is None:
            raise MalformedGraphError(node, prop_name)
        return str(value)


def project(graph: Graph, entity: FileRecord | AnyLicense, config: SpdxRdfConfig | None = None) -> Node:
    """Project *entity* into *graph*; see :meth:`GraphProjector.project`."""
    return GraphProjector(graph, config).project(entity)


def reconstruct_license(graph: Graph, node: Node) -> AnyLicense:
    """Rebuild the license expression stored at *node*."""
    return GraphProjector(graph).reconstruct_license(node)


def reconstruct_file(graph: Graph, node: Node, config: SpdxRdfConfig | None = None) -> FileRecord:
    """Rebuild the file record stored at *node*."""
    return GraphProjector(graph, config).reconstruct_file(node)


def project_all(graph: Graph, records: Iterable[FileRecord], config: SpdxRdfConfig | None = None) -> list[Node]:
    """Project several records into one graph, in order."""
    projector = GraphProjector(graph, config)
    return [projector.project_file(record) for record in records]
