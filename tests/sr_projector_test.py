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

"""Tests for graph projection and reconstruction."""

from __future__ import annotations

from unittest.mock import patch

import pytest
import spdxrdf.projector as projector_module
from conftest import SHA1_PARENT, Licenses
from rdflib import BNode, Graph, Literal, URIRef
from spdxrdf._types import ChecksumAlgorithm, FileType, Sentinel
from spdxrdf.config import SpdxRdfConfig
from spdxrdf.errors import MalformedGraphError
from spdxrdf.file_record import FileRecord
from spdxrdf.license_expr import ConjunctiveSet, DisjunctiveSet, NonStandardLicense, StandardLicense
from spdxrdf.projector import GraphProjector, project, project_all, reconstruct_file, reconstruct_license
from spdxrdf.vocab import (
    CLASS_CONJUNCTIVE_SET,
    CLASS_FILE,
    CLASS_NON_STANDARD_LICENSE,
    CLASS_STANDARD_LICENSE,
    PROP_CHECKSUM,
    PROP_CHECKSUM_ALGORITHM,
    PROP_CHECKSUM_VALUE,
    PROP_FILE_NAME,
    PROP_FILE_TYPE,
    PROP_LICENSE_CONCLUDED,
    PROP_LICENSE_ID,
    PROP_LICENSE_URL,
    PROP_MEMBER,
    RDF,
    URI_NOASSERTION,
    URI_NONE,
    standard_license_uri,
)


def _record(name: str = 'src/main.c', **kwargs: object) -> FileRecord:
    fields: dict[str, object] = {
        'file_type': FileType.SOURCE,
        'checksum': SHA1_PARENT,
        'concluded_license': NonStandardLicense('LicenseRef-1', 'text1'),
    }
    fields.update(kwargs)
    return FileRecord(name, **fields)  # type: ignore[arg-type]


def _file_node(graph: Graph, name: str = 'src/main.c') -> BNode:
    """Hand-write the minimal triples of a file node."""
    node = BNode()
    graph.add((node, RDF.type, CLASS_FILE))
    graph.add((node, PROP_FILE_NAME, Literal(name)))
    graph.add((node, PROP_CHECKSUM, Literal(SHA1_PARENT)))
    graph.add((node, PROP_FILE_TYPE, Literal('SOURCE')))
    graph.add((node, PROP_LICENSE_CONCLUDED, URI_NOASSERTION))
    return node


# ── License round trips ──────────────────────────────────────────────


class TestLicenseRoundTrip:
    """Tests that every license shape survives projection."""

    def test_non_standard(self, graph: Graph, licenses: Licenses) -> None:
        """Test non standard."""
        projector = GraphProjector(graph)
        for lic in licenses.non_standard:
            assert projector.reconstruct_license(projector.project_license(lic)) == lic

    def test_standard(self, graph: Graph, licenses: Licenses) -> None:
        """Test standard licenses keep all catalog fields."""
        projector = GraphProjector(graph)
        for lic in licenses.standard:
            copy = projector.reconstruct_license(projector.project_license(lic))
            assert copy == lic
            assert isinstance(copy, StandardLicense)
            assert copy.osi_approved is True

    def test_sets(self, graph: Graph, licenses: Licenses) -> None:
        """Test every conjunctive and disjunctive fixture."""
        projector = GraphProjector(graph)
        for expr in (*licenses.disjunctive, *licenses.conjunctive):
            assert projector.reconstruct_license(projector.project_license(expr)) == expr

    def test_complex(self, graph: Graph, licenses: Licenses) -> None:
        """Test the deeply nested fixture."""
        node = project(graph, licenses.complex)
        assert reconstruct_license(graph, node) == licenses.complex

    def test_sentinels_are_uris(self, graph: Graph) -> None:
        """Test sentinels project to their well-known URIs."""
        projector = GraphProjector(graph)
        assert projector.project_license(Sentinel.NONE) == URI_NONE
        assert projector.project_license(Sentinel.NOASSERTION) == URI_NOASSERTION
        assert projector.reconstruct_license(URI_NONE) is Sentinel.NONE
        assert len(graph) == 0

    def test_set_with_sentinel_member(self, graph: Graph) -> None:
        """Test set with sentinel member."""
        expr = DisjunctiveSet([NonStandardLicense('LicenseRef-1', 'text1'), Sentinel.NOASSERTION])
        node = project(graph, expr)
        assert (node, PROP_MEMBER, URI_NOASSERTION) in graph
        assert reconstruct_license(graph, node) == expr

    def test_set_type_edge(self, graph: Graph, licenses: Licenses) -> None:
        """Test set type edge."""
        node = project(graph, licenses.conjunctive[0])
        assert (node, RDF.type, CLASS_CONJUNCTIVE_SET) in graph
        assert len(list(graph.objects(node, PROP_MEMBER))) == 3

    def test_rejects_non_license(self, graph: Graph) -> None:
        """Test rejects non license."""
        with pytest.raises(TypeError):
            GraphProjector(graph).project_license('MIT')  # type: ignore[arg-type]

    def test_urls_keep_order_and_repeats(self, graph: Graph) -> None:
        """Test urls read back in written order, repeats included."""
        lic = StandardLicense(name='MIT License', id='MIT', text='t', urls=('u2', 'u1', 'u2', 'u0'))
        projector = GraphProjector(graph)
        copy = projector.reconstruct_license(projector.project_license(lic))
        assert isinstance(copy, StandardLicense)
        assert copy.urls == ('u2', 'u1', 'u2', 'u0')
        assert copy == lic

    def test_no_urls_writes_no_see_also(self, graph: Graph) -> None:
        """Test a license without urls has no rdfs:seeAlso edge."""
        node = project(graph, StandardLicense(name='MIT License', id='MIT', text='t'))
        assert (node, PROP_LICENSE_URL, None) not in graph
        assert reconstruct_license(graph, node).urls == ()  # type: ignore[union-attr]

    def test_literal_see_also_read(self, graph: Graph) -> None:
        """Test a bare literal rdfs:seeAlso is read as one url."""
        node = standard_license_uri('MIT')
        graph.add((node, RDF.type, CLASS_STANDARD_LICENSE))
        graph.add((node, PROP_LICENSE_ID, Literal('MIT')))
        graph.add((node, PROP_LICENSE_URL, Literal('https://opensource.org/licenses/MIT')))
        copy = reconstruct_license(graph, node)
        assert isinstance(copy, StandardLicense)
        assert copy.urls == ('https://opensource.org/licenses/MIT',)


# ── Leaf sharing ─────────────────────────────────────────────────────


class TestLeafSharing:
    """Tests for reuse of leaf license nodes."""

    def test_non_standard_reused(self, graph: Graph, licenses: Licenses) -> None:
        """Test a repeated non-standard id maps to one node."""
        projector = GraphProjector(graph)
        first = projector.project_license(licenses.non_standard[0])
        second = projector.project_license(licenses.non_standard[0])
        assert first == second
        assert len(list(graph.subjects(RDF.type, CLASS_NON_STANDARD_LICENSE))) == 1

    def test_complex_shares_leaves(self, graph: Graph, licenses: Licenses) -> None:
        """Test the complex fixture stores one node per leaf id."""
        project(graph, licenses.complex)
        ids = [str(o) for o in graph.objects(None, PROP_LICENSE_ID)]
        assert sorted(ids) == sorted(set(ids))

    def test_standard_uses_license_list_uri(self, graph: Graph, licenses: Licenses) -> None:
        """Test standard uses license list uri."""
        node = project(graph, licenses.standard[0])
        assert node == standard_license_uri('AFL-3.0')
        assert node == URIRef('http://spdx.org/licenses/AFL-3.0')

    def test_reuse_disabled(self, graph: Graph, licenses: Licenses) -> None:
        """Test every projection writes a fresh node when reuse is off."""
        projector = GraphProjector(graph, SpdxRdfConfig(reuse_license_nodes=False))
        first = projector.project_license(licenses.non_standard[0])
        second = projector.project_license(licenses.non_standard[0])
        assert first != second
        std = projector.project_license(licenses.standard[0])
        assert isinstance(std, BNode)
        assert projector.reconstruct_license(std) == licenses.standard[0]

    def test_conflicting_leaf_keeps_stored_node(self, graph: Graph) -> None:
        """Test a reused id with different text keeps the stored node and warns."""
        projector = GraphProjector(graph)
        stored = projector.project_license(NonStandardLicense('LicenseRef-1', 'original'))
        with patch.object(projector_module, 'log') as mock_log:
            again = projector.project_license(NonStandardLicense('LicenseRef-1', 'changed'))
        assert again == stored
        mock_log.warning.assert_called_once()
        assert mock_log.warning.call_args.args[0] == 'license_id_conflict'
        assert projector.reconstruct_license(stored) == NonStandardLicense('LicenseRef-1', 'original')

    def test_identical_leaf_reuse_does_not_warn(self, graph: Graph, licenses: Licenses) -> None:
        """Test identical leaf reuse does not warn."""
        projector = GraphProjector(graph)
        projector.project_license(licenses.standard[1])
        with patch.object(projector_module, 'log') as mock_log:
            projector.project_license(licenses.standard[1])
        mock_log.warning.assert_not_called()


# ── Malformed graphs ─────────────────────────────────────────────────


class TestMalformedLicenses:
    """Tests for license nodes that cannot be read back."""

    def test_untyped_node(self, graph: Graph) -> None:
        """Test untyped node."""
        node = BNode()
        graph.add((node, PROP_LICENSE_ID, Literal('LicenseRef-1')))
        with pytest.raises(MalformedGraphError) as exc_info:
            reconstruct_license(graph, node)
        assert exc_info.value.prop == 'rdf:type'
        assert exc_info.value.node == node

    def test_unknown_type(self, graph: Graph) -> None:
        """Test unknown type."""
        node = BNode()
        graph.add((node, RDF.type, CLASS_FILE))
        with pytest.raises(MalformedGraphError, match='unknown license type'):
            reconstruct_license(graph, node)

    def test_set_without_members(self, graph: Graph) -> None:
        """Test set without members."""
        node = BNode()
        graph.add((node, RDF.type, CLASS_CONJUNCTIVE_SET))
        with pytest.raises(MalformedGraphError) as exc_info:
            reconstruct_license(graph, node)
        assert exc_info.value.prop == 'spdx:member'

    def test_non_standard_without_text(self, graph: Graph) -> None:
        """Test non standard without text."""
        node = BNode()
        graph.add((node, RDF.type, CLASS_NON_STANDARD_LICENSE))
        graph.add((node, PROP_LICENSE_ID, Literal('LicenseRef-1')))
        with pytest.raises(MalformedGraphError) as exc_info:
            reconstruct_license(graph, node)
        assert exc_info.value.prop == 'spdx:extractedText'


class TestMalformedFiles:
    """Tests for file nodes that cannot be read back."""

    def test_minimal_node_reads(self, graph: Graph) -> None:
        """Test the hand-written minimal node reads with defaults."""
        record = reconstruct_file(graph, _file_node(graph))
        assert record.name == 'src/main.c'
        assert record.file_type is FileType.SOURCE
        assert record.concluded_license is Sentinel.NOASSERTION
        assert record.copyright is Sentinel.NOASSERTION
        assert record.notice_text is None
        assert record.comment == ''

    def test_legacy_checksum_uses_default_algorithm(self, graph: Graph) -> None:
        """Test a literal checksum uses the configured default algorithm."""
        node = _file_node(graph)
        record = reconstruct_file(graph, node, SpdxRdfConfig(default_checksum_algorithm=ChecksumAlgorithm.MD5))
        assert record.checksum == SHA1_PARENT
        assert record.checksum_algorithm is ChecksumAlgorithm.MD5

    def test_missing_name(self, graph: Graph) -> None:
        """Test missing name."""
        node = _file_node(graph)
        graph.remove((node, PROP_FILE_NAME, None))
        with pytest.raises(MalformedGraphError) as exc_info:
            reconstruct_file(graph, node)
        assert exc_info.value.prop == 'spdx:fileName'

    def test_missing_checksum(self, graph: Graph) -> None:
        """Test missing checksum."""
        node = _file_node(graph)
        graph.remove((node, PROP_CHECKSUM, None))
        with pytest.raises(MalformedGraphError) as exc_info:
            reconstruct_file(graph, node)
        assert exc_info.value.prop == 'spdx:checksum'

    def test_missing_concluded_license(self, graph: Graph) -> None:
        """Test missing concluded license."""
        node = _file_node(graph)
        graph.remove((node, PROP_LICENSE_CONCLUDED, None))
        with pytest.raises(MalformedGraphError) as exc_info:
            reconstruct_file(graph, node)
        assert exc_info.value.prop == 'spdx:licenseConcluded'

    def test_missing_file_type(self, graph: Graph) -> None:
        """Test missing file type."""
        node = _file_node(graph)
        graph.remove((node, PROP_FILE_TYPE, None))
        with pytest.raises(MalformedGraphError) as exc_info:
            reconstruct_file(graph, node)
        assert exc_info.value.prop == 'spdx:fileType'

    def test_unknown_file_type(self, graph: Graph) -> None:
        """Test unknown file type."""
        node = _file_node(graph)
        graph.set((node, PROP_FILE_TYPE, Literal('SPREADSHEET')))
        with pytest.raises(MalformedGraphError, match='unknown value'):
            reconstruct_file(graph, node)

    def test_not_a_file_node(self, graph: Graph, licenses: Licenses) -> None:
        """Test not a file node."""
        node = project(graph, licenses.non_standard[0])
        with pytest.raises(MalformedGraphError, match='not a file node'):
            reconstruct_file(graph, node)


# ── File projection ──────────────────────────────────────────────────


class TestFileProjection:
    """Tests for writing file records."""

    def test_checksum_node_shape(self, graph: Graph) -> None:
        """Test checksum node shape."""
        node = project(graph, _record())
        checksum = graph.value(node, PROP_CHECKSUM)
        assert graph.value(checksum, PROP_CHECKSUM_VALUE) == Literal(SHA1_PARENT)
        assert graph.value(checksum, PROP_CHECKSUM_ALGORITHM) is not None

    def test_sha256_round_trip(self, graph: Graph) -> None:
        """Test sha256 round trip."""
        record = _record(checksum='ab' * 32, checksum_algorithm=ChecksumAlgorithm.SHA256)
        copy = reconstruct_file(graph, project(graph, record))
        assert copy.checksum_algorithm is ChecksumAlgorithm.SHA256
        assert copy == record

    def test_sentinel_concluded_license(self, graph: Graph) -> None:
        """Test sentinel concluded license."""
        record = _record(concluded_license=Sentinel.NONE, seen_licenses=[Sentinel.NOASSERTION])
        node = project(graph, record)
        assert (node, PROP_LICENSE_CONCLUDED, URI_NONE) in graph
        assert reconstruct_file(graph, node) == record

    def test_literal_none_text_stays_literal(self, graph: Graph) -> None:
        """Test the string 'NONE' is stored as text, not as the sentinel."""
        record = _record(copyright='NONE')
        copy = reconstruct_file(graph, project(graph, record))
        assert copy.copyright == 'NONE'
        assert copy.copyright is not Sentinel.NONE

    def test_seen_licenses_share_concluded_leaf(self, graph: Graph, licenses: Licenses) -> None:
        """Test seen licenses share concluded leaf."""
        lic = licenses.non_standard[0]
        record = _record(concluded_license=lic, seen_licenses=[lic, licenses.standard[0]])
        project(graph, record)
        assert len(list(graph.subjects(RDF.type, CLASS_NON_STANDARD_LICENSE))) == 1

    def test_project_all(self, graph: Graph) -> None:
        """Test project all."""
        first = _record('a.c')
        second = _record('b.c', concluded_license=ConjunctiveSet([NonStandardLicense('LicenseRef-1', 'text1')]))
        nodes = project_all(graph, [first, second])
        assert len(nodes) == 2
        assert reconstruct_file(graph, nodes[1]) == second
        assert first.bound and second.bound

    def test_reconstructed_record_is_bound(self, graph: Graph) -> None:
        """Test reconstructed record is bound."""
        copy = reconstruct_file(graph, project(graph, _record()))
        assert copy.bound
