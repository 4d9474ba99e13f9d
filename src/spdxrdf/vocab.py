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

"""RDF vocabulary used by the graph projection.

Single source of truth for every namespace, class and property the
projector writes and reads.  The sentinel nodes are the only fixed
resource URIs; everything else is a class or a property.
"""

from __future__ import annotations

from rdflib import Namespace, URIRef
from rdflib.namespace import RDF, RDFS

from spdxrdf._types import ChecksumAlgorithm, FileType, Sentinel

SPDX_TERMS_NS = 'http://spdx.org/rdf/terms#'
SPDX_LICENSES_NS = 'http://spdx.org/licenses/'
DOAP_NS = 'http://usefulinc.com/ns/doap#'

SPDX = Namespace(SPDX_TERMS_NS)
SPDX_LICENSES = Namespace(SPDX_LICENSES_NS)
DOAP = Namespace(DOAP_NS)

# Classes.
CLASS_FILE = SPDX.File
CLASS_CHECKSUM = SPDX.Checksum
CLASS_CONJUNCTIVE_SET = SPDX.ConjunctiveLicenseSet
CLASS_DISJUNCTIVE_SET = SPDX.DisjunctiveLicenseSet
CLASS_NON_STANDARD_LICENSE = SPDX.ExtractedLicensingInfo
CLASS_STANDARD_LICENSE = SPDX.License
CLASS_PROJECT = DOAP.Project

# License properties.
PROP_MEMBER = SPDX.member
PROP_LICENSE_ID = SPDX.licenseId
PROP_EXTRACTED_TEXT = SPDX.extractedText
PROP_LICENSE_NAME = SPDX.name
PROP_LICENSE_TEXT = SPDX.licenseText
PROP_LICENSE_URL = RDFS.seeAlso
PROP_LICENSE_NOTES = RDFS.comment
PROP_STANDARD_HEADER = SPDX.standardLicenseHeader
PROP_TEMPLATE = SPDX.standardLicenseTemplate
PROP_OSI_APPROVED = SPDX.isOsiApproved

# File properties.
PROP_FILE_NAME = SPDX.fileName
PROP_FILE_TYPE = SPDX.fileType
PROP_CHECKSUM = SPDX.checksum
PROP_CHECKSUM_ALGORITHM = SPDX.algorithm
PROP_CHECKSUM_VALUE = SPDX.checksumValue
PROP_LICENSE_CONCLUDED = SPDX.licenseConcluded
PROP_LICENSE_INFO_IN_FILE = SPDX.licenseInfoInFile
PROP_LICENSE_COMMENTS = SPDX.licenseComments
PROP_COPYRIGHT = SPDX.copyrightText
PROP_COMMENT = RDFS.comment
PROP_NOTICE = SPDX.noticeText
PROP_CONTRIBUTOR = SPDX.fileContributor
PROP_DEPENDENCY = SPDX.fileDependency
PROP_ARTIFACT_OF = SPDX.artifactOf

# DOAP project properties.
PROP_PROJECT_NAME = DOAP.name
PROP_PROJECT_HOMEPAGE = DOAP.homepage

# Sentinel nodes.
SENTINEL_NODES: dict[Sentinel, URIRef] = {s: URIRef(s.uri) for s in Sentinel}
URI_NONE = SENTINEL_NODES[Sentinel.NONE]
URI_NOASSERTION = SENTINEL_NODES[Sentinel.NOASSERTION]

FILE_TYPE_NODES: dict[FileType, URIRef] = {t: SPDX[f'fileType_{t.value}'] for t in FileType}
CHECKSUM_ALGORITHM_NODES: dict[ChecksumAlgorithm, URIRef] = {
    a: SPDX[f'checksumAlgorithm_{a.name.lower()}'] for a in ChecksumAlgorithm
}


def standard_license_uri(license_id: str) -> URIRef:
    """Return the license-list URI of a standard license id."""
    return SPDX_LICENSES[license_id]


def sentinel_for(node: object) -> Sentinel | None:
    """Return the sentinel a node stands for, or ``None``."""
    if isinstance(node, URIRef):
        return Sentinel.from_uri(str(node))
    return None


__all__ = [
    'CHECKSUM_ALGORITHM_NODES',
    'DOAP',
    'FILE_TYPE_NODES',
    'RDF',
    'RDFS',
    'SENTINEL_NODES',
    'SPDX',
    'SPDX_LICENSES',
    'URI_NOASSERTION',
    'URI_NONE',
    'sentinel_for',
    'standard_license_uri',
]
