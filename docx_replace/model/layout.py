"""Canonical part locations inside a WordprocessingML package."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DOCUMENT_XML_PATH = "word/document.xml"
DOCUMENT_RELS_PATH = "word/_rels/document.xml.rels"
HEADER_MARKER = "header"
FOOTER_MARKER = "footer"
MEDIA_PREFIX = "word/media/"


class PartKind(Enum):
    """Role an archive entry plays for the editor."""

    PRIMARY_CONTENT = "content"
    RELATIONSHIPS = "relationships"
    HEADER = "header"
    FOOTER = "footer"
    IMAGE = "image"
    PASSTHROUGH = "passthrough"


@dataclass(frozen=True, slots=True)
class PackageLayout:
    """Names and name patterns used to recognise the editable parts."""

    document_path: str = DOCUMENT_XML_PATH
    relationships_path: str = DOCUMENT_RELS_PATH
    header_marker: str = HEADER_MARKER
    footer_marker: str = FOOTER_MARKER
    media_prefix: str = MEDIA_PREFIX

    def kind_of(self, name: str) -> PartKind:
        """Classify a single entry name; the first matching rule wins."""
        if name == self.document_path:
            return PartKind.PRIMARY_CONTENT
        if name == self.relationships_path:
            return PartKind.RELATIONSHIPS
        if self.header_marker in name:
            return PartKind.HEADER
        if self.footer_marker in name:
            return PartKind.FOOTER
        if name.startswith(self.media_prefix):
            return PartKind.IMAGE
        return PartKind.PASSTHROUGH


DEFAULT_LAYOUT = PackageLayout()
