"""Sort package entries into editable parts and pass-through entries."""
from __future__ import annotations

import zipfile
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from docx_replace.model.layout import DEFAULT_LAYOUT, PackageLayout, PartKind
from docx_replace.parser.archive import ArchiveAccessor
from docx_replace.utils.logger import get_logger

LOGGER = get_logger(__name__)

TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"

# Stream and archive-integrity failures; anything else is a programming error.
READ_ERRORS = (OSError, zipfile.BadZipFile, EOFError)


class MissingPartError(KeyError):
    """Raised when the mandatory primary document part is absent."""


def decode_part(data: bytes) -> str:
    """Decode part bytes so that :func:`encode_part` gives them back unchanged."""
    return data.decode(TEXT_ENCODING, TEXT_ERRORS)


def encode_part(text: str) -> bytes:
    return text.encode(TEXT_ENCODING, TEXT_ERRORS)


@dataclass(slots=True)
class ClassifiedParts:
    """Editable parts read out of a package, keyed by entry name."""

    content: str
    relationships: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    footers: Dict[str, str] = field(default_factory=dict)
    images: Dict[str, bytes] = field(default_factory=dict)
    kinds: Dict[str, PartKind] = field(default_factory=dict)
    errors: Dict[PartKind, Exception] = field(default_factory=dict)

    def names_of(self, kind: PartKind) -> List[str]:
        return [name for name, part_kind in self.kinds.items() if part_kind is kind]


class PartClassifier:
    """Reads the primary content, relationships, headers, footers and media."""

    def __init__(self, accessor: ArchiveAccessor, layout: Optional[PackageLayout] = None) -> None:
        self.accessor = accessor
        self.layout = layout or DEFAULT_LAYOUT

    def classify(self) -> ClassifiedParts:
        kinds = {name: self.layout.kind_of(name) for name in self.accessor.names()}

        content = self._read_content(kinds)
        parts = ClassifiedParts(content=content, kinds=kinds)

        relationships = [name for name, kind in kinds.items() if kind is PartKind.RELATIONSHIPS]
        if relationships:
            try:
                parts.relationships = decode_part(self.accessor.read(relationships[0]))
            except READ_ERRORS as exc:
                self._degrade(parts, PartKind.RELATIONSHIPS, exc, relationships[0])

        parts.headers = self._read_category(parts, PartKind.HEADER, binary=False)
        parts.footers = self._read_category(parts, PartKind.FOOTER, binary=False)
        parts.images = self._read_category(parts, PartKind.IMAGE, binary=True)

        LOGGER.debug(
            "Classified %d entries: %d header(s), %d footer(s), %d image(s)",
            len(kinds),
            len(parts.headers),
            len(parts.footers),
            len(parts.images),
        )
        return parts

    # ------------------------------------------------------------------
    # Internal helpers
    def _read_content(self, kinds: Dict[str, PartKind]) -> str:
        document_path = self.layout.document_path
        if kinds.get(document_path) is not PartKind.PRIMARY_CONTENT:
            raise MissingPartError(f"Required DOCX part missing: {document_path}")
        return decode_part(self.accessor.read(document_path))

    def _read_category(self, parts: ClassifiedParts, kind: PartKind, *, binary: bool) -> Dict:
        collected: Dict = {}
        for name in parts.names_of(kind):
            try:
                data = self.accessor.read(name)
            except READ_ERRORS as exc:
                self._degrade(parts, kind, exc, name)
                return {}
            collected[name] = data if binary else decode_part(data)
        return collected

    @staticmethod
    def _degrade(parts: ClassifiedParts, kind: PartKind, exc: Exception, name: str) -> None:
        parts.errors[kind] = exc
        LOGGER.warning("Ignoring %s parts, failed to read %s: %s", kind.value, name, exc)


def classify(accessor: ArchiveAccessor, layout: Optional[PackageLayout] = None) -> ClassifiedParts:
    """Convenience function to classify every entry of an open archive."""
    return PartClassifier(accessor, layout).classify()
