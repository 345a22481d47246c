"""Re-emit a package with edited parts taken from memory and the rest copied."""
from __future__ import annotations

import shutil
import zipfile
from typing import TYPE_CHECKING, BinaryIO, Optional

from docx_replace.parser.part_classifier import encode_part
from docx_replace.utils.logger import get_logger

if TYPE_CHECKING:
    from docx_replace.model.document import Docx

LOGGER = get_logger(__name__)

_COPY_CHUNK = 64 * 1024


def clone_entry_info(info: zipfile.ZipInfo) -> zipfile.ZipInfo:
    """Fresh header for ``info``; the reader's ZipInfo must not be reused for writing."""
    clone = zipfile.ZipInfo(info.filename, date_time=info.date_time)
    clone.compress_type = info.compress_type
    clone.comment = info.comment
    clone.create_system = info.create_system
    clone.external_attr = info.external_attr
    # open(clone, "w") decides on zip64 headers from the expected size.
    clone.file_size = info.file_size
    return clone


class DocxWriter:
    """Writes a :class:`Docx` back out in the original entry order."""

    def __init__(self, docx: "Docx") -> None:
        self.docx = docx

    def write(self, target: BinaryIO) -> None:
        with zipfile.ZipFile(target, "w") as output:
            for info in self.docx.entries:
                payload = self._tracked_payload(info.filename)
                clone = clone_entry_info(info)
                if payload is not None:
                    output.writestr(clone, payload)
                    continue
                with self.docx.accessor.open(info) as source, output.open(clone, "w") as sink:
                    shutil.copyfileobj(source, sink, _COPY_CHUNK)
        LOGGER.debug("Wrote %d entries", len(self.docx.entries))

    def _tracked_payload(self, name: str) -> Optional[bytes]:
        """In-memory bytes for ``name``, or ``None`` when the entry is copied through."""
        docx = self.docx
        layout = docx.layout
        if name == layout.document_path:
            return encode_part(docx.content)
        if name == layout.relationships_path and docx.tracks_links():
            return encode_part(docx.links)
        text = docx.headers.get(name) or docx.footers.get(name)
        if text:
            return encode_part(text)
        if name in docx.images:
            return docx.images[name]
        return None
