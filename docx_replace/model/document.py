"""Editable view of a DOCX package: live part values plus the original entries."""
from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import BinaryIO, Callable, Dict, List, Optional, Union

from docx_replace.model.layout import DEFAULT_LAYOUT, PackageLayout
from docx_replace.parser.archive import ArchiveAccessor
from docx_replace.utils.logger import get_logger
from docx_replace.utils.xml_utils import escape_text
from docx_replace.writer.docx_writer import DocxWriter

LOGGER = get_logger(__name__)

ContentTransform = Callable[[str], str]


class Docx:
    """In-memory text, links, headers, footers and images of one package.

    Substitutions only touch the values held here. Entries that are not
    tracked are streamed from ``accessor`` when the package is written, so the
    accessor has to stay open until the last :meth:`write`.
    """

    def __init__(
        self,
        accessor: ArchiveAccessor,
        entries: List[zipfile.ZipInfo],
        content: str,
        links: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        footers: Optional[Dict[str, str]] = None,
        images: Optional[Dict[str, bytes]] = None,
        layout: Optional[PackageLayout] = None,
    ) -> None:
        self.accessor = accessor
        self.entries = list(entries)
        self.layout = layout or DEFAULT_LAYOUT
        self._content = content
        self._links = links
        self._headers: Dict[str, str] = dict(headers or {})
        self._footers: Dict[str, str] = dict(footers or {})
        self._images: Dict[str, bytes] = dict(images or {})

    # ------------------------------------------------------------------
    # Accessors
    @property
    def content(self) -> str:
        return self._content

    def set_content(self, content: str) -> None:
        """Replace the whole primary document markup; no escaping is applied."""
        self._content = content

    @property
    def links(self) -> str:
        return self._links or ""

    def tracks_links(self) -> bool:
        """Whether the relationships part was loaded and will be written from memory."""
        return self._links is not None

    @property
    def headers(self) -> Dict[str, str]:
        return self._headers

    @property
    def footers(self) -> Dict[str, str]:
        return self._footers

    @property
    def images(self) -> Dict[str, bytes]:
        return self._images

    def images_len(self) -> int:
        return len(self._images)

    def image_names(self) -> List[str]:
        return list(self._images)

    # ------------------------------------------------------------------
    # Substitutions
    def replace(self, old: str, new: str, num: int = -1) -> None:
        """Replace the first ``num`` occurrences of ``old`` in the body text.

        Both strings are escaped first; newlines and tabs in ``new`` become
        Word line and tab breaks. A negative ``num`` replaces every occurrence.
        """
        old, new = escape_text(old), escape_text(new)
        self._content = self._content.replace(old, new, num)

    def replace_raw(self, old: str, new: str, num: int = -1) -> None:
        """Like :meth:`replace` but ``old`` and ``new`` are used as markup verbatim."""
        self._content = self._content.replace(old, new, num)

    def replace_raw_by_callback(self, transform: ContentTransform) -> None:
        """Store ``transform(content)`` as the new body markup."""
        self._content = transform(self._content)

    def replace_link(self, old: str, new: str, num: int = -1) -> None:
        """Replace hyperlink targets and other text in the document relationships."""
        old, new = escape_text(old), escape_text(new)
        if self._links is None:
            return
        self._links = self._links.replace(old, new, num)

    def replace_header(self, old: str, new: str) -> None:
        """Replace every occurrence of ``old`` in every header part."""
        self._replace_all(self._headers, old, new)

    def replace_footer(self, old: str, new: str) -> None:
        """Replace every occurrence of ``old`` in every footer part."""
        self._replace_all(self._footers, old, new)

    def replace_image(self, name: str, source_path: Union[str, Path]) -> None:
        """Swap the bytes of image ``name`` for the file at ``source_path``.

        Unknown image names are ignored; check :meth:`image_names` first.
        """
        if name not in self._images:
            LOGGER.debug("No image named %s in package, nothing replaced", name)
            return
        self._images[name] = Path(source_path).read_bytes()

    # ------------------------------------------------------------------
    # Output
    def write(self, target: BinaryIO) -> None:
        """Write the package as a zip archive into ``target``."""
        DocxWriter(self).write(target)

    def write_to_file(self, path: Union[str, Path]) -> None:
        with open(path, "wb") as target:
            self.write(target)

    def to_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.write(buffer)
        return buffer.getvalue()

    @staticmethod
    def _replace_all(parts: Dict[str, str], old: str, new: str) -> None:
        old, new = escape_text(old), escape_text(new)
        for name, text in parts.items():
            parts[name] = text.replace(old, new)
