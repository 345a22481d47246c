"""DOCX package loader: opens an archive and reads its editable parts."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Dict, Optional, Union

from docx_replace.model.document import Docx
from docx_replace.model.layout import DEFAULT_LAYOUT, PackageLayout, PartKind
from docx_replace.parser.archive import ArchiveAccessor, Buffer, FSArchive, MemoryArchive, PathArchive
from docx_replace.parser.part_classifier import ClassifiedParts, PartClassifier
from docx_replace.utils.logger import get_logger

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable

LOGGER = get_logger(__name__)


class ReplaceDocx:
    """Read-only snapshot of a loaded package.

    Call :meth:`editable` to obtain a :class:`Docx` to edit and write. The
    snapshot owns the archive accessor; close it (or leave the ``with`` block)
    only after the last write.
    """

    def __init__(self, accessor: ArchiveAccessor, parts: ClassifiedParts, layout: PackageLayout) -> None:
        self.accessor = accessor
        self.parts = parts
        self.layout = layout

    @classmethod
    def load(cls, accessor: ArchiveAccessor, layout: Optional[PackageLayout] = None) -> "ReplaceDocx":
        """Classify the parts of ``accessor``; the accessor is closed if that fails."""
        layout = layout or DEFAULT_LAYOUT
        try:
            parts = PartClassifier(accessor, layout).classify()
        except Exception:
            accessor.close()
            raise
        LOGGER.debug("Loaded %d parts from %s", len(parts.kinds), accessor.source)
        return cls(accessor, parts, layout)

    @property
    def errors(self) -> Dict[PartKind, Exception]:
        """Categories that could not be read and were left empty."""
        return self.parts.errors

    def editable(self) -> Docx:
        """Return a new editable document with its own copies of the part values."""
        parts = self.parts
        links = parts.relationships if self._has_relationships() else None
        return Docx(
            accessor=self.accessor,
            entries=self.accessor.infolist(),
            content=parts.content,
            links=links,
            headers=parts.headers,
            footers=parts.footers,
            images=parts.images,
            layout=self.layout,
        )

    def close(self) -> None:
        self.accessor.close()

    def __enter__(self) -> "ReplaceDocx":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _has_relationships(self) -> bool:
        return (
            bool(self.parts.names_of(PartKind.RELATIONSHIPS))
            and PartKind.RELATIONSHIPS not in self.parts.errors
        )


def read_docx_file(path: Union[str, Path], layout: Optional[PackageLayout] = None) -> ReplaceDocx:
    """Open the package stored at ``path`` on disk."""
    return ReplaceDocx.load(PathArchive(path), layout)


def read_docx_from_memory(buffer: Buffer, layout: Optional[PackageLayout] = None) -> ReplaceDocx:
    """Open a package held in memory as bytes or a seekable binary stream."""
    return ReplaceDocx.load(MemoryArchive(buffer), layout)


def read_docx_from_fs(name: str, root: "Traversable", layout: Optional[PackageLayout] = None) -> ReplaceDocx:
    """Open the package ``name`` inside a virtual filesystem such as
    ``importlib.resources.files(package)``."""
    return ReplaceDocx.load(FSArchive(name, root), layout)
