"""Uniform read access to the entries of a zip package.

Three sources are supported: a path on disk, an in-memory buffer and a file
inside a virtual filesystem (anything implementing the
``importlib.resources`` ``Traversable`` protocol, such as
``importlib.resources.files(package)`` or ``zipfile.Path``).
"""
from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import IO, TYPE_CHECKING, BinaryIO, List, Optional, Union

from docx_replace.utils.logger import get_logger

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable

LOGGER = get_logger(__name__)

Buffer = Union[bytes, bytearray, memoryview, BinaryIO]


class ArchiveAccessor:
    """Named, independently openable byte streams backed by a zip archive."""

    def __init__(self, zip_file: zipfile.ZipFile, source: str) -> None:
        self._zip: Optional[zipfile.ZipFile] = zip_file
        self.source = source

    # ------------------------------------------------------------------
    # Public helpers
    def names(self) -> List[str]:
        """Entry names in the order they were written to the archive."""
        return [info.filename for info in self.infolist()]

    def infolist(self) -> List[zipfile.ZipInfo]:
        return self._require_open().infolist()

    def open(self, name: Union[str, zipfile.ZipInfo]) -> IO[bytes]:
        """Open one entry for reading."""
        return self._require_open().open(name)

    def read(self, name: Union[str, zipfile.ZipInfo]) -> bytes:
        with self.open(name) as stream:
            return stream.read()

    @property
    def closed(self) -> bool:
        return self._zip is None

    def close(self) -> None:
        if self._zip is None:
            return
        self._zip.close()
        self._zip = None
        LOGGER.debug("Closed archive %s", self.source)

    def __enter__(self) -> "ArchiveAccessor":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<{type(self).__name__} {self.source!r} ({state})>"

    def _require_open(self) -> zipfile.ZipFile:
        if self._zip is None:
            raise ValueError(f"Archive {self.source!r} is already closed")
        return self._zip


class PathArchive(ArchiveAccessor):
    """Archive read from a path on disk; closing releases the file handle."""

    def __init__(self, path: Union[str, Path]) -> None:
        path = Path(path)
        super().__init__(zipfile.ZipFile(path), source=str(path))


class MemoryArchive(ArchiveAccessor):
    """Archive read from bytes or from a readable, seekable binary stream.

    Closing only drops the reference: a stream handed in by the caller stays
    open.
    """

    def __init__(self, buffer: Buffer) -> None:
        if isinstance(buffer, (bytes, bytearray, memoryview)):
            stream: BinaryIO = io.BytesIO(bytes(buffer))
        else:
            stream = buffer
        self._buffer: Optional[BinaryIO] = stream
        super().__init__(zipfile.ZipFile(stream), source="<memory>")

    def close(self) -> None:
        super().close()
        self._buffer = None


class FSArchive(ArchiveAccessor):
    """Archive stored as ``name`` inside a virtual filesystem rooted at ``root``."""

    def __init__(self, name: str, root: "Traversable") -> None:
        self._handle: Optional[BinaryIO] = root.joinpath(name).open("rb")
        try:
            zip_file = zipfile.ZipFile(self._handle)
        except Exception:
            self._handle.close()
            self._handle = None
            raise
        super().__init__(zip_file, source=name)

    def close(self) -> None:
        super().close()
        if self._handle is not None:
            self._handle.close()
            self._handle = None
