"""Builders for small in-memory DOCX packages used across the tests."""
from __future__ import annotations

import io
import zipfile
from typing import Dict, List, Optional, Tuple

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"

CONTENT_TYPES_XML = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
    '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
    '<Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>'
    '<Default Extension="xml" ContentType="application/xml"/>'
    '<Default Extension="png" ContentType="image/png"/>'
    "</Types>"
)

PACKAGE_RELS_XML = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
    '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
    '<Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument" Target="word/document.xml"/>'
    "</Relationships>"
)

DOCUMENT_RELS_XML = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
    '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
    '<Relationship Id="rId5" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/hyperlink" Target="http://example.com/" TargetMode="External"/>'
    '<Relationship Id="rId6" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/image" Target="media/image1.png"/>'
    "</Relationships>"
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x02\x00\x00\x00"


def paragraph(text: str) -> str:
    return f'<w:p><w:r><w:t xml:space="preserve">{text}</w:t></w:r></w:p>'


def document_xml(*texts: str) -> str:
    body = "".join(paragraph(text) for text in texts)
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
        f'<w:document xmlns:w="{W_NS}"><w:body>{body}</w:body></w:document>'
    )


def header_xml(text: str) -> str:
    return f'<?xml version="1.0" encoding="UTF-8"?>\n<w:hdr xmlns:w="{W_NS}">{paragraph(text)}</w:hdr>'


def footer_xml(text: str) -> str:
    return f'<?xml version="1.0" encoding="UTF-8"?>\n<w:ftr xmlns:w="{W_NS}">{paragraph(text)}</w:ftr>'


def default_entries(
    headers: Optional[List[str]] = None,
    footers: Optional[List[str]] = None,
    with_image: bool = True,
) -> List[Tuple[str, bytes]]:
    """Entries of a typical small package, in the order Word writes them."""
    entries: List[Tuple[str, bytes]] = [
        ("[Content_Types].xml", CONTENT_TYPES_XML.encode("utf-8")),
        ("_rels/.rels", PACKAGE_RELS_XML.encode("utf-8")),
        (
            "word/document.xml",
            document_xml("This is a word document.", "Second line of the document.").encode("utf-8"),
        ),
        ("word/_rels/document.xml.rels", DOCUMENT_RELS_XML.encode("utf-8")),
    ]
    for index, text in enumerate(headers if headers is not None else ["This is a header."], start=1):
        entries.append((f"word/header{index}.xml", header_xml(text).encode("utf-8")))
    for index, text in enumerate(footers if footers is not None else ["This is a footer."], start=1):
        entries.append((f"word/footer{index}.xml", footer_xml(text).encode("utf-8")))
    if with_image:
        entries.append(("word/media/image1.png", PNG_BYTES))
    entries.append(("word/styles.xml", f'<w:styles xmlns:w="{W_NS}"/>'.encode("utf-8")))
    entries.append(("docProps/core.xml", b"<cp:coreProperties/>"))
    return entries


def build_docx(
    entries: Optional[List[Tuple[str, bytes]]] = None, compression: int = zipfile.ZIP_DEFLATED
) -> bytes:
    """Zip ``entries`` (name, payload) into a package and return its bytes."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression) as archive:
        for name, payload in entries if entries is not None else default_entries():
            archive.writestr(name, payload)
    return buffer.getvalue()


def read_entries(data: bytes) -> Dict[str, bytes]:
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        return {name: archive.read(name) for name in archive.namelist()}


def entry_names(data: bytes) -> List[str]:
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        return archive.namelist()
