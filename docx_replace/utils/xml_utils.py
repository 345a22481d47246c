"""Helpers to turn plain text into WordprocessingML-safe literals."""
from __future__ import annotations

import re
from xml.etree import ElementTree as ET

# Word has no escape for line or tab breaks inside <w:t>, they are elements.
BREAK_MARKUP = "<w:br/>"
TAB_MARKUP = "</w:t><w:tab/><w:t>"

_WRAPPER_TAG = "string"
_WRAPPER_OPEN = f"<{_WRAPPER_TAG}>"
_WRAPPER_CLOSE = f"</{_WRAPPER_TAG}>"

# Code points outside the XML 1.0 Char production.
_INVALID_XML_CHARS = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")
_REPLACEMENT_CHAR = "\ufffd"
_QUOTE_ENTITIES = {'"': "&#34;", "'": "&#39;"}


class EscapeError(ValueError):
    """Raised when a value cannot be marshalled as markup text."""


def marshal_text(raw: str) -> str:
    """Serialize ``raw`` as the text of a throwaway element and strip the wrapper.

    Quotes become numeric character references and characters XML cannot
    carry are replaced with U+FFFD.
    """
    if not isinstance(raw, str):
        raise EscapeError(f"cannot marshal {type(raw).__name__} as XML text")
    element = ET.Element(_WRAPPER_TAG)
    element.text = _INVALID_XML_CHARS.sub(_REPLACEMENT_CHAR, raw)
    serialized = ET.tostring(element, encoding="unicode", short_empty_elements=False)
    text = serialized.replace(_WRAPPER_OPEN, "", 1).replace(_WRAPPER_CLOSE, "", 1)
    for quote, entity in _QUOTE_ENTITIES.items():
        text = text.replace(quote, entity)
    return text


def escape_text(raw: str) -> str:
    """Return ``raw`` as literal text ready to be substituted into document markup.

    Markup-special characters are escaped first, then carriage returns and
    line feeds become ``<w:br/>`` and tabs close the current ``<w:t>``, emit
    ``<w:tab/>`` and reopen a ``<w:t>``.
    """
    escaped = marshal_text(raw)
    escaped = escaped.replace("\r\n", BREAK_MARKUP)
    escaped = escaped.replace("\r", BREAK_MARKUP)
    escaped = escaped.replace("\n", BREAK_MARKUP)
    return escaped.replace("\t", TAB_MARKUP)
