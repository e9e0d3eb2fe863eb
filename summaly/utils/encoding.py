"""Character encoding detection for fetched bodies."""

from __future__ import annotations

import codecs
import re

_SNIFF_BYTES = 4096

_BOMS: list[tuple[bytes, str]] = [
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
]

_HEADER_CHARSET_RE = re.compile(r"charset\s*=\s*[\"']?([\w.:-]+)", re.IGNORECASE)
_META_CHARSET_RE = re.compile(rb"<meta[^>]+charset\s*=\s*[\"']?\s*([\w.:-]+)", re.IGNORECASE)


def _normalize(label: str | None) -> str | None:
    if not label:
        return None
    try:
        return codecs.lookup(label.strip()).name
    except LookupError:
        return None


def detect_encoding(raw: bytes, content_type: str | None = None) -> str:
    """Return the encoding label to decode *raw* with.

    Order: byte order mark, the Content-Type charset, a ``<meta>`` charset
    declaration near the top of the document, then UTF-8.
    """
    for bom, label in _BOMS:
        if raw.startswith(bom):
            return label

    if content_type:
        match = _HEADER_CHARSET_RE.search(content_type)
        if match and (label := _normalize(match.group(1))):
            return label

    match = _META_CHARSET_RE.search(raw[:_SNIFF_BYTES])
    if match and (label := _normalize(match.group(1).decode("ascii", "ignore"))):
        return label

    return "utf-8"


def to_utf8(raw: bytes, encoding: str) -> str:
    return raw.decode(_normalize(encoding) or "utf-8", errors="replace")
