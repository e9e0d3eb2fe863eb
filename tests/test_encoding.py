"""Tests for encoding detection."""

from __future__ import annotations

import codecs

from summaly.utils.encoding import detect_encoding, to_utf8


class TestDetectEncoding:
    def test_utf8_bom(self) -> None:
        assert detect_encoding(codecs.BOM_UTF8 + b"<html>") == "utf-8-sig"

    def test_header_charset(self) -> None:
        assert detect_encoding(b"<html>", "text/html; charset=EUC-JP") == "euc_jp"

    def test_header_wins_over_meta(self) -> None:
        raw = b'<meta charset="shift_jis">'
        assert detect_encoding(raw, "text/html; charset=utf-8") == "utf-8"

    def test_meta_charset(self) -> None:
        assert detect_encoding(b'<html><head><meta charset="windows-1252">') == "cp1252"

    def test_http_equiv(self) -> None:
        raw = b'<meta http-equiv="Content-Type" content="text/html; charset=iso-8859-1">'
        assert detect_encoding(raw) == "iso8859-1"

    def test_unknown_label_falls_back(self) -> None:
        assert detect_encoding(b"<html>", "text/html; charset=no-such-codec") == "utf-8"

    def test_default(self) -> None:
        assert detect_encoding(b"plain") == "utf-8"


class TestToUtf8:
    def test_decodes(self) -> None:
        assert to_utf8("テスト".encode("euc_jp"), "euc_jp") == "テスト"

    def test_invalid_bytes_replaced(self) -> None:
        assert to_utf8(b"ok\xff", "utf-8") == "ok�"

    def test_unknown_label_uses_utf8(self) -> None:
        assert to_utf8(b"abc", "bogus") == "abc"
