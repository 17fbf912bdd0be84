"""Tests for the line reader."""

from __future__ import annotations

import io

import pytest

from procstat.errors import StatFormatError, UnexpectedEof
from procstat.lines import LineParser


def _reject_all(line: str) -> str:
    raise StatFormatError("rejected")


class TestParseLine:
    """Unit tests for LineParser.parse_line()."""

    def test_strips_newline(self) -> None:
        reader = LineParser(io.BytesIO(b"first\nsecond\n"))
        assert reader.parse_line(str) == "first"
        assert reader.parse_line(str) == "second"

    def test_last_line_without_newline(self) -> None:
        reader = LineParser(io.BytesIO(b"only"))
        assert reader.parse_line(str) == "only"

    def test_blank_line_is_a_line(self) -> None:
        reader = LineParser(io.BytesIO(b"\nnext\n"))
        assert reader.parse_line(str) == ""
        assert reader.parse_line(str) == "next"

    def test_eof_raises_unexpected_eof(self) -> None:
        reader = LineParser(io.BytesIO(b"one\n"))
        reader.parse_line(str)
        with pytest.raises(UnexpectedEof) as excinfo:
            reader.parse_line(str)
        assert excinfo.value.line_number == 2

    def test_empty_stream(self) -> None:
        reader = LineParser(io.BytesIO(b""))
        with pytest.raises(UnexpectedEof):
            reader.parse_line(str)

    def test_parser_error_gets_line_number(self) -> None:
        reader = LineParser(io.BytesIO(b"a\nb\n"))
        reader.parse_line(str)
        with pytest.raises(StatFormatError, match=r"^line 2: rejected$"):
            reader.parse_line(_reject_all)

    def test_invalid_utf8(self) -> None:
        reader = LineParser(io.BytesIO(b"\xff\xfe\n"))
        with pytest.raises(StatFormatError, match="UTF-8"):
            reader.parse_line(str)

    def test_line_number_counts_lines_read(self) -> None:
        reader = LineParser(io.BytesIO(b"a\nb\nc\n"))
        assert reader.line_number == 0
        reader.parse_line(str)
        reader.parse_line(str)
        assert reader.line_number == 2

    def test_io_error_propagates(self) -> None:
        class _Broken(io.RawIOBase):
            def readline(self, size: int | None = -1) -> bytes:
                raise OSError("device gone")

        reader = LineParser(_Broken())  # type: ignore[arg-type]
        with pytest.raises(OSError, match="device gone"):
            reader.parse_line(str)


class TestTryParseLine:
    """Unit tests for LineParser.try_parse_line()."""

    def test_returns_parsed_value(self) -> None:
        reader = LineParser(io.BytesIO(b"value\n"))
        assert reader.try_parse_line(str.upper) == "VALUE"

    def test_eof_returns_none(self) -> None:
        reader = LineParser(io.BytesIO(b""))
        assert reader.try_parse_line(str) is None

    def test_rejected_line_stays_pending(self) -> None:
        reader = LineParser(io.BytesIO(b"intr 1 2\nctxt 5\n"))
        assert reader.try_parse_line(_reject_all) is None
        assert reader.parse_line(str) == "intr 1 2"
        assert reader.parse_line(str) == "ctxt 5"

    def test_pending_line_keeps_its_number(self) -> None:
        reader = LineParser(io.BytesIO(b"x\n"))
        assert reader.try_parse_line(_reject_all) is None
        with pytest.raises(StatFormatError) as excinfo:
            reader.parse_line(_reject_all)
        assert excinfo.value.line_number == 1

    def test_other_exceptions_propagate(self) -> None:
        def _boom(line: str) -> str:
            raise RuntimeError("boom")

        reader = LineParser(io.BytesIO(b"x\n"))
        with pytest.raises(RuntimeError):
            reader.try_parse_line(_boom)
