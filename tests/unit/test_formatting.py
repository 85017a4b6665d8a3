"""Тесты hex-форматирования больших целых."""

from __future__ import annotations

import pytest

from unipkey.formatting import OCTETS_PER_LINE, format_hex_block, parse_hex_block


class TestFormatHexBlock:
    def test_zero(self) -> None:
        assert format_hex_block(0) == "00\n"

    def test_odd_length_padded(self) -> None:
        assert format_hex_block(0xABC) == "0a:bc\n"

    def test_single_octet(self) -> None:
        assert format_hex_block(255) == "ff\n"

    def test_full_line_has_no_break(self) -> None:
        value = int("11" * OCTETS_PER_LINE, 16)
        assert format_hex_block(value) == ":".join(["11"] * 15) + "\n"

    def test_break_before_sixteenth_octet(self) -> None:
        value = int("11" * 15 + "22", 16)
        expected = ":".join(["11"] * 15) + ":\n22\n"

        assert format_hex_block(value) == expected

    def test_indent(self) -> None:
        value = int("ab" * 16, 16)
        expected = "    " + ":".join(["ab"] * 15) + ":\n    ab\n"

        assert format_hex_block(value, indent="    ") == expected

    def test_line_lengths(self) -> None:
        value = (1 << 2047) | 1
        lines = format_hex_block(value).splitlines()

        assert len(lines) == 18  # 256 octets / 15
        assert all(len(line) == 15 * 3 for line in lines[:-1])

    @pytest.mark.parametrize(
        "value",
        [1, 0x0F, 0x100, 2**64 - 1, 2**255 + 12345, 3**500],
    )
    def test_round_trip(self, value: int) -> None:
        assert parse_hex_block(format_hex_block(value, indent="  ")) == value

    def test_negative(self) -> None:
        with pytest.raises(ValueError):
            format_hex_block(-1)

    @pytest.mark.parametrize("value", [True, 1.5, "ff", None])
    def test_non_int(self, value: object) -> None:
        with pytest.raises(TypeError):
            format_hex_block(value)  # type: ignore[arg-type]


class TestParseHexBlock:
    def test_multiline(self) -> None:
        assert parse_hex_block("    01:02:\n    03\n") == 0x010203

    def test_empty(self) -> None:
        with pytest.raises(ValueError):
            parse_hex_block(" \n")

    def test_invalid(self) -> None:
        with pytest.raises(ValueError):
            parse_hex_block("zz:01")
