"""
Форматирование больших целых для человекочитаемых дампов ключей.

Example:
    >>> print(format_hex_block(0x0102), end="")
    01:02
    >>> format_hex_block(0)
    '00\\n'
"""

from __future__ import annotations

from typing import Final

OCTETS_PER_LINE: Final[int] = 15


def format_hex_block(value: int, indent: str = "") -> str:
    """
    Hex-представление числа октетами через ":" с переносом строк.

    Нечётное число hex-цифр дополняется ведущим нулём. Перед каждым
    15-м октетом вставляется перенос строки (разделитель ":" остаётся
    в конце перенесённой строки), каждая строка начинается с indent,
    в конце всегда "\\n".

    Args:
        value: Неотрицательное целое
        indent: Префикс каждой строки

    Raises:
        TypeError: value не int
        ValueError: value < 0
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"value must be int, got {type(value).__name__}")
    if value < 0:
        raise ValueError("value must be non-negative")

    digits = format(value, "x")
    if len(digits) % 2:
        digits = "0" + digits

    octets = [digits[i : i + 2] for i in range(0, len(digits), 2)]
    lines = [
        ":".join(octets[i : i + OCTETS_PER_LINE])
        for i in range(0, len(octets), OCTETS_PER_LINE)
    ]
    return indent + (":\n" + indent).join(lines) + "\n"


def parse_hex_block(text: str) -> int:
    """
    Обратное преобразование: убрать ":", пробелы и переносы, разобрать hex.

    Raises:
        ValueError: Текст не содержит корректного hex
    """
    digits = "".join(text.split()).replace(":", "")
    if not digits:
        raise ValueError("empty hex block")
    return int(digits, 16)


__all__ = ["OCTETS_PER_LINE", "format_hex_block", "parse_hex_block"]
