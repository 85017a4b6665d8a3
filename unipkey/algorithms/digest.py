"""
Дескрипторы алгоритмов хеширования для подписей.

Digest — неизменяемый дескриптор с каноническим коротким именем
("SHA256"), которое участвует в построении идентификатора алгоритма
подписи ("SHA256WITHRSA"). Сами вычисления выполняет cryptography.

Поддерживаемые алгоритмы:
    MD5, SHA1 — legacy, только для совместимости
    SHA224, SHA256, SHA384, SHA512 — SHA-2 (FIPS 180-4)

Example:
    >>> digest = get_digest("sha256")
    >>> digest.short_name
    'SHA256'
    >>> len(digest.digest(b"abc"))
    32
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List

from cryptography.hazmat.primitives import hashes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Digest:
    """
    Дескриптор алгоритма хеширования.

    Attributes:
        short_name: Каноническое короткое имя ("SHA256")
        digest_size: Размер хеша в байтах
        _factory: Фабрика объекта hashes.HashAlgorithm
    """

    short_name: str
    digest_size: int
    _factory: Callable[[], hashes.HashAlgorithm]

    @property
    def name(self) -> str:
        return self.short_name

    def algorithm(self) -> hashes.HashAlgorithm:
        """Новый объект HashAlgorithm для cryptography."""
        return self._factory()

    def digest(self, data: bytes) -> bytes:
        """
        Вычислить хеш данных (one-shot).

        Raises:
            TypeError: data не bytes-like
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("data must be bytes-like")
        ctx = hashes.Hash(self._factory())
        ctx.update(bytes(data))
        return ctx.finalize()

    def hexdigest(self, data: bytes) -> str:
        return self.digest(data).hex()


MD5 = Digest("MD5", 16, hashes.MD5)
SHA1 = Digest("SHA1", 20, hashes.SHA1)
SHA224 = Digest("SHA224", 28, hashes.SHA224)
SHA256 = Digest("SHA256", 32, hashes.SHA256)
SHA384 = Digest("SHA384", 48, hashes.SHA384)
SHA512 = Digest("SHA512", 64, hashes.SHA512)

DIGESTS: Dict[str, Digest] = {
    d.short_name: d for d in (MD5, SHA1, SHA224, SHA256, SHA384, SHA512)
}


def _normalize(name: str) -> str:
    return name.replace("-", "").replace("_", "").upper()


def get_digest(name: str) -> Digest:
    """
    Получить дескриптор хеша по имени.

    Имя нечувствительно к регистру, "-" и "_" игнорируются
    ("sha-256", "SHA_256", "sha256" -> SHA256).

    Raises:
        TypeError: name не строка
        KeyError: Неизвестный алгоритм

    Example:
        >>> get_digest("sha-1") is SHA1
        True
    """
    if not isinstance(name, str):
        raise TypeError("digest name must be str")

    key = _normalize(name)
    if key not in DIGESTS:
        available = ", ".join(sorted(DIGESTS))
        raise KeyError(f"Digest '{name}' not found. Available: {available}")

    logger.debug(f"Resolved digest: {name} -> {key}")
    return DIGESTS[key]


def list_digests() -> List[str]:
    """Короткие имена всех поддерживаемых хешей (sorted)."""
    return sorted(DIGESTS)


__all__ = [
    "Digest",
    "MD5",
    "SHA1",
    "SHA224",
    "SHA256",
    "SHA384",
    "SHA512",
    "DIGESTS",
    "get_digest",
    "list_digests",
]
