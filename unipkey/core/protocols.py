"""
Протокольные интерфейсы пакета.

typing.Protocol задаёт набор возможностей (capability set), которому должен
соответствовать вариант ключа, без наследования от общего базового класса.
Все протоколы помечены @runtime_checkable для поддержки isinstance().

Example:
    >>> from unipkey.keys.material import RSAKeyMaterial
    >>> isinstance(material, KeyMaterialProtocol)
    True
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, runtime_checkable

# ==============================================================================
# DIGEST PROTOCOL
# ==============================================================================


@runtime_checkable
class DigestProtocol(Protocol):
    """
    Дескриптор алгоритма хеширования.

    Attributes:
        short_name: Каноническое короткое имя ("SHA256", "SHA1", "MD5")
        digest_size: Размер хеша в байтах
    """

    short_name: str
    digest_size: int

    def digest(self, data: bytes) -> bytes:
        """Вычислить хеш данных (one-shot)."""
        ...


# ==============================================================================
# KEY MATERIAL PROTOCOL
# ==============================================================================


@runtime_checkable
class KeyMaterialProtocol(Protocol):
    """
    Набор возможностей варианта ключа (RSA, DSA, DH, unspecified).

    Attributes:
        algorithm: Имя алгоритма ключа ("RSA", "DSA" или "NONE")

    Rules:
        - public_key()/private_key() возвращают None при отсутствии ключа
          данной роли и никогда не бросают исключений
        - is_private() — проверка возможности подписи, вызывается до
          любых криптографических операций
        - to_der() — детерминированная функция материала ключа
    """

    algorithm: str

    def public_key(self) -> Optional[Any]:
        """Дескриптор публичного ключа или None."""
        ...

    def private_key(self) -> Optional[Any]:
        """Дескриптор приватного ключа или None."""
        ...

    def is_private(self) -> bool:
        """True если есть приватная часть, пригодная для подписи."""
        ...

    def is_public(self) -> bool:
        """True если есть публичная часть."""
        ...

    def to_der(self) -> bytes:
        """Каноническое DER-представление."""
        ...

    def params(self) -> Dict[str, int]:
        """Числовые компоненты ключа (n, e, p, q, g, ...)."""
        ...


__all__: list[str] = [
    "DigestProtocol",
    "KeyMaterialProtocol",
]
