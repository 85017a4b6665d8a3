"""Построение идентификатора алгоритма подписи из имени хеша и ключа."""

from __future__ import annotations

SEPARATOR = "WITH"


def signature_algorithm(digest_name: str, key_algorithm: str) -> str:
    """
    Идентификатор алгоритма подписи для провайдера.

    Комбинация не проверяется: неподдерживаемые сочетания отвергает
    провайдер при создании движка.

    Example:
        >>> signature_algorithm("SHA256", "RSA")
        'SHA256WITHRSA'
    """
    return digest_name + SEPARATOR + key_algorithm


__all__ = ["SEPARATOR", "signature_algorithm"]
