"""
Исключения модуля публичных ключей.

Все ошибки операций sign/verify выходят наружу как один доменный тип
PKeyError с причиной (KeyErrorReason). Ошибки провайдера примитивов
(ProviderError и наследники) живут только внутри пакета и
транслируются в PKeyError через error_mapping.

Иерархия:
    CryptoError (базовое)
    ├── PKeyError
    │   └── PrivateKeyRequiredError (также ValueError)
    └── ProviderError
        ├── NoSuchAlgorithmError
        ├── ProviderKeyError
        └── SignatureFormatError

Security Note:
    Сообщения НЕ содержат ключей, подписей или подписываемых данных.

Example:
    >>> try:
    ...     key.verify(digest, signature, data)
    ... except PKeyError as e:
    ...     logger.error("verify failed: %s (%s)", e, e.reason.value)
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

__all__: list[str] = [
    "CryptoError",
    "KeyErrorReason",
    "PKeyError",
    "PrivateKeyRequiredError",
    "ProviderError",
    "NoSuchAlgorithmError",
    "ProviderKeyError",
    "SignatureFormatError",
    "new_pkey_error",
]


# ==============================================================================
# BASE EXCEPTION
# ==============================================================================


class CryptoError(Exception):
    """
    Базовое исключение для всех криптографических ошибок пакета.

    Attributes:
        message: Человекочитаемое сообщение об ошибке
        algorithm: Идентификатор алгоритма (например, "SHA256WITHRSA")
        context: Дополнительный контекст для отладки (без секретов!)
    """

    def __init__(
        self,
        message: str,
        *,
        algorithm: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.algorithm = algorithm
        self.context = context or {}

    def __str__(self) -> str:
        """
        Строковое представление исключения.

        Example:
            >>> str(error)
            'PKeyError: invalid key [algorithm=SHA256WITHRSA]'
        """
        parts = [self.__class__.__name__, ": ", self.message]

        if self.algorithm:
            parts.append(f" [algorithm={self.algorithm}]")

        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f" ({ctx_str})")

        return "".join(parts)

    def __repr__(self) -> str:
        """Представление для отладки."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"algorithm={self.algorithm!r}, "
            f"context={self.context!r})"
        )


# ==============================================================================
# DOMAIN KEY ERROR
# ==============================================================================


class KeyErrorReason(str, Enum):
    """Причина PKeyError."""

    # Подпись без приватного ключа
    PRECONDITION_VIOLATION = "precondition-violation"

    # digest/signature/data в verify не того типа
    MALFORMED_ARGUMENT = "malformed-argument"

    # Комбинация digest + алгоритм ключа не поддерживается провайдером
    ALGORITHM_UNAVAILABLE = "algorithm-unavailable"

    # Байты подписи не удалось разобрать / проверить механически
    INVALID_SIGNATURE = "invalid-signature-material"

    # Ключ отвергнут провайдером (не та роль, повреждён, несовместим)
    INVALID_KEY = "invalid-key-material"


class PKeyError(CryptoError):
    """
    Единая доменная ошибка операций с ключами.

    Любой сбой sign/verify (включая неверную форму аргументов verify)
    приходит к вызывающему коду именно этим типом. Различать
    "плохой аргумент" и "плохая криптография" можно только по reason,
    но не по классу исключения.

    Attributes:
        reason: Причина ошибки (KeyErrorReason)

    Example:
        >>> raise PKeyError("invalid key", reason=KeyErrorReason.INVALID_KEY)
    """

    def __init__(
        self,
        message: str,
        *,
        reason: KeyErrorReason,
        algorithm: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, algorithm=algorithm, context=context)
        self.reason = reason

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"reason={self.reason.value!r}, "
            f"algorithm={self.algorithm!r})"
        )


class PrivateKeyRequiredError(PKeyError, ValueError):
    """
    Подпись запрошена у ключа без приватной части.

    Одновременно PKeyError (reason=PRECONDITION_VIOLATION) и ValueError,
    т.е. ошибка неверного аргумента с точки зрения Python.
    """

    def __init__(self, message: str = "Private key is needed.") -> None:
        super().__init__(message, reason=KeyErrorReason.PRECONDITION_VIOLATION)


def new_pkey_error(
    message: str,
    reason: KeyErrorReason,
    *,
    algorithm: Optional[str] = None,
    provider_message: Optional[str] = None,
) -> PKeyError:
    """
    Построить PKeyError без побочных эффектов.

    Args:
        message: Сообщение об ошибке
        reason: Причина (KeyErrorReason)
        algorithm: Идентификатор алгоритма, если известен
        provider_message: Исходный текст ошибки провайдера (для диагностики)

    Returns:
        Новый экземпляр PKeyError (не выброшенный)

    Example:
        >>> err = new_pkey_error("invalid key", KeyErrorReason.INVALID_KEY)
        >>> err.reason is KeyErrorReason.INVALID_KEY
        True
    """
    context: Dict[str, Any] = {}
    if provider_message:
        context["provider_message"] = provider_message
    return PKeyError(message, reason=reason, algorithm=algorithm, context=context)


# ==============================================================================
# PROVIDER ERRORS (internal)
# ==============================================================================


class ProviderError(CryptoError):
    """Базовая ошибка провайдера криптографических примитивов."""


class NoSuchAlgorithmError(ProviderError):
    """Провайдер не знает запрошенный идентификатор алгоритма подписи."""

    def __init__(self, algorithm: str) -> None:
        super().__init__(f"{algorithm} Signature not available", algorithm=algorithm)


class ProviderKeyError(ProviderError):
    """Ключ не подходит движку подписи (нет ключа, не тот тип или роль)."""


class SignatureFormatError(ProviderError):
    """Байты подписи не удалось разобрать (длина, кодировка, padding)."""
