"""
Трансляция ошибок провайдера примитивов в доменную PKeyError.

Сохраняет исходный текст ошибки провайдера в context["provider_message"]
и исходное исключение в __cause__ (raise ... from exc у вызывающего кода).
"""

from __future__ import annotations

import logging
from typing import Optional

from unipkey.core.exceptions import (
    KeyErrorReason,
    NoSuchAlgorithmError,
    PKeyError,
    ProviderError,
    ProviderKeyError,
    SignatureFormatError,
    new_pkey_error,
)

logger = logging.getLogger(__name__)


def map_provider_error(
    exc: ProviderError, algorithm: Optional[str] = None
) -> PKeyError:
    """
    Отобразить ошибку провайдера в PKeyError.

    Args:
        exc: Ошибка провайдера
        algorithm: Идентификатор алгоритма подписи (например, "SHA256WITHRSA")

    Returns:
        PKeyError с соответствующей причиной

    Example:
        >>> err = map_provider_error(NoSuchAlgorithmError("MD5WITHDSA"), "MD5WITHDSA")
        >>> err.reason
        <KeyErrorReason.ALGORITHM_UNAVAILABLE: 'algorithm-unavailable'>
    """
    algorithm = algorithm or exc.algorithm

    if isinstance(exc, NoSuchAlgorithmError):
        reason = KeyErrorReason.ALGORITHM_UNAVAILABLE
        message = f"unsupported algorithm: {algorithm}"
    elif isinstance(exc, SignatureFormatError):
        reason = KeyErrorReason.INVALID_SIGNATURE
        message = "invalid signature"
    elif isinstance(exc, ProviderKeyError):
        reason = KeyErrorReason.INVALID_KEY
        message = "invalid key"
    else:
        reason = KeyErrorReason.INVALID_KEY
        message = exc.message or "key operation failed"

    logger.debug("Provider failure mapped to %s (%s)", reason.value, algorithm)

    return new_pkey_error(
        message,
        reason,
        algorithm=algorithm,
        provider_message=exc.message,
    )


__all__ = ["map_provider_error"]
