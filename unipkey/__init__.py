"""
unipkey
=======

Единый интерфейс публичных ключей RSA, DSA и Diffie-Hellman поверх
cryptography: подпись, проверка подписи и каноническая сериализация.

Пакет предоставляет:
    - PKey — ключ любого варианта с протоколом sign/verify
    - Digest-дескрипторы (MD5, SHA1, SHA-2) для построения
      идентификатора "<DIGEST>WITH<KEYALG>"
    - PKeyError — единую доменную ошибку с причиной KeyErrorReason
    - Дамп компонентов ключа в hex-блоках (format_hex_block)

Пример:
    >>> from unipkey import PKey, KeyType, SHA256
    >>>
    >>> key = PKey.generate(KeyType.RSA, 2048)
    >>> signature = key.sign(SHA256, b"document")
    >>> key.public_key().verify(SHA256, signature, b"document")
    True

Логирование:
    Уровень задаётся переменной окружения UNIPKEY_LOG_LEVEL
    (DEBUG, INFO, WARNING, ERROR, CRITICAL; по умолчанию WARNING).
"""

import logging
import os
import sys

__version__ = "0.1.0"
__license__ = "MIT"

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================


def _setup_logging() -> None:
    """
    Настроить логгер пакета "unipkey".

    Консольный обработчик (stderr), формат с временной меткой, уровнем
    и модулем. Идемпотентна: повторные вызовы ничего не меняют.
    """
    log_level_str = os.environ.get("UNIPKEY_LOG_LEVEL", "WARNING").upper()
    log_level = getattr(logging, log_level_str, logging.WARNING)
    if not isinstance(log_level, int):
        log_level = logging.WARNING

    package_logger = logging.getLogger("unipkey")
    if package_logger.handlers:
        return

    package_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)


_setup_logging()

from unipkey.algorithms.binding import signature_algorithm  # noqa: E402
from unipkey.algorithms.digest import (  # noqa: E402
    MD5,
    SHA1,
    SHA224,
    SHA256,
    SHA384,
    SHA512,
    Digest,
    get_digest,
    list_digests,
)
from unipkey.algorithms.provider import Signature, supported_algorithms  # noqa: E402
from unipkey.config import KeyGenConfig, KeyProfile, load_config  # noqa: E402
from unipkey.core.exceptions import (  # noqa: E402
    CryptoError,
    KeyErrorReason,
    PKeyError,
    PrivateKeyRequiredError,
    new_pkey_error,
)
from unipkey.formatting import format_hex_block, parse_hex_block  # noqa: E402
from unipkey.keys.material import KeyType  # noqa: E402
from unipkey.keys.pkey import PKey, load_key  # noqa: E402

__all__ = [
    # Keys
    "PKey",
    "KeyType",
    "load_key",
    # Digests
    "Digest",
    "MD5",
    "SHA1",
    "SHA224",
    "SHA256",
    "SHA384",
    "SHA512",
    "get_digest",
    "list_digests",
    # Provider
    "Signature",
    "signature_algorithm",
    "supported_algorithms",
    # Errors
    "CryptoError",
    "PKeyError",
    "PrivateKeyRequiredError",
    "KeyErrorReason",
    "new_pkey_error",
    # Config
    "KeyGenConfig",
    "KeyProfile",
    "load_config",
    # Formatting
    "format_hex_block",
    "parse_hex_block",
]
