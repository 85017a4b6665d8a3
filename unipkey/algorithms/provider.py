"""
Провайдер криптографических примитивов подписи поверх cryptography.

Движок Signature создаётся по идентификатору "<DIGEST>WITH<KEYALG>",
инициализируется на подпись или проверку, принимает данные через update()
и завершает операцию sign()/verify(). Каждый вызов get_instance() даёт
новый движок: движки не разделяются между операциями и потоками.

Алгоритмы:
    - {MD5,SHA1,SHA224,SHA256,SHA384,SHA512}WITHRSA — RSASSA-PKCS1-v1_5
    - {SHA1,SHA224,SHA256,SHA384,SHA512}WITHDSA — DSA, подпись DER (r, s)

Ошибки провайдера:
    - NoSuchAlgorithmError: идентификатор не зарегистрирован
    - ProviderKeyError: ключ отсутствует или не того типа/роли
    - SignatureFormatError: байты подписи не разбираются
    - ProviderError: прочие сбои (не тот режим, сбой OpenSSL)

Проверка возвращает False только для корректно сформированной подписи,
не совпавшей с данными.

Example:
    >>> engine = Signature.get_instance("SHA256WITHRSA")
    >>> engine.init_sign(private_key)
    >>> engine.update(b"data")
    >>> sig = engine.sign()
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Optional

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import dsa, padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from unipkey.algorithms.binding import signature_algorithm
from unipkey.algorithms.digest import DIGESTS, MD5, Digest
from unipkey.core.exceptions import (
    ProviderError,
    ProviderKeyError,
    SignatureFormatError,
)
from unipkey.core.registry import SignatureRegistry

logger = logging.getLogger(__name__)


# ==============================================================================
# SIGNATURE SPI: RSA (PKCS#1 v1.5)
# ==============================================================================


class _RSASignatureSpi:
    """RSASSA-PKCS1-v1_5 с заданным хешем."""

    key_algorithm = "RSA"

    def __init__(self, digest: Digest) -> None:
        self._digest = digest

    def check_private(self, key: Any) -> None:
        if not isinstance(key, rsa.RSAPrivateKey):
            raise ProviderKeyError(
                f"Expected RSA private key, got {type(key).__name__}"
            )

    def check_public(self, key: Any) -> None:
        if not isinstance(key, rsa.RSAPublicKey):
            raise ProviderKeyError(
                f"Expected RSA public key, got {type(key).__name__}"
            )

    def sign(self, key: rsa.RSAPrivateKey, data: bytes) -> bytes:
        return key.sign(data, padding.PKCS1v15(), self._digest.algorithm())

    def verify(self, key: rsa.RSAPublicKey, data: bytes, signature: bytes) -> bool:
        expected = (key.key_size + 7) // 8
        if len(signature) != expected:
            raise SignatureFormatError(
                f"Signature length not correct: got {len(signature)} "
                f"but was expecting {expected}"
            )

        # Неверный padding означает испорченную подпись, а не чужие данные
        try:
            key.recover_data_from_signature(signature, padding.PKCS1v15(), None)
        except (InvalidSignature, ValueError) as exc:
            raise SignatureFormatError("Signature encoding error") from exc

        try:
            key.verify(signature, data, padding.PKCS1v15(), self._digest.algorithm())
        except InvalidSignature:
            return False
        return True


# ==============================================================================
# SIGNATURE SPI: DSA
# ==============================================================================


class _DSASignatureSpi:
    """DSA с заданным хешем, подпись в DER SEQUENCE(r, s)."""

    key_algorithm = "DSA"

    def __init__(self, digest: Digest) -> None:
        self._digest = digest

    def check_private(self, key: Any) -> None:
        if not isinstance(key, dsa.DSAPrivateKey):
            raise ProviderKeyError(
                f"Expected DSA private key, got {type(key).__name__}"
            )

    def check_public(self, key: Any) -> None:
        if not isinstance(key, dsa.DSAPublicKey):
            raise ProviderKeyError(
                f"Expected DSA public key, got {type(key).__name__}"
            )

    def sign(self, key: dsa.DSAPrivateKey, data: bytes) -> bytes:
        return key.sign(data, self._digest.algorithm())

    def verify(self, key: dsa.DSAPublicKey, data: bytes, signature: bytes) -> bool:
        try:
            r, s = decode_dss_signature(signature)
        except (ValueError, TypeError) as exc:
            raise SignatureFormatError("Could not decode DSA signature") from exc

        # DER должен быть каноническим, без хвоста после SEQUENCE
        if encode_dss_signature(r, s) != signature:
            raise SignatureFormatError("Non-canonical DSA signature encoding")

        q = key.parameters().parameter_numbers().q
        if not (0 < r < q and 0 < s < q):
            raise SignatureFormatError("DSA signature component out of range")

        try:
            key.verify(signature, data, self._digest.algorithm())
        except InvalidSignature:
            return False
        return True


# ==============================================================================
# SIGNATURE ENGINE
# ==============================================================================


class Signature:
    """
    Движок подписи/проверки для одного идентификатора алгоритма.

    Состояние: режим (sign/verify), ключ и буфер данных. После sign()
    или verify() буфер очищается, движок можно использовать повторно
    с тем же ключом. Не thread-safe: создавайте движок на каждую операцию.
    """

    _SIGN = "sign"
    _VERIFY = "verify"

    def __init__(self, algorithm: str, spi: Any) -> None:
        self.algorithm = algorithm
        self._spi = spi
        self._mode: Optional[str] = None
        self._key: Any = None
        self._buffer = bytearray()

    @classmethod
    def get_instance(
        cls, algorithm: str, registry: Optional[SignatureRegistry] = None
    ) -> Signature:
        """
        Новый движок для идентификатора.

        Raises:
            NoSuchAlgorithmError: Идентификатор не зарегистрирован
        """
        registry = registry or SignatureRegistry.get_instance()
        return cls(algorithm, registry.create(algorithm))

    def init_sign(self, private_key: Any) -> None:
        """
        Raises:
            ProviderKeyError: Ключ отсутствует или не приватный ключ нужного типа
        """
        if private_key is None:
            raise ProviderKeyError("No private key supplied", algorithm=self.algorithm)
        self._spi.check_private(private_key)
        self._reset(self._SIGN, private_key)

    def init_verify(self, public_key: Any) -> None:
        """
        Raises:
            ProviderKeyError: Ключ отсутствует или не публичный ключ нужного типа
        """
        if public_key is None:
            raise ProviderKeyError("No public key supplied", algorithm=self.algorithm)
        self._spi.check_public(public_key)
        self._reset(self._VERIFY, public_key)

    def update(self, data: bytes) -> None:
        if self._mode is None:
            raise ProviderError("Signature object not initialized")
        self._buffer.extend(data)

    def sign(self) -> bytes:
        """
        Raises:
            ProviderError: Движок не в режиме подписи или сбой примитива
        """
        if self._mode != self._SIGN:
            raise ProviderError(
                "Signature object not initialized for signing",
                algorithm=self.algorithm,
            )
        data = self._take()
        try:
            return self._spi.sign(self._key, data)
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise ProviderError(str(exc), algorithm=self.algorithm) from exc

    def verify(self, signature: bytes) -> bool:
        """
        Raises:
            ProviderError: Движок не в режиме проверки
            SignatureFormatError: Подпись не разбирается
        """
        if self._mode != self._VERIFY:
            raise ProviderError(
                "Signature object not initialized for verification",
                algorithm=self.algorithm,
            )
        data = self._take()
        try:
            return self._spi.verify(self._key, data, bytes(signature))
        except UnsupportedAlgorithm as exc:
            raise ProviderError(str(exc), algorithm=self.algorithm) from exc

    def _reset(self, mode: str, key: Any) -> None:
        self._mode = mode
        self._key = key
        self._buffer = bytearray()

    def _take(self) -> bytes:
        data = bytes(self._buffer)
        self._buffer = bytearray()
        return data


# ==============================================================================
# REGISTRATION
# ==============================================================================


def _register_all_signatures(registry: Optional[SignatureRegistry] = None) -> None:
    """
    Зарегистрировать RSA и DSA алгоритмы подписи в реестре.

    Вызывается автоматически при импорте модуля; повторный вызов
    пропускает уже зарегистрированные идентификаторы.
    """
    registry = registry or SignatureRegistry.get_instance()
    registered_count = 0

    for digest in DIGESTS.values():
        for spi_cls in (_RSASignatureSpi, _DSASignatureSpi):
            # DSA не определён для MD5
            if spi_cls is _DSASignatureSpi and digest is MD5:
                continue

            name = signature_algorithm(digest.short_name, spi_cls.key_algorithm)
            if registry.is_registered(name):
                continue

            registry.register_algorithm(
                name,
                functools.partial(spi_cls, digest),
                digest_name=digest.short_name,
                key_algorithm=spi_cls.key_algorithm,
            )
            registered_count += 1

    logger.info(f"Registered {registered_count} signature algorithms")


def supported_algorithms(key_algorithm: Optional[str] = None) -> list[str]:
    """
    Идентификаторы доступных алгоритмов подписи (sorted).

    Args:
        key_algorithm: Только для этого алгоритма ключа ("RSA", "DSA")

    Example:
        >>> supported_algorithms("DSA")[0]
        'SHA1WITHDSA'
    """
    registry = SignatureRegistry.get_instance()
    if key_algorithm is None:
        return registry.list_algorithms()
    return registry.list_by_key_algorithm(key_algorithm)


_register_all_signatures()


__all__ = [
    "Signature",
    "supported_algorithms",
]
