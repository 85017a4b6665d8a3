"""
PKey: единый интерфейс публичных ключей RSA / DSA / DH.

PKey не хранит ключей сам — он оборачивает один вариант KeyMaterial
(tagged variant) и реализует поверх него протокол подписи/проверки:

    1. Проверка роли ключа (is_private() перед подписью)
    2. Идентификатор алгоритма "<DIGEST>WITH<KEYALG>" (binding)
    3. Новый движок Signature провайдера на каждый вызов
    4. Трансляция ошибок провайдера в PKeyError (error_mapping)

Таблица ошибок (PKeyError.reason):
    - PRECONDITION_VIOLATION: sign() без приватного ключа
    - MALFORMED_ARGUMENT: verify() с аргументом не того типа
    - ALGORITHM_UNAVAILABLE: нет реализации для digest + алгоритма ключа
    - INVALID_SIGNATURE: подпись не разбирается
    - INVALID_KEY: ключ отвергнут провайдером

verify() возвращает False только для корректно сформированных входных
данных, не прошедших криптографическую проверку.

Thread Safety:
    PKey неизменяем; каждый sign()/verify() создаёт свой движок,
    поэтому один ключ можно использовать из нескольких потоков.

Example:
    >>> key = PKey.generate(KeyType.RSA, 2048)
    >>> sig = key.sign(SHA256, b"document")
    >>> key.public_key().verify(SHA256, sig, b"document")
    True
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import dh, dsa, rsa

from unipkey.algorithms.binding import signature_algorithm
from unipkey.algorithms.provider import Signature, supported_algorithms
from unipkey.config import KeyGenConfig, KeyProfile
from unipkey.core.error_mapping import map_provider_error
from unipkey.core.exceptions import (
    KeyErrorReason,
    PKeyError,
    PrivateKeyRequiredError,
    ProviderError,
    new_pkey_error,
)
from unipkey.core.protocols import DigestProtocol
from unipkey.keys.material import (
    DHKeyMaterial,
    DSAKeyMaterial,
    KeyMaterial,
    KeyType,
    RSAKeyMaterial,
    UnspecifiedKeyMaterial,
    modp_2048_parameters,
)

logger = logging.getLogger(__name__)

_BYTES_LIKE = (bytes, bytearray, memoryview)


def _sign_payload(data: Any) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, _BYTES_LIKE):
        return bytes(data)
    raise TypeError(f"data must be bytes or str, got {type(data).__name__}")


@dataclass(frozen=True, eq=False)
class PKey:
    """
    Ключ одного из вариантов RSA / DSA / DH (или неуточнённый).

    Attributes:
        material: Вариант материала ключа
    """

    material: KeyMaterial

    # ==========================================================================
    # CONSTRUCTION
    # ==========================================================================

    @classmethod
    def unspecified(cls) -> PKey:
        """Ключ без алгоритма: не умеет ни подписывать, ни проверять."""
        return cls(UnspecifiedKeyMaterial())

    @classmethod
    def from_private_key(cls, key: Any) -> PKey:
        """
        Обернуть приватный ключ cryptography.

        Raises:
            PKeyError: Тип ключа не поддерживается (INVALID_KEY)
        """
        if isinstance(key, rsa.RSAPrivateKey):
            return cls(RSAKeyMaterial(key.public_key(), key))
        if isinstance(key, dsa.DSAPrivateKey):
            return cls(DSAKeyMaterial(key.public_key(), key))
        if isinstance(key, dh.DHPrivateKey):
            return cls(DHKeyMaterial(key.parameters(), private=key))
        raise new_pkey_error(
            f"unsupported private key type: {type(key).__name__}",
            KeyErrorReason.INVALID_KEY,
        )

    @classmethod
    def from_public_key(cls, key: Any) -> PKey:
        """
        Обернуть публичный ключ cryptography.

        Raises:
            PKeyError: Тип ключа не поддерживается (INVALID_KEY)
        """
        if isinstance(key, rsa.RSAPublicKey):
            return cls(RSAKeyMaterial(key))
        if isinstance(key, dsa.DSAPublicKey):
            return cls(DSAKeyMaterial(key))
        if isinstance(key, dh.DHPublicKey):
            return cls(DHKeyMaterial(key.parameters(), public=key))
        raise new_pkey_error(
            f"unsupported public key type: {type(key).__name__}",
            KeyErrorReason.INVALID_KEY,
        )

    @classmethod
    def from_dh_parameters(cls, parameters: dh.DHParameters) -> PKey:
        """DH-ключ только с параметрами группы (без пары ключей)."""
        return cls(DHKeyMaterial(parameters))

    @classmethod
    def generate(
        cls,
        kind: Union[KeyType, str],
        size: Optional[int] = None,
        *,
        config: Optional[KeyGenConfig] = None,
    ) -> PKey:
        """
        Сгенерировать новый ключ.

        Args:
            kind: KeyType или его имя ("rsa", "DSA", "dh")
            size: Размер в битах (по умолчанию из config)
            config: Параметры генерации (по умолчанию KeyProfile.DEFAULT)

        Raises:
            ValueError: Неизвестный вариант ключа
            PKeyError: Провайдер отверг параметры (INVALID_KEY)

        Example:
            >>> PKey.generate("rsa", 2048).algorithm
            'RSA'
        """
        kind = KeyType(kind.upper()) if isinstance(kind, str) else kind
        config = config or KeyGenConfig.from_profile(KeyProfile.DEFAULT)

        logger.info("Generating %s key (size=%s)", kind.value, size)
        try:
            if kind is KeyType.RSA:
                private: Any = rsa.generate_private_key(
                    public_exponent=config.rsa_public_exponent,
                    key_size=size or config.rsa_bits,
                )
            elif kind is KeyType.DSA:
                private = dsa.generate_private_key(key_size=size or config.dsa_bits)
            else:
                bits = size or config.dh_bits
                if bits == 2048 and config.dh_generator == 2:
                    parameters = modp_2048_parameters()
                else:
                    parameters = dh.generate_parameters(
                        generator=config.dh_generator, key_size=bits
                    )
                private = parameters.generate_private_key()
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            logger.error("Key generation failed: %s", type(exc).__name__)
            raise new_pkey_error(
                f"{kind.value} key generation failed",
                KeyErrorReason.INVALID_KEY,
                provider_message=str(exc),
            ) from exc

        return cls.from_private_key(private)

    # ==========================================================================
    # CAPABILITIES
    # ==========================================================================

    @property
    def kind(self) -> Optional[KeyType]:
        """Тег варианта (None для неуточнённого ключа)."""
        return self.material.kind

    @property
    def algorithm(self) -> str:
        """Имя алгоритма для подписи: "RSA", "DSA" или "NONE"."""
        return self.material.algorithm

    def is_private(self) -> bool:
        return self.material.is_private()

    def is_public(self) -> bool:
        return self.material.is_public()

    def public_key(self) -> PKey:
        """Копия ключа только с публичной частью."""
        return PKey(self.material.public_material())

    def params(self) -> Dict[str, int]:
        return self.material.params()

    def signature_algorithms(self) -> List[str]:
        """
        Идентификаторы подписи, доступные для этого ключа.

        Пустой список для DH и неуточнённого ключа (алгоритм "NONE").

        Example:
            >>> PKey.generate("rsa").signature_algorithms()[0]
            'MD5WITHRSA'
        """
        return supported_algorithms(self.algorithm)

    # ==========================================================================
    # SIGN / VERIFY
    # ==========================================================================

    def sign(self, digest: DigestProtocol, data: Union[bytes, str]) -> bytes:
        """
        Подписать данные.

        Args:
            digest: Дескриптор хеша (например, SHA256)
            data: Данные (bytes-like; str кодируется в UTF-8)

        Returns:
            Байты подписи

        Raises:
            PrivateKeyRequiredError: Нет приватного ключа (проверяется первым)
            TypeError: digest или data не того типа
            PKeyError: Алгоритм недоступен или ключ отвергнут провайдером
        """
        if not self.material.is_private():
            raise PrivateKeyRequiredError()
        if not isinstance(digest, DigestProtocol):
            raise TypeError(f"digest must be a Digest, got {type(digest).__name__}")
        payload = _sign_payload(data)

        algorithm = signature_algorithm(digest.short_name, self.algorithm)
        try:
            engine = Signature.get_instance(algorithm)
            engine.init_sign(self.material.private_key())
            engine.update(payload)
            signature = engine.sign()
        except ProviderError as exc:
            raise map_provider_error(exc, algorithm) from exc

        logger.debug("Signed %d bytes with %s", len(payload), algorithm)
        return signature

    def verify(self, digest: Any, signature: Any, data: Any) -> bool:
        """
        Проверить подпись.

        Форма аргументов проверяется до любой криптографии, и ошибка формы
        приходит тем же PKeyError, что и криптографические сбои
        (reason=MALFORMED_ARGUMENT).

        Returns:
            True если подпись верна, False если корректно сформированная
            подпись не совпала с данными

        Raises:
            PKeyError: Неверная форма аргументов, алгоритм недоступен,
                подпись не разбирается, ключ отвергнут
        """
        if not isinstance(digest, DigestProtocol):
            raise new_pkey_error("invalid digest", KeyErrorReason.MALFORMED_ARGUMENT)
        if not isinstance(signature, _BYTES_LIKE):
            raise new_pkey_error("invalid signature", KeyErrorReason.MALFORMED_ARGUMENT)
        if not isinstance(data, _BYTES_LIKE):
            raise new_pkey_error("invalid data", KeyErrorReason.MALFORMED_ARGUMENT)

        algorithm = signature_algorithm(digest.short_name, self.algorithm)
        try:
            engine = Signature.get_instance(algorithm)
            engine.init_verify(self.material.public_key())
            engine.update(bytes(data))
            valid = engine.verify(bytes(signature))
        except ProviderError as exc:
            raise map_provider_error(exc, algorithm) from exc

        logger.debug("Verified signature with %s: %s", algorithm, valid)
        return valid

    # ==========================================================================
    # DH
    # ==========================================================================

    def compute_key(self, peer: Union[PKey, int]) -> bytes:
        """
        Общий секрет DH с ключом собеседника.

        Args:
            peer: PKey с публичным DH-ключом или его значение y (int)

        Raises:
            PKeyError: Ключ не DH, нет приватной части или ключ
                собеседника некорректен (INVALID_KEY)
        """
        material = self.material
        if not isinstance(material, DHKeyMaterial) or material.private is None:
            raise new_pkey_error(
                "compute_key requires a DH private key", KeyErrorReason.INVALID_KEY
            )

        try:
            if isinstance(peer, PKey):
                peer_public = peer.material.public_key()
                if not isinstance(peer_public, dh.DHPublicKey):
                    raise ValueError("peer has no DH public key")
            else:
                numbers = material.parameters.parameter_numbers()
                peer_public = dh.DHPublicNumbers(peer, numbers).public_key()
            return material.private.exchange(peer_public)
        except (ValueError, TypeError) as exc:
            raise new_pkey_error(
                "invalid peer key",
                KeyErrorReason.INVALID_KEY,
                provider_message=str(exc),
            ) from exc

    def generate_key(self) -> PKey:
        """
        Новый DH-ключ с той же группой.

        Raises:
            PKeyError: Ключ не DH (INVALID_KEY)
        """
        if not isinstance(self.material, DHKeyMaterial):
            raise new_pkey_error(
                "generate_key requires DH parameters", KeyErrorReason.INVALID_KEY
            )
        return PKey(self.material.generate_key())

    # ==========================================================================
    # SERIALIZATION
    # ==========================================================================

    def to_der(self) -> bytes:
        """
        Каноническое DER-представление (детерминировано).

        Raises:
            PKeyError: Неуточнённый ключ (ALGORITHM_UNAVAILABLE)
        """
        return self.material.to_der()

    def to_pem(self, password: Optional[Union[str, bytes]] = None) -> bytes:
        return self.material.to_pem(password)

    def to_text(self) -> str:
        """Человекочитаемый дамп компонентов ключа."""
        return self.material.to_text()

    def __repr__(self) -> str:
        role = "private" if self.is_private() else "public"
        name = self.kind.value if self.kind else self.algorithm
        return f"<PKey {name} {role}>"


# ==============================================================================
# LOADING
# ==============================================================================


def load_key(data: Union[bytes, str], password: Optional[Union[str, bytes]] = None) -> PKey:
    """
    Загрузить ключ любого варианта из PEM или DER.

    Пробует по очереди: приватный ключ, публичный ключ, DH-параметры.

    Raises:
        PKeyError: Не удалось разобрать или тип ключа не поддерживается
            (INVALID_KEY; текст ошибки провайдера в context)

    Example:
        >>> key = load_key(PKey.generate("rsa").to_pem())
        >>> key.is_private()
        True
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    if isinstance(password, str):
        password = password.encode("utf-8")

    pem = data.lstrip().startswith(b"-----BEGIN")
    if pem:
        loaders: Any = (
            lambda: PKey.from_private_key(
                serialization.load_pem_private_key(data, password=password)
            ),
            lambda: PKey.from_public_key(serialization.load_pem_public_key(data)),
            lambda: PKey.from_dh_parameters(serialization.load_pem_parameters(data)),
        )
    else:
        loaders = (
            lambda: PKey.from_private_key(
                serialization.load_der_private_key(data, password=password)
            ),
            lambda: PKey.from_public_key(serialization.load_der_public_key(data)),
            lambda: PKey.from_dh_parameters(serialization.load_der_parameters(data)),
        )

    first_error: Optional[Exception] = None
    for loader in loaders:
        try:
            return loader()
        except PKeyError:
            raise
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            first_error = first_error or exc

    logger.error("Key import failed: %s", type(first_error).__name__)
    raise new_pkey_error(
        "Could not parse PKey",
        KeyErrorReason.INVALID_KEY,
        provider_message=str(first_error),
    ) from first_error


__all__ = ["PKey", "load_key"]
