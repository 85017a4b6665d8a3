"""
Материал ключей: варианты RSA, DSA, DH и неуточнённый (abstract).

Каждый вариант — неизменяемый dataclass, реализующий KeyMaterialProtocol:
дескрипторы публичного/приватного ключа (или None), имя алгоритма
("RSA", "DSA", "NONE"), проверку возможности подписи is_private(),
DER/PEM сериализацию и числовые компоненты для текстового дампа.

DH-ключи не участвуют в подписи и сообщают алгоритм "NONE".

Example:
    >>> private = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    >>> material = RSAKeyMaterial(private.public_key(), private)
    >>> material.algorithm
    'RSA'
    >>> material.public_material().is_private()
    False
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Dict, Optional, Union

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import dh, dsa, rsa

from unipkey.core.exceptions import KeyErrorReason, new_pkey_error
from unipkey.formatting import format_hex_block

NO_ALGORITHM = "NONE"

# RFC 3526, 2048-bit MODP Group (id 14), generator 2
MODP_2048_PRIME = int(
    "FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD1"
    "29024E088A67CC74020BBEA63B139B22514A08798E3404DD"
    "EF9519B3CD3A431B302B0A6DF25F14374FE1356D6D51C245"
    "E485B576625E7EC6F44C42E9A637ED6B0BFF5CB6F406B7ED"
    "EE386BFB5A899FA5AE9F24117C4B1FE649286651ECE45B3D"
    "C2007CB8A163BF0598DA48361C55D39A69163FA8FD24CF5F"
    "83655D23DCA3AD961C62F356208552BB9ED529077096966D"
    "670C354E4ABC9804F1746C08CA18217C32905E462E36CE3B"
    "E39E772C180E86039B2783A2EC07A28FB5C55DF06F4C52C9"
    "DE2BCBF6955817183995497CEA956AE515D2261898FA0510"
    "15728E5A8AACAA68FFFFFFFFFFFFFFFF",
    16,
)


class KeyType(str, Enum):
    """Тег варианта ключа."""

    RSA = "RSA"
    DSA = "DSA"
    DH = "DH"


def modp_2048_parameters() -> dh.DHParameters:
    """DH-параметры группы RFC 3526 #14 (без дорогой генерации простого)."""
    return dh.DHParameterNumbers(MODP_2048_PRIME, 2).parameters()


# ==============================================================================
# HELPERS
# ==============================================================================


def _encryption(password: Optional[Union[str, bytes]]) -> serialization.KeySerializationEncryption:
    if not password:
        return serialization.NoEncryption()
    if isinstance(password, str):
        password = password.encode("utf-8")
    return serialization.BestAvailableEncryption(password)


def _private_bytes(
    key: Union[rsa.RSAPrivateKey, dsa.DSAPrivateKey],
    encoding: serialization.Encoding,
    password: Optional[Union[str, bytes]] = None,
) -> bytes:
    return key.private_bytes(
        encoding=encoding,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=_encryption(password),
    )


def _public_bytes(
    key: Union[rsa.RSAPublicKey, dsa.DSAPublicKey, dh.DHPublicKey],
    encoding: serialization.Encoding,
) -> bytes:
    return key.public_bytes(
        encoding=encoding,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def _text_field(name: str, value: int) -> str:
    return f"{name}:\n" + format_hex_block(value, indent="    ")


def _text_small(name: str, value: int) -> str:
    return f"{name}: {value} (0x{value:x})\n"


# ==============================================================================
# UNSPECIFIED (ABSTRACT) KEY
# ==============================================================================


@dataclass(frozen=True, eq=False)
class UnspecifiedKeyMaterial:
    """Ключ без алгоритма: нет ни публичной, ни приватной части."""

    algorithm: ClassVar[str] = NO_ALGORITHM
    kind: ClassVar[Optional[KeyType]] = None

    def public_key(self) -> None:
        return None

    def private_key(self) -> None:
        return None

    def is_private(self) -> bool:
        return False

    def is_public(self) -> bool:
        return False

    def params(self) -> Dict[str, int]:
        return {}

    def public_material(self) -> UnspecifiedKeyMaterial:
        return self

    def to_der(self) -> bytes:
        raise new_pkey_error(
            "unspecified key has no DER encoding", KeyErrorReason.ALGORITHM_UNAVAILABLE
        )

    def to_pem(self, password: Optional[Union[str, bytes]] = None) -> bytes:
        raise new_pkey_error(
            "unspecified key has no PEM encoding", KeyErrorReason.ALGORITHM_UNAVAILABLE
        )

    def to_text(self) -> str:
        return "Unspecified key\n"


# ==============================================================================
# RSA
# ==============================================================================


@dataclass(frozen=True, eq=False)
class RSAKeyMaterial:
    """
    RSA-ключ.

    Attributes:
        public: Публичный ключ (выводится из приватного, если не задан)
        private: Приватный ключ или None
    """

    public: Optional[rsa.RSAPublicKey]
    private: Optional[rsa.RSAPrivateKey] = None

    algorithm: ClassVar[str] = "RSA"
    kind: ClassVar[Optional[KeyType]] = KeyType.RSA

    def __post_init__(self) -> None:
        if self.public is None and self.private is not None:
            object.__setattr__(self, "public", self.private.public_key())
        if self.public is None:
            raise ValueError("RSA key material needs a public or private key")

    def public_key(self) -> Optional[rsa.RSAPublicKey]:
        return self.public

    def private_key(self) -> Optional[rsa.RSAPrivateKey]:
        return self.private

    def is_private(self) -> bool:
        return self.private is not None

    def is_public(self) -> bool:
        return self.public is not None

    @property
    def key_size(self) -> int:
        assert self.public is not None
        return self.public.key_size

    def params(self) -> Dict[str, int]:
        assert self.public is not None
        pub = self.public.public_numbers()
        result = {"n": pub.n, "e": pub.e}
        if self.private is not None:
            priv = self.private.private_numbers()
            result.update(
                d=priv.d,
                p=priv.p,
                q=priv.q,
                dmp1=priv.dmp1,
                dmq1=priv.dmq1,
                iqmp=priv.iqmp,
            )
        return result

    def public_material(self) -> RSAKeyMaterial:
        return RSAKeyMaterial(self.public)

    def to_der(self) -> bytes:
        if self.private is not None:
            return _private_bytes(self.private, serialization.Encoding.DER)
        assert self.public is not None
        return _public_bytes(self.public, serialization.Encoding.DER)

    def to_pem(self, password: Optional[Union[str, bytes]] = None) -> bytes:
        if self.private is not None:
            return _private_bytes(self.private, serialization.Encoding.PEM, password)
        assert self.public is not None
        return _public_bytes(self.public, serialization.Encoding.PEM)

    def to_text(self) -> str:
        p = self.params()
        if self.private is None:
            return (
                f"Public-Key: ({self.key_size} bit)\n"
                + _text_field("Modulus", p["n"])
                + _text_small("Exponent", p["e"])
            )
        return (
            f"Private-Key: ({self.key_size} bit)\n"
            + _text_field("modulus", p["n"])
            + _text_small("publicExponent", p["e"])
            + _text_field("privateExponent", p["d"])
            + _text_field("prime1", p["p"])
            + _text_field("prime2", p["q"])
            + _text_field("exponent1", p["dmp1"])
            + _text_field("exponent2", p["dmq1"])
            + _text_field("coefficient", p["iqmp"])
        )


# ==============================================================================
# DSA
# ==============================================================================


@dataclass(frozen=True, eq=False)
class DSAKeyMaterial:
    """
    DSA-ключ.

    Attributes:
        public: Публичный ключ (выводится из приватного, если не задан)
        private: Приватный ключ или None
    """

    public: Optional[dsa.DSAPublicKey]
    private: Optional[dsa.DSAPrivateKey] = None

    algorithm: ClassVar[str] = "DSA"
    kind: ClassVar[Optional[KeyType]] = KeyType.DSA

    def __post_init__(self) -> None:
        if self.public is None and self.private is not None:
            object.__setattr__(self, "public", self.private.public_key())
        if self.public is None:
            raise ValueError("DSA key material needs a public or private key")

    def public_key(self) -> Optional[dsa.DSAPublicKey]:
        return self.public

    def private_key(self) -> Optional[dsa.DSAPrivateKey]:
        return self.private

    def is_private(self) -> bool:
        return self.private is not None

    def is_public(self) -> bool:
        return self.public is not None

    @property
    def key_size(self) -> int:
        assert self.public is not None
        return self.public.key_size

    def params(self) -> Dict[str, int]:
        assert self.public is not None
        pub = self.public.public_numbers()
        pn = pub.parameter_numbers
        result = {"p": pn.p, "q": pn.q, "g": pn.g, "y": pub.y}
        if self.private is not None:
            result["x"] = self.private.private_numbers().x
        return result

    def public_material(self) -> DSAKeyMaterial:
        return DSAKeyMaterial(self.public)

    def to_der(self) -> bytes:
        if self.private is not None:
            return _private_bytes(self.private, serialization.Encoding.DER)
        assert self.public is not None
        return _public_bytes(self.public, serialization.Encoding.DER)

    def to_pem(self, password: Optional[Union[str, bytes]] = None) -> bytes:
        if self.private is not None:
            return _private_bytes(self.private, serialization.Encoding.PEM, password)
        assert self.public is not None
        return _public_bytes(self.public, serialization.Encoding.PEM)

    def to_text(self) -> str:
        p = self.params()
        header = "Private-Key" if self.private is not None else "Public-Key"
        text = f"{header}: ({self.key_size} bit)\n"
        if self.private is not None:
            text += _text_field("priv", p["x"])
        return (
            text
            + _text_field("pub", p["y"])
            + _text_field("P", p["p"])
            + _text_field("Q", p["q"])
            + _text_field("G", p["g"])
        )


# ==============================================================================
# DH
# ==============================================================================


@dataclass(frozen=True, eq=False)
class DHKeyMaterial:
    """
    DH-параметры и (опционально) пара ключей.

    Attributes:
        parameters: Параметры группы (p, g)
        public: Публичный ключ или None
        private: Приватный ключ или None
    """

    parameters: dh.DHParameters
    public: Optional[dh.DHPublicKey] = None
    private: Optional[dh.DHPrivateKey] = None

    algorithm: ClassVar[str] = NO_ALGORITHM
    kind: ClassVar[Optional[KeyType]] = KeyType.DH

    def __post_init__(self) -> None:
        if self.public is None and self.private is not None:
            object.__setattr__(self, "public", self.private.public_key())

    def public_key(self) -> Optional[dh.DHPublicKey]:
        return self.public

    def private_key(self) -> Optional[dh.DHPrivateKey]:
        return self.private

    def is_private(self) -> bool:
        return self.private is not None

    def is_public(self) -> bool:
        return self.public is not None

    @property
    def key_size(self) -> int:
        return self.parameters.parameter_numbers().p.bit_length()

    def params(self) -> Dict[str, int]:
        pn = self.parameters.parameter_numbers()
        result = {"p": pn.p, "g": pn.g}
        if self.public is not None:
            result["pub_key"] = self.public.public_numbers().y
        if self.private is not None:
            result["priv_key"] = self.private.private_numbers().x
        return result

    def generate_key(self) -> DHKeyMaterial:
        """Новый материал с той же группой и свежей парой ключей."""
        return DHKeyMaterial(self.parameters, private=self.parameters.generate_private_key())

    def public_material(self) -> DHKeyMaterial:
        return DHKeyMaterial(self.parameters, public=self.public)

    def to_der(self) -> bytes:
        return self.parameters.parameter_bytes(
            serialization.Encoding.DER, serialization.ParameterFormat.PKCS3
        )

    def to_pem(self, password: Optional[Union[str, bytes]] = None) -> bytes:
        return self.parameters.parameter_bytes(
            serialization.Encoding.PEM, serialization.ParameterFormat.PKCS3
        )

    def to_text(self) -> str:
        pn = self.parameters.parameter_numbers()
        return (
            f"DH Parameters: ({self.key_size} bit)\n"
            + _text_field("prime", pn.p)
            + _text_small("generator", pn.g)
        )


KeyMaterial = Union[
    RSAKeyMaterial, DSAKeyMaterial, DHKeyMaterial, UnspecifiedKeyMaterial
]


__all__ = [
    "NO_ALGORITHM",
    "MODP_2048_PRIME",
    "KeyType",
    "KeyMaterial",
    "RSAKeyMaterial",
    "DSAKeyMaterial",
    "DHKeyMaterial",
    "UnspecifiedKeyMaterial",
    "modp_2048_parameters",
]
