"""
Тесты вариантов материала ключей.

Покрывает: роли ключей, вывод публичной части из приватной,
детерминированность DER, текстовые дампы и DH-параметры RFC 3526.
"""

from __future__ import annotations

import pytest
from cryptography.hazmat.primitives import serialization

from unipkey import PKey
from unipkey.core.exceptions import KeyErrorReason, PKeyError
from unipkey.core.protocols import KeyMaterialProtocol
from unipkey.formatting import parse_hex_block
from unipkey.keys.material import (
    MODP_2048_PRIME,
    NO_ALGORITHM,
    DHKeyMaterial,
    DSAKeyMaterial,
    KeyType,
    RSAKeyMaterial,
    UnspecifiedKeyMaterial,
    modp_2048_parameters,
)


class TestUnspecifiedKeyMaterial:
    def test_no_handles(self) -> None:
        material = UnspecifiedKeyMaterial()

        assert material.public_key() is None
        assert material.private_key() is None
        assert material.is_private() is False
        assert material.is_public() is False
        assert material.algorithm == NO_ALGORITHM
        assert material.kind is None
        assert material.params() == {}

    def test_no_encoding(self) -> None:
        for encode in (UnspecifiedKeyMaterial().to_der, UnspecifiedKeyMaterial().to_pem):
            with pytest.raises(PKeyError) as exc_info:
                encode()
            assert exc_info.value.reason is KeyErrorReason.ALGORITHM_UNAVAILABLE

    def test_text(self) -> None:
        assert UnspecifiedKeyMaterial().to_text() == "Unspecified key\n"


class TestRSAKeyMaterial:
    def test_public_derived_from_private(self, rsa_key: PKey) -> None:
        private = rsa_key.material.private_key()
        material = RSAKeyMaterial(None, private)

        assert material.is_private()
        assert material.is_public()
        assert material.public_key().public_numbers() == private.public_key().public_numbers()

    def test_requires_some_key(self) -> None:
        with pytest.raises(ValueError):
            RSAKeyMaterial(None)

    def test_public_material(self, rsa_key: PKey) -> None:
        public = rsa_key.material.public_material()

        assert public.is_public()
        assert not public.is_private()
        assert public.private_key() is None
        assert public.algorithm == "RSA"

    def test_params(self, rsa_key: PKey) -> None:
        params = rsa_key.material.params()

        assert params["e"] == 65537
        assert params["p"] * params["q"] == params["n"]
        assert set(rsa_key.material.public_material().params()) == {"n", "e"}

    def test_der_deterministic(self, rsa_key: PKey) -> None:
        assert rsa_key.material.to_der() == rsa_key.material.to_der()
        public = rsa_key.material.public_material()
        assert public.to_der() == public.to_der()

    def test_public_der_is_spki(self, rsa_key: PKey) -> None:
        der = rsa_key.material.public_material().to_der()
        loaded = serialization.load_der_public_key(der)

        assert loaded.public_numbers() == rsa_key.material.public_key().public_numbers()

    def test_private_text(self, rsa_key: PKey) -> None:
        text = rsa_key.material.to_text()
        n = rsa_key.material.params()["n"]

        assert text.startswith("Private-Key: (2048 bit)\nmodulus:\n    ")
        assert "publicExponent: 65537 (0x10001)\n" in text
        block = text.split("modulus:\n")[1].split("publicExponent")[0]
        assert parse_hex_block(block) == n

    def test_public_text(self, rsa_key: PKey) -> None:
        text = rsa_key.material.public_material().to_text()

        assert text.startswith("Public-Key: (2048 bit)\nModulus:\n")
        assert text.endswith("Exponent: 65537 (0x10001)\n")
        assert "privateExponent" not in text


class TestDSAKeyMaterial:
    def test_roles(self, dsa_key: PKey) -> None:
        material = dsa_key.material

        assert isinstance(material, DSAKeyMaterial)
        assert material.algorithm == "DSA"
        assert material.kind is KeyType.DSA
        assert material.is_private()
        assert not material.public_material().is_private()

    def test_requires_some_key(self) -> None:
        with pytest.raises(ValueError):
            DSAKeyMaterial(None)

    def test_params(self, dsa_key: PKey) -> None:
        params = dsa_key.material.params()

        assert set(params) == {"p", "q", "g", "y", "x"}
        assert pow(params["g"], params["x"], params["p"]) == params["y"]

    def test_text(self, dsa_key: PKey) -> None:
        text = dsa_key.material.to_text()
        params = dsa_key.material.params()

        assert text.startswith("Private-Key: (2048 bit)\npriv:\n")
        block = text.split("Q:\n")[1].split("G:")[0]
        assert parse_hex_block(block) == params["q"]


class TestDHKeyMaterial:
    def test_modp_parameters(self) -> None:
        numbers = modp_2048_parameters().parameter_numbers()

        assert numbers.p == MODP_2048_PRIME
        assert numbers.g == 2
        assert MODP_2048_PRIME.bit_length() == 2048

    def test_parameters_only(self) -> None:
        material = DHKeyMaterial(modp_2048_parameters())

        assert material.algorithm == NO_ALGORITHM
        assert material.kind is KeyType.DH
        assert not material.is_private()
        assert not material.is_public()
        assert set(material.params()) == {"p", "g"}

    def test_generate_key(self) -> None:
        material = DHKeyMaterial(modp_2048_parameters()).generate_key()

        assert material.is_private()
        assert material.is_public()
        params = material.params()
        assert pow(params["g"], params["priv_key"], params["p"]) == params["pub_key"]

    def test_der_is_parameters(self, dh_key: PKey) -> None:
        der = dh_key.material.to_der()
        loaded = serialization.load_der_parameters(der)

        assert loaded.parameter_numbers().p == MODP_2048_PRIME
        assert der == DHKeyMaterial(modp_2048_parameters()).to_der()

    def test_text(self, dh_key: PKey) -> None:
        text = dh_key.material.to_text()

        assert text.startswith("DH Parameters: (2048 bit)\nprime:\n    ff:ff:")
        assert text.endswith("generator: 2 (0x2)\n")


@pytest.mark.parametrize("fixture_name", ["rsa_key", "dsa_key", "dh_key"])
def test_satisfies_protocol(fixture_name: str, request: pytest.FixtureRequest) -> None:
    key = request.getfixturevalue(fixture_name)
    assert isinstance(key.material, KeyMaterialProtocol)


def test_unspecified_satisfies_protocol() -> None:
    assert isinstance(UnspecifiedKeyMaterial(), KeyMaterialProtocol)


def test_material_is_immutable(rsa_key: PKey) -> None:
    with pytest.raises(AttributeError):
        rsa_key.material.private = None  # type: ignore[misc]
