"""
Тесты движка Signature и SPI RSA/DSA.

Проверяются: регистрация алгоритмов, жизненный цикл движка
(init -> update -> sign/verify), различие между «подпись не совпала»
(False) и «подпись не разбирается» (SignatureFormatError).
"""

from __future__ import annotations

import pytest
from cryptography.hazmat.primitives.asymmetric.utils import encode_dss_signature

from unipkey import PKey
from unipkey.algorithms.provider import Signature, supported_algorithms
from unipkey.core.exceptions import (
    NoSuchAlgorithmError,
    ProviderError,
    ProviderKeyError,
    SignatureFormatError,
)


def _rsa_handles(key: PKey):
    return key.material.private_key(), key.material.public_key()


class TestRegistration:
    def test_rsa_algorithms(self) -> None:
        algorithms = supported_algorithms()
        for name in ("MD5", "SHA1", "SHA224", "SHA256", "SHA384", "SHA512"):
            assert f"{name}WITHRSA" in algorithms

    def test_dsa_algorithms(self) -> None:
        algorithms = supported_algorithms()
        for name in ("SHA1", "SHA224", "SHA256", "SHA384", "SHA512"):
            assert f"{name}WITHDSA" in algorithms

    def test_filter_by_key_algorithm(self) -> None:
        dsa_algorithms = supported_algorithms("DSA")

        assert dsa_algorithms == [
            "SHA1WITHDSA",
            "SHA224WITHDSA",
            "SHA256WITHDSA",
            "SHA384WITHDSA",
            "SHA512WITHDSA",
        ]
        assert len(supported_algorithms("RSA")) == 6
        assert supported_algorithms("NONE") == []

    def test_md5_with_dsa_not_available(self) -> None:
        assert "MD5WITHDSA" not in supported_algorithms()
        with pytest.raises(NoSuchAlgorithmError):
            Signature.get_instance("MD5WITHDSA")

    def test_none_algorithm_not_available(self) -> None:
        with pytest.raises(NoSuchAlgorithmError):
            Signature.get_instance("SHA256WITHNONE")

    def test_fresh_engine_per_call(self) -> None:
        first = Signature.get_instance("SHA256WITHRSA")
        second = Signature.get_instance("SHA256WITHRSA")

        assert first is not second
        assert first.algorithm == "SHA256WITHRSA"


class TestEngineLifecycle:
    def test_sign_and_verify(self, rsa_key: PKey) -> None:
        private, public = _rsa_handles(rsa_key)

        signer = Signature.get_instance("SHA256WITHRSA")
        signer.init_sign(private)
        signer.update(b"part one, ")
        signer.update(b"part two")
        signature = signer.sign()

        verifier = Signature.get_instance("SHA256WITHRSA")
        verifier.init_verify(public)
        verifier.update(b"part one, part two")
        assert verifier.verify(signature) is True

    def test_update_before_init(self) -> None:
        engine = Signature.get_instance("SHA256WITHRSA")
        with pytest.raises(ProviderError):
            engine.update(b"data")

    def test_sign_in_verify_mode(self, rsa_key: PKey) -> None:
        _, public = _rsa_handles(rsa_key)
        engine = Signature.get_instance("SHA256WITHRSA")
        engine.init_verify(public)

        with pytest.raises(ProviderError):
            engine.sign()

    def test_verify_in_sign_mode(self, rsa_key: PKey) -> None:
        private, _ = _rsa_handles(rsa_key)
        engine = Signature.get_instance("SHA256WITHRSA")
        engine.init_sign(private)

        with pytest.raises(ProviderError):
            engine.verify(b"\x00" * 256)

    def test_buffer_cleared_after_sign(self, rsa_key: PKey) -> None:
        private, public = _rsa_handles(rsa_key)
        engine = Signature.get_instance("SHA256WITHRSA")
        engine.init_sign(private)
        engine.update(b"first")
        engine.sign()
        engine.update(b"second")
        signature = engine.sign()

        verifier = Signature.get_instance("SHA256WITHRSA")
        verifier.init_verify(public)
        verifier.update(b"second")
        assert verifier.verify(signature) is True

    def test_init_with_none(self) -> None:
        engine = Signature.get_instance("SHA1WITHDSA")
        with pytest.raises(ProviderKeyError):
            engine.init_sign(None)
        with pytest.raises(ProviderKeyError):
            engine.init_verify(None)

    def test_init_with_wrong_key_type(self, rsa_key: PKey, dsa_key: PKey) -> None:
        engine = Signature.get_instance("SHA256WITHRSA")
        with pytest.raises(ProviderKeyError):
            engine.init_sign(dsa_key.material.private_key())
        with pytest.raises(ProviderKeyError):
            engine.init_verify(dsa_key.material.public_key())

    def test_init_sign_with_public_key(self, rsa_key: PKey) -> None:
        _, public = _rsa_handles(rsa_key)
        engine = Signature.get_instance("SHA256WITHRSA")
        with pytest.raises(ProviderKeyError):
            engine.init_sign(public)


class TestSignatureFormat:
    def _rsa_verifier(self, key: PKey) -> Signature:
        engine = Signature.get_instance("SHA256WITHRSA")
        engine.init_verify(key.material.public_key())
        engine.update(b"message")
        return engine

    def _dsa_verifier(self, key: PKey) -> Signature:
        engine = Signature.get_instance("SHA256WITHDSA")
        engine.init_verify(key.material.public_key())
        engine.update(b"message")
        return engine

    def test_rsa_wrong_length(self, rsa_key: PKey) -> None:
        with pytest.raises(SignatureFormatError, match="length"):
            self._rsa_verifier(rsa_key).verify(b"\x01" * 10)

    def test_rsa_empty(self, rsa_key: PKey) -> None:
        with pytest.raises(SignatureFormatError):
            self._rsa_verifier(rsa_key).verify(b"")

    def test_rsa_bad_padding(self, rsa_key: PKey) -> None:
        with pytest.raises(SignatureFormatError):
            self._rsa_verifier(rsa_key).verify(b"\x01" * 256)

    def test_rsa_mismatch_returns_false(self, rsa_key: PKey) -> None:
        signer = Signature.get_instance("SHA256WITHRSA")
        signer.init_sign(rsa_key.material.private_key())
        signer.update(b"other message")
        signature = signer.sign()

        assert self._rsa_verifier(rsa_key).verify(signature) is False

    def test_dsa_garbage(self, dsa_key: PKey) -> None:
        with pytest.raises(SignatureFormatError):
            self._dsa_verifier(dsa_key).verify(b"not a der sequence")

    def test_dsa_trailing_byte(self, dsa_key: PKey) -> None:
        signer = Signature.get_instance("SHA256WITHDSA")
        signer.init_sign(dsa_key.material.private_key())
        signer.update(b"message")
        signature = signer.sign()

        with pytest.raises(SignatureFormatError):
            self._dsa_verifier(dsa_key).verify(signature + b"\x00")

    def test_dsa_component_out_of_range(self, dsa_key: PKey) -> None:
        with pytest.raises(SignatureFormatError, match="range"):
            self._dsa_verifier(dsa_key).verify(encode_dss_signature(0, 1))

    def test_dsa_mismatch_returns_false(self, dsa_key: PKey) -> None:
        signer = Signature.get_instance("SHA256WITHDSA")
        signer.init_sign(dsa_key.material.private_key())
        signer.update(b"other message")
        signature = signer.sign()

        assert self._dsa_verifier(dsa_key).verify(signature) is False
