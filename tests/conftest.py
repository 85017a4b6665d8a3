"""
Общие фикстуры: ключи генерируются один раз на сессию.

Генерация DSA-2048 занимает заметное время, поэтому ключи не
создаются заново в каждом тесте.
"""

from __future__ import annotations

import pytest

from unipkey import KeyType, PKey


@pytest.fixture(scope="session")
def rsa_key() -> PKey:
    """Приватный RSA-2048 ключ."""
    return PKey.generate(KeyType.RSA, 2048)


@pytest.fixture(scope="session")
def other_rsa_key() -> PKey:
    """Второй RSA-2048 ключ (для проверки чужим ключом)."""
    return PKey.generate(KeyType.RSA, 2048)


@pytest.fixture(scope="session")
def dsa_key() -> PKey:
    """Приватный DSA-2048 ключ."""
    return PKey.generate(KeyType.DSA, 2048)


@pytest.fixture(scope="session")
def dh_key() -> PKey:
    """DH-ключ на группе RFC 3526 #14."""
    return PKey.generate(KeyType.DH)


@pytest.fixture
def sample_messages() -> list[bytes]:
    """Набор тестовых сообщений разных размеров."""
    return [
        b"",  # Empty
        b"Hello, World!",  # Short
        b"A" * 1000,  # Medium (1KB)
        b"\x00\x01\x02\xff\xfe\xfd",  # Binary
        "Привет, мир!".encode("utf-8"),  # Unicode
    ]
