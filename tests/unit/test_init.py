"""Тесты публичного API пакета и настройки логирования."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

import unipkey


def test_version() -> None:
    assert unipkey.__version__ == "0.1.0"


def test_all_exports_resolve() -> None:
    for name in unipkey.__all__:
        assert hasattr(unipkey, name), name


def test_end_to_end() -> None:
    key = unipkey.PKey.generate(unipkey.KeyType.RSA, 1024)
    digest = unipkey.get_digest("sha256")
    signature = key.sign(digest, b"document")

    assert unipkey.signature_algorithm(digest.short_name, key.algorithm) == "SHA256WITHRSA"
    assert key.public_key().verify(digest, signature, b"document") is True


def test_package_logger_configured() -> None:
    logger = logging.getLogger("unipkey")

    assert logger.handlers
    assert any(isinstance(h, logging.StreamHandler) for h in logger.handlers)


def test_setup_logging_idempotent() -> None:
    logger = logging.getLogger("unipkey")
    before = list(logger.handlers)

    unipkey._setup_logging()

    assert logger.handlers == before


def test_project_metadata() -> None:
    """Метаданные пакета: без long description и с версией из __init__."""
    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    project = tomllib.loads(pyproject.read_text(encoding="utf-8"))["project"]

    assert "readme" not in project
    assert project["version"] == unipkey.__version__
    assert any(dep.startswith("cryptography") for dep in project["dependencies"])
