# -*- coding: utf-8 -*-
"""
RU: Параметры генерации ключей с профилями.
EN: Key generation parameters with predefined profiles.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Final, Optional

logger = logging.getLogger(__name__)

_CONFIG_FILE: Final[str] = "unipkey.json"


class KeyProfile(str, Enum):
    """Predefined key generation profiles."""

    # Balanced defaults
    DEFAULT = "default"

    # Interop with old peers (1024-bit RSA and DSA)
    LEGACY = "legacy"

    # Long-term keys
    HIGH = "high"


_DSA_SIZES: Final[tuple[int, ...]] = (1024, 2048, 3072, 4096)


@dataclass(frozen=True)
class KeyGenConfig:
    """
    Key generation configuration.

    Attributes:
        rsa_bits: RSA modulus size in bits.
        rsa_public_exponent: RSA public exponent.
        dsa_bits: DSA prime size in bits.
        dh_generator: DH generator (2 or 5).
        dh_bits: DH prime size in bits. 2048 uses the RFC 3526 MODP group.

    Examples:
        >>> KeyGenConfig.from_profile(KeyProfile.DEFAULT).rsa_bits
        2048

        >>> KeyGenConfig(rsa_bits=1000)
        Traceback (most recent call last):
        ...
        ValueError: rsa_bits must be >= 1024 and divisible by 256
    """

    rsa_bits: int = 2048
    rsa_public_exponent: int = 65537
    dsa_bits: int = 2048
    dh_generator: int = 2
    dh_bits: int = 2048

    def __post_init__(self) -> None:
        """Validate parameters."""
        if self.rsa_bits < 1024 or self.rsa_bits % 256 != 0:
            raise ValueError("rsa_bits must be >= 1024 and divisible by 256")
        if self.rsa_public_exponent not in (3, 65537):
            raise ValueError("rsa_public_exponent must be 3 or 65537")
        if self.dsa_bits not in _DSA_SIZES:
            raise ValueError(f"dsa_bits must be one of {_DSA_SIZES}")
        if self.dh_generator not in (2, 5):
            raise ValueError("dh_generator must be 2 or 5")
        if self.dh_bits < 512:
            raise ValueError("dh_bits must be >= 512")

    @staticmethod
    def from_profile(profile: KeyProfile) -> "KeyGenConfig":
        """
        Create configuration from predefined profile.

        Examples:
            >>> KeyGenConfig.from_profile(KeyProfile.HIGH).rsa_bits
            4096
        """
        return _PROFILE_PARAMS[profile]


_PROFILE_PARAMS: Final[dict[KeyProfile, KeyGenConfig]] = {
    KeyProfile.DEFAULT: KeyGenConfig(),
    KeyProfile.LEGACY: KeyGenConfig(
        rsa_bits=1024,
        dsa_bits=1024,
    ),
    KeyProfile.HIGH: KeyGenConfig(
        rsa_bits=4096,
        dsa_bits=3072,
    ),
}


def load_config(
    config_path: Optional[Path] = None,
    profile: KeyProfile = KeyProfile.DEFAULT,
) -> KeyGenConfig:
    """
    Load key generation settings from a JSON file on top of a profile.

    Falls back to the profile (with a warning) when the file is missing,
    is not valid JSON, is not an object, has unknown keys or fails
    validation.

    Args:
        config_path: Path to JSON file. Defaults to ./unipkey.json.
        profile: Base profile the file overrides.

    Examples:
        >>> load_config(Path("missing.json")).rsa_bits
        2048
    """
    base = KeyGenConfig.from_profile(profile)
    if config_path is None:
        config_path = Path(_CONFIG_FILE)

    if not config_path.exists():
        logger.info(f"Config file {config_path} not found, using {profile.value} profile")
        return base

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            user_config = json.load(f)

        if not isinstance(user_config, dict):
            raise ValueError(
                f"config must be a JSON object, got {type(user_config).__name__}"
            )

        unknown = set(user_config) - {f.name for f in fields(KeyGenConfig)}
        if unknown:
            raise ValueError(f"unknown config keys: {', '.join(sorted(unknown))}")

        config = replace(base, **user_config)
        logger.info(f"Config loaded from {config_path}")
        return config

    except json.JSONDecodeError as e:
        logger.warning(
            f"Could not parse {config_path}: invalid JSON at line {e.lineno}, "
            f"column {e.colno}. Using {profile.value} profile."
        )
    except OSError as e:
        logger.warning(f"Could not read {config_path}: {e}. Using {profile.value} profile.")
    except (ValueError, TypeError) as e:
        logger.warning(f"Invalid config: {e}. Using {profile.value} profile.")

    return base


__all__ = [
    "KeyProfile",
    "KeyGenConfig",
    "load_config",
]
