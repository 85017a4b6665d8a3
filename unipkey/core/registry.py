"""
Реестр алгоритмов подписи провайдера.

Thread-safe реестр идентификаторов вида "<DIGEST>WITH<KEYALG>"
(например, "SHA256WITHRSA"). Обеспечивает:
- Регистрацию фабрик движков подписи
- Фабричный метод create() (каждый вызов — новый экземпляр)
- Query API по алгоритму ключа

Example:
    >>> registry = SignatureRegistry.get_instance()
    >>> spi = registry.create("SHA256WITHRSA")

Thread Safety:
    Все публичные методы защищены RLock.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from unipkey.core.exceptions import NoSuchAlgorithmError

logger = logging.getLogger(__name__)


# ==============================================================================
# DATACLASSES
# ==============================================================================


@dataclass(frozen=True)
class RegistryEntry:
    """
    Запись реестра.

    Attributes:
        name: Идентификатор алгоритма подписи ("SHA256WITHRSA")
        factory: Фабрика движка (вызывается на каждый create())
        digest_name: Короткое имя хеша ("SHA256")
        key_algorithm: Имя алгоритма ключа ("RSA")
    """

    name: str
    factory: Callable[[], Any]
    digest_name: str
    key_algorithm: str


# ==============================================================================
# MAIN CLASS
# ==============================================================================


class SignatureRegistry:
    """
    Thread-safe реестр алгоритмов подписи.

    Общий экземпляр доступен через get_instance(); отдельные экземпляры
    можно создавать напрямую (например, в тестах).
    """

    _instance: Optional[SignatureRegistry] = None
    _lock: threading.RLock = threading.RLock()

    def __init__(self) -> None:
        self._registry: Dict[str, RegistryEntry] = {}

    @classmethod
    def get_instance(cls) -> SignatureRegistry:
        """
        Получить общий экземпляр реестра.

        Thread Safety:
            Double-checked locking
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
                    logger.info("SignatureRegistry initialized")
        return cls._instance

    def register_algorithm(
        self,
        name: str,
        factory: Callable[[], Any],
        *,
        digest_name: str,
        key_algorithm: str,
    ) -> None:
        """
        Зарегистрировать алгоритм подписи.

        Args:
            name: Идентификатор ("SHA256WITHRSA")
            factory: Фабрика движка
            digest_name: Короткое имя хеша
            key_algorithm: Имя алгоритма ключа

        Raises:
            ValueError: Пустое имя или алгоритм уже зарегистрирован
            TypeError: factory не callable
        """
        with self._lock:
            if not name or not name.strip():
                raise ValueError("Algorithm name must not be empty")

            if name in self._registry:
                raise ValueError(f"Algorithm '{name}' is already registered")

            if not callable(factory):
                raise TypeError(
                    f"factory must be callable, got {type(factory).__name__}"
                )

            self._registry[name] = RegistryEntry(
                name=name,
                factory=factory,
                digest_name=digest_name,
                key_algorithm=key_algorithm,
            )
            logger.debug(f"Registered signature algorithm: {name}")

    def create(self, name: str) -> Any:
        """
        Создать новый движок по идентификатору.

        Raises:
            NoSuchAlgorithmError: Идентификатор не зарегистрирован
        """
        with self._lock:
            entry = self._registry.get(name)

        if entry is None:
            raise NoSuchAlgorithmError(name)

        logger.debug(f"Created signature engine for {name}")
        return entry.factory()

    def is_registered(self, name: str) -> bool:
        with self._lock:
            return name in self._registry

    def list_algorithms(self) -> List[str]:
        """Все идентификаторы (sorted)."""
        with self._lock:
            return sorted(self._registry.keys())

    def list_by_key_algorithm(self, key_algorithm: str) -> List[str]:
        """
        Идентификаторы для заданного алгоритма ключа.

        Example:
            >>> registry.list_by_key_algorithm("DSA")
            ['SHA1WITHDSA', 'SHA224WITHDSA', ...]
        """
        with self._lock:
            return sorted(
                entry.name
                for entry in self._registry.values()
                if entry.key_algorithm == key_algorithm
            )


__all__: list[str] = [
    "RegistryEntry",
    "SignatureRegistry",
]
