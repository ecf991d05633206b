"""
Node Builder Registries

This module contains the registry used to discover artifact emitters.

Dependencies:
- abstractions: For the Emitter base class used in discovery
"""

from typing import Dict, Type, Optional, TypeVar, Generic, List
from typing import override
from abc import ABC, abstractmethod
import logging

from .abstractions import Emitter
from .utils import discover_classes, extract_emitter_info

logger = logging.getLogger(__name__)

K = TypeVar('K')
V = TypeVar('V')

class Registry(Generic[K, V], ABC):
    """
    An abstract base class for a generic discoverable registry.
    """

    # --- Configuration: To be defined by subclasses ---
    package: Optional[str] = None # package to scan
    base_class: Optional[Type] = None # base class to discover

    def __init__(self):
        self._registry: Dict[K, V] = {}

        if self.package is None or self.base_class is None:
            raise NotImplementedError(
                f"{self.__class__.__name__} must define class attributes "
                "'package' and 'base_class'."
            )

        logger.debug(f"Initialized {self.__class__.__name__}")

    def register(self, key: K, value: V):
        self._registry[key] = value
        logger.debug(f"Registered in {self.__class__.__name__}: {key} -> {getattr(value, '__name__', str(value))}")

    def get(self, key: K) -> Optional[V]:
        return self._registry.get(key)

    @property
    def registry(self) -> Dict[K, V]:
        return self._registry

    @abstractmethod
    def _register_item(self, class_name: str, discovered_class: Type[V]):
        """
        Abstract method: Defines the logic to register a single discovered class.
        """
        raise NotImplementedError

    def discover(self):
        """
        Template method to automatically discover and register classes.
        """
        logger.debug(f"Starting discovery for {self.__class__.__name__} in '{self.package}'...")
        discovered = discover_classes(
            self.package,
            self.base_class,
            exclude_abstract=True,
            exclude_base=True
        )

        for name, obj in discovered.items():
            self._register_item(name, obj)

        logger.debug(f"Discovery for {self.__class__.__name__} finished. Total items: {len(self._registry)}")


class EmitterRegistry(Registry[str, Type[Emitter]]):
    """
    Registry for the artifact emitters found in `nodebuilder.emitters`,
    keyed by artifact name ('DockerEmitter' -> 'docker').
    """
    package = "nodebuilder.emitters"
    base_class = Emitter

    @override
    def _register_item(self, class_name: str, discovered_class: Type[Emitter]):
        name = extract_emitter_info(class_name)
        if name:
            self.register(name, discovered_class)

    def ordered(self) -> List[Type[Emitter]]:
        """All emitters in the order they must run."""
        return sorted(self.registry.values(), key=lambda cls: cls.order)


# Global registry
emitter_registry = EmitterRegistry()


def initialize_registries():
    """
    Initialize the global registries with auto-discovery.
    Safe to call more than once.
    """
    if emitter_registry.registry:
        return
    logger.debug("Initializing emitter registry...")
    emitter_registry.discover()
    logger.debug(f"Discovered emitters: {sorted(emitter_registry.registry)}")
