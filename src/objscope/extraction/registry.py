"""Strategy registry - routes objects to the best-fit extraction strategy.

Strategies are tried in registration order and the first whose
``can_handle`` claims the object wins. The reflection strategy is held apart
from the ordered list as the fallback, so it is always the de facto last
entry and can never be unregistered.

The process-wide registry is created on first use by ``get_registry()``.
Tests can install their own instance with ``set_registry()`` or drop the
shared one with ``reset_registry()``.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..inspection_exceptions import InvalidArgumentException, OptionalStrategyUnavailable
from ..logging import extraction_logger
from ..model import CollectionEntry, PropertyEntry
from .accessor import ScopedAccessor
from .reflection_strategy import ReflectionStrategy
from .strategy import ExtractionStrategy, require_arguments

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = " (default)"


@dataclass(frozen=True)
class StrategyDescriptor:
    """A registered strategy together with its applicability predicate."""

    strategy: ExtractionStrategy
    name: str

    def matches(self, obj: Any) -> bool:
        try:
            return bool(self.strategy.can_handle(obj))
        except Exception as e:
            logger.warning(f"Strategy '{self.name}' failed its applicability check: {e}")
            return False


class StrategyRegistry:
    """Ordered registry of extraction strategies with a reflection fallback.

    Thread Safety:
        Registration and removal are serialized by an internal RLock.
        ``resolve`` iterates a tuple snapshot taken under the same lock, so
        concurrent lookups never observe a half-updated list.
    """

    def __init__(self, fallback: ExtractionStrategy | None = None) -> None:
        """Initialize the registry.

        Args:
            fallback: Strategy used when nothing else matches
        """
        self._fallback = fallback or ReflectionStrategy()
        self._descriptors: list[StrategyDescriptor] = []
        self._lock = threading.RLock()

    @property
    def fallback(self) -> ExtractionStrategy:
        return self._fallback

    @property
    def strategy_count(self) -> int:
        """Number of registered strategies, excluding the fallback."""
        with self._lock:
            return len(self._descriptors)

    def strategies(self) -> tuple[ExtractionStrategy, ...]:
        """Registered strategies in dispatch order, excluding the fallback."""
        return tuple(descriptor.strategy for descriptor in self._snapshot())

    def register(self, strategy: ExtractionStrategy) -> bool:
        """Register a strategy at the lowest priority.

        Args:
            strategy: Strategy instance to register

        Returns:
            True if added, False if this instance was already registered

        Raises:
            InvalidArgumentException: If strategy is None
        """
        if strategy is None:
            raise InvalidArgumentException("strategy", "register")

        with self._lock:
            if strategy is self._fallback or self._index_of(strategy) is not None:
                logger.debug(f"Strategy '{strategy.name}' already registered")
                return False
            self._descriptors.append(StrategyDescriptor(strategy=strategy, name=strategy.name))
            logger.debug(f"Registered strategy: {strategy.name}")
            return True

    def unregister(self, strategy: ExtractionStrategy) -> bool:
        """Remove a strategy.

        Args:
            strategy: Strategy instance to remove

        Returns:
            True if a registration was removed
        """
        if strategy is None:
            return False

        with self._lock:
            index = self._index_of(strategy)
            if index is None:
                return False
            del self._descriptors[index]
            logger.debug(f"Unregistered strategy: {strategy.name}")
            return True

    def register_optional(
        self, factory: Callable[[], ExtractionStrategy], label: str | None = None
    ) -> bool:
        """Create and register a strategy that may be unavailable in this deployment.

        Args:
            factory: Zero-argument callable returning the strategy, typically
                importing it from an optional module
            label: Name used in log messages

        Returns:
            True if the strategy was created and registered
        """
        label = label or getattr(factory, "__qualname__", repr(factory))
        try:
            strategy = factory()
        except (ImportError, OptionalStrategyUnavailable) as e:
            logger.debug(f"Optional strategy {label} not available: {e}")
            return False
        return self.register(strategy)

    def clear(self) -> None:
        """Remove all registered strategies. The fallback is not affected."""
        with self._lock:
            self._descriptors.clear()
        logger.debug("Registry cleared")

    def resolve(self, obj: Any) -> ExtractionStrategy:
        """Find the strategy for an object.

        Args:
            obj: Object to inspect

        Returns:
            The first registered strategy that can handle obj, or the fallback
        """
        if obj is None:
            return self._fallback

        for descriptor in self._snapshot():
            if descriptor.matches(obj):
                return descriptor.strategy
        return self._fallback

    def extract_properties(self, obj: Any, accessor: ScopedAccessor) -> list[PropertyEntry]:
        """Resolve a strategy for obj and extract its property rows.

        Raises:
            InvalidArgumentException: If obj or accessor is None
        """
        require_arguments(obj, accessor, "extract_properties")
        strategy = self.resolve(obj)

        log = extraction_logger()
        context = log.log_extraction_start("properties", strategy.name, obj)
        entries = strategy.extract_properties(obj, accessor)
        log.log_extraction_end(
            context, entries=len(entries), errors=sum(1 for entry in entries if entry.has_error)
        )
        return entries

    def extract_collections(
        self, obj: Any, accessor: ScopedAccessor
    ) -> dict[str, CollectionEntry]:
        """Resolve a strategy for obj and extract its named collections.

        Raises:
            InvalidArgumentException: If obj or accessor is None
        """
        require_arguments(obj, accessor, "extract_collections")
        strategy = self.resolve(obj)

        log = extraction_logger()
        context = log.log_extraction_start("collections", strategy.name, obj)
        collections = strategy.extract_collections(obj, accessor)
        log.log_extraction_end(context, entries=len(collections))
        return collections

    def list_strategy_names(self) -> list[str]:
        """List registered strategy names in dispatch order, fallback last."""
        names = [descriptor.name for descriptor in self._snapshot()]
        names.append(f"{self._fallback.name}{DEFAULT_SUFFIX}")
        return names

    def _snapshot(self) -> tuple[StrategyDescriptor, ...]:
        with self._lock:
            return tuple(self._descriptors)

    def _index_of(self, strategy: ExtractionStrategy) -> int | None:
        for index, descriptor in enumerate(self._descriptors):
            if descriptor.strategy is strategy:
                return index
        return None


# Process-wide registry, created on first access
_registry: StrategyRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> StrategyRegistry:
    """Get or create the process-wide registry.

    Thread-safe lazy construction using double-checked locking.

    Returns:
        The shared StrategyRegistry instance
    """
    global _registry

    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = StrategyRegistry()
                logger.debug("Created process-wide strategy registry")
    return _registry


def set_registry(registry: StrategyRegistry) -> None:
    """Replace the process-wide registry.

    Args:
        registry: New registry instance
    """
    global _registry

    if registry is None:
        raise InvalidArgumentException("registry", "set_registry")
    with _registry_lock:
        _registry = registry
    logger.info("Process-wide strategy registry replaced")


def reset_registry() -> None:
    """Drop the process-wide registry so the next access builds a fresh one."""
    global _registry

    with _registry_lock:
        _registry = None
