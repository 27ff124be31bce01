"""Extraction strategy contract.

Defines the capability every strategy must implement: an applicability
predicate plus property and collection extraction.
"""

from abc import ABC, abstractmethod
from typing import Any

from ..inspection_exceptions import InvalidArgumentException
from ..model import CollectionEntry, PropertyEntry
from .accessor import ScopedAccessor


class ExtractionStrategy(ABC):
    """Abstract base class for extraction strategies.

    Implement this interface to add a curated view of a well-known object
    shape. Strategies are shared between callers and threads, so they must
    not keep per-call mutable state.

    Contract:
        - ``can_handle`` is a cheap, pure predicate that never raises.
        - ``extract_properties`` raises ``InvalidArgumentException`` for a
          missing object or accessor, and otherwise reports a failing member
          as a single error entry while the other members are still read.
        - ``extract_collections`` has the same isolation rule and returns an
          empty mapping instead of raising when extraction fails entirely.
    """

    @property
    def name(self) -> str:
        """Display name of this strategy."""
        return type(self).__name__

    @abstractmethod
    def can_handle(self, obj: Any) -> bool:
        """Check if this strategy claims the given object.

        Args:
            obj: Object to inspect

        Returns:
            True if this strategy applies to the object
        """
        pass

    @abstractmethod
    def extract_properties(self, obj: Any, accessor: ScopedAccessor) -> list[PropertyEntry]:
        """Extract scalar property rows from an object.

        Args:
            obj: Object to inspect
            accessor: Caller-owned scoped accessor, valid for this call only

        Returns:
            Property entries in a stable order

        Raises:
            InvalidArgumentException: If obj or accessor is None
        """
        pass

    @abstractmethod
    def extract_collections(
        self, obj: Any, accessor: ScopedAccessor
    ) -> dict[str, CollectionEntry]:
        """Extract named sub-collections from an object.

        Args:
            obj: Object to inspect
            accessor: Caller-owned scoped accessor, valid for this call only

        Returns:
            Mapping of member name to collection entry

        Raises:
            InvalidArgumentException: If obj or accessor is None
        """
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"


def require_arguments(obj: Any, accessor: Any, operation: str) -> None:
    """Raise InvalidArgumentException when obj or accessor is absent."""
    if obj is None:
        raise InvalidArgumentException("obj", operation)
    if accessor is None:
        raise InvalidArgumentException("accessor", operation)
