"""CollectionEntry - a named, lazily consumed sub-collection."""

from collections.abc import Iterable, Iterator, Mapping, Sized
from dataclasses import dataclass
from typing import Any


class LazyItems(Iterable[Any]):
    """Restartable view over an iterable member value.

    Nothing is materialized up front. Every ``iter()`` starts a fresh pass
    over the source, so the view can be consumed any number of times by the
    caller. Mappings are presented as their ``(key, value)`` pairs.
    """

    __slots__ = ("_source",)

    def __init__(self, source: Iterable[Any]) -> None:
        self._source = source

    @property
    def source(self) -> Iterable[Any]:
        return self._source

    @property
    def is_sized(self) -> bool:
        return isinstance(self._source, Sized)

    def __iter__(self) -> Iterator[Any]:
        if isinstance(self._source, Mapping):
            return iter(self._source.items())
        return iter(self._source)

    def __len__(self) -> int:
        if not isinstance(self._source, Sized):
            raise TypeError(f"{type(self._source).__name__} items have no length; use count()")
        return len(self._source)

    def count(self, limit: int | None = None) -> int:
        """Count items, stopping after ``limit + 1`` for unsized sources.

        Args:
            limit: Stop counting once more than this many items were seen

        Returns:
            Item count, or ``limit + 1`` when the limit was exceeded
        """
        if isinstance(self._source, Sized):
            return len(self._source)

        count = 0
        for _ in self:
            count += 1
            if limit is not None and count > limit:
                break
        return count

    def __repr__(self) -> str:
        return f"LazyItems({type(self._source).__name__})"


@dataclass(frozen=True)
class CollectionEntry:
    """A member whose value is a non-string iterable.

    Attributes:
        name: Member name
        items: Lazy, restartable sequence of opaque item references
        declared_type: Display string of the member's declared type
        category: Optional grouping label (the declaring class name)
    """

    name: str
    items: LazyItems
    declared_type: str = "Iterable"
    category: str | None = None

    @classmethod
    def of(
        cls,
        name: str,
        source: Iterable[Any],
        declared_type: str = "Iterable",
        category: str | None = None,
    ) -> "CollectionEntry":
        """Wrap an iterable value in a CollectionEntry."""
        return cls(name=name, items=LazyItems(source), declared_type=declared_type, category=category)

    def count(self, limit: int | None = None) -> int:
        return self.items.count(limit)

    def summary(self, limit: int = 100) -> str:
        """Short display text such as ``[Collection: 3 items]``."""
        try:
            count = self.items.count(limit)
        except Exception:
            return "[Collection]"
        if count > limit:
            return f"[Collection: {limit}+ items]"
        return f"[Collection: {count} items]"
