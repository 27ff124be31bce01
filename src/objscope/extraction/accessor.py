"""Scoped accessor capability handed to strategies by the caller.

The accessor stands for an externally owned read session (for example an
open database transaction) that must be active while handle-like values are
read. Strategies only ever enter ``scope()`` for the duration of one call;
they never start, commit or close the underlying session, and never keep a
reference to the accessor after returning.
"""

from contextlib import AbstractContextManager, nullcontext
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ScopedAccessor(Protocol):
    """Capability granting call-duration access to opaque handles."""

    def scope(self) -> AbstractContextManager[Any]:
        """Return a context manager that keeps the session active while entered."""
        ...

    def dereference(self, handle: Any) -> Any:
        """Resolve a handle-like value to the object it refers to."""
        ...


class NullAccessor:
    """Accessor for plain in-memory object graphs.

    ``scope()`` does nothing and ``dereference`` returns the handle's
    ``target`` attribute when it has one, otherwise the value itself.
    """

    def scope(self) -> AbstractContextManager[Any]:
        return nullcontext()

    def dereference(self, handle: Any) -> Any:
        return getattr(handle, "target", handle)

    def __repr__(self) -> str:
        return "NullAccessor()"
