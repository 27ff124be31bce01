"""Value formatting and classification for inspected members.

A small table of type-specific formatters turns member values into display
strings. Lookup follows the value's MRO so subclasses of a registered type
share its formatter. This module also owns the single classification rule
that decides whether a value is shown as a scalar or exposed as a
collection:

- ``None``, opaque handles, enum members (``Flag`` members are iterable),
  string-like values (``str``, ``bytes``, ``bytearray``, ``memoryview``)
  and coordinate tuples are scalars.
- One-shot iterators (``iter(x) is x``, e.g. generators and files) are
  scalars; consuming them would change the inspected object.
- Every other ``collections.abc.Iterable`` is a collection. Mappings are
  collections whose items are their ``(key, value)`` pairs.
"""

import datetime
import enum
import typing
import weakref
from abc import ABC
from collections.abc import Callable, Iterable, Iterator
from decimal import Decimal
from fractions import Fraction
from typing import Any

from ..config import InspectorSettings, get_settings
from ..model import NULL_PLACEHOLDER

STRING_LIKE_TYPES = (str, bytes, bytearray, memoryview)

TypeHandler = Callable[[Any, "ValueFormatter"], str]


class OpaqueHandle(ABC):
    """Marker for handle-like references into a host object model.

    Handles are never dereferenced while formatting; they are shown as
    ``TypeName [discriminator]``. Host types can be marked without
    subclassing via ``OpaqueHandle.register(HostHandleType)``. The
    discriminator is taken from a ``handle`` attribute when present.
    """

    pass


def _format_bool(value: bool, formatter: "ValueFormatter") -> str:
    return "True" if value else "False"


def _format_int(value: int, formatter: "ValueFormatter") -> str:
    return str(int(value))


def _format_float(value: float, formatter: "ValueFormatter") -> str:
    return f"{value:.{formatter.float_precision}f}"


def _format_str(value: str, formatter: "ValueFormatter") -> str:
    return formatter.truncate(value)


def _format_binary(value: Any, formatter: "ValueFormatter") -> str:
    view = memoryview(value)
    view = view.cast("B") if view.c_contiguous else memoryview(view.tobytes())
    preview = bytes(view[: formatter.max_string_length // 3 + 1])
    text = f"{type(value).__name__}[{len(view)}] {preview.hex(' ')}".rstrip()
    return formatter.truncate(text)


def _format_plain(value: Any, formatter: "ValueFormatter") -> str:
    return formatter.truncate(str(value))


def _format_temporal(value: Any, formatter: "ValueFormatter") -> str:
    return value.isoformat()


def format_annotation(annotation: Any) -> str | None:
    """Render a type annotation as a short display string."""
    if annotation is None:
        return None
    if isinstance(annotation, str):
        return annotation
    if annotation is type(None):
        return "None"
    if typing.get_origin(annotation) is None and isinstance(annotation, type):
        return annotation.__name__
    return repr(annotation).replace("typing.", "")


def type_display_name(value: Any) -> str:
    """Display name of a value's runtime type."""
    return type(value).__name__


class ValueFormatter:
    """Formats member values for display.

    Example:
        >>> formatter = ValueFormatter()
        >>> formatter.format(1.5)
        '1.5000'
        >>> formatter.format((1, 2.0, 3))
        '(1, 2.0000, 3)'
    """

    def __init__(
        self,
        settings: InspectorSettings | None = None,
        type_handlers: dict[type, TypeHandler] | None = None,
    ) -> None:
        """Initialize the formatter.

        Args:
            settings: Formatting settings, defaults to the process settings
            type_handlers: Handler table replacing the defaults
        """
        settings = settings or get_settings()
        self.float_precision = settings.float_precision
        self.max_string_length = settings.max_string_length
        self.handle_discriminator_length = settings.handle_discriminator_length
        self._type_handlers: dict[type, TypeHandler] = (
            dict(type_handlers) if type_handlers is not None else self.default_type_handlers()
        )

    @staticmethod
    def default_type_handlers() -> dict[type, TypeHandler]:
        """Get default type handlers for well-known value types."""
        return {
            bool: _format_bool,
            int: _format_int,
            float: _format_float,
            complex: _format_plain,
            Decimal: _format_plain,
            Fraction: _format_plain,
            str: _format_str,
            bytes: _format_binary,
            bytearray: _format_binary,
            memoryview: _format_binary,
            datetime.datetime: _format_temporal,
            datetime.date: _format_temporal,
            datetime.time: _format_temporal,
        }

    def add_type_handler(self, typ: type, handler: TypeHandler) -> "ValueFormatter":
        """Register or override a handler for a type.

        Returns:
            Self, to allow chaining

        Raises:
            TypeError: If typ is not a type or handler is not callable
        """
        if not isinstance(typ, type):
            raise TypeError(f"typ must be a type, got {type(typ).__name__}")
        if not callable(handler):
            raise TypeError(f"handler must be callable, got {type(handler).__name__}")
        self._type_handlers[typ] = handler
        return self

    def remove_type_handler(self, typ: type) -> "ValueFormatter":
        self._type_handlers.pop(typ, None)
        return self

    def get_type_handler(self, value: Any) -> TypeHandler | None:
        """Get the handler for a value's type, exact or nearest ancestor in the MRO."""
        for base in type(value).__mro__:
            handler = self._type_handlers.get(base)
            if handler is not None:
                return handler
        return None

    # Classification ---------------------------------------------------------

    def is_handle(self, value: Any) -> bool:
        return isinstance(value, (OpaqueHandle, weakref.ReferenceType))

    def is_coordinate(self, value: Any) -> bool:
        """Named tuples and tuples of 2-4 real numbers are shown inline."""
        if not isinstance(value, tuple):
            return False
        if hasattr(type(value), "_fields"):
            return True
        return 2 <= len(value) <= 4 and all(
            isinstance(item, (int, float)) and not isinstance(item, bool) for item in value
        )

    def is_collection(self, value: Any) -> bool:
        """Decide whether a member value is exposed as a collection."""
        if value is None or isinstance(value, STRING_LIKE_TYPES):
            return False
        if isinstance(value, enum.Enum):
            return False
        if self.is_handle(value) or self.is_coordinate(value):
            return False
        if isinstance(value, Iterator):
            return False
        return isinstance(value, Iterable)

    def is_primitive(self, value: Any) -> bool:
        """Values with nothing further to expand in a tree."""
        if value is None or isinstance(value, STRING_LIKE_TYPES + (enum.Enum,)):
            return True
        return self.get_type_handler(value) is not None or self.is_coordinate(value)

    # Formatting ---------------------------------------------------------------

    def format(self, value: Any) -> str:
        """Format a scalar value for display.

        Raises:
            Exception: Whatever the value's own conversion raises; callers
                isolate failures per member.
        """
        if value is None:
            return NULL_PLACEHOLDER
        if self.is_handle(value):
            return self.format_handle(value)
        if isinstance(value, enum.Enum):
            # Composite and empty flags have no name before 3.11
            return value.name if value.name is not None else str(value)
        handler = self.get_type_handler(value)
        if handler is not None:
            return handler(value, self)
        if self.is_coordinate(value):
            return "(" + ", ".join(self.format(item) for item in value) + ")"
        return _format_plain(value, self)

    def format_handle(self, value: Any) -> str:
        """Format a handle as ``TypeName [discriminator]`` without dereferencing it."""
        type_name = type_display_name(value)
        if isinstance(value, weakref.ReferenceType):
            return f"{type_name} [{id(value):x}]"

        discriminator = getattr(value, "handle", None)
        if discriminator is None:
            return f"{type_name} [null]"
        text = str(discriminator)
        if len(text) > self.handle_discriminator_length:
            text = text[: self.handle_discriminator_length] + "..."
        return f"{type_name} [{text}]"

    def truncate(self, text: str) -> str:
        if len(text) > self.max_string_length:
            return text[: self.max_string_length] + "..."
        return text


def get_object_name(obj: Any, formatter: ValueFormatter | None = None) -> str:
    """Display name for an object in a tree.

    Uses a non-empty string ``name`` attribute when the object has one,
    otherwise the formatted handle for handles, otherwise the type name.
    """
    if obj is None:
        return NULL_PLACEHOLDER

    try:
        name = getattr(obj, "name", None)
    except Exception:
        name = None
    if isinstance(name, str) and name:
        return name

    formatter = formatter or ValueFormatter()
    if formatter.is_handle(obj):
        return formatter.format_handle(obj)
    return type_display_name(obj)
