"""Public member enumeration through runtime type metadata.

A member is a public (no leading underscore) readable name of an object:

- data descriptors found in the class namespaces of the MRO (``property``,
  ``__slots__`` members and C-level getset descriptors), and
- instance attributes stored in the object's ``__dict__``.

Methods and other callables are not members. Each name is attributed to the
most-derived class that declares it, and the result is ordered by that
class's MRO position (most-derived first) and then by name, so the order is
the same on every call for the same shape of object.
"""

import inspect
import logging
import types
from dataclasses import dataclass
from typing import Any

from .formatting import format_annotation

logger = logging.getLogger(__name__)

DATA_DESCRIPTOR_TYPES = (property, types.MemberDescriptorType, types.GetSetDescriptorType)


@dataclass(frozen=True)
class MemberInfo:
    """Metadata for one public readable member."""

    name: str
    declaring_class: type
    declared_type: str | None = None
    order: int = 0

    @property
    def category(self) -> str:
        return self.declaring_class.__name__

    @property
    def declaring_type(self) -> str:
        return f"{self.declaring_class.__module__}.{self.declaring_class.__qualname__}"

    def read(self, obj: Any) -> Any:
        """Read this member's current value from obj."""
        return getattr(obj, self.name)


def is_public(name: Any) -> bool:
    return isinstance(name, str) and bool(name) and not name.startswith("_")


def _class_annotations(klass: type) -> dict[str, Any]:
    try:
        return dict(inspect.get_annotations(klass))
    except Exception as e:
        logger.debug(f"Annotations unavailable for {klass.__qualname__}: {e}")
        return {}


def _descriptor_annotation(attr: Any) -> str | None:
    if isinstance(attr, property) and attr.fget is not None:
        try:
            return format_annotation(inspect.get_annotations(attr.fget).get("return"))
        except Exception:
            return None
    return None


def _is_routine_value(value: Any) -> bool:
    return inspect.isroutine(value) or isinstance(value, (staticmethod, classmethod, property))


def enumerate_members(obj: Any) -> list[MemberInfo]:
    """Enumerate the public readable members of an object.

    Args:
        obj: Object to inspect

    Returns:
        Members in deterministic order

    Raises:
        Exception: If the object's type metadata cannot be read
    """
    mro = inspect.getmro(type(obj))
    position = {klass: index for index, klass in enumerate(mro)}
    annotations = {klass: _class_annotations(klass) for klass in mro}

    members: dict[str, MemberInfo] = {}
    claimed: set[str] = set()

    for klass in mro:
        for name, attr in vars(klass).items():
            if name in claimed:
                continue
            claimed.add(name)
            if not is_public(name) or not isinstance(attr, DATA_DESCRIPTOR_TYPES):
                continue
            declared = _descriptor_annotation(attr) or format_annotation(
                annotations[klass].get(name)
            )
            members[name] = MemberInfo(
                name=name,
                declaring_class=klass,
                declared_type=declared,
                order=position[klass],
            )

    try:
        instance_dict = object.__getattribute__(obj, "__dict__")
    except AttributeError:
        instance_dict = {}

    for name, value in list(instance_dict.items()):
        if not is_public(name) or name in members or _is_routine_value(value):
            continue
        declaring = next((klass for klass in mro if name in annotations[klass]), mro[0])
        members[name] = MemberInfo(
            name=name,
            declaring_class=declaring,
            declared_type=format_annotation(annotations[declaring].get(name)),
            order=position[declaring],
        )

    return sorted(members.values(), key=lambda member: (member.order, member.name))
