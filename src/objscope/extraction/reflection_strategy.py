"""Generic reflection-based extraction strategy.

The universal fallback: accepts any object and walks its public members via
runtime type metadata. Every member is inspected independently and the
outcome is recorded as an explicit value, so a member whose getter raises
becomes one error entry while the rest of the object is still shown.

The strategy makes one flat pass over a single object. Collection members
are handed back as lazy ``CollectionEntry`` views and never enumerated here;
recursion, and therefore cycle and depth policy, belong to the caller (see
``objscope.tree``).
"""

import logging
from dataclasses import dataclass
from typing import Any

from ..inspection_exceptions import (
    AccessorScopeFailure,
    EnumerationFailure,
    InspectionException,
    MemberReadFailure,
)
from ..model import CollectionEntry, PropertyEntry
from .accessor import ScopedAccessor
from .formatting import ValueFormatter, type_display_name
from .members import MemberInfo, enumerate_members
from .strategy import ExtractionStrategy, require_arguments

logger = logging.getLogger(__name__)

UNKNOWN_TYPE = "unknown"


@dataclass(frozen=True)
class MemberOutcome:
    """Result of inspecting one member: a scalar row, a collection or a failure."""

    member: MemberInfo
    entry: PropertyEntry | None = None
    collection: CollectionEntry | None = None
    failure: MemberReadFailure | None = None

    @property
    def is_collection(self) -> bool:
        return self.collection is not None

    def to_property(self) -> PropertyEntry:
        if self.entry is not None:
            return self.entry
        if self.failure is None:
            raise ValueError(f"Member '{self.member.name}' is a collection, not a property")
        return PropertyEntry.error(
            name=self.member.name,
            declared_type=self.member.declared_type or UNKNOWN_TYPE,
            detail=self.failure.message,
            category=self.member.category,
            declaring_type=self.member.declaring_type,
        )


class ReflectionStrategy(ExtractionStrategy):
    """Default strategy that can inspect any object.

    Example:
        >>> class Point:
        ...     def __init__(self):
        ...         self.x, self.y = 1.0, 2.0
        >>> strategy = ReflectionStrategy()
        >>> rows = strategy.extract_properties(Point(), NullAccessor())
        >>> [str(row) for row in rows]
        ['x = 1.0000', 'y = 2.0000']
    """

    def __init__(self, formatter: ValueFormatter | None = None) -> None:
        """Initialize the strategy.

        Args:
            formatter: Value formatter; a formatter built from the current
                settings is used for each call when omitted
        """
        self._formatter = formatter

    @property
    def name(self) -> str:
        return "Reflection Strategy"

    @property
    def formatter(self) -> ValueFormatter:
        return self._formatter or ValueFormatter()

    def can_handle(self, obj: Any) -> bool:
        return True

    def extract_properties(self, obj: Any, accessor: ScopedAccessor) -> list[PropertyEntry]:
        require_arguments(obj, accessor, "extract_properties")

        try:
            outcomes = self.inspect_members(obj, accessor)
        except EnumerationFailure as failure:
            logger.warning(f"Could not enumerate members of {failure.type_name}: {failure.message}")
            return [PropertyEntry.error(name="Error", declared_type="Error", detail=failure.message)]

        return [outcome.to_property() for outcome in outcomes if not outcome.is_collection]

    def extract_collections(
        self, obj: Any, accessor: ScopedAccessor
    ) -> dict[str, CollectionEntry]:
        require_arguments(obj, accessor, "extract_collections")

        try:
            outcomes = self.inspect_members(obj, accessor)
        except Exception as e:
            logger.warning(f"Could not collect collections of {type_display_name(obj)}: {e}")
            return {}

        return {
            outcome.member.name: outcome.collection
            for outcome in outcomes
            if outcome.collection is not None
        }

    def inspect_members(self, obj: Any, accessor: ScopedAccessor) -> list[MemberOutcome]:
        """Inspect every public member of obj under the accessor's scope.

        Returns:
            One outcome per member, in member order

        Raises:
            EnumerationFailure: If the member set cannot be enumerated
            AccessorScopeFailure: If the accessor scope fails to open or close
        """
        formatter = self.formatter
        try:
            with accessor.scope():
                try:
                    members = enumerate_members(obj)
                except Exception as e:
                    raise EnumerationFailure(type_display_name(obj), e) from e

                outcomes = [self._inspect_member(obj, member, formatter) for member in members]
        except InspectionException:
            raise
        except Exception as e:
            raise AccessorScopeFailure(type_display_name(obj), e) from e
        return outcomes

    def _inspect_member(
        self, obj: Any, member: MemberInfo, formatter: ValueFormatter
    ) -> MemberOutcome:
        try:
            value = member.read(obj)
            declared_type = member.declared_type or type_display_name(value)

            if formatter.is_collection(value):
                return MemberOutcome(
                    member=member,
                    collection=CollectionEntry.of(
                        name=member.name,
                        source=value,
                        declared_type=declared_type,
                        category=member.category,
                    ),
                )

            return MemberOutcome(
                member=member,
                entry=PropertyEntry.value(
                    name=member.name,
                    declared_type=declared_type,
                    formatted_value=formatter.format(value),
                    category=member.category,
                    declaring_type=member.declaring_type,
                ),
            )
        except Exception as e:
            failure = MemberReadFailure(member.name, e)
            logger.debug(f"Failed to read member '{member.name}': {failure.message}")
            return MemberOutcome(member=member, failure=failure)
