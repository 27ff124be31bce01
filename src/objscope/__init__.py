"""objscope: runtime object inspection engine.

Turns any object into typed "name / declared type / formatted value" rows
plus named, lazily consumed sub-collections, choosing the best-fit
extraction strategy from a registry and falling back to reflection.
"""

from .base_exceptions import ObjscopeException
from .config import InspectorSettings, get_settings, reset_settings
from .extraction import (
    ExtractionStrategy,
    NullAccessor,
    OpaqueHandle,
    ReflectionStrategy,
    ScopedAccessor,
    StrategyRegistry,
    ValueFormatter,
    get_object_name,
    get_registry,
    reset_registry,
    set_registry,
)
from .inspection_exceptions import (
    AccessorScopeFailure,
    EnumerationFailure,
    InspectionException,
    InvalidArgumentException,
    MemberReadFailure,
    OptionalStrategyUnavailable,
)
from .model import CollectionEntry, LazyItems, PropertyEntry
from .tree import ObjectNode, ObjectTreeBuilder

__version__ = "0.1.0"

__all__ = [
    # Data model
    "CollectionEntry",
    "LazyItems",
    "PropertyEntry",
    # Strategies
    "ExtractionStrategy",
    "ReflectionStrategy",
    "StrategyRegistry",
    "get_registry",
    "reset_registry",
    "set_registry",
    # Accessors and formatting
    "NullAccessor",
    "OpaqueHandle",
    "ScopedAccessor",
    "ValueFormatter",
    "get_object_name",
    # Tree
    "ObjectNode",
    "ObjectTreeBuilder",
    # Configuration
    "InspectorSettings",
    "get_settings",
    "reset_settings",
    # Exceptions
    "ObjscopeException",
    "InspectionException",
    "InvalidArgumentException",
    "MemberReadFailure",
    "EnumerationFailure",
    "AccessorScopeFailure",
    "OptionalStrategyUnavailable",
]
