"""Extraction strategies and the strategy registry."""

from .accessor import NullAccessor, ScopedAccessor
from .formatting import OpaqueHandle, ValueFormatter, format_annotation, get_object_name
from .members import MemberInfo, enumerate_members
from .reflection_strategy import MemberOutcome, ReflectionStrategy
from .registry import (
    StrategyDescriptor,
    StrategyRegistry,
    get_registry,
    reset_registry,
    set_registry,
)
from .strategy import ExtractionStrategy

__all__ = [
    "ExtractionStrategy",
    "MemberInfo",
    "MemberOutcome",
    "NullAccessor",
    "OpaqueHandle",
    "ReflectionStrategy",
    "ScopedAccessor",
    "StrategyDescriptor",
    "StrategyRegistry",
    "ValueFormatter",
    "enumerate_members",
    "format_annotation",
    "get_object_name",
    "get_registry",
    "reset_registry",
    "set_registry",
]
