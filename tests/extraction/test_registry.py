"""Tests for StrategyRegistry dispatch and registration."""

import pytest

from objscope import (
    ExtractionStrategy,
    InvalidArgumentException,
    OptionalStrategyUnavailable,
    PropertyEntry,
    ReflectionStrategy,
    StrategyRegistry,
    get_registry,
    reset_registry,
    set_registry,
)
from tests.fixtures.object_fixtures import Circle, Container, ThreeMembers


class FixedStrategy(ExtractionStrategy):
    """Strategy with a constant applicability answer and a curated row."""

    def __init__(self, label: str, handles: bool) -> None:
        self.label = label
        self.handles = handles

    @property
    def name(self) -> str:
        return self.label

    def can_handle(self, obj) -> bool:
        return self.handles

    def extract_properties(self, obj, accessor):
        return [PropertyEntry.value("Strategy", "str", self.label, category="Curated")]

    def extract_collections(self, obj, accessor):
        return {}


class CircleStrategy(FixedStrategy):
    def __init__(self) -> None:
        super().__init__("Circle Strategy", handles=True)

    def can_handle(self, obj) -> bool:
        return isinstance(obj, Circle)


class ExplodingPredicate(FixedStrategy):
    def can_handle(self, obj) -> bool:
        raise RuntimeError("predicate failed")


class TestResolve:
    """Test strategy resolution order."""

    def test_first_matching_strategy_wins(self, registry):
        never = FixedStrategy("S1", handles=False)
        always = FixedStrategy("S2", handles=True)
        registry.register(never)
        registry.register(always)

        assert registry.resolve(object()) is always

    def test_registration_order_is_priority(self, registry):
        first = FixedStrategy("first", handles=True)
        second = FixedStrategy("second", handles=True)
        registry.register(first)
        registry.register(second)

        assert registry.resolve(42) is first

    def test_fallback_when_nothing_registered(self, registry):
        assert registry.resolve(object()) is registry.fallback
        assert isinstance(registry.fallback, ReflectionStrategy)

    def test_fallback_when_nothing_matches(self, registry):
        registry.register(CircleStrategy())

        assert registry.resolve(ThreeMembers()) is registry.fallback

    def test_none_resolves_to_fallback(self, registry):
        registry.register(FixedStrategy("always", handles=True))

        assert registry.resolve(None) is registry.fallback

    def test_failing_predicate_is_skipped(self, registry):
        registry.register(ExplodingPredicate("broken", handles=True))
        fallback_match = FixedStrategy("after", handles=True)
        registry.register(fallback_match)

        assert registry.resolve(object()) is fallback_match


class TestRegistration:
    """Test register, unregister and introspection."""

    def test_register_is_idempotent(self, registry):
        strategy = CircleStrategy()

        assert registry.register(strategy) is True
        assert registry.register(strategy) is False
        assert registry.list_strategy_names() == [
            "Circle Strategy",
            "Reflection Strategy (default)",
        ]
        assert registry.strategy_count == 1

    def test_equal_but_distinct_instances_both_register(self, registry):
        registry.register(CircleStrategy())
        registry.register(CircleStrategy())

        assert registry.strategy_count == 2

    def test_register_none_raises(self, registry):
        with pytest.raises(InvalidArgumentException):
            registry.register(None)

    def test_unregister(self, registry):
        strategy = CircleStrategy()
        registry.register(strategy)

        assert registry.unregister(strategy) is True
        assert registry.unregister(strategy) is False
        assert registry.unregister(None) is False
        assert registry.resolve(Circle()) is registry.fallback

    def test_fallback_cannot_be_removed(self, registry):
        assert registry.unregister(registry.fallback) is False
        assert registry.register(registry.fallback) is False
        assert registry.list_strategy_names() == ["Reflection Strategy (default)"]

    def test_clear_keeps_fallback(self, registry):
        registry.register(CircleStrategy())
        registry.clear()

        assert registry.strategy_count == 0
        assert registry.list_strategy_names() == ["Reflection Strategy (default)"]

    def test_custom_fallback(self):
        fallback = FixedStrategy("Minimal", handles=True)
        registry = StrategyRegistry(fallback=fallback)

        assert registry.resolve(object()) is fallback
        assert registry.list_strategy_names() == ["Minimal (default)"]

    def test_strategies_snapshot(self, registry):
        first = CircleStrategy()
        registry.register(first)
        snapshot = registry.strategies()
        registry.clear()

        assert snapshot == (first,)


class TestOptionalRegistration:
    """Test registration of strategies that may be unavailable."""

    def test_import_error_is_skipped(self, registry):
        def factory():
            from objscope_civil_strategies import AlignmentStrategy  # noqa: F401

        assert registry.register_optional(factory) is False
        assert registry.strategy_count == 0

    def test_unavailable_strategy_is_skipped(self, registry):
        def factory():
            raise OptionalStrategyUnavailable("Plant Strategy", "host module not loaded")

        assert registry.register_optional(factory, label="plant") is False

    def test_available_strategy_is_registered(self, registry):
        assert registry.register_optional(CircleStrategy) is True
        assert registry.list_strategy_names()[0] == "Circle Strategy"

    def test_other_errors_propagate(self, registry):
        def factory():
            raise ZeroDivisionError("bug in factory")

        with pytest.raises(ZeroDivisionError):
            registry.register_optional(factory)


class TestConvenienceExtraction:
    """Test resolve-then-delegate operations."""

    def test_specialized_strategy_used(self, registry, accessor):
        registry.register(CircleStrategy())

        entries = registry.extract_properties(Circle(), accessor)

        assert [str(entry) for entry in entries] == ["Strategy = Circle Strategy"]

    def test_fallback_used(self, registry, accessor):
        entries = registry.extract_properties(ThreeMembers(), accessor)

        assert [entry.name for entry in entries] == ["A", "B", "C"]

    def test_collections_through_fallback(self, registry, accessor):
        collections = registry.extract_collections(Container(count=1000), accessor)

        assert len(collections["items"].items) == 1000

    @pytest.mark.parametrize("method", ["extract_properties", "extract_collections"])
    def test_missing_arguments(self, registry, accessor, method):
        operation = getattr(registry, method)

        with pytest.raises(InvalidArgumentException):
            operation(None, accessor)
        with pytest.raises(InvalidArgumentException):
            operation(ThreeMembers(), None)


class TestProcessRegistry:
    """Test the process-wide registry accessor."""

    def test_lazy_singleton(self):
        reset_registry()
        try:
            first = get_registry()
            assert get_registry() is first
        finally:
            reset_registry()

    def test_set_registry(self):
        replacement = StrategyRegistry()
        set_registry(replacement)
        try:
            assert get_registry() is replacement
        finally:
            reset_registry()

    def test_reset_builds_fresh_instance(self):
        first = get_registry()
        reset_registry()

        assert get_registry() is not first
        reset_registry()

    def test_set_registry_rejects_none(self):
        with pytest.raises(InvalidArgumentException):
            set_registry(None)
