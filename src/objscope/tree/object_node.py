"""Lazily expanded object tree built on top of the extraction registry.

The registry answers questions about one object at a time. This module
owns recursion: each ``expand`` call turns one node's collections (or one
collection's items) into child nodes, and nothing deeper is touched until
the caller expands a child. An item whose identity already appears on the
path from the root is added as a cycle leaf and is never expanded again.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..config import InspectorSettings, get_settings
from ..extraction import (
    ScopedAccessor,
    StrategyRegistry,
    ValueFormatter,
    get_object_name,
    get_registry,
)
from ..inspection_exceptions import InvalidArgumentException, describe_cause
from ..model import LazyItems, PropertyEntry

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class ObjectNode:
    """A node in the object tree.

    Object nodes hold the inspected object; collection nodes hold the lazy
    item view of a collection member. Children are created by
    ``ObjectTreeBuilder.expand``.
    """

    name: str
    obj: Any = None
    is_collection: bool = False
    parent: "ObjectNode | None" = field(default=None, repr=False)
    is_leaf: bool = False
    is_cycle: bool = False
    is_truncated: bool = False
    is_expanded: bool = False
    error: str | None = None
    children: list["ObjectNode"] = field(default_factory=list, repr=False)

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    @property
    def can_expand(self) -> bool:
        return not (self.is_leaf or self.is_cycle or self.error is not None)

    @property
    def depth(self) -> int:
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def path(self) -> list[str]:
        """Names from the root down to this node."""
        names: list[str] = []
        node: ObjectNode | None = self
        while node is not None:
            names.append(node.name)
            node = node.parent
        return list(reversed(names))

    def ancestor_identities(self) -> set[int]:
        """Identities of the objects held by this node and its ancestors."""
        identities: set[int] = set()
        node: ObjectNode | None = self
        while node is not None:
            if isinstance(node.obj, LazyItems):
                identities.add(id(node.obj.source))
            elif node.obj is not None:
                identities.add(id(node.obj))
            node = node.parent
        return identities

    def add_child(self, child: "ObjectNode") -> None:
        if child is None:
            raise InvalidArgumentException("child", "add_child")
        child.parent = self
        self.children.append(child)

    def clear_children(self) -> None:
        self.children.clear()
        self.is_expanded = False
        self.is_truncated = False

    def __str__(self) -> str:
        return self.name


class ObjectTreeBuilder:
    """Builds and expands ObjectNode trees on demand.

    Example:
        >>> builder = ObjectTreeBuilder(NullAccessor())
        >>> root = builder.root(drawing)
        >>> for child in builder.expand(root):
        ...     print(child.name)
    """

    def __init__(
        self,
        accessor: ScopedAccessor,
        registry: StrategyRegistry | None = None,
        settings: InspectorSettings | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            accessor: Caller-owned accessor used for every extraction and dereference
            registry: Registry to extract with, defaults to the process-wide one
            settings: Settings for expansion limits and formatting
        """
        if accessor is None:
            raise InvalidArgumentException("accessor", "ObjectTreeBuilder")
        self.accessor = accessor
        self.registry = registry or get_registry()
        self.settings = settings or get_settings()
        self.formatter = ValueFormatter(self.settings)

    def root(self, obj: Any, name: str | None = None) -> ObjectNode:
        """Create the root node for obj."""
        if obj is None:
            raise InvalidArgumentException("obj", "root")

        if self.formatter.is_collection(obj):
            return ObjectNode(
                name=name or get_object_name(obj, self.formatter),
                obj=LazyItems(obj),
                is_collection=True,
            )
        return ObjectNode(
            name=name or get_object_name(obj, self.formatter),
            obj=obj,
            is_leaf=self.formatter.is_primitive(obj),
        )

    def properties(self, node: ObjectNode) -> list[PropertyEntry]:
        """Property rows for an object node; collection nodes have none."""
        if node.is_collection or node.obj is None:
            return []
        return self.registry.extract_properties(node.obj, self.accessor)

    def expand(self, node: ObjectNode) -> list[ObjectNode]:
        """Populate a node's children once and return them."""
        if node.is_expanded or not node.can_expand:
            return node.children

        if node.is_collection:
            self._expand_collection(node)
        else:
            self._expand_object(node)

        node.is_expanded = True
        logger.debug(f"Expanded '{'/'.join(node.path())}' into {len(node.children)} children")
        return node.children

    def collapse(self, node: ObjectNode) -> None:
        node.clear_children()

    def _expand_object(self, node: ObjectNode) -> None:
        collections = self.registry.extract_collections(node.obj, self.accessor)
        limit = self.settings.collection_preview_limit

        for name, entry in collections.items():
            node.add_child(
                ObjectNode(
                    name=f"{name} {entry.summary(limit)}",
                    obj=entry.items,
                    is_collection=True,
                )
            )

    def _expand_collection(self, node: ObjectNode) -> None:
        items: LazyItems = node.obj
        is_mapping = isinstance(items.source, Mapping)
        ancestors = node.ancestor_identities()
        max_children = self.settings.max_children

        try:
            with self.accessor.scope():
                for index, item in enumerate(items):
                    if index >= max_children:
                        node.is_truncated = True
                        break
                    if is_mapping:
                        key, value = item
                        label = f"[{self.formatter.format(key)}]"
                    else:
                        value = item
                        label = f"[{index}]"
                    node.add_child(self._item_node(label, value, ancestors))
        except Exception as e:
            # Children added before the failure stay visible.
            node.error = describe_cause(e)
            logger.warning(f"Failed to enumerate '{node.name}': {node.error}")

    def _item_node(self, label: str, value: Any, ancestors: set[int]) -> ObjectNode:
        if self.formatter.is_handle(value):
            try:
                value = self.accessor.dereference(value)
            except Exception as e:
                return ObjectNode(
                    name=f"{label} {self.formatter.format_handle(value)}",
                    is_leaf=True,
                    error=describe_cause(e),
                )

        if value is not None and id(value) in ancestors:
            return ObjectNode(
                name=f"{label} {get_object_name(value, self.formatter)} (cycle)",
                obj=value,
                is_cycle=True,
            )

        if self.formatter.is_primitive(value):
            return ObjectNode(
                name=f"{label} {self.formatter.format(value)}", obj=value, is_leaf=True
            )

        if self.formatter.is_collection(value):
            return ObjectNode(
                name=f"{label} {get_object_name(value, self.formatter)}",
                obj=LazyItems(value),
                is_collection=True,
            )

        return ObjectNode(name=f"{label} {get_object_name(value, self.formatter)}", obj=value)
