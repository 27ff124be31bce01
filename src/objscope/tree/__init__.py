"""Caller-driven object tree expansion."""

from .object_node import ObjectNode, ObjectTreeBuilder

__all__ = ["ObjectNode", "ObjectTreeBuilder"]
