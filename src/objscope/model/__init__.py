"""Result data model for object inspection."""

from .collection_entry import CollectionEntry, LazyItems
from .property_entry import NULL_PLACEHOLDER, PropertyEntry

__all__ = [
    "CollectionEntry",
    "LazyItems",
    "NULL_PLACEHOLDER",
    "PropertyEntry",
]
