"""
Models package for the Atom feed library.

This package contains the immutable Pydantic models for:
- Namespaces and attributes
- Extension elements (simple, structured, any)
- Standard Atom constructs (feed, entry, link, author, ...)
"""

from .namespace import (
    Namespace,
    NamespaceBuilder,
    Attribute,
    AttributeBuilder,
)
from .elements import (
    AdditionalElement,
    SimpleElement,
    SimpleElementBuilder,
    StructuredElement,
    StructuredElementBuilder,
    AnyElement,
    AnyElementBuilder,
)
from .atom import (
    ATOM_NAMESPACE,
    LinkRel,
    Link,
    Author,
    Category,
    Summary,
    Content,
    Entry,
    EntryBuilder,
    Feed,
    FeedBuilder,
)

__all__ = [
    # Namespaces
    "Namespace",
    "NamespaceBuilder",
    "Attribute",
    "AttributeBuilder",

    # Extension elements
    "AdditionalElement",
    "SimpleElement",
    "SimpleElementBuilder",
    "StructuredElement",
    "StructuredElementBuilder",
    "AnyElement",
    "AnyElementBuilder",

    # Atom constructs
    "ATOM_NAMESPACE",
    "LinkRel",
    "Link",
    "Author",
    "Category",
    "Summary",
    "Content",
    "Entry",
    "EntryBuilder",
    "Feed",
    "FeedBuilder",
]
