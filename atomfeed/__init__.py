"""
Atom syndication feeds with vendor extension elements.

Build feeds with the immutable models in ``atomfeed.models`` and serialize
them with ``atomfeed.feeds.FeedWriter``.
"""

__version__ = "1.0.0"

from .errors import (
    AtomFeedError,
    ElementValidationError,
    FeedRenderError,
    UnhandledElementError,
)
from .models import (
    AdditionalElement,
    AnyElement,
    Attribute,
    Author,
    Category,
    Content,
    Entry,
    Feed,
    Link,
    LinkRel,
    Namespace,
    SimpleElement,
    StructuredElement,
    Summary,
)
from .feeds import FeedWriter, render_element, render_to_string

__all__ = [
    "__version__",
    "AtomFeedError",
    "ElementValidationError",
    "FeedRenderError",
    "UnhandledElementError",
    "AdditionalElement",
    "AnyElement",
    "Attribute",
    "Author",
    "Category",
    "Content",
    "Entry",
    "Feed",
    "FeedWriter",
    "Link",
    "LinkRel",
    "Namespace",
    "SimpleElement",
    "StructuredElement",
    "Summary",
    "render_element",
    "render_to_string",
]
