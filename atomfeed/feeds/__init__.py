"""
Feeds Module
============
Atom feed serialization.

Exports:
    - FeedWriter: Feed model to Atom XML
    - render_element / render_elements / render_to_string: extension element renderer
    - collect_namespaces: prefixed namespaces used by extension elements
    - AdditionalElementsExtension / AdditionalElementsEntryExtension: feedgen hooks
"""

from .element_renderer import (
    collect_namespaces,
    render_element,
    render_elements,
    render_to_string,
)
from .extension import (
    EXTENSION_NAME,
    AdditionalElementsExtension,
    AdditionalElementsEntryExtension,
)
from .feed_writer import FeedWriter

__all__ = [
    # Renderer
    'render_element',
    'render_elements',
    'render_to_string',
    'collect_namespaces',

    # feedgen integration
    'EXTENSION_NAME',
    'AdditionalElementsExtension',
    'AdditionalElementsEntryExtension',
    'FeedWriter',
]
