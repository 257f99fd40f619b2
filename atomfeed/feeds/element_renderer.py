"""
Extension Element Renderer
==========================
Renders additional elements into an lxml tree.

Dispatch is closed: only SimpleElement, StructuredElement and AnyElement
are rendered, matched on their exact type. Anything else raises
UnhandledElementError naming the offending value, so a bad input is never
silently dropped.

Rendering order within an element is: attributes, text, then children in
insertion order. A StructuredElement carrying both text and children gets
its text before the first child.

Responsibility: Turn extension element values into namespace-qualified markup
"""

import logging
from typing import Callable, Dict, Iterable, Optional

from lxml import etree

from ..errors import UnhandledElementError
from ..models.elements import AdditionalElement, AnyElement, SimpleElement, StructuredElement
from ..models.namespace import Attribute

logger = logging.getLogger(__name__)


def _namespace_declarations(
    parent: Optional[etree._Element],
    element: AdditionalElement
) -> Dict[Optional[str], str]:
    """
    Namespaces the new element must declare.

    A prefix already bound to the same URI by an ancestor is not declared
    again. Unprefixed attribute namespaces are left to lxml, which
    generates a prefix for them.
    """
    in_scope = parent.nsmap if parent is not None else {}
    declarations: Dict[Optional[str], str] = {}

    namespace = element.namespace
    if namespace is not None and in_scope.get(namespace.prefix) != namespace.uri:
        declarations[namespace.prefix] = namespace.uri

    for attribute in element.attributes:
        namespace = attribute.namespace
        if namespace is None or namespace.prefix is None:
            continue
        if namespace.prefix in declarations or in_scope.get(namespace.prefix) == namespace.uri:
            continue
        declarations[namespace.prefix] = namespace.uri

    return declarations


def _default_namespace(parent: Optional[etree._Element]) -> Optional[str]:
    """Default namespace in effect at parent; None or '' when there is none"""
    node = parent
    while node is not None:
        # feedgen writes the Atom namespace on <feed> as a plain xmlns attribute
        literal = node.get("xmlns")
        if literal is not None:
            return literal
        declared = node.nsmap.get(None)
        if declared is not None:
            return declared
        node = node.getparent()
    return None


def _unqualified_node(tag_name: str, declarations: Dict[Optional[str], str]) -> etree._Element:
    """
    Node in no namespace that undeclares the inherited default (xmlns="").

    lxml refuses an empty URI in nsmap, so the declaration comes from
    parsing; the prefixed declarations are serialized by lxml first.
    """
    placeholder = etree.tostring(etree.Element("_", nsmap=declarations or None), encoding="unicode")
    node = etree.fromstring('<_ xmlns=""' + placeholder[len("<_"):])
    node.tag = tag_name
    return node


def _new_node(
    parent: Optional[etree._Element],
    element: AdditionalElement,
    default_namespace: Optional[str] = None
) -> etree._Element:
    declarations = _namespace_declarations(parent, element)

    if element.namespace is None and parent is not None and (
        default_namespace or _default_namespace(parent)
    ):
        node = _unqualified_node(element.tag_name, declarations)
        parent.append(node)
    else:
        if element.namespace is not None:
            tag = element.namespace.qualify(element.tag_name)
        else:
            tag = element.tag_name
        nsmap = declarations or None
        if parent is None:
            node = etree.Element(tag, nsmap=nsmap)
        else:
            node = etree.SubElement(parent, tag, nsmap=nsmap)

    set_attributes(node, element.attributes)
    return node


def set_attributes(node: etree._Element, attributes: Iterable[Attribute]) -> None:
    """Set attributes on a node, each qualified by its own namespace"""
    for attribute in attributes:
        node.set(attribute.qualified_name, attribute.value)


def _render_simple(
    parent: Optional[etree._Element],
    element: SimpleElement,
    default_namespace: Optional[str] = None
) -> etree._Element:
    node = _new_node(parent, element, default_namespace)
    # Empty string keeps the element open: <tag></tag>
    node.text = element.value
    return node


def _render_structured(
    parent: Optional[etree._Element],
    element: StructuredElement,
    default_namespace: Optional[str] = None
) -> etree._Element:
    node = _new_node(parent, element, default_namespace)
    if element.value:
        node.text = element.value
    render_elements(node, element.children)
    return node


def _render_any(
    parent: Optional[etree._Element],
    element: AnyElement,
    default_namespace: Optional[str] = None
) -> etree._Element:
    node = _new_node(parent, element, default_namespace)
    render_elements(node, element.children)
    return node


_RENDERERS: Dict[type, Callable[..., etree._Element]] = {
    SimpleElement: _render_simple,
    StructuredElement: _render_structured,
    AnyElement: _render_any,
}


def render_element(
    parent: Optional[etree._Element],
    element: AdditionalElement,
    default_namespace: Optional[str] = None
) -> etree._Element:
    """
    Render one additional element.

    An element without a namespace is kept out of any default namespace in
    effect at parent by declaring xmlns="" on it.

    Args:
        parent: Node to append to, or None to create a standalone root
        element: Element to render
        default_namespace: Default namespace parent will sit in once it is
            attached, when that is not visible from parent itself (feedgen
            renders entries detached from <feed>)

    Returns:
        The node created for the element

    Raises:
        UnhandledElementError: If the element's type is not a known variant
    """
    renderer = _RENDERERS.get(type(element))
    if renderer is None:
        logger.debug(f"No renderer for additional element of type {type(element).__name__}")
        raise UnhandledElementError(element)
    return renderer(parent, element, default_namespace)


def render_elements(
    parent: etree._Element,
    elements: Iterable[AdditionalElement],
    default_namespace: Optional[str] = None
) -> None:
    """Render elements under parent, in order"""
    for element in elements:
        render_element(parent, element, default_namespace)


def render_to_string(element: AdditionalElement, pretty_print: bool = False) -> str:
    """Render a single element as a standalone XML fragment"""
    node = render_element(None, element)
    return etree.tostring(node, encoding="unicode", pretty_print=pretty_print)


def collect_namespaces(
    elements: Iterable[AdditionalElement],
    attributes: Iterable[Attribute] = ()
) -> Dict[str, str]:
    """
    Gather prefixed namespaces used by elements (recursively) and attributes.

    The first URI seen for a prefix wins. Values that are not known
    variants are skipped here; rendering rejects them.

    Returns:
        Mapping of prefix to URI, in order of first use
    """
    namespaces: Dict[str, str] = {}

    def _add(namespace) -> None:
        if namespace is not None and namespace.prefix is not None:
            namespaces.setdefault(namespace.prefix, namespace.uri)

    def _walk(element: AdditionalElement) -> None:
        if type(element) not in _RENDERERS:
            return
        _add(element.namespace)
        for attribute in element.attributes:
            _add(attribute.namespace)
        for child in getattr(element, "children", ()):
            _walk(child)

    for attribute in attributes:
        _add(attribute.namespace)
    for element in elements:
        _walk(element)

    return namespaces
