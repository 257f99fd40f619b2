"""
Extension element model.

Vendor-specific markup is attached to feeds and entries as additional
elements. Three variants exist:

- SimpleElement: leaf element with text and attributes
- StructuredElement: element seeded with an attribute or a child, holding
  further attributes, children and optional text
- AnyElement: pure container used to build arbitrarily deep trees

Every variant is produced by its own builder, which rejects missing
mandatory fields immediately, and is immutable once built.

Attributes are unique by namespace URI and local name. Adding an attribute
whose name is already taken replaces the earlier value and keeps its
position; child elements are deduplicated by value, first one kept.

Responsibility: Extension element variants, their shared contract and builders
"""

from operator import attrgetter
from typing import Iterable, List, Optional, Protocol, Tuple, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from ..errors import ElementValidationError
from ..utils.dedupe import append_unique, put_unique
from .namespace import Attribute, Namespace


@runtime_checkable
class AdditionalElement(Protocol):
    """
    Contract shared by every extension element.

    The renderer only handles the variants defined in this module; any
    other object satisfying this protocol is rejected at render time.
    """

    namespace: Optional[Namespace]
    tag_name: Optional[str]
    attributes: Tuple[Attribute, ...]
    value: str


def _require_tag_name(tag_name: Optional[str]) -> str:
    if not tag_name:
        raise ElementValidationError("TagName is mandatory.")
    return tag_name


def _require_attribute(attribute: Optional[Attribute]) -> Attribute:
    if attribute is None:
        raise ElementValidationError("Attribute is mandatory.")
    return attribute


def _require_child(element: Optional[AdditionalElement]) -> AdditionalElement:
    if element is None:
        raise ElementValidationError("Child element is mandatory.")
    return element


# MARK: - SimpleElement

class SimpleElement(BaseModel):
    """
    Leaf extension element: tag, text value and attributes, no children.

    Example:
        SimpleElement.builder("itemsPerPage", "25").with_namespace(opensearch).build()
    """

    model_config = ConfigDict(frozen=True)

    tag_name: str = Field(min_length=1)
    value: str = Field(description="Text content, may be empty")
    namespace: Optional[Namespace] = None
    attributes: Tuple[Attribute, ...] = ()

    @classmethod
    def builder(cls, tag_name: str, value: str) -> "SimpleElementBuilder":
        return SimpleElementBuilder(tag_name, value)


class SimpleElementBuilder:
    def __init__(self, tag_name: str, value: str):
        self._tag_name = _require_tag_name(tag_name)
        if value is None:
            raise ElementValidationError("Value is mandatory.")
        self._value = value
        self._namespace: Optional[Namespace] = None
        self._attributes: List[Attribute] = []

    def with_namespace(self, namespace: Optional[Namespace]) -> "SimpleElementBuilder":
        self._namespace = namespace
        return self

    def add_attribute(self, attribute: Attribute) -> "SimpleElementBuilder":
        put_unique(self._attributes, _require_attribute(attribute), key=attrgetter("identity"))
        return self

    def add_attributes(self, attributes: Iterable[Attribute]) -> "SimpleElementBuilder":
        for attribute in attributes:
            self.add_attribute(attribute)
        return self

    def build(self) -> SimpleElement:
        return SimpleElement(
            tag_name=self._tag_name,
            value=self._value,
            namespace=self._namespace,
            attributes=tuple(self._attributes),
        )


# MARK: - StructuredElement

class StructuredElement(BaseModel):
    """
    Extension element holding attributes, nested elements and optional text.

    A structured element is always seeded with either one attribute or one
    child element; pick the factory matching the seed:

        StructuredElement.builder_with_attribute("structured", type_attribute)
        StructuredElement.builder_with_child("dosages", dosage)

    When text and children are both present, the text is rendered before
    the first child.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    tag_name: str = Field(min_length=1)
    value: str = ""
    namespace: Optional[Namespace] = None
    attributes: Tuple[Attribute, ...] = ()
    children: Tuple[AdditionalElement, ...] = ()

    @classmethod
    def builder_with_attribute(
        cls,
        tag_name: str,
        attribute: Attribute
    ) -> "StructuredElementBuilder":
        _require_tag_name(tag_name)
        if attribute is None:
            raise ElementValidationError(
                "A structured element should contain at least an attribute."
            )
        return StructuredElementBuilder(tag_name, attributes=[attribute])

    @classmethod
    def builder_with_child(
        cls,
        tag_name: str,
        child: AdditionalElement
    ) -> "StructuredElementBuilder":
        _require_tag_name(tag_name)
        if child is None:
            raise ElementValidationError(
                "A structured element should contain at least a child element."
            )
        return StructuredElementBuilder(tag_name, children=[child])


class StructuredElementBuilder:
    """
    Staging area for a StructuredElement.

    Use the StructuredElement factories rather than calling this directly;
    they check the seed before any further mutation is possible.
    """

    def __init__(
        self,
        tag_name: str,
        attributes: Iterable[Attribute] = (),
        children: Iterable[AdditionalElement] = ()
    ):
        self._tag_name = _require_tag_name(tag_name)
        self._namespace: Optional[Namespace] = None
        self._value = ""
        self._attributes: List[Attribute] = []
        self._children: List[AdditionalElement] = []
        self.add_attributes(attributes)
        self.add_child_elements(children)

    def with_namespace(self, namespace: Optional[Namespace]) -> "StructuredElementBuilder":
        self._namespace = namespace
        return self

    def with_value(self, value: Optional[str]) -> "StructuredElementBuilder":
        self._value = value or ""
        return self

    def add_attribute(self, attribute: Attribute) -> "StructuredElementBuilder":
        put_unique(self._attributes, _require_attribute(attribute), key=attrgetter("identity"))
        return self

    def add_attributes(self, attributes: Iterable[Attribute]) -> "StructuredElementBuilder":
        for attribute in attributes:
            self.add_attribute(attribute)
        return self

    def add_child_element(self, element: AdditionalElement) -> "StructuredElementBuilder":
        append_unique(self._children, _require_child(element))
        return self

    def add_child_elements(
        self,
        elements: Iterable[AdditionalElement]
    ) -> "StructuredElementBuilder":
        for element in elements:
            self.add_child_element(element)
        return self

    def build(self) -> StructuredElement:
        return StructuredElement(
            tag_name=self._tag_name,
            value=self._value,
            namespace=self._namespace,
            attributes=tuple(self._attributes),
            children=tuple(self._children),
        )


# MARK: - AnyElement

class AnyElement(BaseModel):
    """
    Namespace-qualified container for nested additional elements.

    Carries neither attributes nor text; used for schema-free trees such as
    ``dosages > dosage > interval > {min, max, unitId}``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    tag_name: str = Field(min_length=1)
    namespace: Optional[Namespace] = None
    children: Tuple[AdditionalElement, ...] = ()

    @classmethod
    def builder(cls, tag_name: str) -> "AnyElementBuilder":
        return AnyElementBuilder(tag_name)

    @property
    def attributes(self) -> Tuple[Attribute, ...]:
        return ()

    @property
    def value(self) -> str:
        return ""


class AnyElementBuilder:
    def __init__(self, tag_name: str):
        self._tag_name = _require_tag_name(tag_name)
        self._namespace: Optional[Namespace] = None
        self._children: List[AdditionalElement] = []

    def with_namespace(self, namespace: Optional[Namespace]) -> "AnyElementBuilder":
        self._namespace = namespace
        return self

    def add_any_element(self, element: AdditionalElement) -> "AnyElementBuilder":
        append_unique(self._children, _require_child(element))
        return self

    def add_any_elements(self, elements: Iterable[AdditionalElement]) -> "AnyElementBuilder":
        for element in elements:
            self.add_any_element(element)
        return self

    def build(self) -> AnyElement:
        return AnyElement(
            tag_name=self._tag_name,
            namespace=self._namespace,
            children=tuple(self._children),
        )
