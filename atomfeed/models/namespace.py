"""
Namespace and attribute value objects.

A Namespace identifies an XML namespace by URI and optional prefix; an
Attribute is a name/value pair, optionally namespace-qualified, that can be
attached to any extension element or Atom entry.

Responsibility: Immutable building blocks for namespace-qualified markup
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..errors import ElementValidationError


class Namespace(BaseModel):
    """
    XML namespace identified by URI and prefix.

    Two namespaces sharing a URI but not a prefix are distinct values.

    Example:
        vidal = Namespace.builder("http://api.vidal.net/-/spec/vidal-api/1.0/") \\
            .with_prefix("vidal") \\
            .build()
    """

    model_config = ConfigDict(frozen=True)

    uri: str = Field(min_length=1, description="Namespace URI")
    prefix: Optional[str] = Field(
        default=None,
        min_length=1,
        description="Preferred prefix (None declares a default namespace)"
    )

    @classmethod
    def builder(cls, uri: str) -> "NamespaceBuilder":
        return NamespaceBuilder(uri)

    def qualify(self, name: str) -> str:
        """Return the Clark notation ``{uri}name`` used by lxml"""
        return f"{{{self.uri}}}{name}"


class NamespaceBuilder:
    """Builder for Namespace; the URI is checked on construction"""

    def __init__(self, uri: str):
        if not uri:
            raise ElementValidationError("Namespace URI is mandatory.")
        self._uri = uri
        self._prefix: Optional[str] = None

    def with_prefix(self, prefix: Optional[str]) -> "NamespaceBuilder":
        # None means a default (unprefixed) namespace
        if prefix is not None and not prefix:
            raise ElementValidationError("Namespace prefix must not be empty.")
        self._prefix = prefix
        return self

    def build(self) -> Namespace:
        return Namespace(uri=self._uri, prefix=self._prefix)


class Attribute(BaseModel):
    """
    Name/value pair rendered as an XML attribute.

    The attribute's namespace is independent of the namespace of the
    element carrying it.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Local attribute name")
    value: str = Field(description="Attribute value")
    namespace: Optional[Namespace] = Field(
        default=None,
        description="Namespace qualifying the attribute name"
    )

    @classmethod
    def builder(cls, name: str, value: str) -> "AttributeBuilder":
        return AttributeBuilder(name, value)

    @property
    def qualified_name(self) -> str:
        if self.namespace is None:
            return self.name
        return self.namespace.qualify(self.name)

    @property
    def identity(self) -> Tuple[Optional[str], str]:
        """Namespace URI and local name; an element holds one attribute per identity"""
        return (self.namespace.uri if self.namespace else None, self.name)


class AttributeBuilder:
    """Builder for Attribute; name and value are checked on construction"""

    def __init__(self, name: str, value: str):
        if not name:
            raise ElementValidationError("Attribute name is mandatory.")
        if value is None:
            raise ElementValidationError("Attribute value is mandatory.")
        self._name = name
        self._value = value
        self._namespace: Optional[Namespace] = None

    def with_namespace(self, namespace: Optional[Namespace]) -> "AttributeBuilder":
        self._namespace = namespace
        return self

    def build(self) -> Attribute:
        return Attribute(name=self._name, value=self._value, namespace=self._namespace)
