"""
Atom feed model (RFC 4287).

Immutable representations of feeds, entries and their standard constructs
(links, authors, categories, summary, content). Feeds and entries also carry
extension elements; entries additionally carry namespaced attributes that
are rendered on the ``<entry>`` tag itself.

Responsibility: Order-preserving assembly of Atom documents
"""

from datetime import datetime
from enum import Enum
from operator import attrgetter
from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..errors import ElementValidationError
from ..utils.dedupe import append_unique, put_unique
from .elements import AdditionalElement
from .namespace import Attribute

ATOM_NAMESPACE = "http://www.w3.org/2005/Atom"


class LinkRel(str, Enum):
    """Link relations accepted on Atom links"""
    ALTERNATE = "alternate"
    RELATED = "related"
    SELF = "self"
    ENCLOSURE = "enclosure"
    VIA = "via"


# MARK: - Standard constructs

class Link(BaseModel):
    model_config = ConfigDict(frozen=True)

    href: str = Field(min_length=1)
    rel: Optional[LinkRel] = None
    type: Optional[str] = Field(default=None, description="Media type")
    hreflang: Optional[str] = None
    title: Optional[str] = None
    length: Optional[int] = Field(default=None, ge=0)

    @classmethod
    def builder(cls, href: str) -> "LinkBuilder":
        return LinkBuilder(href)


class LinkBuilder:
    def __init__(self, href: str):
        if not href:
            raise ElementValidationError("Link href is mandatory.")
        self._fields = {"href": href}

    def with_rel(self, rel: LinkRel) -> "LinkBuilder":
        self._fields["rel"] = LinkRel(rel)
        return self

    def with_type(self, media_type: str) -> "LinkBuilder":
        self._fields["type"] = media_type
        return self

    def with_hreflang(self, hreflang: str) -> "LinkBuilder":
        self._fields["hreflang"] = hreflang
        return self

    def with_title(self, title: str) -> "LinkBuilder":
        self._fields["title"] = title
        return self

    def with_length(self, length: int) -> "LinkBuilder":
        self._fields["length"] = length
        return self

    def build(self) -> Link:
        return Link(**self._fields)


class Author(BaseModel):
    """Person construct used for feed and entry authors"""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    email: Optional[str] = None
    uri: Optional[str] = None

    @classmethod
    def builder(cls, name: str) -> "AuthorBuilder":
        return AuthorBuilder(name)


class AuthorBuilder:
    def __init__(self, name: str):
        if not name:
            raise ElementValidationError("Author name is mandatory.")
        self._name = name
        self._email: Optional[str] = None
        self._uri: Optional[str] = None

    def with_email(self, email: str) -> "AuthorBuilder":
        self._email = email
        return self

    def with_uri(self, uri: str) -> "AuthorBuilder":
        self._uri = uri
        return self

    def build(self) -> Author:
        return Author(name=self._name, email=self._email, uri=self._uri)


class Category(BaseModel):
    model_config = ConfigDict(frozen=True)

    term: str = Field(min_length=1)
    scheme: Optional[str] = None
    label: Optional[str] = None

    @classmethod
    def builder(cls, term: str) -> "CategoryBuilder":
        return CategoryBuilder(term)


class CategoryBuilder:
    def __init__(self, term: str):
        if not term:
            raise ElementValidationError("Category term is mandatory.")
        self._term = term
        self._scheme: Optional[str] = None
        self._label: Optional[str] = None

    def with_scheme(self, scheme: str) -> "CategoryBuilder":
        self._scheme = scheme
        return self

    def with_label(self, label: str) -> "CategoryBuilder":
        self._label = label
        return self

    def build(self) -> Category:
        return Category(term=self._term, scheme=self._scheme, label=self._label)


class Summary(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: Optional[str] = None
    type: Optional[str] = Field(default=None, description="text, html or xhtml")

    @classmethod
    def builder(cls) -> "SummaryBuilder":
        return SummaryBuilder()


class SummaryBuilder:
    def __init__(self):
        self._value: Optional[str] = None
        self._type: Optional[str] = None

    def with_value(self, value: str) -> "SummaryBuilder":
        self._value = value
        return self

    def with_type(self, summary_type: str) -> "SummaryBuilder":
        self._type = summary_type
        return self

    def build(self) -> Summary:
        return Summary(value=self._value, type=self._type)


class Content(BaseModel):
    """Entry content, inline (value) or out-of-line (src)"""

    model_config = ConfigDict(frozen=True)

    value: Optional[str] = None
    type: Optional[str] = None
    src: Optional[str] = None

    @classmethod
    def builder(cls) -> "ContentBuilder":
        return ContentBuilder()


class ContentBuilder:
    def __init__(self):
        self._value: Optional[str] = None
        self._type: Optional[str] = None
        self._src: Optional[str] = None

    def with_value(self, value: str) -> "ContentBuilder":
        self._value = value
        return self

    def with_type(self, content_type: str) -> "ContentBuilder":
        self._type = content_type
        return self

    def with_src(self, src: str) -> "ContentBuilder":
        self._src = src
        return self

    def build(self) -> Content:
        return Content(value=self._value, type=self._type, src=self._src)


# MARK: - Entry

class Entry(BaseModel):
    """
    Atom entry.

    ``attributes`` are rendered on the ``<entry>`` tag, ``extension_elements``
    after the standard entry children, both in insertion order.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: Optional[str] = None
    title: Optional[str] = None
    updated: Optional[datetime] = None
    published: Optional[datetime] = None
    summary: Optional[Summary] = None
    content: Optional[Content] = None
    rights: Optional[str] = None
    links: Tuple[Link, ...] = ()
    authors: Tuple[Author, ...] = ()
    categories: Tuple[Category, ...] = ()
    attributes: Tuple[Attribute, ...] = ()
    extension_elements: Tuple[AdditionalElement, ...] = ()

    @classmethod
    def builder(cls) -> "EntryBuilder":
        return EntryBuilder()


class EntryBuilder:
    def __init__(self):
        self._id: Optional[str] = None
        self._title: Optional[str] = None
        self._updated: Optional[datetime] = None
        self._published: Optional[datetime] = None
        self._summary: Optional[Summary] = None
        self._content: Optional[Content] = None
        self._rights: Optional[str] = None
        self._links: List[Link] = []
        self._authors: List[Author] = []
        self._categories: List[Category] = []
        self._attributes: List[Attribute] = []
        self._extension_elements: List[AdditionalElement] = []

    def with_id(self, entry_id: str) -> "EntryBuilder":
        self._id = entry_id
        return self

    def with_title(self, title: str) -> "EntryBuilder":
        self._title = title
        return self

    def with_update_date(self, updated: datetime) -> "EntryBuilder":
        self._updated = updated
        return self

    def with_published_date(self, published: datetime) -> "EntryBuilder":
        self._published = published
        return self

    def with_summary(self, summary: Summary) -> "EntryBuilder":
        self._summary = summary
        return self

    def with_content(self, content: Content) -> "EntryBuilder":
        self._content = content
        return self

    def with_rights(self, rights: str) -> "EntryBuilder":
        self._rights = rights
        return self

    def add_link(self, link: Link) -> "EntryBuilder":
        self._links.append(link)
        return self

    def with_author(self, author: Author) -> "EntryBuilder":
        self._authors = [author]
        return self

    def add_author(self, author: Author) -> "EntryBuilder":
        self._authors.append(author)
        return self

    def add_category(self, category: Category) -> "EntryBuilder":
        self._categories.append(category)
        return self

    def add_attribute(self, attribute: Attribute) -> "EntryBuilder":
        """Add an attribute to <entry>; one with the same name and namespace is replaced"""
        if attribute is None:
            raise ElementValidationError("Attribute is mandatory.")
        put_unique(self._attributes, attribute, key=attrgetter("identity"))
        return self

    def add_extension_element(self, element: AdditionalElement) -> "EntryBuilder":
        if element is None:
            raise ElementValidationError("Extension element is mandatory.")
        append_unique(self._extension_elements, element)
        return self

    def add_simple_element(self, element: AdditionalElement) -> "EntryBuilder":
        return self.add_extension_element(element)

    def build(self) -> Entry:
        return Entry(
            id=self._id,
            title=self._title,
            updated=self._updated,
            published=self._published,
            summary=self._summary,
            content=self._content,
            rights=self._rights,
            links=tuple(self._links),
            authors=tuple(self._authors),
            categories=tuple(self._categories),
            attributes=tuple(self._attributes),
            extension_elements=tuple(self._extension_elements),
        )


# MARK: - Feed

class Feed(BaseModel):
    """
    Atom feed document.

    Example:
        feed = (
            Feed.builder()
            .with_id("urn:uuid:60a76c80-d399-11d9-b91C-0003939e0af6")
            .with_title("Search Products - Query :sintrom")
            .add_link(Link.builder("/rest/api/products?q=sintrom").with_rel(LinkRel.SELF).build())
            .add_extension_element(total_results)
            .add_entry(entry)
            .build()
        )
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: Optional[str] = None
    title: Optional[str] = None
    subtitle: Optional[str] = None
    updated: Optional[datetime] = None
    rights: Optional[str] = None
    language: Optional[str] = None
    links: Tuple[Link, ...] = ()
    authors: Tuple[Author, ...] = ()
    categories: Tuple[Category, ...] = ()
    extension_elements: Tuple[AdditionalElement, ...] = ()
    entries: Tuple[Entry, ...] = ()

    @classmethod
    def builder(cls) -> "FeedBuilder":
        return FeedBuilder()


class FeedBuilder:
    def __init__(self):
        self._id: Optional[str] = None
        self._title: Optional[str] = None
        self._subtitle: Optional[str] = None
        self._updated: Optional[datetime] = None
        self._rights: Optional[str] = None
        self._language: Optional[str] = None
        self._links: List[Link] = []
        self._authors: List[Author] = []
        self._categories: List[Category] = []
        self._extension_elements: List[AdditionalElement] = []
        self._entries: List[Entry] = []

    def with_id(self, feed_id: str) -> "FeedBuilder":
        self._id = feed_id
        return self

    def with_title(self, title: str) -> "FeedBuilder":
        self._title = title
        return self

    def with_subtitle(self, subtitle: str) -> "FeedBuilder":
        self._subtitle = subtitle
        return self

    def with_update_date(self, updated: datetime) -> "FeedBuilder":
        self._updated = updated
        return self

    def with_rights(self, rights: str) -> "FeedBuilder":
        self._rights = rights
        return self

    def with_language(self, language: str) -> "FeedBuilder":
        self._language = language
        return self

    def add_link(self, link: Link) -> "FeedBuilder":
        self._links.append(link)
        return self

    def with_author(self, author: Author) -> "FeedBuilder":
        self._authors = [author]
        return self

    def add_author(self, author: Author) -> "FeedBuilder":
        self._authors.append(author)
        return self

    def add_category(self, category: Category) -> "FeedBuilder":
        self._categories.append(category)
        return self

    def add_extension_element(self, element: AdditionalElement) -> "FeedBuilder":
        if element is None:
            raise ElementValidationError("Extension element is mandatory.")
        append_unique(self._extension_elements, element)
        return self

    def add_extension_elements(self, elements: Iterable[AdditionalElement]) -> "FeedBuilder":
        for element in elements:
            self.add_extension_element(element)
        return self

    def add_entry(self, entry: Entry) -> "FeedBuilder":
        self._entries.append(entry)
        return self

    def build(self) -> Feed:
        return Feed(
            id=self._id,
            title=self._title,
            subtitle=self._subtitle,
            updated=self._updated,
            rights=self._rights,
            language=self._language,
            links=tuple(self._links),
            authors=tuple(self._authors),
            categories=tuple(self._categories),
            extension_elements=tuple(self._extension_elements),
            entries=tuple(self._entries),
        )
