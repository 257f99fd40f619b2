"""
Feed Writer
===========
Serializes Feed models to Atom XML.

feedgen renders the standard Atom fields; extension elements and entry
attributes go through the additional elements extension, which delegates
to the element renderer.

Responsibility: Generate RFC 4287 Atom documents from Feed models
"""

import logging
from typing import Any, Dict, Optional, TextIO

from feedgen.entry import FeedEntry
from feedgen.feed import FeedGenerator

from ..config import Settings, settings as default_settings
from ..errors import FeedRenderError, UnhandledElementError
from ..models.atom import Author, Category, Entry, Feed, Link
from ..utils.dates import ensure_aware
from .element_renderer import collect_namespaces
from .extension import (
    EXTENSION_NAME,
    AdditionalElementsEntryExtension,
    AdditionalElementsExtension,
)

logger = logging.getLogger(__name__)


def _link_dict(link: Link) -> Dict[str, Any]:
    data: Dict[str, Any] = {"href": link.href}
    if link.rel is not None:
        data["rel"] = link.rel.value
    if link.type:
        data["type"] = link.type
    if link.hreflang:
        data["hreflang"] = link.hreflang
    if link.title:
        data["title"] = link.title
    if link.length is not None:
        data["length"] = str(link.length)
    return data


def _author_dict(author: Author) -> Dict[str, str]:
    data = {"name": author.name}
    if author.email:
        data["email"] = author.email
    if author.uri:
        data["uri"] = author.uri
    return data


def _category_dict(category: Category) -> Dict[str, str]:
    data = {"term": category.term}
    if category.scheme:
        data["scheme"] = category.scheme
    if category.label:
        data["label"] = category.label
    return data


class FeedWriter:
    """
    Writes Feed models as Atom XML.

    A fresh FeedGenerator is built for every call, so one writer can be
    shared between threads.

    Example:
        writer = FeedWriter()
        xml = writer.generate(feed)
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize feed writer.

        Args:
            settings: Settings to use (defaults to the global settings)
        """
        self.settings = settings or default_settings

    def generate(self, feed: Feed) -> str:
        """
        Generate the Atom document for a feed.

        Args:
            feed: Feed to serialize

        Returns:
            XML string of the feed

        Raises:
            FeedRenderError: If the feed cannot be marshalled; the original
                error is chained as the cause
        """
        config = self.settings.feed

        try:
            fg = self._build_generator(feed)
            xml = fg.atom_str(
                pretty=config.pretty_print,
                encoding=config.encoding,
                xml_declaration=config.xml_declaration
            )
        except UnhandledElementError as e:
            logger.error(f"Unhandled extension element in feed {feed.id!r}: {e.element!r}")
            raise FeedRenderError(f"Unable to marshal feed {feed.id!r}: {e}") from e
        except ValueError as e:
            logger.error(f"Invalid feed {feed.id!r}: {e}")
            raise FeedRenderError(f"Unable to marshal feed {feed.id!r}: {e}") from e

        logger.debug(f"Generated Atom feed {feed.id!r} with {len(feed.entries)} entries")
        return xml.decode(config.encoding)

    def write(self, feed: Feed, stream: TextIO) -> None:
        """Write the Atom document for a feed to a text stream"""
        stream.write(self.generate(feed))

    def _build_generator(self, feed: Feed) -> FeedGenerator:
        config = self.settings.feed
        fg = FeedGenerator()
        fg.register_extension(
            EXTENSION_NAME,
            AdditionalElementsExtension,
            AdditionalElementsEntryExtension,
            atom=True,
            rss=False
        )

        # Required metadata
        if feed.id:
            fg.id(feed.id)
        if feed.title:
            fg.title(feed.title)
        if feed.updated:
            fg.updated(ensure_aware(feed.updated))

        # Optional metadata
        if feed.subtitle:
            fg.subtitle(feed.subtitle)
        if feed.rights:
            fg.rights(feed.rights)
        if feed.language:
            fg.language(feed.language)
        for link in feed.links:
            fg.link(_link_dict(link))
        for author in feed.authors:
            fg.author(_author_dict(author))
        for category in feed.categories:
            fg.category(_category_dict(category))

        fg.generator(
            config.generator_name,
            version=config.generator_version,
            uri=config.generator_uri
        )

        extension = getattr(fg, EXTENSION_NAME)
        extension.elements = feed.extension_elements
        extension.namespaces = self._document_namespaces(feed)

        for entry in feed.entries:
            self._add_entry(fg, entry)

        return fg

    def _add_entry(self, fg: FeedGenerator, entry: Entry) -> FeedEntry:
        fe = fg.add_entry(order="append")
        if not hasattr(fe, EXTENSION_NAME):
            fe.register_extension(
                EXTENSION_NAME,
                AdditionalElementsEntryExtension,
                atom=True,
                rss=False
            )

        if entry.id:
            fe.id(entry.id)
        if entry.title:
            fe.title(entry.title)
        if entry.updated:
            fe.updated(ensure_aware(entry.updated))
        if entry.published:
            fe.published(ensure_aware(entry.published))

        for link in entry.links:
            fe.link(_link_dict(link))
        for author in entry.authors:
            fe.author(_author_dict(author))
        for category in entry.categories:
            fe.category(_category_dict(category))

        if entry.summary and entry.summary.value is not None:
            fe.summary(entry.summary.value, type=entry.summary.type)
        if entry.content:
            fe.content(
                content=entry.content.value,
                src=entry.content.src,
                type=entry.content.type
            )
        if entry.rights:
            fe.rights(entry.rights)

        extension = getattr(fe, EXTENSION_NAME)
        extension.attributes = entry.attributes
        extension.elements = entry.extension_elements
        return fe

    @staticmethod
    def _document_namespaces(feed: Feed) -> Dict[str, str]:
        """Prefixed namespaces used anywhere in the feed, declared on <feed>"""
        namespaces = collect_namespaces(feed.extension_elements)
        for entry in feed.entries:
            for prefix, uri in collect_namespaces(entry.extension_elements, entry.attributes).items():
                namespaces.setdefault(prefix, uri)
        return namespaces
