import io
from datetime import UTC, datetime

import pytest
from lxml import etree

from atomfeed.config import FeedConfig, Settings
from atomfeed.errors import FeedRenderError, UnhandledElementError
from atomfeed.feeds.feed_writer import FeedWriter
from atomfeed.models.atom import (
    ATOM_NAMESPACE,
    Author,
    Category,
    Entry,
    Feed,
    FeedBuilder,
    Link,
    LinkRel,
    Summary,
)
from atomfeed.models.elements import AnyElement, SimpleElement, StructuredElement
from atomfeed.models.namespace import Attribute, Namespace

VIDAL_URI = "http://api.vidal.net/-/spec/vidal-api/1.0/"
OPENSEARCH_URI = "http://a9.com/-/spec/opensearch/1.1/"
VIDAL = Namespace.builder(VIDAL_URI).with_prefix("vidal").build()
OPENSEARCH = Namespace.builder(OPENSEARCH_URI).with_prefix("opensearch").build()
NS = {"a": ATOM_NAMESPACE, "vidal": VIDAL_URI, "opensearch": OPENSEARCH_URI}
UPDATED = datetime(2012, 2, 16, tzinfo=UTC)


class UnknownElement:
    namespace = None
    tag_name = None
    attributes = None
    value = None

    def __str__(self) -> str:
        return "An unknown Additional Element"


def _search_feed() -> FeedBuilder:
    """Feed skeleton shared by the vendor extension tests."""
    return (
        Feed.builder()
        .with_id("Heidi")
        .with_title("Search Products - Query :sintrom")
        .add_link(
            Link.builder("/rest/api/products?q=sintrom&start-page=1&page-size=25")
            .with_rel(LinkRel.SELF)
            .with_type("application/atom+xml")
            .build()
        )
        .with_update_date(UPDATED)
    )


def _product_entry(product_id: int, title: str) -> Entry:
    return (
        Entry.builder()
        .with_title(title)
        .add_link(
            Link.builder(f"/rest/api/product/{product_id}")
            .with_rel(LinkRel.ALTERNATE)
            .with_type("application/atom+xml")
            .build()
        )
        .add_link(
            Link.builder(f"/rest/api/product/{product_id}/packages")
            .with_rel(LinkRel.RELATED)
            .with_title("PACKAGES")
            .build()
        )
        .add_category(Category.builder("PRODUCT").build())
        .with_author(Author.builder("VIDAL").build())
        .with_id(f"vidal://product/{product_id}")
        .with_update_date(UPDATED)
        .with_summary(Summary.builder().with_value(title).with_type("text").build())
        .add_simple_element(
            SimpleElement.builder("id", str(product_id)).with_namespace(VIDAL).build()
        )
        .build()
    )


def _generate(feed: Feed, **feed_config) -> etree._Element:
    xml = FeedWriter(Settings(feed=FeedConfig(**feed_config))).generate(feed)
    return etree.fromstring(xml.encode("utf-8"))


def test_generates_standard_atom_feed() -> None:
    entry = (
        Entry.builder()
        .add_link(Link.builder("http://example.org/2003/12/13/atom03").build())
        .with_title("Atom is not what you think")
        .with_id("urn:uuid:1225c695-cfb8-4ebb-aaaa-80da344efa6a")
        .with_published_date(datetime(1977, 2, 5, tzinfo=UTC))
        .with_update_date(datetime(1986, 4, 1, 1, 0, tzinfo=UTC))
        .with_summary(Summary.builder().with_value("April's fool!").build())
        .build()
    )
    feed = (
        Feed.builder()
        .with_id("urn:uuid:60a76c80-d399-11d9-b91C-0003939e0af6")
        .with_title("My standard Atom 1.0 feed")
        .with_subtitle("Or is it?")
        .with_update_date(datetime(1986, 3, 4, tzinfo=UTC))
        .with_author(Author.builder("VIDAL").build())
        .add_link(Link.builder("http://example.org/").with_rel(LinkRel.SELF).build())
        .add_entry(entry)
        .build()
    )

    root = _generate(feed)

    assert root.tag == f"{{{ATOM_NAMESPACE}}}feed"
    assert root.findtext("a:title", namespaces=NS) == "My standard Atom 1.0 feed"
    assert root.findtext("a:subtitle", namespaces=NS) == "Or is it?"
    assert root.findtext("a:id", namespaces=NS) == "urn:uuid:60a76c80-d399-11d9-b91C-0003939e0af6"
    assert root.findtext("a:author/a:name", namespaces=NS) == "VIDAL"
    assert root.findtext("a:updated", namespaces=NS).startswith("1986-03-04T00:00:00")
    assert root.find("a:link", NS).get("rel") == "self"

    entry_node = root.find("a:entry", NS)
    assert entry_node.findtext("a:title", namespaces=NS) == "Atom is not what you think"
    assert entry_node.findtext("a:summary", namespaces=NS) == "April's fool!"
    assert entry_node.findtext("a:published", namespaces=NS).startswith("1977-02-05")
    assert entry_node.find("a:link", NS).get("href") == "http://example.org/2003/12/13/atom03"


def test_renders_feed_extension_elements_in_insertion_order() -> None:
    dc = Namespace.builder("http://purl.org/dc/elements/1.1/").with_prefix("dc").build()
    df = Namespace.builder("http://date-formats.com").with_prefix("df").build()
    feed = (
        _search_feed()
        .add_extension_element(
            SimpleElement.builder("date", "2012-02-16T00:00:00Z")
            .with_namespace(dc)
            .add_attribute(
                Attribute.builder("format", "yyyy-MM-dd'T'HH:mm:ss'Z'").with_namespace(df).build()
            )
            .build()
        )
        .add_extension_element(SimpleElement.builder("itemsPerPage", "25").with_namespace(OPENSEARCH).build())
        .add_extension_element(SimpleElement.builder("totalResults", "2").with_namespace(OPENSEARCH).build())
        .add_extension_element(SimpleElement.builder("startIndex", "1").with_namespace(OPENSEARCH).build())
        .add_entry(_product_entry(15070, "SINTROM 4 mg cp quadriséc"))
        .add_entry(_product_entry(42, "SNAKE OIL 1 mg"))
        .build()
    )

    root = _generate(feed)

    assert root.nsmap["opensearch"] == OPENSEARCH_URI
    assert root.nsmap["vidal"] == VIDAL_URI
    opensearch = [
        (etree.QName(node).localname, node.text)
        for node in root
        if etree.QName(node).namespace == OPENSEARCH_URI
    ]
    assert opensearch == [("itemsPerPage", "25"), ("totalResults", "2"), ("startIndex", "1")]

    date = root.find("{http://purl.org/dc/elements/1.1/}date")
    assert date.text == "2012-02-16T00:00:00Z"
    assert date.get("{http://date-formats.com}format") == "yyyy-MM-dd'T'HH:mm:ss'Z'"

    entries = root.findall("a:entry", NS)
    assert [entry.findtext("vidal:id", namespaces=NS) for entry in entries] == ["15070", "42"]
    assert entries[0].findtext("a:title", namespaces=NS) == "SINTROM 4 mg cp quadriséc"


def test_renders_namespaced_entry_attributes() -> None:
    entry = (
        Entry.builder()
        .with_title("SINTROM 4 mg cp quadriséc")
        .add_link(Link.builder("/rest/api/product/15070").with_rel(LinkRel.ALTERNATE).build())
        .add_category(Category.builder("PRODUCT").build())
        .add_category(Category.builder("PACK").build())
        .with_id("vidal://product/15070")
        .with_update_date(UPDATED)
        .add_attribute(Attribute.builder("type", "PRODUCT,PACK").with_namespace(VIDAL).build())
        .build()
    )

    root = _generate(_search_feed().add_entry(entry).build())

    entry_node = root.find("a:entry", NS)
    assert entry_node.get(f"{{{VIDAL_URI}}}type") == "PRODUCT,PACK"
    assert [node.get("term") for node in entry_node.findall("a:category", NS)] == ["PRODUCT", "PACK"]


def test_renders_attribute_seeded_structured_element() -> None:
    feed = (
        _search_feed()
        .add_extension_element(
            StructuredElement.builder_with_attribute(
                "structured",
                Attribute.builder("type", "PRODUCT,PACK").with_namespace(VIDAL).build()
            )
            .with_namespace(VIDAL)
            .build()
        )
        .build()
    )

    root = _generate(feed)

    structured = root.findall("vidal:structured", NS)
    assert len(structured) == 1
    assert dict(structured[0].attrib) == {f"{{{VIDAL_URI}}}type": "PRODUCT,PACK"}
    assert structured[0].text is None
    assert len(structured[0]) == 0



def test_unqualified_extension_elements_stay_out_of_the_atom_namespace() -> None:
    structured = StructuredElement.builder_with_attribute(
        "structured",
        Attribute.builder("type", "PRODUCT,PACK").with_namespace(VIDAL).build()
    ).build()
    entry = (
        Entry.builder()
        .with_id("vidal://product/15070")
        .with_title("SINTROM 4 mg cp quadriséc")
        .with_update_date(UPDATED)
        .add_link(Link.builder("/rest/api/product/15070").with_rel(LinkRel.ALTERNATE).build())
        .add_extension_element(structured)
        .build()
    )
    feed = _search_feed().add_extension_element(structured).add_entry(entry).build()

    root = _generate(feed)

    feed_level = [child for child in root if child.tag == "structured"]
    entry_level = [child for child in root.find("a:entry", NS) if child.tag == "structured"]
    assert len(feed_level) == 1
    assert len(entry_level) == 1
    assert dict(entry_level[0].attrib) == {f"{{{VIDAL_URI}}}type": "PRODUCT,PACK"}
    assert root.find("a:structured", NS) is None

def test_renders_nested_dosage_tree() -> None:
    dosage = AnyElement.builder("dosage").with_namespace(VIDAL).add_any_element(
        SimpleElement.builder("dose", "1000").with_namespace(VIDAL).build()
    ).build()
    second_dosage = (
        AnyElement.builder("dosage")
        .with_namespace(VIDAL)
        .add_any_element(SimpleElement.builder("dose", "10.0").with_namespace(VIDAL).build())
        .add_any_element(SimpleElement.builder("unitId", "129").with_namespace(VIDAL).build())
        .add_any_element(
            AnyElement.builder("interval")
            .with_namespace(VIDAL)
            .add_any_element(SimpleElement.builder("min", "2").with_namespace(VIDAL).build())
            .add_any_element(SimpleElement.builder("max", "6").with_namespace(VIDAL).build())
            .add_any_element(SimpleElement.builder("unitId", "41").with_namespace(VIDAL).build())
            .build()
        )
        .build()
    )
    feed = (
        _search_feed()
        .add_extension_element(
            StructuredElement.builder_with_child("dosages", dosage)
            .add_child_element(second_dosage)
            .with_namespace(VIDAL)
            .build()
        )
        .build()
    )

    root = _generate(feed)

    dosages = root.find("vidal:dosages", NS)
    assert len(dosages.findall("vidal:dosage", NS)) == 2
    assert dosages.xpath(
        "vidal:dosage[2]/vidal:interval/*/text()", namespaces=NS
    ) == ["2", "6", "41"]


def test_unknown_extension_element_fails_the_whole_render() -> None:
    feed = _search_feed().add_extension_element(UnknownElement()).build()

    with pytest.raises(FeedRenderError) as exc_info:
        FeedWriter(Settings()).generate(feed)

    assert str(exc_info.value).endswith(
        "Cannot handle Additional element: An unknown Additional Element"
    )
    assert isinstance(exc_info.value.__cause__, UnhandledElementError)


def test_unknown_entry_element_fails_the_whole_render() -> None:
    entry = (
        Entry.builder()
        .with_id("vidal://product/42")
        .with_title("SNAKE OIL 1 mg")
        .add_link(Link.builder("/rest/api/product/42").with_rel(LinkRel.ALTERNATE).build())
        .with_update_date(UPDATED)
        .add_extension_element(UnknownElement())
        .build()
    )

    with pytest.raises(FeedRenderError) as exc_info:
        FeedWriter(Settings()).generate(_search_feed().add_entry(entry).build())

    assert isinstance(exc_info.value.__cause__, UnhandledElementError)


def test_missing_required_feed_fields_raise_render_error() -> None:
    feed = Feed.builder().with_id("no-title").build()

    with pytest.raises(FeedRenderError) as exc_info:
        FeedWriter(Settings()).generate(feed)

    assert isinstance(exc_info.value.__cause__, ValueError)


def test_entries_keep_insertion_order() -> None:
    feed = (
        _search_feed()
        .add_entry(_product_entry(1, "first"))
        .add_entry(_product_entry(2, "second"))
        .add_entry(_product_entry(3, "third"))
        .build()
    )

    root = _generate(feed)

    assert [node.findtext("a:title", namespaces=NS) for node in root.findall("a:entry", NS)] == [
        "first", "second", "third"
    ]


def test_naive_datetimes_are_treated_as_utc() -> None:
    feed = _search_feed().with_update_date(datetime(2012, 2, 16, 12, 30)).build()

    root = _generate(feed)

    assert root.findtext("a:updated", namespaces=NS) == "2012-02-16T12:30:00+00:00"


def test_output_follows_feed_configuration() -> None:
    feed = _search_feed().build()
    writer = FeedWriter(Settings(feed=FeedConfig(
        generator_name="vidal-api",
        generator_version="2.0",
        xml_declaration=False,
        pretty_print=False,
    )))

    xml = writer.generate(feed)
    root = etree.fromstring(xml.encode("utf-8"))

    assert not xml.startswith("<?xml")
    assert "\n" not in xml.strip()
    generator = root.find("a:generator", NS)
    assert generator.text == "vidal-api"
    assert generator.get("version") == "2.0"


def test_write_sends_document_to_stream() -> None:
    feed = _search_feed().build()
    writer = FeedWriter(Settings())
    stream = io.StringIO()

    writer.write(feed, stream)

    assert stream.getvalue() == writer.generate(feed)
