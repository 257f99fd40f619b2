"""
Generate a sample Atom feed with vendor extension elements.

Builds a product search feed carrying OpenSearch paging elements, a
structured dosage tree and namespaced entry attributes, then prints it.

Usage:
    python scripts/generate_sample_feed.py
    python scripts/generate_sample_feed.py --output feed.xml

Responsibility: Manual smoke check of the feed writer
"""

import argparse
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from atomfeed.config import settings
from atomfeed.feeds import FeedWriter
from atomfeed.models import (
    AnyElement,
    Attribute,
    Author,
    Category,
    Entry,
    Feed,
    Link,
    LinkRel,
    Namespace,
    SimpleElement,
    StructuredElement,
    Summary,
)

logging.basicConfig(level=settings.app.log_level, format=settings.app.log_format)
logger = logging.getLogger(__name__)

VIDAL = Namespace.builder("http://api.vidal.net/-/spec/vidal-api/1.0/").with_prefix("vidal").build()
OPENSEARCH = Namespace.builder("http://a9.com/-/spec/opensearch/1.1/").with_prefix("opensearch").build()


def build_dosages() -> StructuredElement:
    """Two dosages, the second with a min/max interval"""
    def leaf(tag_name: str, value: str) -> SimpleElement:
        return SimpleElement.builder(tag_name, value).with_namespace(VIDAL).build()

    first = AnyElement.builder("dosage").with_namespace(VIDAL).add_any_element(leaf("dose", "1000")).build()
    interval = (
        AnyElement.builder("interval")
        .with_namespace(VIDAL)
        .add_any_elements([leaf("min", "2"), leaf("max", "6"), leaf("unitId", "41")])
        .build()
    )
    second = (
        AnyElement.builder("dosage")
        .with_namespace(VIDAL)
        .add_any_elements([leaf("dose", "10.0"), leaf("unitId", "129"), interval])
        .build()
    )
    return (
        StructuredElement.builder_with_child("dosages", first)
        .add_child_element(second)
        .with_namespace(VIDAL)
        .build()
    )


def build_feed() -> Feed:
    updated = datetime(2012, 2, 16, tzinfo=timezone.utc)
    entry = (
        Entry.builder()
        .with_id("vidal://product/15070")
        .with_title("SINTROM 4 mg cp quadriséc")
        .with_update_date(updated)
        .add_link(
            Link.builder("/rest/api/product/15070")
            .with_rel(LinkRel.ALTERNATE)
            .with_type("application/atom+xml")
            .build()
        )
        .add_category(Category.builder("PRODUCT").build())
        .with_author(Author.builder("VIDAL").build())
        .with_summary(Summary.builder().with_value("SINTROM 4 mg cp quadriséc").with_type("text").build())
        .add_attribute(Attribute.builder("type", "PRODUCT,PACK").with_namespace(VIDAL).build())
        .add_simple_element(SimpleElement.builder("id", "15070").with_namespace(VIDAL).build())
        .build()
    )

    return (
        Feed.builder()
        .with_id("Heidi")
        .with_title("Search Products - Query :sintrom")
        .with_update_date(updated)
        .add_link(
            Link.builder("/rest/api/products?q=sintrom&start-page=1&page-size=25")
            .with_rel(LinkRel.SELF)
            .with_type("application/atom+xml")
            .build()
        )
        .add_extension_element(SimpleElement.builder("itemsPerPage", "25").with_namespace(OPENSEARCH).build())
        .add_extension_element(SimpleElement.builder("totalResults", "1").with_namespace(OPENSEARCH).build())
        .add_extension_element(SimpleElement.builder("startIndex", "1").with_namespace(OPENSEARCH).build())
        .add_extension_element(build_dosages())
        .add_entry(entry)
        .build()
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a sample Atom feed")
    parser.add_argument("--output", help="Write the feed to this file instead of stdout")
    args = parser.parse_args()

    xml = FeedWriter().generate(build_feed())
    logger.info(f"Atom feed generated: {len(xml)} characters")

    if args.output:
        Path(args.output).write_text(xml, encoding="utf-8")
        logger.info(f"Feed written to {args.output}")
    else:
        print(xml)


if __name__ == "__main__":
    main()
