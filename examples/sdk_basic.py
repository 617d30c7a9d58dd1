#!/usr/bin/env python3
"""
Basic SDK usage examples for the content delivery SDK.

Credentials come from CONTENT_DELIVERY_API_KEY, CONTENT_DELIVERY_DELIVERY_TOKEN
and CONTENT_DELIVERY_ENVIRONMENT (or a local .env file).
"""

from content_delivery import ConfigurationError, StackConfig, stack


def print_outcome(label):
    def callback(result, error):
        if error:
            print(f"❌ {label} failed ({error.code}): {error.message}")
        else:
            print(f"✓ {label}: {result}")

    return callback


def fetch_entry(delivery):
    """Fetch one entry with a projection and a resolved reference."""
    print("=== Fetch Entry ===")

    entry = delivery.content_type("blog_post").entry("blt0123456789")
    entry.only(["title", "url", "author"]).include_reference("author").locale("en-us")

    result = entry.fetch(print_outcome("entry")).result(timeout=30)
    if result:
        print(f"✓ Title: {result.title}, published to {result.environment}")
        for author in result.get_all_entries("author"):
            print(f"✓ Author: {author.title}")


def query_entries(delivery):
    """Filter, sort and page entries."""
    print("\n=== Query Entries ===")

    query = delivery.content_type("blog_post").query()
    query.greater_than_or_equal_to("rating", 4).contained_in("category", ["news", "tech"])
    query.descending("created_at").limit(5).include_count()

    result = query.find(print_outcome("query")).result(timeout=30)
    if result:
        print(f"✓ {len(result.entries)} of {result.count} entries")
        for entry in result.entries:
            print(f"  - {entry.title} ({entry.get_date('created_at')})")


def query_taxonomies(delivery):
    """Find entries by taxonomy terms."""
    print("\n=== Taxonomy Query ===")

    taxonomy = delivery.taxonomy()
    taxonomy.in_("taxonomies.color", ["red", "yellow"])
    taxonomy.equal_and_below_with_level("taxonomies.region", "europe", 2)

    result = taxonomy.find(print_outcome("taxonomy")).result(timeout=30)
    if result:
        print(f"✓ {result.count} tagged entries")


def list_assets(delivery):
    print("\n=== Asset Library ===")

    library = delivery.asset_library().include_count().sort("created_at", "desc")
    result = library.fetch_all(print_outcome("assets")).result(timeout=30)
    if result:
        for asset in result.assets:
            thumbnail = delivery.image_transform(asset.url or "", {"width": 200})
            print(f"  - {asset.file_name}: {thumbnail}")


def main():
    config = StackConfig()
    config.setup_logging()

    try:
        delivery = stack(config=config)
    except ConfigurationError as e:
        print(f"❌ {e.message}")
        return

    with delivery:
        fetch_entry(delivery)
        query_entries(delivery)
        query_taxonomies(delivery)
        list_assets(delivery)


if __name__ == "__main__":
    main()
