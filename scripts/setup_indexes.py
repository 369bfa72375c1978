"""
Idempotent script to create the autocomplete index.

Creates:
- edge_ngram "autocomplete" analyzer
- text field with a keyword sub-field used by the terms aggregations

Usage:
    OPENSEARCH_HOST=... OPENSEARCH_PORT=... OPENSEARCH_USER=... \
    OPENSEARCH_PASSWORD=... python scripts/setup_indexes.py
"""

import sys

from autosuggest.client import SearchClient, SearchClientError
from autosuggest.config import ConfigError, load_settings
from autosuggest.queries import build_index_body


def create_index(client: SearchClient, field: str) -> bool:
    """Create the index if not already present. Returns False on failure."""
    body = build_index_body(field)
    try:
        outcome = client.create_index(body["settings"], body["mappings"])
    except SearchClientError as e:
        print(f"ERROR: could not reach OpenSearch: {e}")
        return False

    if outcome.created:
        print(f"ADDED: index '{client.index}' with autocomplete analyzer on '{field}' field")
        return True

    # OpenSearch answers 400 resource_already_exists_exception for an existing index
    if "resource_already_exists_exception" in outcome.body:
        print(f"SKIPPED: index '{client.index}' already exists")
        return True

    print(f"ERROR: index creation failed ({outcome.status_code}): {outcome.body}")
    return False


def main() -> None:
    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    print(f"Connecting to OpenSearch at {settings.base_url}...")
    client = SearchClient.from_settings(settings)
    try:
        ok = create_index(client, settings.field)
    finally:
        client.close()

    if not ok:
        sys.exit(1)
    print("\nDone.")


if __name__ == "__main__":
    main()
