"""
Autocomplete and mapping-check operations composed from the query builders,
the search client and the response reducer.
"""

import json
import logging
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .client import SearchClient
from .patterns import build_pattern
from .queries import (
    AUTOCOMPLETE_SIZE,
    DEFAULT_FIELD,
    MAPPING_CHECK_SIZE,
    build_autocomplete_query,
    build_mapping_check_query,
)
from .reducer import extract_bucket_count, extract_suggestions, keyword_mapping_exists

logger = logging.getLogger(__name__)


class SearchResult(BaseModel):
    suggestions: List[str]
    debug: Optional[str] = None


class MappingCheckResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    field_mapping_exists: bool = Field(alias="fieldMappingExists")
    unique_count: int = Field(alias="uniqueCount")
    debug: Optional[str] = None


def autocomplete(client: SearchClient, prefix: str, field: str = DEFAULT_FIELD,
                 size: int = AUTOCOMPLETE_SIZE, escape: bool = False,
                 debug: bool = False) -> SearchResult:
    """Fetch suggestions for ``prefix``.

    Transport and decoding failures propagate to the caller; a response
    without the expected aggregation yields no suggestions. The debug trace,
    which embeds the full request and response bodies, is only built when
    ``debug`` is set.
    """
    pattern = build_pattern(prefix, escape=escape)
    query = build_autocomplete_query(pattern, field=field, size=size)
    response = client.search(query)
    suggestions = extract_suggestions(response, field=field)
    logger.info(f"Autocomplete {prefix!r}: {len(suggestions)} suggestions")

    trace = None
    if debug:
        trace = "\n".join([
            f"Query (aggregation): {prefix!r}",
            f"Generated regexp: {pattern!r}",
            f"Request body: {json.dumps(query, ensure_ascii=False)}",
            f"Response body: {json.dumps(response, ensure_ascii=False)}",
            f"Suggestions: {suggestions}",
        ])
    return SearchResult(suggestions=suggestions, debug=trace)


def check_mapping(client: SearchClient, field: str = DEFAULT_FIELD,
                  size: int = MAPPING_CHECK_SIZE, debug: bool = False) -> MappingCheckResult:
    """Report whether ``<field>.keyword`` is mapped and how many distinct values it holds."""
    mapping = client.get_mapping()
    exists = keyword_mapping_exists(mapping, client.index, field=field)

    count = 0
    if exists:
        response = client.search(build_mapping_check_query(field=field, size=size))
        count = extract_bucket_count(response, field=field)
    logger.info(f"Mapping check for {field}.keyword: exists={exists} count={count}")

    trace = None
    if debug:
        lines = [f"Mapping for {client.index}: {json.dumps(mapping, ensure_ascii=False)}",
                 f"Keyword sub-field present: {exists}"]
        if exists:
            lines.append(f"Distinct values (capped at {min(size, MAPPING_CHECK_SIZE)}): {count}")
        trace = "\n".join(lines)

    return MappingCheckResult(
        field_mapping_exists=exists,
        unique_count=count,
        debug=trace,
    )
