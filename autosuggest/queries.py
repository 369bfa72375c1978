"""
Request bodies sent to the search engine.
"""

from typing import Any, Dict, Optional

DEFAULT_FIELD = "telepules"

AUTOCOMPLETE_SIZE = 10
MAPPING_CHECK_SIZE = 100

# edge_ngram settings for the autocomplete analyzer
EDGE_NGRAM_MIN_GRAM = 1
EDGE_NGRAM_MAX_GRAM = 20


def aggregation_name(field: str = DEFAULT_FIELD) -> str:
    return f"unique_{field}"


def keyword_field(field: str = DEFAULT_FIELD) -> str:
    return f"{field}.keyword"


def _terms_query(field: str, size: int, include: Optional[str] = None) -> Dict[str, Any]:
    terms: Dict[str, Any] = {"field": keyword_field(field)}
    if include is not None:
        terms["include"] = include
    terms["size"] = size
    return {
        "size": 0,
        "aggs": {
            aggregation_name(field): {
                "terms": terms
            }
        }
    }


def build_autocomplete_query(pattern: str, field: str = DEFAULT_FIELD,
                             size: int = AUTOCOMPLETE_SIZE) -> Dict[str, Any]:
    """Terms aggregation over the keyword sub-field, filtered by ``pattern``."""
    return _terms_query(field, max(1, min(size, AUTOCOMPLETE_SIZE)), include=pattern)


def build_mapping_check_query(field: str = DEFAULT_FIELD,
                              size: int = MAPPING_CHECK_SIZE) -> Dict[str, Any]:
    """Unfiltered terms aggregation used to count distinct values.

    The bucket count is never allowed above MAPPING_CHECK_SIZE.
    """
    return _terms_query(field, max(1, min(size, MAPPING_CHECK_SIZE)))


def build_index_body(field: str = DEFAULT_FIELD) -> Dict[str, Dict[str, Any]]:
    """Settings and mappings for an index the autocomplete queries can run against."""
    settings = {
        "analysis": {
            "filter": {
                "autocomplete_filter": {
                    "type": "edge_ngram",
                    "min_gram": EDGE_NGRAM_MIN_GRAM,
                    "max_gram": EDGE_NGRAM_MAX_GRAM,
                }
            },
            "analyzer": {
                "autocomplete": {
                    "type": "custom",
                    "tokenizer": "standard",
                    "filter": ["lowercase", "autocomplete_filter"],
                }
            },
        }
    }
    mappings = {
        "properties": {
            field: {
                "type": "text",
                "analyzer": "autocomplete",
                "search_analyzer": "standard",
                "fields": {
                    "keyword": {"type": "keyword"}
                },
            },
            "kozter_nev": {
                "type": "text"
            },
        }
    }
    return {"settings": settings, "mappings": mappings}
