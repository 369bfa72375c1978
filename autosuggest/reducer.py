"""
Reduce raw engine responses to suggestion lists and counts.

Every function here degrades to an empty result when the expected structure
is absent or has the wrong type, so engine version differences or partial
responses never crash the caller.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, StrictStr, ValidationError

from .queries import DEFAULT_FIELD, aggregation_name


class Bucket(BaseModel):
    key: StrictStr


class TermsAggregation(BaseModel):
    buckets: List[Any] = []


class AggregationResponse(BaseModel):
    aggregations: Dict[str, Any] = {}


class KeywordField(BaseModel):
    type: StrictStr


class TextField(BaseModel):
    fields: Dict[str, Any] = {}


class IndexMappings(BaseModel):
    properties: Dict[str, Any] = {}


class IndexMapping(BaseModel):
    mappings: IndexMappings = IndexMappings()


def _decode(model, data: Any) -> Optional[BaseModel]:
    if data is None:
        return None
    try:
        return model.model_validate(data)
    except ValidationError:
        return None


def _buckets(response: Any, field: str) -> List[Any]:
    decoded = _decode(AggregationResponse, response)
    if decoded is None:
        return []
    terms = _decode(TermsAggregation, decoded.aggregations.get(aggregation_name(field)))
    if terms is None:
        return []
    return terms.buckets


def extract_suggestions(response: Any, field: str = DEFAULT_FIELD) -> List[str]:
    """Return bucket keys in the order the engine ranked them."""
    suggestions = []
    for raw in _buckets(response, field):
        bucket = _decode(Bucket, raw)
        if bucket is not None:
            suggestions.append(bucket.key)
    return suggestions


def extract_bucket_count(response: Any, field: str = DEFAULT_FIELD) -> int:
    return sum(1 for raw in _buckets(response, field) if isinstance(raw, dict))


def _has_keyword_subfield(index_mapping: Any, field: str) -> bool:
    decoded = _decode(IndexMapping, index_mapping)
    if decoded is None:
        return False
    text_field = _decode(TextField, decoded.mappings.properties.get(field))
    if text_field is None:
        return False
    keyword = _decode(KeywordField, text_field.fields.get("keyword"))
    return keyword is not None and keyword.type == "keyword"


def keyword_mapping_exists(mapping: Any, index: str, field: str = DEFAULT_FIELD) -> bool:
    """Check ``<index>.mappings.properties.<field>.fields.keyword`` is a keyword field.

    When ``index`` is an alias the engine keys the reply by the concrete
    index names, so every index in the reply is checked if the name is absent.
    """
    if not isinstance(mapping, dict):
        return False
    if index in mapping:
        return _has_keyword_subfield(mapping[index], field)
    return any(_has_keyword_subfield(index_mapping, field) for index_mapping in mapping.values())
