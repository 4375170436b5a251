"""
Elasticsearch Query Nodes
Provides leaf query objects that serialize themselves to the query DSL
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union

from src.utils.config import config
from src.utils.date_utils import format_datetime
from src.utils.logger import get_logger

logger = get_logger(__name__)


class Query(ABC):
    """
    Base class for every query node

    A node only has to know how to turn itself into the nested dict the
    Elasticsearch query DSL expects.
    """

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the query

        Returns:
            Dict[str, Any]: Query DSL structure
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.to_dict()!r})"


class TermQuery(Query):
    """Exact value match on a single field"""

    def __init__(self, field: str, value: Any, params: Optional[Dict[str, Any]] = None):
        self.field = field
        self.value = value
        self.params = dict(params or {})

    def to_dict(self) -> Dict[str, Any]:
        if self.params:
            return {"term": {self.field: {"value": self.value, **self.params}}}
        return {"term": {self.field: self.value}}


class TermsQuery(Query):
    """Match any value in the list"""

    def __init__(self, field: str, values: List[Any], params: Optional[Dict[str, Any]] = None):
        self.field = field
        self.values = list(values)
        self.params = dict(params or {})

    def to_dict(self) -> Dict[str, Any]:
        return {"terms": {self.field: self.values, **self.params}}


class MatchQuery(Query):
    """Full-text match on a single field"""

    def __init__(self, field: str, query: Any, params: Optional[Dict[str, Any]] = None):
        self.field = field
        self.query = query
        self.params = dict(params or {})

    def to_dict(self) -> Dict[str, Any]:
        if self.params:
            return {"match": {self.field: {"query": self.query, **self.params}}}
        return {"match": {self.field: self.query}}


class WildcardQuery(Query):
    """Wildcard pattern match (``*`` and ``?``) on a single field"""

    def __init__(self, field: str, value: str, params: Optional[Dict[str, Any]] = None):
        self.field = field
        self.value = value
        self.params = dict(params or {})

    def to_dict(self) -> Dict[str, Any]:
        if self.params:
            return {"wildcard": {self.field: {"value": self.value, **self.params}}}
        return {"wildcard": {self.field: self.value}}


class RangeQuery(Query):
    """
    Range comparison on a single field

    Bounds are given as a dict keyed by ``gt``, ``lt``, ``gte`` or ``lte``.
    Datetime bounds are written as ISO 8601 strings, and bounds set to None
    are left out.
    """

    GT = "gt"
    LT = "lt"
    GTE = "gte"
    LTE = "lte"

    def __init__(self, field: str, ranges: Dict[str, Any], params: Optional[Dict[str, Any]] = None):
        self.field = field
        self.ranges = dict(ranges)
        self.params = dict(params or {})

    def to_dict(self) -> Dict[str, Any]:
        range_params = {
            key: format_datetime(value)
            for key, value in self.ranges.items()
            if value is not None
        }
        range_params.update(self.params)

        return {"range": {self.field: range_params}}


class NestedQuery(Query):
    """Query against objects stored in a nested field"""

    def __init__(self, path: str, query: Query, params: Optional[Dict[str, Any]] = None):
        self.path = path
        self.query = query
        self.params = dict(params or {})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nested": {
                "path": self.path,
                "query": self.query.to_dict(),
                **self.params,
            }
        }


def build_search_query(
    query: Union[Query, Dict[str, Any]],
    sort: Optional[List[Dict[str, Any]]] = None,
    size: Optional[int] = None,
    from_: int = 0
) -> Dict[str, Any]:
    """
    Build a complete search request body

    Args:
        query: Query node (or an already serialized query)
        sort: Sort criteria
        size: Number of results to return (configured default if not specified)
        from_: Starting offset

    Returns:
        Dict[str, Any]: Complete search request body
    """
    if size is None:
        size = config.query.default_size if config else 10

    search_query = {
        "size": size,
        "from": from_,
        "query": query.to_dict() if isinstance(query, Query) else query,
    }

    if sort:
        search_query["sort"] = sort

    logger.debug(f"Built search query: {search_query}")
    return search_query
