"""
Elasticsearch Bool Query Builder
Provides a fluent builder that combines queries with must/must_not/should/filter clauses
"""
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from src.es_client.query import MatchQuery, Query, RangeQuery, TermQuery, WildcardQuery
from src.utils.config import config
from src.utils.logger import get_logger

logger = get_logger(__name__)

# Marks an argument the caller did not pass at all
_MISSING = object()


class ClauseKind(str, Enum):
    """Bool query clause buckets"""

    MUST = "must"  # AND
    MUST_NOT = "must_not"  # NOT
    SHOULD = "should"  # OR
    FILTER = "filter"  # AND, not scored

    @classmethod
    def parse(cls, value: Any) -> Optional["ClauseKind"]:
        """Return the matching clause kind, or None if the value is not one"""
        try:
            return cls(value)
        except ValueError:
            return None


class Operator(str, Enum):
    """Comparison operators understood by where() and or_where()"""

    EQ = "="
    GT = ">"
    LT = "<"
    GTE = ">="
    LTE = "<="
    MATCH = "match"
    LIKE = "like"
    WILDCARD = "wildcard"
    NEQ = "!="
    NEQ_ALT = "<>"

    @classmethod
    def parse(cls, value: Any) -> Optional["Operator"]:
        """Return the matching operator, or None if the value is not one"""
        try:
            return cls(value)
        except ValueError:
            return None


_RANGE_BOUNDS = {
    Operator.GT: RangeQuery.GT,
    Operator.LT: RangeQuery.LT,
    Operator.GTE: RangeQuery.GTE,
    Operator.LTE: RangeQuery.LTE,
}


class EmptyObject(dict):
    """
    Output of a bool query with no clauses

    Serializes as ``{}`` like any empty dict, but lets a caller tell a bool
    combination that contributes nothing apart from a populated one with
    ``isinstance``.
    """

    def __repr__(self) -> str:
        return "EmptyObject()"


class BoolQuery(Query):
    """
    Bool Query Builder

    Collects query nodes into the four bool clause buckets. Every mutator
    except add() returns the builder itself so calls can be chained:

        query = (
            BoolQuery()
            .where("age", ">=", 18)
            .or_where("title", "match", "golang")
            .or_where(lambda q: q.where("status", "draft").where("author", "me"))
        )

    The builder is permissive: unknown clause kinds and operators are
    dropped (and logged at DEBUG) instead of raising.
    """

    def __init__(self, containers: Optional[Dict[Union[str, ClauseKind], Union[Query, Iterable[Query]]]] = None):
        """
        Initialize the builder

        Args:
            containers: Queries to start with, keyed by clause kind. Each value
                may be a single query or a list/tuple of queries. Keys that
                are not a clause kind are ignored.
        """
        self.containers: Dict[ClauseKind, List[Query]] = {}
        self.parameters: Dict[str, Any] = {}
        self.relation: Optional[str] = None

        for kind, queries in (containers or {}).items():
            if ClauseKind.parse(kind) is None:
                logger.debug(f"Ignoring unknown clause kind {kind!r}")
                continue
            if not isinstance(queries, (list, tuple)):
                queries = [queries]
            for query in queries:
                self.add(query, kind)

    def output(self) -> Dict[str, Any]:
        """
        Serialize the clause buckets

        Returns:
            Dict[str, Any]: Clause kind -> list of serialized queries, in the
            order they were added, plus any bool parameters. EmptyObject if
            no clause was added.
        """
        output: Dict[str, Any] = {}
        for kind, queries in self.containers.items():
            output[kind.value] = [query.to_dict() for query in queries]

        if not output:
            return EmptyObject()

        output.update(self.parameters)
        return output

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the builder as a query node

        Returns:
            Dict[str, Any]: Bool query ({"bool": output()})
        """
        return {"bool": self.output()}

    def add(self, query: Query, kind: Union[str, ClauseKind]) -> None:
        """
        Append a query to a clause bucket

        Args:
            query: Query node
            kind: Clause kind (must, must_not, should, filter)
        """
        clause_kind = ClauseKind.parse(kind)
        if clause_kind is None:
            logger.debug(f"Ignoring query for unknown clause kind {kind!r}: {query!r}")
            return

        self.containers.setdefault(clause_kind, []).append(query)

    def must(self, query: Query) -> "BoolQuery":
        """
        Add a query that must match (AND)

        Args:
            query: Query node

        Returns:
            BoolQuery: self
        """
        self.add(query, ClauseKind.MUST)
        return self

    def must_not(self, query: Query) -> "BoolQuery":
        """
        Add a query that must not match (NOT)

        Args:
            query: Query node

        Returns:
            BoolQuery: self
        """
        self.add(query, ClauseKind.MUST_NOT)
        return self

    def should(self, query: Query) -> "BoolQuery":
        """
        Add a query that should match (OR)

        Args:
            query: Query node

        Returns:
            BoolQuery: self
        """
        self.add(query, ClauseKind.SHOULD)
        return self

    def filter(self, query: Query) -> "BoolQuery":
        """
        Add a query that must match without affecting the score

        Args:
            query: Query node

        Returns:
            BoolQuery: self
        """
        self.add(query, ClauseKind.FILTER)
        return self

    def set_parameter(self, name: str, value: Any) -> "BoolQuery":
        """
        Set a bool-level parameter such as minimum_should_match or boost

        Parameters are only written out when at least one clause exists.
        """
        self.parameters[name] = value
        return self

    def where(
        self,
        field: Union[str, Callable[["BoolQuery"], Any]],
        operator: Any = _MISSING,
        value: Any = _MISSING,
        params: Optional[Dict[str, Any]] = None
    ) -> "BoolQuery":
        """
        Add an AND condition

        Args:
            field: Field name, or a callable that receives a new nested
                BoolQuery to fill in; the nested query is added under must
            operator: Comparison operator. With only two arguments,
                where(field, value), this is the value and the operator is "="
            value: Value to compare against
            params: Extra parameters for term, match and wildcard queries

        Returns:
            BoolQuery: self
        """
        if callable(field):
            self.must(self._group(field))
            return self

        query, negated = self._make_condition(field, operator, value, params)
        if query is None:
            return self

        if negated:
            self.must_not(query)
        else:
            self.must(query)

        return self

    def or_where(
        self,
        field: Union[str, Callable[["BoolQuery"], Any]],
        operator: Any = _MISSING,
        value: Any = _MISSING,
        params: Optional[Dict[str, Any]] = None
    ) -> "BoolQuery":
        """
        Add an OR condition

        Same arguments as where(), but every condition goes under should.
        The negation operators "!=" and "<>" are not supported here and add
        nothing.

        Returns:
            BoolQuery: self
        """
        if callable(field):
            self.should(self._group(field))
            return self

        query, negated = self._make_condition(field, operator, value, params)
        if query is None:
            return self

        if negated:
            logger.debug(f"Ignoring negated condition in or_where on {query!r}")
            return self

        self.should(query)
        return self

    def where_like(self, field: str, value: str) -> "BoolQuery":
        """
        Add an AND wildcard condition

        Args:
            field: Field name
            value: Wildcard pattern

        Returns:
            BoolQuery: self
        """
        return self.where(field, Operator.LIKE, value)

    def where_match(self, field: str, value: str) -> "BoolQuery":
        """
        Add an AND full-text match condition

        Args:
            field: Field name
            value: Text to match

        Returns:
            BoolQuery: self
        """
        return self.where(field, Operator.MATCH, value)

    def or_where_like(self, field: str, value: str) -> "BoolQuery":
        """
        Add an OR wildcard condition

        Args:
            field: Field name
            value: Wildcard pattern

        Returns:
            BoolQuery: self
        """
        return self.or_where(field, Operator.LIKE, value)

    def or_where_match(self, field: str, value: str) -> "BoolQuery":
        """
        Add an OR full-text match condition

        Args:
            field: Field name
            value: Text to match

        Returns:
            BoolQuery: self
        """
        return self.or_where(field, Operator.MATCH, value)

    def set_relation(self, relation: Optional[str] = None) -> "BoolQuery":
        """
        Set the relation that prefixes field names, or clear it

        Args:
            relation: Relation (e.g. "user" makes "name" become "user.name").
                None or an empty string clears it.

        Returns:
            BoolQuery: self
        """
        if relation:
            separator = config.query.relation_separator if config else "."
            self.relation = f"{relation}{separator}"
        else:
            self.relation = None

        return self

    def _prepare_field(self, field: Any) -> str:
        # Field names are always strings in the query DSL
        field = str(field)
        if not self.relation or field.startswith(self.relation):
            return field

        return f"{self.relation}{field}"

    def _group(self, callback: Callable[["BoolQuery"], Any]) -> "BoolQuery":
        group = BoolQuery()
        callback(group)
        return group

    def _make_condition(
        self,
        field: str,
        operator: Any,
        value: Any,
        params: Optional[Dict[str, Any]]
    ) -> Tuple[Optional[Query], bool]:
        """
        Build the query for a field/operator/value condition

        Returns:
            Tuple[Optional[Query], bool]: The query (None for an unknown
            operator) and whether it belongs in a negated clause
        """
        field = self._prepare_field(field)

        # where(field, value) means where(field, "=", value)
        if value is _MISSING:
            operator, value = Operator.EQ, operator
        elif operator is _MISSING:
            operator = Operator.EQ

        if value is _MISSING:
            logger.debug(f"Ignoring condition on {field!r} without a value")
            return None, False

        op = Operator.parse(operator)
        if op is None:
            logger.debug(f"Ignoring condition on {field!r} with unknown operator {operator!r}")
            return None, False

        if op == Operator.EQ:
            return TermQuery(field, value, params), False
        if op in _RANGE_BOUNDS:
            return RangeQuery(field, {_RANGE_BOUNDS[op]: value}), False
        if op == Operator.MATCH:
            return MatchQuery(field, value, params), False
        if op in (Operator.LIKE, Operator.WILDCARD):
            return WildcardQuery(field, value, params), False

        # "!=" and "<>"
        return TermQuery(field, value, params), True
