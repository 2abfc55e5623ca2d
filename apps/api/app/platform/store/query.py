from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from app.platform.store.errors import QueryError


MAX_IN_VALUES = 30


class Op(str, Enum):
    EQ = "=="
    LT = "<"
    LTE = "<="
    GT = ">"
    GTE = ">="
    ARRAY_CONTAINS = "array_contains"
    IN = "in"

    @property
    def is_range(self) -> bool:
        return self in {Op.LT, Op.LTE, Op.GT, Op.GTE}


@dataclass(frozen=True, slots=True)
class Filter:
    field: str
    op: Op
    value: Any


@dataclass(frozen=True, slots=True)
class OrderBy:
    field: str
    descending: bool = False


@dataclass(frozen=True, slots=True)
class Query:
    """Immutable conjunctive query: filters, at most one ordering, optional limit.

    Every builder call validates the combination so a malformed query fails
    where it is written instead of at the backend.
    """

    filters: tuple[Filter, ...] = ()
    order_by: OrderBy | None = None
    limit: int | None = None

    def where(self, field: str, op: Op | str, value: Any) -> Query:
        query = replace(self, filters=self.filters + (Filter(field=field, op=Op(op), value=value),))
        query.validate()
        return query

    def order(self, field: str, *, descending: bool = False) -> Query:
        if self.order_by is not None:
            raise QueryError("only one ordering is supported")
        query = replace(self, order_by=OrderBy(field=field, descending=descending))
        query.validate()
        return query

    def take(self, limit: int) -> Query:
        if limit <= 0:
            raise QueryError("limit must be positive")
        return replace(self, limit=limit)

    @property
    def fields(self) -> set[str]:
        names = {item.field for item in self.filters}
        if self.order_by is not None:
            names.add(self.order_by.field)
        return names

    def validate(self) -> None:
        range_fields = {item.field for item in self.filters if item.op.is_range}
        if len(range_fields) > 1:
            raise QueryError(f"range filters on more than one field: {', '.join(sorted(range_fields))}")
        if range_fields and self.order_by is not None and self.order_by.field not in range_fields:
            raise QueryError("ordering must use the range-filtered field")

        if sum(1 for item in self.filters if item.op is Op.ARRAY_CONTAINS) > 1:
            raise QueryError("only one array_contains filter is supported")

        in_filters = [item for item in self.filters if item.op is Op.IN]
        if len(in_filters) > 1:
            raise QueryError("only one 'in' filter is supported")
        for item in in_filters:
            if not isinstance(item.value, (list, tuple, set, frozenset)) or not item.value:
                raise QueryError(f"'in' filter on '{item.field}' needs a non-empty collection")
            if len(item.value) > MAX_IN_VALUES:
                raise QueryError(f"'in' filter on '{item.field}' accepts at most {MAX_IN_VALUES} values")

    def check_fields(self, allowed: Iterable[str]) -> None:
        unknown = self.fields - set(allowed)
        if unknown:
            raise QueryError(f"unknown query fields: {', '.join(sorted(unknown))}")
