from __future__ import annotations

import asyncio

import pytest

from app.business.tasks.repository import TaskRepository
from app.platform.store import InMemoryDocumentStore, Query, QueryError


def test_range_filters_on_two_fields_are_rejected() -> None:
    with pytest.raises(QueryError):
        Query().where("deadline", "<=", 5).where("created_at", ">=", 1)


def test_range_filters_on_one_field_are_allowed() -> None:
    query = Query().where("paid_at", ">=", 1).where("paid_at", "<", 10).where("status", "==", "paid")
    assert len(query.filters) == 3


def test_ordering_must_use_the_range_field() -> None:
    with pytest.raises(QueryError):
        Query().where("deadline", "<=", 5).order("created_at")
    with pytest.raises(QueryError):
        Query().order("created_at").where("deadline", "<=", 5)


def test_single_ordering_only() -> None:
    with pytest.raises(QueryError):
        Query().order("deadline").order("created_at")


def test_array_contains_and_in_limits() -> None:
    with pytest.raises(QueryError):
        Query().where("assigned_to", "array_contains", "a").where("tags", "array_contains", "b")
    with pytest.raises(QueryError):
        Query().where("status", "in", ["a"]).where("priority", "in", ["b"])
    with pytest.raises(QueryError):
        Query().where("status", "in", [])
    with pytest.raises(QueryError):
        Query().where("status", "in", [str(index) for index in range(31)])


def test_limit_must_be_positive() -> None:
    with pytest.raises(QueryError):
        Query().take(0)


def test_unknown_operator_is_rejected() -> None:
    with pytest.raises(ValueError):
        Query().where("status", "!=", "done")


def test_builder_is_immutable() -> None:
    base = Query()
    narrowed = base.where("status", "==", "pending")
    assert base.filters == ()
    assert len(narrowed.filters) == 1


def test_repository_rejects_undeclared_fields() -> None:
    repository = TaskRepository()
    store = InMemoryDocumentStore()

    with pytest.raises(QueryError):
        asyncio.run(repository.find(store, repository.query().where("secret_field", "==", 1)))

    # timestamps are always queryable
    assert asyncio.run(repository.find(store, repository.query().order("created_at"))) == []
