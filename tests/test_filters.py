"""Tests for library listing filters."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import TypeAdapter, ValidationError

from plex_library.models import (
    CollectionFilter,
    Comparison,
    DatePropertyFilter,
    Filter,
    KeysFilter,
    PropertyFilter,
)


# -- Comparison ---------------------------------------------------------------


@pytest.mark.parametrize(
    "comparison, suffix",
    [
        (Comparison.GREATER_THAN, ">"),
        (Comparison.LESS_THAN, "<"),
        (Comparison.EQUAL, ""),
    ],
)
def test_comparison_suffix(comparison, suffix):
    assert comparison.value == suffix


# -- Keys ---------------------------------------------------------------------


def test_empty_keys_render_nothing():
    assert KeysFilter(keys=frozenset()).to_query_item() is None


def test_single_key():
    assert KeysFilter(keys=frozenset({"42"})).to_query_item() == ("id", "42")


def test_multiple_keys_joined():
    name, value = KeysFilter(keys=frozenset({"a", "b"})).to_query_item()
    assert name == "id"
    assert sorted(value.split(",")) == ["a", "b"]


def test_keys_rendering_is_deterministic():
    first = KeysFilter(keys=frozenset({"3", "1", "2"})).to_query_item()
    second = KeysFilter(keys=frozenset({"2", "3", "1"})).to_query_item()
    assert first == second


# -- Property -----------------------------------------------------------------


def test_property_greater_than():
    f = PropertyFilter(name="year", comparison=Comparison.GREATER_THAN, value="2000")
    assert f.to_query_item() == ("year>", "2000")


def test_property_equal_has_no_suffix():
    f = PropertyFilter(name="title", comparison=Comparison.EQUAL, value="Heat")
    assert f.to_query_item() == ("title", "Heat")


def test_property_passes_blank_values_through():
    f = PropertyFilter(name="", comparison=Comparison.LESS_THAN, value="")
    assert f.to_query_item() == ("<", "")


# -- DateProperty -------------------------------------------------------------


def test_date_property_epoch_seconds():
    when = datetime(2021, 1, 1, tzinfo=timezone.utc)
    f = DatePropertyFilter(name="addedAt", comparison=Comparison.LESS_THAN, value=when)
    assert f.to_query_item() == ("addedAt<", "1609459200")


def test_date_property_drops_sub_second_precision():
    when = datetime(2021, 1, 1, 0, 0, 5, 999999, tzinfo=timezone.utc)
    f = DatePropertyFilter(name="updatedAt", comparison=Comparison.GREATER_THAN, value=when)
    assert f.to_query_item() == ("updatedAt>", "1609459205")


def test_date_property_respects_offset():
    when = datetime(2021, 1, 1, 2, 0, tzinfo=timezone(timedelta(hours=2)))
    f = DatePropertyFilter(name="addedAt", comparison=Comparison.EQUAL, value=when)
    assert f.to_query_item() == ("addedAt", "1609459200")


def test_naive_date_is_utc():
    f = DatePropertyFilter(name="addedAt", comparison=Comparison.EQUAL, value=datetime(2021, 1, 1))
    assert f.to_query_item() == ("addedAt", "1609459200")


# -- Collection ---------------------------------------------------------------


def test_collection():
    assert CollectionFilter(id="789").to_query_item() == ("collection", "789")


# -- Parsing from plain data --------------------------------------------------


def test_filters_parse_by_kind():
    adapter = TypeAdapter(list[Filter])
    filters = adapter.validate_python([
        {"kind": "keys", "keys": ["1", "2"]},
        {"kind": "property", "name": "year", "comparison": ">", "value": "2000"},
        {"kind": "date_property", "name": "addedAt", "comparison": "<", "value": "2021-01-01T00:00:00Z"},
        {"kind": "collection", "id": "789"},
    ])

    assert isinstance(filters[0], KeysFilter)
    assert filters[0].keys == frozenset({"1", "2"})
    assert filters[1].to_query_item() == ("year>", "2000")
    assert filters[2].to_query_item() == ("addedAt<", "1609459200")
    assert filters[3].to_query_item() == ("collection", "789")


def test_unknown_filter_kind_rejected():
    with pytest.raises(ValidationError):
        TypeAdapter(list[Filter]).validate_python([{"kind": "genre", "id": "1"}])


def test_filters_are_immutable():
    f = CollectionFilter(id="1")
    with pytest.raises(ValidationError):
        f.id = "2"
