"""Tests for symmetric, clamped faction relations."""

from __future__ import annotations

import pytest
from conftest import build_definition, split_layout, start_game
from hypothesis import given, settings
from hypothesis import strategies as st

from dominion.domain import models as dm
from dominion.domain.diplomacy import (
    MAX_RELATION,
    MIN_RELATION,
    change_relations,
    clamp_relation,
    set_relations,
)
from dominion.domain.errors import EntityNotFoundError

NORTH = dm.FactionID("north")
SOUTH = dm.FactionID("south")


def _store():
    definition = build_definition(split_layout(10, 10, "ab"), {"a": "north", "b": "south"})
    return start_game(definition, "north").store


def test_relations_start_neutral_in_both_directions():
    store = _store()

    assert store.get_relation(NORTH, SOUTH).value == 0
    assert store.get_relation(SOUTH, NORTH).value == 0


def test_set_relations_writes_both_directions():
    store = _store()

    assert set_relations(store, NORTH, SOUTH, 40) == 40

    assert store.get_relation(SOUTH, NORTH).value == 40


def test_change_relations_clamps():
    store = _store()

    change_relations(store, NORTH, SOUTH, -80)
    change_relations(store, SOUTH, NORTH, -80)

    assert store.get_relation(NORTH, SOUTH).value == MIN_RELATION
    assert store.get_relation(SOUTH, NORTH).value == MIN_RELATION


def test_no_relation_with_itself():
    store = _store()

    with pytest.raises(EntityNotFoundError):
        change_relations(store, NORTH, NORTH, 5)


def test_clamp_bounds():
    assert clamp_relation(250) == MAX_RELATION
    assert clamp_relation(-250) == MIN_RELATION
    assert clamp_relation(17) == 17


class TestRelationProperties:
    @given(
        operations=st.lists(
            st.tuples(
                st.booleans(),
                st.booleans(),
                st.integers(min_value=-500, max_value=500),
            ),
            max_size=25,
        )
    )
    @settings(max_examples=50, deadline=None)
    def test_relations_stay_symmetric_and_bounded(self, operations):
        store = _store()

        for absolute, forward, amount in operations:
            source, target = (NORTH, SOUTH) if forward else (SOUTH, NORTH)
            if absolute:
                set_relations(store, source, target, amount)
            else:
                change_relations(store, source, target, amount)

            north_view = store.get_relation(NORTH, SOUTH).value
            south_view = store.get_relation(SOUTH, NORTH).value
            assert north_view == south_view
            assert MIN_RELATION <= north_view <= MAX_RELATION
