"""Tests for capturing and restoring game state."""

from __future__ import annotations

import pytest
from conftest import FakeWorldSource, build_definition, split_layout, start_game

from dominion.domain import models as dm
from dominion.domain.economy import add_units, build_holding
from dominion.domain.enums import HoldingType
from dominion.domain.errors import LoadError
from dominion.domain.snapshot import restore_game, snapshot_game
from dominion.domain.turn import player_attack_region, run_turn

NORTH = dm.FactionID("north")
MIDDLE = dm.FactionID("middle")
SOUTH = dm.FactionID("south")


def _definition():
    return build_definition(
        split_layout(15, 10, "abc"),
        {"a": "north", "b": "middle", "c": "south"},
        holdings=[dm.Holding(dm.HoldingID("plot"), "Plot", dm.RegionID("reg_a"))],
        base_region_income=5,
        base_faction_recruitment=2,
    )


def test_restore_reproduces_the_saved_state():
    definition = _definition()
    game = start_game(definition, "north")
    add_units(game.store, NORTH, dm.UnitID("militia"), 20)
    build_holding(game.store, NORTH, dm.RegionID("reg_a"), HoldingType.CASTLE)
    player_attack_region(game, dm.RegionID("reg_b"))
    run_turn(game)

    snapshot = snapshot_game(game)
    restored = restore_game(snapshot, FakeWorldSource(definition))

    assert restored.turn == game.turn == 2
    assert snapshot_game(restored) == snapshot
    assert restored.store.region_owner(dm.RegionID("reg_b")) == NORTH
    assert restored.factions_adjacent(NORTH, SOUTH)
    assert not restored.factions_adjacent(NORTH, MIDDLE)
    assert restored.store.get_holding(dm.HoldingID("plot")).type == HoldingType.CASTLE


def test_restored_game_plays_on_identically():
    definition = _definition()
    game = start_game(definition, "north")
    run_turn(game)
    restored = restore_game(snapshot_game(game), FakeWorldSource(definition))

    live_report = run_turn(game)
    restored_report = run_turn(restored)

    assert live_report == restored_report
    assert snapshot_game(restored) == snapshot_game(game)


def test_snapshot_of_another_world_is_rejected():
    game = start_game(_definition(), "north")
    snapshot = snapshot_game(game)
    snapshot.region_owners[dm.RegionID("reg_z")] = NORTH
    smaller = build_definition(split_layout(10, 10, "ab"), {"a": "north", "b": "middle"})

    with pytest.raises(LoadError, match="does not match"):
        restore_game(snapshot, FakeWorldSource(smaller))
