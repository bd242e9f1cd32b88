"""Tests for the game session service."""

from __future__ import annotations

import pytest
from conftest import FakeWorldSource, build_definition, split_layout

from dominion.domain import models as dm
from dominion.domain.enums import BattleResult, HoldingType
from dominion.domain.errors import (
    EntityNotFoundError,
    GameNotStartedError,
    InvalidTargetRegionError,
)
from dominion.repository import JsonSessionRepository
from dominion.services import GameService


def _service(tmp_path) -> GameService:
    definition = build_definition(
        split_layout(10, 10, "ab"),
        {"a": "north", "b": "south"},
        capitals=("a",),
        holdings=[dm.Holding(dm.HoldingID("plot"), "Plot", dm.RegionID("reg_a"))],
        holdings_price=20,
        base_region_income=10,
    )
    return GameService(FakeWorldSource(definition), JsonSessionRepository(tmp_path))


def test_commands_need_a_running_game(tmp_path):
    service = _service(tmp_path)

    assert not service.has_game
    with pytest.raises(GameNotStartedError):
        service.next_turn()
    with pytest.raises(GameNotStartedError):
        service.factions()


def test_player_attack_scenario(tmp_path):
    service = _service(tmp_path)
    service.new_game("test_world", "north")
    assert service.recruit_units("militia", 5) == 5

    result = service.player_attack_region("reg_b")

    assert result == BattleResult.VICTORY
    assert service.region("reg_b").faction_id == "north"
    assert service.game.turn == 1
    report = service.last_report()
    assert report is not None and report.eliminated == ["south"]


def test_invalid_attack_leaves_turn_alone(tmp_path):
    service = _service(tmp_path)
    service.new_game("test_world", "north")

    with pytest.raises(InvalidTargetRegionError):
        service.player_attack_region("reg_a")
    with pytest.raises(EntityNotFoundError):
        service.player_attack_region("reg_zz")

    assert service.game.turn == 0


def test_build_holding_spends_player_wealth(tmp_path):
    service = _service(tmp_path)
    service.new_game("test_world", "north")

    holding = service.build_holding("reg_a", HoldingType.CITY)

    assert holding is not None and holding.id == "plot"
    assert service.faction("north").wealth == 80
    assert service.build_holding("reg_a", HoldingType.CITY) is None
    assert [h.type for h in service.region_holdings("reg_a")] == [HoldingType.CITY]


def test_faction_overview(tmp_path):
    service = _service(tmp_path)
    service.new_game("test_world", "north")

    overview = service.faction_overview("north")

    assert overview["income"] == 10
    assert overview["troops"] == 10
    assert overview["capital_id"] == "reg_a"
    assert overview["centre"] == (2, 4)
    assert overview["neighbours"] == ["south"]
    assert service.faction_overview("south")["capital_id"] is None
    assert service.faction_id_at(9, 0) == "south"
    assert service.regions_adjacent("reg_a", "reg_b")
    assert service.factions_adjacent("north", "south")


def test_events_are_drained_once(tmp_path):
    service = _service(tmp_path)
    service.new_game("test_world", "north")
    service.game.store.get_army(dm.FactionID("south"), dm.UnitID("militia")).size = 40

    service.next_turn()

    events = service.drain_events()
    assert [event.region_id for event in events] == ["reg_a"]
    assert service.drain_events() == []


def test_save_and_load_round_trip(tmp_path):
    service = _service(tmp_path)
    service.new_game("test_world", "north")
    service.next_turn()
    service.recruit_units("militia", 7)
    service.save_game("autosave")
    wealth = service.faction("north").wealth

    service.new_game("test_world", "south")
    restored = service.load_game("autosave")

    assert service.list_saves() == ["autosave"]
    assert restored.turn == 1
    assert restored.player_faction_id == "north"
    assert service.faction("north").wealth == wealth

    service.delete_save("autosave")
    assert service.list_saves() == []
    with pytest.raises(FileNotFoundError):
        service.load_game("autosave")


def test_list_worlds(tmp_path):
    service = _service(tmp_path)

    assert [world.id for world in service.list_worlds()] == ["test_world"]
