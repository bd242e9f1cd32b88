"""HTTP routes for the Dominion API."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from dominion.api import runtime
from dominion.api.runtime import ApiState
from dominion.domain.enums import HoldingType
from dominion.domain.errors import (
    EntityNotFoundError,
    GameNotStartedError,
    InvalidTargetRegionError,
    LoadError,
)

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


@contextmanager
def domain_errors() -> Iterator[None]:
    """Translate kernel errors raised by a command into HTTP errors."""

    try:
        yield
    except GameNotStartedError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except EntityNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except InvalidTargetRegionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except LoadError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


class WorldSummary(BaseModel):
    id: str
    name: str
    description: str
    author: str
    version: str
    width: int
    height: int


class GameSummary(BaseModel):
    world: WorldSummary
    player_faction_id: str
    player_alive: bool
    turn: int
    alive_factions: list[str]
    pending_events: int


class NewGameRequest(BaseModel):
    world_id: str = Field(min_length=1)
    player_faction_id: str = Field(min_length=1)


class FactionSummary(BaseModel):
    id: str
    name: str
    colour: str
    culture_id: str
    wealth: int
    alive: bool


class FactionDetail(BaseModel):
    id: str
    name: str
    colour: str
    culture_id: str
    alive: bool
    wealth: int
    income: int
    outcome: int
    recruitment: int
    troops: int
    strength: int
    region_count: int
    capital_id: str | None
    holdings: dict[str, int]
    centre: tuple[int, int] | None
    neighbours: list[str]


class RegionSummary(BaseModel):
    id: str
    name: str
    colour: str
    type: str
    faction_id: str
    sovereign_faction_id: str


class HoldingSummary(BaseModel):
    id: str
    name: str
    region_id: str
    type: str


class RegionDetail(RegionSummary):
    holdings: list[HoldingSummary]


class ArmySummary(BaseModel):
    faction_id: str
    unit_id: str
    size: int


class RelationSummary(BaseModel):
    source_faction_id: str
    target_faction_id: str
    value: int


class BattleSummary(BaseModel):
    attacker_faction_id: str
    defender_faction_id: str
    region_id: str
    result: str
    attacker_strength: int
    defender_strength: int
    attacker_losses: dict[str, int]
    defender_losses: dict[str, int]


class EventSummary(BaseModel):
    region_id: str
    attacker_faction_id: str
    result: str


class TurnReportResponse(BaseModel):
    turn: int
    battles: list[BattleSummary]
    events: list[EventSummary]
    eliminated: list[str]


class AttackRequest(BaseModel):
    region_id: str = Field(min_length=1)


class AttackResponse(BaseModel):
    result: str
    report: TurnReportResponse


class RecruitRequest(BaseModel):
    unit_id: str = Field(min_length=1)
    amount: int = Field(ge=0)


class RecruitResponse(BaseModel):
    recruited: int
    wealth: int


class BuildHoldingRequest(BaseModel):
    region_id: str = Field(min_length=1)
    type: HoldingType


class BuildHoldingResponse(BaseModel):
    built: bool
    holding: HoldingSummary | None
    wealth: int


class TileOwner(BaseModel):
    x: int
    y: int
    faction_id: str


class SaveRequest(BaseModel):
    slot: str = Field(min_length=1, max_length=64, pattern=r"^[A-Za-z0-9_-]+$")


def _game_summary(state: ApiState) -> GameSummary:
    return GameSummary.model_validate(runtime.to_game_dict(state.games.game))


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    return {
        "status": "ok",
        "game_running": state.games.has_game,
        "worlds_dir": str(state.settings.worlds_dir),
    }


@router.get("/worlds", response_model=list[WorldSummary])
async def list_worlds(state: ApiStateDep) -> list[WorldSummary]:
    worlds = await state.run(state.games.list_worlds)
    return [WorldSummary.model_validate(runtime.to_world_dict(world)) for world in worlds]


@router.post("/games", response_model=GameSummary, status_code=status.HTTP_201_CREATED)
async def new_game(request: NewGameRequest, state: ApiStateDep) -> GameSummary:
    def start() -> GameSummary:
        state.games.new_game(request.world_id, request.player_faction_id)
        return _game_summary(state)

    with domain_errors():
        return await state.run(start)


@router.get("/game", response_model=GameSummary)
async def get_game(state: ApiStateDep) -> GameSummary:
    with domain_errors():
        return await state.run(_game_summary, state)


@router.post("/game/turn", response_model=TurnReportResponse)
async def next_turn(state: ApiStateDep) -> TurnReportResponse:
    with domain_errors():
        report = await state.run(state.games.next_turn)
    return TurnReportResponse.model_validate(runtime.to_report_dict(report))


@router.post("/game/attack", response_model=AttackResponse)
async def attack_region(request: AttackRequest, state: ApiStateDep) -> AttackResponse:
    def attack() -> AttackResponse:
        result = state.games.player_attack_region(request.region_id)
        report = state.games.last_report()
        if report is None:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="attack finished without a turn report",
            )
        return AttackResponse(
            result=str(result),
            report=TurnReportResponse.model_validate(runtime.to_report_dict(report)),
        )

    with domain_errors():
        return await state.run(attack)


@router.post("/game/recruit", response_model=RecruitResponse)
async def recruit_units(request: RecruitRequest, state: ApiStateDep) -> RecruitResponse:
    def recruit() -> RecruitResponse:
        recruited = state.games.recruit_units(request.unit_id, request.amount)
        player = state.games.faction(state.games.game.player_faction_id)
        return RecruitResponse(recruited=recruited, wealth=player.wealth)

    with domain_errors():
        return await state.run(recruit)


@router.post("/game/holdings", response_model=BuildHoldingResponse)
async def build_holding(request: BuildHoldingRequest, state: ApiStateDep) -> BuildHoldingResponse:
    if request.type == HoldingType.EMPTY:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="cannot build an empty holding"
        )

    def build() -> BuildHoldingResponse:
        holding = state.games.build_holding(request.region_id, request.type)
        player = state.games.faction(state.games.game.player_faction_id)
        return BuildHoldingResponse(
            built=holding is not None,
            holding=(
                HoldingSummary.model_validate(runtime.to_holding_dict(holding))
                if holding is not None
                else None
            ),
            wealth=player.wealth,
        )

    with domain_errors():
        return await state.run(build)


@router.get("/game/events", response_model=list[EventSummary])
async def drain_events(state: ApiStateDep) -> list[EventSummary]:
    with domain_errors():
        events = await state.run(state.games.drain_events)
    return [EventSummary.model_validate(runtime.to_event_dict(event)) for event in events]


@router.get("/game/factions", response_model=list[FactionSummary])
async def list_factions(state: ApiStateDep) -> list[FactionSummary]:
    def read() -> list[FactionSummary]:
        return [
            FactionSummary.model_validate(runtime.to_faction_dict(faction))
            for faction in state.games.factions()
        ]

    with domain_errors():
        return await state.run(read)


@router.get("/game/factions/{faction_id}", response_model=FactionDetail)
async def get_faction(faction_id: str, state: ApiStateDep) -> FactionDetail:
    with domain_errors():
        overview = await state.run(state.games.faction_overview, faction_id)
    return FactionDetail.model_validate(overview)


@router.get("/game/factions/{faction_id}/armies", response_model=list[ArmySummary])
async def list_armies(faction_id: str, state: ApiStateDep) -> list[ArmySummary]:
    def read() -> list[ArmySummary]:
        return [
            ArmySummary.model_validate(runtime.to_army_dict(army))
            for army in state.games.faction_armies(faction_id)
        ]

    with domain_errors():
        return await state.run(read)


@router.get("/game/factions/{faction_id}/relations", response_model=list[RelationSummary])
async def list_relations(faction_id: str, state: ApiStateDep) -> list[RelationSummary]:
    def read() -> list[RelationSummary]:
        return [
            RelationSummary.model_validate(runtime.to_relation_dict(relation))
            for relation in state.games.faction_relations(faction_id)
        ]

    with domain_errors():
        return await state.run(read)


@router.get("/game/regions", response_model=list[RegionSummary])
async def list_regions(state: ApiStateDep) -> list[RegionSummary]:
    def read() -> list[RegionSummary]:
        return [
            RegionSummary.model_validate(runtime.to_region_dict(region))
            for region in state.games.regions()
        ]

    with domain_errors():
        return await state.run(read)


@router.get("/game/regions/{region_id}", response_model=RegionDetail)
async def get_region(region_id: str, state: ApiStateDep) -> RegionDetail:
    def read() -> RegionDetail:
        region = state.games.region(region_id)
        holdings = state.games.region_holdings(region_id)
        return RegionDetail.model_validate(
            {
                **runtime.to_region_dict(region),
                "holdings": [runtime.to_holding_dict(holding) for holding in holdings],
            }
        )

    with domain_errors():
        return await state.run(read)


@router.get("/game/tiles/{x}/{y}", response_model=TileOwner)
async def tile_owner(x: int, y: int, state: ApiStateDep) -> TileOwner:
    with domain_errors():
        try:
            faction_id = await state.run(state.games.faction_id_at, x, y)
        except IndexError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return TileOwner(x=x, y=y, faction_id=faction_id)


@router.get("/game/saves", response_model=list[str])
async def list_saves(state: ApiStateDep) -> list[str]:
    return await state.run(state.games.list_saves)


@router.post("/game/saves", status_code=status.HTTP_204_NO_CONTENT)
async def save_game(request: SaveRequest, state: ApiStateDep) -> None:
    with domain_errors():
        await state.run(state.games.save_game, request.slot)


@router.post("/game/saves/{slot}/load", response_model=GameSummary)
async def load_game(slot: str, state: ApiStateDep) -> GameSummary:
    def load() -> GameSummary:
        state.games.load_game(slot)
        return _game_summary(state)

    with domain_errors():
        try:
            return await state.run(load)
        except FileNotFoundError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=f"no save in slot {slot!r}"
            ) from exc
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.delete("/game/saves/{slot}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_save(slot: str, state: ApiStateDep) -> None:
    try:
        await state.run(state.games.delete_save, slot)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
