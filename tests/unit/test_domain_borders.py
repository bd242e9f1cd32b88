"""Tests for border sampling and the faction border index."""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from dominion.domain import models as dm
from dominion.domain.borders import (
    BORDER_WINDOW_RADIUS,
    BorderGraph,
    FactionBorderIndex,
    derive_borders,
)
from dominion.domain.tiles import TileGrid


def _grid(layout: list[str]) -> TileGrid:
    regions = [[dm.RegionID(f"reg_{char}") for char in row] for row in layout]
    biomes = [[dm.BiomeID("plains")] * len(row) for row in layout]
    return TileGrid(width=len(layout[0]), height=len(layout), regions=regions, biomes=biomes)


def _naive_factions_adjacent(
    graph_keys: list[dm.BorderKey],
    owners: dict[dm.RegionID, dm.FactionID],
    first: dm.FactionID,
    second: dm.FactionID,
) -> bool:
    if first == second:
        return False
    return any(
        {owners[r1], owners[r2]} == {first, second} for r1, r2 in graph_keys
    )


layouts = st.integers(min_value=1, max_value=14).flatmap(
    lambda width: st.lists(
        st.text(alphabet="abcd", min_size=width, max_size=width), min_size=1, max_size=14
    )
)


class TestDeriveBorders:
    def test_two_bands_share_one_border(self):
        layout = ["aaaaabbbbb"] * 10

        assert derive_borders(_grid(layout)) == [("reg_a", "reg_b")]

    def test_single_region_has_no_borders(self):
        assert derive_borders(_grid(["aaaa"] * 4)) == []

    def test_region_outside_every_sample_window_is_missed(self):
        layout = ["a" * 15] * 15
        layout[12] = "a" * 12 + "b" + "aa"

        assert derive_borders(_grid(layout)) == [("reg_a", "reg_b")]

        # samples sit at 0, 5 and 10; the last window ends at 12
        layout = ["a" * 15] * 15
        layout[14] = "a" * 14 + "b"

        assert derive_borders(_grid(layout)) == []

    def test_window_is_clipped_at_map_edges(self):
        layout = ["ab", "ab"]

        assert derive_borders(_grid(layout)) == [("reg_a", "reg_b")]

    @given(layout=layouts)
    @settings(max_examples=60, deadline=None)
    def test_borders_are_canonical_and_unique(self, layout):
        grid = _grid(layout)
        keys = derive_borders(grid)

        assert len(keys) == len(set(keys))
        for first, second in keys:
            assert first < second

        positions: dict[str, list[tuple[int, int]]] = {}
        for x, y, region_id in grid.iter_region_tiles():
            positions.setdefault(region_id, []).append((x, y))
        for first, second in keys:
            assert any(
                abs(ax - bx) <= BORDER_WINDOW_RADIUS and abs(ay - by) <= BORDER_WINDOW_RADIUS
                for ax, ay in positions[first]
                for bx, by in positions[second]
            )


class TestBorderGraph:
    def test_adjacency_is_symmetric_and_irreflexive(self):
        graph = BorderGraph([("reg_b", "reg_a"), ("reg_b", "reg_c")])

        assert len(graph) == 2
        assert graph.regions_adjacent(dm.RegionID("reg_a"), dm.RegionID("reg_b"))
        assert graph.regions_adjacent(dm.RegionID("reg_b"), dm.RegionID("reg_a"))
        assert not graph.regions_adjacent(dm.RegionID("reg_a"), dm.RegionID("reg_c"))
        assert not graph.regions_adjacent(dm.RegionID("reg_a"), dm.RegionID("reg_a"))
        assert graph.region_neighbours(dm.RegionID("reg_b")) == {"reg_a", "reg_c"}
        assert graph.region_neighbours(dm.RegionID("reg_x")) == frozenset()

    def test_accepts_border_records(self):
        graph = BorderGraph([dm.Border(dm.RegionID("reg_a"), dm.RegionID("reg_b"))])

        assert graph.regions_adjacent(dm.RegionID("reg_b"), dm.RegionID("reg_a"))

    def test_region_adjacency_ignores_ownership_changes(self):
        graph = BorderGraph([("reg_a", "reg_b")])
        index = FactionBorderIndex(graph, {"reg_a": "north", "reg_b": "south"})
        before = graph.regions_adjacent(dm.RegionID("reg_a"), dm.RegionID("reg_b"))

        index.transfer(dm.RegionID("reg_b"), dm.FactionID("north"))

        assert graph.regions_adjacent(dm.RegionID("reg_a"), dm.RegionID("reg_b")) == before


class TestFactionBorderIndex:
    def test_adjacency_follows_transfers(self):
        # a - b - c in a row
        graph = BorderGraph([("reg_a", "reg_b"), ("reg_b", "reg_c")])
        index = FactionBorderIndex(
            graph, {"reg_a": "north", "reg_b": "middle", "reg_c": "south"}
        )

        assert index.factions_adjacent(dm.FactionID("north"), dm.FactionID("middle"))
        assert not index.factions_adjacent(dm.FactionID("north"), dm.FactionID("south"))
        assert not index.factions_adjacent(dm.FactionID("north"), dm.FactionID("north"))

        index.transfer(dm.RegionID("reg_b"), dm.FactionID("north"))

        assert index.factions_adjacent(dm.FactionID("north"), dm.FactionID("south"))
        assert not index.factions_adjacent(dm.FactionID("north"), dm.FactionID("middle"))
        assert index.faction_neighbours(dm.FactionID("north")) == {"south"}
        assert index.faction_neighbours(dm.FactionID("middle")) == set()
        assert index.owner_of(dm.RegionID("reg_b")) == "north"

    def test_faction_adjacent_to_region(self):
        graph = BorderGraph([("reg_a", "reg_b"), ("reg_b", "reg_c")])
        index = FactionBorderIndex(
            graph, {"reg_a": "north", "reg_b": "middle", "reg_c": "south"}
        )

        assert index.faction_adjacent_to_region(dm.FactionID("north"), dm.RegionID("reg_b"))
        assert not index.faction_adjacent_to_region(dm.FactionID("north"), dm.RegionID("reg_c"))

    def test_transfer_to_current_owner_is_a_no_op(self):
        graph = BorderGraph([("reg_a", "reg_b")])
        index = FactionBorderIndex(graph, {"reg_a": "north", "reg_b": "south"})

        index.transfer(dm.RegionID("reg_a"), dm.FactionID("north"))

        assert index.factions_adjacent(dm.FactionID("north"), dm.FactionID("south"))

    @given(
        layout=layouts,
        owner_seed=st.lists(st.sampled_from(["north", "south", "east"]), min_size=4, max_size=4),
        transfers=st.lists(
            st.tuples(st.sampled_from("abcd"), st.sampled_from(["north", "south", "east"])),
            max_size=12,
        ),
    )
    @settings(max_examples=60, deadline=None)
    def test_index_matches_full_scan_after_transfers(self, layout, owner_seed, transfers):
        grid = _grid(layout)
        keys = derive_borders(grid)
        graph = BorderGraph(keys)
        present = sorted({region_id for _, _, region_id in grid.iter_region_tiles()})
        owners = {
            region_id: dm.FactionID(owner_seed["abcd".index(region_id[-1])])
            for region_id in present
        }
        index = FactionBorderIndex(graph, owners)

        for char, faction in transfers:
            region_id = dm.RegionID(f"reg_{char}")
            if region_id in owners:
                owners[region_id] = dm.FactionID(faction)
                index.transfer(region_id, dm.FactionID(faction))

        for first in ("north", "south", "east"):
            for second in ("north", "south", "east"):
                assert index.factions_adjacent(
                    dm.FactionID(first), dm.FactionID(second)
                ) == _naive_factions_adjacent(keys, owners, first, second)
