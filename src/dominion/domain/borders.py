"""Region and faction adjacency derived from the tile grid.

Borders are discovered by sampling: every ``BORDER_SAMPLE_STRIDE``-th cell
on both axes is compared against the cells of a square window around it.
Adjacencies thinner than the stride can be missed; the resulting sparse
graph is what the game is balanced around, so the sampling must not be
turned into exhaustive boundary tracing.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Iterable, Mapping

from .models import Border, BorderKey, FactionID, RegionID, border_key
from .tiles import TileGrid

BORDER_SAMPLE_STRIDE = 5
BORDER_WINDOW_RADIUS = 2

FactionPair = tuple[FactionID, FactionID]


def derive_borders(tiles: TileGrid) -> list[BorderKey]:
    """Return the canonical border keys found on the grid, in discovery order."""

    found: dict[BorderKey, None] = {}
    radius = BORDER_WINDOW_RADIUS
    for x in range(0, tiles.width, BORDER_SAMPLE_STRIDE):
        for y in range(0, tiles.height, BORDER_SAMPLE_STRIDE):
            origin = tiles.region_at(x, y)
            for nx in range(max(0, x - radius), min(tiles.width, x + radius + 1)):
                for ny in range(max(0, y - radius), min(tiles.height, y + radius + 1)):
                    other = tiles.region_at(nx, ny)
                    if other != origin:
                        found.setdefault(border_key(origin, other), None)
    return list(found)


class BorderGraph:
    """Immutable region adjacency built once per world."""

    def __init__(self, borders: Iterable[Border | BorderKey]) -> None:
        self._neighbours: dict[RegionID, set[RegionID]] = defaultdict(set)
        self._keys: set[BorderKey] = set()
        for border in borders:
            key = border.key if isinstance(border, Border) else border_key(*border)
            self._keys.add(key)
            self._neighbours[key[0]].add(key[1])
            self._neighbours[key[1]].add(key[0])

    def __len__(self) -> int:
        return len(self._keys)

    def regions_adjacent(self, region1_id: RegionID, region2_id: RegionID) -> bool:
        if region1_id == region2_id:
            return False
        return border_key(region1_id, region2_id) in self._keys

    def region_neighbours(self, region_id: RegionID) -> frozenset[RegionID]:
        return frozenset(self._neighbours.get(region_id, ()))


def faction_pair(faction1_id: FactionID, faction2_id: FactionID) -> FactionPair:
    if faction1_id <= faction2_id:
        return (faction1_id, faction2_id)
    return (faction2_id, faction1_id)


class FactionBorderIndex:
    """Faction adjacency maintained alongside region ownership.

    Each region border whose two sides belong to different factions counts
    once towards that faction pair.  Ownership transfers adjust only the
    borders of the transferred region, so queries never rescan the map.
    """

    def __init__(self, graph: BorderGraph, owners: Mapping[RegionID, FactionID]) -> None:
        self._graph = graph
        self._owners: dict[RegionID, FactionID] = dict(owners)
        self._counts: Counter[FactionPair] = Counter()
        for region_id, owner in self._owners.items():
            for neighbour in graph.region_neighbours(region_id):
                other = self._owners.get(neighbour)
                # each undirected border is visited from both ends; count it once
                if other is not None and other != owner and region_id < neighbour:
                    self._counts[faction_pair(owner, other)] += 1

    def owner_of(self, region_id: RegionID) -> FactionID | None:
        return self._owners.get(region_id)

    def factions_adjacent(self, faction1_id: FactionID, faction2_id: FactionID) -> bool:
        if faction1_id == faction2_id:
            return False
        return self._counts[faction_pair(faction1_id, faction2_id)] > 0

    def faction_adjacent_to_region(self, faction_id: FactionID, region_id: RegionID) -> bool:
        """Whether any region occupied by ``faction_id`` borders ``region_id``."""

        return any(
            self._owners.get(neighbour) == faction_id
            for neighbour in self._graph.region_neighbours(region_id)
        )

    def faction_neighbours(self, faction_id: FactionID) -> set[FactionID]:
        neighbours: set[FactionID] = set()
        for (first, second), count in self._counts.items():
            if count <= 0:
                continue
            if first == faction_id:
                neighbours.add(second)
            elif second == faction_id:
                neighbours.add(first)
        return neighbours

    def transfer(self, region_id: RegionID, new_owner: FactionID) -> None:
        """Move ``region_id`` to ``new_owner`` and update the pair counts."""

        old_owner = self._owners.get(region_id)
        if old_owner == new_owner:
            return
        for neighbour in self._graph.region_neighbours(region_id):
            other = self._owners.get(neighbour)
            if other is None:
                continue
            if old_owner is not None and other != old_owner:
                pair = faction_pair(old_owner, other)
                self._counts[pair] -= 1
                if self._counts[pair] <= 0:
                    del self._counts[pair]
            if other != new_owner:
                self._counts[faction_pair(new_owner, other)] += 1
        self._owners[region_id] = new_owner
