from dominion.domain.enums import EntityCategory

from .biome import BiomeEntity
from .culture import CultureEntity
from .faction import FactionEntity
from .holding import HoldingEntity
from .region import RegionEntity
from .resource import ResourceEntity
from .unit import UnitEntity
from .world import WorldEntity

ENTITY_SCHEMAS = {
    EntityCategory.BIOME: BiomeEntity,
    EntityCategory.CULTURE: CultureEntity,
    EntityCategory.FACTION: FactionEntity,
    EntityCategory.HOLDING: HoldingEntity,
    EntityCategory.REGION: RegionEntity,
    EntityCategory.RESOURCE: ResourceEntity,
    EntityCategory.UNIT: UnitEntity,
}

__all__ = [
    "ENTITY_SCHEMAS",
    "BiomeEntity",
    "CultureEntity",
    "FactionEntity",
    "HoldingEntity",
    "RegionEntity",
    "ResourceEntity",
    "UnitEntity",
    "WorldEntity",
]
