from pydantic import BaseModel, Field

from dominion.domain import models as dm
from dominion.domain.enums import UnitType


class UnitEntity(BaseModel):
    id: str = Field(..., min_length=3, max_length=40, description="Unique unit identifier")
    name: str = Field(..., min_length=3, max_length=20, description="Display name")
    description: str = Field("", max_length=300, description="Flavour text")
    type: UnitType = Field(UnitType.INFANTRY, description="Troop category")
    power: int = Field(..., ge=0, description="Combat power per troop")
    health: int = Field(..., ge=0, description="Durability per troop")
    price: int = Field(..., ge=0, description="Wealth paid per recruited troop")
    maintenance: int = Field(..., ge=0, description="Upkeep per troop per turn")

    def to_domain(self) -> dm.Unit:
        return dm.Unit(
            id=dm.UnitID(self.id),
            name=self.name,
            power=self.power,
            health=self.health,
            price=self.price,
            maintenance=self.maintenance,
            type=self.type,
            description=self.description,
        )
