from pydantic import BaseModel, Field

from dominion.domain import models as dm


class WorldEntity(BaseModel):
    id: str = Field(..., min_length=3, max_length=40, description="Unique world identifier")
    name: str = Field(..., min_length=3, max_length=40, description="Display name")
    description: str = Field("", max_length=300, description="Flavour text")
    author: str = Field("", max_length=40, description="Author credit")
    version: str = Field("1.0", min_length=1, max_length=10, description="Content version")
    width: int = Field(..., gt=0, description="Map width in tiles")
    height: int = Field(..., gt=0, description="Map height in tiles")
    base_region_income: int = Field(..., ge=0)
    base_region_recruitment: int = Field(..., ge=0)
    base_faction_recruitment: int = Field(..., ge=0)
    min_troops_per_attack: int = Field(..., ge=0)
    holding_slots_per_faction: int = Field(..., ge=0)
    starting_wealth: int = Field(..., ge=0)
    starting_troops: int = Field(..., ge=0)
    holdings_price: int = Field(0, ge=0)

    def to_domain(self) -> dm.World:
        return dm.World(
            id=dm.WorldID(self.id),
            name=self.name,
            width=self.width,
            height=self.height,
            base_region_income=self.base_region_income,
            base_region_recruitment=self.base_region_recruitment,
            base_faction_recruitment=self.base_faction_recruitment,
            min_troops_per_attack=self.min_troops_per_attack,
            starting_wealth=self.starting_wealth,
            starting_troops=self.starting_troops,
            holding_slots_per_faction=self.holding_slots_per_faction,
            holdings_price=self.holdings_price,
            description=self.description,
            author=self.author,
            version=self.version,
        )
