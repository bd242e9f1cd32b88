from pydantic import BaseModel, Field

from dominion.domain import models as dm
from dominion.domain.enums import RegionType


class RegionEntity(BaseModel):
    id: str = Field(..., min_length=3, max_length=40, description="Unique region identifier")
    name: str = Field(..., min_length=3, max_length=40, description="Display name")
    description: str = Field("", max_length=300, description="Flavour text")
    colour: str = Field(..., description="Colour painted on the region map")
    faction_id: str = Field(..., description="Faction occupying the region at game start")
    sovereign_faction_id: str | None = Field(
        None, description="Rightful owner; defaults to the starting occupier"
    )
    type: RegionType = Field(RegionType.ORDINARY, description="Capital or ordinary region")

    def to_domain(self) -> dm.Region:
        return dm.Region(
            id=dm.RegionID(self.id),
            name=self.name,
            colour=self.colour,
            faction_id=dm.FactionID(self.faction_id),
            sovereign_faction_id=dm.FactionID(self.sovereign_faction_id or self.faction_id),
            type=self.type,
            description=self.description,
        )
