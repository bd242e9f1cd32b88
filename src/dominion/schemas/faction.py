from pydantic import BaseModel, Field

from dominion.domain import models as dm


class FactionEntity(BaseModel):
    id: str = Field(..., min_length=3, max_length=40, description="Unique faction identifier")
    name: str = Field(..., min_length=3, max_length=40, description="Display name")
    description: str = Field("", max_length=300, description="Flavour text")
    colour: str = Field(..., description="Hex color code for map display")
    culture_id: str = Field(..., description="Foreign key to culture")

    def to_domain(self) -> dm.Faction:
        return dm.Faction(
            id=dm.FactionID(self.id),
            name=self.name,
            colour=self.colour,
            culture_id=dm.CultureID(self.culture_id),
            description=self.description,
        )
