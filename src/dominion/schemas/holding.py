from pydantic import BaseModel, Field

from dominion.domain import models as dm
from dominion.domain.enums import HoldingType


class HoldingEntity(BaseModel):
    id: str = Field(..., min_length=3, max_length=40, description="Unique holding identifier")
    name: str = Field(..., min_length=1, max_length=40, description="Display name")
    description: str = Field("", max_length=300, description="Flavour text")
    region_id: str = Field(..., description="Foreign key to region")
    type: HoldingType = Field(HoldingType.EMPTY, description="Empty slot or developed site")

    def to_domain(self) -> dm.Holding:
        return dm.Holding(
            id=dm.HoldingID(self.id),
            name=self.name,
            region_id=dm.RegionID(self.region_id),
            type=self.type,
            description=self.description,
        )
