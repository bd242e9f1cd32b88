from pydantic import BaseModel, Field

from dominion.domain import models as dm


class ResourceEntity(BaseModel):
    id: str = Field(..., min_length=3, max_length=40, description="Unique resource identifier")
    name: str = Field(..., min_length=3, max_length=20, description="Display name")
    description: str = Field("", max_length=300, description="Flavour text")

    def to_domain(self) -> dm.Resource:
        return dm.Resource(
            id=dm.ResourceID(self.id),
            name=self.name,
            description=self.description,
        )
