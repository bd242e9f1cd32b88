from pydantic import BaseModel, Field

from dominion.domain import models as dm


class CultureEntity(BaseModel):
    id: str = Field(..., min_length=3, max_length=40, description="Unique culture identifier")
    name: str = Field(..., min_length=3, max_length=20, description="Display name")
    description: str = Field("", max_length=300, description="Flavour text")
    place_names: list[str] = Field(default_factory=list, description="Sample place names")

    def to_domain(self) -> dm.Culture:
        return dm.Culture(
            id=dm.CultureID(self.id),
            name=self.name,
            description=self.description,
            place_names=list(self.place_names),
        )
