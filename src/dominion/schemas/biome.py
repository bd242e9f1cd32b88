from pydantic import BaseModel, Field

from dominion.domain import models as dm


class BiomeEntity(BaseModel):
    id: str = Field(..., min_length=3, max_length=40, description="Unique biome identifier")
    name: str = Field(..., min_length=3, max_length=20, description="Display name")
    description: str = Field("", max_length=300, description="Flavour text")
    colour: str = Field(..., description="Colour painted on the biome map, e.g. #2e8b57")

    def to_domain(self) -> dm.Biome:
        return dm.Biome(
            id=dm.BiomeID(self.id),
            name=self.name,
            colour=self.colour,
            description=self.description,
        )
