from pydantic import BaseModel, ConfigDict, Field

from worldbench.schema import World


class WorldResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    random_number: int = Field(..., alias="randomNumber")

    @classmethod
    def from_world(cls, world: World) -> "WorldResponse":
        return cls(id=world.id, random_number=world.random_number)


class HealthResponse(BaseModel):
    status: str
    db_connected: bool
    world_count: int
    uptime_seconds: float
