from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    host_connected: bool = Field(alias="hostConnected")
    clients: list[str]
