# src/jolokia_api_server/models.py

from pydantic import BaseModel, ConfigDict, Field


# --- Pydantic Models for Responses ---
class StatusMessage(BaseModel):
    status: str
    message: str


class LoginResponse(StatusMessage):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="jolokia-session-id")


class ApiInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = "Jolokia API Server"
    status: str = "successful"
    api_version: str = Field(default="v1", alias="jolokia-api-version")
    plugin_name: str = Field(alias="plugin-name")
    plugin_version: str = Field(alias="plugin-version")


class Broker(BaseModel):
    name: str
