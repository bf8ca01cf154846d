"""Pydantic models for index lifecycle requests and responses."""

from pydantic import BaseModel, ConfigDict, Field


class CreateIndexRequest(BaseModel):
    """Body of an index creation. Only the fields set by the caller are sent."""

    model_config = ConfigDict(populate_by_name=True)

    uid: str
    name: str | None = None
    primary_key: str | None = Field(default=None, alias="primaryKey")


class UpdateIndexRequest(BaseModel):
    """Body of an index update. Only the fields set by the caller are sent."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    primary_key: str | None = Field(default=None, alias="primaryKey")


class IndexInfo(BaseModel):
    """
    Metadata of one index, as returned by the service.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    uid: str
    name: str | None = None
    created_at: str | None = Field(default=None, alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")
    primary_key: str | None = Field(default=None, alias="primaryKey")
