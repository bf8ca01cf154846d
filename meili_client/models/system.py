"""Pydantic models for process-level endpoints (keys, stats, version)."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Keys(BaseModel):
    model_config = ConfigDict(extra="allow")

    private: str | None = None
    public: str | None = None


class Version(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    commit_sha: str | None = Field(default=None, alias="commitSha")
    build_date: str | None = Field(default=None, alias="buildDate")
    pkg_version: str | None = Field(default=None, alias="pkgVersion")


class IndexStats(BaseModel):
    """Statistics of a single index."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    number_of_documents: int | None = Field(default=None, alias="numberOfDocuments")
    is_indexing: bool | None = Field(default=None, alias="isIndexing")
    fields_frequency: dict[str, int] = Field(default_factory=dict, alias="fieldsFrequency")


class Stats(BaseModel):
    """Statistics of the whole database, keyed by index uid."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    database_size: int | None = Field(default=None, alias="databaseSize")
    last_update: str | None = Field(default=None, alias="lastUpdate")
    indexes: dict[str, Any] = {}
