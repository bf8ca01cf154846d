"""Pydantic models for search requests and responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SearchParams(BaseModel):
    """Optional knobs of a search call.

    Attribute subsets accept either a single attribute name or a list of names.
    Fields are addressed in snake_case in Python and serialized under their
    camelCase wire name.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    offset: int | None = None
    limit: int | None = None
    attributes_to_retrieve: str | list[str] | None = Field(default=None, alias="attributesToRetrieve")
    attributes_to_search_in: str | list[str] | None = Field(default=None, alias="attributesToSearchIn")
    attributes_to_crop: str | list[str] | None = Field(default=None, alias="attributesToCrop")
    crop_length: int | None = Field(default=None, alias="cropLength")
    attributes_to_highlight: str | list[str] | None = Field(default=None, alias="attributesToHighlight")
    filters: str | None = None
    timeout_ms: int | None = Field(default=None, alias="timeoutMs")
    matches: bool | None = None


class SearchResponse(BaseModel):
    """Response of the search endpoint. Unknown keys are kept as-is."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    hits: list[dict[str, Any]] = []
    offset: int | None = None
    limit: int | None = None
    nb_hits: int | None = Field(default=None, alias="nbHits")
    exhaustive_nb_hits: bool | None = Field(default=None, alias="exhaustiveNbHits")
    processing_time_ms: int | None = Field(default=None, alias="processingTimeMs")
    query: str | None = None
