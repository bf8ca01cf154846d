"""Pydantic models for document listing and ingestion options."""

from pydantic import BaseModel, ConfigDict, Field


class GetDocumentsParams(BaseModel):
    """Paging and projection options of a document listing."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    offset: int | None = None
    limit: int | None = None
    attributes_to_retrieve: str | list[str] | None = Field(default=None, alias="attributesToRetrieve")


class AddDocumentParams(BaseModel):
    """Query options of an add/update documents call.

    Attributes:
        primary_key (str | None): Primary key hint for an index that does not have one yet.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    primary_key: str | None = Field(default=None, alias="primaryKey")
