"""Pydantic models for asynchronous updates."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AsyncUpdateId(BaseModel):
    """Handle of an update enqueued by the service.

    The service applies document and settings mutations asynchronously; this id
    is the only way to look up the outcome through the updates endpoints.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    update_id: int = Field(alias="updateId")


class UpdateStatus(BaseModel):
    """
    Status of one update, as returned by the updates endpoints.

    Attributes:
        status (str): "enqueued", "processed" or "failed".
        update_id (int): Id of the update.
        type (Any): Kind of update. The service reports either a name or an object with details.
        duration (float | None): Processing duration in seconds, once processed.
        enqueued_at (str | None): ISO-8601 enqueue timestamp.
        processed_at (str | None): ISO-8601 processing timestamp, once processed.
        error (str | None): Error message of a failed update.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    status: str
    update_id: int = Field(alias="updateId")
    type: Any = None
    duration: float | None = None
    enqueued_at: str | None = Field(default=None, alias="enqueuedAt")
    processed_at: str | None = Field(default=None, alias="processedAt")
    error: str | None = None
