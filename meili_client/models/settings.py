"""Settings of an index and the registry of its independently managed concerns.

Every concern is reachable through its own sub-path below
``/indexes/{uid}/settings`` and supports get (GET), update (POST) and reset
(DELETE). The update semantics differ per concern and are declared explicitly:

  MERGE:      keys missing from the update body are left unchanged by the service.
  OVERWRITE:  the body replaces the stored value wholesale.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class UpdateMode(str, Enum):
    MERGE = "merge"
    OVERWRITE = "overwrite"


class SettingsConcern(BaseModel):
    """One settings facet of an index.

    Attributes:
        name (str): Python name of the concern (e.g. "stop_words").
        path (str): Sub-path below the settings endpoint ("" for the full bundle).
        mode (UpdateMode): Server-side semantics of an update.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    path: str
    mode: UpdateMode


SETTINGS_CONCERNS: dict[str, SettingsConcern] = {
    concern.name: concern
    for concern in (
        SettingsConcern(name="settings", path="", mode=UpdateMode.MERGE),
        SettingsConcern(name="synonyms", path="synonyms", mode=UpdateMode.OVERWRITE),
        SettingsConcern(name="stop_words", path="stop-words", mode=UpdateMode.OVERWRITE),
        SettingsConcern(name="ranking_rules", path="ranking-rules", mode=UpdateMode.OVERWRITE),
        SettingsConcern(name="distinct_attribute", path="distinct-attribute", mode=UpdateMode.OVERWRITE),
        SettingsConcern(name="searchable_attributes", path="searchable-attributes", mode=UpdateMode.OVERWRITE),
        SettingsConcern(name="displayed_attributes", path="displayed-attributes", mode=UpdateMode.OVERWRITE),
        SettingsConcern(name="accept_new_fields", path="accept-new-fields", mode=UpdateMode.OVERWRITE),
    )
}


def get_concern(concern: str | SettingsConcern) -> SettingsConcern:
    """
    Resolves a concern by name.

    Args:
        concern (str | SettingsConcern): Concern name, its wire path, or the concern itself.

    Returns:
        SettingsConcern: The registered concern.

    Raises:
        ValueError: If no concern with that name is registered.
    """
    if isinstance(concern, SettingsConcern):
        return concern
    key = concern.strip().replace("-", "_")
    if key in SETTINGS_CONCERNS:
        return SETTINGS_CONCERNS[key]
    raise ValueError(f"Unknown settings concern '{concern}'. Known concerns: {', '.join(SETTINGS_CONCERNS)}.")


class Settings(BaseModel):
    """
    Full settings bundle of an index.

    On update only the fields the caller set are serialized, so the service
    leaves every other concern untouched.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    ranking_rules: list[str] | None = Field(default=None, alias="rankingRules")
    distinct_attribute: str | None = Field(default=None, alias="distinctAttribute")
    searchable_attributes: list[str] | None = Field(default=None, alias="searchableAttributes")
    displayed_attributes: list[str] | None = Field(default=None, alias="displayedAttributes")
    stop_words: list[str] | None = Field(default=None, alias="stopWords")
    synonyms: dict[str, list[str]] | None = None
    accept_new_fields: bool | None = Field(default=None, alias="acceptNewFields")
