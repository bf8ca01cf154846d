"""Normalization of option objects into wire query parameters.

The service has no notion of array query parameters: every list-valued option
travels as one comma-joined string. An option is sent when it is not None, so
``offset=0`` reaches the service. Empty lists are dropped.
"""

from typing import Any, Mapping, TypeVar

from pydantic import BaseModel

from meili_client.models.documents import AddDocumentParams, GetDocumentsParams
from meili_client.models.search import SearchParams

M = TypeVar("M", bound=BaseModel)

# wire names of list-valued options
LIST_PARAMS = frozenset({
    "attributesToRetrieve",
    "attributesToSearchIn",
    "attributesToCrop",
    "attributesToHighlight",
})


def join_list_param(value: str | list[str] | tuple[str, ...]) -> str:
    """Join a list option into its comma-separated wire value. A scalar counts as a one-element list.

    Args:
        value (str | list[str] | tuple[str, ...]): One attribute name or several.

    Returns:
        str: The comma-joined attribute names.
    """
    values = [value] if isinstance(value, str) else list(value)
    return ",".join(str(v) for v in values)


def coerce_params(params: M | Mapping[str, Any] | None, model: type[M]) -> M:
    """
    Accepts an options model, a plain mapping (snake_case or wire names) or None.

    Raises:
        ValueError: If the mapping contains unknown keys or values of the wrong type.
    """
    if params is None:
        return model()
    if isinstance(params, model):
        return params
    if isinstance(params, Mapping):
        return model.model_validate(dict(params))
    raise ValueError(f"Expected {model.__name__} or a mapping, got {type(params).__name__}.")


def to_query_params(params: BaseModel) -> dict[str, Any]:
    """
    Turns an options model into query parameters keyed by wire name, in field declaration order.

    Args:
        params (BaseModel): A validated options model.

    Returns:
        dict[str, Any]: Only the options that are present, list options comma-joined.
    """
    query: dict[str, Any] = {}
    for wire_name, value in params.model_dump(by_alias=True).items():
        if value is None:
            continue
        if wire_name in LIST_PARAMS:
            if isinstance(value, (list, tuple)) and not value:
                continue
            value = join_list_param(value)
        query[wire_name] = value
    return query


def build_search_params(query: str, options: SearchParams | Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Build the query string of a search call.

    Args:
        query (str): Free-text query, always sent as ``q``.
        options (SearchParams | Mapping[str, Any] | None): Optional search knobs.

    Returns:
        dict[str, Any]: ``{"q": query}`` followed by every present option under its wire name.
    """
    params: dict[str, Any] = {"q": query}
    params.update(to_query_params(coerce_params(options, SearchParams)))
    return params


def build_documents_params(options: GetDocumentsParams | Mapping[str, Any] | None = None) -> dict[str, Any]:
    return to_query_params(coerce_params(options, GetDocumentsParams))


def build_add_documents_params(primary_key: str | None = None) -> dict[str, Any]:
    return to_query_params(AddDocumentParams(primary_key=primary_key))
