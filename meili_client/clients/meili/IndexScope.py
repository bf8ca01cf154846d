from typing import Any, Mapping
from urllib.parse import quote

from meili_client.clients.CancellationToken import CancellationToken
from meili_client.clients.Transport import Transport
from meili_client.helper.HelperParams import build_add_documents_params, build_documents_params, build_search_params
from meili_client.models.documents import GetDocumentsParams
from meili_client.models.indexes import IndexInfo, UpdateIndexRequest
from meili_client.models.search import SearchParams, SearchResponse
from meili_client.models.settings import Settings, SettingsConcern, get_concern
from meili_client.models.system import IndexStats
from meili_client.models.updates import AsyncUpdateId, UpdateStatus


class IndexScope:
    """All operations scoped to one index.

    The scope references the transport of the client it was obtained from and
    never owns it: closing the client makes the scope unusable. Construction
    sends no request.

    Searches are bound to the scope's cancellation token. :meth:`cancel_search`
    aborts every search of this scope that has not completed yet, and nothing
    else.
    """

    def __init__(self, transport: Transport, index_uid: str):
        self._transport = transport
        self.index_uid = index_uid
        self.cancel_token = CancellationToken()

    def __repr__(self) -> str:
        return f"IndexScope(index_uid={self.index_uid!r})"

    ##########################################
    ############### ENDPOINTS ################
    ##########################################

    def _get_endpoint_index(self) -> str:
        return f"/indexes/{quote(str(self.index_uid), safe='')}"

    def _get_endpoint_search(self) -> str:
        return f"{self._get_endpoint_index()}/search"

    def _get_endpoint_stats(self) -> str:
        return f"{self._get_endpoint_index()}/stats"

    def _get_endpoint_documents(self) -> str:
        return f"{self._get_endpoint_index()}/documents"

    def _get_endpoint_document(self, document_id: str | int) -> str:
        return f"{self._get_endpoint_documents()}/{quote(str(document_id), safe='')}"

    def _get_endpoint_delete_batch(self) -> str:
        return f"{self._get_endpoint_documents()}/delete-batch"

    def _get_endpoint_updates(self) -> str:
        return f"{self._get_endpoint_index()}/updates"

    def _get_endpoint_update(self, update_id: int) -> str:
        return f"{self._get_endpoint_updates()}/{update_id}"

    def _get_endpoint_settings(self, concern: SettingsConcern) -> str:
        path = f"{self._get_endpoint_index()}/settings"
        return f"{path}/{concern.path}" if concern.path else path

    ##########################################
    ################ UPDATES #################
    ##########################################

    async def get_update_status(self, update_id: int) -> UpdateStatus:
        """
        Get the status of one update. Polling until it is processed is up to the caller.

        Args:
            update_id (int): The id returned by a mutating call.
        """
        response = await self._transport.request(method="GET", endpoint=self._get_endpoint_update(update_id))
        return UpdateStatus.model_validate(response)

    async def get_all_update_status(self) -> list[UpdateStatus]:
        response = await self._transport.request(method="GET", endpoint=self._get_endpoint_updates())
        return [UpdateStatus.model_validate(item) for item in response or []]

    ##########################################
    ################ SEARCH ##################
    ##########################################

    async def search(self, query: str, params: SearchParams | Mapping[str, Any] | None = None) -> SearchResponse:
        """Search for documents of the index.

        Args:
            query (str): Free-text query.
            params (SearchParams | Mapping[str, Any] | None): Optional knobs. List options may be given as one
                name or a list of names; absent options are not sent.

        Returns:
            SearchResponse: The decoded search response.

        Raises:
            MeiliCancelledError: If the scope's token is cancelled before the response arrives.
            MeiliApiError: If the service rejects the search.
            ValueError: If ``params`` holds unknown options.
        """
        query_params = build_search_params(query, params)
        token = self.cancel_token
        token.raise_if_cancelled()
        response = await token.run(
            self._transport.request(method="GET", endpoint=self._get_endpoint_search(), params=query_params)
        )
        return SearchResponse.model_validate(response)

    def cancel_search(self, reason: str | None = None) -> None:
        """Abort every pending search of this scope. Later searches fail too until :meth:`reset_cancel_token`."""
        self.cancel_token.cancel(reason)

    def reset_cancel_token(self) -> CancellationToken:
        """
        Install a fresh token for future searches. Searches already bound to the old token keep it.

        Returns:
            CancellationToken: The new token.
        """
        self.cancel_token = CancellationToken()
        return self.cancel_token

    ##########################################
    ################# INDEX ##################
    ##########################################

    async def show(self) -> IndexInfo:
        """Show index information."""
        response = await self._transport.request(method="GET", endpoint=self._get_endpoint_index())
        return IndexInfo.model_validate(response)

    async def update_index(self, data: UpdateIndexRequest | dict) -> IndexInfo:
        response = await self._transport.request(method="PUT", endpoint=self._get_endpoint_index(), body=data)
        return IndexInfo.model_validate(response)

    async def delete_index(self) -> None:
        """Delete the index. The scope stays usable; later calls fail on the service side."""
        await self._transport.request(method="DELETE", endpoint=self._get_endpoint_index())

    async def get_stats(self) -> IndexStats:
        response = await self._transport.request(method="GET", endpoint=self._get_endpoint_stats())
        return IndexStats.model_validate(response)

    ##########################################
    ############### DOCUMENTS ################
    ##########################################

    async def get_documents(self, params: GetDocumentsParams | Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        """
        List documents of the index.

        Args:
            params (GetDocumentsParams | Mapping[str, Any] | None): offset, limit and the attributes to retrieve.

        Returns:
            list[dict[str, Any]]: The documents, projected to the requested attributes.
        """
        return await self._transport.request(
            method="GET",
            endpoint=self._get_endpoint_documents(),
            params=build_documents_params(params),
        )

    async def get_document(self, document_id: str | int) -> dict[str, Any]:
        return await self._transport.request(method="GET", endpoint=self._get_endpoint_document(document_id))

    async def add_documents(self, documents: list[dict[str, Any]], primary_key: str | None = None) -> AsyncUpdateId:
        """
        Add or replace documents. Documents sharing a primary key value with stored ones replace them.

        Args:
            documents (list[dict[str, Any]]): The documents to add.
            primary_key (str | None): Primary key hint for an index that has none yet.

        Returns:
            AsyncUpdateId: Handle of the enqueued update.
        """
        response = await self._transport.request(
            method="POST",
            endpoint=self._get_endpoint_documents(),
            body=documents,
            params=build_add_documents_params(primary_key),
        )
        return AsyncUpdateId.model_validate(response)

    async def update_documents(self, documents: list[dict[str, Any]], primary_key: str | None = None) -> AsyncUpdateId:
        """
        Add or update documents. Fields missing from a sent document are kept on the stored one.
        """
        response = await self._transport.request(
            method="PUT",
            endpoint=self._get_endpoint_documents(),
            body=documents,
            params=build_add_documents_params(primary_key),
        )
        return AsyncUpdateId.model_validate(response)

    async def delete_document(self, document_id: str | int) -> AsyncUpdateId:
        response = await self._transport.request(method="DELETE", endpoint=self._get_endpoint_document(document_id))
        return AsyncUpdateId.model_validate(response)

    async def delete_documents(self, document_ids: list[str] | list[int]) -> AsyncUpdateId:
        """
        Delete several documents at once.

        Args:
            document_ids (list[str] | list[int]): Primary key values of the documents to delete.
        """
        response = await self._transport.request(
            method="POST",
            endpoint=self._get_endpoint_delete_batch(),
            body=list(document_ids),
        )
        return AsyncUpdateId.model_validate(response)

    async def delete_all_documents(self) -> AsyncUpdateId:
        response = await self._transport.request(method="DELETE", endpoint=self._get_endpoint_documents())
        return AsyncUpdateId.model_validate(response)

    ##########################################
    ############### SETTINGS #################
    ##########################################

    ################ GENERIC ##################
    async def get_setting(self, concern: str | SettingsConcern) -> Any:
        """
        Read one settings concern.

        Args:
            concern (str | SettingsConcern): Concern name, e.g. "stop_words", or "settings" for the full bundle.

        Raises:
            ValueError: If the concern is unknown.
        """
        concern = get_concern(concern)
        response = await self._transport.request(method="GET", endpoint=self._get_endpoint_settings(concern))
        if concern.name == "settings":
            return Settings.model_validate(response)
        return response

    async def update_setting(self, concern: str | SettingsConcern, value: Any) -> AsyncUpdateId:
        """
        Update one settings concern.

        The full bundle is merged by the service (only the keys sent change); every
        other concern is overwritten by ``value``. No merge happens on the client.

        Args:
            concern (str | SettingsConcern): Concern name.
            value (Any): New value. For the bundle, a Settings model or a mapping of the keys to change.

        Raises:
            ValueError: If the concern is unknown.
        """
        concern = get_concern(concern)
        if concern.name == "settings" and not isinstance(value, Settings):
            value = Settings.model_validate(dict(value))
        response = await self._transport.request(method="POST", endpoint=self._get_endpoint_settings(concern), body=value)
        return AsyncUpdateId.model_validate(response)

    async def reset_setting(self, concern: str | SettingsConcern) -> AsyncUpdateId:
        """Revert one settings concern to the service default."""
        concern = get_concern(concern)
        response = await self._transport.request(method="DELETE", endpoint=self._get_endpoint_settings(concern))
        return AsyncUpdateId.model_validate(response)

    ################ BUNDLE ##################
    async def get_settings(self) -> Settings:
        return await self.get_setting("settings")

    async def update_settings(self, settings: Settings | Mapping[str, Any]) -> AsyncUpdateId:
        """Update several concerns at once. Concerns left out are unchanged."""
        return await self.update_setting("settings", settings)

    async def reset_settings(self) -> AsyncUpdateId:
        return await self.reset_setting("settings")

    ################ SYNONYMS ##################
    async def get_synonyms(self) -> dict[str, list[str]]:
        return await self.get_setting("synonyms")

    async def update_synonyms(self, synonyms: dict[str, list[str]]) -> AsyncUpdateId:
        """Replace the synonyms map."""
        return await self.update_setting("synonyms", synonyms)

    async def reset_synonyms(self) -> AsyncUpdateId:
        return await self.reset_setting("synonyms")

    ################ STOP WORDS ##################
    async def get_stop_words(self) -> list[str]:
        return await self.get_setting("stop_words")

    async def update_stop_words(self, stop_words: list[str]) -> AsyncUpdateId:
        """Replace the stop-words list."""
        return await self.update_setting("stop_words", stop_words)

    async def reset_stop_words(self) -> AsyncUpdateId:
        return await self.reset_setting("stop_words")

    ################ RANKING RULES ##################
    async def get_ranking_rules(self) -> list[str]:
        return await self.get_setting("ranking_rules")

    async def update_ranking_rules(self, ranking_rules: list[str]) -> AsyncUpdateId:
        """Replace the ranking rules. Order matters."""
        return await self.update_setting("ranking_rules", ranking_rules)

    async def reset_ranking_rules(self) -> AsyncUpdateId:
        return await self.reset_setting("ranking_rules")

    ################ DISTINCT ATTRIBUTE ##################
    async def get_distinct_attribute(self) -> str | None:
        return await self.get_setting("distinct_attribute")

    async def update_distinct_attribute(self, distinct_attribute: str) -> AsyncUpdateId:
        return await self.update_setting("distinct_attribute", distinct_attribute)

    async def reset_distinct_attribute(self) -> AsyncUpdateId:
        return await self.reset_setting("distinct_attribute")

    ################ SEARCHABLE ATTRIBUTES ##################
    async def get_searchable_attributes(self) -> list[str]:
        return await self.get_setting("searchable_attributes")

    async def update_searchable_attributes(self, searchable_attributes: list[str]) -> AsyncUpdateId:
        return await self.update_setting("searchable_attributes", searchable_attributes)

    async def reset_searchable_attributes(self) -> AsyncUpdateId:
        return await self.reset_setting("searchable_attributes")

    ################ DISPLAYED ATTRIBUTES ##################
    async def get_displayed_attributes(self) -> list[str]:
        return await self.get_setting("displayed_attributes")

    async def update_displayed_attributes(self, displayed_attributes: list[str]) -> AsyncUpdateId:
        return await self.update_setting("displayed_attributes", displayed_attributes)

    async def reset_displayed_attributes(self) -> AsyncUpdateId:
        return await self.reset_setting("displayed_attributes")

    ################ ACCEPT NEW FIELDS ##################
    async def get_accept_new_fields(self) -> bool:
        return await self.get_setting("accept_new_fields")

    async def update_accept_new_fields(self, accept_new_fields: bool) -> AsyncUpdateId:
        return await self.update_setting("accept_new_fields", accept_new_fields)

    async def reset_accept_new_fields(self) -> AsyncUpdateId:
        return await self.reset_setting("accept_new_fields")
