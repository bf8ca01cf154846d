from typing import Any

from meili_client.clients.ClientInterface import ClientInterface
from meili_client.clients.meili.IndexScope import IndexScope
from meili_client.helper.HelperConfig import HelperConfig
from meili_client.models.config import ConnectionConfig, EnvConfig
from meili_client.models.indexes import CreateIndexRequest, IndexInfo
from meili_client.models.system import Keys, Stats, Version

API_KEY_HEADER = "X-Meili-API-Key"


class MeiliClient(ClientInterface):
    """Client of a MeiliSearch service.

    Owns the connection config and the single transport every index scope
    obtained through :meth:`get_index` sends its requests through.

    Usage::

        async with MeiliClient(ConnectionConfig(host="http://127.0.0.1:7700", api_key="masterKey")) as client:
            products = client.get_index("products")
            await products.search("laptop", {"limit": 5})
    """

    @classmethod
    def from_env(cls, helper_config: HelperConfig, **kwargs) -> "MeiliClient":
        """Build a client from SEARCH_MEILI_HOST, SEARCH_MEILI_API_KEY and SEARCH_TIMEOUT."""
        return cls(config=None, helper_config=helper_config, **kwargs)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        return "search"

    def _get_engine_name(self) -> str:
        return "Meili"

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="HOST", val_type="string", default=None),
            EnvConfig(env_key="API_KEY", val_type="string", default=""),
        ]

    def _get_config_from_env(self) -> ConnectionConfig:
        return ConnectionConfig(
            host=self.get_config_val("HOST", default=None, val_type="string"),
            api_key=self.get_config_val("API_KEY", default="", val_type="string") or None,
            timeout=self._helper_config.get_number_val(f"{self.get_client_type().upper()}_TIMEOUT", default=30.0),
        )

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        if self.config.api_key:
            return {API_KEY_HEADER: self.config.api_key}
        return {}

    ################ ENDPOINTS ##################
    def _get_endpoint_healthcheck(self) -> str:
        return "/health"

    def _get_endpoint_indexes(self) -> str:
        return "/indexes"

    def _get_endpoint_keys(self) -> str:
        return "/keys"

    def _get_endpoint_stats(self) -> str:
        return "/stats"

    def _get_endpoint_version(self) -> str:
        return "/version"

    def _get_endpoint_sys_info(self, pretty: bool = False) -> str:
        return "/sys-info/pretty" if pretty else "/sys-info"

    ##########################################
    ################ INDEXES #################
    ##########################################

    def get_index(self, index_uid: str) -> IndexScope:
        """
        Returns a scope bound to one index. Purely local, no request is sent.

        Args:
            index_uid (str): The uid of the index.

        Returns:
            IndexScope: A scope sharing this client's transport.
        """
        return IndexScope(transport=self.get_transport(), index_uid=index_uid)

    async def list_indexes(self) -> list[IndexInfo]:
        """List all indexes of the database."""
        response = await self.do_request(method="GET", endpoint=self._get_endpoint_indexes())
        return [IndexInfo.model_validate(item) for item in response or []]

    async def create_index(self, data: CreateIndexRequest | dict) -> IndexInfo:
        """
        Create a new index.

        Args:
            data (CreateIndexRequest | dict): uid and optional name / primaryKey. Passed through as given.

        Returns:
            IndexInfo: The created index.
        """
        response = await self.do_request(method="POST", endpoint=self._get_endpoint_indexes(), body=data)
        return IndexInfo.model_validate(response)

    ##########################################
    ################# KEYS ###################
    ##########################################

    async def get_keys(self) -> Keys:
        response = await self.do_request(method="GET", endpoint=self._get_endpoint_keys())
        return Keys.model_validate(response)

    ##########################################
    ################ HEALTH ##################
    ##########################################

    async def is_healthy(self) -> bool:
        """Check if the server is healthy.

        Returns:
            bool: True once the healthcheck succeeds.

        Raises:
            MeiliApiError: If the service answers with an error status (e.g. 503 while unhealthy).
            httpx.TransportError: If the service cannot be reached at all.
        """
        await self.do_healthcheck()
        return True

    async def change_health_to(self, health: bool) -> None:
        await self.do_request(method="PUT", endpoint=self._get_endpoint_healthcheck(), body={"health": health})

    async def set_healthy(self) -> None:
        await self.change_health_to(True)

    async def set_unhealthy(self) -> None:
        await self.change_health_to(False)

    ##########################################
    ################ STATS ###################
    ##########################################

    async def database_stats(self) -> Stats:
        """Get the stats of the whole database."""
        response = await self.do_request(method="GET", endpoint=self._get_endpoint_stats())
        return Stats.model_validate(response)

    async def version(self) -> Version:
        response = await self.do_request(method="GET", endpoint=self._get_endpoint_version())
        return Version.model_validate(response)

    async def system_information(self) -> dict[str, Any]:
        """Get the server consumption: RAM, CPU, network."""
        return await self.do_request(method="GET", endpoint=self._get_endpoint_sys_info())

    async def system_information_pretty(self) -> dict[str, Any]:
        """Get the server consumption with every figure in human readable form."""
        return await self.do_request(method="GET", endpoint=self._get_endpoint_sys_info(pretty=True))
