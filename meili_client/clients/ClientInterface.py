import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from meili_client.clients.Transport import Transport
from meili_client.helper.HelperConfig import HelperConfig
from meili_client.models.config import ConnectionConfig, EnvConfig


class ClientInterface(ABC):
    def __init__(
        self,
        config: ConnectionConfig | None = None,
        helper_config: HelperConfig | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ):
        if config is None and helper_config is None:
            raise ValueError("Either a ConnectionConfig or a HelperConfig to read it from is required.")

        self._helper_config = helper_config
        self.logging = helper_config.get_logger() if helper_config else logging.getLogger(__name__)

        # config from env if not given
        if config is None:
            self.validate_full_configuration()
            config = self._get_config_from_env()
        self.config = config

        # one transport for the whole lifetime of the client
        self._transport = Transport(
            base_url=self._get_base_url(),
            headers=self._get_auth_header(),
            timeout=self.config.timeout,
            logger=self.logging,
            http_transport=http_transport,
        )
        self.logging.debug(f"Instantiated {self.get_engine_name()} client for {self._get_base_url()}")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    ##########################################
    ############### CHECKER ##################
    ##########################################

    def validate_full_configuration(self) -> None:
        """
        Validates that all required configuration values for the client are set and valid.

        Raises:
            ValueError: If any required configuration value is missing or invalid.
        """
        req_config = self._get_required_config()
        for config in req_config:
            _ = self.get_config_val(raw_key=config.env_key, default=config.default, val_type=config.val_type)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def get_client_type(self) -> str:
        """
        Returns the type of the client in lowercase. E.g. "search"
        """
        return self._get_client_type().lower()

    @abstractmethod
    def _get_client_type(self) -> str:
        """
        Returns the type of the client. E.g. "search"
        """
        pass

    def get_engine_name(self) -> str:
        """
        Returns the name of the engine used by the client. E.g. "meili"
        """
        return self._get_engine_name().lower()

    @abstractmethod
    def _get_engine_name(self) -> str:
        """
        Returns the name of the engine used by the client. E.g. "Meili"
        """
        pass

    def get_transport(self) -> Transport:
        """
        Returns the transport owned by this client. Index scopes keep a reference to it, they never own it.
        """
        return self._transport

    ################ CONFIG ##################
    @abstractmethod
    def _get_required_config(self) -> list[EnvConfig]:
        """
        Returns all required configurations for the client.

        Returns:
            list[EnvConfig]: A list containing the details of each required configuration key.
        """
        pass

    @abstractmethod
    def _get_config_from_env(self) -> ConnectionConfig:
        """
        Builds the connection config from environment variables.

        Returns:
            ConnectionConfig: The resolved connection config.
        """
        pass

    def _get_config_key_name(self, raw_key: str) -> str:
        """
        Returns:
            str: The full configuration key name for the client. E.g. "SEARCH_MEILI_API_KEY"
        """
        key_prefix = f"{self.get_client_type().upper()}_{self.get_engine_name().upper()}"
        return f"{key_prefix}_{raw_key.upper()}"

    def get_config_val(self, raw_key: str, default: Any = None, val_type: str = "string") -> Any:
        """
        Retrieves the value of a configuration key for the client.

        Args:
            raw_key (str): The raw configuration key name
            default (Any): The default value to return if the configuration key is not set
            val_type (str): The type of the configuration value ("string", "number", "bool", "list")

        Raises:
            ValueError: If the client has no HelperConfig, the key is missing or the type is unsupported.
        """
        if self._helper_config is None:
            raise ValueError(f"Cannot read '{raw_key}': {self.get_engine_name()} client has no HelperConfig.")
        key = self._get_config_key_name(raw_key)
        if val_type == "string":
            return self._helper_config.get_string_val(key, default=default)
        elif val_type == "number":
            return self._helper_config.get_number_val(key, default=default)
        elif val_type == "bool":
            return self._helper_config.get_bool_val(key, default=default)
        elif val_type == "list":
            return self._helper_config.get_list_val(key, default=default)
        else:
            raise ValueError(f"Unsupported config value type '{val_type}' for env key '{raw_key}' in {self.get_client_type().upper()} client '{self.get_engine_name()}'.")

    ################ AUTH ##################
    @abstractmethod
    def _get_auth_header(self) -> dict:
        """
        Returns the authentication header for the client backend server, if an API key is set.

        Returns:
            dict: A dictionary containing the auth data
        """
        pass

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        """
        Returns:
            str: The base URL of the backend server (e.g. "http://localhost:7700")
        """
        return self.config.host

    @abstractmethod
    def _get_endpoint_healthcheck(self) -> str:
        """
        Returns the endpoint path for healthcheck requests.

        Returns:
            str: The endpoint path for healthcheck requests (e.g. "/health")
        """
        pass

    ##########################################
    ############ CORE REQUESTS ###############
    ##########################################

    async def close(self) -> None:
        """Close the HTTP transport. Index scopes obtained from this client become unusable."""
        await self._transport.close()

    async def do_request(self, method: str = "GET", endpoint: str = "", body: Any = None, params: dict | None = None) -> Any:
        """Send a request through the client's transport and return the decoded payload."""
        return await self._transport.request(method=method, endpoint=endpoint, body=body, params=params)

    async def do_healthcheck(self) -> Any:
        """Send a request to the healthcheck endpoint.

        Raises:
            MeiliApiError: If the backend reports itself unhealthy.
        """
        return await self.do_request(method="GET", endpoint=self._get_endpoint_healthcheck())
