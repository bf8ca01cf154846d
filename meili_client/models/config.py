from pydantic import BaseModel, ConfigDict


class EnvConfig(BaseModel):
    """
    Represents a single configuration parameter required for a env setting.

    Attributes:
        env_key (str): The key/name of the environment variable to read.
        val_type (str): The expected type of the environment variable's value. Supported types are "string", "number", "bool", and "list".
        default (str | int | bool | list | None): An optional default value if the environment variable is not set. If None, the variable is required and an error will be raised if it is not set.
    """

    env_key: str
    val_type: str
    default: str | int | float | bool | list | None = None


class ConnectionConfig(BaseModel):
    """
    Connection settings of a search client. Frozen once built.

    Attributes:
        host (str): Base URL of the search service (e.g. "http://127.0.0.1:7700").
        api_key (str | None): Key sent as X-Meili-API-Key on every request. No header is sent when unset or empty.
        timeout (float): Socket timeout in seconds handed to httpx.
    """

    model_config = ConfigDict(frozen=True)

    host: str
    api_key: str | None = None
    timeout: float = 30.0
