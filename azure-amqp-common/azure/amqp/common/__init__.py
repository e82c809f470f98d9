"""Azure AMQP Common Library

This library provides the connection configs shared by the Azure Event Hubs and IoT Hub
AMQP clients, built from connection strings, along with the AMQP addresses and token
audiences derived from them.
"""

from .connection_string import ConnectionString, parse_connection_string  # noqa: F401
from .connection_config import (  # noqa: F401
    ConnectionConfig,
    EventHubConnectionConfig,
    IotHubConnectionConfig,
    convert_to_event_hub_connection_config,
)
from .exceptions import (  # noqa: F401
    InvalidConnectionStringError,
    MalformedConnectionStringError,
    MissingEndpointError,
    MissingEntityPathError,
    InvalidConnectionConfigError,
)
from .constant import VERSION as __version__  # noqa: F401
