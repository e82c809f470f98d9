# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains the connection configs built from Event Hubs and IoT Hub
connection strings, along with the AMQP address and audience helpers derived from them.
"""

import logging
from typing import Any, Dict, Optional, Tuple
from . import constant
from .connection_string import ConnectionString
from .custom_typing import ConnectionConfigFields, PartitionId
from .exceptions import (
    InvalidConnectionConfigError,
    MissingEndpointError,
    MissingEntityPathError,
)

__all__ = [
    "ConnectionConfig",
    "EventHubConnectionConfig",
    "IotHubConnectionConfig",
    "convert_to_event_hub_connection_config",
]

logger = logging.getLogger(__name__)

SCHEME_SEPARATOR = "://"

MISSING_PATH_MSG = (
    'Either provide "path" or the "connectionString" must contain '
    'EntityPath="<path-to-the-entity>".'
)
EMPTY_PATH_MSG = (
    'Either provide "path" or the "connectionString" must contain '
    'EntityPath="<path-to-the-entity>". The provided "path" is empty.'
)


def _config_field(name: str, doc: str) -> property:
    def getter(self):
        return self._values[name]

    return property(getter, doc=doc)


class _ImmutableConfig:
    """Base for read-only config value objects.

    Subclasses list their public fields in _field_names, and expose each one as a property.
    """

    __slots__ = ("_values",)

    _field_names: Tuple[str, ...] = ()
    # Fields that may carry key material, and are kept out of repr()
    _secret_field_names: Tuple[str, ...] = ("connection_string", "shared_access_key")

    def __init__(self, **values: Any) -> None:
        object.__setattr__(self, "_values", {name: values.get(name) for name in self._field_names})

    def __setattr__(self, name, value):
        raise AttributeError("'{}' object is immutable".format(type(self).__name__))

    def __delattr__(self, name):
        raise AttributeError("'{}' object is immutable".format(type(self).__name__))

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._values == other._values

    def __hash__(self):
        return hash((type(self), tuple(self._values[name] for name in self._field_names)))

    def __repr__(self):
        fields = ", ".join(
            "{}={!r}".format(name, self._values[name])
            for name in self._field_names
            if name not in self._secret_field_names
        )
        return "{}({})".format(type(self).__name__, fields)

    def __reduce__(self):
        # copy and pickle would otherwise restore the slot through __setattr__
        return (_restore_config, (type(self), self._as_dict()))

    def _as_dict(self) -> Dict[str, Any]:
        return dict(self._values)


def _restore_config(config_cls, values):
    return config_cls(**values)


class ConnectionConfig(_ImmutableConfig):
    """
    Connection details parsed from an Event Hubs (Service Bus style) connection string.

    Do not instantiate directly. Use the .create() factory method.
    """

    __slots__ = ()

    _field_names = (
        "connection_string",
        "endpoint",
        "host",
        "shared_access_key_name",
        "shared_access_key",
        "entity_path",
    )

    connection_string = _config_field("connection_string", "The original connection string")
    endpoint = _config_field("endpoint", "The namespace endpoint, e.g. 'sb://ns.host.name/'")
    host = _config_field("host", "The namespace host, e.g. 'ns.host.name'")
    shared_access_key_name = _config_field(
        "shared_access_key_name", "The name of the shared access policy"
    )
    shared_access_key = _config_field("shared_access_key", "The shared access policy key")
    entity_path = _config_field("entity_path", "The entity within the namespace, if known")

    @classmethod
    def create(cls, connection_string: str, path: Optional[str] = None) -> "ConnectionConfig":
        """Create a ConnectionConfig from a connection string.

        :param str connection_string: Connection string containing at least an Endpoint
        :param str path: (optional) Entity path, takes precedence over the EntityPath
            contained in the connection string.

        :raises: TypeError if connection_string is not a string
        :raises: MalformedConnectionStringError if connection_string cannot be parsed
        :raises: MissingEndpointError if connection_string has no Endpoint
        :returns: ConnectionConfig
        """
        fields = _parse_and_extract(connection_string, path)
        logger.debug(
            "Creating ConnectionConfig for host '{}' (entity path: {})".format(
                fields["host"], fields["entity_path"]
            )
        )
        return cls(**fields)

    @classmethod
    def validate(cls, config: "ConnectionConfig", entity_path_required: bool = False) -> None:
        """Ensure that a config has all the properties needed to connect.

        :param config: The config to validate
        :type config: :class:`ConnectionConfig`
        :param bool entity_path_required: Also require an entity path (default False)

        :raises: TypeError if config is not a ConnectionConfig
        :raises: InvalidConnectionConfigError if a required property is missing or empty
        """
        if not isinstance(config, ConnectionConfig):
            raise TypeError("'config' must be of type ConnectionConfig")
        required = ["endpoint", "host", "shared_access_key_name", "shared_access_key"]
        if entity_path_required:
            required.append("entity_path")
        _validate_required(config, required)


class EventHubConnectionConfig(ConnectionConfig):
    """
    Connection details for an Event Hub, including the entity path.

    Provides the AMQP addresses and token audiences of the Event Hub's management,
    sender and receiver links.

    Do not instantiate directly. Use the .create() or .create_from_connection_config()
    factory methods.
    """

    __slots__ = ()

    @classmethod
    def create(cls, connection_string: str, path: Optional[str] = None) -> "EventHubConnectionConfig":
        """Create an EventHubConnectionConfig from a connection string.

        :param str connection_string: Connection string for the Event Hubs namespace
        :param str path: (optional) Name of the Event Hub. Required if the connection string
            does not contain EntityPath.

        :raises: TypeError if connection_string is not a string
        :raises: MalformedConnectionStringError if connection_string cannot be parsed
        :raises: MissingEndpointError if connection_string has no Endpoint
        :raises: MissingEntityPathError if neither path nor EntityPath is provided
        :raises: InvalidConnectionConfigError if the shared access key details are missing
        :returns: EventHubConnectionConfig
        """
        fields = _parse_and_extract(connection_string, path)
        if not fields["entity_path"]:
            if path is None:
                raise MissingEntityPathError(MISSING_PATH_MSG)
            else:
                raise MissingEntityPathError(EMPTY_PATH_MSG)
        config = cls(**fields)
        cls.validate(config, entity_path_required=True)
        logger.debug(
            "Creating EventHubConnectionConfig for host '{}' (entity path: {})".format(
                config.host, config.entity_path
            )
        )
        return config

    @classmethod
    def create_from_connection_config(
        cls, config: ConnectionConfig
    ) -> "EventHubConnectionConfig":
        """Create an EventHubConnectionConfig from an existing ConnectionConfig.

        :param config: A config which includes an entity path
        :type config: :class:`ConnectionConfig`

        :raises: TypeError if config is not a ConnectionConfig
        :raises: InvalidConnectionConfigError if a required property is missing or empty
        :returns: EventHubConnectionConfig
        """
        cls.validate(config, entity_path_required=True)
        return cls(**config._as_dict())

    # Addresses

    def get_management_address(self) -> str:
        """Return the address of the Event Hub's management node, e.g. 'ep/$management'"""
        return _management_path(self.entity_path)

    def get_sender_address(self, partition_id: Optional[PartitionId] = None) -> str:
        """Return the address to send events to.

        :param partition_id: (optional) Send to this partition instead of letting the
            service pick one.
        :type partition_id: str or int
        """
        return _sender_path(self.entity_path, _format_partition_id(partition_id))

    def get_receiver_address(
        self,
        partition_id: PartitionId,
        consumer_group: str = constant.DEFAULT_CONSUMER_GROUP,
    ) -> str:
        """Return the address to receive events of a partition from.

        :param partition_id: The partition to receive from
        :type partition_id: str or int
        :param str consumer_group: The consumer group to receive as (default '$default')

        :raises: TypeError if partition_id is None
        """
        return _receiver_path(
            self.entity_path, _require_partition_id(partition_id), consumer_group
        )

    # Audiences

    def get_management_audience(self) -> str:
        """Return the token audience of the Event Hub's management node"""
        return self._audience(self.get_management_address())

    def get_sender_audience(self, partition_id: Optional[PartitionId] = None) -> str:
        """Return the token audience for sending events, see .get_sender_address()"""
        return self._audience(self.get_sender_address(partition_id))

    def get_receiver_audience(
        self,
        partition_id: PartitionId,
        consumer_group: str = constant.DEFAULT_CONSUMER_GROUP,
    ) -> str:
        """Return the token audience for receiving events, see .get_receiver_address()"""
        return self._audience(self.get_receiver_address(partition_id, consumer_group))

    def _audience(self, address: str) -> str:
        return "{}{}{}/{}".format(constant.AUDIENCE_SCHEME, SCHEME_SEPARATOR, self.host, address)


class IotHubConnectionConfig(_ImmutableConfig):
    """
    Connection details parsed from an IoT Hub connection string.

    Use .convert_to_event_hub_connection_config() to reach the IoT Hub's built-in
    Event Hub compatible endpoint.

    Do not instantiate directly. Use the .create() factory method.
    """

    __slots__ = ()

    _field_names = (
        "connection_string",
        "host_name",
        "host",
        "shared_access_key_name",
        "shared_access_key",
        "entity_path",
        "device_id",
    )

    connection_string = _config_field("connection_string", "The original connection string")
    host_name = _config_field("host_name", "The IoT Hub host, e.g. 'hub.azure-devices.net'")
    host = _config_field("host", "The IoT Hub name, e.g. 'hub'")
    shared_access_key_name = _config_field(
        "shared_access_key_name", "The name of the shared access policy"
    )
    shared_access_key = _config_field("shared_access_key", "The shared access policy key")
    entity_path = _config_field("entity_path", "The entity path, 'messages/events' by default")
    device_id = _config_field("device_id", "The device identity, if present")

    @classmethod
    def create(cls, connection_string: str, path: Optional[str] = None) -> "IotHubConnectionConfig":
        """Create an IotHubConnectionConfig from an IoT Hub connection string.

        :param str connection_string: Connection string containing at least a HostName
        :param str path: (optional) Entity path (default 'messages/events')

        :raises: TypeError if connection_string is not a string
        :raises: MalformedConnectionStringError if connection_string cannot be parsed
        :raises: MissingEndpointError if connection_string has no HostName
        :returns: IotHubConnectionConfig
        """
        cs, fields = _parse_common(
            connection_string, path, default_entity_path=constant.IOTHUB_DEFAULT_ENTITY_PATH
        )
        host_name = cs.get(constant.HOST_NAME)
        if not host_name:
            raise MissingEndpointError("Invalid connection string - missing HostName")
        host = host_name.split(".", 1)[0]
        if not host:
            raise MissingEndpointError("Invalid connection string - missing HostName host")
        fields["host_name"] = host_name
        fields["host"] = host
        fields["device_id"] = cs.get(constant.DEVICE_ID)
        logger.debug(
            "Creating IotHubConnectionConfig for host '{}' (entity path: {})".format(
                host_name, fields["entity_path"]
            )
        )
        return cls(**fields)

    @classmethod
    def validate(cls, config: "IotHubConnectionConfig") -> None:
        """Ensure that a config has all the properties needed to connect.

        :raises: TypeError if config is not an IotHubConnectionConfig
        :raises: InvalidConnectionConfigError if a required property is missing or empty
        """
        if not isinstance(config, IotHubConnectionConfig):
            raise TypeError("'config' must be of type IotHubConnectionConfig")
        _validate_required(
            config,
            ["host_name", "host", "shared_access_key_name", "shared_access_key", "entity_path"],
        )

    @staticmethod
    def convert_to_event_hub_connection_config(
        iot_config: "IotHubConnectionConfig",
    ) -> EventHubConnectionConfig:
        """Equivalent to the module level convert_to_event_hub_connection_config()"""
        return convert_to_event_hub_connection_config(iot_config)


def convert_to_event_hub_connection_config(
    iot_config: IotHubConnectionConfig,
) -> EventHubConnectionConfig:
    """Convert an IotHubConnectionConfig to the EventHubConnectionConfig of the IoT Hub's
    Event Hub compatible endpoint.

    The full IoT Hub host name becomes the Event Hub host, so all the address and audience
    helpers of the returned config target the IoT Hub.

    :param iot_config: The config to convert
    :type iot_config: :class:`IotHubConnectionConfig`

    :raises: TypeError if iot_config is not an IotHubConnectionConfig
    :raises: InvalidConnectionConfigError if the shared access key details are missing
    :returns: EventHubConnectionConfig
    """
    if not isinstance(iot_config, IotHubConnectionConfig):
        raise TypeError("'iot_config' must be of type IotHubConnectionConfig")
    endpoint = "{}{}{}/".format(constant.AUDIENCE_SCHEME, SCHEME_SEPARATOR, iot_config.host_name)
    connection_string = constant.CS_DELIMITER.join(
        "{}{}{}".format(key, constant.CS_VAL_SEPARATOR, value)
        for key, value in [
            (constant.ENDPOINT, endpoint),
            (constant.SHARED_ACCESS_KEY_NAME, iot_config.shared_access_key_name),
            (constant.SHARED_ACCESS_KEY, iot_config.shared_access_key),
            (constant.ENTITY_PATH, iot_config.entity_path),
        ]
        if value is not None
    )
    config = ConnectionConfig(
        connection_string=connection_string,
        endpoint=endpoint,
        host=iot_config.host_name,
        shared_access_key_name=iot_config.shared_access_key_name,
        shared_access_key=iot_config.shared_access_key,
        entity_path=iot_config.entity_path,
    )
    return EventHubConnectionConfig.create_from_connection_config(config)


# Parsing #


def _parse_common(
    connection_string: str, path: Optional[str], default_entity_path: Optional[str] = None
) -> Tuple[ConnectionString, Dict[str, Any]]:
    """Parse a connection string, and extract the fields shared by every kind of config"""
    cs = ConnectionString(connection_string)
    fields = {
        "connection_string": connection_string,
        "shared_access_key_name": cs.get(constant.SHARED_ACCESS_KEY_NAME),
        "shared_access_key": cs.get(constant.SHARED_ACCESS_KEY),
        "entity_path": path or cs.get(constant.ENTITY_PATH) or default_entity_path,
    }
    return cs, fields


def _parse_and_extract(connection_string: str, path: Optional[str]) -> ConnectionConfigFields:
    """Parse an Event Hubs connection string into the fields of a ConnectionConfig"""
    cs, fields = _parse_common(connection_string, path)
    endpoint = cs.get(constant.ENDPOINT)
    if not endpoint:
        raise MissingEndpointError("Invalid connection string - missing Endpoint")
    host = _host_from_endpoint(endpoint)
    if not host:
        raise MissingEndpointError("Invalid connection string - missing Endpoint host")
    if not endpoint.endswith("/"):
        endpoint += "/"
    return ConnectionConfigFields(
        connection_string=fields["connection_string"],
        endpoint=endpoint,
        host=host,
        shared_access_key_name=fields["shared_access_key_name"],
        shared_access_key=fields["shared_access_key"],
        entity_path=fields["entity_path"],
    )


def _host_from_endpoint(endpoint: str) -> str:
    """Return the authority of an endpoint such as 'sb://ns.host.name/'"""
    _, separator, remainder = endpoint.partition(SCHEME_SEPARATOR)
    if not separator:
        # No scheme, the endpoint is the host with an optional trailing slash
        remainder = endpoint
    return remainder.split("/", 1)[0]


def _validate_required(config, names):
    for name in names:
        value = getattr(config, name)
        if not value or not isinstance(value, str):
            raise InvalidConnectionConfigError(
                "'{}' is a required property of the {}.".format(name, type(config).__name__)
            )


# Addressing #


def _format_partition_id(partition_id):
    """Return the string form of a partition id, leaving None as None"""
    if partition_id is None:
        return None
    return str(partition_id)


def _require_partition_id(partition_id):
    if partition_id is None:
        raise TypeError("'partition_id' is required to build a receiver address")
    return _format_partition_id(partition_id)


def _management_path(entity_path: str) -> str:
    return "{}/{}".format(entity_path, constant.MANAGEMENT_ENTITY_SUFFIX)


def _sender_path(entity_path: str, partition_id: Optional[str]) -> str:
    if partition_id is None:
        return entity_path
    return "{}/Partitions/{}".format(entity_path, partition_id)


def _receiver_path(entity_path: str, partition_id: str, consumer_group: str) -> str:
    if not consumer_group:
        consumer_group = constant.DEFAULT_CONSUMER_GROUP
    return "{}/ConsumerGroups/{}/Partitions/{}".format(entity_path, consumer_group, partition_id)
