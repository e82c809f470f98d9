# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module defines constants for use across the azure-amqp-common package
"""

VERSION = "1.0.0b1"

# Connection string syntax
CS_DELIMITER = ";"
CS_VAL_SEPARATOR = "="

# Connection string keys
ENDPOINT = "Endpoint"
SHARED_ACCESS_KEY_NAME = "SharedAccessKeyName"
SHARED_ACCESS_KEY = "SharedAccessKey"
ENTITY_PATH = "EntityPath"
HOST_NAME = "HostName"
DEVICE_ID = "DeviceId"

# Addressing
AUDIENCE_SCHEME = "sb"
DEFAULT_CONSUMER_GROUP = "$default"
MANAGEMENT_ENTITY_SUFFIX = "$management"

# IoT Hub exposes its built-in Event Hub compatible endpoint under this path
IOTHUB_DEFAULT_ENTITY_PATH = "messages/events"
