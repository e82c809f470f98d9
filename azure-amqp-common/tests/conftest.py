# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------

import pytest

fake_host = "hostname.servicebus.windows.net"
fake_key_name = "sakName"
fake_key = "sak"
fake_entity_path = "ep"
fake_iothub_host_name = "someiot.azure-devices.net"
fake_device_id = "device-1234"


@pytest.fixture
def eventhub_connection_string():
    return "Endpoint=sb://{}/;SharedAccessKeyName={};SharedAccessKey={};EntityPath={}".format(
        fake_host, fake_key_name, fake_key, fake_entity_path
    )


@pytest.fixture
def namespace_connection_string():
    """Event Hubs connection string without an EntityPath"""
    return "Endpoint=sb://{}/;SharedAccessKeyName={};SharedAccessKey={}".format(
        fake_host, fake_key_name, fake_key
    )


@pytest.fixture
def iothub_connection_string():
    return "HostName={};SharedAccessKeyName={};SharedAccessKey={};DeviceId={}".format(
        fake_iothub_host_name, fake_key_name, fake_key, fake_device_id
    )
