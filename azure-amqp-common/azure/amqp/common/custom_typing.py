# --------------------------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
from typing import Union
from typing_extensions import TypedDict


# Partition ids are strings on the wire, but numeric ids are accepted for convenience
PartitionId = Union[str, int]


class ConnectionConfigFields(TypedDict):
    connection_string: str
    endpoint: str
    host: str
    shared_access_key_name: Union[str, None]
    shared_access_key: Union[str, None]
    entity_path: Union[str, None]
