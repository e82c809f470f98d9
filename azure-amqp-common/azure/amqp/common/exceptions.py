# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""Define connection configuration exceptions to be shared across package"""


class InvalidConnectionStringError(ValueError):
    """Represents a connection string that cannot be turned into a connection config"""

    pass


class MalformedConnectionStringError(InvalidConnectionStringError):
    """Represents a connection string that does not follow the Key=Value;... syntax"""

    pass


class MissingEndpointError(InvalidConnectionStringError):
    """Represents a connection string with no Endpoint (or HostName) to connect to"""

    pass


class MissingEntityPathError(InvalidConnectionStringError):
    """Represents an Event Hub connection string whose entity path cannot be resolved"""

    pass


class InvalidConnectionConfigError(InvalidConnectionStringError):
    """Represents a connection config missing a property required by its service"""

    pass
