# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""This module contains tools for working with Connection Strings"""

import logging
from typing import Dict, Iterator, Optional
from .constant import CS_DELIMITER, CS_VAL_SEPARATOR
from .exceptions import MalformedConnectionStringError

__all__ = ["ConnectionString", "parse_connection_string"]

logger = logging.getLogger(__name__)


class ConnectionString:
    """Key/value mappings for connection details.
    Uses the same syntax as dictionary, but cannot be modified.
    """

    def __init__(self, connection_string: str) -> None:
        """Initializer for ConnectionString

        :param str connection_string: String with connection details provided by Azure
        :raises: TypeError if provided connection_string is not a string
        :raises: MalformedConnectionStringError if provided connection_string cannot be parsed
        """
        self._dict = parse_connection_string(connection_string)
        self._strrep = connection_string

    def __contains__(self, item: object) -> bool:
        return item in self._dict

    def __getitem__(self, key: str) -> str:
        return self._dict[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._dict)

    def __len__(self) -> int:
        return len(self._dict)

    def __repr__(self) -> str:
        return self._strrep

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value for key if key is in the dictionary, else default

        :param str key: The key to retrieve a value for
        :param str default: The default value returned if a key is not found
        :returns: The value for the given key
        """
        try:
            return self._dict[key]
        except KeyError:
            return default


def parse_connection_string(connection_string: str) -> Dict[str, str]:
    """Return a dictionary of values contained in a given connection string

    Whitespace (including line breaks) around keys, values, and delimiters is ignored,
    as are empty segments. Keys are kept as written; callers match them case-sensitively.

    :param str connection_string: String of semicolon delimited Key=Value pairs
    :raises: TypeError if provided connection_string is not a string
    :raises: MalformedConnectionStringError if a segment has no '=' or an empty key
    :returns: dict mapping each key to its (possibly empty) value
    """
    if not isinstance(connection_string, str):
        raise TypeError("Connection string must be of type str")

    d = {}
    for segment in connection_string.split(CS_DELIMITER):
        if not segment.strip():
            # Trailing delimiters and blank lines
            continue
        key, separator, value = segment.partition(CS_VAL_SEPARATOR)
        key = key.strip()
        if not separator:
            # Don't echo the segment, it may be key material missing its name
            raise MalformedConnectionStringError(
                "Connection string malformed: each segment must be of the form Key{}Value".format(
                    CS_VAL_SEPARATOR
                )
            )
        if not key:
            raise MalformedConnectionStringError(
                "Connection string malformed: a value was provided without a key"
            )
        if key in d:
            logger.debug("Duplicate key '{}' in connection string, using last value".format(key))
        d[key] = value.strip()

    logger.debug("Parsed connection string with keys: {}".format(", ".join(d.keys())))
    return d
