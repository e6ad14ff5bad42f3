"""
Publish Markdown files to WordPress.

Copyright 2026, md2wp contributors

:see: https://developer.wordpress.org/rest-api/
"""

from typing import TypeVar

import orjson
from cattrs.preconf.orjson import make_converter  # spellchecker:disable-line

JsonType = None | bool | int | float | str | dict[str, "JsonType"] | list["JsonType"]

T = TypeVar("T")


_converter = make_converter(forbid_extra_keys=False)


def json_to_object(typ: type[T], data: JsonType) -> T:
    """
    Converts a raw JSON object to a structured object, validating input data.

    :param typ: Target structured type.
    :param data: Source data as a JSON object.
    :returns: A valid object instance of the expected type.
    """

    return _converter.structure(data, typ)


def object_to_json_payload(data: object) -> bytes:
    """
    Converts a structured object to a JSON string encoded in UTF-8.

    :param data: Object to convert to a JSON string.
    :returns: JSON string encoded in UTF-8.
    """

    return _converter.dumps(data)


def json_loads(text: str | bytes) -> JsonType:
    "Parses a JSON document, raising `orjson.JSONDecodeError` if the input is not well-formed."

    return orjson.loads(text)
