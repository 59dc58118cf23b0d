"""Input-argument default synthesis from entry-point JSON schemas."""

from __future__ import annotations

import copy
import json
from typing import Any


def domain_parse_arguments_schema(schema: str | dict[str, Any] | None) -> dict[str, Any]:
    """Parse an entry-point input-argument schema into a JSON object.

    Args:
        schema: Schema text, already-parsed schema object, or None.

    Returns:
        dict[str, Any]: Parsed schema, empty when no schema is declared.

    Raises:
        ValueError: Raised when schema text is not valid JSON or not an object.
    """

    if schema is None:
        return {}
    if isinstance(schema, dict):
        return schema
    if not isinstance(schema, str):
        raise ValueError("input argument schema must be JSON text or an object")
    if not schema.strip():
        return {}
    try:
        parsed_schema = json.loads(schema)
    except json.JSONDecodeError as error:
        raise ValueError("input argument schema is not valid JSON") from error
    if not isinstance(parsed_schema, dict):
        raise ValueError("input argument schema must be a JSON object")
    return parsed_schema


def domain_build_default_arguments(schema: str | dict[str, Any] | None) -> dict[str, Any]:
    """Build an arguments payload from schema property defaults.

    Only properties that explicitly declare `default` are copied; properties
    without one are omitted rather than set to null.

    Args:
        schema: Entry-point input-argument schema.

    Returns:
        dict[str, Any]: Mapping of property name to its declared default.

    Raises:
        ValueError: Raised when the schema or its `properties` member is malformed.
    """

    parsed_schema = domain_parse_arguments_schema(schema)
    schema_properties = parsed_schema.get("properties")
    if schema_properties is None:
        return {}
    if not isinstance(schema_properties, dict):
        raise ValueError("input argument schema properties must be a JSON object")

    default_arguments: dict[str, Any] = {}
    for property_name, property_schema in schema_properties.items():
        if isinstance(property_schema, dict) and "default" in property_schema:
            default_arguments[property_name] = copy.deepcopy(property_schema["default"])
    return default_arguments
