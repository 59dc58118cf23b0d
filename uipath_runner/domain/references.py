"""Opaque string tokens for composite references at single-value edges.

Form fields and CLI flags accept one scalar per selection, so process and
entry-point references are serialized to compact JSON strings there and
decoded back into typed references before reaching the resolution pipeline.
"""

from __future__ import annotations

import json
from typing import Any

from .models import EntryPointReference, ProcessReference


def domain_encode_process_token(reference: ProcessReference) -> str:
    """Serialize a process reference to an opaque token.

    Args:
        reference: Typed process reference.

    Returns:
        str: Compact JSON token with `key`, `processKey` and `version`.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return json.dumps(
        {
            "key": reference.release_key,
            "processKey": reference.process_key,
            "version": reference.process_version,
        },
        separators=(",", ":"),
    )


def domain_decode_process_token(token: str) -> ProcessReference:
    """Parse an opaque process token back into a typed reference.

    Args:
        token: Token produced by `domain_encode_process_token`.

    Returns:
        ProcessReference: Decoded reference.

    Raises:
        ValueError: Raised when the token is not a JSON object with non-blank string fields.
    """

    token_payload = _domain_load_token_object(token=token, token_label="process")
    return ProcessReference(
        release_key=_domain_require_token_string(token_payload, "key", "process"),
        process_key=_domain_require_token_string(token_payload, "processKey", "process"),
        process_version=_domain_require_token_string(token_payload, "version", "process"),
    )


def domain_encode_entry_point_token(reference: EntryPointReference) -> str:
    """Serialize an entry-point reference to an opaque token.

    Args:
        reference: Typed entry-point reference.

    Returns:
        str: Compact JSON token with `uniqueId` and `inputArgs`.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return json.dumps(
        {"uniqueId": reference.unique_id, "inputArgs": reference.input_arguments_schema},
        separators=(",", ":"),
    )


def domain_decode_entry_point_token(token: str) -> EntryPointReference:
    """Parse an opaque entry-point token back into a typed reference.

    Args:
        token: Token produced by `domain_encode_entry_point_token`.

    Returns:
        EntryPointReference: Decoded reference.

    Raises:
        ValueError: Raised when the token is malformed or lacks a unique id.
    """

    token_payload = _domain_load_token_object(token=token, token_label="entry point")
    input_arguments_schema = token_payload.get("inputArgs")
    if input_arguments_schema is not None and not isinstance(input_arguments_schema, str):
        raise ValueError("entry point token field inputArgs must be a string or null")
    return EntryPointReference(
        unique_id=_domain_require_token_string(token_payload, "uniqueId", "entry point"),
        input_arguments_schema=input_arguments_schema,
    )


def _domain_load_token_object(token: str, token_label: str) -> dict[str, Any]:
    if not isinstance(token, str) or not token.strip():
        raise ValueError(f"{token_label} token must not be blank")
    try:
        token_payload = json.loads(token)
    except json.JSONDecodeError as error:
        raise ValueError(f"{token_label} token is not valid JSON") from error
    if not isinstance(token_payload, dict):
        raise ValueError(f"{token_label} token must be a JSON object")
    return token_payload


def _domain_require_token_string(token_payload: dict[str, Any], field_name: str, token_label: str) -> str:
    field_value = token_payload.get(field_name)
    if not isinstance(field_value, str) or not field_value.strip():
        raise ValueError(f"{token_label} token field {field_name} must be a non-blank string")
    return field_value.strip()
