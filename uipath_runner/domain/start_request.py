"""Job start request body construction."""

from __future__ import annotations

import json
from typing import Any


def domain_build_start_request(
    release_key: str,
    input_arguments: dict[str, Any] | str | None = None,
    jobs_count: int = 1,
) -> dict[str, Any]:
    """Build the `StartJobs` request body for one release.

    Args:
        release_key: Release key of the process to start.
        input_arguments: Arguments object, or its JSON text, or None to omit.
        jobs_count: Number of jobs to start.

    Returns:
        dict[str, Any]: `{"startInfo": {...}}` body with `InputArguments` as JSON text.

    Raises:
        ValueError: Raised when release key is blank, count is not positive, or
            argument text is not a JSON object.
    """

    normalized_release_key = release_key.strip()
    if not normalized_release_key:
        raise ValueError("release_key must not be blank")
    if jobs_count < 1:
        raise ValueError("jobs_count must be >= 1")

    start_info: dict[str, Any] = {"JobsCount": jobs_count, "ReleaseKey": normalized_release_key}
    if input_arguments is None:
        return {"startInfo": start_info}

    if isinstance(input_arguments, str):
        try:
            parsed_arguments = json.loads(input_arguments)
        except json.JSONDecodeError as error:
            raise ValueError("input_arguments text is not valid JSON") from error
        if not isinstance(parsed_arguments, dict):
            raise ValueError("input_arguments must be a JSON object")
        start_info["InputArguments"] = input_arguments
    elif isinstance(input_arguments, dict):
        start_info["InputArguments"] = json.dumps(input_arguments)
    else:
        raise ValueError("input_arguments must be a JSON object or its text")

    return {"startInfo": start_info}
