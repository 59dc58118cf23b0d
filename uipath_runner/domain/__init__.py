"""Domain models used across application layer boundaries."""

from .argument_defaults import domain_build_default_arguments, domain_parse_arguments_schema
from .models import (
    EntryPoint,
    EntryPointReference,
    Folder,
    HealthStatus,
    OptionItem,
    ProcessReference,
    ProcessRelease,
)
from .references import (
    domain_decode_entry_point_token,
    domain_decode_process_token,
    domain_encode_entry_point_token,
    domain_encode_process_token,
)
from .start_request import domain_build_start_request
from .timeline import StageTimeline, domain_build_stage_event

__all__ = [
    "EntryPoint",
    "EntryPointReference",
    "Folder",
    "HealthStatus",
    "OptionItem",
    "ProcessReference",
    "ProcessRelease",
    "StageTimeline",
    "domain_build_default_arguments",
    "domain_build_stage_event",
    "domain_build_start_request",
    "domain_decode_entry_point_token",
    "domain_decode_process_token",
    "domain_encode_entry_point_token",
    "domain_encode_process_token",
    "domain_parse_arguments_schema",
]
