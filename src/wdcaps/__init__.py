"""wdcaps - WebDriver capability negotiation

Negotiates the capabilities requested for an automation session into the
form consumed by drivers, and validates driver and plugin arguments against
their declared constraints.
"""

from wdcaps.capability import (
    ALWAYS_MATCH,
    FIRST_MATCH,
    CapValue,
    CapabilityDict,
    ConstraintsSpec,
    is_plain_dict,
)

from wdcaps.errors import (
    CapabilityError,
    MissingW3CCapabilitiesError,
    CapabilityMatchError,
    InvalidConstraintError,
    ConfigError,
    ArgumentError,
    UnknownArgumentError,
    InvalidArgumentShapeError,
    ArgumentValidationError,
    StructuredTextError,
)

from wdcaps.prefix import (
    W3C_APPIUM_PREFIX,
    STANDARD_CAPS,
    insert_prefixes,
    remove_prefixes,
    remove_prefix,
)

from wdcaps.settings import extract_settings
from wdcaps.constraints import ConstraintValidator, constraints_to_schema, validate_caps
from wdcaps.matching import match_capabilities, merge_caps
from wdcaps.loader import load_structured_text
from wdcaps.extension_args import parse_extension_args, parse_known_args, parse_driver_plugin_args
from wdcaps.config import NegotiationConfig, find_root, package_version
from wdcaps.negotiator import NegotiationResult, Protocol, apply_default_caps, negotiate_capabilities
from wdcaps.pretty import format_object, inspect_object

__all__ = [
    # Types
    "ALWAYS_MATCH",
    "FIRST_MATCH",
    "CapValue",
    "CapabilityDict",
    "ConstraintsSpec",
    "is_plain_dict",
    # Errors
    "CapabilityError",
    "MissingW3CCapabilitiesError",
    "CapabilityMatchError",
    "InvalidConstraintError",
    "ConfigError",
    "ArgumentError",
    "UnknownArgumentError",
    "InvalidArgumentShapeError",
    "ArgumentValidationError",
    "StructuredTextError",
    # Prefixes
    "W3C_APPIUM_PREFIX",
    "STANDARD_CAPS",
    "insert_prefixes",
    "remove_prefixes",
    "remove_prefix",
    # Settings
    "extract_settings",
    # Constraints
    "ConstraintValidator",
    "constraints_to_schema",
    "validate_caps",
    # Matching
    "match_capabilities",
    "merge_caps",
    # Extension args
    "load_structured_text",
    "parse_extension_args",
    "parse_known_args",
    "parse_driver_plugin_args",
    # Config
    "NegotiationConfig",
    "find_root",
    "package_version",
    # Negotiation
    "NegotiationResult",
    "Protocol",
    "apply_default_caps",
    "negotiate_capabilities",
    # Logging
    "format_object",
    "inspect_object",
]
