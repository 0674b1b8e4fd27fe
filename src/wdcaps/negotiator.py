"""Capability negotiation

Translates the capabilities sent in a new session request into the
capabilities handed to the inner driver. Only W3C payloads are negotiable;
legacy JSONWP capabilities are carried along for information only.
"""

import copy
import functools
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional

from wdcaps.capability import (
    ALWAYS_MATCH,
    FIRST_MATCH,
    CapabilityDict,
    ConstraintsSpec,
    is_plain_dict,
)
from wdcaps.config import NegotiationConfig
from wdcaps.errors import CapabilityError, CapabilityMatchError, MissingW3CCapabilitiesError
from wdcaps.matching import match_capabilities
from wdcaps.prefix import insert_prefixes, remove_prefix, remove_prefixes

logger = logging.getLogger(__name__)


Matcher = Callable[[Dict[str, Any], ConstraintsSpec, bool], CapabilityDict]


class Protocol(Enum):
    """Session protocol"""
    W3C = "W3C"


@dataclass
class NegotiationResult:
    """Outcome of negotiate_capabilities

    On success processed_w3c_capabilities holds the matched capabilities in
    alwaysMatch and a single empty firstMatch entry. On failure error is set.
    """
    desired_caps: CapabilityDict = field(default_factory=dict)
    processed_jsonwp_capabilities: Optional[CapabilityDict] = None
    processed_w3c_capabilities: Optional[Dict[str, Any]] = None
    protocol: Protocol = Protocol.W3C
    error: Optional[CapabilityError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict"""
        result = {
            "desiredCaps": self.desired_caps,
            "processedJsonwpCapabilities": self.processed_jsonwp_capabilities,
            "processedW3CCapabilities": self.processed_w3c_capabilities,
            "protocol": self.protocol.value,
        }
        if self.error is not None:
            result["error"] = str(self.error)
        return result


def _is_cap_already_set(w3c_caps: Dict[str, Any], key: str, prefix: str) -> bool:
    """Whether key is set in firstMatch[0] or alwaysMatch, ignoring prefixes"""
    name = remove_prefix(key, prefix)
    first_match = w3c_caps.get(FIRST_MATCH)
    if isinstance(first_match, list) and first_match and is_plain_dict(first_match[0]):
        if name in remove_prefixes(first_match[0], prefix):
            return True
    always_match = w3c_caps.get(ALWAYS_MATCH)
    return is_plain_dict(always_match) and name in remove_prefixes(always_match, prefix)


def apply_default_caps(
    w3c_caps: Dict[str, Any],
    default_caps: CapabilityDict,
    prefix: str,
) -> Dict[str, Any]:
    """Inject default capabilities into a W3C payload in place

    Explicitly requested capabilities always win. Defaults only ever go into
    the first firstMatch alternative; the other alternatives are left as sent.
    """
    for key, value in default_caps.items():
        if _is_cap_already_set(w3c_caps, key, prefix):
            logger.debug(f"Default capability '{key}' is overridden by the request")
            continue

        first_match = w3c_caps.get(FIRST_MATCH)
        if not first_match:
            w3c_caps[FIRST_MATCH] = [{key: value}]
        elif isinstance(first_match, list) and is_plain_dict(first_match[0]):
            first_match[0][key] = value
        # anything else is malformed and left for the matcher to reject
    return w3c_caps


def _wrap_match_error(cause: Exception) -> CapabilityMatchError:
    """CapabilityMatchError chained to a foreign matcher exception"""
    error = CapabilityMatchError(str(cause))
    error.__cause__ = cause
    return error


def negotiate_capabilities(
    jsonwp_capabilities: Optional[CapabilityDict],
    w3c_capabilities: Optional[Dict[str, Any]],
    constraints: Optional[ConstraintsSpec] = None,
    default_capabilities: Optional[CapabilityDict] = None,
    matcher: Optional[Matcher] = None,
    config: Optional[NegotiationConfig] = None,
) -> NegotiationResult:
    """Take the caps that were provided in the request and translate them
    into caps that can be used by the inner drivers.

    None of the given dicts is mutated.

    Args:
        jsonwp_capabilities: Legacy flat capabilities, informational only
        w3c_capabilities: `{"alwaysMatch": ..., "firstMatch": [...]}`
        constraints: Rules the matched capabilities must satisfy
        default_capabilities: Values used where the request sets nothing
        matcher: Matching engine, match_capabilities by default
        config: Vendor prefix and related settings

    Returns:
        The negotiation result. Matching failures are reported through its
        error field rather than raised.

    Any exception raised by the matcher, including a malformed constraint
    rule, ends up as a CapabilityMatchError on the result.
    """
    config = config or NegotiationConfig()
    prefix = config.vendor_prefix
    if matcher is None:
        matcher = functools.partial(match_capabilities, prefix=prefix)

    has_w3c_caps = is_plain_dict(w3c_capabilities) and (
        ALWAYS_MATCH in w3c_capabilities or FIRST_MATCH in w3c_capabilities
    )
    has_jsonwp_caps = is_plain_dict(jsonwp_capabilities)

    if not has_w3c_caps:
        return NegotiationResult(error=MissingW3CCapabilitiesError())

    processed_jsonwp_capabilities = None

    jsonwp_capabilities = copy.deepcopy(jsonwp_capabilities)
    w3c_capabilities = copy.deepcopy(w3c_capabilities)
    default_capabilities = copy.deepcopy(default_capabilities) or {}
    constraints = constraints or {}

    if default_capabilities:
        apply_default_caps(w3c_capabilities, default_capabilities, prefix)
        if has_jsonwp_caps:
            jsonwp_capabilities = {
                **remove_prefixes(default_capabilities, prefix),
                **jsonwp_capabilities,
            }

    if has_jsonwp_caps:
        processed_jsonwp_capabilities = dict(jsonwp_capabilities)

    # https://www.w3.org/TR/webdriver/#processing-capabilities
    try:
        desired_caps = matcher(w3c_capabilities, constraints, True)
    except Exception as e:
        error = e if isinstance(e, CapabilityMatchError) else _wrap_match_error(e)
        logger.info(f"Could not parse W3C capabilities: {error}")
        return NegotiationResult(
            desired_caps={},
            processed_jsonwp_capabilities=processed_jsonwp_capabilities,
            processed_w3c_capabilities=None,
            protocol=Protocol.W3C,
            error=error,
        )

    # Only the matched caps remain, so no further alternatives are needed
    processed_w3c_capabilities = {
        ALWAYS_MATCH: insert_prefixes(desired_caps, prefix),
        FIRST_MATCH: [{}],
    }

    return NegotiationResult(
        desired_caps=desired_caps,
        processed_jsonwp_capabilities=processed_jsonwp_capabilities,
        processed_w3c_capabilities=processed_w3c_capabilities,
        protocol=Protocol.W3C,
    )
