"""W3C capability processing

Implements the "process capabilities" algorithm of the WebDriver standard
(https://www.w3.org/TR/webdriver/#processing-capabilities) as used by
vendor-prefixed drivers:

1. alwaysMatch and every firstMatch alternative must only contain standard
   or vendor-prefixed capability names
2. Vendor prefixes are stripped before validation and merging
3. alwaysMatch is validated (presence rules skipped), each firstMatch
   alternative is validated against the rules alwaysMatch does not cover
4. The first valid alternative that merges with alwaysMatch without a key
   collision is the match
"""

import json
import logging
from typing import Any, Dict, List, Optional

from wdcaps.capability import (
    ALWAYS_MATCH,
    FIRST_MATCH,
    CapabilityDict,
    ConstraintsSpec,
    is_plain_dict,
)
from wdcaps.constraints import validate_caps
from wdcaps.errors import ArgumentValidationError, CapabilityMatchError
from wdcaps.prefix import W3C_APPIUM_PREFIX, is_standard_cap

logger = logging.getLogger(__name__)


def find_non_prefixed_caps(payload: Dict[str, Any]) -> List[str]:
    """Names in alwaysMatch or firstMatch that lack a vendor prefix"""
    always_match = payload.get(ALWAYS_MATCH) or {}
    first_match = payload.get(FIRST_MATCH) or []

    names: List[str] = []
    for caps in [always_match, *first_match]:
        if not is_plain_dict(caps):
            continue
        for name in caps:
            if not is_standard_cap(name) and ":" not in name and name not in names:
                names.append(name)
    return names


def strip_prefixes(caps: CapabilityDict, prefix: str = W3C_APPIUM_PREFIX) -> CapabilityDict:
    """Strip the vendor prefix from capability names

    A standard capability sent with the vendor prefix is accepted but
    reported, since it never needed one. If the unprefixed name is sent
    as well, the unprefixed value is kept.
    """
    vendor = f"{prefix}:"
    stripped: Dict[str, Any] = {}
    bad_prefixed: List[str] = []

    for name, value in caps.items():
        if name.startswith(vendor):
            name = name[len(vendor):]
            if is_standard_cap(name):
                bad_prefixed.append(name)
                if name in caps:
                    continue
        stripped[name] = value

    if bad_prefixed:
        logger.warning(
            f"The capabilities {bad_prefixed} are standard capabilities and do not require "
            f"the '{vendor}' prefix"
        )
    return stripped


def merge_caps(primary: CapabilityDict, secondary: CapabilityDict) -> CapabilityDict:
    """Merge two capability sets that must not share any name"""
    for name in secondary:
        if name in primary:
            raise CapabilityMatchError(
                f"Property '{name}' should not exist on both primary ({json.dumps(primary, default=str)}) "
                f"and secondary ({json.dumps(secondary, default=str)}) objects"
            )
    return {**primary, **secondary}


def match_capabilities(
    payload: Dict[str, Any],
    constraints: Optional[ConstraintsSpec] = None,
    strict: bool = True,
    prefix: str = W3C_APPIUM_PREFIX,
) -> CapabilityDict:
    """Find the capabilities matching a W3C payload

    Args:
        payload: `{"alwaysMatch": {...}, "firstMatch": [{...}, ...]}`
        constraints: Rules every matched capability set must satisfy
        strict: Validate against constraints; otherwise only merge
        prefix: Vendor prefix stripped from capability names

    Returns:
        The matched capabilities with vendor prefixes removed

    Raises:
        CapabilityMatchError: payload is malformed or nothing matches
    """
    if not is_plain_dict(payload):
        raise CapabilityMatchError("The capabilities argument was not valid: it must be an object")

    constraints = constraints or {}
    required_caps = payload.get(ALWAYS_MATCH, {})
    all_first_match = payload.get(FIRST_MATCH, [{}])

    if not is_plain_dict(required_caps):
        raise CapabilityMatchError(
            "The capabilities.alwaysMatch argument was not valid: it must be an object"
        )
    if not isinstance(all_first_match, list) or not all(is_plain_dict(c) for c in all_first_match):
        raise CapabilityMatchError(
            "The capabilities.firstMatch argument was not valid: it must be a list of objects"
        )
    if not all_first_match:
        all_first_match = [{}]

    non_prefixed = find_non_prefixed_caps(payload)
    if non_prefixed:
        raise CapabilityMatchError(
            "All non-standard capabilities should have a vendor prefix. "
            f"The following capabilities did not have one: {', '.join(non_prefixed)}"
        )

    required_caps = strip_prefixes(required_caps, prefix)
    validation_errors: List[str] = []

    # Constraint defaults are filled in on the merged caps only
    if strict:
        try:
            validate_caps(required_caps, constraints, skip_presence=True)
        except ArgumentValidationError as e:
            raise CapabilityMatchError(
                f"Could not validate capabilities.alwaysMatch: {e}", e.details
            )

    # Rules already satisfied by alwaysMatch must not be applied to firstMatch
    filtered_constraints = {
        name: rule for name, rule in constraints.items() if name not in required_caps
    }

    validated_first_match: List[CapabilityDict] = []
    for index, first_match_caps in enumerate(all_first_match):
        stripped = strip_prefixes(first_match_caps, prefix)
        if strict:
            try:
                validate_caps(stripped, filtered_constraints)
            except ArgumentValidationError as e:
                logger.warning(f"Dropping firstMatch alternative #{index}: {e}")
                validation_errors.append(str(e))
                continue
        validated_first_match.append(stripped)

    for first_match_caps in validated_first_match:
        try:
            matched_caps = merge_caps(required_caps, first_match_caps)
        except CapabilityMatchError as e:
            logger.warning(str(e))
            validation_errors.append(str(e))
            continue
        if not strict:
            return matched_caps
        try:
            return validate_caps(matched_caps, constraints)
        except ArgumentValidationError as e:
            validation_errors.append(str(e))

    raise CapabilityMatchError(
        f"Could not find matching capabilities from {json.dumps(payload, default=str)}:\n"
        + "\n".join(validation_errors),
        validation_errors,
    )
