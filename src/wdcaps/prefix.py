"""Vendor prefix handling for capability names

Standard W3C capabilities travel without a namespace. Every other capability
is namespaced as `<vendor>:<name>`, e.g. `appium:deviceName`. Only top-level
keys are transformed, nested dictionaries are left as they are.
"""

from typing import Any, Dict

from wdcaps.capability import CapabilityDict, is_plain_dict


W3C_APPIUM_PREFIX = "appium"

# https://www.w3.org/TR/webdriver/#dfn-table-of-standard-capabilities
STANDARD_CAPS = [
    "browserName",
    "browserVersion",
    "platformName",
    "acceptInsecureCerts",
    "pageLoadStrategy",
    "proxy",
    "setWindowRect",
    "timeouts",
    "unhandledPromptBehavior",
]


def is_standard_cap(name: str) -> bool:
    return name in STANDARD_CAPS


def insert_prefixes(caps: CapabilityDict, prefix: str = W3C_APPIUM_PREFIX) -> CapabilityDict:
    """Prefix every non-standard, non-namespaced capability name"""
    prefixed_caps: Dict[str, Any] = {}
    for name, value in caps.items():
        if is_standard_cap(name) or ":" in name:
            prefixed_caps[name] = value
        else:
            prefixed_caps[f"{prefix}:{name}"] = value
    return prefixed_caps


def remove_prefixes(caps: Any, prefix: str = W3C_APPIUM_PREFIX) -> Any:
    """Strip the vendor prefix from top-level keys

    Anything that is not a dict is returned unchanged.
    """
    if not is_plain_dict(caps):
        return caps

    return {remove_prefix(name, prefix): value for name, value in caps.items()}


def remove_prefix(key: str, prefix: str = W3C_APPIUM_PREFIX) -> str:
    vendor = f"{prefix}:"
    return key[len(vendor):] if key.startswith(vendor) else key
