"""Settings directives embedded in capabilities

A capability named `settings[<name>]` (optionally vendor prefixed, e.g.
`appium:settings[ignoreUnimportantViews]`) carries the initial value of a
runtime setting rather than a capability. These are pulled out before the
capabilities are negotiated so that they do not trip up validation.
"""

import re
from typing import Any, Dict, Optional

from wdcaps.capability import CapabilityDict, is_plain_dict


SETTING_PATTERN = re.compile(r"\bsettings\[(\S+)\]\Z")


def extract_settings(caps: Optional[CapabilityDict]) -> Dict[str, Any]:
    """Pull setting directives out of caps

    The given dict is mutated: every matched key is deleted from it.

    Returns:
        Setting names mapped to their values, empty if there were none
    """
    if not is_plain_dict(caps) or not caps:
        return {}

    result: Dict[str, Any] = {}
    for key, value in list(caps.items()):
        match = SETTING_PATTERN.search(key)
        if not match:
            continue

        result[match.group(1)] = value
        del caps[key]
    return result
