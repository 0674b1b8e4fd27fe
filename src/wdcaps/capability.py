"""Capability value types

A capability value is any JSON-compatible value. The alias below spells out
the variants so that prefixing and merging keep their types.
"""

from typing import Any, Dict, List, Union

CapValue = Union[str, int, float, bool, None, Dict[str, "CapValue"], List["CapValue"]]
CapabilityDict = Dict[str, CapValue]
ConstraintsSpec = Dict[str, Dict[str, Any]]

ALWAYS_MATCH = "alwaysMatch"
FIRST_MATCH = "firstMatch"


def is_plain_dict(value: Any) -> bool:
    return isinstance(value, dict)
