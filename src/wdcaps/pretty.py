"""Human readable rendering of argument dicts for logs

    {"port": 4723, "caps": {"platformName": "Android"}}

is logged as

      port: 4723
      caps: {
        platformName: Android
      }
"""

import logging
from typing import Any, Dict, List, Optional

_logger = logging.getLogger(__name__)


def _value_lines(obj: Any, indent: str = "  ") -> List[str]:
    if isinstance(obj, dict):
        pairs = list(obj.items())
    elif isinstance(obj, list):
        pairs = list(enumerate(obj))
    else:
        return [str(obj)]

    lines = ["{"]
    for name, value in pairs:
        if not isinstance(value, (dict, list)):
            lines.append(f"{indent}  {name}: {value}")
        else:
            nested = _value_lines(value, f"{indent}  ")
            lines.append(f"{indent}  {name}: {nested[0]}")
            lines.extend(nested[1:])
    lines.append(f"{indent}}}")
    return lines


def format_object(args: Dict[str, Any]) -> List[str]:
    """Render args one line per scalar, nested dicts brace-delimited"""
    lines: List[str] = []
    for name, value in args.items():
        value_lines = _value_lines(value)
        lines.append(f"  {name}: {value_lines[0]}")
        lines.extend(value_lines[1:])
    return lines


def inspect_object(args: Dict[str, Any], logger: Optional[logging.Logger] = None) -> None:
    """Log args at info level, one line per call"""
    log = logger or _logger
    for line in format_object(args):
        log.info(line)
