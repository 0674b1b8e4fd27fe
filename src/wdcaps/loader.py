"""Loading of structured text given inline or as a file path"""

import json
from pathlib import Path
from typing import Any, Dict

from wdcaps.capability import is_plain_dict
from wdcaps.errors import InvalidArgumentShapeError, StructuredTextError


def _is_file(source: str) -> bool:
    try:
        return Path(source).is_file()
    except (OSError, ValueError):
        # Name too long, or holds a NUL byte
        return False


def load_structured_text(source: str) -> Dict[str, Any]:
    """Parse a JSON object from a file path or from the text itself

    An existing file takes precedence over interpreting source as JSON.

    Raises:
        StructuredTextError: the file cannot be read or the JSON is invalid
        InvalidArgumentShapeError: the top-level value is not an object
    """
    if _is_file(source):
        try:
            with open(source, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StructuredTextError(source, str(e))
    else:
        try:
            data = json.loads(source)
        except json.JSONDecodeError as e:
            raise StructuredTextError(source, str(e))

    if not is_plain_dict(data):
        raise InvalidArgumentShapeError(
            f"Expected a JSON object in '{source}', got {type(data).__name__}"
        )
    return data
