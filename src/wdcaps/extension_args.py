"""Driver and plugin argument parsing

Extension arguments arrive as one JSON blob (inline or a file path) keyed by
extension name:

    {"uiautomator2": {"reboot": true}, "images": {"threshold": 0.4}}

Each extension declares constraints for the arguments it accepts. Unknown
names are rejected outright rather than dropped.
"""

from typing import Any, Callable, Dict, Optional

from wdcaps.capability import ConstraintsSpec, is_plain_dict
from wdcaps.constraints import validate_caps
from wdcaps.errors import InvalidArgumentShapeError, UnknownArgumentError
from wdcaps.loader import load_structured_text


Loader = Callable[[str], Dict[str, Any]]
Validator = Callable[[Dict[str, Any], ConstraintsSpec], Dict[str, Any]]


def parse_extension_args(
    extension_args: Optional[str],
    extension_name: str,
    loader: Loader = load_structured_text,
) -> Dict[str, Any]:
    """Select the arguments for one extension from the blob

    Returns:
        The extension's arguments, empty if the blob is missing or has no
        entry for the extension

    Raises:
        InvalidArgumentShapeError: the extension's entry is not a dict
        StructuredTextError: the blob cannot be parsed
    """
    if not isinstance(extension_args, str):
        return {}

    parsed_extension_args = loader(extension_args)
    if extension_name not in parsed_extension_args:
        return {}

    extension_specific_args = parsed_extension_args[extension_name]
    if not is_plain_dict(extension_specific_args):
        raise InvalidArgumentShapeError()
    return extension_specific_args


def parse_known_args(driver_plugin_args: Dict[str, Any], args_constraints: ConstraintsSpec) -> Dict[str, Any]:
    """Accept arguments only if every name is declared in the constraints"""
    known_arg_names = list(args_constraints.keys())
    args: Dict[str, Any] = {}
    for arg_name, arg_value in driver_plugin_args.items():
        if arg_name not in args_constraints:
            raise UnknownArgumentError(arg_name, known_arg_names)
        args[arg_name] = arg_value
    return args


def parse_driver_plugin_args(
    args: Dict[str, Any],
    driver_plugin_args: Dict[str, Any],
    args_constraints: ConstraintsSpec,
    validator: Validator = validate_caps,
) -> Dict[str, Any]:
    """Combine base args with validated driver or plugin args

    If driver_plugin_args or args_constraints is empty, args is returned
    as is. Otherwise a new dict is returned in which validated values win
    over args.

    Raises:
        UnknownArgumentError: an argument is not declared
        ArgumentValidationError: an argument violates its constraint
    """
    if not driver_plugin_args or not args_constraints:
        return args

    parsed_args = parse_known_args(driver_plugin_args, args_constraints)
    parsed_args = validator(parsed_args, args_constraints)
    return {**args, **parsed_args}
