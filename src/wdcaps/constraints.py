"""Constraint validation for capabilities and extension arguments

Constraints are declared per name with a small rule vocabulary:

    {
        "platformName": {"presence": True, "isString": True},
        "automationName": {"inclusionCaseInsensitive": ["UiAutomator2", "Espresso"]},
        "newCommandTimeout": {"isNumber": True, "default": 60},
    }

Rules are compiled to JSON Schema Draft-07 and checked with jsonschema.
Compiled validators are cached by the canonical JSON of their schema.
"""

import copy
import json
import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError

from wdcaps.capability import CapabilityDict, ConstraintsSpec, is_plain_dict
from wdcaps.errors import ArgumentValidationError, InvalidConstraintError

logger = logging.getLogger(__name__)


TYPE_RULES = {
    "isString": "string",
    "isNumber": "number",
    "isBoolean": "boolean",
    "isObject": "object",
    "isArray": "array",
}

# Rules consumed by ConstraintValidator.validate rather than by the schema
RUNTIME_RULES = ("deprecated", "default")


def _rule_to_schema(name: str, rule: Dict[str, Any]) -> Tuple[Dict[str, Any], bool]:
    """Compile one rule into a property schema and its required flag"""
    if not is_plain_dict(rule):
        raise InvalidConstraintError(name, "rule must be a dictionary")

    schema: Dict[str, Any] = {}
    types: List[str] = []
    required = False

    for key, value in rule.items():
        if key == "presence":
            if not value:
                continue
            required = True
            allow_empty = is_plain_dict(value) and bool(value.get("allowEmpty", False))
            if not allow_empty:
                schema["not"] = {"type": "null"}
                schema["minLength"] = 1
                schema["minItems"] = 1
                schema["minProperties"] = 1
        elif key in TYPE_RULES:
            if value:
                types.append(TYPE_RULES[key])
        elif key == "inclusion":
            if not isinstance(value, list):
                raise InvalidConstraintError(name, "'inclusion' must be a list")
            schema["enum"] = list(value)
        elif key == "inclusionCaseInsensitive":
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise InvalidConstraintError(name, "'inclusionCaseInsensitive' must be a list of strings")
            schema["anyOf"] = [
                {"type": "string", "pattern": f"(?i)^{re.escape(v)}$"} for v in value
            ]
        elif key in RUNTIME_RULES:
            continue
        else:
            raise InvalidConstraintError(name, f"unknown rule '{key}'")

    if len(types) == 1:
        schema["type"] = types[0]
    elif types:
        schema["type"] = types
    return schema, required


def constraints_to_schema(constraints: ConstraintsSpec, skip_presence: bool = False) -> Dict[str, Any]:
    """Compile constraints into a JSON Schema object schema

    Names not listed in the constraints are allowed through untouched.
    """
    properties: Dict[str, Any] = {}
    required: List[str] = []
    for name, rule in constraints.items():
        prop_schema, is_required = _rule_to_schema(name, rule)
        properties[name] = prop_schema
        if is_required and not skip_presence:
            required.append(name)

    schema: Dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


def _format_error(error) -> str:
    path = ".".join(str(p) for p in error.absolute_path)
    return f"'{path}' {error.message}" if path else error.message


class ConstraintValidator:
    """Constraint validator with caching for performance"""

    def __init__(self):
        self.schema_cache: Dict[str, Draft7Validator] = {}

    def _compile(self, schema: Dict[str, Any]) -> Draft7Validator:
        schema_key = json.dumps(schema, sort_keys=True, default=str)

        if schema_key not in self.schema_cache:
            try:
                Draft7Validator.check_schema(schema)
            except SchemaError as e:
                raise InvalidConstraintError("<constraints>", e.message)
            self.schema_cache[schema_key] = Draft7Validator(schema)

        return self.schema_cache[schema_key]

    def validate(
        self,
        caps: CapabilityDict,
        constraints: Optional[ConstraintsSpec] = None,
        skip_presence: bool = False,
    ) -> CapabilityDict:
        """Validate caps against constraints

        Returns a copy of caps with declared defaults filled in for absent
        names. Every violation is collected before raising.

        Raises:
            ArgumentValidationError: caps violate one or more rules
            InvalidConstraintError: a rule cannot be compiled
        """
        if not is_plain_dict(caps):
            raise ArgumentValidationError([f"must be an object, got {type(caps).__name__}"])

        constraints = constraints or {}
        validator = self._compile(constraints_to_schema(constraints, skip_presence))

        result = copy.deepcopy(caps)
        for name, rule in constraints.items():
            if not is_plain_dict(rule):
                continue
            if name in result and rule.get("deprecated"):
                logger.warning(f"The '{name}' capability has been deprecated and must not be used anymore")
            if name not in result and "default" in rule:
                result[name] = copy.deepcopy(rule["default"])

        errors = sorted(
            validator.iter_errors(result),
            key=lambda e: [str(p) for p in e.absolute_path],
        )
        if errors:
            raise ArgumentValidationError([_format_error(e) for e in errors])
        return result


_default_validator = ConstraintValidator()


def validate_caps(
    caps: CapabilityDict,
    constraints: Optional[ConstraintsSpec] = None,
    skip_presence: bool = False,
) -> CapabilityDict:
    """Validate caps with the shared validator"""
    return _default_validator.validate(caps, constraints, skip_presence)
