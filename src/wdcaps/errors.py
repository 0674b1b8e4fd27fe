"""Error taxonomy for capability negotiation and extension argument parsing

Capability matching failures are reported back to the caller as data on the
negotiation result. Everything under ArgumentError is raised synchronously
while configuration is being loaded.
"""

from typing import List, Optional


class CapabilityError(Exception):
    """Base capability error"""
    pass


class MissingW3CCapabilitiesError(CapabilityError):
    """No usable W3C capabilities were provided"""
    def __init__(self, message: str = "W3C capabilities should be provided"):
        super().__init__(message)


class CapabilityMatchError(CapabilityError):
    """No firstMatch alternative satisfies the constraints"""
    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = list(errors or [])


class InvalidConstraintError(CapabilityError):
    """Constraint rule cannot be compiled"""
    def __init__(self, name: str, issue: str):
        super().__init__(f"Constraint for '{name}' is invalid: {issue}")
        self.name = name
        self.issue = issue


class ConfigError(CapabilityError):
    """Configuration could not be resolved"""
    pass


class ArgumentError(CapabilityError):
    """Base error for driver and plugin arguments"""
    pass


class UnknownArgumentError(ArgumentError):
    """Argument name is not declared in the constraints"""
    def __init__(self, argument_name: str, known_args: List[str]):
        super().__init__(
            f'"{argument_name}" is not a recognized key are you sure it\'s in the list '
            f"of supported keys? {known_args}"
        )
        self.argument_name = argument_name
        self.known_args = known_args


class InvalidArgumentShapeError(ArgumentError):
    """Argument block is not a plain dictionary"""
    def __init__(self, message: str = "Driver or plugin arguments must be plain objects"):
        super().__init__(message)


class ArgumentValidationError(ArgumentError):
    """Arguments violate their constraints"""
    def __init__(self, details: List[str]):
        joined = "\n".join(f"  - {d}" for d in details)
        super().__init__(f"Invalid or unsupported arguments:\n{joined}")
        self.details = details


class StructuredTextError(ArgumentError):
    """Source is neither valid JSON nor a readable JSON file"""
    def __init__(self, source: str, reason: str):
        super().__init__(f"'{source}' is not a valid JSON string or file: {reason}")
        self.source = source
        self.reason = reason
