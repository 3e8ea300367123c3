# Copyright 2021-present Kensho Technologies, LLC.
import json
import re
from typing import Any, Mapping, Optional

from .exceptions import InvariantViolation


NAME_REGEX = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")
RESERVED_NAME_PREFIX = "__"


def is_valid_name_error(name: Any) -> Optional[str]:
    """Return a description of why the given name is not a valid GraphQL name, or None if valid."""
    if not isinstance(name, str):
        return f"Expected name to be a string, but got: {print_safe(name)}."

    if name.startswith(RESERVED_NAME_PREFIX):
        return (
            f'Name "{name}" must not begin with "{RESERVED_NAME_PREFIX}", which is reserved '
            f"by GraphQL introspection."
        )

    if not NAME_REGEX.match(name):
        return f'Names must match /^[_a-zA-Z][_a-zA-Z0-9]*$/ but "{name}" does not.'

    return None


def assert_valid_name(name: Any) -> None:
    """Raise InvariantViolation if the given name is not a valid GraphQL name."""
    error_message = is_valid_name_error(name)
    if error_message is not None:
        raise InvariantViolation(error_message)


def has_own_str(value: Any) -> bool:
    """Return True if the value's class defines a string conversion beyond object's default."""
    return type(value).__str__ is not object.__str__


def print_safe(value: Any) -> str:
    """Render an arbitrary value for inclusion in an error message, without ever raising.

    Strings are printed as-is (or as "(empty string)"), None and booleans use their GraphQL
    spelling, lists and mappings are printed as JSON where possible, and objects without
    a string form of their own are printed by class name.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value if value else "(empty string)"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, (list, tuple, Mapping)):
        try:
            return json.dumps(value, default=_print_safe_json_default)
        except (TypeError, ValueError):
            return repr(value)
    class_description = f"instance of {type(value).__name__}"
    if has_own_str(value):
        try:
            return str(value)
        except Exception:  # pylint: disable=broad-except
            return class_description
    return class_description


def _print_safe_json_default(value: Any) -> str:
    """Fall back to print_safe for values nested inside lists and mappings."""
    return print_safe(value)
