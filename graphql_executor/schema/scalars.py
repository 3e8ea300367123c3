# Copyright 2021-present Kensho Technologies, LLC.
"""The five scalar types built into GraphQL: Int, Float, String, Boolean and ID.

Serialization (producing a response) is lenient in the same way across all five: numeric strings
count as numbers, booleans count as 0 and 1, and so on. Parsing (consuming input values and query
literals) is strict and only accepts values of the matching kind.
"""
from collections.abc import Mapping, Set
from decimal import Decimal
import math
import numbers
import re
from types import MappingProxyType
from typing import Any, Dict, Mapping as MappingType, NoReturn, Optional, Type

from graphql.language.ast import (
    BooleanValueNode,
    FloatValueNode,
    IntValueNode,
    StringValueNode,
    ValueNode,
)
from graphql.language.printer import print_ast

from ..exceptions import CoercionError, ParseValueError, SerializationError
from ..global_utils import has_own_str, print_safe
from .definition import ScalarType


# Int is a signed 32-bit integer.
MAX_INT = 2147483647
MIN_INT = -2147483648

# Decimal numbers with an optional sign, fractional part and exponent, optionally surrounded
# by whitespace. Notably excludes "nan", "inf" and friends, which float() would accept.
_NUMERIC_STRING_REGEX = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")

# Values that never have a meaningful string form, even though Python can print them.
_NON_STRINGIFIABLE_TYPES = (list, tuple, Set, Mapping, bytes, bytearray)


def _is_number(value: Any) -> bool:
    """Return True for real numbers, excluding booleans."""
    return not isinstance(value, bool) and isinstance(value, (numbers.Real, Decimal))


def _numeric_value_as_float(value: Any) -> Optional[float]:
    """Convert numbers and numeric strings to float, returning None for anything else."""
    if isinstance(value, str):
        if not _NUMERIC_STRING_REGEX.match(value):
            return None
        return float(value)
    elif _is_number(value):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    else:
        return None


def _raise_non_integer(value: Any, exception_class: Type[CoercionError]) -> NoReturn:
    raise exception_class(f"Int cannot represent non-integer value: {print_safe(value)}")


def _raise_out_of_range(value: Any, exception_class: Type[CoercionError]) -> NoReturn:
    raise exception_class(
        f"Int cannot represent non 32-bit signed integer value: {print_safe(value)}"
    )


def _float_to_int(
    float_value: float, original_value: Any, exception_class: Type[CoercionError]
) -> int:
    """Convert an integral float within the 32-bit range to int, raising otherwise."""
    if math.isnan(float_value):
        _raise_non_integer(original_value, exception_class)
    if math.isinf(float_value):
        _raise_out_of_range(original_value, exception_class)
    if not float_value.is_integer():
        _raise_non_integer(original_value, exception_class)
    if not MIN_INT <= float_value <= MAX_INT:
        _raise_out_of_range(original_value, exception_class)
    return int(float_value)


# #######
# Int #
# #######


def _serialize_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)

    if isinstance(value, int):
        if not MIN_INT <= value <= MAX_INT:
            _raise_out_of_range(value, SerializationError)
        return value

    float_value = _numeric_value_as_float(value)
    if float_value is None:
        _raise_non_integer(value, SerializationError)
    return _float_to_int(float_value, value, SerializationError)


def _parse_int_value(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        _raise_non_integer(value, ParseValueError)

    if isinstance(value, int):
        if not MIN_INT <= value <= MAX_INT:
            _raise_out_of_range(value, ParseValueError)
        return value

    return _float_to_int(value, value, ParseValueError)


def _parse_int_literal(value_node: ValueNode, _variables: Optional[Dict[str, Any]] = None) -> int:
    if not isinstance(value_node, IntValueNode):
        raise ParseValueError(f"Int cannot represent non-integer value: {print_ast(value_node)}")

    num = int(value_node.value)
    if not MIN_INT <= num <= MAX_INT:
        raise ParseValueError(
            f"Int cannot represent non 32-bit signed integer value: {value_node.value}"
        )
    return num


GraphQLInt = ScalarType(
    name="Int",
    description=(
        "The `Int` scalar type represents non-fractional signed whole numeric values. "
        "Int can represent values between -(2^31) and 2^31 - 1."
    ),
    serialize=_serialize_int,
    parse_value=_parse_int_value,
    parse_literal=_parse_int_literal,
)


# #########
# Float #
# #########


def _serialize_float(value: Any) -> float:
    if isinstance(value, bool):
        return float(value)

    float_value = _numeric_value_as_float(value)
    if float_value is None or not math.isfinite(float_value):
        raise SerializationError(f"Float cannot represent non numeric value: {print_safe(value)}")
    return float_value


def _parse_float_value(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseValueError(f"Float cannot represent non numeric value: {print_safe(value)}")

    try:
        float_value = float(value)
    except OverflowError:
        float_value = math.inf
    if not math.isfinite(float_value):
        raise ParseValueError(f"Float cannot represent non numeric value: {print_safe(value)}")
    return float_value


def _parse_float_literal(
    value_node: ValueNode, _variables: Optional[Dict[str, Any]] = None
) -> float:
    if not isinstance(value_node, (IntValueNode, FloatValueNode)):
        raise ParseValueError(f"Float cannot represent non numeric value: {print_ast(value_node)}")
    return float(value_node.value)


GraphQLFloat = ScalarType(
    name="Float",
    description=(
        "The `Float` scalar type represents signed double-precision fractional values "
        "as specified by [IEEE 754](https://en.wikipedia.org/wiki/IEEE_floating_point)."
    ),
    serialize=_serialize_float,
    parse_value=_parse_float_value,
    parse_literal=_parse_float_literal,
)


# ##########
# String #
# ##########


def _serialize_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, _NON_STRINGIFIABLE_TYPES) or not has_own_str(value):
        raise SerializationError(f"String cannot represent value: {print_safe(value)}")
    return str(value)


def _parse_string_value(value: Any) -> str:
    if not isinstance(value, str):
        raise ParseValueError(f"String cannot represent a non string value: {print_safe(value)}")
    return value


def _parse_string_literal(
    value_node: ValueNode, _variables: Optional[Dict[str, Any]] = None
) -> str:
    if not isinstance(value_node, StringValueNode):
        raise ParseValueError(
            f"String cannot represent a non string value: {print_ast(value_node)}"
        )
    return value_node.value


GraphQLString = ScalarType(
    name="String",
    description=(
        "The `String` scalar type represents textual data, represented as UTF-8 "
        "character sequences. The String type is most often used by GraphQL to "
        "represent free-form human-readable text."
    ),
    serialize=_serialize_string,
    parse_value=_parse_string_value,
    parse_literal=_parse_string_literal,
)


# ###########
# Boolean #
# ###########


def _serialize_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if _is_number(value):
        return value != 0
    if isinstance(value, str):
        return value not in ("", "0")
    raise SerializationError(f"Boolean cannot represent value: {print_safe(value)}")


def _parse_boolean_value(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ParseValueError(
            f"Boolean cannot represent a non boolean value: {print_safe(value)}"
        )
    return value


def _parse_boolean_literal(
    value_node: ValueNode, _variables: Optional[Dict[str, Any]] = None
) -> bool:
    if not isinstance(value_node, BooleanValueNode):
        raise ParseValueError(
            f"Boolean cannot represent a non boolean value: {print_ast(value_node)}"
        )
    return value_node.value


GraphQLBoolean = ScalarType(
    name="Boolean",
    description="The `Boolean` scalar type represents `true` or `false`.",
    serialize=_serialize_boolean,
    parse_value=_parse_boolean_value,
    parse_literal=_parse_boolean_literal,
)


# ######
# ID #
# ######


def _serialize_id(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if (
        isinstance(value, (bool, float) + _NON_STRINGIFIABLE_TYPES)
        or value is None
        or not has_own_str(value)
    ):
        raise SerializationError(f"ID cannot represent value: {print_safe(value)}")
    return str(value)


def _parse_id_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise ParseValueError(f"ID cannot represent value: {print_safe(value)}")


def _parse_id_literal(value_node: ValueNode, _variables: Optional[Dict[str, Any]] = None) -> str:
    if not isinstance(value_node, (StringValueNode, IntValueNode)):
        raise ParseValueError(
            f"ID cannot represent a non-string and non-integer value: {print_ast(value_node)}"
        )
    return value_node.value


GraphQLID = ScalarType(
    name="ID",
    description=(
        "The `ID` scalar type represents a unique identifier, often used to "
        "refetch an object or as key for a cache. The ID type appears in a JSON "
        'response as a String; however, it is not intended to be human-readable. When expected '
        'as an input type, any string (such as `"4"`) or integer (such as `4`) input value '
        "will be accepted as an ID."
    ),
    serialize=_serialize_id,
    parse_value=_parse_id_value,
    parse_literal=_parse_id_literal,
)


SPECIFIED_SCALAR_TYPES: MappingType[str, ScalarType] = MappingProxyType(
    {
        scalar_type.name: scalar_type
        for scalar_type in (GraphQLString, GraphQLInt, GraphQLFloat, GraphQLBoolean, GraphQLID)
    }
)


def is_specified_scalar_type(type_: Any) -> bool:
    """Return True if the type is one of the five scalar types built into GraphQL."""
    return isinstance(type_, ScalarType) and SPECIFIED_SCALAR_TYPES.get(type_.name) is type_
