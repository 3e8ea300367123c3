# Copyright 2021-present Kensho Technologies, LLC.
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional

# C-based module confuses pylint, which is why we disable the check below.
from ciso8601 import parse_datetime  # pylint: disable=no-name-in-module
from graphql.language.ast import StringValueNode, ValueNode
from graphql.language.printer import print_ast

from ..exceptions import ParseValueError, SerializationError
from .definition import ScalarType


def _make_string_literal_parser(
    type_name: str, parse_value: Callable[[Any], Any]
) -> Callable[..., Any]:
    """Return a parse_literal function that applies parse_value to string literals."""

    def parse_literal(value_node: ValueNode, _variables: Optional[Dict[str, Any]] = None) -> Any:
        if not isinstance(value_node, StringValueNode):
            raise ParseValueError(
                f"{type_name} cannot represent a non string value: {print_ast(value_node)}"
            )
        return parse_value(value_node.value)

    return parse_literal


def _serialize_date(value: Any) -> str:
    """Serialize a Date object to its proper ISO-8601 representation."""
    # Python datetime.datetime is a subclass of datetime.date, but in this case, the two are not
    # interchangeable. Rather than using isinstance, we will therefore check for exact type
    # equality.
    if type(value) != date:
        raise SerializationError(
            "Expected argument to be a python date object. "
            "Got {} of type {} instead.".format(value, type(value))
        )
    return value.isoformat()


def _parse_date_value(value: Any) -> date:
    """Deserialize a Date object from its proper ISO-8601 representation."""
    if type(value) == date:
        # We prefer exact type equality instead of isinstance() because datetime objects
        # are subclasses of date but are not interchangeable for dates for our purposes.
        return value
    elif isinstance(value, str):
        # ciso8601 only supports parsing into datetime objects, not date objects.
        # "YYYY-MM-DD" strings get parsed into datetimes with hour/minute/second/microsecond
        # set to 0, and tzinfo=None. Parsing must not implicitly lose precision, so before
        # converting the parsed datetime into a date value, we check these fields are as expected.
        try:
            dt = parse_datetime(value)
        except ValueError as e:
            raise ParseValueError(f"Invalid ISO-8601 date string {repr(value)}: {e}") from e

        if (
            dt.hour != 0
            or dt.minute != 0
            or dt.second != 0
            or dt.microsecond != 0
            or dt.tzinfo is not None
        ):
            raise ParseValueError(
                f"Expected an ISO-8601 date string in 'YYYY-MM-DD' format, but got a datetime "
                f"string with a non-empty time component. This is not supported, since converting "
                f"it to a date would result in an implicit loss of precision. Received value "
                f"{repr(value)}, parsed as {dt}."
            )

        return dt.date()
    else:
        raise ParseValueError(
            f"Expected a date object or its ISO-8601 'YYYY-MM-DD' string representation. "
            f"Got {value} of type {type(value)} instead."
        )


def _serialize_datetime(value: Any) -> str:
    """Serialize a DateTime object to its proper ISO-8601 representation."""
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.isoformat()
    else:
        raise SerializationError(
            f"Expected a timezone-naive datetime object. Got {value} of type {type(value)} instead."
        )


def _parse_datetime_value(value: Any) -> datetime:
    """Deserialize a DateTime object from a date/datetime or a ISO-8601 string representation."""
    if isinstance(value, datetime) and value.tzinfo is None:
        return value
    elif isinstance(value, str):
        try:
            dt = parse_datetime(value)
        except ValueError as e:
            raise ParseValueError(f"Invalid ISO-8601 datetime string {repr(value)}: {e}") from e

        if dt.tzinfo is not None:
            raise ParseValueError(
                f"Expected a timezone-naive datetime value, but got a timezone-aware datetime "
                f"string. This is not supported, since discarding the timezone component would "
                f"result in an implicit loss of precision. Received value {repr(value)}, "
                f"parsed as {dt}."
            )

        return dt
    elif type(value) == date:
        # The date type is a supertype of datetime. We check for exact type equality
        # rather than using isinstance(), to avoid having this branch get hit
        # by timezone-aware datetimes (i.e. ones that fail the value.tzinfo is None check above).
        #
        # This is a widening conversion (there's no loss of precision) so we allow it
        # to be implicit.
        return datetime(value.year, value.month, value.day)
    else:
        raise ParseValueError(
            f"Expected a timezone-naive datetime or an ISO-8601 string representation parseable "
            f"by the ciso8601 library. Got {value} of type {type(value)} instead."
        )


def _serialize_decimal(value: Any) -> str:
    """Serialize a Decimal, or any value convertible to one, as a decimal-format string."""
    # isinstance(True, int) returns True, so we explicitly forbid bool.
    if isinstance(value, bool) or not isinstance(value, (Decimal, int, float, str)):
        raise SerializationError(f"Decimal cannot represent value {value} of type {type(value)}.")
    if isinstance(value, str):
        try:
            return str(Decimal(value))
        except InvalidOperation as e:
            raise SerializationError(f"Decimal cannot represent value {repr(value)}.") from e
    return str(value)


def _parse_decimal_value(value: Any) -> Decimal:
    """Deserialize a Decimal from a Decimal, an int, a float or a decimal-format string."""
    # isinstance(True, int) returns True, so we explicitly forbid bool.
    if isinstance(value, bool) or not isinstance(value, (Decimal, int, float, str)):
        raise ParseValueError(f"Decimal cannot represent value {value} of type {type(value)}.")
    try:
        return Decimal(value)
    except InvalidOperation as e:
        raise ParseValueError(f"Decimal cannot represent value {repr(value)}.") from e


GraphQLDate = ScalarType(
    name="Date",
    description=(
        "The `Date` scalar type represents day-accuracy date objects. "
        "Values are serialized following the ISO-8601 datetime format specification, "
        'for example "2017-03-21". Serialization and parsing support is guaranteed for the format '
        "described here, with the year, month and day fields included and separated by dashes as "
        "in the example. Implementations are allowed to support additional serialization formats, "
        "if they so choose."
        # Parsing uses the ciso8601 library, so it additionally supports the subset of
        # the ISO-8601 standard supported by that library.
    ),
    serialize=_serialize_date,
    parse_value=_parse_date_value,
    parse_literal=_make_string_literal_parser("Date", _parse_date_value),
)


GraphQLDateTime = ScalarType(
    name="DateTime",
    description=(
        "The `DateTime` scalar type represents timezone-naive timestamps with up to microsecond "
        "accuracy. Values are serialized following the ISO-8601 datetime format specification, "
        'for example "2017-03-21T12:34:56.012345" or "2017-03-21T12:34:56". Serialization and '
        "parsing support is guaranteed for the format described here, with all fields down to "
        "and including seconds required to be included, and fractional seconds optional, as in "
        "the example. Implementations are allowed to support additional serialization formats, "
        "if they so choose."
    ),
    serialize=_serialize_datetime,
    parse_value=_parse_datetime_value,
    parse_literal=_make_string_literal_parser("DateTime", _parse_datetime_value),
)


GraphQLDecimal = ScalarType(
    name="Decimal",
    description=(
        "The `Decimal` scalar type is an arbitrary-precision decimal number object "
        "useful for representing values that should never be rounded, such as "
        "currency amounts. Values are allowed to be transported as either a native Decimal "
        "type, if the underlying transport allows that, or serialized as strings in "
        'decimal format, without thousands separators and using a "." as the '
        'decimal separator: for example, "12345678.012345".'
    ),
    serialize=_serialize_decimal,
    parse_value=_parse_decimal_value,
    parse_literal=_make_string_literal_parser("Decimal", _parse_decimal_value),
)


CUSTOM_SCALAR_TYPES: Mapping[str, ScalarType] = MappingProxyType(
    {
        scalar_type.name: scalar_type
        for scalar_type in (GraphQLDate, GraphQLDateTime, GraphQLDecimal)
    }
)
