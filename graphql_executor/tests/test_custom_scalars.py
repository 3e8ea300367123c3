# Copyright 2021-present Kensho Technologies, LLC.
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
import unittest

from graphql.language.parser import parse_value

from ..exceptions import ParseValueError, SerializationError
from ..schema.custom_scalars import (
    CUSTOM_SCALAR_TYPES,
    GraphQLDate,
    GraphQLDateTime,
    GraphQLDecimal,
)


class DateScalarTests(unittest.TestCase):
    def test_serialize_date(self) -> None:
        self.assertEqual("2017-03-21", GraphQLDate.serialize(date(2017, 3, 21)))

        # Datetimes are dates in Python, but not in GraphQL.
        for invalid_value in (datetime(2017, 3, 21), "2017-03-21", None, 20170321):
            with self.assertRaises(SerializationError):
                GraphQLDate.serialize(invalid_value)

    def test_parse_date(self) -> None:
        self.assertEqual(date(2017, 3, 21), GraphQLDate.parse_value("2017-03-21"))
        self.assertEqual(date(2017, 3, 21), GraphQLDate.parse_value(date(2017, 3, 21)))
        self.assertEqual(date(2017, 3, 21), GraphQLDate.parse_literal(parse_value('"2017-03-21"')))

        invalid_values = (
            "2017-03-21T12:34:56",
            "not a date",
            "2017-13-45",
            datetime(2017, 3, 21),
            20170321,
        )
        for invalid_value in invalid_values:
            with self.assertRaises(ParseValueError):
                GraphQLDate.parse_value(invalid_value)

    def test_parse_date_literal_must_be_a_string(self) -> None:
        with self.assertRaises(ParseValueError) as context:
            GraphQLDate.parse_literal(parse_value("20170321"))
        self.assertEqual(
            "Date cannot represent a non string value: 20170321", str(context.exception)
        )


class DateTimeScalarTests(unittest.TestCase):
    def test_serialize_datetime(self) -> None:
        self.assertEqual(
            "2017-03-21T12:34:56.012345",
            GraphQLDateTime.serialize(datetime(2017, 3, 21, 12, 34, 56, 12345)),
        )
        self.assertEqual(
            "2017-03-21T12:34:56", GraphQLDateTime.serialize(datetime(2017, 3, 21, 12, 34, 56))
        )

        timezone_aware = datetime(2017, 3, 21, tzinfo=timezone(timedelta(hours=2)))
        for invalid_value in (timezone_aware, date(2017, 3, 21), "2017-03-21T12:34:56"):
            with self.assertRaises(SerializationError):
                GraphQLDateTime.serialize(invalid_value)

    def test_parse_datetime(self) -> None:
        self.assertEqual(
            datetime(2017, 3, 21, 12, 34, 56), GraphQLDateTime.parse_value("2017-03-21T12:34:56")
        )
        # Dates are widened to midnight on the same day.
        self.assertEqual(datetime(2017, 3, 21), GraphQLDateTime.parse_value(date(2017, 3, 21)))
        self.assertEqual(
            datetime(2017, 3, 21, 1, 2, 3),
            GraphQLDateTime.parse_literal(parse_value('"2017-03-21T01:02:03"')),
        )

        invalid_values = (
            "2017-03-21T12:34:56+02:00",
            "not a datetime",
            datetime(2017, 3, 21, tzinfo=timezone.utc),
            1490099696,
        )
        for invalid_value in invalid_values:
            with self.assertRaises(ParseValueError):
                GraphQLDateTime.parse_value(invalid_value)


class DecimalScalarTests(unittest.TestCase):
    def test_serialize_decimal(self) -> None:
        valid_values_and_results = [
            (Decimal("12.50"), "12.50"),
            (Decimal("-0.001"), "-0.001"),
            (3, "3"),
            ("12345678.012345", "12345678.012345"),
        ]
        for value, expected_result in valid_values_and_results:
            self.assertEqual(expected_result, GraphQLDecimal.serialize(value))

        for invalid_value in (True, None, "twelve", [1]):
            with self.assertRaises(SerializationError):
                GraphQLDecimal.serialize(invalid_value)

    def test_parse_decimal(self) -> None:
        self.assertEqual(Decimal("12.50"), GraphQLDecimal.parse_value("12.50"))
        self.assertEqual(Decimal(7), GraphQLDecimal.parse_value(7))
        self.assertEqual(Decimal("0.1"), GraphQLDecimal.parse_literal(parse_value('"0.1"')))

        for invalid_value in (False, None, "twelve", {"value": 1}):
            with self.assertRaises(ParseValueError):
                GraphQLDecimal.parse_value(invalid_value)

        with self.assertRaises(ParseValueError):
            GraphQLDecimal.parse_literal(parse_value("12.5"))

    def test_custom_scalar_types_by_name(self) -> None:
        self.assertEqual({"Date", "DateTime", "Decimal"}, set(CUSTOM_SCALAR_TYPES))
        self.assertIs(GraphQLDecimal, CUSTOM_SCALAR_TYPES["Decimal"])
