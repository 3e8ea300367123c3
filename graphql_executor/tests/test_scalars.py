# Copyright 2021-present Kensho Technologies, LLC.
from typing import Any, List, Tuple
import unittest

from graphql.language.parser import parse_value

from ..exceptions import CoercionError, ParseValueError, SerializationError
from ..schema.scalars import (
    MAX_INT,
    MIN_INT,
    GraphQLBoolean,
    GraphQLFloat,
    GraphQLID,
    GraphQLInt,
    GraphQLString,
    is_specified_scalar_type,
)


class ObjectWithStr:
    def __str__(self) -> str:
        return "some id"


class ScalarSerializationTests(unittest.TestCase):
    def _assert_serialization_errors(
        self, scalar_type: Any, invalid_values_and_messages: List[Tuple[Any, str]]
    ) -> None:
        for value, expected_message in invalid_values_and_messages:
            with self.assertRaises(SerializationError) as context:
                scalar_type.serialize(value)
            self.assertEqual(expected_message, str(context.exception))

    def test_serialize_int(self) -> None:
        valid_values_and_results = [
            (1, 1),
            (123, 123),
            (0, 0),
            (-1, -1),
            (1e5, 100000),
            (1.0, 1),
            (-3.0, -3),
            ("1", 1),
            ("-1.0", -1),
            (" 42 ", 42),
            (True, 1),
            (False, 0),
            (MAX_INT, MAX_INT),
            (MIN_INT, MIN_INT),
        ]
        for value, expected_result in valid_values_and_results:
            result = GraphQLInt.serialize(value)
            self.assertEqual(expected_result, result)
            self.assertIsInstance(result, int)

        self._assert_serialization_errors(
            GraphQLInt,
            [
                (0.1, "Int cannot represent non-integer value: 0.1"),
                (1.1, "Int cannot represent non-integer value: 1.1"),
                (-1.1, "Int cannot represent non-integer value: -1.1"),
                ("-1.1", "Int cannot represent non-integer value: -1.1"),
                ("one", "Int cannot represent non-integer value: one"),
                ("", "Int cannot represent non-integer value: (empty string)"),
                (float("nan"), "Int cannot represent non-integer value: nan"),
                ([5], "Int cannot represent non-integer value: [5]"),
                (
                    9876504321,
                    "Int cannot represent non 32-bit signed integer value: 9876504321",
                ),
                (
                    -9876504321,
                    "Int cannot represent non 32-bit signed integer value: -9876504321",
                ),
                (1e100, "Int cannot represent non 32-bit signed integer value: 1e+100"),
                (-1e100, "Int cannot represent non 32-bit signed integer value: -1e+100"),
                (float("inf"), "Int cannot represent non 32-bit signed integer value: inf"),
                (MAX_INT + 1, "Int cannot represent non 32-bit signed integer value: 2147483648"),
            ],
        )

    def test_serialize_float(self) -> None:
        valid_values_and_results = [
            (1, 1.0),
            (0, 0.0),
            (-1, -1.0),
            (0.1, 0.1),
            (1.1, 1.1),
            (-1.1, -1.1),
            ("-1.1", -1.1),
            ("2", 2.0),
            (False, 0.0),
            (True, 1.0),
        ]
        for value, expected_result in valid_values_and_results:
            result = GraphQLFloat.serialize(value)
            self.assertEqual(expected_result, result)
            self.assertIsInstance(result, float)

        self._assert_serialization_errors(
            GraphQLFloat,
            [
                (float("nan"), "Float cannot represent non numeric value: nan"),
                (float("inf"), "Float cannot represent non numeric value: inf"),
                (float("-inf"), "Float cannot represent non numeric value: -inf"),
                ("one", "Float cannot represent non numeric value: one"),
                ("", "Float cannot represent non numeric value: (empty string)"),
                ([5], "Float cannot represent non numeric value: [5]"),
                ({"a": 1}, 'Float cannot represent non numeric value: {"a": 1}'),
            ],
        )

    def test_serialize_string(self) -> None:
        valid_values_and_results = [
            ("string", "string"),
            (1, "1"),
            (-1.1, "-1.1"),
            (True, "1"),
            (False, ""),
            (None, ""),
            (ObjectWithStr(), "some id"),
        ]
        for value, expected_result in valid_values_and_results:
            result = GraphQLString.serialize(value)
            self.assertEqual(expected_result, result)
            # Serialization is idempotent.
            self.assertEqual(result, GraphQLString.serialize(result))

        self._assert_serialization_errors(
            GraphQLString,
            [
                ([1], "String cannot represent value: [1]"),
                ({}, "String cannot represent value: {}"),
                (object(), "String cannot represent value: instance of object"),
            ],
        )

    def test_serialize_boolean(self) -> None:
        for truthy_value in (True, 1, "1", "string", 1.5, -1):
            self.assertIs(True, GraphQLBoolean.serialize(truthy_value))
        for falsy_value in (False, 0, "0", "", 0.0):
            self.assertIs(False, GraphQLBoolean.serialize(falsy_value))

        self._assert_serialization_errors(
            GraphQLBoolean,
            [
                ([], "Boolean cannot represent value: []"),
                ({"a": True}, 'Boolean cannot represent value: {"a": true}'),
                (object(), "Boolean cannot represent value: instance of object"),
            ],
        )

    def test_serialize_id(self) -> None:
        valid_values_and_results = [
            ("string", "string"),
            ("", ""),
            (123, "123"),
            (0, "0"),
            (-1, "-1"),
            (ObjectWithStr(), "some id"),
        ]
        for value, expected_result in valid_values_and_results:
            self.assertEqual(expected_result, GraphQLID.serialize(value))

        self._assert_serialization_errors(
            GraphQLID,
            [
                (True, "ID cannot represent value: true"),
                (False, "ID cannot represent value: false"),
                (1.5, "ID cannot represent value: 1.5"),
                ([1], "ID cannot represent value: [1]"),
                ({"id": 1}, 'ID cannot represent value: {"id": 1}'),
                (object(), "ID cannot represent value: instance of object"),
            ],
        )

    def test_serialization_errors_are_coercion_errors(self) -> None:
        with self.assertRaises(CoercionError):
            GraphQLInt.serialize("not a number")


class ScalarParsingTests(unittest.TestCase):
    def test_parse_int_value(self) -> None:
        self.assertEqual(1, GraphQLInt.parse_value(1))
        self.assertEqual(3, GraphQLInt.parse_value(3.0))

        invalid_values_and_messages = [
            ("1", "Int cannot represent non-integer value: 1"),
            (True, "Int cannot represent non-integer value: true"),
            (1.5, "Int cannot represent non-integer value: 1.5"),
            (None, "Int cannot represent non-integer value: null"),
            (MAX_INT + 1, "Int cannot represent non 32-bit signed integer value: 2147483648"),
        ]
        for value, expected_message in invalid_values_and_messages:
            with self.assertRaises(ParseValueError) as context:
                GraphQLInt.parse_value(value)
            self.assertEqual(expected_message, str(context.exception))

    def test_parse_float_value(self) -> None:
        self.assertEqual(1.0, GraphQLFloat.parse_value(1))
        self.assertEqual(1.5, GraphQLFloat.parse_value(1.5))

        for invalid_value in ("1.5", True, float("nan"), None, [1.0]):
            with self.assertRaises(ParseValueError):
                GraphQLFloat.parse_value(invalid_value)

    def test_parse_string_boolean_and_id_values(self) -> None:
        self.assertEqual("abc", GraphQLString.parse_value("abc"))
        self.assertIs(True, GraphQLBoolean.parse_value(True))
        self.assertEqual("123", GraphQLID.parse_value(123))
        self.assertEqual("abc", GraphQLID.parse_value("abc"))

        invalid_cases = [
            (GraphQLString, 1),
            (GraphQLString, True),
            (GraphQLBoolean, 1),
            (GraphQLBoolean, "true"),
            (GraphQLID, True),
            (GraphQLID, 1.5),
        ]
        for scalar_type, invalid_value in invalid_cases:
            with self.assertRaises(ParseValueError):
                scalar_type.parse_value(invalid_value)

    def test_parse_literals(self) -> None:
        self.assertEqual(123, GraphQLInt.parse_literal(parse_value("123")))
        self.assertEqual(1.5, GraphQLFloat.parse_literal(parse_value("1.5")))
        self.assertEqual(2.0, GraphQLFloat.parse_literal(parse_value("2")))
        self.assertEqual("abc", GraphQLString.parse_literal(parse_value('"abc"')))
        self.assertIs(False, GraphQLBoolean.parse_literal(parse_value("false")))
        self.assertEqual("123", GraphQLID.parse_literal(parse_value("123")))
        self.assertEqual("abc", GraphQLID.parse_literal(parse_value('"abc"')))

        invalid_cases = [
            (GraphQLInt, "1.5"),
            (GraphQLInt, "2147483648"),
            (GraphQLInt, '"123"'),
            (GraphQLFloat, '"1.5"'),
            (GraphQLString, "123"),
            (GraphQLBoolean, '"true"'),
            (GraphQLID, "1.5"),
            (GraphQLID, "ENUM_VALUE"),
        ]
        for scalar_type, literal in invalid_cases:
            with self.assertRaises(ParseValueError):
                scalar_type.parse_literal(parse_value(literal))

    def test_is_specified_scalar_type(self) -> None:
        for scalar_type in (GraphQLInt, GraphQLFloat, GraphQLString, GraphQLBoolean, GraphQLID):
            self.assertTrue(is_specified_scalar_type(scalar_type))
        self.assertFalse(is_specified_scalar_type("Int"))
