# Copyright 2021-present Kensho Technologies, LLC.
from typing import Any, Dict, Optional
import unittest

from graphql.error import GraphQLError
from graphql.language.parser import parse

from ..ast_manipulation import get_fragments, get_operation
from ..exceptions import QueryCostError
from ..query_cost import check_query_cost, get_query_complexity, get_query_depth
from .test_helpers import get_animal_schema


def _get_depth(query: str) -> int:
    document = parse(query)
    return get_query_depth(get_operation(document), get_fragments(document))


def _get_complexity(query: str, variable_values: Optional[Dict[str, Any]] = None) -> int:
    document = parse(query)
    return get_query_complexity(
        get_animal_schema(), get_operation(document), get_fragments(document), variable_values
    )


def _check_cost(query: str, **kwargs: Any):
    document = parse(query)
    return check_query_cost(
        get_animal_schema(), get_operation(document), get_fragments(document), **kwargs
    )


class QueryDepthTests(unittest.TestCase):
    def test_depth(self) -> None:
        self.assertEqual(1, _get_depth("{ __typename }"))
        self.assertEqual(2, _get_depth("{ __typename animals { name } }"))
        self.assertEqual(3, _get_depth("{ animals { name friends { name } } }"))

    def test_depth_through_fragments(self) -> None:
        query = """
        {
            ...RootFields
            search { ... on Animal { friends { name } } }
        }

        fragment RootFields on Query {
            animal(name: "Fido") { ...AnimalFields }
        }

        fragment AnimalFields on Animal {
            friends { friends { name } }
        }
        """
        self.assertEqual(4, _get_depth(query))

    def test_recursive_fragments_terminate(self) -> None:
        query = """
        { animals { ...Recursive } }

        fragment Recursive on Animal { friends { ...Recursive name } }
        """
        self.assertEqual(3, _get_depth(query))


class QueryComplexityTests(unittest.TestCase):
    def test_default_field_cost(self) -> None:
        self.assertEqual(1, _get_complexity("{ __typename }"))
        self.assertEqual(3, _get_complexity("{ animals { name species } }"))
        self.assertEqual(
            3, _get_complexity("{ search { ... on Food { calories } ... on Animal { name } } }")
        )

    def test_field_complexity_function(self) -> None:
        self.assertEqual(
            3, _get_complexity('{ animal(name: "Fido") { friends(limit: 2) { name } } }')
        )
        self.assertEqual(11, _get_complexity('{ animal(name: "Fido") { friends { name } } }'))
        self.assertEqual(
            6,
            _get_complexity(
                'query ($n: Int) { animal(name: "Fido") { friends(limit: $n) { name } } }',
                {"n": 5},
            ),
        )

    def test_skipped_fields_do_not_count(self) -> None:
        query = """
        query ($withSpecies: Boolean!) {
            animals {
                name
                species @include(if: $withSpecies)
                ... @skip(if: true) { birthday }
            }
        }
        """
        self.assertEqual(2, _get_complexity(query, {"withSpecies": False}))
        self.assertEqual(3, _get_complexity(query, {"withSpecies": True}))

    def test_fragments_count_once_per_spread(self) -> None:
        query = """
        {
            first: animal(name: "Fido") { ...Names }
            second: animal(name: "Tom") { ...Names }
        }

        fragment Names on Animal { name friends(limit: 3) { name } }
        """
        # Each animal: name (1) + friends (3 * 1), plus one for the animal itself.
        self.assertEqual(10, _get_complexity(query))


class CheckQueryCostTests(unittest.TestCase):
    QUERY = '{ animal(name: "Fido") { friends { name } } }'  # depth 3, complexity 11

    def test_within_limits(self) -> None:
        self.assertEqual([], _check_cost(self.QUERY))
        self.assertEqual([], _check_cost(self.QUERY, max_depth=3, max_complexity=11))

    def test_limits_exceeded(self) -> None:
        with self.assertLogs("graphql_executor.query_cost", level="INFO"):
            errors = _check_cost(self.QUERY, max_depth=2, max_complexity=10)

        self.assertEqual(
            [
                "Max query depth should be 2 but got 3.",
                "Max query complexity should be 10 but got 11.",
            ],
            [error.message for error in errors],
        )
        for error in errors:
            self.assertIsInstance(error, GraphQLError)
            self.assertIsInstance(error.original_error, QueryCostError)

    def test_invalid_complexity_arguments_are_reported(self) -> None:
        errors = _check_cost(
            '{ animal(name: "Fido") { friends(limit: "many") { name } } }', max_complexity=100
        )
        self.assertEqual(
            ['Argument "limit" has invalid value "many".'], [error.message for error in errors]
        )
