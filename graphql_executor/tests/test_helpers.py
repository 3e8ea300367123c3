# Copyright 2021-present Kensho Technologies, LLC.
"""Common test data and helper functions."""
import asyncio
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

from graphql.language.parser import parse

from ..execution import ExecutionResult, execute_async, execute_sync
from ..schema import (
    EnumType,
    Field,
    GraphQLDate,
    GraphQLDecimal,
    GraphQLInt,
    GraphQLString,
    InterfaceType,
    ListType,
    NonNullType,
    ObjectType,
    Schema,
    UnionType,
)


class Species(Enum):
    DOG = "dog"
    CAT = "cat"
    RAT = "rat"


ANIMALS = {
    "Fido": {
        "__typename": "Animal",
        "name": "Fido",
        "species": Species.DOG,
        "birthday": date(2015, 3, 21),
        "net_worth": Decimal("12.50"),
        "friend_names": ["Tom"],
    },
    "Tom": {
        "__typename": "Animal",
        "name": "Tom",
        "species": Species.CAT,
        "birthday": date(2016, 7, 4),
        "net_worth": Decimal("3"),
        "friend_names": ["Fido", "Jerry"],
    },
    "Jerry": {
        "__typename": "Animal",
        "name": "Jerry",
        "species": Species.RAT,
        "birthday": date(2017, 1, 1),
        "net_worth": Decimal("0.01"),
        "friend_names": [],
    },
}

FOODS = {
    "Cheese": {"__typename": "Food", "name": "Cheese", "calories": 400},
    "Kibble": {"__typename": "Food", "name": "Kibble", "calories": 350},
}


def _resolve_friends(animal: Dict[str, Any], args: Dict[str, Any], _context: Any, _info: Any):
    friends = [ANIMALS[friend_name] for friend_name in animal["friend_names"]]
    limit = args.get("limit")
    return friends if limit is None else friends[:limit]


SpeciesEnum = EnumType.from_python_enum(Species)

EntityInterface = InterfaceType("Entity", lambda: {"name": NonNullType(GraphQLString)})

AnimalType = ObjectType(
    "Animal",
    lambda: {
        "name": NonNullType(GraphQLString),
        "species": SpeciesEnum,
        "birthday": GraphQLDate,
        "net_worth": GraphQLDecimal,
        "friends": Field(
            ListType(NonNullType(AnimalType)),
            args={"limit": GraphQLInt},
            resolve=_resolve_friends,
            complexity=lambda child_complexity, args: (args.get("limit") or 10)
            * child_complexity,
        ),
    },
    interfaces=lambda: [EntityInterface],
)

FoodType = ObjectType(
    "Food",
    {"name": NonNullType(GraphQLString), "calories": GraphQLInt},
    interfaces=[EntityInterface],
)

FoodOrAnimalUnion = UnionType("FoodOrAnimal", [FoodType, AnimalType])

QueryType = ObjectType(
    "Query",
    {
        "animal": Field(
            AnimalType,
            args={"name": NonNullType(GraphQLString)},
            resolve=lambda _root, args, _context, _info: ANIMALS.get(args["name"]),
        ),
        "animals": Field(
            ListType(NonNullType(AnimalType)),
            resolve=lambda _root, _args, _context, _info: list(ANIMALS.values()),
        ),
        "entities": Field(
            ListType(EntityInterface),
            resolve=lambda _root, _args, _context, _info: (
                list(ANIMALS.values()) + list(FOODS.values())
            ),
        ),
        "search": Field(
            ListType(FoodOrAnimalUnion),
            args={"name": GraphQLString},
            resolve=lambda _root, args, _context, _info: [
                entity
                for entity in list(FOODS.values()) + list(ANIMALS.values())
                if args.get("name") is None or args["name"] in entity["name"]
            ],
        ),
    },
)


def get_animal_schema() -> Schema:
    """Return a schema over the animal and food test data, with interfaces and unions."""
    return Schema(QueryType, types=[FoodType])


def execute_query(
    schema: Schema,
    query: str,
    root_value: Any = None,
    variable_values: Optional[Dict[str, Any]] = None,
    **kwargs: Any,
) -> ExecutionResult:
    """Parse the query and execute it, requiring execution to complete synchronously."""
    return execute_sync(
        schema, parse(query), root_value=root_value, variable_values=variable_values, **kwargs
    )


def execute_query_async(
    schema: Schema,
    query: str,
    root_value: Any = None,
    variable_values: Optional[Dict[str, Any]] = None,
    **kwargs: Any,
) -> ExecutionResult:
    """Parse the query and execute it on a fresh event loop, waiting for the result."""
    return asyncio.run(
        execute_async(
            schema,
            parse(query),
            root_value=root_value,
            variable_values=variable_values,
            **kwargs,
        )
    )


def get_error_messages(result: ExecutionResult):
    return [error.message for error in result.errors]


def get_error_paths(result: ExecutionResult):
    return [error.path for error in result.errors]
