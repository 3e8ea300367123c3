# Copyright 2021-present Kensho Technologies, LLC.
"""Commonly-used functions and data types from this package."""
from typing import Any, Dict, Optional

from graphql.error import GraphQLError

from .ast_manipulation import get_fragments, get_operation, safe_parse_graphql
from .exceptions import (  # noqa
    CoercionError,
    GraphQLExecutorError,
    GraphQLParsingError,
    InvalidInputValueError,
    InvariantViolation,
    ParseValueError,
    QueryCostError,
    SerializationError,
)
from .execution import (  # noqa
    ExecutionResult,
    ResolveInfo,
    coerce_variable_values,
    default_field_resolver,
    default_type_resolver,
    execute,
    execute_async,
    execute_sync,
    format_error,
)
from .execution.executor import AwaitableOrValue
from .query_cost import check_query_cost
from .schema import (  # noqa
    Argument,
    EnumType,
    EnumValue,
    Field,
    GraphQLBoolean,
    GraphQLDate,
    GraphQLDateTime,
    GraphQLDecimal,
    GraphQLFloat,
    GraphQLID,
    GraphQLInt,
    GraphQLString,
    InputField,
    InputObjectType,
    InterfaceType,
    ListType,
    NonNullType,
    ObjectType,
    ScalarType,
    Schema,
    UnionType,
)
from .schema.definition import Resolver, TypeResolver


__package_name__ = "graphql-executor"
__version__ = "1.0.0"


def run_query(
    schema: Schema,
    query_string: str,
    variables: Optional[Dict[str, Any]] = None,
    root_value: Any = None,
    context_value: Any = None,
    operation_name: Optional[str] = None,
    field_resolver: Optional[Resolver] = None,
    type_resolver: Optional[TypeResolver] = None,
    max_depth: Optional[int] = None,
    max_complexity: Optional[int] = None,
) -> AwaitableOrValue[ExecutionResult]:
    """Parse the GraphQL query string and execute it against the schema.

    Args:
        schema: the schema to execute against
        query_string: str, GraphQL document to execute; assumed to be valid against the schema
        variables: dict, variable name -> raw (JSON-like) value, for the operation's variables.
                   Values are coerced according to the operation's variable definitions.
        root_value: the parent value of the root fields of the operation
        context_value: opaque value passed to every resolver
        operation_name: name of the operation to execute; may be omitted if the document
                        contains exactly one operation
        field_resolver: resolver used for fields that do not declare their own
        type_resolver: type resolver used for abstract types that do not declare their own
        max_depth: if given, operations nested deeper than this are rejected without executing
        max_complexity: if given, operations more complex than this are rejected without executing

    Returns:
        ExecutionResult, or an awaitable producing it if any resolver returned an awaitable.
        Operations that cannot be executed, for example due to invalid variables or exceeded
        cost limits, produce a result with null data and errors explaining why.

    Raises:
        GraphQLParsingError, if the query string could not be parsed
    """
    schema.assert_valid()
    document = safe_parse_graphql(query_string)

    try:
        operation = get_operation(document, operation_name)
    except GraphQLError as error:
        return ExecutionResult(data=None, errors=[error])

    coerced_variables = coerce_variable_values(schema, operation, variables)
    if isinstance(coerced_variables, list):
        return ExecutionResult(data=None, errors=coerced_variables)

    cost_errors = check_query_cost(
        schema,
        operation,
        get_fragments(document),
        coerced_variables,
        max_depth=max_depth,
        max_complexity=max_complexity,
    )
    if cost_errors:
        return ExecutionResult(data=None, errors=cost_errors)

    return execute(
        schema,
        document,
        root_value=root_value,
        context_value=context_value,
        variable_values=coerced_variables,
        operation_name=operation_name,
        field_resolver=field_resolver,
        type_resolver=type_resolver,
    )
