# Copyright 2021-present Kensho Technologies, LLC.
from typing import Any, Tuple, Union


class GraphQLExecutorError(Exception):
    """Generic error when building schemas for or executing GraphQL."""


class GraphQLParsingError(GraphQLExecutorError):
    """Exception raised when the provided GraphQL string could not be parsed."""


class InvariantViolation(GraphQLExecutorError):
    """Exception raised when a schema or one of its types is not well-formed.

    This could be due to many reasons, such as:
    - a type, field, argument or enum value has a name that is not a valid GraphQL name;
    - two distinct type objects in the same schema share a name;
    - an object or interface type has no fields, or a field of non-output type;
    - a union has no member types, or a member that is not an object type.

    This is a programming error in the schema definition and is raised when the schema is built
    or validated, never while a request is executing.
    """


class CoercionError(GraphQLExecutorError):
    """Base class for errors raised while converting values to or from a GraphQL type."""


class SerializationError(CoercionError):
    """Exception raised when a resolved value cannot be represented by its leaf output type.

    For example:
    - an Int field resolved to 1.5, or to a number outside the signed 32-bit range;
    - an enum field resolved to an internal value that no enum value declares.
    """


class ParseValueError(CoercionError):
    """Exception raised when an input value or literal cannot be parsed by its leaf input type.

    Literal parsing failures may carry no message: the caller wraps them into an error that
    points at the offending literal.
    """


class QueryCostError(GraphQLExecutorError):
    """Exception raised when a query exceeds the configured depth or complexity limits."""


class InvalidInputValueError(ParseValueError):
    """Exception raised when a runtime input value does not match its declared input type.

    Carries the path from the top of the input value to the offending part of it, as a tuple
    of field names and list indices, and the offending value itself.
    """

    def __init__(self, message: str, path: Tuple[Union[str, int], ...], value: Any) -> None:
        super().__init__(message)
        self.path = path
        self.value = value
