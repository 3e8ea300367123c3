# Copyright 2021-present Kensho Technologies, LLC.
from typing import Dict, Optional

import funcy
from graphql.error import GraphQLError, GraphQLSyntaxError
from graphql.language.ast import DocumentNode, FragmentDefinitionNode, OperationDefinitionNode
from graphql.language.parser import parse

from .exceptions import GraphQLParsingError


def safe_parse_graphql(graphql_string: str) -> DocumentNode:
    """Return an AST representation of the given GraphQL input, reraising GraphQL library errors."""
    try:
        ast = parse(graphql_string)
    except GraphQLSyntaxError as e:
        raise GraphQLParsingError(e) from e

    return ast


def get_fragments(document_ast: DocumentNode) -> Dict[str, FragmentDefinitionNode]:
    """Return the fragment definitions of the document, by fragment name."""
    return {
        definition.name.value: definition
        for definition in document_ast.definitions
        if isinstance(definition, FragmentDefinitionNode)
    }


def get_operation(
    document_ast: DocumentNode, operation_name: Optional[str] = None
) -> OperationDefinitionNode:
    """Return the operation of the document that should be executed.

    If no operation name is given, the document must contain exactly one operation.
    Raises GraphQLError if the desired operation cannot be determined.
    """
    if not isinstance(document_ast, DocumentNode):
        raise AssertionError(f'Received an unexpected value for "document_ast": {document_ast}')

    operations, _ = funcy.lsplit(
        lambda definition: isinstance(definition, OperationDefinitionNode),
        document_ast.definitions,
    )

    if operation_name is None:
        if not operations:
            raise GraphQLError("Must provide an operation.")
        if len(operations) > 1:
            raise GraphQLError(
                "Must provide operation name if query contains multiple operations."
            )
        return funcy.first(operations)

    operation = funcy.first(
        operation
        for operation in operations
        if operation.name is not None and operation.name.value == operation_name
    )
    if operation is None:
        raise GraphQLError(f'Unknown operation named "{operation_name}".')
    return operation
