# Copyright 2021-present Kensho Technologies, LLC.
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from graphql.error import GraphQLError
from graphql.language.ast import FieldNode, FragmentDefinitionNode, OperationDefinitionNode

from ..schema.definition import GraphQLType, ObjectType, Resolver, TypeResolver
from ..schema.schema import Schema
from .response_path import ResponsePath


@dataclass(frozen=True)
class ResolveInfo:
    """Information about the field being resolved, passed to every resolver as its "info" argument.

    Resolvers may use it to inspect the query around the field they are resolving: the nodes
    that requested it, its position in the response, and the operation and variables in use.
    """

    field_name: str
    field_nodes: List[FieldNode]
    return_type: GraphQLType
    parent_type: ObjectType
    path: ResponsePath
    schema: Schema
    fragments: Dict[str, FragmentDefinitionNode]
    root_value: Any
    operation: OperationDefinitionNode
    variable_values: Dict[str, Any]
    context_value: Any


@dataclass(frozen=True)
class ExecutionContext:
    """Everything that stays the same while executing one operation of one request.

    The errors list is the only mutable part. It is owned by a single execution, and errors are
    only ever appended to it, each at most once.
    """

    schema: Schema
    fragments: Dict[str, FragmentDefinitionNode]
    operation: OperationDefinitionNode
    root_value: Any
    context_value: Any
    variable_values: Dict[str, Any]
    field_resolver: Resolver
    type_resolver: Optional[TypeResolver]
    errors: List[GraphQLError] = field(default_factory=list)
    _recorded_error_ids: Set[int] = field(default_factory=set, repr=False, compare=False)

    def record_error(self, error: GraphQLError) -> None:
        """Append the error to the errors list, unless it was already recorded."""
        if id(error) in self._recorded_error_ids:
            return
        self._recorded_error_ids.add(id(error))
        self.errors.append(error)
