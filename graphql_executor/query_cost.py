# Copyright 2021-present Kensho Technologies, LLC.
"""Limits on the depth and complexity of a query, checked before the query is executed.

The depth of a query is the number of nested field selections along its deepest branch, with
fragments counted as part of the selections they are spread into.

The complexity of a query is the sum of the costs of all of its selected fields. By default,
a field costs one more than the total cost of the fields selected within it. A field may
declare a complexity function instead, which receives the total cost of its subselections and
the field's arguments, and returns the field's cost. This allows, for example, a paginated field
to multiply the cost of its subselections by the requested page size.
"""
import logging
from typing import Any, Dict, FrozenSet, List, Optional

from graphql.error import GraphQLError
from graphql.language.ast import (
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    OperationDefinitionNode,
    SelectionSetNode,
)

from .exceptions import QueryCostError
from .execution.collection import get_field_def, should_include_node
from .execution.values import get_argument_values
from .schema.definition import CompositeType, NamedType, get_named_type
from .schema.schema import Schema


logger = logging.getLogger(__name__)


def _get_selection_set_depth(
    selection_set: Optional[SelectionSetNode],
    fragments: Dict[str, FragmentDefinitionNode],
    visited_fragment_names: FrozenSet[str],
) -> int:
    if selection_set is None:
        return 0

    max_depth = 0
    for selection in selection_set.selections:
        if isinstance(selection, FieldNode):
            depth = 1 + _get_selection_set_depth(
                selection.selection_set, fragments, visited_fragment_names
            )
        elif isinstance(selection, InlineFragmentNode):
            depth = _get_selection_set_depth(
                selection.selection_set, fragments, visited_fragment_names
            )
        elif isinstance(selection, FragmentSpreadNode):
            fragment_name = selection.name.value
            fragment = fragments.get(fragment_name)
            if fragment is None or fragment_name in visited_fragment_names:
                continue
            depth = _get_selection_set_depth(
                fragment.selection_set, fragments, visited_fragment_names | {fragment_name}
            )
        else:
            raise AssertionError(f"Unexpected selection node: {selection}")
        max_depth = max(max_depth, depth)

    return max_depth


def get_query_depth(
    operation: OperationDefinitionNode, fragments: Dict[str, FragmentDefinitionNode]
) -> int:
    """Return the number of nested field selections along the deepest branch of the operation."""
    return _get_selection_set_depth(operation.selection_set, fragments, frozenset())


def _get_selection_set_complexity(
    schema: Schema,
    parent_type: Optional[NamedType],
    selection_set: Optional[SelectionSetNode],
    fragments: Dict[str, FragmentDefinitionNode],
    variable_values: Optional[Dict[str, Any]],
    visited_fragment_names: FrozenSet[str],
) -> int:
    if selection_set is None:
        return 0

    total_complexity = 0
    for selection in selection_set.selections:
        if not should_include_node(schema, variable_values, selection):
            continue

        if isinstance(selection, FieldNode):
            field_def = None
            if isinstance(parent_type, CompositeType):
                field_def = get_field_def(parent_type, selection.name.value)
            child_type = get_named_type(field_def.type) if field_def is not None else None

            child_complexity = _get_selection_set_complexity(
                schema,
                child_type,
                selection.selection_set,
                fragments,
                variable_values,
                visited_fragment_names,
            )
            if field_def is not None and field_def.complexity is not None:
                args = get_argument_values(schema, field_def, selection, variable_values)
                total_complexity += field_def.complexity(child_complexity, args)
            else:
                total_complexity += child_complexity + 1
        elif isinstance(selection, InlineFragmentNode):
            fragment_type = parent_type
            if selection.type_condition is not None:
                fragment_type = schema.get_type(selection.type_condition.name.value)
            total_complexity += _get_selection_set_complexity(
                schema,
                fragment_type,
                selection.selection_set,
                fragments,
                variable_values,
                visited_fragment_names,
            )
        elif isinstance(selection, FragmentSpreadNode):
            fragment_name = selection.name.value
            fragment = fragments.get(fragment_name)
            if fragment is None or fragment_name in visited_fragment_names:
                continue
            total_complexity += _get_selection_set_complexity(
                schema,
                schema.get_type(fragment.type_condition.name.value),
                fragment.selection_set,
                fragments,
                variable_values,
                visited_fragment_names | {fragment_name},
            )
        else:
            raise AssertionError(f"Unexpected selection node: {selection}")

    return total_complexity


def get_query_complexity(
    schema: Schema,
    operation: OperationDefinitionNode,
    fragments: Dict[str, FragmentDefinitionNode],
    variable_values: Optional[Dict[str, Any]] = None,
) -> int:
    """Return the total cost of the fields selected by the operation.

    Selections excluded by @skip or @include do not count. Raises GraphQLError if the
    arguments of a field with a complexity function cannot be bound.
    """
    root_type = schema.get_root_type(operation.operation)
    return _get_selection_set_complexity(
        schema, root_type, operation.selection_set, fragments, variable_values, frozenset()
    )


def _make_query_cost_error(message: str, operation: OperationDefinitionNode) -> GraphQLError:
    return GraphQLError(message, operation, original_error=QueryCostError(message))


def check_query_cost(
    schema: Schema,
    operation: OperationDefinitionNode,
    fragments: Dict[str, FragmentDefinitionNode],
    variable_values: Optional[Dict[str, Any]] = None,
    max_depth: Optional[int] = None,
    max_complexity: Optional[int] = None,
) -> List[GraphQLError]:
    """Return the errors describing how the operation exceeds the given limits, if it does.

    Args:
        schema: the schema the operation is to be executed against
        operation: the operation to check
        fragments: dict, fragment name -> fragment definition, for all fragments of the document
        variable_values: dict, variable name -> coerced value, used for @skip, @include and
                         the arguments passed to complexity functions
        max_depth: the maximum allowed depth of the operation, or None for no limit
        max_complexity: the maximum allowed complexity of the operation, or None for no limit

    Returns:
        list of GraphQLError, empty if the operation is within the limits
    """
    errors: List[GraphQLError] = []

    if max_depth is not None:
        depth = get_query_depth(operation, fragments)
        if depth > max_depth:
            errors.append(
                _make_query_cost_error(
                    f"Max query depth should be {max_depth} but got {depth}.", operation
                )
            )

    if max_complexity is not None:
        try:
            complexity = get_query_complexity(schema, operation, fragments, variable_values)
        except GraphQLError as error:
            errors.append(error)
        else:
            if complexity > max_complexity:
                errors.append(
                    _make_query_cost_error(
                        f"Max query complexity should be {max_complexity} but got {complexity}.",
                        operation,
                    )
                )

    if errors:
        logger.info(
            "Rejected operation %(operation_name)s for exceeding its cost limits: %(messages)s",
            {
                "operation_name": operation.name.value if operation.name else None,
                "messages": [error.message for error in errors],
            },
        )
    return errors
