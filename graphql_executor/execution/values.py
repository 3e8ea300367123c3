# Copyright 2021-present Kensho Technologies, LLC.
"""Coercion of argument literals and variable values into the internal values resolvers receive.

Two kinds of input reach the executor:
- literals written in the query document, which are converted by value_from_ast using the
  parse_literal functions of leaf types; and
- runtime variable values supplied alongside the document, which are converted by
  coerce_variable_values using the parse_value functions of leaf types.

Variable values handed to the executor are assumed to have been coerced already, so literals
that refer to variables substitute the variable's value as-is.
"""
from collections.abc import Iterable, Mapping
from typing import Any, Dict, List, Optional, Tuple, Union

from graphql.error import GraphQLError
from graphql.language.ast import (
    DirectiveNode,
    FieldNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    ListTypeNode,
    ListValueNode,
    NamedTypeNode,
    NonNullTypeNode,
    NullValueNode,
    ObjectValueNode,
    OperationDefinitionNode,
    TypeNode,
    ValueNode,
    VariableNode,
)
from graphql.language.printer import print_ast
from graphql.pyutils import Undefined

from ..exceptions import CoercionError, InvalidInputValueError
from ..global_utils import print_safe
from ..schema.definition import (
    Field,
    GraphQLType,
    InputObjectType,
    LeafType,
    ListType,
    NonNullType,
    is_input_type,
)
from ..schema.directives import Directive
from ..schema.schema import Schema


InputPath = Tuple[Union[str, int], ...]

# Either the coerced variable values, or the errors that prevented coercing them.
CoercedVariableValues = Union[Dict[str, Any], List[GraphQLError]]


def type_from_ast(schema: Schema, type_node: TypeNode) -> Optional[GraphQLType]:
    """Return the schema type referenced by the type node, or None if the schema lacks it."""
    if isinstance(type_node, ListTypeNode):
        inner_type = type_from_ast(schema, type_node.type)
        return ListType(inner_type) if inner_type is not None else None
    elif isinstance(type_node, NonNullTypeNode):
        inner_type = type_from_ast(schema, type_node.type)
        return NonNullType(inner_type) if inner_type is not None else None
    elif isinstance(type_node, NamedTypeNode):
        return schema.get_type(type_node.name.value)
    else:
        raise AssertionError(f"Unexpected type node: {type_node}")


def _is_missing_variable(value_node: ValueNode, variables: Optional[Dict[str, Any]]) -> bool:
    """Return True if the node refers to a variable that has no runtime value."""
    return isinstance(value_node, VariableNode) and (
        variables is None or value_node.name.value not in variables
    )


def value_from_ast(
    schema: Schema,
    value_node: Optional[ValueNode],
    type_: GraphQLType,
    variables: Optional[Dict[str, Any]] = None,
) -> Any:
    """Convert a literal from the query document into an internal value of the given input type.

    Returns Undefined if the literal is not a valid value of the type. A null literal produces
    None for nullable types. Variables are substituted with their (already coerced) values.
    """
    if value_node is None:
        return Undefined

    if isinstance(value_node, VariableNode):
        variable_name = value_node.name.value
        if variables is None or variable_name not in variables:
            return Undefined
        variable_value = variables[variable_name]
        if variable_value is None and isinstance(type_, NonNullType):
            return Undefined
        return variable_value

    if isinstance(type_, NonNullType):
        if isinstance(value_node, NullValueNode):
            return Undefined
        return value_from_ast(schema, value_node, type_.of_type, variables)

    if isinstance(value_node, NullValueNode):
        return None

    if isinstance(type_, ListType):
        item_type = type_.of_type
        if isinstance(value_node, ListValueNode):
            coerced_items = []
            for item_node in value_node.values:
                if _is_missing_variable(item_node, variables):
                    # A missing variable inside a list is an error only if the item is required.
                    if isinstance(item_type, NonNullType):
                        return Undefined
                    coerced_items.append(None)
                    continue
                item_value = value_from_ast(schema, item_node, item_type, variables)
                if item_value is Undefined:
                    return Undefined
                coerced_items.append(item_value)
            return coerced_items

        # A single value is accepted wherever a list of such values is expected.
        coerced_value = value_from_ast(schema, value_node, item_type, variables)
        if coerced_value is Undefined:
            return Undefined
        return [coerced_value]

    if isinstance(type_, InputObjectType):
        if not isinstance(value_node, ObjectValueNode):
            return Undefined

        field_nodes = {field_node.name.value: field_node for field_node in value_node.fields}
        if any(field_name not in type_.fields for field_name in field_nodes):
            return Undefined

        coerced_object = {}
        for field_name, input_field in type_.fields.items():
            field_node = field_nodes.get(field_name)
            if field_node is None or _is_missing_variable(field_node.value, variables):
                if input_field.has_default_value:
                    coerced_object[field_name] = input_field.default_value
                elif isinstance(input_field.type, NonNullType):
                    return Undefined
                continue

            field_value = value_from_ast(schema, field_node.value, input_field.type, variables)
            if field_value is Undefined:
                return Undefined
            coerced_object[field_name] = field_value
        return coerced_object

    if isinstance(type_, LeafType):
        leaf_type = schema.resolve_leaf_type(type_)
        # Custom scalars report invalid literals by raising any of these.
        try:
            result = leaf_type.parse_literal(value_node, variables)
        except (CoercionError, TypeError, ValueError):
            return Undefined
        return result

    raise AssertionError(f"Unexpected input type: {type_}")


def _format_input_path(path: InputPath) -> str:
    formatted = ""
    for key in path:
        formatted += f"[{key}]" if isinstance(key, int) else f".{key}"
    return formatted


def coerce_input_value(
    schema: Schema, input_value: Any, type_: GraphQLType, path: InputPath = ()
) -> Any:
    """Convert a runtime (JSON-like) input value into an internal value of the given input type.

    Raises InvalidInputValueError describing the first part of the value that does not match
    the type, together with the path to it.
    """
    if isinstance(type_, NonNullType):
        if input_value is None:
            raise InvalidInputValueError(
                f'Expected non-nullable type "{type_}" not to be null.', path, input_value
            )
        return coerce_input_value(schema, input_value, type_.of_type, path)

    if input_value is None:
        return None

    if isinstance(type_, ListType):
        item_type = type_.of_type
        if isinstance(input_value, Iterable) and not isinstance(input_value, (str, Mapping)):
            return [
                coerce_input_value(schema, item_value, item_type, path + (index,))
                for index, item_value in enumerate(input_value)
            ]
        # A single value is accepted wherever a list of such values is expected.
        return [coerce_input_value(schema, input_value, item_type, path)]

    if isinstance(type_, InputObjectType):
        if not isinstance(input_value, Mapping):
            raise InvalidInputValueError(
                f'Expected type "{type_.name}" to be a mapping.', path, input_value
            )

        coerced_object = {}
        for field_name, input_field in type_.fields.items():
            if field_name not in input_value:
                if input_field.has_default_value:
                    coerced_object[field_name] = input_field.default_value
                elif isinstance(input_field.type, NonNullType):
                    raise InvalidInputValueError(
                        f'Field "{field_name}" of required type "{input_field.type}" '
                        f"was not provided.",
                        path,
                        input_value,
                    )
                continue

            coerced_object[field_name] = coerce_input_value(
                schema, input_value[field_name], input_field.type, path + (field_name,)
            )

        for field_name in input_value:
            if field_name not in type_.fields:
                raise InvalidInputValueError(
                    f'Field "{field_name}" is not defined by type "{type_.name}".',
                    path,
                    input_value,
                )
        return coerced_object

    if isinstance(type_, LeafType):
        leaf_type = schema.resolve_leaf_type(type_)
        try:
            return leaf_type.parse_value(input_value)
        except (CoercionError, TypeError, ValueError) as e:
            message = f'Expected type "{leaf_type.name}".'
            if str(e):
                message += f" {e}"
            raise InvalidInputValueError(message, path, input_value) from e

    raise AssertionError(f"Unexpected input type: {type_}")


def coerce_variable_values(
    schema: Schema,
    operation: OperationDefinitionNode,
    raw_variable_values: Optional[Mapping[str, Any]],
) -> CoercedVariableValues:
    """Coerce the runtime variable values supplied for the operation, according to its definitions.

    Declared defaults apply to variables that were not supplied. Returns the coerced variable
    values if all of them are valid, and the list of errors otherwise.
    """
    if raw_variable_values is None:
        raw_variable_values = {}

    errors: List[GraphQLError] = []
    coerced_values: Dict[str, Any] = {}
    for variable_definition in operation.variable_definitions or ():
        variable_name = variable_definition.variable.name.value
        variable_type = type_from_ast(schema, variable_definition.type)
        if variable_type is None or not is_input_type(variable_type):
            errors.append(
                GraphQLError(
                    f'Variable "${variable_name}" expected value of type '
                    f'"{print_ast(variable_definition.type)}" which cannot be used as an '
                    f"input type.",
                    variable_definition.type,
                )
            )
            continue

        if variable_name not in raw_variable_values:
            if variable_definition.default_value is not None:
                coerced_values[variable_name] = value_from_ast(
                    schema, variable_definition.default_value, variable_type
                )
            elif isinstance(variable_type, NonNullType):
                errors.append(
                    GraphQLError(
                        f'Variable "${variable_name}" of required type "{variable_type}" '
                        f"was not provided.",
                        variable_definition,
                    )
                )
            continue

        raw_value = raw_variable_values[variable_name]
        if raw_value is None and isinstance(variable_type, NonNullType):
            errors.append(
                GraphQLError(
                    f'Variable "${variable_name}" of non-null type "{variable_type}" '
                    f"must not be null.",
                    variable_definition,
                )
            )
            continue

        try:
            coerced_values[variable_name] = coerce_input_value(schema, raw_value, variable_type)
        except InvalidInputValueError as e:
            message = f'Variable "${variable_name}" got invalid value {print_safe(e.value)}'
            if e.path:
                message += f' at "{variable_name}{_format_input_path(e.path)}"'
            errors.append(GraphQLError(f"{message}; {e}", variable_definition, original_error=e))

    return errors if errors else coerced_values


def get_argument_values(
    schema: Schema,
    definition: Union[Field, Directive],
    node: Union[FieldNode, DirectiveNode],
    variable_values: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Bind the arguments written on a field or directive node to the definition's arguments.

    Raises a GraphQLError located at the offending node if a required argument is missing,
    null, or refers to a variable without a runtime value, or if an argument value is invalid.
    """
    coerced_values: Dict[str, Any] = {}
    argument_nodes = {
        argument_node.name.value: argument_node for argument_node in node.arguments or ()
    }

    for argument_name, argument in definition.args.items():
        argument_type = argument.type
        argument_node = argument_nodes.get(argument_name)

        if argument_node is None:
            if argument.has_default_value:
                coerced_values[argument_name] = argument.default_value
            elif isinstance(argument_type, NonNullType):
                raise GraphQLError(
                    f'Argument "{argument_name}" of required type "{argument_type}" '
                    f"was not provided.",
                    node,
                )
            continue

        value_node = argument_node.value
        is_null = isinstance(value_node, NullValueNode)

        if isinstance(value_node, VariableNode):
            variable_name = value_node.name.value
            if variable_values is None or variable_name not in variable_values:
                if argument.has_default_value:
                    coerced_values[argument_name] = argument.default_value
                elif isinstance(argument_type, NonNullType):
                    raise GraphQLError(
                        f'Argument "{argument_name}" of required type "{argument_type}" '
                        f'was provided the variable "${variable_name}" which was not provided '
                        f"a runtime value.",
                        value_node,
                    )
                continue
            is_null = variable_values[variable_name] is None

        if is_null and isinstance(argument_type, NonNullType):
            raise GraphQLError(
                f'Argument "{argument_name}" of non-null type "{argument_type}" '
                f"must not be null.",
                value_node,
            )

        coerced_value = value_from_ast(schema, value_node, argument_type, variable_values)
        if coerced_value is Undefined:
            raise GraphQLError(
                f'Argument "{argument_name}" has invalid value {print_ast(value_node)}.',
                value_node,
            )
        coerced_values[argument_name] = coerced_value

    return coerced_values


def get_directive_values(
    schema: Schema,
    directive: Directive,
    node: Union[FieldNode, FragmentSpreadNode, InlineFragmentNode],
    variable_values: Optional[Dict[str, Any]] = None,
) -> Optional[Dict[str, Any]]:
    """Return the arguments of the given directive on the node, or None if it is not present."""
    for directive_node in node.directives or ():
        if directive_node.name.value == directive.name:
            return get_argument_values(schema, directive, directive_node, variable_values)
    return None
