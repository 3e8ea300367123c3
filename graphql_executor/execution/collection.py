# Copyright 2021-present Kensho Technologies, LLC.
from typing import Any, Dict, List, Optional, Set, Union

from graphql.language.ast import (
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    SelectionSetNode,
)

from ..schema.definition import (
    AbstractType,
    CompositeType,
    Field,
    FieldsType,
    NonNullType,
    ObjectType,
)
from ..schema.directives import IncludeDirective, SkipDirective
from ..schema.scalars import GraphQLString
from ..schema.schema import Schema
from .values import get_directive_values


TYPENAME_FIELD_NAME = "__typename"

# Answered by the executor for every composite type, without being declared on any of them.
TypeNameMetaField = Field(
    NonNullType(GraphQLString),
    resolve=lambda _parent_value, _args, _context_value, info: info.parent_type.name,
    description="The name of the current Object type at runtime.",
    name=TYPENAME_FIELD_NAME,
)

# Response key -> all field nodes requesting that key, in the order they appear in the document.
CollectedFields = Dict[str, List[FieldNode]]


def get_field_def(parent_type: CompositeType, field_name: str) -> Optional[Field]:
    """Return the definition of the field selected on the given type, or None if there is none."""
    if field_name == TYPENAME_FIELD_NAME:
        return TypeNameMetaField
    if isinstance(parent_type, FieldsType):
        return parent_type.get_field(field_name)
    return None


def get_field_entry_key(node: FieldNode) -> str:
    """Return the key under which the field's value appears in the response: alias, or name."""
    return node.alias.value if node.alias else node.name.value


def should_include_node(
    schema: Schema,
    variable_values: Optional[Dict[str, Any]],
    node: Union[FieldNode, FragmentSpreadNode, InlineFragmentNode],
) -> bool:
    """Determine whether the selection should be executed, based on its @skip and @include."""
    skip = get_directive_values(schema, SkipDirective, node, variable_values)
    if skip is not None and skip["if"] is True:
        return False

    include = get_directive_values(schema, IncludeDirective, node, variable_values)
    if include is not None and include["if"] is False:
        return False

    return True


def does_fragment_condition_match(
    schema: Schema,
    fragment: Union[FragmentDefinitionNode, InlineFragmentNode],
    runtime_type: ObjectType,
) -> bool:
    """Determine whether the fragment applies to values of the given runtime type."""
    type_condition_node = fragment.type_condition
    if type_condition_node is None:
        return True

    condition_type = schema.get_type(type_condition_node.name.value)
    if condition_type is runtime_type:
        return True
    if isinstance(condition_type, AbstractType):
        return schema.is_sub_type(condition_type, runtime_type)
    return False


def collect_fields(
    schema: Schema,
    fragments: Dict[str, FragmentDefinitionNode],
    variable_values: Optional[Dict[str, Any]],
    runtime_type: ObjectType,
    selection_set: SelectionSetNode,
    fields: Optional[CollectedFields] = None,
    visited_fragment_names: Optional[Set[str]] = None,
) -> CollectedFields:
    """Collect the fields to execute on a value of the runtime type, merged by response key.

    Fragment spreads and inline fragments are expanded when their type condition matches the
    runtime type, and selections excluded by @skip or @include are left out. Each named fragment
    is expanded at most once. Response keys keep the order in which they are first seen.
    """
    if fields is None:
        fields = {}
    if visited_fragment_names is None:
        visited_fragment_names = set()

    for selection in selection_set.selections:
        if isinstance(selection, FieldNode):
            if not should_include_node(schema, variable_values, selection):
                continue
            fields.setdefault(get_field_entry_key(selection), []).append(selection)
        elif isinstance(selection, InlineFragmentNode):
            if not should_include_node(
                schema, variable_values, selection
            ) or not does_fragment_condition_match(schema, selection, runtime_type):
                continue
            collect_fields(
                schema,
                fragments,
                variable_values,
                runtime_type,
                selection.selection_set,
                fields,
                visited_fragment_names,
            )
        elif isinstance(selection, FragmentSpreadNode):
            fragment_name = selection.name.value
            if fragment_name in visited_fragment_names or not should_include_node(
                schema, variable_values, selection
            ):
                continue
            visited_fragment_names.add(fragment_name)

            fragment = fragments.get(fragment_name)
            if fragment is None or not does_fragment_condition_match(
                schema, fragment, runtime_type
            ):
                continue
            collect_fields(
                schema,
                fragments,
                variable_values,
                runtime_type,
                fragment.selection_set,
                fields,
                visited_fragment_names,
            )
        else:
            raise AssertionError(f"Unexpected selection node: {selection}")

    return fields
