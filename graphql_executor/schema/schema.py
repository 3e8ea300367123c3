# Copyright 2021-present Kensho Technologies, LLC.
from functools import cached_property
import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from graphql.language.ast import OperationType

from ..exceptions import InvariantViolation
from ..global_utils import print_safe
from .definition import (
    AbstractType,
    FieldsType,
    GraphQLType,
    InputObjectType,
    InterfaceType,
    LeafType,
    NamedType,
    ObjectType,
    UnionType,
    get_named_type,
)
from .directives import SPECIFIED_DIRECTIVES, Directive
from .scalars import SPECIFIED_SCALAR_TYPES, is_specified_scalar_type


logger = logging.getLogger(__name__)


def _make_scalar_overrides(scalar_overrides: Iterable[LeafType]) -> Dict[str, LeafType]:
    """Validate the replacements for built-in scalars, and index them by name."""
    overrides: Dict[str, LeafType] = {}
    for override in scalar_overrides:
        if not isinstance(override, LeafType):
            raise InvariantViolation(
                f"Expecting instance of a leaf type, got {print_safe(override)}"
            )
        if override.name not in SPECIFIED_SCALAR_TYPES:
            standard_type_names = ", ".join(SPECIFIED_SCALAR_TYPES)
            raise InvariantViolation(
                f"Expecting one of the following names for a standard type: "
                f"{standard_type_names}; got {print_safe(override.name)}"
            )
        overrides[override.name] = override
    return overrides


class Schema:
    """An executable schema: root operation types, plus every type reachable from them.

    The type map is built lazily on first use by walking the type graph, so the schema may be
    constructed before the thunks of the types it contains can be resolved. Once built, all
    schema structures are treated as immutable and may be shared across executions.

    Built-in scalars may be replaced for this schema only by passing scalar types with the same
    names as scalar_overrides. The replacement is used wherever the built-in scalar is referenced.
    """

    def __init__(
        self,
        query: Optional[ObjectType],
        mutation: Optional[ObjectType] = None,
        subscription: Optional[ObjectType] = None,
        types: Optional[Sequence[NamedType]] = None,
        directives: Optional[Sequence[Directive]] = None,
        scalar_overrides: Optional[Iterable[LeafType]] = None,
        assume_valid: bool = False,
    ) -> None:
        self.query_type = query
        self.mutation_type = mutation
        self.subscription_type = subscription
        self._extra_types = list(types) if types is not None else []
        self.directives: List[Directive] = (
            list(directives) if directives is not None else list(SPECIFIED_DIRECTIVES)
        )
        self._scalar_overrides = _make_scalar_overrides(
            scalar_overrides if scalar_overrides is not None else []
        )
        self._is_validated = assume_valid

    def resolve_leaf_type(self, leaf_type: LeafType) -> LeafType:
        """Return the leaf type to use in this schema, accounting for scalar overrides."""
        if is_specified_scalar_type(leaf_type):
            return self._scalar_overrides.get(leaf_type.name, leaf_type)
        return leaf_type

    def _add_named_type(self, type_map: Dict[str, NamedType], named_type: NamedType) -> bool:
        """Add the type to the type map, returning True if it had not been seen before."""
        if isinstance(named_type, LeafType):
            named_type = self.resolve_leaf_type(named_type)

        existing_type = type_map.get(named_type.name)
        if existing_type is named_type:
            return False
        elif existing_type is not None:
            raise InvariantViolation(
                f"Schema must contain unique named types but contains multiple types named "
                f'"{named_type.name}".'
            )

        type_map[named_type.name] = named_type
        return True

    @cached_property
    def type_map(self) -> Dict[str, NamedType]:
        """Return every named type reachable from the schema's roots, types and directives."""
        type_map: Dict[str, NamedType] = {}

        initial_types: List[Optional[GraphQLType]] = [
            self.query_type,
            self.mutation_type,
            self.subscription_type,
        ]
        initial_types.extend(self._extra_types)
        for directive in self.directives:
            initial_types.extend(argument.type for argument in directive.args.values())

        # Walk the graph with an explicit stack: recursive type graphs may be arbitrarily deep.
        pending_types = [type_ for type_ in reversed(initial_types) if type_ is not None]
        while pending_types:
            named_type = get_named_type(pending_types.pop())
            if named_type is None:
                continue
            if not isinstance(named_type, NamedType):
                raise InvariantViolation(
                    f"Expected a named GraphQL type, but got: {print_safe(named_type)}."
                )
            if not self._add_named_type(type_map, named_type):
                continue

            referenced_types: List[GraphQLType] = []
            if isinstance(named_type, UnionType):
                referenced_types.extend(named_type.types)
            elif isinstance(named_type, FieldsType):
                referenced_types.extend(named_type.interfaces)
                for field in named_type.fields.values():
                    referenced_types.append(field.type)
                    referenced_types.extend(argument.type for argument in field.args.values())
            elif isinstance(named_type, InputObjectType):
                referenced_types.extend(
                    input_field.type for input_field in named_type.fields.values()
                )
            pending_types.extend(reversed(referenced_types))

        logger.debug(
            "Built schema type map with %(type_count)d types: %(type_names)s",
            {"type_count": len(type_map), "type_names": sorted(type_map)},
        )
        return type_map

    def get_type(self, name: str) -> Optional[NamedType]:
        return self.type_map.get(name)

    def get_root_type(self, operation: OperationType) -> Optional[ObjectType]:
        """Return the root object type for the given kind of operation, if the schema has one."""
        if operation == OperationType.QUERY:
            return self.query_type
        elif operation == OperationType.MUTATION:
            return self.mutation_type
        elif operation == OperationType.SUBSCRIPTION:
            return self.subscription_type
        else:
            raise AssertionError(f"Unknown operation type: {operation}")

    @cached_property
    def _possible_types_by_name(self) -> Mapping[str, List[ObjectType]]:
        possible_types: Dict[str, List[ObjectType]] = {}
        for named_type in self.type_map.values():
            if isinstance(named_type, UnionType):
                possible_types.setdefault(named_type.name, []).extend(named_type.types)
            elif isinstance(named_type, ObjectType):
                for interface in named_type.interfaces:
                    possible_types.setdefault(interface.name, []).append(named_type)
        return possible_types

    def get_possible_types(self, abstract_type: AbstractType) -> List[ObjectType]:
        """Return the object types that values of the given abstract type may have at runtime."""
        return self._possible_types_by_name.get(abstract_type.name, [])

    def is_sub_type(self, abstract_type: AbstractType, maybe_sub_type: NamedType) -> bool:
        """Return True if the given type is one of the possible types of the abstract type."""
        return any(
            possible_type is maybe_sub_type
            for possible_type in self.get_possible_types(abstract_type)
        )

    def get_directive(self, name: str) -> Optional[Directive]:
        for directive in self.directives:
            if directive.name == name:
                return directive
        return None

    def assert_valid(self) -> None:
        """Validate the schema and all its types, raising InvariantViolation on the first problem.

        Validation happens at most once per schema; subsequent calls return immediately.
        """
        if self._is_validated:
            return

        if self.query_type is None:
            raise InvariantViolation("Query root type must be provided.")

        root_types = (
            ("Query", self.query_type),
            ("Mutation", self.mutation_type),
            ("Subscription", self.subscription_type),
        )
        for operation_name, root_type in root_types:
            if root_type is not None and not isinstance(root_type, ObjectType):
                raise InvariantViolation(
                    f"{operation_name} root type must be Object type, it cannot be "
                    f"{print_safe(root_type)}."
                )

        for named_type in self.type_map.values():
            named_type.assert_valid()

        for interface_type in self.type_map.values():
            if isinstance(interface_type, InterfaceType):
                for implementation in self.get_possible_types(interface_type):
                    if not implementation.implements_interface(interface_type):
                        raise AssertionError(
                            f"Possible types of {interface_type.name} contain "
                            f"{implementation.name}, which does not implement it."
                        )

        seen_directive_names = set()
        for directive in self.directives:
            directive.assert_valid()
            if directive.name in seen_directive_names:
                raise InvariantViolation(
                    f'Schema must contain unique directives, but contains multiple directives '
                    f'named "@{directive.name}".'
                )
            seen_directive_names.add(directive.name)

        self._is_validated = True
