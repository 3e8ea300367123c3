# Copyright 2021-present Kensho Technologies, LLC.
from functools import cached_property
from typing import Any, Dict, Mapping, Optional, Sequence

from graphql import DirectiveLocation

from ..exceptions import InvariantViolation
from ..global_utils import assert_valid_name, is_valid_name_error
from .definition import Argument, NonNullType, build_input_value_map, is_input_type
from .scalars import GraphQLBoolean, GraphQLString


DEFAULT_DEPRECATION_REASON = "No longer supported"


class Directive:
    """A directive that may annotate parts of a query document or of a schema definition."""

    def __init__(
        self,
        name: str,
        locations: Sequence[DirectiveLocation],
        args: Optional[Mapping[str, Any]] = None,
        is_repeatable: bool = False,
        description: Optional[str] = None,
    ) -> None:
        self.name = name
        self.locations = tuple(locations)
        self._args_config = args if args is not None else {}
        self.is_repeatable = is_repeatable
        self.description = description

    @cached_property
    def args(self) -> Dict[str, Argument]:
        return build_input_value_map(Argument, self._args_config, f"Arguments of @{self.name}")

    def __str__(self) -> str:
        return f"@{self.name}"

    def __repr__(self) -> str:
        return f"<Directive @{self.name}>"

    def assert_valid(self) -> None:
        assert_valid_name(self.name)

        if not self.locations:
            raise InvariantViolation(f"@{self.name} must declare at least one location.")

        for argument in self.args.values():
            error_message = is_valid_name_error(argument.name)
            if error_message is not None:
                raise InvariantViolation(f"@{self.name}({argument.name}:): {error_message}")
            if not is_input_type(argument.type):
                raise InvariantViolation(
                    f"@{self.name}({argument.name}:) argument type must be Input Type "
                    f"but got: {argument.type}."
                )


# Constraints:
# - the field or fragment it annotates is only executed when "if" is true;
# - when used together with @skip, both conditions must allow the selection.
IncludeDirective = Directive(
    name="include",
    description=(
        "Directs the executor to include this field or fragment only when the `if` argument is "
        "true."
    ),
    locations=[
        DirectiveLocation.FIELD,
        DirectiveLocation.FRAGMENT_SPREAD,
        DirectiveLocation.INLINE_FRAGMENT,
    ],
    args={
        "if": Argument(NonNullType(GraphQLBoolean), description="Included when true."),
    },
)


# Constraints:
# - the field or fragment it annotates is not executed when "if" is true.
SkipDirective = Directive(
    name="skip",
    description=(
        "Directs the executor to skip this field or fragment when the `if` argument is true."
    ),
    locations=[
        DirectiveLocation.FIELD,
        DirectiveLocation.FRAGMENT_SPREAD,
        DirectiveLocation.INLINE_FRAGMENT,
    ],
    args={
        "if": Argument(NonNullType(GraphQLBoolean), description="Skipped when true."),
    },
)


# Schema-only: marks fields and enum values that clients should stop using.
DeprecatedDirective = Directive(
    name="deprecated",
    description="Marks an element of a GraphQL schema as no longer supported.",
    locations=[
        DirectiveLocation.FIELD_DEFINITION,
        DirectiveLocation.ARGUMENT_DEFINITION,
        DirectiveLocation.INPUT_FIELD_DEFINITION,
        DirectiveLocation.ENUM_VALUE,
    ],
    args={
        "reason": Argument(
            GraphQLString,
            default_value=DEFAULT_DEPRECATION_REASON,
            description=(
                "Explains why this element was deprecated, usually also including a "
                "suggestion for how to access supported similar data."
            ),
        ),
    },
)


SPECIFIED_DIRECTIVES = (IncludeDirective, SkipDirective, DeprecatedDirective)
