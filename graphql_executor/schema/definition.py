# Copyright 2021-present Kensho Technologies, LLC.
"""Type classes from which executable schemas are built.

The variant set is closed: named types are ScalarType, EnumType, ObjectType, InterfaceType,
UnionType and InputObjectType, and the wrapping types are ListType and NonNullType.

Anywhere a type, a field mapping, an interface list or a union member list is expected, a
zero-argument callable ("thunk") returning it may be given instead. Thunks are invoked on first
use and their result is cached, which makes it possible to define mutually-recursive types:

    person_type = ObjectType("Person", lambda: {"pet": Field(pet_type)})
    pet_type = ObjectType("Pet", lambda: {"owner": Field(person_type)})
"""
from enum import Enum
from functools import cached_property
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Type,
    TypeVar,
    Union,
    cast,
)

from graphql.language.ast import EnumValueNode, ValueNode
from graphql.pyutils import Undefined
from graphql.utilities import value_from_ast_untyped

from ..exceptions import InvariantViolation, ParseValueError, SerializationError
from ..global_utils import assert_valid_name, is_valid_name_error, print_safe
from .value_store import ValueKeyedStore


T = TypeVar("T")

Thunk = Union[T, Callable[[], T]]

# (parent_value, args, context_value, info) -> value, Exception or awaitable of either
Resolver = Callable[[Any, Dict[str, Any], Any, Any], Any]

# (value, context_value, info) -> ObjectType, type name, None, or an awaitable of any of these
TypeResolver = Callable[[Any, Any, Any], Any]

# (value, context_value, info) -> bool
IsTypeOfFunction = Callable[[Any, Any, Any], bool]

# (child_complexity, args) -> int
ComplexityFunction = Callable[[int, Dict[str, Any]], int]

RESERVED_ENUM_VALUE_NAMES = frozenset({"true", "false", "null"})


def resolve_thunk(thunk: Thunk[T]) -> T:
    """Return the value produced by the thunk, or the value itself if it is not a thunk.

    Classes, such as Python Enum classes, are values rather than thunks.
    """
    if callable(thunk) and not isinstance(thunk, (GraphQLType, type)):
        return cast(Callable[[], T], thunk)()
    return cast(T, thunk)


def _ensure_type(type_: Any, context_description: str) -> "GraphQLType":
    """Return the argument if it is a GraphQL type, raising InvariantViolation otherwise."""
    if not isinstance(type_, GraphQLType):
        raise InvariantViolation(
            f"Expected {context_description} to be a GraphQL type, but got: {print_safe(type_)}."
        )
    return type_


class GraphQLType:
    """Base class for all GraphQL types."""


class NamedType(GraphQLType):
    """Base class for types identified by a name that is unique within a schema."""

    def __init__(self, name: str, description: Optional[str] = None) -> None:
        self.name = name
        self.description = description

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name!r}>"

    def assert_valid(self) -> None:
        """Raise InvariantViolation if this type is not well-formed."""
        assert_valid_name(self.name)


class WrappingType(GraphQLType):
    """Base class for the structural List and NonNull modifiers over exactly one inner type."""

    def __init__(self, of_type: Thunk[GraphQLType]) -> None:
        self._of_type_thunk = of_type
        self._of_type: Optional[GraphQLType] = None
        if isinstance(of_type, GraphQLType):
            self._of_type = self._check_wrapped_type(of_type)

    def _check_wrapped_type(self, of_type: Any) -> GraphQLType:
        return _ensure_type(of_type, f"the type wrapped by {self.__class__.__name__}")

    @property
    def of_type(self) -> GraphQLType:
        """Return the wrapped type, resolving and caching it on first access."""
        if self._of_type is None:
            self._of_type = self._check_wrapped_type(resolve_thunk(self._of_type_thunk))
        return self._of_type

    def __eq__(self, other: Any) -> bool:
        return self is other or (
            self.__class__ is other.__class__ and self.of_type == other.of_type
        )

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, self.of_type))

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self}>"


class ListType(WrappingType):
    """A list of values of the wrapped type."""

    def __str__(self) -> str:
        return f"[{self.of_type}]"


class NonNullType(WrappingType):
    """A value of the wrapped type that is guaranteed to never be null."""

    def _check_wrapped_type(self, of_type: Any) -> GraphQLType:
        checked_type = super()._check_wrapped_type(of_type)
        if isinstance(checked_type, NonNullType):
            raise InvariantViolation(
                f"Cannot wrap a NonNullType in another NonNullType: {checked_type}!"
            )
        return checked_type

    def __str__(self) -> str:
        return f"{self.of_type}!"


# ##############
# Leaf types #
# ##############


class LeafType(NamedType):
    """Base class for types whose values serialize directly to and from external values."""

    def serialize(self, value: Any) -> Any:
        raise NotImplementedError()

    def parse_value(self, value: Any) -> Any:
        raise NotImplementedError()

    def parse_literal(
        self, value_node: ValueNode, variables: Optional[Dict[str, Any]] = None
    ) -> Any:
        raise NotImplementedError()


class ScalarType(LeafType):
    """A scalar type, defined by its serialization and parsing functions.

    When neither parse_value nor parse_literal is given, input values are passed through as-is
    and literals are converted into plain Python values.
    """

    def __init__(
        self,
        name: str,
        serialize: Callable[[Any], Any],
        parse_value: Optional[Callable[[Any], Any]] = None,
        parse_literal: Optional[Callable[..., Any]] = None,
        description: Optional[str] = None,
    ) -> None:
        super().__init__(name, description=description)
        self._serialize = serialize
        self._parse_value = parse_value
        self._parse_literal = parse_literal

    def serialize(self, value: Any) -> Any:
        return self._serialize(value)

    def parse_value(self, value: Any) -> Any:
        if self._parse_value is None:
            return value
        return self._parse_value(value)

    def parse_literal(
        self, value_node: ValueNode, variables: Optional[Dict[str, Any]] = None
    ) -> Any:
        if self._parse_literal is None:
            return value_from_ast_untyped(value_node, variables)
        return self._parse_literal(value_node, variables)

    def assert_valid(self) -> None:
        super().assert_valid()

        if not callable(self._serialize):
            raise InvariantViolation(
                f'{self.name} must provide "serialize" function. If this custom Scalar is also '
                f'used as an input type, ensure "parse_value" and "parse_literal" functions '
                f"are also provided."
            )

        if self._parse_value is None and self._parse_literal is None:
            return

        if not callable(self._parse_value) or not callable(self._parse_literal):
            raise InvariantViolation(
                f'{self.name} must provide both "parse_value" and "parse_literal" functions.'
            )


class EnumValue:
    """One value of an enum type: its external name and the internal value it stands for."""

    __slots__ = ("name", "value", "description", "deprecation_reason")

    def __init__(
        self,
        value: Any = Undefined,
        description: Optional[str] = None,
        deprecation_reason: Optional[str] = None,
        name: Optional[str] = None,
    ) -> None:
        self.name = name
        self.value = value
        self.description = description
        self.deprecation_reason = deprecation_reason

    @property
    def is_deprecated(self) -> bool:
        return bool(self.deprecation_reason)

    def __repr__(self) -> str:
        return f"<EnumValue {self.name}={self.value!r}>"


EnumValuesConfig = Union[Mapping[str, Any], Iterable[str], Type[Enum]]


class EnumType(LeafType):
    """An enum type, serialized by name and represented internally by arbitrary values.

    Values may be declared as a mapping from name to EnumValue (or to a bare internal value),
    as a sequence of names (each name being its own internal value), or as a Python Enum class.
    """

    def __init__(
        self, name: str, values: Thunk[EnumValuesConfig], description: Optional[str] = None
    ) -> None:
        super().__init__(name, description=description)
        self._values_thunk = values

    @classmethod
    def from_python_enum(
        cls, python_enum: Type[Enum], description: Optional[str] = None
    ) -> "EnumType":
        """Create an enum type whose internal values are the members of the given Python enum."""
        return cls(
            python_enum.__name__,
            {member.name: EnumValue(member) for member in python_enum},
            description=description,
        )

    @cached_property
    def values(self) -> Dict[str, EnumValue]:
        """Return the enum's values by name, in declaration order."""
        values_config = resolve_thunk(self._values_thunk)

        if isinstance(values_config, type) and issubclass(values_config, Enum):
            values_config = {member.name: EnumValue(member) for member in values_config}

        result: Dict[str, EnumValue] = {}
        if isinstance(values_config, Mapping):
            for value_name, value_config in values_config.items():
                if isinstance(value_config, EnumValue):
                    # The declared EnumValue is left unchanged.
                    enum_value = EnumValue(
                        value_name if value_config.value is Undefined else value_config.value,
                        description=value_config.description,
                        deprecation_reason=value_config.deprecation_reason,
                        name=value_name,
                    )
                else:
                    enum_value = EnumValue(value_config, name=value_name)
                result[value_name] = enum_value
        elif isinstance(values_config, Iterable) and not isinstance(values_config, str):
            for value_name in values_config:
                if not isinstance(value_name, str):
                    raise InvariantViolation(
                        f"{self.name} values must be a mapping with value names as keys, "
                        f"or an iterable of value names, but got: {print_safe(value_name)}."
                    )
                result[value_name] = EnumValue(value_name, name=value_name)
        else:
            raise InvariantViolation(
                f"{self.name} values must be a mapping or an iterable, "
                f"got: {print_safe(values_config)}"
            )

        return result

    @cached_property
    def _value_lookup(self) -> ValueKeyedStore[EnumValue]:
        lookup: ValueKeyedStore[EnumValue] = ValueKeyedStore()
        for enum_value in self.values.values():
            lookup.set(enum_value.value, enum_value)
        return lookup

    def get_value(self, name: str) -> Optional[EnumValue]:
        """Return the enum value with the given name, or None if there is no such value."""
        return self.values.get(name)

    def serialize(self, value: Any) -> str:
        enum_value = self._value_lookup.get(value)
        if enum_value is None:
            raise SerializationError(f"Cannot serialize value as enum: {print_safe(value)}")
        return cast(str, enum_value.name)

    def parse_value(self, value: Any) -> Any:
        if isinstance(value, str):
            enum_value = self.values.get(value)
            if enum_value is not None:
                return enum_value.value

        raise ParseValueError(f"Cannot represent value as enum: {print_safe(value)}")

    def parse_literal(
        self, value_node: ValueNode, variables: Optional[Dict[str, Any]] = None
    ) -> Any:
        if isinstance(value_node, EnumValueNode):
            enum_value = self.values.get(value_node.value)
            if enum_value is not None:
                return enum_value.value

        # The caller wraps this error with the location of the offending literal.
        raise ParseValueError()

    def assert_valid(self) -> None:
        super().assert_valid()

        values = self.values
        if not values:
            raise InvariantViolation(f"{self.name} values must not be empty.")

        for value_name in values:
            error_message = is_valid_name_error(value_name)
            if error_message is not None:
                raise InvariantViolation(f"{self.name}.{value_name}: {error_message}")
            if value_name in RESERVED_ENUM_VALUE_NAMES:
                raise InvariantViolation(
                    f"{self.name}.{value_name}: Name {value_name} can not be used as an Enum "
                    f"value."
                )


# ###################
# Fields and inputs #
# ###################


class InputValue:
    """Base class for arguments and input object fields: a named, typed, defaultable input."""

    def __init__(
        self,
        type_: Thunk[GraphQLType],
        default_value: Any = Undefined,
        description: Optional[str] = None,
        name: Optional[str] = None,
    ) -> None:
        self.name = name
        self._type_thunk = type_
        self.default_value = default_value
        self.description = description

    @cached_property
    def type(self) -> GraphQLType:
        """Return the input value's type, resolving it on first access."""
        return _ensure_type(resolve_thunk(self._type_thunk), f'the type of input "{self.name}"')

    @property
    def has_default_value(self) -> bool:
        return self.default_value is not Undefined

    @property
    def is_required(self) -> bool:
        return isinstance(self.type, NonNullType) and not self.has_default_value

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name}: {self.type}>"


class Argument(InputValue):
    """An argument accepted by a field."""

    def assert_valid(self, field: "Field", parent_type: NamedType) -> None:
        description = f"{parent_type.name}.{field.name}({self.name}:)"

        error_message = is_valid_name_error(self.name)
        if error_message is not None:
            raise InvariantViolation(f"{description}: {error_message}")

        if not is_input_type(self.type):
            raise InvariantViolation(
                f"{description} argument type must be Input Type but got: {self.type}."
            )


class InputField(InputValue):
    """A field of an input object type."""

    def assert_valid(self, parent_type: NamedType) -> None:
        description = f"{parent_type.name}.{self.name}"

        error_message = is_valid_name_error(self.name)
        if error_message is not None:
            raise InvariantViolation(f"{description}: {error_message}")

        if not is_input_type(self.type):
            raise InvariantViolation(
                f"{description} field type must be Input Type but got: {self.type}."
            )


def build_input_value_map(
    input_value_class: Type[InputValue], config: Mapping[str, Any], owner_description: str
) -> Dict[str, Any]:
    """Build a name -> InputValue mapping, accepting bare types as shorthand."""
    if not isinstance(config, Mapping):
        raise InvariantViolation(
            f"{owner_description} must be a mapping with names as keys, "
            f"but got: {print_safe(config)}"
        )

    result: Dict[str, Any] = {}
    for name, input_value in config.items():
        if not isinstance(input_value, input_value_class):
            if isinstance(input_value, GraphQLType) or callable(input_value):
                input_value = input_value_class(input_value)
            else:
                raise InvariantViolation(
                    f"{owner_description}: {name} must be a {input_value_class.__name__} "
                    f"or a GraphQL type, but got: {print_safe(input_value)}"
                )
        if input_value.name is None:
            input_value.name = name
        elif input_value.name != name:
            raise InvariantViolation(
                f'{owner_description}: {input_value_class.__name__} named "{input_value.name}" '
                f'was declared under the name "{name}".'
            )
        result[name] = input_value
    return result


class Field:
    """A field of an object or interface type.

    The field's type may be given as a thunk, and is resolved on first access. Arguments may be
    given as a mapping from name to Argument, or to a bare input type.
    """

    def __init__(
        self,
        type_: Thunk[GraphQLType],
        args: Optional[Mapping[str, Any]] = None,
        resolve: Optional[Resolver] = None,
        complexity: Optional[ComplexityFunction] = None,
        description: Optional[str] = None,
        deprecation_reason: Optional[str] = None,
        name: Optional[str] = None,
    ) -> None:
        self.name = name
        self._type_thunk = type_
        self._args_config = args if args is not None else {}
        self.resolve = resolve
        self.complexity = complexity
        self.description = description
        self.deprecation_reason = deprecation_reason

    @cached_property
    def type(self) -> GraphQLType:
        """Return the field's declared output type, resolving it on first access."""
        return _ensure_type(resolve_thunk(self._type_thunk), f'the type of field "{self.name}"')

    @cached_property
    def args(self) -> Dict[str, Argument]:
        """Return the field's arguments by name, in declaration order."""
        return build_input_value_map(Argument, self._args_config, f"Arguments of field {self.name}")

    def get_arg(self, name: str) -> Optional[Argument]:
        return self.args.get(name)

    @property
    def is_deprecated(self) -> bool:
        return bool(self.deprecation_reason)

    def __repr__(self) -> str:
        return f"<Field {self.name}: {self.type}>"

    def assert_valid(self, parent_type: NamedType) -> None:
        """Raise InvariantViolation if the field is not well-formed."""
        description = f"{parent_type.name}.{self.name}"

        error_message = is_valid_name_error(self.name)
        if error_message is not None:
            raise InvariantViolation(f"{description}: {error_message}")

        if not is_output_type(self.type):
            raise InvariantViolation(
                f"{description} field type must be Output Type but got: {self.type}."
            )

        if self.resolve is not None and not callable(self.resolve):
            raise InvariantViolation(
                f"{description} field resolver must be a function if provided, "
                f"but got: {print_safe(self.resolve)}"
            )

        if self.complexity is not None and not callable(self.complexity):
            raise InvariantViolation(
                f"{description} field complexity must be a function if provided, "
                f"but got: {print_safe(self.complexity)}"
            )

        for argument in self.args.values():
            argument.assert_valid(self, parent_type)


def _define_field_map(
    parent_type: NamedType, fields_thunk: Thunk[Mapping[str, Any]]
) -> Dict[str, Field]:
    fields_config = resolve_thunk(fields_thunk)
    if not isinstance(fields_config, Mapping):
        raise InvariantViolation(
            f"{parent_type.name} fields must be a mapping or a callable which returns "
            f"such a mapping."
        )

    field_map: Dict[str, Field] = {}
    for field_name, field in fields_config.items():
        if isinstance(field, GraphQLType):
            field = Field(field)
        elif not isinstance(field, Field):
            raise InvariantViolation(
                f"{parent_type.name}.{field_name} field config must be a Field or a GraphQL type, "
                f"but got: {print_safe(field)}"
            )

        if field.name is None:
            field.name = field_name
        elif field.name != field_name:
            raise InvariantViolation(
                f'{parent_type.name}.{field_name}: field named "{field.name}" was declared '
                f'under the name "{field_name}".'
            )
        field_map[field_name] = field
    return field_map


# ###################
# Composite types #
# ###################


class CompositeType(NamedType):
    """Base class for types that may be the parent type of a selection set."""


class AbstractType(CompositeType):
    """Base class for types whose values must be resolved to a concrete object type at runtime."""

    resolve_type: Optional[TypeResolver]


class FieldsType(CompositeType):
    """Base class for object and interface types, which declare fields and implement interfaces."""

    def __init__(
        self,
        name: str,
        fields: Thunk[Mapping[str, Any]],
        interfaces: Optional[Thunk[Sequence["InterfaceType"]]] = None,
        description: Optional[str] = None,
    ) -> None:
        super().__init__(name, description=description)
        self._fields_thunk = fields
        self._interfaces_thunk = interfaces if interfaces is not None else []

    @cached_property
    def fields(self) -> Dict[str, Field]:
        """Return the fields by name, in declaration order. Built once, on first access."""
        return _define_field_map(self, self._fields_thunk)

    @cached_property
    def interfaces(self) -> List["InterfaceType"]:
        interfaces = resolve_thunk(self._interfaces_thunk)
        if not isinstance(interfaces, Iterable):
            raise InvariantViolation(
                f"{self.name} interfaces must be an iterable or a callable which returns "
                f"such an iterable."
            )
        return list(interfaces)

    def get_field(self, field_name: str) -> Optional[Field]:
        return self.fields.get(field_name)

    def implements_interface(self, interface_type: "InterfaceType") -> bool:
        return any(interface is interface_type for interface in self.interfaces)

    def assert_valid(self) -> None:
        super().assert_valid()

        if not self.fields:
            raise InvariantViolation(f"{self.name} fields must not be empty.")

        for field in self.fields.values():
            field.assert_valid(self)

        seen_interface_names = set()
        for interface in self.interfaces:
            if not isinstance(interface, InterfaceType):
                raise InvariantViolation(
                    f"{self.name} may only implement Interface types, "
                    f"it cannot implement: {print_safe(interface)}."
                )
            if interface.name in seen_interface_names:
                raise InvariantViolation(
                    f"{self.name} may declare it implements {interface.name} only once."
                )
            seen_interface_names.add(interface.name)
            self._assert_implements(interface)

    def _assert_implements(self, interface: "InterfaceType") -> None:
        for field_name, interface_field in interface.fields.items():
            own_field = self.fields.get(field_name)
            if own_field is None:
                raise InvariantViolation(
                    f'Interface field {interface.name}.{field_name} expected but {self.name} '
                    f"does not provide it."
                )
            if not is_type_sub_type_of(own_field.type, interface_field.type):
                raise InvariantViolation(
                    f"Interface field {interface.name}.{field_name} expects type "
                    f"{interface_field.type} but {self.name}.{field_name} is type "
                    f"{own_field.type}."
                )
            for arg_name, interface_arg in interface_field.args.items():
                own_arg = own_field.args.get(arg_name)
                if own_arg is None:
                    raise InvariantViolation(
                        f"Interface field argument {interface.name}.{field_name}({arg_name}:) "
                        f"expected but {self.name}.{field_name} does not provide it."
                    )
                if own_arg.type != interface_arg.type:
                    raise InvariantViolation(
                        f"Interface field argument {interface.name}.{field_name}({arg_name}:) "
                        f"expects type {interface_arg.type} but "
                        f"{self.name}.{field_name}({arg_name}:) is type {own_arg.type}."
                    )


class ObjectType(FieldsType):
    """A concrete object type: a named set of fields, possibly implementing interfaces.

    If is_type_of is provided, it is used to determine whether a value belongs to this type when
    resolving an abstract type, and to reject values of the wrong type during completion.
    """

    def __init__(
        self,
        name: str,
        fields: Thunk[Mapping[str, Any]],
        interfaces: Optional[Thunk[Sequence["InterfaceType"]]] = None,
        is_type_of: Optional[IsTypeOfFunction] = None,
        description: Optional[str] = None,
    ) -> None:
        super().__init__(name, fields, interfaces=interfaces, description=description)
        self.is_type_of = is_type_of

    def assert_valid(self) -> None:
        super().assert_valid()
        if self.is_type_of is not None and not callable(self.is_type_of):
            raise InvariantViolation(
                f'{self.name} must provide "is_type_of" as a function, '
                f"but got: {print_safe(self.is_type_of)}."
            )


class InterfaceType(FieldsType, AbstractType):
    """An abstract type declaring fields that every implementing object type must provide."""

    def __init__(
        self,
        name: str,
        fields: Thunk[Mapping[str, Any]],
        interfaces: Optional[Thunk[Sequence["InterfaceType"]]] = None,
        resolve_type: Optional[TypeResolver] = None,
        description: Optional[str] = None,
    ) -> None:
        super().__init__(name, fields, interfaces=interfaces, description=description)
        self.resolve_type = resolve_type

    def assert_valid(self) -> None:
        super().assert_valid()
        if self.resolve_type is not None and not callable(self.resolve_type):
            raise InvariantViolation(
                f'{self.name} must provide "resolve_type" as a function, '
                f"but got: {print_safe(self.resolve_type)}."
            )


class UnionType(AbstractType):
    """An abstract type whose values are of one of the listed object types."""

    def __init__(
        self,
        name: str,
        types: Thunk[Sequence[ObjectType]],
        resolve_type: Optional[TypeResolver] = None,
        description: Optional[str] = None,
    ) -> None:
        super().__init__(name, description=description)
        self._types_thunk = types
        self.resolve_type = resolve_type

    @cached_property
    def types(self) -> List[ObjectType]:
        """Return the union's member types, resolving them on first access."""
        types = resolve_thunk(self._types_thunk)
        if not isinstance(types, Iterable):
            raise InvariantViolation(
                f"Must provide iterable of types or a callable which returns "
                f"such an iterable for Union {self.name}."
            )
        return list(types)

    def assert_valid(self) -> None:
        super().assert_valid()

        if not self.types:
            raise InvariantViolation(
                f"Union type {self.name} must define one or more member types."
            )

        seen_type_names = set()
        for member_type in self.types:
            if not isinstance(member_type, ObjectType):
                raise InvariantViolation(
                    f"Union type {self.name} can only include Object types, "
                    f"it cannot include {print_safe(member_type)}."
                )
            if member_type.name in seen_type_names:
                raise InvariantViolation(
                    f"Union type {self.name} can include {member_type.name} type only once."
                )
            seen_type_names.add(member_type.name)

        if self.resolve_type is not None and not callable(self.resolve_type):
            raise InvariantViolation(
                f'{self.name} must provide "resolve_type" as a function, '
                f"but got: {print_safe(self.resolve_type)}."
            )


class InputObjectType(NamedType):
    """A named set of typed input fields, usable as an argument or variable type."""

    def __init__(
        self,
        name: str,
        fields: Thunk[Mapping[str, Any]],
        description: Optional[str] = None,
    ) -> None:
        super().__init__(name, description=description)
        self._fields_thunk = fields

    @cached_property
    def fields(self) -> Dict[str, InputField]:
        """Return the input fields by name, in declaration order."""
        return build_input_value_map(
            InputField, resolve_thunk(self._fields_thunk), f"{self.name} fields"
        )

    def assert_valid(self) -> None:
        super().assert_valid()

        if not self.fields:
            raise InvariantViolation(f"{self.name} fields must not be empty.")

        for input_field in self.fields.values():
            input_field.assert_valid(self)


# ##############
# Predicates #
# ##############


def get_named_type(type_: Optional[GraphQLType]) -> Optional[NamedType]:
    """Return the innermost named type, unwrapping any number of List and NonNull layers."""
    while isinstance(type_, WrappingType):
        type_ = type_.of_type
    return cast(Optional[NamedType], type_)


def get_nullable_type(type_: GraphQLType) -> GraphQLType:
    """Strip at most one outer NonNull layer from the given type."""
    if isinstance(type_, NonNullType):
        return type_.of_type
    return type_


def is_named_type(type_: Any) -> bool:
    return isinstance(type_, NamedType)


def is_wrapping_type(type_: Any) -> bool:
    return isinstance(type_, WrappingType)


def is_list_type(type_: Any) -> bool:
    return isinstance(type_, ListType)


def is_non_null_type(type_: Any) -> bool:
    return isinstance(type_, NonNullType)


def is_input_type(type_: Any) -> bool:
    """Return True if values of the type (after unwrapping) may be provided as input."""
    return isinstance(get_named_type(type_), (ScalarType, EnumType, InputObjectType))


def is_output_type(type_: Any) -> bool:
    """Return True if values of the type (after unwrapping) may be produced as output."""
    return isinstance(
        get_named_type(type_), (ScalarType, EnumType, ObjectType, InterfaceType, UnionType)
    )


def is_leaf_type(type_: Any) -> bool:
    return isinstance(type_, LeafType)


def is_composite_type(type_: Any) -> bool:
    return isinstance(type_, CompositeType)


def is_abstract_type(type_: Any) -> bool:
    return isinstance(type_, AbstractType)


def is_type_sub_type_of(maybe_subtype: GraphQLType, super_type: GraphQLType) -> bool:
    """Return True if a value of maybe_subtype may be used wherever super_type is expected."""
    if maybe_subtype is super_type:
        return True

    if isinstance(super_type, NonNullType):
        if isinstance(maybe_subtype, NonNullType):
            return is_type_sub_type_of(maybe_subtype.of_type, super_type.of_type)
        return False
    elif isinstance(maybe_subtype, NonNullType):
        return is_type_sub_type_of(maybe_subtype.of_type, super_type)

    if isinstance(super_type, ListType):
        if isinstance(maybe_subtype, ListType):
            return is_type_sub_type_of(maybe_subtype.of_type, super_type.of_type)
        return False
    elif isinstance(maybe_subtype, ListType):
        return False

    if isinstance(super_type, UnionType):
        return any(member is maybe_subtype for member in super_type.types)
    if isinstance(super_type, InterfaceType) and isinstance(maybe_subtype, FieldsType):
        return maybe_subtype.implements_interface(super_type)

    return False
