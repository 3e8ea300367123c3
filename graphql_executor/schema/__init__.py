# Copyright 2021-present Kensho Technologies, LLC.
"""Types, scalars, directives and the Schema object from which executable schemas are built."""
from .custom_scalars import (  # noqa
    CUSTOM_SCALAR_TYPES,
    GraphQLDate,
    GraphQLDateTime,
    GraphQLDecimal,
)
from .definition import (  # noqa
    AbstractType,
    Argument,
    CompositeType,
    EnumType,
    EnumValue,
    Field,
    FieldsType,
    GraphQLType,
    InputField,
    InputObjectType,
    InputValue,
    InterfaceType,
    LeafType,
    ListType,
    NamedType,
    NonNullType,
    ObjectType,
    ScalarType,
    UnionType,
    WrappingType,
    get_named_type,
    get_nullable_type,
    is_abstract_type,
    is_composite_type,
    is_input_type,
    is_leaf_type,
    is_list_type,
    is_named_type,
    is_non_null_type,
    is_output_type,
    is_type_sub_type_of,
    is_wrapping_type,
    resolve_thunk,
)
from .directives import (  # noqa
    DEFAULT_DEPRECATION_REASON,
    SPECIFIED_DIRECTIVES,
    DeprecatedDirective,
    Directive,
    IncludeDirective,
    SkipDirective,
)
from .scalars import (  # noqa
    MAX_INT,
    MIN_INT,
    SPECIFIED_SCALAR_TYPES,
    GraphQLBoolean,
    GraphQLFloat,
    GraphQLID,
    GraphQLInt,
    GraphQLString,
    is_specified_scalar_type,
)
from .schema import Schema  # noqa
from .value_store import (  # noqa
    DefaultKeyEquality,
    IdentityKeyEquality,
    KeyEqualityStrategy,
    ValueKeyedStore,
)
